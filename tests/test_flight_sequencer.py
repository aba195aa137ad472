"""Tests for FlightSequencer: journey loading, playback, seeking, speed and events."""

from math import nan

import pytest

from travelglobe.animation.camera_animator import CameraAnimator
from travelglobe.animation.flight_sequencer import FlightSequencer
from travelglobe.core.frame_scheduler import HostFrameScheduler
from travelglobe.model.flight_event import FlightErrorReason
from travelglobe.model.location import Location
from tests.conftest import SEGMENT_MS, RecordingListener, make_location


class TestLoading:
    """Tests for set_locations."""

    def test_sorts_by_visit_date_and_builds_segments(self, loaded_sequencer: FlightSequencer) -> None:
        assert [loc.id for loc in loaded_sequencer.locations] == ["paris", "rome", "athens", "cairo"]
        assert loaded_sequencer.segment_count == 3
        assert [seg.origin.id for seg in loaded_sequencer.segments] == ["paris", "rome", "athens"]
        assert loaded_sequencer.total_duration_ms == pytest.approx(3 * SEGMENT_MS)

    def test_plane_parked_at_first_location(self, loaded_sequencer: FlightSequencer, paris: Location) -> None:
        plane = loaded_sequencer.plane_position
        assert plane is not None
        assert plane.lat == pytest.approx(paris.latitude)
        assert plane.lng == pytest.approx(paris.longitude)
        assert plane.segment_index == 0
        assert plane.progress == 0.0

    def test_invalid_locations_dropped(self, sequencer: FlightSequencer, paris: Location, rome: Location) -> None:
        assert sequencer.set_locations([paris, make_location("bad", nan, 0.0, visit="2024-03-02"), rome])
        assert [loc.id for loc in sequencer.locations] == ["paris", "rome"]
        assert sequencer.segment_count == 1

    def test_single_location_has_no_segments(self, sequencer: FlightSequencer, paris: Location) -> None:
        sequencer.set_locations([paris])
        assert sequencer.segment_count == 0
        assert sequencer.current_segment is None
        assert sequencer.plane_position is None
        assert not sequencer.can_play

    def test_rejected_while_playing(
        self, loaded_sequencer: FlightSequencer, listener: RecordingListener, paris: Location
    ) -> None:
        loaded_sequencer.play()
        assert not loaded_sequencer.set_locations([paris])
        assert loaded_sequencer.segment_count == 3
        assert loaded_sequencer.is_playing
        assert [error.reason for error in listener.errors] == [FlightErrorReason.PLAYBACK_ACTIVE]

    def test_year_restricts_journey(self, sequencer: FlightSequencer, journey: list[Location]) -> None:
        lisbon = make_location("lisbon", 38.72, -9.14, visit="2023-06-01")
        porto = make_location("porto", 41.15, -8.61, visit="2023-06-04")
        archive = journey + [porto, lisbon]

        assert sequencer.set_locations(archive, year=2023)
        assert sequencer.year == 2023
        assert [loc.id for loc in sequencer.locations] == ["lisbon", "porto"]
        assert sequencer.segment_count == 1

        assert sequencer.set_locations(archive)
        assert sequencer.year is None
        assert sequencer.segment_count == 5
        assert sequencer.locations[0].id == "lisbon"

    def test_year_without_visits_has_no_journey(self, sequencer: FlightSequencer, journey: list[Location]) -> None:
        assert sequencer.set_locations(journey, year=1999)
        assert sequencer.segment_count == 0
        assert sequencer.plane_position is None

    def test_rejected_while_paused(self, loaded_sequencer: FlightSequencer, listener: RecordingListener) -> None:
        loaded_sequencer.play()
        loaded_sequencer.pause()
        assert not loaded_sequencer.set_locations([])
        assert loaded_sequencer.is_paused
        assert len(listener.errors) == 1

    def test_reload_after_completion_returns_to_idle(
        self, scheduler: HostFrameScheduler, loaded_sequencer: FlightSequencer, paris: Location, rome: Location
    ) -> None:
        loaded_sequencer.play()
        scheduler.run_frames(count=2000, interval_ms=100.0)
        assert loaded_sequencer.is_completed

        assert loaded_sequencer.set_locations([paris, rome])
        assert loaded_sequencer.is_idle
        assert loaded_sequencer.current_segment_index == 0
        assert loaded_sequencer.progress == 0.0


class TestPlayback:
    """Tests for frame-driven progress and completion."""

    def test_play_without_journey_emits_error(self, sequencer: FlightSequencer, listener: RecordingListener) -> None:
        sequencer.play()
        assert sequencer.is_idle
        assert [error.reason for error in listener.errors] == [FlightErrorReason.INSUFFICIENT_LOCATIONS]
        assert not sequencer.has_pending_frame

    def test_progress_follows_elapsed_time(self, scheduler: HostFrameScheduler, loaded_sequencer: FlightSequencer) -> None:
        loaded_sequencer.play()
        scheduler.run_frames(count=10, interval_ms=100.0)
        assert loaded_sequencer.progress == pytest.approx(1000.0 / SEGMENT_MS)
        assert loaded_sequencer.current_segment_index == 0

    def test_full_journey(
        self, scheduler: HostFrameScheduler, loaded_sequencer: FlightSequencer, listener: RecordingListener
    ) -> None:
        loaded_sequencer.play()
        scheduler.run_frames(count=1000, interval_ms=50.0)

        assert loaded_sequencer.is_completed
        assert loaded_sequencer.current_segment_index == 2
        assert loaded_sequencer.progress == 1.0
        assert not loaded_sequencer.has_pending_frame

        assert [event.segment_index for event in listener.segment_events] == [0, 1, 2]
        assert [event.location.id for event in listener.segment_events] == ["rome", "athens", "cairo"]
        assert listener.segment_events[-1].is_last
        assert len(listener.complete_events) == 1
        assert listener.complete_events[0].final_location.id == "cairo"
        assert listener.complete_events[0].segment_count == 3

    def test_progress_never_goes_backwards(
        self, scheduler: HostFrameScheduler, loaded_sequencer: FlightSequencer, listener: RecordingListener
    ) -> None:
        loaded_sequencer.play()
        scheduler.run_frames(count=1000, interval_ms=70.0)
        marks = [(frame.segment_index, frame.progress) for frame in listener.frames]
        assert marks == sorted(marks)
        assert all(0.0 <= progress <= 1.0 for _, progress in marks)

    def test_overshoot_is_discarded(
        self, scheduler: HostFrameScheduler, loaded_sequencer: FlightSequencer
    ) -> None:
        """A frame longer than the remaining leg lands at the next leg's start, not inside it."""
        loaded_sequencer.play()
        scheduler.advance(SEGMENT_MS * 0.9)
        scheduler.advance(SEGMENT_MS * 0.5)
        assert loaded_sequencer.current_segment_index == 1
        assert loaded_sequencer.progress == 0.0

    def test_play_after_completion_is_noop(
        self, scheduler: HostFrameScheduler, loaded_sequencer: FlightSequencer, listener: RecordingListener
    ) -> None:
        loaded_sequencer.play()
        scheduler.run_frames(count=2000, interval_ms=100.0)
        loaded_sequencer.play()
        assert loaded_sequencer.is_completed
        assert not loaded_sequencer.has_pending_frame
        assert len(listener.complete_events) == 1


class TestPauseResume:
    """Tests for pausing, resuming and visibility."""

    def test_resume_continues_exact_progress(
        self, scheduler: HostFrameScheduler, loaded_sequencer: FlightSequencer
    ) -> None:
        loaded_sequencer.play()
        scheduler.run_frames(count=10, interval_ms=100.0)
        loaded_sequencer.pause()
        paused_at = loaded_sequencer.progress
        assert loaded_sequencer.is_paused
        assert not loaded_sequencer.has_pending_frame

        scheduler.advance_clock(5000.0)
        loaded_sequencer.play()
        scheduler.run_frame()
        assert loaded_sequencer.progress == pytest.approx(paused_at)
        scheduler.advance(100.0)
        assert loaded_sequencer.progress == pytest.approx(paused_at + 100.0 / SEGMENT_MS)

    def test_pause_when_not_playing_is_ignored(self, loaded_sequencer: FlightSequencer) -> None:
        loaded_sequencer.pause()
        assert loaded_sequencer.is_idle

    def test_hidden_time_not_counted(self, scheduler: HostFrameScheduler, loaded_sequencer: FlightSequencer) -> None:
        loaded_sequencer.play()
        scheduler.advance(100.0)
        before = loaded_sequencer.progress

        loaded_sequencer.suspend()
        scheduler.advance_clock(60_000.0)
        loaded_sequencer.resume()
        assert loaded_sequencer.is_playing
        scheduler.advance(100.0)
        assert loaded_sequencer.progress == pytest.approx(before + 100.0 / SEGMENT_MS)

    def test_listener_can_pause_at_segment_boundary(
        self, scheduler: HostFrameScheduler, loaded_sequencer: FlightSequencer
    ) -> None:
        """Pausing from on_segment_complete leaves the next leg parked at 0 and fires once."""
        arrivals: list[int] = []

        class PauseOnArrival:
            def on_segment_complete(self, event) -> None:
                arrivals.append(event.segment_index)
                loaded_sequencer.pause()

        loaded_sequencer.add_listener(PauseOnArrival())
        loaded_sequencer.play()
        scheduler.run_frames(count=200, interval_ms=100.0)

        assert arrivals == [0]
        assert loaded_sequencer.is_paused
        assert loaded_sequencer.current_segment_index == 1
        assert loaded_sequencer.progress == 0.0

        loaded_sequencer.play()
        scheduler.run_frames(count=200, interval_ms=100.0)
        assert arrivals == [0, 1]

    def test_listener_can_reset_mid_frame(
        self, scheduler: HostFrameScheduler, loaded_sequencer: FlightSequencer
    ) -> None:
        class ResetOnFrame:
            def on_frame(self, position) -> None:
                if position.progress > 0.1:
                    loaded_sequencer.reset()

        loaded_sequencer.add_listener(ResetOnFrame())
        loaded_sequencer.play()
        scheduler.run_frames(count=50, interval_ms=100.0)
        assert loaded_sequencer.is_idle
        assert loaded_sequencer.progress == 0.0
        assert not loaded_sequencer.has_pending_frame


class TestSeek:
    """Tests for seeking and resetting."""

    @pytest.mark.parametrize("index,expected", [(-1, 0), (1, 1), (999, 2)])
    def test_seek_clamps_index(self, loaded_sequencer: FlightSequencer, index: int, expected: int) -> None:
        loaded_sequencer.seek_to_segment(index)
        assert loaded_sequencer.current_segment_index == expected
        assert loaded_sequencer.progress == 0.0
        assert loaded_sequencer.is_idle

    def test_seek_emits_plane_frame(
        self, loaded_sequencer: FlightSequencer, listener: RecordingListener, athens: Location
    ) -> None:
        loaded_sequencer.seek_to_segment(2)
        assert listener.frames[-1].segment_index == 2
        assert listener.frames[-1].lat == pytest.approx(athens.latitude)

    def test_seek_while_playing_keeps_playing(
        self, scheduler: HostFrameScheduler, loaded_sequencer: FlightSequencer
    ) -> None:
        loaded_sequencer.play()
        scheduler.run_frames(count=5, interval_ms=100.0)
        loaded_sequencer.seek_to_segment(2)
        assert loaded_sequencer.is_playing
        scheduler.advance(100.0)
        assert loaded_sequencer.current_segment_index == 2
        assert loaded_sequencer.progress == pytest.approx(100.0 / SEGMENT_MS)

    def test_seek_after_completion_allows_replay(
        self, scheduler: HostFrameScheduler, loaded_sequencer: FlightSequencer, listener: RecordingListener
    ) -> None:
        loaded_sequencer.play()
        scheduler.run_frames(count=2000, interval_ms=100.0)
        loaded_sequencer.seek_to_segment(1)
        assert loaded_sequencer.is_paused
        assert loaded_sequencer.progress == 0.0

        loaded_sequencer.play()
        scheduler.run_frames(count=2000, interval_ms=100.0)
        assert loaded_sequencer.is_completed
        assert len(listener.complete_events) == 2

    @pytest.mark.parametrize("percent,expected", [(0.0, 0), (49.0, 0), (50.0, 1), (100.0, 2), (-10.0, 0), (250.0, 2)])
    def test_seek_to_progress(self, loaded_sequencer: FlightSequencer, percent: float, expected: int) -> None:
        loaded_sequencer.seek_to_progress(percent)
        assert loaded_sequencer.current_segment_index == expected

    def test_seek_to_progress_ignores_nan(self, loaded_sequencer: FlightSequencer) -> None:
        loaded_sequencer.seek_to_segment(1)
        loaded_sequencer.seek_to_progress(nan)
        assert loaded_sequencer.current_segment_index == 1

    def test_reset_from_playing(self, scheduler: HostFrameScheduler, loaded_sequencer: FlightSequencer) -> None:
        loaded_sequencer.play()
        scheduler.run_frames(count=100, interval_ms=100.0)
        loaded_sequencer.reset()
        assert loaded_sequencer.is_idle
        assert loaded_sequencer.current_segment_index == 0
        assert loaded_sequencer.progress == 0.0
        assert not loaded_sequencer.has_pending_frame
        assert loaded_sequencer.plane_position.segment_index == 0

    def test_stop_clears_plane(self, loaded_sequencer: FlightSequencer) -> None:
        loaded_sequencer.play()
        loaded_sequencer.stop()
        assert loaded_sequencer.is_idle
        assert loaded_sequencer.plane_position is None


class TestSpeed:
    """Tests for the playback multiplier."""

    def test_double_speed(self, scheduler: HostFrameScheduler, loaded_sequencer: FlightSequencer) -> None:
        assert loaded_sequencer.set_speed(2.0)
        loaded_sequencer.play()
        scheduler.advance(100.0)
        assert loaded_sequencer.progress == pytest.approx(200.0 / SEGMENT_MS)

    def test_speed_change_mid_leg_keeps_progress(
        self, scheduler: HostFrameScheduler, loaded_sequencer: FlightSequencer
    ) -> None:
        loaded_sequencer.play()
        scheduler.advance(800.0)
        loaded_sequencer.set_speed(0.5)
        assert loaded_sequencer.progress == pytest.approx(0.1)
        scheduler.advance(800.0)
        assert loaded_sequencer.progress == pytest.approx(0.15)

    @pytest.mark.parametrize("value", [0.0, -1.0, nan, float("inf"), "fast", None])
    def test_invalid_speed_rejected(self, loaded_sequencer: FlightSequencer, value: object) -> None:
        assert not loaded_sequencer.set_speed(value)  # type: ignore[arg-type]
        assert loaded_sequencer.speed == 1.0

    @pytest.mark.parametrize("value,expected", [(10.0, 5.0), (0.1, 0.25), (3.0, 3.0)])
    def test_speed_clamped_to_presets(self, loaded_sequencer: FlightSequencer, value: float, expected: float) -> None:
        assert loaded_sequencer.set_speed(value)
        assert loaded_sequencer.speed == expected

    def test_remaining_time_scales_with_speed(self, loaded_sequencer: FlightSequencer) -> None:
        assert loaded_sequencer.progress_snapshot().estimated_time_remaining_ms == pytest.approx(3 * SEGMENT_MS)
        loaded_sequencer.set_speed(2.0)
        assert loaded_sequencer.progress_snapshot().estimated_time_remaining_ms == pytest.approx(1.5 * SEGMENT_MS)


class TestProgressSnapshot:
    """Tests for the timeline snapshot."""

    def test_empty_journey(self, sequencer: FlightSequencer) -> None:
        snapshot = sequencer.progress_snapshot()
        assert snapshot.segment_count == 0
        assert snapshot.overall_fraction == 0.0
        assert snapshot.leg_label == "No journey"

    def test_after_seek(self, loaded_sequencer: FlightSequencer) -> None:
        loaded_sequencer.seek_to_segment(1)
        snapshot = loaded_sequencer.progress_snapshot()
        assert snapshot.overall_fraction == pytest.approx(1 / 3)
        assert snapshot.current_location.id == "rome"
        assert snapshot.next_location.id == "athens"
        assert snapshot.leg_label == "Leg 2 of 3"
        assert not snapshot.is_playing


class TestFollowCamera:
    """Tests for the camera following the plane."""

    def test_camera_retargeted_on_plane(
        self, scheduler: HostFrameScheduler, camera: CameraAnimator, loaded_sequencer: FlightSequencer
    ) -> None:
        loaded_sequencer.play()
        scheduler.advance(100.0)
        plane = loaded_sequencer.plane_position
        assert camera.target is not None
        assert camera.target.lat == pytest.approx(plane.lat)
        assert camera.target.lng == pytest.approx(plane.lng)
        assert camera.target.altitude == pytest.approx(1.5)
        assert camera.easing_name == "linear"

    def test_follow_disabled(
        self, scheduler: HostFrameScheduler, camera: CameraAnimator, journey: list[Location]
    ) -> None:
        sequencer = FlightSequencer(scheduler, camera=camera, camera_follows_plane=False)
        sequencer.set_locations(journey)
        sequencer.play()
        scheduler.run_frames(count=10, interval_ms=100.0)
        assert not camera.is_animating

    def test_turning_follow_off_stops_camera(
        self, scheduler: HostFrameScheduler, camera: CameraAnimator, loaded_sequencer: FlightSequencer
    ) -> None:
        loaded_sequencer.play()
        scheduler.advance(100.0)
        loaded_sequencer.set_camera_follow(False)
        assert not camera.is_animating
        scheduler.advance(100.0)
        assert not camera.is_animating

    def test_look_ahead_frames_path_ahead_of_plane(
        self, scheduler: HostFrameScheduler, camera: CameraAnimator, loaded_sequencer: FlightSequencer
    ) -> None:
        assert loaded_sequencer.set_follow_mode("look_ahead")
        loaded_sequencer.play()
        scheduler.advance(100.0)

        progress = loaded_sequencer.progress
        ahead = loaded_sequencer.current_segment.position_at(progress + 0.1)
        assert camera.target.lat == pytest.approx(ahead.lat)
        assert camera.target.lng == pytest.approx(ahead.lng)
        assert camera.target.altitude == pytest.approx(1.5)

    def test_look_ahead_frames_destination_after_midpoint(
        self, scheduler: HostFrameScheduler, camera: CameraAnimator, loaded_sequencer: FlightSequencer, rome: Location
    ) -> None:
        loaded_sequencer.set_follow_mode("look_ahead")
        loaded_sequencer.play()
        scheduler.advance(100.0)
        scheduler.advance(4000.0)

        assert loaded_sequencer.current_segment_index == 0
        assert loaded_sequencer.progress > 0.5
        assert (camera.target.lat, camera.target.lng) == pytest.approx((rome.latitude, rome.longitude))

    def test_unknown_follow_mode_rejected(self, loaded_sequencer: FlightSequencer) -> None:
        assert not loaded_sequencer.set_follow_mode("orbit")
        assert loaded_sequencer.follow_mode == "plane"


class TestDispose:
    def test_dispose_releases_frames_and_listeners(
        self, scheduler: HostFrameScheduler, loaded_sequencer: FlightSequencer, listener: RecordingListener
    ) -> None:
        loaded_sequencer.play()
        loaded_sequencer.dispose()
        assert not loaded_sequencer.has_pending_frame
        scheduler.run_frames(count=10, interval_ms=100.0)
        assert listener.frames == []
