"""FlightSequencer - plays a chronological journey as a multi-leg flight.

The sequencer turns a location list into FlightSegments and, while playing,
advances a plane along them on every host frame:

    progress += speed * dt / segment.duration_ms

When progress reaches 1 the segment completes: the state machine either
moves on to the next leg (progress back to 0) or enters Completed. The
matching events are emitted after the transition, so a listener reacting to
them (pausing, resetting, seeking) always sees the new state and can never
cause an event to fire twice. Overshoot past the end of a leg is discarded.

Time only counts while frames run: play(), seeking while playing and
resuming after the view was hidden all restart the frame clock, so pausing
and resuming reproduces the exact pre-pause progress.

Events are delivered to listener objects registered with add_listener(),
each implementing any subset of:
    on_segment_complete(SegmentCompleteEvent)
    on_animation_complete(AnimationCompleteEvent)
    on_error(FlightErrorEvent)
    on_frame(PlanePosition)
"""

import logging
from collections.abc import Iterable
from math import floor, isfinite
from typing import Any

from travelglobe.animation.camera_animator import CameraAnimator
from travelglobe.animation.flight_state_machine import FlightStateMachine
from travelglobe.constants import FlightConfig
from travelglobe.core.frame_scheduler import FrameDrivenAnimator, FrameScheduler
from travelglobe.model.camera_pov import PlanePosition
from travelglobe.model.flight_event import (
    AnimationCompleteEvent,
    FlightErrorEvent,
    FlightErrorReason,
    FlightEvent,
    SegmentCompleteEvent,
)
from travelglobe.model.flight_progress import FlightProgress
from travelglobe.model.flight_segment import FlightSegment, build_flight_segments
from travelglobe.model.location import Location, filter_by_year, filter_valid_locations, sort_by_visit_date

logger = logging.getLogger(__name__)


class FlightSequencer(FrameDrivenAnimator):
    """Journey playback driven by host frames.

    Args:
        scheduler: Host frame scheduler
        camera: Camera to drive while camera_follows_plane is on (optional)
        speed: Initial playback multiplier
        camera_follows_plane: Re-target the camera on the plane every frame
        follow_altitude: Camera altitude while following
        follow_duration_ms: Transition length of each follow re-target
        follow_easing: Easing name for follow re-targets
        follow_mode: "plane" to center on the plane, "look_ahead" to frame the path ahead of it

    Example:
        sequencer = FlightSequencer(scheduler, camera=camera)
        sequencer.add_listener(timeline)
        sequencer.set_locations(locations)
        sequencer.play()
    """

    def __init__(
        self,
        scheduler: FrameScheduler,
        camera: CameraAnimator | None = None,
        speed: float = FlightConfig.DEFAULT_SPEED,
        camera_follows_plane: bool = True,
        follow_altitude: float = FlightConfig.FOLLOW_ALTITUDE,
        follow_duration_ms: float = FlightConfig.FOLLOW_DURATION_MS,
        follow_easing: str = FlightConfig.FOLLOW_EASING,
        follow_mode: str = FlightConfig.DEFAULT_FOLLOW_MODE,
    ) -> None:
        super().__init__(scheduler, name="flight")
        self._machine, self._context = FlightStateMachine.create()
        self._camera = camera
        self.camera_follows_plane = camera_follows_plane
        self.follow_altitude = follow_altitude
        self.follow_duration_ms = follow_duration_ms
        self.follow_easing = follow_easing
        self.follow_mode = FlightConfig.DEFAULT_FOLLOW_MODE

        self._locations: list[Location] = []
        self._segments: list[FlightSegment] = []
        self._plane: PlanePosition | None = None
        self._listeners: list[Any] = []
        self._year: int | None = None

        self.set_speed(speed)
        self.set_follow_mode(follow_mode)

    # ==========================================================================
    # Read access
    # ==========================================================================

    @property
    def machine(self) -> FlightStateMachine:
        return self._machine

    @property
    def state_name(self) -> str:
        return self._machine.get_state_name()

    @property
    def is_idle(self) -> bool:
        return self._machine.is_idle

    @property
    def is_playing(self) -> bool:
        return self._machine.is_playing

    @property
    def is_paused(self) -> bool:
        return self._machine.is_paused

    @property
    def is_completed(self) -> bool:
        return self._machine.is_completed

    @property
    def current_segment_index(self) -> int:
        return self._context.current_segment_index

    @property
    def progress(self) -> float:
        """Progress within the current segment in [0, 1]."""
        return self._context.progress

    @property
    def speed(self) -> float:
        return self._context.speed

    @property
    def locations(self) -> tuple[Location, ...]:
        """Valid locations in chronological order."""
        return tuple(self._locations)

    @property
    def year(self) -> int | None:
        """Visit year the journey is restricted to, None for all years."""
        return self._year

    @property
    def segments(self) -> tuple[FlightSegment, ...]:
        return tuple(self._segments)

    @property
    def segment_count(self) -> int:
        return len(self._segments)

    @property
    def current_segment(self) -> FlightSegment | None:
        if not self._segments:
            return None
        return self._segments[self._context.current_segment_index]

    @property
    def can_play(self) -> bool:
        return bool(self._segments) and (self.is_idle or self.is_paused)

    @property
    def plane_position(self) -> PlanePosition | None:
        """Latest plane position; None without a journey or after stop()."""
        return self._plane

    @property
    def total_duration_ms(self) -> float:
        """Whole-journey animation time at 1x speed."""
        return sum(segment.duration_ms for segment in self._segments)

    def progress_snapshot(self) -> FlightProgress:
        """Timeline snapshot: current leg, overall fraction, time remaining at current speed."""
        if not self._segments:
            return FlightProgress(
                segment_index=0,
                segment_count=0,
                segment_progress=0.0,
                overall_fraction=0.0,
                current_location=None,
                next_location=None,
                estimated_time_remaining_ms=0.0,
            )

        index = self._context.current_segment_index
        segment = self._segments[index]
        durations = [s.duration_ms for s in self._segments]
        total = sum(durations)
        done = sum(durations[:index]) + durations[index] * self._context.progress

        return FlightProgress(
            segment_index=index,
            segment_count=len(self._segments),
            segment_progress=self._context.progress,
            overall_fraction=min(1.0, done / total),
            current_location=segment.origin,
            next_location=segment.destination,
            estimated_time_remaining_ms=max(0.0, total - done) / self._context.speed,
            is_playing=self.is_playing,
        )

    # ==========================================================================
    # Listeners
    # ==========================================================================

    def add_listener(self, listener: Any) -> None:
        """Register an object implementing any of the on_* event hooks."""
        self._listeners.append(listener)

    def remove_listener(self, listener: Any) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _emit(self, event: FlightEvent) -> None:
        logger.info(f"[FLIGHT] {event.message}")
        for listener in list(self._listeners):
            hook = getattr(listener, event.hook_name, None)
            if hook is not None:
                hook(event)

    def _emit_frame(self, position: PlanePosition) -> None:
        for listener in list(self._listeners):
            hook = getattr(listener, "on_frame", None)
            if hook is not None:
                hook(position)

    # ==========================================================================
    # Journey
    # ==========================================================================

    def set_locations(self, locations: Iterable[Location], year: int | None = None) -> bool:
        """Load a journey: filter invalid coordinates, sort by visit date, build segments.

        With a year, only locations visited in that calendar year take part, so
        a multi-year archive can be replayed one year at a time.

        Only allowed while Idle or Completed (Completed returns to Idle). While
        Playing or Paused the call is refused with an on_error event and
        playback is left untouched.

        Returns:
            True if the journey was loaded.
        """
        if self.is_playing or self.is_paused:
            self._emit(FlightErrorEvent(reason=FlightErrorReason.PLAYBACK_ACTIVE, detail=self.state_name))
            return False

        valid = filter_valid_locations(locations)
        if year is not None:
            valid = filter_by_year(valid, year)
        self._year = year
        self._locations = sort_by_visit_date(valid)
        self._segments = build_flight_segments(self._locations)
        self._context.segment_count = len(self._segments)

        if self.is_completed:
            self._machine.send("reset")
        else:
            self._context.move_to_start()
        self._plane = self._segments[0].position_at(0.0) if self._segments else None

        scope = f" from {year}" if year is not None else ""
        logger.info(
            f"[FLIGHT] Loaded {len(self._locations)} locations{scope} -> {len(self._segments)} segments "
            f"({self.total_duration_ms / 1000:.1f} s at 1x)"
        )
        return True


    # ==========================================================================
    # Playback controls
    # ==========================================================================

    def play(self) -> None:
        """Idle/Paused -> Playing, continuing from the saved segment and progress."""
        if self.is_playing:
            logger.debug("[FLIGHT] play() ignored: already playing")
            return
        if self.is_completed:
            logger.info("[FLIGHT] play() ignored: journey completed, reset or seek first")
            return
        if not self._segments:
            self._emit(
                FlightErrorEvent(
                    reason=FlightErrorReason.INSUFFICIENT_LOCATIONS,
                    detail=f"{len(self._locations)} valid",
                )
            )
            return

        self._machine.send("play")
        self._start_frames()

    def pause(self) -> None:
        """Playing -> Paused, freezing progress."""
        if not self.is_playing:
            logger.debug(f"[FLIGHT] pause() ignored in {self.state_name}")
            return
        self._machine.send("pause")
        self._stop_frames()

    def reset(self) -> None:
        """Any state -> Idle at segment 0, progress 0."""
        self._stop_frames()
        self._machine.send("reset")
        self._plane = self._segments[0].position_at(0.0) if self._segments else None

    def stop(self) -> None:
        """Reset and clear the plane from the globe."""
        self.reset()
        self._plane = None

    def seek_to_segment(self, index: int) -> None:
        """Jump to the start of a segment; the index is clamped.

        Playing keeps playing from the new segment, Paused and Idle stay put.
        Seeking after completion parks the journey Paused so play() resumes.
        """
        if not self._segments:
            logger.debug("[FLIGHT] seek ignored: no segments")
            return

        index = self._context.seek(index)
        if self.is_completed:
            self._machine.send("rewind")
        if self.is_playing:
            self._last_frame_ms = self.scheduler.now_ms()

        self._plane = self._segments[index].position_at(0.0)
        self._emit_frame(self._plane)

    def seek_to_progress(self, percent: float) -> None:
        """Seek to the segment at `percent` of the journey (0-100, clamped)."""
        if not self._segments:
            return
        if not isfinite(percent):
            logger.warning(f"[FLIGHT] Ignoring seek to {percent}%")
            return
        percent = max(0.0, min(100.0, percent))
        self.seek_to_segment(floor(percent / 100 * (len(self._segments) - 1)))

    def set_speed(self, multiplier: float) -> bool:
        """Change playback speed from the next frame on, without restarting the leg.

        The multiplier is clamped to the supported preset range; non-finite or
        non-positive values are rejected.

        Returns:
            True if the speed was applied.
        """
        if not isinstance(multiplier, (int, float)) or not isfinite(multiplier) or multiplier <= 0:
            logger.warning(f"[FLIGHT] Rejecting speed {multiplier!r}, keeping {self._context.speed}x")
            return False
        clamped = max(FlightConfig.MIN_SPEED, min(FlightConfig.MAX_SPEED, float(multiplier)))
        if clamped != multiplier:
            logger.info(f"[FLIGHT] Speed {multiplier}x clamped to {clamped}x")
        self._context.speed = clamped
        return True

    def set_camera_follow(self, enabled: bool) -> None:
        self.camera_follows_plane = enabled
        if not enabled and self._camera is not None:
            self._camera.stop()

    def set_follow_mode(self, mode: str) -> bool:
        """Switch between centering on the plane and looking ahead of it.

        Returns:
            True if the mode is known and was applied.
        """
        if mode not in FlightConfig.FOLLOW_MODES:
            logger.warning(f"[FLIGHT] Unknown follow mode {mode!r}, keeping {self.follow_mode!r}")
            return False
        self.follow_mode = mode
        return True

    # ==========================================================================
    # Frame callback
    # ==========================================================================

    def _on_frame(self, timestamp_ms: float) -> None:
        if not self.is_playing or not self._segments:
            self._stop_frames()
            return

        segment = self._segments[self._context.current_segment_index]
        delta_ms = self._frame_delta(timestamp_ms)
        self._context.advance(self._context.speed * delta_ms / segment.duration_ms)

        self._plane = segment.position_at(self._context.progress)
        self._emit_frame(self._plane)
        self._follow(segment, self._plane)

        if not self.is_playing:
            return  # a frame listener paused or reset playback

        if self._context.progress < 1.0:
            self._continue_frames()
            return

        self._machine.send("finish_segment")
        completed = self.is_completed
        if completed:
            self._stop_frames()
        else:
            self._continue_frames()

        self._emit(
            SegmentCompleteEvent(
                location=segment.destination,
                segment_index=segment.index,
                segment_count=len(self._segments),
            )
        )
        if completed:
            self._emit(AnimationCompleteEvent(segment_count=len(self._segments), final_location=segment.destination))

    def _follow(self, segment: FlightSegment, position: PlanePosition) -> None:
        if not self.camera_follows_plane or self._camera is None:
            return
        if self.follow_mode == FlightConfig.FOLLOW_LOOK_AHEAD:
            target = segment.look_ahead_pov(position.progress, self.follow_altitude)
        else:
            target = position.to_pov(self.follow_altitude)
        self._camera.animate_to(
            target,
            duration_ms=self.follow_duration_ms,
            easing=self.follow_easing,
        )

    def dispose(self) -> None:
        super().dispose()
        self._listeners.clear()

    def __repr__(self) -> str:
        return f"FlightSequencer({self._context!r})"
