"""Shared pytest fixtures for travelglobe tests.

Provides a manually clocked frame scheduler, the two animators, and a
reusable four-city journey.

JOURNEY:
    Paris -> Rome -> Athens -> Cairo, each leg roughly 1050-1150 km. At 50 ms
    per km every leg exceeds the 8000 ms cap, so all three segments last
    exactly 8000 ms at 1x speed. That keeps the frame arithmetic in the
    sequencer tests simple: 100 ms of frame time is 1/80 of a leg.
"""

from datetime import datetime

import pytest

from travelglobe.animation.camera_animator import CameraAnimator
from travelglobe.animation.flight_sequencer import FlightSequencer
from travelglobe.core.frame_scheduler import HostFrameScheduler
from travelglobe.model.camera_pov import PlanePosition
from travelglobe.model.flight_event import AnimationCompleteEvent, FlightErrorEvent, SegmentCompleteEvent
from travelglobe.model.location import Location

SEGMENT_MS = 8000.0


def make_location(
    id: str,
    lat: float,
    lng: float,
    visit: str = "2024-01-01",
    albums: int = 0,
    photos: int = 0,
    name: str | None = None,
) -> Location:
    """Build a Location with terse arguments."""
    return Location(
        id=id,
        name=name or id.title(),
        latitude=lat,
        longitude=lng,
        visit_date=datetime.fromisoformat(visit),
        album_count=albums,
        photo_count=photos,
    )


class RecordingListener:
    """Sequencer listener that records everything it receives."""

    def __init__(self) -> None:
        self.segment_events: list[SegmentCompleteEvent] = []
        self.complete_events: list[AnimationCompleteEvent] = []
        self.errors: list[FlightErrorEvent] = []
        self.frames: list[PlanePosition] = []

    def on_segment_complete(self, event: SegmentCompleteEvent) -> None:
        self.segment_events.append(event)

    def on_animation_complete(self, event: AnimationCompleteEvent) -> None:
        self.complete_events.append(event)

    def on_error(self, event: FlightErrorEvent) -> None:
        self.errors.append(event)

    def on_frame(self, position: PlanePosition) -> None:
        self.frames.append(position)


# =============================================================================
# LOCATIONS
# =============================================================================


@pytest.fixture
def paris() -> Location:
    return make_location("paris", 48.8566, 2.3522, visit="2024-03-01", albums=2, photos=40)


@pytest.fixture
def rome() -> Location:
    return make_location("rome", 41.9028, 12.4964, visit="2024-03-05", albums=1, photos=12)


@pytest.fixture
def athens() -> Location:
    return make_location("athens", 37.9838, 23.7275, visit="2024-03-10", albums=1, photos=8)


@pytest.fixture
def cairo() -> Location:
    return make_location("cairo", 30.0444, 31.2357, visit="2024-03-15", albums=3, photos=60)


@pytest.fixture
def journey(paris: Location, rome: Location, athens: Location, cairo: Location) -> list[Location]:
    """Four cities given out of chronological order (sequencer must sort them)."""
    return [athens, paris, cairo, rome]


# =============================================================================
# ANIMATION
# =============================================================================


@pytest.fixture
def scheduler() -> HostFrameScheduler:
    """Manually clocked scheduler starting at t=0."""
    return HostFrameScheduler()


@pytest.fixture
def camera(scheduler: HostFrameScheduler) -> CameraAnimator:
    return CameraAnimator(scheduler)


@pytest.fixture
def listener() -> RecordingListener:
    return RecordingListener()


@pytest.fixture
def sequencer(scheduler: HostFrameScheduler, camera: CameraAnimator, listener: RecordingListener) -> FlightSequencer:
    """Sequencer with follow camera and a recording listener attached, no journey loaded."""
    seq = FlightSequencer(scheduler, camera=camera)
    seq.add_listener(listener)
    return seq


@pytest.fixture
def loaded_sequencer(sequencer: FlightSequencer, journey: list[Location]) -> FlightSequencer:
    """Sequencer with the four-city journey loaded (3 segments), Idle."""
    sequencer.set_locations(journey)
    return sequencer
