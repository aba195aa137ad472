"""FlightEvent - discrete lifecycle events emitted by the FlightSequencer.

Events are a small fixed set of immutable records. Listeners register with
FlightSequencer.add_listener() and implement any subset of the hook methods;
each event names the hook it is delivered to.

    class Logger:
        def on_segment_complete(self, event: SegmentCompleteEvent) -> None: ...
        def on_animation_complete(self, event: AnimationCompleteEvent) -> None: ...
        def on_error(self, event: FlightErrorEvent) -> None: ...
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

from travelglobe.model.location import Location


class FlightErrorReason(Enum):
    """Why a sequencer operation was refused."""

    INSUFFICIENT_LOCATIONS = "insufficient_locations"
    PLAYBACK_ACTIVE = "playback_active"


@dataclass(frozen=True)
class FlightEvent(ABC):
    """Abstract base class for sequencer events.

    Subclasses set hook_name to the listener method that receives them.
    """

    hook_name: ClassVar[str]

    @property
    @abstractmethod
    def message(self) -> str:
        """Human-readable description for logs and status lines."""

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class SegmentCompleteEvent(FlightEvent):
    """The plane reached the destination of a segment.

    Attributes:
        location: Destination location that was reached
        segment_index: Index of the completed segment
        segment_count: Total segments in the journey
    """

    hook_name: ClassVar[str] = "on_segment_complete"

    location: Location
    segment_index: int
    segment_count: int

    @property
    def is_last(self) -> bool:
        return self.segment_index == self.segment_count - 1

    @property
    def message(self) -> str:
        return f"Arrived in {self.location.name} (leg {self.segment_index + 1}/{self.segment_count})"


@dataclass(frozen=True)
class AnimationCompleteEvent(FlightEvent):
    """The final segment completed; the journey is over."""

    hook_name: ClassVar[str] = "on_animation_complete"

    segment_count: int
    final_location: Location

    @property
    def message(self) -> str:
        return f"Journey complete: {self.segment_count} legs, ended in {self.final_location.name}"


@dataclass(frozen=True)
class FlightErrorEvent(FlightEvent):
    """A user-observable failure; playback state is left untouched."""

    hook_name: ClassVar[str] = "on_error"

    reason: FlightErrorReason
    detail: str = ""

    @property
    def message(self) -> str:
        text = {
            FlightErrorReason.INSUFFICIENT_LOCATIONS: "Need at least two valid locations to play the journey",
            FlightErrorReason.PLAYBACK_ACTIVE: "Locations cannot change while the journey is playing or paused",
        }[self.reason]
        if self.detail:
            return f"{text} ({self.detail})"
        return text
