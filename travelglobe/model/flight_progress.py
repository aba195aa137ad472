"""FlightProgress - read-only snapshot of journey playback for timeline controls."""

from dataclasses import dataclass

from travelglobe.model.location import Location


@dataclass(frozen=True)
class FlightProgress:
    """Playback snapshot.

    Attributes:
        segment_index: Current segment (0 when there are no segments)
        segment_count: Number of segments in the journey
        segment_progress: Progress within the current segment in [0, 1]
        overall_fraction: Progress across the whole journey in [0, 1],
                          each segment weighted by its duration
        current_location: Origin of the current segment, None without segments
        next_location: Destination of the current segment, None without segments
        estimated_time_remaining_ms: Animation time left at the current speed
        is_playing: Whether the sequencer is in the Playing state
    """

    segment_index: int
    segment_count: int
    segment_progress: float
    overall_fraction: float
    current_location: Location | None
    next_location: Location | None
    estimated_time_remaining_ms: float
    is_playing: bool = False

    @property
    def percent(self) -> float:
        return self.overall_fraction * 100

    @property
    def leg_label(self) -> str:
        """Timeline label such as "Leg 2 of 3"."""
        if self.segment_count == 0:
            return "No journey"
        return f"Leg {self.segment_index + 1} of {self.segment_count}"
