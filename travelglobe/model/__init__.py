"""Data model classes for the travel globe.

Inputs, derived data and per-frame outputs:
- Location: Visited place (input atom from the album store)
- Cluster: Nearby locations merged into one pin
- FlightSegment: Leg between two chronologically consecutive locations
- CameraPOV: Camera point of view (lat, lng, altitude)
- PlanePosition: Interpolated plane on the active segment
- FlightProgress: Playback snapshot for timeline controls
- FlightEvent: Sequencer lifecycle events
- SettingMessage: Feedback for rejected configuration values
"""

from travelglobe.model.camera_pov import CameraPOV, PlanePosition
from travelglobe.model.cluster import Cluster
from travelglobe.model.flight_event import (
    AnimationCompleteEvent,
    FlightErrorEvent,
    FlightErrorReason,
    FlightEvent,
    SegmentCompleteEvent,
)
from travelglobe.model.flight_progress import FlightProgress
from travelglobe.model.flight_segment import FlightSegment, build_flight_segments
from travelglobe.model.location import Location, filter_valid_locations
from travelglobe.model.message import (
    InvalidFlagSettingMessage,
    InvalidNumberSettingMessage,
    InvertedRangeSettingMessage,
    OutOfRangeSettingMessage,
    SettingMessage,
    UnknownEasingMessage,
    UnknownFollowModeMessage,
    UnknownSettingMessage,
)

__all__ = [
    "Location",
    "filter_valid_locations",
    "Cluster",
    "FlightSegment",
    "build_flight_segments",
    "CameraPOV",
    "PlanePosition",
    "FlightProgress",
    "FlightEvent",
    "SegmentCompleteEvent",
    "AnimationCompleteEvent",
    "FlightErrorEvent",
    "FlightErrorReason",
    "SettingMessage",
    "InvalidFlagSettingMessage",
    "InvalidNumberSettingMessage",
    "InvertedRangeSettingMessage",
    "OutOfRangeSettingMessage",
    "UnknownEasingMessage",
    "UnknownFollowModeMessage",
    "UnknownSettingMessage",
]
