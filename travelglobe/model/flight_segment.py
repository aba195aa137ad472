"""FlightSegment - one leg of a chronological journey.

A segment joins two chronologically consecutive Locations. Segments are
derived data: rebuilt whenever the location list changes, never mutated.

Plane interpolation along a segment:
- lat: linear between origin and destination
- lng: linear along the shorter arc (crosses the ±180° seam the short way)
- altitude: arc peaking at FlightConfig.CRUISE_ALTITUDE mid-flight
- heading: bearing from the current position towards the destination
- pitch: cos of the altitude arc, so the nose rises on take-off and drops on landing
- bank: half the turn from the departure bearing, clamped
"""

from collections.abc import Iterable
from dataclasses import dataclass
from functools import cached_property
from math import cos, pi, sin

from travelglobe.constants import FlightConfig
from travelglobe.core.geo_calculator import GeoCalculator
from travelglobe.model.camera_pov import CameraPOV, PlanePosition
from travelglobe.model.location import Location, sort_by_visit_date


@dataclass(frozen=True)
class FlightSegment:
    """Leg from origin to destination.

    Attributes:
        index: Position of this leg in the journey (0-based)
        origin: Departure location
        destination: Arrival location
    """

    index: int
    origin: Location
    destination: Location

    @cached_property
    def distance_km(self) -> float:
        return self.origin.distance_to(self.destination)

    @cached_property
    def bearing_deg(self) -> float:
        return GeoCalculator.initial_bearing_deg(
            lat1=self.origin.latitude,
            lng1=self.origin.longitude,
            lat2=self.destination.latitude,
            lng2=self.destination.longitude,
        )

    @property
    def duration_ms(self) -> float:
        """Animation duration at 1x speed, proportional to distance and clamped."""
        duration = self.distance_km * FlightConfig.DURATION_MS_PER_KM
        return max(FlightConfig.MIN_SEGMENT_DURATION_MS, min(FlightConfig.MAX_SEGMENT_DURATION_MS, duration))

    @property
    def estimated_flight_hours(self) -> float:
        """Real-world flight time at cruise speed."""
        return self.distance_km / FlightConfig.CRUISE_SPEED_KMH

    def position_at(self, progress: float) -> PlanePosition:
        """Plane position and attitude at segment progress in [0, 1] (clamped)."""
        progress = max(0.0, min(1.0, progress))
        lat = self.origin.latitude + (self.destination.latitude - self.origin.latitude) * progress
        lng_delta = GeoCalculator.wrap_longitude_delta(self.destination.longitude - self.origin.longitude)
        lng = GeoCalculator.normalize_longitude(self.origin.longitude + lng_delta * progress)
        altitude = FlightConfig.CRUISE_ALTITUDE * sin(pi * progress)

        if progress < 1.0:
            heading = GeoCalculator.initial_bearing_deg(lat, lng, self.destination.latitude, self.destination.longitude)
        else:
            heading = self.bearing_deg

        return PlanePosition(
            lat=lat,
            lng=lng,
            altitude=altitude,
            heading_deg=heading,
            segment_index=self.index,
            progress=progress,
            pitch_deg=self.pitch_at(progress),
            bank_deg=self.bank_for(heading),
        )

    @staticmethod
    def pitch_at(progress: float) -> float:
        """Nose angle along the altitude arc, positive while climbing."""
        pitch = FlightConfig.MAX_PITCH_DEG * cos(pi * progress)
        return max(-FlightConfig.MAX_PITCH_DEG, min(FlightConfig.MAX_PITCH_DEG, pitch))

    def bank_for(self, heading_deg: float) -> float:
        """Bank angle for the turn from the departure bearing to heading_deg."""
        turn = GeoCalculator.wrap_longitude_delta(heading_deg - self.bearing_deg)
        bank = turn * FlightConfig.BANK_PER_TURN_DEG
        return max(-FlightConfig.MAX_BANK_DEG, min(FlightConfig.MAX_BANK_DEG, bank))

    def look_ahead_pov(self, progress: float, altitude: float) -> CameraPOV:
        """Camera target for the look-ahead follow mode.

        Before the midpoint the camera frames the path LOOK_AHEAD_PROGRESS
        ahead of the plane; from the midpoint on it frames the destination.
        """
        if progress < FlightConfig.LOOK_AHEAD_SWITCH_PROGRESS:
            ahead = self.position_at(min(1.0, progress + FlightConfig.LOOK_AHEAD_PROGRESS))
            return ahead.to_pov(altitude)
        return CameraPOV(lat=self.destination.latitude, lng=self.destination.longitude, altitude=altitude)

    def waypoints(self, count: int = FlightConfig.ARC_WAYPOINTS) -> list[tuple[float, float]]:
        """Great-circle (lat, lng) points from origin to destination for drawing the arc."""
        count = max(2, count)
        return [
            GeoCalculator.interpolate_great_circle(
                self.origin.latitude,
                self.origin.longitude,
                self.destination.latitude,
                self.destination.longitude,
                i / (count - 1),
            )
            for i in range(count)
        ]

    def __repr__(self) -> str:
        return f"FlightSegment({self.index}: {self.origin.name} -> {self.destination.name}, {self.distance_km:.0f} km)"


def build_flight_segments(locations: Iterable[Location]) -> list[FlightSegment]:
    """Sort locations by visit date (stable on ties) and pair consecutive ones.

    Fewer than two locations produce no segments.
    """
    ordered = sort_by_visit_date(locations)
    return [
        FlightSegment(index=i, origin=origin, destination=destination)
        for i, (origin, destination) in enumerate(zip(ordered, ordered[1:]))
    ]
