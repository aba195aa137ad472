"""CameraPOV and PlanePosition - per-frame outputs consumed by the renderer.

A CameraPOV orients the virtual globe camera; a PlanePosition places the
animated plane along the current flight segment.
"""

from dataclasses import dataclass, replace
from math import isfinite
from typing import Any

from travelglobe.constants import CameraConfig
from travelglobe.core.geo_calculator import GeoCalculator


@dataclass(frozen=True)
class CameraPOV:
    """Camera point of view.

    Attributes:
        lat: Latitude the camera looks at (decimal degrees)
        lng: Longitude the camera looks at (decimal degrees)
        altitude: Camera distance above the surface in globe radii (dimensionless)

    Example:
        pov = CameraPOV(lat=48.85, lng=2.35, altitude=1.5)
    """

    lat: float
    lng: float
    altitude: float

    def normalized(self) -> "CameraPOV":
        """Return a copy that is safe to animate towards.

        Non-finite components fall back to the home view, latitude is clamped,
        longitude wrapped into [-180, 180] and altitude kept non-negative.
        """
        lat = self.lat if isfinite(self.lat) else CameraConfig.HOME_LAT
        lng = self.lng if isfinite(self.lng) else CameraConfig.HOME_LNG
        altitude = self.altitude if isfinite(self.altitude) else CameraConfig.HOME_ALTITUDE
        return CameraPOV(
            lat=GeoCalculator.clamp_latitude(lat),
            lng=GeoCalculator.normalize_longitude(lng),
            altitude=max(0.0, altitude),
        )

    def with_altitude(self, altitude: float) -> "CameraPOV":
        return replace(self, altitude=altitude)

    def to_dict(self) -> dict[str, float]:
        """Return the {lat, lng, altitude} mapping used by globe renderers."""
        return {"lat": self.lat, "lng": self.lng, "altitude": self.altitude}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CameraPOV":
        return cls(lat=float(data["lat"]), lng=float(data["lng"]), altitude=float(data["altitude"]))

    @classmethod
    def home(cls) -> "CameraPOV":
        """Whole-globe default view."""
        return cls(lat=CameraConfig.HOME_LAT, lng=CameraConfig.HOME_LNG, altitude=CameraConfig.HOME_ALTITUDE)

    def __repr__(self) -> str:
        return f"CameraPOV(lat={self.lat:.4f}, lng={self.lng:.4f}, alt={self.altitude:.3f})"


@dataclass(frozen=True)
class PlanePosition:
    """Interpolated plane position on the active flight segment.

    Attributes:
        lat: Latitude (decimal degrees)
        lng: Longitude (decimal degrees, normalized to [-180, 180])
        altitude: Height above the surface in globe altitude units
        heading_deg: Bearing towards the segment destination (0-360, clockwise from North)
        segment_index: Index of the segment this position belongs to
        progress: Segment progress in [0, 1]
        pitch_deg: Nose up (+) or down (-) along the altitude arc, within ±15°
        bank_deg: Roll into the turn, right wing down (+), within ±30°
    """

    lat: float
    lng: float
    altitude: float
    heading_deg: float
    segment_index: int
    progress: float
    pitch_deg: float = 0.0
    bank_deg: float = 0.0

    def to_pov(self, altitude: float) -> CameraPOV:
        """Camera POV centered on the plane at the given camera altitude."""
        return CameraPOV(lat=self.lat, lng=self.lng, altitude=altitude)

    def to_dict(self) -> dict[str, float | int]:
        return {
            "lat": self.lat,
            "lng": self.lng,
            "altitude": self.altitude,
            "heading": self.heading_deg,
            "segment": self.segment_index,
            "progress": self.progress,
            "pitch": self.pitch_deg,
            "bank": self.bank_deg,
        }
