"""CoordinateProjector - geographic coordinates onto the rendered sphere.

Pure geometry shared by the clusterer, the camera and the flight sequencer:
- lat/lng/altitude -> scene (x, y, z) and back
- Longitude interpolation that crosses the ±180° seam the short way
- Camera POV interpolation and the fit-all POV for a set of locations

Axis convention follows three-globe: y is the polar axis, lng=-180 lies on -x.
"""

from collections.abc import Sequence
from math import acos, atan2, cos, degrees, pi, sin, sqrt
from typing import TYPE_CHECKING

import numpy as np

from travelglobe.constants import CameraConfig, GlobeConfig
from travelglobe.core.geo_calculator import GeoCalculator
from travelglobe.model.camera_pov import CameraPOV

if TYPE_CHECKING:
    from travelglobe.model.location import Location


class CoordinateProjector:
    """Projects WGS84 coordinates onto a sphere of configurable radius.

    Attributes:
        base_radius: Scene radius of the globe surface
        altitude_scale: Multiplier converting altitude units to radius fractions
    """

    def __init__(
        self,
        base_radius: float = GlobeConfig.BASE_RADIUS,
        altitude_scale: float = GlobeConfig.ALTITUDE_SCALE,
    ) -> None:
        if base_radius <= 0:
            raise ValueError(f"base_radius must be positive, got {base_radius}")
        self.base_radius = base_radius
        self.altitude_scale = altitude_scale

    def radius_at(self, altitude: float) -> float:
        return self.base_radius * (1 + self.altitude_scale * altitude)

    def project(self, lat: float, lng: float, altitude: float = 0.0) -> tuple[float, float, float]:
        """Convert a geographic position to scene coordinates.

        phi is the polar angle from +y, theta the azimuth shifted so that
        lng=-180 maps onto the -x axis.

        Returns:
            Tuple (x, y, z).
        """
        phi = (90 - lat) * pi / 180
        theta = (lng + 180) * pi / 180
        r = self.radius_at(altitude)
        return (
            -r * sin(phi) * cos(theta),
            r * cos(phi),
            r * sin(phi) * sin(theta),
        )

    def project_many(
        self,
        lats: Sequence[float] | np.ndarray,
        lngs: Sequence[float] | np.ndarray,
        altitudes: Sequence[float] | np.ndarray | float = 0.0,
    ) -> np.ndarray:
        """Vectorised project() for batches of points.

        Returns:
            Array of shape (n, 3) with one (x, y, z) row per point.
        """
        lat_arr = np.asarray(lats, dtype=float)
        lng_arr = np.asarray(lngs, dtype=float)
        alt_arr = np.broadcast_to(np.asarray(altitudes, dtype=float), lat_arr.shape)

        phi = np.radians(90 - lat_arr)
        theta = np.radians(lng_arr + 180)
        r = self.base_radius * (1 + self.altitude_scale * alt_arr)
        return np.column_stack(
            (
                -r * np.sin(phi) * np.cos(theta),
                r * np.cos(phi),
                r * np.sin(phi) * np.sin(theta),
            )
        )

    def unproject(self, x: float, y: float, z: float) -> tuple[float, float, float]:
        """Inverse of project().

        Returns:
            Tuple (lat, lng, altitude). The origin maps to (0, 0, -1/altitude_scale).
        """
        r = sqrt(x * x + y * y + z * z)
        if r == 0:
            return 0.0, 0.0, -1.0 / self.altitude_scale if self.altitude_scale else 0.0
        phi = acos(max(-1.0, min(1.0, y / r)))
        theta = atan2(z, -x)
        lat = 90 - degrees(phi)
        lng = GeoCalculator.normalize_longitude(degrees(theta) - 180)
        altitude = (r / self.base_radius - 1) / self.altitude_scale if self.altitude_scale else 0.0
        return lat, lng, altitude

    @staticmethod
    def interpolate_longitude(start_lng: float, end_lng: float, t: float) -> float:
        """Interpolate longitude along the shorter arc.

        Naive interpolation from 179° to -179° would sweep 358° around the
        globe; this takes the 2° route across the seam. The result is not
        wrapped, so values slightly beyond ±180 are possible mid-way.
        """
        diff = GeoCalculator.wrap_longitude_delta(end_lng - start_lng)
        return start_lng + diff * t

    @staticmethod
    def haversine_distance(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
        """Great-circle distance in kilometers."""
        return GeoCalculator.haversine_distance_km(lat1=lat1, lng1=lng1, lat2=lat2, lng2=lng2)

    @staticmethod
    def interpolate_pov(start: CameraPOV, target: CameraPOV, t: float) -> CameraPOV:
        """Blend two points of view; lat and altitude linearly, lng across the seam."""
        lng = CoordinateProjector.interpolate_longitude(start.lng, target.lng, t)
        return CameraPOV(
            lat=start.lat + (target.lat - start.lat) * t,
            lng=GeoCalculator.normalize_longitude(lng),
            altitude=start.altitude + (target.altitude - start.altitude) * t,
        )

    @staticmethod
    def longitude_arc(lngs: Sequence[float]) -> tuple[float, float]:
        """Smallest arc covering all longitudes, as (center, span) in degrees.

        The arc is the complement of the widest empty gap between neighbouring
        longitudes, so points on both sides of the ±180° seam give a narrow arc
        across it instead of one spanning the whole globe.
        """
        ordered = sorted(GeoCalculator.normalize_longitude(lng) for lng in lngs)
        if len(ordered) < 2:
            return (ordered[0] if ordered else 0.0), 0.0

        # Gap after ordered[i]; the last one wraps around to ordered[0]
        gaps = [b - a for a, b in zip(ordered, ordered[1:])]
        gaps.append(ordered[0] + 360.0 - ordered[-1])
        widest = max(range(len(gaps)), key=gaps.__getitem__)

        start = ordered[(widest + 1) % len(ordered)]
        span = 360.0 - gaps[widest]
        return GeoCalculator.normalize_longitude(start + span / 2), span

    @staticmethod
    def optimal_pov(locations: Sequence["Location"]) -> CameraPOV:
        """Point of view framing all given locations.

        Empty input gives the home view; a single location is framed at a fixed
        altitude; otherwise the camera centers on the bounding box and backs off
        proportionally to its larger span. The longitude side of the box is the
        smallest arc covering every location, so journeys across the Pacific
        are framed over the Pacific.
        """
        if not locations:
            return CameraPOV.home()
        if len(locations) == 1:
            only = locations[0]
            return CameraPOV(lat=only.latitude, lng=only.longitude, altitude=CameraConfig.FIT_SINGLE_ALTITUDE)

        lats = [loc.latitude for loc in locations]
        min_lat, max_lat = min(lats), max(lats)
        center_lng, lng_span = CoordinateProjector.longitude_arc([loc.longitude for loc in locations])

        max_span = max(max_lat - min_lat, lng_span)
        altitude = max_span * CameraConfig.FIT_SPAN_FACTOR + CameraConfig.FIT_BASE_ALTITUDE
        altitude = max(CameraConfig.FIT_MIN_ALTITUDE, min(CameraConfig.FIT_MAX_ALTITUDE, altitude))
        return CameraPOV(lat=(min_lat + max_lat) / 2, lng=center_lng, altitude=altitude)
