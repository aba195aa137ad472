"""Geodesic calculations on Earth's surface.

Provides geographic helper functions for the travel globe:
- Distance calculation (Haversine formula)
- Bearing calculation (initial heading between points)
- Great-circle interpolation between two points
- Longitude wraparound and coordinate validation

All calculations use a spherical Earth approximation (R = 6,371 km).
"""

from math import atan2, cos, degrees, isfinite, radians, sin, sqrt

from travelglobe.constants import GlobeConfig

EARTH_RADIUS_KM = GlobeConfig.EARTH_RADIUS_KM


class GeoCalculator:
    """Static methods for geodesic calculations on Earth's surface.

    Coordinates are in decimal degrees (WGS84), latitude first.
    Bearings are in degrees clockwise from North (0-360).
    Distances are in kilometers.
    """

    EARTH_RADIUS_KM = EARTH_RADIUS_KM

    @staticmethod
    def haversine_distance_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
        """Calculate great-circle distance between two points using Haversine formula.

        Args:
            lat1: Latitude of first point (decimal degrees)
            lng1: Longitude of first point (decimal degrees)
            lat2: Latitude of second point (decimal degrees)
            lng2: Longitude of second point (decimal degrees)

        Returns:
            Distance in kilometers.
        """
        dlat = radians(lat2 - lat1)
        dlng = radians(lng2 - lng1)
        a = sin(dlat / 2) ** 2 + cos(radians(lat1)) * cos(radians(lat2)) * sin(dlng / 2) ** 2
        # Rounding can push a marginally above 1 for antipodal points
        a = min(1.0, a)
        return EARTH_RADIUS_KM * 2 * atan2(sqrt(a), sqrt(1 - a))

    @staticmethod
    def initial_bearing_deg(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
        """Calculate initial bearing from point 1 to point 2.

        Returns:
            Bearing in degrees (0-360, clockwise from North).
        """
        lat1_rad, lat2_rad = radians(lat1), radians(lat2)
        dlng = radians(lng2 - lng1)
        y = sin(dlng) * cos(lat2_rad)
        x = cos(lat1_rad) * sin(lat2_rad) - sin(lat1_rad) * cos(lat2_rad) * cos(dlng)
        return (degrees(atan2(y, x)) + 360) % 360

    @staticmethod
    def interpolate_great_circle(
        lat1: float,
        lng1: float,
        lat2: float,
        lng2: float,
        fraction: float,
    ) -> tuple[float, float]:
        """Point at `fraction` of the way along the great circle from point 1 to point 2.

        Fraction is clamped to [0, 1]. Coincident points return the start point.

        Returns:
            Tuple (lat, lng) in decimal degrees.
        """
        fraction = max(0.0, min(1.0, fraction))
        if fraction == 0.0:
            return lat1, lng1
        if fraction == 1.0:
            return lat2, lng2

        delta = GeoCalculator.haversine_distance_km(lat1, lng1, lat2, lng2) / EARTH_RADIUS_KM
        sin_delta = sin(delta)
        if sin_delta < 1e-12:
            # Coincident (or antipodal, where the great circle is undefined)
            return lat1, lng1

        phi1, lam1 = radians(lat1), radians(lng1)
        phi2, lam2 = radians(lat2), radians(lng2)
        a = sin((1 - fraction) * delta) / sin_delta
        b = sin(fraction * delta) / sin_delta

        x = a * cos(phi1) * cos(lam1) + b * cos(phi2) * cos(lam2)
        y = a * cos(phi1) * sin(lam1) + b * cos(phi2) * sin(lam2)
        z = a * sin(phi1) + b * sin(phi2)

        return degrees(atan2(z, sqrt(x * x + y * y))), degrees(atan2(y, x))

    @staticmethod
    def wrap_longitude_delta(delta_deg: float) -> float:
        """Reduce a longitude difference to the shorter arc.

        A difference above 180° becomes negative and one below -180° positive,
        so adding the result to a start longitude always crosses the ±180°
        seam the short way.
        """
        if delta_deg > 180:
            return delta_deg - 360
        if delta_deg < -180:
            return delta_deg + 360
        return delta_deg

    @staticmethod
    def normalize_longitude(lng: float) -> float:
        """Normalize longitude to the [-180, 180] range."""
        if -180.0 <= lng <= 180.0:
            return lng
        return ((lng + 180.0) % 360.0) - 180.0

    @staticmethod
    def clamp_latitude(lat: float) -> float:
        """Clamp latitude to the [-90, 90] range."""
        return max(GlobeConfig.MIN_LAT, min(GlobeConfig.MAX_LAT, lat))

    @staticmethod
    def is_valid_coordinate(lat: float, lng: float) -> bool:
        """Check that a coordinate pair is finite and within WGS84 bounds."""
        try:
            lat = float(lat)
            lng = float(lng)
        except (TypeError, ValueError):
            return False
        if not (isfinite(lat) and isfinite(lng)):
            return False
        return (
            GlobeConfig.MIN_LAT <= lat <= GlobeConfig.MAX_LAT
            and GlobeConfig.MIN_LNG <= lng <= GlobeConfig.MAX_LNG
        )
