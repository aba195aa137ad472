"""Location - a visited place supplied by the album collaborator.

The input atom of the engine: immutable, one per visited city, carrying its
visit date and how much content (albums, photos) was recorded there.

Used by:
- GeoClusterer (groups Locations into Clusters)
- FlightSegment (consecutive pairs of chronologically sorted Locations)
- CoordinateProjector.optimal_pov (frames a set of Locations)
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any

from travelglobe.core.geo_calculator import GeoCalculator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Location:
    """A visited place with coordinates and engagement counts.

    Attributes:
        id: Stable identifier from the album store
        name: Display name (city)
        latitude: Latitude in decimal degrees (WGS84)
        longitude: Longitude in decimal degrees (WGS84)
        visit_date: When the place was visited (naive UTC)
        album_count: Number of albums recorded at this place
        photo_count: Number of photos recorded at this place

    Example:
        paris = Location(
            id="loc-1", name="Paris", latitude=48.85, longitude=2.35,
            visit_date=datetime(2024, 5, 1), album_count=2, photo_count=40,
        )
    """

    id: str
    name: str
    latitude: float
    longitude: float
    visit_date: datetime
    album_count: int = 0
    photo_count: int = 0

    def __post_init__(self) -> None:
        """Validate counts after initialization."""
        if self.album_count < 0 or self.photo_count < 0:
            raise ValueError(
                f"Location {self.id} cannot have negative counts "
                f"(albums={self.album_count}, photos={self.photo_count})"
            )

    @property
    def content_count(self) -> int:
        """Albums plus photos."""
        return self.album_count + self.photo_count

    @property
    def engagement_weight(self) -> int:
        """Centroid weight: content count plus one so empty places still count."""
        return self.content_count + 1

    @property
    def lat_lng(self) -> tuple[float, float]:
        return (self.latitude, self.longitude)

    @property
    def has_valid_coordinates(self) -> bool:
        return GeoCalculator.is_valid_coordinate(self.latitude, self.longitude)

    def distance_to(self, other: "Location") -> float:
        """Great-circle distance to another location in kilometers."""
        return GeoCalculator.haversine_distance_km(
            lat1=self.latitude,
            lng1=self.longitude,
            lat2=other.latitude,
            lng2=other.longitude,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the collaborator's camelCase keys."""
        return {
            "id": self.id,
            "name": self.name,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "visitDate": self.visit_date.isoformat(),
            "albumCount": self.album_count,
            "photoCount": self.photo_count,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Location":
        """Create a Location from an album-store record.

        Accepts camelCase or snake_case keys, ISO strings or datetimes for the
        visit date. Unparseable coordinates become NaN so they are filtered
        downstream; negative counts are clamped to zero.

        Raises:
            ValueError: If id, coordinates or visit date are missing entirely.
        """
        if data.get("id") is None:
            raise ValueError(f"Location record has no id: {data!r}")
        lat = _first_present(data, "latitude", "lat")
        lng = _first_present(data, "longitude", "lng", "lon")
        if lat is _MISSING or lng is _MISSING:
            raise ValueError(f"Location {data['id']} has no coordinates")
        visit = _first_present(data, "visitDate", "visit_date")
        if visit is _MISSING or visit is None:
            raise ValueError(f"Location {data['id']} has no visit date")

        return cls(
            id=str(data["id"]),
            name=str(data.get("name") or ""),
            latitude=_to_float(lat),
            longitude=_to_float(lng),
            visit_date=parse_visit_date(visit),
            album_count=_to_count(_first_present(data, "albumCount", "album_count")),
            photo_count=_to_count(_first_present(data, "photoCount", "photo_count")),
        )

    def __repr__(self) -> str:
        return f"Location({self.id}, {self.name!r}, lat={self.latitude:.4f}, lng={self.longitude:.4f})"


_MISSING = object()


def _first_present(data: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    return _MISSING


def _to_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return float("nan")


def _to_count(value: Any) -> int:
    if value is _MISSING or value is None:
        return 0
    try:
        return max(0, int(value))
    except (TypeError, ValueError):
        return 0


def parse_visit_date(value: datetime | date | str) -> datetime:
    """Normalize a visit date to a naive UTC datetime.

    Aware datetimes are converted to UTC so that mixed inputs stay comparable
    when sorting a journey.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    else:
        parsed = datetime.fromisoformat(str(value).strip())
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def filter_valid_locations(locations: Iterable[Location]) -> list[Location]:
    """Drop locations with NaN, infinite or out-of-range coordinates, keeping order."""
    valid = []
    for location in locations:
        if location.has_valid_coordinates:
            valid.append(location)
        else:
            logger.debug(f"Skipping {location!r}: invalid coordinates")
    return valid


def sort_by_visit_date(locations: Iterable[Location]) -> list[Location]:
    """Chronological order; ties keep their input order."""
    return sorted(locations, key=lambda location: location.visit_date)


def filter_by_year(locations: Iterable[Location], year: int) -> list[Location]:
    """Locations visited during the given calendar year, keeping order."""
    return [location for location in locations if location.visit_date.year == year]


def collect_visit_years(locations: Iterable[Location]) -> list[int]:
    """Distinct visit years in ascending order, for a year picker."""
    return sorted({location.visit_date.year for location in locations})
