"""Cluster - a group of nearby Locations rendered as one pin.

Clusters are produced by GeoClusterer and never patched afterwards: any
change to the location list or radius recomputes the whole list.
"""

from dataclasses import dataclass
from typing import Any

from travelglobe.model.location import Location


@dataclass(frozen=True)
class Cluster:
    """Visual pin aggregating one or more Locations.

    Attributes:
        id: Stable identifier derived from the seed location ("cluster-<seed id>")
        latitude: Engagement-weighted centroid latitude
        longitude: Engagement-weighted centroid longitude, normalized to [-180, 180]
        members: Member locations, seed first, in absorption order
        total_albums: Sum of member album counts
        total_photos: Sum of member photo counts
        radius: Pin radius in globe units, clamped to the configured range
    """

    id: str
    latitude: float
    longitude: float
    members: tuple[Location, ...]
    total_albums: int
    total_photos: int
    radius: float

    @property
    def count(self) -> int:
        return len(self.members)

    @property
    def is_single(self) -> bool:
        return len(self.members) == 1

    @property
    def content_count(self) -> int:
        return self.total_albums + self.total_photos

    @property
    def member_ids(self) -> list[str]:
        return [member.id for member in self.members]

    @property
    def display_name(self) -> str:
        """Member name for single pins, otherwise "N places"."""
        if self.is_single:
            return self.members[0].name
        return f"{self.count} places"

    @property
    def tooltip(self) -> str:
        """Hover text shown on the pin."""
        album_label = "album" if self.total_albums == 1 else "albums"
        photo_label = "photo" if self.total_photos == 1 else "photos"
        summary = f"{self.total_albums} {album_label} · {self.total_photos} {photo_label}"
        if self.is_single:
            return f"{self.display_name}\n{summary}"
        names = ", ".join(member.name for member in self.members[:3])
        if self.count > 3:
            names += f" +{self.count - 3} more"
        return f"{self.display_name}: {names}\n{summary}"

    def contains(self, location_id: str) -> bool:
        return any(member.id == location_id for member in self.members)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for the rendering collaborator."""
        return {
            "id": self.id,
            "lat": self.latitude,
            "lng": self.longitude,
            "radius": self.radius,
            "totalAlbums": self.total_albums,
            "totalPhotos": self.total_photos,
            "members": self.member_ids,
        }

    def __repr__(self) -> str:
        return f"Cluster({self.id}, {self.count} members, lat={self.latitude:.4f}, lng={self.longitude:.4f})"
