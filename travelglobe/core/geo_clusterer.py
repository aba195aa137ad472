"""GeoClusterer - groups nearby visited locations into globe pins.

Greedy single-pass clustering on great-circle distance:

1. Drop locations with invalid coordinates (NaN, infinite, out of range)
2. Order by engagement (albums + photos, descending), then id
3. For each unassigned location, open a cluster seeded with it and absorb
   every later unassigned location within radius_km of the cluster's
   *current* centroid, recomputing the centroid after each absorption
4. Size each pin by sqrt(total content), clamped to the pin radius range

Ordering makes the result independent of input order: the same location set
always yields the same clusters, and the busiest place seeds its region.

Centroids are engagement-weighted (weight = albums + photos + 1). Longitudes
are averaged as seam-aware offsets from the seed, so a cluster straddling
the ±180° meridian stays there instead of collapsing towards lng 0.
"""

import logging
from collections.abc import Iterable
from math import isfinite, sqrt

from travelglobe.constants import ClusterConfig
from travelglobe.core.geo_calculator import GeoCalculator
from travelglobe.model.cluster import Cluster
from travelglobe.model.location import Location, filter_valid_locations

logger = logging.getLogger(__name__)


class _ClusterBuilder:
    """Accumulates members and keeps the weighted centroid up to date."""

    def __init__(self, seed: Location) -> None:
        self.seed = seed
        self.members: list[Location] = []
        self.total_albums = 0
        self.total_photos = 0
        self._weight_sum = 0.0
        self._lat_sum = 0.0
        self._lng_offset_sum = 0.0
        self.latitude = seed.latitude
        self.longitude = seed.longitude
        self.add(seed)

    def add(self, location: Location) -> None:
        weight = location.engagement_weight
        offset = GeoCalculator.wrap_longitude_delta(location.longitude - self.seed.longitude)

        self.members.append(location)
        self.total_albums += location.album_count
        self.total_photos += location.photo_count
        self._weight_sum += weight
        self._lat_sum += location.latitude * weight
        self._lng_offset_sum += offset * weight

        self.latitude = self._lat_sum / self._weight_sum
        self.longitude = GeoCalculator.normalize_longitude(self.seed.longitude + self._lng_offset_sum / self._weight_sum)

    def distance_to(self, location: Location) -> float:
        return GeoCalculator.haversine_distance_km(
            lat1=self.latitude,
            lng1=self.longitude,
            lat2=location.latitude,
            lng2=location.longitude,
        )

    def build(self, radius: float) -> Cluster:
        return Cluster(
            id=f"{ClusterConfig.ID_PREFIX}{self.seed.id}",
            latitude=self.latitude,
            longitude=self.longitude,
            members=tuple(self.members),
            total_albums=self.total_albums,
            total_photos=self.total_photos,
            radius=radius,
        )


class GeoClusterer:
    """Clusters locations into pins.

    Args:
        radius_km: Default merge radius (great-circle km from the current centroid)
        min_pin_radius: Smallest rendered pin radius
        max_pin_radius: Largest rendered pin radius
        scale_factor: Multiplier on sqrt(total albums + photos)

    Example:
        clusterer = GeoClusterer(radius_km=200)
        clusters = clusterer.cluster(locations)
    """

    def __init__(
        self,
        radius_km: float = ClusterConfig.DEFAULT_RADIUS_KM,
        min_pin_radius: float = ClusterConfig.MIN_PIN_RADIUS,
        max_pin_radius: float = ClusterConfig.MAX_PIN_RADIUS,
        scale_factor: float = ClusterConfig.PIN_SCALE_FACTOR,
    ) -> None:
        if min_pin_radius > max_pin_radius:
            raise ValueError(f"min_pin_radius {min_pin_radius} exceeds max_pin_radius {max_pin_radius}")
        self.radius_km = radius_km
        self.min_pin_radius = min_pin_radius
        self.max_pin_radius = max_pin_radius
        self.scale_factor = scale_factor

    def pin_radius(self, content_count: int) -> float:
        """Monotonic pin size for a total album + photo count."""
        raw = sqrt(max(0, content_count)) * self.scale_factor
        return max(self.min_pin_radius, min(self.max_pin_radius, raw))

    def cluster(self, locations: Iterable[Location], radius_km: float | None = None) -> list[Cluster]:
        """Partition locations into clusters.

        Every valid input location ends up in exactly one cluster; invalid
        coordinates are skipped. A negative or non-finite radius is treated as 0,
        which only merges locations at identical coordinates.

        Args:
            locations: Locations in any order
            radius_km: Override for the default merge radius

        Returns:
            Clusters in seed order (busiest seed first).
        """
        radius = self.radius_km if radius_km is None else radius_km
        if not isfinite(radius) or radius < 0:
            logger.debug(f"Clamping cluster radius {radius} to 0")
            radius = 0.0

        ordered = sorted(filter_valid_locations(locations), key=lambda loc: (-loc.engagement_weight, loc.id))
        assigned = [False] * len(ordered)
        clusters: list[Cluster] = []

        for i, seed in enumerate(ordered):
            if assigned[i]:
                continue
            assigned[i] = True
            builder = _ClusterBuilder(seed)

            for j in range(i + 1, len(ordered)):
                if assigned[j]:
                    continue
                candidate = ordered[j]
                if builder.distance_to(candidate) <= radius:
                    builder.add(candidate)
                    assigned[j] = True

            content = builder.total_albums + builder.total_photos
            clusters.append(builder.build(radius=self.pin_radius(content)))

        logger.info(f"Clustered {len(ordered)} locations into {len(clusters)} pins (radius {radius:.0f} km)")
        return clusters
