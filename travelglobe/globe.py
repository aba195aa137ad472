"""TravelGlobe - the engine facade wiring projection, clustering and animation.

One canonical engine, parameterized by GlobeSettings, owning:
- CoordinateProjector: sphere geometry for the renderer
- GeoClusterer: location pins, recomputed on every location or radius change
- CameraAnimator: the single camera, shared by shortcuts and the follow camera
- FlightSequencer: journey playback

Typical host loop:

    scheduler = HostFrameScheduler(clock=host_clock_ms)
    globe = TravelGlobe(scheduler, GlobeSettings.from_dict(options))
    globe.camera.add_listener(renderer.set_pov)
    globe.sequencer.add_listener(timeline)
    globe.load_records(album_locations)
    globe.sequencer.play()
    while running:
        scheduler.run_frame()
"""

import logging
from collections.abc import Iterable
from dataclasses import replace
from typing import Any

from travelglobe.animation.camera_animator import CameraAnimator
from travelglobe.animation.flight_sequencer import FlightSequencer
from travelglobe.constants import CameraConfig
from travelglobe.core.coordinate_projector import CoordinateProjector
from travelglobe.core.frame_scheduler import FrameScheduler
from travelglobe.core.geo_clusterer import GeoClusterer
from travelglobe.model.camera_pov import CameraPOV, PlanePosition
from travelglobe.model.cluster import Cluster
from travelglobe.model.location import Location, collect_visit_years, filter_valid_locations
from travelglobe.settings import GlobeSettings
from travelglobe.validators import validate_pin_radius_range

logger = logging.getLogger(__name__)


class TravelGlobe:
    """Engine facade for one globe view.

    Args:
        scheduler: Host frame scheduler shared by both animators
        settings: Runtime options (normalized on construction)
        initial_pov: Starting camera view (home view if omitted)
    """

    def __init__(
        self,
        scheduler: FrameScheduler,
        settings: GlobeSettings | None = None,
        initial_pov: CameraPOV | None = None,
    ) -> None:
        self.settings = (settings or GlobeSettings()).normalized()
        self.scheduler = scheduler
        self.projector = CoordinateProjector()
        self.clusterer = self._build_clusterer()
        self.camera = CameraAnimator(scheduler, initial_pov=initial_pov)
        self.sequencer = FlightSequencer(
            scheduler,
            camera=self.camera,
            speed=self.settings.speed,
            camera_follows_plane=self.settings.camera_follows_plane,
            follow_duration_ms=self.settings.follow_duration_ms,
            follow_easing=self.settings.follow_easing,
            follow_mode=self.settings.follow_mode,
        )
        self._locations: list[Location] = []
        self._clusters: list[Cluster] = []
        self._visible = True

    def _build_clusterer(self) -> GeoClusterer:
        return GeoClusterer(
            radius_km=self.settings.cluster_radius_km,
            min_pin_radius=self.settings.min_pin_radius,
            max_pin_radius=self.settings.max_pin_radius,
        )

    # ==========================================================================
    # Outputs
    # ==========================================================================

    @property
    def locations(self) -> tuple[Location, ...]:
        return tuple(self._locations)

    @property
    def visit_years(self) -> list[int]:
        """Years with at least one visit, for choosing a journey year."""
        return collect_visit_years(self._locations)

    @property
    def clusters(self) -> tuple[Cluster, ...]:
        return tuple(self._clusters)

    @property
    def camera_pov(self) -> CameraPOV:
        return self.camera.pov

    @property
    def plane_position(self) -> PlanePosition | None:
        return self.sequencer.plane_position

    @property
    def is_visible(self) -> bool:
        return self._visible

    def cluster_for(self, location_id: str) -> Cluster | None:
        """Cluster containing the given location, if any."""
        for cluster in self._clusters:
            if cluster.contains(location_id):
                return cluster
        return None

    # ==========================================================================
    # Locations and clustering
    # ==========================================================================

    def set_locations(self, locations: Iterable[Location], year: int | None = None) -> list[Cluster]:
        """Replace the location set: recluster and reload the journey.

        Pins always show every location; a year restricts only the journey
        to the visits of that calendar year. The journey reload is refused by
        the sequencer (with an on_error event) while a flight is playing or
        paused; the pins update regardless.

        Returns:
            The new cluster list.
        """
        self._locations = filter_valid_locations(locations)
        self._recluster()
        self.sequencer.set_locations(self._locations, year=year)
        return list(self._clusters)

    def set_journey_year(self, year: int | None) -> bool:
        """Replay the journey for one visit year (None for every year), keeping the pins.

        Returns:
            True if the journey was reloaded; False while a flight is playing or paused.
        """
        return self.sequencer.set_locations(self._locations, year=year)

    def load_records(self, records: Iterable[dict[str, Any]]) -> list[Cluster]:
        """Parse album-store records and load them; structurally broken records are skipped."""
        locations = []
        for record in records:
            try:
                locations.append(Location.from_dict(record))
            except ValueError as e:
                logger.warning(f"Skipping location record: {e}")
        return self.set_locations(locations)

    def set_cluster_radius(self, radius_km: float) -> list[Cluster]:
        """Change the merge radius (clamped to the accepted range) and recluster."""
        self.settings = replace(self.settings, cluster_radius_km=radius_km).normalized()
        self.clusterer.radius_km = self.settings.cluster_radius_km
        self._recluster()
        return list(self._clusters)

    def set_pin_radius_range(self, min_radius: float, max_radius: float) -> bool:
        """Change pin sizing and recluster. Invalid ranges are rejected.

        Returns:
            True if the range was applied.
        """
        error = validate_pin_radius_range(min_radius, max_radius)
        if error is not None:
            logger.warning(f"[SETTINGS] {error.message}")
            return False
        self.settings = replace(self.settings, min_pin_radius=min_radius, max_pin_radius=max_radius)
        self.clusterer = self._build_clusterer()
        self._recluster()
        return True

    def _recluster(self) -> None:
        self._clusters = self.clusterer.cluster(self._locations)

    # ==========================================================================
    # Playback options
    # ==========================================================================

    def set_speed(self, multiplier: float) -> bool:
        applied = self.sequencer.set_speed(multiplier)
        if applied:
            self.settings = replace(self.settings, speed=self.sequencer.speed)
        return applied

    def set_camera_follow(self, enabled: bool) -> None:
        self.settings = replace(self.settings, camera_follows_plane=enabled)
        self.sequencer.set_camera_follow(enabled)

    def set_follow_mode(self, mode: str) -> bool:
        applied = self.sequencer.set_follow_mode(mode)
        if applied:
            self.settings = replace(self.settings, follow_mode=mode)
        return applied

    # ==========================================================================
    # Camera shortcuts
    # ==========================================================================

    def focus_location(self, location: Location) -> None:
        """Fly to a single location."""
        self.camera.animate_to(
            CameraPOV(lat=location.latitude, lng=location.longitude, altitude=CameraConfig.FOCUS_LOCATION_ALTITUDE),
            duration_ms=CameraConfig.FOCUS_DURATION_MS,
            easing=self.settings.easing,
        )

    def focus_cluster(self, cluster: Cluster) -> None:
        """Fly to a cluster pin, slightly closer than a single location."""
        self.camera.animate_to(
            CameraPOV(lat=cluster.latitude, lng=cluster.longitude, altitude=CameraConfig.FOCUS_CLUSTER_ALTITUDE),
            duration_ms=CameraConfig.FOCUS_DURATION_MS,
            easing=self.settings.easing,
        )

    def fit_all(self) -> None:
        """Frame every location."""
        self.camera.animate_to(
            CoordinateProjector.optimal_pov(self._locations),
            duration_ms=CameraConfig.FIT_DURATION_MS,
            easing=CameraConfig.HOME_EASING,
        )

    def reset_view(self) -> None:
        """Back to the whole-globe home view."""
        self.camera.animate_to(
            CameraPOV.home(),
            duration_ms=CameraConfig.HOME_DURATION_MS,
            easing=CameraConfig.HOME_EASING,
        )

    def zoom_in(self) -> None:
        self.camera.zoom(CameraConfig.ZOOM_IN_FACTOR)

    def zoom_out(self) -> None:
        self.camera.zoom(CameraConfig.ZOOM_OUT_FACTOR)

    # ==========================================================================
    # Host lifecycle
    # ==========================================================================

    def set_visibility(self, visible: bool) -> None:
        """Suspend both animators while hidden; hidden time is not counted on resume."""
        if visible == self._visible:
            return
        self._visible = visible
        for animator in (self.camera, self.sequencer):
            if visible:
                animator.resume()
            else:
                animator.suspend()
        logger.info(f"Globe {'visible' if visible else 'hidden'}")

    def dispose(self) -> None:
        """Cancel every pending frame (host teardown)."""
        self.sequencer.dispose()
        self.camera.dispose()

    def __enter__(self) -> "TravelGlobe":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.dispose()
