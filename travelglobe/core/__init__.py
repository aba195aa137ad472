"""Core foundation: geodesy, projection, easing, frame scheduling and clustering.

- GeoCalculator: Geodesic calculations (distances, bearings, great-circle interpolation)
- Easing: Closed set of easing functions for camera transitions
- FrameScheduler / HostFrameScheduler / AnimationHandle: Render-frame scheduling
- CoordinateProjector: Sphere projection (import directly from coordinate_projector module)
- GeoClusterer: Greedy location clustering (import directly from geo_clusterer module)
"""

from travelglobe.core.easing import (
    EASING_FUNCTIONS,
    ease_in_out_cubic,
    ease_in_out_expo,
    ease_in_out_quad,
    linear,
    resolve_easing,
)
from travelglobe.core.frame_scheduler import (
    AnimationHandle,
    FrameDrivenAnimator,
    FrameScheduler,
    HostFrameScheduler,
)
from travelglobe.core.geo_calculator import GeoCalculator

# CoordinateProjector and GeoClusterer have circular import with model
# Import directly: from travelglobe.core.coordinate_projector import CoordinateProjector
#                  from travelglobe.core.geo_clusterer import GeoClusterer

__all__ = [
    # Geo calculator
    "GeoCalculator",
    # Easing
    "EASING_FUNCTIONS",
    "linear",
    "ease_in_out_quad",
    "ease_in_out_cubic",
    "ease_in_out_expo",
    "resolve_easing",
    # Frame scheduling
    "FrameScheduler",
    "HostFrameScheduler",
    "AnimationHandle",
    "FrameDrivenAnimator",
]
