"""Configuration constants for the Travel Globe engine.

All tunable parameters are centralized here.

Classes:
    GlobeConfig: Sphere geometry used for projection
    ClusterConfig: Clustering radius and pin sizing
    EasingConfig: Names of the supported easing functions
    CameraConfig: Camera transition defaults and preset views
    FlightConfig: Flight segment timing, speed presets, follow camera
"""


class GlobeConfig:
    """Sphere geometry shared by projection and distance calculations."""

    # Mean Earth radius (spherical approximation)
    EARTH_RADIUS_KM = 6371.0

    # Scene-space radius of the rendered globe (three-globe default)
    BASE_RADIUS = 100.0
    # r = BASE_RADIUS * (1 + ALTITUDE_SCALE * altitude)
    ALTITUDE_SCALE = 1.0

    MIN_LAT = -90.0
    MAX_LAT = 90.0
    MIN_LNG = -180.0
    MAX_LNG = 180.0


class ClusterConfig:
    """Clustering parameters and pin radius sizing."""

    DEFAULT_RADIUS_KM = 200.0

    # radius = clamp(sqrt(total_albums + total_photos) * PIN_SCALE_FACTOR, MIN, MAX)
    MIN_PIN_RADIUS = 0.8
    MAX_PIN_RADIUS = 3.0
    PIN_SCALE_FACTOR = 0.3

    # Accepted range for the user-facing radius option
    MIN_RADIUS_KM = 0.0
    MAX_RADIUS_KM = 5000.0

    ID_PREFIX = "cluster-"


assert ClusterConfig.MIN_PIN_RADIUS <= ClusterConfig.MAX_PIN_RADIUS, "Pin radius range is inverted"


class EasingConfig:
    """Closed set of easing function names (camelCase, as used by the globe frontend)."""

    LINEAR = "linear"
    EASE_IN_OUT_QUAD = "easeInOutQuad"
    EASE_IN_OUT_CUBIC = "easeInOutCubic"
    EASE_IN_OUT_EXPO = "easeInOutExpo"

    NAMES = [LINEAR, EASE_IN_OUT_QUAD, EASE_IN_OUT_CUBIC, EASE_IN_OUT_EXPO]

    # Unknown names resolve to this one
    FALLBACK = EASE_IN_OUT_QUAD

    # Steepness of the exponential blend: 2^(EXPO_STEEPNESS * t - EXPO_STEEPNESS / 2)
    EXPO_STEEPNESS = 20.0


class CameraConfig:
    """Camera transition defaults and preset points of view."""

    DEFAULT_DURATION_MS = 1000.0
    DEFAULT_EASING = EasingConfig.EASE_IN_OUT_QUAD

    # Zoom controls multiply the current altitude, clamped to this range
    MIN_ALTITUDE = 0.5
    MAX_ALTITUDE = 5.0
    ZOOM_IN_FACTOR = 0.8
    ZOOM_OUT_FACTOR = 1.2
    ZOOM_DURATION_MS = 400.0
    ZOOM_EASING = EasingConfig.EASE_IN_OUT_QUAD

    # Whole-globe home view
    HOME_LAT = 0.0
    HOME_LNG = 0.0
    HOME_ALTITUDE = 2.5
    HOME_DURATION_MS = 1500.0
    HOME_EASING = EasingConfig.EASE_IN_OUT_EXPO

    # Focus on a single place or a cluster pin
    FOCUS_LOCATION_ALTITUDE = 1.5
    FOCUS_CLUSTER_ALTITUDE = 1.2
    FOCUS_DURATION_MS = 1200.0

    # Fit-all view: altitude = clamp(max_span_deg * FIT_SPAN_FACTOR + FIT_BASE_ALTITUDE, MIN, MAX)
    FIT_SINGLE_ALTITUDE = 1.8
    FIT_SPAN_FACTOR = 0.02
    FIT_BASE_ALTITUDE = 1.2
    FIT_MIN_ALTITUDE = 1.5
    FIT_MAX_ALTITUDE = 4.0
    FIT_DURATION_MS = 2000.0


class FlightConfig:
    """Flight segment timing, playback speed and follow-camera parameters."""

    # Segment animation duration = clamp(distance_km * DURATION_MS_PER_KM, MIN, MAX)
    DURATION_MS_PER_KM = 50.0
    MIN_SEGMENT_DURATION_MS = 3000.0
    MAX_SEGMENT_DURATION_MS = 8000.0

    # Commercial aviation average, used for the "real" flight time estimate
    CRUISE_SPEED_KMH = 900.0

    # Peak of the sin(pi * progress) altitude arc, in globe altitude units
    CRUISE_ALTITUDE = 0.02

    # Playback speed multipliers offered by the timeline controls
    SPEED_PRESETS = [0.25, 0.5, 1.0, 2.0, 3.0, 5.0]
    MIN_SPEED = SPEED_PRESETS[0]
    MAX_SPEED = SPEED_PRESETS[-1]
    DEFAULT_SPEED = 1.0

    # Follow camera: re-targeted every tick, so an ease-in curve would never leave its start
    FOLLOW_ALTITUDE = 1.5
    FOLLOW_DURATION_MS = 1000.0
    FOLLOW_EASING = EasingConfig.LINEAR

    # Follow modes: "plane" centers on the plane; "look_ahead" frames the path just ahead of it
    # until the midpoint of the leg, then the destination
    FOLLOW_PLANE = "plane"
    FOLLOW_LOOK_AHEAD = "look_ahead"
    FOLLOW_MODES = (FOLLOW_PLANE, FOLLOW_LOOK_AHEAD)
    DEFAULT_FOLLOW_MODE = FOLLOW_PLANE
    LOOK_AHEAD_PROGRESS = 0.1
    LOOK_AHEAD_SWITCH_PROGRESS = 0.5

    # Plane attitude: pitch follows the climb/descent of the altitude arc, bank the
    # heading change since departure (degrees of bank per degree of turn)
    MAX_PITCH_DEG = 15.0
    MAX_BANK_DEG = 30.0
    BANK_PER_TURN_DEG = 0.5

    # Waypoints generated per segment for drawing arcs
    ARC_WAYPOINTS = 100


assert FlightConfig.MIN_SPEED <= FlightConfig.DEFAULT_SPEED <= FlightConfig.MAX_SPEED
assert FlightConfig.MIN_SEGMENT_DURATION_MS > 0, "Segment duration must be positive"
assert FlightConfig.FOLLOW_EASING in EasingConfig.NAMES
assert FlightConfig.DEFAULT_FOLLOW_MODE in FlightConfig.FOLLOW_MODES
assert 0 < FlightConfig.LOOK_AHEAD_PROGRESS < 1
assert CameraConfig.DEFAULT_EASING in EasingConfig.NAMES
