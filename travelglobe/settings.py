"""GlobeSettings - runtime options for one TravelGlobe instance.

Recognized options (camelCase aliases accepted by from_dict):
    cluster_radius_km    (clusterRadiusKm)      default 200
    min_pin_radius       (minPinRadius)         default 0.8
    max_pin_radius       (maxPinRadius)         default 3.0
    easing               (easing)               default easeInOutCubic
    follow_easing        (followEasing)         default linear
    speed                (speed)                default 1.0, presets 0.25x - 5x
    camera_follows_plane (cameraFollowsPlane)   default True
    follow_duration_ms   (followDurationMs)     default 1000
    follow_mode          (followMode)           default plane, or look_ahead

Invalid values never raise: normalized() logs a warning per problem and
clamps or falls back to the default.
"""

import logging
from dataclasses import asdict, dataclass, fields, replace
from typing import Any

from travelglobe.constants import ClusterConfig, EasingConfig, FlightConfig
from travelglobe.model.message import (
    OutOfRangeSettingMessage,
    SettingMessage,
    UnknownSettingMessage,
)
from travelglobe.validators import (
    validate_cluster_radius,
    validate_duration_ms,
    validate_easing_name,
    validate_flag,
    validate_follow_mode,
    validate_pin_radius_range,
    validate_speed,
)

logger = logging.getLogger(__name__)

_CAMEL_CASE_KEYS = {
    "clusterRadiusKm": "cluster_radius_km",
    "clusterRadius": "cluster_radius_km",
    "minPinRadius": "min_pin_radius",
    "maxPinRadius": "max_pin_radius",
    "followEasing": "follow_easing",
    "animationSpeed": "speed",
    "cameraFollowsPlane": "camera_follows_plane",
    "followDurationMs": "follow_duration_ms",
    "followMode": "follow_mode",
}


@dataclass(frozen=True)
class GlobeSettings:
    """Configuration surface of the engine.

    Attributes:
        cluster_radius_km: Merge radius for clustering (km)
        min_pin_radius: Smallest pin radius
        max_pin_radius: Largest pin radius
        easing: Easing for camera shortcuts (focus, fly-to)
        follow_easing: Easing for follow-camera re-targets
        speed: Playback multiplier
        camera_follows_plane: Camera tracks the plane during playback
        follow_duration_ms: Length of each follow re-target
        follow_mode: Follow camera behavior ("plane" or "look_ahead")
    """

    cluster_radius_km: float = ClusterConfig.DEFAULT_RADIUS_KM
    min_pin_radius: float = ClusterConfig.MIN_PIN_RADIUS
    max_pin_radius: float = ClusterConfig.MAX_PIN_RADIUS
    easing: str = EasingConfig.EASE_IN_OUT_CUBIC
    follow_easing: str = FlightConfig.FOLLOW_EASING
    speed: float = FlightConfig.DEFAULT_SPEED
    camera_follows_plane: bool = True
    follow_duration_ms: float = FlightConfig.FOLLOW_DURATION_MS
    follow_mode: str = FlightConfig.DEFAULT_FOLLOW_MODE

    def validate(self) -> list[SettingMessage]:
        """Return every problem with the current values (empty when valid)."""
        checks = [
            validate_cluster_radius(self.cluster_radius_km),
            validate_pin_radius_range(self.min_pin_radius, self.max_pin_radius),
            validate_easing_name("easing", self.easing),
            validate_easing_name("follow_easing", self.follow_easing),
            validate_speed(self.speed),
            validate_duration_ms("follow_duration_ms", self.follow_duration_ms),
            validate_flag("camera_follows_plane", self.camera_follows_plane),
            validate_follow_mode(self.follow_mode),
        ]
        return [message for message in checks if message is not None]

    def normalized(self) -> "GlobeSettings":
        """Return a copy with every invalid value clamped or reset to its default."""
        defaults = GlobeSettings()
        changes: dict[str, Any] = {}

        for message in self.validate():
            logger.warning(f"[SETTINGS] {message.message}")
            if message.setting == "pin_radius" or message.setting in ("min_pin_radius", "max_pin_radius"):
                changes["min_pin_radius"] = defaults.min_pin_radius
                changes["max_pin_radius"] = defaults.max_pin_radius
            elif isinstance(message, OutOfRangeSettingMessage):
                changes[message.setting] = max(message.min_value, min(message.max_value, message.value))
            else:
                changes[message.setting] = getattr(defaults, message.setting)

        return replace(self, **changes) if changes else self

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GlobeSettings":
        """Build settings from snake_case or camelCase options.

        Unknown keys are ignored with a warning; values are normalized.
        """
        known = {f.name for f in fields(cls)}
        values: dict[str, Any] = {}
        for key, value in data.items():
            name = _CAMEL_CASE_KEYS.get(key, key)
            if name not in known:
                logger.warning(f"[SETTINGS] {UnknownSettingMessage(setting=key).message}")
                continue
            values[name] = value
        return cls(**values).normalized()
