"""Validators - configuration validation for the travel globe.

Centralizes all validation logic. Validators return SettingMessage | None:
- None if valid
- A SettingMessage object if invalid (caller logs or displays it)

Design Principles:
- No exceptions for expected validation failures
- Out-of-range numbers are reported so the caller can clamp them
"""

from math import isfinite
from typing import Any

from travelglobe.constants import ClusterConfig, EasingConfig, FlightConfig
from travelglobe.core.easing import is_known_easing
from travelglobe.model.message import (
    InvalidFlagSettingMessage,
    InvalidNumberSettingMessage,
    InvertedRangeSettingMessage,
    OutOfRangeSettingMessage,
    SettingMessage,
    UnknownEasingMessage,
    UnknownFollowModeMessage,
)


def is_finite_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return isfinite(value)


def validate_number(setting: str, value: Any) -> SettingMessage | None:
    """Validate that a value is a finite real number (bools rejected).

    Returns:
        None if valid, InvalidNumberSettingMessage otherwise.
    """
    if not is_finite_number(value):
        return InvalidNumberSettingMessage(setting=setting, value=value)
    return None


def validate_cluster_radius(radius_km: Any) -> SettingMessage | None:
    """Validate the clustering radius.

    Returns:
        None if valid, InvalidNumberSettingMessage or OutOfRangeSettingMessage.
    """
    error = validate_number("cluster_radius_km", radius_km)
    if error is not None:
        return error
    if not ClusterConfig.MIN_RADIUS_KM <= radius_km <= ClusterConfig.MAX_RADIUS_KM:
        return OutOfRangeSettingMessage(
            setting="cluster_radius_km",
            value=radius_km,
            min_value=ClusterConfig.MIN_RADIUS_KM,
            max_value=ClusterConfig.MAX_RADIUS_KM,
        )
    return None


def validate_pin_radius_range(min_radius: Any, max_radius: Any) -> SettingMessage | None:
    """Validate the pin radius range: both positive numbers, min not above max.

    Returns:
        None if valid, the first problem found otherwise.
    """
    for setting, value in (("min_pin_radius", min_radius), ("max_pin_radius", max_radius)):
        error = validate_number(setting, value)
        if error is not None:
            return error
        if value <= 0:
            return InvalidNumberSettingMessage(setting=setting, value=value)
    if min_radius > max_radius:
        return InvertedRangeSettingMessage(setting="pin_radius", low=min_radius, high=max_radius)
    return None


def validate_easing_name(setting: str, name: Any) -> SettingMessage | None:
    """Validate that an easing name is one of the supported functions.

    Returns:
        None if valid, UnknownEasingMessage otherwise.
    """
    if not isinstance(name, str) or not is_known_easing(name):
        return UnknownEasingMessage(setting=setting, name=str(name), known=tuple(EasingConfig.NAMES))
    return None


def validate_speed(multiplier: Any) -> SettingMessage | None:
    """Validate a playback speed multiplier against the preset range.

    Returns:
        None if valid, InvalidNumberSettingMessage for non-positive or
        non-finite values, OutOfRangeSettingMessage outside the presets.
    """
    if not is_finite_number(multiplier) or multiplier <= 0:
        return InvalidNumberSettingMessage(setting="speed", value=multiplier)
    if not FlightConfig.MIN_SPEED <= multiplier <= FlightConfig.MAX_SPEED:
        return OutOfRangeSettingMessage(
            setting="speed",
            value=multiplier,
            min_value=FlightConfig.MIN_SPEED,
            max_value=FlightConfig.MAX_SPEED,
        )
    return None


def validate_duration_ms(setting: str, duration_ms: Any) -> SettingMessage | None:
    """Validate a transition duration: finite and not negative.

    Returns:
        None if valid, InvalidNumberSettingMessage otherwise.
    """
    if not is_finite_number(duration_ms) or duration_ms < 0:
        return InvalidNumberSettingMessage(setting=setting, value=duration_ms)
    return None


def validate_flag(setting: str, value: Any) -> SettingMessage | None:
    """Validate an on/off option. Only real booleans pass; "false" or 0 do not.

    Returns:
        None if valid, InvalidFlagSettingMessage otherwise.
    """
    if not isinstance(value, bool):
        return InvalidFlagSettingMessage(setting=setting, value=value)
    return None


def validate_follow_mode(mode: Any) -> SettingMessage | None:
    """Validate the follow camera mode.

    Returns:
        None if valid, UnknownFollowModeMessage otherwise.
    """
    if mode not in FlightConfig.FOLLOW_MODES:
        return UnknownFollowModeMessage(setting="follow_mode", name=str(mode), known=FlightConfig.FOLLOW_MODES)
    return None
