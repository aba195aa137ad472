"""Easing functions for camera transitions.

Each function maps animation progress t in [0, 1] to eased progress in [0, 1],
is monotone non-decreasing and fixes both endpoints. Inputs outside [0, 1]
are clamped first.
"""

import logging
from collections.abc import Callable

from travelglobe.constants import EasingConfig

logger = logging.getLogger(__name__)

EasingFunction = Callable[[float], float]


def _clamp_unit(t: float) -> float:
    return max(0.0, min(1.0, t))


def linear(t: float) -> float:
    return _clamp_unit(t)


def ease_in_out_quad(t: float) -> float:
    t = _clamp_unit(t)
    if t < 0.5:
        return 2 * t * t
    return 1 - 2 * (1 - t) ** 2


def ease_in_out_cubic(t: float) -> float:
    """Cubic in/out; both halves meet at (0.5, 0.5) with slope 3."""
    t = _clamp_unit(t)
    if t < 0.5:
        return 4 * t**3
    return 1 - 4 * (1 - t) ** 3


def ease_in_out_expo(t: float) -> float:
    """Exponential in/out with explicit endpoints.

    The raw blend is only asymptotic at 0 and 1, so the endpoints are
    returned exactly instead of evaluating the exponentials there.
    """
    t = _clamp_unit(t)
    if t == 0.0:
        return 0.0
    if t == 1.0:
        return 1.0
    k = EasingConfig.EXPO_STEEPNESS
    if t < 0.5:
        return 2 ** (k * t - k / 2) / 2
    return (2 - 2 ** (-k * t + k / 2)) / 2


EASING_FUNCTIONS: dict[str, EasingFunction] = {
    EasingConfig.LINEAR: linear,
    EasingConfig.EASE_IN_OUT_QUAD: ease_in_out_quad,
    EasingConfig.EASE_IN_OUT_CUBIC: ease_in_out_cubic,
    EasingConfig.EASE_IN_OUT_EXPO: ease_in_out_expo,
}
assert set(EASING_FUNCTIONS) == set(EasingConfig.NAMES)


def is_known_easing(name: str) -> bool:
    return name in EASING_FUNCTIONS


def resolve_easing(name: str) -> tuple[str, EasingFunction]:
    """Look up an easing function by name.

    Unknown names fall back to EasingConfig.FALLBACK with a warning rather
    than raising, so a bad option never breaks a running animation.

    Returns:
        Tuple (resolved_name, function).
    """
    if name in EASING_FUNCTIONS:
        return name, EASING_FUNCTIONS[name]
    logger.warning(f"Unknown easing '{name}', falling back to {EasingConfig.FALLBACK}")
    return EasingConfig.FALLBACK, EASING_FUNCTIONS[EasingConfig.FALLBACK]
