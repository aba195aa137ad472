"""Message - feedback for rejected or adjusted configuration values.

Validators return one of these (or None when the value is fine). The caller
decides how to surface it: GlobeSettings logs a warning and normalizes the
value, a UI would show it next to the control.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class SettingMessage(ABC):
    """Abstract base class for settings feedback.

    Attributes:
        setting: Name of the offending option (snake_case)
    """

    setting: str

    @property
    @abstractmethod
    def message(self) -> str:
        """Formatted message for logs and UI."""
        raise NotImplementedError

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class InvalidNumberSettingMessage(SettingMessage):
    """Value is not a finite number."""

    value: Any

    @property
    def message(self) -> str:
        return f"Invalid {self.setting}: {self.value!r} is not a finite number"


@dataclass(frozen=True)
class OutOfRangeSettingMessage(SettingMessage):
    """Value lies outside its accepted range and will be clamped."""

    value: float
    min_value: float
    max_value: float

    @property
    def message(self) -> str:
        return f"{self.setting} {self.value:g} is outside [{self.min_value:g}, {self.max_value:g}]"


@dataclass(frozen=True)
class InvertedRangeSettingMessage(SettingMessage):
    """Lower bound of a range exceeds its upper bound."""

    low: float
    high: float

    @property
    def message(self) -> str:
        return f"{self.setting}: minimum {self.low:g} is larger than maximum {self.high:g}"


@dataclass(frozen=True)
class UnknownEasingMessage(SettingMessage):
    """Easing name is not one of the supported functions."""

    name: str
    known: tuple[str, ...]

    @property
    def message(self) -> str:
        return f"Unknown {self.setting} '{self.name}' (expected one of: {', '.join(self.known)})"


@dataclass(frozen=True)
class UnknownFollowModeMessage(SettingMessage):
    """Follow mode is not one of the supported camera behaviors."""

    name: str
    known: tuple[str, ...]

    @property
    def message(self) -> str:
        return f"Unknown {self.setting} '{self.name}' (expected one of: {', '.join(self.known)})"


@dataclass(frozen=True)
class InvalidFlagSettingMessage(SettingMessage):
    """On/off option is not a boolean; the default is used instead."""

    value: Any

    @property
    def message(self) -> str:
        return f"Invalid {self.setting}: {self.value!r} is not a boolean"


@dataclass(frozen=True)
class UnknownSettingMessage(SettingMessage):
    """Option key is not recognized and will be ignored."""

    @property
    def message(self) -> str:
        return f"Ignoring unknown setting '{self.setting}'"
