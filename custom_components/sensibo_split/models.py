"""Data models for Sensibo Split integration."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class ACMode(StrEnum):
    """Operating mode reported by the Sensibo API."""

    COOL = "cool"
    HEAT = "heat"
    DRY = "dry"
    FAN = "fan"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: Any) -> ACMode:  # noqa: ANN401
        """Return the mode for a vendor value, UNKNOWN for anything else."""
        try:
            mode = cls(value)
        except ValueError:
            return cls.UNKNOWN
        return mode


class FanLevel(StrEnum):
    """Fan levels that have a rotation speed counterpart."""

    LOW = "low"
    MEDIUM_LOW = "medium_low"
    MEDIUM = "medium"
    MEDIUM_HIGH = "medium_high"
    HIGH = "high"

    @classmethod
    def parse(cls, value: Any) -> FanLevel | None:  # noqa: ANN401
        """Return the fan level for a vendor value, None when unsupported."""
        try:
            return cls(value)
        except ValueError:
            return None


class SwingMode(StrEnum):
    """Swing positions the integration reads and writes."""

    STOPPED = "stopped"
    FULL = "rangeFull"

    @classmethod
    def parse(cls, value: Any) -> SwingMode | None:  # noqa: ANN401
        """Return the swing mode for a vendor value, None for fixed positions."""
        try:
            return cls(value)
        except ValueError:
            return None


class FieldGroup(StrEnum):
    """Top-level field groups that can be requested from a pod."""

    AC_STATE = "acState"
    MEASUREMENTS = "measurements"


class FieldName(StrEnum):
    """Writable acState fields."""

    POWER = "on"
    MODE = "mode"
    TARGET_TEMPERATURE = "targetTemperature"
    FAN_LEVEL = "fanLevel"
    SWING = "swing"
    HORIZONTAL_SWING = "horizontalSwing"


class ViewKind(StrEnum):
    """Logical devices a single air conditioner is split into."""

    HEATER_COOLER = "heater_cooler"
    DEHUMIDIFIER = "dehumidifier"
    FAN = "fan"


@dataclass(frozen=True)
class SensiboDevice:
    """Represents a Sensibo pod.

    Attributes:
        id: Pod identifier used in API paths.
        name: Human-readable device name.

    """

    id: str
    name: str


@dataclass(slots=True)
class RemoteDeviceState:
    """Represents the state reported by the Sensibo API for one pod.

    Fields belonging to a group that was not requested are None.
    """

    power: bool | None = None
    mode: ACMode = ACMode.UNKNOWN
    target_temperature: float | None = None
    temperature_unit: str | None = None
    fan_level: FanLevel | None = None
    swing: SwingMode | None = None
    horizontal_swing: SwingMode | None = None
    current_temperature: float | None = None
    current_humidity: float | None = None
    raw_state: dict[str, Any] = field(default_factory=dict)
