"""
Time configuration system.

Loads and manages day cycle settings from config files. The authority side
reads TimeConfig; observers read ClientTimeConfig.
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Set

from engine.error_handler import ConfigError, get_logger, log_error
from settings import CLIENT_CONFIG_FILE, DAY_LENGTH_TICKS, TIME_CONFIG_FILE

logger = get_logger("config")


class EffectCondition(Enum):
    """When a catch-up effect is allowed to run."""
    NEVER = "never"
    SLEEPING = "sleeping"
    ALWAYS = "always"

    @classmethod
    def parse(cls, value: Any) -> "EffectCondition":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ConfigError(
                f"Unknown effect condition: {value!r}",
                user_message="Effect condition must be one of: never, sleeping, always.",
            ) from None


@dataclass
class TimeConfig:
    """Day cycle settings for the authority side."""

    # Time speed
    day_speed: float = 1.0
    night_speed: float = 1.0

    # Sleep
    enable_sleep_feature: bool = True
    sleep_speed_min: float = 1.0
    sleep_speed_max: float = 110.0
    sleep_speed_curve: float = 0.3334
    sleep_speed_all: float = -1.0  # negative disables the all-asleep override
    clear_weather_on_wake: bool = True

    # Breakpoints (time of day, in ticks)
    day_start: int = 23500
    night_start: int = 12500

    # Effects
    block_entity_effect: EffectCondition = EffectCondition.SLEEPING

    # Levels whose time is left alone
    excluded_level_ids: Set[str] = field(default_factory=set)

    def validate(self) -> None:
        """Raise ConfigError if any value is out of range."""
        for name in ("day_speed", "night_speed"):
            value = getattr(self, name)
            if value <= 0:
                raise ConfigError(f"{name} must be positive, got {value}")
        for name in ("sleep_speed_min", "sleep_speed_max"):
            value = getattr(self, name)
            if value < 0:
                raise ConfigError(f"{name} must not be negative, got {value}")
        for name in ("day_speed", "night_speed", "sleep_speed_min", "sleep_speed_max", "sleep_speed_all"):
            value = getattr(self, name)
            if value > DAY_LENGTH_TICKS:
                raise ConfigError(f"{name} must not exceed one day ({DAY_LENGTH_TICKS}), got {value}")
        if not 0.0 <= self.sleep_speed_curve <= 1.0:
            raise ConfigError(f"sleep_speed_curve must be within [0, 1], got {self.sleep_speed_curve}")
        for name in ("day_start", "night_start"):
            value = getattr(self, name)
            if not 0 <= value < DAY_LENGTH_TICKS:
                raise ConfigError(f"{name} must be within [0, {DAY_LENGTH_TICKS}), got {value}")
        if self.day_start == self.night_start:
            raise ConfigError("day_start and night_start must differ")

        # A single awake step may cross at most one breakpoint
        shortest_segment = min(
            (self.night_start - self.day_start) % DAY_LENGTH_TICKS,
            (self.day_start - self.night_start) % DAY_LENGTH_TICKS,
        )
        for name in ("day_speed", "night_speed"):
            value = getattr(self, name)
            if value > shortest_segment:
                raise ConfigError(f"{name} must not exceed the shortest day segment ({shortest_segment}), got {value}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TimeConfig":
        """
        Build a config from the sectioned file layout, keeping defaults for missing keys.

        Raises ConfigError when a section or value has the wrong type.
        """
        try:
            return cls._parse(data)
        except (TypeError, ValueError, AttributeError) as e:
            raise ConfigError(
                f"Malformed time configuration: {e}",
                user_message="The time settings file contains a value of the wrong type.",
            ) from e

    @classmethod
    def _parse(cls, data: Dict[str, Any]) -> "TimeConfig":
        config = cls()

        speed_data = data.get("time_speed", {})
        config.day_speed = float(speed_data.get("day", config.day_speed))
        config.night_speed = float(speed_data.get("night", config.night_speed))

        sleep_data = data.get("sleep", {})
        config.enable_sleep_feature = bool(sleep_data.get("enabled", config.enable_sleep_feature))
        config.sleep_speed_min = float(sleep_data.get("speed_min", config.sleep_speed_min))
        config.sleep_speed_max = float(sleep_data.get("speed_max", config.sleep_speed_max))
        config.sleep_speed_curve = float(sleep_data.get("speed_curve", config.sleep_speed_curve))
        config.sleep_speed_all = float(sleep_data.get("speed_all", config.sleep_speed_all))
        config.clear_weather_on_wake = bool(sleep_data.get("clear_weather_on_wake", config.clear_weather_on_wake))

        breakpoint_data = data.get("breakpoints", {})
        config.day_start = int(breakpoint_data.get("day_start", config.day_start))
        config.night_start = int(breakpoint_data.get("night_start", config.night_start))

        effect_data = data.get("effects", {})
        config.block_entity_effect = EffectCondition.parse(
            effect_data.get("block_entity", config.block_entity_effect.value)
        )

        level_data = data.get("levels", {})
        config.excluded_level_ids = set(level_data.get("excluded", config.excluded_level_ids))

        return config

    def to_dict(self) -> Dict[str, Any]:
        return {
            "time_speed": {
                "day": self.day_speed,
                "night": self.night_speed,
            },
            "sleep": {
                "enabled": self.enable_sleep_feature,
                "speed_min": self.sleep_speed_min,
                "speed_max": self.sleep_speed_max,
                "speed_curve": self.sleep_speed_curve,
                "speed_all": self.sleep_speed_all,
                "clear_weather_on_wake": self.clear_weather_on_wake,
            },
            "breakpoints": {
                "day_start": self.day_start,
                "night_start": self.night_start,
            },
            "effects": {
                "block_entity": self.block_entity_effect.value,
            },
            "levels": {
                "excluded": sorted(self.excluded_level_ids),
            },
        }

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "TimeConfig":
        """
        Load configuration from file, using defaults if the file doesn't exist.

        Unreadable files fall back to defaults. Values that parse but fail
        validation raise ConfigError.
        """
        path = path or TIME_CONFIG_FILE

        if not path.exists():
            config = cls()
            config.save(path)
            return config

        try:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            log_error(e, "load_time_config")
            logger.warning("Using default time configuration.")
            return cls()

        config = cls.from_dict(data)
        config.validate()
        return config

    def save(self, path: Optional[Path] = None) -> bool:
        """Save configuration to file."""
        path = path or TIME_CONFIG_FILE
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("w", encoding="utf-8") as f:
                json.dump(self.to_dict(), f, indent=2)
            return True
        except OSError as e:
            log_error(e, "save_time_config")
            return False


@dataclass
class ClientTimeConfig:
    """Observer-side settings."""

    excluded_level_ids: Set[str] = field(default_factory=set)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ClientTimeConfig":
        level_data = data.get("levels", {})
        return cls(excluded_level_ids=set(level_data.get("excluded", [])))

    def to_dict(self) -> Dict[str, Any]:
        return {"levels": {"excluded": sorted(self.excluded_level_ids)}}

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "ClientTimeConfig":
        path = path or CLIENT_CONFIG_FILE
        if not path.exists():
            return cls()
        try:
            with path.open("r", encoding="utf-8") as f:
                return cls.from_dict(json.load(f))
        except (OSError, ValueError, TypeError, AttributeError) as e:
            log_error(e, "load_client_config")
            return cls()
