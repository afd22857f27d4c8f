"""
Configuration loader for Subtitle Censor.

Loads settings from a YAML config file with sensible defaults. Missing keys
keep their defaults and unknown keys are ignored.
"""

import logging
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import List, Optional

import yaml

from .error_handler import ConfigError
from .logging_config import setup_logging
from .models import FilterLevel, SyncOptions
from .profanity.severity import SeverityThresholds
from .profanity.wordlist import DEFAULT_PLACEHOLDER

logger = logging.getLogger(__name__)


def _number(value, name: str, cast=int):
    try:
        return cast(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{name} must be a number, got {value!r}") from None


@dataclass
class FilterConfig:
    """Profile filter settings."""
    default_level: str = "mild"  # none, mild, moderate, strict
    custom_words: List[str] = field(default_factory=list)
    whitelist: List[str] = field(default_factory=list)
    placeholder: str = DEFAULT_PLACEHOLDER  # Replacement for custom words


@dataclass
class TimingConfig:
    """Timestamp adjustment and repair."""
    offset_ms: int = 0
    speed_ratio: float = 1.0  # e.g. 25/23.976 for PAL-speed subtitles
    validate_timings: bool = True
    repair_malformed: bool = True
    mute_padding_ms: int = 0  # Extra mute after each range


@dataclass
class SeverityConfig:
    """Profane-entry counts separating LOW, MEDIUM and HIGH."""
    low_max_entries: int = 2
    medium_max_entries: int = 10


@dataclass
class CacheConfig:
    """Configuration for the analysis result cache."""
    enabled: bool = True
    max_entries: int = 64  # 0 = unbounded


@dataclass
class LoggingConfig:
    """Configuration for logging."""
    level: str = "INFO"
    log_file: str = ""
    console: bool = True


@dataclass
class Config:
    """Main configuration container."""
    filter: FilterConfig = field(default_factory=FilterConfig)
    timing: TimingConfig = field(default_factory=TimingConfig)
    severity: SeverityConfig = field(default_factory=SeverityConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Config":
        """
        Load configuration from YAML file.

        If no path is provided, uses default values.

        Raises:
            ConfigError: If the file is not a mapping or a value is invalid
        """
        config = cls()

        if config_path and Path(config_path).exists():
            logger.info(f"Loading configuration from {config_path}")
            with open(config_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}

            if not isinstance(data, dict):
                raise ConfigError(f"{config_path}: top level must be a mapping")

            for section in fields(config):
                values = data.get(section.name)
                if not values:
                    continue
                if not isinstance(values, dict):
                    raise ConfigError(f"{config_path}: '{section.name}' must be a mapping")
                target = getattr(config, section.name)
                for key, value in values.items():
                    if hasattr(target, key):
                        setattr(target, key, value)
                    else:
                        logger.debug(f"Ignoring unknown config key {section.name}.{key}")
        elif config_path:
            logger.warning(f"Config file {config_path} not found, using defaults")

        config.validate()
        return config

    def validate(self) -> None:
        """Raise ConfigError for out-of-range values."""
        try:
            FilterLevel.parse(self.filter.default_level)
        except ValueError as e:
            raise ConfigError(f"filter.default_level: {e}") from None

        for name in ("custom_words", "whitelist"):
            value = getattr(self.filter, name)
            if value is None:
                setattr(self.filter, name, [])
            elif isinstance(value, str) or not all(isinstance(w, str) for w in value):
                raise ConfigError(f"filter.{name} must be a list of words")

        if not self.filter.placeholder:
            raise ConfigError("filter.placeholder must not be empty")

        _number(self.timing.offset_ms, "timing.offset_ms")
        speed = _number(self.timing.speed_ratio, "timing.speed_ratio", float)
        if speed <= 0:
            raise ConfigError(f"timing.speed_ratio must be positive, got {speed}")
        if _number(self.timing.mute_padding_ms, "timing.mute_padding_ms") < 0:
            raise ConfigError("timing.mute_padding_ms must be >= 0")

        try:
            self.to_thresholds()
        except ValueError as e:
            raise ConfigError(f"severity: {e}") from None

        if _number(self.cache.max_entries, "cache.max_entries") < 0:
            raise ConfigError("cache.max_entries must be >= 0")

    @property
    def default_level(self) -> FilterLevel:
        return FilterLevel.parse(self.filter.default_level)

    def to_sync_options(self) -> SyncOptions:
        return SyncOptions(
            offset_ms=int(self.timing.offset_ms),
            speed_ratio=float(self.timing.speed_ratio),
            validate_timings=bool(self.timing.validate_timings),
            repair_malformed=bool(self.timing.repair_malformed),
        )

    def to_thresholds(self) -> SeverityThresholds:
        return SeverityThresholds(
            low_max_entries=int(self.severity.low_max_entries),
            medium_max_entries=int(self.severity.medium_max_entries),
        )

    def setup_logging(self, force: bool = False) -> "logging.Logger":
        """Configure logging based on settings."""
        return setup_logging(
            level=self.logging.level,
            log_file=self.logging.log_file or None,
            console=self.logging.console,
            force=force,
        )

    def save(self, config_path: Path) -> None:
        """Save configuration to YAML file."""
        data = asdict(self)
        logger.info(f"Saving configuration to {config_path}")

        with open(config_path, 'w', encoding='utf-8') as f:
            yaml.dump(data, f, default_flow_style=False)
