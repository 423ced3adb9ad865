"""
Configuration management using Pydantic models loaded from YAML.
"""

from pathlib import Path
from typing import List, Literal

import pendulum
import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .adapters.json_store import JsonFileSlotStore
from .adapters.memory_store import InMemorySlotStore
from .domain.clock import DEFAULT_TIMEZONE, ClockPolicy
from .domain.exceptions import ConfigError
from .domain.models import FixedTemplate, is_valid_time

DEFAULT_FIXED_TIMES = ["07:00", "08:30", "14:00"]


class StoreConfig(BaseModel):
    """Where slot exceptions are kept."""
    backend: Literal["memory", "json"] = "json"
    path: Path = Path("schedule.json")


class AppConfig(BaseModel):
    """Application configuration."""
    timezone: str = DEFAULT_TIMEZONE
    locale: str = "pt_br"
    fixed_times: List[str] = Field(default_factory=lambda: list(DEFAULT_FIXED_TIMES))
    store: StoreConfig = Field(default_factory=StoreConfig)

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        """Ensure the zone name is known to pendulum."""
        try:
            pendulum.timezone(value)
        except (ValueError, KeyError) as exc:
            raise ValueError(f"Unknown timezone: {value}") from exc
        return value

    @field_validator("fixed_times")
    @classmethod
    def validate_fixed_times(cls, value: List[str]) -> List[str]:
        """Ensure times are HH:MM (24h) and deduplicated."""
        invalid = [item for item in value if not is_valid_time(item)]
        if invalid:
            raise ValueError(f"fixed_times must be HH:MM (24h), got {invalid}")
        # Preserve order while removing duplicates
        seen: set[str] = set()
        deduped: List[str] = []
        for item in value:
            if item not in seen:
                deduped.append(item)
                seen.add(item)
        return deduped

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ConfigError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Please create a config.yaml file. See config.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ConfigError("Config file must contain a mapping at the root level.")

        try:
            config = cls(**data)
        except ValidationError as exc:
            raise ConfigError(f"Invalid configuration in {config_path}: {exc}") from exc

        # Relative store paths are read next to the config file
        if not config.store.path.is_absolute():
            config.store.path = config_path.parent / config.store.path
        return config

    def build_template(self) -> FixedTemplate:
        return FixedTemplate.of(self.fixed_times)

    def build_clock(self) -> ClockPolicy:
        return ClockPolicy(timezone=self.timezone, locale=self.locale)

    def build_store(self) -> InMemorySlotStore:
        if self.store.backend == "memory":
            return InMemorySlotStore()
        return JsonFileSlotStore(self.store.path)


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of the package)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path


def load_config(config_path: Path | None = None) -> AppConfig:
    """
    Load the given config file, or the default one if present.

    Without an explicit path and without a default file, built-in defaults
    are used.
    """
    if config_path is not None:
        return AppConfig.load_from_yaml(config_path)

    default_path = get_default_config_path()
    if default_path.exists():
        return AppConfig.load_from_yaml(default_path)
    return AppConfig()
