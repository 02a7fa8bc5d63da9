"""
Configuration management using Pydantic models loaded from YAML.
"""

from pathlib import Path

import pendulum
import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

MINUTES_PER_DAY = 24 * 60


class BookingDefaults(BaseModel):
    """Default settings for availability computation."""
    slot_step_minutes: int = 30
    service_duration_minutes: int = 30
    lookahead_days: int = 30
    live_service_durations: bool = False

    @field_validator("slot_step_minutes", "service_duration_minutes")
    @classmethod
    def validate_positive(cls, value: int) -> int:
        """Ensure step and duration are positive."""
        if value <= 0:
            raise ValueError("value must be greater than zero")
        return value

    @field_validator("lookahead_days")
    @classmethod
    def validate_lookahead(cls, value: int) -> int:
        """Validate the look-ahead stays within a year."""
        if not 1 <= value <= 366:
            raise ValueError(f"lookahead_days must be between 1 and 366, got {value}")
        return value

    @model_validator(mode="after")
    def validate_within_one_day(self) -> "BookingDefaults":
        """Neither a step nor a service may be longer than a day."""
        if self.slot_step_minutes > MINUTES_PER_DAY:
            raise ValueError("slot_step_minutes must not exceed one day")
        if self.service_duration_minutes > MINUTES_PER_DAY:
            raise ValueError("service_duration_minutes must not exceed one day")
        return self


class AppConfig(BaseModel):
    """Application configuration."""
    timezone: str = "Europe/Berlin"
    booking: BookingDefaults = Field(default_factory=BookingDefaults)
    data_file: Path | None = None

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        """Ensure the shop timezone is a known IANA name."""
        try:
            pendulum.timezone(value)
        except Exception as exc:
            raise ValueError(f"Unknown timezone: {value}") from exc
        return value

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance. A relative ``data_file`` is resolved against
            the directory holding the config file.

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
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
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        config = cls(**data)
        if config.data_file is not None and not config.data_file.is_absolute():
            config.data_file = config_path.parent / config.data_file
        return config


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of barberslots/)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path
