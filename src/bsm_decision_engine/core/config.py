"""
Configuration management for the decision engine.

Loads and validates configuration from YAML files using Pydantic.
"""

from pathlib import Path
from typing import Any, Literal, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, ConfigDict

from bsm_decision_engine.core.exceptions import ConfigurationError


class EngineConfig(BaseModel):
    """
    Decision engine parameters.

    Instances are immutable; the engine swaps in a validated copy on update
    and applies it from the next processed bar.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False, extra="forbid")

    risk_free_rate: float = Field(
        default=0.02, description="Annual risk-free rate used for option pricing"
    )
    max_position_size: float = Field(
        default=0.1, description="Max position notional as fraction of equity", ge=0
    )
    stop_loss_pct: float = Field(
        default=0.05, description="Stop-loss threshold (0.05 = 5%)", ge=0
    )
    take_profit_pct: float = Field(
        default=0.15, description="Take-profit threshold (0.15 = 15%)", ge=0
    )
    lookback_period: int = Field(
        default=252, description="Max bars retained for statistics", gt=0
    )
    monte_carlo_simulations: int = Field(
        default=1000, description="Simulated paths per bar", gt=0
    )
    random_seed: Optional[int] = Field(
        default=None, description="Seed for the path simulator (None = OS entropy)", ge=0
    )

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid engine configuration: {e}") from e

    @classmethod
    def create(cls, **values: Any) -> "EngineConfig":
        """
        Build a validated config, raising ConfigurationError on bad input.

        Args:
            **values: Field overrides

        Returns:
            Validated EngineConfig

        Raises:
            ConfigurationError: If any value is invalid
        """
        return cls(**values)

    def with_updates(self, **changes: Any) -> "EngineConfig":
        """Return a validated copy with ``changes`` applied."""
        data = self.model_dump()
        data.update(changes)
        return type(self).create(**data)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    level: str = Field(default="INFO", description="Root logging level")
    format: Literal["json", "text"] = Field(default="json", description="Console format")
    log_dir: Path = Field(default=Path("logs"), description="Directory for JSON log files")
    console_output: bool = Field(default=True, description="Log to stdout")
    file_output: bool = Field(default=False, description="Also write a JSON log file")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Normalize to an upper-case stdlib level name."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown logging level: {v}")
        return level

    @field_validator("format", mode="before")
    @classmethod
    def lower_format(cls, v: Any) -> Any:
        return v.lower() if isinstance(v, str) else v


class Config(BaseModel):
    """
    Top-level configuration file.

    ``engine`` holds the decision parameters, ``logging`` the handler setup.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    engine: EngineConfig = Field(default_factory=EngineConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_yaml(cls, path: Path) -> "Config":
        """
        Load configuration from YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            Validated Config instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ConfigurationError: If config is invalid
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration in {path}: {e}") from e

    def to_yaml(self, path: Path) -> None:
        """Write the configuration as YAML, creating parent directories."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        # json mode turns Path into str
        with open(path, "w") as f:
            yaml.safe_dump(self.model_dump(mode="json"), f, default_flow_style=False, sort_keys=False)


DEFAULT_CONFIG_PATH = Path("config/default.yaml")


def load_config(config_path: Optional[Path] = None) -> Config:
    """
    Load configuration from file or use defaults.

    Args:
        config_path: Optional path to config file. If None, uses
            config/default.yaml when present.

    Returns:
        Validated Config instance
    """
    if config_path is not None:
        return Config.from_yaml(Path(config_path))

    if DEFAULT_CONFIG_PATH.exists():
        return Config.from_yaml(DEFAULT_CONFIG_PATH)
    return Config()
