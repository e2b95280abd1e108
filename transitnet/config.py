"""Centralized configuration using Pydantic Settings.

This module provides a single source of truth for the tunable values
of the analyzer: where the network files live, the routing cost model
and logging.

Configuration can be overridden via environment variables:
- TNA_GRAPH_DATA_DIR=/path/to/data
- TNA_GRAPH_DEFAULT_WALKING_DISTANCE=250
- TNA_ROUTING_TRANSFER_PENALTY_SECONDS=600
- TNA_LOG_LEVEL=DEBUG
- etc.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, TypeVar

from pydantic import Field, ValidationError, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .domain.errors import ConfigurationError
from .domain.models import MAX_TRANSPORT_SPEED_MPS, TransportType


class GraphConfig(BaseSettings):
    """Network data configuration.

    Environment variables prefixed with TNA_GRAPH_.
    """

    model_config = SettingsConfigDict(env_prefix="TNA_GRAPH_")

    data_dir: Path = Field(
        default_factory=lambda: Path(__file__).resolve().parent.parent / "data"
    )
    stops_file: str = "stops.txt"
    lines_file: str = "lines.txt"
    default_walking_distance: float = Field(default=0.0, ge=0.0)

    @property
    def stops_path(self) -> Path:
        """Full path to the stops file."""
        return self.data_dir / self.stops_file

    @property
    def lines_path(self) -> Path:
        """Full path to the lines file."""
        return self.data_dir / self.lines_file


class RoutingConfig(BaseSettings):
    """Cost model of the A* search.

    Environment variables prefixed with TNA_ROUTING_.
    """

    model_config = SettingsConfigDict(env_prefix="TNA_ROUTING_")

    transfer_penalty_seconds: int = Field(default=600, ge=0)
    walking_speed_mps: float = Field(default=TransportType.WALKING.speed_mps, gt=0.0)
    max_transport_speed_mps: float = Field(default=MAX_TRANSPORT_SPEED_MPS, gt=0.0)

    @model_validator(mode="after")
    def check_heuristic_is_admissible(self) -> RoutingConfig:
        # The heuristic divides by this speed; nothing may travel faster.
        fastest = max(MAX_TRANSPORT_SPEED_MPS, self.walking_speed_mps)
        if self.max_transport_speed_mps < fastest:
            raise ValueError(
                f"max_transport_speed_mps must be at least {fastest:.2f}, "
                f"got {self.max_transport_speed_mps}"
            )
        return self


class ObservabilityConfig(BaseSettings):
    """Logging and observability configuration.

    Environment variables prefixed with TNA_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="TNA_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = False  # Set True for JSON logging


class AppConfig(BaseSettings):
    """Main application configuration aggregating all sub-configs.

        config = get_config()
        print(config.graph.stops_path)
        print(config.routing.transfer_penalty_seconds)

    Environment variables prefixed with TNA_.
    """

    model_config = SettingsConfigDict(env_prefix="TNA_")

    graph: GraphConfig = Field(default_factory=GraphConfig)
    routing: RoutingConfig = Field(default_factory=RoutingConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


SettingsT = TypeVar("SettingsT", bound=BaseSettings)


def load_settings(settings_cls: type[SettingsT], **values: Any) -> SettingsT:
    """Build a settings object, reporting invalid values as ConfigurationError.

    Raises:
        ConfigurationError: If a value from the arguments or the
            environment fails validation.
    """
    try:
        return settings_cls(**values)
    except ValidationError as e:
        errors = e.errors()
        first = errors[0] if errors else {}
        setting = ".".join(str(part) for part in first.get("loc", ()))
        raise ConfigurationError(
            f"Invalid configuration for {setting or settings_cls.__name__}",
            cause=e,
            setting_name=setting or settings_cls.__name__,
            expected_type=first.get("type"),
        ) from e


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton application configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.

    Raises:
        ConfigurationError: If an environment override is invalid.
    """
    return load_settings(AppConfig)


def reset_config() -> None:
    """Reset the configuration cache."""
    get_config.cache_clear()
