from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from transitnet.config import (
    GraphConfig,
    RoutingConfig,
    get_config,
    load_settings,
    reset_config,
)
from transitnet.domain.errors import ConfigurationError
from transitnet.domain.models import MAX_TRANSPORT_SPEED_MPS, TransportType


def test_defaults():
    config = get_config()

    assert config.routing.transfer_penalty_seconds == 600
    assert config.routing.max_transport_speed_mps == MAX_TRANSPORT_SPEED_MPS
    assert config.routing.walking_speed_mps == TransportType.WALKING.speed_mps
    assert config.graph.stops_path.name == "stops.txt"
    assert config.graph.lines_path.name == "lines.txt"
    assert config.graph.default_walking_distance == 0.0
    assert config.observability.structured is False


def test_get_config_is_cached_until_reset():
    first = get_config()
    assert get_config() is first

    reset_config()
    assert get_config() is not first


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("TNA_GRAPH_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("TNA_GRAPH_DEFAULT_WALKING_DISTANCE", "250")
    monkeypatch.setenv("TNA_ROUTING_TRANSFER_PENALTY_SECONDS", "300")
    monkeypatch.setenv("TNA_LOG_STRUCTURED", "true")
    reset_config()

    config = get_config()

    assert config.graph.stops_path == Path(tmp_path) / "stops.txt"
    assert config.graph.default_walking_distance == 250
    assert config.routing.transfer_penalty_seconds == 300
    assert config.observability.structured is True


def test_heuristic_speed_must_cover_every_mode():
    with pytest.raises(ValidationError):
        RoutingConfig(max_transport_speed_mps=10.0)

    assert RoutingConfig(max_transport_speed_mps=40.0).max_transport_speed_mps == 40.0


def test_negative_values_are_rejected():
    with pytest.raises(ValidationError):
        GraphConfig(default_walking_distance=-1)
    with pytest.raises(ValidationError):
        RoutingConfig(transfer_penalty_seconds=-10)


def test_invalid_environment_raises_configuration_error(monkeypatch):
    monkeypatch.setenv("TNA_ROUTING_TRANSFER_PENALTY_SECONDS", "-5")
    reset_config()

    with pytest.raises(ConfigurationError) as excinfo:
        get_config()

    assert "transfer_penalty_seconds" in excinfo.value.setting_name
    assert isinstance(excinfo.value.cause, ValidationError)


def test_load_settings_wraps_validation_errors():
    with pytest.raises(ConfigurationError) as excinfo:
        load_settings(GraphConfig, default_walking_distance=-1)

    assert excinfo.value.setting_name == "default_walking_distance"
    assert load_settings(GraphConfig, stops_file="s.txt").stops_path.name == "s.txt"
