"""Unit tests for functions defined in src/configuration.py."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from configuration import AppConfig, LogicError
from utils.checks import InvalidConfigurationError


@pytest.fixture(name="cfg")
def cfg_fixture() -> AppConfig:
    """AppConfig singleton without any configuration loaded."""
    cfg = AppConfig()
    cfg._configuration = None  # pylint: disable=protected-access
    return cfg


def test_default_configuration(cfg: AppConfig) -> None:
    """
    Verify that accessing any configuration-related property on an uninitialized AppConfig instance raises an exception indicating the configuration is not loaded.
    """
    with pytest.raises(LogicError, match="logic error: configuration is not loaded"):
        # try to read property
        cfg.configuration  # pylint: disable=pointless-statement

    with pytest.raises(LogicError, match="logic error: configuration is not loaded"):
        # try to read property
        cfg.transport_configuration  # pylint: disable=pointless-statement

    with pytest.raises(LogicError, match="logic error: configuration is not loaded"):
        # try to read property
        cfg.scenario_configuration  # pylint: disable=pointless-statement


def test_configuration_is_singleton() -> None:
    """
    Verify that multiple instances of AppConfig refer to the same singleton configuration object.
    """
    cfg1 = AppConfig()
    cfg2 = AppConfig()
    assert cfg1 == cfg2


def test_init_from_dict(cfg: AppConfig) -> None:
    """
    Verify that initializing AppConfig from a dictionary correctly sets all configuration subsections and their attributes.
    """
    config_dict = {
        "name": "foo",
        "transport": {
            "timeout": 2.5,
            "allow_redirects": False,
        },
        "scenario": {
            "base_uri": "http://localhost:8080",
            "default_headers": {"Accept": "application/json"},
            "max_substitutions": 10,
            "strict_json_path_absence": True,
        },
    }
    cfg.init_from_dict(config_dict)

    assert cfg.configuration.name == "foo"

    # check for transport subsection
    assert cfg.transport_configuration.timeout == 2.5
    assert cfg.transport_configuration.allow_redirects is False

    # check for scenario subsection
    assert cfg.scenario_configuration.base_uri == "http://localhost:8080"
    assert cfg.scenario_configuration.default_headers == {"Accept": "application/json"}
    assert cfg.scenario_configuration.max_substitutions == 10
    assert cfg.scenario_configuration.strict_json_path_absence is True


def test_init_from_empty_dict(cfg: AppConfig) -> None:
    """Test that every option has a default."""
    cfg.init_from_dict({})

    assert cfg.configuration.name == "rest-api-steps"
    assert cfg.transport_configuration.timeout is None
    assert cfg.transport_configuration.allow_redirects is True
    assert cfg.scenario_configuration.base_uri == ""
    assert cfg.scenario_configuration.default_headers == {}
    assert cfg.scenario_configuration.max_substitutions == 100
    assert cfg.scenario_configuration.strict_json_path_absence is False


def test_init_from_dict_unknown_option(cfg: AppConfig) -> None:
    """Test that unknown options are rejected."""
    with pytest.raises(ValidationError):
        cfg.init_from_dict({"scenario": {"base_url": "http://localhost"}})


def test_load_configuration(cfg: AppConfig, tmp_path: Path) -> None:
    """Test loading configuration from a YAML file."""
    cfg_filename = tmp_path / "rest-api-steps.yaml"
    cfg_filename.write_text(
        """
name: e2e
transport:
  timeout: 10
scenario:
  base_uri: http://localhost:8080
  default_headers:
    Accept: application/json
""",
        encoding="utf-8",
    )

    cfg.load_configuration(str(cfg_filename))

    assert cfg.configuration.name == "e2e"
    assert cfg.transport_configuration.timeout == 10
    assert cfg.scenario_configuration.base_uri == "http://localhost:8080"
    assert cfg.scenario_configuration.default_headers == {"Accept": "application/json"}


def test_load_empty_configuration(cfg: AppConfig, tmp_path: Path) -> None:
    """Test that an empty file gives the default configuration."""
    cfg_filename = tmp_path / "empty.yaml"
    cfg_filename.write_text("", encoding="utf-8")

    cfg.load_configuration(str(cfg_filename))

    assert cfg.configuration.name == "rest-api-steps"


def test_load_configuration_not_a_mapping(cfg: AppConfig, tmp_path: Path) -> None:
    """Test that a YAML list is not accepted."""
    cfg_filename = tmp_path / "list.yaml"
    cfg_filename.write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(InvalidConfigurationError, match="must contain a mapping"):
        cfg.load_configuration(str(cfg_filename))


def test_load_missing_configuration(cfg: AppConfig, tmp_path: Path) -> None:
    """Test loading a file that does not exist."""
    with pytest.raises(InvalidConfigurationError, match="is not a file"):
        cfg.load_configuration(str(tmp_path / "missing.yaml"))


def test_load_shipped_configuration(cfg: AppConfig) -> None:
    """Test loading the configuration used by the E2E tests."""
    cfg.load_configuration("tests/configuration/rest-api-steps.yaml")

    assert cfg.configuration.name == "rest-api-steps e2e"
    assert cfg.transport_configuration.timeout == 10
    assert cfg.scenario_configuration.base_uri == "http://localhost:3000"
    assert cfg.scenario_configuration.strict_json_path_absence is False
