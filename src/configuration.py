"""Configuration loader."""

from typing import Any, Optional

import yaml

from log import get_logger
from models.config import (
    Configuration,
    ScenarioConfiguration,
    TransportConfiguration,
)
from utils import checks
from utils.types import Singleton

logger = get_logger(__name__)


class LogicError(Exception):
    """Error in application logic."""


class AppConfig(metaclass=Singleton):
    """Singleton class to load and store the configuration."""

    _configuration: Optional[Configuration] = None

    def load_configuration(self, filename: str) -> None:
        """Load configuration from YAML file."""
        checks.file_check(filename, "Configuration file")
        with open(filename, encoding="utf-8") as fin:
            config_dict = yaml.safe_load(fin)
        if config_dict is None:
            config_dict = {}
        if not isinstance(config_dict, dict):
            raise checks.InvalidConfigurationError(
                f"Configuration file '{filename}' must contain a mapping"
            )
        logger.info("Loaded configuration from %s", filename)
        self.init_from_dict(config_dict)

    def init_from_dict(self, config_dict: dict[Any, Any]) -> None:
        """Initialize configuration from a dictionary."""
        self._configuration = Configuration(**config_dict)

    @property
    def configuration(self) -> Configuration:
        """Return the whole configuration."""
        if self._configuration is None:
            raise LogicError("logic error: configuration is not loaded")
        return self._configuration

    @property
    def transport_configuration(self) -> TransportConfiguration:
        """Return HTTP transport configuration."""
        return self.configuration.transport

    @property
    def scenario_configuration(self) -> ScenarioConfiguration:
        """Return per-scenario configuration."""
        return self.configuration.scenario


configuration: AppConfig = AppConfig()
