"""Constants used across the REST API step library."""

from enum import StrEnum

# Logging
REST_API_STEPS_LOG_LEVEL_ENV_VAR = "REST_API_STEPS_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

# Configuration lookup for the behave hooks
REST_API_STEPS_CONFIG_ENV_VAR = "REST_API_STEPS_CONFIG"
REST_API_STEPS_BASE_URI_ENV_VAR = "REST_API_STEPS_BASE_URI"
USERDATA_CONFIG_KEY = "config"
USERDATA_BASE_URI_KEY = "base_uri"
DEFAULT_CONFIGURATION_NAME = "rest-api-steps"

# Dynamic parameters look like `$alias` (backtick, dollar, name, backtick)
DYNAMIC_PARAMETER_PATTERN = r"`\$(.*?)`"
DEFAULT_MAX_SUBSTITUTIONS = 100

# Multi-valued headers are flattened with this separator
HEADER_VALUE_SEPARATOR = ", "

# Length passed to the array check when the size must not be verified
NO_SIZE_CHECK = -1


class ScopeKind(StrEnum):
    """Kinds of values kept in the scenario scope."""

    HEADER = "header"
    JSON_PATH = "jsonPath"
