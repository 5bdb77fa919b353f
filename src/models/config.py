"""Model with step library configuration."""

from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PositiveFloat,
    PositiveInt,
    model_validator,
)
from typing_extensions import Self

import constants


class TransportConfiguration(BaseModel):
    """Settings handed to the HTTP transport."""

    model_config = ConfigDict(extra="forbid")

    timeout: Optional[PositiveFloat] = None
    allow_redirects: bool = True


class ScenarioConfiguration(BaseModel):
    """Settings applied to every scenario's request context."""

    model_config = ConfigDict(extra="forbid")

    base_uri: str = ""
    default_headers: dict[str, str] = Field(default_factory=dict)
    max_substitutions: PositiveInt = constants.DEFAULT_MAX_SUBSTITUTIONS
    strict_json_path_absence: bool = False

    @model_validator(mode="after")
    def check_scenario_configuration(self) -> Self:
        """Check scenario configuration."""
        for name in self.default_headers:
            if not name.strip():
                raise ValueError("Default header names must not be empty")
        return self


class Configuration(BaseModel):
    """Global step library configuration."""

    model_config = ConfigDict(extra="forbid")

    name: str = constants.DEFAULT_CONFIGURATION_NAME
    transport: TransportConfiguration = Field(default_factory=TransportConfiguration)
    scenario: ScenarioConfiguration = Field(default_factory=ScenarioConfiguration)

    def dump(self, filename: str = "configuration.json") -> None:
        """Dump actual configuration into JSON file."""
        with open(filename, "w", encoding="utf-8") as fout:
            fout.write(self.model_dump_json(indent=4))
