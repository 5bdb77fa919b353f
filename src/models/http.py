"""Models describing HTTP exchanges performed by the steps."""

from enum import StrEnum
from typing import Optional

from pydantic import BaseModel, Field


class HttpMethod(StrEnum):
    """HTTP methods a scenario can use."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"

    @property
    def sends_body(self) -> bool:
        """Tell whether the pending request body is sent with this method."""
        return self in (HttpMethod.POST, HttpMethod.PUT, HttpMethod.PATCH)


class ResponseEntity(BaseModel):
    """Response of the last request made in a scenario.

    Attributes:
        status_code: HTTP status code.
        headers: Header name to all of its values, in the order received.
        body: Raw body text, None when the response had no body.
    """

    status_code: int
    headers: dict[str, list[str]] = Field(default_factory=dict)
    body: Optional[str] = None

    def header_values(self, name: str) -> Optional[list[str]]:
        """Return all values of a header (case-insensitive), None when absent."""
        lowered = name.lower()
        for header_name, values in self.headers.items():
            if header_name.lower() == lowered:
                return values
        return None

    def first_header(self, name: str) -> Optional[str]:
        """Return the first value of a header, None when absent."""
        values = self.header_values(name)
        if not values:
            return None
        return values[0]
