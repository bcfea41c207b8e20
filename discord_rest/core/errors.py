"""
Error kinds produced by the request pipeline.

The set is closed: every failure inside the core maps to exactly one of these.
"""

from typing import Any


class RequestError(Exception):
    """Base error class for request pipeline failures."""

    message = "Request failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.message
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for JSON output."""
        return {"error": self.message, "kind": type(self).__name__}

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.to_dict() == other.to_dict()  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self), self.message))


class UnexpectedStatus(RequestError):
    """Response status code outside the 2xx range."""

    def __init__(self, code: int):
        super().__init__(f"Unexpected response status {code}")
        self.code = code

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["status"] = self.code
        return result


class InvalidResponse(RequestError):
    """The transport failed or the response envelope was unusable."""

    message = "Invalid response"


class HeaderEncodingFailure(RequestError):
    """Super properties could not be encoded into the request headers."""

    message = "Couldn't encode super properties for request"


class BodyEncodingFailure(RequestError):
    """The request payload could not be encoded."""

    message = "Couldn't encode request body"


class DecodingFailure(RequestError):
    """The response body did not match the expected shape."""

    def __init__(self, details: str):
        super().__init__(f"Couldn't decode response: {details}")
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["details"] = self.details
        return result


class GenericFailure(RequestError):
    """Anything else that went wrong while handling a response."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["reason"] = self.reason
        return result
