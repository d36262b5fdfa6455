"""
Shared error handling for the NeverBounce client.
"""

from typing import Dict, Any, List, Optional
from pydantic import BaseModel

# Raw response bodies are kept for diagnostics, capped at this many characters.
BODY_SNIPPET_LIMIT = 512


def body_snippet(body: Optional[str]) -> Optional[str]:
    """Trim a raw response body for inclusion in error details."""
    if body is None:
        return None
    if len(body) > BODY_SNIPPET_LIMIT:
        return body[:BODY_SNIPPET_LIMIT] + "..."
    return body


class ErrorResponse(BaseModel):
    """Standard error response format."""

    code: str
    message: str
    details: Dict[str, Any] = {}


class NeverBounceError(Exception):
    """Base exception for the NeverBounce client."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            code=self.code,
            message=self.message,
            details=self.details
        )


class ConfigurationError(NeverBounceError):
    """Missing or unusable client configuration."""

    def __init__(self, message: str = "Missing credentials", missing: Optional[List[str]] = None,
                 invalid: Optional[List[str]] = None, error: Optional[str] = None):
        self.missing = list(missing or [])
        self.invalid = list(invalid or [])
        details: Dict[str, Any] = {"missing": self.missing}
        if self.invalid:
            details["invalid"] = self.invalid
        if error:
            details["error"] = error
        super().__init__("CONFIGURATION_ERROR", message, details)


class TransportError(NeverBounceError):
    """The service could not be reached."""

    def __init__(self, endpoint: str, error: str, message: str = "Unable to reach NeverBounce"):
        self.endpoint = endpoint
        self.error = error
        super().__init__(
            "TRANSPORT_ERROR",
            f"{message}: {error}",
            {"endpoint": endpoint, "error": error}
        )


class AuthenticationError(NeverBounceError):
    """The token endpoint rejected the credentials."""

    def __init__(self, status_code: int, body: Optional[str] = None,
                 message: str = "Authentication request rejected"):
        self.status_code = status_code
        self.body = body
        super().__init__(
            "AUTHENTICATION_ERROR",
            f"{message} (HTTP {status_code})",
            {"status_code": status_code, "body": body_snippet(body)}
        )


class AuthorizationError(NeverBounceError):
    """An API call was attempted without an access token."""

    def __init__(self, message: str = "Must authenticate first"):
        super().__init__("AUTHORIZATION_ERROR", message)


class ProtocolError(NeverBounceError):
    """The service answered with a missing or undecodable body."""

    def __init__(self, message: str, endpoint: str, status_code: Optional[int] = None,
                 body: Optional[str] = None, error: Optional[str] = None):
        self.endpoint = endpoint
        self.status_code = status_code
        self.body = body
        details: Dict[str, Any] = {"endpoint": endpoint, "status_code": status_code}
        if body:
            details["body"] = body_snippet(body)
        if error:
            details["error"] = error
        super().__init__("PROTOCOL_ERROR", message, details)


class ValidationServiceError(NeverBounceError):
    """The validation service reported that the check itself failed."""

    def __init__(self, error_msg: Optional[str], error_code: Optional[int] = None):
        self.error_msg = error_msg
        self.error_code = error_code
        super().__init__(
            "VALIDATION_SERVICE_ERROR",
            f"Unable to check email validity: {error_msg or 'no reason given'}",
            {"error_msg": error_msg, "error_code": error_code}
        )
