"""
NeverBounce email-verification client.

Authenticates with the OAuth2 client-credentials grant and checks single
addresses against the v3 API. Errors are the shared.errors taxonomy, so
callers can tell "the service said no" apart from "the service could not be
reached".
"""

from shared.config import API_BASE_URL, NeverBounceSettings, get_settings
from shared.errors import (
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
    NeverBounceError,
    ProtocolError,
    TransportError,
    ValidationServiceError,
)

from .client import NeverBounceClient
from .models import AccessToken, ResultCode, SingleCheckResponse, ValidationOutcome

__version__ = "1.0.0"

__all__ = [
    "API_BASE_URL",
    "NeverBounceClient",
    "NeverBounceSettings",
    "get_settings",
    # Models
    "AccessToken",
    "ResultCode",
    "SingleCheckResponse",
    "ValidationOutcome",
    # Errors
    "NeverBounceError",
    "ConfigurationError",
    "TransportError",
    "AuthenticationError",
    "AuthorizationError",
    "ProtocolError",
    "ValidationServiceError",
]
