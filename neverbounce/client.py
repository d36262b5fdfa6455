"""
NeverBounce API client.
"""

import httpx
from typing import Any, Dict, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel, ValidationError

from shared.config import API_BASE_URL, NeverBounceSettings
from shared.errors import (
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
    ProtocolError,
    TransportError,
    ValidationServiceError,
)
from shared.logging import get_logger
from neverbounce.models import AccessToken, SingleCheckResponse, ValidationOutcome

ACCESS_TOKEN_ENDPOINT = "/access_token"
SINGLE_CHECK_ENDPOINT = "/single"

ModelT = TypeVar("ModelT", bound=BaseModel)


class NeverBounceClient:
    """Client for the NeverBounce v3 API.

    Call ``authenticate()`` once, then ``validate_email()`` or ``check_email()``
    as often as needed. The stored token is never refreshed. Instances are not
    synchronized; use one per thread or guard it externally.
    """

    def __init__(
        self,
        username: str,
        api_key: str,
        *,
        http_client: Optional[httpx.Client] = None,
        base_url: str = API_BASE_URL,
        timeout: float = 10.0,
    ):
        self._username = username
        self._api_key = api_key
        self._token: Optional[AccessToken] = None
        self.base_url = base_url.rstrip("/")
        self.logger = get_logger("neverbounce.client")

        # An injected transport belongs to the caller and is left open on close()
        self._owns_http_client = http_client is None
        self._http = http_client if http_client is not None else httpx.Client(timeout=timeout)

    @classmethod
    def from_settings(
        cls,
        settings: NeverBounceSettings,
        http_client: Optional[httpx.Client] = None,
    ) -> "NeverBounceClient":
        """Create a client from loaded settings."""
        return cls(
            settings.api_username,
            settings.api_key.get_secret_value(),
            http_client=http_client,
            base_url=settings.base_url,
            timeout=settings.timeout,
        )

    @property
    def username(self) -> str:
        return self._username

    @property
    def api_key(self) -> str:
        return self._api_key

    @property
    def token(self) -> Optional[AccessToken]:
        """Token from the last successful authentication, if any."""
        return self._token

    @property
    def is_authenticated(self) -> bool:
        return self._token is not None

    def authenticate(self) -> AccessToken:
        """Request an access token with the client-credentials grant.

        The token is stored on the client only when the whole exchange
        succeeds; any failure leaves the previous token in place.
        """
        missing = [
            name for name, value in (("username", self._username), ("api_key", self._api_key))
            if not value
        ]
        if missing:
            raise ConfigurationError("Missing API username and/or API key", missing=missing)

        response = self._post(
            ACCESS_TOKEN_ENDPOINT,
            {"grant_type": "client_credentials"},
            auth=(self._username, self._api_key),
        )

        if response.status_code != 200:
            self.logger.warning(
                "Authentication request rejected",
                status_code=response.status_code
            )
            raise AuthenticationError(response.status_code, response.text or None)

        token = self._decode(ACCESS_TOKEN_ENDPOINT, response, AccessToken)
        self._token = token

        self.logger.info(
            "Successfully authenticated",
            token_type=token.token_type,
            expires_in=token.expires_in,
            scope=token.scope
        )
        return token

    def check_email(self, email: str) -> ValidationOutcome:
        """Check a single address and return the full outcome."""
        if self._token is None:
            raise AuthorizationError(
                "Authorization missing; authenticate() must be called before making API requests"
            )

        response = self._post(
            SINGLE_CHECK_ENDPOINT,
            {"access_token": self._token.access_token, "email": email},
        )
        body = self._decode(SINGLE_CHECK_ENDPOINT, response, SingleCheckResponse)

        if not body.success:
            self.logger.warning(
                "Single check failed",
                error_code=body.error_code,
                error_msg=body.error_msg
            )
            raise ValidationServiceError(body.error_msg, body.error_code)

        if body.result is None:
            raise ProtocolError(
                "Response is missing the result code",
                SINGLE_CHECK_ENDPOINT,
                status_code=response.status_code,
                body=response.text
            )

        outcome = ValidationOutcome.from_response(email, body)
        self.logger.debug(
            "Email checked",
            email=email,
            result=outcome.result,
            valid=outcome.valid
        )
        return outcome

    def validate_email(self, email: str) -> bool:
        """Return True when the service reports the address as valid.

        Every result code other than valid, including disposable, catchall
        and unknown, is reported as False. Use ``check_email()`` for the code.
        """
        return self.check_email(email).valid

    def close(self) -> None:
        if self._owns_http_client:
            self._http.close()

    def __enter__(self) -> "NeverBounceClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(username={self._username!r}, "
            f"base_url={self.base_url!r}, authenticated={self.is_authenticated})"
        )

    def _post(
        self,
        endpoint: str,
        data: Dict[str, str],
        auth: Optional[Tuple[str, str]] = None,
    ) -> httpx.Response:
        """POST a form-encoded body, mapping transport failures to TransportError."""
        try:
            return self._http.post(f"{self.base_url}{endpoint}", data=data, auth=auth)
        except httpx.InvalidURL as e:
            raise ConfigurationError(
                f"Invalid base URL: {self.base_url!r}",
                invalid=["base_url"],
                error=str(e)
            ) from e
        except httpx.HTTPError as e:
            error = str(e) or type(e).__name__
            self.logger.error("NeverBounce HTTP error", endpoint=endpoint, error=error)
            raise TransportError(endpoint, error) from e

    def _decode(self, endpoint: str, response: httpx.Response, model: Type[ModelT]) -> ModelT:
        if not response.content.strip():
            raise ProtocolError(
                "No body received",
                endpoint,
                status_code=response.status_code
            )

        try:
            return model.model_validate_json(response.content)
        except ValidationError as e:
            raise ProtocolError(
                "Unable to decode response body",
                endpoint,
                status_code=response.status_code,
                body=response.text,
                error=str(e)
            ) from e
