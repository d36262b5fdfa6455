"""
Mock NeverBounce server providing the v3 token and single-check endpoints.
"""

import secrets
from typing import Dict, Optional
from urllib.parse import parse_qs

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from shared.logging import get_logger


class MockNeverBounceServer:
    """Mock NeverBounce server implementation."""

    def __init__(
        self,
        username: str = "mock-user",
        api_key: str = "mock-key",
        results: Optional[Dict[str, int]] = None,
        default_result: int = 0,
    ):
        self.logger = get_logger("mock.neverbounce")
        self.app = FastAPI(title="Mock NeverBounce", version="1.0.0")

        self.username = username
        self.api_key = api_key
        self.default_result = default_result

        # Result code per address; anything else gets default_result
        self.results: Dict[str, int] = dict(results or {})

        # Tokens handed out by the token endpoint
        self.issued_tokens: Dict[str, Dict[str, object]] = {}

        self._basic = HTTPBasic(auto_error=False)
        self._setup_routes()

    def _setup_routes(self):
        """Set up mock NeverBounce routes."""

        @self.app.get("/")
        async def root():
            """Root endpoint."""
            return {
                "service": "mock-neverbounce",
                "message": "Mock NeverBounce v3 API",
                "version": "1.0.0"
            }

        @self.app.post("/v3/access_token")
        async def access_token(request: Request):
            """OAuth2 client-credentials token endpoint."""
            credentials = await self._basic(request)
            form = await self._read_form(request)

            if not self._credentials_match(credentials):
                self.logger.warning("Rejected token request")
                return JSONResponse(
                    status_code=401,
                    content={"error": "invalid_client", "error_description": "Client authentication failed"}
                )

            if form.get("grant_type") != "client_credentials":
                return JSONResponse(
                    status_code=400,
                    content={"error": "unsupported_grant_type", "error_description": "Unsupported grant type"}
                )

            return self._issue_token()

        @self.app.post("/v3/single")
        async def single(request: Request):
            """Single email check endpoint."""
            form = await self._read_form(request)
            token = form.get("access_token")

            if not token or token not in self.issued_tokens:
                return {
                    "success": False,
                    "error_code": 1,
                    "error_msg": "Authentication failed"
                }

            email = form.get("email")
            if not email:
                return {
                    "success": False,
                    "error_code": 2,
                    "error_msg": "Missing required parameter 'email'"
                }

            return {
                "success": True,
                "result": self.results.get(email, self.default_result),
                "result_details": 0,
                "execution_time": 0.05
            }

    @staticmethod
    async def _read_form(request: Request) -> Dict[str, str]:
        body = (await request.body()).decode()
        return {key: values[-1] for key, values in parse_qs(body).items()}

    def _credentials_match(self, credentials: Optional[HTTPBasicCredentials]) -> bool:
        if credentials is None:
            return False
        return (
            secrets.compare_digest(credentials.username, self.username)
            and secrets.compare_digest(credentials.password, self.api_key)
        )

    def _issue_token(self) -> Dict[str, object]:
        """Create and remember a new access token."""
        token = {
            "access_token": secrets.token_hex(20),
            "expires_in": 3600,
            "token_type": "bearer",
            "scope": "basic user"
        }
        self.issued_tokens[token["access_token"]] = token
        self.logger.info("Issued access token", expires_in=token["expires_in"])
        return token


def create_app():
    """Create mock NeverBounce application."""
    server = MockNeverBounceServer()
    return server.app


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(create_app(), host="0.0.0.0", port=8090)
