"""
Test helper functions and factory methods for the NeverBounce client.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Union
from urllib.parse import parse_qs

import httpx


@dataclass
class MockCredentials:
    """API credentials used across tests."""
    username: str = "test-user"
    api_key: str = "test-key"


class PayloadFactory:
    """Factory for NeverBounce response bodies."""

    @staticmethod
    def token(access_token: str = "tok123", expires_in: int = 3600,
              token_type: str = "bearer", scope: str = "default") -> Dict[str, Any]:
        """Body of a successful access_token response."""
        return {
            "access_token": access_token,
            "expires_in": expires_in,
            "token_type": token_type,
            "scope": scope
        }

    @staticmethod
    def single_check(result: int = 0, result_details: int = 0,
                     execution_time: float = 0.29) -> Dict[str, Any]:
        """Body of a successful single-check response."""
        return {
            "success": True,
            "result": result,
            "result_details": result_details,
            "execution_time": execution_time
        }

    @staticmethod
    def single_check_failure(error_msg: str = "bad token", error_code: int = 1) -> Dict[str, Any]:
        """Body of a single-check response where the service reports failure."""
        return {
            "success": False,
            "error_code": error_code,
            "error_msg": error_msg
        }


def json_response(payload: Any, status_code: int = 200) -> httpx.Response:
    """Build a JSON response for a mock transport."""
    return httpx.Response(status_code=status_code, content=json.dumps(payload))


def form_fields(request: httpx.Request) -> Dict[str, str]:
    """Decode the form-encoded body of a captured request."""
    return {key: values[-1] for key, values in parse_qs(request.content.decode()).items()}


ResponseSpec = Union[httpx.Response, Exception, Callable[[httpx.Request], httpx.Response]]


@dataclass
class RecordingHandler:
    """httpx.MockTransport handler that replays queued responses per path.

    Each queued item is a response, an exception to raise, or a callable
    taking the request. Every request is recorded, including ones that raise.
    """
    routes: Dict[str, List[ResponseSpec]] = field(default_factory=dict)
    requests: List[httpx.Request] = field(default_factory=list)

    def add(self, path: str, *responses: ResponseSpec) -> "RecordingHandler":
        self.routes.setdefault(path, []).extend(responses)
        return self

    def requests_to(self, path: str) -> List[httpx.Request]:
        return [request for request in self.requests if request.url.path.endswith(path)]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        queued: Optional[List[ResponseSpec]] = None
        for path, responses in self.routes.items():
            if request.url.path.endswith(path):
                queued = responses
                break

        if not queued:
            return httpx.Response(status_code=404, content=b"no mock response queued")

        spec = queued.pop(0) if len(queued) > 1 else queued[0]
        if isinstance(spec, Exception):
            raise spec
        if isinstance(spec, httpx.Response):
            # Fresh copy so the last queued response can be replayed
            return httpx.Response(spec.status_code, headers=spec.headers, content=spec.content)
        return spec(request)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    def http_client(self) -> httpx.Client:
        return httpx.Client(transport=self.transport())


# Global instances for easy access
payload_factory = PayloadFactory()
mock_credentials = MockCredentials()
