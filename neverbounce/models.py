"""
Data models for NeverBounce API exchanges.
"""

from enum import IntEnum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ResultCode(IntEnum):
    """Verification result codes returned by the single-check endpoint."""
    VALID = 0
    INVALID = 1
    DISPOSABLE = 2
    CATCHALL = 3
    UNKNOWN = 4

    @classmethod
    def lookup(cls, value: Optional[int]) -> Optional["ResultCode"]:
        """Map a raw code to a member, or None for codes this client does not know."""
        try:
            return cls(value)
        except ValueError:
            return None


class AccessToken(BaseModel):
    """OAuth2 client-credentials token issued by the access_token endpoint."""

    model_config = ConfigDict(frozen=True)

    access_token: str = Field(..., min_length=1, repr=False)
    expires_in: int = 0
    token_type: str = ""
    scope: str = ""


class SingleCheckResponse(BaseModel):
    """Body of the single-check endpoint."""

    success: bool
    result: Optional[int] = None
    result_details: Optional[int] = None
    execution_time: Optional[float] = None
    error_code: Optional[int] = None
    error_msg: Optional[str] = None


class ValidationOutcome(BaseModel):
    """Result of checking one address."""

    model_config = ConfigDict(frozen=True)

    email: str
    valid: bool
    result: int
    result_code: Optional[ResultCode] = None
    result_details: Optional[int] = None
    execution_time: Optional[float] = None

    @classmethod
    def from_response(cls, email: str, response: SingleCheckResponse) -> "ValidationOutcome":
        """Build an outcome from a successful single-check response."""
        return cls(
            email=email,
            valid=response.result == ResultCode.VALID,
            result=response.result,
            result_code=ResultCode.lookup(response.result),
            result_details=response.result_details,
            execution_time=response.execution_time,
        )

    @property
    def label(self) -> str:
        """Lower-case name of the result code, or the raw code when unknown."""
        if self.result_code is None:
            return str(self.result)
        return self.result_code.name.lower()
