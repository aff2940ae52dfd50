"""
Uniform response envelope models.
"""
from typing import Any, Dict, Optional

from fastapi import status
from pydantic import BaseModel


class ResponseEnvelope(BaseModel):
    """The ``{success, message, data, error, timestamp}`` wrapper around every JSON body."""

    success: bool
    message: str
    data: Optional[Any] = None
    error: Optional[Dict[str, Any]] = None
    timestamp: str


class ApiResult(BaseModel):
    """Outcome of a controller operation, rendered into an envelope by the endpoint layer."""

    status_code: int = status.HTTP_200_OK
    message: Optional[str] = None
    data: Optional[Any] = None
    error: Optional[Dict[str, Any]] = None

    @classmethod
    def ok(cls, data: Any, message: str) -> "ApiResult":
        return cls(data=data, message=message)

    @classmethod
    def failure(
        cls,
        message: str,
        details: Optional[str] = None,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
    ) -> "ApiResult":
        return cls(
            status_code=status_code,
            error={"message": message, "details": details},
        )
