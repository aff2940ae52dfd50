from typing import Any, Dict, Optional

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error envelope, used for OpenAPI documentation."""

    success: bool = False
    message: str
    error: Optional[Dict[str, Any]] = None
    timestamp: str
