"""
Response envelope formatting.

Every JSON body leaving the service goes through ``format_payload`` so that
clients always see ``{success, message, data, error, timestamp}``.
"""
from typing import Any, Dict, Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from netzero_chat.api.models.envelope import ApiResult
from netzero_chat.utils.request_utils import utc_timestamp


def _encode(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    return jsonable_encoder(value)


def build_envelope(
    status_code: int,
    message: Optional[str] = None,
    data: Any = None,
    error: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Wrap a payload in the standard envelope.

    ``data`` is dropped whenever ``error`` is set; absent keys are omitted.
    """
    success = status_code < 400
    envelope: Dict[str, Any] = {
        "success": success,
        "message": message or ("Request successful" if success else "Request failed"),
    }
    if error is None and data is not None:
        envelope["data"] = _encode(data)
    if error is not None:
        envelope["error"] = _encode(error)
    envelope["timestamp"] = utc_timestamp()
    return envelope


def format_payload(
    payload: Any,
    status_code: int,
    message: Optional[str] = None,
    error: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Pass already-enveloped payloads through; wrap anything else."""
    if isinstance(payload, dict) and "success" in payload:
        return payload
    return build_envelope(status_code, message=message, data=payload, error=error)


def envelope_response(result: ApiResult) -> JSONResponse:
    """Render a controller result as a JSON response."""
    return JSONResponse(
        status_code=result.status_code,
        content=format_payload(
            result.data,
            result.status_code,
            message=result.message,
            error=result.error,
        ),
    )


def error_response(
    status_code: int,
    message: str,
    error: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    """Shortcut for failed envelopes raised outside the controllers."""
    return JSONResponse(
        status_code=status_code,
        content=build_envelope(status_code, message=message, error=error),
        headers=headers,
    )
