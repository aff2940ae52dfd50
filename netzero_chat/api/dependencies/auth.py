"""
Authentication dependencies for FastAPI endpoints.
Optional identity resolution for chat routes, plus required-token and
role checks for routes that need them.
"""
import logging
from typing import Any, Callable, Dict, Optional

from authlib.jose import JoseError, JsonWebToken
from fastapi import Depends, Header, Request
from pydantic import ValidationError

from netzero_chat.api.exceptions import (
    AuthRequiredException,
    InsufficientPrivilegesException,
    InvalidTokenException,
    NotAuthenticatedException,
)
from netzero_chat.api.models.chat import Identity
from netzero_chat.config.settings import get_settings

logger = logging.getLogger(__name__)

# Tokens are issued by the NetZero auth service with a shared HS256 secret
jwt = JsonWebToken(["HS256"])

BEARER_PREFIX = "Bearer "


# ============================================================================
# JWT Decoding & Validation
# ============================================================================


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Return the token of a ``Bearer <token>`` header value, if any."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX):].strip()
    return token or None


def decode_jwt_local(token: str) -> Optional[Dict[str, Any]]:
    """
    Decode and validate a JWT against the shared secret.

    Returns claims if valid, None if malformed, badly signed or expired.
    """
    settings = get_settings()

    if not token or not settings.jwt_secret:
        return None

    try:
        claims = jwt.decode(token, settings.jwt_secret)
        claims.validate()
        return dict(claims)
    except JoseError as e:
        logger.info(f"Chat Server - Optional auth - invalid token: {e}")
        return None
    except (ValueError, TypeError) as e:
        logger.warning(f"Unexpected error decoding JWT: {e}")
        return None


def _claim_text(claims: Dict[str, Any], *names: str) -> Optional[str]:
    for name in names:
        value = claims.get(name)
        if value is not None:
            return str(value)
    return None


def identity_from_claims(claims: Dict[str, Any]) -> Identity:
    """
    Map token claims to an Identity; ``userId`` wins over ``sub``.

    Claims are copied as text whatever JSON type the issuer used.
    """
    return Identity(
        user_id=_claim_text(claims, "userId", "sub"),
        email=_claim_text(claims, "email"),
        role=_claim_text(claims, "role"),
    )


def resolve_identity(authorization: Optional[str]) -> Optional[Identity]:
    """
    Resolve the caller's identity from an Authorization header value.

    Never raises: a missing or invalid token simply yields None.
    """
    token = extract_bearer_token(authorization)
    if token is None:
        return None

    claims = decode_jwt_local(token)
    if claims is None:
        return None

    try:
        return identity_from_claims(claims)
    except ValidationError as e:
        logger.info(f"Chat Server - Optional auth - unusable claims: {e}")
        return None


def resolve_request_identity(request: Request) -> Optional[Identity]:
    """
    Resolve the identity of ``request`` once and keep it on ``request.state``.

    The logging middleware and ``optional_auth`` share the result, so a token
    is verified a single time per request.
    """
    if hasattr(request.state, "identity"):
        return request.state.identity

    identity = resolve_identity(request.headers.get("authorization"))
    request.state.identity = identity
    return identity


# ============================================================================
# Dependencies
# ============================================================================


async def optional_auth(request: Request) -> Optional[Identity]:
    """Attach identity when a valid token is present; never reject."""
    return resolve_request_identity(request)


async def authenticate_token(
    authorization: Optional[str] = Header(default=None),
) -> Identity:
    """Require a valid bearer token."""
    token = extract_bearer_token(authorization)
    if token is None:
        raise AuthRequiredException()

    claims = decode_jwt_local(token)
    if claims is None:
        raise InvalidTokenException()

    return identity_from_claims(claims)


def authorize_roles(*allowed_roles: str) -> Callable:
    """Build a dependency that admits only identities holding one of ``allowed_roles``."""

    async def check_role(
        identity: Optional[Identity] = Depends(optional_auth),
    ) -> Identity:
        if identity is None:
            raise NotAuthenticatedException()
        if identity.role not in allowed_roles:
            raise InsufficientPrivilegesException()
        return identity

    return check_role
