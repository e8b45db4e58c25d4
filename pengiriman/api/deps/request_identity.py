from __future__ import annotations

import logging

from fastapi import Request

from pengiriman.core.config import settings
from pengiriman.core.errors import AuthError
from pengiriman.core.security.tokens import AuthTokenValidationError, decode_access_token
from pengiriman.schemas.auth import RequestIdentity

logger = logging.getLogger(__name__)


def _normalized_auth_mode() -> str:
    raw = (settings.AUTH_MODE or "disabled").strip().lower()
    if raw in {"disabled", "jwt"}:
        return raw
    return "jwt"


def _extract_bearer_token(request: Request) -> str | None:
    header = request.headers.get("Authorization") or ""
    prefix = "Bearer "
    if not header.startswith(prefix):
        return None
    token = header[len(prefix) :].strip()
    return token or None


def _identity_from_token(token: str) -> RequestIdentity:
    try:
        claims = decode_access_token(token)
    except AuthTokenValidationError as exc:
        raise AuthError(str(exc)) from exc

    subject = str(claims.get("sub")).strip()
    user_id = int(subject) if subject.isdigit() else None
    return RequestIdentity(
        subject=subject or None,
        email=claims.get("email"),
        auth_source="jwt",
        claims=claims,
        user_id=user_id,
    )


def resolve_request_identity(request: Request) -> RequestIdentity:
    if _normalized_auth_mode() == "disabled":
        return RequestIdentity()

    token = _extract_bearer_token(request)
    if not token:
        logger.info("auth_missing_token path=%s", request.url.path)
        raise AuthError("Missing Bearer access token.")
    return _identity_from_token(token)


def require_authorized(request: Request) -> RequestIdentity:
    """Yes/no gate in front of every shipment and catalog route."""
    return resolve_request_identity(request)
