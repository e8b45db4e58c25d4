from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt

from pengiriman.core.config import settings


class AuthTokenValidationError(Exception):
    pass


def create_access_token(
    subject: str,
    *,
    email: str | None = None,
    expires_minutes: int | None = None,
) -> str:
    now = datetime.now(timezone.utc)
    minutes = expires_minutes if expires_minutes is not None else settings.JWT_EXPIRES_MINUTES
    payload = {"sub": subject, "iat": now, "exp": now + timedelta(minutes=minutes)}
    if email:
        payload["email"] = email
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise AuthTokenValidationError("Access token expired.") from exc
    except jwt.PyJWTError as exc:
        raise AuthTokenValidationError("Invalid access token.") from exc
