from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from pengiriman.core.config import settings
from pengiriman.core.errors import AuthError
from pengiriman.core.security.passwords import verify_password
from pengiriman.core.security.tokens import create_access_token
from pengiriman.crud.users import get_user_by_email
from pengiriman.schemas.auth import LoginRequest, TokenResponse

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, db: Session):
        self.db = db

    def login(self, credentials: LoginRequest) -> TokenResponse:
        user = get_user_by_email(self.db, credentials.email)
        if (
            user is None
            or not user.is_active
            or not verify_password(credentials.password, user.password_hash)
        ):
            logger.info("login_rejected email=%s", credentials.email.strip().lower())
            raise AuthError("Invalid credentials")

        token = create_access_token(str(user.id), email=user.email)
        return TokenResponse(token=token, expires_in=settings.JWT_EXPIRES_MINUTES * 60)
