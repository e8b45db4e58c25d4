from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from pengiriman.core.security.passwords import hash_password
from pengiriman.models.users import User


class DuplicateError(Exception):
    """Raised when a unique constraint is violated (e.g., email unique)."""


def create_user(db: Session, email: str, password: str, is_active: bool = True) -> User:
    obj = User(
        email=email.strip().lower(),
        password_hash=hash_password(password),
        is_active=is_active,
    )
    db.add(obj)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise DuplicateError("User already exists (unique constraint hit).") from e
    db.refresh(obj)
    return obj


def get_user_by_email(db: Session, email: str) -> User | None:
    stmt = select(User).where(User.email == email.strip().lower())
    return db.execute(stmt).scalar_one_or_none()
