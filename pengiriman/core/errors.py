from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ServiceError(Exception):
    message: str
    status_code: int = 500

    def __str__(self) -> str:
        return self.message


@dataclass
class ValidationError(ServiceError):
    """Required field missing or malformed on a write path."""

    status_code: int = 400
    fields: list[str] = field(default_factory=list)


@dataclass
class NotFoundError(ServiceError):
    status_code: int = 404


@dataclass
class ConflictError(ServiceError):
    status_code: int = 409


@dataclass
class AuthError(ServiceError):
    status_code: int = 401


@dataclass
class StoreError(ServiceError):
    """
    Query or transaction failure. The message is what the caller sees, so it
    never carries driver or SQL text; the original exception is chained.
    """

    message: str = "Something went wrong."
    status_code: int = 500


class ParseError(ValueError):
    """A single filter value could not be parsed; the predicate is dropped."""
