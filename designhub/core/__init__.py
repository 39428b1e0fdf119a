"""Core module exports."""

from .exceptions import DuplicateError, ValidationError
from .security import (
    create_access_token,
    create_user_token,
    decode_token,
    get_password_hash,
    get_token_subject,
    verify_password,
    ALGORITHM,
    ACCESS_TOKEN_EXPIRE_DAYS,
)

__all__ = [
    "ValidationError",
    "DuplicateError",
    "create_access_token",
    "create_user_token",
    "decode_token",
    "get_password_hash",
    "get_token_subject",
    "verify_password",
    "ALGORITHM",
    "ACCESS_TOKEN_EXPIRE_DAYS",
]
