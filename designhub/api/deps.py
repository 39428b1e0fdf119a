"""FastAPI dependency injection functions for authentication and database access."""

import logging
from typing import Callable, Generator, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from designhub.core.security import decode_token
from designhub.crud import crud_user
from designhub.database import SessionLocal
from designhub.models.user import User

logger = logging.getLogger(__name__)

# OAuth2 Bearer token scheme
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login")
oauth2_scheme_optional = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login", auto_error=False)


def get_db() -> Generator[Session, None, None]:
    """
    Dependency to get database session.

    Yields:
        Session: SQLAlchemy database session
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _user_from_token(db: Session, token: str) -> Optional[User]:
    payload = decode_token(token)
    subject = payload.get("sub")
    if subject is None:
        return None
    try:
        user_id = int(subject)
    except (TypeError, ValueError):
        return None
    return crud_user.get(db, user_id)


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db)
) -> User:
    """
    Dependency to get current authenticated user from JWT token.

    Raises:
        HTTPException: 401 if token is invalid or user not found
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authorized to access this route",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        user = _user_from_token(db, token)
    except HTTPException:
        logger.warning("[AUTH] Token decode failed")
        raise credentials_exception

    if user is None:
        logger.warning("[AUTH] No user found for token subject")
        raise credentials_exception

    logger.debug(f"[AUTH] User authenticated: id={user.id}, role={user.role}")
    return user


def get_current_active_user(
    current_user: User = Depends(get_current_user)
) -> User:
    """
    Dependency to verify current user is active.

    Raises:
        HTTPException: 401 if the account is deactivated
    """
    if not current_user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User account is deactivated"
        )
    return current_user


def get_optional_current_user(
    token: Optional[str] = Depends(oauth2_scheme_optional),
    db: Session = Depends(get_db)
) -> Optional[User]:
    """
    Dependency to optionally get current authenticated user.
    Returns None if no valid token provided.

    Used by public endpoints that personalise their output (e.g. `is_liked`).
    """
    if not token:
        return None

    try:
        user = _user_from_token(db, token)
    except HTTPException:
        logger.info("[AUTH] Invalid token in optional auth, continuing anonymously")
        return None

    if user is None or not user.is_active:
        return None

    return user


def require_role(*allowed_roles: str) -> Callable:
    """
    Factory function to create role-based access control dependency.

    Example:
        @router.put("/{post_id}/pin")
        def pin_post(current_user: User = Depends(require_role("moderator", "admin"))):
            ...
    """
    def role_checker(
        current_user: User = Depends(get_current_active_user)
    ) -> User:
        if current_user.role not in allowed_roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"User role {current_user.role} is not authorized to access this route"
            )
        return current_user

    return role_checker


__all__ = [
    "oauth2_scheme",
    "oauth2_scheme_optional",
    "get_db",
    "get_current_user",
    "get_current_active_user",
    "get_optional_current_user",
    "require_role",
]
