"""Dependency injection module for FastAPI.

This module provides dependency injection functions for FastAPI routes:
request-scoped managers, the clock, and the authentication/authorization
dependencies every protected route goes through.
"""

from typing import Annotated, Callable, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from core.access_control import AccessControl, Identity, require_role
from core.clock import Clock
from core.database import get_db
from utils import booking_manager
from utils import hotel_manager
from utils import user_manager

# Missing header is reported by AccessControl as a 401, not by FastAPI as a 403
security = HTTPBearer(auto_error=False)

_clock_instance: Clock = None


def get_clock() -> Clock:
    """Get the process-wide Clock; tests override this dependency.

    Returns:
        Clock instance (singleton).
    """
    global _clock_instance
    if _clock_instance is None:
        _clock_instance = Clock()
    return _clock_instance


def get_user_manager(db: Session = Depends(get_db)) -> user_manager.UserManager:
    """Get UserManager instance with request-scoped DB session.

    Args:
        db: Database session.

    Returns:
        UserManager instance.
    """
    return user_manager.UserManager(db)


def get_hotel_manager(db: Session = Depends(get_db)) -> hotel_manager.HotelManager:
    """Get HotelManager instance with request-scoped DB session."""
    return hotel_manager.HotelManager(db)


def get_booking_manager(
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> booking_manager.BookingManager:
    """Get BookingManager instance with request-scoped DB session and clock."""
    return booking_manager.BookingManager(db, clock=clock)


def get_access_control(
    users: user_manager.UserManager = Depends(get_user_manager),
) -> AccessControl:
    return AccessControl(users)


def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    access_control: AccessControl = Depends(get_access_control),
) -> Identity:
    """Authenticate the bearer token of the current request.

    Raises:
        UnauthenticatedError: If the token is missing or invalid.
    """
    token = credentials.credentials if credentials else None
    return access_control.authenticate(token)


def require_roles(*roles: str) -> Callable[..., Identity]:
    """Build a dependency admitting only the given roles.

    Example:
        ``current: Identity = Depends(require_roles("admin"))``
    """

    def dependency(identity: Identity = Depends(get_current_identity)) -> Identity:
        require_role(identity, roles)
        return identity

    return dependency


# Type aliases for dependency injection
UserManagerDep = Annotated[user_manager.UserManager, Depends(get_user_manager)]
HotelManagerDep = Annotated[hotel_manager.HotelManager, Depends(get_hotel_manager)]
BookingManagerDep = Annotated[
    booking_manager.BookingManager, Depends(get_booking_manager)
]
CurrentIdentity = Annotated[Identity, Depends(get_current_identity)]
