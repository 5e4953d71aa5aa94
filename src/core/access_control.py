"""Access control layer.

Turns a bearer token into an ``Identity`` and gates operations by role or
by resource ownership. Every route goes through these helpers; there is no
other authorization path.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from core.exceptions import ForbiddenError, UnauthenticatedError
from core.security import decode_access_token

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    """The authenticated caller, resolved per request."""

    id: str
    role: str


class AccessControl:
    """Authenticates tokens against the user directory.

    No caching: a deleted user or a changed role takes effect on the next
    request.
    """

    def __init__(self, user_manager):
        self.user_manager = user_manager

    def authenticate(self, token: Optional[str]) -> Identity:
        """Resolve a bearer token into an identity.

        Args:
            token: Raw token string, or None when the header was missing.

        Returns:
            Identity with the id and the role currently stored for the user.

        Raises:
            UnauthenticatedError: If the token is absent or invalid, or the
                user no longer exists.
        """
        if not token:
            raise UnauthenticatedError("Non autorisé - Token manquant")
        payload = decode_access_token(token)
        user = self.user_manager.get_user_by_id(str(payload["id"]))
        if user is None:
            raise UnauthenticatedError("Non autorisé - Utilisateur non trouvé")
        return Identity(id=user.user_id, role=user.role)


def require_role(identity: Identity, allowed: Iterable[str]) -> None:
    """Raise ForbiddenError unless the identity has one of the allowed roles."""
    allowed = set(allowed)
    if identity.role not in allowed:
        logger.warning(
            "Denied user %s (role %s): requires one of %s",
            identity.id,
            identity.role,
            sorted(allowed),
        )
        raise ForbiddenError("Non autorisé - Rôle insuffisant")


def require_owner_or_role(
    identity: Identity, owner_id, allowed: Iterable[str]
) -> None:
    """Raise ForbiddenError unless the identity owns the resource or has a role."""
    if identity.role in set(allowed):
        return
    if owner_id is not None and str(identity.id) == str(owner_id):
        return
    logger.warning("Denied user %s access to a resource owned by %s", identity.id, owner_id)
    raise ForbiddenError("Non autorisé")
