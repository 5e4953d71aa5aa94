"""User management routes.

Self-service profile endpoints live under ``/me``; the others are gated by
role through ``require_roles`` / ``require_owner_or_role``.
"""

from fastapi import APIRouter, Depends, Query

from api.responses import ok
from config import ROLE_ADMIN, ROLE_EMPLOYEE
from core.access_control import Identity, require_owner_or_role
from core.dependencies import CurrentIdentity, UserManagerDep, require_roles
from schemas.user import UpdateRoleRequest, UpdateUserRequest

router = APIRouter(prefix="/api/users", tags=["Users"])

STAFF_ROLES = (ROLE_EMPLOYEE, ROLE_ADMIN)


@router.get("", summary="Liste des utilisateurs")
def list_users(
    user_manager: UserManagerDep,
    _admin: Identity = Depends(require_roles(ROLE_ADMIN)),
) -> dict:
    return ok([user.to_public() for user in user_manager.list_users()])


@router.get("/search", summary="Rechercher des utilisateurs")
def search_users(
    user_manager: UserManagerDep,
    q: str = Query(default="", description="Partie de l'email ou du pseudo"),
    _staff: Identity = Depends(require_roles(*STAFF_ROLES)),
) -> dict:
    """Search users by email or pseudo, ignoring case (employee, admin)."""
    return ok([user.to_public() for user in user_manager.search_users(q)])


@router.get("/me", summary="Mon profil")
def get_me(identity: CurrentIdentity, user_manager: UserManagerDep) -> dict:
    return ok(user_manager.get_user(identity.id).to_public())


@router.put("/me", summary="Modifier mon profil")
def update_me(
    req: UpdateUserRequest,
    identity: CurrentIdentity,
    user_manager: UserManagerDep,
) -> dict:
    user = user_manager.update_user(
        identity.id, email=req.email, pseudo=req.pseudo, password=req.password
    )
    return ok(user.to_public())


@router.delete("/me", summary="Supprimer mon compte")
def delete_me(identity: CurrentIdentity, user_manager: UserManagerDep) -> dict:
    user_manager.delete_user(identity.id)
    return ok(message="Utilisateur supprimé avec succès")


@router.get("/{user_id}", summary="Obtenir un utilisateur")
def get_user(
    user_id: str,
    identity: CurrentIdentity,
    user_manager: UserManagerDep,
) -> dict:
    """Get a user by id (the user themselves, employees and admins)."""
    require_owner_or_role(identity, user_id, STAFF_ROLES)
    return ok(user_manager.get_user(user_id).to_public())


@router.put("/{user_id}", summary="Modifier un utilisateur")
def update_user(
    user_id: str,
    req: UpdateUserRequest,
    identity: CurrentIdentity,
    user_manager: UserManagerDep,
) -> dict:
    """Update a user's profile (the user themselves or an admin)."""
    require_owner_or_role(identity, user_id, {ROLE_ADMIN})
    user = user_manager.update_user(
        user_id, email=req.email, pseudo=req.pseudo, password=req.password
    )
    return ok(user.to_public())


@router.put("/{user_id}/role", summary="Changer le rôle d'un utilisateur")
def update_user_role(
    user_id: str,
    req: UpdateRoleRequest,
    user_manager: UserManagerDep,
    _admin: Identity = Depends(require_roles(ROLE_ADMIN)),
) -> dict:
    return ok(user_manager.set_role(user_id, req.role).to_public())


@router.delete("/{user_id}", summary="Supprimer un utilisateur")
def delete_user(
    user_id: str,
    identity: CurrentIdentity,
    user_manager: UserManagerDep,
) -> dict:
    """Delete a user (the user themselves or an admin)."""
    require_owner_or_role(identity, user_id, {ROLE_ADMIN})
    user_manager.delete_user(user_id)
    return ok(message="Utilisateur supprimé avec succès")
