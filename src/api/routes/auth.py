"""Authentication routes.

This module handles HTTP endpoints for user registration and login.
"""

import logging

from fastapi import APIRouter, status

from api.responses import ok
from core.dependencies import CurrentIdentity, UserManagerDep
from core.security import issue_token_for
from schemas.user import LoginRequest, RegisterRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/register", status_code=status.HTTP_201_CREATED, summary="Inscription")
def register(
    req: RegisterRequest,
    user_manager: UserManagerDep,
) -> dict:
    """Register a new user with the default ``user`` role.

    Args:
        req: Registration request with email, pseudo and password.
        user_manager: Injected UserManager instance.

    Returns:
        Envelope with the public user and an access token.

    Raises:
        ValidationError: If a field is invalid (400).
        UserAlreadyExistsError: If the email is taken (409).
    """
    user = user_manager.create_user(
        email=req.email,
        pseudo=req.pseudo,
        password=req.password,
    )
    return ok(user.to_public(), token=issue_token_for(user))


@router.post("/login", summary="Connexion")
def login(
    req: LoginRequest,
    user_manager: UserManagerDep,
) -> dict:
    """Login with email and password.

    Args:
        req: Login request with email and password.
        user_manager: Injected UserManager instance.

    Returns:
        Envelope with the public user and an access token.

    Raises:
        UnauthenticatedError: If the credentials do not match (401).
    """
    user, token = user_manager.authenticate(req.email, req.password)
    return ok(user.to_public(), token=token)


@router.post("/logout", summary="Déconnexion")
def logout() -> dict:
    """Logout endpoint.

    Note: Since we're using stateless JWT tokens, logout is handled
    client-side by removing the token. This endpoint exists for API
    consistency.
    """
    return ok(message="Déconnexion réussie")


@router.get("/me", summary="Utilisateur connecté")
def get_current_user_info(
    identity: CurrentIdentity,
    user_manager: UserManagerDep,
) -> dict:
    return ok(user_manager.get_user(identity.id).to_public())
