"""User management utilities.

This module provides the user directory: user storage, password hashing,
credential checks and profile updates.
"""

import logging
from datetime import datetime
from typing import List, Optional, Tuple

import bcrypt
import pytz
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from config import BCRYPT_ROUNDS, ROLE_USER
from core.exceptions import (
    UnauthenticatedError,
    UserAlreadyExistsError,
    UserNotFoundError,
    ValidationError,
)
from core.security import issue_token_for
from models.user import UserModel
from schemas.user import User
from utils.converters import model_to_user, user_to_model
from utils.validators import normalize_email, raise_if_errors, role_errors, user_errors

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72

INVALID_CREDENTIALS_MESSAGE = "Email ou mot de passe incorrect"


class UserManager:
    """Manages user data persistence and operations using SQLAlchemy."""

    def __init__(self, db: Session):
        """Initialize UserManager.

        Args:
            db: SQLAlchemy Session.
        """
        self.db = db

    def hash_password(self, password: str) -> str:
        """Hash a password using bcrypt.

        Args:
            password: Plain text password.

        Returns:
            Hashed password (bcrypt hash string).
        """
        password_bytes = password.encode("utf-8")
        if len(password_bytes) > BCRYPT_MAX_BYTES:
            logger.warning(
                "Password exceeds %d bytes (%d bytes), truncating",
                BCRYPT_MAX_BYTES,
                len(password_bytes),
            )
            password_bytes = password_bytes[:BCRYPT_MAX_BYTES]

        salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
        hashed = bcrypt.hashpw(password_bytes, salt)
        return hashed.decode("utf-8")

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a password against a bcrypt hash.

        Args:
            plain_password: Plain text password to verify.
            hashed_password: Bcrypt hash string to verify against.

        Returns:
            True if password matches, False otherwise.
        """
        password_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
        try:
            return bcrypt.checkpw(password_bytes, hashed_password.encode("utf-8"))
        except ValueError as e:
            # Stored value is not a bcrypt hash
            logger.error("Password verification error: %s", e)
            return False

    def create_user(
        self,
        email: str,
        pseudo: str,
        password: str,
        role: str = ROLE_USER,
    ) -> User:
        """Create a new user.

        Args:
            email: Email address; stored trimmed and lowercase.
            pseudo: Display name.
            password: Plain text password.
            role: User role ('user', 'employee' or 'admin').

        Returns:
            Created User object.

        Raises:
            ValidationError: If any field is invalid.
            UserAlreadyExistsError: If the email is already registered.
        """
        raise_if_errors(
            user_errors(email=email, pseudo=pseudo, password=password)
            + role_errors(role)
        )
        email = normalize_email(email)

        if self._get_model_by_email(email) is not None:
            raise UserAlreadyExistsError(email)

        user = User(
            email=email,
            pseudo=pseudo.strip(),
            password_hash=self.hash_password(password),
            role=role,
        )

        # The unique constraint still catches two concurrent registrations
        try:
            model = user_to_model(user)
            self.db.add(model)
            self.db.commit()
            self.db.refresh(model)
        except IntegrityError as e:
            self.db.rollback()
            raise UserAlreadyExistsError(email) from e

        logger.info("Created user: %s (%s)", email, role)
        return user

    def authenticate(self, email: str, password: str) -> Tuple[User, str]:
        """Check credentials and mint an access token.

        Args:
            email: Email address, any case.
            password: Plain text password.

        Returns:
            Tuple of the User and a signed access token.

        Raises:
            UnauthenticatedError: If the email is unknown or the password is
                wrong; the message does not say which.
        """
        user = self.get_user_by_email(email or "")
        if user is None or not self.verify_password(password or "", user.password_hash):
            logger.info("Failed login attempt for %s", email)
            raise UnauthenticatedError(INVALID_CREDENTIALS_MESSAGE)
        return user, issue_token_for(user)

    def _get_model(self, user_id: str) -> UserModel:
        model = self.db.query(UserModel).filter(UserModel.user_id == user_id).first()
        if model is None:
            raise UserNotFoundError(user_id)
        return model

    def _get_model_by_email(self, email: str) -> Optional[UserModel]:
        return (
            self.db.query(UserModel)
            .filter(UserModel.email == normalize_email(email))
            .first()
        )

    def get_user_by_email(self, email: str) -> Optional[User]:
        """Get a user by email, case-insensitively.

        Args:
            email: Email to look up.

        Returns:
            User object if found, None otherwise.
        """
        model = self._get_model_by_email(email)
        if model:
            return model_to_user(model)
        return None

    def get_user_by_id(self, user_id: str) -> Optional[User]:
        """Get a user by user ID.

        Args:
            user_id: User ID to look up.

        Returns:
            User object if found, None otherwise.
        """
        model = self.db.query(UserModel).filter(UserModel.user_id == user_id).first()
        if model:
            return model_to_user(model)
        return None

    def get_user(self, user_id: str) -> User:
        """Like get_user_by_id, but raises UserNotFoundError."""
        return model_to_user(self._get_model(user_id))

    def update_user(
        self,
        user_id: str,
        email: Optional[str] = None,
        pseudo: Optional[str] = None,
        password: Optional[str] = None,
    ) -> User:
        """Update profile fields; omitted fields are left unchanged.

        The password is re-hashed whenever it is supplied.

        Raises:
            UserNotFoundError: If the user does not exist.
            ValidationError: If a supplied field is invalid.
            UserAlreadyExistsError: If the new email belongs to someone else.
        """
        if password == "":
            password = None
        raise_if_errors(
            user_errors(email=email, pseudo=pseudo, password=password, partial=True)
        )
        model = self._get_model(user_id)

        if email is not None:
            email = normalize_email(email)
            existing = self._get_model_by_email(email)
            if existing is not None and existing.user_id != user_id:
                raise UserAlreadyExistsError(email)
            model.email = email
        if pseudo is not None:
            model.pseudo = pseudo.strip()
        if password is not None:
            model.password_hash = self.hash_password(password)
        model.updated_at = datetime.now(pytz.utc).isoformat()

        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise UserAlreadyExistsError(email) from e
        self.db.refresh(model)
        logger.info("Updated user: %s", user_id)
        return model_to_user(model)

    def set_role(self, user_id: str, role: str) -> User:
        """Change a user's role.

        Raises:
            ValidationError: If the role is unknown.
            UserNotFoundError: If the user does not exist.
        """
        raise_if_errors(role_errors(role))
        model = self._get_model(user_id)
        model.role = role
        model.updated_at = datetime.now(pytz.utc).isoformat()
        self.db.commit()
        self.db.refresh(model)
        logger.info("Changed role of user %s to %s", user_id, role)
        return model_to_user(model)

    def delete_user(self, user_id: str) -> None:
        """Delete a user. Their bookings stay in the ledger.

        Raises:
            UserNotFoundError: If the user does not exist.
        """
        model = self._get_model(user_id)
        self.db.delete(model)
        self.db.commit()
        logger.info("Deleted user: %s", user_id)

    def _search_query(self, term: str):
        term = term.strip()
        return self.db.query(UserModel).filter(
            or_(
                UserModel.email.icontains(term, autoescape=True),
                UserModel.pseudo.icontains(term, autoescape=True),
            )
        )

    def search_users(self, term: str) -> List[User]:
        """Find users whose email or pseudo contains ``term``, ignoring case.

        Raises:
            ValidationError: If the term is empty.
        """
        if not term or not term.strip():
            raise ValidationError.single("q", "Terme de recherche requis")
        models = self._search_query(term).order_by(UserModel.email).all()
        return [model_to_user(m) for m in models]

    def find_user_ids(self, term: str) -> List[str]:
        """Ids of the users matched by ``search_users``; empty term matches none."""
        if not term or not term.strip():
            return []
        return [m.user_id for m in self._search_query(term).all()]

    def list_users(self) -> List[User]:
        """List all users.

        Returns:
            List of User objects.
        """
        models = self.db.query(UserModel).order_by(UserModel.created_at).all()
        return [model_to_user(m) for m in models]
