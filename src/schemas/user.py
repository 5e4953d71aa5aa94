"""User schema definitions.

``User`` is the internal record (it carries the password hash);
``UserPublic`` is the only shape ever sent to clients.
"""

import uuid
from datetime import datetime
from typing import Optional

import pytz
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class User(BaseModel):
    user_id: str = Field(
        description="The unique identifier for the user.",
        default_factory=lambda: str(uuid.uuid4()),
    )
    email: str = Field(description="Lowercase email address, unique.")
    pseudo: str = Field(description="Display name.")
    password_hash: str = Field(description="Bcrypt hash of the password.")
    role: str = Field(description="'user', 'employee' or 'admin'.", default="user")
    created_at: str = Field(
        default_factory=lambda: datetime.now(pytz.utc).isoformat()
    )
    updated_at: str = Field(
        default_factory=lambda: datetime.now(pytz.utc).isoformat()
    )

    def to_public(self) -> "UserPublic":
        return UserPublic(
            id=self.user_id,
            email=self.email,
            pseudo=self.pseudo,
            role=self.role,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


class UserPublic(BaseModel):
    """User as returned by the API, without the password hash."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    email: str
    pseudo: str
    role: str
    created_at: str
    updated_at: str


class RegisterRequest(BaseModel):
    email: str
    pseudo: str
    password: str


class LoginRequest(BaseModel):
    email: str
    password: str


class UpdateUserRequest(BaseModel):
    """Profile patch; omitted fields are left unchanged."""

    email: Optional[str] = None
    pseudo: Optional[str] = None
    password: Optional[str] = None


class UpdateRoleRequest(BaseModel):
    role: str
