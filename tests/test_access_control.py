import time
from datetime import timedelta

import pytest
from jose import jwt

from config import ACCESS_TOKEN_EXPIRE_MINUTES
from core.access_control import AccessControl, Identity, require_owner_or_role, require_role
from core.exceptions import ForbiddenError, UnauthenticatedError
from core.security import create_access_token, decode_access_token, issue_token_for
from utils.user_manager import UserManager

STAFF = {"employee", "admin"}


class TestRequireRole:
    def test_allowed(self):
        require_role(Identity(id="1", role="admin"), {"admin"})

    def test_denied(self):
        with pytest.raises(ForbiddenError):
            require_role(Identity(id="1", role="employee"), {"admin"})


class TestRequireOwnerOrRole:
    def test_owner_passes(self):
        require_owner_or_role(Identity(id="42", role="user"), "42", STAFF)

    def test_owner_id_is_compared_as_string(self):
        require_owner_or_role(Identity(id="42", role="user"), 42, STAFF)

    @pytest.mark.parametrize("role", ["employee", "admin"])
    def test_staff_passes_on_any_resource(self, role):
        require_owner_or_role(Identity(id="1", role=role), "someone-else", STAFF)

    def test_other_user_is_denied(self):
        with pytest.raises(ForbiddenError):
            require_owner_or_role(Identity(id="1", role="user"), "2", STAFF)

    def test_missing_owner_is_denied(self):
        with pytest.raises(ForbiddenError):
            require_owner_or_role(Identity(id="1", role="user"), None, STAFF)


class TestTokens:
    def test_round_trip(self):
        token = create_access_token({"id": "abc", "role": "user"})
        payload = decode_access_token(token)
        assert payload["id"] == "abc"
        assert payload["role"] == "user"
        assert "exp" in payload

    def test_default_lifetime(self):
        payload = decode_access_token(create_access_token({"id": "abc"}))
        lifetime = payload["exp"] - time.time()
        assert abs(lifetime - ACCESS_TOKEN_EXPIRE_MINUTES * 60) < 60

    def test_custom_lifetime(self):
        payload = decode_access_token(create_access_token({"id": "abc"}, timedelta(minutes=5)))
        assert abs(payload["exp"] - time.time() - 300) < 60

    def test_expired(self):
        token = create_access_token({"id": "abc", "role": "user"}, timedelta(seconds=-30))
        with pytest.raises(UnauthenticatedError):
            decode_access_token(token)

    def test_foreign_key(self):
        token = jwt.encode({"id": "abc", "role": "admin"}, "another-secret", algorithm="HS256")
        with pytest.raises(UnauthenticatedError):
            decode_access_token(token)

    def test_garbage(self):
        with pytest.raises(UnauthenticatedError):
            decode_access_token("not.a.token")

    def test_missing_id_claim(self):
        token = create_access_token({"role": "admin"})
        with pytest.raises(UnauthenticatedError):
            decode_access_token(token)


class TestAuthenticate:
    def test_missing_token(self, db):
        with pytest.raises(UnauthenticatedError):
            AccessControl(UserManager(db)).authenticate(None)

    def test_valid_token(self, db, make_user):
        user, _ = make_user("user")
        identity = AccessControl(UserManager(db)).authenticate(issue_token_for(user))
        assert identity == Identity(id=user.user_id, role="user")

    def test_role_is_read_from_the_directory(self, db, make_user):
        user, _ = make_user("user")
        forged = create_access_token({"id": user.user_id, "role": "admin"})
        identity = AccessControl(UserManager(db)).authenticate(forged)
        assert identity.role == "user"

    def test_role_change_applies_to_existing_tokens(self, db, make_user):
        user, _ = make_user("user")
        token = issue_token_for(user)
        UserManager(db).set_role(user.user_id, "employee")
        assert AccessControl(UserManager(db)).authenticate(token).role == "employee"

    def test_deleted_user(self, db, make_user):
        user, _ = make_user("user")
        token = issue_token_for(user)
        UserManager(db).delete_user(user.user_id)
        with pytest.raises(UnauthenticatedError):
            AccessControl(UserManager(db)).authenticate(token)
