from create_admin import ensure_admin
from utils.user_manager import UserManager


def test_creates_admin(db):
    users = UserManager(db)
    assert ensure_admin(users, "admin@hotel.com", "admin", "secret123") is True
    admin = users.get_user_by_email("admin@hotel.com")
    assert admin.role == "admin"
    assert users.authenticate("admin@hotel.com", "secret123")[0].user_id == admin.user_id


def test_second_run_does_nothing(db):
    users = UserManager(db)
    ensure_admin(users, "admin@hotel.com", "admin", "secret123")
    assert ensure_admin(users, "admin@hotel.com", "admin", "another1") is False
    assert len(users.list_users()) == 1


def test_existing_user_needs_promote(db, make_user):
    user, _ = make_user("user", email="boss@hotel.com")
    users = UserManager(db)
    assert ensure_admin(users, "boss@hotel.com", "boss", "secret123") is False
    assert users.get_user(user.user_id).role == "user"

    assert ensure_admin(users, "boss@hotel.com", "boss", "secret123", promote=True) is True
    assert users.get_user(user.user_id).role == "admin"
