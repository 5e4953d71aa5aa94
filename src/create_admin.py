"""Create the administrator account.

Reads ADMIN_EMAIL / ADMIN_PSEUDO / ADMIN_PASSWORD from the environment (or
.env) and prompts for whatever is missing. Running it twice is harmless:
an existing account is left alone, or promoted to admin with --promote.

    python create_admin.py [--promote]
"""

import argparse
import getpass
import logging
import sys
from typing import Optional

from config import ADMIN_EMAIL, ADMIN_PASSWORD, ADMIN_PSEUDO, ROLE_ADMIN
from core.database import SessionLocal
from core.exceptions import ValidationError
from core.logging_config import setup_logging
from utils.user_manager import UserManager

logger = logging.getLogger(__name__)


def ensure_admin(
    user_manager: UserManager,
    email: str,
    pseudo: str,
    password: str,
    promote: bool = False,
) -> bool:
    """Create the admin account unless the email is already registered.

    Args:
        user_manager: UserManager bound to an open session.
        email: Admin email.
        pseudo: Admin display name.
        password: Admin password.
        promote: Give the admin role to an existing non-admin account.

    Returns:
        True if an account was created or promoted, False if nothing changed.
    """
    existing = user_manager.get_user_by_email(email)
    if existing is not None:
        if existing.role == ROLE_ADMIN:
            logger.info("Admin user already exists: %s", existing.email)
            return False
        if not promote:
            logger.warning(
                "%s exists with role '%s'; rerun with --promote to make it admin",
                existing.email,
                existing.role,
            )
            return False
        user_manager.set_role(existing.user_id, ROLE_ADMIN)
        return True

    user_manager.create_user(email=email, pseudo=pseudo, password=password, role=ROLE_ADMIN)
    return True


def _ask(prompt: str, value: Optional[str], secret: bool = False) -> str:
    if value:
        return value
    return getpass.getpass(prompt) if secret else input(prompt).strip()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Create the administrator account.")
    parser.add_argument(
        "--promote",
        action="store_true",
        help="promote the account to admin if the email already exists",
    )
    args = parser.parse_args(argv)

    setup_logging()
    email = _ask("Admin email: ", ADMIN_EMAIL)
    password = _ask("Admin password: ", ADMIN_PASSWORD, secret=True)

    db = SessionLocal()
    try:
        ensure_admin(UserManager(db), email, ADMIN_PSEUDO, password, promote=args.promote)
    except ValidationError as e:
        logger.error("Cannot create admin: %s", e.message)
        return 1
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
