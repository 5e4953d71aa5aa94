"""Field rules for users, hotels and bookings.

Each ``*_errors`` function returns every violated field as a list of
``{"field", "message"}`` dicts so callers can report them all at once;
``raise_if_errors`` turns a non-empty list into a ``ValidationError``.
Managers call these before touching the database.
"""

import math
from datetime import date
from typing import Dict, List, Optional

from email_validator import EmailNotValidError, validate_email

from config import BOOKING_STATUSES, ROLES, SPECIAL_REQUESTS_MAX_LENGTH
from core.exceptions import ValidationError

PSEUDO_MIN_LENGTH = 3
PSEUDO_MAX_LENGTH = 30
PASSWORD_MIN_LENGTH = 6

FieldErrors = List[Dict[str, str]]


def _error(field: str, message: str) -> Dict[str, str]:
    return {"field": field, "message": message}


def raise_if_errors(errors: FieldErrors) -> None:
    if errors:
        raise ValidationError(errors)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def is_valid_email(email: str) -> bool:
    """Syntax check only; the domain is not resolved."""
    try:
        validate_email(email.strip(), check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def user_errors(
    email: Optional[str] = None,
    pseudo: Optional[str] = None,
    password: Optional[str] = None,
    partial: bool = False,
) -> FieldErrors:
    """Check user fields.

    Args:
        email: Email address, already normalized or not.
        pseudo: Display name.
        password: Plain text password.
        partial: When True, ``None`` means "not supplied" and is skipped;
            otherwise every field is required.

    Returns:
        List of field errors, empty when everything is valid.
    """
    errors: FieldErrors = []

    if email is None or not email.strip():
        if not partial or email is not None:
            errors.append(_error("email", "Email requis"))
    elif not is_valid_email(email):
        errors.append(_error("email", "Format email invalide"))

    if pseudo is None or not pseudo.strip():
        if not partial or pseudo is not None:
            errors.append(_error("pseudo", "Pseudo requis"))
    elif not PSEUDO_MIN_LENGTH <= len(pseudo.strip()) <= PSEUDO_MAX_LENGTH:
        errors.append(
            _error(
                "pseudo",
                f"Le pseudo doit faire entre {PSEUDO_MIN_LENGTH} et "
                f"{PSEUDO_MAX_LENGTH} caractères",
            )
        )

    if password is None or password == "":
        if not partial or password is not None:
            errors.append(_error("password", "Mot de passe requis"))
    elif len(password) < PASSWORD_MIN_LENGTH:
        errors.append(
            _error(
                "password",
                f"Le mot de passe doit faire au moins {PASSWORD_MIN_LENGTH} caractères",
            )
        )

    return errors


def role_errors(role: Optional[str]) -> FieldErrors:
    if role not in ROLES:
        return [_error("role", f"Rôle invalide. Rôles autorisés : {', '.join(ROLES)}")]
    return []


_HOTEL_REQUIRED_MESSAGES = {
    "name": "Le nom est requis",
    "location": "La localisation est requise",
    "description": "La description est requise",
}


def hotel_errors(
    name: Optional[str] = None,
    location: Optional[str] = None,
    description: Optional[str] = None,
    picture_list: Optional[List[str]] = None,
    partial: bool = False,
) -> FieldErrors:
    """Check hotel fields; text fields must be non-empty once trimmed."""
    errors: FieldErrors = []
    values = {"name": name, "location": location, "description": description}
    for field, value in values.items():
        if value is None:
            if not partial:
                errors.append(_error(field, _HOTEL_REQUIRED_MESSAGES[field]))
        elif not value.strip():
            errors.append(_error(field, _HOTEL_REQUIRED_MESSAGES[field]))

    if picture_list is not None and any(
        not isinstance(picture, str) or not picture.strip() for picture in picture_list
    ):
        errors.append(_error("picture_list", "Référence d'image invalide"))
    return errors


def booking_date_errors(check_in: date, check_out: date, today: date) -> FieldErrors:
    """Check a normalized check-in/check-out pair against today."""
    errors: FieldErrors = []
    if check_in < today:
        errors.append(
            _error("checkIn", "La date d'arrivée ne peut pas être dans le passé")
        )
    if check_in >= check_out:
        errors.append(
            _error("checkOut", "La date de départ doit être après la date d'arrivée")
        )
    return errors


def booking_errors(
    number_of_guests: Optional[int] = None,
    total_price: Optional[float] = None,
    special_requests: Optional[str] = None,
    status: Optional[str] = None,
) -> FieldErrors:
    """Check the non-date booking fields that were supplied."""
    errors: FieldErrors = []
    if number_of_guests is not None and number_of_guests < 1:
        errors.append(_error("numberOfGuests", "Au moins une personne requise"))
    if total_price is not None:
        if not math.isfinite(total_price):
            errors.append(_error("totalPrice", "Prix invalide"))
        elif total_price < 0:
            errors.append(_error("totalPrice", "Le prix ne peut pas être négatif"))
    if special_requests is not None and len(special_requests) > SPECIAL_REQUESTS_MAX_LENGTH:
        errors.append(
            _error(
                "specialRequests",
                "Les demandes spéciales ne peuvent pas dépasser "
                f"{SPECIAL_REQUESTS_MAX_LENGTH} caractères",
            )
        )
    if status is not None and status not in BOOKING_STATUSES:
        errors.append(
            _error(
                "status",
                f"Statut invalide. Statuts autorisés : {', '.join(BOOKING_STATUSES)}",
            )
        )
    return errors


def pagination_errors(page: int, limit: int, max_limit: int) -> FieldErrors:
    errors: FieldErrors = []
    if page < 1:
        errors.append(_error("page", "La page doit être supérieure ou égale à 1"))
    if not 1 <= limit <= max_limit:
        errors.append(_error("limit", f"La limite doit être comprise entre 1 et {max_limit}"))
    return errors


def sort_errors(sort: str, order: str, allowed_fields, allowed_orders) -> FieldErrors:
    errors: FieldErrors = []
    if sort not in allowed_fields:
        errors.append(_error("sort", "Champ de tri invalide"))
    if order not in allowed_orders:
        errors.append(_error("order", "Ordre de tri invalide"))
    return errors
