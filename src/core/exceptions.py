"""Custom exception classes for the hotel booking API.

Managers raise these; the API layer is the only place that turns them into
HTTP responses (see ``app.py``).
"""

from typing import Dict, List, Optional


class HotelBookingError(Exception):
    """Base exception for all hotel booking errors."""

    status_code = 500
    default_message = "Erreur interne du serveur"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(HotelBookingError):
    """Raised when input data violates one or more field rules."""

    status_code = 400
    default_message = "Données invalides"

    def __init__(self, errors: List[Dict[str, str]], message: Optional[str] = None):
        """Initialize the exception.

        Args:
            errors: Every violated field, as ``{"field": ..., "message": ...}``.
            message: Optional summary; defaults to the joined field messages.
        """
        self.errors = errors
        if message is None and errors:
            message = "; ".join(
                f"{error['field']}: {error['message']}" for error in errors
            )
        super().__init__(message)

    @classmethod
    def single(cls, field: str, message: str) -> "ValidationError":
        return cls([{"field": field, "message": message}])


class UnauthenticatedError(HotelBookingError):
    """Raised when the bearer token is missing, invalid or expired."""

    status_code = 401
    default_message = "Non autorisé - Token invalide"


class ForbiddenError(HotelBookingError):
    """Raised when an authenticated caller lacks the role or ownership."""

    status_code = 403
    default_message = "Accès interdit"


class NotFoundError(HotelBookingError):
    """Raised when a resource cannot be found by id."""

    status_code = 404
    default_message = "Ressource non trouvée"


class UserNotFoundError(NotFoundError):
    """Raised when a requested user cannot be found."""

    def __init__(self, user_id: str):
        """Initialize the exception.

        Args:
            user_id: The ID of the user that was not found.
        """
        self.user_id = user_id
        super().__init__("Utilisateur non trouvé")


class HotelNotFoundError(NotFoundError):
    """Raised when a requested hotel cannot be found."""

    def __init__(self, hotel_id: str):
        self.hotel_id = hotel_id
        super().__init__("Hôtel non trouvé")


class BookingNotFoundError(NotFoundError):
    """Raised when a requested booking cannot be found."""

    def __init__(self, booking_id: str):
        self.booking_id = booking_id
        super().__init__("Réservation non trouvée")


class ConflictError(HotelBookingError):
    """Raised when a write would break a uniqueness constraint."""

    status_code = 409
    default_message = "Conflit avec une ressource existante"


class UserAlreadyExistsError(ConflictError):
    """Raised when registering an email that is already used."""

    def __init__(self, email: str):
        self.email = email
        super().__init__("Cet email est déjà utilisé")
