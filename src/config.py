"""Configuration module for the hotel booking API.

This module provides centralized configuration management, including directory
paths, API server settings, authentication and pagination defaults.
All configuration values can be overridden via environment variables.
"""

import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# --- Directory Configuration ---

# Root directory of the project
ROOT_DIR = Path(__file__).parent.parent.resolve()

# Data directory name
DATA_DIR_NAME = "data"
DATA_DIR = Path(os.getenv("DATA_DIR", str(ROOT_DIR / DATA_DIR_NAME)))

# --- Database Configuration ---

# "sqlite://" selects a shared in-memory store (used by the test suite)
DATABASE_URL: str = os.getenv("DATABASE_URL", f"sqlite:///{DATA_DIR}/hotel_booking.db")

# --- API Server Configuration ---

API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
API_PORT: int = int(os.getenv("API_PORT", "3000"))

# CORS allowed origins (comma-separated list)
# Default includes local development addresses. For production, set via
# CORS_ALLOWED_ORIGINS environment variable.
_CORS_ALLOWED_ORIGINS_STR: str = os.getenv(
    "CORS_ALLOWED_ORIGINS",
    "http://localhost:5173,http://127.0.0.1:5173,http://localhost:3000,"
    "http://127.0.0.1:3000",
)
CORS_ALLOWED_ORIGINS: List[str] = [
    origin.strip()
    for origin in _CORS_ALLOWED_ORIGINS_STR.split(",")
    if origin.strip()
]

# --- Authentication Configuration ---

JWT_SECRET_KEY: str = os.getenv("JWT_SECRET_KEY", "your-secret-key-change-in-production")
JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24)))

# Bcrypt rounds for password hashing (higher = more secure but slower)
BCRYPT_ROUNDS: int = int(os.getenv("BCRYPT_ROUNDS", "12"))

# Roles, from least to most privileged
ROLE_USER = "user"
ROLE_EMPLOYEE = "employee"
ROLE_ADMIN = "admin"
ROLES = (ROLE_USER, ROLE_EMPLOYEE, ROLE_ADMIN)

# Account created by create_admin.py
ADMIN_EMAIL: Optional[str] = os.getenv("ADMIN_EMAIL")
ADMIN_PSEUDO: str = os.getenv("ADMIN_PSEUDO", "admin")
ADMIN_PASSWORD: Optional[str] = os.getenv("ADMIN_PASSWORD")

# --- Booking Configuration ---

# Timezone used to turn check-in/check-out datetimes into calendar days
TIMEZONE: str = os.getenv("TIMEZONE", "Europe/Paris")

BOOKING_STATUSES = ("pending", "confirmed", "cancelled")
DEFAULT_BOOKING_STATUS = "pending"
SPECIAL_REQUESTS_MAX_LENGTH = 500

# --- Listing Configuration ---

DEFAULT_PAGE_SIZE: int = int(os.getenv("DEFAULT_PAGE_SIZE", "10"))
MAX_PAGE_SIZE: int = int(os.getenv("MAX_PAGE_SIZE", "100"))

HOTEL_SORT_FIELDS = ("name", "location", "createdAt")
BOOKING_SORT_FIELDS = (
    "createdAt",
    "checkIn",
    "checkOut",
    "totalPrice",
    "numberOfGuests",
    "status",
)
SORT_ORDERS = ("asc", "desc")

# --- Logging Configuration ---

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
