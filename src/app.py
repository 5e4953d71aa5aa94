"""Main FastAPI application module.

This module initializes the FastAPI application, registers all route
handlers and maps domain errors to HTTP responses.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.logging_config import setup_logging
from config import (
    CORS_ALLOWED_ORIGINS,
    API_HOST,
    API_PORT,
)
from core.exceptions import HotelBookingError, ValidationError
from api.routes import auth, bookings, hotels, users

# Setup logging
setup_logging()
logger = logging.getLogger(__name__)

# Initialize FastAPI application
app = FastAPI(
    title="Hotel Booking API",
    description="REST API for hotel listings, user accounts and bookings.",
    version="1.0.0",
)

# Configure CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register route handlers
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(hotels.router)
app.include_router(bookings.router)


def _error_body(message: str, errors=None) -> dict:
    body = {"success": False, "message": message}
    if errors:
        body["errors"] = errors
    return body


@app.exception_handler(HotelBookingError)
def handle_domain_error(request: Request, exc: HotelBookingError) -> JSONResponse:
    """Render any domain error with its own status code."""
    errors = exc.errors if isinstance(exc, ValidationError) else None
    return JSONResponse(status_code=exc.status_code, content=_error_body(exc.message, errors))


@app.exception_handler(RequestValidationError)
def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed bodies and query strings are reported as 400, field by field."""
    errors = []
    for error in exc.errors():
        location = [
            str(part)
            for part in error.get("loc", ())
            if part not in ("body", "query", "path")
        ]
        errors.append({"field": ".".join(location) or "body", "message": error.get("msg", "")})
    summary = "; ".join(f"{e['field']}: {e['message']}" for e in errors)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body(summary or "Requête invalide", errors),
    )


@app.exception_handler(Exception)
def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unexpected error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body("Erreur interne du serveur"),
    )


@app.get("/", summary="API root", tags=["Info"])
def root() -> dict:
    """API root, returns API information and documentation links."""
    return {
        "name": "Hotel Booking API",
        "version": "1.0.0",
        "docs": {
            "swagger": "/docs",
            "redoc": "/redoc",
        },
        "health": "/api/health",
    }


@app.get("/api/health", summary="Health check", tags=["Health"])
def health() -> dict:
    """Health check endpoint.

    Returns:
        Dictionary with status "ok".
    """
    return {"status": "ok"}


# --- Startup code for direct execution ---
if __name__ == "__main__":
    import uvicorn

    server_url = f"http://{API_HOST}:{API_PORT}"
    logger.info("Starting Hotel Booking API on %s (docs: %s/docs)", server_url, server_url)
    uvicorn.run("app:app", host=API_HOST, port=API_PORT, reload=True)
