"""Error taxonomy shared by services, repositories and routes."""

from __future__ import annotations

from flask import Flask, jsonify
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

from .logging_config import get_logger

logger = get_logger(__name__)


class HabitPulseError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 500
    default_message = "Internal error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInput(HabitPulseError, ValueError):
    """Malformed or out-of-range request data."""

    status_code = 400
    default_message = "Invalid input"

    @classmethod
    def from_validation_error(cls, exc: ValidationError) -> "InvalidInput":
        parts = []
        for error in exc.errors(include_url=False):
            loc = ".".join(str(item) for item in error.get("loc", ())) or "__root__"
            parts.append(f"{loc}: {error.get('msg', 'Invalid value')}")
        return cls("; ".join(parts))


class Unauthorized(HabitPulseError):
    """Caller is not signed in or does not own the referenced record."""

    status_code = 401
    default_message = "Unauthorized"


class NotFound(HabitPulseError):
    status_code = 404
    default_message = "Not found"


class PersistenceError(HabitPulseError):
    """Storage read or write failed."""

    status_code = 500
    default_message = "Failed to persist changes"


class ConcurrencyConflict(PersistenceError):
    """A compare-and-swap write lost against a concurrent writer."""

    default_message = "Record was modified concurrently"


def register_error_handlers(app: Flask) -> None:
    """Render domain errors as JSON bodies with matching status codes."""

    @app.errorhandler(HabitPulseError)
    def _handle_domain_error(exc: HabitPulseError):
        if exc.status_code >= 500:
            logger.error("Request failed", exc_info=exc, extra={"error": exc.message})
        else:
            logger.info(
                "Request rejected",
                extra={"error": exc.message, "status": exc.status_code},
            )
        return jsonify({"error": exc.message}), exc.status_code

    @app.errorhandler(ValidationError)
    def _handle_validation_error(exc: ValidationError):
        converted = InvalidInput.from_validation_error(exc)
        logger.info("Request payload rejected", extra={"error": converted.message})
        return jsonify({"error": converted.message}), converted.status_code

    @app.errorhandler(HTTPException)
    def _handle_http_error(exc: HTTPException):
        return jsonify({"error": exc.description}), exc.code

    @app.errorhandler(Exception)
    def _handle_unexpected(exc: Exception):
        logger.exception("Unhandled error")
        return jsonify({"error": "Internal error"}), 500


__all__ = [
    "ConcurrencyConflict",
    "HabitPulseError",
    "InvalidInput",
    "NotFound",
    "PersistenceError",
    "Unauthorized",
    "register_error_handlers",
]
