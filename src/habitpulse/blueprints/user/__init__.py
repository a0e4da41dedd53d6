"""Profile and dashboard blueprint package."""

from __future__ import annotations

from flask import Blueprint

bp = Blueprint("user", __name__, url_prefix="/api")

from . import routes  # noqa: E402,F401

__all__ = ["bp"]
