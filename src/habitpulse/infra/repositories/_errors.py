"""Translate SQLAlchemy failures into ``PersistenceError``."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import SQLAlchemyError

from ...errors import PersistenceError
from ...logging_config import get_logger

logger = get_logger(__name__)


@contextmanager
def storage_errors(action: str) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as exc:
        logger.error("Storage failure", exc_info=exc, extra={"action": action})
        raise PersistenceError(f"Failed to {action}") from exc
