"""Database, repository and service wiring for the Flask app."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from flask import Flask, current_app, session
from sqlalchemy.engine import Engine

from .config import BaseConfig
from .errors import Unauthorized
from .infra.database import SessionFactory, create_db_engine, create_session_factory, init_database
from .infra.repositories import SQLModelHabitRepository, SQLModelUserRepository
from .services.clock import Clock, SystemClock
from .services.tracking import TrackingService

EXTENSION_KEY = "habitpulse"
SESSION_USER_KEY = "user_id"


@dataclass
class AppState:
    """Per-app services shared by request handlers."""

    config: BaseConfig
    engine: Engine
    session_factory: SessionFactory
    habit_repo: SQLModelHabitRepository
    user_repo: SQLModelUserRepository
    clock: Clock
    tracking: TrackingService


def init_app(app: Flask, config: BaseConfig, clock: Optional[Clock] = None) -> AppState:
    """Create the engine, schema, repositories and tracking service."""

    engine = create_db_engine(config)
    init_database(engine)
    session_factory = create_session_factory(engine)

    habit_repo = SQLModelHabitRepository(session_factory)
    user_repo = SQLModelUserRepository(session_factory)
    clock = clock or SystemClock(config.TIMEZONE)
    state = AppState(
        config=config,
        engine=engine,
        session_factory=session_factory,
        habit_repo=habit_repo,
        user_repo=user_repo,
        clock=clock,
        tracking=TrackingService(
            habit_repo=habit_repo,
            user_repo=user_repo,
            clock=clock,
            write_retries=config.WRITE_RETRIES,
            recompute_on_delete=config.RECOMPUTE_ON_DELETE,
        ),
    )
    app.extensions[EXTENSION_KEY] = state
    return state


def get_state() -> AppState:
    """Return the services attached to the current app."""

    state = current_app.extensions.get(EXTENSION_KEY)
    if state is None:  # pragma: no cover - misconfigured app
        raise RuntimeError("HabitPulse extensions not initialized")
    return state


def require_user_id() -> str:
    """Return the signed-in user's id or raise ``Unauthorized``."""

    user_id = session.get(SESSION_USER_KEY)
    if not user_id:
        raise Unauthorized("Sign in required")
    return user_id
