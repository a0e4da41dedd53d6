"""Registration, login and logout routes."""

from __future__ import annotations

from flask import jsonify, session

from ...errors import Unauthorized
from ...extensions import SESSION_USER_KEY, get_state
from ...logging_config import get_logger
from ...models.user import User
from ...services import auth
from ...services.onboarding import seed_goal_habits
from ..payloads import read_payload
from . import bp
from .forms import LoginForm, RegistrationForm

logger = get_logger(__name__)


def _public_user(user: User) -> dict:
    return {"id": user.id, "name": user.name, "email": user.email, "avatar": user.avatar}


@bp.post("/register")
def register():
    """Create an account and seed habits for the selected goals."""

    form = read_payload(RegistrationForm)
    state = get_state()
    user = auth.create_user(
        name=form.name,
        email=form.email,
        password=form.password,
        session_factory=state.session_factory,
    )
    seeded = seed_goal_habits(
        form.goals,
        user_id=user.id,
        today=state.clock.today(),
        habit_repo=state.habit_repo,
    )
    logger.info("Seeded goal habits", extra={"user_id": user.id, "count": len(seeded)})
    return jsonify({"user": _public_user(user), "habitsCreated": len(seeded)}), 201


@bp.post("/login")
def login():
    form = read_payload(LoginForm)
    user = auth.authenticate(
        email=form.email,
        password=form.password,
        session_factory=get_state().session_factory,
    )
    if user is None:
        raise Unauthorized("Invalid email or password")
    session.clear()
    session[SESSION_USER_KEY] = user.id
    logger.info("User signed in", extra={"user_id": user.id})
    return jsonify({"user": _public_user(user)})


@bp.post("/logout")
def logout():
    session.pop(SESSION_USER_KEY, None)
    return jsonify({"success": True})
