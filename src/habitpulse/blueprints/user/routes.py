"""Profile and dashboard routes."""

from __future__ import annotations

from flask import jsonify

from ...extensions import get_state, require_user_id
from ...models.user import User
from ..payloads import read_payload
from . import bp
from .forms import ProfileForm


def _profile(user: User) -> dict:
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "avatar": user.avatar,
        "createdAt": user.created_at.isoformat(),
        "lastLogin": user.last_login.isoformat() if user.last_login else None,
        "currentStreak": user.current_streak,
        "longestStreak": user.longest_streak,
        "lastActiveDate": user.last_active_date.isoformat() if user.last_active_date else None,
    }


@bp.get("/user")
def get_user():
    user_id = require_user_id()
    return jsonify(_profile(get_state().user_repo.get_profile(user_id)))


@bp.put("/user")
def update_user():
    user_id = require_user_id()
    form = read_payload(ProfileForm)
    user = get_state().user_repo.update_profile(user_id, name=form.name, avatar=form.avatar)
    return jsonify(_profile(user))


@bp.get("/dashboard")
def dashboard():
    """Week number, completed/remaining split and account streak."""

    user_id = require_user_id()
    return jsonify(get_state().tracking.dashboard(user_id))
