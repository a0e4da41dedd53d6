"""Habit routes."""

from __future__ import annotations

from flask import jsonify, request

from ...errors import InvalidInput
from ...extensions import get_state, require_user_id
from ..payloads import read_payload
from . import bp
from .forms import HabitForm, ProgressForm


@bp.get("/", strict_slashes=False)
def list_habits():
    """Return every habit the signed-in user owns."""

    user_id = require_user_id()
    habits = get_state().tracking.list_habits(user_id)
    return jsonify({"habits": [habit.to_dict() for habit in habits]})


@bp.post("/", strict_slashes=False)
def create_habit():
    user_id = require_user_id()
    form = read_payload(HabitForm)
    habit = get_state().tracking.create_habit(user_id, form.to_draft())
    return jsonify({"habit": habit.to_dict()}), 201


@bp.put("/<habit_id>")
def update_progress(habit_id: str):
    """Log today's progress and refresh both streaks."""

    user_id = require_user_id()
    form = read_payload(ProgressForm)
    habit = get_state().tracking.update_progress(user_id, habit_id, form.progress)
    return jsonify({"habit": habit.to_dict()})


@bp.delete("/<habit_id>")
def delete_habit(habit_id: str):
    user_id = require_user_id()
    get_state().tracking.delete_habit(user_id, habit_id)
    return jsonify({"success": True})


@bp.get("/<habit_id>/history")
def habit_history(habit_id: str):
    """Trailing per-day history with success rate."""

    user_id = require_user_id()
    state = get_state()
    raw_days = request.args.get("days")
    if raw_days is None:
        days = state.config.HISTORY_DAYS
    else:
        try:
            days = int(raw_days)
        except ValueError as exc:
            raise InvalidInput("days must be an integer") from exc
    return jsonify(state.tracking.habit_history(user_id, habit_id, days))
