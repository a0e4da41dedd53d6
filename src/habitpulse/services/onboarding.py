"""Default habits seeded from the goals picked at registration."""

from __future__ import annotations

from datetime import date
from typing import Iterable

from ..domain.repositories import HabitRepository
from ..domain.state import HabitDraft, HabitState

GOAL_HABITS: dict[str, tuple[HabitDraft, ...]] = {
    "fitness": (
        HabitDraft(name="Daily Exercise", icon="🏋️", target=30, unit="minutes", color="#FF5733"),
        HabitDraft(name="Drink Water", icon="💧", target=8, unit="glasses", color="#33A1FD"),
        HabitDraft(name="Walk Steps", icon="👣", target=10000, unit="steps", color="#4CAF50"),
    ),
    "productivity": (
        HabitDraft(name="Deep Work", icon="🧠", target=2, unit="hours", color="#9C27B0"),
        HabitDraft(name="No Social Media", icon="📵", target=1, unit="day", color="#607D8B"),
        HabitDraft(name="Read", icon="📚", target=20, unit="pages", color="#FF9800"),
    ),
    "mindfulness": (
        HabitDraft(name="Meditation", icon="🧘", target=10, unit="minutes", color="#673AB7"),
        HabitDraft(name="Gratitude Journal", icon="📓", target=3, unit="items", color="#E91E63"),
        HabitDraft(name="Sleep", icon="😴", target=8, unit="hours", color="#3F51B5"),
    ),
    "learning": (
        HabitDraft(name="Study", icon="📝", target=1, unit="hour", color="#009688"),
        HabitDraft(name="New Skill Practice", icon="🔧", target=30, unit="minutes", color="#795548"),
        HabitDraft(name="Listen to Podcast", icon="🎧", target=1, unit="episode", color="#CDDC39"),
    ),
}


def drafts_for_goals(goals: Iterable[str]) -> list[HabitDraft]:
    """Flatten the templates for ``goals``; unknown keys are skipped."""

    drafts: list[HabitDraft] = []
    seen: set[str] = set()
    for goal in goals:
        key = goal.strip().lower()
        if key in seen:
            continue
        seen.add(key)
        drafts.extend(GOAL_HABITS.get(key, ()))
    return drafts


def seed_goal_habits(
    goals: Iterable[str], *, user_id: str, today: date, habit_repo: HabitRepository
) -> list[HabitState]:
    return [
        habit_repo.create(draft, user_id=user_id, today=today)
        for draft in drafts_for_goals(goals)
    ]


__all__ = ["GOAL_HABITS", "drafts_for_goals", "seed_goal_habits"]
