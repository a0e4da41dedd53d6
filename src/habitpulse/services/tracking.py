"""Progress-update orchestration: habit write first, then the account streak."""

from __future__ import annotations

from datetime import date
from typing import Callable, Optional, TypeVar

from ..domain.repositories import HabitRepository, UserRepository
from ..domain.state import AccountStreak, HabitDraft, HabitState
from ..errors import ConcurrencyConflict, InvalidInput, PersistenceError
from ..logging_config import get_logger
from .account_streak import recompute_account_streak
from .clock import Clock
from .habits import apply_progress, validate_progress, validate_target
from .insights import dashboard_payload, history_window, success_rate

logger = get_logger(__name__)

T = TypeVar("T")

MAX_HISTORY_DAYS = 365


class TrackingService:
    """Coordinates repositories, the clock and the two streak engines.

    Each write is a compare-and-swap on the record's version. A lost race
    re-reads the snapshot and re-runs the engine, so concurrent updates to the
    same habit or the same account never overwrite each other's streak math.
    """

    def __init__(
        self,
        *,
        habit_repo: HabitRepository,
        user_repo: UserRepository,
        clock: Clock,
        write_retries: int = 3,
        recompute_on_delete: bool = False,
    ) -> None:
        self.habit_repo = habit_repo
        self.user_repo = user_repo
        self.clock = clock
        self.write_retries = max(1, write_retries)
        self.recompute_on_delete = recompute_on_delete

    def _with_retries(self, label: str, attempt: Callable[[], T]) -> T:
        for number in range(1, self.write_retries + 1):
            try:
                return attempt()
            except ConcurrencyConflict:
                logger.warning(
                    "Write conflict, retrying",
                    extra={"operation": label, "attempt": number, "max_attempts": self.write_retries},
                )
                if number == self.write_retries:
                    raise
        raise AssertionError("unreachable")  # pragma: no cover

    def list_habits(self, user_id: str) -> list[HabitState]:
        return self.habit_repo.list_for_user(user_id=user_id)

    def create_habit(self, user_id: str, draft: HabitDraft) -> HabitState:
        validate_target(draft.target)
        habit = self.habit_repo.create(draft, user_id=user_id, today=self.clock.today())
        logger.info("Habit created", extra={"user_id": user_id, "habit_id": habit.id})
        return habit

    def update_progress(self, user_id: str, habit_id: str, new_progress: object) -> HabitState:
        """Apply today's progress to one habit, then recompute the account streak."""

        progress = validate_progress(new_progress)
        today = self.clock.today()

        def attempt() -> HabitState:
            current = self.habit_repo.get(habit_id, user_id=user_id)
            updated = apply_progress(current, progress, today)
            saved = self.habit_repo.save(updated, expected_version=current.version)
            if saved.streak != current.streak:
                logger.info(
                    "Habit streak changed",
                    extra={
                        "habit_id": habit_id,
                        "previous_streak": current.streak,
                        "streak": saved.streak,
                        "day": today,
                    },
                )
            return saved

        habit = self._with_retries("habit progress", attempt)
        try:
            self.refresh_account_streak(user_id, today=today)
        except PersistenceError:
            # The habit write stands; the next update recomputes from the full set.
            logger.warning(
                "Account streak left stale after habit update",
                extra={"user_id": user_id, "habit_id": habit_id},
            )
            raise
        return habit

    def refresh_account_streak(self, user_id: str, today: Optional[date] = None) -> AccountStreak:
        """Re-evaluate the aggregate streak from the user's full habit set."""

        today = today or self.clock.today()

        def attempt() -> AccountStreak:
            account = self.user_repo.get_streak(user_id)
            habits = self.habit_repo.list_for_user(user_id=user_id)
            updated = recompute_account_streak(habits, account, today)
            if updated == account:
                return account
            saved = self.user_repo.save_streak(updated, expected_version=account.version)
            if saved.current_streak != account.current_streak:
                logger.info(
                    "Account streak changed",
                    extra={
                        "user_id": user_id,
                        "previous_streak": account.current_streak,
                        "streak": saved.current_streak,
                        "longest_streak": saved.longest_streak,
                    },
                )
            return saved

        return self._with_retries("account streak", attempt)

    def delete_habit(self, user_id: str, habit_id: str) -> None:
        self.habit_repo.delete(habit_id, user_id=user_id)
        logger.info("Habit deleted", extra={"user_id": user_id, "habit_id": habit_id})
        if self.recompute_on_delete:
            self.refresh_account_streak(user_id)

    def habit_history(self, user_id: str, habit_id: str, days: int = 30) -> dict:
        if not 1 <= days <= MAX_HISTORY_DAYS:
            raise InvalidInput(f"days must be between 1 and {MAX_HISTORY_DAYS}")
        habit = self.habit_repo.get(habit_id, user_id=user_id)
        return {
            "habit": habit.to_dict(),
            "days": history_window(habit, self.clock.today(), days),
            "successRate": success_rate(habit),
        }

    def dashboard(self, user_id: str) -> dict:
        habits = self.habit_repo.list_for_user(user_id=user_id)
        account = self.user_repo.get_streak(user_id)
        return dashboard_payload(habits, account, self.clock.today())


__all__ = ["MAX_HISTORY_DAYS", "TrackingService"]
