"""Flask CLI commands for HabitPulse."""

from __future__ import annotations

import click
from flask import Flask

from .errors import HabitPulseError


def init_app(app: Flask) -> None:
    """Register CLI commands on the Flask app."""

    @app.cli.command("habitpulse-init-db")
    def habitpulse_init_db() -> None:
        """Create database tables (idempotent)."""

        from .extensions import get_state
        from .infra.database import init_database

        init_database(get_state().engine)
        click.echo("Database schema ready.")

    @app.cli.command("habitpulse-recompute-streak")
    @click.argument("email")
    def habitpulse_recompute_streak(email: str) -> None:
        """Re-evaluate the account streak for the user with EMAIL."""

        from .extensions import get_state
        from .services.auth import get_user_by_email

        state = get_state()
        user = get_user_by_email(email, state.session_factory)
        if user is None:
            raise click.ClickException(f"No user with email {email}")
        try:
            account = state.tracking.refresh_account_streak(user.id)
        except HabitPulseError as exc:
            raise click.ClickException(exc.message) from exc
        click.echo(
            f"current={account.current_streak} longest={account.longest_streak} "
            f"last_active={account.last_active_date}"
        )
