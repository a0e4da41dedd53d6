from __future__ import annotations

from helpers import register_and_login


def test_init_db_is_idempotent(app):
    runner = app.test_cli_runner()

    first = runner.invoke(args=["habitpulse-init-db"])
    second = runner.invoke(args=["habitpulse-init-db"])

    assert first.exit_code == 0
    assert second.exit_code == 0
    assert "Database schema ready." in second.output


def test_recompute_streak(app, client):
    register_and_login(client)
    habit = client.post("/api/habits", json={"name": "Read", "target": 10}).get_json()["habit"]
    client.put(f"/api/habits/{habit['id']}", json={"progress": 10})

    result = app.test_cli_runner().invoke(args=["habitpulse-recompute-streak", "SAM@example.com"])

    assert result.exit_code == 0
    assert "current=1 longest=1 last_active=2024-01-02" in result.output


def test_recompute_streak_unknown_user(app):
    result = app.test_cli_runner().invoke(args=["habitpulse-recompute-streak", "ghost@example.com"])

    assert result.exit_code != 0
    assert "No user with email ghost@example.com" in result.output
