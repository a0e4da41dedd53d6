"""HabitPulse application factory."""

from __future__ import annotations

from importlib import import_module
from typing import Iterable, Optional

from flask import Flask

from .config import BaseConfig, DevConfig, TestConfig
from .services.clock import Clock

_CONFIG_MAP = {
    "development": DevConfig,
    "testing": TestConfig,
    "default": BaseConfig,
}


def _resolve_config(name: str | None) -> type[BaseConfig]:
    """Return the config class for the provided environment name."""

    if not name:
        return BaseConfig
    return _CONFIG_MAP.get(name.lower(), BaseConfig)


def _blueprint_paths() -> Iterable[str]:
    yield "habitpulse.blueprints.auth"
    yield "habitpulse.blueprints.habits"
    yield "habitpulse.blueprints.user"


def create_app(
    config_name: str | None = None,
    *,
    config: Optional[BaseConfig] = None,
    clock: Optional[Clock] = None,
) -> Flask:
    """Create and configure the Flask application instance.

    ``config`` and ``clock`` override the environment-derived defaults; tests
    pass a ``FixedClock`` to pin "today".
    """

    app = Flask(__name__, instance_relative_config=True)
    config_obj = config or _resolve_config(config_name)()
    app.config.from_object(config_obj)
    app.config["HABITPULSE_CONFIG"] = config_obj

    from .logging_config import setup_logging

    setup_logging(config_obj)

    from .errors import register_error_handlers
    from .extensions import init_app

    init_app(app, config_obj, clock=clock)
    register_error_handlers(app)
    _register_blueprints(app)

    from . import cli

    cli.init_app(app)
    return app


def _register_blueprints(app: Flask) -> None:
    """Import and register all blueprints declared in `_blueprint_paths`."""

    for dotted_path in _blueprint_paths():
        module = import_module(dotted_path)
        blueprint = getattr(module, "bp")
        app.register_blueprint(blueprint)


__all__ = ["BaseConfig", "DevConfig", "TestConfig", "create_app"]
