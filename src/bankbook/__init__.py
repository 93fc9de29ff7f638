"""Bankbook application factory."""

from __future__ import annotations

from importlib import import_module
from typing import Iterable

from flask import Flask

from . import cli as _cli
from .config import BaseConfig, DevConfig, TestingConfig
from .logging_config import setup_logging
from .money import format_currency

_CONFIG_MAP = {
    "development": DevConfig,
    "testing": TestingConfig,
    "default": BaseConfig,
}


def _resolve_config(name: str | None) -> type[BaseConfig]:
    """Return the config class for the provided environment name."""

    if not name:
        return BaseConfig
    return _CONFIG_MAP.get(name.lower(), BaseConfig)


def _blueprint_paths() -> Iterable[str]:
    """Yield blueprint import paths registered on the app."""

    yield "bankbook.blueprints.users"
    yield "bankbook.blueprints.accounts"


def create_app(config_name: str | None = None) -> Flask:
    """Create and configure the Flask application instance."""

    app = Flask(__name__, instance_relative_config=True)
    config_obj = _resolve_config(config_name)()
    app.config.from_object(config_obj)
    app.config["BANKBOOK_CONFIG"] = config_obj

    setup_logging(config_obj)
    app.add_template_filter(format_currency, "currency")

    _register_blueprints(app)
    # Imported lazily so model modules are not mapped at package-import time.
    from .extensions import init_db

    init_db(app)
    _cli.init_app(app)

    app.logger.info(
        "Application created",
        extra={"config": type(config_obj).__name__, "database_url": config_obj.DATABASE_URL},
    )
    return app


def _register_blueprints(app: Flask) -> None:
    """Import and register all blueprints declared in `_blueprint_paths`."""

    for dotted_path in _blueprint_paths():
        module = import_module(dotted_path)
        app.register_blueprint(getattr(module, "bp"))


__all__ = ["BaseConfig", "DevConfig", "TestingConfig", "create_app"]
