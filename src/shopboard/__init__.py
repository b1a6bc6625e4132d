"""ShopBoard application factory."""

from __future__ import annotations

from importlib import import_module
from typing import Iterable

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from . import cli as _cli
from .config import BaseConfig, DevConfig, TestConfig
from .context import AppContext, create_app_context
from .logging_config import get_logger, setup_logging
from .services.import_csv import CsvImportError
from .services.periods import InvalidPeriodError

_CONFIG_MAP = {
    "development": DevConfig,
    "testing": TestConfig,
    "default": BaseConfig,
}

logger = get_logger(__name__)


def _resolve_config(name: str | None) -> type[BaseConfig]:
    """Return the config class for the provided environment name."""

    if not name:
        return BaseConfig
    return _CONFIG_MAP.get(name.lower(), BaseConfig)


def _blueprint_paths() -> Iterable[str]:
    """Yield blueprint import paths to register."""

    yield "shopboard.blueprints.dashboard"
    yield "shopboard.blueprints.sales"
    yield "shopboard.blueprints.purchases"
    yield "shopboard.blueprints.products"
    yield "shopboard.blueprints.salespersons"
    yield "shopboard.blueprints.settings"


def create_app(config_name: str | None = None, *, context: AppContext | None = None) -> Flask:
    """Create and configure the Flask application instance."""

    app = Flask(__name__, instance_relative_config=True)
    config_obj = context.config if context is not None else _resolve_config(config_name)()
    app.config.from_object(config_obj)
    app.json.ensure_ascii = False
    app.config["SHOPBOARD_CONFIG"] = config_obj

    setup_logging(config_obj)

    ctx = context or create_app_context(config_obj)
    app.extensions["shopboard"] = ctx

    _register_blueprints(app)
    _register_error_handlers(app)
    _cli.init_app(app)

    logger.info("Application created", extra={"database_url": config_obj.DATABASE_URL})
    return app


def _register_blueprints(app: Flask) -> None:
    """Import and register all blueprints declared in `_blueprint_paths`."""

    for dotted_path in _blueprint_paths():
        module = import_module(dotted_path)
        blueprint = getattr(module, "bp")
        app.register_blueprint(blueprint)


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(InvalidPeriodError)
    @app.errorhandler(CsvImportError)
    def _bad_request(exc: ValueError):
        return jsonify({"error": str(exc)}), 400

    @app.errorhandler(HTTPException)
    def _http_error(exc: HTTPException):
        return jsonify({"error": exc.description}), exc.code


__all__ = ["AppContext", "BaseConfig", "DevConfig", "TestConfig", "create_app", "create_app_context"]
