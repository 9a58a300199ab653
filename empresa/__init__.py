from __future__ import annotations
import logging
import os

from flask import Flask, jsonify, redirect, url_for
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import text
from sqlalchemy.exc import OperationalError

db = SQLAlchemy()
limiter = Limiter(key_func=get_remote_address, storage_uri="memory://")


def _env(name: str, default: str) -> str:
    value = os.environ.get(name)
    return value if value else default


def _configure_logging(app: Flask) -> None:
    level = _env("EMPRESA_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logging.getLogger("empresa").setLevel(level)
    app.logger.setLevel(level)


def create_app(overrides=None) -> Flask:
    """
    Factory de la app: config por entorno, DB, rate limit, errores y blueprints.
    `overrides` se aplica antes de inicializar extensiones (tests).
    """
    from .db_config import resolve_database_uri

    app = Flask(__name__)
    app.config.update(
        SECRET_KEY=_env("SECRET_KEY", "dev-empresa"),
        SQLALCHEMY_ENGINE_OPTIONS={"pool_pre_ping": True},
        EMPRESA_WRITE_LIMIT=_env("EMPRESA_WRITE_LIMIT", "30 per minute"),
    )
    if overrides:
        app.config.update(overrides)
    if "SQLALCHEMY_DATABASE_URI" not in app.config:
        app.config["SQLALCHEMY_DATABASE_URI"] = resolve_database_uri()

    _configure_logging(app)
    db.init_app(app)
    limiter.init_app(app)
    # el Limiter es global: el flag lo fija la última app creada, no la primera
    limiter.enabled = bool(app.config.get("RATELIMIT_ENABLED", True))

    from . import models  # noqa: F401  (registra tablas)
    from .db_resilience import attach
    from .routes_employees import employees_bp

    attach(app, db)
    app.register_blueprint(employees_bp, url_prefix="/company")

    @app.get("/")
    def root_index():
        return redirect(url_for("employees.list_employees"))

    @app.get("/health")
    def health():
        try:
            db.session.execute(text("SELECT 1"))
            db_ok = True
        except OperationalError as exc:
            app.logger.warning("[health] db check failed: %r", exc)
            db_ok = False
        return jsonify(ok=True, service="empresa", db=db_ok)

    @app.errorhandler(404)
    def _not_found(err):
        return "Not Found", 404

    @app.errorhandler(405)
    def _method_not_allowed(err):
        return "Method Not Allowed", 405

    @app.errorhandler(429)
    def _too_many(err):
        return "Too Many Requests", 429

    app.logger.info("[app] empresa ready db=%s", app.config["SQLALCHEMY_DATABASE_URI"].split("://", 1)[0])
    return app
