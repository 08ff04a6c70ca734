"""Fabrique d'application Flask pour l'API DevCamper."""

import logging
import os
import time

from flask import Flask, g, request, send_from_directory

from app.extensions import cors, db, limiter, login_manager
from app.logging_config import setup_logging
from config import config_by_name

logger = logging.getLogger(__name__)

_INSECURE_DEFAULTS = {
    "SECRET_KEY": "dev-only-insecure-key",
    "JWT_SECRET": "dev-only-insecure-jwt",
}


def create_app(config_name: str | None = None) -> Flask:
    """Cree et configure l'application Flask.

    Args:
        config_name: Un parmi 'development', 'testing', 'production'.
                     Par defaut, utilise la variable d'env FLASK_ENV ou 'development'.
    """
    if config_name is None:
        config_name = os.environ.get("FLASK_ENV", "development")

    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])
    app.config["ENV_NAME"] = config_name

    # Garde-fous production : interdire les secrets par defaut
    if config_name == "production":
        for key, insecure in _INSECURE_DEFAULTS.items():
            if app.config[key] == insecure:
                raise RuntimeError(
                    f"{key} non definie. Definir la variable d'environnement {key}."
                )

    setup_logging(app.config.get("LOG_LEVEL", "INFO"))

    # Initialisation des extensions
    db.init_app(app)
    login_manager.init_app(app)
    cors.init_app(app, origins=app.config["CORS_ORIGINS"])
    limiter.init_app(app)

    # Authentification JWT via Flask-Login
    from app.api.auth import load_user_from_request, unauthorized

    login_manager.request_loader(load_user_from_request)
    login_manager.unauthorized_handler(unauthorized)

    # Headers de securite HTTP
    @app.after_request
    def add_security_headers(resp):
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("Referrer-Policy", "strict-origin-when-cross-origin")
        resp.headers.setdefault("Cross-Origin-Resource-Policy", "same-origin")
        return resp

    # Journal des requetes (developpement)
    if app.config.get("LOG_REQUESTS"):
        request_logger = logging.getLogger("app.requests")

        @app.before_request
        def _start_timer():
            g.request_started = time.perf_counter()

        @app.after_request
        def _log_request(resp):
            started = g.get("request_started")
            elapsed = (time.perf_counter() - started) * 1000 if started else 0.0
            request_logger.info(
                "%s %s %d %.1f ms", request.method, request.path, resp.status_code, elapsed
            )
            return resp

    # Fichiers uploades (photos de bootcamp)
    @app.route("/uploads/<path:filename>")
    def uploaded_file(filename):
        return send_from_directory(app.config["FILE_UPLOAD_PATH"], filename)

    # Enregistrement des blueprints et du normaliseur d'erreurs
    from app.api import register_blueprints
    from app.api.errors import register_error_handlers

    register_blueprints(app)
    register_error_handlers(app)

    with app.app_context():
        from app import models  # noqa: F401

        db.create_all()

    logger.info("DevCamper app created with config '%s'", config_name)
    return app
