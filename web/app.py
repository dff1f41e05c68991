from __future__ import annotations

import logging
from typing import Dict, Optional

from flask import Flask, jsonify

from treeish.config import Settings, settings_from_env
from treeish.repository import Repository, RepositoryError, open_repository

from .errors import register_error_handlers
from .routes.health import bp as health_bp
from .routes.projects import bp as projects_bp

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _open_repositories(settings: Settings) -> Dict[str, Repository]:
    repos: Dict[str, Repository] = {}
    for name, repo_settings in settings.repositories.items():
        try:
            repos[name] = open_repository(name, repo_settings)
        except RepositoryError as e:
            logger.warning("Skipping project %s: %s", name, e)
            continue
        logger.info("Serving project %s (%s backend) from %s", name, repo_settings.backend, repo_settings.path)
    return repos


def create_app(settings: Optional[Settings] = None, repositories: Optional[Dict[str, Repository]] = None) -> Flask:
    if settings is None:
        settings = settings_from_env()
    logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.INFO), format=LOG_FORMAT)

    app = Flask(__name__)

    # Basic hardening
    max_bytes = settings.max_request_bytes
    app.config["MAX_CONTENT_LENGTH"] = max_bytes

    app.extensions["treeish"] = {
        "settings": settings,
        "repositories": repositories if repositories is not None else _open_repositories(settings),
    }

    register_error_handlers(app)

    # Register blueprints
    app.register_blueprint(health_bp, url_prefix="/api")
    app.register_blueprint(projects_bp, url_prefix="/api")

    @app.errorhandler(413)
    def too_large(_):
        return jsonify({
            "error": "request_too_large",
            "message": f"Request too large. MAX_REQUEST_BYTES={max_bytes}",
        }), 413

    @app.errorhandler(404)
    def not_found(_):
        return jsonify({"error": "not_found"}), 404

    return app
