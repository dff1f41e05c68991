from __future__ import annotations

from flask import Blueprint, jsonify

from treeish import __version__

bp = Blueprint("health", __name__)


@bp.get("/health")
def health():
    return jsonify({"status": "ok", "version": __version__})
