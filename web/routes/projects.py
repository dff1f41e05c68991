from __future__ import annotations

from typing import Any, Dict, Optional

from flask import Blueprint, current_app, jsonify

from treeish.binder import bind_ref_context
from treeish.config import Settings
from treeish.models import NotFound
from treeish.ref_extractor import extract_ref
from treeish.repository import Repository

bp = Blueprint("projects", __name__)


def _state() -> Dict[str, Any]:
    return current_app.extensions["treeish"]


def _settings() -> Settings:
    return _state()["settings"]


def _project(name: str) -> Optional[Repository]:
    return _state()["repositories"].get(name)


@bp.get("/projects")
def list_projects():
    return jsonify({"projects": sorted(_state()["repositories"])})


@bp.get("/projects/<project>/refs")
def list_refs(project: str):
    repo = _project(project)
    if repo is None:
        return jsonify({"error": "not_found", "project": project}), 404
    return jsonify({
        "project": project,
        "branches": sorted(repo.branches()),
        "tags": sorted(repo.tags()),
    })


@bp.get("/projects/<project>/extract/<path:id>")
def extract(project: str, id: str):
    """Split `id` into ref and path without touching commits or trees.

    An unknown project has no refs to match against, so the pair is empty.
    """
    repo = _project(project)
    candidates = repo.ref_names() if repo is not None else []
    pair = extract_ref(id, candidates, repo is not None, sha_length=_settings().sha_length)
    return jsonify({"project": project, "id": id, "ref": pair.ref, "path": pair.path})


@bp.get("/projects/<project>/tree/<path:id>")
def tree(project: str, id: str):
    result = bind_ref_context(id, _project(project), sha_length=_settings().sha_length)
    if isinstance(result, NotFound):
        return jsonify(result.to_dict()), 404
    payload = result.to_dict()
    payload["project"] = project
    return jsonify(payload)
