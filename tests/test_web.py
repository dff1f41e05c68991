"""Tests for the JSON API."""

import json
from typing import List, Optional

import pytest

from treeish.config import Settings
from treeish.models import Commit, Tree
from treeish.repository import Repository
from web.app import create_app

from conftest import ISSUE_SHA


class _ExplodingRepository(Repository):
    name = "exploding"

    def branches(self) -> List[str]:
        raise RuntimeError("secret backend detail")

    def tags(self) -> List[str]:
        return []

    def commit(self, ref: str) -> Optional[Commit]:
        return None

    def tree(self, commit: Commit, ref: str, path: str) -> Tree:
        return Tree(ref=ref, path=path)


@pytest.fixture
def client(snapshot_repo):
    app = create_app(settings=Settings(), repositories={"gitlabhq": snapshot_repo})
    app.config["TESTING"] = True
    return app.test_client()


class TestHealth:
    def test_health(self, client):
        resp = client.get("/api/health")
        assert resp.status_code == 200
        assert resp.get_json()["status"] == "ok"


class TestProjects:
    def test_list(self, client):
        assert client.get("/api/projects").get_json() == {"projects": ["gitlabhq"]}

    def test_refs(self, client):
        data = client.get("/api/projects/gitlabhq/refs").get_json()
        assert data["branches"] == ["develop", "issues/1234", "master"]
        assert data["tags"] == ["v2.0.0"]

    def test_refs_unknown_project(self, client):
        assert client.get("/api/projects/nope/refs").status_code == 404


class TestExtract:
    def test_ref_with_slash(self, client):
        data = client.get("/api/projects/gitlabhq/extract/issues/1234/app/models/project.rb").get_json()
        assert (data["ref"], data["path"]) == ("issues/1234", "app/models/project.rb")

    def test_unknown_project_has_no_context(self, client):
        data = client.get("/api/projects/nope/extract/master/README.md").get_json()
        assert (data["ref"], data["path"]) == ("", "")


class TestTree:
    def test_blob(self, client):
        resp = client.get("/api/projects/gitlabhq/tree/issues/1234/app/models/project.rb")
        assert resp.status_code == 200
        data = resp.get_json()
        assert data["project"] == "gitlabhq"
        assert data["commit"]["id"] == ISSUE_SHA
        assert data["tree"]["type"] == "blob"

    def test_root(self, client):
        data = client.get("/api/projects/gitlabhq/tree/master").get_json()
        assert data["id"] == "master/"
        assert data["tree"]["type"] == "tree"

    @pytest.mark.parametrize("url", [
        "/api/projects/gitlabhq/tree/master/missing.txt",
        "/api/projects/gitlabhq/tree/non/existent/branch/README.md",
        "/api/projects/nope/tree/master",
    ])
    def test_not_found(self, client, url):
        resp = client.get(url)
        assert resp.status_code == 404
        assert resp.get_json()["error"] == "not_found"


class TestErrors:
    def test_unknown_route_is_json(self, client):
        resp = client.get("/api/does-not-exist")
        assert resp.status_code == 404
        assert resp.get_json() == {"error": "not_found"}

    def test_method_not_allowed_is_json(self, client):
        resp = client.post("/api/health")
        assert resp.status_code == 405
        assert resp.get_json()["error"] == "http_error"

    def test_unexpected_error_is_json_500(self):
        app = create_app(settings=Settings(), repositories={"boom": _ExplodingRepository()})
        resp = app.test_client().get("/api/projects/boom/tree/master")
        assert resp.status_code == 500
        data = resp.get_json()
        assert data["error"] == "internal_error"
        assert data["path"] == "/api/projects/boom/tree/master"
        body = resp.get_data(as_text=True)
        assert "secret backend detail" not in body
        assert "Traceback" not in body


class TestCreateApp:
    def test_repositories_from_settings(self, tmp_path, git_repo_path):
        settings = Settings(repositories={
            "demo": {"backend": "git", "path": str(git_repo_path)},
            "broken": {"backend": "git", "path": str(tmp_path / "missing")},
        })
        app = create_app(settings=settings)
        resp = app.test_client().get("/api/projects")
        assert resp.get_json() == {"projects": ["demo"]}

    def test_malformed_snapshot_is_skipped(self, tmp_path, snapshot_data):
        good = tmp_path / "good.json"
        good.write_text(json.dumps(snapshot_data), encoding="utf-8")
        bad = tmp_path / "bad.yml"
        bad.write_text("branches: [unclosed\n", encoding="utf-8")
        settings = Settings(repositories={
            "good": {"backend": "snapshot", "path": str(good)},
            "bad": {"backend": "snapshot", "path": str(bad)},
        })
        app = create_app(settings=settings)
        assert app.test_client().get("/api/projects").get_json() == {"projects": ["good"]}
