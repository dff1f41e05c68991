"""Shared fixtures: an in-memory snapshot repository and a throwaway git repository."""

import os
import shutil
import subprocess
from pathlib import Path
from typing import Any, Dict

import pytest

from treeish.repository import GitRepository, SnapshotRepository

MASTER_SHA = "f4b14494ef6abf3d144c28e4af0c20143383e062"
ISSUE_SHA = "9a8b7c6d5e4f30211203f4e5d6c7b8a9a8b7c6d5"


@pytest.fixture
def snapshot_data() -> Dict[str, Any]:
    return {
        "branches": {
            "master": MASTER_SHA,
            "develop": MASTER_SHA,
            "issues/1234": ISSUE_SHA,
        },
        "tags": {
            "v2.0.0": MASTER_SHA,
        },
        "commits": {
            MASTER_SHA: {
                "title": "Add changelog",
                "message": "Add changelog\n\nFirst release.",
                "author_name": "Jane Doe",
                "author_email": "jane@example.com",
                "authored_date": "2024-01-02T03:04:05+00:00",
                "files": ["CHANGELOG", "README.md", "app/models/user.rb"],
            },
            ISSUE_SHA: {
                "title": "Add project model",
                "files": ["README.md", "app/models/project.rb", "app/models/user.rb"],
            },
        },
    }


@pytest.fixture
def snapshot_repo(snapshot_data) -> SnapshotRepository:
    return SnapshotRepository(snapshot_data, name="gitlabhq")


def _git(cwd: Path, *args: str) -> str:
    env = dict(os.environ)
    env.update({
        "GIT_AUTHOR_NAME": "Jane Doe",
        "GIT_AUTHOR_EMAIL": "jane@example.com",
        "GIT_COMMITTER_NAME": "Jane Doe",
        "GIT_COMMITTER_EMAIL": "jane@example.com",
        "GIT_CONFIG_NOSYSTEM": "1",
        "HOME": str(cwd),
    })
    result = subprocess.run(
        ["git", "-c", "commit.gpgsign=false", "-c", "tag.gpgsign=false", *args],
        cwd=cwd,
        env=env,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.strip()


@pytest.fixture
def git_repo_path(tmp_path) -> Path:
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    path = tmp_path / "repo"
    path.mkdir()
    _git(path, "init", "-q")
    _git(path, "checkout", "-q", "-b", "master")

    (path / "README.md").write_text("# demo\n", encoding="utf-8")
    (path / "app" / "models").mkdir(parents=True)
    (path / "app" / "models" / "user.rb").write_text("class User; end\n", encoding="utf-8")
    _git(path, "add", ".")
    _git(path, "commit", "-q", "-m", "Initial commit")
    _git(path, "tag", "v2.0.0")

    _git(path, "checkout", "-q", "-b", "issues/1234")
    (path / "app" / "models" / "project.rb").write_text("class Project; end\n", encoding="utf-8")
    _git(path, "add", ".")
    _git(path, "commit", "-q", "-m", "Add project model")
    _git(path, "checkout", "-q", "master")
    return path


@pytest.fixture
def git_repo(git_repo_path) -> GitRepository:
    return GitRepository(git_repo_path, name="demo")


@pytest.fixture
def git_head(git_repo_path) -> str:
    return _git(git_repo_path, "rev-parse", "HEAD")
