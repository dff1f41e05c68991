"""In-memory repository described by a plain mapping.

Layout (YAML shown)::

    branches:
      master: 0f1e...        # ref name -> commit id
      issues/1234: 9a8b...
    tags:
      v2.0.0: 0f1e...
    commits:
      0f1e...:
        title: Initial commit
        author_name: Jane
        files:
          - README.md
          - app/models/project.rb
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Set

from ..config.loader import read_mapping
from ..models import Commit, Tree, TreeEntry
from .base import Repository, RepositoryError


def _str_map(node: Any, key: str) -> Dict[str, str]:
    if node is None:
        return {}
    if not isinstance(node, dict):
        raise RepositoryError(f"`{key}` must map ref names to commit ids.")
    return {str(k): str(v) for k, v in node.items()}


class SnapshotRepository(Repository):
    def __init__(self, data: Dict[str, Any], *, name: str = "snapshot"):
        self.name = name
        self._branches = _str_map(data.get("branches"), "branches")
        self._tags = _str_map(data.get("tags"), "tags")

        commits = data.get("commits") or {}
        if not isinstance(commits, dict):
            raise RepositoryError("`commits` must map commit ids to commit objects.")

        self._commits: Dict[str, Commit] = {}
        self._files: Dict[str, List[str]] = {}
        for sha, raw in commits.items():
            raw = raw or {}
            if not isinstance(raw, dict):
                raise RepositoryError(f"Commit {sha} must be a mapping.")
            sha = str(sha)
            self._commits[sha] = Commit(
                id=sha,
                title=str(raw.get("title", "")),
                message=str(raw.get("message", raw.get("title", ""))),
                author_name=raw.get("author_name"),
                author_email=raw.get("author_email"),
                authored_date=str(raw["authored_date"]) if raw.get("authored_date") else None,
            )
            self._files[sha] = sorted(str(f).strip("/") for f in raw.get("files") or [])

        for ref, sha in {**self._branches, **self._tags}.items():
            if sha not in self._commits:
                raise RepositoryError(f"Ref {ref} points at unknown commit {sha}.")

    @classmethod
    def from_file(cls, path: str | Path, *, name: Optional[str] = None) -> "SnapshotRepository":
        p = Path(path)
        try:
            data = read_mapping(p)
        except (OSError, ValueError) as e:
            raise RepositoryError(f"Cannot read snapshot {p}: {e}") from e
        return cls(data, name=name or p.stem)

    def branches(self) -> List[str]:
        return list(self._branches)

    def tags(self) -> List[str]:
        return list(self._tags)

    def commit(self, ref: str) -> Optional[Commit]:
        if ref in self._commits:
            return self._commits[ref]
        sha = self._tags.get(ref) or self._branches.get(ref)
        return self._commits.get(sha) if sha else None

    def tree(self, commit: Commit, ref: str, path: str) -> Tree:
        path = path.strip("/")
        files = self._files.get(commit.id, [])

        if path in files:
            return Tree(ref=ref, path=path, type="blob")

        prefix = f"{path}/" if path else ""
        seen: Set[str] = set()
        entries: List[TreeEntry] = []
        for f in files:
            if not f.startswith(prefix):
                continue
            name, sep, _ = f[len(prefix):].partition("/")
            if name in seen:
                continue
            seen.add(name)
            entries.append(TreeEntry(
                name=name,
                path=prefix + name,
                type="tree" if sep else "blob",
            ))

        if not entries:
            return Tree(ref=ref, path=path)
        return Tree(ref=ref, path=path, type="tree", entries=entries)
