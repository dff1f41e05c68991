"""Repository backed by a git work tree, read through the `git` executable."""

from __future__ import annotations

import logging
import subprocess
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from ..models import Commit, Tree, TreeEntry
from .base import Repository, RepositoryError

logger = logging.getLogger(__name__)

GIT_TIMEOUT_SECONDS = 10

# %x00 separated: id, author name, author email, author timestamp, subject, body
_SHOW_FORMAT = "%H%x00%an%x00%ae%x00%at%x00%s%x00%B"


class GitRepository(Repository):
    def __init__(self, path: str | Path, *, name: Optional[str] = None, timeout: float = GIT_TIMEOUT_SECONDS):
        self.path = Path(path).resolve()
        self.name = name or self.path.name
        self.timeout = timeout

        if not self.path.is_dir():
            raise RepositoryError(f"Repository path does not exist: {self.path}")
        inside = self._run(["rev-parse", "--is-inside-work-tree"], check=False)
        if inside != "true":
            raise RepositoryError(f"Not a git work tree: {self.path}")

    def _run(self, args: List[str], *, check: bool = True) -> Optional[str]:
        """Run git and return stdout without the trailing newline.

        With ``check`` false a non-zero exit returns None instead of raising.
        """
        try:
            result = subprocess.run(
                ["git", *args],
                cwd=self.path,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            raise RepositoryError("git executable not found") from e
        except subprocess.TimeoutExpired as e:
            raise RepositoryError(f"git {args[0]} timed out after {self.timeout}s") from e

        if result.returncode != 0:
            if check:
                raise RepositoryError(f"git {' '.join(args)} failed: {result.stderr.strip()}")
            logger.debug("git %s exited %s: %s", " ".join(args), result.returncode, result.stderr.strip())
            return None
        return result.stdout.rstrip("\n")

    def _ref_list(self, namespace: str) -> List[str]:
        out = self._run(["for-each-ref", "--format=%(refname:lstrip=2)", namespace])
        return [line for line in (out or "").splitlines() if line]

    def branches(self) -> List[str]:
        return self._ref_list("refs/heads")

    def tags(self) -> List[str]:
        return self._ref_list("refs/tags")

    def commit(self, ref: str) -> Optional[Commit]:
        if not ref or ref.startswith("-"):
            return None
        sha = self._run(["rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}"], check=False)
        if not sha:
            return None

        out = self._run(["show", "-s", f"--format={_SHOW_FORMAT}", sha])
        parts = (out or "").split("\x00")
        if len(parts) < 6:
            raise RepositoryError(f"Unexpected `git show` output for {sha}")

        commit_id, author_name, author_email, timestamp, subject, body = parts[:6]
        authored = None
        if timestamp.isdigit():
            authored = datetime.fromtimestamp(int(timestamp), tz=timezone.utc).isoformat()

        return Commit(
            id=commit_id,
            title=subject,
            message=body.strip(),
            author_name=author_name or None,
            author_email=author_email or None,
            authored_date=authored,
        )

    def tree(self, commit: Commit, ref: str, path: str) -> Tree:
        path = path.strip("/")
        object_name = f"{commit.id}:{path}"

        obj_type = self._run(["cat-file", "-t", object_name], check=False)
        if obj_type == "blob":
            return Tree(ref=ref, path=path, type="blob")
        if obj_type != "tree":
            return Tree(ref=ref, path=path)

        out = self._run(["ls-tree", "-z", object_name])
        entries: List[TreeEntry] = []
        for record in (out or "").split("\x00"):
            if not record:
                continue
            meta, _, name = record.partition("\t")
            fields = meta.split()
            if len(fields) < 3:
                continue
            mode, kind = fields[0], fields[1]
            if kind not in ("tree", "blob"):
                # submodule commits have no tree of their own here
                continue
            entries.append(TreeEntry(
                name=name,
                path=f"{path}/{name}" if path else name,
                type=kind,
                mode=mode,
            ))
        return Tree(ref=ref, path=path, type="tree", entries=entries)
