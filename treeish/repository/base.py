from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from ..models import Commit, Tree


class RepositoryError(Exception):
    """The backend could not answer (git missing, not a repository, corrupt data)."""


class Repository(ABC):
    name: str

    @abstractmethod
    def branches(self) -> List[str]:
        raise NotImplementedError

    @abstractmethod
    def tags(self) -> List[str]:
        raise NotImplementedError

    @abstractmethod
    def commit(self, ref: str) -> Optional[Commit]:
        """Return the commit ``ref`` points at, or None when it names nothing."""
        raise NotImplementedError

    @abstractmethod
    def tree(self, commit: Commit, ref: str, path: str) -> Tree:
        """Return the tree or blob at ``path`` in ``commit``; invalid when missing."""
        raise NotImplementedError

    def ref_names(self) -> List[str]:
        return self.branches() + self.tags()
