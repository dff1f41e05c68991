"""Repository backends.

The binder only needs the `Repository` interface; `open_repository` builds a
concrete backend from a settings entry.
"""

from __future__ import annotations

from ..config.schema import RepositorySettings
from .base import Repository, RepositoryError
from .git import GitRepository
from .snapshot import SnapshotRepository


def open_repository(name: str, settings: RepositorySettings) -> Repository:
    if settings.backend == "snapshot":
        return SnapshotRepository.from_file(settings.path, name=name)
    return GitRepository(settings.path, name=name)


__all__ = [
    "GitRepository",
    "Repository",
    "RepositoryError",
    "SnapshotRepository",
    "open_repository",
]
