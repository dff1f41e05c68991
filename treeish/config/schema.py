from __future__ import annotations

from typing import Dict, Literal
from pydantic import BaseModel, Field

from ..ref_extractor import DEFAULT_SHA_LENGTH


class RepositorySettings(BaseModel):
    backend: Literal["git", "snapshot"] = Field(
        "git",
        description="`git` for a work tree on disk, `snapshot` for a YAML/JSON repository description."
    )
    path: str = Field(
        ...,
        description="Path to the git work tree or snapshot file. Relative paths resolve against the config file."
    )

    class Config:
        extra = "forbid"


class Settings(BaseModel):
    sha_length: int = Field(
        DEFAULT_SHA_LENGTH,
        ge=1,
        description="Length of a full commit id. Inputs starting with that many alphanumerics skip the ref lookup."
    )
    log_level: str = Field(
        "INFO",
        description="Root log level (DEBUG, INFO, WARNING, ERROR)."
    )
    max_request_bytes: int = Field(
        1 * 1024 * 1024,
        ge=1,
        description="Maximum accepted HTTP request body size."
    )
    repositories: Dict[str, RepositorySettings] = Field(
        default_factory=dict,
        description="Projects served by the API, keyed by project name."
    )

    class Config:
        extra = "forbid"
