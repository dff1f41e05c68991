from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from .schema import Settings

logger = logging.getLogger(__name__)

ENV_CONFIG = "TREEISH_CONFIG"
ENV_SHA_LENGTH = "TREEISH_SHA_LENGTH"
ENV_LOG_LEVEL = "TREEISH_LOG_LEVEL"
ENV_MAX_REQUEST_BYTES = "MAX_REQUEST_BYTES"


class ConfigValidationError(Exception):
    pass


def read_mapping(path: Path) -> Dict[str, Any]:
    """Read a YAML or JSON file whose top level must be a mapping."""
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    raw_text = path.read_text(encoding="utf-8")

    if path.suffix.lower() == ".json":
        raw = json.loads(raw_text) or {}
    else:
        try:
            raw = yaml.safe_load(raw_text) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"{path}: {e}") from e

    if not isinstance(raw, dict):
        raise ValueError(f"{path} must be a mapping/object at top level.")
    return raw


def validate_settings(raw: Dict[str, Any]) -> Settings:
    try:
        return Settings(**raw)
    except ValidationError as e:
        raise ConfigValidationError(str(e)) from e


def load_settings(path: str | Path) -> Settings:
    p = Path(path)
    raw = read_mapping(p)
    settings = validate_settings(raw)

    # repository paths are relative to the config file, not the cwd
    base = p.resolve().parent
    for repo in settings.repositories.values():
        if not Path(repo.path).is_absolute():
            repo.path = str(base / repo.path)

    logger.debug("Loaded settings from %s (%d repositories)", p, len(settings.repositories))
    return settings


def settings_from_env(environ: Optional[Dict[str, str]] = None) -> Settings:
    env = os.environ if environ is None else environ

    config_path = env.get(ENV_CONFIG)
    settings = load_settings(config_path) if config_path else Settings()

    overrides: Dict[str, Any] = {}
    if env.get(ENV_SHA_LENGTH):
        overrides["sha_length"] = env[ENV_SHA_LENGTH]
    if env.get(ENV_LOG_LEVEL):
        overrides["log_level"] = env[ENV_LOG_LEVEL]
    if env.get(ENV_MAX_REQUEST_BYTES):
        overrides["max_request_bytes"] = env[ENV_MAX_REQUEST_BYTES]

    if not overrides:
        return settings

    merged = settings.model_dump()
    merged.update(overrides)
    return validate_settings(merged)
