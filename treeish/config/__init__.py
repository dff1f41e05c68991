"""Settings package.

The CLI and the web app import from `treeish.config`.
"""

from .loader import (
    ConfigValidationError,
    load_settings,
    read_mapping,
    settings_from_env,
    validate_settings,
)
from .schema import RepositorySettings, Settings

__all__ = [
    "ConfigValidationError",
    "RepositorySettings",
    "Settings",
    "load_settings",
    "read_mapping",
    "settings_from_env",
    "validate_settings",
]
