"""
Settings loader — reads rampante.yml into a Settings model.

The file is optional.  Resolution order:
    1. explicit path (``--config``) — must exist
    2. rampante.yml found by walking up from the start directory
    3. built-in defaults
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError as PydanticValidationError

from rampante.core.errors import DependencyMissing, ValidationError, wrap_os_error
from rampante.core.models.settings import Settings

logger = logging.getLogger(__name__)

SETTINGS_FILE = "rampante.yml"


def find_settings_file(start_dir: Path | None = None) -> Path | None:
    """Search for rampante.yml starting from the given directory, walking up."""
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / SETTINGS_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_settings(path: Path | None = None, start_dir: Path | None = None) -> Settings:
    """Load and validate settings.

    Args:
        path: Explicit settings file. Missing file is an error.
        start_dir: Where to start the upward search when ``path`` is None.

    Raises:
        DependencyMissing: explicit path does not exist.
        ValidationError: YAML or schema is invalid.
    """
    if path is None:
        path = find_settings_file(start_dir)
        if path is None:
            logger.debug("No %s found, using defaults", SETTINGS_FILE)
            return Settings()
    elif not path.is_file():
        raise DependencyMissing(
            f"Settings file not found: {path}",
            remediation="Pass an existing file to --config or omit the option.",
        )

    logger.debug("Loading settings from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise wrap_os_error(e, path, "read") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ValidationError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return Settings()
    if not isinstance(data, dict):
        raise ValidationError(
            f"Expected a YAML mapping in {path}, got {type(data).__name__}"
        )

    try:
        settings = Settings.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid settings in {path}: {e}") from e

    logger.info("Loaded settings from %s", path)
    return settings
