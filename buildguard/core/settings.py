"""
Project Settings
================
Optional per-project overrides read from ``buildguard.yml`` at the
project root.

Example::

    spotbugs_report: build/reports/spotbugs/main.xml
    factories_file: src/main/resources/META-INF/spring.factories
    clean_patterns:
      - "*.log"
      - "*.gz"

A missing file yields the defaults. A file that is not valid YAML, or
whose values do not match the schema, raises SettingsError.
"""
import os
import logging
from typing import List

import yaml
from pydantic import BaseModel, Field, ValidationError

from buildguard.core.constants import (
    DEFAULT_CLEAN_PATTERNS,
    DEFAULT_FACTORIES_FILE,
    DEFAULT_SPOTBUGS_REPORT,
    SETTINGS_FILE_NAME,
)
from buildguard.core.errors import SettingsError

logger = logging.getLogger(__name__)


class ProjectSettings(BaseModel):
    spotbugs_report: str = DEFAULT_SPOTBUGS_REPORT
    factories_file: str = DEFAULT_FACTORIES_FILE
    clean_patterns: List[str] = Field(default_factory=lambda: list(DEFAULT_CLEAN_PATTERNS))

    def resolve(self, project_dir: str, relative: str) -> str:
        """Anchor a settings path at the project directory unless already absolute."""
        if os.path.isabs(relative):
            return relative
        return os.path.join(project_dir, relative)


def load_project_settings(project_dir: str) -> ProjectSettings:
    """
    Read ``buildguard.yml`` from project_dir.

    Parameters
    ----------
    project_dir : str
        Project root directory.

    Returns
    -------
    ProjectSettings
        Parsed settings, or defaults if the file does not exist.
    """
    settings_path = os.path.join(project_dir, SETTINGS_FILE_NAME)
    if not os.path.isfile(settings_path):
        logger.debug("No %s in %s, using defaults", SETTINGS_FILE_NAME, project_dir)
        return ProjectSettings()

    try:
        with open(settings_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise SettingsError(f"Invalid YAML in {settings_path}: {e}") from e

    if not isinstance(data, dict):
        raise SettingsError(f"{settings_path} must contain a mapping, got {type(data).__name__}")

    try:
        settings = ProjectSettings.model_validate(data)
    except ValidationError as e:
        raise SettingsError(f"Invalid settings in {settings_path}: {e}") from e

    logger.info("Settings loaded from %s", settings_path)
    return settings
