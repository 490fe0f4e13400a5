"""Project configuration files (TOML)."""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from scmlink_core.errors import ConfigurationError
from scmlink_core.vcs import SourceControl, SourceControlRegistry, create_source_control

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "scmlink.toml"
ENV_CONFIG_PATH = "SCMLINK_CONFIG"

TEMPLATE_CONFIG: Dict[str, Any] = {
    "project": {
        "name": "my-project",
        "working_directory": "work/my-project",
    },
    "source_control": {
        "type": "svn",
        "executable": "svn",
        "trunk_url": "https://svn.example.com/repo/trunk",
        "username": "builder",
        "password": "env:SCMLINK_SVN_PASSWORD",
        "tag_on_success": True,
        "tag_base_url": "https://svn.example.com/repo/tags",
        "auto_get_source": True,
    },
}


class ProjectSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1)
    working_directory: str = "."


class ProjectConfig(BaseModel):
    """Parsed project file: project settings plus the raw source control table."""

    model_config = ConfigDict(extra="forbid")

    project: ProjectSettings
    source_control: Dict[str, Any] = Field(default_factory=lambda: {"type": "nullsourcecontrol"})

    def create_source_control(self, registry: Optional[SourceControlRegistry] = None) -> SourceControl:
        return create_source_control(self.source_control, registry)


def resolve_config_path(config_path: Optional[Path] = None, base: Optional[Path] = None) -> Path:
    raw = str(config_path) if config_path else os.getenv(ENV_CONFIG_PATH) or DEFAULT_CONFIG_PATH
    path = Path(raw)
    if not path.is_absolute():
        path = ((base or Path.cwd()) / path).resolve()
    return path


def read_config_data(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise ConfigurationError(f"Config file not found: {path}")
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ConfigurationError(f"Invalid config TOML: {path} ({exc})") from exc


def _format_validation_error(exc: ValidationError) -> List[str]:
    errors = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err["loc"])
        errors.append(f"{location}: {err['msg']}" if location else err["msg"])
    return errors


def validate_project_config(
    data: Dict[str, Any], registry: Optional[SourceControlRegistry] = None
) -> List[str]:
    """Return human-readable problems with ``data``; empty when valid."""
    try:
        config = ProjectConfig.model_validate(data)
    except ValidationError as exc:
        return _format_validation_error(exc)
    try:
        config.create_source_control(registry)
    except ConfigurationError as exc:
        return [str(exc)]
    return []


def load_project_config(config_path: Optional[Path] = None) -> ProjectConfig:
    """Load and validate a project file.

    Raises:
        ConfigurationError: If the file is missing, not TOML, or fails validation
    """
    path = resolve_config_path(config_path)
    data = read_config_data(path)
    try:
        config = ProjectConfig.model_validate(data)
    except ValidationError as exc:
        problems = "; ".join(_format_validation_error(exc))
        raise ConfigurationError(f"Invalid config {path}: {problems}") from exc

    # Relative working directories are anchored at the config file.
    work = Path(config.project.working_directory)
    if not work.is_absolute():
        config.project.working_directory = str((path.parent / work).resolve())
    logger.debug(f"Loaded config for project {config.project.name} from {path}")
    return config
