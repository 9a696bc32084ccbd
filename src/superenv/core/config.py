"""
Project settings for superenv.

Paths are resolved against an explicit project root. A few environment
variables override the defaults:

    SUPERENV_DIR=.superenv     store directory name
    SUPERENV_ENV_FILE=.env     working file name
    SUPERENV_HISTORY=0         disable the activity log
"""

import os
from dataclasses import dataclass
from pathlib import Path


DEFAULT_STORE_DIR = ".superenv"
DEFAULT_ENV_FILE = ".env"
GITIGNORE_FILE = ".gitignore"


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() not in {"0", "false", "no", "off", ""}


def _env_str(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()


@dataclass
class Settings:
    """Resolved locations and switches for one project."""
    project_root: Path
    store_dir: str = DEFAULT_STORE_DIR
    env_file: str = DEFAULT_ENV_FILE
    record_history: bool = True

    @property
    def store_root(self) -> Path:
        return self.project_root / self.store_dir

    @property
    def env_path(self) -> Path:
        return self.project_root / self.env_file

    @property
    def gitignore_path(self) -> Path:
        return self.project_root / GITIGNORE_FILE


def load_settings(project_root: str = ".") -> Settings:
    """
    Build settings for a project, applying environment overrides.

    Args:
        project_root: Project root directory

    Returns:
        Settings instance
    """
    return Settings(
        project_root=Path(project_root),
        store_dir=_env_str("SUPERENV_DIR", DEFAULT_STORE_DIR),
        env_file=_env_str("SUPERENV_ENV_FILE", DEFAULT_ENV_FILE),
        record_history=_env_bool("SUPERENV_HISTORY", True),
    )
