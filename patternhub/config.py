"""
Runtime configuration for PatternHub.

Defaults live here as module constants. Entry points load a project .env
file with python-dotenv before calling load_settings(), so any of the
PATTERNHUB_* variables below can be set there or in the environment.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional


PROJECT_ROOT = Path(__file__).parent.parent

DEFAULT_DATA_DIR = Path.home() / ".patternhub"
DEFAULT_PROGRESS_DB = DEFAULT_DATA_DIR / "progress.db"
DEFAULT_CATALOG_PATH = Path(__file__).parent / "data" / "catalog.yaml"
DEFAULT_LESSONS_DIR = PROJECT_ROOT / "lessons"

# Fixed key of the single persisted progress record
PROGRESS_STORAGE_KEY = "designPatternsProgress"

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


@dataclass(frozen=True)
class Settings:
    """Resolved runtime settings."""
    progress_db: Path = DEFAULT_PROGRESS_DB
    catalog_path: Path = DEFAULT_CATALOG_PATH
    lessons_dir: Path = DEFAULT_LESSONS_DIR
    log_level: str = "INFO"


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from environment variables.

    Args:
        environ: Mapping to read from (default: os.environ)

    Returns:
        Settings with defaults for every unset variable
    """
    env = os.environ if environ is None else environ

    def path_or(name: str, default: Path) -> Path:
        value = env.get(name)
        return Path(value).expanduser() if value else default

    log_level = env.get("PATTERNHUB_LOG_LEVEL", "INFO").upper()
    if log_level not in logging.getLevelNamesMapping():
        raise ValueError(f"Unknown log level: {log_level}")

    return Settings(
        progress_db=path_or("PATTERNHUB_PROGRESS_DB", DEFAULT_PROGRESS_DB),
        catalog_path=path_or("PATTERNHUB_CATALOG", DEFAULT_CATALOG_PATH),
        lessons_dir=path_or("PATTERNHUB_LESSONS_DIR", DEFAULT_LESSONS_DIR),
        log_level=log_level,
    )


def configure_logging(settings: Settings) -> None:
    """Configure root logging the way all entry points share."""
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
