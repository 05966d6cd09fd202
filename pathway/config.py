"""
Configuration for Pathway.

Site-wide defaults for the course format live in a YAML file; individual
courses override them with their own stored options. Paths can be set in
the environment or a .env file:

    PATHWAY_SETTINGS       site defaults YAML (default: config/pathway.yaml)
    PATHWAY_COURSE_DB      course content database (default: data/course.db)
    PATHWAY_PROGRESS_DB    learner progress database (default: ~/.pathway/progress.db)
"""

import os
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml
from dotenv import load_dotenv

from pathway.schemas import CourseConfig


PROJECT_ROOT = Path(__file__).parent.parent
load_dotenv(PROJECT_ROOT / ".env")

DEFAULT_SETTINGS_PATH = PROJECT_ROOT / "config" / "pathway.yaml"
DEFAULT_COURSE_DB = PROJECT_ROOT / "data" / "course.db"
DEFAULT_PROGRESS_DIR = Path.home() / ".pathway"
DEFAULT_PROGRESS_DB = DEFAULT_PROGRESS_DIR / "progress.db"

# Legacy stored option names accepted alongside the CourseConfig field names
OPTION_ALIASES = {
    "pathwaysidebar": "sidebar_position",
    "pathwayshowprogress": "show_progress",
    "pathwayshowimages": "show_images",
    "pathwayshowsection0": "include_overview_section",
    "coursedisplay": "course_display",
}

COURSE_DISPLAY_CODES = {0: "single_page", 1: "multi_page"}


def get_course_db_path() -> Path:
    return Path(os.environ.get("PATHWAY_COURSE_DB") or DEFAULT_COURSE_DB)


def get_progress_db_path() -> Path:
    return Path(os.environ.get("PATHWAY_PROGRESS_DB") or DEFAULT_PROGRESS_DB)


def _normalize_options(options: Mapping[str, Any]) -> dict[str, Any]:
    """Map stored option names onto CourseConfig fields, dropping unset values."""
    result = {}
    for key, value in options.items():
        field = OPTION_ALIASES.get(key, key)
        if field not in CourseConfig.model_fields or value is None or value == "":
            continue
        if field == "course_display" and isinstance(value, int):
            value = COURSE_DISPLAY_CODES.get(value, "multi_page")
        result[field] = value
    return result


def load_site_defaults(path: Optional[Path] = None) -> CourseConfig:
    """
    Load site-wide course format defaults.

    Args:
        path: YAML file to read. When omitted, PATHWAY_SETTINGS or
            DEFAULT_SETTINGS_PATH is used, and a missing file means
            built-in defaults.

    Raises:
        FileNotFoundError: If an explicitly given file doesn't exist
        yaml.YAMLError: If YAML parsing fails
    """
    if path is None:
        env_path = os.environ.get("PATHWAY_SETTINGS")
        file_path = Path(env_path) if env_path else DEFAULT_SETTINGS_PATH
        if not file_path.exists():
            return CourseConfig()
    else:
        file_path = Path(path)
        if not file_path.exists():
            raise FileNotFoundError(f"Settings file not found: {file_path}")

    with open(file_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    # Settings may be nested under a "course_format" key or sit at top level
    section = data.get("course_format", data)
    return CourseConfig(**_normalize_options(section))


def resolve_course_config(
    options: Optional[Mapping[str, Any]],
    site_defaults: Optional[CourseConfig] = None,
) -> CourseConfig:
    """
    Merge a course's stored options over the site defaults.

    Unset options fall back to the site default; integer toggles (1/0) are
    accepted for the boolean settings.
    """
    base = (site_defaults or CourseConfig()).model_dump()
    base.update(_normalize_options(options or {}))
    return CourseConfig(**base)
