#!/usr/bin/env python3
"""
compile_course.py - Build course.db from a YAML course definition.

Compiles one or more course definitions (course options, sections,
activities, section images) into the SQLite database read at runtime.

Usage:
  python scripts/compile_course.py courses/intro.yaml
  python scripts/compile_course.py courses/*.yaml --output data/course.db
"""

import argparse
import json
import logging
import sqlite3
import sys
from datetime import datetime
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

import yaml

from pathway.classroom import ACCEPTED_IMAGE_TYPES, COURSE_SCHEMA
from pathway.schemas import TrackingMode

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Data Loading
# -----------------------------------------------------------------------------

def load_definition(path: Path) -> dict:
    """Load a YAML course definition."""
    with open(path, "r", encoding="utf-8") as f:
        definition = yaml.safe_load(f) or {}
    if "course" not in definition:
        raise ValueError(f"{path}: missing 'course' block")
    return definition


# -----------------------------------------------------------------------------
# Database Population
# -----------------------------------------------------------------------------

def create_database(db_path: Path) -> sqlite3.Connection:
    """Create database and schema, replacing any file already at db_path."""
    if db_path.exists():
        db_path.unlink()

    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(db_path)
    conn.executescript(COURSE_SCHEMA)
    conn.commit()
    logger.info(f"Created database schema: {db_path}")
    return conn


def populate_course(conn: sqlite3.Connection, definition: dict) -> dict:
    """Insert one course with its sections, activities and images."""
    course = definition["course"]
    course_id = int(course["id"])
    conn.execute(
        """INSERT INTO courses (id, fullname, shortname, completion_enabled, options)
           VALUES (?, ?, ?, ?, ?)""",
        (
            course_id,
            course["fullname"],
            course.get("shortname", ""),
            1 if course.get("completion_enabled", True) else 0,
            json.dumps(course.get("options", {})),
        )
    )

    sections = sorted(definition.get("sections", []), key=lambda s: s["number"])
    # Section 0 always exists
    if not sections or sections[0]["number"] != 0:
        sections.insert(0, {"number": 0})

    counts = {"sections": 0, "activities": 0, "images": 0}
    for section in sections:
        cursor = conn.execute(
            """INSERT INTO sections (course_id, number, name, visible)
               VALUES (?, ?, ?, ?)""",
            (
                course_id,
                section["number"],
                section.get("name", ""),
                1 if section.get("visible", True) else 0,
            )
        )
        section_id = cursor.lastrowid
        counts["sections"] += 1

        for position, activity in enumerate(section.get("activities", []), 1):
            tracking = TrackingMode(activity.get("tracking", "none"))
            conn.execute(
                """INSERT INTO activities
                   (id, course_id, section_id, name, position, tracking, visible)
                   VALUES (?, ?, ?, ?, ?, ?, ?)""",
                (
                    activity["id"],
                    course_id,
                    section_id,
                    activity.get("name", activity["id"]),
                    position,
                    tracking.value,
                    1 if activity.get("visible", True) else 0,
                )
            )
            counts["activities"] += 1

        image = section.get("image")
        if image:
            filename = image["filename"] if isinstance(image, dict) else str(image)
            if Path(filename).suffix.lower() not in ACCEPTED_IMAGE_TYPES:
                logger.warning(f"  Skipping image {filename}: unsupported type")
                continue
            conn.execute(
                """INSERT INTO section_images (course_id, section_id, filepath, filename)
                   VALUES (?, ?, ?, ?)""",
                (
                    course_id,
                    section_id,
                    image.get("filepath", "/") if isinstance(image, dict) else "/",
                    filename,
                )
            )
            counts["images"] += 1

    conn.commit()
    logger.info(
        f"Inserted course {course_id}: {counts['sections']} sections, "
        f"{counts['activities']} activities, {counts['images']} images"
    )
    return counts


def populate_metadata(conn: sqlite3.Connection, stats: dict):
    """Store build metadata."""
    for key, value in stats.items():
        conn.execute(
            "INSERT OR REPLACE INTO metadata (key, value) VALUES (?, ?)",
            (key, str(value))
        )
    conn.commit()


# -----------------------------------------------------------------------------
# Compilation
# -----------------------------------------------------------------------------

def compile_courses(paths: list[Path], output: Path) -> dict:
    """
    Compile course definitions into a database at `output`.

    Every definition is loaded before anything is written, and the database
    is built beside `output` and moved into place only once it is complete,
    so a failed build leaves the previous database untouched.
    """
    definitions = []
    for path in paths:
        logger.info(f"Loading {path}...")
        definitions.append(load_definition(path))

    tmp_path = output.with_name(output.name + ".tmp")
    logger.info("Creating database...")
    conn = create_database(tmp_path)

    totals = {"courses": 0, "sections": 0, "activities": 0, "images": 0}
    try:
        for definition in definitions:
            counts = populate_course(conn, definition)
            totals["courses"] += 1
            for key, value in counts.items():
                totals[key] += value

        populate_metadata(conn, {**totals, "generated_at": datetime.now().isoformat()})
    except Exception:
        conn.close()
        tmp_path.unlink(missing_ok=True)
        raise
    conn.close()

    tmp_path.replace(output)
    return totals


# -----------------------------------------------------------------------------
# Main
# -----------------------------------------------------------------------------

def main():
    parser = argparse.ArgumentParser(description="Compile course definitions into course.db")
    parser.add_argument(
        "definitions",
        type=Path,
        nargs="+",
        help="YAML course definition files"
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=PROJECT_ROOT / "data" / "course.db",
        help="Output database path"
    )

    args = parser.parse_args()

    totals = compile_courses(args.definitions, args.output)

    logger.info("=" * 50)
    logger.info("COMPILATION COMPLETE")
    logger.info("=" * 50)
    logger.info(f"Database: {args.output}")
    logger.info(f"Courses: {totals['courses']}")
    logger.info(f"Sections: {totals['sections']}")
    logger.info(f"Activities: {totals['activities']}")


if __name__ == "__main__":
    main()
