"""
CourseLoader - Load course structure from course.db SQLite database.

Provides read-only access to:
- Courses with their stored format options
- Sections in course order
- Activities with their tracking mode
- Section header images
"""

import json
import sqlite3
from pathlib import Path
from typing import Optional

from pathway.config import resolve_course_config
from pathway.schemas import Activity, Course, CourseConfig, Section, TrackingMode

from .images import ACCEPTED_IMAGE_TYPES, section_image_url


COURSE_SCHEMA = """
-- Metadata table
CREATE TABLE IF NOT EXISTS metadata (
    key TEXT PRIMARY KEY,
    value TEXT
);

-- Courses table
CREATE TABLE IF NOT EXISTS courses (
    id INTEGER PRIMARY KEY,
    fullname TEXT NOT NULL,
    shortname TEXT,
    completion_enabled INTEGER NOT NULL DEFAULT 1,
    options JSON NOT NULL DEFAULT '{}'
);

-- Sections table (number 0 is the overview)
CREATE TABLE IF NOT EXISTS sections (
    id INTEGER PRIMARY KEY,
    course_id INTEGER NOT NULL REFERENCES courses(id),
    number INTEGER NOT NULL,
    name TEXT NOT NULL DEFAULT '',
    visible INTEGER NOT NULL DEFAULT 1,
    UNIQUE (course_id, number)
);

-- Activities table
CREATE TABLE IF NOT EXISTS activities (
    id TEXT PRIMARY KEY,
    course_id INTEGER NOT NULL REFERENCES courses(id),
    section_id INTEGER NOT NULL REFERENCES sections(id),
    name TEXT NOT NULL DEFAULT '',
    position INTEGER NOT NULL DEFAULT 0,
    tracking TEXT NOT NULL DEFAULT 'none',
    visible INTEGER NOT NULL DEFAULT 1
);

-- Section header images
CREATE TABLE IF NOT EXISTS section_images (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    course_id INTEGER NOT NULL REFERENCES courses(id),
    section_id INTEGER NOT NULL REFERENCES sections(id),
    filepath TEXT NOT NULL DEFAULT '/',
    filename TEXT NOT NULL,
    sortorder INTEGER NOT NULL DEFAULT 0
);

CREATE INDEX IF NOT EXISTS idx_sections_course ON sections(course_id, number);
CREATE INDEX IF NOT EXISTS idx_activities_section ON activities(section_id, position);
CREATE INDEX IF NOT EXISTS idx_section_images_course ON section_images(course_id, section_id);
"""


def _is_accepted_image(filename: str) -> bool:
    return Path(filename).suffix.lower() in ACCEPTED_IMAGE_TYPES


class CourseLoader:
    """
    Load course data from SQLite database.

    Thread-safe for read operations. Each method creates a new connection.
    """

    def __init__(self, db_path: str | Path, site_defaults: Optional[CourseConfig] = None):
        """
        Initialize loader with path to course.db.

        Args:
            db_path: Path to course.db file
            site_defaults: Site-wide format defaults applied under course options
        """
        self.db_path = Path(db_path)
        if not self.db_path.exists():
            raise FileNotFoundError(f"Course database not found: {db_path}")
        self.site_defaults = site_defaults

    def _get_connection(self) -> sqlite3.Connection:
        """Get a new database connection."""
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        return conn

    # -------------------------------------------------------------------------
    # Metadata
    # -------------------------------------------------------------------------

    def get_metadata(self, key: str) -> Optional[str]:
        """Get metadata value by key."""
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                "SELECT value FROM metadata WHERE key = ?", (key,)
            )
            row = cursor.fetchone()
            return row["value"] if row else None
        finally:
            conn.close()

    # -------------------------------------------------------------------------
    # Courses
    # -------------------------------------------------------------------------

    def _row_to_course(self, row: sqlite3.Row) -> Course:
        options = json.loads(row["options"]) if row["options"] else {}
        return Course(
            id=row["id"],
            fullname=row["fullname"],
            shortname=row["shortname"] or "",
            completion_enabled=bool(row["completion_enabled"]),
            config=resolve_course_config(options, self.site_defaults),
        )

    def get_course(self, course_id: int) -> Optional[Course]:
        """Get a single course by ID."""
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                """SELECT id, fullname, shortname, completion_enabled, options
                   FROM courses WHERE id = ?""",
                (course_id,)
            )
            row = cursor.fetchone()
            return self._row_to_course(row) if row else None
        finally:
            conn.close()

    def get_courses(self) -> list[Course]:
        """Get all courses ordered by ID."""
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                """SELECT id, fullname, shortname, completion_enabled, options
                   FROM courses ORDER BY id"""
            )
            return [self._row_to_course(row) for row in cursor.fetchall()]
        finally:
            conn.close()

    # -------------------------------------------------------------------------
    # Sections
    # -------------------------------------------------------------------------

    def get_sections(self, course_id: int) -> list[Section]:
        """Get all sections of a course ordered by number, with activity order."""
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                """SELECT id, number, name, visible FROM sections
                   WHERE course_id = ? ORDER BY number""",
                (course_id,)
            )
            section_rows = cursor.fetchall()

            cursor = conn.execute(
                """SELECT id, section_id FROM activities
                   WHERE course_id = ? ORDER BY section_id, position, id""",
                (course_id,)
            )
            activity_ids: dict[int, list[str]] = {}
            for row in cursor.fetchall():
                activity_ids.setdefault(row["section_id"], []).append(row["id"])

            return [
                Section(
                    id=row["id"],
                    number=row["number"],
                    name=row["name"] or "",
                    user_visible=bool(row["visible"]),
                    activity_ids=activity_ids.get(row["id"], []),
                )
                for row in section_rows
            ]
        finally:
            conn.close()

    def get_section(self, course_id: int, number: int) -> Optional[Section]:
        """Get a single section by its number within the course."""
        for section in self.get_sections(course_id):
            if section.number == number:
                return section
        return None

    # -------------------------------------------------------------------------
    # Activities
    # -------------------------------------------------------------------------

    def get_activities(self, course_id: int) -> dict[str, Activity]:
        """Get all activities of a course keyed by ID."""
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                """SELECT id, section_id, name, tracking, visible FROM activities
                   WHERE course_id = ? ORDER BY section_id, position, id""",
                (course_id,)
            )
            return {
                row["id"]: Activity(
                    id=row["id"],
                    section_id=row["section_id"],
                    name=row["name"] or "",
                    tracking=TrackingMode(row["tracking"]),
                    user_visible=bool(row["visible"]),
                )
                for row in cursor.fetchall()
            }
        finally:
            conn.close()

    # -------------------------------------------------------------------------
    # Section images
    # -------------------------------------------------------------------------

    def get_section_image(self, course_id: int, section_id: int) -> Optional[str]:
        """Get the header image URL for one section, or None if unset."""
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                """SELECT filepath, filename FROM section_images
                   WHERE course_id = ? AND section_id = ?
                   ORDER BY sortorder DESC, id ASC""",
                (course_id, section_id)
            )
            for row in cursor.fetchall():
                if _is_accepted_image(row["filename"]):
                    return section_image_url(
                        course_id, section_id, row["filepath"], row["filename"]
                    )
            return None
        finally:
            conn.close()

    def get_all_section_images(self, course_id: int) -> dict[int, str]:
        """
        Get image URLs for all sections in a course, keyed by section ID.

        Fetches all files in one query; only the first file per section
        counts when duplicates exist.
        """
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                """SELECT section_id, filepath, filename FROM section_images
                   WHERE course_id = ?
                   ORDER BY section_id, sortorder DESC, id ASC""",
                (course_id,)
            )
            images: dict[int, str] = {}
            for row in cursor.fetchall():
                section_id = row["section_id"]
                if section_id in images or not _is_accepted_image(row["filename"]):
                    continue
                images[section_id] = section_image_url(
                    course_id, section_id, row["filepath"], row["filename"]
                )
            return images
        finally:
            conn.close()
