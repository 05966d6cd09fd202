"""Shared fixtures for Pathway tests."""

import json
import sqlite3

import pytest

from pathway.classroom import COURSE_SCHEMA
from pathway.schemas import Course


@pytest.fixture
def course():
    return Course(id=7, fullname="Data Analysis", shortname="DA101")


@pytest.fixture
def course_db(tmp_path):
    """A course.db with one course: overview + 3 sections, one hidden section."""
    db_path = tmp_path / "course.db"
    conn = sqlite3.connect(db_path)
    conn.executescript(COURSE_SCHEMA)
    conn.execute(
        """INSERT INTO courses (id, fullname, shortname, completion_enabled, options)
           VALUES (?, ?, ?, ?, ?)""",
        (7, "Data Analysis", "DA101", 1,
         json.dumps({"pathwaysidebar": "right", "pathwayshowsection0": 1}))
    )
    sections = [
        (1, 0, "", 1),
        (2, 1, "Getting set up", 1),
        (3, 2, "", 1),
        (4, 3, "Hidden", 0),
    ]
    conn.executemany(
        "INSERT INTO sections (id, course_id, number, name, visible) VALUES (?, 7, ?, ?, ?)",
        sections,
    )
    activities = [
        ("news", 1, "News", 1, "none", 1),
        ("install", 2, "Install", 2, "manual", 1),
        ("setup-quiz", 2, "Setup quiz", 1, "automatic", 1),
        ("hidden-page", 2, "Hidden page", 3, "manual", 0),
        ("csv", 3, "CSV", 1, "manual", 1),
        ("draft", 4, "Draft", 1, "manual", 1),
    ]
    conn.executemany(
        """INSERT INTO activities (id, course_id, section_id, name, position, tracking, visible)
           VALUES (?, 7, ?, ?, ?, ?, ?)""",
        activities,
    )
    images = [
        (2, "/", "old.png", 0),
        (2, "/", "new.png", 5),
        (3, "/", "notes.pdf", 0),
        (3, "/banners/", "loading data.jpg", 0),
    ]
    conn.executemany(
        """INSERT INTO section_images (course_id, section_id, filepath, filename, sortorder)
           VALUES (7, ?, ?, ?, ?)""",
        images,
    )
    conn.execute("INSERT INTO metadata (key, value) VALUES ('courses', '1')")
    conn.commit()
    conn.close()
    return db_path
