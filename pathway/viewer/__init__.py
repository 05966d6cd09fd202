"""
Pathway Viewer - Compose course pages for display.

This module provides:
- Section display names and view URLs
- Sidebar status indicators
- CourseView assembly from live platform state
"""

from .content import (
    section_name,
    view_url,
    make_view_url,
    section_from_url,
    status_indicator,
    build_course_view,
    load_course_view,
    COURSE_VIEW_PATH,
)

__all__ = [
    "section_name",
    "view_url",
    "make_view_url",
    "section_from_url",
    "status_indicator",
    "build_course_view",
    "load_course_view",
    "COURSE_VIEW_PATH",
]
