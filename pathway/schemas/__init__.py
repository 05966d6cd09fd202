"""
Pathway Schemas - Pydantic models for the course progress format.

This module exports all schema classes for:
- Course: course, format configuration, sections, activities
- Progress: completion aggregates, sidebar entries, navigation, course view
"""

# Course schemas
from .course import (
    CourseDisplay,
    SidebarPosition,
    TrackingMode,
    CompletionState,
    COMPLETED_STATES,
    OVERVIEW_SECTION,
    CourseConfig,
    Course,
    Section,
    Activity,
)

# Progress schemas
from .progress import (
    percent,
    CompletionAggregate,
    NavigationLink,
    SidebarEntry,
    SidebarProgress,
    CourseView,
)

__all__ = [
    # Course
    'CourseDisplay',
    'SidebarPosition',
    'TrackingMode',
    'CompletionState',
    'COMPLETED_STATES',
    'OVERVIEW_SECTION',
    'CourseConfig',
    'Course',
    'Section',
    'Activity',
    # Progress
    'percent',
    'CompletionAggregate',
    'NavigationLink',
    'SidebarEntry',
    'SidebarProgress',
    'CourseView',
]
