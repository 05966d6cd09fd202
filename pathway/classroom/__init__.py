"""
Pathway Classroom - Completion-driven navigation and progress for a course.

This module provides:
- Completion aggregation per section
- Landing resolution (which section a learner enters on)
- SectionNavigator: prev/next section links
- Sidebar progress view model
- CourseLoader / ProgressTracker: SQLite-backed platform adapters
"""

from .completion import (
    CompletionAggregator,
    CompletionProvider,
    aggregate_section,
    is_completed_state,
)

from .landing import (
    LandingDecision,
    first_incomplete_section,
    first_visible_section,
    resolve_target,
    resolve_landing,
)

from .navigator import (
    SectionNavigator,
    find_adjacent,
)

from .sidebar import (
    build_entry,
    build_sidebar,
)

from .images import (
    ACCEPTED_IMAGE_TYPES,
    section_image_url,
)

from .loader import (
    COURSE_SCHEMA,
    CourseLoader,
)

from .progress import (
    ProgressTracker,
    SIDEBAR_COLLAPSED_PREF,
    mark_activity,
    save_sidebar_preference,
)

from .platform import (
    LearningPlatform,
    CoursePlatform,
)

__all__ = [
    # Completion
    "CompletionAggregator",
    "CompletionProvider",
    "aggregate_section",
    "is_completed_state",
    # Landing
    "LandingDecision",
    "first_incomplete_section",
    "first_visible_section",
    "resolve_target",
    "resolve_landing",
    # Navigator
    "SectionNavigator",
    "find_adjacent",
    # Sidebar
    "build_entry",
    "build_sidebar",
    # Images
    "ACCEPTED_IMAGE_TYPES",
    "section_image_url",
    # Loader
    "COURSE_SCHEMA",
    "CourseLoader",
    # Progress
    "ProgressTracker",
    "SIDEBAR_COLLAPSED_PREF",
    "mark_activity",
    "save_sidebar_preference",
    # Platform
    "LearningPlatform",
    "CoursePlatform",
]
