"""
Course structure schemas for Pathway.

Defines Pydantic models for the data supplied by the host platform:
- Course with its format configuration
- Sections (section 0 is the overview, 1..n are ordered content)
- Activities with completion tracking mode and state
"""

from pydantic import BaseModel, Field
from enum import Enum


# -----------------------------------------------------------------------------
# Enumerations
# -----------------------------------------------------------------------------


class CourseDisplay(str, Enum):
    SINGLE_PAGE = "single_page"   # all sections on one page
    MULTI_PAGE = "multi_page"     # one section per page (recommended)


class SidebarPosition(str, Enum):
    LEFT = "left"
    RIGHT = "right"


class TrackingMode(str, Enum):
    NONE = "none"
    MANUAL = "manual"
    AUTOMATIC = "automatic"


class CompletionState(str, Enum):
    INCOMPLETE = "incomplete"
    COMPLETE = "complete"
    COMPLETE_PASS = "complete_pass"   # complete with distinction
    COMPLETE_FAIL = "complete_fail"   # finished but failed, still not complete


COMPLETED_STATES = frozenset({CompletionState.COMPLETE, CompletionState.COMPLETE_PASS})

OVERVIEW_SECTION = 0


# -----------------------------------------------------------------------------
# Course
# -----------------------------------------------------------------------------


class CourseConfig(BaseModel):
    """Per-course format options. Defaults apply when a course has none stored."""
    sidebar_position: SidebarPosition = SidebarPosition.LEFT
    show_progress: bool = True
    show_images: bool = True
    include_overview_section: bool = False
    course_display: CourseDisplay = CourseDisplay.MULTI_PAGE


class Course(BaseModel):
    id: int
    fullname: str
    shortname: str = ""
    completion_enabled: bool = True
    config: CourseConfig = Field(default_factory=CourseConfig)


# -----------------------------------------------------------------------------
# Sections and activities
# -----------------------------------------------------------------------------


class Section(BaseModel):
    """
    A course section.

    `id` is the database id (used to key section images), `number` is the
    position in the course (0 = overview).
    """
    id: int
    number: int = Field(..., ge=0)
    name: str = ""
    user_visible: bool = True
    activity_ids: list[str] = []   # ordered as shown in the section

    @property
    def is_overview(self) -> bool:
        return self.number == OVERVIEW_SECTION


class Activity(BaseModel):
    id: str
    section_id: int
    name: str = ""
    tracking: TrackingMode = TrackingMode.NONE
    user_visible: bool = True

    @property
    def is_tracked(self) -> bool:
        return self.tracking != TrackingMode.NONE
