"""
Progress and navigation schemas for Pathway.

Derived view models, recomputed on every render:
- Per-section completion aggregates
- Sidebar entries and the overall sidebar progress
- Prev/next navigation links
- The full course view handed to the presentation layer
"""

from pydantic import BaseModel, Field, model_validator, computed_field
from typing import Optional

from .course import SidebarPosition


def percent(completed: int, total: int) -> int:
    """Whole percent rounded half-up; 0 when nothing is tracked."""
    if total <= 0:
        return 0
    # integer arithmetic keeps 12.5 -> 13 (round() would give 12)
    return (200 * completed + total) // (2 * total)


class CompletionAggregate(BaseModel):
    completed: int = Field(default=0, ge=0)
    total: int = Field(default=0, ge=0)

    @model_validator(mode='after')
    def completed_within_total(self):
        if self.completed > self.total:
            raise ValueError('completed count cannot exceed total count')
        return self

    @property
    def is_complete(self) -> bool:
        return self.total > 0 and self.completed == self.total

    @property
    def is_incomplete(self) -> bool:
        """Has tracked activities and at least one of them is not done."""
        return self.total > 0 and self.completed < self.total

    @property
    def percent(self) -> int:
        return percent(self.completed, self.total)


class NavigationLink(BaseModel):
    name: str
    url: str


class SidebarEntry(BaseModel):
    """One row of the progress sidebar."""
    number: int
    name: str
    url: str
    is_current: bool = False
    is_complete: bool = False
    is_in_progress: bool = False
    progress_percent: int = Field(default=0, ge=0, le=100)
    completed_count: int = 0
    total_count: int = 0
    has_tracked_items: bool = False
    image_url: Optional[str] = None
    has_image: bool = False
    is_overview_section: bool = False


class SidebarProgress(BaseModel):
    entries: list[SidebarEntry] = []
    overall_completed: int = 0
    overall_total: int = 0
    total_numbered_sections: int = 0

    @computed_field
    @property
    def overall_percent(self) -> int:
        return percent(self.overall_completed, self.overall_total)


class CourseView(BaseModel):
    """Everything the presentation layer needs to draw one course page."""
    course_name: str
    course_short_name: str = ""
    sidebar: SidebarProgress
    sidebar_position: SidebarPosition = SidebarPosition.LEFT
    sidebar_collapsed: bool = False
    show_progress: bool = True
    current_section: int = 0
    prev_section: Optional[NavigationLink] = None
    next_section: Optional[NavigationLink] = None
    completion_enabled: bool = True
    current_section_image: Optional[str] = None
    include_overview_section: bool = False

    @computed_field
    @property
    def sidebar_left(self) -> bool:
        return self.sidebar_position == SidebarPosition.LEFT

    @computed_field
    @property
    def sidebar_right(self) -> bool:
        return self.sidebar_position == SidebarPosition.RIGHT

    @computed_field
    @property
    def has_sections(self) -> bool:
        return self.sidebar.total_numbered_sections > 0

    @computed_field
    @property
    def show_overview_above(self) -> bool:
        """Overview is pinned above the content when it is not in the sidebar."""
        return not self.include_overview_section
