"""
Course content view - compose the core results into one view model.

Combines sidebar progress, prev/next navigation and section banner image
into a CourseView for the presentation layer.
"""

from typing import Callable, Iterable, Mapping, Optional
from urllib.parse import parse_qs, urlencode, urlsplit

from pathway.classroom import (
    CompletionAggregator,
    LearningPlatform,
    SectionNavigator,
    build_sidebar,
)
from pathway.schemas import (
    CompletionAggregate,
    Course,
    CourseDisplay,
    CourseView,
    Section,
    SidebarEntry,
    OVERVIEW_SECTION,
)


COURSE_VIEW_PATH = "/course/view.php"

OVERVIEW_NAME = "Overview"
SECTION_NAME = "Section"

STATUS_COMPLETE = "✓"
STATUS_CURRENT = "→"
STATUS_IN_PROGRESS = "◐"
STATUS_NOT_STARTED = "○"


# -----------------------------------------------------------------------------
# Section names and URLs
# -----------------------------------------------------------------------------

def section_name(section: Section) -> str:
    """Display name: the section's own name, else "Overview" / "Section N"."""
    if section.name.strip():
        return section.name.strip()
    if section.number == OVERVIEW_SECTION:
        return OVERVIEW_NAME
    return f"{SECTION_NAME} {section.number}"


def view_url(
    course: Course,
    section_number: Optional[int],
    navigation: bool = False,
    link_course_sections: bool = True,
) -> Optional[str]:
    """
    URL to view a course, optionally at a section.

    One-section-per-page courses link numbered sections with a `section`
    parameter; the overview and single-page courses use an anchor. Anchor
    links used for navigation resolve to None when section linking is off.
    """
    params = {"id": course.id}
    anchor = ""
    if section_number is not None:
        multi_page = course.config.course_display == CourseDisplay.MULTI_PAGE
        if section_number != OVERVIEW_SECTION and multi_page:
            params["section"] = section_number
        else:
            if navigation and not link_course_sections:
                return None
            anchor = f"#section-{section_number}"
    return f"{COURSE_VIEW_PATH}?{urlencode(params)}{anchor}"


def section_from_url(url: str) -> int:
    """Section number a view URL points at (0 for the overview or no section)."""
    parts = urlsplit(url)
    values = parse_qs(parts.query).get("section")
    if values and values[0].isdigit():
        return int(values[0])
    if parts.fragment.startswith("section-"):
        number = parts.fragment[len("section-"):]
        if number.isdigit():
            return int(number)
    return OVERVIEW_SECTION


def make_view_url(
    course: Course,
    navigation: bool = False,
    link_course_sections: bool = True,
) -> Callable[[Section], Optional[str]]:
    """Bind view_url to a course for use as a per-section resolver."""
    def resolve(section: Section) -> Optional[str]:
        return view_url(course, section.number, navigation, link_course_sections)
    return resolve


def status_indicator(entry: SidebarEntry) -> str:
    """
    Get status indicator for sidebar display.

    Returns:
        ✓ for complete
        → for current
        ◐ for in progress
        ○ otherwise
    """
    if entry.is_complete:
        return STATUS_COMPLETE
    elif entry.is_current:
        return STATUS_CURRENT
    elif entry.is_in_progress:
        return STATUS_IN_PROGRESS
    else:
        return STATUS_NOT_STARTED


# -----------------------------------------------------------------------------
# Course view
# -----------------------------------------------------------------------------

def build_course_view(
    course: Course,
    sections: Iterable[Section],
    aggregate: Callable[[Section], CompletionAggregate],
    current_number: int = OVERVIEW_SECTION,
    section_images: Optional[Mapping[int, str]] = None,
    sidebar_collapsed: bool = False,
    link_course_sections: bool = True,
) -> CourseView:
    """
    Build the full view model for one course page.

    Args:
        course: Course being rendered (its config drives the layout)
        sections: All sections of the course
        aggregate: Per-section completion aggregate
        current_number: Section being displayed (0 = overview / landing view)
        section_images: Image URLs keyed by section ID; ignored when
            the course hides images
        sidebar_collapsed: Learner's stored sidebar preference
        link_course_sections: Whether anchor-only sections can be linked
            from prev/next navigation
    """
    sections = sorted(sections, key=lambda s: s.number)
    config = course.config
    images = dict(section_images or {}) if config.show_images else {}

    sidebar = build_sidebar(
        course,
        sections,
        current_number,
        aggregate=aggregate,
        view_url=make_view_url(course),
        section_name=section_name,
        section_images=images,
        include_overview_section=config.include_overview_section,
    )

    navigator = SectionNavigator(
        sections,
        view_url=make_view_url(course, navigation=True, link_course_sections=link_course_sections),
        section_name=section_name,
    )
    prev_section, next_section = navigator.find_adjacent(current_number)

    # Banner image for the content area
    current_image = None
    if current_number > OVERVIEW_SECTION:
        current = next((s for s in sections if s.number == current_number), None)
        if current is not None:
            current_image = images.get(current.id)

    return CourseView(
        course_name=course.fullname,
        course_short_name=course.shortname,
        sidebar=sidebar,
        sidebar_position=config.sidebar_position,
        sidebar_collapsed=sidebar_collapsed,
        show_progress=config.show_progress,
        current_section=current_number,
        prev_section=prev_section,
        next_section=next_section,
        completion_enabled=course.completion_enabled,
        current_section_image=current_image,
        include_overview_section=config.include_overview_section,
    )


def load_course_view(
    platform: LearningPlatform,
    course_id: int,
    current_number: int = OVERVIEW_SECTION,
    sidebar_collapsed: bool = False,
) -> Optional[CourseView]:
    """
    Fetch live course state from the platform and build its view.

    Returns None if the course doesn't exist.
    """
    course = platform.get_course(course_id)
    if course is None:
        return None

    aggregator = CompletionAggregator.from_states(
        platform.get_activities(course_id),
        platform.get_completion_states(course_id),
        course.completion_enabled,
    )
    images = platform.get_all_section_images(course_id) if course.config.show_images else {}

    return build_course_view(
        course,
        platform.get_sections(course_id),
        aggregator,
        current_number=current_number,
        section_images=images,
        sidebar_collapsed=sidebar_collapsed,
    )
