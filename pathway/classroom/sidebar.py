"""
Sidebar - Build the progress sidebar view model.

One entry per visible section with per-section progress, plus overall
course progress summed over exactly the sections shown.
"""

from typing import Callable, Iterable, Mapping, Optional

from pathway.schemas import (
    CompletionAggregate,
    Course,
    Section,
    SidebarEntry,
    SidebarProgress,
    percent,
    OVERVIEW_SECTION,
)


def build_entry(
    section: Section,
    stats: CompletionAggregate,
    name: str,
    url: Optional[str],
    is_current: bool,
    image_url: Optional[str] = None,
) -> SidebarEntry:
    """Build a single sidebar row from a section and its completion counts."""
    is_complete = stats.total > 0 and stats.completed == stats.total
    return SidebarEntry(
        number=section.number,
        name=name,
        url=url or "#",
        is_current=is_current,
        is_complete=is_complete,
        is_in_progress=stats.completed > 0 and not is_complete,
        progress_percent=percent(stats.completed, stats.total),
        completed_count=stats.completed,
        total_count=stats.total,
        has_tracked_items=stats.total > 0,
        image_url=image_url,
        has_image=bool(image_url),
        is_overview_section=section.number == OVERVIEW_SECTION,
    )


def build_sidebar(
    course: Course,
    sections: Iterable[Section],
    current_number: int,
    aggregate: Callable[[Section], CompletionAggregate],
    view_url: Callable[[Section], Optional[str]],
    section_name: Callable[[Section], str],
    section_images: Optional[Mapping[int, str]] = None,
    include_overview_section: Optional[bool] = None,
) -> SidebarProgress:
    """
    Build sidebar entries and overall progress.

    Args:
        course: Course being rendered
        sections: All sections of the course
        current_number: Number of the section being displayed (0 = overview)
        aggregate: Per-section completion aggregate
        view_url: Resolves a section to its view URL
        section_name: Resolves a section to its display name
        section_images: Image URLs keyed by section database ID
        include_overview_section: Show section 0 in the sidebar
            (defaults to the course configuration)

    Returns:
        SidebarProgress with entries in ascending section order
    """
    if include_overview_section is None:
        include_overview_section = course.config.include_overview_section
    images = section_images or {}

    entries = []
    overall_completed = 0
    overall_total = 0
    numbered = 0

    for section in sorted(sections, key=lambda s: s.number):
        if not section.user_visible:
            continue
        if section.number == OVERVIEW_SECTION and not include_overview_section:
            continue

        # The overview can be listed but is not a numbered section
        if section.number > OVERVIEW_SECTION:
            numbered += 1

        stats = aggregate(section)
        overall_completed += stats.completed
        overall_total += stats.total

        entries.append(build_entry(
            section,
            stats,
            name=section_name(section),
            url=view_url(section),
            is_current=section.number == current_number,
            image_url=images.get(section.id),
        ))

    return SidebarProgress(
        entries=entries,
        overall_completed=overall_completed,
        overall_total=overall_total,
        total_numbered_sections=numbered,
    )
