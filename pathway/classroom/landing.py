"""
Landing - decide which section a learner lands on when entering a course.

Priority:
1. First numbered section with incomplete tracked activities
2. First visible numbered section
3. Nothing (no redirect)

The overview (section 0) is never a landing target.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from pathway.schemas import CompletionAggregate, Course, Section, OVERVIEW_SECTION


logger = logging.getLogger(__name__)

SectionAggregate = Callable[[Section], CompletionAggregate]


def _numbered_visible(sections: Iterable[Section]) -> list[Section]:
    """Visible sections after the overview, in ascending number order."""
    return sorted(
        (s for s in sections if s.number > OVERVIEW_SECTION and s.user_visible),
        key=lambda s: s.number,
    )


def first_incomplete_section(
    sections: Iterable[Section],
    aggregate: SectionAggregate,
    completion_enabled: bool = True,
) -> Optional[int]:
    """
    Find the first section holding at least one incomplete tracked activity.

    Sections with no tracked activities are never incomplete.
    Returns None when tracking is disabled or everything is complete.
    """
    if not completion_enabled:
        return None

    for section in _numbered_visible(sections):
        if aggregate(section).is_incomplete:
            return section.number
    return None


def first_visible_section(sections: Iterable[Section]) -> Optional[int]:
    """Get the first visible section number, excluding the overview."""
    ordered = _numbered_visible(sections)
    return ordered[0].number if ordered else None


def resolve_target(
    course: Course,
    sections: Iterable[Section],
    aggregate: SectionAggregate,
) -> Optional[int]:
    """
    Get the section a learner should land on.

    Returns the first incomplete section when completion is enabled,
    otherwise falls back to the first visible numbered section.
    """
    sections = list(sections)
    target = first_incomplete_section(sections, aggregate, course.completion_enabled)
    if target is not None:
        return target
    return first_visible_section(sections)


@dataclass
class LandingDecision:
    """Outcome of a bare course entry."""
    section: Optional[int]          # section to show (None = default landing view)
    redirect_url: Optional[str]     # set only when the viewer must be redirected

    @property
    def should_redirect(self) -> bool:
        return self.redirect_url is not None


def resolve_landing(
    course: Course,
    sections: Iterable[Section],
    aggregate: SectionAggregate,
    view_url: Callable[[int], Optional[str]],
    requested_section: Optional[int] = None,
    can_manage: bool = False,
    is_editing: bool = False,
) -> LandingDecision:
    """
    Apply the course entry policy.

    Learners entering without a section are redirected to the resolved target.
    Editors and managers always see the default landing view, and an explicit
    section request is always honoured.

    Args:
        course: Course being entered
        sections: All sections of the course
        aggregate: Per-section completion aggregate
        view_url: Resolves a section number to its view URL
        requested_section: Section number from the request, if any
        can_manage: Viewer holds course update privileges
        is_editing: Viewer has editing mode turned on
    """
    if requested_section is not None:
        return LandingDecision(section=requested_section, redirect_url=None)
    if is_editing or can_manage:
        return LandingDecision(section=None, redirect_url=None)

    target = resolve_target(course, sections, aggregate)
    if target is None:
        logger.debug(f"Course {course.id} has no landing section, showing default view")
        return LandingDecision(section=None, redirect_url=None)

    url = view_url(target)
    if not url:
        return LandingDecision(section=None, redirect_url=None)

    logger.debug(f"Course {course.id}: landing learner on section {target}")
    return LandingDecision(section=target, redirect_url=url)
