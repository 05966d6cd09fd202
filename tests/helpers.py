"""Builders for course structures used across the tests."""

from pathway.classroom import CompletionAggregator
from pathway.schemas import Activity, CompletionState, Section, TrackingMode


def make_section(number, activities=(), visible=True, name="", section_id=None):
    """
    Build a section plus its activities and completion states.

    `activities` holds (tracking, state) or (tracking, state, visible) tuples.
    Returns (section, {id: Activity}, {id: CompletionState}).
    """
    section_id = section_id if section_id is not None else 100 + number
    lookup = {}
    states = {}
    for idx, spec in enumerate(activities):
        tracking, state = spec[0], spec[1]
        activity_visible = spec[2] if len(spec) > 2 else True
        activity_id = f"s{number}_a{idx}"
        lookup[activity_id] = Activity(
            id=activity_id,
            section_id=section_id,
            tracking=tracking,
            user_visible=activity_visible,
        )
        states[activity_id] = state
    section = Section(
        id=section_id,
        number=number,
        name=name,
        user_visible=visible,
        activity_ids=list(lookup),
    )
    return section, lookup, states


def make_course_data(*built, completion_enabled=True):
    """Merge make_section results into (sections, aggregator)."""
    sections = []
    activities = {}
    states = {}
    for section, lookup, section_states in built:
        sections.append(section)
        activities.update(lookup)
        states.update(section_states)
    aggregator = CompletionAggregator.from_states(activities, states, completion_enabled)
    return sections, aggregator


def done(n):
    """n completed, manually tracked activities."""
    return [(TrackingMode.MANUAL, CompletionState.COMPLETE)] * n


def todo(n):
    """n incomplete, automatically tracked activities."""
    return [(TrackingMode.AUTOMATIC, CompletionState.INCOMPLETE)] * n


def untracked(n):
    return [(TrackingMode.NONE, CompletionState.INCOMPLETE)] * n
