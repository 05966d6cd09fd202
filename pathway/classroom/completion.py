"""
Completion aggregation - count tracked and completed activities per section.

Only activities that are visible to the learner and have a tracking mode
other than "none" are counted. Activity references that no longer resolve
are skipped.
"""

from typing import Callable, Mapping

from pathway.schemas import (
    Activity,
    CompletionAggregate,
    CompletionState,
    COMPLETED_STATES,
    Section,
)


CompletionProvider = Callable[[Activity], CompletionState]


def is_completed_state(state: CompletionState) -> bool:
    """Complete and complete-with-distinction both count as done."""
    return state in COMPLETED_STATES


def aggregate_section(
    section: Section,
    activities: Mapping[str, Activity],
    completion: CompletionProvider,
    completion_enabled: bool = True,
) -> CompletionAggregate:
    """
    Count (completed, total) tracked activities in a section.

    Args:
        section: Section whose activities are counted
        activities: Activity lookup keyed by activity ID
        completion: Returns the learner's completion state for an activity
        completion_enabled: Course-wide completion tracking switch

    Returns:
        CompletionAggregate; (0, 0) when tracking is off or the section is empty
    """
    if not completion_enabled or not section.activity_ids:
        return CompletionAggregate()

    total = 0
    completed = 0
    for activity_id in section.activity_ids:
        activity = activities.get(activity_id)
        if activity is None or not activity.user_visible:
            continue
        if not activity.is_tracked:
            continue

        total += 1
        if is_completed_state(completion(activity)):
            completed += 1

    return CompletionAggregate(completed=completed, total=total)


class CompletionAggregator:
    """
    Bind the per-request inputs once and aggregate any section of the course.

    Instances are callables, so they can be handed to the landing resolver
    and the sidebar builder as their `aggregate` argument.
    """

    def __init__(
        self,
        activities: Mapping[str, Activity],
        completion: CompletionProvider,
        completion_enabled: bool = True,
    ):
        self.activities = activities
        self.completion = completion
        self.completion_enabled = completion_enabled

    @classmethod
    def from_states(
        cls,
        activities: Mapping[str, Activity],
        states: Mapping[str, CompletionState],
        completion_enabled: bool = True,
    ) -> "CompletionAggregator":
        """Build from a pre-fetched {activity_id: state} map (missing = incomplete)."""
        return cls(
            activities,
            lambda activity: states.get(activity.id, CompletionState.INCOMPLETE),
            completion_enabled,
        )

    def aggregate(self, section: Section) -> CompletionAggregate:
        return aggregate_section(
            section, self.activities, self.completion, self.completion_enabled
        )

    __call__ = aggregate
