"""
Completion aggregation tests.
"""

from pathway.classroom import CompletionAggregator, aggregate_section, is_completed_state
from pathway.schemas import CompletionState, TrackingMode

from helpers import make_section


def state_of(states):
    return lambda activity: states[activity.id]


class TestCompletedStates:

    def test_complete_counts(self):
        assert is_completed_state(CompletionState.COMPLETE)
        assert is_completed_state(CompletionState.COMPLETE_PASS)

    def test_incomplete_and_fail_do_not_count(self):
        assert not is_completed_state(CompletionState.INCOMPLETE)
        assert not is_completed_state(CompletionState.COMPLETE_FAIL)


class TestAggregateSection:

    def test_counts_tracked_and_completed(self):
        section, lookup, states = make_section(1, [
            (TrackingMode.MANUAL, CompletionState.COMPLETE),
            (TrackingMode.AUTOMATIC, CompletionState.COMPLETE_PASS),
            (TrackingMode.AUTOMATIC, CompletionState.INCOMPLETE),
            (TrackingMode.AUTOMATIC, CompletionState.COMPLETE_FAIL),
        ])
        stats = aggregate_section(section, lookup, state_of(states))
        assert (stats.completed, stats.total) == (2, 4)

    def test_untracked_activities_skipped(self):
        section, lookup, states = make_section(1, [
            (TrackingMode.NONE, CompletionState.COMPLETE),
            (TrackingMode.MANUAL, CompletionState.INCOMPLETE),
        ])
        stats = aggregate_section(section, lookup, state_of(states))
        assert (stats.completed, stats.total) == (0, 1)

    def test_hidden_activities_skipped(self):
        section, lookup, states = make_section(1, [
            (TrackingMode.MANUAL, CompletionState.COMPLETE, False),
            (TrackingMode.MANUAL, CompletionState.COMPLETE),
        ])
        stats = aggregate_section(section, lookup, state_of(states))
        assert (stats.completed, stats.total) == (1, 1)

    def test_tracking_disabled_reports_zero(self):
        section, lookup, states = make_section(1, [
            (TrackingMode.MANUAL, CompletionState.COMPLETE),
        ])
        stats = aggregate_section(section, lookup, state_of(states), completion_enabled=False)
        assert (stats.completed, stats.total) == (0, 0)

    def test_empty_section(self):
        section, lookup, states = make_section(2)
        stats = aggregate_section(section, lookup, state_of(states))
        assert (stats.completed, stats.total) == (0, 0)
        assert not stats.is_complete
        assert not stats.is_incomplete

    def test_stale_activity_reference_ignored(self):
        section, lookup, states = make_section(1, [
            (TrackingMode.MANUAL, CompletionState.COMPLETE),
        ])
        section.activity_ids.append("deleted_activity")
        stats = aggregate_section(section, lookup, state_of(states))
        assert (stats.completed, stats.total) == (1, 1)

    def test_order_does_not_matter(self):
        section, lookup, states = make_section(1, [
            (TrackingMode.MANUAL, CompletionState.COMPLETE),
            (TrackingMode.MANUAL, CompletionState.INCOMPLETE),
            (TrackingMode.NONE, CompletionState.COMPLETE),
        ])
        forward = aggregate_section(section, lookup, state_of(states))
        section.activity_ids.reverse()
        backward = aggregate_section(section, lookup, state_of(states))
        assert forward == backward


class TestCompletionAggregator:

    def test_missing_state_is_incomplete(self):
        section, lookup, _ = make_section(1, [
            (TrackingMode.MANUAL, CompletionState.COMPLETE),
            (TrackingMode.MANUAL, CompletionState.COMPLETE),
        ])
        aggregator = CompletionAggregator.from_states(lookup, {})
        stats = aggregator(section)
        assert (stats.completed, stats.total) == (0, 2)

    def test_callable_matches_aggregate(self):
        section, lookup, states = make_section(1, [
            (TrackingMode.MANUAL, CompletionState.COMPLETE),
            (TrackingMode.MANUAL, CompletionState.INCOMPLETE),
        ])
        aggregator = CompletionAggregator.from_states(lookup, states)
        assert aggregator(section) == aggregator.aggregate(section)
        assert aggregator(section).completed == 1

    def test_idempotent(self):
        section, lookup, states = make_section(1, [
            (TrackingMode.AUTOMATIC, CompletionState.COMPLETE_PASS),
            (TrackingMode.AUTOMATIC, CompletionState.INCOMPLETE),
        ])
        aggregator = CompletionAggregator.from_states(lookup, states)
        assert aggregator(section) == aggregator(section)
