"""Tests for prompt_architect.services.analytics — event aggregation."""
import pytest

from prompt_architect.services.analytics import (
    Analytics, LEAD_CREATED, SESSION_STARTED, MESSAGE_SENT, INTAKE_COMPLETED,
)

T0 = 1_700_000_000_000


@pytest.fixture
def analytics(store):
    return Analytics(store, clock=lambda: T0)


class TestGet:

    def test_creates_zero_record_on_first_access(self, analytics, fake_redis):
        aggregate = analytics.get()
        assert aggregate.total_leads == 0
        assert aggregate.email_capture_rate == 0.0
        assert fake_redis.load('analytics')['lastUpdated'] == T0

    def test_returns_stored_record(self, analytics, fake_redis):
        fake_redis.dump('analytics', {'totalLeads': 4, 'totalMessages': 9})
        aggregate = analytics.get()
        assert aggregate.total_leads == 4
        assert aggregate.total_messages == 9


class TestTrack:

    def test_simple_counters(self, analytics):
        analytics.track(SESSION_STARTED)
        analytics.track(MESSAGE_SENT)
        analytics.track(MESSAGE_SENT)
        aggregate = analytics.get()
        assert aggregate.total_sessions == 1
        assert aggregate.total_messages == 2
        assert aggregate.last_updated == T0

    def test_intake_completed_counts_tool_and_type(self, analytics):
        analytics.track(INTAKE_COMPLETED, {'aiTool': 'claude', 'promptType': 'projects'})
        analytics.track(INTAKE_COMPLETED, {'aiTool': 'claude', 'promptType': 'general-prompt'})
        aggregate = analytics.get()
        assert aggregate.intake_completions == 2
        assert aggregate.ai_tool_usage == {'claude': 2}
        assert aggregate.prompt_type_usage == {'projects': 1, 'general-prompt': 1}

    def test_capture_rate_is_leads_per_completion(self, analytics):
        analytics.track(INTAKE_COMPLETED, {'aiTool': 'gemini', 'promptType': 'gems'})
        analytics.track(INTAKE_COMPLETED, {'aiTool': 'gemini', 'promptType': 'gems'})
        aggregate = analytics.track(LEAD_CREATED)
        assert aggregate.email_capture_rate == 50.0

    def test_rate_untouched_without_completions(self, analytics):
        aggregate = analytics.track(LEAD_CREATED)
        assert aggregate.total_leads == 1
        assert aggregate.email_capture_rate == 0.0

    def test_unknown_event_is_ignored(self, analytics, fake_redis):
        assert analytics.track('page_view') is None
        assert 'analytics' not in fake_redis.data

    def test_store_failure_is_swallowed(self, analytics, fake_redis):
        fake_redis.fail = True
        assert analytics.track(MESSAGE_SENT) is None

    def test_counters_never_decrease(self, analytics):
        events = [
            (SESSION_STARTED, None),
            (MESSAGE_SENT, None),
            (INTAKE_COMPLETED, {'aiTool': 'claude', 'promptType': 'projects'}),
            (LEAD_CREATED, None),
            (MESSAGE_SENT, None),
            ('page_view', None),
            (INTAKE_COMPLETED, {'aiTool': 'chatgpt', 'promptType': 'general-prompt'}),
            (SESSION_STARTED, None),
        ]
        counters = ('total_leads', 'total_sessions', 'total_messages', 'intake_completions')
        previous = {name: 0 for name in counters}
        for event, data in events:
            analytics.track(event, data)
            aggregate = analytics.get()
            for name in counters:
                assert getattr(aggregate, name) >= previous[name]
                previous[name] = getattr(aggregate, name)
        assert previous == {'total_leads': 1, 'total_sessions': 2, 'total_messages': 2, 'intake_completions': 2}
