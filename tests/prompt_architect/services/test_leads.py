"""Tests for prompt_architect.services.leads — LeadManager."""
from unittest.mock import MagicMock

import pytest

from prompt_architect.services.analytics import Analytics, LEAD_CREATED
from prompt_architect.services.leads import LeadManager, DATABASE_ERROR
from prompt_architect.validation.email import hash_email

T0 = 1_700_000_000_000


@pytest.fixture
def now():
    return [T0]


@pytest.fixture
def manager(store, now):
    return LeadManager(store, Analytics(store, clock=lambda: now[0]), clock=lambda: now[0])


class TestCreate:

    def test_creates_lead_and_index(self, manager, fake_redis):
        result = manager.create(' Jane@Example.com ', 'limit', company='Acme')

        assert result.success is True
        assert result.created is True
        lead = fake_redis.load(f'lead:{result.lead_id}')
        assert lead['email'] == 'jane@example.com'
        assert lead['emailHash'] == hash_email('jane@example.com')
        assert lead['company'] == 'Acme'
        assert lead['source'] == 'limit'
        assert lead['createdAt'] == T0
        assert lead['messagesUsed'] == 0
        assert lead['promptsCreated'] == 0
        assert fake_redis.load(f"lead_email:{hash_email('jane@example.com')}") == result.lead_id

    def test_intake_source_counts_first_prompt(self, manager, fake_redis):
        intake = {'aiTool': 'claude', 'promptType': 'projects', 'userThoughts': 'x' * 30}
        result = manager.create('jane@example.com', 'intake', intake_data=intake)
        lead = fake_redis.load(f'lead:{result.lead_id}')
        assert lead['promptsCreated'] == 1
        assert lead['intakeData'] == intake

    def test_same_email_returns_existing_lead(self, manager, now, fake_redis):
        first = manager.create('jane@example.com', 'limit')
        now[0] = T0 + 5000
        second = manager.create('JANE@example.com', 'export')

        assert second.success is True
        assert second.created is False
        assert second.lead_id == first.lead_id
        assert len([k for k in fake_redis.data if k.startswith('lead:')]) == 1
        assert fake_redis.load(f'lead:{first.lead_id}')['lastActive'] == T0 + 5000

    def test_invalid_email_creates_nothing(self, manager, fake_redis):
        result = manager.create('not-an-email', 'limit')
        assert result.success is False
        assert result.error == 'invalid_format'
        assert fake_redis.data == {}

    def test_disposable_email_rejected(self, manager):
        result = manager.create('someone@mailinator.com', 'limit')
        assert result.success is False
        assert result.error == 'disposable_email'

    def test_store_failure_reports_database_error(self, store, fake_redis):
        manager = LeadManager(store)
        fake_redis.fail = True
        result = manager.create('jane@example.com', 'limit')
        assert result.success is False
        assert result.error == DATABASE_ERROR

    def test_tracks_lead_created_event(self, store):
        analytics = MagicMock()
        manager = LeadManager(store, analytics)
        manager.create('jane@example.com', 'limit')
        analytics.track.assert_called_once_with(LEAD_CREATED, intake_data=None)

    def test_existing_lead_does_not_track_again(self, store):
        analytics = MagicMock()
        manager = LeadManager(store, analytics)
        manager.create('jane@example.com', 'limit')
        manager.create('jane@example.com', 'limit')
        assert analytics.track.call_count == 1

    def test_analytics_counter_increments(self, manager, fake_redis):
        manager.create('jane@example.com', 'limit')
        assert fake_redis.load('analytics')['totalLeads'] == 1


class TestLookup:

    def test_get_and_get_by_email(self, manager):
        created = manager.create('jane@example.com', 'export')
        assert manager.get(created.lead_id).email == 'jane@example.com'
        assert manager.get_by_email(' JANE@example.com').id == created.lead_id

    def test_unknown_lead(self, manager):
        assert manager.get('missing') is None
        assert manager.get_by_email('nobody@example.com') is None


class TestIncrementMessages:

    def test_counts_messages_and_categories(self, manager, now):
        lead_id = manager.create('jane@example.com', 'limit').lead_id
        now[0] = T0 + 1000
        assert manager.increment_messages(lead_id, 'threads') is True
        assert manager.increment_messages(lead_id, 'threads') is True
        assert manager.increment_messages(lead_id, 'projects_gems') is True

        lead = manager.get(lead_id)
        assert lead.messages_used == 3
        assert lead.categories_used == ['threads', 'projects_gems']
        assert lead.last_active == T0 + 1000

    def test_missing_lead_returns_false(self, manager, fake_redis):
        assert manager.increment_messages('missing', 'threads') is False
        assert 'lead:missing' not in fake_redis.data

    def test_touch_missing_lead_returns_false(self, manager):
        assert manager.touch('missing') is False
