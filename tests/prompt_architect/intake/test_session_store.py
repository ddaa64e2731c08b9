"""Tests for prompt_architect.intake.session_store — local storage + cookie persistence."""
import json

import pytest

from prompt_architect.intake.session_store import IntakeSessionStore, STORAGE_KEY
from prompt_architect.models.intake_session import IntakeSession


@pytest.fixture
def local():
    return {}


@pytest.fixture
def cookie():
    return {}


@pytest.fixture
def sessions(local, cookie):
    return IntakeSessionStore(local, cookie)


def _session(**overrides):
    session = IntakeSession(session_id='s-1', ai_tool='claude', prompt_type='projects', timestamp='2026-01-01T00:00:00+00:00')
    for key, value in overrides.items():
        setattr(session, key, value)
    return session


class TestIntakeSessionStore:

    def test_save_writes_both_backends(self, sessions, local, cookie):
        sessions.save(_session())
        assert json.loads(local[STORAGE_KEY])['sessionId'] == 's-1'
        assert local[STORAGE_KEY] == cookie[STORAGE_KEY]

    def test_load_prefers_primary_and_resyncs_backup(self, sessions, local, cookie):
        local[STORAGE_KEY] = json.dumps(_session(prompt_type='general-prompt').to_dict())
        cookie[STORAGE_KEY] = json.dumps(_session().to_dict())
        loaded = sessions.load()
        assert loaded.prompt_type == 'general-prompt'
        assert json.loads(cookie[STORAGE_KEY])['promptType'] == 'general-prompt'

    def test_falls_back_to_backup_and_restores_primary(self, sessions, local, cookie):
        cookie[STORAGE_KEY] = json.dumps(_session().to_dict())
        loaded = sessions.load()
        assert loaded.session_id == 's-1'
        assert STORAGE_KEY in local

    def test_nothing_saved(self, sessions):
        assert sessions.load() is None

    def test_malformed_primary_is_discarded(self, sessions, local, cookie):
        local[STORAGE_KEY] = '{"sessionId": "s-1"}'
        cookie[STORAGE_KEY] = json.dumps(_session(session_id='s-2').to_dict())
        assert sessions.load().session_id == 's-2'

    def test_garbage_everywhere(self, sessions, local, cookie):
        local[STORAGE_KEY] = 'not json'
        cookie[STORAGE_KEY] = '[]'
        assert sessions.load() is None
        assert STORAGE_KEY not in cookie

    def test_clear(self, sessions, local, cookie):
        sessions.save(_session())
        sessions.clear()
        assert local == {}
        assert cookie == {}


class TestIntakeSession:

    def test_start_generates_id_and_timestamp(self):
        session = IntakeSession.start()
        assert session.session_id
        assert session.timestamp
        assert session.intake_completed is False

    def test_dict_keys(self):
        assert _session().to_dict() == {
            'sessionId': 's-1',
            'aiTool': 'claude',
            'promptType': 'projects',
            'messageCount': 0,
            'intakeCompleted': False,
            'timestamp': '2026-01-01T00:00:00+00:00',
        }
