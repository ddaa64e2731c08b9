"""Shared test fixtures."""
import fnmatch
import json
from unittest.mock import MagicMock

import pytest
import redis

from prompt_architect.extensions import Services
from prompt_architect.intake.instructions import InstructionLibrary
from prompt_architect.services.analytics import Analytics
from prompt_architect.services.kv_store import KeyValueStore
from prompt_architect.services.leads import LeadManager
from prompt_architect.services.llm_client import CompletionClient
from prompt_architect.services.rate_limiter import RateLimiter


class FakeRedis:
    """Minimal in-memory Redis fake: strings, SCAN and WATCH/MULTI pipelines.

    fail=True makes every command raise ConnectionError.
    conflicts=N makes the next N watched EXECs raise WatchError.
    """

    def __init__(self):
        self.data = {}
        self.fail = False
        self.conflicts = 0

    def _check(self):
        if self.fail:
            raise redis.ConnectionError('fake redis is down')

    def get(self, key):
        self._check()
        return self.data.get(key)

    def set(self, key, value):
        self._check()
        self.data[key] = value
        return True

    def delete(self, *keys):
        self._check()
        removed = 0
        for k in keys:
            if self.data.pop(k, None) is not None:
                removed += 1
        return removed

    def scan_iter(self, match='*'):
        self._check()
        return iter([k for k in list(self.data) if fnmatch.fnmatchcase(k, match)])

    def pipeline(self, transaction=True):
        return FakePipeline(self)

    # test helpers
    def load(self, key):
        raw = self.data.get(key)
        return json.loads(raw) if raw is not None else None

    def dump(self, key, value):
        self.data[key] = json.dumps(value)


class FakePipeline:
    """Commands run immediately while WATCHing, and are queued after multi() or without watch."""

    def __init__(self, redis_fake):
        self._redis = redis_fake
        self._ops = []
        self._watching = False
        self._immediate = False

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.reset()

    def watch(self, *keys):
        self._redis._check()
        self._watching = True
        self._immediate = True

    def multi(self):
        self._immediate = False

    def get(self, key):
        if self._immediate:
            return self._redis.get(key)
        self._ops.append(('get', key))
        return self

    def set(self, key, value):
        if self._immediate:
            return self._redis.set(key, value)
        self._ops.append(('set', key, value))
        return self

    def execute(self):
        self._redis._check()
        if self._watching and self._redis.conflicts > 0:
            self._redis.conflicts -= 1
            self.reset()
            raise redis.WatchError('Watched variable changed.')
        results = []
        for op in self._ops:
            if op[0] == 'set':
                results.append(self._redis.set(op[1], op[2]))
            else:
                results.append(self._redis.get(op[1]))
        self.reset()
        return results

    def reset(self):
        self._ops = []
        self._watching = False
        self._immediate = False


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def store(fake_redis):
    return KeyValueStore(fake_redis)


@pytest.fixture
def make_chat_response():
    """Factory fixture — builds a MagicMock shaped like an OpenAI chat completion."""
    def _make(text):
        message = MagicMock()
        message.content = text
        choice = MagicMock()
        choice.message = message
        response = MagicMock()
        response.choices = [choice]
        return response
    return _make


@pytest.fixture
def openai_client(make_chat_response):
    """Mock OpenAI SDK client; completions answer with a fixed reply by default."""
    client = MagicMock()
    client.chat.completions.create.return_value = make_chat_response('Here is a better prompt for you.')
    return client


@pytest.fixture
def services(store, openai_client):
    analytics = Analytics(store)
    return Services(
        store=store,
        llm=CompletionClient(openai_client, model='test-model', timeout=5),
        rate_limiter=RateLimiter(store, limit=3),
        leads=LeadManager(store, analytics),
        analytics=analytics,
        instructions=InstructionLibrary.load(),
    )


@pytest.fixture
def app(services):
    """Flask test app wired to in-memory fakes."""
    from prompt_architect import create_app
    app = create_app(services)
    app.config['TESTING'] = True
    yield app


@pytest.fixture
def client(app):
    """Flask test client."""
    with app.test_client() as c:
        yield c
