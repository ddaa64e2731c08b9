"""
Shared service instances — key-value store, LLM client, rate limiter, leads, analytics.

Built once per process by create_app() and stored on app.extensions; route
handlers reach them through get_services(). Tests pass a prebuilt container
of fakes instead.
"""
import logging
from dataclasses import dataclass

import redis
from flask import current_app

from prompt_architect import config
from prompt_architect.intake.instructions import InstructionLibrary
from prompt_architect.services.analytics import Analytics
from prompt_architect.services.kv_store import KeyValueStore
from prompt_architect.services.leads import LeadManager
from prompt_architect.services.llm_client import CompletionClient, build_openai_client
from prompt_architect.services.rate_limiter import RateLimiter

logger = logging.getLogger('prompt_architect.extensions')

EXTENSION_KEY = 'prompt_architect'


@dataclass
class Services:
    store: KeyValueStore
    llm: CompletionClient
    rate_limiter: RateLimiter
    leads: LeadManager
    analytics: Analytics
    instructions: InstructionLibrary


def build_services(redis_client=None, openai_client=None) -> Services:
    """Wire every service from config. Either client may be supplied pre-built."""
    if redis_client is None:
        redis_client = redis.from_url(config.REDIS_URL, decode_responses=True)
    if openai_client is None:
        openai_client = build_openai_client(config.LLM_API_KEY, config.LLM_BASE_URL)

    store = KeyValueStore(redis_client)
    analytics = Analytics(store)
    services = Services(
        store=store,
        llm=CompletionClient(openai_client, model=config.LLM_MODEL, timeout=config.LLM_TIMEOUT_SECONDS),
        rate_limiter=RateLimiter(
            store,
            limit=config.MAX_FREE_MESSAGES,
            window_ms=config.RATE_LIMIT_WINDOW_SECONDS * 1000,
            fail_open=config.RATE_LIMIT_FAIL_OPEN,
        ),
        leads=LeadManager(store, analytics),
        analytics=analytics,
        instructions=InstructionLibrary.load(),
    )
    logger.info(
        "Services initialized (limit=%d, fail_open=%s, model=%s)",
        config.MAX_FREE_MESSAGES, config.RATE_LIMIT_FAIL_OPEN, config.LLM_MODEL,
    )
    return services


def get_services() -> Services:
    return current_app.extensions[EXTENSION_KEY]
