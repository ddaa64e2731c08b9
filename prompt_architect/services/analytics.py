"""
Analytics aggregation — one rolling counter record under the `analytics` key.

Tracking is best-effort: failures are logged and swallowed so they never
fail the user-facing request that triggered them.
"""
import logging

from prompt_architect.models.analytics import AnalyticsAggregate
from prompt_architect.services.kv_store import ANALYTICS_KEY
from prompt_architect.services.rate_limiter import now_ms

logger = logging.getLogger('services.analytics')

LEAD_CREATED = 'lead_created'
SESSION_STARTED = 'session_started'
MESSAGE_SENT = 'message_sent'
INTAKE_COMPLETED = 'intake_completed'

EVENTS = (LEAD_CREATED, SESSION_STARTED, MESSAGE_SENT, INTAKE_COMPLETED)


def _apply(aggregate, event, intake_data):
    if event == LEAD_CREATED:
        aggregate.total_leads += 1
    elif event == SESSION_STARTED:
        aggregate.total_sessions += 1
    elif event == MESSAGE_SENT:
        aggregate.total_messages += 1
    elif event == INTAKE_COMPLETED:
        aggregate.intake_completions += 1
        tool = intake_data.get('aiTool')
        if tool:
            aggregate.ai_tool_usage[tool] = aggregate.ai_tool_usage.get(tool, 0) + 1
        prompt_type = intake_data.get('promptType')
        if prompt_type:
            aggregate.prompt_type_usage[prompt_type] = aggregate.prompt_type_usage.get(prompt_type, 0) + 1


class Analytics:

    def __init__(self, store, clock=now_ms):
        self.store = store
        self.clock = clock

    def get(self) -> AnalyticsAggregate:
        """Current aggregate, creating the all-zero record on first access."""
        data = self.store.get(ANALYTICS_KEY)
        if data:
            return AnalyticsAggregate.from_dict(data)
        initial = AnalyticsAggregate(last_updated=self.clock())
        self.store.set(ANALYTICS_KEY, initial.to_dict())
        return initial

    def track(self, event, intake_data=None):
        """Apply one event to the aggregate. Returns the updated aggregate, or None."""
        if event not in EVENTS:
            logger.warning("Ignoring unknown analytics event %r", event)
            return None

        def _mutate(current):
            aggregate = AnalyticsAggregate.from_dict(current or {})
            _apply(aggregate, event, intake_data or {})
            aggregate.recompute_rate()
            aggregate.last_updated = self.clock()
            return aggregate.to_dict()

        try:
            stored = self.store.update(ANALYTICS_KEY, _mutate)
        except Exception:
            logger.error("Failed to update analytics for %s", event, exc_info=True)
            return None
        if stored is None:
            logger.warning("Analytics event %s not recorded", event)
            return None
        return AnalyticsAggregate.from_dict(stored)
