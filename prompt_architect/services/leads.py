"""
Lead capture — create-or-touch by email hash, plus usage counters.

At most one lead exists per normalized email: lead_email:{sha256} points at
the lead id and is checked before anything is created. The lead record and
its index are written in one MULTI/EXEC transaction. Two first-time
submissions for the same email racing past the index lookup can still both
create a lead (last index write wins); see DESIGN.md.
"""
import logging
import uuid
from dataclasses import dataclass
from typing import Optional

from prompt_architect.models.lead import Lead
from prompt_architect.services.analytics import LEAD_CREATED
from prompt_architect.services.kv_store import lead_key, lead_email_key
from prompt_architect.services.rate_limiter import now_ms
from prompt_architect.validation.email import validate_email, hash_email

logger = logging.getLogger('services.leads')

DATABASE_ERROR = 'database_error'


@dataclass
class CreateLeadResult:
    success: bool
    lead_id: Optional[str] = None
    error: Optional[str] = None
    created: bool = False


class LeadManager:

    def __init__(self, store, analytics=None, clock=now_ms):
        self.store = store
        self.analytics = analytics
        self.clock = clock

    def create(self, email, source, company=None, intake_data=None) -> CreateLeadResult:
        """Create a lead, or touch the existing one for the same normalized email."""
        validation = validate_email(email)
        if not validation.is_valid:
            return CreateLeadResult(success=False, error=validation.error)

        normalized = validation.normalized_email
        email_hash = hash_email(normalized)

        existing_id = self.store.get(lead_email_key(email_hash))
        if existing_id:
            self.touch(existing_id)
            logger.info("Lead %s already exists (hash=%s…)", existing_id, email_hash[:8])
            return CreateLeadResult(success=True, lead_id=existing_id)

        now = self.clock()
        lead = Lead(
            id=str(uuid.uuid4()),
            email=normalized,
            email_hash=email_hash,
            company=(company or '').strip() or None,
            created_at=now,
            last_active=now,
            source=source,
            intake_data=intake_data,
            prompts_created=1 if source == 'intake' else 0,
        )

        stored = self.store.set_many({
            lead_key(lead.id): lead.to_dict(),
            lead_email_key(email_hash): lead.id,
        })
        if not stored:
            logger.error("Failed to store lead %s", lead.id)
            return CreateLeadResult(success=False, error=DATABASE_ERROR)

        if self.analytics is not None:
            self.analytics.track(LEAD_CREATED, intake_data=intake_data)

        logger.info("Lead %s created (source=%s)", lead.id, source)
        return CreateLeadResult(success=True, lead_id=lead.id, created=True)

    def get(self, lead_id) -> Optional[Lead]:
        data = self.store.get(lead_key(lead_id))
        return Lead.from_dict(data) if data else None

    def get_by_email(self, email) -> Optional[Lead]:
        lead_id = self.store.get(lead_email_key(hash_email(email)))
        if not lead_id:
            return None
        return self.get(lead_id)

    def touch(self, lead_id) -> bool:
        """Refresh lastActive. False if the lead does not exist."""
        now = self.clock()

        def _mutate(current):
            if current is None:
                return None
            current['lastActive'] = now
            return current

        return self.store.update(lead_key(lead_id), _mutate) is not None

    def increment_messages(self, lead_id, category) -> bool:
        """Count one message for a lead and remember the category. False if the lead does not exist."""
        now = self.clock()

        def _mutate(current):
            if current is None:
                return None
            lead = Lead.from_dict(current)
            lead.messages_used += 1
            lead.last_active = now
            if category not in lead.categories_used:
                lead.categories_used.append(category)
            return lead.to_dict()

        return self.store.update(lead_key(lead_id), _mutate) is not None
