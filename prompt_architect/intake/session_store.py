"""
Dual persistence for the intake session.

primary (local storage) is the source of truth; backup (the cookie) is kept in
sync on every write and used only when primary has nothing. Both backends are
plain mutable mappings holding JSON strings.
"""
import json
import logging
from typing import MutableMapping, Optional

from prompt_architect.models.intake_session import IntakeSession

logger = logging.getLogger('intake.session_store')

STORAGE_KEY = 'prompt_architect_intake'


class IntakeSessionStore:

    def __init__(self, primary: MutableMapping, backup: MutableMapping, key=STORAGE_KEY):
        self.primary = primary
        self.backup = backup
        self.key = key

    def save(self, session: IntakeSession):
        serialized = json.dumps(session.to_dict())
        self.primary[self.key] = serialized
        self.backup[self.key] = serialized
        logger.info("Intake session %s saved", session.session_id)

    def load(self) -> Optional[IntakeSession]:
        """Primary first, then backup; whichever copy is used is written back to the other."""
        session = self._read(self.primary)
        if session is not None:
            self.backup[self.key] = json.dumps(session.to_dict())
            return session

        session = self._read(self.backup)
        if session is not None:
            self.primary[self.key] = json.dumps(session.to_dict())
        return session

    def clear(self):
        self.primary.pop(self.key, None)
        self.backup.pop(self.key, None)
        logger.info("Intake session cleared")

    def _read(self, backend) -> Optional[IntakeSession]:
        raw = backend.get(self.key)
        if not raw:
            return None
        try:
            return IntakeSession.from_dict(json.loads(raw))
        except (KeyError, TypeError, ValueError):
            logger.warning("Discarding malformed intake session")
            backend.pop(self.key, None)
            return None
