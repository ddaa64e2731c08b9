"""
IntakeSession — the small record the wizard keeps across page loads.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Optional


def _now_iso():
    return datetime.now(timezone.utc).isoformat()


@dataclass
class IntakeSession:
    session_id: str
    ai_tool: Optional[str] = None
    prompt_type: Optional[str] = None
    message_count: int = 0
    intake_completed: bool = False
    timestamp: str = ''

    @classmethod
    def start(cls) -> 'IntakeSession':
        return cls(session_id=str(uuid.uuid4()), timestamp=_now_iso())

    def touch(self):
        self.timestamp = _now_iso()

    def to_dict(self) -> Dict:
        return {
            'sessionId': self.session_id,
            'aiTool': self.ai_tool,
            'promptType': self.prompt_type,
            'messageCount': self.message_count,
            'intakeCompleted': self.intake_completed,
            'timestamp': self.timestamp,
        }

    @classmethod
    def from_dict(cls, d: Dict) -> 'IntakeSession':
        """Raises KeyError/TypeError/ValueError on a malformed record."""
        if not d['sessionId'] or not isinstance(d['intakeCompleted'], bool):
            raise ValueError('malformed intake session')
        return cls(
            session_id=d['sessionId'],
            ai_tool=d.get('aiTool'),
            prompt_type=d.get('promptType'),
            message_count=int(d.get('messageCount', 0)),
            intake_completed=d['intakeCompleted'],
            timestamp=d.get('timestamp', ''),
        )
