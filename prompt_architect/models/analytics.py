"""
AnalyticsAggregate — the single rolling counter record stored under `analytics`.
"""
from dataclasses import dataclass, field
from typing import Dict


@dataclass
class AnalyticsAggregate:
    total_leads: int = 0
    total_sessions: int = 0
    total_messages: int = 0
    ai_tool_usage: Dict[str, int] = field(default_factory=dict)
    prompt_type_usage: Dict[str, int] = field(default_factory=dict)
    intake_completions: int = 0
    email_capture_rate: float = 0.0
    last_updated: int = 0

    def recompute_rate(self):
        """Leads per intake completion, as a percentage. Left unchanged while there are no completions."""
        if self.intake_completions > 0:
            self.email_capture_rate = (self.total_leads / self.intake_completions) * 100

    def to_dict(self) -> Dict:
        return {
            'totalLeads': self.total_leads,
            'totalSessions': self.total_sessions,
            'totalMessages': self.total_messages,
            'aiToolUsage': dict(self.ai_tool_usage),
            'promptTypeUsage': dict(self.prompt_type_usage),
            'intakeCompletions': self.intake_completions,
            'emailCaptureRate': self.email_capture_rate,
            'lastUpdated': self.last_updated,
        }

    @classmethod
    def from_dict(cls, d: Dict) -> 'AnalyticsAggregate':
        return cls(
            total_leads=d.get('totalLeads', 0),
            total_sessions=d.get('totalSessions', 0),
            total_messages=d.get('totalMessages', 0),
            ai_tool_usage=dict(d.get('aiToolUsage', {})),
            prompt_type_usage=dict(d.get('promptTypeUsage', {})),
            intake_completions=d.get('intakeCompletions', 0),
            email_capture_rate=d.get('emailCaptureRate', 0.0),
            last_updated=d.get('lastUpdated', 0),
        )
