"""
Lead — a captured contact, stored as JSON under lead:{id}.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class Lead:
    id: str
    email: str
    email_hash: str
    created_at: int
    last_active: int
    source: str
    company: Optional[str] = None
    intake_data: Optional[Dict[str, str]] = None
    messages_used: int = 0
    categories_used: List[str] = field(default_factory=list)
    prompts_created: int = 0

    def to_dict(self) -> Dict:
        data = {
            'id': self.id,
            'email': self.email,
            'emailHash': self.email_hash,
            'createdAt': self.created_at,
            'lastActive': self.last_active,
            'source': self.source,
            'messagesUsed': self.messages_used,
            'categoriesUsed': list(self.categories_used),
            'promptsCreated': self.prompts_created,
        }
        if self.company:
            data['company'] = self.company
        if self.intake_data:
            data['intakeData'] = dict(self.intake_data)
        return data

    @classmethod
    def from_dict(cls, d: Dict) -> 'Lead':
        return cls(
            id=d['id'],
            email=d['email'],
            email_hash=d['emailHash'],
            created_at=d.get('createdAt', 0),
            last_active=d.get('lastActive', 0),
            source=d.get('source', ''),
            company=d.get('company'),
            intake_data=d.get('intakeData'),
            messages_used=d.get('messagesUsed', 0),
            categories_used=list(d.get('categoriesUsed', [])),
            prompts_created=d.get('promptsCreated', 0),
        )
