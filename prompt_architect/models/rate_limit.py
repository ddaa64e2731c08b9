"""
RateLimitEntry — per-client quota state, stored under ratelimit:{client_id}.
"""
from dataclasses import dataclass
from typing import Dict, Optional


@dataclass
class RateLimitEntry:
    ip: str
    count: int
    first_request: int
    window_start: int
    email_hash: Optional[str] = None
    is_unlimited: bool = False

    def window_expired(self, now: int, window_ms: int) -> bool:
        return now - self.window_start > window_ms

    def reset_window(self, now: int):
        self.count = 0
        self.window_start = now

    def attach_email(self, email_hash: str):
        self.email_hash = email_hash
        self.is_unlimited = True

    def to_dict(self) -> Dict:
        data = {
            'ip': self.ip,
            'count': self.count,
            'firstRequest': self.first_request,
            'windowStart': self.window_start,
            'isUnlimited': self.is_unlimited,
        }
        if self.email_hash:
            data['emailHash'] = self.email_hash
        return data

    @classmethod
    def from_dict(cls, d: Dict) -> 'RateLimitEntry':
        return cls(
            ip=d.get('ip', ''),
            count=d.get('count', 0),
            first_request=d.get('firstRequest', 0),
            window_start=d.get('windowStart', 0),
            email_hash=d.get('emailHash'),
            is_unlimited=bool(d.get('isUnlimited', False)),
        )

    @classmethod
    def new(cls, client_id: str, now: int, count: int = 0) -> 'RateLimitEntry':
        return cls(ip=client_id, count=count, first_request=now, window_start=now)
