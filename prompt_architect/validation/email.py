"""
Email validation and disposable-domain filtering.

Pure functions, no I/O.
"""
import hashlib
import re
from dataclasses import dataclass
from typing import Optional

# Common disposable email domains to block
DISPOSABLE_DOMAINS = frozenset([
    'tempmail.com',
    'guerrillamail.com',
    'mailinator.com',
    '10minutemail.com',
    'throwaway.email',
    'temp-mail.org',
    'fakeinbox.com',
    'trashmail.com',
    'discard.email',
    'getnada.com',
    'tempinbox.com',
    'sharklasers.com',
])

_EMAIL_RE = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')

REQUIRED = 'required'
INVALID_FORMAT = 'invalid_format'
DISPOSABLE_EMAIL = 'disposable_email'


@dataclass
class EmailValidation:
    is_valid: bool
    normalized_email: Optional[str] = None
    error: Optional[str] = None


def normalize_email(email: str) -> str:
    return email.strip().lower()


def hash_email(email: str) -> str:
    """SHA-256 hex digest of the normalized address, used as the lookup key."""
    return hashlib.sha256(normalize_email(email).encode('utf-8')).hexdigest()


def is_disposable(normalized_email: str) -> bool:
    domain = normalized_email.rsplit('@', 1)[-1]
    return domain in DISPOSABLE_DOMAINS


def validate_email(raw) -> EmailValidation:
    """Check presence, format, then disposable domain. Returns the normalized address on success."""
    if not isinstance(raw, str) or not raw.strip():
        return EmailValidation(is_valid=False, error=REQUIRED)

    normalized = normalize_email(raw)
    if not _EMAIL_RE.match(normalized):
        return EmailValidation(is_valid=False, error=INVALID_FORMAT)

    if is_disposable(normalized):
        return EmailValidation(is_valid=False, error=DISPOSABLE_EMAIL)

    return EmailValidation(is_valid=True, normalized_email=normalized)
