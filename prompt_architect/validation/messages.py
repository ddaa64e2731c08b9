"""
Input validation and sanitization for user chat messages.

sanitize() is a best-effort prompt-injection mitigation, not a security
boundary: it breaks up a fixed list of override phrases with zero-width
spaces so they stay readable but lose their literal contiguous form. Output
of the downstream LLM must still be treated as untrusted.
"""
import re
from dataclasses import dataclass
from typing import Any, Optional

from prompt_architect.config import MAX_MESSAGE_LENGTH, MIN_MESSAGE_LENGTH, MAX_HISTORY_MESSAGES

ZERO_WIDTH_SPACE = '\u200b'

# ASCII control characters except \t and \n
_CONTROL_CHARS_RE = re.compile(r'[\x00-\x08\x0b-\x1f\x7f]')
_SPACE_RUN_RE = re.compile(r' {2,}')
_NEWLINE_RUN_RE = re.compile(r'\n{3,}')

INJECTION_PATTERNS = [
    re.compile(r'ignore\s+previous\s+instructions', re.IGNORECASE),
    re.compile(r'ignore\s+all\s+previous', re.IGNORECASE),
    re.compile(r'disregard\s+previous', re.IGNORECASE),
    re.compile(r'new\s+instructions:', re.IGNORECASE),
    re.compile(r'system\s+prompt:', re.IGNORECASE),
    re.compile(r'you\s+are\s+now', re.IGNORECASE),
]

# What counts as "blank" for the TOO_SHORT check. Other control characters
# are left for sanitize() and surface as INVALID_CHARS.
_BLANK_CHARS = ' \t\n'

# Error codes
EMPTY = 'EMPTY'
TOO_SHORT = 'TOO_SHORT'
TOO_LONG = 'TOO_LONG'
INVALID_CHARS = 'INVALID_CHARS'


@dataclass
class ValidationResult:
    is_valid: bool
    sanitized_message: Optional[str] = None
    error: Optional[str] = None
    error_code: Optional[str] = None


def _break_up(match):
    return ZERO_WIDTH_SPACE.join(match.group(0))


def sanitize(text: str) -> str:
    if not text:
        return ''

    cleaned = _CONTROL_CHARS_RE.sub('', text)
    cleaned = _SPACE_RUN_RE.sub(' ', cleaned)
    cleaned = _NEWLINE_RUN_RE.sub('\n\n', cleaned)
    cleaned = cleaned.strip()

    for pattern in INJECTION_PATTERNS:
        cleaned = pattern.sub(_break_up, cleaned)

    return cleaned


def validate_message(raw: Any) -> ValidationResult:
    """
    Validate and sanitize a chat message.

    Order: EMPTY (not a string / empty string), TOO_LONG (raw length, before
    sanitizing), TOO_SHORT (only spaces, tabs or newlines), INVALID_CHARS
    (nothing left after sanitizing).
    """
    if not isinstance(raw, str) or not raw:
        return ValidationResult(False, error='Message cannot be empty', error_code=EMPTY)

    if len(raw) > MAX_MESSAGE_LENGTH:
        return ValidationResult(
            False,
            error=f'Message exceeds maximum length of {MAX_MESSAGE_LENGTH} characters',
            error_code=TOO_LONG,
        )

    if len(raw.strip(_BLANK_CHARS)) < MIN_MESSAGE_LENGTH:
        return ValidationResult(False, error='Message is too short', error_code=TOO_SHORT)

    sanitized = sanitize(raw)
    if not sanitized:
        return ValidationResult(
            False, error='Message contains only invalid characters', error_code=INVALID_CHARS,
        )

    return ValidationResult(True, sanitized_message=sanitized)


def validate_history(history: Any) -> ValidationResult:
    """Shape check for the conversation history sent alongside a message."""
    if not isinstance(history, list):
        return ValidationResult(False, error='History must be an array')

    if len(history) > MAX_HISTORY_MESSAGES:
        return ValidationResult(
            False, error=f'History is too long (max {MAX_HISTORY_MESSAGES} messages)',
        )

    for entry in history:
        if not isinstance(entry, dict):
            return ValidationResult(False, error='Invalid message in history')

        content = entry.get('content')
        if not isinstance(content, str) or not content:
            return ValidationResult(False, error='Message content must be a string')

        if entry.get('role') not in ('user', 'assistant'):
            return ValidationResult(False, error='Message role must be "user" or "assistant"')

        if len(content) > MAX_MESSAGE_LENGTH * 2:
            return ValidationResult(False, error='Message in history exceeds maximum length')

    return ValidationResult(True)
