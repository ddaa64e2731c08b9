"""
Centralized configuration — all env vars and product constants.
"""
import os


def _env_bool(name, default):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


# ── Environment ──────────────────────────────────────────────────────────────
SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-change-me')

# ── Redis (key-value store) ───────────────────────────────────────────────────
REDIS_URL = os.getenv('REDIS_URL', 'redis://localhost:6379/0')

# ── Hosted LLM (OpenAI-compatible endpoint) ──────────────────────────────────
LLM_API_KEY = os.getenv('LLM_API_KEY') or os.getenv('TOGETHER_AI_API_KEY')
LLM_BASE_URL = os.getenv('LLM_BASE_URL', 'https://api.together.xyz/v1')
LLM_MODEL = os.getenv('LLM_MODEL', 'meta-llama/Llama-3.3-70B-Instruct-Turbo')
LLM_TIMEOUT_SECONDS = float(os.getenv('LLM_TIMEOUT_SECONDS', '30'))

# ── Rate limiting ────────────────────────────────────────────────────────────
MAX_FREE_MESSAGES = int(os.getenv('RATE_LIMIT_MAX', '3'))
RATE_LIMIT_WINDOW_SECONDS = int(os.getenv('RATE_LIMIT_WINDOW_SECONDS', str(24 * 60 * 60)))
RATE_LIMIT_FAIL_OPEN = _env_bool('RATE_LIMIT_FAIL_OPEN', True)

# ── Intake API (used by the wizard client) ───────────────────────────────────
INTAKE_API_URL = os.getenv('INTAKE_API_URL', 'http://localhost:8080')

# ── Generation parameters ────────────────────────────────────────────────────
STANDARD_CHAT = {
    'max_tokens': 500,
    'temperature': 0.7,
    'top_p': 0.9,
    'history_limit': 6,
}

ENHANCED_CHAT = {
    'max_tokens': 600,
    'temperature': 0.8,
    'top_p': 0.9,
    'history_limit': 8,
}

# ── Input validation ─────────────────────────────────────────────────────────
MAX_MESSAGE_LENGTH = 2000
MIN_MESSAGE_LENGTH = 1
MAX_HISTORY_MESSAGES = 100

