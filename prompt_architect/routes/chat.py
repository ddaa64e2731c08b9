"""
Chat routes — free-form prompt coaching, metered by the per-client rate limiter.

POST /api/chat           standard coaching chat
POST /api/chat/enhanced  richer prompts plus ui_elements / conversation_stage
"""
import logging

from flask import Blueprint, request, jsonify

from prompt_architect.config import STANDARD_CHAT, ENHANCED_CHAT
from prompt_architect.extensions import get_services
from prompt_architect.prompts import (
    STANDARD_SYSTEM_PROMPTS, ENHANCED_SYSTEM_PROMPTS, build_ui_elements, conversation_stage,
)
from prompt_architect.services.analytics import MESSAGE_SENT, SESSION_STARTED
from prompt_architect.services.llm_client import CompletionError, CompletionTimeout
from prompt_architect.services.rate_limiter import client_ip_from, STORE_UNAVAILABLE
from prompt_architect.validation.email import validate_email
from prompt_architect.validation.messages import validate_message, validate_history
from prompt_architect.validation.schemas import ChatRequest, parse_body

logger = logging.getLogger('routes.chat')

bp = Blueprint('chat', __name__, url_prefix='/api/chat')

TIMEOUT_ERROR = 'Request timed out. Please try again.'
UPSTREAM_ERROR = 'AI service temporarily unavailable. Please try again.'
UNEXPECTED_ERROR = 'An unexpected error occurred. Please try again.'


@bp.route('', methods=['POST'])
def chat():
    """Standard coaching chat."""
    return _handle_chat(enhanced=False)


@bp.route('/enhanced', methods=['POST'])
def chat_enhanced():
    """Coaching chat with richer prompts and UI hints."""
    return _handle_chat(enhanced=True)


def _handle_chat(enhanced):
    parsed = parse_body(ChatRequest, request.get_json(silent=True))
    if not parsed.ok:
        return jsonify({'success': False, 'error': parsed.error}), 400
    body = parsed.value

    message = validate_message(body.message)
    if not message.is_valid:
        return jsonify({'success': False, 'error': message.error, 'errorCode': message.error_code}), 400

    history = validate_history(body.history)
    if not history.is_valid:
        return jsonify({'success': False, 'error': history.error}), 400

    email = None
    if body.email:
        checked = validate_email(body.email)
        if not checked.is_valid:
            return jsonify({'success': False, 'error': 'Invalid email address', 'errorCode': checked.error}), 400
        email = checked.normalized_email

    services = get_services()
    client_id = client_ip_from(request.headers, request.remote_addr)

    limit = services.rate_limiter.check(client_id, email=email)
    if not limit.allowed:
        if limit.reason == STORE_UNAVAILABLE:
            return jsonify({
                'success': False,
                'error': 'Service temporarily unavailable. Please try again.',
            }), 503
        return jsonify({
            'success': False,
            'error': 'Rate limit exceeded',
            'message': (
                f"You've used all {limit.limit} free messages. "
                "Share your email to keep going, or come back when your limit resets."
            ),
            'rateLimitInfo': limit.to_info(),
        }), 429

    params = ENHANCED_CHAT if enhanced else STANDARD_CHAT
    prompts = ENHANCED_SYSTEM_PROMPTS if enhanced else STANDARD_SYSTEM_PROMPTS
    recent = body.history[-params['history_limit']:] if body.history else []

    messages = [{'role': 'system', 'content': prompts[body.category]}]
    messages.extend({'role': m['role'], 'content': m['content']} for m in recent)
    messages.append({'role': 'user', 'content': message.sanitized_message})

    try:
        reply = services.llm.complete(
            messages,
            max_tokens=params['max_tokens'],
            temperature=params['temperature'],
            top_p=params['top_p'],
        )
    except CompletionTimeout:
        return jsonify({'success': False, 'error': TIMEOUT_ERROR}), 408
    except CompletionError:
        return jsonify({'success': False, 'error': UPSTREAM_ERROR}), 500
    except Exception:
        logger.error("Chat completion failed for %s", client_id, exc_info=True)
        return jsonify({'success': False, 'error': UNEXPECTED_ERROR}), 500

    # Quota is only charged for a delivered reply
    services.rate_limiter.increment(client_id)
    _record_usage(services, body, email)

    if not enhanced:
        return jsonify({'success': True, 'response': reply})

    return jsonify({
        'success': True,
        'message': reply,
        'ui_elements': build_ui_elements(body.category, reply, len(recent)),
        'conversation_stage': conversation_stage(len(recent)),
    })


def _record_usage(services, body, email):
    if not body.history:
        services.analytics.track(SESSION_STARTED)
    services.analytics.track(MESSAGE_SENT)

    if email:
        lead = services.leads.get_by_email(email)
        if lead is not None:
            services.leads.increment_messages(lead.id, body.category)
