"""
Intake route — one-shot generation from the guided wizard answers.

POST /api/chat/intake is exempt from the message quota.
"""
import logging

from flask import Blueprint, request, jsonify

from prompt_architect.config import ENHANCED_CHAT
from prompt_architect.extensions import get_services
from prompt_architect.intake.formatter import build_user_context, format_output
from prompt_architect.intake.instructions import InstructionsNotFound, build_system_prompt
from prompt_architect.intake.options import PROMPT_ARCHITECT, is_supported, prompt_type_label
from prompt_architect.intake.questions import missing_required, questions_for
from prompt_architect.services.analytics import INTAKE_COMPLETED
from prompt_architect.services.llm_client import CompletionError, CompletionTimeout
from prompt_architect.validation.schemas import IntakeRequest, parse_body

logger = logging.getLogger('routes.intake')

bp = Blueprint('intake', __name__, url_prefix='/api/chat')

TIMEOUT_ERROR = 'Request timed out. Please try again.'
UPSTREAM_ERROR = 'AI service temporarily unavailable. Please try again.'
UNEXPECTED_ERROR = 'An unexpected error occurred. Please try again.'


def _generation_request(prompt_type):
    what = 'Prompt Architect custom instruction set' if prompt_type == PROMPT_ARCHITECT else 'customized prompt'
    return f'Please generate my {what} based on the context I provided.'


def _invalid_answer(prompt_type, answers):
    """First per-question validation error among the answered questions, or None."""
    for question in questions_for(prompt_type):
        error = question.validate(answers.get(question.id))
        if error:
            return f'Invalid answer for {question.id}: {error}'
    return None


@bp.route('/intake', methods=['POST'])
def intake():
    """Generate a prompt from guided answers."""
    parsed = parse_body(IntakeRequest, request.get_json(silent=True))
    if not parsed.ok:
        return jsonify({'success': False, 'error': parsed.error}), 400
    body = parsed.value

    if not is_supported(body.ai_tool, body.prompt_type):
        return jsonify({
            'success': False,
            'error': f'{prompt_type_label(body.prompt_type)} is not available for {body.ai_tool}',
        }), 400

    answers = body.guided_questions.answers()
    missing = missing_required(answers)
    if missing:
        return jsonify({'success': False, 'error': f"Missing required questions: {', '.join(missing)}"}), 400

    invalid = _invalid_answer(body.prompt_type, answers)
    if invalid:
        return jsonify({'success': False, 'error': invalid}), 400

    services = get_services()

    try:
        instructions = services.instructions.get(body.ai_tool, body.prompt_type)
    except InstructionsNotFound as e:
        logger.error("Failed to load instructions for %s + %s", body.ai_tool, body.prompt_type)
        return jsonify({'success': False, 'error': str(e)}), 500

    system_prompt = build_system_prompt(
        instructions, build_user_context(answers), body.ai_tool, body.prompt_type,
    )
    messages = [
        {'role': 'system', 'content': system_prompt},
        {'role': 'user', 'content': _generation_request(body.prompt_type)},
    ]

    try:
        reply = services.llm.complete(
            messages,
            max_tokens=ENHANCED_CHAT['max_tokens'],
            temperature=ENHANCED_CHAT['temperature'],
            top_p=ENHANCED_CHAT['top_p'],
        )
    except CompletionTimeout:
        logger.error("Intake generation timed out (%s + %s)", body.ai_tool, body.prompt_type)
        return jsonify({'success': False, 'error': TIMEOUT_ERROR}), 408
    except CompletionError:
        return jsonify({'success': False, 'error': UPSTREAM_ERROR}), 500
    except Exception:
        logger.error("Intake generation failed (%s + %s)", body.ai_tool, body.prompt_type, exc_info=True)
        return jsonify({'success': False, 'error': UNEXPECTED_ERROR}), 500

    try:
        output = format_output(reply, body.prompt_type, body.ai_tool, answers.get('role') or '')
    except Exception:
        logger.warning("Output formatting failed, returning raw response", exc_info=True)
        output = {'section2': reply.strip(), 'promptType': body.prompt_type}

    services.analytics.track(
        INTAKE_COMPLETED, intake_data={'aiTool': body.ai_tool, 'promptType': body.prompt_type},
    )

    logger.info("Intake completed (%s + %s)", body.ai_tool, body.prompt_type)
    return jsonify({'success': True, 'output': output})
