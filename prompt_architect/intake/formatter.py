"""
Intake output formatting.

Section 2 is always the generated text. Prompt Architect outputs also get a
Section 1 with tool-specific setup steps, personalised from the role answer.
"""
import logging
import re
from typing import Dict, Optional

from prompt_architect.intake.options import PROMPT_ARCHITECT
from prompt_architect.intake.questions import TASK_LABELS, TONE_DESCRIPTIONS, OUTPUT_DESCRIPTIONS
from prompt_architect.intake.setup_templates import get_setup_template, substitute

logger = logging.getLogger('intake.formatter')

DEFAULT_ROLE = 'professional'
DEFAULT_BUSINESS = 'your organization'

_RUNS_PATTERN = re.compile(r'i (?:run|manage) (?:a |an )?(.+?)(?:\.|,|$)', re.I)

_ROLE_PATTERNS = [
    re.compile(r"i(?:'m| am) (?:a |an )?(.+?(?:manager|developer|marketer|analyst|consultant|entrepreneur|"
               r"owner|director|coordinator|specialist|engineer|designer|writer|editor|assistant))", re.I),
    re.compile(r'(?:work(?:ing)? as|my (?:job|role|position) (?:is|as)) (?:a |an )?(.+?)(?:\.|,|$)', re.I),
    _RUNS_PATTERN,
    re.compile(r'i (?:lead|head) (?:a |an )?(.+?)(?:\.|,|$)', re.I),
]

_BUSINESS_PATTERNS = [
    re.compile(r'(?:run|manage|own|have) (?:a |an )?(.+?(?:business|company|agency|studio|shop|store|firm|'
               r'practice|clinic|restaurant|bakery|salon))', re.I),
    re.compile(r'(?:my |our )(.+?(?:business|company|agency|studio|shop|store|firm|practice|clinic|'
               r'restaurant|bakery|salon))', re.I),
    re.compile(r"(?:work(?:ing)? (?:at|for|in)|i'm at) (?:a |an )?(.+?)(?:\.|,|$)", re.I),
]

_RUN_OR_MANAGE = re.compile(r'(?:run|manage) (?:a |an )?(.+?)(?:\.|,| and|$)', re.I)


def extract_role_and_business(text: str):
    """Best-effort role / business guess from free text, with generic fallbacks."""
    role, business = DEFAULT_ROLE, DEFAULT_BUSINESS
    lowered = (text or '').lower()
    runs_something = False

    for pattern in _ROLE_PATTERNS:
        match = pattern.search(lowered)
        if match and match.group(1).strip():
            role = match.group(1).strip()
            runs_something = pattern is _RUNS_PATTERN
            break

    for pattern in _BUSINESS_PATTERNS:
        match = pattern.search(lowered)
        if match and match.group(1).strip():
            business = match.group(1).strip()
            break

    # "I run a bakery" names the business, not the role
    if runs_something:
        match = _RUN_OR_MANAGE.search(lowered)
        if match and match.group(1).strip():
            business = match.group(1).strip()
            role = 'business owner'

    return role, business


def build_user_context(answers: Dict) -> str:
    """Render guided answers as the USER CONTEXT block of the system prompt."""
    lines = []
    if answers.get('role'):
        lines.append(f"- Role / business focus: {answers['role'].strip()}")
    if answers.get('goal'):
        lines.append(f"- Main goal: {answers['goal'].strip()}")
    if answers.get('tasks'):
        labels = [TASK_LABELS.get(t, t) for t in answers['tasks']]
        lines.append(f"- Tasks: {', '.join(labels)}")
    if answers.get('tone'):
        lines.append(_with_description('Preferred tone', answers['tone'], TONE_DESCRIPTIONS))
    if answers.get('constraints') and answers['constraints'].strip():
        lines.append(f"- Constraints / things to avoid: {answers['constraints'].strip()}")
    if answers.get('outputDetail'):
        lines.append(_with_description('Response detail', answers['outputDetail'], OUTPUT_DESCRIPTIONS))
    return '\n'.join(lines)


def _with_description(label, value, descriptions):
    description = descriptions.get(value)
    if description:
        return f'- {label}: {value} ({description})'
    return f'- {label}: {value}'


def format_output(ai_response: str, prompt_type: str, ai_tool: str, role_text: Optional[str] = '') -> Dict:
    """Shape a completion into {section1?, section2, promptType}."""
    output = {'section2': ai_response.strip(), 'promptType': prompt_type}

    if prompt_type != PROMPT_ARCHITECT:
        return output

    template = get_setup_template(ai_tool)
    if template is None:
        logger.warning("No setup template available for %s", ai_tool)
        return output

    role, business = extract_role_and_business(role_text or '')
    output['section1'] = substitute(template, role, business)
    return output
