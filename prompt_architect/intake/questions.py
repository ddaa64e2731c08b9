"""
Guided question definitions and per-question validation for the intake flow.

Steps: 1 = AI tool, 2 = prompt type, 3..N-1 = questions for the prompt type,
N = review.
"""
from dataclasses import dataclass, field
from typing import List, Optional

TASK_OPTIONS = ['writing', 'research', 'analysis', 'brainstorming', 'code', 'strategy', 'other']
TONE_OPTIONS = ['professional', 'casual', 'conversational', 'technical', 'creative']
OUTPUT_OPTIONS = ['concise', 'balanced', 'comprehensive']

TASK_LABELS = {
    'writing': 'Writing & Content Creation',
    'research': 'Research & Information Gathering',
    'analysis': 'Analysis & Problem Solving',
    'brainstorming': 'Brainstorming & Ideation',
    'code': 'Coding & Technical Tasks',
    'strategy': 'Strategy & Planning',
    'other': 'Other',
}

TONE_DESCRIPTIONS = {
    'professional': 'Formal, business-appropriate language',
    'casual': 'Relaxed, friendly tone',
    'conversational': 'Natural, dialogue-like responses',
    'technical': 'Precise, detailed, industry-specific',
    'creative': 'Imaginative, expressive language',
}

OUTPUT_DESCRIPTIONS = {
    'concise': 'Brief, to-the-point answers',
    'balanced': 'Moderate detail, well-rounded',
    'comprehensive': 'In-depth, thorough explanations',
}


@dataclass(frozen=True)
class Question:
    id: str
    title: str
    required: bool
    input_type: str  # textarea | multiselect | radio
    min_chars: int = 0
    max_chars: Optional[int] = None
    options: List[str] = field(default_factory=list)

    def validate(self, value) -> Optional[str]:
        """Return an error message, or None if the answer is acceptable."""
        if self.input_type == 'textarea':
            text = (value or '').strip() if isinstance(value, str) else ''
            if not text:
                return 'This question is required' if self.required else None
            if len(text) < self.min_chars:
                return f'Please enter at least {self.min_chars} characters ({len(text)}/{self.min_chars})'
            if self.max_chars is not None and len(text) > self.max_chars:
                return f'Please keep your response under {self.max_chars} characters ({len(text)}/{self.max_chars})'
            return None

        if self.input_type == 'multiselect':
            selected = value if isinstance(value, list) else []
            if not selected:
                return 'Please select at least one option' if self.required else None
            unknown = [v for v in selected if v not in self.options]
            if unknown:
                return f"Unknown option(s): {', '.join(unknown)}"
            return None

        if not value:
            return 'Please choose an option' if self.required else None
        if value not in self.options:
            return f'Unknown option: {value}'
        return None


QUESTIONS = {
    'role': Question('role', "What's your role or business focus?", True, 'textarea', 50, 200),
    'goal': Question('goal', "What's your main goal for using AI?", True, 'textarea', 50, 200),
    'tasks': Question('tasks', 'What specific tasks will you use this for?', True, 'multiselect',
                      options=TASK_OPTIONS),
    'tone': Question('tone', 'What tone/style should the AI use?', True, 'radio', options=TONE_OPTIONS),
    'constraints': Question('constraints', 'Any constraints or things the AI should avoid?', False,
                            'textarea', 0, 150),
    'outputDetail': Question('outputDetail', 'How detailed should responses be?', True, 'radio',
                             options=OUTPUT_OPTIONS),
}

_FULL_SET = ['role', 'goal', 'tasks', 'tone', 'constraints', 'outputDetail']

# Must be answered before any prompt type is generated.
REQUIRED_FIELDS = ['role', 'goal', 'tasks', 'tone', 'outputDetail']

_QUESTION_SETS = {
    'prompt-architect': _FULL_SET,
    'projects': _FULL_SET,
    'gems': _FULL_SET,
    'custom-instructions': _FULL_SET,
    'general-prompt': ['role', 'goal', 'tasks', 'tone', 'outputDetail'],
}


def questions_for(prompt_type) -> List[Question]:
    return [QUESTIONS[qid] for qid in _QUESTION_SETS.get(prompt_type, [])]


def total_steps(prompt_type) -> int:
    """Tool + type + questions + review; just 2 before a prompt type is chosen."""
    if not prompt_type:
        return 2
    return 2 + len(questions_for(prompt_type)) + 1


def question_for_step(step, prompt_type) -> Optional[Question]:
    if not prompt_type or step < 3:
        return None
    questions = questions_for(prompt_type)
    index = step - 3
    return questions[index] if index < len(questions) else None


def missing_required(answers) -> List[str]:
    """Ids from REQUIRED_FIELDS with an empty answer."""
    missing = []
    for qid in REQUIRED_FIELDS:
        value = answers.get(qid)
        if isinstance(value, str):
            value = value.strip()
        if not value:
            missing.append(qid)
    return missing
