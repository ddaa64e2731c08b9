"""
Intake wizard — the step machine behind the guided prompt builder.

Steps:
    1          tool selection
    2          prompt-type selection
    3..N-1     one guided question per step (set depends on the prompt type)
    N          review; confirming submits for generation
    completed  terminal, holds the generated output

Each question step edits a draft. next() validates the draft and commits it to
the answer map; back() commits the draft without validating so returning to
the step keeps the input.
"""
import logging
from typing import Any, Dict, Optional

from prompt_architect.intake.options import AI_TOOLS, is_supported
from prompt_architect.intake.questions import (
    missing_required, question_for_step, questions_for, total_steps,
)
from prompt_architect.models.intake_session import IntakeSession

logger = logging.getLogger('intake.wizard')

TOOL_STEP = 1
PROMPT_TYPE_STEP = 2
FIRST_QUESTION_STEP = 3


class WizardError(Exception):
    """An action that is not valid in the wizard's current state."""


class IntakeWizard:
    """
    Usage:
        wizard = IntakeWizard(IntakeApiClient(), store)
        wizard.select_tool('claude')
        wizard.select_prompt_type('general-prompt')
        wizard.set_answer('...'); wizard.next()
        ...
        wizard.submit()
    """

    def __init__(self, client, store=None, session=None):
        self.client = client
        self.store = store
        self._reset(session)

    @classmethod
    def resume(cls, client, store) -> 'IntakeWizard':
        """Pick up a saved session: on the prompt-type step if only a tool was chosen, else at the first question."""
        saved = store.load()
        if saved is None or saved.intake_completed:
            return cls(client, store)
        wizard = cls(client, store, session=saved)
        if saved.ai_tool in AI_TOOLS:
            wizard.step = PROMPT_TYPE_STEP
            if is_supported(saved.ai_tool, saved.prompt_type):
                wizard._go_to(FIRST_QUESTION_STEP)
        return wizard

    # ── State ─────────────────────────────────────────────────────────

    @property
    def ai_tool(self):
        return self.session.ai_tool

    @property
    def prompt_type(self):
        return self.session.prompt_type

    @property
    def total_steps(self):
        return total_steps(self.prompt_type)

    @property
    def review_step(self):
        return self.total_steps

    @property
    def current_question(self):
        if self.completed:
            return None
        return question_for_step(self.step, self.prompt_type)

    @property
    def on_review(self):
        return not self.completed and self.prompt_type is not None and self.step == self.review_step

    # ── Transitions ───────────────────────────────────────────────────

    def select_tool(self, ai_tool):
        if ai_tool not in AI_TOOLS:
            raise WizardError(f'Unknown AI tool: {ai_tool}')
        self._require_open()
        if self.step != TOOL_STEP:
            raise WizardError('Go back to the first step to change the AI tool')
        # prompt types differ per tool, so an earlier choice no longer applies
        self.session.ai_tool = ai_tool
        self.session.prompt_type = None
        self.error = None
        self.step = PROMPT_TYPE_STEP
        self._persist()

    def select_prompt_type(self, prompt_type):
        self._require_open()
        if self.step != PROMPT_TYPE_STEP:
            raise WizardError('Choose an AI tool first')
        if not is_supported(self.ai_tool, prompt_type):
            raise WizardError(f'{prompt_type} is not available for {self.ai_tool}')
        self.session.prompt_type = prompt_type
        self.error = None
        self._persist()
        self._go_to(FIRST_QUESTION_STEP)

    def set_answer(self, value):
        """Edit the draft for the current question."""
        if self.current_question is None:
            raise WizardError('No question on this step')
        self.draft = value

    def next(self) -> bool:
        """Validate and commit the current answer, then advance. False if validation failed."""
        question = self.current_question
        if question is None:
            raise WizardError('Nothing to advance from on this step')

        message = question.validate(self.draft)
        if message:
            self.error = message
            return False

        self.answers[question.id] = self.draft
        self.error = None
        self._go_to(self.step + 1)
        return True

    def back(self):
        self._require_open()
        if self.step <= TOOL_STEP:
            return
        question = self.current_question
        if question is not None:
            self.answers[question.id] = self.draft
        self.error = None
        self._go_to(self.step - 1)

    def submit(self) -> bool:
        """Send the answers for generation. Stays on review with self.error on failure."""
        if not self.on_review:
            raise WizardError('Submit is only available on the review step')

        missing = missing_required(self.answers)
        if missing:
            self.error = f"Missing required questions: {', '.join(missing)}"
            return False
        for question in questions_for(self.prompt_type):
            message = question.validate(self.answers.get(question.id))
            if message:
                self.error = f'{question.id}: {message}'
                return False

        result = self.client.generate(self.ai_tool, self.prompt_type, self._payload())
        if not result.success:
            self.error = result.error
            logger.info("Intake submission failed: %s", result.error)
            return False

        self.output = result.output
        self.completed = True
        self.error = None
        self.session.intake_completed = True
        self._persist()
        return True

    def start_over(self):
        if self.store is not None:
            self.store.clear()
        self._reset()

    # ── helpers ───────────────────────────────────────────────────────

    def _reset(self, session=None):
        self.session = session or IntakeSession.start()
        self.step = TOOL_STEP
        self.answers: Dict[str, Any] = {}
        self.draft: Any = None
        self.error: Optional[str] = None
        self.output: Optional[Dict] = None
        self.completed = False
        if session is None:
            self._persist()

    def _payload(self):
        return {q.id: self.answers[q.id] for q in questions_for(self.prompt_type) if self.answers.get(q.id)}

    def _go_to(self, step):
        self.step = step
        question = question_for_step(step, self.prompt_type)
        self.draft = self.answers.get(question.id) if question else None

    def _require_open(self):
        if self.completed:
            raise WizardError('Intake already completed')

    def _persist(self):
        self.session.touch()
        if self.store is not None:
            self.store.save(self.session)
