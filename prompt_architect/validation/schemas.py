"""
Request body schemas for the JSON API.

Every route parses its body with parse_body(), which never raises: it returns
a ParseResult tagged ok/error so handlers can answer 400 at the boundary.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from prompt_architect.intake.options import AI_TOOLS, PROMPT_TYPES

INVALID_JSON = 'Invalid request body - expected JSON'


@dataclass
class ParseResult:
    ok: bool
    value: Any = None
    error: Optional[str] = None


class _Schema(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra='ignore')


class ChatRequest(_Schema):
    # message and history keep their raw form; validate_message/validate_history own their error codes
    message: Any = None
    category: Literal['custom_instructions', 'projects_gems', 'threads']
    history: Any = Field(default_factory=list)
    email: Optional[str] = None


class IntakeSnapshot(_Schema):
    ai_tool: str = Field(alias='aiTool')
    prompt_type: str = Field(alias='promptType')
    user_thoughts: str = Field(alias='userThoughts', min_length=20, max_length=500)

    @field_validator('ai_tool')
    @classmethod
    def _known_tool(cls, v):
        if v not in AI_TOOLS:
            raise ValueError(f'Invalid AI tool: {v}')
        return v

    @field_validator('prompt_type')
    @classmethod
    def _known_prompt_type(cls, v):
        if v not in PROMPT_TYPES:
            raise ValueError(f'Invalid prompt type: {v}')
        return v

    def to_dict(self) -> Dict[str, str]:
        return self.model_dump(by_alias=True)


class LeadRequest(_Schema):
    email: str = Field(min_length=1)
    company: Optional[str] = None
    source: Literal['intake', 'limit', 'export']
    intake_data: Optional[IntakeSnapshot] = Field(default=None, alias='intakeData')


class GuidedQuestions(_Schema):
    role: Optional[str] = None
    goal: Optional[str] = None
    tasks: Optional[List[str]] = None
    tone: Optional[str] = None
    constraints: Optional[str] = None
    output_detail: Optional[str] = Field(default=None, alias='outputDetail')

    def answers(self) -> Dict[str, Any]:
        """Answers keyed by question id, as the wizard names them."""
        return self.model_dump(by_alias=True)


class IntakeRequest(_Schema):
    ai_tool: str = Field(alias='aiTool', min_length=1)
    prompt_type: str = Field(alias='promptType', min_length=1)
    guided_questions: GuidedQuestions = Field(alias='guidedQuestions')

    @field_validator('ai_tool')
    @classmethod
    def _known_tool(cls, v):
        if v not in AI_TOOLS:
            raise ValueError(f"Invalid AI tool: {v}. Valid options are: {', '.join(AI_TOOLS)}")
        return v

    @field_validator('prompt_type')
    @classmethod
    def _known_prompt_type(cls, v):
        if v not in PROMPT_TYPES:
            raise ValueError(f'Invalid prompt type: {v}')
        return v


def _describe(error: ValidationError) -> str:
    first = error.errors()[0]
    kind = first.get('type', '')
    field = '.'.join(str(p) for p in first.get('loc', ()))
    if kind == 'missing':
        return f'Missing required field: {field}'
    if kind == 'value_error':
        # pydantic prefixes custom messages with "Value error, "
        return str(first.get('ctx', {}).get('error', first['msg']))
    return f"Invalid value for {field}: {first['msg']}"


def parse_body(schema, data) -> ParseResult:
    """Validate a decoded JSON body against a schema."""
    if not isinstance(data, dict):
        return ParseResult(ok=False, error=INVALID_JSON)
    try:
        return ParseResult(ok=True, value=schema.model_validate(data))
    except ValidationError as e:
        return ParseResult(ok=False, error=_describe(e))
