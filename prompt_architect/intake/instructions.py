"""
Intake instruction sets — per AI tool + prompt type system prompts.

Loaded from the YAML file next to this module, with a hardcoded fallback if
the file is missing or unreadable. The library is built once at start-up and
handed to the routes through the services container.
"""
import logging
import os
from dataclasses import dataclass, field
from typing import Dict, List

import yaml

from prompt_architect.intake.options import (
    AI_TOOLS, PROMPT_ARCHITECT, OUTPUT_TYPE_DESCRIPTIONS, available_prompt_types, tool_display_name,
)

logger = logging.getLogger('intake.instructions')

DEFAULT_PATH = os.path.join(os.path.dirname(__file__), 'instructions.yaml')

FRAMEWORK_GUIDANCE = """

OUTPUT STRUCTURE - Use the P/T/C/F Framework:
1. **Persona**: Define who the AI should be (role, expertise, personality traits)
2. **Task**: Specify what the AI should help with (primary responsibilities)
3. **Context**: Provide relevant background (user's situation, preferences, constraints)
4. **Format**: Define how responses should be structured (tone, length, style)

After the P/T/C/F sections, include 3-5 "Golden Rules" - non-negotiable behaviors that define how this AI assistant should always or never act."""


class InstructionsNotFound(Exception):
    """No instruction set for the requested tool + prompt type."""
    def __init__(self, ai_tool, prompt_type):
        self.ai_tool = ai_tool
        self.prompt_type = prompt_type
        super().__init__(f'No instructions available for {ai_tool} + {prompt_type} combination')


@dataclass
class InstructionSet:
    system_prompt: str
    guidelines: str
    capabilities: List[str] = field(default_factory=list)
    limitations: List[str] = field(default_factory=list)


def _default_config():
    """Hardcoded fallback if YAML is missing: one generic set per supported combination."""
    generic = {
        'system_prompt': 'You are an expert prompt engineer who writes clear, reusable AI instructions.',
        'guidelines': 'Write instructions the user can paste directly into their AI tool.',
        'capabilities': [],
        'limitations': [],
    }
    return {
        'version': 'default',
        'tools': {tool: {pt: dict(generic) for pt in available_prompt_types(tool)} for tool in AI_TOOLS},
    }


class InstructionLibrary:
    """Instruction sets keyed by tool then prompt type."""

    def __init__(self, config: Dict):
        self.version = config.get('version', '?')
        self._tools = config.get('tools') or {}

    @classmethod
    def load(cls, path=DEFAULT_PATH) -> 'InstructionLibrary':
        try:
            with open(path, 'r') as f:
                config = yaml.safe_load(f)
            logger.info("Instructions loaded from YAML (version=%s)", config.get('version', '?'))
        except (OSError, yaml.YAMLError) as e:
            logger.warning("Instructions YAML not loaded (%s), using defaults", e)
            config = _default_config()
        return cls(config)

    def get(self, ai_tool, prompt_type) -> InstructionSet:
        entry = self._tools.get(ai_tool, {}).get(prompt_type)
        if not entry or not entry.get('system_prompt') or not entry.get('guidelines'):
            raise InstructionsNotFound(ai_tool, prompt_type)
        return InstructionSet(
            system_prompt=entry['system_prompt'].strip(),
            guidelines=entry['guidelines'].strip(),
            capabilities=list(entry.get('capabilities') or []),
            limitations=list(entry.get('limitations') or []),
        )

    def has(self, ai_tool, prompt_type) -> bool:
        try:
            self.get(ai_tool, prompt_type)
            return True
        except InstructionsNotFound:
            return False


def build_system_prompt(instructions: InstructionSet, user_context, ai_tool, prompt_type) -> str:
    """Combine an instruction set with the user's guided answers into one system prompt."""
    tool_name = tool_display_name(ai_tool)

    capabilities = ''
    if instructions.capabilities:
        lines = '\n'.join(f'- {c}' for c in instructions.capabilities)
        capabilities = f'\n\nKey capabilities of {tool_name} to leverage:\n{lines}'

    limitations = ''
    if instructions.limitations:
        lines = '\n'.join(f'- {item}' for item in instructions.limitations)
        limitations = f'\n\nLimitations to be aware of:\n{lines}'

    framework = FRAMEWORK_GUIDANCE if prompt_type == PROMPT_ARCHITECT else ''
    output_type = OUTPUT_TYPE_DESCRIPTIONS.get(prompt_type, 'prompt')

    return f"""{instructions.system_prompt}

{instructions.guidelines}{capabilities}{limitations}{framework}

USER CONTEXT:
The user has provided the following information about their needs:
{user_context}

Based on this context, generate a comprehensive, ready-to-use {output_type} for {tool_name}. Make it specific to the user's stated needs and immediately usable.

IMPORTANT:
- Write in a clear, accessible style for non-technical users
- Be specific and actionable, not generic
- Include concrete examples where helpful
- Focus on practical utility over theoretical completeness"""
