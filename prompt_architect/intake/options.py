"""
AI tools, prompt types and which prompt types each tool supports.
"""

AI_TOOLS = ['chatgpt', 'claude', 'gemini', 'copilot']

PROMPT_TYPES = [
    'prompt-architect',
    'custom-instructions',
    'projects',
    'gems',
    'general-prompt',
]

PROMPT_ARCHITECT = 'prompt-architect'

_TOOL_PROMPT_TYPES = {
    'chatgpt': ['prompt-architect', 'custom-instructions', 'projects', 'general-prompt'],
    'claude': ['prompt-architect', 'custom-instructions', 'projects', 'general-prompt'],
    'gemini': ['prompt-architect', 'gems', 'general-prompt'],
    'copilot': ['general-prompt'],
}

TOOL_DISPLAY_NAMES = {
    'chatgpt': 'ChatGPT',
    'claude': 'Claude',
    'gemini': 'Google Gemini',
    'copilot': 'Microsoft Copilot',
}

OUTPUT_TYPE_DESCRIPTIONS = {
    'prompt-architect': 'Prompt Architect custom instruction set',
    'custom-instructions': 'custom instructions configuration',
    'projects': 'project setup with custom instructions',
    'gems': 'Gem configuration with custom persona',
    'general-prompt': 'optimized prompt',
}


def available_prompt_types(ai_tool):
    """Prompt types offered for a tool; empty before a tool is chosen."""
    if not ai_tool:
        return []
    return list(_TOOL_PROMPT_TYPES.get(ai_tool, ['general-prompt']))


def is_supported(ai_tool, prompt_type):
    return prompt_type in available_prompt_types(ai_tool)


def tool_display_name(ai_tool):
    return TOOL_DISPLAY_NAMES.get(ai_tool, ai_tool)


def prompt_type_label(prompt_type, ai_tool=None):
    if prompt_type == PROMPT_ARCHITECT:
        return 'Prompt Architect Gem' if ai_tool == 'gemini' else 'Prompt Architect Project'
    return {
        'custom-instructions': 'Custom Instructions',
        'projects': 'Projects',
        'gems': 'Gems',
        'general-prompt': 'General Prompt',
    }.get(prompt_type, prompt_type)
