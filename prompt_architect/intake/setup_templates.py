"""
Setup instructions shown as Section 1 of a Prompt Architect output.

Templates use {{userRole}} and {{userBusiness}} placeholders.
"""

CHATGPT_TEMPLATE = """# How to Set Up Your ChatGPT Project

Follow these steps to create your personalized AI assistant in ChatGPT.

## Step 1: Open ChatGPT Projects

1. Go to chat.openai.com
2. Look for **"Projects"** in the left sidebar
3. Click **"New Project"** to create a new workspace

## Step 2: Name Your Project

**Suggested name:** "{{userRole}} Assistant" or "{{userBusiness}} Helper"

## Step 3: Add Custom Instructions

1. Open the **project settings**
2. Find the **"Instructions"** section
3. **Copy and paste Section 2** into the instructions field
4. Click **Save**

## Step 4: Upload Relevant Files (Optional)

Style guides, product information, templates or reference material help ChatGPT understand your work.

## Step 5: Start Your First Conversation

Open the project and start chatting. Your instructions are active for every chat inside it.
"""

CLAUDE_TEMPLATE = """# How to Set Up Your Claude Project

Follow these steps to create your personalized AI assistant in Claude.

## Step 1: Open Claude Projects

1. Go to claude.ai
2. Click **"Projects"** in the sidebar
3. Click **"Create Project"**

## Step 2: Name Your Project

**Suggested name:** "{{userRole}} Assistant" or "{{userBusiness}} Helper"

## Step 3: Set Project Instructions

1. Click **"Set custom instructions"** in the project
2. **Copy and paste Section 2** into the instructions field
3. Click **Save**

## Step 4: Add Project Knowledge (Optional)

Upload documents such as style guides, briefs or past work to give Claude deeper context.

## Step 5: Start Using Your Project

Start a new chat inside the project. Claude applies your instructions and knowledge automatically.
"""

GEMINI_TEMPLATE = """# How to Set Up Your Gemini Gem

Follow these steps to create your personalized AI assistant in Gemini.

## Step 1: Open Gemini Gems

1. Go to gemini.google.com
2. Open the **Gem manager**
3. Click **"New Gem"**

## Step 2: Name Your Gem

**Suggested name:** "{{userRole}} Assistant" or "{{userBusiness}} Helper"

## Step 3: Add Your Instructions

**Copy and paste Section 2** into the Gem's instructions field.

## Step 4: Customize Your Gem (Optional)

Use the preview panel to try a few requests and adjust the instructions.

## Step 5: Save and Use Your Gem

Click **Save**. Your Gem appears in the sidebar, ready for every new chat.
"""

TEMPLATES = {
    'chatgpt': CHATGPT_TEMPLATE,
    'claude': CLAUDE_TEMPLATE,
    'gemini': GEMINI_TEMPLATE,
}


def get_setup_template(ai_tool):
    """Template for a tool, or None (Copilot has no persistent assistants)."""
    return TEMPLATES.get(ai_tool)


def substitute(template, role, business):
    return template.replace('{{userRole}}', role).replace('{{userBusiness}}', business)
