"""
HTTP client the wizard uses to submit the intake for generation.
"""
import logging
from dataclasses import dataclass
from typing import Dict, Optional

import requests

from prompt_architect.config import INTAKE_API_URL

logger = logging.getLogger('intake.api_client')

DEFAULT_TIMEOUT = 35

TIMEOUT_ERROR = 'Request timed out. Please try again.'
CONNECTION_ERROR = 'Could not reach the server. Please try again.'
GENERIC_ERROR = 'Failed to generate your prompt. Please try again.'


@dataclass
class IntakeResult:
    success: bool
    output: Optional[Dict] = None
    error: Optional[str] = None


class IntakeApiClient:

    def __init__(self, base_url=None, timeout=DEFAULT_TIMEOUT, session=None):
        self.url = (base_url or INTAKE_API_URL).rstrip('/') + '/api/chat/intake'
        self.timeout = timeout
        self._session = session or requests.Session()

    def generate(self, ai_tool, prompt_type, answers) -> IntakeResult:
        payload = {'aiTool': ai_tool, 'promptType': prompt_type, 'guidedQuestions': answers}
        try:
            response = self._session.post(self.url, json=payload, timeout=self.timeout)
        except requests.exceptions.Timeout:
            logger.warning("Intake request timed out after %ss", self.timeout)
            return IntakeResult(success=False, error=TIMEOUT_ERROR)
        except requests.exceptions.RequestException as e:
            logger.error("Intake request failed: %s", e)
            return IntakeResult(success=False, error=CONNECTION_ERROR)

        try:
            data = response.json()
        except ValueError:
            logger.error("Intake response was not JSON (status %d)", response.status_code)
            return IntakeResult(success=False, error=GENERIC_ERROR)
        if not isinstance(data, dict):
            return IntakeResult(success=False, error=GENERIC_ERROR)

        if response.status_code != 200 or not data.get('success'):
            return IntakeResult(success=False, error=data.get('error') or GENERIC_ERROR)

        return IntakeResult(success=True, output=data.get('output'))
