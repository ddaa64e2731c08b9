"""
Hosted LLM completion client — OpenAI-compatible chat completions with a hard timeout.

The provider is reached through the OpenAI SDK pointed at LLM_BASE_URL, so any
OpenAI-compatible host (Together AI by default) works. SDK retries are
disabled: a timed-out call is reported to the user instead of being repeated.
"""
import logging
from typing import Dict, List

import openai

logger = logging.getLogger('services.llm')


class CompletionError(Exception):
    """Upstream failure, empty completion, or no client configured."""


class CompletionTimeout(CompletionError):
    """The completion call exceeded the configured timeout."""
    def __init__(self, timeout):
        self.timeout = timeout
        super().__init__(f'Completion timed out after {timeout}s')


def build_openai_client(api_key, base_url):
    """Return an OpenAI SDK client, or None when no API key is configured."""
    if not api_key:
        logger.warning("LLM_API_KEY not set — completions will fail")
        return None
    client = openai.OpenAI(api_key=api_key, base_url=base_url, max_retries=0)
    logger.info("LLM client initialized (base_url=%s)", base_url)
    return client


class CompletionClient:
    """
    Usage:
        llm = CompletionClient(build_openai_client(key, url), model='...', timeout=30)
        text = llm.complete(messages, max_tokens=500, temperature=0.7, top_p=0.9)
    """

    def __init__(self, client, model, timeout=30.0):
        self.client = client
        self.model = model
        self.timeout = timeout

    @property
    def configured(self):
        return self.client is not None

    def complete(self, messages: List[Dict[str, str]], max_tokens=500, temperature=0.7, top_p=0.9) -> str:
        if self.client is None:
            raise CompletionError('No LLM client configured')

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                max_tokens=max_tokens,
                temperature=temperature,
                top_p=top_p,
                timeout=self.timeout,
            )
        except openai.APITimeoutError as e:
            logger.error("Completion timed out after %ss (model=%s)", self.timeout, self.model)
            raise CompletionTimeout(self.timeout) from e
        except openai.OpenAIError as e:
            logger.error("Completion failed (model=%s): %s", self.model, type(e).__name__, exc_info=True)
            raise CompletionError('Upstream completion failed') from e

        content = None
        if response.choices:
            content = response.choices[0].message.content
        if not content or not content.strip():
            logger.error("Empty completion from provider (model=%s)", self.model)
            raise CompletionError('Empty completion')
        return content.strip()
