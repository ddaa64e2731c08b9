"""Tests for prompt_architect.services.llm_client — CompletionClient over the OpenAI SDK."""
from unittest.mock import MagicMock, patch

import httpx
import openai
import pytest

from prompt_architect.services.llm_client import (
    CompletionClient, CompletionError, CompletionTimeout, build_openai_client,
)

MESSAGES = [{'role': 'system', 'content': 'Be helpful.'}, {'role': 'user', 'content': 'Hi'}]


def _request():
    return httpx.Request('POST', 'https://api.together.xyz/v1/chat/completions')


class TestBuildOpenAIClient:

    def test_no_key_returns_none(self):
        assert build_openai_client(None, 'https://api.together.xyz/v1') is None

    @patch('prompt_architect.services.llm_client.openai.OpenAI')
    def test_disables_sdk_retries(self, mock_openai):
        build_openai_client('key', 'https://api.together.xyz/v1')
        mock_openai.assert_called_once_with(
            api_key='key', base_url='https://api.together.xyz/v1', max_retries=0,
        )


class TestComplete:

    def test_returns_stripped_text(self, openai_client, make_chat_response):
        openai_client.chat.completions.create.return_value = make_chat_response('  Sure thing.  \n')
        llm = CompletionClient(openai_client, model='m', timeout=12)
        assert llm.complete(MESSAGES) == 'Sure thing.'

    def test_passes_generation_parameters(self, openai_client):
        llm = CompletionClient(openai_client, model='m', timeout=12)
        llm.complete(MESSAGES, max_tokens=600, temperature=0.8, top_p=0.9)
        openai_client.chat.completions.create.assert_called_once_with(
            model='m', messages=MESSAGES, max_tokens=600, temperature=0.8, top_p=0.9, timeout=12,
        )

    def test_timeout_raises_completion_timeout(self, openai_client):
        openai_client.chat.completions.create.side_effect = openai.APITimeoutError(request=_request())
        llm = CompletionClient(openai_client, model='m', timeout=12)
        with pytest.raises(CompletionTimeout) as exc:
            llm.complete(MESSAGES)
        assert exc.value.timeout == 12

    def test_upstream_error_raises_completion_error(self, openai_client):
        openai_client.chat.completions.create.side_effect = openai.APIConnectionError(request=_request())
        llm = CompletionClient(openai_client, model='m')
        with pytest.raises(CompletionError) as exc:
            llm.complete(MESSAGES)
        assert not isinstance(exc.value, CompletionTimeout)

    def test_empty_completion_is_an_error(self, openai_client, make_chat_response):
        openai_client.chat.completions.create.return_value = make_chat_response('   ')
        with pytest.raises(CompletionError):
            CompletionClient(openai_client, model='m').complete(MESSAGES)

    def test_no_choices_is_an_error(self, openai_client):
        response = MagicMock()
        response.choices = []
        openai_client.chat.completions.create.return_value = response
        with pytest.raises(CompletionError):
            CompletionClient(openai_client, model='m').complete(MESSAGES)

    def test_unconfigured_client_raises(self):
        llm = CompletionClient(None, model='m')
        assert llm.configured is False
        with pytest.raises(CompletionError):
            llm.complete(MESSAGES)
