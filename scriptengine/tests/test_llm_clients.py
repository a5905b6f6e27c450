"""
Unit tests for the text generator clients.

SDK clients are replaced with mocks before the first call, so no provider
package is imported and no request leaves the process.
"""

from types import SimpleNamespace

import pytest
from pydantic import ValidationError
from unittest.mock import AsyncMock, MagicMock

from scriptengine.agents import ClaudeClient, GeminiClient, OpenAIClient
from scriptengine.agents.base import JSON_ONLY_SUFFIX
from scriptengine.models import PolishResponse

POLISH_JSON = '{"polished_script": "Breath settles."}'


def openai_client(content):
    client = OpenAIClient(api_key="sk-test", model="gpt-4o")
    sdk = MagicMock()
    sdk.chat.completions.create = AsyncMock(
        return_value=SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content=content))]
        )
    )
    client._client = sdk
    return client, sdk.chat.completions.create


def claude_client(*texts):
    client = ClaudeClient(api_key="ak-test", model="claude-3-5-sonnet-20241022")
    sdk = MagicMock()
    sdk.messages.create = AsyncMock(
        return_value=SimpleNamespace(
            content=[SimpleNamespace(type="text", text=text) for text in texts]
        )
    )
    client._client = sdk
    return client, sdk.messages.create


def gemini_client(text):
    client = GeminiClient(api_key="gk-test", model="gemini-1.5-pro")
    sdk = MagicMock()
    sdk.generate_content_async = AsyncMock(return_value=SimpleNamespace(text=text))
    client._client = sdk
    return client, sdk.generate_content_async


class TestOpenAIClient:
    """Tests for OpenAIClient request building."""

    @pytest.mark.asyncio
    async def test_generate(self):
        """Test a plain completion request."""
        client, create = openai_client("Breath settles.")

        text = await client.generate("system", "user", temperature=0.5, max_tokens=300)

        assert text == "Breath settles."
        kwargs = create.call_args.kwargs
        assert kwargs["model"] == "gpt-4o"
        assert kwargs["messages"][0] == {"role": "system", "content": "system"}
        assert kwargs["max_tokens"] == 300
        assert "response_format" not in kwargs

    @pytest.mark.asyncio
    async def test_unset_max_tokens_omitted(self):
        """Test that max_tokens is left out when not given."""
        client, create = openai_client("ok")
        await client.generate("system", "user")
        assert "max_tokens" not in create.call_args.kwargs

    @pytest.mark.asyncio
    async def test_structured_uses_json_mode(self):
        """Test that structured replies request JSON output and are validated."""
        client, create = openai_client(POLISH_JSON)

        response = await client.generate_structured("system", "user", PolishResponse, 0.3)

        assert response.polished_script == "Breath settles."
        kwargs = create.call_args.kwargs
        assert kwargs["response_format"] == {"type": "json_object"}
        assert kwargs["messages"][0]["content"].endswith(JSON_ONLY_SUFFIX)
        assert kwargs["temperature"] == 0.3


class TestClaudeClient:
    """Tests for ClaudeClient request building."""

    @pytest.mark.asyncio
    async def test_default_max_tokens(self):
        """Test that a default token limit is always sent."""
        client, create = claude_client("ok")

        await client.generate("system", "user")

        kwargs = create.call_args.kwargs
        assert kwargs["max_tokens"] == ClaudeClient.DEFAULT_MAX_TOKENS
        assert kwargs["system"] == "system"

    @pytest.mark.asyncio
    async def test_joins_text_blocks(self):
        """Test that multiple text blocks are joined in order."""
        client, _ = claude_client("Breath ", "settles.")
        assert await client.generate("system", "user") == "Breath settles."

    @pytest.mark.asyncio
    async def test_structured_fenced_reply(self):
        """Test that a fenced JSON reply is parsed."""
        client, create = claude_client(f"Here you go:\n```json\n{POLISH_JSON}\n```")

        response = await client.generate_structured("system", "user", PolishResponse)

        assert response.polished_script == "Breath settles."
        assert create.call_args.kwargs["system"].endswith(JSON_ONLY_SUFFIX)

    @pytest.mark.asyncio
    async def test_structured_invalid_reply(self):
        """Test that a non-JSON reply raises ValidationError."""
        client, _ = claude_client("I cannot do that.")

        with pytest.raises(ValidationError):
            await client.generate_structured("system", "user", PolishResponse)


class TestGeminiClient:
    """Tests for GeminiClient request building."""

    @pytest.mark.asyncio
    async def test_generate(self):
        """Test that prompts are combined and optional config is omitted."""
        client, generate = gemini_client("Breath settles.")

        text = await client.generate("system", "user", temperature=0.2)

        assert text == "Breath settles."
        prompt = generate.call_args.args[0]
        assert prompt == "system\n\n---\n\nuser"
        assert generate.call_args.kwargs["generation_config"] == {"temperature": 0.2}

    @pytest.mark.asyncio
    async def test_structured_uses_json_mime_type(self):
        """Test that structured replies request a JSON response."""
        client, generate = gemini_client(POLISH_JSON)

        response = await client.generate_structured("system", "user", PolishResponse)

        assert response.polished_script == "Breath settles."
        config = generate.call_args.kwargs["generation_config"]
        assert config["response_mime_type"] == "application/json"
