"""
Unit tests for the ScriptWriterAgent.

All text generator calls go through mocked clients.
"""

import json

import pytest
from unittest.mock import AsyncMock, MagicMock

from scriptengine.agents import ScriptGenerationError, ScriptWriterAgent
from scriptengine.agents.base import parse_json_response
from scriptengine.models import PolishResponse

FLAWED_SCRIPT = "Now think about a peaceful moment. Your breath slows."


def make_client(text="", polished=None):
    client = MagicMock()
    client.generate = AsyncMock(return_value=text)
    client.generate_structured = AsyncMock(
        return_value=PolishResponse(polished_script=polished or "")
    )
    return client


class TestWrite:
    """Tests for ScriptWriterAgent.write."""

    @pytest.mark.asyncio
    async def test_clean_script_skips_polish(self, engine, anxiety_request, clean_script):
        """Test that a clean script is returned without a polish pass."""
        client = make_client(clean_script)
        agent = ScriptWriterAgent(client, engine)

        generated = await agent.write(anxiety_request)

        assert generated.script == clean_script
        assert generated.report.score == 100
        assert generated.polished is False
        client.generate_structured.assert_not_called()

    @pytest.mark.asyncio
    async def test_prompts_sent_to_generator(self, engine, anxiety_request, clean_script):
        """Test that the engine's prompts reach the generator."""
        client = make_client(clean_script)
        agent = ScriptWriterAgent(client, engine)

        generated = await agent.write(anxiety_request)

        kwargs = client.generate.call_args.kwargs
        assert kwargs["system_prompt"] == generated.engine_result.system_prompt_text
        assert "I feel anxious before meetings" in kwargs["user_prompt"]
        assert "approximately 1500 words" in kwargs["user_prompt"]
        assert kwargs["temperature"] == engine.settings.temperature

    @pytest.mark.asyncio
    async def test_polish_accepted(self, engine, anxiety_request, clean_script):
        """Test that a better polished script replaces the original."""
        client = make_client(FLAWED_SCRIPT, polished=clean_script)
        agent = ScriptWriterAgent(client, engine)

        generated = await agent.write(anxiety_request)

        assert generated.polished is True
        assert generated.script == clean_script
        assert generated.report.is_valid
        user_prompt = client.generate_structured.call_args.kwargs["user_prompt"]
        assert "think about" in user_prompt

    @pytest.mark.asyncio
    async def test_worse_polish_rejected(self, engine, anxiety_request):
        """Test that a lower-scoring polish keeps the original script."""
        worse = "Think about calm. Remember a time when you rested. Analyze nothing."
        client = make_client(FLAWED_SCRIPT, polished=worse)
        agent = ScriptWriterAgent(client, engine)

        generated = await agent.write(anxiety_request)

        assert generated.polished is False
        assert generated.script == FLAWED_SCRIPT

    @pytest.mark.asyncio
    async def test_polish_disabled(self, engine, anxiety_request):
        """Test that polishing can be turned off."""
        client = make_client(FLAWED_SCRIPT)
        agent = ScriptWriterAgent(client, engine, polish=False)

        generated = await agent.write(anxiety_request)

        assert generated.polished is False
        assert not generated.report.is_valid
        client.generate_structured.assert_not_called()


class TestErrors:
    """Tests for generator failures."""

    @pytest.mark.asyncio
    async def test_generator_failure(self, engine, anxiety_request):
        """Test that a provider error becomes a retryable ScriptGenerationError."""
        client = make_client()
        client.generate = AsyncMock(side_effect=RuntimeError("rate limited"))
        agent = ScriptWriterAgent(client, engine)

        with pytest.raises(ScriptGenerationError) as exc_info:
            await agent.write(anxiety_request)

        assert exc_info.value.retryable is True
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("reply", ["", "   ", None])
    async def test_empty_response(self, engine, anxiety_request, reply):
        """Test that an empty or non-text reply is rejected."""
        agent = ScriptWriterAgent(make_client(reply), engine)

        with pytest.raises(ScriptGenerationError):
            await agent.write(anxiety_request)

    @pytest.mark.asyncio
    async def test_unparseable_polish(self, engine, anxiety_request):
        """Test that an unparseable polish reply raises ScriptGenerationError."""
        def invalid_reply(**kwargs):
            return PolishResponse.model_validate_json("not json")

        client = make_client(FLAWED_SCRIPT)
        client.generate_structured = AsyncMock(side_effect=invalid_reply)
        agent = ScriptWriterAgent(client, engine)

        with pytest.raises(ScriptGenerationError):
            await agent.write(anxiety_request)


class TestProcess:
    """Tests for the dict-based agent interface."""

    @pytest.mark.asyncio
    async def test_process(self, engine, clean_script):
        """Test that process() accepts and returns plain dicts."""
        agent = ScriptWriterAgent(make_client(clean_script), engine)

        output = await agent.process({"presenting_issue": "Stress at work"})

        assert output["script"] == clean_script
        assert output["report"]["score"] == 100
        assert output["report"]["is_valid"] is True
        json.dumps(output)


class TestParseJsonResponse:
    """Tests for JSON reply parsing."""

    def test_plain_json(self):
        """Test a bare JSON reply."""
        result = parse_json_response('{"polished_script": "Calm"}', PolishResponse)
        assert result.polished_script == "Calm"

    def test_fenced_json(self):
        """Test a reply wrapped in a fenced block."""
        content = 'Here you go:\n```json\n{"polished_script": "Calm"}\n```'
        result = parse_json_response(content, PolishResponse)
        assert result.polished_script == "Calm"
