"""
Script Writer Agent

Sends the assembled prompts to a text generator, validates the returned
script and optionally runs one polish pass that feeds the violations back to
the generator.

Everything that can go wrong at the generator boundary surfaces as
ScriptGenerationError so callers can retry.
"""

import logging
import time
from typing import Any, Dict, Optional

from pydantic import ValidationError

from ..config.settings import EngineSettings
from ..core.engine import ScriptEngine
from ..models.schemas import (
    EngineRequest,
    EngineResult,
    GeneratedScript,
    PolishResponse,
    ValidationReport,
)
from ..prompts.writer import (
    POLISH_SYSTEM_PROMPT,
    POLISH_USER_PROMPT_TEMPLATE,
    SCRIPT_USER_PROMPT_TEMPLATE,
)
from .base import BaseAgent, LLMClient

logger = logging.getLogger("scriptengine.writer")

POLISH_TEMPERATURE = 0.3


class ScriptGenerationError(Exception):
    """The text generator failed or returned an unusable response."""

    retryable = True

    def __init__(self, message: str, retryable: bool = True):
        super().__init__(message)
        self.retryable = retryable


class ScriptWriterAgent(BaseAgent):
    """Generates, validates and optionally polishes a script for one request."""

    def __init__(
        self,
        llm_client: LLMClient,
        engine: ScriptEngine,
        settings: Optional[EngineSettings] = None,
        polish: bool = True,
    ):
        super().__init__(name="ScriptWriter", llm_client=llm_client)
        self.engine = engine
        self.settings = settings or engine.settings
        self.polish_enabled = polish

    async def process(self, input_data: Dict[str, Any]) -> Dict[str, Any]:
        request = EngineRequest.model_validate(input_data)
        generated = await self.write(request)
        return generated.model_dump(mode="json")

    async def write(self, request: EngineRequest) -> GeneratedScript:
        """
        Generate and validate a script.

        Raises:
            ScriptGenerationError: If the generator fails or returns an empty
                or non-text response
        """
        result = self.engine.generate(request)
        user_prompt = self.build_user_prompt(result, request)

        start_time = time.time()
        script = await self._generate_text(result.system_prompt_text, user_prompt)
        report = self.engine.validate(script)

        polished = False
        if self.polish_enabled and report.violations:
            script, report, polished = await self._polish(script, report)

        generation_ms = int((time.time() - start_time) * 1000)
        logger.info(
            f"[write] Script of {report.word_count} words, score {report.score}, "
            f"valid={report.is_valid}, polished={polished}"
        )
        return GeneratedScript(
            script=script,
            report=report,
            engine_result=result,
            polished=polished,
            generation_ms=generation_ms,
        )

    def build_user_prompt(self, result: EngineResult, request: EngineRequest) -> str:
        return SCRIPT_USER_PROMPT_TEMPLATE.format(
            client_context=result.user_prompt_text,
            target_words=self.settings.target_word_count,
            emergence=request.target_emergence.value,
            instructions="\n".join(result.structured_instructions),
        )

    async def _generate_text(self, system_prompt: str, user_prompt: str) -> str:
        try:
            text, _ = await self.generate_with_logging(
                system_prompt,
                user_prompt,
                temperature=self.settings.temperature,
                max_tokens=self.settings.max_tokens,
            )
        except Exception as e:
            logger.warning(f"[_generate_text] Generator call failed: {e}")
            raise ScriptGenerationError(f"Text generation failed: {e}") from e

        if not isinstance(text, str) or not text.strip():
            logger.warning("[_generate_text] Generator returned an empty or non-text response")
            raise ScriptGenerationError("Text generator returned an empty response")
        return text.strip()

    async def _polish(self, script: str, report: ValidationReport):
        issues = "\n".join(
            f"- [{v.severity.value.upper()}] {v.issue}"
            + (f' (phrase: "{v.forbidden_phrase}")' if v.forbidden_phrase else "")
            for v in report.violations
        )
        user_prompt = POLISH_USER_PROMPT_TEMPLATE.format(issues=issues, script=script)

        try:
            response = await self.llm_client.generate_structured(
                system_prompt=POLISH_SYSTEM_PROMPT,
                user_prompt=user_prompt,
                response_model=PolishResponse,
                temperature=POLISH_TEMPERATURE,
            )
        except ValidationError as e:
            logger.warning(f"[_polish] Unparseable polish response: {e}")
            raise ScriptGenerationError(f"Polish response could not be parsed: {e}") from e
        except Exception as e:
            logger.warning(f"[_polish] Polish call failed: {e}")
            raise ScriptGenerationError(f"Polish pass failed: {e}") from e

        polished_script = response.polished_script.strip()
        if not polished_script:
            raise ScriptGenerationError("Polish pass returned an empty script")

        polished_report = self.engine.validate(polished_script)
        if polished_report.score >= report.score:
            logger.info(
                f"[_polish] Score {report.score} -> {polished_report.score}, keeping polished script"
            )
            return polished_script, polished_report, True

        logger.info(
            f"[_polish] Polished score {polished_report.score} below {report.score}, keeping original"
        )
        return script, report, False
