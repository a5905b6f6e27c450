"""
Text Generator Clients for ScriptEngine
The boundary to external text generation services plus a small agent base class.
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..config import LLMConfiguration, LLMProvider

logger = logging.getLogger("scriptengine.agents")

T = TypeVar("T", bound=BaseModel)

JSON_ONLY_SUFFIX = "\n\nYou MUST respond with valid JSON only, no other text."


def parse_json_response(content: str, response_model: Type[T]) -> T:
    """Validate a JSON reply, falling back to the first ```json fenced block."""
    try:
        return response_model.model_validate_json(content)
    except ValidationError:
        if "```json" in content:
            json_str = content.split("```json")[1].split("```")[0].strip()
            return response_model.model_validate_json(json_str)
        raise


class LLMClient(ABC):
    """
    Abstract base class for text generation clients.

    Providers implement generate() only. Structured replies reuse it in JSON
    mode and are validated here, so every provider parses them the same way.
    """

    model: str

    @abstractmethod
    async def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.7,
        max_tokens: Optional[int] = None,
        json_mode: bool = False,
    ) -> str:
        """Generate free text, or a JSON document when json_mode is set."""
        pass

    async def generate_structured(
        self,
        system_prompt: str,
        user_prompt: str,
        response_model: Type[T],
        temperature: float = 0.7,
    ) -> T:
        """
        Generate a JSON reply validated against response_model.

        Raises:
            ValidationError: If the reply is not valid JSON for the model
        """
        content = await self.generate(
            system_prompt + JSON_ONLY_SUFFIX,
            user_prompt,
            temperature=temperature,
            json_mode=True,
        )
        logger.debug(f"[{type(self).__name__}] structured reply of {len(content or '')} chars")
        return parse_json_response(content or "", response_model)


class OpenAIClient(LLMClient):
    """OpenAI chat completions client; OpenRouter is reached through its base_url."""

    def __init__(self, api_key: str, model: str, base_url: str = "https://api.openai.com/v1"):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url
        self._client = None

    async def _get_client(self):
        if self._client is None:
            from openai import AsyncOpenAI
            self._client = AsyncOpenAI(api_key=self.api_key, base_url=self.base_url)
        return self._client

    async def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.7,
        max_tokens: Optional[int] = None,
        json_mode: bool = False,
    ) -> str:
        client = await self._get_client()
        options: Dict[str, Any] = {"temperature": temperature}
        if max_tokens:
            options["max_tokens"] = max_tokens
        if json_mode:
            options["response_format"] = {"type": "json_object"}

        response = await client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            **options,
        )
        return response.choices[0].message.content


class ClaudeClient(LLMClient):
    """Anthropic messages client. Claude has no JSON mode; the prompt suffix asks for it."""

    DEFAULT_MAX_TOKENS = 4096

    def __init__(self, api_key: str, model: str):
        self.api_key = api_key
        self.model = model
        self._client = None

    async def _get_client(self):
        if self._client is None:
            from anthropic import AsyncAnthropic
            self._client = AsyncAnthropic(api_key=self.api_key)
        return self._client

    async def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.7,
        max_tokens: Optional[int] = None,
        json_mode: bool = False,
    ) -> str:
        client = await self._get_client()
        response = await client.messages.create(
            model=self.model,
            max_tokens=max_tokens or self.DEFAULT_MAX_TOKENS,
            system=system_prompt,
            messages=[{"role": "user", "content": user_prompt}],
            temperature=temperature,
        )
        return "".join(
            block.text for block in response.content if getattr(block, "type", "text") == "text"
        )


class GeminiClient(LLMClient):
    """Google Gemini client. System and user prompts are sent as one document."""

    def __init__(self, api_key: str, model: str):
        self.api_key = api_key
        self.model = model
        self._client = None

    async def _get_client(self):
        if self._client is None:
            import google.generativeai as genai
            genai.configure(api_key=self.api_key)
            self._client = genai.GenerativeModel(self.model)
        return self._client

    async def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.7,
        max_tokens: Optional[int] = None,
        json_mode: bool = False,
    ) -> str:
        client = await self._get_client()
        generation_config: Dict[str, Any] = {"temperature": temperature}
        if max_tokens:
            generation_config["max_output_tokens"] = max_tokens
        if json_mode:
            generation_config["response_mime_type"] = "application/json"

        response = await client.generate_content_async(
            f"{system_prompt}\n\n---\n\n{user_prompt}",
            generation_config=generation_config,
        )
        return response.text


def create_llm_client(
    provider: LLMProvider,
    config: LLMConfiguration,
    model: Optional[str] = None,
) -> LLMClient:
    """
    Create the client for a provider.

    Args:
        provider: Provider to use
        config: Provider configuration holding API keys
        model: Model name; the provider's default model when omitted

    Raises:
        ValueError: If the provider is not configured or not supported
    """
    provider_config = config.get_provider_config(provider)
    if provider_config is None:
        raise ValueError(f"{provider.value} configuration not provided")

    api_key = provider_config.api_key.get_secret_value()
    model = model or provider_config.default_model

    if provider in (LLMProvider.OPENAI, LLMProvider.OPENROUTER):
        # OpenRouter uses the OpenAI-compatible API
        return OpenAIClient(api_key=api_key, model=model, base_url=provider_config.base_url)
    elif provider == LLMProvider.CLAUDE:
        return ClaudeClient(api_key=api_key, model=model)
    elif provider == LLMProvider.GEMINI:
        return GeminiClient(api_key=api_key, model=model)
    else:
        raise ValueError(f"Unsupported provider: {provider}")


class BaseAgent(ABC):
    """Base class for agents that talk to a text generator."""

    def __init__(
        self,
        name: str,
        llm_client: LLMClient,
        system_prompt: str = "",
    ):
        self.name = name
        self.llm_client = llm_client
        self.system_prompt = system_prompt

    @abstractmethod
    async def process(self, input_data: Dict[str, Any]) -> Dict[str, Any]:
        """Process input and generate output."""
        pass

    async def generate_with_logging(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.7,
        max_tokens: Optional[int] = None,
    ) -> Tuple[str, int]:
        """Generate free text and log timing. Returns (text, duration_ms)."""
        start_time = time.time()
        text = await self.llm_client.generate(
            system_prompt=system_prompt,
            user_prompt=user_prompt,
            temperature=temperature,
            max_tokens=max_tokens,
        )
        duration_ms = int((time.time() - start_time) * 1000)
        logger.info(
            f"[{self.name}] generate took {duration_ms}ms "
            f"(prompt {len(system_prompt) + len(user_prompt)} chars)"
        )
        return text, duration_ms
