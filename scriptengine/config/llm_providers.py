"""
Text Generator Provider Configuration
Bring-your-own-key settings for OpenAI, OpenRouter, Google Gemini and Anthropic Claude.
"""

import os
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, SecretStr


class LLMProvider(str, Enum):
    """Supported text generation providers."""
    OPENAI = "openai"
    OPENROUTER = "openrouter"
    GEMINI = "gemini"
    CLAUDE = "claude"


# ============================================================================
# Model Definitions by Provider
# ============================================================================

OPENAI_MODELS: Dict[str, Dict[str, Any]] = {
    "gpt-4o": {
        "name": "GPT-4o",
        "description": "Strong long-form prose, reliable JSON for polish passes",
        "context_window": 128000,
        "max_output": 16384,
        "recommended_for": ["writer", "polish"],
    },
    "gpt-4o-mini": {
        "name": "GPT-4o Mini",
        "description": "Fast and inexpensive; good for previews",
        "context_window": 128000,
        "max_output": 16384,
        "recommended_for": ["preview"],
    },
}

OPENROUTER_MODELS: Dict[str, Dict[str, Any]] = {
    "anthropic/claude-3.5-sonnet": {
        "name": "Claude 3.5 Sonnet (via OpenRouter)",
        "description": "Warm, natural narration voice",
        "context_window": 200000,
        "max_output": 8192,
        "recommended_for": ["writer", "polish"],
    },
    "google/gemini-pro-1.5": {
        "name": "Gemini 1.5 Pro (via OpenRouter)",
        "description": "Long context, steady pacing",
        "context_window": 2000000,
        "max_output": 8192,
        "recommended_for": ["writer"],
    },
}

GEMINI_MODELS: Dict[str, Dict[str, Any]] = {
    "gemini-1.5-pro": {
        "name": "Gemini 1.5 Pro",
        "description": "Long context, steady pacing",
        "context_window": 2000000,
        "max_output": 8192,
        "recommended_for": ["writer"],
    },
    "gemini-1.5-flash": {
        "name": "Gemini 1.5 Flash",
        "description": "Fast drafts and previews",
        "context_window": 1000000,
        "max_output": 8192,
        "recommended_for": ["preview"],
    },
}

CLAUDE_MODELS: Dict[str, Dict[str, Any]] = {
    "claude-3-5-sonnet-20241022": {
        "name": "Claude 3.5 Sonnet",
        "description": "Warm, natural narration voice",
        "context_window": 200000,
        "max_output": 8192,
        "recommended_for": ["writer", "polish"],
    },
    "claude-3-5-haiku-20241022": {
        "name": "Claude 3.5 Haiku",
        "description": "Fast surgical edits",
        "context_window": 200000,
        "max_output": 8192,
        "recommended_for": ["polish", "preview"],
    },
}


# ============================================================================
# Provider Configuration Models
# ============================================================================

class ProviderConfig(BaseModel):
    """Base configuration for a text generation provider."""
    provider: LLMProvider
    api_key: SecretStr
    base_url: Optional[str] = None
    organization_id: Optional[str] = None
    default_model: str
    enabled: bool = True


class OpenAIConfig(ProviderConfig):
    """OpenAI-specific configuration."""
    provider: LLMProvider = LLMProvider.OPENAI
    base_url: str = "https://api.openai.com/v1"
    default_model: str = "gpt-4o"

    @property
    def available_models(self) -> Dict[str, Dict[str, Any]]:
        return OPENAI_MODELS


class OpenRouterConfig(ProviderConfig):
    """OpenRouter-specific configuration."""
    provider: LLMProvider = LLMProvider.OPENROUTER
    base_url: str = "https://openrouter.ai/api/v1"
    default_model: str = "anthropic/claude-3.5-sonnet"
    site_url: Optional[str] = None
    app_name: Optional[str] = "ScriptEngine"

    @property
    def available_models(self) -> Dict[str, Dict[str, Any]]:
        return OPENROUTER_MODELS


class GeminiConfig(ProviderConfig):
    """Google Gemini-specific configuration."""
    provider: LLMProvider = LLMProvider.GEMINI
    base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    default_model: str = "gemini-1.5-pro"

    @property
    def available_models(self) -> Dict[str, Dict[str, Any]]:
        return GEMINI_MODELS


class ClaudeConfig(ProviderConfig):
    """Anthropic Claude-specific configuration."""
    provider: LLMProvider = LLMProvider.CLAUDE
    base_url: str = "https://api.anthropic.com/v1"
    default_model: str = "claude-3-5-sonnet-20241022"

    @property
    def available_models(self) -> Dict[str, Dict[str, Any]]:
        return CLAUDE_MODELS


# ============================================================================
# Master Configuration
# ============================================================================

class LLMConfiguration(BaseModel):
    """All configured providers plus global generation settings."""

    openai: Optional[OpenAIConfig] = None
    openrouter: Optional[OpenRouterConfig] = None
    gemini: Optional[GeminiConfig] = None
    claude: Optional[ClaudeConfig] = None

    max_retries: int = Field(default=3, ge=1, le=10)
    timeout_seconds: int = Field(default=120, ge=30, le=600)

    def get_provider_config(self, provider: LLMProvider) -> Optional[ProviderConfig]:
        provider_map = {
            LLMProvider.OPENAI: self.openai,
            LLMProvider.OPENROUTER: self.openrouter,
            LLMProvider.GEMINI: self.gemini,
            LLMProvider.CLAUDE: self.claude,
        }
        return provider_map.get(provider)

    def get_enabled_providers(self) -> List[LLMProvider]:
        enabled = []
        for provider in LLMProvider:
            config = self.get_provider_config(provider)
            if config and config.enabled:
                enabled.append(provider)
        return enabled

    def validate_model(self, provider: LLMProvider, model: str) -> List[str]:
        """Check that a model is reachable through a configured, enabled provider."""
        provider_config = self.get_provider_config(provider)
        if not provider_config:
            return [f"Provider {provider.value} is not configured"]
        if not provider_config.enabled:
            return [f"Provider {provider.value} is disabled"]
        if model not in provider_config.available_models:
            return [f"Model {model} not available for {provider.value}"]
        return []


# ============================================================================
# Helper Functions
# ============================================================================

def get_all_models() -> Dict[str, Dict[str, Dict[str, Any]]]:
    """Get all known models grouped by provider."""
    return {
        "openai": OPENAI_MODELS,
        "openrouter": OPENROUTER_MODELS,
        "gemini": GEMINI_MODELS,
        "claude": CLAUDE_MODELS,
    }


def get_models_for_role(role: str) -> Dict[str, List[str]]:
    """Get recommended models for a generation role (writer, polish, preview)."""
    recommended = {}
    for provider, models in get_all_models().items():
        matches = [
            model_id for model_id, info in models.items()
            if role.lower() in info.get("recommended_for", [])
        ]
        if matches:
            recommended[provider] = matches
    return recommended


def create_default_config_from_env() -> LLMConfiguration:
    """Create provider configuration from environment variables."""
    config = LLMConfiguration()

    if os.getenv("OPENAI_API_KEY"):
        config.openai = OpenAIConfig(
            api_key=SecretStr(os.getenv("OPENAI_API_KEY")),
            organization_id=os.getenv("OPENAI_ORG_ID"),
        )

    if os.getenv("OPENROUTER_API_KEY"):
        config.openrouter = OpenRouterConfig(
            api_key=SecretStr(os.getenv("OPENROUTER_API_KEY")),
            site_url=os.getenv("OPENROUTER_SITE_URL"),
        )

    if os.getenv("GEMINI_API_KEY"):
        config.gemini = GeminiConfig(
            api_key=SecretStr(os.getenv("GEMINI_API_KEY")),
        )

    if os.getenv("ANTHROPIC_API_KEY"):
        config.claude = ClaudeConfig(
            api_key=SecretStr(os.getenv("ANTHROPIC_API_KEY")),
        )

    return config
