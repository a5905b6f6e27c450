"""
ScriptEngine Configuration Module
Provider configuration and engine settings.
"""

from .llm_providers import (
    # Enums
    LLMProvider,
    # Model Definitions
    OPENAI_MODELS,
    OPENROUTER_MODELS,
    GEMINI_MODELS,
    CLAUDE_MODELS,
    # Configuration Models
    ProviderConfig,
    OpenAIConfig,
    OpenRouterConfig,
    GeminiConfig,
    ClaudeConfig,
    LLMConfiguration,
    # Helper Functions
    get_all_models,
    get_models_for_role,
    create_default_config_from_env,
)
from .settings import EngineSettings, create_settings_from_env

__all__ = [
    "LLMProvider",
    "OPENAI_MODELS",
    "OPENROUTER_MODELS",
    "GEMINI_MODELS",
    "CLAUDE_MODELS",
    "ProviderConfig",
    "OpenAIConfig",
    "OpenRouterConfig",
    "GeminiConfig",
    "ClaudeConfig",
    "LLMConfiguration",
    "EngineSettings",
    "get_all_models",
    "get_models_for_role",
    "create_default_config_from_env",
    "create_settings_from_env",
]
