"""
ScriptEngine Agents Module
Text generator clients and the script writer agent.
"""

from .base import (
    BaseAgent,
    ClaudeClient,
    GeminiClient,
    LLMClient,
    OpenAIClient,
    create_llm_client,
)
from .script_writer import ScriptGenerationError, ScriptWriterAgent

__all__ = [
    "LLMClient",
    "OpenAIClient",
    "ClaudeClient",
    "GeminiClient",
    "BaseAgent",
    "create_llm_client",
    "ScriptWriterAgent",
    "ScriptGenerationError",
]
