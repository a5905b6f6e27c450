"""
Engine Settings
Process-level settings for the planning pipeline and the script writer.
"""

import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

from ..models.schemas import ClientLevel
from .llm_providers import LLMProvider


class EngineSettings(BaseModel):
    """Settings read once at process start."""

    catalog_dir: Optional[Path] = Field(
        default=None,
        description="Directory of catalog JSON documents; bundled data when unset"
    )
    max_arcs_per_script: Optional[int] = Field(
        default=None,
        ge=1,
        description="Overrides the arc catalog's max_arcs_per_script"
    )
    default_client_level: ClientLevel = ClientLevel.BEGINNER
    target_word_count: int = Field(default=1500, ge=100)

    generation_provider: LLMProvider = LLMProvider.OPENAI
    generation_model: Optional[str] = Field(
        default=None,
        description="Model name; the provider's default model when unset"
    )
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    max_tokens: int = Field(default=4000, ge=256)

    log_level: str = "INFO"


def _int_env(name: str) -> Optional[int]:
    value = os.getenv(name)
    return int(value) if value else None


def create_settings_from_env() -> EngineSettings:
    """Create engine settings from SCRIPTENGINE_* environment variables."""
    values = {}

    if os.getenv("SCRIPTENGINE_CATALOG_DIR"):
        values["catalog_dir"] = Path(os.getenv("SCRIPTENGINE_CATALOG_DIR"))
    if os.getenv("SCRIPTENGINE_MAX_ARCS"):
        values["max_arcs_per_script"] = _int_env("SCRIPTENGINE_MAX_ARCS")
    if os.getenv("SCRIPTENGINE_CLIENT_LEVEL"):
        values["default_client_level"] = os.getenv("SCRIPTENGINE_CLIENT_LEVEL").lower()
    if os.getenv("SCRIPTENGINE_TARGET_WORDS"):
        values["target_word_count"] = _int_env("SCRIPTENGINE_TARGET_WORDS")
    if os.getenv("SCRIPTENGINE_PROVIDER"):
        values["generation_provider"] = os.getenv("SCRIPTENGINE_PROVIDER").lower()
    if os.getenv("SCRIPTENGINE_MODEL"):
        values["generation_model"] = os.getenv("SCRIPTENGINE_MODEL")
    if os.getenv("SCRIPTENGINE_TEMPERATURE"):
        values["temperature"] = float(os.getenv("SCRIPTENGINE_TEMPERATURE"))
    if os.getenv("SCRIPTENGINE_MAX_TOKENS"):
        values["max_tokens"] = _int_env("SCRIPTENGINE_MAX_TOKENS")
    if os.getenv("SCRIPTENGINE_LOG_LEVEL"):
        values["log_level"] = os.getenv("SCRIPTENGINE_LOG_LEVEL").upper()

    return EngineSettings(**values)
