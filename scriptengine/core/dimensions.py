"""
Dimension Instruction Builder

Turns the eight 0-100 emphasis levels into tiered natural-language guidance.
A level of 0 contributes nothing; the spiritual dimension additionally needs
its enabled flag.
"""

import bisect
import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..models.schemas import (
    DimensionLevels,
    DimensionSetting,
    GenerationRules,
    PresentingContext,
)
from ..prompts.dimensions import (
    ARCHETYPE_LINE,
    CLIENT_CONTEXT_HEADER,
    CLIENT_ISSUE_LINE,
    CLIENT_NOTES_LINE,
    CLIENT_OUTCOME_LINE,
    DIMENSION_ATTRIBUTES,
    DIMENSION_CRITICAL_RULES,
    DIMENSION_HEADER,
    DIMENSION_ORDER,
    DIMENSION_SYSTEM_PROMPT_INTRO,
    DIMENSION_TIER_TEXT,
    GENERATION_RULE_LABELS,
    OVERALL_STYLE_LINE,
    SPIRITUAL_HEADER,
)

logger = logging.getLogger("scriptengine.dimensions")

# (minimum level, tier) sorted by threshold; lookup picks the greatest threshold <= level
TIER_TABLE: List[Tuple[int, str]] = [
    (1, "minimal"),
    (25, "light"),
    (50, "moderate"),
    (75, "heavy"),
]
_TIER_THRESHOLDS = [threshold for threshold, _ in TIER_TABLE]


def tier_for(level: int) -> Optional[str]:
    """Tier name for a level, or None for level 0."""
    index = bisect.bisect_right(_TIER_THRESHOLDS, level) - 1
    if index < 0:
        return None
    return TIER_TABLE[index][1]


def is_active(name: str, setting: DimensionSetting) -> bool:
    if setting.level <= 0:
        return False
    if name == "spiritual" and not setting.enabled:
        return False
    return True


def _attribute_lines(name: str, setting: DimensionSetting) -> List[str]:
    lines = []
    for attr, label in DIMENSION_ATTRIBUTES.get(name, []):
        value = getattr(setting, attr)
        if isinstance(value, list):
            value = ", ".join(value)
        if value:
            lines.append(f"- {label}: {value}")
    return lines


@dataclass
class AssembledPrompt:
    """Dimension-driven prompt pieces for one request."""
    system_prompt: str
    user_prompt: str
    dimension_instructions: str


class DimensionInstructionBuilder:
    """Renders dimension levels, style lines and generation rules into prompt text."""

    def build_dimension(self, name: str, setting: DimensionSetting) -> Optional[str]:
        """Guidance block for one dimension, or None when it is inactive."""
        if not is_active(name, setting):
            return None

        tier = tier_for(setting.level)
        if name == "spiritual":
            header = SPIRITUAL_HEADER.format(level=setting.level)
        else:
            header = DIMENSION_HEADER.format(title=name.upper(), level=setting.level)

        lines = [header]
        lines.extend(_attribute_lines(name, setting))
        lines.extend(f"- {text}" for text in DIMENSION_TIER_TEXT[name][tier])
        return "\n".join(lines)

    def build_instructions(self, levels: DimensionLevels) -> str:
        blocks = []
        for name in DIMENSION_ORDER:
            block = self.build_dimension(name, getattr(levels, name))
            if block:
                blocks.append(block)
        logger.debug(f"[build_instructions] {len(blocks)} active dimensions")
        return "\n\n".join(blocks)

    def build_style_instructions(self, levels: DimensionLevels) -> str:
        parts = []
        if levels.language.style and levels.language.level > 0:
            parts.append(OVERALL_STYLE_LINE.format(style=levels.language.style))
        if levels.symbolic.archetype and levels.symbolic.level > 0:
            parts.append(ARCHETYPE_LINE.format(archetype=levels.symbolic.archetype))
        return "\n".join(parts)

    def build_generation_rules(self, rules: Optional[GenerationRules]) -> str:
        if rules is None:
            return ""
        parts = [
            f"- **{label}**: {getattr(rules, attr)}"
            for attr, label in GENERATION_RULE_LABELS
            if getattr(rules, attr)
        ]
        if not parts:
            return ""
        return "**GENERATION RULES**:\n" + "\n".join(parts)

    def build_system_prompt(
        self,
        levels: DimensionLevels,
        rules: Optional[GenerationRules] = None,
    ) -> str:
        sections = [DIMENSION_SYSTEM_PROMPT_INTRO, self.build_instructions(levels)]
        style = self.build_style_instructions(levels)
        if style:
            sections.append(style)
        generation_rules = self.build_generation_rules(rules)
        if generation_rules:
            sections.append(generation_rules)
        sections.append(DIMENSION_CRITICAL_RULES)
        return "\n\n".join(section for section in sections if section)

    def build_user_prompt(self, context: PresentingContext) -> str:
        parts = [
            CLIENT_CONTEXT_HEADER,
            CLIENT_ISSUE_LINE.format(issue=context.issue),
            CLIENT_OUTCOME_LINE.format(outcome=context.outcome),
        ]
        if context.notes and context.notes.strip():
            parts.append(CLIENT_NOTES_LINE.format(notes=context.notes))
        return "\n\n".join(parts)

    def assemble(
        self,
        levels: DimensionLevels,
        context: PresentingContext,
        rules: Optional[GenerationRules] = None,
    ) -> AssembledPrompt:
        return AssembledPrompt(
            system_prompt=self.build_system_prompt(levels, rules),
            user_prompt=self.build_user_prompt(context),
            dimension_instructions=self.build_instructions(levels),
        )
