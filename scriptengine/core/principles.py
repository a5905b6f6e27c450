"""
Principle Enforcer

Turns the principle catalog and language-rule catalog into:
- a system-prompt preamble describing every principle and the language craft rules
- a flat list of imperative instructions, conditioned on the request
- post-generation quality reminders
- a one-line-per-principle summary for logging

Whether a principle applies to a request is decided by ENFORCEMENT_RULES,
a single predicate table consulted during assembly.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List

from ..catalogs.loader import PrincipleCatalog
from ..models.schemas import (
    ClientLevel,
    EmergenceType,
    EngineRequest,
    LanguageRules,
    Principle,
    PrincipleDirectives,
    QualityGate,
    TranceDepth,
)
from ..prompts.principles import (
    ANTI_PATTERN_BLOCK,
    CRAFT_BLOCK,
    LANGUAGE_MASTERY_CHECKS,
    METHODOLOGY_CLOSING,
    METHODOLOGY_INTRO,
    MINIMAL_METAPHOR_INSTRUCTION,
    PRINCIPLE_ENTRY,
    RHYTHM_DEPTH_GUIDANCE,
    SAFETY_COMMANDS_LINE,
    SAFETY_DIRECTIVE_LINE,
    SAFETY_PERMISSIVE_LINE,
    SAFETY_PHRASE_LINE,
    SENSORY_LANGUAGE_BLOCK,
    SLEEP_EMERGENCE_INSTRUCTIONS,
    TONAL_BALANCE_BLOCK,
    TRANCE_DEPTH_TEST,
    YOU_REPETITION_BLOCK,
)

logger = logging.getLogger("scriptengine.principles")

METAPHOR_CONSISTENCY_THRESHOLD = 40
SAFETY_FALLBACK_ROW = "beginner_anxious"
SAFETY_PHRASE_LIMIT = 5


@dataclass(frozen=True)
class PrincipleContext:
    """Request facts that principle gating and rendering depend on."""
    client_level: ClientLevel = ClientLevel.BEGINNER
    client_anxious: bool = True
    symbolic_level: int = 30
    trance_depth: TranceDepth = TranceDepth.MEDIUM
    emergence: EmergenceType = EmergenceType.REGULAR

    @classmethod
    def from_request(cls, request: EngineRequest) -> "PrincipleContext":
        return cls(
            client_level=request.client_level,
            client_anxious=request.client_anxious,
            symbolic_level=request.dimension_levels.symbolic.level,
            trance_depth=request.trance_depth,
            emergence=request.target_emergence,
        )

    @property
    def safety_row(self) -> str:
        mood = "anxious" if self.client_anxious else "calm"
        return f"{self.client_level.value}_{mood}"


# Principle ID -> applicability predicate. Principles not listed always apply.
ENFORCEMENT_RULES: Dict[str, Callable[[PrincipleContext], bool]] = {
    "metaphor-consistency": lambda ctx: ctx.symbolic_level > METAPHOR_CONSISTENCY_THRESHOLD,
}

# Instructions used in place of a principle's directives when it does not apply
SUPPRESSED_INSTRUCTIONS: Dict[str, List[str]] = {
    "metaphor-consistency": [MINIMAL_METAPHOR_INSTRUCTION],
}


def should_enforce(principle_id: str, context: PrincipleContext) -> bool:
    predicate = ENFORCEMENT_RULES.get(principle_id)
    return predicate(context) if predicate else True


class PrincipleEnforcer:
    """Renders principle directives for one request at a time."""

    def __init__(self, principles: PrincipleCatalog, language: LanguageRules):
        self.principles = principles
        self.language = language
        self._renderers: Dict[str, Callable[[Principle, PrincipleContext], List[str]]] = {
            "language-rhythm": self._rhythm_instructions,
            "emotional-safety": self._safety_instructions,
            "inherent-wholeness": self._emergence_instructions,
        }

    def generate_directives(self, context: PrincipleContext) -> PrincipleDirectives:
        directives = PrincipleDirectives(
            system_prompt=self.build_system_prompt(),
            structured_instructions=self.build_structured_instructions(context),
            quality_reminders=self.build_quality_reminders(),
            principles_summary=self.build_principles_summary(),
        )
        logger.debug(
            f"[generate_directives] {len(directives.structured_instructions)} instructions "
            f"for {context.safety_row}, {context.emergence.value} emergence"
        )
        return directives

    # ------------------------------------------------------------------
    # System prompt
    # ------------------------------------------------------------------

    def build_system_prompt(self) -> str:
        intro = METHODOLOGY_INTRO.format(count=len(self.principles))
        entries = "\n\n".join(
            PRINCIPLE_ENTRY.format(
                index=i, name=p.name, description=p.description, why=p.why
            )
            for i, p in enumerate(self.principles, start=1)
        )
        return "\n".join([
            intro,
            entries,
            "",
            METHODOLOGY_CLOSING,
            "",
            self.build_language_mastery_rules(),
        ])

    def build_language_mastery_rules(self) -> str:
        rules = self.language
        forbidden = "\n".join(f'- "{phrase}"' for phrase in rules.forbidden_phrases)
        replacements = "\n".join(f"- {pattern}" for pattern in rules.replacement_patterns)
        visual = ", ".join(f'"{cmd.capitalize()}..."' for cmd in rules.forbidden_visual_commands)
        alternatives = ", ".join(f'"{alt}..."' for alt in rules.inclusive_alternatives)
        cliches = ", ".join(f'"{c}"' for c in rules.forbidden_cliches)

        return "\n\n".join([
            TONAL_BALANCE_BLOCK.format(ratio=rules.tonal_balance_ratio),
            ANTI_PATTERN_BLOCK.format(forbidden=forbidden, replacements=replacements),
            YOU_REPETITION_BLOCK,
            SENSORY_LANGUAGE_BLOCK.format(visual=visual, alternatives=alternatives),
            CRAFT_BLOCK.format(cliches=cliches),
        ])

    # ------------------------------------------------------------------
    # Structured instructions
    # ------------------------------------------------------------------

    def build_structured_instructions(self, context: PrincipleContext) -> List[str]:
        instructions: List[str] = []
        for principle in self.principles:
            if not should_enforce(principle.id, context):
                instructions.extend(SUPPRESSED_INSTRUCTIONS.get(principle.id, []))
                continue
            renderer = self._renderers.get(principle.id)
            if renderer:
                instructions.extend(renderer(principle, context))
            else:
                instructions.extend(principle.prompt_directives)
        return instructions

    def _rhythm_instructions(self, principle: Principle, context: PrincipleContext) -> List[str]:
        guidance = RHYTHM_DEPTH_GUIDANCE.get(
            context.trance_depth.value, RHYTHM_DEPTH_GUIDANCE["medium"]
        )
        return [*principle.prompt_directives, guidance]

    def _safety_instructions(self, principle: Principle, context: PrincipleContext) -> List[str]:
        instructions: List[str] = []
        hierarchy = principle.language_hierarchy or {}
        mix = hierarchy.get(context.safety_row) or hierarchy.get(SAFETY_FALLBACK_ROW)
        if mix is None:
            logger.warning(
                f"[_safety_instructions] No safety language row for {context.safety_row} "
                f"or {SAFETY_FALLBACK_ROW}"
            )
        else:
            instructions.append(SAFETY_PERMISSIVE_LINE.format(permissive=mix.permissive))
            instructions.append(
                SAFETY_DIRECTIVE_LINE.format(gentle_directive=mix.gentle_directive)
            )
            instructions.append(SAFETY_COMMANDS_LINE.format(commands=mix.commands))

        instructions.extend(
            SAFETY_PHRASE_LINE.format(phrase=phrase)
            for phrase in principle.safety_language_library[:SAFETY_PHRASE_LIMIT]
        )
        return instructions

    def _emergence_instructions(self, principle: Principle, context: PrincipleContext) -> List[str]:
        if context.emergence == EmergenceType.SLEEP:
            return list(SLEEP_EMERGENCE_INSTRUCTIONS)
        return list(principle.prompt_directives)

    # ------------------------------------------------------------------
    # Reminders and introspection
    # ------------------------------------------------------------------

    def build_quality_reminders(self) -> List[str]:
        reminders = [
            f"✓ {gate.check}"
            for principle in self.principles
            for gate in principle.quality_gates
        ]
        reminders.append("")
        reminders.extend(LANGUAGE_MASTERY_CHECKS)
        reminders.append("")
        reminders.extend(TRANCE_DEPTH_TEST)
        return reminders

    def build_principles_summary(self) -> str:
        return "\n".join(f"{p.name}: {p.rule}" for p in self.principles)

    def principle_ids(self) -> List[str]:
        return self.principles.ids()

    def principle_examples(self, principle_id: str) -> List[str]:
        principle = self.principles.get(principle_id)
        return list(principle.examples) if principle else []

    def quality_gates(self, principle_id: str) -> List[QualityGate]:
        principle = self.principles.get(principle_id)
        return list(principle.quality_gates) if principle else []

    def should_enforce(self, principle_id: str, context: PrincipleContext) -> bool:
        return should_enforce(principle_id, context)
