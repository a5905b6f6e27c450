"""
ScriptEngine - Prompt Assembly Entry Point

Runs the planning pipeline for one request:

    Issue Detector -> Strategy Planner -> Metaphor Selector
        -> {Dimension Builder, Principle Enforcer} -> Prompt Assembly

and returns the system prompt, user prompt, structured instructions and a
human-readable reasoning log. The engine holds only immutable catalogs and
stateless collaborators, so one instance can serve concurrent requests.
"""

import logging
from typing import List, Optional

from ..catalogs.loader import CatalogSet
from ..config.settings import EngineSettings
from ..models.schemas import (
    EngineRequest,
    EngineResult,
    GenerationContract,
    PresentingContext,
    PrincipleDirectives,
    Template,
    TemplateRecommendation,
    ValidationReport,
)
from ..prompts.writer import (
    ARC_ENTRY,
    ARCS_SECTION_HEADER,
    CORE_PRINCIPLES_HEADER,
    METAPHOR_SECTION,
    NARRATIVE_ARCS_HEADER,
    QUALITY_CHECKLIST_HEADER,
)
from .dimensions import DimensionInstructionBuilder
from .planner import StrategyPlanner
from .principles import PrincipleContext, PrincipleEnforcer
from .templates import TemplateScorer
from .validator import QualityValidator

logger = logging.getLogger("scriptengine.engine")

ENGINE_VERSION = "1.0.0"

ARC_KEY_LANGUAGE_LIMIT = 3
METAPHOR_IMAGE_LIMIT = 5


class ScriptEngine:
    """Plans and assembles generator prompts from loaded catalogs."""

    def __init__(self, catalogs: CatalogSet, settings: Optional[EngineSettings] = None):
        self.catalogs = catalogs
        self.settings = settings or EngineSettings()
        self.planner = StrategyPlanner(
            catalogs, max_arcs_per_script=self.settings.max_arcs_per_script
        )
        self.enforcer = PrincipleEnforcer(catalogs.principles, catalogs.language)
        self.dimensions = DimensionInstructionBuilder()
        self.scorer = TemplateScorer(catalogs.templates)
        self.validator = QualityValidator(catalogs.language)

    def generate(self, request: EngineRequest) -> EngineResult:
        """
        Build the generation contract and prompts for one request.

        Args:
            request: Validated engine request

        Returns:
            EngineResult with prompts, instructions and reasoning log
        """
        reasoning_log: List[str] = [
            f"=== SCRIPT ENGINE v{ENGINE_VERSION} ===",
            f"Presenting Issue: {request.presenting_issue}",
            f"Desired Outcome: {request.desired_outcome}",
            "",
        ]

        template = self._resolve_template(request, reasoning_log)
        template_arc_ids = list(request.template_preferred_arc_ids)
        if template:
            template_arc_ids.extend(
                arc_id for arc_id in template.preferred_arcs if arc_id not in template_arc_ids
            )

        reasoning_log.append("STEP 1: STRATEGY PLANNING")
        contract = self.planner.plan(request, template_arc_ids)
        reasoning_log.extend(contract.reasoning_log)
        reasoning_log.append("")

        reasoning_log.append("STEP 2: PRINCIPLE ENFORCEMENT")
        principle_context = PrincipleContext.from_request(request)
        directives = self.enforcer.generate_directives(principle_context)
        reasoning_log.append(f"Enforcing {len(self.catalogs.principles)} core principles")
        reasoning_log.append(
            f"Client level: {request.client_level.value} "
            f"({'anxious' if request.client_anxious else 'calm'})"
        )
        reasoning_log.append(f"Target trance depth: {request.trance_depth.value}")
        reasoning_log.append(f"Emergence: {request.target_emergence.value}")
        reasoning_log.append("")

        reasoning_log.append("STEP 3: PROMPT ASSEMBLY")
        assembled = self.dimensions.assemble(
            request.dimension_levels,
            request.presenting_context(),
            template.generation_rules if template else None,
        )
        system_prompt = self.build_system_prompt(directives, assembled.system_prompt, contract)
        instructions = self.build_structured_instructions(directives, contract)
        reasoning_log.append(f"System prompt: {len(system_prompt)} characters")
        reasoning_log.append(f"Instructions: {len(instructions)} items")
        reasoning_log.append("")
        reasoning_log.append("=== ENGINE COMPLETE ===")

        logger.info(
            f"[generate] {len(contract.selected_arcs)} arcs, "
            f"{len(instructions)} instructions, system prompt {len(system_prompt)} chars"
        )

        return EngineResult(
            generation_contract=contract,
            system_prompt_text=system_prompt,
            user_prompt_text=assembled.user_prompt,
            structured_instructions=instructions,
            reasoning_log=reasoning_log,
            principle_directives=directives,
            engine_version=ENGINE_VERSION,
        )

    def _resolve_template(
        self,
        request: EngineRequest,
        reasoning_log: List[str],
    ) -> Optional[Template]:
        if not request.template_id:
            return None
        template = self.catalogs.templates.get(request.template_id)
        if template is None:
            logger.warning(f"[generate] Template '{request.template_id}' not found in catalog")
            reasoning_log.append(
                f"WARNING: Template \"{request.template_id}\" not found, ignoring template preferences"
            )
        else:
            reasoning_log.append(f"Template: {template.name} ({template.id})")
        return template

    def build_system_prompt(
        self,
        directives: PrincipleDirectives,
        dimension_prompt: str,
        contract: GenerationContract,
    ) -> str:
        sections = [directives.system_prompt, dimension_prompt]

        arc_entries = [
            ARC_ENTRY.format(
                name=arc.arc_name,
                integration=arc.prompt_integration,
                key_language="; ".join(arc.key_language[:ARC_KEY_LANGUAGE_LIMIT]),
            )
            for arc in contract.selected_arcs
        ]
        sections.append("\n\n".join([ARCS_SECTION_HEADER, *arc_entries]))

        metaphor = contract.primary_metaphor
        if metaphor:
            sections.append(METAPHOR_SECTION.format(
                family=metaphor.family,
                images=", ".join(metaphor.primary_images[:METAPHOR_IMAGE_LIMIT]),
                reason=metaphor.reason,
            ))

        return "\n\n".join(sections)

    def build_structured_instructions(
        self,
        directives: PrincipleDirectives,
        contract: GenerationContract,
    ) -> List[str]:
        instructions = [CORE_PRINCIPLES_HEADER]
        instructions.extend(directives.structured_instructions)
        instructions.append("")

        instructions.append(NARRATIVE_ARCS_HEADER)
        instructions.extend(
            f"{arc.arc_name}: {arc.prompt_integration}" for arc in contract.selected_arcs
        )
        instructions.append("")

        instructions.append(QUALITY_CHECKLIST_HEADER)
        instructions.extend(directives.quality_reminders)
        return instructions

    # ------------------------------------------------------------------
    # Independent entry points
    # ------------------------------------------------------------------

    def recommend_templates(self, context: PresentingContext) -> List[TemplateRecommendation]:
        return self.scorer.recommend(context)

    def validate(self, script: str, word_count: Optional[int] = None) -> ValidationReport:
        return self.validator.validate(script, word_count)

    def principle_examples(self, principle_id: str) -> List[str]:
        return self.enforcer.principle_examples(principle_id)

    def metaphor_examples(self, issue: str) -> List[str]:
        return self.planner.metaphor_examples(issue)
