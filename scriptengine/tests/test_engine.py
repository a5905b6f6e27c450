"""
Unit tests for the ScriptEngine prompt assembly entry point.
"""

from scriptengine.config import EngineSettings
from scriptengine.core import ENGINE_VERSION, ScriptEngine
from scriptengine.models import (
    DimensionLevels,
    DimensionSetting,
    EmergenceType,
    EngineRequest,
    PresentingContext,
)
from scriptengine.prompts.principles import SLEEP_EMERGENCE_INSTRUCTIONS
from scriptengine.prompts.writer import (
    CORE_PRINCIPLES_HEADER,
    NARRATIVE_ARCS_HEADER,
    QUALITY_CHECKLIST_HEADER,
)


class TestGenerate:
    """Tests for ScriptEngine.generate."""

    def test_result_fields(self, engine, anxiety_request):
        """Test that every result field is populated."""
        result = engine.generate(anxiety_request)

        assert result.engine_version == ENGINE_VERSION
        assert result.system_prompt_text
        assert result.user_prompt_text
        assert result.structured_instructions
        assert result.principle_directives is not None
        assert result.generation_contract.selected_arcs

    def test_reasoning_log_steps(self, engine, anxiety_request):
        """Test the reasoning log structure."""
        log = engine.generate(anxiety_request).reasoning_log

        assert log[0] == f"=== SCRIPT ENGINE v{ENGINE_VERSION} ==="
        assert "STEP 1: STRATEGY PLANNING" in log
        assert "STEP 2: PRINCIPLE ENFORCEMENT" in log
        assert "STEP 3: PROMPT ASSEMBLY" in log
        assert log[-1] == "=== ENGINE COMPLETE ==="

    def test_system_prompt_sections(self, engine, anxiety_request):
        """Test that the system prompt carries principles, dimensions, arcs and metaphor."""
        prompt = engine.generate(anxiety_request).system_prompt_text

        assert "8-Dimensional Hypnosis methodology" in prompt
        assert "SOMATIC DIMENSION (80% emphasis)" in prompt
        assert "## NARRATIVE ARCS FOR THIS SCRIPT" in prompt
        assert "**Effortlessness**" in prompt
        assert '## PRIMARY METAPHOR' in prompt
        assert 'Use the "water_flow" metaphor family.' in prompt

    def test_no_metaphor_section_below_threshold(self, engine):
        """Test that the metaphor section is omitted at low symbolic levels."""
        request = EngineRequest(
            presenting_issue="I feel anxious",
            dimension_levels=DimensionLevels(symbolic=DimensionSetting(level=10)),
        )
        prompt = engine.generate(request).system_prompt_text
        assert "## PRIMARY METAPHOR" not in prompt

    def test_structured_instruction_sections(self, engine, anxiety_request):
        """Test the order of instruction sections."""
        instructions = engine.generate(anxiety_request).structured_instructions

        assert instructions[0] == CORE_PRINCIPLES_HEADER
        assert instructions.index(NARRATIVE_ARCS_HEADER) < instructions.index(QUALITY_CHECKLIST_HEADER)
        assert "Effortlessness: " in "\n".join(instructions)

    def test_user_prompt_has_client_context(self, engine, anxiety_request):
        """Test that the user prompt carries the client's words."""
        user_prompt = engine.generate(anxiety_request).user_prompt_text

        assert "I feel anxious before meetings" in user_prompt
        assert "Feel steady and at ease" in user_prompt

    def test_sleep_emergence(self, engine, anxiety_request):
        """Test that sleep emergence flows into the instructions."""
        request = anxiety_request.model_copy(update={"target_emergence": EmergenceType.SLEEP})
        instructions = engine.generate(request).structured_instructions
        assert SLEEP_EMERGENCE_INSTRUCTIONS[0] in instructions

    def test_deterministic(self, engine, anxiety_request):
        """Test that the same request produces the same result."""
        first = engine.generate(anxiety_request)
        second = engine.generate(anxiety_request)
        assert first.model_dump() == second.model_dump()


class TestTemplates:
    """Tests for template handling during generation."""

    def test_template_arcs_and_rules(self, engine):
        """Test that a template contributes preferred arcs and generation rules."""
        request = EngineRequest(presenting_issue="hello", template_id="deep-sleep-drift")
        result = engine.generate(request)

        assert "night-sea-crossing" in result.generation_contract.arc_priority_ids
        assert "**GENERATION RULES**" in result.system_prompt_text
        assert "Template: " in "\n".join(result.reasoning_log)

    def test_unknown_template_ignored(self, engine):
        """Test that an unknown template is logged and ignored."""
        request = EngineRequest(presenting_issue="hello", template_id="no-such-template")
        result = engine.generate(request)

        assert any("not found" in line for line in result.reasoning_log)
        assert result.generation_contract.arc_priority_ids == [
            "effortlessness", "re-minding", "two-tempos",
        ]


class TestEntryPoints:
    """Tests for the independent engine operations."""

    def test_recommend_templates(self, engine):
        """Test template recommendations through the engine."""
        recommendations = engine.recommend_templates(PresentingContext(issue="Anxiety"))
        assert recommendations[0].template.id == "anxiety-relief-clinical"

    def test_validate(self, engine, clean_script):
        """Test script validation through the engine."""
        assert engine.validate(clean_script).score == 100

    def test_examples(self, engine, catalogs):
        """Test principle and metaphor example lookups."""
        principle = catalogs.principles.principles[0]

        assert engine.principle_examples(principle.id) == principle.examples
        assert engine.metaphor_examples("anxiety") == catalogs.metaphors.examples("anxiety")

    def test_max_arcs_setting(self, catalogs, anxiety_request):
        """Test that the settings cap is applied by the engine."""
        engine = ScriptEngine(catalogs, EngineSettings(max_arcs_per_script=4))
        result = engine.generate(anxiety_request)
        assert len(result.generation_contract.arc_priority_ids) == 4
