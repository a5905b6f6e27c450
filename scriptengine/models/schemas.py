"""
Pydantic data models for the ScriptEngine.
Catalog entities are loaded once at process start and never mutated; request and
result models are built fresh for every planning call.
"""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field


class ClientLevel(str, Enum):
    """Client hypnosis experience level - drives the safety language mix."""
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class EmergenceType(str, Enum):
    """
    Closing mode of a generated script.
    REGULAR counts the listener back up to alertness, SLEEP fades into sleep.
    """
    REGULAR = "regular"
    SLEEP = "sleep"


class TranceDepth(str, Enum):
    """Coarse pacing target used for sentence-length guidance."""
    LIGHT = "light"
    MEDIUM = "medium"
    DEEP = "deep"


class Severity(str, Enum):
    """Violation severity used by the quality validator."""
    CRITICAL = "critical"
    MAJOR = "major"
    MINOR = "minor"


# ============================================================================
# Input Models
# ============================================================================

class PresentingContext(BaseModel):
    """Free-text client input for a single request."""
    model_config = ConfigDict(frozen=True)

    issue: str = Field(..., description="What the client is struggling with")
    outcome: str = Field(default="", description="What the client wants instead")
    notes: Optional[str] = Field(default=None, description="Optional practitioner notes")

    def combined_text(self) -> str:
        """Case-folded issue, outcome and notes joined for keyword scanning."""
        return f"{self.issue} {self.outcome} {self.notes or ''}".lower()


class DimensionSetting(BaseModel):
    """
    Emphasis level for one of the eight dimensions.
    Sub-attributes are optional and only rendered by the dimension that uses them.
    """
    model_config = ConfigDict(frozen=True)

    level: int = Field(default=0, ge=0, le=100)
    enabled: bool = Field(
        default=False,
        description="Explicit opt-in flag; only consulted by the spiritual dimension"
    )

    # Sub-attributes
    emphasis: Optional[str] = None
    techniques: List[str] = Field(default_factory=list)
    work_types: List[str] = Field(default_factory=list)
    focus: Optional[str] = None
    metaphor: Optional[str] = None
    archetype: Optional[str] = None
    approaches: List[str] = Field(default_factory=list)
    depth: Optional[str] = None
    primary_pov: Optional[str] = None
    framework: Optional[str] = None
    style: Optional[str] = None
    pacing: Optional[str] = None


class DimensionLevels(BaseModel):
    """The eight independent 0-100 emphasis sliders."""
    model_config = ConfigDict(frozen=True)

    somatic: DimensionSetting = Field(default_factory=DimensionSetting)
    temporal: DimensionSetting = Field(default_factory=DimensionSetting)
    symbolic: DimensionSetting = Field(default_factory=DimensionSetting)
    psychological: DimensionSetting = Field(default_factory=DimensionSetting)
    perspective: DimensionSetting = Field(default_factory=DimensionSetting)
    spiritual: DimensionSetting = Field(default_factory=DimensionSetting)
    relational: DimensionSetting = Field(default_factory=DimensionSetting)
    language: DimensionSetting = Field(default_factory=DimensionSetting)


class EngineRequest(BaseModel):
    """Core entry point input."""
    presenting_issue: str = Field(..., description="Client's presenting issue")
    desired_outcome: str = Field(default="", description="Client's desired outcome")
    client_notes: Optional[str] = None
    manual_arc_id: Optional[str] = Field(
        default=None,
        description="Overrides automatic arc selection when it resolves in the catalog"
    )
    template_id: Optional[str] = Field(
        default=None,
        description="Template whose preferred arcs and generation rules apply"
    )
    template_preferred_arc_ids: List[str] = Field(default_factory=list)
    dimension_levels: DimensionLevels = Field(default_factory=DimensionLevels)
    client_level: ClientLevel = ClientLevel.BEGINNER
    client_anxious: bool = True
    target_emergence: EmergenceType = EmergenceType.REGULAR
    trance_depth: TranceDepth = TranceDepth.MEDIUM

    def presenting_context(self) -> PresentingContext:
        return PresentingContext(
            issue=self.presenting_issue,
            outcome=self.desired_outcome,
            notes=self.client_notes,
        )


# ============================================================================
# Catalog Models
# ============================================================================

class NarrativeArc(BaseModel):
    """A named thematic/structural journey that can be woven into a script."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str = ""
    category: Optional[str] = None
    core_message: str = ""
    when_to_use: List[str] = Field(default_factory=list)
    key_language: List[str] = Field(default_factory=list)
    presenting_issues: List[str] = Field(default_factory=list)
    prompt_integration: str = ""


class ArcSelectionRules(BaseModel):
    """Selection rules shipped alongside the arc catalog."""
    model_config = ConfigDict(frozen=True)

    always_include: List[str] = Field(default_factory=list)
    issue_patterns: Dict[str, List[str]] = Field(
        default_factory=dict,
        description="Issue tag -> trigger substrings, in detection order"
    )
    issue_mappings: Dict[str, List[str]] = Field(default_factory=dict)
    max_arcs_per_script: int = Field(default=5, ge=1)


class MetaphorFamily(BaseModel):
    """A coherent symbolic-imagery set."""
    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""
    primary_images: List[str] = Field(default_factory=list)


class IssueMetaphorMapping(BaseModel):
    """Recommended metaphor families for one issue tag, best first."""
    model_config = ConfigDict(frozen=True)

    recommended: List[str] = Field(default_factory=list)
    specific_images: List[str] = Field(default_factory=list)


class QualityGate(BaseModel):
    """A named check a principle expects generated text to satisfy."""
    model_config = ConfigDict(frozen=True)

    check: str


class SafetyLanguageMix(BaseModel):
    """Target phrasing percentages for one experience level/anxiety row."""
    model_config = ConfigDict(frozen=True)

    permissive: str
    gentle_directive: str = "0%"
    commands: str = "0%"


class Principle(BaseModel):
    """One authorial principle of the methodology."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str = ""
    why: str = ""
    rule: str
    prompt_directives: List[str] = Field(default_factory=list)
    quality_gates: List[QualityGate] = Field(default_factory=list)
    examples: List[str] = Field(default_factory=list)
    language_hierarchy: Optional[Dict[str, SafetyLanguageMix]] = None
    safety_language_library: List[str] = Field(default_factory=list)


class LanguageRules(BaseModel):
    """Language-craft rule data shared by the enforcer and the validator."""
    model_config = ConfigDict(frozen=True)

    tonal_balance_ratio: str
    forbidden_phrases: List[str] = Field(default_factory=list)
    replacement_patterns: List[str] = Field(default_factory=list)
    forbidden_cliches: List[str] = Field(default_factory=list)
    forbidden_visual_commands: List[str] = Field(default_factory=list)
    inclusive_alternatives: List[str] = Field(default_factory=list)
    benefit_keywords: List[str] = Field(default_factory=list)
    metaphor_stem_families: Dict[str, List[str]] = Field(default_factory=dict)


class GenerationRules(BaseModel):
    """Optional stylistic rules bundled with a template."""
    model_config = ConfigDict(frozen=True)

    opening_style: Optional[str] = None
    closing_style: Optional[str] = None
    voice_tone: Optional[str] = None
    pacing: Optional[str] = None


class Template(BaseModel):
    """A reusable preset of dimension levels and intended-use metadata."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str = ""
    category: str = "general"
    tags: List[str] = Field(default_factory=list)
    use_cases: List[str] = Field(default_factory=list)
    presenting_issues: List[str] = Field(default_factory=list)
    usage_count: int = Field(default=0, ge=0)
    is_system_curated: bool = False
    dimensions: DimensionLevels = Field(default_factory=DimensionLevels)
    preferred_arcs: List[str] = Field(default_factory=list)
    generation_rules: GenerationRules = Field(default_factory=GenerationRules)

    @property
    def is_beginner(self) -> bool:
        return self.category == "beginner" or "beginner" in self.tags


# ============================================================================
# Planning Output Models
# ============================================================================

class SelectedArc(BaseModel):
    """An arc chosen for one script, with the reason it was chosen."""
    arc_id: str
    arc_name: str
    reason: str
    key_language: List[str] = Field(default_factory=list)
    prompt_integration: str = ""


class MetaphorSelection(BaseModel):
    """The single metaphor family a script should stay inside."""
    family: str
    primary_images: List[str] = Field(default_factory=list)
    reason: str


class GenerationContract(BaseModel):
    """
    Fully resolved per-request plan handed to the prompt assembler.
    Never persisted.
    """
    selected_arcs: List[SelectedArc] = Field(default_factory=list)
    primary_metaphor: Optional[MetaphorSelection] = None
    arc_priority_ids: List[str] = Field(default_factory=list)
    detected_issues: List[str] = Field(default_factory=list)
    reasoning_log: List[str] = Field(default_factory=list)


class PrincipleDirectives(BaseModel):
    """Everything the principle enforcer produces for one request."""
    system_prompt: str
    structured_instructions: List[str] = Field(default_factory=list)
    quality_reminders: List[str] = Field(default_factory=list)
    principles_summary: str = ""


class TemplateRecommendation(BaseModel):
    """A scored template with the reasons it matched."""
    template: Template
    match_score: float
    match_reasons: List[str] = Field(default_factory=list)


class EngineResult(BaseModel):
    """Core entry point output."""
    generation_contract: GenerationContract
    system_prompt_text: str
    user_prompt_text: str = ""
    structured_instructions: List[str] = Field(default_factory=list)
    reasoning_log: List[str] = Field(default_factory=list)
    principle_directives: Optional[PrincipleDirectives] = None
    engine_version: str = ""


# ============================================================================
# Validation Models
# ============================================================================

class Violation(BaseModel):
    """A single rule violation found in generated text."""
    severity: Severity
    category: str
    issue: str
    excerpt: str = Field(default="", description="Offending sentence or location")
    forbidden_phrase: Optional[str] = None
    suggested_fix: Optional[str] = None
    occurrences: Optional[int] = None


class ValidationReport(BaseModel):
    """
    Severity-scored result of scanning one generated script.
    is_valid and passes_minimum_quality are derived, never stored.
    """
    score: int = Field(..., ge=0, le=100)
    violations: List[Violation] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)
    word_count: int = 0

    def count(self, severity: Severity) -> int:
        return sum(1 for v in self.violations if v.severity == severity)

    def by_category(self, category: str) -> List[Violation]:
        return [v for v in self.violations if v.category == category]

    @computed_field
    @property
    def is_valid(self) -> bool:
        return self.count(Severity.CRITICAL) == 0

    @computed_field
    @property
    def passes_minimum_quality(self) -> bool:
        return self.is_valid and self.score > 60


# ============================================================================
# Script Writer Models
# ============================================================================

class PolishResponse(BaseModel):
    """JSON reply expected from the generator during a polish pass."""
    polished_script: str


class GeneratedScript(BaseModel):
    """A generated script together with its validation report."""
    script: str
    report: ValidationReport
    engine_result: EngineResult
    polished: bool = False
    generation_ms: int = 0
