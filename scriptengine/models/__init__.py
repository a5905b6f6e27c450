"""
ScriptEngine Data Models Module
Pydantic schemas for catalogs, planning and validation.
"""

from .schemas import (
    # Enums
    ClientLevel,
    EmergenceType,
    TranceDepth,
    Severity,
    # Input Models
    PresentingContext,
    DimensionSetting,
    DimensionLevels,
    EngineRequest,
    # Catalog Models
    NarrativeArc,
    ArcSelectionRules,
    MetaphorFamily,
    IssueMetaphorMapping,
    QualityGate,
    SafetyLanguageMix,
    Principle,
    LanguageRules,
    GenerationRules,
    Template,
    # Planning Output Models
    SelectedArc,
    MetaphorSelection,
    GenerationContract,
    PrincipleDirectives,
    TemplateRecommendation,
    EngineResult,
    # Validation Models
    Violation,
    ValidationReport,
    # Script Writer Models
    PolishResponse,
    GeneratedScript,
)

__all__ = [
    "ClientLevel",
    "EmergenceType",
    "TranceDepth",
    "Severity",
    "PresentingContext",
    "DimensionSetting",
    "DimensionLevels",
    "EngineRequest",
    "NarrativeArc",
    "ArcSelectionRules",
    "MetaphorFamily",
    "IssueMetaphorMapping",
    "QualityGate",
    "SafetyLanguageMix",
    "Principle",
    "LanguageRules",
    "GenerationRules",
    "Template",
    "SelectedArc",
    "MetaphorSelection",
    "GenerationContract",
    "PrincipleDirectives",
    "TemplateRecommendation",
    "EngineResult",
    "Violation",
    "ValidationReport",
    "PolishResponse",
    "GeneratedScript",
]
