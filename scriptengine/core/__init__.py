"""
ScriptEngine Core - Planning and Validation Pipeline

- Issue Detector
- Strategy Planner (arc and metaphor selection)
- Dimension Instruction Builder
- Principle Enforcer
- Template Scorer
- Quality Validator
- ScriptEngine (prompt assembly entry point)
"""

from .dimensions import AssembledPrompt, DimensionInstructionBuilder, tier_for
from .engine import ENGINE_VERSION, ScriptEngine
from .issues import IssueDetector, detect_issues
from .planner import StrategyPlanner, prioritize_arcs
from .principles import PrincipleContext, PrincipleEnforcer, should_enforce
from .templates import TemplateScorer, dedupe_templates
from .validator import QualityValidator, summary_report

__all__ = [
    # Issues
    "IssueDetector",
    "detect_issues",
    # Planning
    "StrategyPlanner",
    "prioritize_arcs",
    # Dimensions
    "AssembledPrompt",
    "DimensionInstructionBuilder",
    "tier_for",
    # Principles
    "PrincipleContext",
    "PrincipleEnforcer",
    "should_enforce",
    # Templates
    "TemplateScorer",
    "dedupe_templates",
    # Validation
    "QualityValidator",
    "summary_report",
    # Engine
    "ENGINE_VERSION",
    "ScriptEngine",
]
