"""
Quality Validator

Scans generated script text for rule violations and produces a severity-scored
ValidationReport. Every rule family runs independently; the validator never
raises on any input text.

Severity weights: critical -25, major -10, minor -5, floored at 0.
"""

import logging
import re
from typing import Dict, List, Optional

from ..models.schemas import LanguageRules, Severity, ValidationReport, Violation

logger = logging.getLogger("scriptengine.validator")

SEVERITY_PENALTY: Dict[Severity, int] = {
    Severity.CRITICAL: 25,
    Severity.MAJOR: 10,
    Severity.MINOR: 5,
}

EM_DASH = "—"
AI_PATTERNS = ["It's important to", "You may find that", "As you continue to"]

SENTENCE_SPLIT = re.compile(r"[.!?]+")
PARAGRAPH_SPLIT = re.compile(r"\n\s*\n")

EXCERPT_LENGTH = 100
REPETITION_EXCERPT_LENGTH = 150
REPETITION_WINDOW = 3

BENEFIT_PARAGRAPH_MIN_CHARS = 50
MAX_BENEFITS_PER_PARAGRAPH = 3
METAPHOR_CAP_LONG = 10
METAPHOR_CAP_SHORT = 8
LONG_SCRIPT_WORDS = 2500

WARNING_COGNITIVE = (
    "CRITICAL: Script contains cognitive/reflective instructions that pull the listener out of trance"
)
SUGGESTION_COGNITIVE = (
    'Replace "think about/remember/recall" with direct experience: '
    '"Your body remembers...", "[State] arrives..."'
)
SUGGESTION_REPETITION = (
    'Use body-as-subject to eliminate "you...you...you": "Your breath deepens. Shoulders soften."'
)
SUGGESTION_VISUAL = 'Replace visual commands with inclusive language: "Notice..." instead of "See..."'
SUGGESTION_BENEFITS = "Spread benefits across the script instead of stacking them in one paragraph"
SUGGESTION_METAPHOR = "Vary imagery within the chosen metaphor family and repeat key images less often"


def count_words(text: str) -> int:
    return len(text.split())


def calculate_score(violations: List[Violation]) -> int:
    score = 100 - sum(SEVERITY_PENALTY[v.severity] for v in violations)
    return max(0, score)


class QualityValidator:
    """Applies the language-rule catalog to generated text."""

    def __init__(self, rules: LanguageRules):
        self.rules = rules
        self._visual_patterns = [
            (command, re.compile(rf"\b{re.escape(command)}\b", re.IGNORECASE))
            for command in rules.forbidden_visual_commands
        ]
        self._metaphor_patterns = {
            family: [(stem, re.compile(rf"\b{re.escape(stem)}\w*\b")) for stem in stems]
            for family, stems in rules.metaphor_stem_families.items()
        }

    def validate(self, script: str, word_count: Optional[int] = None) -> ValidationReport:
        """
        Validate a script.

        Args:
            script: Generated script text
            word_count: Word count used for length-scaled caps; computed when omitted

        Returns:
            ValidationReport with score, violations, warnings and suggestions
        """
        words = word_count if word_count is not None else count_words(script)

        cognitive = self.detect_cognitive_instructions(script)
        cliches = self.detect_cliches(script)
        visual = self.detect_visual_commands(script)
        repetition = self.detect_you_repetition(script)
        craft = self.detect_craft_issues(script)
        benefits = self.detect_benefit_density(script)
        metaphors = self.detect_metaphor_overuse(script, words)

        violations = [*cognitive, *cliches, *visual, *repetition, *craft, *benefits, *metaphors]

        warnings: List[str] = []
        suggestions: List[str] = []
        if cognitive:
            warnings.append(WARNING_COGNITIVE)
            suggestions.append(SUGGESTION_COGNITIVE)
        if repetition:
            suggestions.append(SUGGESTION_REPETITION)
        if visual:
            suggestions.append(SUGGESTION_VISUAL)
        if benefits:
            suggestions.append(SUGGESTION_BENEFITS)
        if metaphors:
            suggestions.append(SUGGESTION_METAPHOR)

        report = ValidationReport(
            score=calculate_score(violations),
            violations=violations,
            warnings=warnings,
            suggestions=suggestions,
            word_count=words,
        )
        logger.info(
            f"[validate] Score {report.score}/100, "
            f"{report.count(Severity.CRITICAL)} critical, "
            f"{report.count(Severity.MAJOR)} major, "
            f"{report.count(Severity.MINOR)} minor"
        )
        return report

    def passes_minimum_quality(self, script: str) -> bool:
        return self.validate(script).passes_minimum_quality

    # ------------------------------------------------------------------
    # Rule families
    # ------------------------------------------------------------------

    def detect_cognitive_instructions(self, script: str) -> List[Violation]:
        violations = []
        lowered = script.lower()
        sentences = SENTENCE_SPLIT.split(script)
        fix = self.rules.replacement_patterns[0] if self.rules.replacement_patterns else None

        for phrase in self.rules.forbidden_phrases:
            needle = phrase.lower()
            if needle not in lowered:
                continue
            sentence = next((s for s in sentences if needle in s.lower()), "")
            violations.append(Violation(
                severity=Severity.CRITICAL,
                category="cognitive_load",
                issue="Cognitive/reflective instruction that pulls the listener out of trance",
                excerpt=sentence.strip()[:EXCERPT_LENGTH] + "...",
                forbidden_phrase=phrase,
                suggested_fix=fix,
            ))
        logger.debug(f"[detect_cognitive_instructions] {len(violations)} found")
        return violations

    def detect_cliches(self, script: str) -> List[Violation]:
        lowered = script.lower()
        return [
            Violation(
                severity=Severity.MAJOR,
                category="cliches",
                issue=f'Hypnosis cliche detected: "{cliche}"',
                excerpt="In script",
                forbidden_phrase=cliche,
                suggested_fix="Use fresh, natural language instead of cliches",
            )
            for cliche in self.rules.forbidden_cliches
            if cliche.lower() in lowered
        ]

    def detect_visual_commands(self, script: str) -> List[Violation]:
        violations = []
        for command, pattern in self._visual_patterns:
            matches = pattern.findall(script)
            if not matches:
                continue
            violations.append(Violation(
                severity=Severity.MAJOR,
                category="sensory_language",
                issue=f'Visual-only command: "{command}"',
                excerpt=f"{len(matches)} occurrence(s)",
                forbidden_phrase=command,
                suggested_fix='Use inclusive language: "Notice...", "Sense...", "Imagine..."',
                occurrences=len(matches),
            ))
        return violations

    def detect_you_repetition(self, script: str) -> List[Violation]:
        """One violation per window of three consecutive sentences opening with "you "."""
        violations = []
        sentences = SENTENCE_SPLIT.split(script)
        opens_with_you = [s.strip().lower().startswith("you ") for s in sentences]

        for i in range(len(sentences) - REPETITION_WINDOW + 1):
            if all(opens_with_you[i:i + REPETITION_WINDOW]):
                excerpt = ". ".join(sentences[i:i + REPETITION_WINDOW])
                violations.append(Violation(
                    severity=Severity.MAJOR,
                    category="repetition",
                    issue='Three consecutive sentences starting with "you"',
                    excerpt=excerpt[:REPETITION_EXCERPT_LENGTH] + "...",
                    suggested_fix='Use body-as-subject: "Your breath deepens. Shoulders soften. Peace settles."',
                ))
        return violations

    def detect_craft_issues(self, script: str) -> List[Violation]:
        violations = []
        if EM_DASH in script:
            violations.append(Violation(
                severity=Severity.MINOR,
                category="language_craft",
                issue="Em dashes detected - use commas or periods instead",
                excerpt="Throughout script",
                suggested_fix="Replace em dashes with commas or break into separate sentences",
            ))

        lowered = script.lower()
        for pattern in AI_PATTERNS:
            if pattern.lower() in lowered:
                violations.append(Violation(
                    severity=Severity.MINOR,
                    category="language_craft",
                    issue=f'AI pattern detected: "{pattern}"',
                    excerpt="In script",
                    forbidden_phrase=pattern,
                    suggested_fix="Rewrite with more natural, poetic language",
                ))
        return violations

    def detect_benefit_density(self, script: str) -> List[Violation]:
        """Flag paragraphs that stack more than three benefit keyword occurrences."""
        violations = []
        keywords = [k.lower() for k in self.rules.benefit_keywords]
        if not keywords:
            return violations

        paragraphs = [p.strip() for p in PARAGRAPH_SPLIT.split(script)]
        paragraphs = [p for p in paragraphs if len(p) > BENEFIT_PARAGRAPH_MIN_CHARS]

        for index, paragraph in enumerate(paragraphs, start=1):
            lowered = paragraph.lower()
            total = sum(lowered.count(keyword) for keyword in keywords)
            if total > MAX_BENEFITS_PER_PARAGRAPH:
                violations.append(Violation(
                    severity=Severity.MAJOR,
                    category="benefit_density",
                    issue=(
                        f"{total} benefit mentions in one paragraph "
                        f"(max {MAX_BENEFITS_PER_PARAGRAPH})"
                    ),
                    excerpt=paragraph[:EXCERPT_LENGTH] + "...",
                    suggested_fix="Scatter functional improvements throughout the script",
                    occurrences=total,
                ))
                logger.debug(f"[detect_benefit_density] Paragraph {index}: {total} benefit mentions")
        return violations

    def detect_metaphor_overuse(self, script: str, word_count: int) -> List[Violation]:
        """Flag the dominant metaphor family when its stem count exceeds the length-scaled cap."""
        lowered = script.lower()
        family_totals: Dict[str, int] = {}
        stem_counts: Dict[str, Dict[str, int]] = {}

        for family, patterns in self._metaphor_patterns.items():
            counts = {stem: len(pattern.findall(lowered)) for stem, pattern in patterns}
            total = sum(counts.values())
            if total > 0:
                family_totals[family] = total
                stem_counts[family] = counts

        if not family_totals:
            return []

        dominant = max(family_totals, key=family_totals.get)
        total = family_totals[dominant]
        cap = METAPHOR_CAP_LONG if word_count >= LONG_SCRIPT_WORDS else METAPHOR_CAP_SHORT
        if total <= cap:
            return []

        top_stem = max(stem_counts[dominant], key=stem_counts[dominant].get)
        return [Violation(
            severity=Severity.MAJOR,
            category="metaphor_frequency",
            issue=(
                f"Metaphor overload - {dominant} used {total}x (max: {cap}). "
                f'"{top_stem}" appears {stem_counts[dominant][top_stem]}x'
            ),
            excerpt="Throughout script",
            forbidden_phrase=top_stem,
            suggested_fix="Reduce repeated images and let the metaphor breathe",
            occurrences=total,
        )]


def summary_report(report: ValidationReport) -> str:
    """Plain-text rendering of a validation report."""
    lines = [
        "=== TRANCE DEPTH VALIDATION REPORT ===",
        f"Overall Score: {report.score}/100",
        f"Status: {'✓ PASSED' if report.is_valid else '✗ FAILED'}",
        "",
    ]

    if report.violations:
        lines.append("VIOLATIONS:")
        for v in report.violations:
            lines.append(f"  [{v.severity.value.upper()}] {v.category}: {v.issue}")
            if v.forbidden_phrase:
                lines.append(f'    Forbidden: "{v.forbidden_phrase}"')
            if v.suggested_fix:
                lines.append(f"    Fix: {v.suggested_fix}")
        lines.append("")

    if report.warnings:
        lines.append("WARNINGS:")
        lines.extend(f"  ⚠ {w}" for w in report.warnings)
        lines.append("")

    if report.suggestions:
        lines.append("SUGGESTIONS:")
        lines.extend(f"  → {s}" for s in report.suggestions)

    return "\n".join(lines)
