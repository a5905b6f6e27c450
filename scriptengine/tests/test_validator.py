"""
Unit tests for the Quality Validator.

Tests cover:
- Scoring and severity penalties
- Each rule family (cognitive load, cliches, sensory language, repetition,
  craft, benefit density, metaphor frequency)
- Minimum-quality gating
- Summary report rendering
"""

import pytest

from scriptengine.core import QualityValidator, summary_report
from scriptengine.core.validator import calculate_score, count_words
from scriptengine.models import Severity, ValidationReport, Violation


@pytest.fixture
def validator(catalogs):
    return QualityValidator(catalogs.language)


def violation(severity):
    return Violation(severity=severity, category="test", issue="test")


class TestScoring:
    """Tests for score calculation."""

    def test_penalties(self):
        """Test critical -25, major -10, minor -5."""
        violations = [
            violation(Severity.CRITICAL),
            violation(Severity.MAJOR),
            violation(Severity.MINOR),
        ]
        assert calculate_score(violations) == 60

    def test_floor_at_zero(self):
        """Test that the score never drops below zero."""
        assert calculate_score([violation(Severity.CRITICAL)] * 5) == 0

    def test_count_words(self):
        """Test whitespace word counting."""
        assert count_words("one two\nthree   four") == 4
        assert count_words("") == 0


class TestCleanScript:
    """Tests for a script with no violations."""

    def test_clean_script(self, validator, clean_script):
        """Test that a clean script scores 100 and passes."""
        report = validator.validate(clean_script)

        assert report.score == 100
        assert report.violations == []
        assert report.is_valid
        assert report.passes_minimum_quality
        assert report.word_count == count_words(clean_script)

    def test_empty_script(self, validator):
        """Test that empty input is handled without raising."""
        report = validator.validate("")
        assert report.score == 100
        assert report.word_count == 0


class TestCognitiveInstructions:
    """Tests for forbidden cognitive/reflective phrases."""

    def test_forbidden_phrase_is_critical(self, validator):
        """Test that a forbidden phrase yields a critical violation and at most 75."""
        report = validator.validate("Now think about a peaceful moment. Your breath slows.")

        critical = report.by_category("cognitive_load")
        assert len(critical) == 1
        assert critical[0].severity == Severity.CRITICAL
        assert critical[0].forbidden_phrase == "think about"
        assert critical[0].excerpt.startswith("Now think about a peaceful moment")
        assert report.score <= 75
        assert not report.is_valid
        assert report.warnings

    def test_recall_pattern(self, validator):
        """Test a recall-style reflective phrase."""
        report = validator.validate("Recall a time when the shore was quiet. Breath slows.")

        assert not report.is_valid
        assert report.count(Severity.CRITICAL) >= 1
        assert report.score <= 75

    def test_case_insensitive(self, validator):
        """Test that matching ignores case."""
        report = validator.validate("Remember A Time When the shore was quiet.")
        assert report.count(Severity.CRITICAL) == 1

    def test_one_violation_per_phrase(self, validator):
        """Test that repeated use of one phrase is reported once."""
        report = validator.validate("Think about calm. Think about ease.")
        assert len(report.by_category("cognitive_load")) == 1


class TestCliches:
    """Tests for hypnosis cliches."""

    def test_cliche_is_major(self, validator):
        """Test that a cliche yields a major violation."""
        report = validator.validate("Going deeper and deeper now.")

        cliches = report.by_category("cliches")
        assert len(cliches) == 1
        assert cliches[0].severity == Severity.MAJOR
        assert report.score == 90


class TestVisualCommands:
    """Tests for visual-only commands."""

    def test_visual_commands(self, validator):
        """Test one major violation per distinct visual command."""
        report = validator.validate("See the calm. Watch it grow. Picture the shore.")

        visual = report.by_category("sensory_language")
        assert {v.forbidden_phrase for v in visual} == {"see", "watch", "picture"}
        assert all(v.severity == Severity.MAJOR for v in visual)

    def test_occurrences_counted(self, validator):
        """Test that repeated commands are counted in one violation."""
        report = validator.validate("Watch the calm arrive. And watch it stay. Watch.")

        visual = report.by_category("sensory_language")
        assert len(visual) == 1
        assert visual[0].occurrences == 3

    def test_word_boundaries(self, validator):
        """Test that commands inside longer words do not match."""
        report = validator.validate("A seed settles into soft earth. Seeing is not needed.")
        assert report.by_category("sensory_language") == []


class TestYouRepetition:
    """Tests for consecutive "you" sentence openings."""

    def test_three_in_a_row(self, validator):
        """Test that three consecutive "you" openings are flagged."""
        report = validator.validate("You feel calm. You notice your breath. You sense warmth.")
        assert len(report.by_category("repetition")) == 1

    def test_sliding_window(self, validator):
        """Test that four consecutive openings produce two overlapping windows."""
        report = validator.validate(
            "You feel calm. You notice your breath. You sense warmth. You rest."
        )

        repetition = report.by_category("repetition")
        assert len(repetition) == 2
        assert report.score == 80

    def test_broken_run(self, validator):
        """Test that an interrupting sentence resets the run."""
        report = validator.validate(
            "You feel calm. You notice your breath. Warmth spreads. You rest. You settle."
        )
        assert report.by_category("repetition") == []

    def test_your_does_not_count(self, validator):
        """Test that "Your" openings are not "you" openings."""
        report = validator.validate("Your breath slows. Your hands soften. Your shoulders drop.")
        assert report.by_category("repetition") == []


class TestCraftIssues:
    """Tests for em dashes and AI-style phrasing."""

    def test_em_dash_is_minor(self, validator):
        """Test that an em dash yields a minor violation."""
        report = validator.validate("Breath slows — and shoulders soften.")

        craft = report.by_category("language_craft")
        assert len(craft) == 1
        assert craft[0].severity == Severity.MINOR
        assert report.score == 95
        assert report.passes_minimum_quality

    def test_ai_pattern(self, validator):
        """Test that AI-style phrases are flagged."""
        report = validator.validate("It's important to rest. Breath slows.")
        assert report.by_category("language_craft")[0].forbidden_phrase == "It's important to"


class TestBenefitDensity:
    """Tests for benefit stacking within one paragraph."""

    def test_stacked_benefits(self, validator):
        """Test that more than three benefit mentions in a paragraph are flagged."""
        script = (
            "Your sleep deepens, energy returns, clarity grows and confidence rises each morning."
        )
        report = validator.validate(script)

        density = report.by_category("benefit_density")
        assert len(density) == 1
        assert density[0].occurrences == 4

    def test_spread_benefits(self, validator):
        """Test that benefits spread across paragraphs pass."""
        script = (
            "Your sleep deepens and energy quietly returns to every part of you now.\n\n"
            "Clarity grows and confidence rises gently as each morning arrives again."
        )
        assert validator.validate(script).by_category("benefit_density") == []

    def test_short_paragraphs_ignored(self, validator):
        """Test that paragraphs of 50 characters or fewer are skipped."""
        report = validator.validate("sleep energy clarity confidence")
        assert report.by_category("benefit_density") == []


class TestMetaphorFrequency:
    """Tests for metaphor family overuse."""

    def test_over_cap(self, validator):
        """Test that a family used more than eight times in a short script is flagged."""
        report = validator.validate("A tree stands tall. " * 9)

        overuse = report.by_category("metaphor_frequency")
        assert len(overuse) == 1
        assert overuse[0].forbidden_phrase == "tree"
        assert overuse[0].occurrences == 9

    def test_at_cap(self, validator):
        """Test that exactly eight uses pass."""
        report = validator.validate("A tree stands tall. " * 8)
        assert report.by_category("metaphor_frequency") == []

    def test_long_script_cap(self, validator):
        """Test that the cap rises to ten for scripts of 2500 words or more."""
        report = validator.validate("A tree stands tall. " * 9, word_count=2500)
        assert report.by_category("metaphor_frequency") == []

    def test_stems_match_word_forms(self, validator):
        """Test that stems match longer word forms."""
        report = validator.validate("The trees sway. " * 9)
        assert len(report.by_category("metaphor_frequency")) == 1


class TestMinimumQuality:
    """Tests for passes_minimum_quality gating."""

    def test_critical_fails_even_with_high_score(self, validator):
        """Test that any critical violation fails minimum quality."""
        report = validator.validate("Think about the calm. Your breath slows.")

        assert report.score == 75
        assert not report.passes_minimum_quality
        assert not validator.passes_minimum_quality("Think about the calm. Your breath slows.")

    def test_low_score_fails(self):
        """Test that a score of 60 or less fails without critical violations."""
        report = ValidationReport(score=60, violations=[violation(Severity.MAJOR)] * 4)

        assert report.is_valid
        assert not report.passes_minimum_quality


class TestSummaryReport:
    """Tests for plain-text report rendering."""

    def test_passed(self, validator, clean_script):
        """Test the report for a clean script."""
        text = summary_report(validator.validate(clean_script))

        assert text.startswith("=== TRANCE DEPTH VALIDATION REPORT ===")
        assert "Overall Score: 100/100" in text
        assert "✓ PASSED" in text

    def test_failed(self, validator):
        """Test the report for a script with a critical violation."""
        text = summary_report(validator.validate("Think about the calm."))

        assert "✗ FAILED" in text
        assert "[CRITICAL] cognitive_load" in text
        assert 'Forbidden: "think about"' in text
        assert "WARNINGS:" in text
