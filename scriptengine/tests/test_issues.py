"""
Unit tests for issue detection.
"""

import dataclasses

import pytest

from scriptengine.catalogs.loader import ArcCatalog
from scriptengine.core import IssueDetector, StrategyPlanner, detect_issues
from scriptengine.models import EngineRequest, PresentingContext


@pytest.fixture
def detector(catalogs):
    return IssueDetector(catalogs.arcs.rules.issue_patterns)


class TestIssueDetector:
    """Tests for IssueDetector."""

    def test_vocabulary(self, catalogs, detector):
        """Test that the bundled table defines the eighteen issue tags."""
        assert len(catalogs.arcs.rules.issue_patterns) == 18
        assert detector.issue_tags[0] == "anxiety"

    def test_case_insensitive(self, detector):
        """Test that triggers match regardless of case."""
        assert detector.detect_text("I am ANXIOUS") == ["anxiety"]

    def test_substring_matching(self, detector):
        """Test that triggers match inside longer words."""
        assert "chronic-pain" in detector.detect_text("My back is painful")

    def test_tag_emitted_once(self, detector):
        """Test that several triggers for one tag produce a single tag."""
        detected = detector.detect_text("anxious, worried and nervous")
        assert detected.count("anxiety") == 1

    def test_table_order(self, detector):
        """Test that tags come back in table order, not text order."""
        detected = detector.detect_text("I feel stuck and anxious")
        assert detected == ["anxiety", "stuck"]

    def test_no_match(self, detector):
        """Test that unrelated text yields no tags."""
        assert detector.detect_text("hello there") == []

    def test_scans_issue_outcome_and_notes(self, catalogs):
        """Test that issue, outcome and notes are all scanned."""
        context = PresentingContext(
            issue="Trouble at work",
            outcome="More confidence",
            notes="Has a nail biting habit",
        )
        detected = detect_issues(context, catalogs.arcs.rules.issue_patterns)

        assert "confidence" in detected
        assert "habits" in detected

    def test_custom_patterns(self):
        """Test a detector built from a custom table."""
        detector = IssueDetector({"focus": ["Distracted"]})

        assert detector.issue_tags == ["focus"]
        assert detector.detect_text("always distracted") == ["focus"]


class TestCatalogDrivenDetection:
    """Tests that the planner reads its trigger table from the arc catalog."""

    def test_planner_uses_catalog_patterns(self, catalogs):
        """Test that replacing the catalog table changes what the planner detects."""
        rules = catalogs.arcs.rules.model_copy(
            update={"issue_patterns": {"anxiety": ["meetings"]}}
        )
        custom = dataclasses.replace(
            catalogs, arcs=ArcCatalog(arcs=catalogs.arcs.arcs, rules=rules)
        )
        request = EngineRequest(presenting_issue="Dreading team meetings")

        bundled = StrategyPlanner(catalogs).plan(request)
        replaced = StrategyPlanner(custom).plan(request)

        assert bundled.detected_issues == []
        assert replaced.detected_issues == ["anxiety"]
