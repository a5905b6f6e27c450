"""
Issue Detection

Maps free-text client input onto a fixed vocabulary of issue tags using plain
substring containment. Matching is intentionally loose: "pain" also fires on
"painful", and a tag is emitted once no matter how many triggers hit.

The trigger table ships with the arc catalog (arc_selection_rules.issue_patterns).
"""

import logging
from typing import List, Mapping, Sequence

from ..models.schemas import PresentingContext

logger = logging.getLogger("scriptengine.issues")


class IssueDetector:
    """Scans client text for known issue triggers."""

    def __init__(self, patterns: Mapping[str, Sequence[str]]):
        # Tag order is the detection order used downstream for metaphor selection
        self._patterns = {
            issue: [trigger.lower() for trigger in triggers]
            for issue, triggers in patterns.items()
        }

    @property
    def issue_tags(self) -> List[str]:
        return list(self._patterns)

    def detect_text(self, text: str) -> List[str]:
        """Return issue tags whose triggers occur anywhere in the text, in table order."""
        lowered = text.lower()
        return [
            issue
            for issue, triggers in self._patterns.items()
            if any(trigger in lowered for trigger in triggers)
        ]

    def detect(self, context: PresentingContext) -> List[str]:
        detected = self.detect_text(context.combined_text())
        logger.debug(f"[detect] Detected issues: {detected or 'none'}")
        return detected


def detect_issues(
    context: PresentingContext,
    patterns: Mapping[str, Sequence[str]],
) -> List[str]:
    """Detect issue tags with the given trigger table."""
    return IssueDetector(patterns).detect(context)
