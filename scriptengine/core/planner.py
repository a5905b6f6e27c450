"""
Strategy Planner for ScriptEngine

Decides which narrative arcs and which metaphor family a script should use.

Arc priority:
1. Foundation arcs from the selection rules (always first)
2. Arcs mapped from detected issue tags
3. Arcs preferred by the chosen template

The merged list is deduplicated (first occurrence wins) and capped at the
configured maximum. A resolvable manual arc ID replaces steps 2 and 3.
"""

import logging
from typing import Iterable, List, Optional, Sequence

from ..catalogs.loader import CatalogSet
from ..models.schemas import (
    EngineRequest,
    GenerationContract,
    MetaphorSelection,
    SelectedArc,
)
from .issues import IssueDetector

logger = logging.getLogger("scriptengine.planner")

# Symbolic level at or above which a primary metaphor is chosen
METAPHOR_THRESHOLD = 40

REASON_FOUNDATION = "Foundation arc (always included)"
REASON_MANUAL = "Manually selected arc"
REASON_TEMPLATE = "Preferred by template"
REASON_DEFAULT = "Selected by arc selection rules"
REASON_NOT_FOUND = "Arc not found in catalog"


def prioritize_arcs(
    always_include: Sequence[str],
    issue_specific: Sequence[str],
    template_preferred: Sequence[str],
    max_arcs: int,
) -> List[str]:
    """Merge the three candidate lists in priority order, deduplicated and capped."""
    prioritized: List[str] = []
    seen = set()

    for group in (always_include, issue_specific, template_preferred):
        for arc_id in group:
            if len(prioritized) >= max_arcs:
                return prioritized
            if arc_id not in seen:
                prioritized.append(arc_id)
                seen.add(arc_id)

    return prioritized


class StrategyPlanner:
    """
    Builds a GenerationContract for one request.

    The planner holds references to the loaded catalogs only; every call to
    plan() works on its own local state.
    """

    def __init__(
        self,
        catalogs: CatalogSet,
        max_arcs_per_script: Optional[int] = None,
        detector: Optional[IssueDetector] = None,
    ):
        self.catalogs = catalogs
        self.rules = catalogs.arcs.rules
        self.max_arcs = max_arcs_per_script or self.rules.max_arcs_per_script
        self.detector = detector or IssueDetector(self.rules.issue_patterns)

    def plan(
        self,
        request: EngineRequest,
        template_arc_ids: Optional[Sequence[str]] = None,
    ) -> GenerationContract:
        """
        Select arcs and metaphor for a request.

        Args:
            request: Validated engine request
            template_arc_ids: Preferred arcs of the chosen template; defaults
                to request.template_preferred_arc_ids

        Returns:
            GenerationContract with an ordered arc list and reasoning log
        """
        reasoning_log: List[str] = []
        always_include = list(self.rules.always_include)
        preferred = list(
            template_arc_ids if template_arc_ids is not None
            else request.template_preferred_arc_ids
        )

        detected_issues = self.detector.detect(request.presenting_context())
        symbolic_level = request.dimension_levels.symbolic.level

        arc_ids: Optional[List[str]] = None
        manual_arc_id: Optional[str] = None

        if request.manual_arc_id:
            reasoning_log.append(f"MANUAL ARC SELECTION: {request.manual_arc_id}")
            if self.catalogs.arcs.get(request.manual_arc_id) is None:
                logger.warning(
                    f"[plan] Manual arc '{request.manual_arc_id}' not found, "
                    f"falling back to auto-selection"
                )
                reasoning_log.append(
                    f"WARNING: Manual arc \"{request.manual_arc_id}\" not found, "
                    f"falling back to auto-selection"
                )
            else:
                manual_arc_id = request.manual_arc_id
                arc_ids = prioritize_arcs(always_include, [manual_arc_id], [], self.max_arcs)
                reasoning_log.append(
                    f"Using manual arc with foundation arcs: {', '.join(arc_ids)}"
                )

        if arc_ids is None:
            reasoning_log.append(f"Including foundation arcs: {', '.join(always_include)}")
            reasoning_log.append(
                f"Detected issues: {', '.join(detected_issues) or 'none specific'}"
            )

            issue_arcs = self.select_issue_arcs(detected_issues)
            reasoning_log.append(f"Issue-specific arcs: {', '.join(issue_arcs) or 'none'}")

            if preferred:
                reasoning_log.append(f"Template preferred arcs: {', '.join(preferred)}")

            arc_ids = prioritize_arcs(always_include, issue_arcs, preferred, self.max_arcs)
            reasoning_log.append(f"Final arc selection: {', '.join(arc_ids)}")

        selected_arcs = [
            self.build_arc_details(arc_id, detected_issues, manual_arc_id, preferred)
            for arc_id in arc_ids
        ]

        primary_metaphor = self.select_metaphor(detected_issues, symbolic_level)
        if primary_metaphor:
            reasoning_log.append(
                f"Primary metaphor: {primary_metaphor.family} ({primary_metaphor.reason})"
            )

        logger.info(
            f"[plan] Selected {len(selected_arcs)} arcs: {', '.join(arc_ids)}; "
            f"metaphor: {primary_metaphor.family if primary_metaphor else 'none'}"
        )

        return GenerationContract(
            selected_arcs=selected_arcs,
            primary_metaphor=primary_metaphor,
            arc_priority_ids=arc_ids,
            detected_issues=detected_issues,
            reasoning_log=reasoning_log,
        )

    def select_issue_arcs(self, detected_issues: Iterable[str]) -> List[str]:
        """Arcs mapped from issue tags, in detection order, without repeats."""
        arcs: List[str] = []
        for issue in detected_issues:
            for arc_id in self.rules.issue_mappings.get(issue, []):
                if arc_id not in arcs:
                    arcs.append(arc_id)
        return arcs

    def build_arc_details(
        self,
        arc_id: str,
        detected_issues: Sequence[str],
        manual_arc_id: Optional[str] = None,
        template_arc_ids: Sequence[str] = (),
    ) -> SelectedArc:
        arc = self.catalogs.arcs.get(arc_id)
        if arc is None:
            logger.warning(f"[build_arc_details] Arc '{arc_id}' not found in catalog")
            return SelectedArc(arc_id=arc_id, arc_name=arc_id, reason=REASON_NOT_FOUND)

        matched = [issue for issue in detected_issues if issue in arc.presenting_issues]
        if arc_id in self.rules.always_include:
            reason = REASON_FOUNDATION
        elif arc_id == manual_arc_id:
            reason = REASON_MANUAL
        elif matched:
            reason = f"Matches presenting issue: {', '.join(matched)}"
        elif arc_id in template_arc_ids:
            reason = REASON_TEMPLATE
        else:
            reason = REASON_DEFAULT

        return SelectedArc(
            arc_id=arc.id,
            arc_name=arc.name,
            reason=reason,
            key_language=list(arc.key_language),
            prompt_integration=arc.prompt_integration,
        )

    def select_metaphor(
        self,
        detected_issues: Sequence[str],
        symbolic_level: int,
    ) -> Optional[MetaphorSelection]:
        """
        Pick one metaphor family, or None when the symbolic level is below threshold.

        The first detected issue with a resolvable recommendation wins; otherwise
        the catalog's default family is used.
        """
        if symbolic_level < METAPHOR_THRESHOLD:
            return None

        metaphors = self.catalogs.metaphors
        for issue in detected_issues:
            mapping = metaphors.mapping(issue)
            if not mapping or not mapping.recommended:
                continue
            family_name = mapping.recommended[0]
            family = metaphors.family(family_name)
            if family:
                return MetaphorSelection(
                    family=family_name,
                    primary_images=list(family.primary_images),
                    reason=f"Best match for {issue} (symbolic level: {symbolic_level}%)",
                )

        default = metaphors.family(metaphors.default_family)
        return MetaphorSelection(
            family=metaphors.default_family,
            primary_images=list(default.primary_images) if default else [],
            reason=f"Default gentle metaphor (symbolic level: {symbolic_level}%)",
        )

    def metaphor_examples(self, issue: str) -> List[str]:
        return self.catalogs.metaphors.examples(issue)
