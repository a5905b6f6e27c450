"""
Template Scorer

Ranks catalog templates against free-text client input with additive
keyword/tag weights. When fewer than MIN_STRONG_MATCHES templates score above
STRONG_MATCH_SCORE, popular beginner-friendly curated templates are pulled in
as fallbacks.
"""

import logging
import math
import re
from typing import List, Optional, Sequence, Tuple

from ..catalogs.loader import TemplateCatalog
from ..models.schemas import PresentingContext, Template, TemplateRecommendation

logger = logging.getLogger("scriptengine.templates")

PRESENTING_ISSUE_WEIGHT = 20
USE_CASE_WEIGHT = 15
TAG_WEIGHT = 10
KEYWORD_WEIGHT = 5
BEGINNER_WEIGHT = 25
CURATED_WEIGHT = 3
POPULARITY_FACTOR = 2

STRONG_MATCH_SCORE = 10
MIN_STRONG_MATCHES = 3
FALLBACK_SCORE = 5
MAX_RECOMMENDATIONS = 20
SECONDARY_DIMENSION_THRESHOLD = 70

REASON_FALLBACK = "Popular beginner-friendly template"
REASON_BEGINNER_FLOOR = "General beginner template"
REASON_PLACEHOLDER = "Recommended for general use"

BEGINNER_PATTERN = re.compile(r"\b(first|beginner|new|never|novice)\b")

# (notes pattern, dimension, reason); scanned against notes only
SECONDARY_KEYWORDS: List[Tuple[re.Pattern, str, str]] = [
    (
        re.compile(r"\b(story|metaphor|creative|imagine|journey)\b"),
        "symbolic",
        "Story-based approach matches creative preference",
    ),
    (
        re.compile(r"\b(body|physical|breath|relaxation|tense)\b"),
        "somatic",
        "Body-focused approach matches somatic needs",
    ),
    (
        re.compile(r"\b(trauma|inner|parts|deep|unconscious)\b"),
        "psychological",
        "Deep psychological approach for inner work",
    ),
    (
        re.compile(r"\b(past|childhood|regression|memory|timeline)\b"),
        "temporal",
        "Time-based work for past processing",
    ),
    (
        re.compile(r"\b(spiritual|meaning|purpose|soul|divine)\b"),
        "spiritual",
        "Spiritual dimension for deeper meaning",
    ),
]


def dedupe_templates(templates: Sequence[Template]) -> List[Template]:
    """Drop repeated template IDs, keeping the first occurrence."""
    seen = set()
    unique = []
    for template in templates:
        if template.id in seen:
            continue
        seen.add(template.id)
        unique.append(template)
    return unique


def _fallback_sort_key(template: Template):
    return (0 if template.is_beginner else 1, -template.usage_count)


class TemplateScorer:
    """Scores and ranks templates from a TemplateCatalog."""

    def __init__(self, catalog: TemplateCatalog):
        self.catalog = catalog

    def score_template(
        self,
        template: Template,
        context: PresentingContext,
    ) -> Tuple[float, List[str]]:
        score = 0.0
        reasons: List[str] = []

        issue = context.issue.strip().lower()
        notes = (context.notes or "").strip().lower()
        combined = context.combined_text().strip()

        if issue:
            for presenting in template.presenting_issues:
                candidate = presenting.lower()
                if candidate in issue or issue in candidate:
                    score += PRESENTING_ISSUE_WEIGHT
                    reasons.append(f"Matches presenting issue: {presenting}")

        if combined:
            for use_case in template.use_cases:
                candidate = use_case.lower()
                if candidate in combined or (issue and issue in candidate):
                    score += USE_CASE_WEIGHT
                    reasons.append(f"Matches use case: {use_case}")

            for tag in template.tags:
                if tag.lower() in combined:
                    score += TAG_WEIGHT
                    reasons.append(f"Matches tag: {tag}")

        for pattern, dimension, reason in SECONDARY_KEYWORDS:
            if not pattern.search(notes):
                continue
            setting = getattr(template.dimensions, dimension)
            if dimension == "spiritual" and not setting.enabled:
                continue
            if setting.level > SECONDARY_DIMENSION_THRESHOLD:
                score += KEYWORD_WEIGHT
                reasons.append(reason)

        if BEGINNER_PATTERN.search(combined) and template.is_beginner:
            score += BEGINNER_WEIGHT
            reasons.append("Beginner-friendly for first-time clients")

        if template.usage_count > 0:
            score += math.log10(template.usage_count + 1) * POPULARITY_FACTOR

        if template.is_system_curated:
            score += CURATED_WEIGHT

        if score == 0 and template.is_beginner:
            score = FALLBACK_SCORE
            reasons.append(REASON_BEGINNER_FLOOR)

        return score, reasons

    def recommend(
        self,
        context: PresentingContext,
        templates: Optional[Sequence[Template]] = None,
    ) -> List[TemplateRecommendation]:
        """
        Rank templates for a client's free-text input.

        Args:
            context: Presenting issue, desired outcome and notes
            templates: Candidate templates; defaults to the whole catalog

        Returns:
            Up to MAX_RECOMMENDATIONS recommendations, best first, each with
            at least one reason
        """
        candidates = dedupe_templates(
            templates if templates is not None else self.catalog.all()
        )

        scored: List[TemplateRecommendation] = []
        for template in candidates:
            score, reasons = self.score_template(template, context)
            logger.debug(f"[recommend] {template.id}: {score:.2f} {reasons}")
            scored.append(
                TemplateRecommendation(template=template, match_score=score, match_reasons=reasons)
            )
        scored.sort(key=lambda r: r.match_score, reverse=True)

        strong = sum(1 for r in scored if r.match_score > STRONG_MATCH_SCORE)
        if strong < MIN_STRONG_MATCHES:
            self._apply_fallbacks(scored, MIN_STRONG_MATCHES - strong)
            scored.sort(key=lambda r: r.match_score, reverse=True)

        for rec in scored:
            if not rec.match_reasons:
                rec.match_reasons.append(REASON_PLACEHOLDER)

        result = scored[:MAX_RECOMMENDATIONS]
        logger.info(
            f"[recommend] Returning {len(result)} templates out of {len(scored)} "
            f"({strong} strong matches)"
        )
        return result

    def _apply_fallbacks(self, scored: List[TemplateRecommendation], needed: int) -> None:
        by_id = {rec.template.id: rec for rec in scored}
        added = 0
        for template in self.fallback_templates(len(self.catalog)):
            if added >= needed:
                break
            existing = by_id.get(template.id)
            if existing is None:
                rec = TemplateRecommendation(
                    template=template,
                    match_score=FALLBACK_SCORE,
                    match_reasons=[REASON_FALLBACK],
                )
                scored.append(rec)
                by_id[template.id] = rec
                added += 1
            elif existing.match_score <= STRONG_MATCH_SCORE:
                existing.match_score = max(existing.match_score, FALLBACK_SCORE)
                existing.match_reasons.append(REASON_FALLBACK)
                added += 1

    def fallback_templates(self, count: int = 3) -> List[Template]:
        """Curated templates, beginner first, then by usage count."""
        return sorted(self.catalog.curated(), key=_fallback_sort_key)[:count]
