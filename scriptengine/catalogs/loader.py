"""
Catalog Loading for ScriptEngine

The five declarative catalogs (arcs, metaphors, principles, language rules,
templates) are read once from JSON documents at process start and wrapped in
immutable catalog objects. Planning code receives these objects explicitly;
there is no module-level registry.

Lookups by ID return Optional values so callers decide what a miss means.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import ValidationError

from ..models.schemas import (
    ArcSelectionRules,
    IssueMetaphorMapping,
    LanguageRules,
    MetaphorFamily,
    NarrativeArc,
    Principle,
    Template,
)

logger = logging.getLogger("scriptengine.catalogs")

DEFAULT_CATALOG_DIR = Path(__file__).parent / "data"

ARC_CATALOG_FILE = "narrative_arcs.json"
METAPHOR_CATALOG_FILE = "metaphor_library.json"
PRINCIPLE_CATALOG_FILE = "principles.json"
LANGUAGE_RULES_FILE = "language_rules.json"
TEMPLATE_CATALOG_FILE = "templates.json"

DEFAULT_METAPHOR_FAMILY = "nature_gentle"

# Readable names for arc categories, in display order
ARC_CATEGORY_NAMES: Dict[str, str] = {
    "clinical": "Clinical",
    "dream": "DREAM",
    "foundation": "Foundation",
}
OTHER_CATEGORY_NAME = "Other"


class CatalogError(Exception):
    """Raised when a catalog document is missing or fails schema validation."""
    pass


# ============================================================================
# Catalog Objects
# ============================================================================

@dataclass(frozen=True)
class ArcCatalog:
    """Narrative arcs keyed by ID plus the selection rules shipped with them."""
    arcs: Tuple[NarrativeArc, ...]
    rules: ArcSelectionRules
    _by_id: Dict[str, NarrativeArc] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_by_id", {arc.id: arc for arc in self.arcs})

    def get(self, arc_id: str) -> Optional[NarrativeArc]:
        return self._by_id.get(arc_id)

    def all(self) -> List[NarrativeArc]:
        return list(self.arcs)

    def by_category(self) -> Dict[str, List[NarrativeArc]]:
        """Group arcs under readable category names (Clinical, DREAM, Foundation, Other)."""
        grouped: Dict[str, List[NarrativeArc]] = {}
        for arc in self.arcs:
            name = ARC_CATEGORY_NAMES.get((arc.category or "").lower(), OTHER_CATEGORY_NAME)
            grouped.setdefault(name, []).append(arc)
        return grouped

    def clinical(self) -> List[NarrativeArc]:
        return [arc for arc in self.arcs if arc.category == "clinical"]

    def dream(self) -> List[NarrativeArc]:
        return [arc for arc in self.arcs if arc.category == "dream"]

    def __len__(self) -> int:
        return len(self.arcs)


@dataclass(frozen=True)
class MetaphorCatalog:
    """Metaphor families and the issue-to-family recommendation table."""
    families: Dict[str, MetaphorFamily]
    issue_mappings: Dict[str, IssueMetaphorMapping]
    default_family: str = DEFAULT_METAPHOR_FAMILY

    def family(self, name: str) -> Optional[MetaphorFamily]:
        return self.families.get(name)

    def mapping(self, issue: str) -> Optional[IssueMetaphorMapping]:
        return self.issue_mappings.get(issue)

    def examples(self, issue: str) -> List[str]:
        """Specific example images recommended for an issue tag."""
        mapping = self.issue_mappings.get(issue)
        return list(mapping.specific_images) if mapping else []


@dataclass(frozen=True)
class PrincipleCatalog:
    """Authorial principles in their defined order."""
    principles: Tuple[Principle, ...]

    def get(self, principle_id: str) -> Optional[Principle]:
        for principle in self.principles:
            if principle.id == principle_id:
                return principle
        return None

    def ids(self) -> List[str]:
        return [p.id for p in self.principles]

    def __iter__(self):
        return iter(self.principles)

    def __len__(self) -> int:
        return len(self.principles)


@dataclass(frozen=True)
class TemplateCatalog:
    """Reusable presets, in catalog order."""
    templates: Tuple[Template, ...]

    def get(self, template_id: str) -> Optional[Template]:
        for template in self.templates:
            if template.id == template_id:
                return template
        return None

    def all(self) -> List[Template]:
        return list(self.templates)

    def curated(self) -> List[Template]:
        return [t for t in self.templates if t.is_system_curated]

    def __len__(self) -> int:
        return len(self.templates)


@dataclass(frozen=True)
class CatalogSet:
    """Everything the planning pipeline reads, loaded once per process."""
    arcs: ArcCatalog
    metaphors: MetaphorCatalog
    principles: PrincipleCatalog
    language: LanguageRules
    templates: TemplateCatalog
    source_dir: Optional[Path] = None


# ============================================================================
# Loading
# ============================================================================

def _read_document(catalog_dir: Path, filename: str) -> Dict[str, Any]:
    path = catalog_dir / filename
    try:
        with path.open("r", encoding="utf-8") as fh:
            data = json.load(fh)
    except FileNotFoundError as e:
        raise CatalogError(f"Catalog document not found: {path}") from e
    except json.JSONDecodeError as e:
        raise CatalogError(f"Catalog document is not valid JSON: {path}: {e}") from e

    if not isinstance(data, dict):
        raise CatalogError(f"Catalog document must be a JSON object: {path}")
    return data


def load_arc_catalog(data: Dict[str, Any]) -> ArcCatalog:
    arcs = tuple(NarrativeArc.model_validate(item) for item in data.get("arcs", []))
    rules = ArcSelectionRules.model_validate(data.get("arc_selection_rules", {}))
    return ArcCatalog(arcs=arcs, rules=rules)


def load_metaphor_catalog(data: Dict[str, Any]) -> MetaphorCatalog:
    families = {
        name: MetaphorFamily.model_validate({"name": name, **body})
        for name, body in data.get("metaphor_families", {}).items()
    }
    mappings = {
        issue: IssueMetaphorMapping.model_validate(body)
        for issue, body in data.get("issue_to_metaphor_mapping", {}).items()
    }
    default_family = data.get("default_family", DEFAULT_METAPHOR_FAMILY)
    return MetaphorCatalog(families=families, issue_mappings=mappings, default_family=default_family)


def load_principle_catalog(data: Dict[str, Any]) -> PrincipleCatalog:
    return PrincipleCatalog(
        principles=tuple(Principle.model_validate(p) for p in data.get("principles", []))
    )


def load_template_catalog(data: Dict[str, Any]) -> TemplateCatalog:
    return TemplateCatalog(
        templates=tuple(Template.model_validate(t) for t in data.get("templates", []))
    )


def load_catalogs(catalog_dir: Optional[Union[str, Path]] = None) -> CatalogSet:
    """
    Load all five catalogs from a directory of JSON documents.

    Args:
        catalog_dir: Directory holding the catalog files. Defaults to the
            bundled data directory.

    Returns:
        Frozen CatalogSet

    Raises:
        CatalogError: If a document is missing, malformed or fails validation
    """
    directory = Path(catalog_dir) if catalog_dir else DEFAULT_CATALOG_DIR

    try:
        catalogs = CatalogSet(
            arcs=load_arc_catalog(_read_document(directory, ARC_CATALOG_FILE)),
            metaphors=load_metaphor_catalog(_read_document(directory, METAPHOR_CATALOG_FILE)),
            principles=load_principle_catalog(_read_document(directory, PRINCIPLE_CATALOG_FILE)),
            language=LanguageRules.model_validate(_read_document(directory, LANGUAGE_RULES_FILE)),
            templates=load_template_catalog(_read_document(directory, TEMPLATE_CATALOG_FILE)),
            source_dir=directory,
        )
    except ValidationError as e:
        raise CatalogError(f"Catalog schema validation failed in {directory}: {e}") from e

    logger.info(
        f"[load_catalogs] Loaded {len(catalogs.arcs)} arcs, "
        f"{len(catalogs.metaphors.families)} metaphor families, "
        f"{len(catalogs.principles)} principles, "
        f"{len(catalogs.templates)} templates from {directory}"
    )
    return catalogs
