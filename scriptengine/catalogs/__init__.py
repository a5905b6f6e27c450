"""
ScriptEngine Catalogs Module
Immutable catalog objects loaded once from declarative JSON documents.
"""

from .loader import (
    ARC_CATEGORY_NAMES,
    DEFAULT_CATALOG_DIR,
    ArcCatalog,
    CatalogError,
    CatalogSet,
    MetaphorCatalog,
    PrincipleCatalog,
    TemplateCatalog,
    load_catalogs,
)

__all__ = [
    "ARC_CATEGORY_NAMES",
    "DEFAULT_CATALOG_DIR",
    "ArcCatalog",
    "CatalogError",
    "CatalogSet",
    "MetaphorCatalog",
    "PrincipleCatalog",
    "TemplateCatalog",
    "load_catalogs",
]
