from functools import lru_cache

from cvscore.core.config import settings

from .pattern_catalog import (
    DEFAULT_CATALOG_PATH,
    FORMAT_CUE_NAMES,
    SECTION_IDS,
    CatalogError,
    PatternCatalog,
    PatternGroup,
    RegionalCategory,
    SectionId,
    load_catalog,
)


@lru_cache(maxsize=1)
def get_default_catalog() -> PatternCatalog:
    return load_catalog(settings.pattern_catalog_path or DEFAULT_CATALOG_PATH)


__all__ = [
    "CatalogError",
    "DEFAULT_CATALOG_PATH",
    "FORMAT_CUE_NAMES",
    "PatternCatalog",
    "PatternGroup",
    "RegionalCategory",
    "SECTION_IDS",
    "SectionId",
    "get_default_catalog",
    "load_catalog",
]
