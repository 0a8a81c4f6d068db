from __future__ import annotations

from cvscore.catalog import PatternCatalog, SectionId


def detect_sections(text: str, catalog: PatternCatalog) -> frozenset[SectionId]:
    """Return the section ids whose pattern group matches anywhere in ``text``."""
    return frozenset(section_id for section_id, group in catalog.sections if group.matches(text or ""))


def ordered_sections(sections: frozenset[SectionId] | set[SectionId], catalog: PatternCatalog) -> tuple[SectionId, ...]:
    return tuple(section_id for section_id, _ in catalog.sections if section_id in sections)
