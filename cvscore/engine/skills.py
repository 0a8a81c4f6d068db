from __future__ import annotations

from cvscore.catalog import PatternCatalog


def detect_skills(text: str, catalog: PatternCatalog) -> tuple[str, ...]:
    """Vocabulary terms contained in ``text``, in vocabulary order.

    Plain substring containment: "java" is also found inside "javascript".
    """
    lowered = (text or "").lower()
    return tuple(skill for skill in catalog.skills if skill in lowered)
