from __future__ import annotations

from dataclasses import dataclass

from cvscore.catalog import PatternCatalog


@dataclass(frozen=True)
class RegionalEvaluation:
    score: int
    raw_score: int
    detected: tuple[str, ...]

    def has(self, label: str) -> bool:
        return label in self.detected


def evaluate_regional(text: str, catalog: PatternCatalog) -> RegionalEvaluation:
    """Award each regional category its fixed points once if any of its patterns match."""
    detected: list[str] = []
    raw_score = 0
    for category in catalog.regional_categories:
        if category.group.matches(text or ""):
            detected.append(category.label)
            raw_score += category.points
    return RegionalEvaluation(score=min(100, raw_score), raw_score=raw_score, detected=tuple(detected))
