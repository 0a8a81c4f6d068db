from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Band:
    min_score: int
    label: str


@dataclass(frozen=True)
class FeedbackThresholds:
    max_items: int = 5
    min_specific: int = 3
    strong_format_score: int = 70
    strong_skill_count: int = 8
    min_skill_count: int = 5
    regional_gap_threshold: int = 60
    regional_strong_score: int = 60


DEFAULT_RATING_BANDS: tuple[Band, ...] = (
    Band(90, "Excellent"),
    Band(80, "Very Good"),
    Band(70, "Good"),
    Band(60, "Above Average"),
    Band(50, "Average"),
    Band(40, "Below Average"),
    Band(0, "Poor"),
)

DEFAULT_REGIONAL_BANDS: tuple[Band, ...] = (
    Band(80, "Excellent"),
    Band(60, "High"),
    Band(40, "Medium"),
    Band(0, "Low"),
)


def _validate_bands(name: str, bands: tuple[Band, ...]) -> tuple[Band, ...]:
    if not bands:
        raise RuntimeError(f"Scoring config '{name}' must define at least one band.")
    for upper, lower in zip(bands, bands[1:]):
        if lower.min_score >= upper.min_score:
            raise RuntimeError(f"Scoring config '{name}' bands must be strictly descending.")
    if bands[-1].min_score != 0:
        raise RuntimeError(f"Scoring config '{name}' must end with a band starting at 0.")
    if bands[0].min_score > 100:
        raise RuntimeError(f"Scoring config '{name}' band bounds must be within 0..100.")
    return bands


def _bands_from(name: str, raw: Any, default: tuple[Band, ...]) -> tuple[Band, ...]:
    if raw is None:
        return default
    if not isinstance(raw, list):
        raise RuntimeError(f"Scoring config '{name}' must be a list of {{min, label}} entries.")
    try:
        bands = tuple(Band(int(item["min"]), str(item["label"])) for item in raw)
    except (KeyError, TypeError, ValueError) as exc:
        raise RuntimeError(f"Scoring config '{name}' has a malformed band: {exc}") from exc
    return _validate_bands(name, bands)


# AnalysisResult holds at most this many strengths or improvements.
MAX_FEEDBACK_ITEMS = 5


def _validate_feedback(feedback: FeedbackThresholds) -> FeedbackThresholds:
    if not 1 <= feedback.max_items <= MAX_FEEDBACK_ITEMS:
        raise RuntimeError(f"feedback.max_items must be within 1..{MAX_FEEDBACK_ITEMS}, got {feedback.max_items}.")
    if not 1 <= feedback.min_specific <= feedback.max_items:
        raise RuntimeError(
            f"feedback.min_specific must be within 1..max_items ({feedback.max_items}), got {feedback.min_specific}."
        )
    return feedback


@dataclass(frozen=True)
class ScoringRules:
    format_weight: float = 0.4
    skill_weight: float = 0.4
    regional_weight: float = 0.2
    skill_target_count: int = 10
    rating_bands: tuple[Band, ...] = DEFAULT_RATING_BANDS
    regional_bands: tuple[Band, ...] = DEFAULT_REGIONAL_BANDS
    feedback: FeedbackThresholds = FeedbackThresholds()

    def __post_init__(self) -> None:
        total = self.format_weight + self.skill_weight + self.regional_weight
        if not math.isclose(total, 1.0, abs_tol=1e-9):
            raise RuntimeError(f"Scoring weights must sum to 1.0, got {total}.")
        if min(self.format_weight, self.skill_weight, self.regional_weight) < 0:
            raise RuntimeError("Scoring weights must be non-negative.")
        if self.skill_target_count <= 0:
            raise RuntimeError("skills.target_count must be positive.")
        _validate_feedback(self.feedback)
        _validate_bands("rating_bands", self.rating_bands)
        _validate_bands("regional_relevance_bands", self.regional_bands)

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> ScoringRules:
        weights = config.get("weights") or {}
        skills = config.get("skills") or {}
        feedback_raw = config.get("feedback") or {}
        defaults = FeedbackThresholds()
        try:
            feedback = FeedbackThresholds(
                **{
                    key: int(feedback_raw.get(key, getattr(defaults, key)))
                    for key in FeedbackThresholds.__dataclass_fields__
                }
            )
            return cls(
                format_weight=float(weights.get("format", 0.4)),
                skill_weight=float(weights.get("skills", 0.4)),
                regional_weight=float(weights.get("regional", 0.2)),
                skill_target_count=int(skills.get("target_count", 10)),
                rating_bands=_bands_from("rating_bands", config.get("rating_bands"), DEFAULT_RATING_BANDS),
                regional_bands=_bands_from(
                    "regional_relevance_bands",
                    config.get("regional_relevance_bands"),
                    DEFAULT_REGIONAL_BANDS,
                ),
                feedback=feedback,
            )
        except (TypeError, ValueError) as exc:
            raise RuntimeError(f"Invalid scoring config: {exc}") from exc


def clamp_score(value: float) -> int:
    return int(max(0, min(100, round(value))))


def skill_score(skill_count: int, rules: ScoringRules) -> int:
    return min(100, round(skill_count / rules.skill_target_count * 100))


def overall_score(format_score: int, skills: int, regional_score: int, rules: ScoringRules) -> int:
    return clamp_score(
        rules.format_weight * format_score
        + rules.skill_weight * skills
        + rules.regional_weight * regional_score
    )


def band_label(score: int, bands: tuple[Band, ...]) -> str:
    for band in bands:
        if score >= band.min_score:
            return band.label
    return bands[-1].label


def rating_for(score: int, rules: ScoringRules) -> str:
    return band_label(score, rules.rating_bands)


def regional_relevance_for(score: int, rules: ScoringRules) -> str:
    return band_label(score, rules.regional_bands)
