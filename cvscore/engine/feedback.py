from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from cvscore.catalog import PatternCatalog, SectionId

from .aggregator import FeedbackThresholds, ScoringRules
from .format_evaluator import FormatEvaluation
from .regional import RegionalEvaluation


@dataclass(frozen=True)
class FeedbackContext:
    format: FormatEvaluation
    sections: frozenset[SectionId]
    skills: tuple[str, ...]
    regional: RegionalEvaluation
    catalog: PatternCatalog
    rules: ScoringRules


@dataclass(frozen=True)
class Feedback:
    strengths: tuple[str, ...]
    improvements: tuple[str, ...]


Rule = tuple[Callable[[FeedbackContext], bool], Callable[[FeedbackContext], str]]


def _fixed(message: str) -> Callable[[FeedbackContext], str]:
    return lambda ctx: message


def _top_tier(name: str) -> Callable[[FeedbackContext], bool]:
    # Two highest tiers, i.e. anything above the weak band.
    return lambda ctx: not ctx.format.check(name).weak


def _full_points(name: str) -> Callable[[FeedbackContext], bool]:
    def predicate(ctx: FeedbackContext) -> bool:
        check = ctx.format.check(name)
        return check.points == check.max_points
    return predicate


def _weak(name: str) -> Callable[[FeedbackContext], bool]:
    return lambda ctx: ctx.format.check(name).weak


STRENGTH_RULES: tuple[Rule, ...] = (
    (
        lambda ctx: ctx.format.score >= ctx.rules.feedback.strong_format_score,
        _fixed("Your CV has good ATS-friendly formatting"),
    ),
    (lambda ctx: len(ctx.sections) >= 4, _fixed("Well-structured CV with clear sections")),
    (_top_tier("bullets"), _fixed("Effective use of bullet points improves readability")),
    (_top_tier("action_verbs"), _fixed("Uses strong action verbs to highlight achievements")),
    (_top_tier("quantified"), _fixed("Quantifies achievements with measurable outcomes")),
    (_full_points("dates"), _fixed("Clear timeline of work experience")),
    (
        lambda ctx: len(ctx.skills) >= ctx.rules.feedback.strong_skill_count,
        lambda ctx: f"Strong skills profile with {len(ctx.skills)} relevant skills identified",
    ),
    (
        lambda ctx: ctx.rules.feedback.min_skill_count <= len(ctx.skills) < ctx.rules.feedback.strong_skill_count,
        _fixed("Contains relevant skills that ATS systems look for"),
    ),
)

IMPROVEMENT_RULES: tuple[Rule, ...] = (
    (_weak("sections"), _fixed("Add clear section headings (Experience, Education, Skills)")),
    (_weak("bullets"), _fixed("Use bullet points to highlight achievements and responsibilities")),
    (_weak("action_verbs"), _fixed("Include strong action verbs to describe achievements")),
    (_weak("quantified"), _fixed("Quantify achievements with specific numbers and percentages")),
    (_weak("dates"), _fixed("Include clear date ranges for education and work experience")),
    (
        lambda ctx: len(ctx.skills) == 0,
        _fixed("No specific skills were identified. Add a detailed skills section"),
    ),
    (
        lambda ctx: 0 < len(ctx.skills) < ctx.rules.feedback.min_skill_count,
        lambda ctx: f"Add more industry-relevant skills. Only {len(ctx.skills)} were identified",
    ),
)


def _regional_strengths(ctx: FeedbackContext) -> list[str]:
    messages = [
        category.strength
        for category in ctx.catalog.regional_categories
        if category.strength and ctx.regional.has(category.label)
    ]
    if ctx.regional.score >= ctx.rules.feedback.regional_strong_score:
        messages.append(f"Well-optimized for the {ctx.catalog.locale} job market")
    return messages


def _regional_improvements(ctx: FeedbackContext) -> list[str]:
    if ctx.regional.score >= ctx.rules.feedback.regional_gap_threshold:
        return []
    return [
        category.improvement
        for category in ctx.catalog.regional_categories
        if category.improvement and not ctx.regional.has(category.label)
    ]


def _apply(rules: tuple[Rule, ...], ctx: FeedbackContext) -> list[str]:
    return [message(ctx) for condition, message in rules if condition(ctx)]


def _finalize(messages: list[str], fillers: tuple[str, ...], thresholds: FeedbackThresholds) -> tuple[str, ...]:
    unique: list[str] = []
    for message in messages:
        if message not in unique:
            unique.append(message)
    unique = unique[: thresholds.max_items]
    if len(unique) < thresholds.min_specific:
        unique.extend(filler for filler in fillers if filler not in unique)
    return tuple(unique[: thresholds.max_items])


def generate_feedback(ctx: FeedbackContext) -> Feedback:
    """Ranked strengths and improvements: format rules, then skills, then regional."""
    strengths = _apply(STRENGTH_RULES, ctx) + _regional_strengths(ctx)
    improvements = _apply(IMPROVEMENT_RULES, ctx) + _regional_improvements(ctx)
    locale = ctx.catalog.locale
    return Feedback(
        strengths=_finalize(
            strengths,
            (
                "Your CV has been successfully processed",
                "Your CV demonstrates professional experience",
            ),
            ctx.rules.feedback,
        ),
        improvements=_finalize(
            improvements,
            (
                "Tailor your CV to match specific job descriptions",
                f"Consider adding more {locale} context to your CV",
            ),
            ctx.rules.feedback,
        ),
    )
