from __future__ import annotations

import re
from dataclasses import dataclass

from cvscore.catalog import PatternCatalog, PatternGroup, SectionId

# Tiers are (minimum matching lines, points), highest first.
BULLET_TIERS: tuple[tuple[int, int], ...] = ((10, 15), (5, 10), (1, 5))
DATE_TIERS: tuple[tuple[int, int], ...] = ((3, 15), (1, 10))
QUANTIFIED_TIERS: tuple[tuple[int, int], ...] = ((5, 15), (3, 10), (1, 5))
ACTION_VERB_TIERS: tuple[tuple[int, int], ...] = ((8, 15), (5, 10), (2, 5))

IDEAL_WORD_RANGE = (300, 700)
ACCEPTABLE_WORD_RANGE = (200, 900)
LENGTH_IDEAL_POINTS = 20
LENGTH_ACCEPTABLE_POINTS = 10
SECTION_POINTS_EACH = 4
SECTION_POINTS_CAP = 20
CONTACT_POINTS = 10

CORE_SECTIONS: tuple[str, ...] = ("summary", "experience", "education", "skills")

_LINE_SPLIT_RE = re.compile(r"\r?\n")


@dataclass(frozen=True)
class FormatCheck:
    name: str
    points: int
    max_points: int
    count: int
    weak: bool
    feedback: str | None = None


@dataclass(frozen=True)
class FormatEvaluation:
    score: int
    checks: tuple[FormatCheck, ...]

    def check(self, name: str) -> FormatCheck:
        for item in self.checks:
            if item.name == name:
                return item
        raise KeyError(name)

    @property
    def feedback(self) -> tuple[str, ...]:
        return tuple(item.feedback for item in self.checks if item.weak and item.feedback)


def split_lines(text: str) -> list[str]:
    return _LINE_SPLIT_RE.split(text or "")


def count_words(text: str) -> int:
    return len((text or "").split())


def count_matching_lines(lines: list[str], group: PatternGroup) -> int:
    return sum(1 for line in lines if group.matches(line))


def tier_points(count: int, tiers: tuple[tuple[int, int], ...]) -> int:
    for minimum, points in tiers:
        if count >= minimum:
            return points
    return 0


def _tiered_check(name: str, count: int, tiers: tuple[tuple[int, int], ...], feedback: str) -> FormatCheck:
    points = tier_points(count, tiers)
    lowest_tier = min(tier[1] for tier in tiers)
    weak = points <= lowest_tier
    return FormatCheck(
        name=name,
        points=points,
        max_points=max(tier[1] for tier in tiers),
        count=count,
        weak=weak,
        feedback=feedback if weak else None,
    )


def check_length(word_count: int) -> FormatCheck:
    ideal_low, ideal_high = IDEAL_WORD_RANGE
    floor, ceiling = ACCEPTABLE_WORD_RANGE
    if ideal_low <= word_count <= ideal_high:
        points = LENGTH_IDEAL_POINTS
    elif floor < word_count < ceiling:
        points = LENGTH_ACCEPTABLE_POINTS
    else:
        points = 0

    feedback = None
    if points < LENGTH_IDEAL_POINTS:
        if word_count < ideal_low:
            feedback = (
                f"Your CV may be too short ({word_count} words). "
                f"Add more relevant detail, aiming for {ideal_low}-{ideal_high} words."
            )
        else:
            feedback = (
                f"Your CV is quite long ({word_count} words). "
                f"Make it more concise, aiming for {ideal_low}-{ideal_high} words."
            )
    return FormatCheck(
        name="length",
        points=points,
        max_points=LENGTH_IDEAL_POINTS,
        count=word_count,
        weak=points < LENGTH_IDEAL_POINTS,
        feedback=feedback,
    )


def check_sections(sections: frozenset[SectionId] | set[SectionId]) -> FormatCheck:
    count = len(sections)
    points = min(SECTION_POINTS_CAP, SECTION_POINTS_EACH * count)
    weak = points <= SECTION_POINTS_EACH
    feedback = None
    if weak:
        missing = [section.title() for section in CORE_SECTIONS if section not in sections]
        if missing:
            feedback = f"Add clear section headers for: {', '.join(missing)}."
        else:
            feedback = "Add more section headers (e.g. Projects, Certifications) to structure your CV."
    return FormatCheck(
        name="sections",
        points=points,
        max_points=SECTION_POINTS_CAP,
        count=count,
        weak=weak,
        feedback=feedback,
    )


def check_bullets(lines: list[str], group: PatternGroup) -> FormatCheck:
    return _tiered_check(
        "bullets",
        count_matching_lines(lines, group),
        BULLET_TIERS,
        "Use bullet points to list responsibilities and achievements.",
    )


def check_contact(text: str, group: PatternGroup) -> FormatCheck:
    found = group.matches(text or "")
    return FormatCheck(
        name="contact",
        points=CONTACT_POINTS if found else 0,
        max_points=CONTACT_POINTS,
        count=1 if found else 0,
        weak=not found,
        feedback=None if found else "Add complete contact information (phone, email, LinkedIn).",
    )


def check_dates(lines: list[str], group: PatternGroup) -> FormatCheck:
    return _tiered_check(
        "dates",
        count_matching_lines(lines, group),
        DATE_TIERS,
        "Add dates (month and year) to your work experience and education entries.",
    )


def check_quantified(lines: list[str], group: PatternGroup) -> FormatCheck:
    return _tiered_check(
        "quantified",
        count_matching_lines(lines, group),
        QUANTIFIED_TIERS,
        "Quantify achievements with measurable outcomes, e.g. 'increased sales by 20%'.",
    )


def check_action_verbs(lines: list[str], group: PatternGroup) -> FormatCheck:
    return _tiered_check(
        "action_verbs",
        count_matching_lines(lines, group),
        ACTION_VERB_TIERS,
        "Start bullet points with strong action verbs such as 'managed' or 'developed'.",
    )


def evaluate_format(text: str, sections: frozenset[SectionId] | set[SectionId], catalog: PatternCatalog) -> FormatEvaluation:
    lines = split_lines(text)
    checks = (
        check_length(count_words(text)),
        check_sections(sections),
        check_bullets(lines, catalog.format_cue("bullet")),
        check_contact(text, catalog.format_cue("contact")),
        check_dates(lines, catalog.format_cue("date")),
        check_quantified(lines, catalog.format_cue("outcome_verb")),
        check_action_verbs(lines, catalog.format_cue("action_verb")),
    )
    total = sum(item.points for item in checks)
    return FormatEvaluation(score=max(0, min(100, total)), checks=checks)
