from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Literal, Mapping, get_args

import yaml

SectionId = Literal[
    "summary",
    "skills",
    "experience",
    "education",
    "projects",
    "awards",
    "certifications",
    "languages",
    "references",
    "volunteer",
    "interests",
    "publications",
]

# Enumeration order; detection results are always reported in this order.
SECTION_IDS: tuple[SectionId, ...] = get_args(SectionId)

FORMAT_CUE_NAMES: tuple[str, ...] = ("bullet", "contact", "date", "outcome_verb", "action_verb")

DEFAULT_CATALOG_PATH = Path(__file__).with_name("patterns.yaml")


class CatalogError(RuntimeError):
    pass


def _keyword_regex(keywords: tuple[str, ...]) -> str:
    # Longest first so "work experience" wins over "experience" in alternation.
    ordered = sorted(keywords, key=len, reverse=True)
    alternatives = "|".join(re.escape(keyword) for keyword in ordered)
    return rf"(?<!\w)(?:{alternatives})(?!\w)"


@dataclass(frozen=True)
class PatternGroup:
    """A named matching rule compiled once into a case-insensitive regex."""

    name: str
    keywords: tuple[str, ...]
    pattern: str | None
    regex: re.Pattern[str]

    @classmethod
    def build(cls, name: str, keywords: list[str] | tuple[str, ...] | None = None, pattern: str | None = None) -> PatternGroup:
        clean = tuple(str(keyword).strip().lower() for keyword in (keywords or ()) if str(keyword).strip())
        parts: list[str] = []
        if clean:
            parts.append(_keyword_regex(clean))
        if pattern:
            parts.append(f"(?:{pattern})")
        if not parts:
            raise CatalogError(f"Pattern group '{name}' needs keywords or a pattern.")
        try:
            regex = re.compile("|".join(parts), re.IGNORECASE)
        except re.error as exc:
            raise CatalogError(f"Pattern group '{name}' has an invalid regex: {exc}") from exc
        return cls(name=name, keywords=clean, pattern=pattern, regex=regex)

    def matches(self, text: str) -> bool:
        return self.regex.search(text) is not None


@dataclass(frozen=True)
class RegionalCategory:
    label: str
    points: int
    group: PatternGroup
    strength: str | None = None
    improvement: str | None = None


@dataclass(frozen=True)
class PatternCatalog:
    version: str
    locale: str
    sections: tuple[tuple[SectionId, PatternGroup], ...]
    skills: tuple[str, ...]
    format_cues: Mapping[str, PatternGroup]
    regional_categories: tuple[RegionalCategory, ...]

    def format_cue(self, name: str) -> PatternGroup:
        return self.format_cues[name]

    @property
    def regional_points_total(self) -> int:
        return sum(category.points for category in self.regional_categories)

    @classmethod
    def from_mapping(cls, raw: dict[str, Any]) -> PatternCatalog:
        if not isinstance(raw, dict):
            raise CatalogError("Pattern catalog must be a mapping.")

        sections_raw = raw.get("sections") or {}
        if not isinstance(sections_raw, dict):
            raise CatalogError("'sections' must be a mapping of section id to pattern group.")
        unknown = [key for key in sections_raw if key not in SECTION_IDS]
        if unknown:
            raise CatalogError(f"Unknown section ids: {', '.join(sorted(unknown))}")
        # Enumeration order, not file order.
        sections = tuple(
            (section_id, _group_from(f"section:{section_id}", sections_raw[section_id]))
            for section_id in SECTION_IDS
            if section_id in sections_raw
        )

        skills_raw = raw.get("skills") or []
        if not isinstance(skills_raw, list):
            raise CatalogError("'skills' must be a list.")
        skills: list[str] = []
        for item in skills_raw:
            term = str(item).strip().lower()
            if term and term not in skills:
                skills.append(term)

        cues_raw = raw.get("format_cues") or {}
        missing_cues = [name for name in FORMAT_CUE_NAMES if name not in cues_raw]
        if missing_cues:
            raise CatalogError(f"Missing format cues: {', '.join(missing_cues)}")
        format_cues = MappingProxyType(
            {name: _group_from(f"format:{name}", cues_raw[name]) for name in FORMAT_CUE_NAMES}
        )

        categories: list[RegionalCategory] = []
        seen_labels: set[str] = set()
        for entry in raw.get("regional_categories") or []:
            if not isinstance(entry, dict) or not entry.get("label"):
                raise CatalogError("Each regional category needs a label.")
            label = str(entry["label"]).strip()
            if label in seen_labels:
                raise CatalogError(f"Duplicate regional category '{label}'.")
            seen_labels.add(label)
            try:
                points = int(entry.get("points", 0))
            except (TypeError, ValueError) as exc:
                raise CatalogError(f"Regional category '{label}' has non-integer points.") from exc
            if points < 0 or points > 100:
                raise CatalogError(f"Regional category '{label}' points must be within 0..100.")
            categories.append(
                RegionalCategory(
                    label=label,
                    points=points,
                    group=_group_from(f"regional:{label}", entry),
                    strength=entry.get("strength") or None,
                    improvement=entry.get("improvement") or None,
                )
            )

        return cls(
            version=str(raw.get("version") or "unversioned"),
            locale=str(raw.get("locale") or "the target region"),
            sections=sections,
            skills=tuple(skills),
            format_cues=format_cues,
            regional_categories=tuple(categories),
        )


def _group_from(name: str, raw: Any) -> PatternGroup:
    if isinstance(raw, (list, tuple)):
        return PatternGroup.build(name, keywords=list(raw))
    if isinstance(raw, str):
        return PatternGroup.build(name, pattern=raw)
    if isinstance(raw, dict):
        return PatternGroup.build(name, keywords=raw.get("keywords"), pattern=raw.get("pattern"))
    raise CatalogError(f"Pattern group '{name}' must be a list, a string or a mapping.")


def load_catalog(path: str | Path | None = None) -> PatternCatalog:
    catalog_path = Path(path) if path else DEFAULT_CATALOG_PATH
    try:
        with catalog_path.open("r", encoding="utf-8") as handle:
            raw = yaml.safe_load(handle)
    except OSError as exc:
        raise CatalogError(f"Failed to read pattern catalog '{catalog_path}': {exc}") from exc
    except yaml.YAMLError as exc:
        raise CatalogError(f"Invalid YAML in pattern catalog '{catalog_path}': {exc}") from exc
    return PatternCatalog.from_mapping(raw)
