"""Security-incident taxonomy and keyword classification helpers."""

from __future__ import annotations

import re
from typing import Callable, List, Pattern, Tuple

from .models import Casualties, IncidentDraft
from .regions import match_terms, registry_index

SECURITY_KEYWORDS = [
    "kill",
    "attack",
    "kidnap",
    "abduct",
    "bandit",
    "terrorist",
    "boko haram",
    "gunmen",
    "robbery",
    "murder",
    "bomb",
    "insurgent",
    "ambush",
    "raid",
    "hostage",
    "ransom",
    "militia",
    "herder",
    "farmer",
]

KIDNAPPING_KEYWORDS = ["kidnap", "abduct", "hostage", "ransom", "seized", "captive"]
BANDITRY_KEYWORDS = [
    "bandit",
    "armed men",
    "gunmen",
    "herdsmen",
    "herder",
    "cattle rustl",
    "rustlers",
    "maraud",
]
TERRORISM_KEYWORDS = [
    "boko haram",
    "iswap",
    "terrorist",
    "terrorism",
    "insurgent",
    "insurgency",
    "bomb",
    "explosion",
    "ied",
    "suicide attack",
]
ARMED_ROBBERY_KEYWORDS = ["armed robbery", "robber", "robbery", "armed attack", "highway robbery"]

_VERB_KILLED = r"(?:killed|dead|died|murdered|slain)"
_VERB_KIDNAPPED = r"(?:kidnapped|abducted|seized|taken hostage)"
_VERB_INJURED = r"(?:injured|wounded)"


def _count_patterns(verb: str) -> Tuple[Pattern[str], ...]:
    return (
        re.compile(r"(\d+)\s*(?:people\s*)?" + verb, re.IGNORECASE),
        re.compile(verb + r"\s*(\d+)", re.IGNORECASE),
    )


# Pattern order matters: the first pattern that yields a number wins.
CASUALTY_PATTERNS: Tuple[Tuple[str, Tuple[Pattern[str], ...]], ...] = (
    ("killed", _count_patterns(_VERB_KILLED)),
    ("kidnapped", _count_patterns(_VERB_KIDNAPPED)),
    ("injured", _count_patterns(_VERB_INJURED)),
)


def normalize_text(value: str) -> str:
    return " ".join(value.casefold().split())


def contains_keyword(text: str, keyword: str) -> bool:
    """Case-insensitive match of ``keyword`` at the start of a word.

    Stems such as ``kidnap`` still match ``kidnapped``; short terms such as
    ``ied`` do not fire inside ``died``.
    """
    term = normalize_text(keyword)
    if not term:
        return False
    pattern = r"(?<!\w)" + re.escape(term)
    return re.search(pattern, normalize_text(text)) is not None


def _any_keyword(keywords: List[str]) -> Callable[[str], bool]:
    def predicate(haystack: str) -> bool:
        return any(contains_keyword(haystack, k) for k in keywords)

    return predicate


# Evaluated in order; the first matching category wins ties.
CATEGORY_RULES: Tuple[Tuple[str, Callable[[str], bool]], ...] = (
    ("kidnapping", _any_keyword(KIDNAPPING_KEYWORDS)),
    ("banditry", _any_keyword(BANDITRY_KEYWORDS)),
    ("terrorism", _any_keyword(TERRORISM_KEYWORDS)),
    ("armed_robbery", _any_keyword(ARMED_ROBBERY_KEYWORDS)),
)


def is_security_related(text: str) -> bool:
    haystack = normalize_text(text)
    return any(contains_keyword(haystack, k) for k in SECURITY_KEYWORDS)


def infer_category(text: str) -> str:
    haystack = normalize_text(text)
    for category, predicate in CATEGORY_RULES:
        if predicate(haystack):
            return category
    return "other"


def extract_region(text: str) -> str | None:
    haystack = normalize_text(text)
    if not haystack:
        return None

    matches: list[tuple[int, int, str]] = []
    for term, canonical in match_terms():
        pattern = r"(?<!\w)" + re.escape(normalize_text(term)) + r"(?!\w)"
        for found in re.finditer(pattern, haystack):
            matches.append((found.start(), found.end(), canonical))

    # Drop matches nested inside a longer match.
    kept = [
        m
        for m in matches
        if not any(
            o is not m and o[0] <= m[0] and m[1] <= o[1] and (o[1] - o[0]) > (m[1] - m[0])
            for o in matches
        )
    ]
    if not kept:
        return None
    return min(kept, key=lambda m: registry_index(m[2]))[2]


def _first_count(text: str, patterns: Tuple[Pattern[str], ...]) -> int:
    for pattern in patterns:
        found = pattern.search(text)
        if not found:
            continue
        try:
            return max(0, int(found.group(1), 10))
        except (TypeError, ValueError):
            return 0
    return 0


def extract_casualties(text: str) -> Casualties:
    counts = {field: _first_count(text, patterns) for field, patterns in CASUALTY_PATTERNS}
    return Casualties(**counts)


def classify(text: str | None, title: str | None = "") -> IncidentDraft | None:
    """Classify article text into an incident draft, or None when irrelevant."""
    combined = " ".join(part for part in (title or "", text or "") if isinstance(part, str)).strip()
    if not combined or not is_security_related(combined):
        return None

    casualties = extract_casualties(combined)
    return IncidentDraft(
        category=infer_category(combined),
        region=extract_region(combined),
        title=(title or "").strip(),
        killed=casualties.killed,
        kidnapped=casualties.kidnapped,
        injured=casualties.injured,
    )
