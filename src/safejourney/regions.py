"""Static registry of Nigerian states, geopolitical zones, and name aliases."""

from __future__ import annotations

from typing import Dict, List

from .models import Region

ZONES = (
    "North Central",
    "North East",
    "North West",
    "South East",
    "South South",
    "South West",
)

REGIONS: tuple[Region, ...] = (
    Region(name="Abia", zone="South East"),
    Region(name="Adamawa", zone="North East"),
    Region(name="Akwa Ibom", zone="South South"),
    Region(name="Anambra", zone="South East"),
    Region(name="Bauchi", zone="North East"),
    Region(name="Bayelsa", zone="South South"),
    Region(name="Benue", zone="North Central"),
    Region(name="Borno", zone="North East"),
    Region(name="Cross River", zone="South South"),
    Region(name="Delta", zone="South South"),
    Region(name="Ebonyi", zone="South East"),
    Region(name="Edo", zone="South South"),
    Region(name="Ekiti", zone="South West"),
    Region(name="Enugu", zone="South East"),
    Region(name="Federal Capital Territory", zone="North Central"),
    Region(name="Gombe", zone="North East"),
    Region(name="Imo", zone="South East"),
    Region(name="Jigawa", zone="North West"),
    Region(name="Kaduna", zone="North West"),
    Region(name="Kano", zone="North West"),
    Region(name="Katsina", zone="North West"),
    Region(name="Kebbi", zone="North West"),
    Region(name="Kogi", zone="North Central"),
    Region(name="Kwara", zone="North Central"),
    Region(name="Lagos", zone="South West"),
    Region(name="Nasarawa", zone="North Central"),
    Region(name="Niger", zone="North Central"),
    Region(name="Ogun", zone="South West"),
    Region(name="Ondo", zone="South West"),
    Region(name="Osun", zone="South West"),
    Region(name="Oyo", zone="South West"),
    Region(name="Plateau", zone="North Central"),
    Region(name="Rivers", zone="South South"),
    Region(name="Sokoto", zone="North West"),
    Region(name="Taraba", zone="North East"),
    Region(name="Yobe", zone="North East"),
    Region(name="Zamfara", zone="North West"),
)

# Colloquial names that stand for a canonical region.
REGION_ALIASES: Dict[str, str] = {
    "abuja": "Federal Capital Territory",
    "fct": "Federal Capital Territory",
}

_BY_KEY: Dict[str, Region] = {r.name.casefold(): r for r in REGIONS}
_ORDER: Dict[str, int] = {r.name: idx for idx, r in enumerate(REGIONS)}


def _key(value: str) -> str:
    return " ".join(value.casefold().split())


def normalize_region_name(value: str) -> str:
    """Map an alias or any casing of a region name to its canonical form.

    Unknown names are returned stripped but otherwise untouched so route
    endpoints outside the registry still compare consistently.
    """
    key = _key(value)
    if key in REGION_ALIASES:
        return REGION_ALIASES[key]
    region = _BY_KEY.get(key)
    if region is not None:
        return region.name
    return value.strip()


def get_region(name: str) -> Region | None:
    return _BY_KEY.get(_key(normalize_region_name(name)))


def is_known_region(name: str) -> bool:
    return get_region(name) is not None


def region_names() -> List[str]:
    return [r.name for r in REGIONS]


def regions_in_zone(zone: str) -> List[Region]:
    wanted = _key(zone)
    return [r for r in REGIONS if _key(r.zone) == wanted]


def registry_index(name: str) -> int:
    """Position of a region in registry order; unknown names sort last."""
    return _ORDER.get(normalize_region_name(name), len(REGIONS))


def match_terms() -> List[tuple[str, str]]:
    """All (surface term, canonical name) pairs used for text matching."""
    terms = [(r.name, r.name) for r in REGIONS]
    terms.extend((alias, canonical) for alias, canonical in REGION_ALIASES.items())
    return terms
