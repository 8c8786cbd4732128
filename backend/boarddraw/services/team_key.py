"""
Team identity for the same-team separation rule.

Team names arrive as free text from the roster ("12. PTO Sokoli",
"12.PTO sokoli ", "Oddíl Bobři"). Two competitors belong to the same team
when their keys match exactly; a blank name never matches anything.
"""

from __future__ import annotations

import re
import unicodedata
from typing import Dict, Hashable, Iterable, List, Optional, Protocol

TeamKey = str

# Unit number in front of a dot, e.g. "12. PTO ..." or "... 7.ZS"
_UNIT_NUMBER_RE = re.compile(r"(?:^|\s)(\d{1,3})\s*\.")
_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")


class HasTeamName(Protocol):
    id: Hashable
    team_name: Optional[str]


def slugify(value: str) -> str:
    """Lower-case ASCII slug: accents dropped, non-alphanumerics collapsed to '-'."""
    decomposed = unicodedata.normalize("NFKD", value)
    ascii_only = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return _NON_ALNUM_RE.sub("-", ascii_only.lower()).strip("-")


def team_key(team_name: Optional[str]) -> TeamKey:
    """Normalize a team name to its comparable key ("" when there is no team)."""
    raw = (team_name or "").strip()
    if not raw:
        return ""

    match = _UNIT_NUMBER_RE.search(raw)
    if match:
        return f"pto-{int(match.group(1))}"

    return slugify(raw)


def same_team(team_name_a: Optional[str], team_name_b: Optional[str]) -> bool:
    key = team_key(team_name_a)
    return bool(key) and key == team_key(team_name_b)


def group_by_team(competitors: Iterable[HasTeamName]) -> Dict[TeamKey, List[Hashable]]:
    """Competitor ids per team key, in input order. Teamless competitors are left out."""
    teams: Dict[TeamKey, List[Hashable]] = {}
    for competitor in competitors:
        key = team_key(competitor.team_name)
        if key:
            teams.setdefault(key, []).append(competitor.id)
    return teams
