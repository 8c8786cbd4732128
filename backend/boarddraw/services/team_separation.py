"""
Team Separation Policy: keep teammates at different tables.

Penalty weights depend on team size so that, when some collision is
unavoidable, it lands inside a large team rather than a team of two:

- team of exactly two       -> PROTECTED_PAIR_PENALTY
- team no larger than the
  number of tables          -> SEPARABLE_PAIR_PENALTY
- any larger team           -> SAME_TEAM_PAIR_PENALTY

Strict separation is feasible iff no team has more members than there are
tables: dealing each team's members over the tables in cyclic order then
seats every team at distinct tables, in every round.
"""

from __future__ import annotations

from itertools import combinations
from typing import Dict, Hashable, Iterable, List, Sequence

from boarddraw.services.draw_rules import (
    PROTECTED_PAIR_PENALTY,
    SAME_TEAM_PAIR_PENALTY,
    SEPARABLE_PAIR_PENALTY,
)
from boarddraw.services.team_key import HasTeamName, TeamKey, group_by_team


class TeamSeparationPolicy:
    def __init__(self, competitors: Iterable[HasTeamName], table_sizes: Sequence[int]):
        self.table_count = len(table_sizes)
        self.teams: Dict[TeamKey, List[Hashable]] = group_by_team(competitors)
        self._team_of: Dict[Hashable, TeamKey] = {}
        for key, member_ids in self.teams.items():
            for member_id in member_ids:
                self._team_of[member_id] = key

        self._pair_weight: Dict[TeamKey, int] = {
            key: self._weight_for_size(len(member_ids)) for key, member_ids in self.teams.items()
        }

    def _weight_for_size(self, size: int) -> int:
        if size == 2:
            return PROTECTED_PAIR_PENALTY
        if size <= self.table_count:
            return SEPARABLE_PAIR_PENALTY
        return SAME_TEAM_PAIR_PENALTY

    @property
    def largest_team_size(self) -> int:
        return max((len(m) for m in self.teams.values()), default=0)

    @property
    def strictly_feasible(self) -> bool:
        """True when a zero-collision seating exists for every round of the block."""
        return self.largest_team_size <= self.table_count

    def team_of(self, competitor_id: Hashable) -> TeamKey:
        return self._team_of.get(competitor_id, "")

    def team_size(self, competitor_id: Hashable) -> int:
        key = self.team_of(competitor_id)
        return len(self.teams[key]) if key else 0

    def pair_penalty(self, a: Hashable, b: Hashable) -> int:
        key = self.team_of(a)
        if not key or key != self.team_of(b):
            return 0
        return self._pair_weight[key]

    def penalty(self, members: Sequence[Hashable]) -> int:
        """Weighted same-team co-occupancy of a candidate table (0 when clean)."""
        return sum(self.pair_penalty(a, b) for a, b in combinations(members, 2))

    def added_penalty(self, candidate: Hashable, members: Iterable[Hashable]) -> int:
        return sum(self.pair_penalty(candidate, member) for member in members)

    def collides(self, candidate: Hashable, members: Iterable[Hashable]) -> bool:
        key = self.team_of(candidate)
        if not key:
            return False
        return any(self.team_of(member) == key for member in members)

    def collision_count(self, tables: Iterable[Sequence[Hashable]]) -> int:
        """Number of same-team pairs seated together across *tables*."""
        count = 0
        for table in tables:
            for a, b in combinations(table, 2):
                key = self.team_of(a)
                if key and key == self.team_of(b):
                    count += 1
        return count
