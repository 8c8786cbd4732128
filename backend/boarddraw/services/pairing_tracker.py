"""
Pairing Tracker: how often two competitors have shared a table.

One tracker lives for exactly one block: created when the block's first round
is drawn, incremented after each accepted round, discarded with the block.
"""

from __future__ import annotations

from collections import Counter
from itertools import combinations
from typing import FrozenSet, Hashable, Iterable, Sequence

from boarddraw.services.draw_rules import STANDARD_TABLE_SIZE

PairKey = FrozenSet[Hashable]


def pair_key(a: Hashable, b: Hashable) -> PairKey:
    return frozenset((a, b))


class PairingTracker:
    """Symmetric shared-table counts for one block."""

    def __init__(self) -> None:
        self._pairs: Counter = Counter()
        self._short_table_seats: Counter = Counter()

    def increment(self, members: Sequence[Hashable]) -> None:
        """Record one shared table for every unordered pair in *members*."""
        for a, b in combinations(members, 2):
            self._pairs[pair_key(a, b)] += 1
        if len(members) < STANDARD_TABLE_SIZE:
            for member in members:
                self._short_table_seats[member] += 1

    def count(self, a: Hashable, b: Hashable) -> int:
        return self._pairs.get(pair_key(a, b), 0)

    def cost(self, members: Sequence[Hashable]) -> int:
        """Sum of pairing counts over all pairs of a candidate table (lower is better)."""
        return sum(self.count(a, b) for a, b in combinations(members, 2))

    def added_cost(self, candidate: Hashable, members: Iterable[Hashable]) -> int:
        """Pairing counts between *candidate* and the competitors already at a table."""
        return sum(self.count(candidate, member) for member in members)

    def short_table_seats(self, competitor_id: Hashable) -> int:
        return self._short_table_seats.get(competitor_id, 0)

    def max_count(self) -> int:
        return max(self._pairs.values(), default=0)

    def __len__(self) -> int:
        return len(self._pairs)
