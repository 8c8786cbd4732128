"""
Round Assignment Engine: seat every active competitor for one round.

Hard constraints (never traded away):
- every table gets exactly its planned number of seats
- nobody sits at two tables
- everybody is seated

Soft objective, lower is better:
  REPEAT_PAIR_PENALTY * earlier meetings within the block
  + same-team penalty from TeamSeparationPolicy
  + SHORT_TABLE_PENALTY * earlier short-table seats (3-player tables only)

Search:
1. Randomized greedy attempts. Each attempt shuffles the competitors, puts the
   members of the largest teams first, and seats each competitor at the open
   table that adds the least penalty. In strict mode a table already holding a
   teammate is closed; an attempt with no open table left is discarded.
2. The best attempt is compared with the dealt partition (teams dealt across
   tables in cyclic order), which is always complete and collision-free when
   strict separation is feasible. It is the fallback when no attempt beats it.
3. Pairwise swap hill-climbing polishes whatever was chosen.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Hashable, List, Optional, Sequence, Tuple

from boarddraw.services.draw_rules import (
    MAX_SWAP_PASSES,
    NO_IMPROVEMENT_LIMIT,
    REPEAT_PAIR_PENALTY,
    SHORT_TABLE_PENALTY,
    STANDARD_TABLE_SIZE,
    round_attempt_budget,
)
from boarddraw.services.pairing_tracker import PairingTracker
from boarddraw.services.team_separation import TeamSeparationPolicy

logger = logging.getLogger(__name__)

Table = List[Hashable]


@dataclass
class RoundAssignment:
    """Accepted seating for one round."""
    tables: List[Table]
    penalty: int
    same_team_collisions: int
    attempts: int
    used_fallback: bool


# -----------------------------------------------------------------------------
# Scoring
# -----------------------------------------------------------------------------

def seat_cost(
    candidate: Hashable,
    members: Sequence[Hashable],
    table_size: int,
    tracker: PairingTracker,
    policy: TeamSeparationPolicy,
) -> int:
    """Penalty added by seating *candidate* next to *members* at a table of *table_size*."""
    cost = REPEAT_PAIR_PENALTY * tracker.added_cost(candidate, members)
    cost += policy.added_penalty(candidate, members)
    if table_size < STANDARD_TABLE_SIZE:
        cost += SHORT_TABLE_PENALTY * tracker.short_table_seats(candidate)
    return cost


def round_penalty(tables: Sequence[Sequence[Hashable]], tracker: PairingTracker, policy: TeamSeparationPolicy) -> int:
    total = 0
    for table in tables:
        total += REPEAT_PAIR_PENALTY * tracker.cost(table) + policy.penalty(table)
        if len(table) < STANDARD_TABLE_SIZE:
            total += SHORT_TABLE_PENALTY * sum(tracker.short_table_seats(m) for m in table)
    return total


# -----------------------------------------------------------------------------
# Construction
# -----------------------------------------------------------------------------

def deal_by_team(
    competitor_ids: Sequence[Hashable],
    table_sizes: Sequence[int],
    policy: TeamSeparationPolicy,
) -> List[Table]:
    """
    Deterministic partition: largest teams first, members dealt one table at a
    time in cyclic order, skipping full tables.

    With table sizes differing by at most one seat (larger tables first), a team
    with no more members than tables never gets two members at one table.
    """
    position = {cid: index for index, cid in enumerate(competitor_ids)}
    ordered = sorted(
        competitor_ids,
        key=lambda cid: (-policy.team_size(cid), policy.team_of(cid), position[cid]),
    )

    tables: List[Table] = [[] for _ in table_sizes]
    cursor = 0
    for cid in ordered:
        while len(tables[cursor]) >= table_sizes[cursor]:
            cursor = (cursor + 1) % len(tables)
        tables[cursor].append(cid)
        cursor = (cursor + 1) % len(tables)
    return tables


def _greedy_attempt(
    competitor_ids: Sequence[Hashable],
    table_sizes: Sequence[int],
    tracker: PairingTracker,
    policy: TeamSeparationPolicy,
    rng: random.Random,
    strict: bool,
) -> Optional[List[Table]]:
    order = list(competitor_ids)
    rng.shuffle(order)
    # Most constrained first; sort is stable so the shuffle survives within a tier
    order.sort(key=lambda cid: -policy.team_size(cid))

    tables: List[Table] = [[] for _ in table_sizes]
    for cid in order:
        best_index = None
        best_score = float("inf")

        for index, table in enumerate(tables):
            if len(table) >= table_sizes[index]:
                continue
            if strict and policy.collides(cid, table):
                continue
            score = seat_cost(cid, table, table_sizes[index], tracker, policy) + rng.random() * 0.01
            if score < best_score:
                best_index = index
                best_score = score

        if best_index is None:
            return None
        tables[best_index].append(cid)

    return tables


def _improve_by_swaps(
    tables: List[Table],
    table_sizes: Sequence[int],
    tracker: PairingTracker,
    policy: TeamSeparationPolicy,
    strict: bool,
) -> Tuple[List[Table], int]:
    """Swap competitors between tables while that lowers the penalty. Returns (tables, swaps made)."""
    tables = [list(table) for table in tables]
    swaps = 0

    for _ in range(MAX_SWAP_PASSES):
        improved = False
        for ti in range(len(tables)):
            for tj in range(ti + 1, len(tables)):
                for ai in range(len(tables[ti])):
                    for bi in range(len(tables[tj])):
                        a = tables[ti][ai]
                        b = tables[tj][bi]
                        rest_i = tables[ti][:ai] + tables[ti][ai + 1:]
                        rest_j = tables[tj][:bi] + tables[tj][bi + 1:]
                        if strict and (policy.collides(b, rest_i) or policy.collides(a, rest_j)):
                            continue

                        before = (
                            seat_cost(a, rest_i, table_sizes[ti], tracker, policy)
                            + seat_cost(b, rest_j, table_sizes[tj], tracker, policy)
                        )
                        after = (
                            seat_cost(b, rest_i, table_sizes[ti], tracker, policy)
                            + seat_cost(a, rest_j, table_sizes[tj], tracker, policy)
                        )
                        if after < before:
                            tables[ti][ai] = b
                            tables[tj][bi] = a
                            swaps += 1
                            improved = True
        if not improved:
            break

    return tables, swaps


# -----------------------------------------------------------------------------
# Entry point
# -----------------------------------------------------------------------------

def assign_round(
    competitor_ids: Sequence[Hashable],
    table_sizes: Sequence[int],
    tracker: PairingTracker,
    policy: TeamSeparationPolicy,
    rng: Optional[random.Random] = None,
    strict: bool = False,
) -> RoundAssignment:
    """
    Partition *competitor_ids* into tables of *table_sizes* for one round.

    Does not touch *tracker*; the caller commits the accepted tables.
    """
    if sum(table_sizes) != len(competitor_ids):
        raise ValueError(
            f"table sizes seat {sum(table_sizes)} competitors, got {len(competitor_ids)}"
        )
    if len(set(competitor_ids)) != len(competitor_ids):
        raise ValueError("competitor ids must be unique")
    if any(size < 1 for size in table_sizes):
        raise ValueError("every table needs at least one seat")

    rng = rng or random.Random()
    budget = round_attempt_budget(len(competitor_ids))

    best_tables: Optional[List[Table]] = None
    best_penalty = float("inf")
    attempts = 0
    discarded = 0
    no_improvement = 0

    while attempts < budget and best_penalty > 0 and no_improvement < NO_IMPROVEMENT_LIMIT:
        attempts += 1
        candidate = _greedy_attempt(competitor_ids, table_sizes, tracker, policy, rng, strict)
        if candidate is None:
            discarded += 1
            no_improvement += 1
            continue

        penalty = round_penalty(candidate, tracker, policy)
        if penalty < best_penalty:
            best_tables = candidate
            best_penalty = penalty
            no_improvement = 0
        else:
            no_improvement += 1

    used_fallback = False
    dealt = deal_by_team(competitor_ids, table_sizes, policy)
    dealt_penalty = round_penalty(dealt, tracker, policy)
    if best_tables is None or dealt_penalty < best_penalty:
        best_tables = dealt
        best_penalty = dealt_penalty
        used_fallback = True

    if best_penalty > 0:
        best_tables, swaps = _improve_by_swaps(best_tables, table_sizes, tracker, policy, strict)
        if swaps:
            best_penalty = round_penalty(best_tables, tracker, policy)
            used_fallback = False

    logger.debug(
        "Round assigned: %d competitors, %d tables, penalty=%s, attempts=%d (discarded %d), fallback=%s",
        len(competitor_ids),
        len(table_sizes),
        best_penalty,
        attempts,
        discarded,
        used_fallback,
    )

    return RoundAssignment(
        tables=best_tables,
        penalty=int(best_penalty),
        same_team_collisions=policy.collision_count(best_tables),
        attempts=attempts,
        used_fallback=used_fallback,
    )
