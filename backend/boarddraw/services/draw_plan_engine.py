"""
Draw Plan Engine — Single source of truth for category seating draws.

This module is the authoritative engine for:
1. Validating a category's roster and blocks before a draw
2. Producing the per-block rounds and tables for the category

Table sizing and penalty constants live in draw_rules.py; per-round seating
lives in round_assignment.py. No other module should contain draw logic.
"""

from dataclasses import dataclass, field
from typing import Dict, Hashable, Iterable, List, Mapping, Optional, Sequence
import logging
import random

from boarddraw.services.draw_rules import (
    MIN_DRAW_PLAYERS,
    MAX_TABLE_SIZE,
    PointsOrder,
    ROUNDS_PER_BLOCK,
    ScoringType,
    build_round_table_sizes,
)
from boarddraw.services.pairing_tracker import PairingTracker
from boarddraw.services.round_assignment import assign_round
from boarddraw.services.team_separation import TeamSeparationPolicy

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Errors
# -----------------------------------------------------------------------------

class DrawError(ValueError):
    """Draw input rejected at the boundary."""


class InfeasibleDrawError(DrawError):
    """Too few active competitors to seat a table."""


class UnknownGameError(DrawError):
    """A block references a game that is not configured."""


class InvalidRosterError(DrawError):
    """Roster or block list is malformed (duplicates, mixed categories)."""


# -----------------------------------------------------------------------------
# Data Models
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Competitor:
    """Read-only roster record for the duration of a draw."""
    id: Hashable
    team_name: Optional[str]
    category_id: Hashable
    display_name: Optional[str] = None
    active: bool = True


@dataclass(frozen=True)
class Game:
    id: Hashable
    scoring_type: ScoringType = "both"
    points_order: PointsOrder = "desc"
    name: Optional[str] = None


@dataclass(frozen=True)
class Block:
    """One game assigned to a category; runs ROUNDS_PER_BLOCK rounds."""
    block_number: int
    game_id: Hashable
    category_id: Hashable
    id: Optional[Hashable] = None


@dataclass
class DrawTable:
    table_number: int
    player_ids: List[Hashable]


@dataclass
class DrawRound:
    round_number: int
    tables: List[DrawTable]


@dataclass
class DrawBlockPlan:
    block: Block
    rounds: List[DrawRound] = field(default_factory=list)
    used_relaxed_same_team_rule: bool = False
    # Diagnostics
    max_pair_count: int = 0
    same_team_collisions: int = 0

    @property
    def table_sizes(self) -> List[int]:
        if not self.rounds:
            return []
        return [len(t.player_ids) for t in self.rounds[0].tables]


# -----------------------------------------------------------------------------
# Validation
# -----------------------------------------------------------------------------

def active_competitors(competitors: Iterable[Competitor]) -> List[Competitor]:
    return [c for c in competitors if c.active]


def _validate_roster(competitors: Sequence[Competitor], blocks: Sequence[Block]) -> None:
    seen = set()
    duplicates = []
    for c in competitors:
        if c.id in seen:
            duplicates.append(c.id)
        seen.add(c.id)
    if duplicates:
        raise InvalidRosterError(f"Duplicate competitor ids: {duplicates[:5]}")

    categories = {c.category_id for c in competitors}
    if len(categories) > 1:
        raise InvalidRosterError(f"Competitors span several categories: {sorted(map(str, categories))}")

    if categories:
        category_id = next(iter(categories))
        foreign = [b.block_number for b in blocks if b.category_id != category_id]
        if foreign:
            raise InvalidRosterError(
                f"Blocks {foreign} do not belong to category {category_id!r}"
            )

    numbers = [b.block_number for b in blocks]
    if len(set(numbers)) != len(numbers):
        raise InvalidRosterError(f"Duplicate block numbers: {sorted(numbers)}")


def _validate_games(blocks: Sequence[Block], games: Optional[Mapping[Hashable, Game]]) -> None:
    if games is None:
        return
    for block in blocks:
        if block.game_id not in games:
            raise UnknownGameError(
                f"Block {block.block_number} references unknown game {block.game_id!r}"
            )


def validate_draw_plan(plan: Sequence[DrawBlockPlan], active_ids: Iterable[Hashable]) -> List[str]:
    """
    Check the seating invariants of a produced plan.
    Returns a list of violations; empty means valid.
    """
    expected = set(active_ids)
    errors: List[str] = []

    for block_plan in plan:
        label = f"block {block_plan.block.block_number}"
        if len(block_plan.rounds) != ROUNDS_PER_BLOCK:
            errors.append(f"{label}: expected {ROUNDS_PER_BLOCK} rounds, got {len(block_plan.rounds)}")

        appearances: Dict[Hashable, int] = {}
        for draw_round in block_plan.rounds:
            seated: List[Hashable] = [pid for t in draw_round.tables for pid in t.player_ids]
            for pid in seated:
                appearances[pid] = appearances.get(pid, 0) + 1
            if len(seated) != len(set(seated)):
                errors.append(f"{label} round {draw_round.round_number}: competitor seated twice")
            if set(seated) != expected:
                missing = expected - set(seated)
                extra = set(seated) - expected
                errors.append(
                    f"{label} round {draw_round.round_number}: missing={len(missing)} unexpected={len(extra)}"
                )

        for pid in expected:
            if appearances.get(pid, 0) != len(block_plan.rounds):
                errors.append(f"{label}: competitor {pid!r} seated {appearances.get(pid, 0)} times")
                break

    return errors


# -----------------------------------------------------------------------------
# Draw
# -----------------------------------------------------------------------------

def _plan_block(
    block: Block,
    players: Sequence[Competitor],
    table_sizes: List[int],
    rng: random.Random,
) -> DrawBlockPlan:
    """Draw all rounds of one block with a fresh pairing tracker."""
    tracker = PairingTracker()
    policy = TeamSeparationPolicy(players, table_sizes)
    strict = policy.strictly_feasible
    player_ids = [p.id for p in players]

    plan = DrawBlockPlan(block=block)
    for round_number in range(1, ROUNDS_PER_BLOCK + 1):
        assignment = assign_round(player_ids, table_sizes, tracker, policy, rng=rng, strict=strict)

        plan.rounds.append(DrawRound(
            round_number=round_number,
            tables=[
                DrawTable(table_number=index + 1, player_ids=list(table))
                for index, table in enumerate(assignment.tables)
            ],
        ))
        plan.same_team_collisions += assignment.same_team_collisions

        for table in assignment.tables:
            tracker.increment(table)

    plan.max_pair_count = tracker.max_count()
    plan.used_relaxed_same_team_rule = (not strict) or plan.same_team_collisions > 0
    return plan


def plan_category_draw(
    competitors: Iterable[Competitor],
    blocks: Iterable[Block],
    games: Optional[Mapping[Hashable, Game]] = None,
    rng: Optional[random.Random] = None,
) -> List[DrawBlockPlan]:
    """
    Main entry point: draw every block of one category.

    Inactive competitors are skipped. Blocks run in block_number order, each
    with its own pairing history (nothing leaks between blocks). Pass a seeded
    random.Random for a reproducible draw.
    """
    competitors = list(competitors)
    blocks = sorted(blocks, key=lambda b: b.block_number)

    _validate_roster(competitors, blocks)
    _validate_games(blocks, games)

    if not blocks:
        return []

    players = active_competitors(competitors)
    if len(players) < MIN_DRAW_PLAYERS:
        raise InfeasibleDrawError(
            f"At least {MIN_DRAW_PLAYERS} active competitors are required, got {len(players)}"
        )

    rng = rng or random.Random()
    table_sizes = build_round_table_sizes(len(players))
    if max(table_sizes) > MAX_TABLE_SIZE:
        logger.warning(
            "Table cap reached: %d competitors seated at %d tables of up to %d",
            len(players), len(table_sizes), max(table_sizes),
        )

    plans = [_plan_block(block, players, table_sizes, rng) for block in blocks]

    logger.debug(
        "plan_category_draw: %d competitors, %d blocks, table_sizes=%s, relaxed=%s",
        len(players),
        len(plans),
        table_sizes,
        [p.block.block_number for p in plans if p.used_relaxed_same_team_rule],
    )
    return plans
