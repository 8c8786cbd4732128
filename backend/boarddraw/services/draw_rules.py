"""
Draw Rules — Table sizing and search tunables (Single Source of Truth)

This module defines the constants the draw engine is built around and the
table-size planner. All other modules must import from here. Do NOT duplicate
these numbers elsewhere.
"""

from math import ceil
from typing import List, Literal

# =============================================================================
# Game Scoring
# =============================================================================

ScoringType = Literal["points", "placement", "both"]
PointsOrder = Literal["asc", "desc"]


# =============================================================================
# Table Layout
# =============================================================================

# Hard cap on tables per game per round (physical boards available)
MAX_TABLES_PER_GAME = 25

# Preferred seats per table; remainders upgrade tables to MAX_TABLE_SIZE
STANDARD_TABLE_SIZE = 4
MAX_TABLE_SIZE = 5

# Smallest population that still forms one (degenerate) table
MIN_DRAW_PLAYERS = 3

# Largest category that keeps every table inside the 4-5 band
MAX_PLAYERS_PER_CATEGORY = MAX_TABLES_PER_GAME * MAX_TABLE_SIZE

# Every block runs this many rounds regardless of competitor count
ROUNDS_PER_BLOCK = 3


# =============================================================================
# Penalty Weights
# =============================================================================

# Per previous meeting of a pair within the block
REPEAT_PAIR_PENALTY = 120

# Same-team pair weights, smallest teams protected first
PROTECTED_PAIR_PENALTY = 10_000  # team of exactly two
SEPARABLE_PAIR_PENALTY = 2_400   # team small enough to spread over all tables
SAME_TEAM_PAIR_PENALTY = 240     # team too large to separate

# Per earlier seat at a short (3-player) table in the block
SHORT_TABLE_PENALTY = 30


# =============================================================================
# Search Bounds
# =============================================================================

MIN_ROUND_ATTEMPTS = 60
MAX_ROUND_ATTEMPTS = 220
ATTEMPTS_PER_PLAYER = 2.4
NO_IMPROVEMENT_LIMIT = 64
MAX_SWAP_PASSES = 8


def round_attempt_budget(player_count: int) -> int:
    """Randomized attempts allowed for one round: 2.4 per player, clamped to [60, 220]."""
    return min(MAX_ROUND_ATTEMPTS, max(MIN_ROUND_ATTEMPTS, round(player_count * ATTEMPTS_PER_PLAYER)))


# =============================================================================
# Table Size Planner
# =============================================================================

def build_round_table_sizes(player_count: int, max_tables: int = MAX_TABLES_PER_GAME) -> List[int]:
    """
    Return the seat count of every table in a round, largest first.

    Rules:
    - Up to 4 players: one table holding everybody.
    - floor(n/4) tables of 4; the remainder upgrades that many tables to 5.
    - When the remainder outnumbers the tables (n = 6, 7, 11) a 4-seat layout
      cannot absorb it, so ceil(n/4) tables are used and the shortfall lands
      on 3-seat tables.
    - Never more than max_tables tables: past the cap every table grows.

    Examples:
    - 16  -> [4, 4, 4, 4]
    - 22  -> [5, 5, 4, 4, 4]
    - 11  -> [4, 4, 3]
    - 101 -> [5] + [4] * 24
    """
    if player_count < 1:
        raise ValueError(f"player_count must be at least 1, got {player_count}")
    if max_tables < 1:
        raise ValueError(f"max_tables must be at least 1, got {max_tables}")

    if player_count <= STANDARD_TABLE_SIZE:
        return [player_count]

    tables = player_count // STANDARD_TABLE_SIZE
    if player_count % STANDARD_TABLE_SIZE > tables:
        tables = ceil(player_count / STANDARD_TABLE_SIZE)
    tables = min(tables, max_tables)

    base = player_count // tables
    remainder = player_count % tables

    sizes = []
    for i in range(tables):
        if i < remainder:
            sizes.append(base + 1)
        else:
            sizes.append(base)

    return sizes
