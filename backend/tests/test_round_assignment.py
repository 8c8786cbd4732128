"""
Tests for one-round seating: hard constraints, separation, fallback.
"""

import random

import pytest

from boarddraw.services import round_assignment
from boarddraw.services.draw_plan_engine import Competitor
from boarddraw.services.draw_rules import build_round_table_sizes
from boarddraw.services.pairing_tracker import PairingTracker
from boarddraw.services.round_assignment import assign_round, deal_by_team, round_penalty
from boarddraw.services.team_separation import TeamSeparationPolicy


def roster(team_sizes, teamless=0):
    players = []
    for t, size in enumerate(team_sizes):
        for i in range(size):
            players.append(Competitor(id=len(players) + 1, team_name=f"Club {t}", category_id=1))
    for _ in range(teamless):
        players.append(Competitor(id=len(players) + 1, team_name=None, category_id=1))
    return players


def assert_valid_partition(tables, ids, sizes):
    assert [len(t) for t in tables] == list(sizes)
    seated = [pid for t in tables for pid in t]
    assert len(seated) == len(set(seated))
    assert set(seated) == set(ids)


class TestDealByTeam:
    def test_feasible_teams_never_share_a_table(self):
        players = roster([4, 4, 3, 2], teamless=3)
        sizes = build_round_table_sizes(len(players))
        policy = TeamSeparationPolicy(players, sizes)
        tables = deal_by_team([p.id for p in players], sizes, policy)

        assert_valid_partition(tables, [p.id for p in players], sizes)
        assert policy.collision_count(tables) == 0

    def test_uneven_tables(self):
        players = roster([5, 5, 2], teamless=10)
        sizes = build_round_table_sizes(len(players))
        assert sizes == [5, 5, 4, 4, 4]
        policy = TeamSeparationPolicy(players, sizes)
        tables = deal_by_team([p.id for p in players], sizes, policy)

        assert_valid_partition(tables, [p.id for p in players], sizes)
        assert policy.collision_count(tables) == 0


class TestAssignRound:
    def test_hard_constraints(self):
        players = roster([3, 3, 2], teamless=14)
        ids = [p.id for p in players]
        sizes = build_round_table_sizes(len(ids))
        policy = TeamSeparationPolicy(players, sizes)

        result = assign_round(ids, sizes, PairingTracker(), policy, rng=random.Random(1), strict=True)

        assert_valid_partition(result.tables, ids, sizes)
        assert result.same_team_collisions == 0
        assert result.penalty == 0

    def test_does_not_touch_tracker(self):
        players = roster([], teamless=12)
        ids = [p.id for p in players]
        sizes = build_round_table_sizes(len(ids))
        tracker = PairingTracker()

        assign_round(ids, sizes, tracker, TeamSeparationPolicy(players, sizes), rng=random.Random(2))
        assert len(tracker) == 0

    def test_avoids_previous_pairs(self):
        players = roster([], teamless=16)
        ids = [p.id for p in players]
        sizes = [4, 4, 4, 4]
        policy = TeamSeparationPolicy(players, sizes)
        tracker = PairingTracker()
        for start in range(0, 16, 4):
            tracker.increment(ids[start:start + 4])

        result = assign_round(ids, sizes, tracker, policy, rng=random.Random(3))
        assert result.penalty == 0
        assert round_penalty(result.tables, tracker, policy) == 0

    def test_same_seed_same_seating(self):
        players = roster([4, 2, 2], teamless=14)
        ids = [p.id for p in players]
        sizes = build_round_table_sizes(len(ids))
        policy = TeamSeparationPolicy(players, sizes)

        first = assign_round(ids, sizes, PairingTracker(), policy, rng=random.Random(99))
        second = assign_round(ids, sizes, PairingTracker(), policy, rng=random.Random(99))
        assert first.tables == second.tables

    def test_exhausted_search_falls_back_to_dealt_partition(self, monkeypatch):
        monkeypatch.setattr(round_assignment, "_greedy_attempt", lambda *args, **kwargs: None)
        players = roster([4, 4], teamless=8)
        ids = [p.id for p in players]
        sizes = build_round_table_sizes(len(ids))
        policy = TeamSeparationPolicy(players, sizes)

        result = assign_round(ids, sizes, PairingTracker(), policy, rng=random.Random(4), strict=True)

        assert result.used_fallback
        assert_valid_partition(result.tables, ids, sizes)
        assert result.same_team_collisions == 0

    def test_relaxed_collisions_stay_in_largest_team(self):
        players = roster([4, 2, 2])  # ids 1-4 big team, 5-6 and 7-8 pairs
        ids = [p.id for p in players]
        sizes = [4, 4]
        policy = TeamSeparationPolicy(players, sizes)
        assert not policy.strictly_feasible

        result = assign_round(ids, sizes, PairingTracker(), policy, rng=random.Random(5))

        assert_valid_partition(result.tables, ids, sizes)
        for table in result.tables:
            assert not {5, 6} <= set(table)
            assert not {7, 8} <= set(table)
        assert result.same_team_collisions == 2

    def test_rejects_mismatched_sizes(self):
        players = roster([], teamless=8)
        ids = [p.id for p in players]
        policy = TeamSeparationPolicy(players, [4, 4])
        with pytest.raises(ValueError):
            assign_round(ids, [4, 3], PairingTracker(), policy)

    def test_rejects_duplicate_ids(self):
        players = roster([], teamless=4)
        policy = TeamSeparationPolicy(players, [4])
        with pytest.raises(ValueError):
            assign_round([1, 1, 2, 3], [4], PairingTracker(), policy)
