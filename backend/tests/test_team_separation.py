from boarddraw.services.draw_plan_engine import Competitor
from boarddraw.services.draw_rules import (
    PROTECTED_PAIR_PENALTY,
    SAME_TEAM_PAIR_PENALTY,
    SEPARABLE_PAIR_PENALTY,
)
from boarddraw.services.team_separation import TeamSeparationPolicy


def make_roster(team_sizes, teamless=0):
    roster = []
    for t, size in enumerate(team_sizes):
        for i in range(size):
            roster.append(Competitor(id=f"t{t}-{i}", team_name=f"Team {chr(65 + t)}", category_id=1))
    for i in range(teamless):
        roster.append(Competitor(id=f"solo-{i}", team_name=None, category_id=1))
    return roster


class TestTeamSeparationPolicy:
    def setup_method(self):
        # teams of 2, 3 and 6 over four tables
        self.policy = TeamSeparationPolicy(make_roster([2, 3, 6], teamless=5), [4, 4, 4, 4])

    def test_teams_grouped_by_key(self):
        assert len(self.policy.teams) == 3
        assert self.policy.team_size("t2-0") == 6
        assert self.policy.team_size("solo-0") == 0
        assert self.policy.team_of("solo-0") == ""

    def test_pair_of_two_is_protected(self):
        assert self.policy.penalty(["t0-0", "t0-1"]) == PROTECTED_PAIR_PENALTY

    def test_separable_team_weight(self):
        assert self.policy.penalty(["t1-0", "t1-2"]) == SEPARABLE_PAIR_PENALTY

    def test_oversized_team_is_cheapest_collision(self):
        assert self.policy.penalty(["t2-0", "t2-1", "t2-2"]) == 3 * SAME_TEAM_PAIR_PENALTY
        assert SAME_TEAM_PAIR_PENALTY < SEPARABLE_PAIR_PENALTY < PROTECTED_PAIR_PENALTY

    def test_clean_table_has_no_penalty(self):
        assert self.policy.penalty(["t0-0", "t1-0", "t2-0", "solo-0"]) == 0
        assert self.policy.penalty(["solo-0", "solo-1"]) == 0

    def test_added_penalty_and_collides(self):
        assert self.policy.added_penalty("t0-1", ["t0-0", "solo-1"]) == PROTECTED_PAIR_PENALTY
        assert self.policy.collides("t1-0", ["t1-1"])
        assert not self.policy.collides("solo-0", ["solo-1"])

    def test_collision_count(self):
        tables = [["t2-0", "t2-1", "t2-2", "t0-0"], ["t0-1", "t1-0", "solo-0", "solo-1"]]
        assert self.policy.collision_count(tables) == 3

    def test_not_strictly_feasible_with_team_larger_than_table_count(self):
        assert self.policy.largest_team_size == 6
        assert not self.policy.strictly_feasible


class TestStrictFeasibility:
    def test_team_as_large_as_table_count(self):
        policy = TeamSeparationPolicy(make_roster([4, 4], teamless=8), [4, 4, 4, 4])
        assert policy.strictly_feasible

    def test_single_team_everywhere(self):
        policy = TeamSeparationPolicy(make_roster([8]), [4, 4])
        assert not policy.strictly_feasible

    def test_no_teams(self):
        policy = TeamSeparationPolicy(make_roster([], teamless=6), [3, 3])
        assert policy.largest_team_size == 0
        assert policy.strictly_feasible
