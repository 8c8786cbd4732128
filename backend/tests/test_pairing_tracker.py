from boarddraw.services.pairing_tracker import PairingTracker, pair_key


class TestPairingTracker:
    def test_pair_key_is_unordered(self):
        assert pair_key("a", "b") == pair_key("b", "a")

    def test_increment_counts_every_pair(self):
        tracker = PairingTracker()
        tracker.increment(["a", "b", "c", "d"])
        assert len(tracker) == 6
        assert tracker.count("a", "d") == 1
        assert tracker.count("d", "a") == 1
        assert tracker.count("a", "z") == 0

    def test_cost_sums_pair_counts(self):
        tracker = PairingTracker()
        tracker.increment(["a", "b", "c", "d"])
        tracker.increment(["a", "b", "e", "f"])
        assert tracker.count("a", "b") == 2
        # a-b twice, a-c once, b-c once
        assert tracker.cost(["a", "b", "c"]) == 4
        assert tracker.cost(["e", "c"]) == 0
        assert tracker.max_count() == 2

    def test_added_cost(self):
        tracker = PairingTracker()
        tracker.increment(["a", "b", "c", "d"])
        assert tracker.added_cost("a", ["b", "c", "x"]) == 2

    def test_short_table_seats_only_for_short_tables(self):
        tracker = PairingTracker()
        tracker.increment(["a", "b", "c", "d"])
        tracker.increment(["a", "e", "f"])
        assert tracker.short_table_seats("a") == 1
        assert tracker.short_table_seats("b") == 0

    def test_fresh_tracker_is_empty(self):
        tracker = PairingTracker()
        assert len(tracker) == 0
        assert tracker.max_count() == 0
        assert tracker.cost(["a", "b"]) == 0
