"""Tests for WSJF rank calculation."""

import math

from sizewise.core.items import BacklogItem, ItemKind, wsjf_density
from sizewise.core.ranking import calculate_wsjf_ranks


def make(id, job_size, cod, kind=ItemKind.NORMAL, title=None):
    return BacklogItem(id=id, title=title or f"Item {id}", kind=kind, job_size=job_size, cod=cod)


class TestWsjfDensity:
    def test_divides(self):
        assert wsjf_density(10, 4) == 2.5

    def test_zero_when_missing(self):
        assert wsjf_density(None, 4) == 0
        assert wsjf_density(10, None) == 0
        assert wsjf_density(10, 0) == 0


class TestCalculateWsjfRanks:
    def test_highest_density_gets_rank_one(self):
        items = [make("a", 4, 8), make("b", 2, 10), make("c", 1, 3)]
        assert calculate_wsjf_ranks(items) == {"b": 1, "c": 2, "a": 3}

    def test_empty_input(self):
        assert calculate_wsjf_ranks([]) == {}

    def test_excludes_undefined_or_non_positive(self):
        items = [
            make(1, None, 5),
            make(2, 3, None),
            make(3, 0, 5),
            make(4, 3, 0),
            make(5, -2, 5),
            make(6, math.inf, 5),
            make(7, 2, 4),
        ]
        assert calculate_wsjf_ranks(items) == {7: 1}

    def test_excludes_sentinel(self):
        items = [make(-1, 1, 100, kind=ItemKind.SENTINEL), make(1, 2, 2)]
        assert calculate_wsjf_ranks(items) == {1: 1}

    def test_references_are_ranked(self):
        items = [make(1, 2, 2, kind=ItemKind.REFERENCE_MIN), make(2, 1, 5)]
        assert calculate_wsjf_ranks(items) == {2: 1, 1: 2}

    def test_ties_keep_input_order(self):
        items = [make("x", 2, 4), make("y", 1, 2), make("z", 4, 8)]
        assert calculate_wsjf_ranks(items) == {"x": 1, "y": 2, "z": 3}

    def test_ranks_are_consecutive(self):
        items = [make(i, i, 10) for i in range(1, 6)]
        assert sorted(calculate_wsjf_ranks(items).values()) == [1, 2, 3, 4, 5]
