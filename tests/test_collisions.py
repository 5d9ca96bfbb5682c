"""Tests for collision detection between sibling windows."""
import pytest

from django_activewindow.collisions import collides, detect_collisions
from django_activewindow.windows import ActiveWindow
from tests.helpers import day


def window(start, finish=None):
    return ActiveWindow.build(start=start, finish=finish)


class TestCollides:
    """Test suite for the pairwise test."""

    def test_overlapping(self):
        assert collides(window(day(1), day(10)), window(day(5), day(12)))

    def test_touching_is_not_overlapping(self):
        """[day10, day12) after [day1, day10) shares no instant."""
        assert not collides(window(day(10), day(12)), window(day(1), day(10)))
        assert not collides(window(day(1), day(10)), window(day(10), day(12)))

    def test_contained(self):
        assert collides(window(day(1), day(10)), window(day(3), day(4)))

    def test_open_ended_sibling(self):
        assert collides(window(day(1), day(10)), window(day(6)))

    def test_open_ended_candidate(self):
        assert collides(window(day(6)), window(day(1), day(10)))
        assert not collides(window(day(10)), window(day(1), day(10)))

    def test_both_open_ended(self):
        assert collides(window(day(6)), window(day(60)))

    def test_empty_sibling_counts_by_default(self):
        assert collides(window(day(1), day(10)), window(day(5), day(5)))

    def test_empty_sibling_ignored(self):
        assert not collides(window(day(1), day(10)), window(day(5), day(5)), ignore_empty=True)

    @pytest.mark.parametrize("query_start,query_end", [
        (day(1), day(10)),
        (day(9), day(12)),
        (day(10), day(12)),
        (day(0), day(1)),
        (day(3), None),
    ])
    def test_agrees_with_overlaps(self, query_start, query_end):
        """The pairwise test is overlaps() seen from the other side."""
        sibling = window(day(1), day(10))
        candidate = window(query_start, query_end)

        assert collides(candidate, sibling) == sibling.overlaps(query_start, query_end)


class TestDetectCollisions:
    """Test suite for detect_collisions()."""

    def test_returns_conflicting_ids_in_order(self):
        siblings = [
            (3, window(day(5), day(12))),
            (1, window(day(20), day(30))),
            (2, window(day(6))),
        ]

        assert detect_collisions(window(day(1), day(10)), siblings) == [3, 2]

    def test_no_siblings(self):
        assert detect_collisions(window(day(1), day(10)), []) == []

    def test_excludes_self_even_when_identical(self):
        """A record's own stored state never conflicts with it."""
        candidate = window(day(1), day(10))
        siblings = [(7, window(day(1), day(10)))]

        assert detect_collisions(candidate, siblings, self_id=7) == []
        assert detect_collisions(candidate, siblings) == [7]

    def test_empty_sibling_policy(self):
        candidate = window(day(1), day(10))
        siblings = [(1, window(day(5), day(5)))]

        assert detect_collisions(candidate, siblings, ignore_empty=False) == [1]
        assert detect_collisions(candidate, siblings, ignore_empty=True) == []

    def test_open_ended_sibling_regardless_of_policy(self):
        candidate = window(day(1), day(10))
        siblings = [(1, window(day(6)))]

        assert detect_collisions(candidate, siblings, ignore_empty=False) == [1]
        assert detect_collisions(candidate, siblings, ignore_empty=True) == [1]

    def test_empty_candidate_ignored(self):
        """An ignored empty candidate occupies no instant, so nothing collides."""
        candidate = window(day(5), day(5))
        siblings = [(1, window(day(1), day(10)))]

        assert detect_collisions(candidate, siblings, ignore_empty=False) == [1]
        assert detect_collisions(candidate, siblings, ignore_empty=True) == []
