from __future__ import annotations

import pytest

from routeplanner.domain.matching import distance, score, token_overlap, tokens

WORDS = ["", "a", "rostock", "rostokc", "Berlin", "berlin_depot", "kitten", "sitting", "FCP"]


def test_identical_strings_score_one_case_insensitively() -> None:
    assert score("Rostock", "rostock") == 1.0
    assert score("", "") == 1.0


@pytest.mark.parametrize(("left", "right"), [("", "berlin"), ("berlin", "   "), (None, "x")])
def test_blank_side_scores_zero(left: str | None, right: str) -> None:
    assert score(left, right) == 0.0


def test_distance_examples() -> None:
    assert distance("kitten", "sitting") == 3
    assert distance("Rostock", "rostock") == 0
    assert distance("", "abc") == 3
    assert distance("bigmrkt", "bigmarket") == 2


def test_single_typo_in_long_name_scores_above_city_threshold() -> None:
    assert score("Frankfurt am Mai", "Frankfurt am Main") >= 0.92


def test_transposition_in_short_name_scores_below_city_threshold() -> None:
    result = score("Rostokc", "Rostock")

    assert result == pytest.approx(1 - 2 / 7)
    assert result < 0.92


def test_token_overlap_uses_camel_case_and_separators() -> None:
    assert tokens("StahlWerk_rostock-North") == frozenset({"stahl", "werk", "rostock", "north"})
    assert token_overlap("stahl_werk", "StahlWerk") == 1.0
    assert token_overlap("a_b", "b_c") == pytest.approx(1 / 3)
    assert token_overlap("", "abc") == 0.0
    assert token_overlap("---", "abc") == 0.0


def test_score_takes_the_better_of_ratio_and_overlap() -> None:
    left, right = "north_steel_works", "works_north_steel"

    assert distance(left, right) > 0
    assert score(left, right) == 1.0


@pytest.mark.parametrize("left", WORDS)
@pytest.mark.parametrize("right", WORDS)
def test_score_is_bounded_and_symmetric(left: str, right: str) -> None:
    assert 0.0 <= score(left, right) <= 1.0
    assert score(left, right) == score(right, left)
    assert distance(left, right) == distance(right, left)


@pytest.mark.parametrize("left", WORDS)
@pytest.mark.parametrize("middle", ["", "rostock", "kitten"])
@pytest.mark.parametrize("right", WORDS)
def test_distance_triangle_inequality(left: str, middle: str, right: str) -> None:
    assert distance(left, right) <= distance(left, middle) + distance(middle, right)


def test_transposition_costs_two_edits() -> None:
    assert distance("ab", "ba") == 2
    assert distance("rostock", "rostokc") == 2
    assert score("rostock", "rostokc") == pytest.approx(1 - 2 / 7)
