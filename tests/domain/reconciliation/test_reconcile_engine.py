from __future__ import annotations

import random

from routeplanner.domain.model import Company
from routeplanner.domain.reconciliation import MergePolicy, rank_candidates, reconcile


def _mapped(*keys: str) -> list[Company]:
    return [Company(key=key) for key in keys]


def _unmapped(*keys: str) -> list[Company]:
    return [Company(key=key, is_unmapped=True) for key in keys]


def test_misspelled_map_company_merges_into_definition_company() -> None:
    [target] = _mapped("big_market")
    [source] = _unmapped("big_mrkt_depot")

    [decision] = reconcile([target], [source])

    assert decision.source_id == source.id
    assert decision.target_id == target.id
    assert decision.distance == 2
    assert decision.score < MergePolicy().min_score


def test_close_score_is_accepted() -> None:
    [target] = _mapped("stahlwerk_rostock")
    [source] = _unmapped("stahlwerk_rostok")

    [decision] = reconcile([target], [source])

    assert decision.target_key == "stahlwerk_rostock"
    assert decision.score >= 0.9


def test_best_candidate_wins() -> None:
    targets = _mapped("baumarkt_berlin", "bau_mart")
    [source] = _unmapped("bau_markt")

    [decision] = reconcile(targets, [source])

    assert decision.target_key == "bau_mart"


def test_unrelated_company_is_left_alone() -> None:
    assert reconcile(_mapped("big_market"), _unmapped("quarry_king")) == []


def test_empty_inputs_produce_no_plan() -> None:
    assert reconcile([], _unmapped("big_mrkt")) == []
    assert reconcile(_mapped("big_market"), []) == []


def test_source_with_empty_simplified_key_is_skipped() -> None:
    assert reconcile(_mapped("depot_king"), _unmapped("depot")) == []


def test_company_is_never_merged_into_itself() -> None:
    company = Company(key="big_market", is_unmapped=True)

    assert reconcile([company], [company]) == []


def test_plan_does_not_depend_on_input_order() -> None:
    targets = _mapped("big_market", "bau_mart", "stahlwerk", "kieswerk_nord")
    sources = _unmapped("big_mrkt", "bau_markt", "stahl_werk_depot", "kieswerk_north", "xyz")
    expected = reconcile(targets, sources)

    shuffler = random.Random(7)
    for _ in range(5):
        shuffled_targets = targets[:]
        shuffled_sources = sources[:]
        shuffler.shuffle(shuffled_targets)
        shuffler.shuffle(shuffled_sources)
        assert reconcile(shuffled_targets, shuffled_sources) == expected

    assert [decision.source_key for decision in expected] == sorted(
        decision.source_key for decision in expected
    )


def test_strict_policy_rejects_distance_only_match() -> None:
    strict = MergePolicy(
        min_score=1.0, min_distance_budget=0, distance_fraction=0.0, min_overlap=1.1
    )

    assert reconcile(_mapped("big_market"), _unmapped("big_mrkt_depot"), policy=strict) == []


def test_distance_budget_grows_with_key_length() -> None:
    policy = MergePolicy()

    assert policy.distance_budget("abc", "ab") == 2
    assert policy.distance_budget("a" * 30, "b") == 5


def test_rank_candidates_orders_by_score_then_distance() -> None:
    targets = _mapped("kieswerk", "bau_mart", "bau_markt_ost")

    ranked = rank_candidates("bau_markt", targets)

    assert [candidate.company.key for candidate in ranked][0] == "bau_mart"
    scores = [candidate.score for candidate in ranked]
    assert scores == sorted(scores, reverse=True)
