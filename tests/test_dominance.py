from __future__ import annotations

import itertools
import random

import pytest

from promptdial_optimizer.optimizer.dominance import (
    dominated_by,
    dominates,
    find_pareto_frontier,
)
from tests.helpers import DOMINATED_EXCLUSION_CASE, make_solution


def _grid_solutions() -> list:
    values = (0.2, 0.5, 0.8)
    return [
        make_solution(f"g{index}", quality, cost, latency)
        for index, (quality, cost, latency) in enumerate(itertools.product(values, repeat=3))
    ]


def _random_solutions(seed: int, count: int) -> list:
    rng = random.Random(seed)
    return [
        make_solution(
            f"r{index}",
            round(rng.random(), 2),
            round(rng.random(), 2),
            round(rng.random(), 2),
        )
        for index in range(count)
    ]


def test_dominates_when_better_on_every_axis() -> None:
    better = make_solution("v1", 0.8, 0.3, 0.4)
    worse = make_solution("v2", 0.7, 0.4, 0.5)

    assert dominates(better, worse)
    assert not dominates(worse, better)


def test_mutually_non_dominating_solutions() -> None:
    accurate = make_solution("v1", 0.9, 0.5, 0.3)
    cheap = make_solution("v2", 0.8, 0.3, 0.3)

    assert not dominates(accurate, cheap)
    assert not dominates(cheap, accurate)


def test_equal_on_two_axes_and_better_on_one_dominates() -> None:
    faster = make_solution("fast", 0.8, 0.3, 0.1)
    slower = make_solution("slow", 0.8, 0.3, 0.2)

    assert dominates(faster, slower)


def test_dominance_is_irreflexive_and_asymmetric() -> None:
    solutions = _grid_solutions()

    for candidate in solutions:
        assert not dominates(candidate, candidate)
    for left, right in itertools.permutations(solutions, 2):
        assert not (dominates(left, right) and dominates(right, left))


def test_identical_objectives_do_not_dominate() -> None:
    first = make_solution("a", 0.7, 0.2, 0.2)
    twin = make_solution("b", 0.7, 0.2, 0.2)

    assert not dominates(first, twin)
    assert find_pareto_frontier([first, twin]) == [first, twin]


def test_frontier_excludes_exactly_the_dominated_variant() -> None:
    solutions = [make_solution(*case) for case in DOMINATED_EXCLUSION_CASE]

    frontier = find_pareto_frontier(solutions)
    labels = [entry.variant_id for entry in frontier]

    assert labels == ["v5", "v1", "v2", "v3"]
    assert "v4" not in labels


def test_dominated_by_lists_every_dominating_variant() -> None:
    solutions = [make_solution(*case) for case in DOMINATED_EXCLUSION_CASE]
    v4 = solutions[3]

    assert dominated_by(v4, solutions) == ["v2", "v3"]
    assert dominated_by(solutions[0], solutions) == []


def test_frontier_of_empty_input_is_empty() -> None:
    assert find_pareto_frontier([]) == []


def test_frontier_of_singleton_returns_that_solution() -> None:
    solution = make_solution("only", 0.8, 0.3, 0.4)

    frontier = find_pareto_frontier([solution])

    assert len(frontier) == 1
    assert frontier[0] is solution


def test_frontier_keeps_input_order_for_quality_ties() -> None:
    cheap = make_solution("cheap", 0.8, 0.2, 0.5)
    fast = make_solution("fast", 0.8, 0.5, 0.2)

    assert [entry.variant_id for entry in find_pareto_frontier([cheap, fast])] == [
        "cheap",
        "fast",
    ]
    assert [entry.variant_id for entry in find_pareto_frontier([fast, cheap])] == [
        "fast",
        "cheap",
    ]


@pytest.mark.parametrize("seed", [3, 7, 11, 19])
def test_frontier_members_are_never_dominated(seed: int) -> None:
    solutions = _random_solutions(seed, 25)

    frontier = find_pareto_frontier(solutions)
    members = {entry.variant_id for entry in frontier}

    assert frontier
    for member in frontier:
        assert not any(dominates(other, member) for other in solutions)
    for candidate in solutions:
        if candidate.variant_id not in members:
            assert dominated_by(candidate, solutions)
    qualities = [entry.objectives.quality for entry in frontier]
    assert qualities == sorted(qualities, reverse=True)


def test_frontier_does_not_mutate_input() -> None:
    solutions = [make_solution(*case) for case in DOMINATED_EXCLUSION_CASE]
    snapshot = list(solutions)

    find_pareto_frontier(solutions)

    assert solutions == snapshot
