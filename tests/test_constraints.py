from __future__ import annotations

import pytest

from promptdial_optimizer.configuration import OptimizerSettings
from promptdial_optimizer.models import Constraints
from promptdial_optimizer.optimizer.constraints import (
    apply_constraints,
    normalize_constraints,
    satisfies,
)
from tests.helpers import make_solution


@pytest.fixture()
def solutions() -> list:
    return [
        make_solution("v1", 0.9, 0.8, 0.2),
        make_solution("v2", 0.8, 0.3, 0.5),
        make_solution("v3", 0.7, 0.2, 0.3),
    ]


def test_normalize_constraints_divides_by_the_caps() -> None:
    bounds = normalize_constraints(
        Constraints(min_quality=0.8, max_cost=0.01, max_latency=1500),
        OptimizerSettings(),
    )

    assert bounds.min_quality == 0.8
    assert bounds.max_cost == pytest.approx(0.05)
    assert bounds.max_latency == pytest.approx(0.25)


def test_normalize_constraints_keeps_absent_fields_absent() -> None:
    bounds = normalize_constraints(Constraints(max_cost=0.1), OptimizerSettings())

    assert bounds.min_quality is None
    assert bounds.max_latency is None
    assert bounds.max_cost == pytest.approx(0.5)


@pytest.mark.parametrize(
    ("constraints", "expected"),
    [
        (Constraints(), ["v1", "v2", "v3"]),
        (Constraints(min_quality=0.75), ["v1", "v2"]),
        (Constraints(max_cost=0.5), ["v2", "v3"]),
        (Constraints(max_latency=0.4), ["v1", "v3"]),
        (Constraints(min_quality=0.75, max_cost=0.5), ["v2"]),
        (Constraints(min_quality=0.75, max_cost=0.5, max_latency=0.4), []),
    ],
)
def test_apply_constraints(solutions: list, constraints: Constraints, expected: list) -> None:
    kept = apply_constraints(solutions, constraints)

    assert [solution.variant_id for solution in kept] == expected


def test_bounds_are_inclusive(solutions: list) -> None:
    v2 = solutions[1]

    assert satisfies(v2, Constraints(min_quality=0.8, max_cost=0.3, max_latency=0.5))
    assert not satisfies(v2, Constraints(min_quality=0.81))
