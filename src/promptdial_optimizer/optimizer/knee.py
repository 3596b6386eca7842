"""Knee point selection: the best unweighted compromise on the frontier.

Each objective is min-max normalised across the frontier so that every axis
spans ``[0, 1]``; the knee point is the member closest to the ideal
``(quality=1, cost=0, latency=0)``. Because the scaling is per axis, the
result generally differs from utility selection with equal weights.
"""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from ..models import Solution

__all__ = ["distances_to_ideal", "find_knee_point", "normalize_frontier"]

logger = logging.getLogger(__name__)

_IDEAL_POINT = np.array([1.0, 0.0, 0.0])


def _objective_matrix(frontier: Sequence[Solution]) -> np.ndarray:
    return np.array(
        [
            (entry.objectives.quality, entry.objectives.cost, entry.objectives.latency)
            for entry in frontier
        ],
        dtype=float,
    ).reshape(-1, 3)


def _scale(matrix: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Return the min-max scaled ``matrix`` and the mask of varying axes."""

    if matrix.shape[0] == 0:
        return matrix, np.zeros(3, dtype=bool)
    lower = matrix.min(axis=0)
    spread = matrix.max(axis=0) - lower
    varying = spread > 0
    scaled = np.zeros_like(matrix)
    scaled[:, varying] = (matrix[:, varying] - lower[varying]) / spread[varying]
    return scaled, varying


def normalize_frontier(frontier: Sequence[Solution]) -> np.ndarray:
    """Return an ``(n, 3)`` array of per-axis min-max normalised objectives.

    Columns hold quality, cost and latency. An axis that is constant across
    ``frontier`` is mapped to ``0``.
    """

    scaled, _ = _scale(_objective_matrix(frontier))
    return scaled


def distances_to_ideal(frontier: Sequence[Solution]) -> np.ndarray:
    """Return the Euclidean distance of each member to the ideal point.

    Constant axes contribute nothing to the distance.
    """

    scaled, varying = _scale(_objective_matrix(frontier))
    deviation = scaled - _IDEAL_POINT
    deviation[:, ~varying] = 0.0
    return np.sqrt((deviation**2).sum(axis=1))


def find_knee_point(frontier: Sequence[Solution]) -> Solution:
    """Return the member of ``frontier`` closest to the ideal point.

    Ties resolve to the first occurrence.
    """

    if not frontier:
        raise ValueError("Cannot locate a knee point on an empty frontier.")
    if len(frontier) == 1:
        return frontier[0]

    distances = distances_to_ideal(frontier)
    # ``argmin`` returns the first index among equal minima.
    index = int(np.argmin(distances))
    best = frontier[index]
    distance = float(distances[index])
    logger.info(
        "Knee point: %s with distance %.3f",
        best.variant_id,
        distance,
        extra={"variant_id": best.variant_id, "distance": distance},
    )
    return best
