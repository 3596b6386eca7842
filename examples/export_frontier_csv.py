"""Example that exports the Pareto frontier of the sample request to CSV."""

from __future__ import annotations

from promptdial_optimizer import OptimizationRequest, ParetoOptimizer, find_pareto_frontier
from promptdial_optimizer.examples import sample_request
from promptdial_optimizer.exporters import csv_exporter


def main() -> None:
    request = OptimizationRequest.from_mapping(sample_request())
    solutions = ParetoOptimizer().feasible_solutions(request)
    frontier = find_pareto_frontier(solutions)
    print(csv_exporter({"pareto_frontier": frontier}))


if __name__ == "__main__":
    main()
