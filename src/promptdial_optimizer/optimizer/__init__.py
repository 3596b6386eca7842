"""Multi-objective optimisation engine for scored prompt variants."""

from .constraints import apply_constraints, normalize_constraints
from .dominance import dominated_by, dominates, find_pareto_frontier
from .knee import distances_to_ideal, find_knee_point, normalize_frontier
from .normalizer import NEUTRAL_LATENCY, build_solutions, compute_objectives
from .orchestrator import ParetoOptimizer, optimize
from .preference import calculate_utility, select_by_preference
from .tradeoffs import MATERIALITY_THRESHOLD, analyze_trade_offs

__all__ = [
    "MATERIALITY_THRESHOLD",
    "NEUTRAL_LATENCY",
    "ParetoOptimizer",
    "analyze_trade_offs",
    "apply_constraints",
    "build_solutions",
    "calculate_utility",
    "compute_objectives",
    "distances_to_ideal",
    "dominated_by",
    "dominates",
    "find_knee_point",
    "find_pareto_frontier",
    "normalize_constraints",
    "normalize_frontier",
    "optimize",
    "select_by_preference",
]
