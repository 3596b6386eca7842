"""Top-level package for the PromptDial optimiser.

The package turns prompt variants that have already been scored for
quality, cost and latency into a Pareto frontier, a single recommendation
and trade-off narratives between that recommendation and its alternatives.
"""

from ._version import __version__
from .configuration import OptimizerSettings, load_project_config
from .errors import (
    InvalidPreferenceWeights,
    InvalidRequest,
    MissingPreferences,
    NoFeasibleSolutions,
    OptimizerError,
)
from .models import (
    Constraints,
    EvaluationDescriptor,
    ObjectiveVector,
    OptimizationRequest,
    OptimizationResult,
    Preferences,
    SelectionMode,
    Solution,
    TradeOff,
    VariantDescriptor,
)
from .optimizer import (
    ParetoOptimizer,
    analyze_trade_offs,
    calculate_utility,
    dominates,
    find_knee_point,
    find_pareto_frontier,
    optimize,
    select_by_preference,
)

__all__ = [
    "Constraints",
    "EvaluationDescriptor",
    "InvalidPreferenceWeights",
    "InvalidRequest",
    "MissingPreferences",
    "NoFeasibleSolutions",
    "ObjectiveVector",
    "OptimizationRequest",
    "OptimizationResult",
    "OptimizerError",
    "OptimizerSettings",
    "ParetoOptimizer",
    "Preferences",
    "SelectionMode",
    "Solution",
    "TradeOff",
    "VariantDescriptor",
    "analyze_trade_offs",
    "calculate_utility",
    "dominates",
    "find_knee_point",
    "find_pareto_frontier",
    "load_project_config",
    "optimize",
    "select_by_preference",
    "__version__",
]
