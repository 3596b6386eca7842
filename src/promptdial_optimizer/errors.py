"""Error types raised by the Pareto optimisation engine.

Every error is terminal: it describes malformed input or an unsatisfiable
request, never a transient failure, so none of them is retryable. Each error
carries a structured :class:`ErrorPayload` that service and command line
layers translate into their own status codes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, MutableMapping, Optional

__all__ = [
    "ErrorPayload",
    "InvalidPreferenceWeights",
    "InvalidRequest",
    "MissingPreferences",
    "NoFeasibleSolutions",
    "OptimizerError",
    "build_error_payload",
    "log_error",
]


_CATEGORY_STATUS_CODES: Mapping[str, int] = {
    "runtime": 1,
    "usage": 2,
    "io": 3,
    "not_found": 4,
    "infeasible": 5,
}

_DEFAULT_CATEGORY = "runtime"
_DEFAULT_CODE = "INTERNAL_ERROR"
_DEFAULT_LOGGER_NAME = "promptdial_optimizer"


@dataclass(frozen=True, slots=True)
class ErrorPayload:
    """Structured representation of an optimiser failure."""

    code: str
    status_code: int
    category: str
    message: str
    context: Mapping[str, Any]
    retryable: bool = False

    def as_dict(self) -> Mapping[str, Any]:
        return {
            "code": self.code,
            "status_code": self.status_code,
            "category": self.category,
            "message": self.message,
            "context": dict(self.context),
            "retryable": self.retryable,
        }


def _normalise_context(context: Optional[Mapping[str, Any]]) -> Mapping[str, Any]:
    if not context:
        return {}
    payload: MutableMapping[str, Any] = {}
    for key, value in context.items():
        if isinstance(value, (str, int, float, bool)) or value is None:
            payload[key] = value
        else:
            payload[key] = str(value)
    return dict(payload)


def build_error_payload(
    message: str,
    *,
    code: str = _DEFAULT_CODE,
    category: str = _DEFAULT_CATEGORY,
    status_code: Optional[int] = None,
    context: Optional[Mapping[str, Any]] = None,
) -> ErrorPayload:
    """Create an :class:`ErrorPayload` describing an optimiser failure."""

    resolved_category = category or _DEFAULT_CATEGORY
    resolved_status = (
        status_code
        if status_code is not None
        else _CATEGORY_STATUS_CODES.get(
            resolved_category, _CATEGORY_STATUS_CODES[_DEFAULT_CATEGORY]
        )
    )
    return ErrorPayload(
        code=code or _DEFAULT_CODE,
        status_code=resolved_status,
        category=resolved_category,
        message=message,
        context=_normalise_context(context),
    )


def log_error(
    payload: ErrorPayload,
    *,
    logger: Optional[logging.Logger] = None,
    exc_info: Optional[BaseException] = None,
) -> None:
    """Emit ``payload`` using ``logger.error`` with structured context."""

    target = logger or logging.getLogger(_DEFAULT_LOGGER_NAME)
    target.error(
        payload.message,
        extra={
            "event": "optimizer.error",
            "code": payload.code,
            "category": payload.category,
            "status_code": payload.status_code,
            "context": dict(payload.context),
        },
        exc_info=exc_info,
    )


class OptimizerError(RuntimeError):
    """Base class for every failure surfaced by :func:`optimize`."""

    code = _DEFAULT_CODE
    category = _DEFAULT_CATEGORY
    retryable = False

    def __init__(
        self,
        message: str,
        *,
        context: Optional[Mapping[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self._payload = build_error_payload(
            message,
            code=self.code,
            category=self.category,
            context=context,
        )
        self.status_code = self._payload.status_code
        self.context = dict(self._payload.context)

    @property
    def payload(self) -> ErrorPayload:
        return self._payload


class NoFeasibleSolutions(OptimizerError):
    """Raised when constraints eliminate every candidate."""

    code = "NO_FEASIBLE_SOLUTIONS"
    category = "infeasible"


class MissingPreferences(OptimizerError):
    """Raised when utility selection is requested without preferences."""

    code = "MISSING_PREFERENCES"
    category = "usage"


class InvalidPreferenceWeights(OptimizerError):
    """Raised when preference weights cannot be normalised."""

    code = "INVALID_PREFERENCE_WEIGHTS"
    category = "usage"


class InvalidRequest(OptimizerError):
    """Raised when a request or configuration document is malformed."""

    code = "INVALID_PARAMETERS"
    category = "usage"
