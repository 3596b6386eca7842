"""Request/response envelope around :func:`optimize` for hosting services."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from .configuration import OptimizerSettings
from .errors import InvalidRequest, OptimizerError, log_error
from .optimizer.orchestrator import ParetoOptimizer

__all__ = ["SERVICE_NAME", "ServiceError", "ServiceResponse", "handle_optimize_request"]

SERVICE_NAME = "optimizer"

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ServiceError:
    code: str
    message: str
    details: Mapping[str, Any] = field(default_factory=dict)
    retryable: bool = False

    def as_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": dict(self.details),
            "retryable": self.retryable,
        }


@dataclass(frozen=True, slots=True)
class ServiceResponse:
    trace_id: str
    timestamp: datetime
    service: str
    success: bool
    data: Optional[Mapping[str, Any]] = None
    error: Optional[ServiceError] = None

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "trace_id": self.trace_id,
            "timestamp": self.timestamp.isoformat(),
            "service": self.service,
            "success": self.success,
        }
        if self.data is not None:
            payload["data"] = dict(self.data)
        if self.error is not None:
            payload["error"] = self.error.as_dict()
        return payload


def _trace_id(envelope: Mapping[str, Any]) -> str:
    candidate = envelope.get("trace_id")
    if isinstance(candidate, str) and candidate.strip():
        return candidate
    return uuid.uuid4().hex


def handle_optimize_request(
    envelope: Mapping[str, Any],
    settings: Optional[OptimizerSettings] = None,
) -> ServiceResponse:
    """Run the optimiser on ``envelope['payload']`` and wrap the outcome.

    Optimiser errors become a failed response carrying the error code; any
    other exception is a defect and propagates to the caller.
    """

    trace_id = _trace_id(envelope)
    timestamp = datetime.now(timezone.utc)
    try:
        payload = envelope.get("payload")
        if payload is None:
            raise InvalidRequest("Request envelope has no 'payload'.", context={"trace_id": trace_id})
        result = ParetoOptimizer(settings).optimize(payload)
    except OptimizerError as exc:
        log_error(exc.payload, logger=logger)
        return ServiceResponse(
            trace_id=trace_id,
            timestamp=timestamp,
            service=SERVICE_NAME,
            success=False,
            error=ServiceError(
                code=exc.code,
                message=str(exc),
                details=exc.context,
                retryable=exc.retryable,
            ),
        )
    return ServiceResponse(
        trace_id=trace_id,
        timestamp=timestamp,
        service=SERVICE_NAME,
        success=True,
        data=result.as_dict(),
    )
