"""Error helpers for the optimiser command line."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from ..errors import ErrorPayload, OptimizerError, build_error_payload, log_error

__all__ = [
    "CliError",
    "ErrorPayload",
    "build_error_payload",
    "log_cli_error",
]

_DEFAULT_CATEGORY = "runtime"
_DEFAULT_CODE = "CLI_ERROR"
_DEFAULT_LOGGER_NAME = "promptdial_optimizer.cli"


def log_cli_error(
    payload: ErrorPayload,
    *,
    logger: Optional[logging.Logger] = None,
    exc_info: Optional[BaseException] = None,
) -> None:
    """Emit ``payload`` on the command line logger."""

    log_error(
        payload,
        logger=logger or logging.getLogger(_DEFAULT_LOGGER_NAME),
        exc_info=exc_info,
    )


class CliError(RuntimeError):
    """Consistent error type raised by command handlers."""

    __slots__ = ("category", "status_code", "context", "_payload", "logged")

    def __init__(
        self,
        message: str,
        *,
        category: str = _DEFAULT_CATEGORY,
        code: str = _DEFAULT_CODE,
        status_code: Optional[int] = None,
        context: Optional[Mapping[str, Any]] = None,
        payload: Optional[ErrorPayload] = None,
        logged: bool = False,
    ) -> None:
        super().__init__(message)
        self.category = category or _DEFAULT_CATEGORY
        resolved_payload = payload or build_error_payload(
            message,
            code=code,
            category=self.category,
            status_code=status_code,
            context=context,
        )
        self.status_code = resolved_payload.status_code
        self.context = dict(resolved_payload.context)
        self._payload = resolved_payload
        self.logged = logged

    @property
    def payload(self) -> ErrorPayload:
        return self._payload

    @classmethod
    def from_optimizer_error(cls, error: OptimizerError) -> "CliError":
        """Translate an engine error keeping its category and exit status."""

        return cls(
            str(error),
            category=error.category,
            payload=error.payload,
        )
