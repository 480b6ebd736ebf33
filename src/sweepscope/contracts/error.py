"""Error taxonomy, exit codes and the JSON error envelope for SweepScope.

Each :class:`EnvelopeError` subclass names the envelope ``kind`` and the exit
code it maps to, so the CLI guard and the explorer panes report a failure the
same way without a lookup table.
"""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum
from functools import wraps
from typing import Any, ClassVar, NoReturn, TypeVar

logger = logging.getLogger(__name__)
T = TypeVar("T")


class Exit(IntEnum):
    """Stable exit codes shared across the CLI."""

    OK = 0
    INTERNAL = 1
    BAD_INPUT = 2
    EMPTY_INPUT = 3
    INVALID_ARGUMENT = 4
    IO = 5


@dataclass(slots=True)
class ErrorEnvelope:
    """Machine-readable error contract for CLI failures."""

    error: str
    detail: str
    hint: str | None = None

    def to_json(self) -> str:
        payload = {"error": self.error, "detail": self.detail}
        if self.hint:
            payload["hint"] = self.hint
        return json.dumps(payload, ensure_ascii=False)


def die(code: Exit, kind: str, detail: str, hint: str | None = None) -> NoReturn:
    """Write the envelope to stderr and exit with ``code``."""

    sys.stderr.write(ErrorEnvelope(error=kind, detail=detail, hint=hint).to_json() + "\n")
    try:
        sys.stderr.flush()
    finally:
        sys.exit(int(code))


class EnvelopeError(Exception):
    """Base for every failure the CLI reports as an envelope.

    The base class itself is never raised on purpose; if it is, the failure
    is reported as an internal error.
    """

    kind: ClassVar[str] = "Internal"
    exit_code: ClassVar[Exit] = Exit.INTERNAL

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class DataShapeError(EnvelopeError):
    """A document is missing fields, has mismatched parallel arrays or is not JSON."""

    kind = "DataShape"
    exit_code = Exit.BAD_INPUT


class EmptyInputError(EnvelopeError):
    """A statistic or view was requested over zero records."""

    kind = "EmptyInput"
    exit_code = Exit.EMPTY_INPUT


class InvalidArgumentError(EnvelopeError):
    """Caller mistakes: bad tick interval, unknown filter, bad config."""

    kind = "InvalidArgument"
    exit_code = Exit.INVALID_ARGUMENT


class IOErrorEnvelope(EnvelopeError):  # noqa: N818 - mirrors the envelope naming
    """A document exists but cannot be read (directory, permissions, device errors)."""

    kind = "IO"
    exit_code = Exit.IO


def error_kind(exc: BaseException) -> str:
    """Envelope label for ``exc``; used by the explorer panes for error text."""

    if isinstance(exc, EnvelopeError):
        return exc.kind
    if isinstance(exc, FileNotFoundError):
        return "FileNotFound"
    return EnvelopeError.kind


def guard_cli(fn: Callable[..., T]) -> Callable[..., T]:
    """Decorate a CLI handler so every failure ends in an envelope and a stable exit code."""

    @wraps(fn)
    def _wrapped(*args: Any, **kwargs: Any) -> T:
        try:
            return fn(*args, **kwargs)
        except EnvelopeError as exc:
            die(exc.exit_code, exc.kind, str(exc), hint=exc.hint)
        except FileNotFoundError as exc:
            die(Exit.IO, "FileNotFound", str(exc))
        except Exception as exc:  # pragma: no cover - last resort for the CLI
            logger.exception("Unhandled CLI exception")
            die(Exit.INTERNAL, EnvelopeError.kind, f"{type(exc).__name__}: {exc}")

    return _wrapped


__all__ = [
    "Exit",
    "ErrorEnvelope",
    "EnvelopeError",
    "DataShapeError",
    "EmptyInputError",
    "InvalidArgumentError",
    "IOErrorEnvelope",
    "error_kind",
    "guard_cli",
    "die",
]
