"""Contract helpers for SweepScope."""

from .error import (
    DataShapeError,
    EmptyInputError,
    EnvelopeError,
    ErrorEnvelope,
    Exit,
    InvalidArgumentError,
    IOErrorEnvelope,
    die,
    error_kind,
    guard_cli,
)

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
