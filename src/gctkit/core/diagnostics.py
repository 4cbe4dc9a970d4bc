"""
Non-fatal diagnostics for GCT operations.

Operations that can complete with best-effort semantics (ids not found,
empty results, fan-out joins) report the condition instead of raising.

Warning convention:
    warnings.warn() -- user-facing, a GCTDiagnostic subclass carrying the
                       offending keys
    logger.warning() -- operator-facing mirror of the same message

Batch pipelines inspect diagnostics without aborting by wrapping calls in
``capture_diagnostics()``:

    >>> with capture_diagnostics() as diags:
    ...     sub = subset_gct(g, rid=["g1", "missing"])
    >>> [d.kind for d in diags]
    ['UnmatchedKeys']
"""

from __future__ import annotations

import logging
import warnings
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator, Optional, Sequence

__all__ = [
    'GCTDiagnostic',
    'UnmatchedKeys',
    'EmptyResultWarning',
    'CardinalityWarning',
    'Diagnostic',
    'emit',
    'capture_diagnostics',
]

logger = logging.getLogger(__name__)

# Cap on keys quoted in a message; the full list stays on the warning object
_MAX_KEYS_IN_MESSAGE = 20


class GCTDiagnostic(UserWarning):
    """Base class for non-fatal annotated-matrix diagnostics."""

    def __init__(self, message: str, keys: Optional[Sequence] = None):
        super().__init__(message)
        self.keys = list(keys) if keys is not None else []


class UnmatchedKeys(GCTDiagnostic):
    """Requested ids or join keys had no counterpart and were dropped or NaN-filled."""
    pass


class EmptyResultWarning(GCTDiagnostic):
    """An operation produced a result with a zero-length dimension."""
    pass


class CardinalityWarning(GCTDiagnostic):
    """A join key matched several right-hand rows; the first match was kept."""
    pass


@dataclass
class Diagnostic:
    """Recorded diagnostic, as collected by capture_diagnostics()."""
    kind: str
    message: str
    keys: list = field(default_factory=list)


def _format_keys(keys: Sequence) -> str:
    shown = [str(k) for k in list(keys)[:_MAX_KEYS_IN_MESSAGE]]
    more = len(keys) - len(shown)
    suffix = f"\n... and {more} more" if more > 0 else ""
    return "\n".join(shown) + suffix


def emit(
    category: type[GCTDiagnostic],
    message: str,
    keys: Optional[Sequence] = None,
    stacklevel: int = 3,
) -> None:
    """
    Report a diagnostic on both the warnings and logging channels.

    Args:
        category: GCTDiagnostic subclass
        message: Human-readable description
        keys: Offending ids/keys, appended to the message and kept on the warning
        stacklevel: Passed to warnings.warn so the warning points at the caller
    """
    if keys:
        message = f"{message}:\n{_format_keys(keys)}"
    logger.warning(message)
    warnings.warn(category(message, keys), stacklevel=stacklevel)


@contextmanager
def capture_diagnostics() -> Iterator[list[Diagnostic]]:
    """
    Collect every GCTDiagnostic raised inside the block.

    Yields a list that holds the recorded diagnostics once the block exits,
    including when it exits with an exception. Warnings that are not GCT
    diagnostics are re-issued unchanged.
    """
    collected: list[Diagnostic] = []
    records: list[warnings.WarningMessage] = []
    try:
        with warnings.catch_warnings(record=True) as records:
            warnings.simplefilter("always")
            yield collected
    finally:
        for record in records:
            if issubclass(record.category, GCTDiagnostic):
                collected.append(Diagnostic(
                    kind=record.category.__name__,
                    message=str(record.message),
                    keys=list(getattr(record.message, 'keys', [])),
                ))
            else:
                warnings.warn_explicit(
                    record.message, record.category, record.filename, record.lineno
                )
