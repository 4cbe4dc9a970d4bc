"""
Fatal conditions raised by GCT operations.

All errors derive from GCTError (itself a ValueError), so callers can catch
the whole family or a single condition. Every check runs before a result is
built: a raised error never leaves a partially-constructed matrix behind.
"""

from __future__ import annotations

__all__ = [
    'GCTError',
    'InvalidSelectorKind',
    'MissingJoinKey',
    'MissingAnnotationKey',
    'InvalidDimension',
    'InvalidAxis',
    'UnresolvableDescriptorRow',
    'CardinalityViolation',
]


class GCTError(ValueError):
    """Base class for fatal annotated-matrix errors."""
    pass


class InvalidSelectorKind(GCTError):
    """Raised when an id selector is neither strings nor whole-number indices."""

    def __init__(self, axis_name: str):
        self.axis_name = axis_name
        super().__init__(f"{axis_name} must be character ids or integer indices")


class MissingJoinKey(GCTError):
    """Raised when a join key column is absent from one of the joined tables."""

    def __init__(self, keys: list[str], table_name: str):
        self.keys = list(keys)
        self.table_name = table_name
        super().__init__(
            f"the following column names are not found in {table_name}: "
            f"{' '.join(self.keys)}"
        )


class MissingAnnotationKey(MissingJoinKey):
    """Raised when the annotation table lacks the requested key field."""

    def __init__(self, keyfield: str):
        super().__init__([keyfield], "annotations")
        self.keyfield = keyfield


class InvalidDimension(GCTError):
    """Raised for a dimension value other than row/column."""

    def __init__(self, value: object, label: str = "dimension"):
        self.value = value
        super().__init__(f"{label} must be either row or column, got {value!r}")


class InvalidAxis(InvalidDimension):
    """Raised by ranking for an axis value other than row/column."""

    def __init__(self, value: object):
        super().__init__(value, label="axis")


class UnresolvableDescriptorRow(GCTError):
    """Raised when a descriptor table cannot be realigned because it has no 'id' field."""
    pass


class CardinalityViolation(GCTError):
    """Raised when a strict join finds several right-hand rows for one key."""

    def __init__(self, keys: list):
        self.keys = list(keys)
        preview = ", ".join(str(k) for k in self.keys[:10])
        super().__init__(
            f"{len(self.keys)} join keys match more than one row in the right table: {preview}"
        )
