"""
Core data structures and abstractions for annotated-matrix processing.

This module provides the foundational types that all operations build upon:

1. AnnotatedMatrix: Matrix with row/column ids and descriptor tables
2. Transform: Abstract base class for immutable matrix transformations
3. Errors: Typed fatal conditions (GCTError and subclasses)
4. Diagnostics: Non-fatal warnings and capture_diagnostics()

Design Philosophy:
    - Immutability: All operations return new instances (functional style)
    - Alignment: ids, descriptor tables and matrix axes never drift apart
    - Composability: Small operations chain into complex pipelines
"""

from gctkit.core.annotated_matrix import AnnotatedMatrix
from gctkit.core.transform import Transform, apply_all
from gctkit.core.errors import (
    GCTError,
    InvalidSelectorKind,
    MissingJoinKey,
    MissingAnnotationKey,
    InvalidDimension,
    InvalidAxis,
    UnresolvableDescriptorRow,
    CardinalityViolation,
)
from gctkit.core.diagnostics import (
    GCTDiagnostic,
    UnmatchedKeys,
    EmptyResultWarning,
    CardinalityWarning,
    Diagnostic,
    capture_diagnostics,
)

__all__ = [
    'AnnotatedMatrix',
    'Transform',
    'apply_all',
    # Errors
    'GCTError',
    'InvalidSelectorKind',
    'MissingJoinKey',
    'MissingAnnotationKey',
    'InvalidDimension',
    'InvalidAxis',
    'UnresolvableDescriptorRow',
    'CardinalityViolation',
    # Diagnostics
    'GCTDiagnostic',
    'UnmatchedKeys',
    'EmptyResultWarning',
    'CardinalityWarning',
    'Diagnostic',
    'capture_diagnostics',
]
