"""
Base transformation framework for immutable annotated-matrix operations.

The structural operations of gctkit are plain functions (``subset_gct``,
``rank_gct``, ...). Transform wraps the single-matrix ones as named,
parameterised objects so a pipeline can be declared up front, logged, and
replayed on another dataset.

Engineering Design:
    Pure Functions:
        - No side effects (don't modify inputs)
        - Deterministic (same input + params → same output)
        - Composable (chain transformations)

Examples:
    >>> from gctkit.ops import Subset, Rank, Transpose
    >>> pipeline = [Subset(rid=["g1", "g2"]), Rank(dim="column"), Transpose()]
    >>> result = apply_all(pipeline, g)
    >>> print(" -> ".join(str(t) for t in pipeline))
    Subset(rid=['g1', 'g2'], cid=None) -> Rank(dim=column) -> Transpose()
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Iterable, TYPE_CHECKING
from datetime import datetime

if TYPE_CHECKING:
    from gctkit.core.annotated_matrix import AnnotatedMatrix

__all__ = ['Transform', 'apply_all']

logger = logging.getLogger(__name__)


class Transform(ABC):
    """
    Abstract base class for annotated-matrix transformations.

    Attributes:
        name: Human-readable transformation name (e.g., "Rank")
        params: Dictionary of parameters used for this transformation
        timestamp: When this transform instance was created (for audit trail)
    """

    def __init__(self, name: str, params: dict[str, Any]) -> None:
        self.name = name
        self.params = params
        self.timestamp = datetime.now()

    @abstractmethod
    def apply(self, matrix: AnnotatedMatrix) -> AnnotatedMatrix:
        """
        Execute transformation and return new matrix.

        Must never modify the input matrix.

        Raises:
            GCTError: If the transformation cannot be applied
        """
        pass

    def validate(self, matrix: AnnotatedMatrix) -> list[str]:
        """
        Check preconditions before applying transformation.

        Subclasses should override and call super().validate() first.

        Returns:
            List of error messages (empty list = valid)
        """
        errors: list[str] = []

        if matrix.mat.ndim != 2:
            errors.append("Matrix must be two-dimensional")

        return errors

    def __repr__(self) -> str:
        """String representation for logging, e.g. ``Rank(dim=column)``."""
        params_str = ", ".join(f"{k}={v}" for k, v in self.params.items())
        return f"{self.name}({params_str})"


def apply_all(transforms: Iterable[Transform], matrix: AnnotatedMatrix) -> AnnotatedMatrix:
    """
    Apply transforms in order, validating each before it runs.

    Raises:
        ValueError: If a transform's validate() reports errors
    """
    result = matrix
    for transform in transforms:
        errors = transform.validate(result)
        if errors:
            raise ValueError(f"{transform} cannot be applied: {'; '.join(errors)}")
        logger.info(f"Applying {transform}")
        result = transform.apply(result)
    return result
