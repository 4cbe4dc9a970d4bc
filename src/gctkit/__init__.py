"""
gctkit - Structural operations on annotated (GCT-style) matrices

Subset, merge, melt, annotate, transpose and rank a numeric matrix while
keeping its row/column ids and descriptor tables aligned.
"""

__version__ = "0.1.0"

from gctkit.core.annotated_matrix import AnnotatedMatrix
from gctkit.core.transform import Transform, apply_all
from gctkit.core.diagnostics import capture_diagnostics
from gctkit.config import GCTConfig, get_config, set_config, load_config
from gctkit.ops import (
    ById,
    ByIndex,
    resolve_ids,
    merge_with_precedence,
    subset_gct,
    merge_gct,
    melt_gct,
    annotate_gct,
    transpose_gct,
    rank_gct,
)

__all__ = [
    "AnnotatedMatrix",
    "Transform",
    "apply_all",
    "capture_diagnostics",
    "GCTConfig",
    "get_config",
    "set_config",
    "load_config",
    "ById",
    "ByIndex",
    "resolve_ids",
    "merge_with_precedence",
    "subset_gct",
    "merge_gct",
    "melt_gct",
    "annotate_gct",
    "transpose_gct",
    "rank_gct",
]
