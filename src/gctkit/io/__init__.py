"""
I/O helpers for annotation sources.

Matrix file formats (GCT/GCTX) are read elsewhere; this package only loads
the annotation tables that ``annotate_gct`` folds into descriptor tables.
"""

from gctkit.io.annotations import load_annotation_table, sniff_delimiter

__all__ = [
    'load_annotation_table',
    'sniff_delimiter',
]
