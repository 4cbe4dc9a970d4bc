"""
Loader for annotation tables applied to row or column descriptors.

Annotation tables are plain delimited text (TSV from connectivity-map style
resources, CSV from spreadsheets). The delimiter is sniffed when not given.

Examples:
    >>> from gctkit.io.annotations import load_annotation_table
    >>> annot = load_annotation_table("gene_info.txt")
    >>> g = annotate_gct(g, annot, dimension="row", keyfield="pr_id")
"""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Optional

import pandas as pd

__all__ = ['load_annotation_table', 'sniff_delimiter']

logger = logging.getLogger(__name__)


def sniff_delimiter(path: Path, sample_size: int = 8192) -> str:
    """
    Auto-detect delimiter from file content.

    Uses Python's csv.Sniffer with fallback heuristics.

    Returns:
        Detected delimiter character ('\\t', ',', ';' or '|')

    Raises:
        ValueError: If delimiter cannot be determined
    """
    with open(path, 'r', encoding='utf-8', errors='ignore') as f:
        sample = f.read(sample_size)

    try:
        dialect = csv.Sniffer().sniff(sample, delimiters='\t,;|')
        return dialect.delimiter
    except csv.Error:
        pass

    # Fallback: count delimiter occurrences in the header line
    first_line = sample.split('\n')[0]
    counts = {d: first_line.count(d) for d in ('\t', ',', ';', '|')}

    if max(counts.values()) == 0:
        raise ValueError(
            f"Could not detect delimiter in {path}. "
            "Please pass delimiter explicitly"
        )

    return max(counts, key=counts.get)


def load_annotation_table(path: Path | str, delimiter: Optional[str] = None) -> pd.DataFrame:
    """
    Read an annotation table from a delimited text file.

    Args:
        path: Path to the table (header row required)
        delimiter: Field delimiter; sniffed when None

    Returns:
        DataFrame with one row per annotation record

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the delimiter cannot be detected
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Annotation table not found: {path}")

    if delimiter is None:
        delimiter = sniff_delimiter(path)

    df = pd.read_csv(path, sep=delimiter)
    logger.info(f"Loaded {len(df)} annotation rows × {len(df.columns)} fields from {path.name}")
    return df
