"""
Pytest configuration and shared fixtures for annotated-matrix tests.

Fixtures build small AnnotatedMatrix objects with hand-checkable values and
descriptor tables that exercise field collisions between axes.
"""

import numpy as np
import pandas as pd
import pytest

from gctkit.config import GCTConfig, set_config
from gctkit.core.annotated_matrix import AnnotatedMatrix


def make_gct(
    n_rows: int,
    n_cols: int,
    row_prefix: str = "g",
    col_prefix: str = "s",
    seed: int = 42,
) -> AnnotatedMatrix:
    """
    Generate a synthetic annotated matrix.

    Row descriptors carry 'symbol' and 'score'; column descriptors carry
    'pert_iname' and 'score', so 'score' collides between the two axes.
    """
    rng = np.random.RandomState(seed)
    mat = rng.normal(size=(n_rows, n_cols))

    rid = [f"{row_prefix}{i}" for i in range(n_rows)]
    cid = [f"{col_prefix}{j}" for j in range(n_cols)]

    rdesc = pd.DataFrame({
        'id': rid,
        'symbol': [f"GENE{i}" for i in range(n_rows)],
        'score': np.arange(n_rows, dtype=float),
    })
    cdesc = pd.DataFrame({
        'id': cid,
        'pert_iname': [f"pert{j}" for j in range(n_cols)],
        'score': np.arange(n_cols, dtype=float) * 10,
    })

    return AnnotatedMatrix(
        mat=mat,
        rid=pd.Index(rid),
        cid=pd.Index(cid),
        rdesc=rdesc,
        cdesc=cdesc,
    )


@pytest.fixture(autouse=True)
def default_config():
    """Reset the process-wide config around every test."""
    set_config(GCTConfig())
    yield
    set_config(GCTConfig())


@pytest.fixture
def small_gct():
    """4 rows × 3 columns."""
    return make_gct(4, 3)


@pytest.fixture
def square_gct():
    """Symmetric 4 × 4 matrix with no missing values."""
    rng = np.random.RandomState(7)
    a = rng.normal(size=(4, 4))
    mat = (a + a.T) / 2
    ids = [f"c{i}" for i in range(4)]
    return AnnotatedMatrix(
        mat=mat,
        rid=pd.Index(ids),
        cid=pd.Index(ids),
        rdesc=pd.DataFrame({'id': ids, 'cell': ['A549', 'MCF7', 'PC3', 'VCAP']}),
        cdesc=pd.DataFrame({'id': ids, 'cell': ['A549', 'MCF7', 'PC3', 'VCAP']}),
    )
