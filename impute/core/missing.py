"""Utilities for inspecting missing data."""
from __future__ import annotations

from typing import Optional

import numpy as np
import pandas as pd

from impute.core.context import MissingnessPredicate, is_missing as default_is_missing
from impute.core.dataset import ArrayLike, as_dataset


def missing_mask(data: ArrayLike, is_missing: Optional[MissingnessPredicate] = None) -> np.ndarray:
    """Create a boolean mask indicating missing values.

    Args:
        data: Sequence, matrix or DataFrame to check.
        is_missing: Predicate deciding whether an element is missing.
            Defaults to :func:`impute.core.context.is_missing`.

    Returns:
        Boolean array with the shape of ``data`` where True marks a missing
        element.

    Examples:
        >>> missing_mask([1.0, None, 3.0])
        array([False,  True, False])
    """
    predicate = is_missing or default_is_missing
    dataset = as_dataset(data)
    columns = [[bool(predicate(v)) for v in dataset.column(key)] for key in dataset.columns()]
    if len(dataset.shape) == 1:
        return np.array(columns[0], dtype=bool)
    if not columns:
        return np.zeros(dataset.shape, dtype=bool)
    return np.array(columns, dtype=bool).reshape(len(columns), dataset.n_rows).T


def missing_ratio(data: ArrayLike, is_missing: Optional[MissingnessPredicate] = None) -> float:
    """Fraction of missing elements in ``data`` (0.0 when empty)."""
    mask = missing_mask(data, is_missing)
    return float(mask.mean()) if mask.size else 0.0


def missing_patterns(
    df: pd.DataFrame,
    normalize: bool = True,
    sort_by: Optional[str] = "count",
    is_missing: Optional[MissingnessPredicate] = None,
) -> pd.DataFrame:
    """Summarise the distinct row patterns of missingness in a DataFrame.

    Parameters
    ----------
    df : pd.DataFrame
        The DataFrame to analyze.
    normalize : bool, default True
        If True, add 'proportion' (count / rows) and cumulative columns.
    sort_by : str or None, default "count"
        Column to sort on, descending. None keeps first-seen order.
    is_missing : callable, optional
        Missingness predicate; defaults to the engine's default.

    Returns
    -------
    patterns : pd.DataFrame
        One row per pattern with a 0/1 column per original column and
          - 'pattern_id' = "P1", "P2", …
          - 'count', optional 'proportion'
          - 'n_missing_cols', 'n_present_cols'
          - 'missing_cells' = count * n_missing_cols
          - 'pct_of_all_missing' = missing_cells / total missing cells
          - 'cum_count', 'cum_proportion' (if normalized)
    """
    mask = pd.DataFrame(
        missing_mask(df, is_missing).astype(int),
        columns=df.columns,
        index=df.index,
    )
    n_rows, n_cols = mask.shape
    columns = list(mask.columns)

    summary = mask.groupby(columns, sort=False).size().reset_index(name="count")
    summary.insert(0, "pattern_id", [f"P{i + 1}" for i in range(len(summary))])
    if normalize:
        summary["proportion"] = summary["count"] / n_rows

    summary["n_missing_cols"] = summary[columns].sum(axis=1)
    summary["n_present_cols"] = n_cols - summary["n_missing_cols"]
    summary["missing_cells"] = summary["count"] * summary["n_missing_cols"]
    total_missing = int(summary["missing_cells"].sum())
    summary["pct_of_all_missing"] = summary["missing_cells"] / total_missing if total_missing else 0.0

    if sort_by in summary.columns:
        summary = summary.sort_values(sort_by, ascending=False, kind="stable").reset_index(drop=True)

    # Cumulative columns follow the returned row order.
    if normalize:
        summary["cum_count"] = summary["count"].cumsum()
        summary["cum_proportion"] = summary["proportion"].cumsum()

    return summary
