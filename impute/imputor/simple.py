"""Drop, constant/statistic fill, and carry-forward/backward imputors."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

import numpy as np
import pandas as pd

from impute.core.context import Context
from impute.core.dataset import Dataset
from impute.errors import ImputeError
from .imputor import Imputor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Drop(Imputor):
    """Remove every element (sequence) or row (matrix, table) with a missing value."""

    def _apply(self, ctx: Context, dataset: Dataset) -> None:
        scanned = self._scan(ctx, dataset)
        rows = {i for _, mask in scanned.values() for i, missing in enumerate(mask) if missing}
        logger.debug("Dropping %d of %d rows", len(rows), dataset.n_rows)
        dataset.delete(rows)


@dataclass(frozen=True)
class Fill(Imputor):
    """Replace missing values with a constant or a statistic of observed values.

    Args:
        value: Constant written at every missing position, or a reduction
            called with the observed values of each column (of the whole
            sequence for 1-D data). Defaults to the mean.
    """

    value: Any = np.mean

    def _fill_value(self, observed: list[Any]) -> Any:
        if not callable(self.value):
            return self.value
        if not observed:
            raise ImputeError("cannot compute fill value: no observed data")
        return float(self.value(np.asarray(observed, dtype=float)))

    def _apply(self, ctx: Context, dataset: Dataset) -> None:
        scanned = self._scan(ctx, dataset)

        fills = {}
        for key, (values, mask) in scanned.items():
            if any(mask):
                observed = [v for v, missing in zip(values, mask) if not missing]
                fills[key] = self._fill_value(observed)

        for key, fill_value in fills.items():
            _, mask = scanned[key]
            dataset.write(key, {i: fill_value for i, missing in enumerate(mask) if missing})


def _sources(mask: list[bool]) -> pd.Series:
    """Row positions, with NaN where the value is missing."""
    return pd.Series(np.arange(len(mask)), dtype=float).mask(np.asarray(mask, dtype=bool))


def _carry(values: list[Any], mask: list[bool], sources: pd.Series) -> dict[int, Any]:
    # ``sources`` maps each position to the row whose value it takes.
    return {
        int(i): values[int(sources.iat[i])]
        for i in np.flatnonzero(mask)
        if pd.notna(sources.iat[i])
    }


@dataclass(frozen=True)
class LOCF(Imputor):
    """Last observation carried forward.

    Leading missing values have nothing to carry and remain missing.
    """

    def _apply(self, ctx: Context, dataset: Dataset) -> None:
        for key, (values, mask) in self._scan(ctx, dataset).items():
            dataset.write(key, _carry(values, mask, _sources(mask).ffill()))


@dataclass(frozen=True)
class NOCB(Imputor):
    """Next observation carried backward.

    Trailing missing values have nothing to carry and remain missing.
    """

    def _apply(self, ctx: Context, dataset: Dataset) -> None:
        for key, (values, mask) in self._scan(ctx, dataset).items():
            dataset.write(key, _carry(values, mask, _sources(mask).bfill()))
