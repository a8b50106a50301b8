"""Linear interpolation of interior gaps."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
import pandas as pd

from impute.core.context import Context
from impute.core.dataset import Dataset
from .imputor import Imputor


def masked_series(values: list[Any], mask: list[bool]) -> pd.Series:
    """Numeric Series of ``values`` with NaN at every position flagged by ``mask``.

    Raises:
        ValueError: If an observed value is not numeric.
    """
    arr = np.array(values, dtype=object)
    arr[np.asarray(mask, dtype=bool)] = np.nan
    return pd.to_numeric(pd.Series(arr))


@dataclass(frozen=True)
class Interpolate(Imputor):
    """Fill interior gaps by linear interpolation between their boundaries.

    A gap of ``k`` missing values between ``v0`` and ``v1`` becomes
    ``v0 + i * (v1 - v0) / (k + 1)`` for ``i = 1..k``. Leading and trailing
    runs are left missing; chain with :class:`LOCF` and :class:`NOCB` to
    cover them.
    """

    def _apply(self, ctx: Context, dataset: Dataset) -> None:
        scanned = self._scan(ctx, dataset)

        fills = {}
        for key, (values, mask) in scanned.items():
            if any(mask):
                series = masked_series(values, mask)
                fills[key] = (series.interpolate(method="linear", limit_area="inside"), mask)

        for key, (filled, mask) in fills.items():
            dataset.write(key, {
                int(i): filled.iat[i]
                for i in np.flatnonzero(mask)
                if pd.notna(filled.iat[i])
            })
