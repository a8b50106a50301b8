"""Missingness budget shared by the imputors of a single call."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, TypeAlias

import pandas as pd

from impute.errors import ConfigurationError, ImputeError

logger = logging.getLogger(__name__)

MissingnessPredicate: TypeAlias = Callable[[Any], bool]


def is_missing(value: Any) -> bool:
    """Default missingness predicate.

    Recognizes ``None``, ``NaN``, ``pd.NA`` and ``pd.NaT``. Non-scalar values
    (lists, arrays) are never considered missing.

    Examples:
        >>> is_missing(None), is_missing(float('nan')), is_missing(0.0)
        (True, True, False)
    """
    if value is None:
        return True
    if not pd.api.types.is_scalar(value):
        return False
    return bool(pd.isna(value))


@dataclass
class Context:
    """Tracks how many observed elements were missing against a limit.

    The context is created once per top-level call from the size of the
    dataset. Imputors feed every element they scan to :meth:`observe` and
    consult :meth:`exceeded` before writing anything.

    Args:
        total: Number of elements in the dataset.
        limit: Maximum accepted ratio of missing elements, in ``[0, 1]``.
        is_missing: Predicate deciding whether an element is missing.
        missing_count: Number of missing elements observed so far.
    """

    total: int
    limit: float = 0.1
    is_missing: MissingnessPredicate = is_missing
    missing_count: int = 0

    def __post_init__(self) -> None:
        if self.total < 0:
            raise ConfigurationError(f"total must be >= 0, got {self.total}")
        if not 0.0 <= self.limit <= 1.0:
            raise ConfigurationError(f"limit must be within [0, 1], got {self.limit}")
        if not callable(self.is_missing):
            raise ConfigurationError("is_missing must be callable")

    @property
    def ratio(self) -> float:
        if self.total == 0:
            return 0.0
        return self.missing_count / self.total

    def observe(self, value: Any) -> bool:
        """Count ``value`` if it is missing and return the predicate outcome."""
        missing = bool(self.is_missing(value))
        if missing and self.missing_count < self.total:
            self.missing_count += 1
        return missing

    def exceeded(self) -> bool:
        return self.ratio > self.limit

    def check(self) -> None:
        """Raise :class:`ImputeError` if the missing ratio is above the limit."""
        logger.debug("Observed %d/%d missing (limit %.3f)", self.missing_count, self.total, self.limit)
        if self.exceeded():
            raise ImputeError(
                f"too many missing values to impute ({self.ratio:.3f} > limit {self.limit})"
            )

    def reset(self) -> None:
        self.missing_count = 0
