"""Base class for imputation strategies."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Hashable

from impute.core.context import Context
from impute.core.dataset import ArrayLike, Dataset, as_dataset

Column = tuple[list[Any], list[bool]]


class Imputor(ABC):
    """A missing-data strategy applied to a dataset under a :class:`Context`.

    Subclasses implement :meth:`_apply` against the :class:`Dataset` adapter,
    so one implementation covers sequences, matrices and tables. Every
    subclass observes all elements and calls ``ctx.check()`` before its
    first write: a failing imputor leaves the dataset untouched.
    """

    def apply(self, ctx: Context, data: ArrayLike | Dataset) -> ArrayLike:
        """Impute ``data`` in place and return it.

        Containers that cannot shrink in place (numpy arrays under Drop) are
        replaced, so always use the returned object.

        Raises:
            ImputeError: If the missing ratio exceeds ``ctx.limit`` or the data
                cannot support the method.
        """
        dataset = as_dataset(data)
        self._apply(ctx, dataset)
        return dataset.data

    @abstractmethod
    def _apply(self, ctx: Context, dataset: Dataset) -> None:
        ...

    @staticmethod
    def _scan(ctx: Context, dataset: Dataset) -> dict[Hashable, Column]:
        """Observe every element, then enforce the missingness limit."""
        scanned = {}
        for key in dataset.columns():
            values = dataset.column(key)
            scanned[key] = (values, [ctx.observe(v) for v in values])
        ctx.check()
        return scanned
