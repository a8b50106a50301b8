"""Uniform access to sequences, matrices and tables.

Every imputor is written once against :class:`Dataset`. A dataset is viewed
as a list of columns (a sequence has exactly one) whose values can be read,
overwritten in place, and whose rows can be deleted as a unit.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Hashable, Iterable, Iterator, TypeAlias

import numpy as np
import pandas as pd

ArrayLike: TypeAlias = list | np.ndarray | pd.Series | pd.DataFrame


def _needs_widening(dtype: Any, values: Iterable[Any]) -> bool:
    """True when a fractional value is about to land in an integer or boolean dtype."""
    if getattr(dtype, "kind", None) not in ("i", "u", "b"):
        return False
    return any(isinstance(v, (float, np.floating)) and not float(v).is_integer() for v in values)


def _float_dtype(dtype: Any) -> Any:
    # Nullable extension dtypes keep pd.NA as their missing marker.
    return "Float64" if isinstance(dtype, pd.api.extensions.ExtensionDtype) else float


class Dataset(ABC):
    """Adapter around a concrete container.

    ``data`` may be swapped for a new object when the container cannot shrink
    in place (numpy arrays), or cannot hold a fractional value (integer
    arrays and Series are widened to float), so callers must read it back
    after a deletion or a write. DataFrame columns are widened in place.
    """

    def __init__(self, data: Any):
        self.data = data

    @property
    @abstractmethod
    def shape(self) -> tuple[int, ...]:
        ...

    @property
    def size(self) -> int:
        return int(np.prod(self.shape))

    @property
    def n_rows(self) -> int:
        return self.shape[0]

    @abstractmethod
    def columns(self) -> list[Hashable]:
        """Keys accepted by :meth:`column` and :meth:`write`."""
        ...

    @abstractmethod
    def column(self, key: Hashable) -> list[Any]:
        """Values of one column, in row order."""
        ...

    @abstractmethod
    def write(self, key: Hashable, updates: dict[int, Any]) -> None:
        """Overwrite the given row positions of one column in place."""
        ...

    @abstractmethod
    def delete(self, positions: Iterable[int]) -> None:
        """Remove rows by position, preserving the order of the rest."""
        ...

    def elements(self) -> Iterator[Any]:
        for key in self.columns():
            yield from self.column(key)

    def to_matrix(self) -> np.ndarray:
        raise TypeError(f"{type(self).__name__} cannot be viewed as a matrix")

    def write_matrix(self, matrix: np.ndarray, mask: np.ndarray) -> None:
        raise TypeError(f"{type(self).__name__} cannot be viewed as a matrix")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(shape={self.shape})"


def _drop_pandas(obj: pd.Series | pd.DataFrame, positions: list[int]) -> pd.Series | pd.DataFrame:
    if obj.index.is_unique:
        obj.drop(index=obj.index[positions], inplace=True)
        return obj
    keep = np.ones(len(obj), dtype=bool)
    keep[positions] = False
    return obj[keep]


class SequenceDataset(Dataset):
    """One-dimensional data: ``list``, 1-D ``np.ndarray`` or ``pd.Series``."""

    @property
    def shape(self) -> tuple[int, ...]:
        return (len(self.data),)

    def columns(self) -> list[Hashable]:
        return [0]

    def column(self, key: Hashable) -> list[Any]:
        if isinstance(self.data, list):
            return list(self.data)
        return self.data.tolist()

    def write(self, key: Hashable, updates: dict[int, Any]) -> None:
        dtype = getattr(self.data, "dtype", None)
        if _needs_widening(dtype, updates.values()):
            # Arrays and Series cannot change dtype in place; swap in a float copy.
            self.data = self.data.astype(_float_dtype(dtype))
        if isinstance(self.data, pd.Series):
            for i, value in updates.items():
                self.data.iloc[i] = value
            return
        for i, value in updates.items():
            self.data[i] = value

    def delete(self, positions: Iterable[int]) -> None:
        positions = sorted(set(positions))
        if not positions:
            return
        match self.data:
            case list():
                for i in reversed(positions):
                    del self.data[i]
            case pd.Series():
                self.data = _drop_pandas(self.data, positions)
            case _:
                self.data = np.delete(self.data, positions)


class MatrixDataset(Dataset):
    """Two-dimensional ``np.ndarray``; statistics run per column, Drop per row."""

    @property
    def shape(self) -> tuple[int, ...]:
        return self.data.shape

    def columns(self) -> list[Hashable]:
        return list(range(self.data.shape[1]))

    def column(self, key: Hashable) -> list[Any]:
        return self.data[:, key].tolist()

    def write(self, key: Hashable, updates: dict[int, Any]) -> None:
        if _needs_widening(self.data.dtype, updates.values()):
            self.data = self.data.astype(float)
        for i, value in updates.items():
            self.data[i, key] = value

    def delete(self, positions: Iterable[int]) -> None:
        positions = sorted(set(positions))
        if positions:
            self.data = np.delete(self.data, positions, axis=0)

    def to_matrix(self) -> np.ndarray:
        return np.array(self.data, dtype=float)

    def write_matrix(self, matrix: np.ndarray, mask: np.ndarray) -> None:
        if _needs_widening(self.data.dtype, matrix[mask]):
            self.data = self.data.astype(float)
        self.data[mask] = matrix[mask]


class TableDataset(Dataset):
    """``pd.DataFrame``; columns are addressed by position."""

    @property
    def shape(self) -> tuple[int, ...]:
        return self.data.shape

    def columns(self) -> list[Hashable]:
        return list(range(self.data.shape[1]))

    def column(self, key: Hashable) -> list[Any]:
        return self.data.iloc[:, key].tolist()

    def write(self, key: Hashable, updates: dict[int, Any]) -> None:
        self._widen(key, updates.values())
        for i, value in updates.items():
            self.data.iat[i, key] = value

    def _widen(self, key: int, values: Iterable[Any]) -> None:
        dtype = self.data.dtypes.iloc[key]
        if _needs_widening(dtype, values):
            self.data.isetitem(key, self.data.iloc[:, key].astype(_float_dtype(dtype)))

    def delete(self, positions: Iterable[int]) -> None:
        positions = sorted(set(positions))
        if positions:
            self.data = _drop_pandas(self.data, positions)

    def to_matrix(self) -> np.ndarray:
        return self.data.to_numpy(dtype=float, na_value=np.nan, copy=True)

    def write_matrix(self, matrix: np.ndarray, mask: np.ndarray) -> None:
        for j in range(matrix.shape[1]):
            rows = np.flatnonzero(mask[:, j])
            if rows.size:
                self._widen(j, matrix[rows, j])
                self.data.iloc[rows, j] = matrix[rows, j]


def as_dataset(data: ArrayLike | Dataset) -> Dataset:
    """Wrap ``data`` in the adapter matching its shape.

    Raises:
        TypeError: If the container type or dimensionality is not supported.
    """
    match data:
        case Dataset():
            return data
        case pd.DataFrame():
            return TableDataset(data)
        case list() | pd.Series():
            return SequenceDataset(data)
        case np.ndarray() if data.ndim == 1:
            return SequenceDataset(data)
        case np.ndarray() if data.ndim == 2:
            return MatrixDataset(data)
        case np.ndarray():
            raise TypeError(f"Unsupported array dimensionality: {data.ndim}")
    raise TypeError(f"Unsupported dataset type: {type(data).__name__}")
