"""Iterative low-rank matrix completion."""
from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from impute.core.context import Context
from impute.core.dataset import Dataset, SequenceDataset
from impute.core.linalg import reconstruct, truncated_svd
from impute.errors import AlgorithmError, ConfigurationError, ImputeError
from .imputor import Imputor

logger = logging.getLogger(__name__)


def _supported(rank: int, n_rows: int, n_cols: int, n_observed: int) -> bool:
    # Degrees of freedom of an n x p matrix of rank r.
    return rank <= min(n_rows, n_cols) and n_observed >= rank * (n_rows + n_cols - rank)


@dataclass(frozen=True)
class SVD(Imputor):
    """Fill missing entries of a matrix by iterative truncated SVD.

    Missing entries start at their column mean (0 for an all-missing column).
    Each iteration reconstructs the matrix from its leading singular
    triplets and copies the reconstruction into the missing entries only.
    Iteration stops once the relative squared change of those entries drops
    to ``tol``.

    Parameters
    ----------
    rank : int | None, default=None
        Target rank. None grows the rank by one per iteration, up to
        ``min(n_rows, n_cols) - 1`` or the largest rank the observed entries
        support.
    tol : float, default=1e-4
        Convergence threshold on the relative change of imputed entries.
    max_iter : int, default=100
        Maximum number of iterations.
    limits : tuple[float, float] | None, default=None
        Clip imputed entries to ``[low, high]``.
    strict : bool, default=True
        Raise :class:`AlgorithmError` when ``max_iter`` is reached without
        converging. If False, log a warning and keep the last estimate.
    """

    rank: int | None = None
    tol: float = 1e-4
    max_iter: int = 100
    limits: tuple[float, float] | None = None
    strict: bool = True

    def __post_init__(self) -> None:
        if self.rank is not None and self.rank < 1:
            raise ConfigurationError(f"rank must be >= 1, got {self.rank}")
        if self.tol < 0:
            raise ConfigurationError(f"tol must be >= 0, got {self.tol}")
        if self.max_iter < 1:
            raise ConfigurationError(f"max_iter must be >= 1, got {self.max_iter}")
        if self.limits is not None and self.limits[0] > self.limits[1]:
            raise ConfigurationError(f"limits must be (low, high), got {self.limits}")

    def _max_rank(self, n_rows: int, n_cols: int, n_observed: int) -> int:
        if self.rank is not None:
            if not _supported(self.rank, n_rows, n_cols, n_observed):
                raise ImputeError(
                    f"not enough observed data for a rank {self.rank} decomposition "
                    f"({n_observed} observed entries in a {n_rows}x{n_cols} matrix)"
                )
            return self.rank

        rank = max(1, min(n_rows, n_cols) - 1)
        while rank > 1 and not _supported(rank, n_rows, n_cols, n_observed):
            rank -= 1
        if not _supported(rank, n_rows, n_cols, n_observed):
            raise ImputeError(
                f"not enough observed data for a low-rank decomposition "
                f"({n_observed} observed entries in a {n_rows}x{n_cols} matrix)"
            )
        return rank

    def _apply(self, ctx: Context, dataset: Dataset) -> None:
        if isinstance(dataset, SequenceDataset):
            raise TypeError("SVD imputation requires a matrix or a table")

        scanned = self._scan(ctx, dataset)
        n_rows, n_cols = dataset.shape
        mask = np.zeros((n_rows, n_cols), dtype=bool)
        for j, (_, col_mask) in enumerate(scanned.values()):
            mask[:, j] = col_mask

        if not mask.any():
            return

        max_rank = self._max_rank(n_rows, n_cols, int((~mask).sum()))

        X = dataset.to_matrix()
        X[mask] = 0.0
        observed = ~mask
        counts = observed.sum(axis=0)
        means = np.divide(X.sum(axis=0), counts, out=np.zeros(n_cols), where=counts > 0)
        X = np.where(mask, means, X)

        rank = max_rank if self.rank is not None else 0
        converged = False
        for iteration in range(1, self.max_iter + 1):
            if self.rank is None:
                rank = min(rank + 1, max_rank)

            try:
                U, S, Vt = truncated_svd(X, rank)
            except np.linalg.LinAlgError as e:
                raise AlgorithmError(f"SVD failed at iteration {iteration}: {e}") from e
            X_hat = reconstruct(U, S, Vt)
            if self.limits is not None:
                X_hat = np.clip(X_hat, *self.limits)

            old = X[mask]
            new = X_hat[mask]
            change = np.sum((new - old) ** 2) / max(np.sum(old ** 2), np.finfo(float).eps)
            X[mask] = new
            logger.debug("SVD iteration %d: rank=%d change=%.3e", iteration, rank, change)

            if not np.isfinite(change):
                raise AlgorithmError(f"SVD diverged at iteration {iteration}")
            if change <= self.tol:
                converged = True
                break

        if not converged:
            if self.strict:
                raise AlgorithmError(f"SVD did not converge within {self.max_iter} iterations")
            logger.warning("SVD did not converge within %d iterations, keeping the last estimate", self.max_iter)

        dataset.write_matrix(X, mask)
