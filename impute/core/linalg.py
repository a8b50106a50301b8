"""Truncated SVD primitives used by low-rank completion."""
from __future__ import annotations

import numpy as np
from sklearn.utils.extmath import randomized_svd


def truncated_svd(
    X: np.ndarray,
    rank: int,
    random_state: int = 0,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Leading ``rank`` singular triplets of ``X``.

    Args:
        X: Fully populated 2-D array.
        rank: Number of singular values to keep.
        random_state: Seed of the randomized range finder, fixed so that
            repeated calls on the same input give the same factors.

    Returns:
        Tuple ``(U, S, Vt)`` with shapes ``(n, rank)``, ``(rank,)`` and
        ``(rank, p)``.
    """
    return randomized_svd(X, n_components=rank, random_state=random_state)


def reconstruct(U: np.ndarray, S: np.ndarray, Vt: np.ndarray) -> np.ndarray:
    """Rebuild the rank ``len(S)`` approximation ``U @ diag(S) @ Vt``."""
    return U @ np.diag(S) @ Vt
