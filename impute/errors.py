"""Exceptions raised by the imputation engine."""


class ConfigurationError(ValueError):
    """Invalid arguments detected while building a context or an imputor."""


class ImputeError(Exception):
    """Raised when a dataset cannot be imputed.

    Either the ratio of missing values exceeds the configured limit, or the
    data does not support the requested method (e.g. an all-missing column
    for a mean fill).

    Args:
        msg: Human readable description of the failure.
    """

    def __init__(self, msg: str):
        super().__init__(msg)
        self.msg = msg

    def __str__(self) -> str:
        return f"ImputeError: {self.msg}"


class AlgorithmError(RuntimeError):
    """Numerical failure inside an iterative method (e.g. SVD non-convergence)."""
