"""Entry points: method lookup, context construction and copy semantics.

Functions ending in an underscore (``impute_``, ``chain_``, ``drop_``, ...)
modify their input in place and return it. Their counterparts without the
underscore deep-copy the input first and leave it untouched.
"""
from __future__ import annotations

import copy
import logging
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional

from impute.core.context import Context, MissingnessPredicate, is_missing as default_is_missing
from impute.core.dataset import ArrayLike, as_dataset
from impute.errors import ConfigurationError
from impute.imputor import Chain, Drop, Fill, Imputor, Imputors, Interpolate, LOCF, NOCB, SVD

logger = logging.getLogger(__name__)

METHODS: Mapping[str, type[Imputors]] = MappingProxyType({
    "drop": Drop,
    "fill": Fill,
    "interp": Interpolate,
    "locf": LOCF,
    "nocb": NOCB,
    "svd": SVD,
})


def build_imputor(method: str | Imputor, *args: Any, **kwargs: Any) -> Imputor:
    """Instantiate the imputor registered under ``method``.

    Raises:
        ConfigurationError: If the name is unknown or the arguments are
            rejected by the imputor.
    """
    if isinstance(method, Imputor):
        if args or kwargs:
            raise ConfigurationError("Arguments cannot be passed along with an imputor instance")
        return method
    try:
        imputor_type = METHODS[method]
    except (KeyError, TypeError):
        raise ConfigurationError(
            f"Unknown imputation method {method!r}. Available: {', '.join(METHODS)}"
        ) from None
    try:
        return imputor_type(*args, **kwargs)
    except TypeError as e:
        raise ConfigurationError(f"Invalid arguments for {method!r}: {e}") from e


def _split_predicate(first: Any, rest: tuple) -> tuple[Optional[MissingnessPredicate], Any, tuple]:
    if callable(first) and not isinstance(first, (Imputor, type)):
        if not rest:
            raise ConfigurationError("A method must follow the missingness predicate")
        return first, rest[0], rest[1:]
    return None, first, rest


def impute_(
    data: ArrayLike,
    method: str | Imputor | MissingnessPredicate = "interp",
    *args: Any,
    limit: float = 0.1,
    is_missing: Optional[MissingnessPredicate] = None,
    **kwargs: Any,
) -> ArrayLike:
    """Impute ``data`` in place with the named method.

    Args:
        data: Sequence, matrix or DataFrame with missing values.
        method: Method name (see :data:`METHODS`) or an imputor instance.
            A callable in this position is taken as the missingness predicate
            and the method is read from the next positional argument:
            ``impute_(x, math.isnan, "fill", 0.0)``.
        *args: Positional arguments for the imputor constructor.
        limit: Maximum accepted ratio of missing values.
        is_missing: Missingness predicate; defaults to None/NaN/NA detection.
        **kwargs: Keyword arguments for the imputor constructor.

    Returns:
        The imputed data. For numpy arrays under ``drop`` this is a new
        array.

    Raises:
        ConfigurationError: Invalid method, arguments or limit.
        ImputeError: Too many missing values, or unusable data.
    """
    predicate, method, args = _split_predicate(method, args)
    imputor = build_imputor(method, *args, **kwargs)
    dataset = as_dataset(data)
    ctx = Context(
        total=dataset.size,
        limit=limit,
        is_missing=predicate or is_missing or default_is_missing,
    )
    logger.debug("Applying %r to %r (limit=%s)", imputor, dataset, limit)
    return imputor.apply(ctx, dataset)


def impute(data: ArrayLike, *args: Any, **kwargs: Any) -> ArrayLike:
    """Copy ``data`` and call :func:`impute_` on the copy."""
    return impute_(copy.deepcopy(data), *args, **kwargs)


def chain_(
    data: ArrayLike,
    *imputors: Imputor | MissingnessPredicate,
    limit: float = 0.1,
    is_missing: Optional[MissingnessPredicate] = None,
) -> ArrayLike:
    """Apply ``imputors`` in order to ``data`` in place, sharing one context.

    A leading callable that is not an imputor is used as the missingness
    predicate: ``chain_(x, math.isnan, Interpolate(), Drop())``.
    """
    if imputors and not isinstance(imputors[0], Imputor) and callable(imputors[0]):
        is_missing, imputors = imputors[0], imputors[1:]
    return impute_(data, Chain(*imputors), limit=limit, is_missing=is_missing)


def chain(data: ArrayLike, *args: Any, **kwargs: Any) -> ArrayLike:
    """Copy ``data`` and call :func:`chain_` on the copy."""
    return chain_(copy.deepcopy(data), *args, **kwargs)


def _shortcut(method: str) -> tuple[Callable[..., ArrayLike], Callable[..., ArrayLike]]:
    def inplace(data: ArrayLike, *args: Any, limit: float = 1.0, **kwargs: Any) -> ArrayLike:
        return impute_(data, method, *args, limit=limit, **kwargs)

    def copying(data: ArrayLike, *args: Any, limit: float = 1.0, **kwargs: Any) -> ArrayLike:
        return impute(data, method, *args, limit=limit, **kwargs)

    name = f"{METHODS[method].__name__} imputation"
    inplace.__name__ = f"{method}_"
    inplace.__doc__ = f"Shortcut for ``impute_(data, {method!r}, limit=1.0)`` ({name}, in place)."
    copying.__name__ = method
    copying.__doc__ = f"Shortcut for ``impute(data, {method!r}, limit=1.0)`` ({name}, on a copy)."
    return inplace, copying


drop_, drop = _shortcut("drop")
fill_, fill = _shortcut("fill")
interp_, interp = _shortcut("interp")
locf_, locf = _shortcut("locf")
nocb_, nocb = _shortcut("nocb")
svd_, svd = _shortcut("svd")
