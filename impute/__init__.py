"""
impute: fill or drop missing values in sequences, matrices and tables
"""

from .api import (
    METHODS,
    build_imputor,
    chain,
    chain_,
    drop,
    drop_,
    fill,
    fill_,
    impute,
    impute_,
    interp,
    interp_,
    locf,
    locf_,
    nocb,
    nocb_,
    svd,
    svd_,
)
from .core.context import Context, is_missing
from .core.missing import missing_mask, missing_patterns, missing_ratio
from .errors import AlgorithmError, ConfigurationError, ImputeError
from .imputor import SVD, Chain, Drop, Fill, Imputor, Interpolate, LOCF, NOCB

__version__ = "0.1.0"
