from typing import TypeAlias

from .imputor import Imputor
from .simple import Drop, Fill, LOCF, NOCB
from .interpolate import Interpolate
from .svd import SVD
from .chain import Chain

Imputors: TypeAlias = Drop | Fill | Interpolate | LOCF | NOCB | SVD | Chain

__all__ = [
    "Imputor",
    "Imputors",
    "Drop",
    "Fill",
    "Interpolate",
    "LOCF",
    "NOCB",
    "SVD",
    "Chain",
]
