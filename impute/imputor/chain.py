"""Sequential composition of imputors."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from impute.core.context import Context
from impute.core.dataset import Dataset
from impute.errors import ConfigurationError
from .imputor import Imputor

logger = logging.getLogger(__name__)


@dataclass(frozen=True, init=False)
class Chain(Imputor):
    """Apply imputors in order, each one on the output of the previous.

    All steps share one :class:`Context`. Its tally is reset before every
    step, so each step checks the values still missing against the size of
    the original dataset. A failing step propagates its error; the changes
    made by earlier steps are kept.
    """

    imputors: tuple[Imputor, ...]

    def __init__(self, *imputors: Imputor):
        if not imputors:
            raise ConfigurationError("Chain requires at least one imputor")
        for imputor in imputors:
            if not isinstance(imputor, Imputor):
                raise ConfigurationError(f"Chain steps must be imputors, got {type(imputor).__name__}")
        object.__setattr__(self, "imputors", tuple(imputors))

    def _apply(self, ctx: Context, dataset: Dataset) -> None:
        for i, imputor in enumerate(self.imputors, start=1):
            ctx.reset()
            logger.debug("Chain step %d/%d: %r", i, len(self.imputors), imputor)
            imputor._apply(ctx, dataset)
