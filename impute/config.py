"""Imputation configuration: YAML parsing and imputor construction.

Example document::

    limit: 0.3
    missing_values: [-999, ""]
    steps:
      - method: interp
      - method: locf
      - method: nocb
      - method: svd
        kwargs: {rank: 2, max_iter: 200}
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from impute.api import METHODS, build_imputor
from impute.core.context import MissingnessPredicate, is_missing
from impute.errors import ConfigurationError
from impute.imputor import Chain, Imputor


@dataclass(frozen=True)
class StepConfig:
    method: str
    args: tuple[Any, ...] = ()
    kwargs: dict[str, Any] = field(default_factory=dict)

    def build(self) -> Imputor:
        return build_imputor(self.method, *self.args, **self.kwargs)


@dataclass(frozen=True)
class ImputeConfig:
    steps: tuple[StepConfig, ...]
    limit: float = 0.1
    missing_values: tuple[Any, ...] = ()

    def build(self) -> Imputor:
        """Single imputor for one step, a :class:`Chain` otherwise."""
        imputors = [step.build() for step in self.steps]
        return imputors[0] if len(imputors) == 1 else Chain(*imputors)

    def predicate(self) -> MissingnessPredicate:
        """Default predicate extended with the configured marker values."""
        if not self.missing_values:
            return is_missing
        markers = self.missing_values

        def predicate(value: Any) -> bool:
            return is_missing(value) or any(value == marker for marker in markers)

        return predicate


def parse_step(step: Any) -> StepConfig:
    """Parse a step given as a method name or a mapping."""
    if isinstance(step, str):
        step = {"method": step}
    if not isinstance(step, dict) or "method" not in step:
        raise ConfigurationError(f"Invalid step: {step!r}")
    if step["method"] not in METHODS:
        raise ConfigurationError(
            f"Unknown imputation method {step['method']!r}. Available: {', '.join(METHODS)}"
        )
    return StepConfig(
        method=step["method"],
        args=tuple(step.get("args") or ()),
        kwargs=dict(step.get("kwargs") or {}),
    )


def parse_config(document: dict[str, Any]) -> ImputeConfig:
    """Parse a configuration mapping loaded from YAML."""
    if not isinstance(document, dict):
        raise ConfigurationError("Configuration must be a mapping")
    steps = tuple(parse_step(s) for s in document.get("steps") or ())
    if not steps:
        raise ConfigurationError("Configuration requires at least one step")

    limit = float(document.get("limit", 0.1))
    if not 0.0 <= limit <= 1.0:
        raise ConfigurationError(f"limit must be within [0, 1], got {limit}")

    return ImputeConfig(
        steps=steps,
        limit=limit,
        missing_values=tuple(document.get("missing_values") or ()),
    )


def load_config(path: Path) -> ImputeConfig:
    """Load an imputation configuration from YAML."""
    with open(path) as f:
        return parse_config(yaml.safe_load(f))
