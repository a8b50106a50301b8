"""Command line interface for imputing CSV files."""

from __future__ import annotations

import logging
from pathlib import Path

import cyclopts
import pandas as pd

from impute.api import METHODS, impute_
from impute.config import ImputeConfig, StepConfig, load_config
from impute.core.missing import missing_patterns
from impute.errors import AlgorithmError, ImputeError

logger = logging.getLogger(__name__)

app = cyclopts.App(help="Impute or drop missing values in CSV files")


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


@app.command()
def run(
    input: Path,
    method: str = "interp",
    limit: float | None = None,
    config: Path | None = None,
    output: Path | None = None,
    verbose: bool = False,
) -> None:
    """Impute a CSV file and write the result.

    Args:
        input: CSV file to read.
        method: Imputation method (drop, fill, interp, locf, nocb, svd).
            Ignored when a config file is given.
        limit: Maximum accepted ratio of missing values. Overrides the
            config value; defaults to 0.1.
        config: YAML file describing the imputation steps.
        output: Destination CSV. Printed to stdout when omitted.
        verbose: Enable debug logging.
    """
    _setup_logging(verbose)

    try:
        cfg = load_config(config) if config else ImputeConfig(steps=(StepConfig(method),))
        imputor = cfg.build()
        df = pd.read_csv(input)
        result = impute_(
            df,
            imputor,
            limit=cfg.limit if limit is None else limit,
            is_missing=cfg.predicate(),
        )
    except (ValueError, TypeError, ImputeError, AlgorithmError) as e:
        logger.error("Imputation of %s failed: %s", input, e)
        raise SystemExit(1) from e

    if output is None:
        print(result.to_csv(index=False), end="")
    else:
        output.parent.mkdir(parents=True, exist_ok=True)
        result.to_csv(output, index=False)
        logger.info("Wrote %d rows to %s", len(result), output)


@app.command()
def summary(input: Path, verbose: bool = False) -> None:
    """Print the missingness patterns of a CSV file.

    Args:
        input: CSV file to read.
        verbose: Enable debug logging.
    """
    _setup_logging(verbose)
    patterns = missing_patterns(pd.read_csv(input))
    print(patterns.to_string(index=False))


@app.command()
def methods() -> None:
    """List the available imputation methods."""
    for name, imputor_type in METHODS.items():
        print(f"  {name}: {imputor_type.__name__}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
