"""CLI implementation for the compute command."""

from pathlib import Path
from typing import Any

from pgs_or.config import load_or_config, print_config_summary, validate_or_config
from pgs_or.data.io import read_score_table
from pgs_or.evaluation import (
    ORByQuantileResult,
    OutputDirectories,
    ResultsWriter,
    compute_or_by_quantile,
)
from pgs_or.utils.logging import log_section, setup_logger, verbosity_to_level

# CLI option name -> dotted config key
CLI_ARG_KEYS = {
    "infile": "input.infile",
    "score_col": "input.score_col",
    "outcome_col": "input.outcome_col",
    "breakpoints": "breakpoints",
    "estimator": "estimator.kind",
    "pvalue_method": "estimator.pvalue_method",
    "confidence_level": "estimator.confidence_level",
    "outdir": "output.outdir",
}


def build_cli_args(**kwargs: Any) -> dict[str, Any]:
    """Translate click keyword arguments to dotted config keys, skipping unset values."""
    cli_args = {
        CLI_ARG_KEYS[k]: v for k, v in kwargs.items() if k in CLI_ARG_KEYS and v is not None
    }
    if kwargs.get("no_plot"):
        cli_args["create_plot"] = False
        cli_args["output.save_plot"] = False
    return cli_args


def run_compute(
    config_file: str | None = None,
    cli_args: dict[str, Any] | None = None,
    overrides: list[str] | None = None,
    verbose: int = 0,
    log_file: str | Path | None = None,
) -> ORByQuantileResult:
    """
    Load a score table, compute ORs by quantile and write all outputs.

    Args:
        config_file: Optional YAML config file
        cli_args: Values from CLI options keyed by dotted config path
        overrides: "key=value" override strings
        verbose: Verbosity count from the CLI group
        log_file: Optional log file path

    Returns:
        The computed ORByQuantileResult
    """
    logger = setup_logger("pgs_or", level=verbosity_to_level(verbose), log_file=log_file)
    log_section(logger, "Odds ratios by score quantile")

    try:
        config = load_or_config(config_file=config_file, cli_args=cli_args, overrides=overrides)
        if verbose:
            print_config_summary(config, logger=logger)

        if config.input.infile is None:
            raise ValueError("No input file given: pass --infile or set input.infile in config")

        df = read_score_table(
            config.input.infile,
            score_col=config.input.score_col,
            outcome_col=config.input.outcome_col,
            sep=config.input.sep,
            drop_missing=config.input.drop_missing,
        )
        validate_or_config(config, n_samples=len(df))

        result = compute_or_by_quantile(
            df[config.input.score_col].to_numpy(),
            df[config.input.outcome_col].to_numpy(),
            breakpoints=config.breakpoints,
            create_plot=config.create_plot,
            estimator=config.estimator.kind,
            confidence_level=config.estimator.confidence_level,
            pvalue_method=config.estimator.pvalue_method,
            plot_title=config.output.plot_title,
        )

        writer = ResultsWriter(OutputDirectories.create(config.output.outdir))
        writer.save(
            result,
            settings=config.model_dump(mode="json"),
            save_plot=config.output.save_plot,
            plot_format=config.output.plot_format,
            dpi=config.output.plot_dpi,
        )

        logger.info("OR by quantile:\n" + result.results.to_string(index=False))
        if result.degenerate_bins:
            logger.warning(f"Bins without estimates: {result.degenerate_bins}")
        logger.info(f"Results saved to: {config.output.outdir}")

    except Exception as e:
        logger.error(f"OR computation failed: {e}")
        raise

    return result
