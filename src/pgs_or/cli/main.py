"""
Main CLI entry point for pgs-or.

Provides subcommands:
  - pgs-or compute: Odds ratios by score quantile from a CSV/TSV table
  - pgs-or simulate: Write a simulated score/outcome cohort
"""

import click

from pgs_or import __version__
from pgs_or.metrics.odds_ratio import VALID_ESTIMATORS, VALID_PVALUE_METHODS


@click.group()
@click.version_option(version=__version__, prog_name="pgs-or")
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Increase verbosity (-v for debug output)",
)
@click.pass_context
def cli(ctx, verbose):
    """
    pgs-or: odds ratios of a binary outcome across quantiles of a risk score.

    Each quantile bin is compared against the lowest bin (the baseline).
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


@cli.command("compute")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True),
    help="Path to YAML configuration file",
)
@click.option(
    "--infile",
    type=click.Path(exists=True),
    default=None,
    help="CSV/TSV file with score and outcome columns",
)
@click.option("--score-col", default=None, help="Score column name (default: pgs)")
@click.option("--outcome-col", default=None, help="Outcome column name (default: outcome)")
@click.option(
    "--breakpoints",
    default=None,
    help="Comma-separated quantile breakpoints in [0, 1] (default: deciles)",
)
@click.option(
    "--estimator",
    type=click.Choice(list(VALID_ESTIMATORS)),
    default=None,
    help="Odds ratio estimator (default: conditional)",
)
@click.option(
    "--pvalue-method",
    type=click.Choice(list(VALID_PVALUE_METHODS)),
    default=None,
    help="P-value method (default: chi_square)",
)
@click.option(
    "--confidence-level",
    type=float,
    default=None,
    help="Confidence level of the OR intervals (default: 0.95)",
)
@click.option("--no-plot", is_flag=True, help="Do not create or save the OR plot")
@click.option(
    "--outdir",
    type=click.Path(),
    default=None,
    help="Output directory for results (default: results/)",
)
@click.option(
    "--override",
    multiple=True,
    help="Override config values (format: key=value or nested.key=value)",
)
@click.option("--log-file", type=click.Path(), default=None, help="Also write logs to this file")
@click.pass_context
def compute(ctx, config, override, log_file, **kwargs):
    """Compute odds ratios for each score quantile versus the lowest quantile."""
    from pgs_or.cli.compute import build_cli_args, run_compute

    run_compute(
        config_file=config,
        cli_args=build_cli_args(**kwargs),
        overrides=list(override),
        verbose=ctx.obj.get("verbose", 0),
        log_file=log_file,
    )


@cli.command("simulate")
@click.option("--out", type=click.Path(), required=True, help="Output CSV path")
@click.option("--n", "n", type=int, default=10000, show_default=True, help="Number of individuals")
@click.option("--mean", type=float, default=0.0, show_default=True, help="Score mean")
@click.option("--sd", type=float, default=4.0, show_default=True, help="Score standard deviation")
@click.option("--beta", type=float, default=0.3, show_default=True, help="Log OR per score unit")
@click.option(
    "--baseline-prob",
    type=float,
    default=0.3,
    show_default=True,
    help="Case probability at score 0",
)
@click.option("--seed", type=int, default=123, show_default=True, help="Random seed")
@click.pass_context
def simulate(ctx, **kwargs):
    """Simulate scores and outcomes from a logistic model."""
    from pgs_or.cli.simulate import run_simulate

    run_simulate(verbose=ctx.obj.get("verbose", 0), **kwargs)


def main():
    """Entry point for console script."""
    cli(obj={})


if __name__ == "__main__":
    main()
