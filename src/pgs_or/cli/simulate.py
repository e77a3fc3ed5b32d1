"""CLI implementation for the simulate command."""

from pathlib import Path

from pgs_or.data.simulate import simulate_pgs_cohort
from pgs_or.utils.logging import setup_logger, verbosity_to_level


def run_simulate(
    out: str | Path,
    n: int = 10000,
    mean: float = 0.0,
    sd: float = 4.0,
    beta: float = 0.3,
    baseline_prob: float = 0.3,
    seed: int | None = 123,
    verbose: int = 0,
) -> Path:
    """
    Simulate a cohort and write it as CSV with columns pgs, outcome.

    Returns:
        Path of the written file
    """
    logger = setup_logger("pgs_or", level=verbosity_to_level(verbose))

    df = simulate_pgs_cohort(
        n=n, mean=mean, sd=sd, beta=beta, baseline_prob=baseline_prob, seed=seed
    )

    out = Path(out)
    out.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(out, index=False)

    logger.info(f"Simulated {len(df):,} individuals ({int(df['outcome'].sum()):,} cases)")
    logger.info(f"Saved cohort: {out}")
    return out
