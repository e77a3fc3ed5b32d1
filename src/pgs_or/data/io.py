"""
Reading score/outcome tables.

Loads the two columns needed for an OR-by-quantile run from a delimited
text file, coerces them to numbers and (optionally) drops incomplete rows.
"""

import logging
from pathlib import Path

import pandas as pd

logger = logging.getLogger(__name__)

_SEPARATORS = {
    ".csv": ",",
    ".tsv": "\t",
    ".txt": "\t",
    ".tab": "\t",
}


def infer_separator(filepath: str | Path) -> str:
    """
    Infer the column separator from the file extension (compression suffixes ignored).

    Raises:
        ValueError: If the extension is not recognized
    """
    suffixes = [s.lower() for s in Path(filepath).suffixes]
    while suffixes and suffixes[-1] in (".gz", ".bz2", ".zip", ".xz"):
        suffixes.pop()
    suffix = suffixes[-1] if suffixes else ""
    if suffix not in _SEPARATORS:
        raise ValueError(
            f"Unsupported file format: {suffix or '<none>'}. "
            f"Expected one of {sorted(_SEPARATORS)} or pass an explicit separator. "
            f"File: {filepath}"
        )
    return _SEPARATORS[suffix]


def validate_required_columns(df: pd.DataFrame, required: list[str]) -> None:
    """
    Validate that required columns are present in DataFrame.

    Raises:
        ValueError: If required columns are missing
    """
    missing = [col for col in required if col not in df.columns]
    if missing:
        raise ValueError(
            f"Required columns missing: {missing}. Available columns: {list(df.columns)}"
        )
    logger.debug(f"Validated required columns: {required}")


def coerce_numeric_columns(df: pd.DataFrame, columns: list[str]) -> pd.DataFrame:
    """
    Coerce columns to numeric dtype, converting unparseable values to NaN.

    Example:
        >>> df = pd.DataFrame({"pgs": ["0.5", "1.2", "bad"]})
        >>> out = coerce_numeric_columns(df, ["pgs"])
        >>> bool(pd.isna(out.loc[2, "pgs"]))
        True
    """
    df = df.copy()
    for col in columns:
        n_before = int(df[col].isna().sum())
        df[col] = pd.to_numeric(df[col], errors="coerce")
        n_coerced = int(df[col].isna().sum()) - n_before
        if n_coerced:
            logger.warning(f"Column '{col}': {n_coerced:,} non-numeric value(s) set to missing")
    return df


def read_score_table(
    filepath: str | Path,
    score_col: str = "pgs",
    outcome_col: str = "outcome",
    sep: str | None = None,
    drop_missing: bool = True,
) -> pd.DataFrame:
    """
    Read a score and an outcome column from a delimited file.

    Args:
        filepath: Path to CSV/TSV file (optionally compressed)
        score_col: Column holding the continuous risk score
        outcome_col: Column holding the binary outcome (1 = case, 0 = control)
        sep: Column separator (default: inferred from extension)
        drop_missing: Drop rows where either column is missing (default: True)

    Returns:
        DataFrame with columns [score_col, outcome_col]

    Raises:
        FileNotFoundError: If filepath does not exist
        ValueError: If the format is unsupported or columns are missing

    Example:
        >>> df = read_score_table("cohort.csv", score_col="pgs", outcome_col="outcome")
        >>> list(df.columns)
        ['pgs', 'outcome']
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"File not found: {filepath}")

    if sep is None:
        sep = infer_separator(filepath)

    logger.info(f"Reading score table: {filepath}")
    header = pd.read_csv(filepath, sep=sep, nrows=0)
    validate_required_columns(header, [score_col, outcome_col])

    df = pd.read_csv(filepath, sep=sep, usecols=[score_col, outcome_col])
    df = df[[score_col, outcome_col]]
    logger.info(f"Loaded {len(df):,} rows")

    df = coerce_numeric_columns(df, [score_col, outcome_col])

    if drop_missing:
        n_before = len(df)
        df = df.dropna(subset=[score_col, outcome_col]).reset_index(drop=True)
        n_dropped = n_before - len(df)
        if n_dropped:
            logger.info(f"Dropped {n_dropped:,} row(s) with missing {score_col}/{outcome_col}")

    return df
