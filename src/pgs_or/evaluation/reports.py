"""
ResultsWriter: output directory layout and serialization of OR-by-quantile runs.

Layout under the output root::

    core/run_settings.json
    core/or_results.csv
    core/quantiles.json
    diagnostics/or_bins.csv
    diagnostics/diagnostics.json
    plots/or_by_quantile.<fmt>
"""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pgs_or.evaluation.or_by_quantile import ORByQuantileResult

logger = logging.getLogger(__name__)


@dataclass
class OutputDirectories:
    """
    Structured output directory paths.

    Attributes:
        root: Base output directory
        core: Results table, breakpoints and run settings
        diag: Full bin table and per-bin diagnostics
        plots: Figures
    """

    root: str
    core: str
    diag: str
    plots: str

    @classmethod
    def create(cls, root: str | Path, exist_ok: bool = True) -> "OutputDirectories":
        """
        Create output directory structure.

        Args:
            root: Base output directory path
            exist_ok: If True, do not raise if directories exist

        Returns:
            OutputDirectories instance with all paths created
        """
        root_path = Path(root)
        structure = {
            "core": "core",
            "diag": "diagnostics",
            "plots": "plots",
        }

        paths = {"root": str(root_path)}
        for key, rel_path in structure.items():
            abs_path = root_path / rel_path
            abs_path.mkdir(parents=True, exist_ok=exist_ok)
            paths[key] = str(abs_path)

        logger.debug(f"Created output structure at: {root}")
        return cls(**paths)

    def get_path(self, category: str, filename: str) -> str:
        """
        Construct full path for a file in a specific category.

        Raises:
            ValueError: If category is invalid
        """
        if category == "root" or not hasattr(self, category):
            raise ValueError(f"Unknown output category: {category}")
        return os.path.join(getattr(self, category), filename)


class ResultsWriter:
    """
    High-level API for writing OR-by-quantile results.

    Usage:
        writer = ResultsWriter(OutputDirectories.create("results"))
        paths = writer.save(result, settings=config.model_dump(mode="json"))
    """

    def __init__(self, output_dirs: OutputDirectories):
        self.dirs = output_dirs

    def save_run_settings(self, settings: dict[str, Any]) -> str:
        """Save run configuration to core/run_settings.json."""
        path = self.dirs.get_path("core", "run_settings.json")
        with open(path, "w") as f:
            json.dump(settings, f, indent=2, sort_keys=True, default=str)
        logger.info(f"Saved run settings: {path}")
        return path

    def save_results_table(self, result: ORByQuantileResult) -> str:
        """Save the per-bin OR table to core/or_results.csv."""
        path = self.dirs.get_path("core", "or_results.csv")
        result.results.to_csv(path, index=False)
        logger.info(f"Saved OR results: {path}")
        return path

    def save_quantiles(self, result: ORByQuantileResult) -> str:
        """Save the breakpoints used to core/quantiles.json."""
        path = self.dirs.get_path("core", "quantiles.json")
        with open(path, "w") as f:
            json.dump({"quantiles": result.quantiles}, f, indent=2)
        logger.info(f"Saved quantiles: {path}")
        return path

    def save_bins(self, result: ORByQuantileResult) -> str:
        """Save the full bin table (cutoffs, counts, status) to diagnostics/or_bins.csv."""
        path = self.dirs.get_path("diag", "or_bins.csv")
        result.bins.to_csv(path, index=False)
        logger.info(f"Saved bin table: {path}")
        return path

    def save_diagnostics(self, result: ORByQuantileResult) -> str:
        """Save degenerate-bin messages to diagnostics/diagnostics.json."""
        path = self.dirs.get_path("diag", "diagnostics.json")
        payload = {
            "degenerate_bins": result.degenerate_bins,
            "messages": list(result.diagnostics),
        }
        with open(path, "w") as f:
            json.dump(payload, f, indent=2)
        if result.diagnostics:
            logger.info(f"Saved {len(result.diagnostics)} diagnostic message(s): {path}")
        return path

    def save_plot(
        self, result: ORByQuantileResult, plot_format: str = "png", dpi: int = 150
    ) -> str | None:
        """
        Save the OR figure to plots/or_by_quantile.<plot_format>.

        Returns:
            Path to saved file, or None if the result carries no figure
        """
        if result.plot is None:
            logger.debug("No plot in result; skipping figure export")
            return None
        path = self.dirs.get_path("plots", f"or_by_quantile.{plot_format}")
        result.plot.savefig(path, dpi=dpi, bbox_inches="tight")
        logger.info(f"Saved OR plot: {path}")
        return path

    def save(
        self,
        result: ORByQuantileResult,
        settings: dict[str, Any] | None = None,
        save_plot: bool = True,
        plot_format: str = "png",
        dpi: int = 150,
    ) -> dict[str, str]:
        """
        Write every artifact of a run.

        Returns:
            Mapping of artifact name to written path
        """
        paths = {
            "results": self.save_results_table(result),
            "quantiles": self.save_quantiles(result),
            "bins": self.save_bins(result),
            "diagnostics": self.save_diagnostics(result),
        }
        if settings is not None:
            paths["settings"] = self.save_run_settings(settings)
        if save_plot:
            plot_path = self.save_plot(result, plot_format=plot_format, dpi=dpi)
            if plot_path is not None:
                paths["plot"] = plot_path
        return paths
