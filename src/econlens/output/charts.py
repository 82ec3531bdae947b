from __future__ import annotations

import logging
import re
from pathlib import Path

import matplotlib
import matplotlib.pyplot as plt

from econlens.models.scenario import ScenarioAnalysisResult

matplotlib.use("Agg")

logger = logging.getLogger(__name__)

COLORS = {
    "gain": "#2ca02c",
    "loss": "#d62728",
    "flat": "#7f7f7f",
    "baseline": "#333333",
}


def _slug(text: str) -> str:
    return re.sub(r"[^A-Za-z0-9]+", "_", text).strip("_") or "portfolio"


def _apply_style(ax: plt.Axes) -> None:
    ax.set_facecolor("white")
    ax.grid(True, alpha=0.3, linestyle="--", axis="x")
    ax.tick_params(labelsize=9)


def _save_figure(fig: plt.Figure, path: Path) -> None:
    fig.savefig(
        path,
        dpi=150,
        bbox_inches="tight",
        facecolor="white",
        edgecolor="none",
    )
    plt.close(fig)


def _bar_color(value: float) -> str:
    if value > 0:
        return COLORS["gain"]
    if value < 0:
        return COLORS["loss"]
    return COLORS["flat"]


def generate_impact_chart(
    result: ScenarioAnalysisResult, name: str, output_dir: Path
) -> Path | None:
    try:
        impacts = result.asset_level_impacts
        if not impacts:
            return None

        output_dir.mkdir(parents=True, exist_ok=True)
        symbols = [r.symbol for r in impacts]
        values = [r.impact_percentage for r in impacts]

        fig, ax = plt.subplots(figsize=(10, max(3.0, 0.5 * len(impacts) + 1.5)))
        fig.suptitle(
            f"{name}: {result.scenario_name}",
            fontsize=14,
            fontweight="bold",
        )
        ax.barh(symbols, values, color=[_bar_color(v) for v in values])
        ax.axvline(0, color=COLORS["baseline"], linewidth=0.8)
        ax.axvline(
            result.total_impact_percentage,
            color=COLORS["baseline"],
            linewidth=1.0,
            linestyle="--",
            label=f"Portfolio {result.total_impact_percentage:+.2f}%",
        )
        ax.invert_yaxis()
        ax.set_xlabel("Impact (%)")
        ax.legend(fontsize=9, loc="lower right")
        _apply_style(ax)

        path = output_dir / f"{_slug(name)}_{result.scenario_id.value}_impact.png"
        _save_figure(fig, path)
        return path
    except Exception:
        logger.warning("Failed to generate impact chart", exc_info=True)
        return None


def generate_comparison_chart(
    results: list[ScenarioAnalysisResult], name: str, output_dir: Path
) -> Path | None:
    try:
        if not results:
            return None

        output_dir.mkdir(parents=True, exist_ok=True)
        labels = [r.scenario_name for r in results]
        values = [r.total_impact_percentage for r in results]

        fig, ax = plt.subplots(figsize=(10, 4))
        fig.suptitle(f"{name}: Scenario Comparison", fontsize=14, fontweight="bold")
        ax.barh(labels, values, color=[_bar_color(v) for v in values])
        ax.axvline(0, color=COLORS["baseline"], linewidth=0.8)
        ax.invert_yaxis()
        ax.set_xlabel("Portfolio impact (%)")
        _apply_style(ax)

        path = output_dir / f"{_slug(name)}_comparison.png"
        _save_figure(fig, path)
        return path
    except Exception:
        logger.warning("Failed to generate comparison chart", exc_info=True)
        return None
