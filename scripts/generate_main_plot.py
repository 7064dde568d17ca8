"""Generate the AUC-vs-sketch-width figure.

Reads the summary written by `experiments/synthetic_bursts.py` and plots
ROC AUC against bucket count, one line per (detector, rows) pair.

Usage:
    python scripts/generate_main_plot.py
    python scripts/generate_main_plot.py --input results/synthetic/experiment_summary.json

"""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns


def read_json(path: Path):
    with path.open("r") as f:
        return json.load(f)


def build_df(summary: dict) -> pd.DataFrame:
    rows = []
    for r in summary.get("results", []):
        cfg = r.get("config", {})
        rows.append(
            {
                "detector": str(r.get("detector")),
                "rows": int(cfg.get("rows")),
                "buckets": int(cfg.get("buckets")),
                "auc": float(r.get("auc")),
            }
        )
    df = pd.DataFrame(rows)
    if df.empty:
        raise ValueError("No rows found in summary['results']")
    return df


def plot_summary(inp: Path, out: Path) -> Path:
    out.parent.mkdir(parents=True, exist_ok=True)
    df = build_df(read_json(inp))
    df = df.sort_values(["detector", "rows", "buckets"])

    sns.set_theme(style="whitegrid")
    plt.figure(figsize=(7, 4))
    groups = list(df.groupby(["detector", "rows"]))
    palette = sns.color_palette(n_colors=len(groups))
    linestyles = {"midas": "--", "midas_r": "-"}
    for i, ((detector, rows), g) in enumerate(groups):
        plt.plot(
            g["buckets"],
            g["auc"],
            label=f"{detector} (rows={rows})",
            color=palette[i],
            linestyle=linestyles.get(detector, ":"),
            linewidth=2.0,
            marker="o",
            markersize=5,
        )
    plt.xscale("log")
    plt.legend()
    plt.title("Burst detection: ROC AUC vs sketch width")
    plt.ylabel("ROC AUC")
    plt.xlabel("buckets per row")
    plt.tight_layout()
    plt.savefig(out, dpi=200)
    plt.close()
    return out


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument(
        "--input",
        type=str,
        default="results/synthetic/experiment_summary.json",
        help="Summary JSON produced by experiments/synthetic_bursts.py.",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="results/figures/auc_vs_buckets.png",
        help="Output PNG path.",
    )
    args = parser.parse_args()

    out = plot_summary(Path(args.input), Path(args.output))
    print(f"Wrote: {out}")


if __name__ == "__main__":
    main()
