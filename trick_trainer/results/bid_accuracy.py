# trick_trainer/results/bid_accuracy.py
"""
Bid accuracy summary for a self-play CSV.

    python -m trick_trainer.results.bid_accuracy trick_trainer_results/trick_trainer_hands.csv
"""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import List

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from ..game_log import FIELDNAMES
from ..paths import resolve_results_path


def load_hand_rows(csv_path: str | Path) -> pd.DataFrame:
    """Read a hands CSV, keeping only rows that carry a bid."""
    df = pd.read_csv(csv_path)
    missing = [c for c in FIELDNAMES if c not in df.columns]
    if missing:
        raise ValueError(f"{csv_path} is missing columns: {', '.join(missing)}")
    df = df.dropna(subset=["bid"]).copy()
    df["bid"] = df["bid"].astype(int)
    df["tricks_won"] = df["tricks_won"].astype(int)
    # negative -> undertrick; positive -> overtrick
    df["miss"] = df["tricks_won"] - df["bid"]
    df["made"] = df["miss"] == 0
    return df


def summarize_bid_accuracy(df: pd.DataFrame) -> pd.DataFrame:
    """
    Per-seat made rate and miss statistics.

    ci95 is the normal-approximation half-width for the made rate.
    """
    summary = (
        df.groupby("seat")
          .agg(
              hands=("made", "size"),
              made_rate=("made", "mean"),
              mean_miss=("miss", "mean"),
              mean_abs_miss=("miss", lambda s: s.abs().mean()),
          )
          .reset_index()
    )
    p = summary["made_rate"]
    summary["ci95"] = 1.96 * np.sqrt(p * (1 - p) / summary["hands"])
    return summary.sort_values("made_rate", ascending=False).reset_index(drop=True)


def plot_bid_miss_histogram(df: pd.DataFrame, out_path: str | Path) -> Path:
    """Histogram of tricks_won - bid per seat, written to `out_path`."""
    seats = sorted(df["seat"].unique())
    miss_min = df["miss"].min()
    miss_max = df["miss"].max()
    # integer-centered bins shared across seats
    bins = np.arange(np.floor(miss_min) - 0.5, np.ceil(miss_max) + 1.5, 1.0)

    fig, axes = plt.subplots(1, len(seats), figsize=(4 * len(seats), 4), sharey=True)
    axes = np.atleast_1d(axes)
    for ax, seat in zip(axes, seats):
        ax.hist(df[df["seat"] == seat]["miss"], bins=bins, rwidth=0.8)
        ax.axvline(0, linestyle="--")  # exact-bid line
        ax.set_title(seat)
        ax.set_xlabel("miss (tricks_won - bid)")
        ax.grid(True, axis="y", linestyle=":", alpha=0.5)
    axes[0].set_ylabel("Hands")

    fig.suptitle("Bid miss by seat\n(negative = under, positive = over)")
    fig.tight_layout()
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(out_path)
    plt.close(fig)
    return out_path


def main(argv: List[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Summarise bid accuracy from a hands CSV.")
    parser.add_argument("csv", help="Hands CSV written by trick-trainer.")
    parser.add_argument(
        "--plot",
        default="bid_miss_histogram.png",
        help="Where to write the miss histogram (default: %(default)s).",
    )
    args = parser.parse_args(argv)

    df = load_hand_rows(resolve_results_path(args.csv))
    if df.empty:
        raise SystemExit("No bid rows found; run trick-trainer with --ai-mode bidding.")

    summary = summarize_bid_accuracy(df)
    print(summary.to_string(index=False, float_format=lambda x: f"{x:.3f}"))
    plot_path = plot_bid_miss_histogram(df, resolve_results_path(args.plot))
    print(f"Wrote {plot_path}")


if __name__ == "__main__":
    main()
