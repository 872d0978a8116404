"""Visualization utilities for seed-depth sweeps.

Charts are written as PNG files into ``out_dir``; filenames carry the board
size and the optional run-id suffix.

Chart map
---------
- sweep_N{size}_time_vs_k.png: Mean time per repetition vs k (log scale)
    - What: total cost of obtaining one solution (all retries included).
    - X: seed depth k. Y: milliseconds.
- sweep_N{size}_success_vs_k.png: Estimated success probability vs k
    - What: probability that a single Las Vegas attempt succeeds.
    - X: seed depth k. Y: 1 / mean(trials) in [0, 1].
"""
from __future__ import annotations

import os
from typing import List

import matplotlib.pyplot as plt
import numpy as np
import seaborn as sns

from .reporting import build_suffix
from .stats import SweepResult


def plot_sweep(result: SweepResult, out_dir: str) -> List[str]:
    """Generate the time and success-probability charts for one sweep.

    Returns
    -------
    List[str]
        Paths of the written images.
    """
    os.makedirs(out_dir, exist_ok=True)
    sns.set_theme(style="whitegrid")
    size = result["size"]
    suffix = build_suffix()

    k_list = sorted(result["entries"])
    ks = np.array(k_list, dtype=int)
    times = np.array([result["entries"][k]["mean_time_ms"] for k in k_list], dtype=float)
    probs = np.array([result["entries"][k]["success_probability"] for k in k_list], dtype=float)
    written: List[str] = []

    plt.figure(figsize=(12, 8))
    # Guard log scale against zero timings on very fast runs.
    plt.semilogy(ks, np.maximum(times, 1e-6), marker="o", linewidth=2, markersize=8, label="Las Vegas + backtracking")
    best = int(ks[int(np.argmin(times))])
    plt.axvline(best, linestyle="--", color="gray", alpha=0.7, label=f"fastest k = {best}")
    plt.xlabel("k (randomly placed queens)", fontsize=12)
    plt.ylabel("Mean time per solution [ms] (log scale)", fontsize=12)
    plt.title(f"Time vs Seed Depth (N = {size}, {result['reps']} reps per k)", fontsize=14)
    plt.legend(fontsize=11)
    plt.grid(True, alpha=0.7)

    fname = os.path.join(out_dir, f"sweep_N{size}_time_vs_k{suffix}.png")
    plt.savefig(fname, bbox_inches="tight", dpi=300)
    plt.close()
    print(f"Saved time chart: {fname}")
    written.append(fname)

    plt.figure(figsize=(12, 8))
    plt.plot(ks, probs, marker="s", linewidth=2, markersize=8, color="tab:orange", label="1 / mean(trials)")
    plt.xlabel("k (randomly placed queens)", fontsize=12)
    plt.ylabel("Estimated success probability", fontsize=12)
    plt.title(f"Success Probability vs Seed Depth (N = {size})", fontsize=14)
    plt.ylim(-0.05, 1.05)
    plt.legend(fontsize=11)
    plt.grid(True, alpha=0.7)

    if len(ks) <= 40:
        for k, p in zip(ks, probs):
            plt.annotate(f"{p:.2f}", (k, p), textcoords="offset points", xytext=(0, 6), ha="center", fontsize=8)

    fname = os.path.join(out_dir, f"sweep_N{size}_success_vs_k{suffix}.png")
    plt.savefig(fname, bbox_inches="tight", dpi=300)
    plt.close()
    print(f"Saved success-probability chart: {fname}")
    written.append(fname)

    return written
