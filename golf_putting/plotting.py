"""Plotting utilities for the putting data and model fits."""

import arviz as az
import matplotlib.pyplot as plt
import numpy as np
import scipy.stats as st
from matplotlib.axes import Axes


def format_percentage(ax: Axes) -> Axes:
    ax.yaxis.set_major_formatter(plt.FuncFormatter(lambda x, _: f"{int(x * 100)}%"))
    ax.set_yticks(np.arange(0, 1.0001, 0.05), minor=True)

    return ax


def plot_golf_data(golf_data, ax=None, color="C0"):
    """Observed make rate per distance with 68% Beta intervals."""
    if ax is None:
        fig, ax = plt.subplots()
    bg_color = ax.get_facecolor()
    rv = st.beta(golf_data.successes, golf_data.tries - golf_data.successes)
    ax.vlines(golf_data.distance, *rv.interval(0.68), label=None, color=color)
    ax.plot(
        golf_data.distance,
        golf_data.successes / golf_data.tries,
        "o",
        mec=color,
        mfc=bg_color,
        label=None,
    )
    ax.set_xlabel("Distance from hole (ft)")
    ax.set_ylabel("Percent of putts made")
    ax.set_ylim(bottom=0, top=1)
    format_percentage(ax)
    ax.set_xlim(left=0)
    ax.grid(True, axis="y", alpha=0.7)
    return ax


def plot_curve(ax, distances, p, label, color="grey", linestyle="--"):
    ax.plot(distances, p, linestyle=linestyle, color=color, label=label)
    return ax


def plot_hdi(predictions, ax, hdi_prob=0.68, color="C1"):
    hdi = az.hdi(predictions, hdi_prob=hdi_prob)[predictions.name]
    ax.fill_between(
        predictions["dist"],
        hdi.sel(hdi="lower"),
        hdi.sel(hdi="higher"),
        alpha=0.3,
        label=f"{int(hdi_prob * 100)}% HDI",
        color=color,
    )
    return ax


def plot_predictions(predictions, ax=None, color="C1"):
    ax = ax or plt.gca()
    plot_hdi(predictions, ax=ax, hdi_prob=0.94, color=color)
    plot_hdi(predictions, ax=ax, hdi_prob=0.68, color=color)
    return ax


def plot_residuals(idata, ax=None):
    """Posterior mean and 94% interval of ``y/n - p`` per distance."""
    if ax is None:
        fig, ax = plt.subplots()
    residual = idata.posterior["residual"]
    mean = residual.mean(("chain", "draw"))
    hdi = az.hdi(residual, hdi_prob=0.94)["residual"]
    ax.vlines(
        residual["dist"], hdi.sel(hdi="lower"), hdi.sel(hdi="higher"), color="C0"
    )
    ax.plot(residual["dist"], mean, "o", color="C0")
    ax.axhline(0, color="grey", linestyle="--", linewidth=1)
    ax.set_xlabel("Distance from hole (ft)")
    ax.set_ylabel("Observed minus fitted make rate")
    return ax


def plot_simulated_putts(sim_x, sim_y, sim_made, distance_to_hole, ax=None):
    if ax is None:
        fig, ax = plt.subplots(figsize=(6, 6))
    ax.plot(0, 0, "k.", lw=1, mfc="black", ms=250 / distance_to_hole)
    ax.plot(
        sim_x[~sim_made],
        sim_y[~sim_made],
        ".",
        alpha=0.1,
        mfc="r",
        ms=500 / distance_to_hole,
        mew=0.5,
    )
    ax.plot(
        sim_x[sim_made],
        sim_y[sim_made],
        ".",
        alpha=0.1,
        mfc="g",
        ms=500 / distance_to_hole,
        mew=0.5,
    )
    ax.plot(distance_to_hole, 0, "ko", lw=1, mfc="black", ms=350 / distance_to_hole)
    ax.set_facecolor("#e6ffdb")
    ax.set_title(
        f"Final position of {len(sim_x)} putts from {distance_to_hole} ft.\n"
        f"({100 * sim_made.mean():.1f}% made)"
    )
    ax.set_xlabel("x (ft)")
    ax.set_ylabel("y (ft)")
    return ax


def plot_num_putts(made, distance_to_hole, ax=None):
    """Bar chart of the share of holes finished in each number of putts."""
    if ax is None:
        fig, ax = plt.subplots(figsize=(6, 6))
    ax.vlines(np.arange(1, 1 + len(made)), 0, made, linewidths=50)
    ax.set_ylabel("Percent of attempts")
    ax.set_xlabel("Number of putts")
    ax.set_xticks(range(1, 6))
    ax.set_ylim(0, 1)
    ax.set_xlim(0, 6)
    ax.set_title(f"Total strokes needed from {distance_to_hole} ft.")
    format_percentage(ax)
    return ax


def plot_model_fit(golf_data, predictions, title=None, ax=None):
    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 5))
    plot_golf_data(golf_data, ax=ax)
    plot_predictions(predictions, ax=ax)
    if title:
        ax.set_title(title)
    ax.legend()
    return ax
