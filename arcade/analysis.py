"""Matplotlib analysis charts — outcome mix per difficulty, goal rate vs aim, shot paths."""

import os
import random

import matplotlib
matplotlib.use("Agg")  # Non-interactive backend
import matplotlib.pyplot as plt
import matplotlib.patches as patches
import numpy as np

from penalty.types import Outcome, ShotParams
from penalty.keeper import DIFFICULTY_LEVELS
from penalty.session import simulate_shot
from penalty.shots import get_shot, list_shots, SHOT_PRESETS
from penalty import pitch

OUTCOME_COLORS = {
    Outcome.GOAL: "#38b764",
    Outcome.SAVE: "#e43b44",
    Outcome.MISS: "#8b9bb4",
}
DIFFICULTY_COLORS = {"easy": "#38b764", "medium": "#ffcd75", "hard": "#e43b44"}

BACKGROUND = "#1a1c2c"
INK = "#f4f4f4"
MUTED = "#94b0c2"
GRID = "#333c57"


def _style_chart(ax, title):
    """Pixel-palette dark styling shared by every chart."""
    ax.set_facecolor(BACKGROUND)
    ax.set_title(title, color=INK, fontsize=12, fontweight="bold", loc="left")
    ax.tick_params(colors=MUTED, labelsize=8, length=0)
    for side, spine in ax.spines.items():
        spine.set_visible(side in ("left", "bottom"))
        spine.set_color(GRID)
    for axis in (ax.xaxis, ax.yaxis):
        axis.label.set_color(MUTED)
    ax.grid(color=GRID, linewidth=0.5, alpha=0.6)
    ax.set_axisbelow(True)


def outcome_rates(shot: ShotParams, difficulty: str, trials: int = 200, seed: int = 42) -> dict:
    """Fraction of goal/save/miss for one shot over many keeper rolls."""
    rng = random.Random(seed)
    counts = {o: 0 for o in Outcome}
    for _ in range(trials):
        _, outcome = simulate_shot(shot, difficulty, rng)
        if outcome is not None:
            counts[outcome] += 1
    return {o: counts[o] / trials for o in Outcome}


def chart_outcomes_by_difficulty(save_path=None, trials=200):
    """Chart 1: Outcome mix for every preset shot at every difficulty.

    Stacked bars, one group per shot preset.
    """
    shot_keys = list_shots()
    levels = list(DIFFICULTY_LEVELS)

    fig, axes = plt.subplots(1, len(levels), figsize=(15, 5), sharey=True)
    fig.set_facecolor(BACKGROUND)

    x = np.arange(len(shot_keys))
    for ax, level in zip(axes, levels):
        _style_chart(ax, DIFFICULTY_LEVELS[level].label)
        rates = [outcome_rates(get_shot(k), level, trials) for k in shot_keys]
        bottom = np.zeros(len(shot_keys))
        for outcome in Outcome:
            values = np.array([r[outcome] for r in rates]) * 100
            ax.bar(x, values, bottom=bottom, color=OUTCOME_COLORS[outcome],
                   label=outcome.value, width=0.7)
            bottom += values
        ax.set_xticks(x)
        ax.set_xticklabels(shot_keys, rotation=45, ha="right")
        ax.set_ylim(0, 100)

    axes[0].set_ylabel("Share of shots (%)")
    axes[-1].legend(facecolor=BACKGROUND, edgecolor=GRID, labelcolor=INK, fontsize=9)

    plt.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=150, facecolor=fig.get_facecolor())
    return fig


def chart_goal_rate_vs_aim(save_path=None, power=100, trials=100):
    """Chart 2: Goal rate across the aim range, one line per difficulty."""
    aims = np.linspace(pitch.AIM_RANGE[0], pitch.AIM_RANGE[1], 19)

    fig, ax = plt.subplots(figsize=(8, 5))
    fig.set_facecolor(BACKGROUND)
    _style_chart(ax, f"Goal Rate vs Aim (power {power}%)")

    for level, profile in DIFFICULTY_LEVELS.items():
        goal_rates = [
            outcome_rates(ShotParams(aim=float(a), power=power), level, trials)[Outcome.GOAL] * 100
            for a in aims
        ]
        ax.plot(aims, goal_rates, color=DIFFICULTY_COLORS[level], marker="o",
                linewidth=2, markersize=5, label=f"{profile.label} (reach x{profile.reach_multiplier})")

    ax.set_xlabel("Aim (degrees)")
    ax.set_ylabel("Goal Rate (%)")
    ax.set_ylim(0, 105)
    ax.legend(facecolor=BACKGROUND, edgecolor=GRID, labelcolor=INK, fontsize=9)

    plt.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=150, facecolor=fig.get_facecolor())
    return fig


def chart_shot_paths(save_path=None, difficulty="medium", seed=7):
    """Chart 3: Ball paths for every preset drawn over the goal mouth."""
    rng = random.Random(seed)

    fig, ax = plt.subplots(figsize=(6, 7.5))
    fig.set_facecolor(BACKGROUND)
    _style_chart(ax, f"Shot Paths ({DIFFICULTY_LEVELS[difficulty].label} keeper)")

    ax.add_patch(patches.Rectangle(
        (pitch.GOAL_LEFT, pitch.GOAL_Y), pitch.GOAL_WIDTH, pitch.GOAL_HEIGHT,
        fill=False, edgecolor="#f4f4f4", linewidth=1.5,
    ))
    ax.add_patch(patches.Rectangle(
        (pitch.KEEPER_START_X, pitch.KEEPER_Y), pitch.KEEPER_WIDTH, pitch.KEEPER_HEIGHT,
        color="#e43b44", alpha=0.5,
    ))

    for key in list_shots():
        positions, outcome = simulate_shot(get_shot(key), difficulty, rng)
        xs = [p.x for p in positions]
        ys = [p.y for p in positions]
        color = OUTCOME_COLORS.get(outcome, "#ffffff")
        ax.plot(xs, ys, color=color, linewidth=1.5, alpha=0.9)
        ax.annotate(SHOT_PRESETS[key]["label"], (xs[-1], ys[-1]), color="#cccccc", fontsize=7)

    ax.set_xlim(0, pitch.FIELD_WIDTH)
    ax.set_ylim(pitch.FIELD_HEIGHT, 0)  # y grows downward on the pitch
    ax.set_aspect("equal")
    ax.set_xlabel("x (pitch units)")
    ax.set_ylabel("y (pitch units)")

    plt.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=150, facecolor=fig.get_facecolor())
    return fig


def generate_all_charts(output_dir="output"):
    """Generate every chart and save to output_dir. Returns the saved paths."""
    os.makedirs(output_dir, exist_ok=True)
    charts = [
        ("outcomes_by_difficulty.png", chart_outcomes_by_difficulty),
        ("goal_rate_vs_aim.png", chart_goal_rate_vs_aim),
        ("shot_paths.png", chart_shot_paths),
    ]
    paths = []
    for filename, func in charts:
        path = os.path.join(output_dir, filename)
        fig = func(save_path=path)
        plt.close(fig)
        print(f"  Saved {path}")
        paths.append(path)
    return paths
