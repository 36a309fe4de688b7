"""
Visualization Utilities for the Complex Permutation Network

Scatter plots of the training cost against the iteration index.
"""

import matplotlib
matplotlib.use('Agg')  # Non-interactive backend for saving figures
import matplotlib.pyplot as plt
from pathlib import Path
from typing import Sequence, Tuple, Union


def plot_cost(
    points: Sequence[Tuple[float, float]],
    title: str,
    save_path: Union[str, Path],
    figsize: tuple = (8, 8)
) -> Path:
    """
    Scatter plot of (iteration, cost) points saved to an image file.

    Args:
        points: (x, y) pairs in iteration order
        title: Plot title
        save_path: Output file (overwritten)
        figsize: Canvas size in inches

    Returns:
        Path of the written image
    """
    xs = [x for x, _ in points]
    ys = [y for _, y in points]

    fig, ax = plt.subplots(figsize=figsize)
    try:
        ax.scatter(xs, ys, s=4, marker='o')
        ax.set_title(title)
        ax.set_xlabel("epochs")
        ax.set_ylabel("cost")
        save_path = Path(save_path)
        fig.savefig(save_path)
    finally:
        plt.close(fig)

    return save_path


def plot_cost_history(
    points_abs: Sequence[Tuple[float, float]],
    points_phase: Sequence[Tuple[float, float]],
    output_dir: Union[str, Path] = "."
) -> Tuple[Path, Path]:
    """
    Write cost_abs.png and cost_phase.png.

    Args:
        points_abs: (iteration, |cost|)
        points_phase: (iteration, arg cost)
        output_dir: Destination directory

    Returns:
        Paths of the two images
    """
    output_dir = Path(output_dir)
    abs_path = plot_cost(points_abs, "cost abs vs epochs", output_dir / "cost_abs.png")
    phase_path = plot_cost(points_phase, "cost phase vs epochs", output_dir / "cost_phase.png")
    return abs_path, phase_path
