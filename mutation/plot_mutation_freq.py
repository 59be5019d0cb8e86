"""
Mutation Frequency Plot

Draws a ChartSpec as a bar plot and saves it as an image
"""

import logging
from pathlib import Path

import matplotlib.pyplot as plt
import seaborn as sns
from matplotlib.patches import Patch

from mutation.chart_spec import HighlightedChartSpec

logger = logging.getLogger(__name__)

HIGHLIGHT_LEVELS = ("No", "Yes")


def _bar_colors(spec):

    palette = sns.color_palette("colorblind", 2)

    if not isinstance(spec, HighlightedChartSpec):
        return [palette[0]] * len(spec.bars), []

    colors = dict(zip(HIGHLIGHT_LEVELS, palette))

    levels = ["Yes" if bar.highlighted else "No" for bar in spec.bars]

    handles = [
        Patch(facecolor=colors[level], label=level)
        for level in HIGHLIGHT_LEVELS
        if level in levels
    ]

    return [colors[level] for level in levels], handles


def render_chart(spec, title=None, rotation=90, figsize=(8, 5)):
    """
    Draw one bar per gene, left to right in spec order.

    Highlighted charts get a Yes / No fill legend titled by the legend label;
    plain charts get no legend.
    """

    fig, ax = plt.subplots(figsize=figsize)

    colors, handles = _bar_colors(spec)

    positions = list(range(len(spec.bars)))

    if positions:
        ax.bar(
            positions,
            [bar.mutated_samples for bar in spec.bars],
            color=colors,
        )

    ax.set_xticks(positions)

    ax.set_xticklabels(spec.categories, rotation=rotation, ha="center")

    ax.set_xlabel(spec.x_label)

    ax.set_ylabel(spec.y_label)

    if title:
        ax.set_title(title)

    if handles:
        ax.legend(handles=handles, title=spec.legend_label)

    sns.despine(ax=ax)

    fig.tight_layout()

    return fig, ax


def save_chart(spec, path, width=1200, height=800, dpi=100, title=None, rotation=90):
    """Render a chart to an image of width x height pixels"""

    if width <= 0 or height <= 0 or dpi <= 0:
        raise ValueError(f"Invalid image size {width}x{height} at {dpi} dpi")

    path = Path(path)

    path.parent.mkdir(parents=True, exist_ok=True)

    fig, _ = render_chart(
        spec,
        title=title,
        rotation=rotation,
        figsize=(width / dpi, height / dpi),
    )

    try:
        fig.savefig(path, dpi=dpi)
    finally:
        plt.close(fig)

    logger.info(f"Saved: {path}")

    return path
