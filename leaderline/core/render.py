"""
Matplotlib PNG preview of a computed line: region frame, drop shadow, outline,
path, plugs and their outlines, labels.
Screen coordinates (y grows downward) are kept by inverting the y axis.
"""

from __future__ import annotations

import re
import warnings
from pathlib import Path

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np

from leaderline.core.config import DEFAULT_DASH_PATTERN, RENDER_HEIGHT_PX, RENDER_WIDTH_PX
from leaderline.core.markers import plug_polygons
from leaderline.core.path import sample_path
from leaderline.core.types import LineGeometry, OutlineOptions, PlacedPlug

_CSS_RGB = re.compile(r"rgba?\(([^)]*)\)", re.IGNORECASE)


def mpl_color(color: str, auto: str = "white") -> str | tuple[float, ...]:
    """Matplotlib color for a CSS color string; rgb()/rgba() are converted, 'auto' maps to `auto`."""
    if color == "auto":
        return auto
    if color == "transparent":
        return "none"
    m = _CSS_RGB.fullmatch(color.strip())
    if m is None:
        return color
    parts = [float(v) for v in m.group(1).split(",")]
    rgb = tuple(max(0.0, min(1.0, v / 255.0)) for v in parts[:3])
    alpha = max(0.0, min(1.0, parts[3])) if len(parts) > 3 else 1.0
    return (*rgb, alpha)


def dash_pattern(dash_array: str | None) -> str | tuple[int, tuple[float, ...]]:
    """
    Matplotlib linestyle for an SVG dash array ("5,5", "8 4 2 4").
    Odd-length arrays repeat, as in SVG; unparseable or all-zero arrays use the default pattern.
    """
    if not dash_array:
        return "solid"
    try:
        values = [float(v) for v in re.split(r"[\s,]+", dash_array.strip()) if v]
    except ValueError:
        values = []
    if not values or any(v < 0 for v in values) or sum(values) == 0:
        values = [float(v) for v in DEFAULT_DASH_PATTERN.split(",")]
    if len(values) % 2:
        values = values * 2
    return (0, tuple(values))


def _draw_plug(ax: plt.Axes, plug: PlacedPlug | None, line_color: str, alpha: float) -> None:
    if plug is None:
        return
    color = mpl_color(plug.spec.color or line_color)
    outline: OutlineOptions | None = plug.spec.outline
    for xy in plug_polygons(plug):
        if plug.shape.closed:
            edge = "none" if outline is None else mpl_color(outline.color)
            lw = 0 if outline is None else 2.0 * outline.width
            ax.fill(xy[:, 0], xy[:, 1], facecolor=color, edgecolor=edge, linewidth=lw, alpha=alpha, zorder=4)
        else:
            if outline is not None:
                ax.plot(
                    xy[:, 0], xy[:, 1],
                    color=mpl_color(outline.color),
                    linewidth=1 + 2 * outline.width,
                    alpha=alpha * outline.opacity,
                    zorder=4,
                )
            ax.plot(xy[:, 0], xy[:, 1], color=color, linewidth=1, alpha=alpha, zorder=4)


def _new_fig(width_px: int, height_px: int) -> tuple[plt.Figure, plt.Axes]:
    fig = plt.figure(
        figsize=(width_px / 100.0, height_px / 100.0),
        dpi=100,
        constrained_layout=False,
    )
    ax = fig.add_axes([0, 0, 1, 1])
    ax.axis("off")
    return fig, ax


def render_line_png(
    geometry: LineGeometry,
    output_path: str | Path,
    width_px: int = RENDER_WIDTH_PX,
    height_px: int = RENDER_HEIGHT_PX,
    show_region: bool = True,
    scale: int = 1,
) -> None:
    """Render one line to PNG. scale multiplies output resolution (1x, 2x, 4x)."""
    w, h = width_px * scale, height_px * scale
    fig, ax = _new_fig(w, h)
    r = geometry.region
    xy = sample_path(geometry.path)
    alpha = max(0.0, min(1.0, geometry.opacity))
    linestyle = dash_pattern(geometry.dash_array)

    if show_region:
        ax.add_patch(
            plt.Rectangle((r.x, r.y), r.width, r.height, fill=False, edgecolor="lightgray", linestyle="--", linewidth=1)
        )
    shadow = geometry.drop_shadow
    if shadow is not None:
        shifted = xy + np.array([shadow.dx, shadow.dy])
        ax.plot(
            shifted[:, 0], shifted[:, 1],
            color=mpl_color(shadow.color),
            linewidth=geometry.stroke_width,
            linestyle=linestyle,
            alpha=alpha * max(0.0, min(1.0, shadow.opacity)),
            zorder=1,
        )
    if geometry.outline is not None:
        ax.plot(
            xy[:, 0], xy[:, 1],
            color=mpl_color(geometry.outline.color),
            linewidth=geometry.stroke_width + 2.0 * geometry.outline.width,
            alpha=alpha * geometry.outline.opacity,
            solid_capstyle="round",
            zorder=2,
        )
    ax.plot(
        xy[:, 0], xy[:, 1],
        color=mpl_color(geometry.color),
        linewidth=geometry.stroke_width,
        linestyle=linestyle,
        alpha=alpha,
        solid_capstyle="round",
        zorder=3,
    )
    _draw_plug(ax, geometry.start_plug, geometry.color, alpha)
    _draw_plug(ax, geometry.end_plug, geometry.color, alpha)

    for label in geometry.labels:
        o = label.options
        bbox = None
        if o.background_color != "transparent":
            bbox = {"facecolor": mpl_color(o.background_color), "edgecolor": "none", "pad": o.padding}
        ax.text(
            label.position.x, label.position.y, label.text,
            fontsize=o.font_size * 0.75,
            color=mpl_color(o.color),
            ha="center", va="center",
            bbox=bbox,
            zorder=5,
        )

    ax.set_xlim(r.x, r.x + max(1.0, r.width))
    ax.set_ylim(r.y + max(1.0, r.height), r.y)
    ax.set_aspect("equal", adjustable="datalim")
    with warnings.catch_warnings():
        warnings.filterwarnings("ignore", message=".*constrained_layout.*", category=UserWarning)
        fig.savefig(output_path, dpi=100, facecolor="white")
    plt.close(fig)
