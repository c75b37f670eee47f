"""
Central configuration for leader line geometry.
All tunable values live here; no magic numbers in other modules.
"""

from __future__ import annotations

# ----- Line defaults -----
DEFAULT_COLOR: str = "#ff6b6b"
DEFAULT_STROKE_WIDTH: float = 2.0
DEFAULT_OPACITY: float = 1.0

DEFAULT_CURVATURE: float = 0.2
"""Bow factor for arc/fluid paths; ignored by other path types."""

# ----- Plugs (markers) -----
DEFAULT_PLUG_SIZE: float = 10.0
MIN_PLUG_SIZE: float = 1.0
MAX_PLUG_SIZE: float = 100.0
"""Plug size is clamped to [MIN_PLUG_SIZE, MAX_PLUG_SIZE] when placed on a line."""

# ----- Bounding region -----
REGION_PADDING: float = 20.0
"""Final padding around the region so plugs and end labels are not clipped."""

ARC_EXTRA_SPACE: float = 50.0
"""Overshoot allowance for arc paths (largest: arcs bow well outside the chord bbox)."""

CURVED_EXTRA_SPACE: float = 20.0
"""Overshoot allowance for fluid, magnet and grid paths."""

STRAIGHT_EXTRA_SPACE: float = 5.0
"""Minimal allowance for straight paths."""

# ----- Labels -----
LABEL_RATIO_START: float = 0.1
LABEL_RATIO_MIDDLE: float = 0.5
LABEL_RATIO_END: float = 0.9
LABEL_PERPENDICULAR_OFFSET: float = 20.0
"""Distance of caption (above) and path (below) labels from the chord midpoint."""

DEFAULT_LABEL_FONT_SIZE: float = 14.0
DEFAULT_LABEL_FONT_FAMILY: str = "Arial"
DEFAULT_LABEL_COLOR: str = "#000000"
DEFAULT_LABEL_BACKGROUND: str = "transparent"
DEFAULT_LABEL_PADDING: float = 4.0

# ----- Dash / outline / shadow -----
DEFAULT_DASH_PATTERN: str = "5,5"
DEFAULT_OUTLINE_WIDTH: float = 1.0
DEFAULT_OUTLINE_COLOR: str = "auto"

DEFAULT_SHADOW_DX: float = 2.0
DEFAULT_SHADOW_DY: float = 2.0
DEFAULT_SHADOW_BLUR: float = 2.0
DEFAULT_SHADOW_COLOR: str = "rgba(0,0,0,0.3)"
DEFAULT_SHADOW_OPACITY: float = 0.3
"""Drop shadow: a copy of the path stroke shifted by (dx, dy)."""

# ----- Path sampling -----
PATH_SAMPLES_PER_SEGMENT: int = 32
"""Points per curved segment when tracing a path for bounds and previews."""

# ----- Reactive update loop -----
POLL_INTERVAL_S: float = 0.1
"""Seconds between re-measurements of element endpoints."""

# ----- Registry -----
BATCH_UPDATE_DELAY_S: float = 0.016
"""Delay before queued registry updates are applied (~60 fps)."""

# ----- Rendering -----
RENDER_WIDTH_PX: int = 800
RENDER_HEIGHT_PX: int = 600
