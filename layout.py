import math
from dataclasses import dataclass

from config import LayoutConfig


@dataclass(frozen=True)
class ToyLayout:
    toy_width: float
    toy_height: float
    canvas_width: int
    canvas_height: int
    dial_size: float
    screw_size: float


def compute_layout(viewport_width: float, viewport_height: float,
                   config: LayoutConfig = None) -> ToyLayout:
    """Fit the toy at its fixed aspect ratio inside the viewport and derive
    the screen, dial and screw sizes from it."""
    config = config or LayoutConfig()
    vw = max(1.0, float(viewport_width))
    vh = max(1.0, float(viewport_height))

    if vw / vh > config.aspect_ratio:
        # Viewport wider than the toy: fit to height
        toy_h = vh
        toy_w = vh * config.aspect_ratio
    else:
        toy_w = vw
        toy_h = vw / config.aspect_ratio

    canvas_w = max(config.min_canvas_width, math.floor(toy_w * config.canvas_width_fraction))
    canvas_h = max(config.min_canvas_height, math.floor(toy_h * config.canvas_height_fraction))

    return ToyLayout(
        toy_width=toy_w,
        toy_height=toy_h,
        canvas_width=int(canvas_w),
        canvas_height=int(canvas_h),
        dial_size=max(config.min_dial_size, toy_w * config.dial_fraction),
        screw_size=max(config.min_screw_size, toy_w * config.screw_fraction),
    )
