# magicscreen Configuration
# All default values and constants

import math
from dataclasses import dataclass, field, is_dataclass

from logging_utils import log_event


CURRENT_CONFIG_VERSION = 1

@dataclass
class ScreenConfig:
    """Raster screen appearance"""
    background_color: str = "#c0c0c0"   # Aluminium powder grey
    line_color: str = "#3a3a3a"         # Stylus trace
    line_width: float = 1.5
    initial_width: int = 600            # Used until the first layout pass
    initial_height: int = 400

@dataclass
class MotionConfig:
    """Keyboard and dial movement tuning"""
    key_step: float = 2.0               # Pixels per tick while an axis key is held
    key_angle_step: float = 3.0         # Dial rotation (deg) per tick while held
    drag_scale: float = 0.3             # Pixels per degree of dial drag
    frame_interval_ms: int = 16         # ~60 Hz keyboard poll

@dataclass
class KeyBindings:
    """Qt key names for the four axis directions"""
    decrease_x: str = "Left"
    increase_x: str = "Right"
    decrease_y: str = "Up"
    increase_y: str = "Down"

@dataclass
class ClearConfig:
    """Shake-to-clear fade timing"""
    fade_step: float = 0.05             # Opacity removed per fade tick
    fade_interval_ms: int = 40
    cooldown_ms: int = 200              # Shakes are ignored for this long after the wipe

@dataclass
class LayoutConfig:
    """Toy proportions relative to the viewport"""
    aspect_ratio: float = 4 / 3         # width / height of the classic toy
    canvas_width_fraction: float = 0.72
    canvas_height_fraction: float = 0.50
    min_canvas_width: int = 200
    min_canvas_height: int = 120
    dial_fraction: float = 0.085
    min_dial_size: int = 40
    screw_fraction: float = 0.018
    min_screw_size: int = 10

@dataclass
class Config:
    """Master configuration"""
    version: int = 1                    # Schema version for persisted configs
    screen: ScreenConfig = field(default_factory=ScreenConfig)
    motion: MotionConfig = field(default_factory=MotionConfig)
    keys: KeyBindings = field(default_factory=KeyBindings)
    clear: ClearConfig = field(default_factory=ClearConfig)
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    log_level: str = "INFO"             # Logging level (DEBUG/INFO/WARNING/ERROR)


def apply_dict_to_dataclass(target, data) -> None:
    """Recursively apply values from a dict onto a dataclass instance.
    Unknown keys are ignored."""
    if not isinstance(data, dict):
        return

    for key, value in data.items():
        if not hasattr(target, key):
            continue

        current = getattr(target, key)

        if is_dataclass(current):
            if isinstance(value, dict):
                apply_dict_to_dataclass(current, value)
            continue

        setattr(target, key, value)


def _as_float(value, default: float) -> float:
    try:
        result = float(value)
    except (TypeError, ValueError):
        return default
    return result if math.isfinite(result) else default


def _as_int(value, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return default


def migrate_config(config: Config, loaded_version) -> None:
    """Upgrade older config structures to the current schema.
    Replaces None / out-of-range values with defaults and bumps version."""
    try:
        version = int(loaded_version) if loaded_version is not None else 0
    except (TypeError, ValueError):
        version = 0

    defaults = Config()

    if version < 1:
        for name in ("decrease_x", "increase_x", "decrease_y", "increase_y"):
            if not getattr(config.keys, name, None):
                setattr(config.keys, name, getattr(defaults.keys, name))
        if not config.screen.background_color:
            config.screen.background_color = defaults.screen.background_color
        if not config.screen.line_color:
            config.screen.line_color = defaults.screen.line_color

    screen = config.screen
    screen.line_width = _as_float(screen.line_width, defaults.screen.line_width)
    if screen.line_width <= 0:
        screen.line_width = defaults.screen.line_width
    screen.initial_width = max(1, _as_int(screen.initial_width, defaults.screen.initial_width))
    screen.initial_height = max(1, _as_int(screen.initial_height, defaults.screen.initial_height))

    motion = config.motion
    motion.key_step = _as_float(motion.key_step, defaults.motion.key_step)
    motion.key_angle_step = _as_float(motion.key_angle_step, defaults.motion.key_angle_step)
    motion.drag_scale = _as_float(motion.drag_scale, defaults.motion.drag_scale)
    motion.frame_interval_ms = max(1, _as_int(motion.frame_interval_ms, defaults.motion.frame_interval_ms))

    clear = config.clear
    fade_step = _as_float(clear.fade_step, defaults.clear.fade_step)
    clear.fade_step = fade_step if 0.0 < fade_step <= 1.0 else defaults.clear.fade_step
    clear.fade_interval_ms = max(1, _as_int(clear.fade_interval_ms, defaults.clear.fade_interval_ms))
    clear.cooldown_ms = max(0, _as_int(clear.cooldown_ms, defaults.clear.cooldown_ms))

    layout = config.layout
    aspect = _as_float(layout.aspect_ratio, defaults.layout.aspect_ratio)
    layout.aspect_ratio = aspect if aspect > 0 else defaults.layout.aspect_ratio

    if not isinstance(config.log_level, str) or not config.log_level:
        config.log_level = defaults.log_level

    config.version = CURRENT_CONFIG_VERSION
