"""Window, color, and rendering constants."""
from __future__ import annotations

# Window defaults (resizable)
SCREEN_W = 1280
SCREEN_H = 800
FPS = 60

# Terrain colors, keyed by TerrainKind value
TERRAIN_COLORS: dict[str, tuple[int, int, int]] = {
    "grass": (96, 168, 72),
    "forest": (36, 104, 48),
    "mountain": (128, 120, 116),
    "desert": (222, 196, 128),
    "water": (52, 116, 196),
}

# Feature markers: (fill color, label)
FEATURE_STYLES: dict[str, tuple[tuple[int, int, int], str]] = {
    "fruit": ((220, 60, 70), "F"),
    "animals": ((150, 100, 60), "A"),
    "minerals": ((170, 200, 230), "M"),
    "ruins": ((110, 100, 90), "R"),
    "village": ((240, 200, 80), "V"),
}

# UI colors
COLOR_BG = (52, 152, 219)
COLOR_OUTLINE = (20, 30, 20)
COLOR_HOVER = (255, 255, 255, 70)
COLOR_TEXT = (255, 255, 255)
COLOR_TITLE_BG = (0, 0, 0, 136)
