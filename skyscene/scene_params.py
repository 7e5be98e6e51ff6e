import math
from enum import Enum


class Season(Enum):
    SPRING = "spring"
    SUMMER = "summer"
    AUTUMN = "autumn"
    WINTER = "winter"


# Default scene parameters
DEFAULT_SCENE_PARAMS = {
    "cols": 120,
    "rows": 35,
    "cloud_count": 6,
    "show_hills": True,
    "sky_color_top": "#1a5fb4",
    "sky_color_bottom": "#87CEEB",
    "cloud_color": "#ffffff",
    "hill_color": "#4a9e3f",
    "hill_color_far": "#2d6b28",
    "font_size": 13,
    "target_fps": 20,
}

# Seasonal palettes
SEASON_PALETTES = {
    Season.SPRING: {
        "sky_top": "#2D1B4E",  # pre-dawn purple
        "sky_bottom": "#E8A0BF",  # soft pink
        "hill_color": "#7CB87C",
        "hill_color_far": "#4A7A4A",
        "cloud_color": "#FFD4E8",
        "path_color": "#C4A882",
        "path_border": "#8B7355",
        "ground_accent": "#E8A838",
    },
    Season.SUMMER: {
        "sky_top": "#1565C0",
        "sky_bottom": "#87CEEB",
        "hill_color": "#4a9e3f",
        "hill_color_far": "#2d6b28",
        "cloud_color": "#ffffff",
        "path_color": "#D4A76A",
        "path_border": "#A0845C",
        "ground_accent": "#FFD700",
    },
    Season.AUTUMN: {
        "sky_top": "#4A1A2E",
        "sky_bottom": "#D4781E",
        "hill_color": "#B87333",
        "hill_color_far": "#8B5E3C",
        "cloud_color": "#FFB366",
        "path_color": "#A0845C",
        "path_border": "#6B5B3E",
        "ground_accent": "#9D4EDD",
    },
    Season.WINTER: {
        "sky_top": "#050510",
        "sky_bottom": "#0D1B2A",
        "hill_color": "#2A3A4A",
        "hill_color_far": "#1A2535",
        "cloud_color": "#4A5568",
        "path_color": "#6B7B8D",
        "path_border": "#4A5568",
        "ground_accent": "#00D4FF",
    },
}

NIGHT_SKY_TOP = "#050510"
NIGHT_SKY_BOTTOM = "#0D1B2A"


def get_scene_params(season=None):
    """Default parameters with the season's palette laid over them"""
    params = DEFAULT_SCENE_PARAMS.copy()
    if season is None:
        return params
    palette = SEASON_PALETTES[Season(season)]
    params.update({
        "sky_color_top": palette["sky_top"],
        "sky_color_bottom": palette["sky_bottom"],
        "cloud_color": palette["cloud_color"],
        "hill_color": palette["hill_color"],
        "hill_color_far": palette["hill_color_far"],
    })
    return params


def grid_dimensions(width_px, height_px, font_size_px=DEFAULT_SCENE_PARAMS["font_size"]):
    """
    Number of character cells that fit a viewport.

    A monospace cell is taken as 0.6em wide and 1.2em tall. The grid never
    shrinks below 30 x 10.
    """
    char_w = font_size_px * 0.6
    char_h = font_size_px * 1.2
    cols = max(30, math.floor(width_px / char_w))
    rows = max(10, math.floor(height_px / char_h))
    return cols, rows
