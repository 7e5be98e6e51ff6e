import logging
import math
from dataclasses import dataclass
from typing import List, Optional

from skycore.colors import lerp_color
from skycore.noise import hash2d
from skyscene.scene_params import (
    NIGHT_SKY_BOTTOM,
    NIGHT_SKY_TOP,
    SEASON_PALETTES,
    Season,
)

logger = logging.getLogger(__name__)

# Glyph stamps, top row first. Spaces are transparent.
ELEMENT_SHAPES = {
    "sapling": [["⌃"], ["|"]],
    "flower": [["✿"]],
    "tree": [[" ", "♣", " "], [" ", "♣", " "], [" ", "|", " "]],
    "bush": [["♠", "♠"]],
    "rock": [["▄", "█"]],
    "mushroom": [["●"], ["│"]],
    "sign": [["┌", "─", "┐"], ["│", "♦", "│"], [" ", "│", " "]],
    "fruit-tree": [[" ", "♦", " "], [" ", "♣", " "], [" ", "|", " "]],
    "wheat": [["≈"], ["|"]],
    "lantern": [["◆"], ["│"]],
    "snowtree": [[" ", "▲", " "], [" ", "▲", " "], [" ", "|", " "]],
    "crystal": [["◇"], ["△"]],
    "star-flower": [["✦"]],
}

SEASON_ELEMENT_TYPES = {
    Season.SPRING: ["sapling", "flower", "flower", "bush", "mushroom"],
    Season.SUMMER: ["tree", "flower", "bush", "bush", "rock"],
    Season.AUTUMN: ["fruit-tree", "wheat", "wheat", "bush", "lantern", "rock"],
    Season.WINTER: ["snowtree", "crystal", "rock", "star-flower", "snowtree"],
}

MIN_VISIBLE_GROWTH = 0.1


@dataclass
class PathConfig:
    """A winding trail across the lower part of the scene"""
    enabled: bool = True
    y_offset: int = 0         # rows to shift the trail down (negative moves it up)
    amplitude: float = 0.5    # how wavy the trail is, 0-1
    color: Optional[str] = None
    border_color: Optional[str] = None


@dataclass
class GroundElement:
    col: int
    type: str
    growth: float  # 0-1, elements below MIN_VISIBLE_GROWTH are not drawn
    id: Optional[str] = None


def time_of_day_colors(base_top, base_bottom, time_of_day):
    """
    Sky gradient endpoints for a time of day.

    time_of_day runs 0-1: 0 midnight, 0.25 dawn, 0.5 noon, 0.75 dusk. Night
    holds until 0.15, dawn blends to the base sky by 0.35, day lasts until
    0.65 and dusk blends back to night by 0.85.
    """
    if time_of_day <= 0.15:
        return NIGHT_SKY_TOP, NIGHT_SKY_BOTTOM
    if time_of_day <= 0.35:
        t = (time_of_day - 0.15) / 0.2
        return (lerp_color(NIGHT_SKY_TOP, base_top, t),
                lerp_color(NIGHT_SKY_BOTTOM, base_bottom, t))
    if time_of_day <= 0.65:
        return base_top, base_bottom
    if time_of_day <= 0.85:
        t = (time_of_day - 0.65) / 0.2
        return (lerp_color(base_top, NIGHT_SKY_TOP, t),
                lerp_color(base_bottom, NIGHT_SKY_BOTTOM, t))
    return NIGHT_SKY_TOP, NIGHT_SKY_BOTTOM


def generate_season_elements(season, cols, rows, density=0.5) -> List[GroundElement]:
    """Scatter the season's plants and props along the ground, reproducibly"""
    season = Season(season)
    types = SEASON_ELEMENT_TYPES[season]
    spacing = max(6, math.floor(20 * (1 - density)))

    elements = []
    for c in range(4, cols - 4, spacing):
        col = c + math.floor(hash2d(c, 777) * spacing * 0.5)
        if col >= cols - 2:
            continue
        el_type = types[min(len(types) - 1, math.floor(hash2d(col, 888) * len(types)))]
        elements.append(GroundElement(
            col=col,
            type=el_type,
            growth=0.3 + hash2d(col, 999) * 0.7,
            id=f"{season.value}-{col}-{el_type}",
        ))
    logger.debug("Placed %d %s elements", len(elements), season.value)
    return elements


def element_color(el_type, season, time):
    """Display color of a ground element; lanterns flicker and crystals shimmer"""
    season = Season(season)
    palette = SEASON_PALETTES[season]
    if el_type in ("flower", "star-flower"):
        if season == Season.SPRING:
            return "#E8A0BF"
        if season == Season.WINTER:
            return "#00D4FF"
        return palette["ground_accent"]
    if el_type in ("sapling", "bush", "tree", "fruit-tree"):
        return palette["hill_color"]
    if el_type == "rock":
        return "#6B7B8D" if season == Season.WINTER else "#8B8B7A"
    if el_type == "mushroom":
        return "#CD853F"
    if el_type == "sign":
        return "#A0845C"
    if el_type == "wheat":
        return "#DAA520"
    if el_type == "lantern":
        return lerp_color("#D4781E", "#FFD700", math.sin(time * 4) * 0.2 + 0.8)
    if el_type == "snowtree":
        return "#8BA8C0"
    if el_type == "crystal":
        return lerp_color("#00D4FF", "#B266FF", math.sin(time * 1.5) * 0.5 + 0.5)
    return palette["ground_accent"]
