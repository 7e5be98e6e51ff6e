import math
import numbers
from dataclasses import dataclass, field
from typing import List, Optional

from skycore.colors import lerp_color, rgb_with_alpha
from skycore.grid import Cell, Grid
from skycore.noise import hash_grid, pick
from skyscene.clouds import Cloud
from skyscene.density import cloud_density_field
from skyscene.scene_params import DEFAULT_SCENE_PARAMS, Season
from skyscene.terrain import ground_row, path_center_row
from skyscene.world import (
    ELEMENT_SHAPES,
    MIN_VISIBLE_GROWTH,
    GroundElement,
    PathConfig,
    element_color,
    time_of_day_colors,
)

# Character palettes
SKY_CHARS = [" ", " ", " ", "·", ".", "°", " ", " "]
CLOUD_CHARS_BY_DENSITY = ["░", "░", "▒", "▓", "█"]
HILL_CHARS = ["^", '"', "'", ",", ".", "·"]
PATH_CHARS = [".", ":", "·", ".", "·"]
PATH_BORDER_CHARS = ["═", "─", "═", "─"]

STAR_BAND = 0.15           # stars twinkle in the top 15% of rows
STAR_THRESHOLD = 0.97
CLOUD_MIN_DENSITY = 0.05
RIDGE_DEPTH = 0.3
PATH_HALF_WIDTH = 3

# Hash row offsets keep the layers decorrelated from the sky
HILL_SEED = 500
GROUND_TINT_SEED = 300
SNOW_SEED = 400
PATH_SEED = 100
PATH_BORDER_SEED = 200

DEFAULT_PATH_COLOR = "#C4A882"
DEFAULT_PATH_BORDER = "#8B7355"


@dataclass
class SceneConfig:
    """Everything one frame depends on"""
    cols: int
    rows: int
    clouds: List[Cloud] = field(default_factory=list)
    show_hills: bool = DEFAULT_SCENE_PARAMS["show_hills"]
    sky_color_top: str = DEFAULT_SCENE_PARAMS["sky_color_top"]
    sky_color_bottom: str = DEFAULT_SCENE_PARAMS["sky_color_bottom"]
    cloud_color: str = DEFAULT_SCENE_PARAMS["cloud_color"]
    hill_color: str = DEFAULT_SCENE_PARAMS["hill_color"]
    hill_color_far: str = DEFAULT_SCENE_PARAMS["hill_color_far"]
    time: float = 0.0
    season: Optional[Season] = None
    path: Optional[PathConfig] = None
    ground_elements: Optional[List[GroundElement]] = None
    time_of_day: Optional[float] = None  # 0 midnight, 0.25 dawn, 0.5 noon, 0.75 dusk

    def __post_init__(self):
        if not (isinstance(self.cols, numbers.Integral) and isinstance(self.rows, numbers.Integral)):
            raise ValueError("Grid dimensions must be integers")
        if self.cols <= 0 or self.rows <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {self.cols}x{self.rows}")
        if self.season is not None:
            self.season = Season(self.season)


def _star_threshold(config):
    if config.season == Season.WINTER:
        return 0.93
    if config.time_of_day is not None and (config.time_of_day < 0.2 or config.time_of_day > 0.8):
        return 0.94
    return STAR_THRESHOLD


def _stamp_elements(config, ground, path_rows):
    """Map (row, col) to (char, color, element id) for every visible element glyph"""
    lookup = {}
    if not config.ground_elements:
        return lookup
    cols, rows = config.cols, config.rows
    season = config.season or Season.SUMMER

    for el in config.ground_elements:
        if el.growth < MIN_VISIBLE_GROWTH:
            continue
        shape = ELEMENT_SHAPES.get(el.type)
        if shape is None:
            continue

        # Stand on the path, else on the hill line, else near the bottom
        if path_rows is not None and 0 <= el.col < cols:
            base_row = path_rows[el.col] - len(shape)
        elif ground is not None and 0 <= el.col < cols:
            base_row = ground[el.col] - len(shape)
        else:
            base_row = rows - len(shape) - 2

        color = element_color(el.type, season, config.time)
        for sr, shape_row in enumerate(shape):
            for sc, ch in enumerate(shape_row):
                if ch == " ":
                    continue
                gc = el.col + sc - len(shape_row) // 2
                gr = base_row + sr
                if 0 <= gc < cols and 0 <= gr < rows:
                    lookup[(gr, gc)] = (ch, color, el.id)
    return lookup


def compute_scene(config: SceneConfig) -> Grid:
    """
    Composite one frame of the sky into a rows x cols grid of cells.

    Layers are applied back to front, each replacing what is below it where
    it applies: sky gradient, stars, clouds, hills, path, ground elements.
    """
    cols, rows = config.cols, config.rows
    season = config.season
    time = config.time

    if config.time_of_day is not None:
        sky_top, sky_bottom = time_of_day_colors(
            config.sky_color_top, config.sky_color_bottom, config.time_of_day)
    else:
        sky_top, sky_bottom = config.sky_color_top, config.sky_color_bottom

    ground = None
    if config.show_hills:
        ground = [ground_row(c, cols, rows) for c in range(cols)]

    path = config.path if config.path is not None and config.path.enabled else None
    path_rows = None
    if path is not None:
        path_rows = [path_center_row(c, cols, rows, path.amplitude) + path.y_offset
                     for c in range(cols)]

    elements = _stamp_elements(config, ground, path_rows)
    density = cloud_density_field(config.clouds, cols, rows)

    # Precomputed position hashes for each layer
    sky_hash = hash_grid(cols, rows, 0, 0)
    star_hash = hash_grid(cols, rows, math.floor(time * 0.3), 0)
    if ground is not None:
        hill_hash = hash_grid(cols, rows, 0, HILL_SEED)
        if season is not None:
            tint_hash = hash_grid(cols, rows, 0, GROUND_TINT_SEED)
            snow_hash = hash_grid(cols, rows, 0, SNOW_SEED)
    if path is not None:
        path_hash = hash_grid(cols, rows, 0, PATH_SEED)
        border_hash = hash_grid(cols, rows, 0, PATH_BORDER_SEED)

    star_threshold = _star_threshold(config)
    star_rows = rows * STAR_BAND

    grid = []
    for r in range(rows):
        row_frac = r / (rows - 1) if rows > 1 else 0.0
        sky_color = lerp_color(sky_top, sky_bottom, row_frac)
        row = []
        for c in range(cols):
            # Sky
            char = pick(SKY_CHARS, sky_hash[r, c])
            color = sky_color
            element_id = None

            # Stars
            if r < star_rows and star_hash[r, c] > star_threshold:
                twinkle = math.sin(time * 2 + c * 0.5 + r * 0.3) * 0.5 + 0.5
                char = "✦" if twinkle > 0.5 else "·"
                color = lerp_color("#6688AA", "#00D4FF", twinkle) if season == Season.WINTER else "#FFFFFF"

            # Clouds
            d = float(density[r, c])
            if d > CLOUD_MIN_DENSITY:
                char = pick(CLOUD_CHARS_BY_DENSITY, d)
                color = rgb_with_alpha(config.cloud_color, 0.4 + d * 0.6)

            # Hills
            if ground is not None and r >= ground[c]:
                g = ground[c]
                depth = (r - g) / (rows - g)
                hill_char = pick(HILL_CHARS, hill_hash[r, c])
                if r == g and depth < RIDGE_DEPTH:
                    char = "^"
                else:
                    char = hill_char
                color = lerp_color(config.hill_color_far, config.hill_color, 1 - depth * 0.6)

                if season == Season.AUTUMN and tint_hash[r, c] > 0.85:
                    color = lerp_color(color, "#D4781E", 0.4)
                elif season == Season.WINTER and tint_hash[r, c] > 0.7:
                    color = lerp_color(color, "#C8D8E8", 0.5)
                    if snow_hash[r, c] > 0.9:
                        char = "·"
                elif season == Season.SPRING and tint_hash[r, c] > 0.92:
                    char = "·"
                    color = "#E8A0BF"

            # Path
            if path is not None:
                dist = abs(r - path_rows[c])
                if dist == PATH_HALF_WIDTH:
                    char = pick(PATH_BORDER_CHARS, border_hash[r, c])
                    color = path.border_color or DEFAULT_PATH_BORDER
                elif dist < PATH_HALF_WIDTH:
                    char = pick(PATH_CHARS, path_hash[r, c])
                    color = path.color or DEFAULT_PATH_COLOR

            # Ground elements
            stamp = elements.get((r, c))
            if stamp is not None:
                char, color, element_id = stamp

            row.append(Cell(char, color, element_id))
        grid.append(row)
    return grid

