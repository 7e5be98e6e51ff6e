import logging
import math
from dataclasses import dataclass, replace
from typing import List, Sequence

import numpy as np

from skycore.noise import hash2d

logger = logging.getLogger(__name__)

SKY_BAND = 0.6  # clouds live in the top 60% of rows


@dataclass(frozen=True)
class Cloud:
    x: float        # center column, wraps once fully off screen
    y: float        # center row
    rx: float       # horizontal radius (columns)
    ry: float       # vertical radius (rows)
    speed: float    # columns per second
    density: float  # 0-1, opacity at the center


def _draw(x, y):
    # hash2d can return exactly 1.0; fold it back so ranges stay half-open
    return hash2d(x, y) % 1.0


def generate_initial_clouds(cols: int, rows: int, count: int) -> List[Cloud]:
    """Reproducible cloud population for a cols x rows sky"""
    sky_rows = math.floor(rows * SKY_BAND)
    clouds = []
    for i in range(count):
        clouds.append(Cloud(
            x=_draw(i * 7 + 3, i * 13 + 7) * cols,
            y=2 + _draw(i * 11 + 5, i * 17 + 2) * (sky_rows - 4),
            rx=6 + _draw(i * 19 + 1, i * 23 + 9) * 14,  # 6-20 cols wide
            ry=1.5 + _draw(i, 99) * 2.5,                # 1.5-4 rows tall
            speed=1.5 + _draw(i, 42) * 3,               # 1.5-4.5 cols/sec
            density=0.4 + _draw(i, 77) * 0.5,           # 0.4-0.9
        ))
    logger.debug("Generated %d clouds for a %dx%d grid", count, cols, rows)
    return clouds


def advance_clouds(clouds: Sequence[Cloud], dt: float, cols: int) -> List[Cloud]:
    """Drift every cloud by speed * dt, returning a new list"""
    advanced = []
    for c in clouds:
        nx = c.x + c.speed * dt
        # Slide fully off the right edge before reappearing on the left
        if nx - c.rx > cols:
            nx = -c.rx
        advanced.append(replace(c, x=nx))
    return advanced


def clouds_to_array(clouds: Sequence[Cloud]) -> np.ndarray:
    """Pack clouds into an (N, 6) float array for the compiled kernels"""
    arr = np.zeros((len(clouds), 6), dtype=np.float64)
    for i, c in enumerate(clouds):
        arr[i] = (c.x, c.y, c.rx, c.ry, c.speed, c.density)
    return arr
