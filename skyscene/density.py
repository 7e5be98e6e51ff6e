from typing import NamedTuple, Optional, Sequence

import numpy as np
import numba

from skyscene.clouds import Cloud, clouds_to_array


class DensitySample(NamedTuple):
    density: float
    closest: Optional[Cloud]


def cloud_density_at(col, row, clouds: Sequence[Cloud], cols) -> DensitySample:
    """
    Cloud ink at a cell: the strongest contribution of any cloud.

    Each cloud is an ellipse whose ink falls off linearly from its density at
    the center to zero on the rim. The horizontal axis wraps, so every cloud
    is also tested one screen width to either side.
    """
    max_density = 0.0
    closest = None
    for c in clouds:
        for offset in (0, cols, -cols):
            dx = (col - (c.x + offset)) / c.rx
            dy = (row - c.y) / c.ry
            dist = dx * dx + dy * dy
            if dist < 1:
                d = (1 - dist) * c.density
                if d > max_density:
                    max_density = d
                    closest = c
    return DensitySample(max_density, closest)


@numba.njit
def _density_kernel(cloud_arr, cols, rows):
    out = np.zeros((rows, cols), dtype=np.float64)
    offsets = (0.0, float(cols), -float(cols))
    for k in range(cloud_arr.shape[0]):
        x = cloud_arr[k, 0]
        y = cloud_arr[k, 1]
        rx = cloud_arr[k, 2]
        ry = cloud_arr[k, 3]
        density = cloud_arr[k, 5]
        for offset in offsets:
            cx = x + offset
            for r in range(rows):
                dy = (r - y) / ry
                for c in range(cols):
                    dx = (c - cx) / rx
                    dist = dx * dx + dy * dy
                    if dist < 1:
                        d = (1 - dist) * density
                        if d > out[r, c]:
                            out[r, c] = d
    return out


def cloud_density_field(clouds: Sequence[Cloud], cols, rows) -> np.ndarray:
    """cloud_density_at(...).density for every cell, as a rows x cols array"""
    return _density_kernel(clouds_to_array(clouds), cols, rows)
