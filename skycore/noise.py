import numpy as np
import numba

# Products are taken in double precision and then wrapped to int32, which
# reproduces the original visuals bit for bit.
_MASK32 = 0xFFFFFFFF
_SIGN32 = 0x80000000


@numba.njit
def to_int32(value):
    """Truncate a double toward zero and wrap it into the signed 32-bit range"""
    n = int(value) & _MASK32
    if n >= _SIGN32:
        n -= 0x100000000
    return n


@numba.njit
def hash2d(x, y):
    """
    Position-keyed pseudo-random value.

    Neighbouring coordinates give uncorrelated values and the same pair always
    gives the same value, so no RNG state is needed anywhere in the scene.

    Returns a float in [0, 1]. The top end is reachable, so callers that index
    a table with it clamp the index.
    """
    h = to_int32(float(x) * 374761393.0 + float(y) * 668265263.0 + 1013904223.0)
    h = to_int32((h >> 13) ^ h)
    h = to_int32(float(h) * 1274126177.0 + 1013904223.0)
    return ((h >> 16) & 0x7FFF) / 0x7FFF


@numba.njit
def hash_grid(cols, rows, col_offset, row_offset):
    """hash2d for every cell of a rows x cols grid, shifted by the given offsets"""
    out = np.empty((rows, cols), dtype=np.float64)
    for r in range(rows):
        for c in range(cols):
            out[r, c] = hash2d(c + col_offset, r + row_offset)
    return out


def pick(table, value):
    """Index a lookup table with a hash value in [0, 1]"""
    return table[min(len(table) - 1, int(value * len(table)))]
