import math

from skycore.colors import round_half_up

HILL_BAND = 0.30  # hills rise through the bottom 30% of rows


def hill_height(col, cols):
    """Normalized hill height for a column, sum of four sines (about -0.2..1.3)"""
    t = col / cols
    h1 = math.sin(t * math.pi * 2.0) * 0.35
    h2 = math.sin(t * math.pi * 4.5 + 1.2) * 0.2
    h3 = math.sin(t * math.pi * 7.0 + 2.8) * 0.1
    h4 = math.sin(t * math.pi * 1.3 + 0.5) * 0.15
    return 0.3 + h1 + h2 + h3 + h4


def ground_row(col, cols, rows):
    """First row of terrain in a column; rows or more means no terrain there"""
    hill_rows = math.floor(rows * HILL_BAND)
    return rows - math.floor(hill_height(col, cols) * hill_rows)


def path_center_row(col, cols, rows, amplitude=0.5):
    """Center row of the winding trail in a column"""
    t = col / cols
    base_row = rows * 0.78
    wave = (math.sin(t * math.pi * 3.0 + 0.8) * amplitude * 3
            + math.sin(t * math.pi * 1.5 + 2.1) * amplitude * 2)
    return round_half_up(base_row + wave)
