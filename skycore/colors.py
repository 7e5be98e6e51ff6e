import math
import re
from decimal import Decimal, ROUND_HALF_UP
from typing import NamedTuple, Optional, Union

_RGB_PATTERN = re.compile(r"rgba?\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)")
_HEX_PREFIX = re.compile(r"[0-9a-fA-F]*")
_STRICT_HEX = re.compile(r"#?[0-9a-fA-F]{6}")


class ColorParseError(ValueError):
    """Raised by parse_color(strict=True) for a string that is not a color"""


class Color(NamedTuple):
    r: int
    g: int
    b: int
    a: Optional[float] = None

    def to_css(self) -> str:
        if self.a is None:
            return f"rgb({self.r},{self.g},{self.b})"
        return f"rgba({self.r},{self.g},{self.b},{format_alpha(self.a)})"


ColorLike = Union[str, Color]


def _lenient_hex(pair: str) -> int:
    # Longest run of leading hex digits, 0 when there is none
    digits = _HEX_PREFIX.match(pair).group(0)
    return int(digits, 16) if digits else 0


def parse_color(color: ColorLike, strict: bool = False) -> Color:
    """
    Parse an rgb()/rgba() or hex color string into a Color.

    Hex parsing is lenient: every channel that cannot be read becomes 0, so
    "#fff" reads as (255, 15, 0). Pass strict=True to get a ColorParseError
    instead.
    """
    if isinstance(color, Color):
        return color

    match = _RGB_PATTERN.search(color)
    if match:
        return Color(int(match.group(1)), int(match.group(2)), int(match.group(3)))

    if strict and not _STRICT_HEX.fullmatch(color.strip()):
        raise ColorParseError(f"Invalid color: {color!r}")

    h = color.replace("#", "", 1)
    return Color(_lenient_hex(h[0:2]), _lenient_hex(h[2:4]), _lenient_hex(h[4:6]))


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def format_alpha(alpha: float) -> str:
    """Two decimals, ties rounded away from zero"""
    return str(Decimal(alpha).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def lerp_color(a: ColorLike, b: ColorLike, t: float) -> ColorLike:
    """
    Blend two colors channel by channel and return rgb(r,g,b).

    t is clamped to [0, 1]. The endpoints come back unchanged, as does a
    blend of a color with itself.
    """
    ca = parse_color(a)
    cb = parse_color(b)
    if t <= 0 or ca[:3] == cb[:3]:
        return a
    if t >= 1:
        return b
    return Color(
        round_half_up(ca.r + (cb.r - ca.r) * t),
        round_half_up(ca.g + (cb.g - ca.g) * t),
        round_half_up(ca.b + (cb.b - ca.b) * t),
    ).to_css()


def rgb_with_alpha(color: ColorLike, alpha: float) -> str:
    r, g, b, _ = parse_color(color)
    return Color(r, g, b, alpha).to_css()
