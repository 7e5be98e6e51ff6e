from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class Cell:
    """One character of the scene and its display color"""
    char: str
    color: str
    element_id: Optional[str] = None  # set on cells painted by a ground element


Grid = List[List[Cell]]


def escape_html(s: str) -> str:
    return s.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def _span(color: str, chars: str, element_id: Optional[str]) -> str:
    if element_id:
        return (
            f'<span data-element="{escape_html(element_id)}" '
            f'style="color:{color};cursor:pointer" class="world-element">'
            f"{escape_html(chars)}</span>"
        )
    return f'<span style="color:{color}">{escape_html(chars)}</span>'


def grid_to_html(grid: Grid) -> str:
    """
    Serialize a grid into color-batched markup for a <pre> block.

    Consecutive cells of a row that share a color (and element id) go into a
    single span. Rows are separated by a newline, with none after the last.
    """
    lines = []
    for row in grid:
        parts = []
        run_chars = []
        run_key = None
        for cell in row:
            key = (cell.color, cell.element_id)
            if run_chars and key != run_key:
                parts.append(_span(run_key[0], "".join(run_chars), run_key[1]))
                run_chars = []
            run_key = key
            run_chars.append(cell.char)
        if run_chars:
            parts.append(_span(run_key[0], "".join(run_chars), run_key[1]))
        lines.append("".join(parts))
    return "\n".join(lines)
