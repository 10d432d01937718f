# hexkudo/render/puzzle_render.py
"""
Printable rendering of Hexkudo puzzles with matplotlib.

Cells are drawn as pointy-top hexagons at their axial positions. Clues are
filled orange, numbers 1 and N get an inner ring, links are drawn as dots on
the shared edge, and blocked logo cells get the grey badge.
"""
import logging
import math
from typing import Dict, Optional, Tuple

import numpy as np
import matplotlib.patches as patches
from matplotlib.figure import Figure

from hexkudo.core.puzzle import Puzzle
from hexkudo.core.types import Cell

logger = logging.getLogger(__name__)

HEX_ANGLES = np.deg2rad([30, 90, 150, 210, 270, 330, 30])

CLUE_COLOR = "#FFA500"
EMPTY_COLOR = "#FFFFFF"
BLOCKED_COLOR = "#909090"
SOLUTION_COLOR = "#5A5A5A"


class PuzzleRenderer:
    """
    Draw a puzzle onto a matplotlib axis.

    Args:
        radius: Hexagon radius in drawing units
        padding: Margin around the puzzle in units of radius
        text_weight: Font weight for numbers
    """

    def __init__(self, radius: float = 40.0, padding: float = 1.0, text_weight: str = "bold"):
        self.R = float(radius)
        self.pad = float(padding)
        self.tw = text_weight

    def center_of(self, cell: Cell) -> Tuple[float, float]:
        """Pixel centre of an axial cell (rows grow downwards)."""
        q, r = cell
        w = math.sqrt(3) * self.R
        h = 1.5 * self.R
        return w * (q + r / 2.0), h * r

    def _centers(self, puzzle: Puzzle) -> Tuple[Dict[Cell, Tuple[float, float]], float, float]:
        """Centres shifted so the bounding box is centred on the origin."""
        raw = {c: self.center_of(c) for c in list(puzzle.grid.cells) + sorted(puzzle.grid.blocked)}
        xs, ys = zip(*raw.values())
        cx = (min(xs) + max(xs)) / 2.0
        cy = (min(ys) + max(ys)) / 2.0
        centers = {c: (x - cx, y - cy) for c, (x, y) in raw.items()}
        return centers, (max(xs) - min(xs)) / 2.0, (max(ys) - min(ys)) / 2.0

    def _hex_points(self, cx: float, cy: float, scale: float = 1.0):
        return [(cx + scale * self.R * math.cos(a), cy + scale * self.R * math.sin(a)) for a in HEX_ANGLES]

    def _draw_hex(self, ax, cx: float, cy: float, facecolor: str, scale: float = 1.0, **kwargs):
        ax.add_patch(patches.Polygon(
            self._hex_points(cx, cy, scale), closed=True,
            facecolor=facecolor, edgecolor=kwargs.pop("edgecolor", "black"),
            linewidth=kwargs.pop("linewidth", 1), **kwargs
        ))

    def _draw_badge(self, ax, cx: float, cy: float):
        """Grey blocked cell with the purple logo badge."""
        self._draw_hex(ax, cx, cy, BLOCKED_COLOR)
        self._draw_hex(ax, cx, cy, "#7d3aa6", scale=0.9, edgecolor="none", zorder=12)
        inner = patches.Polygon(self._hex_points(cx, cy, 0.9), closed=True, facecolor="none", edgecolor="none")
        ax.add_patch(inner)
        lw = max(0.5, 0.04375 * self.R)
        for offset in (0.5 * self.R, -0.5 * self.R):
            arc = patches.Circle((cx, cy + offset), 0.675 * self.R, fill=False,
                                 linewidth=lw, edgecolor="white", zorder=14)
            ax.add_patch(arc)
            arc.set_clip_path(inner)

    def draw(self, puzzle: Puzzle, ax, show_solution: bool = False):
        """
        Draw the puzzle on `ax`.

        Args:
            show_solution: Also print the hidden numbers, in grey

        Returns:
            The axis
        """
        centers, half_w, half_h = self._centers(puzzle)
        n = puzzle.size
        font_size = max(8, min(24, self.R / 2.5))

        for cell in puzzle.grid.cells:
            cx, cy = centers[cell]
            clue = puzzle.clues.get(cell)
            self._draw_hex(ax, cx, cy, CLUE_COLOR if clue is not None else EMPTY_COLOR)
            if clue is not None:
                ax.text(cx, cy, str(clue), ha="center", va="center",
                        fontsize=font_size, fontweight=self.tw, color="black")
                if clue in (1, n):
                    self._draw_hex(ax, cx, cy, "none", scale=0.75)
            elif show_solution:
                ax.text(cx, cy, str(puzzle.solution.number_of(cell)), ha="center", va="center",
                        fontsize=font_size, color=SOLUTION_COLOR)

        for cell in puzzle.grid.blocked:
            self._draw_badge(ax, *centers[cell])

        for a, b in puzzle.links:
            (x1, y1), (x2, y2) = centers[a], centers[b]
            ax.add_patch(patches.Circle(
                ((x1 + x2) / 2, (y1 + y2) / 2), radius=self.R / 8,
                facecolor=CLUE_COLOR, edgecolor="black", linewidth=1, zorder=16
            ))

        pad_x = half_w + self.pad * self.R
        pad_y = half_h + self.pad * self.R
        ax.set_aspect("equal")
        ax.set_xlim(-pad_x, +pad_x)
        ax.set_ylim(+pad_y, -pad_y)  # Invert Y to match grid convention
        ax.axis("off")
        return ax


def render_puzzle(puzzle: Puzzle, out_path: str, show_solution: bool = False,
                  radius: float = 40.0, title: Optional[str] = None, dpi: int = 150) -> str:
    """
    Save a printable image of a puzzle.

    The file format follows the extension of out_path (png, pdf, svg).

    Returns:
        out_path
    """
    fig = Figure(figsize=(8, 8))
    ax = fig.add_subplot(1, 1, 1)
    PuzzleRenderer(radius=radius).draw(puzzle, ax, show_solution=show_solution)
    if title:
        ax.set_title(title, fontsize=14)
    fig.savefig(out_path, dpi=dpi, bbox_inches="tight")
    logger.info(f"Rendered puzzle to {out_path}")
    return out_path
