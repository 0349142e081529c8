import math
from dataclasses import dataclass
from typing import List, Sequence, Tuple


# Layout engines emit coordinates in different natural units per scheme
LAYOUT_SCALE = {
    "circular": 200.0,
    "turtle": 1.3,
    "puzzler": 1.3,
}
DEFAULT_LAYOUT_SCALE = 2.5


@dataclass
class NormalizedGeometry:
    xs: List[float]
    ys: List[float]
    width: int
    height: int

    def point(self, i: int) -> Tuple[float, float]:
        """Coordinates of the 1-based nucleotide index i"""
        return self.xs[i - 1], self.ys[i - 1]

    def __len__(self):
        return len(self.xs)


def scale_for_layout(layout_type: str) -> float:
    return LAYOUT_SCALE.get(layout_type, DEFAULT_LAYOUT_SCALE)


def normalize_coords(
    xs: Sequence[float],
    ys: Sequence[float],
    layout_type: str = "simple",
    base_radius: float = 10,
    x_pad: float = 5,
    y_pad: float = 5,
) -> NormalizedGeometry:
    """
    Scale raw layout coordinates, move their mean to the origin and size the canvas.

    The canvas is symmetric around the origin, each half is the largest
    absolute coordinate (rounded up) plus the base radius and the padding,
    so every nucleotide circle fits with room to spare.
    """
    f = scale_for_layout(layout_type)
    sx = [x * f for x in xs]
    sy = [y * f for y in ys]
    x_origin = sum(sx) / len(sx)
    y_origin = sum(sy) / len(sy)
    sx = [x - x_origin for x in sx]
    sy = [y - y_origin for y in sy]
    width = 2 * (math.ceil(max(abs(min(sx)), abs(max(sx)))) + base_radius + x_pad)
    height = 2 * (math.ceil(max(abs(min(sy)), abs(max(sy)))) + base_radius + y_pad)
    return NormalizedGeometry(sx, sy, int(math.ceil(width)), int(math.ceil(height)))
