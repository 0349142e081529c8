import os
from dataclasses import dataclass, replace
from typing import Iterable, Optional, Tuple, Union

Color = Union[str, Tuple[int, int, int]]

LAYOUT_TYPES = ("simple", "naview", "circular", "turtle", "puzzler")

# Extensions accepted by render_structure, the first one is the default raster format
STRUCTURE_FORMATS = (".png", ".svg", ".pdf")


class ValidationError(ValueError):
    """Raised for bad caller input before any drawing work starts."""


@dataclass(frozen=True)
class RenderConfig:
    base_radius: int = 10
    font_size: int = 20
    font_path: Optional[str] = None
    background_color: Color = "white"
    base_circle_color: Color = "black"
    base_text_color: Color = "black"
    backbone_color: Color = "black"
    basepair_color: Color = "blue"
    x_pad: int = 5
    y_pad: int = 5
    line_width: int = 1
    show_legend: bool = False
    legend_height: int = 20

    def replace(self, **changes) -> "RenderConfig":
        return replace(self, **changes)


def check_savepath(savepath: Optional[str], allowed: Iterable[str]) -> Optional[str]:
    """
    Validate the output path against the accepted extensions.

    Returns the lower-cased extension, or None when nothing should be written.
    """
    if not savepath:
        return None
    allowed = tuple(allowed)
    ext = os.path.splitext(savepath)[1].lower()
    if ext not in allowed:
        raise ValidationError(
            f"savepath must be a filename ending in {', '.join(allowed)} (got '{savepath}')"
        )
    return ext


def check_lengths(structure: str, sequence: Optional[str] = None, base_colors=None) -> None:
    if not structure:
        raise ValidationError("structure must be a non-empty string")
    n = len(structure)
    if sequence is not None and len(sequence) != n:
        raise ValidationError("structure and sequence must have same length")
    if base_colors is not None and len(base_colors) != n:
        raise ValidationError("base_colors must have same length as structure")
