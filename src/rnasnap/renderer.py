from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from PIL import Image

from .config import RenderConfig, ValidationError, STRUCTURE_FORMATS, check_lengths, check_savepath
from .layout import NormalizedGeometry, normalize_coords
from .logging_config import get_logger
from .output import save_drawing
from .png_renderer import PngCanvas
from .providers import LayoutProvider, PairingProvider, ViennaLayout, ViennaPairing
from .styles import DEFAULT_BASE_COLORSCHEME, ColorScale, get_colorscale

logger = get_logger(__name__)


@dataclass
class PreparedStructure:
    geometry: NormalizedGeometry
    pairs: List[Tuple[int, int]]
    labels: str
    fill_colors: list
    legend_scale: Optional[ColorScale]
    config: RenderConfig

    @property
    def canvas_size(self) -> Tuple[int, int]:
        height = self.geometry.height
        if self.legend_scale is not None:
            height += self.config.legend_height + self.config.y_pad
        return self.geometry.width, height

    @property
    def origin(self) -> Tuple[float, float]:
        return self.geometry.width / 2, self.geometry.height / 2


def draw_line_segment(canvas, a, b, color, width: int = 1):
    # Runs from center to center, the part under the glyphs is painted over in draw_nucleotide
    canvas.line(a, b, color, width)


def draw_nucleotide(canvas, point, label: str, fill_color, circle_color, text_color, background_color, radius: float):
    # Erase line ends that run into the glyph
    canvas.circle(point, radius, fill=background_color)
    canvas.circle(point, radius, fill=fill_color)
    canvas.circle(point, radius, outline=circle_color)
    canvas.text(label, point, text_color)


def draw_legend(canvas, geometry: NormalizedGeometry, scale: ColorScale, config: RenderConfig):
    x0 = -geometry.width / 2 + config.x_pad
    x1 = geometry.width / 2 - config.x_pad
    y0 = geometry.height / 2
    y1 = y0 + config.legend_height
    steps = max(1, int(x1 - x0))
    step_w = (x1 - x0) / steps
    for k in range(steps):
        t = k / (steps - 1) if steps > 1 else 0.0
        xa = x0 + k * step_w
        canvas.rect(xa, y0, xa + step_w, y1, fill=scale(t))


def draw_structure(canvas, prepared: PreparedStructure):
    """
    Paint the whole structure onto the canvas.

    The order matters: backbone and base pair lines end at glyph centers,
    so the nucleotides have to come last to cover them.
    """
    cfg = prepared.config
    geom = prepared.geometry
    n = len(geom)
    canvas.background(cfg.background_color)
    # backbone
    for i in range(1, n):
        draw_line_segment(canvas, geom.point(i), geom.point(i + 1), cfg.backbone_color, cfg.line_width)
    # basepairs
    for i, j in prepared.pairs:
        draw_line_segment(canvas, geom.point(i), geom.point(j), cfg.basepair_color, cfg.line_width)
    # bases
    for i in range(1, n + 1):
        draw_nucleotide(
            canvas,
            geom.point(i),
            prepared.labels[i - 1],
            prepared.fill_colors[i - 1],
            cfg.base_circle_color,
            cfg.base_text_color,
            cfg.background_color,
            cfg.base_radius,
        )
    if prepared.legend_scale is not None:
        draw_legend(canvas, geom, prepared.legend_scale, cfg)
    return canvas.result()


def prepare_structure(
    structure: str,
    sequence: Optional[str] = None,
    layout_type: str = "simple",
    base_colors: Optional[Sequence[float]] = None,
    base_colorscheme: str = DEFAULT_BASE_COLORSCHEME,
    config: Optional[RenderConfig] = None,
    layout: Optional[LayoutProvider] = None,
    pairing: Optional[PairingProvider] = None,
) -> PreparedStructure:
    config = config or RenderConfig()
    check_lengths(structure, sequence, base_colors)
    n = len(structure)
    labels = sequence if sequence is not None else " " * n

    legend_scale = None
    if base_colors is None:
        fill_colors = [config.background_color] * n
    else:
        bad = [v for v in base_colors if not 0.0 <= v <= 1.0]
        if bad:
            raise ValidationError(f"base_colors values must be between 0.0 and 1.0, got {bad[0]}")
        if isinstance(base_colorscheme, ColorScale):
            scale = base_colorscheme
        else:
            scale = get_colorscale(base_colorscheme)
        fill_colors = [scale(v) for v in base_colors]
        if config.show_legend:
            legend_scale = scale

    layout = layout or ViennaLayout()
    pairing = pairing or ViennaPairing()
    pairs = pairing.pairs(structure)
    xs, ys = layout.coordinates(structure, layout_type)
    geometry = normalize_coords(xs, ys, layout_type, config.base_radius, config.x_pad, config.y_pad)
    logger.debug(
        "structure n=%d pairs=%d layout=%s canvas=%dx%d",
        n, len(pairs), layout_type, geometry.width, geometry.height,
    )
    return PreparedStructure(geometry, pairs, labels, fill_colors, legend_scale, config)


def compose_png(prepared: PreparedStructure) -> Image.Image:
    width, height = prepared.canvas_size
    canvas = PngCanvas(
        width, height,
        font_size=prepared.config.font_size,
        font_path=prepared.config.font_path,
        origin=prepared.origin,
    )
    return draw_structure(canvas, prepared)


def compose_svg(prepared: PreparedStructure) -> str:
    from .svg_renderer import SvgCanvas

    width, height = prepared.canvas_size
    canvas = SvgCanvas(width, height, font_size=prepared.config.font_size, origin=prepared.origin)
    return draw_structure(canvas, prepared)


def render_structure(
    structure: str,
    sequence: Optional[str] = None,
    savepath: Optional[str] = "",
    layout_type: str = "simple",
    base_colors: Optional[Sequence[float]] = None,
    base_colorscheme: str = DEFAULT_BASE_COLORSCHEME,
    config: Optional[RenderConfig] = None,
    layout: Optional[LayoutProvider] = None,
    pairing: Optional[PairingProvider] = None,
) -> Image.Image:
    """
    Draw an RNA secondary structure given in dot-bracket notation.

    Args:
        structure: dot-bracket string, pseudoknot brackets are passed to the pairing engine
        sequence: nucleotide labels, blank circles when omitted
        savepath: .png, .svg or .pdf file to write, nothing is written when empty
        layout_type: one of simple, naview, circular, turtle, puzzler
        base_colors: per-base values in [0, 1] mapped through base_colorscheme,
            None keeps every circle in the background color
        base_colorscheme: name of a built-in, registered or matplotlib color scale
        config: drawing constants, see RenderConfig
        layout, pairing: engines used instead of ViennaRNA

    Returns:
        the rendered Pillow image
    """
    fmt = check_savepath(savepath, STRUCTURE_FORMATS)
    prepared = prepare_structure(
        structure, sequence, layout_type, base_colors, base_colorscheme, config, layout, pairing
    )
    img = compose_png(prepared)
    if fmt == ".png":
        save_drawing(img, savepath)
    elif fmt is not None:
        save_drawing(compose_svg(prepared), savepath)
    return img


def render_svg(
    structure: str,
    sequence: Optional[str] = None,
    savepath: Optional[str] = "",
    layout_type: str = "simple",
    base_colors: Optional[Sequence[float]] = None,
    base_colorscheme: str = DEFAULT_BASE_COLORSCHEME,
    config: Optional[RenderConfig] = None,
    layout: Optional[LayoutProvider] = None,
    pairing: Optional[PairingProvider] = None,
) -> str:
    """Same drawing as render_structure, returned as an SVG document"""
    fmt = check_savepath(savepath, (".svg", ".pdf"))
    prepared = prepare_structure(
        structure, sequence, layout_type, base_colors, base_colorscheme, config, layout, pairing
    )
    svg = compose_svg(prepared)
    if fmt is not None:
        save_drawing(svg, savepath)
    return svg
