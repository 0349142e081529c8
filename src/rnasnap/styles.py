from typing import Dict, List, Sequence, Tuple, Union

from PIL import ImageColor

from .config import ValidationError

RGB = Tuple[int, int, int]


# Gradient stops of the built-in color scales, value 0.0 maps to the first stop
SCALE_STOPS: Dict[str, List[RGB]] = {
    "whitered": [(255, 255, 255), (200, 30, 30)],
    "lightrainbow": [
        (100, 150, 255),   # Light blue
        (100, 220, 220),   # Cyan
        (140, 230, 140),   # Light green
        (250, 230, 110),   # Yellow
        (250, 140, 90),    # Orange
    ],
    "grays": [(255, 255, 255), (40, 40, 40)],
    "blues": [(255, 255, 255), (30, 90, 200)],
}

DEFAULT_BASE_COLORSCHEME = "whitered"
DEFAULT_PROB_COLORSCHEME = "lightrainbow"


def to_rgb(color: Union[str, Sequence[int]]) -> RGB:
    """Convert a Pillow color string ("white", "#ff0000", ...) or tuple to RGB"""
    if isinstance(color, str):
        rgb = ImageColor.getrgb(color)
        return tuple(rgb[:3])
    return tuple(int(c) for c in color[:3])


def rgb_to_hex(rgb: Sequence[int]) -> str:
    """Convert RGB tuple to hex color"""
    return f"#{rgb[0]:02x}{rgb[1]:02x}{rgb[2]:02x}"


class ColorScale:
    """Piecewise linear mapping from [0, 1] to RGB through a list of stops."""

    def __init__(self, name: str, stops: Sequence[RGB]):
        if len(stops) < 2:
            raise ValueError("a color scale needs at least two stops")
        self.name = name
        self.stops = [to_rgb(s) for s in stops]

    def __call__(self, value: float) -> RGB:
        if not 0.0 <= value <= 1.0:
            raise ValidationError(f"color value {value} outside [0, 1]")
        segments = len(self.stops) - 1
        pos = value * segments
        idx = min(int(pos), segments - 1)
        frac = pos - idx
        c0 = self.stops[idx]
        c1 = self.stops[idx + 1]
        return tuple(int(round(a + (b - a) * frac)) for a, b in zip(c0, c1))

    def __repr__(self):
        return f"ColorScale({self.name!r}, {len(self.stops)} stops)"


_SCALES: Dict[str, ColorScale] = {name: ColorScale(name, stops) for name, stops in SCALE_STOPS.items()}


def register_colorscale(scale: ColorScale) -> None:
    _SCALES[scale.name] = scale


def get_colorscale(name: str) -> ColorScale:
    """
    Look up a named color scale.

    Built-in and registered scales come first, any other name is resolved
    against the matplotlib colormap registry and sampled into 256 stops.
    """
    if name in _SCALES:
        return _SCALES[name]
    cmap = _matplotlib_cmap(name)
    stops = [tuple(int(round(c * 255)) for c in cmap(i / 255.0)[:3]) for i in range(256)]
    return ColorScale(name, stops)


def as_colormap(name: str):
    """Return a matplotlib colormap for any scale name get_colorscale accepts"""
    if name in _SCALES:
        from matplotlib.colors import LinearSegmentedColormap

        stops = [tuple(c / 255.0 for c in s) for s in _SCALES[name].stops]
        return LinearSegmentedColormap.from_list(name, stops)
    return _matplotlib_cmap(name)


def _matplotlib_cmap(name: str):
    import matplotlib

    try:
        return matplotlib.colormaps[name]
    except KeyError:
        raise ValidationError(
            f"unknown color scale '{name}', built-in scales: {', '.join(sorted(_SCALES))}"
        ) from None


def color_for_value(value: float, scale: Union[str, ColorScale] = DEFAULT_BASE_COLORSCHEME) -> RGB:
    if isinstance(scale, str):
        scale = get_colorscale(scale)
    return scale(value)
