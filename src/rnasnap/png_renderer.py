from typing import Optional, Tuple

from PIL import Image, ImageDraw, ImageFont

from .styles import to_rgb

FONT_CANDIDATES = (
    "DejaVuSans.ttf",
    "/System/Library/Fonts/Helvetica.ttc",
    "arial.ttf",
)


def load_font(font_size: int, font_path: Optional[str] = None):
    candidates = ((font_path,) if font_path else ()) + FONT_CANDIDATES
    for path in candidates:
        try:
            return ImageFont.truetype(path, font_size)
        except OSError:
            continue
    return ImageFont.load_default(size=font_size)


class PngCanvas:
    """
    Pillow drawing surface with the origin at the image center.

    Callers pass centred coordinates, (-width/2, -height/2) is the top left
    pixel and (width/2, height/2) the lower right one. ``origin`` moves the
    origin to another pixel, e.g. when a legend band is added below the drawing.
    """

    def __init__(
        self,
        width: int,
        height: int,
        font_size: int = 20,
        font_path: Optional[str] = None,
        origin: Optional[Tuple[float, float]] = None,
    ):
        self.width = width
        self.height = height
        self.origin = origin if origin is not None else (width / 2, height / 2)
        self.img = Image.new("RGB", (width, height), (255, 255, 255))
        self.dr = ImageDraw.Draw(self.img)
        self.font = load_font(font_size, font_path)

    def _px(self, p: Tuple[float, float]) -> Tuple[float, float]:
        return p[0] + self.origin[0], p[1] + self.origin[1]

    def background(self, color):
        self.dr.rectangle([(0, 0), (self.width, self.height)], fill=to_rgb(color))

    def line(self, a, b, color, width: int = 1):
        self.dr.line([self._px(a), self._px(b)], fill=to_rgb(color), width=width)

    def circle(self, center, radius: float, fill=None, outline=None, width: int = 1):
        x, y = self._px(center)
        bbox = [(x - radius, y - radius), (x + radius, y + radius)]
        self.dr.ellipse(
            bbox,
            fill=to_rgb(fill) if fill is not None else None,
            outline=to_rgb(outline) if outline is not None else None,
            width=width,
        )

    def text(self, label: str, center, color):
        if not label.strip():
            return
        self.dr.text(self._px(center), label, fill=to_rgb(color), font=self.font, anchor="mm")

    def rect(self, x0, y0, x1, y1, fill):
        self.dr.rectangle([self._px((x0, y0)), self._px((x1, y1))], fill=to_rgb(fill))

    def result(self) -> Image.Image:
        return self.img
