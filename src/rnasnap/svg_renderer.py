"""SVG canvas for structure drawings"""
from typing import Optional, Tuple
from xml.etree.ElementTree import Element, SubElement, tostring
from xml.dom import minidom

from .styles import rgb_to_hex, to_rgb


def _fmt(v: float) -> str:
    return f"{v:.2f}".rstrip("0").rstrip(".")


class SvgCanvas:
    """
    SVG document builder with the same centred coordinate system as PngCanvas.

    Elements are appended in call order, so later calls paint over earlier ones.
    """

    def __init__(
        self,
        width: int,
        height: int,
        font_size: int = 20,
        font_family: Optional[str] = None,
        origin: Optional[Tuple[float, float]] = None,
    ):
        self.width = width
        self.height = height
        self.origin = origin if origin is not None else (width / 2, height / 2)
        self.font_size = font_size
        self.font_family = font_family or "sans-serif"
        self.svg = Element("svg", {
            "width": str(width),
            "height": str(height),
            "viewBox": f"0 0 {width} {height}",
            "xmlns": "http://www.w3.org/2000/svg"
        })

    def _px(self, p: Tuple[float, float]) -> Tuple[str, str]:
        return _fmt(p[0] + self.origin[0]), _fmt(p[1] + self.origin[1])

    def background(self, color):
        SubElement(self.svg, "rect", {
            "x": "0", "y": "0",
            "width": str(self.width),
            "height": str(self.height),
            "fill": rgb_to_hex(to_rgb(color))
        })

    def line(self, a, b, color, width: int = 1):
        x1, y1 = self._px(a)
        x2, y2 = self._px(b)
        SubElement(self.svg, "line", {
            "x1": x1, "y1": y1,
            "x2": x2, "y2": y2,
            "stroke": rgb_to_hex(to_rgb(color)),
            "stroke-width": str(width)
        })

    def circle(self, center, radius: float, fill=None, outline=None, width: int = 1):
        cx, cy = self._px(center)
        SubElement(self.svg, "circle", {
            "cx": cx, "cy": cy,
            "r": _fmt(radius),
            "fill": rgb_to_hex(to_rgb(fill)) if fill is not None else "none",
            "stroke": rgb_to_hex(to_rgb(outline)) if outline is not None else "none",
            "stroke-width": str(width)
        })

    def text(self, label: str, center, color):
        if not label.strip():
            return
        x, y = self._px(center)
        text = SubElement(self.svg, "text", {
            "x": x, "y": y,
            "font-size": str(self.font_size),
            "font-family": self.font_family,
            "text-anchor": "middle",
            "dominant-baseline": "central",
            "fill": rgb_to_hex(to_rgb(color))
        })
        text.text = label

    def rect(self, x0, y0, x1, y1, fill):
        px0, py0 = self._px((x0, y0))
        SubElement(self.svg, "rect", {
            "x": px0, "y": py0,
            "width": _fmt(x1 - x0),
            "height": _fmt(y1 - y0),
            "fill": rgb_to_hex(to_rgb(fill))
        })

    def result(self) -> str:
        rough_string = tostring(self.svg, encoding='unicode')
        reparsed = minidom.parseString(rough_string)
        return reparsed.toprettyxml(indent="  ")
