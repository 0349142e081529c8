import io
import os
import re
from typing import Optional, Union

from PIL import Image

from .logging_config import get_logger

logger = get_logger(__name__)


def encode_drawing(drawing: Union[Image.Image, str], fmt: str) -> bytes:
    """Encode a Pillow image or an SVG document into the bytes of the given format"""
    if fmt == ".png":
        if isinstance(drawing, str):
            raise TypeError("PNG output needs a raster image")
        buf = io.BytesIO()
        drawing.save(buf, format="PNG")
        return buf.getvalue()
    if isinstance(drawing, Image.Image):
        raise TypeError(f"{fmt} output needs an SVG document")
    if fmt == ".svg":
        return drawing.encode("utf-8")
    if fmt == ".pdf":
        import cairosvg

        return normalize_pdf_dates(cairosvg.svg2pdf(bytestring=drawing.encode("utf-8")))
    raise ValueError(f"unsupported output format '{fmt}'")


PDF_DATE = re.compile(rb"/(CreationDate|ModDate) \(D:([^)]*)\)")
FIXED_DATE = b"19700101000000"


def normalize_pdf_dates(data: bytes) -> bytes:
    """
    Replace the PDF creation and modification dates with a fixed epoch date.

    The replacement keeps the byte length, so the xref offsets stay valid.
    """
    def fixed(m):
        stamp = m.group(2)
        head = FIXED_DATE[:len(stamp)]
        tail = re.sub(rb"\d", b"0", stamp[len(head):]).replace(b"-", b"+")
        return b"/" + m.group(1) + b" (D:" + head + tail + b")"

    return PDF_DATE.sub(fixed, data)


def save_drawing(drawing: Union[Image.Image, str], savepath: Optional[str]) -> Optional[str]:
    """
    Write the drawing to savepath in one go.

    The encoder is picked from the file extension. Nothing is written and
    None is returned when savepath is empty.
    """
    if not savepath:
        return None
    fmt = os.path.splitext(savepath)[1].lower()
    data = encode_drawing(drawing, fmt)
    with open(savepath, "wb") as f:
        f.write(data)
    logger.debug("wrote %d bytes to %s", len(data), savepath)
    return savepath
