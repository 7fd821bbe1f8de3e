from __future__ import annotations

import base64
import io

from PIL import Image, ImageDraw

from sketchfloat.protocol.constants import PNG_DATA_URL_PREFIX


def render_strokes(
    *,
    strokes: list[list[list[float]]],
    size: tuple[int, int],
    color: str = "#000000",
    width: int = 5,
) -> Image.Image:
    """
    Paint polylines onto a transparent canvas, like a user drawing with the pen.

    - **strokes**: [[[x,y], [x,y], ...], ...] in canvas pixels
    - **size**: canvas (width, height)
    """
    img = Image.new("RGBA", size, (0, 0, 0, 0))
    draw = ImageDraw.Draw(img)
    for pts in strokes:
        xy = [(float(p[0]), float(p[1])) for p in pts if len(p) >= 2]
        if len(xy) == 1:
            x, y = xy[0]
            r = width / 2
            draw.ellipse([x - r, y - r, x + r, y + r], fill=color)
        elif xy:
            draw.line(xy, fill=color, width=width, joint="curve")
    return img


def nonempty_bounds(img: Image.Image) -> tuple[int, int, int, int]:
    """Bounds (x, y, width, height) of painted pixels; the whole canvas if nothing is painted."""
    bbox = img.getchannel("A").getbbox()
    if bbox is None:
        return (0, 0, img.width, img.height)
    x0, y0, x1, y1 = bbox
    return (x0, y0, x1 - x0, y1 - y0)


def png_data_url(img: Image.Image) -> str:
    bio = io.BytesIO()
    img.save(bio, format="PNG", optimize=True)
    return PNG_DATA_URL_PREFIX + base64.b64encode(bio.getvalue()).decode("ascii")
