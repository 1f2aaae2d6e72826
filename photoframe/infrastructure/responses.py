from __future__ import annotations

import io

from flask import send_file
from PIL import Image


def png_bytes(img: Image.Image) -> bytes:
    buffer = io.BytesIO()
    img.save(buffer, "PNG", optimize=True)
    return buffer.getvalue()


def send_png(data: bytes):
    return send_file(io.BytesIO(data), mimetype="image/png")
