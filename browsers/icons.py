"""Turning downloaded profile pictures into round icons."""

from __future__ import annotations

import io
import logging
import math
from functools import lru_cache
from pathlib import Path

from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)

CIRCULAR_SIZE = 64
MASKED_PIXEL = (122, 0, 0, 122)


@lru_cache(maxsize=None)
def _mask(size: int) -> tuple[tuple[bool, ...], ...]:
    half = size // 2
    return tuple(
        tuple(
            math.isqrt(abs(x - half) ** 2 + abs(y - half) ** 2) + 1 <= half
            for y in range(size)
        )
        for x in range(size)
    )


def circular_mask(size: int) -> list[list[bool]]:
    """Return ``mask[x][y]``: True where a pixel lies inside the circle of ``size``."""
    if size < 0:
        raise ValueError("size must not be negative")
    return [list(row) for row in _mask(size)]


def save_as_circular(image_bytes: bytes, to_image_path) -> None:
    """Resize an image to a square icon, cover what lies outside the circle, save as PNG.

    Raises ValueError if ``image_bytes`` is not an image.
    """
    try:
        image = Image.open(io.BytesIO(image_bytes))
        image.load()
    except (UnidentifiedImageError, OSError) as exc:
        raise ValueError("not a readable image") from exc

    icon = image.resize((CIRCULAR_SIZE, CIRCULAR_SIZE), Image.Resampling.NEAREST)
    icon = icon.convert("RGBA")
    pixels = icon.load()
    for x, row in enumerate(_mask(CIRCULAR_SIZE)):
        for y, visible in enumerate(row):
            if not visible:
                pixels[x, y] = MASKED_PIXEL

    path = Path(to_image_path)
    icon.save(path, format="PNG")
    logger.debug("Wrote circular icon to %s", path)