"""
Pixel grid produced by rendering, and its image encoders.

Pixels are stored as an HDR float64 array of shape (height, width, 3);
clamping to the displayable range happens only when encoding.
"""

from __future__ import annotations
from pathlib import Path
from typing import Union
import logging
import math

import numpy as np
from PIL import Image

from .color import Color

logger = logging.getLogger(__name__)

PPM_MAX_LINE_LENGTH = 70
PPM_MAX_VALUE = 255


class Canvas:
    """A width x height grid of colors, initially black."""

    def __init__(self, width: int, height: int, fill: Color = None):
        self.width = width
        self.height = height
        self.pixels = np.zeros((height, width, 3), dtype=np.float64)
        if fill is not None:
            self.pixels[:, :] = fill.to_array()

    def write_pixel(self, x: int, y: int, color: Color) -> None:
        self.pixels[y, x] = color.to_array()

    def pixel_at(self, x: int, y: int) -> Color:
        return Color.from_array(self.pixels[y, x].copy())

    def write_block(self, x0: int, y0: int, block: np.ndarray) -> None:
        """Copy a (h, w, 3) block of pixels with its top-left corner at (x0, y0)."""
        h, w = block.shape[:2]
        self.pixels[y0:y0 + h, x0:x0 + w] = block

    def is_finite(self) -> bool:
        return bool(np.all(np.isfinite(self.pixels)))

    @staticmethod
    def _scale_channel(value: float) -> int:
        scaled = math.floor(value * PPM_MAX_VALUE + 0.5)
        return max(0, min(PPM_MAX_VALUE, scaled))

    def to_ppm(self) -> str:
        """Encode as plain-text PPM (P3).

        Channels are scaled to 0-255 and clamped; no line exceeds 70
        characters and the output ends with a newline.
        """
        lines = ['P3', f'{self.width} {self.height}', str(PPM_MAX_VALUE)]
        for y in range(self.height):
            line = ''
            for value in self.pixels[y].ravel():
                token = str(self._scale_channel(float(value)))
                if not line:
                    line = token
                elif len(line) + 1 + len(token) > PPM_MAX_LINE_LENGTH:
                    lines.append(line)
                    line = token
                else:
                    line = f'{line} {token}'
            lines.append(line)
        return '\n'.join(lines) + '\n'

    def to_ldr(self, gamma: float = 1.0) -> np.ndarray:
        """Convert to an 8-bit RGB array, with optional gamma correction.

        Args:
            gamma: Display gamma (1.0 leaves values linear)

        Returns:
            uint8 array of shape (height, width, 3)
        """
        values = np.clip(self.pixels, 0, None)
        if gamma != 1.0:
            values = np.power(values, 1.0 / gamma)
        return np.clip(np.floor(values * PPM_MAX_VALUE + 0.5), 0, PPM_MAX_VALUE).astype(np.uint8)

    def save(self, filename: Union[str, Path], gamma: float = 1.0) -> None:
        """Save the canvas; `.ppm` is written as P3 text, anything else via Pillow.

        Args:
            filename: Output filename (extension determines format)
            gamma: Display gamma for Pillow formats
        """
        path = Path(filename)
        if path.suffix.lower() == '.ppm':
            path.write_text(self.to_ppm())
        else:
            Image.fromarray(self.to_ldr(gamma), 'RGB').save(path)
        logger.info("Saved %dx%d image to %s", self.width, self.height, path)

    def __repr__(self) -> str:
        return f"Canvas({self.width}x{self.height})"
