"""
Raster buffer and image encoding.

Supports:
- Plain-text PPM (P3) encoding and decoding
- 8-bit conversion and export to any format Pillow can write
"""

from __future__ import annotations
from pathlib import Path
from typing import Union

import numpy as np

from .errors import ValidationError
from .tuples import Color

PPM_MAX_VALUE = 255
PPM_LINE_LENGTH = 70


class Canvas:
    """A grid of colors addressed by (x, y), with (0, 0) at the top left."""

    def __init__(self, width: int, height: int):
        """Create a black canvas.

        Args:
            width: Number of columns
            height: Number of rows
        """
        if width <= 0 or height <= 0:
            raise ValidationError(f"Canvas size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self._pixels = np.zeros((height, width, 3), dtype=np.float64)

    def write_pixel(self, x: int, y: int, color: Color) -> None:
        self._pixels[y, x] = color.to_array()

    def pixel_at(self, x: int, y: int) -> Color:
        return Color.from_array(self._pixels[y, x].copy())

    def write_block(self, x0: int, y0: int, block: np.ndarray) -> None:
        """Copy a (rows, cols, 3) array of colors into the canvas at (x0, y0)."""
        rows, cols = block.shape[:2]
        self._pixels[y0:y0 + rows, x0:x0 + cols] = block

    def to_array(self) -> np.ndarray:
        """Return the pixels as a (height, width, 3) float array (copy)."""
        return self._pixels.copy()

    def to_uint8(self) -> np.ndarray:
        """Scale to 0-255, clamp, and round half up to 8-bit channels."""
        scaled = np.clip(self._pixels * PPM_MAX_VALUE, 0, PPM_MAX_VALUE)
        return np.floor(scaled + 0.5).astype(np.uint8)

    def to_ppm(self) -> str:
        """Encode the canvas as plain-text PPM.

        Each row starts a new line, no line exceeds 70 characters, and the
        output ends with a newline.
        """
        lines = ['P3', f'{self.width} {self.height}', str(PPM_MAX_VALUE)]
        channels = self.to_uint8()

        for row in channels:
            line = ''
            for value in row.reshape(-1):
                token = str(int(value))
                if not line:
                    line = token
                elif len(line) + 1 + len(token) > PPM_LINE_LENGTH:
                    lines.append(line)
                    line = token
                else:
                    line = f'{line} {token}'
            lines.append(line)

        return '\n'.join(lines) + '\n'

    @classmethod
    def from_ppm(cls, text: str) -> Canvas:
        """Decode plain-text PPM (P3) into a canvas.

        Raises:
            ValidationError: If the text is not a well-formed P3 image
        """
        tokens = []
        for line in text.splitlines():
            tokens.extend(line.split('#', 1)[0].split())

        if len(tokens) < 4 or tokens[0] != 'P3':
            raise ValidationError("Not a plain-text PPM (P3) image")

        try:
            width, height, max_value = (int(tok) for tok in tokens[1:4])
            values = np.array([int(tok) for tok in tokens[4:]], dtype=np.float64)
        except ValueError as e:
            raise ValidationError(f"Malformed PPM data: {e}") from e

        if max_value <= 0:
            raise ValidationError(f"PPM max value must be positive, got {max_value}")
        if values.size != width * height * 3:
            raise ValidationError(
                f"PPM has {values.size} channel values, expected {width * height * 3}"
            )

        canvas = cls(width, height)
        canvas._pixels = values.reshape(height, width, 3) / max_value
        return canvas

    def save(self, filename: Union[str, Path]) -> None:
        """Save the canvas; `.ppm` is written as text, anything else via Pillow."""
        path = Path(filename)
        if path.suffix.lower() == '.ppm':
            path.write_text(self.to_ppm())
            return

        from PIL import Image as PILImage
        PILImage.fromarray(self.to_uint8(), 'RGB').save(path)

    def __repr__(self) -> str:
        return f"Canvas({self.width}x{self.height})"
