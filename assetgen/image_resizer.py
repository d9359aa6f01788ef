"""
ImageResizer - Decodes source images and writes resized renditions.
"""

import logging
import os
from typing import Optional

from PIL import Image

from .errors import ResizeError


class ImageResizer:
    """
    Resizes images to a target width using Pillow, preserving aspect ratio.
    Renditions are always written as PNG so transparency is kept.

    All settings are per instance, so concurrent runs with different
    settings do not interfere.
    """

    def __init__(
        self,
        resample: int = Image.Resampling.LANCZOS,
        optimize: bool = True,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize image resizer.

        Args:
            resample: Pillow resampling filter
            optimize: Ask the encoder for smaller output files
            logger: Optional logger instance
        """
        self.resample = resample
        self.optimize = optimize
        self.logger = logger or logging.getLogger(__name__)

    def decode_width(self, path: str) -> int:
        """
        Get the pixel width of an image.

        Raises:
            ResizeError: If the image cannot be opened or decoded
        """
        try:
            with Image.open(path) as img:
                return img.size[0]
        except (OSError, ValueError, Image.DecompressionBombError) as e:
            raise ResizeError(f"Unable to read image size of {path}. ({e})") from e

    def resize(self, input_path: str, output_path: str, width: int) -> None:
        """
        Write a copy of an image scaled to the given width.

        Args:
            input_path: Source image
            output_path: Destination PNG file
            width: Target width in pixels

        Raises:
            ResizeError: If decoding, resizing or writing fails
        """
        try:
            with Image.open(input_path) as img:
                img.load()
                src_width, src_height = img.size
                height = max(1, int(src_height * width / src_width + 0.5))
                resized = img.resize((max(1, width), height), self.resample)
                resized.save(output_path, format='PNG', optimize=self.optimize)
        except (OSError, ValueError, Image.DecompressionBombError) as e:
            raise ResizeError(f"Unable to resize {input_path} to {output_path}. ({e})") from e

        self.logger.debug(f"Resized {os.path.basename(input_path)} -> {output_path} ({width}px)")
