"""
ScanProgress - Displays source image scan progress.
"""

import logging
from typing import Optional

from .source_image import SourceImage


class ScanProgress:
    """
    Reports scanned images, one line per file when show_files is set.
    """

    def __init__(
        self,
        show_files: bool = False,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize progress tracker.

        Args:
            show_files: If True, print each image as it's identified
            logger: Optional logger instance
        """
        self.show_files = show_files
        self.logger = logger or logging.getLogger(__name__)
        self.scanned = 0

    def on_image_scanned(self, image: SourceImage) -> None:
        """Called when an image has been hashed and identified."""
        self.scanned += 1
        if self.show_files:
            print(f"  [SCAN] {image.format_status()}")

    def on_scan_complete(self, kept: int, duplicates: int) -> None:
        """Called once all images are identified."""
        if self.show_files:
            print(f"--- {self.scanned} files scanned, {kept} images kept, {duplicates} duplicates ---")
        else:
            self.logger.debug(f"Scanned {self.scanned} files, kept {kept}")
