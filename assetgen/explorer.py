"""
Explorer - Scans the source images directory and identifies each image.
"""

import hashlib
import logging
import os
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Optional

from .errors import ExplorationError
from .scan_progress import ScanProgress
from .source_image import SourceImage


class Explorer:
    """
    Produces the current set of source images, one per logical name.

    When several files share a logical name, the highest-resolution master
    is kept; ties go to the lexicographically greatest filename.
    """

    IMAGE_EXTENSIONS = {'.png'}
    CHUNK_SIZE = 64 * 1024

    def __init__(
        self,
        max_workers: int = 4,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize explorer.

        Args:
            max_workers: Maximum files hashed concurrently
            logger: Optional logger instance
        """
        self.max_workers = max_workers
        self.logger = logger or logging.getLogger(__name__)

    def scan(
        self,
        input_dir: str,
        progress: Optional[ScanProgress] = None
    ) -> List[SourceImage]:
        """
        Scan a directory for source images.

        Args:
            input_dir: Directory containing the master images
            progress: Optional progress tracker

        Returns:
            Source images sorted by basename

        Raises:
            ExplorationError: If the directory or one of the images cannot be read
        """
        start_time = time.time()
        paths = self.list_image_paths(input_dir)
        self.logger.debug(f"Found {len(paths)} candidate images in {input_dir}")

        if paths:
            with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
                digests = list(pool.map(self.hash_file, paths))
        else:
            digests = []

        selected: Dict[str, SourceImage] = {}
        for filepath, digest in zip(paths, digests):
            image = SourceImage.from_path(filepath, digest)
            if progress:
                progress.on_image_scanned(image)

            current = selected.get(image.basename)
            # paths are sorted, so >= lets the greater filename win a tie
            if current is None or image.scale >= current.scale:
                selected[image.basename] = image

        images = [selected[basename] for basename in sorted(selected)]
        duplicates = len(paths) - len(images)

        if progress:
            progress.on_scan_complete(len(images), duplicates)

        duplicates_str = f", {duplicates} duplicates ignored" if duplicates else ""
        self.logger.info(
            f"Scan complete: {len(images)} images{duplicates_str} "
            f"({time.time() - start_time:.1f}s)"
        )
        return images

    def list_image_paths(self, input_dir: str) -> List[str]:
        """
        List candidate image files in a directory, sorted by path.

        Raises:
            ExplorationError: If the directory cannot be listed
        """
        try:
            with os.scandir(input_dir) as entries:
                return sorted(
                    entry.path for entry in entries
                    if entry.is_file()
                    and os.path.splitext(entry.name)[1].lower() in self.IMAGE_EXTENSIONS
                )
        except OSError as e:
            raise ExplorationError(f"Unable to list images in {input_dir}. ({e})") from e

    def hash_file(self, filepath: str) -> str:
        """
        Compute the content digest of a file, reading it in chunks.

        Raises:
            ExplorationError: If the file cannot be read
        """
        digest = hashlib.sha256()
        try:
            with open(filepath, 'rb') as f:
                for chunk in iter(lambda: f.read(self.CHUNK_SIZE), b''):
                    digest.update(chunk)
        except OSError as e:
            raise ExplorationError(f"Unable to read image {filepath}. ({e})") from e
        return digest.hexdigest()
