"""
GenerationProgress - Tracks and displays generation progress.
"""

import logging
from typing import List, Optional

from .generation_stats import GenerationStats


class GenerationProgress:
    """
    Tracks and displays generation progress with optional per-image output.
    """

    def __init__(
        self,
        show_files: bool = False,
        log_interval: int = 50,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize progress tracker.

        Args:
            show_files: If True, print each image as it's processed
            log_interval: Log summary progress every N images (when not show_files)
            logger: Optional logger instance
        """
        self.show_files = show_files
        self.log_interval = log_interval
        self.logger = logger or logging.getLogger(__name__)
        self.last_logged = 0

    def on_image_created(self, basename: str, outputs: List[str], reason: str = '') -> None:
        """Called when an image's renditions have been written."""
        if self.show_files:
            reason_str = f" ({reason})" if reason else ""
            print(f"  [CREATE] {basename}{reason_str} -> {len(outputs)} files")

    def on_image_removed(self, basename: str, outputs: List[str]) -> None:
        """Called when an image's outputs have been deleted."""
        if self.show_files:
            print(f"  [REMOVE] {basename} -> {len(outputs)} files")

    def on_image_failed(self, basename: str, error: str) -> None:
        """Called when processing an image fails."""
        if self.show_files:
            print(f"  [ERROR] {basename} -> {error}")

    def on_dry_run(self, basename: str, action: str) -> None:
        """Called in dry-run mode."""
        if self.show_files:
            print(f"  [DRY RUN] {basename} -> would {action}")

    def on_progress_update(self, stats: GenerationStats) -> None:
        """
        Called after each image to report overall progress.

        Args:
            stats: Current generation statistics
        """
        total_done = stats.completed_count

        if not self.show_files and total_done - self.last_logged >= self.log_interval:
            self.last_logged = total_done
            self.logger.info(
                f"Progress: {stats.created} created, {stats.removed} removed, "
                f"{stats.errors} errors ({stats.remaining_count} left, {stats.rate_per_second:.1f}/s)"
            )
