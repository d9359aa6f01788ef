"""
Reporter - Generates human-readable reports of cache state and pending work.
"""

import logging
import sys
from typing import List, Optional, TextIO

from .diff import SyncPlan
from .platform_cache import PlatformCache
from .source_image import SourceImage


class Reporter:
    """
    Generates human-readable reports from a scan, a cache and a sync plan.
    """

    def __init__(
        self,
        output: Optional[TextIO] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize reporter.

        Args:
            output: Output stream (default: stdout)
            logger: Optional logger instance
        """
        self.output = output or sys.stdout
        self.logger = logger or logging.getLogger(__name__)

    def _print(self, text: str = "") -> None:
        """Print to output stream."""
        print(text, file=self.output)

    def report_summary(
        self,
        images: List[SourceImage],
        cache: PlatformCache,
        platform: str = ''
    ) -> None:
        """Generate a summary report."""
        self._print("=" * 70)
        self._print(f"ASSET GENERATION SUMMARY{f' ({platform})' if platform else ''}")
        self._print("=" * 70)
        self._print()

        scaled = sum(1 for image in images if image.scale > 1)
        dirty = len(cache.dirty_entries)

        self._print("Source Images:")
        self._print(f"  Total Images:          {len(images):>8,}")
        self._print(f"  High-Density Masters:  {scaled:>8,}")
        self._print()

        self._print("Cache:")
        self._print(f"  Cached Images:         {len(cache.images):>8,}")
        self._print(f"  Recorded Outputs:      {cache.total_outputs:>8,}")
        self._print(f"  Dirty Entries:         {dirty:>8,}")
        self._print()

        if dirty:
            self._print("⚠️  Some cached images are missing outputs and will be regenerated:")
            for entry in cache.dirty_entries:
                self._print(f"   - {entry.basename}")
            self._print()

    def report_plan(self, plan: SyncPlan) -> None:
        """Generate a report of the pending creations and removals."""
        self._print("=" * 70)
        self._print("ASSET GENERATION PLAN")
        self._print("=" * 70)
        self._print()

        if plan.is_empty:
            self._print(f"✓  Up to date ({len(plan.unchanged)} images unchanged)")
            self._print()
            return

        if plan.to_create:
            self._print(f"To Create ({len(plan.to_create)}):")
            for image in plan.to_create:
                self._print(f"  {image.basename:<40} {plan.reason_for(image):<10} {image.filename}")
            self._print()

        if plan.to_remove:
            self._print(f"To Remove ({len(plan.to_remove)}):")
            for entry in plan.to_remove:
                self._print(f"  {str(entry.basename):<40} {len(entry.outputs)} files")
            self._print()

        self._print(f"Unchanged: {len(plan.unchanged)}")
        self._print()
