"""
Pipeline - Entry points a host build tool calls before and during a build.

    should_generate(): should the asset phase run at all?
    run():             scan, diff, generate, then persist the manifest.
"""

import logging
from typing import List, Optional, Tuple

from . import diff
from .cache_store import CacheStore
from .config import ProjectConfig
from .diff import SyncPlan
from .explorer import Explorer
from .generation_progress import GenerationProgress
from .generation_stats import GenerationStats
from .generator import Generator
from .image_resizer import ImageResizer
from .layout import PlatformLayout
from .platform_cache import PlatformCache
from .scan_progress import ScanProgress
from .source_image import SourceImage


class Pipeline:
    """
    Runs the asset phase for one project and platform.

    Platforms other than iOS and Android make every entry point a no-op.
    """

    def __init__(
        self,
        config: ProjectConfig,
        resizer: Optional[ImageResizer] = None,
        dry_run: bool = False,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize pipeline.

        Args:
            config: Project configuration
            resizer: Image resize capability (default: ImageResizer)
            dry_run: If True, report changes without writing files or manifest
            logger: Optional logger instance
        """
        self.config = config
        self.resizer = resizer or ImageResizer(logger=logger)
        self.dry_run = dry_run
        self.logger = logger or logging.getLogger(__name__)
        self.layout = PlatformLayout()

    @property
    def platform(self) -> Optional[str]:
        return self.config.canonical_platform

    def _explorer(self) -> Explorer:
        return Explorer(max_workers=self.config.workers, logger=self.logger)

    def _cache_store(self) -> CacheStore:
        return CacheStore(
            self.config.platforms_dir,
            self.platform,
            layout_root=self.config.resources_root,
            logger=self.logger,
        )

    def describe(self) -> Tuple[List[SourceImage], PlatformCache, SyncPlan]:
        """
        Compute the current state without changing anything.

        Returns:
            Tuple of (current images, loaded cache, sync plan)
        """
        images = self._explorer().scan(self.config.images_dir)
        cache = self._cache_store().load()
        return images, cache, diff.plan(images, cache.images)

    def should_generate(self) -> bool:
        """
        Decide whether the asset phase has any work to do.

        Raises:
            ExplorationError: If the source images cannot be read
            CacheReadError: If the manifest is corrupt
        """
        if self.platform is None:
            self.logger.debug(f"Platform {self.config.platform!r} not supported, nothing to check")
            return False

        images = self._explorer().scan(self.config.images_dir)
        cache = self._cache_store().load()
        needed = diff.needs_generation(images, cache.images)
        self.logger.info(f"Assets generation {'needed' if needed else 'not needed'} for {self.platform}")
        return needed

    def run(
        self,
        scan_progress: Optional[ScanProgress] = None,
        progress: Optional[GenerationProgress] = None
    ) -> Optional[GenerationStats]:
        """
        Run the asset phase.

        The manifest is written last and only if every image succeeded.

        Returns:
            GenerationStats, or None if the platform is not supported

        Raises:
            AssetGenError: On any failure; the manifest is left untouched
        """
        if self.platform is None:
            self.logger.info(f"Platform {self.config.platform!r} not supported, skipping assets generation")
            return None

        self.logger.info(f"Assets generation starting for {self.platform}...")

        images = self._explorer().scan(self.config.images_dir, progress=scan_progress)
        store = self._cache_store()
        cache = store.load()

        plan = diff.plan(images, cache.images)
        self.logger.info(
            f"Plan: {len(plan.to_create)} to create, {len(plan.to_remove)} to remove, "
            f"{len(plan.unchanged)} unchanged"
        )

        generator = Generator(
            resizer=self.resizer,
            layout=self.layout,
            max_workers=self.config.workers,
            dry_run=self.dry_run,
            logger=self.logger,
        )
        output = generator.apply(plan, self.platform, self.config.resources_root, progress=progress)

        updated = PlatformCache.from_run(images, output)
        if self.dry_run:
            self.logger.info("[DRY RUN] Cache not updated")
        elif store.exists and updated.to_dict() == cache.to_dict():
            self.logger.debug("Nothing changed, cache left as is")
        else:
            store.save(updated)

        self.logger.info("Assets generation finished.")
        return generator.stats
