"""
Generator - Applies a sync plan to a platform's resource tree.
"""

import errno
import logging
import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Dict, List, NamedTuple, Optional

from .cache_entry import CacheEntry
from .diff import SyncPlan
from .errors import AssetGenError, OutputError
from .generation_progress import GenerationProgress
from .generation_stats import GenerationStats
from .image_resizer import ImageResizer
from .layout import PlatformLayout
from .source_image import SourceImage

REMOVE = 'remove'
CREATE = 'create'


class TaskResult(NamedTuple):
    """What one per-image task produced."""
    action: str
    basename: str
    outputs: List[str]
    files_written: int = 0
    files_removed: int = 0


class Generator:
    """
    Creates, replaces and removes image renditions.

    Each image is handled by its own task on a thread pool. Tasks share no
    state: each returns a TaskResult and the output map is assembled on the
    calling thread once every task has finished.
    """

    def __init__(
        self,
        resizer: ImageResizer,
        layout: Optional[PlatformLayout] = None,
        max_workers: int = 4,
        dry_run: bool = False,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize generator.

        Args:
            resizer: Image resize capability
            layout: Platform layout rules
            max_workers: Maximum images processed concurrently
            dry_run: If True, report what would change without touching files
            logger: Optional logger instance
        """
        self.resizer = resizer
        self.layout = layout or PlatformLayout()
        self.max_workers = max_workers
        self.dry_run = dry_run
        self.logger = logger or logging.getLogger(__name__)
        self.stats = GenerationStats()

    def apply(
        self,
        plan: SyncPlan,
        platform: str,
        layout_root: str,
        progress: Optional[GenerationProgress] = None
    ) -> Dict[str, List[str]]:
        """
        Bring the resource tree in line with the plan.

        Args:
            plan: Removals and creations to perform
            platform: Canonical platform id
            layout_root: Platform resource root the output paths are relative to
            progress: Optional progress tracker

        Returns:
            Mapping basename -> output paths for every current image

        Raises:
            AssetGenError: The first failure, once all tasks have finished
        """
        self.stats = GenerationStats(
            total_to_process=plan.total_actions,
            unchanged=len(plan.unchanged),
        )

        output: Dict[str, List[str]] = {
            entry.basename: list(entry.outputs) for entry in plan.unchanged
        }

        mode_str = " [DRY RUN]" if self.dry_run else ""
        self.logger.info(
            f"Starting generation: {len(plan.to_create)} to create, "
            f"{len(plan.to_remove)} to remove, {len(plan.unchanged)} unchanged{mode_str}"
        )

        if self.dry_run:
            output.update(self._dry_run(plan, platform, progress))
            return output

        first_error: Optional[AssetGenError] = None

        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            futures = {}
            for entry in plan.to_remove:
                future = pool.submit(self._remove_image, entry, platform, layout_root)
                futures[future] = (entry.basename, '')
            for image in plan.to_create:
                previous = plan.previous_outputs(image.basename)
                future = pool.submit(self._create_image, image, previous, platform, layout_root)
                futures[future] = (image.basename, plan.reason_for(image))

            for future in as_completed(futures):
                basename, reason = futures[future]
                try:
                    result = future.result()
                except AssetGenError as e:
                    self._record_error(basename, e, progress)
                    if first_error is None:
                        first_error = e
                    continue

                self._record_result(result, reason, progress, output)

        if first_error is not None:
            self.logger.error(
                f"Generation failed: {self.stats.errors} of {self.stats.total_to_process} images had errors"
            )
            raise first_error

        self.logger.info(
            f"Generation complete: {self.stats.created} created, {self.stats.removed} removed, "
            f"{self.stats.unchanged} unchanged, {self.stats.files_written} files written "
            f"({self.stats.elapsed_seconds:.1f}s)"
        )
        return output

    def _dry_run(
        self,
        plan: SyncPlan,
        platform: str,
        progress: Optional[GenerationProgress]
    ) -> Dict[str, List[str]]:
        output = {}
        for entry in plan.to_remove:
            self.logger.info(f"[DRY RUN] Would remove: {entry.basename}")
            if progress:
                progress.on_dry_run(entry.basename, 'remove')
            self.stats.removed += 1
        for image in plan.to_create:
            output[image.basename] = self.layout.expected_outputs(platform, image.basename)
            self.logger.info(f"[DRY RUN] Would create: {image.basename} ({plan.reason_for(image)})")
            if progress:
                progress.on_dry_run(image.basename, 'create')
            self.stats.created += 1
        return output

    def _record_result(
        self,
        result: TaskResult,
        reason: str,
        progress: Optional[GenerationProgress],
        output: Dict[str, List[str]]
    ) -> None:
        self.stats.files_written += result.files_written
        self.stats.files_removed += result.files_removed

        if result.action == REMOVE:
            self.stats.removed += 1
            self.logger.debug(f"Removed: {result.basename}")
            if progress:
                progress.on_image_removed(result.basename, result.outputs)
        else:
            self.stats.created += 1
            output[result.basename] = result.outputs
            self.logger.debug(f"Created: {result.basename} ({len(result.outputs)} files)")
            if progress:
                progress.on_image_created(result.basename, result.outputs, reason)

        if progress:
            progress.on_progress_update(self.stats)

    def _record_error(
        self,
        basename: str,
        error: Exception,
        progress: Optional[GenerationProgress]
    ) -> None:
        error_msg = f"Error processing {basename}: {error}"
        self.logger.error(error_msg)
        self.stats.errors += 1
        self.stats.error_details.append(error_msg)
        if progress:
            progress.on_image_failed(basename, str(error))

    def _remove_image(self, entry: CacheEntry, platform: str, layout_root: str) -> TaskResult:
        """Delete every output recorded for an image, then its container folder."""
        removed = 0
        for path in entry.outputs:
            if self._delete_file(layout_root, path):
                removed += 1

        if entry.basename:
            container = self.layout.container_for(platform, entry.basename)
            if container:
                self._remove_dir(self._resolve(layout_root, container))

        return TaskResult(REMOVE, entry.basename, list(entry.outputs), files_removed=removed)

    def _create_image(
        self,
        image: SourceImage,
        previous_outputs: List[str],
        platform: str,
        layout_root: str
    ) -> TaskResult:
        """Write every rendition of an image, and its descriptor if the platform has one."""
        specs = self.layout.outputs_for(platform, image.basename)
        descriptor = self.layout.descriptor_for(platform, image.basename)
        source_width = self.resizer.decode_width(image.filepath)

        try:
            for spec in specs:
                os.makedirs(os.path.dirname(self._resolve(layout_root, spec.path)), exist_ok=True)
            if descriptor:
                descriptor_path, content = descriptor
                with open(self._resolve(layout_root, descriptor_path), 'w', encoding='utf-8') as f:
                    f.write(content)
        except OSError as e:
            raise OutputError(f"Unable to prepare output folders for {image.basename}. ({e})") from e

        for spec in specs:
            width = self.layout.target_width(source_width, image.scale, spec.scale)
            self.resizer.resize(image.filepath, self._resolve(layout_root, spec.path), width)

        outputs = [spec.path for spec in specs]
        if descriptor:
            outputs.append(descriptor[0])

        # Outputs a previous layout produced that this one no longer does
        removed = 0
        for path in previous_outputs:
            if path not in outputs and self._delete_file(layout_root, path):
                removed += 1

        return TaskResult(
            CREATE,
            image.basename,
            outputs,
            files_written=len(outputs),
            files_removed=removed,
        )

    def _delete_file(self, layout_root: str, path: str) -> bool:
        """
        Delete one output file.

        Returns:
            True if a file was deleted, False if it was already gone or lies
            outside the resource root
        """
        target = self._resolve(layout_root, path)
        root = os.path.abspath(layout_root)
        if os.path.commonpath([root, os.path.abspath(target)]) != root:
            self.logger.warning(f"Ignoring output path outside resource root: {path}")
            return False

        try:
            os.remove(target)
            return True
        except FileNotFoundError:
            return False
        except OSError as e:
            raise OutputError(f"Unable to delete {target}. ({e})") from e

    def _remove_dir(self, path: str) -> None:
        try:
            os.rmdir(path)
        except FileNotFoundError:
            pass
        except OSError as e:
            if e.errno in (errno.ENOTEMPTY, errno.EEXIST):
                self.logger.warning(f"Leaving non-empty folder in place: {path}")
            else:
                raise OutputError(f"Unable to remove folder {path}. ({e})") from e

    @staticmethod
    def _resolve(layout_root: str, path: str) -> str:
        return os.path.join(layout_root, *path.split('/'))
