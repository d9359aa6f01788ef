"""
PlatformCache - Per-platform manifest of generated images and their outputs.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .cache_entry import CacheEntry
from .source_image import SourceImage

logger = logging.getLogger(__name__)


@dataclass
class PlatformCache:
    """
    Manifest recording what the last successful run produced.

    Attributes:
        images: One entry per logical image
        output: Mapping basename -> output paths relative to the resource root
    """
    images: List[CacheEntry] = field(default_factory=list)
    output: Dict[str, List[str]] = field(default_factory=dict)

    @classmethod
    def from_run(
        cls,
        images: List[SourceImage],
        output: Dict[str, List[str]]
    ) -> 'PlatformCache':
        """Build the manifest for a completed run from the current images."""
        cache = cls()
        for image in images:
            outputs = list(output.get(image.basename, []))
            cache.images.append(CacheEntry.from_image(image, outputs))
            cache.output[image.basename] = outputs
        return cache

    @property
    def is_empty(self) -> bool:
        return not self.images

    @property
    def total_outputs(self) -> int:
        """Number of output files recorded."""
        return sum(len(paths) for paths in self.output.values())

    @property
    def dirty_entries(self) -> List[CacheEntry]:
        return [entry for entry in self.images if entry.dirty]

    def check_integrity(self, layout_root: Optional[str]) -> int:
        """
        Flag entries that must be regenerated regardless of their hash.

        An entry is dirty when an identity field is missing, when it has no
        recorded outputs, or when a recorded output is missing from disk.
        Without a layout root only the identity and empty-output checks run.

        Returns:
            Number of entries marked dirty
        """
        count = 0
        for entry in self.images:
            entry.dirty = self._is_dirty(entry, layout_root)
            if entry.dirty:
                count += 1
                logger.debug(f"Cache entry marked dirty: {entry.basename}")
        return count

    @staticmethod
    def _is_dirty(entry: CacheEntry, layout_root: Optional[str]) -> bool:
        if not entry.is_complete or not entry.outputs:
            return True
        if layout_root is None:
            return False
        return any(
            not os.path.exists(os.path.join(layout_root, path))
            for path in entry.outputs
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization, identity and outputs only."""
        return {
            'images': [entry.to_dict() for entry in self.images],
            'output': {
                basename: list(paths)
                for basename, paths in self.output.items()
            },
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'PlatformCache':
        """
        Create from dictionary.

        Raises:
            KeyError: If 'images' or 'output' is absent
            TypeError: If they do not have the expected shape
        """
        images_data = data['images']
        output_data = data['output']
        if not isinstance(images_data, list) or not isinstance(output_data, dict):
            raise TypeError("'images' must be a list and 'output' an object")

        cache = cls()
        for basename, paths in output_data.items():
            cache.output[basename] = [str(p) for p in paths] if isinstance(paths, list) else []

        for record in images_data:
            if not isinstance(record, dict):
                continue
            basename = record.get('basename')
            cache.images.append(CacheEntry.from_dict(record, cache.output.get(basename)))

        return cache
