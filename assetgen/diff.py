"""
Diff - Decides which images must be created, replaced, or removed.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set

from .cache_entry import CacheEntry
from .source_image import SourceImage


def _index(cached: Iterable[CacheEntry]) -> Dict[str, CacheEntry]:
    return {entry.basename: entry for entry in cached}


def _needs_create(image: SourceImage, entry: Optional[CacheEntry]) -> bool:
    return entry is None or entry.dirty or not entry.matches(image)


def needs_generation(
    current: Iterable[SourceImage],
    cached: Iterable[CacheEntry]
) -> bool:
    """
    Cheap check for whether any work is pending.

    Returns:
        False only when current images and cache entries correspond one to
        one by basename with equal hash and scale and no dirty entry
    """
    current = list(current)
    cached_by_basename = _index(cached)
    current_basenames = {image.basename for image in current}

    for basename in cached_by_basename:
        if basename not in current_basenames:
            return True

    for image in current:
        if _needs_create(image, cached_by_basename.get(image.basename)):
            return True

    return False


@dataclass
class SyncPlan:
    """
    Work required to bring the output tree in line with the source images.

    Attributes:
        to_remove: Cache entries whose source image is gone
        to_create: Source images that are new, changed, or whose entry is dirty
        unchanged: Cache entries left untouched
        previous: Cache entries by basename, for outputs of replaced images
    """
    to_remove: List[CacheEntry] = field(default_factory=list)
    to_create: List[SourceImage] = field(default_factory=list)
    unchanged: List[CacheEntry] = field(default_factory=list)
    previous: Dict[str, CacheEntry] = field(default_factory=dict)

    @property
    def removed_basenames(self) -> Set[str]:
        return {entry.basename for entry in self.to_remove}

    @property
    def created_basenames(self) -> Set[str]:
        return {image.basename for image in self.to_create}

    @property
    def is_empty(self) -> bool:
        """True when there is nothing to create or remove."""
        return not self.to_remove and not self.to_create

    @property
    def total_actions(self) -> int:
        return len(self.to_remove) + len(self.to_create)

    def previous_outputs(self, basename: str) -> List[str]:
        """Outputs recorded for a basename before this run, if any."""
        entry = self.previous.get(basename)
        return list(entry.outputs) if entry else []

    def reason_for(self, image: SourceImage) -> str:
        """Why an image is scheduled for creation: new, changed, rescaled, or dirty."""
        entry = self.previous.get(image.basename)
        if entry is None:
            return 'new'
        if entry.dirty:
            return 'dirty'
        if entry.hash != image.hash:
            return 'changed'
        return 'rescaled'


def plan(
    current: Iterable[SourceImage],
    cached: Iterable[CacheEntry]
) -> SyncPlan:
    """
    Compare the current images against the cache.

    Images present in both, identical, and not dirty are never regenerated.

    Args:
        current: Source images from the explorer
        cached: Entries from the loaded manifest

    Returns:
        SyncPlan listing removals, creations and untouched entries, each in
        basename order
    """
    current = list(current)
    cached_by_basename = _index(cached)
    current_basenames = {image.basename for image in current}

    result = SyncPlan(previous=cached_by_basename)

    for basename in sorted(cached_by_basename, key=lambda name: name or ''):
        if basename not in current_basenames:
            result.to_remove.append(cached_by_basename[basename])

    for image in sorted(current, key=lambda image: image.basename):
        entry = cached_by_basename.get(image.basename)
        if _needs_create(image, entry):
            result.to_create.append(image)
        else:
            result.unchanged.append(entry)

    return result
