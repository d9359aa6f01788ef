"""
CacheStore - Loads and persists the per-platform manifest file.
"""

import enum
import json
import logging
import os
import tempfile
from dataclasses import dataclass, field
from typing import Optional

from .config import CACHE_FILENAME
from .errors import CacheReadError, CacheWriteError
from .platform_cache import PlatformCache


class CacheLoadStatus(enum.Enum):
    EMPTY = 'empty'
    LOADED = 'loaded'
    FAILED = 'failed'


@dataclass
class CacheLoadResult:
    """
    Outcome of reading a manifest.

    Attributes:
        status: EMPTY (no usable manifest), LOADED, or FAILED
        cache: The cache for EMPTY and LOADED outcomes
        error: The read error for FAILED outcomes
    """
    status: CacheLoadStatus
    cache: PlatformCache = field(default_factory=PlatformCache)
    error: Optional[CacheReadError] = None

    @property
    def ok(self) -> bool:
        return self.status is not CacheLoadStatus.FAILED


class CacheStore:
    """
    Owns the manifest file of one platform.

    The manifest lives at ``<platforms_dir>/<platform>/.assetgen-cache.json``.
    Output paths it records are checked against ``layout_root`` on load.
    """

    def __init__(
        self,
        platforms_dir: str,
        platform: str,
        layout_root: Optional[str] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize cache store.

        Args:
            platforms_dir: Build output root containing one folder per platform
            platform: Canonical platform id
            layout_root: Resource root that recorded output paths are relative to
            logger: Optional logger instance
        """
        self.platforms_dir = platforms_dir
        self.platform = platform
        self.layout_root = layout_root
        self.logger = logger or logging.getLogger(__name__)

    @property
    def path(self) -> str:
        """Location of the manifest file."""
        return os.path.join(self.platforms_dir, self.platform, CACHE_FILENAME)

    @property
    def exists(self) -> bool:
        return os.path.isfile(self.path)

    def read(self) -> CacheLoadResult:
        """
        Read the manifest without raising.

        A missing file, or a manifest lacking its top-level 'images' or
        'output' section, yields an EMPTY result. Unreadable files and invalid
        JSON yield FAILED.
        """
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError:
            self.logger.debug(f"No cache file yet: {self.path}")
            return CacheLoadResult(CacheLoadStatus.EMPTY)
        except (OSError, ValueError) as e:
            error = CacheReadError(f"Unable to read cache file {self.path}. ({e})")
            error.__cause__ = e
            return CacheLoadResult(CacheLoadStatus.FAILED, error=error)

        if not isinstance(data, dict):
            return CacheLoadResult(
                CacheLoadStatus.FAILED,
                error=CacheReadError(f"Unable to read cache file {self.path}. (root is not an object)"),
            )

        try:
            cache = PlatformCache.from_dict(data)
        except (KeyError, TypeError) as e:
            self.logger.warning(f"Cache file {self.path} is incomplete ({e}), starting from an empty cache")
            return CacheLoadResult(CacheLoadStatus.EMPTY)

        dirty = cache.check_integrity(self.layout_root)
        self.logger.debug(f"Loaded cache: {len(cache.images)} entries, {dirty} dirty")
        return CacheLoadResult(CacheLoadStatus.LOADED, cache=cache)

    def load(self) -> PlatformCache:
        """
        Load the manifest.

        Returns:
            The cached state, empty if no usable manifest exists

        Raises:
            CacheReadError: If the manifest exists but cannot be read
        """
        result = self.read()
        if result.error is not None:
            raise result.error
        return result.cache

    def save(self, cache: PlatformCache) -> None:
        """
        Persist the manifest in a single atomic replace.

        Raises:
            CacheWriteError: If the manifest cannot be written
        """
        directory = os.path.dirname(self.path)
        tmp_path = None
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(prefix='.assetgen-', suffix='.tmp', dir=directory)
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(cache.to_dict(), f, indent=2)
            os.replace(tmp_path, self.path)
            tmp_path = None
        except (OSError, TypeError, ValueError) as e:
            raise CacheWriteError(f"Unable to save cache file {self.path}. ({e})") from e
        finally:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.remove(tmp_path)

        self.logger.debug(f"Cache saved: {self.path} ({len(cache.images)} entries)")
