"""
Incremental Image Asset Generation for iOS and Android

Each run:
    1. Scan: Hash the master images in <app resources>/images
    2. Diff: Compare them with the platform's cache manifest
    3. Generate: Create, replace or remove only the renditions that changed

The manifest is rewritten only after every image has been processed.
"""

__version__ = "1.0.0"

from .errors import (
    AssetGenError,
    CacheReadError,
    CacheWriteError,
    ExplorationError,
    OutputError,
    ResizeError,
    UnsupportedPlatformError,
)
from .config import ProjectConfig, normalize_platform
from .source_image import SourceImage, parse_scaled_name
from .cache_entry import CacheEntry
from .platform_cache import PlatformCache
from .cache_store import CacheStore, CacheLoadResult, CacheLoadStatus
from .scan_progress import ScanProgress
from .explorer import Explorer
from .diff import SyncPlan, needs_generation, plan
from .layout import PlatformLayout, ResizeSpec, SUPPORTED_PLATFORMS
from .image_resizer import ImageResizer
from .generation_stats import GenerationStats
from .generation_progress import GenerationProgress
from .generator import Generator
from .pipeline import Pipeline
from .reporter import Reporter

__all__ = [
    "AssetGenError",
    "CacheReadError",
    "CacheWriteError",
    "ExplorationError",
    "OutputError",
    "ResizeError",
    "UnsupportedPlatformError",
    "ProjectConfig",
    "normalize_platform",
    "SourceImage",
    "parse_scaled_name",
    "CacheEntry",
    "PlatformCache",
    "CacheStore",
    "CacheLoadResult",
    "CacheLoadStatus",
    "ScanProgress",
    "Explorer",
    "SyncPlan",
    "needs_generation",
    "plan",
    "PlatformLayout",
    "ResizeSpec",
    "SUPPORTED_PLATFORMS",
    "ImageResizer",
    "GenerationStats",
    "GenerationProgress",
    "Generator",
    "Pipeline",
    "Reporter",
]
