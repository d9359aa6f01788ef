"""
ProjectConfig - Project paths and run settings for asset generation.
"""

import logging
import os
from dataclasses import dataclass
from typing import List, Optional

from .layout import PlatformLayout, SUPPORTED_PLATFORMS

logger = logging.getLogger(__name__)

DEFAULT_WORKERS = 4
CACHE_FILENAME = '.assetgen-cache.json'


def normalize_platform(name: Optional[str]) -> Optional[str]:
    """
    Normalize a platform name to its canonical id.

    Returns:
        'ios' or 'android', or None for anything else
    """
    if not name:
        return None
    canonical = name.strip().lower()
    return canonical if canonical in SUPPORTED_PLATFORMS else None


@dataclass
class ProjectConfig:
    """
    Locations of a project's source images and build output.

    Attributes:
        platform: Platform name as given by the host (any case)
        project_dir: Project root directory
        app_resources_dir: Directory holding the 'images' source folder
        platforms_dir: Build output root containing one folder per platform
        project_name: Native project name (used for the iOS resource path)
        workers: Maximum worker threads for hashing and generation
    """
    platform: Optional[str] = None
    project_dir: str = '.'
    app_resources_dir: Optional[str] = None
    platforms_dir: Optional[str] = None
    project_name: Optional[str] = None
    workers: int = DEFAULT_WORKERS

    def __post_init__(self):
        if not self.app_resources_dir:
            self.app_resources_dir = os.path.join(self.project_dir, 'App_Resources')
        if not self.platforms_dir:
            self.platforms_dir = os.path.join(self.project_dir, 'platforms')
        if not self.project_name:
            self.project_name = os.path.basename(os.path.abspath(self.project_dir))

    @classmethod
    def from_env(cls, project_dir: Optional[str] = None) -> 'ProjectConfig':
        """
        Create configuration from ASSETGEN_* environment variables.

        Args:
            project_dir: Project root overriding ASSETGEN_PROJECT_DIR; paths
                not set in the environment are derived from it
        """
        return cls(
            platform=os.getenv('ASSETGEN_PLATFORM'),
            project_dir=project_dir or os.getenv('ASSETGEN_PROJECT_DIR', '.'),
            app_resources_dir=os.getenv('ASSETGEN_APP_RESOURCES'),
            platforms_dir=os.getenv('ASSETGEN_PLATFORMS_DIR'),
            project_name=os.getenv('ASSETGEN_PROJECT_NAME'),
            workers=cls._parse_workers(os.getenv('ASSETGEN_WORKERS')),
        )

    @staticmethod
    def _parse_workers(value: Optional[str]) -> int:
        if not value:
            return DEFAULT_WORKERS
        try:
            return int(value)
        except ValueError:
            logger.warning(f"Invalid ASSETGEN_WORKERS value {value!r}, using {DEFAULT_WORKERS}")
            return DEFAULT_WORKERS

    @property
    def canonical_platform(self) -> Optional[str]:
        """Canonical platform id, or None if the platform is not supported."""
        return normalize_platform(self.platform)

    @property
    def is_supported(self) -> bool:
        return self.canonical_platform is not None

    @property
    def images_dir(self) -> str:
        """Source images directory."""
        return os.path.join(self.app_resources_dir, 'images')

    @property
    def platform_dir(self) -> str:
        """Build output folder for the configured platform."""
        return os.path.join(self.platforms_dir, self.canonical_platform or self.platform or '')

    @property
    def resources_root(self) -> str:
        """Native resource directory the generated images are written into."""
        return PlatformLayout.resources_root(
            self.platforms_dir, self.canonical_platform, self.project_name
        )

    def validate(self) -> List[str]:
        """
        Validate configuration.

        An unsupported platform is not an error: the phase is simply skipped.

        Returns:
            List of error messages (empty if valid)
        """
        errors = []

        if not self.platform:
            errors.append("Platform is required (--platform or ASSETGEN_PLATFORM)")
        if not self.project_name:
            errors.append("Project name could not be determined (--project-name or ASSETGEN_PROJECT_NAME)")
        if self.workers < 1:
            errors.append(f"Workers must be at least 1 (got {self.workers})")
        if self.platform and not self.is_supported:
            # Nothing is read or written for other platforms
            return errors
        if not os.path.isdir(self.app_resources_dir):
            errors.append(f"App resources directory does not exist: {self.app_resources_dir}")

        return errors
