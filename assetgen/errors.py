"""
Errors - Exception hierarchy for the asset generation pipeline.
"""


class AssetGenError(Exception):
    """Base class for all pipeline errors."""


class ExplorationError(AssetGenError, OSError):
    """Raised when the source images directory or one of its files cannot be read."""


class CacheReadError(AssetGenError, ValueError):
    """Raised when a manifest exists but cannot be read or parsed."""


class CacheWriteError(AssetGenError, OSError):
    """Raised when a manifest cannot be persisted."""


class UnsupportedPlatformError(AssetGenError, ValueError):
    """Raised when a layout is requested for a platform with no layout rules."""

    def __init__(self, platform: str):
        super().__init__(f"Unsupported platform: {platform!r}")
        self.platform = platform


class ResizeError(AssetGenError):
    """Raised when an image cannot be decoded or a resized variant cannot be written."""


class OutputError(AssetGenError, OSError):
    """Raised when the output resource tree cannot be modified."""
