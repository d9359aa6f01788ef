"""
PlatformLayout - Maps a logical image name to the files a platform expects.

iOS images live in an asset catalog: one ``<name>.imageset`` folder per image
holding the 1x/2x/3x renditions and a ``Contents.json`` descriptor.
Android images are written once per density bucket, directly into the
``drawable-*`` folders of the resource tree.
"""

import json
import math
import os
from typing import List, NamedTuple, Optional, Tuple

from .errors import UnsupportedPlatformError

IOS = 'ios'
ANDROID = 'android'

SUPPORTED_PLATFORMS = (IOS, ANDROID)


class ResizeSpec(NamedTuple):
    """
    One output rendition.

    Attributes:
        path: Output path relative to the platform resource root (POSIX style)
        scale: Multiplier applied to the image's 1x logical width
    """
    path: str
    scale: float


class PlatformLayout:
    """
    Resolves output paths and render scales for each supported platform.
    """

    IMAGE_EXTENSION = '.png'

    IOS_CONTAINER_SUFFIX = '.imageset'
    IOS_DESCRIPTOR_FILENAME = 'Contents.json'
    IOS_SCALES = (
        (1, '', '1x'),
        (2, '@2x', '2x'),
        (3, '@3x', '3x'),
    )

    # Ordered bucket table, lowest density first
    ANDROID_DENSITIES = (
        ('drawable-ldpi', 0.75),
        ('drawable-mdpi', 1),
        ('drawable-hdpi', 1.5),
        ('drawable-xhdpi', 2),
        ('drawable-xxhdpi', 3),
    )

    def outputs_for(self, platform: str, basename: str) -> List[ResizeSpec]:
        """
        Get the renditions to produce for an image.

        Args:
            platform: Canonical platform id ('ios' or 'android')
            basename: Logical image name

        Returns:
            Ordered list of ResizeSpec

        Raises:
            UnsupportedPlatformError: If the platform has no layout rules
        """
        if platform == IOS:
            container = self.container_for(platform, basename)
            return [
                ResizeSpec(f"{container}/{basename}{suffix}{self.IMAGE_EXTENSION}", scale)
                for scale, suffix, _ in self.IOS_SCALES
            ]
        elif platform == ANDROID:
            return [
                ResizeSpec(f"{bucket}/{basename}{self.IMAGE_EXTENSION}", scale)
                for bucket, scale in self.ANDROID_DENSITIES
            ]
        raise UnsupportedPlatformError(platform)

    def container_for(self, platform: str, basename: str) -> Optional[str]:
        """Get the per-image folder for platforms that group renditions, else None."""
        if platform == IOS:
            return f"{basename}{self.IOS_CONTAINER_SUFFIX}"
        elif platform == ANDROID:
            return None
        raise UnsupportedPlatformError(platform)

    def descriptor_for(self, platform: str, basename: str) -> Optional[Tuple[str, str]]:
        """
        Get the metadata file that accompanies an image's renditions.

        Returns:
            Tuple of (relative_path, file_content), or None when the
            platform has no descriptor
        """
        if platform == IOS:
            container = self.container_for(platform, basename)
            content = {
                'images': [
                    {
                        'idiom': 'universal',
                        'filename': f"{basename}{suffix}{self.IMAGE_EXTENSION}",
                        'scale': tag,
                    }
                    for _, suffix, tag in self.IOS_SCALES
                ],
                'info': {
                    'version': 1,
                    'author': 'xcode',
                },
            }
            return f"{container}/{self.IOS_DESCRIPTOR_FILENAME}", json.dumps(content, indent=2)
        elif platform == ANDROID:
            return None
        raise UnsupportedPlatformError(platform)

    def expected_outputs(self, platform: str, basename: str) -> List[str]:
        """Paths recorded in the manifest for an image: renditions, then descriptor."""
        paths = [spec.path for spec in self.outputs_for(platform, basename)]
        descriptor = self.descriptor_for(platform, basename)
        if descriptor:
            paths.append(descriptor[0])
        return paths

    @staticmethod
    def target_width(source_width: int, source_scale: int, relative_scale: float) -> int:
        """
        Compute the pixel width of a rendition.

        The source width is first normalized to its 1x logical width so the
        scale a master was authored at never biases output sizes.
        Rounds half up, never below 1 pixel.
        """
        logical_width = source_width / (source_scale or 1)
        return max(1, int(math.floor(logical_width * relative_scale + 0.5)))

    @staticmethod
    def resources_root(platforms_dir: str, platform: str, project_name: str) -> str:
        """Get the platform's native resource directory inside the build tree."""
        if platform == IOS:
            return os.path.join(platforms_dir, IOS, project_name, 'Resources', 'Assets.xcassets')
        elif platform == ANDROID:
            return os.path.join(platforms_dir, ANDROID, 'app', 'src', 'main', 'res')
        raise UnsupportedPlatformError(platform)
