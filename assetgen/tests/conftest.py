"""
Pytest fixtures for assetgen tests.
"""

import os

import pytest


@pytest.fixture
def write_png():
    """Fixture providing a helper that writes a solid-color RGBA PNG."""
    from PIL import Image

    def _write(path, width=100, height=50, color=(255, 0, 0, 255)):
        path = str(path)
        os.makedirs(os.path.dirname(path), exist_ok=True)
        Image.new('RGBA', (width, height), color=color).save(path, format='PNG')
        return path
    return _write


@pytest.fixture
def project(tmp_path):
    """Fixture providing an empty project tree with an images folder."""
    images_dir = tmp_path / 'App_Resources' / 'images'
    images_dir.mkdir(parents=True)
    (tmp_path / 'platforms').mkdir()
    return tmp_path


@pytest.fixture
def images_dir(project):
    """Fixture providing the project's source images folder."""
    return project / 'App_Resources' / 'images'


@pytest.fixture
def ios_config(project):
    """Fixture providing an iOS configuration for the temporary project."""
    from assetgen.config import ProjectConfig

    return ProjectConfig(platform='ios', project_dir=str(project), project_name='Demo', workers=2)


@pytest.fixture
def android_config(project):
    """Fixture providing an Android configuration for the temporary project."""
    from assetgen.config import ProjectConfig

    return ProjectConfig(platform='Android', project_dir=str(project), project_name='Demo', workers=2)


@pytest.fixture
def make_image():
    """Fixture providing a SourceImage factory that needs no file on disk."""
    from assetgen.source_image import SourceImage

    def _make(basename, hash='h', scale=1, filepath=None):
        filename = f"{basename}@{scale}x.png" if scale > 1 else f"{basename}.png"
        return SourceImage(
            filepath=filepath or f"/src/{filename}",
            filename=filename,
            basename=basename,
            scale=scale,
            hash=hash,
        )
    return _make


@pytest.fixture
def make_entry():
    """Fixture providing a CacheEntry factory."""
    from assetgen.cache_entry import CacheEntry

    def _make(basename, hash='h', scale=1, outputs=None, dirty=False):
        return CacheEntry(
            basename=basename,
            filename=f"{basename}.png",
            hash=hash,
            scale=scale,
            outputs=list(outputs if outputs is not None else [f"drawable-mdpi/{basename}.png"]),
            dirty=dirty,
        )
    return _make


@pytest.fixture
def sample_cache(make_entry):
    """Fixture providing a cache with two Android images."""
    from assetgen.platform_cache import PlatformCache

    cache = PlatformCache()
    for entry in [make_entry('a', hash='hash1'), make_entry('b', hash='hash2')]:
        cache.images.append(entry)
        cache.output[entry.basename] = list(entry.outputs)
    return cache


@pytest.fixture
def logger():
    """Fixture providing a logger."""
    import logging
    return logging.getLogger('test')
