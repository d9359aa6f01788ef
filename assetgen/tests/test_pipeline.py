"""Tests for Pipeline: end-to-end runs on a temporary project."""

import json
import os

import pytest
from PIL import Image

from assetgen.cache_store import CacheStore
from assetgen.config import ProjectConfig
from assetgen.errors import CacheReadError, ExplorationError, ResizeError
from assetgen.image_resizer import ImageResizer
from assetgen.pipeline import Pipeline


def snapshot(root):
    """Map every file under root to its modification time."""
    result = {}
    for dirpath, _, filenames in os.walk(root):
        for name in filenames:
            path = os.path.join(dirpath, name)
            result[path] = os.stat(path).st_mtime_ns
    return result


class TestPipeline:
    """Tests for Pipeline class."""

    def test_unsupported_platform_is_noop(self, project, logger):
        """Test other platforms skip the phase entirely."""
        config = ProjectConfig(platform='windows', project_dir=str(project))
        pipeline = Pipeline(config, logger=logger)

        assert pipeline.should_generate() is False
        assert pipeline.run() is None
        assert os.listdir(project / 'platforms') == []

    def test_missing_images_dir(self, tmp_path, logger):
        """Test a missing source folder is a configuration error."""
        config = ProjectConfig(platform='ios', project_dir=str(tmp_path), project_name='Demo')

        with pytest.raises(ExplorationError):
            Pipeline(config, logger=logger).should_generate()

    def test_ios_run(self, ios_config, images_dir, write_png, logger):
        """Test a first iOS run writes the image set and the cache."""
        write_png(images_dir / 'logo.png', width=300, height=150)
        pipeline = Pipeline(ios_config, logger=logger)

        assert pipeline.should_generate() is True
        stats = pipeline.run()

        imageset = os.path.join(ios_config.resources_root, 'logo.imageset')
        widths = {}
        for name in ['logo.png', 'logo@2x.png', 'logo@3x.png']:
            with Image.open(os.path.join(imageset, name)) as img:
                widths[name] = img.size[0]
        assert widths == {'logo.png': 300, 'logo@2x.png': 600, 'logo@3x.png': 900}
        with open(os.path.join(imageset, 'Contents.json')) as f:
            assert [i['scale'] for i in json.load(f)['images']] == ['1x', '2x', '3x']
        assert stats.created == 1
        assert pipeline.should_generate() is False

    def test_android_run(self, android_config, images_dir, write_png, logger):
        """Test a @2x master normalizes to 1x before bucketing."""
        write_png(images_dir / 'logo@2x.png', width=400, height=200)

        Pipeline(android_config, logger=logger).run()

        root = android_config.resources_root
        widths = []
        for bucket in ['ldpi', 'mdpi', 'hdpi', 'xhdpi', 'xxhdpi']:
            with Image.open(os.path.join(root, f'drawable-{bucket}', 'logo.png')) as img:
                widths.append(img.size[0])
        assert widths == [150, 200, 300, 400, 600]

    def test_second_run_is_idempotent(self, android_config, images_dir, write_png, logger, mocker):
        """Test an unchanged project performs no writes on the next run."""
        write_png(images_dir / 'a.png')
        write_png(images_dir / 'b.png', color=(0, 255, 0, 255))
        Pipeline(android_config, logger=logger).run()
        before = snapshot(android_config.platform_dir)

        resizer = ImageResizer(logger=logger)
        resize = mocker.spy(resizer, 'resize')
        pipeline = Pipeline(android_config, resizer=resizer, logger=logger)

        assert pipeline.should_generate() is False
        stats = pipeline.run()

        assert resize.call_count == 0
        assert stats.created == 0
        assert stats.unchanged == 2
        assert snapshot(android_config.platform_dir) == before

    def test_renamed_file_with_same_content_updates_cache(self, android_config, images_dir, write_png, logger):
        """Test the manifest follows a rename that leaves the rendition unchanged."""
        write_png(images_dir / 'logo.png')
        Pipeline(android_config, logger=logger).run()
        os.rename(images_dir / 'logo.png', images_dir / 'logo.PNG')

        stats = Pipeline(android_config, logger=logger).run()

        assert stats.created == 0
        cache = CacheStore(android_config.platforms_dir, 'android', android_config.resources_root).load()
        assert [entry.filename for entry in cache.images] == ['logo.PNG']

    def test_changed_image_regenerated_alone(self, android_config, images_dir, write_png, logger, mocker):
        """Test only the changed image is resized again."""
        write_png(images_dir / 'a.png')
        write_png(images_dir / 'b.png')
        Pipeline(android_config, logger=logger).run()

        write_png(images_dir / 'b.png', color=(0, 0, 255, 255))
        resizer = ImageResizer(logger=logger)
        resize = mocker.spy(resizer, 'resize')
        stats = Pipeline(android_config, resizer=resizer, logger=logger).run()

        assert stats.created == 1
        assert resize.call_count == 5
        assert all(call.args[0].endswith('b.png') for call in resize.call_args_list)

    def test_removal_cleans_output_tree(self, ios_config, images_dir, write_png, logger):
        """Test removing a source image deletes its outputs and cache record."""
        write_png(images_dir / 'logo.png')
        write_png(images_dir / 'keep.png')
        Pipeline(ios_config, logger=logger).run()

        os.remove(images_dir / 'logo.png')
        stats = Pipeline(ios_config, logger=logger).run()

        assert stats.removed == 1
        assert not os.path.exists(os.path.join(ios_config.resources_root, 'logo.imageset'))
        assert os.path.isdir(os.path.join(ios_config.resources_root, 'keep.imageset'))
        cache = CacheStore(ios_config.platforms_dir, 'ios', ios_config.resources_root).load()
        assert 'logo' not in cache.output
        assert [entry.basename for entry in cache.images] == ['keep']

    def test_deleted_output_regenerated(self, android_config, images_dir, write_png, logger):
        """Test a missing output marks the image dirty and it is recreated."""
        write_png(images_dir / 'logo.png')
        Pipeline(android_config, logger=logger).run()
        missing = os.path.join(android_config.resources_root, 'drawable-hdpi', 'logo.png')
        os.remove(missing)

        pipeline = Pipeline(android_config, logger=logger)
        assert pipeline.should_generate() is True
        pipeline.run()

        assert os.path.isfile(missing)

    def test_failure_leaves_cache_untouched(self, android_config, images_dir, write_png, logger, mocker):
        """Test the manifest is not written when an image fails."""
        write_png(images_dir / 'a.png')
        Pipeline(android_config, logger=logger).run()
        store = CacheStore(android_config.platforms_dir, 'android')
        with open(store.path) as f:
            before = f.read()

        write_png(images_dir / 'b.png')
        resizer = ImageResizer(logger=logger)
        mocker.patch.object(resizer, 'resize', side_effect=ResizeError('disk full'))

        with pytest.raises(ResizeError):
            Pipeline(android_config, resizer=resizer, logger=logger).run()

        with open(store.path) as f:
            assert f.read() == before

    def test_corrupt_cache_fails(self, android_config, images_dir, write_png, logger):
        """Test a corrupt manifest stops the run."""
        write_png(images_dir / 'a.png')
        store = CacheStore(android_config.platforms_dir, 'android')
        os.makedirs(os.path.dirname(store.path))
        with open(store.path, 'w') as f:
            f.write('garbage')

        with pytest.raises(CacheReadError):
            Pipeline(android_config, logger=logger).run()

    def test_dry_run_writes_nothing(self, ios_config, images_dir, write_png, logger):
        """Test dry run leaves the build tree untouched."""
        write_png(images_dir / 'logo.png')

        stats = Pipeline(ios_config, dry_run=True, logger=logger).run()

        assert stats.created == 1
        assert os.listdir(ios_config.platforms_dir) == []

    def test_describe(self, ios_config, images_dir, write_png, logger):
        """Test describe reports without writing."""
        write_png(images_dir / 'logo.png')

        images, cache, plan = Pipeline(ios_config, logger=logger).describe()

        assert [image.basename for image in images] == ['logo']
        assert cache.is_empty
        assert plan.created_basenames == {'logo'}
