"""Tests for GenerationProgress and ScanProgress classes."""

from assetgen.generation_progress import GenerationProgress
from assetgen.generation_stats import GenerationStats
from assetgen.scan_progress import ScanProgress


class TestGenerationProgress:
    """Tests for GenerationProgress class."""

    def test_init_defaults(self, logger):
        """Test default initialization."""
        progress = GenerationProgress(logger=logger)

        assert progress.show_files is False
        assert progress.log_interval == 50

    def test_on_image_created_show_files(self, logger, capsys):
        """Test show_files output for a created image."""
        progress = GenerationProgress(show_files=True, logger=logger)

        progress.on_image_created('logo', ['a.png', 'b.png'], 'changed')

        captured = capsys.readouterr()
        assert 'CREATE' in captured.out
        assert 'logo (changed) -> 2 files' in captured.out

    def test_on_image_removed_show_files(self, logger, capsys):
        """Test show_files output for a removed image."""
        progress = GenerationProgress(show_files=True, logger=logger)

        progress.on_image_removed('old', ['a.png'])

        assert 'REMOVE' in capsys.readouterr().out

    def test_on_image_failed_show_files(self, logger, capsys):
        """Test show_files output for a failure."""
        progress = GenerationProgress(show_files=True, logger=logger)

        progress.on_image_failed('logo', 'test error')

        captured = capsys.readouterr()
        assert 'ERROR' in captured.out
        assert 'test error' in captured.out

    def test_on_dry_run_show_files(self, logger, capsys):
        """Test show_files output for dry run."""
        progress = GenerationProgress(show_files=True, logger=logger)

        progress.on_dry_run('logo', 'create')

        assert 'DRY RUN' in capsys.readouterr().out

    def test_quiet_without_show_files(self, logger, capsys):
        """Test nothing is printed when show_files is off."""
        progress = GenerationProgress(logger=logger)

        progress.on_image_created('logo', ['a.png'])

        assert capsys.readouterr().out == ''

    def test_on_progress_update_logs_at_interval(self, mocker):
        """Test periodic progress logging with the processing rate."""
        logger = mocker.MagicMock()
        progress = GenerationProgress(log_interval=50, logger=logger)
        stats = GenerationStats(total_to_process=100)
        stats.created = 49

        progress.on_progress_update(stats)
        logger.info.assert_not_called()

        stats.created = 50
        progress.on_progress_update(stats)

        assert progress.last_logged == 50
        assert '/s)' in logger.info.call_args[0][0]


class TestScanProgress:
    """Tests for ScanProgress class."""

    def test_counts_and_prints(self, logger, make_image, capsys):
        """Test per-file output."""
        progress = ScanProgress(show_files=True, logger=logger)

        progress.on_image_scanned(make_image('logo', hash='abcdef0123', scale=2))
        progress.on_scan_complete(1, 0)

        captured = capsys.readouterr()
        assert progress.scanned == 1
        assert 'logo@2x.png' in captured.out
        assert '1 images kept' in captured.out
