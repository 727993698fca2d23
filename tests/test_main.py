"""
Integration tests for the folder migration runner.
"""

import os
import tempfile
from unittest.mock import Mock, patch

import pytest
from rich.console import Console

from weblog_addin.config.addin_configuration import WeblogAddinConfiguration
from weblog_addin.main import PostMetadataMigrator, main
from weblog_addin.processors.legacy_metadata import CONFIG_START
from weblog_addin.utils.error_handler import ConfigurationError
from weblog_addin.utils.progress_tracker import ProgressTracker


def _write(folder, name, text):
    path = os.path.join(folder, name)
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)
    return path


def _read(path):
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


class TestPostMetadataMigrator:
    """Test migrating a posts folder on disk."""

    def setup_method(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.folder = self.temp_dir.name
        self.config = WeblogAddinConfiguration(last_weblog_accessed="Default Blog")
        self.config.posts_folder = self.folder
        self.tracker = ProgressTracker(console=Console(file=open(os.devnull, "w")))

    def teardown_method(self):
        self.tracker.console.file.close()
        self.temp_dir.cleanup()

    def test_lists_markdown_files_minus_excludes(self):
        _write(self.folder, "b.md", "B")
        _write(self.folder, "a.md", "A")
        _write(self.folder, "README.md", "Readme")
        _write(self.folder, "notes.txt", "Not markdown")

        migrator = PostMetadataMigrator(self.config, self.tracker)
        files = migrator._get_list_of_markdown_files()

        assert [os.path.basename(f) for f in files] == ["a.md", "b.md"]

    def test_migrates_and_writes_files(self, sample_legacy_document, sample_front_matter_document):
        legacy_path = _write(self.folder, "legacy.md", sample_legacy_document)
        modern_path = _write(self.folder, "modern.md", sample_front_matter_document)

        migrator = PostMetadataMigrator(self.config, self.tracker)
        results = migrator.migrate_all()

        assert sorted(r.action for r in results) == ["migrated", "skipped"]
        migrated = _read(legacy_path)
        assert migrated.startswith("---\n")
        assert CONFIG_START not in migrated
        assert "This is a post written before front matter was supported." in migrated
        assert _read(modern_path) == sample_front_matter_document
        assert self.tracker.get_summary() == {
            "total": 2,
            "migrated": 1,
            "skipped": 1,
            "failed": 0,
        }

    def test_dry_run_does_not_write(self, sample_legacy_document):
        legacy_path = _write(self.folder, "legacy.md", sample_legacy_document)
        self.config.dry_run = True

        results = PostMetadataMigrator(self.config, self.tracker).migrate_all()

        assert results[0].action == "migrated"
        assert _read(legacy_path) == sample_legacy_document

    def test_reads_files_with_byte_order_mark(self, sample_legacy_document):
        path = os.path.join(self.folder, "bom.md")
        with open(path, "w", encoding="utf-8-sig") as f:
            f.write(sample_legacy_document)

        result = PostMetadataMigrator(self.config, self.tracker).migrate_file(path)

        assert result.action == "migrated"
        migrated = _read(path)
        assert migrated.startswith("---\n")
        assert CONFIG_START not in migrated

    def test_no_files(self):
        assert PostMetadataMigrator(self.config, self.tracker).migrate_all() == []
        assert self.tracker.results == []

    def test_unreadable_file_fails(self):
        migrator = PostMetadataMigrator(self.config, self.tracker)
        result = migrator.migrate_file(os.path.join(self.folder, "missing.md"))

        assert result.action == "failed"
        assert result.error_message

    def test_print_summary(self, sample_legacy_document):
        _write(self.folder, "legacy.md", sample_legacy_document)
        PostMetadataMigrator(self.config, self.tracker).migrate_all()

        self.tracker.print_summary(dry_run=True)


class TestMain:
    """Test the CLI entry point."""

    @patch("weblog_addin.main.PostMetadataMigrator")
    @patch("weblog_addin.main.ProgressTracker")
    def test_main_runs_migration(self, mock_tracker_cls, mock_migrator_cls):
        tracker = mock_tracker_cls.return_value
        tracker.get_summary.return_value = {"failed": 0}
        migrator = mock_migrator_cls.return_value
        migrator.config.dry_run = False

        main()

        tracker.setup_colored_logging.assert_called_once()
        migrator.migrate_all.assert_called_once()
        tracker.print_summary.assert_called_once_with(dry_run=False)

    @patch("weblog_addin.main.PostMetadataMigrator")
    @patch("weblog_addin.main.ProgressTracker")
    def test_main_exits_on_failures(self, mock_tracker_cls, mock_migrator_cls):
        mock_tracker_cls.return_value.get_summary.return_value = {"failed": 2}

        with pytest.raises(SystemExit) as exc_info:
            main()

        assert exc_info.value.code == 1

    @patch("weblog_addin.main.PostMetadataMigrator")
    @patch("weblog_addin.main.ProgressTracker", Mock())
    def test_main_exits_on_configuration_error(self, mock_migrator_cls):
        mock_migrator_cls.side_effect = ConfigurationError("bad flag")

        with pytest.raises(SystemExit) as exc_info:
            main()

        assert exc_info.value.code == 2
