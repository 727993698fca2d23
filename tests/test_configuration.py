"""
Tests for add-in configuration loading.
"""

import os
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

from weblog_addin.config.addin_configuration import (
    POSTS_FOLDER_NAME,
    MetadataContext,
    WeblogAddinConfiguration,
)
from weblog_addin.models.weblog_info import WeblogInfo, WeblogType
from weblog_addin.utils.error_handler import ConfigurationError


class TestFromEnvironment:
    """Test loading configuration from environment variables."""

    @patch("weblog_addin.config.addin_configuration.load_dotenv")
    def test_defaults(self, mock_load_dotenv):
        with patch.dict(os.environ, {}, clear=True):
            config = WeblogAddinConfiguration.from_environment()

        mock_load_dotenv.assert_called_once()
        assert config.last_weblog_accessed == ""
        assert config.render_links_open_external is True
        assert config.markdown_file_pattern == "*.md"
        assert config.exclude_files == ["README.md"]
        assert config.dry_run is False

    @patch("weblog_addin.config.addin_configuration.load_dotenv")
    def test_reads_environment(self, mock_load_dotenv):
        env = {
            "WEBLOG_LAST_ACCESSED": " My Blog ",
            "WEBLOG_POSTS_FOLDER": "/tmp/posts",
            "WEBLOG_RENDER_LINKS_EXTERNAL": "false",
            "MARKDOWN_FILE_PATTERN": "**/*.md",
            "EXCLUDE_FILES": "README.md, CHANGELOG.md,",
            "MIGRATION_DRY_RUN": "yes",
        }
        with patch.dict(os.environ, env, clear=True):
            config = WeblogAddinConfiguration.from_environment()

        assert config.last_weblog_accessed == "My Blog"
        assert config.posts_folder == "/tmp/posts"
        assert config.render_links_open_external is False
        assert config.markdown_file_pattern == "**/*.md"
        assert config.exclude_files == ["README.md", "CHANGELOG.md"]
        assert config.dry_run is True

    @patch("weblog_addin.config.addin_configuration.load_dotenv")
    def test_invalid_flag_raises(self, mock_load_dotenv):
        with patch.dict(os.environ, {"MIGRATION_DRY_RUN": "sometimes"}, clear=True):
            with pytest.raises(ConfigurationError) as exc_info:
                WeblogAddinConfiguration.from_environment()

        assert "MIGRATION_DRY_RUN" in str(exc_info.value)


class TestPostsFolder:
    """Test the lazily created posts folder."""

    def test_explicit_folder_is_used(self):
        config = WeblogAddinConfiguration()
        config.posts_folder = "/some/where"
        assert config.posts_folder == "/some/where"

    def test_falls_back_to_app_data(self):
        with tempfile.TemporaryDirectory() as home, tempfile.TemporaryDirectory() as app_data:
            with patch("pathlib.Path.home", return_value=Path(home)):
                with patch.dict(os.environ, {"APPDATA": app_data}):
                    folder = WeblogAddinConfiguration().posts_folder

            assert folder == os.path.join(app_data, POSTS_FOLDER_NAME)
            assert os.path.isdir(folder)

    def test_prefers_dropbox(self):
        with tempfile.TemporaryDirectory() as home:
            os.makedirs(os.path.join(home, "Dropbox"))
            with patch("pathlib.Path.home", return_value=Path(home)):
                folder = WeblogAddinConfiguration().posts_folder

            assert folder == os.path.join(home, "Dropbox", POSTS_FOLDER_NAME)
            assert os.path.isdir(folder)


class TestWeblogs:
    """Test weblog lookup and the metadata context snapshot."""

    def test_add_and_get_weblog(self):
        config = WeblogAddinConfiguration(last_weblog_accessed="Medium")
        medium = WeblogInfo(name="Medium", type=WeblogType.MEDIUM)
        config.add_weblog(medium)

        assert config.get_weblog("Medium") is medium
        assert config.get_weblog() is medium
        assert config.get_weblog("Missing") is None

    def test_metadata_context(self):
        config = WeblogAddinConfiguration(last_weblog_accessed="Blog")
        context = config.metadata_context()

        assert context == MetadataContext(last_weblog_accessed="Blog")
        config.last_weblog_accessed = "Other"
        assert context.last_weblog_accessed == "Blog"

    def test_weblog_type_from_name(self):
        assert WeblogType.from_name("medium") is WeblogType.MEDIUM
        assert WeblogType.from_name("MetaWeblogApi") is WeblogType.METAWEBLOG_API
        assert WeblogType.from_name("blogger") is WeblogType.UNKNOWN

    def test_only_medium_keeps_heading(self):
        assert WeblogInfo("m", WeblogType.MEDIUM).keeps_heading_in_body
        assert not WeblogInfo("w", WeblogType.WORDPRESS).keeps_heading_in_body
