"""
Add-in configuration: configured weblogs, posts folder and the last
weblog a post was sent to.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from dotenv import load_dotenv

from ..models.weblog_info import WeblogInfo
from ..utils.error_handler import ConfigurationError, ErrorHandler

POSTS_FOLDER_NAME = "Markdown Monster Weblog Posts"

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off", "")


@dataclass(frozen=True)
class MetadataContext:
    """
    Snapshot of the configuration values metadata decoding depends on.
    """

    last_weblog_accessed: str = ""


@dataclass
class WeblogAddinConfiguration:
    """
    Configuration for the weblog add-in.
    """

    weblogs: Dict[str, WeblogInfo] = field(default_factory=dict)
    last_weblog_accessed: str = ""
    render_links_open_external: bool = True
    markdown_file_pattern: str = "*.md"
    exclude_files: List[str] = field(default_factory=lambda: ["README.md"])
    dry_run: bool = False
    _posts_folder: Optional[str] = field(default=None, repr=False)

    @property
    def posts_folder(self) -> str:
        """
        Folder holding weblog posts, created on first access.

        Falls back to a Dropbox folder in the user's home when one exists,
        otherwise to the user's application data folder.
        """
        if not self._posts_folder:
            base_path = Path.home() / "Dropbox"
            if not base_path.is_dir():
                app_data = os.environ.get("APPDATA")
                base_path = (
                    Path(app_data)
                    if app_data
                    else Path.home() / ".local" / "share"
                )

            folder = base_path / POSTS_FOLDER_NAME
            folder.mkdir(parents=True, exist_ok=True)
            self._posts_folder = str(folder)

        return self._posts_folder

    @posts_folder.setter
    def posts_folder(self, value: str) -> None:
        self._posts_folder = value

    def add_weblog(self, weblog: WeblogInfo) -> None:
        self.weblogs[weblog.name] = weblog

    def get_weblog(self, name: Optional[str] = None) -> Optional[WeblogInfo]:
        """
        Look up a configured weblog.

        Args:
            name: Weblog name. Defaults to the last accessed weblog.

        Returns:
            The weblog, or None if it is not configured
        """
        return self.weblogs.get(name or self.last_weblog_accessed)

    def metadata_context(self) -> MetadataContext:
        return MetadataContext(last_weblog_accessed=self.last_weblog_accessed or "")

    @classmethod
    def from_environment(cls, logger: Optional[logging.Logger] = None) -> "WeblogAddinConfiguration":
        """
        Load configuration from environment variables and a .env file.

        Returns:
            WeblogAddinConfiguration instance

        Raises:
            ConfigurationError: If a boolean setting has an unrecognized value
        """
        load_dotenv()
        logger = logger or logging.getLogger(__name__)
        error_handler = ErrorHandler(logger)

        def read_flag(name: str, default: bool) -> bool:
            raw = os.environ.get(name)
            if raw is None:
                return default
            value = raw.strip().lower()
            if value in _TRUE_VALUES:
                return True
            if value in _FALSE_VALUES:
                return False
            error_handler.log_configuration_error(name, f"'{raw}' is not a boolean")
            raise ConfigurationError(f"{name} must be a boolean, got '{raw}'")

        config = cls(
            last_weblog_accessed=os.environ.get("WEBLOG_LAST_ACCESSED", "").strip(),
            render_links_open_external=read_flag("WEBLOG_RENDER_LINKS_EXTERNAL", True),
            markdown_file_pattern=os.environ.get("MARKDOWN_FILE_PATTERN", "*.md"),
            exclude_files=[
                name.strip()
                for name in os.environ.get("EXCLUDE_FILES", "README.md").split(",")
                if name.strip()
            ],
            dry_run=read_flag("MIGRATION_DRY_RUN", False),
        )

        posts_folder = os.environ.get("WEBLOG_POSTS_FOLDER", "").strip()
        if posts_folder:
            config.posts_folder = posts_folder

        logger.info(
            f"Configuration loaded: last weblog='{config.last_weblog_accessed}', "
            f"pattern='{config.markdown_file_pattern}', dry_run={config.dry_run}"
        )
        return config
