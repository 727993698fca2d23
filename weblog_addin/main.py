"""
This module migrates weblog posts from the legacy configuration block to
YAML front matter.
"""

import glob
import logging
import os
from typing import List, Optional

from weblog_addin.config.addin_configuration import WeblogAddinConfiguration
from weblog_addin.managers.migration_manager import MigrationManager
from weblog_addin.models.migration_result import MigrationResult
from weblog_addin.processors.metadata_processor import MetadataProcessor
from weblog_addin.utils.error_handler import ConfigurationError, ErrorHandler
from weblog_addin.utils.progress_tracker import ProgressTracker


class PostMetadataMigrator:
    """
    This class migrates the posts in the configured posts folder.
    """

    def __init__(
        self,
        config: Optional[WeblogAddinConfiguration] = None,
        tracker: Optional[ProgressTracker] = None,
    ) -> None:
        """
        Initialize the migrator.

        Args:
            config: Add-in configuration. If None, loads it from the environment.
            tracker: Progress tracker collecting results
        """
        self.logger = logging.getLogger(__name__)
        self.error_handler = ErrorHandler(self.logger)
        self.config = config or WeblogAddinConfiguration.from_environment(self.logger)
        self.tracker = tracker or ProgressTracker()

        processor = MetadataProcessor(self.config.metadata_context(), self.logger)
        self.migration_manager = MigrationManager(processor, self.logger)

    def _get_list_of_markdown_files(self) -> List[str]:
        """
        Get list of markdown files to process based on configuration.

        Returns:
            Sorted list of markdown file paths
        """
        pattern = os.path.join(self.config.posts_folder, self.config.markdown_file_pattern)
        md_files = glob.glob(pattern, recursive=True)

        exclude_files = self.config.exclude_files
        md_files = [
            file
            for file in md_files
            if not any(file.endswith(exclude) for exclude in exclude_files)
        ]

        return sorted(md_files)

    def migrate_file(self, md_file: str) -> MigrationResult:
        """
        Migrate a single file, writing it back unless running dry.

        Args:
            md_file: Path to the markdown file

        Returns:
            MigrationResult for the file
        """
        try:
            with open(md_file, "r", encoding="utf-8-sig") as f:
                markdown_text = f.read()
        except OSError as e:
            self.logger.error(f"Error reading {md_file}: {str(e)}")
            return MigrationResult(md_file, "failed", error_message=str(e))

        result, document = self.migration_manager.migrate_document(md_file, markdown_text)

        if result.action == "migrated" and not self.config.dry_run:
            try:
                with open(md_file, "w", encoding="utf-8") as f:
                    f.write(document)
            except OSError as e:
                self.logger.error(f"Error writing {md_file}: {str(e)}")
                return MigrationResult(
                    md_file, "failed", title=result.title, error_message=str(e)
                )

        return result

    def migrate_all(self) -> List[MigrationResult]:
        """
        Migrate every markdown file in the posts folder.

        Returns:
            List of migration results
        """
        md_files = self._get_list_of_markdown_files()

        if not md_files:
            self.logger.info(f"No markdown files found in {self.config.posts_folder}")
            return []

        self.logger.info(f"Found {len(md_files)} markdown files to process")

        results = []
        with self.tracker.create_progress_context() as progress:
            task = progress.add_task("Migrating post metadata", total=len(md_files))
            for md_file in md_files:
                result = self.migrate_file(md_file)
                self.tracker.add_result(result)
                results.append(result)
                progress.advance(task)

        self.error_handler.log_partial_failure_summary(
            "metadata migration",
            [r.source for r in results if r.success],
            [(r.source, r.error_message) for r in results if not r.success],
        )
        return results


def main():
    """Main entry point for the metadata migration CLI."""
    tracker = ProgressTracker()
    tracker.setup_colored_logging()

    try:
        migrator = PostMetadataMigrator(tracker=tracker)
    except ConfigurationError as e:
        logging.error(f"Configuration error: {str(e)}")
        raise SystemExit(2)

    try:
        migrator.migrate_all()
        tracker.print_summary(dry_run=migrator.config.dry_run)
    except Exception as e:
        logging.error(f"Error in main execution: {str(e)}", exc_info=True)
        raise

    if tracker.get_summary()["failed"]:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
