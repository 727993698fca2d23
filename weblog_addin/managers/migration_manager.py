"""
Migration manager for moving documents from the legacy configuration block
to YAML front matter.
"""

import logging
from typing import List, Optional, Tuple

from ..models.migration_result import MigrationResult
from ..models.parse_result import ParseOutcome
from ..processors.metadata_processor import MetadataEncoding, MetadataProcessor
from ..utils.error_handler import ErrorHandler, MigrationError


class MigrationManager:
    """
    Coordinates metadata migration across documents.

    Documents without a legacy block are left untouched. A failure in one
    document is isolated and reported without stopping the others.
    """

    def __init__(
        self,
        processor: Optional[MetadataProcessor] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the migration manager.

        Args:
            processor: Metadata processor to decode and encode with
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.processor = processor or MetadataProcessor(logger=self.logger)
        self.error_handler = ErrorHandler(self.logger)

    def needs_migration(self, markdown: str) -> bool:
        text = (markdown or "").lstrip("\ufeff").strip()
        return self.processor.legacy_codec.has_block(
            self.processor.yaml_codec.strip_block(text)
        )

    def migrate_document(
        self, source: str, markdown: str
    ) -> Tuple[MigrationResult, str]:
        """
        Migrate one document.

        Args:
            source: Name of the document, used for reporting
            markdown: The document text

        Returns:
            Tuple of (result, document text to keep)
        """
        try:
            if not self.needs_migration(markdown):
                self.logger.debug(f"No legacy configuration in {source}, skipping")
                return MigrationResult(source, "skipped"), markdown

            parsed = self.processor.parse(markdown, source=source)
            # Encoding replaces the leading block, so a broken one must be fixed by hand.
            broken_front_matter = parsed.outcome != ParseOutcome.FRONT_MATTER and (
                self.processor.yaml_codec.has_block(parsed.metadata.raw_body)
            )
            if broken_front_matter:
                raise MigrationError(
                    f"Front matter in {source} could not be decoded: {'; '.join(parsed.errors)}",
                    encoding="yaml",
                    source=source,
                )

            metadata = parsed.metadata
            document = self.processor.encode(metadata, MetadataEncoding.YAML)

            self.error_handler.log_success(source, metadata.title, "migrated")
            return MigrationResult(source, "migrated", title=metadata.title), document

        except MigrationError as e:
            self.logger.error(str(e))
            return MigrationResult(source, "failed", error_message=str(e)), markdown

        except Exception as e:
            self.logger.error(
                f"Unexpected error migrating {source}: {str(e)}", exc_info=True
            )
            return (
                MigrationResult(
                    source, "failed", error_message=f"Unexpected error: {str(e)}"
                ),
                markdown,
            )

    def migrate_documents(
        self, documents: List[Tuple[str, str]]
    ) -> List[Tuple[MigrationResult, str]]:
        """
        Migrate several documents and log a summary.

        Args:
            documents: List of tuples (source, markdown)

        Returns:
            List of tuples (result, document text to keep), in input order
        """
        outcomes = [self.migrate_document(source, text) for source, text in documents]

        successful = [r.source for r, _ in outcomes if r.success]
        failed = [(r.source, r.error_message) for r, _ in outcomes if not r.success]
        self.error_handler.log_partial_failure_summary(
            "metadata migration", successful, failed
        )

        return outcomes
