"""
Metadata processor: decodes post metadata from a document and writes it back.
"""

import logging
from enum import Enum
from typing import List, Optional

from ..config.addin_configuration import MetadataContext
from ..models.parse_result import ParseOutcome, ParseResult
from ..models.post_metadata import Post, PostMetadata
from ..models.weblog_info import WeblogInfo
from ..utils.error_handler import ErrorHandler, MetadataParseError
from .legacy_metadata import LegacyMetadataCodec
from .yaml_metadata import YamlMetadataCodec


class MetadataEncoding(Enum):
    YAML = "yaml"
    LEGACY = "legacy"


class MetadataProcessor:
    """
    Handles decoding and encoding of post metadata.

    Front matter is the active encoding. The legacy configuration block is
    still read, merged over front matter or heading values, and stripped
    whenever a document is written back as front matter.
    """

    def __init__(
        self,
        context: Optional[MetadataContext] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the processor.

        Args:
            context: Configuration snapshot supplying the default weblog
            logger: Optional logger instance
        """
        self.context = context or MetadataContext()
        self.logger = logger or logging.getLogger(__name__)
        self.error_handler = ErrorHandler(self.logger)
        self.yaml_codec = YamlMetadataCodec()
        self.legacy_codec = LegacyMetadataCodec()

    def parse(
        self,
        markdown: Optional[str],
        weblog_info: Optional[WeblogInfo] = None,
        post: Optional[Post] = None,
        source: Optional[str] = None,
    ) -> ParseResult:
        """
        Decode a document and report which encoding supplied the metadata.

        Never raises: malformed blocks fall back to a default record.

        Args:
            markdown: The document text; None is treated as empty
            weblog_info: Destination, used to decide whether a leading
                heading stays in the body
            post: Optional publishing request to populate
            source: Document name used in log messages

        Returns:
            ParseResult with the decoded metadata
        """
        text = (markdown or "").lstrip("\ufeff").strip()
        errors: List[str] = []
        metadata = PostMetadata.for_document(text)
        outcome = ParseOutcome.ABSENT

        first_line = text.splitlines()[0] if text else ""

        if self.yaml_codec.has_block(text):
            try:
                metadata = self.yaml_codec.decode(text, metadata, errors)
                outcome = ParseOutcome.FRONT_MATTER
            except MetadataParseError as e:
                e.source = source
                self.error_handler.log_parse_error(e, self.yaml_codec.encoding, source)
                metadata = PostMetadata.for_document(text)
                errors.append(str(e))
                outcome = ParseOutcome.MALFORMED

        elif self.yaml_codec.opens_block(text):
            self.logger.debug(
                f"Front matter in '{source or 'document'}' has no closing '---' line"
            )

        elif first_line.startswith("# "):
            metadata.title = first_line[2:].strip()
            if not (weblog_info and weblog_info.keeps_heading_in_body):
                metadata.clean_body = text[len(first_line) :].strip()
            outcome = ParseOutcome.HEADING

        # Front matter values may quote the legacy sentinel; only the body is scanned.
        legacy_source = text
        if outcome == ParseOutcome.FRONT_MATTER:
            legacy_source = self.yaml_codec.strip_block(text)

        if self.legacy_codec.has_block(legacy_source):
            metadata = self.legacy_codec.decode(legacy_source, metadata, errors)
            if outcome != ParseOutcome.FRONT_MATTER:
                outcome = ParseOutcome.LEGACY

        if not metadata.weblog_name:
            metadata.weblog_name = self.context.last_weblog_accessed

        result = ParseResult(metadata=metadata, outcome=outcome, errors=errors)

        if result.is_partial:
            self.logger.warning(
                f"Partially decoded metadata for '{metadata.title}': {'; '.join(errors)}"
            )

        if post is not None and result.found:
            metadata.populate_post(post)

        if result.found:
            self.error_handler.log_success(
                source or "document",
                metadata.title,
                "decoded",
                {"encoding": outcome.value},
            )

        return result

    def decode(
        self,
        markdown: Optional[str],
        weblog_info: Optional[WeblogInfo] = None,
        post: Optional[Post] = None,
    ) -> PostMetadata:
        """
        Decode a document into a metadata record.

        Args:
            markdown: The document text; None is treated as empty
            weblog_info: Destination, used for heading handling
            post: Optional publishing request to populate

        Returns:
            The decoded PostMetadata
        """
        return self.parse(markdown, weblog_info=weblog_info, post=post).metadata

    def encode(
        self,
        metadata: PostMetadata,
        encoding: MetadataEncoding = MetadataEncoding.YAML,
    ) -> Optional[str]:
        """
        Write the record back into its raw body.

        As front matter, any previous front matter block is replaced and
        legacy configuration blocks are removed so documents migrate to the
        new encoding. The legacy encoding is written only when asked for.

        Args:
            metadata: Record whose raw_body is the target document
            encoding: Encoding to write

        Returns:
            The updated document, or None if the record has no raw body
        """
        if metadata.raw_body is None:
            return None

        if encoding == MetadataEncoding.LEGACY:
            return self.legacy_codec.encode(metadata)

        markdown = metadata.raw_body.strip()
        body = self.yaml_codec.strip_block(markdown)
        body = self.legacy_codec.strip_blocks(body).strip()

        document = self.yaml_codec.compose(metadata, body)
        metadata.raw_body = document
        metadata.clean_body = body

        self.error_handler.log_success(
            metadata.weblog_name or "document",
            metadata.title,
            "encoded",
            {"encoding": encoding.value},
        )
        return document
