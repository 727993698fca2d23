"""
Metadata codec interface for reading and writing post metadata blocks.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from ..models.post_metadata import PostMetadata


class MetadataCodec(ABC):
    """
    Abstract base class for codecs that embed post metadata in Markdown.
    """

    @abstractmethod
    def has_block(self, markdown: str) -> bool:
        """
        Check whether the document carries a block in this encoding.

        Args:
            markdown: The document text

        Returns:
            True if a block was found
        """
        pass

    @abstractmethod
    def decode(
        self,
        markdown: str,
        metadata: PostMetadata,
        errors: Optional[List[str]] = None,
    ) -> PostMetadata:
        """
        Decode the block found in a document.

        Args:
            markdown: The document text
            metadata: Record holding defaults to decode into
            errors: Collects recoverable problems in parts of the block

        Returns:
            The decoded record, with clean_body stripped of the block
        """
        pass

    @abstractmethod
    def encode(self, metadata: PostMetadata) -> Optional[str]:
        """
        Embed the record into its raw body.

        Args:
            metadata: The record to serialize

        Returns:
            The document with an up-to-date block
        """
        pass
