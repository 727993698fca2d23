"""
Data models for weblog post metadata and the publishing request it feeds.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..utils.text import split_comma_list


@dataclass
class CustomField:
    """
    A platform-specific key/value pair uploaded alongside a post.

    The id is assigned by the server and decides whether an upload
    updates an existing field or inserts a new one.
    """

    key: str
    value: str
    id: Optional[str] = None

    def __post_init__(self):
        # An empty id means the server has not assigned one yet.
        if not self.id:
            self.id = None


@dataclass
class Post:
    """
    Publishing request populated from decoded metadata.
    """

    title: str = ""
    categories: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    mt_excerpt: str = ""
    mt_keywords: str = ""
    custom_fields: List[CustomField] = field(default_factory=list)


@dataclass
class PostMetadata:
    """
    Data model representing the publishing metadata embedded in a document.

    raw_body holds the full document including the metadata block,
    clean_body holds the document with the block removed.
    """

    title: str = ""
    abstract: str = ""
    keywords: str = ""
    categories: str = ""
    weblog_name: str = ""
    post_id: str = ""
    is_draft: bool = False
    infer_featured_image: bool = True
    featured_image_url: Optional[str] = None
    featured_image_id: Optional[str] = None
    custom_fields: Dict[str, CustomField] = field(default_factory=dict)
    raw_body: str = ""
    clean_body: str = ""

    @property
    def keyword_list(self) -> List[str]:
        return split_comma_list(self.keywords)

    @property
    def category_list(self) -> List[str]:
        return split_comma_list(self.categories)

    @classmethod
    def for_document(cls, markdown: str, weblog_name: str = "") -> "PostMetadata":
        """
        Create a default record for a document that carries no metadata.

        Args:
            markdown: The document text
            weblog_name: Weblog to fall back to

        Returns:
            PostMetadata instance with both bodies set to the document
        """
        return cls(raw_body=markdown, clean_body=markdown, weblog_name=weblog_name)

    def populate_post(self, post: Post) -> Post:
        """
        Copy the publishable fields onto a publishing request.

        Args:
            post: The request to populate

        Returns:
            The same request, for chaining
        """
        post.title = self.title
        post.categories = self.category_list
        post.tags = self.keyword_list
        post.mt_excerpt = self.abstract
        post.mt_keywords = self.keywords
        post.custom_fields = list(self.custom_fields.values())
        return post
