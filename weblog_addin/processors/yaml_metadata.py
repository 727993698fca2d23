"""
YAML front matter codec for post metadata.
"""

import logging
import re
from typing import Any, Dict, List, Optional

import frontmatter
import yaml

from ..interfaces.metadata_codec import MetadataCodec
from ..models.post_metadata import CustomField, PostMetadata
from ..utils.error_handler import MetadataParseError

# The block ends at the first line that is exactly '---'. Later '---' lines
# are horizontal rules in the body.
YAML_BLOCK_PATTERN = re.compile(
    r"\A---\r?\n(?P<yaml>.*?)(?:\r?\n)?^---\r?$\n?", re.DOTALL | re.MULTILINE
)

_STRING_FIELDS = {
    "title": "title",
    "abstract": "abstract",
    "weblogname": "weblog_name",
    "postid": "post_id",
}
_LIST_FIELDS = {
    "keywords": "keywords",
    "categories": "categories",
}
_BOOL_FIELDS = {
    "isdraft": "is_draft",
    "inferfeaturedimage": "infer_featured_image",
}
_OPTIONAL_FIELDS = {
    "featuredimageurl": "featured_image_url",
    "featuredimageid": "featured_image_id",
}

_TRUE_STRINGS = ("true", "yes", "on", "1")
_FALSE_STRINGS = ("false", "no", "off", "0")


def _normalize_key(key: Any) -> str:
    return re.sub(r"[_\-\s]", "", str(key)).lower()


def _to_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return ",".join(_to_text(item) for item in value if item is not None)
    return str(value)


def _to_optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return _to_text(value)


class YamlMetadataCodec(MetadataCodec):
    """
    Reads and writes metadata as a '---' delimited YAML block at the top
    of a document. Keys are camel-case; matching on decode ignores case,
    underscores and dashes.
    """

    encoding = "yaml"

    def __init__(self):
        self.handler = frontmatter.YAMLHandler()
        self.logger = logging.getLogger(__name__)

    def opens_block(self, markdown: str) -> bool:
        """Check whether the document starts with a '---' line."""
        return bool(markdown) and (
            markdown.startswith("---\n") or markdown.startswith("---\r\n")
        )

    def has_block(self, markdown: str) -> bool:
        return bool(markdown) and YAML_BLOCK_PATTERN.match(markdown) is not None

    def strip_block(self, markdown: str) -> str:
        """
        Remove the leading front matter block, if any.

        Args:
            markdown: The document text

        Returns:
            The document without its front matter
        """
        if not markdown:
            return markdown
        return YAML_BLOCK_PATTERN.sub("", markdown, count=1)

    def decode(
        self,
        markdown: str,
        metadata: PostMetadata,
        errors: Optional[List[str]] = None,
    ) -> PostMetadata:
        """
        Decode the front matter block into a fresh record.

        Fields missing from the block take their defaults rather than the
        values in `metadata`; only the bodies are derived from the document.

        Raises:
            MetadataParseError: If there is no block, the YAML is invalid or
                it is not a mapping
        """
        if errors is None:
            errors = []

        match = YAML_BLOCK_PATTERN.match(markdown or "")
        if not match:
            raise MetadataParseError(
                "Front matter is not terminated by a '---' line", encoding=self.encoding
            )

        try:
            data = self.handler.load(match.group("yaml"))
        except yaml.YAMLError as e:
            raise MetadataParseError(
                f"Invalid YAML: {e}", encoding=self.encoding
            ) from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise MetadataParseError(
                "Front matter is not a YAML mapping", encoding=self.encoding
            )

        values = {_normalize_key(key): value for key, value in data.items()}
        result = PostMetadata(
            raw_body=markdown, clean_body=markdown[match.end() :].strip()
        )

        for key, attribute in _STRING_FIELDS.items():
            if key in values:
                setattr(result, attribute, _to_text(values[key]))

        for key, attribute in _LIST_FIELDS.items():
            if key in values:
                setattr(result, attribute, _to_text(values[key]))

        for key, attribute in _OPTIONAL_FIELDS.items():
            if key in values:
                setattr(result, attribute, _to_optional_text(values[key]))

        for key, attribute in _BOOL_FIELDS.items():
            if key in values:
                setattr(
                    result,
                    attribute,
                    self._to_bool(values[key], getattr(result, attribute), key, errors),
                )

        if "customfields" in values:
            result.custom_fields = self._decode_custom_fields(
                values["customfields"], errors
            )

        return result

    def _to_bool(self, value: Any, default: bool, key: str, errors: List[str]) -> bool:
        if value is None:
            return default
        if isinstance(value, bool):
            return value
        text = str(value).strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
        errors.append(f"Ignored non-boolean value {value!r} for {key}")
        return default

    def _decode_custom_fields(
        self, value: Any, errors: List[str]
    ) -> Dict[str, CustomField]:
        if value is None:
            return {}

        if isinstance(value, dict):
            entries = list(value.items())
        elif isinstance(value, list):
            entries = [(None, entry) for entry in value]
        else:
            errors.append("customFields is neither a mapping nor a list")
            return {}

        fields = {}
        for name, entry in entries:
            if not isinstance(entry, dict):
                errors.append(f"Custom field {name!r} is not a mapping")
                continue

            entry = {_normalize_key(k): v for k, v in entry.items()}
            key = _to_text(entry.get("key")) or _to_text(name)
            if not key:
                errors.append("Custom field without a key")
                continue

            fields[_to_text(name) or key] = CustomField(
                key=key,
                value=_to_text(entry.get("value")),
                id=_to_optional_text(entry.get("id")),
            )

        return fields

    def serialize(self, metadata: PostMetadata) -> str:
        """
        Serialize the record's fields to YAML without delimiters.

        An empty post id, empty custom fields and unset featured image
        fields are left out.
        """
        data = {
            "title": metadata.title or "",
            "abstract": metadata.abstract or "",
            "categories": metadata.categories or "",
            "keywords": metadata.keywords or "",
            "weblogName": metadata.weblog_name or "",
        }

        if metadata.post_id:
            data["postId"] = metadata.post_id

        data["isDraft"] = bool(metadata.is_draft)
        data["inferFeaturedImage"] = bool(metadata.infer_featured_image)

        if metadata.featured_image_url is not None:
            data["featuredImageUrl"] = metadata.featured_image_url
        if metadata.featured_image_id is not None:
            data["featuredImageId"] = metadata.featured_image_id

        if metadata.custom_fields:
            custom_fields = {}
            for name, custom_field in metadata.custom_fields.items():
                entry = {"key": custom_field.key, "value": custom_field.value or ""}
                if custom_field.id:
                    entry["id"] = custom_field.id
                custom_fields[name] = entry
            data["customFields"] = custom_fields

        return self.handler.export(data, sort_keys=False)

    def compose(self, metadata: PostMetadata, body: str) -> str:
        """
        Prepend a front matter block for the record to a body.

        Args:
            metadata: The record to serialize
            body: Document text without any metadata block

        Returns:
            The composed document
        """
        document = f"---\n{self.serialize(metadata)}\n---\n"
        body = (body or "").strip()
        if body:
            document += "\n" + body
        return document

    def encode(self, metadata: PostMetadata) -> Optional[str]:
        if metadata.raw_body is None:
            return None

        body = self.strip_block(metadata.raw_body.strip()).strip()
        document = self.compose(metadata, body)

        metadata.raw_body = document
        metadata.clean_body = body
        self.logger.debug(f"Encoded front matter for '{metadata.title}'")
        return document
