"""
Legacy XML-comment codec for post metadata.

Older documents carry their metadata at the end of the body in a block like:

    <!-- Post Configuration -->
    <!--
    ```xml
    <blogpost>
    <title>...</title>
    ...
    </blogpost>
    ```
    -->
    <!-- End Post Configuration -->

The block is kept readable for backward compatibility; new documents use
YAML front matter.
"""

import logging
import xml.etree.ElementTree as ET
from typing import Dict, List, Optional
from xml.sax.saxutils import escape

from ..interfaces.metadata_codec import MetadataCodec
from ..models.post_metadata import CustomField, PostMetadata
from ..utils.text import extract_string

CONFIG_START = "<!-- Post Configuration -->"
CONFIG_END = "<!-- End Post Configuration -->"


class LegacyMetadataCodec(MetadataCodec):
    """
    Reads and writes the '<!-- Post Configuration -->' block.
    """

    encoding = "legacy"

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def extract_block(self, markdown: str) -> str:
        """
        Find the first configuration block including its sentinels.

        The sentinels match case-insensitively and a missing end sentinel
        extends the block to the end of the document.
        """
        return extract_string(
            markdown,
            CONFIG_START,
            CONFIG_END,
            case_sensitive=False,
            allow_missing_end=True,
            return_delimiters=True,
        )

    def has_block(self, markdown: str) -> bool:
        return bool(self.extract_block(markdown))

    def strip_blocks(self, markdown: str) -> str:
        """Remove every configuration block from a document."""
        if not markdown:
            return markdown

        block = self.extract_block(markdown)
        while block:
            markdown = markdown.replace(block, "")
            block = self.extract_block(markdown)
        return markdown

    def _field(self, config: str, tag: str) -> str:
        return extract_string(config, f"\n<{tag}>", f"</{tag}>").strip()

    def decode(
        self,
        markdown: str,
        metadata: PostMetadata,
        errors: Optional[List[str]] = None,
    ) -> PostMetadata:
        """
        Merge the configuration block into an existing record.

        A title only fills an empty one so a heading title wins. The block
        always supplies abstract, keywords, categories and post id. Other
        fields override only when present.
        """
        if errors is None:
            errors = []

        config = self.extract_block(markdown)
        if not config:
            return metadata

        metadata.clean_body = self.strip_blocks(metadata.clean_body or "").strip()

        title = self._field(config, "title")
        if not metadata.title:
            metadata.title = title

        metadata.abstract = self._field(config, "abstract")
        metadata.keywords = self._field(config, "keywords")
        metadata.categories = self._field(config, "categories")
        metadata.post_id = self._field(config, "postid")

        if self._field(config, "isDraft") == "True":
            metadata.is_draft = True

        weblog_name = self._field(config, "weblog")
        if weblog_name:
            metadata.weblog_name = weblog_name

        infer_featured_image = self._field(config, "inferFeaturedImage")
        if infer_featured_image:
            metadata.infer_featured_image = infer_featured_image not in ("False", "false")

        featured_image_url = self._field(config, "featuredImage")
        if featured_image_url:
            metadata.featured_image_url = featured_image_url

        featured_image_id = self._field(config, "featuredImageId")
        if featured_image_id:
            metadata.featured_image_id = featured_image_id

        custom_fields_xml = extract_string(
            config, "\n<customFields>", "</customFields>", return_delimiters=True
        )
        if custom_fields_xml:
            metadata.custom_fields.update(
                self.parse_custom_fields(custom_fields_xml.strip(), errors)
            )

        return metadata

    def parse_custom_fields(
        self, fragment: str, errors: Optional[List[str]] = None
    ) -> Dict[str, CustomField]:
        """
        Parse a <customFields> fragment.

        Each child element holds key, value and an optional id as its first,
        second and third child. Malformed XML yields no custom fields.

        Args:
            fragment: The XML fragment including the <customFields> element
            errors: Collects the parse error, if any

        Returns:
            Custom fields keyed by their key
        """
        try:
            root = ET.fromstring(fragment)
        except ET.ParseError as e:
            self.logger.debug(f"Ignoring malformed customFields block: {e}")
            if errors is not None:
                errors.append(f"Malformed customFields XML: {e}")
            return {}

        fields = {}
        for child in root:
            children = list(child)
            if len(children) < 2:
                if errors is not None:
                    errors.append(f"Custom field element <{child.tag}> lacks key or value")
                continue

            key = (children[0].text or "").strip()
            value = children[1].text or ""
            field_id = None
            if len(children) > 2:
                field_id = (children[2].text or "").strip() or None

            fields[key] = CustomField(key=key, value=value, id=field_id)

        return fields

    def render_block(self, metadata: PostMetadata) -> str:
        """Render the configuration block for a record."""
        custom_fields = ""
        if metadata.custom_fields:
            lines = ["", "<customFields>"]
            for custom_field in metadata.custom_fields.values():
                lines.append("\t<customField>")
                lines.append(f"\t\t<key>{escape(custom_field.key)}</key>")
                lines.append(f"\t\t<value>{escape(custom_field.value or '')}</value>")
                if custom_field.id:
                    lines.append(f"\t\t<id>{escape(custom_field.id)}</id>")
                lines.append("\t</customField>")
            lines.append("</customFields>")
            custom_fields = "\n".join(lines)

        return f"""{CONFIG_START}
<!--
```xml
<blogpost>
<title>{metadata.title or ''}</title>
<abstract>
{metadata.abstract or ''}
</abstract>
<categories>
{metadata.categories or ''}
</categories>
<keywords>
{metadata.keywords or ''}
</keywords>
<isDraft>{bool(metadata.is_draft)}</isDraft>
<weblogs>
<postid>{metadata.post_id or ''}</postid>
<weblog>
{metadata.weblog_name or ''}
</weblog>
</weblogs>
<inferFeaturedImage>{bool(metadata.infer_featured_image)}</inferFeaturedImage>
<featuredImage>{metadata.featured_image_url or ''}</featuredImage>
<featuredImageId>{metadata.featured_image_id or ''}</featuredImageId>{custom_fields}
</blogpost>
```
-->
{CONFIG_END}"""

    def encode(self, metadata: PostMetadata) -> Optional[str]:
        """
        Write the configuration block into the record's raw body.

        An existing block is replaced in place, otherwise the block is
        appended after the body.
        """
        markdown = metadata.raw_body
        if markdown is None:
            return None

        new_config = self.render_block(metadata)
        original_config = self.extract_block(markdown)

        if original_config:
            markdown = markdown.replace(original_config, new_config)
        elif markdown.strip():
            markdown = markdown.rstrip() + "\n\n" + new_config
        else:
            markdown = new_config

        metadata.raw_body = markdown
        metadata.clean_body = markdown.replace(new_config, "").strip()
        self.logger.debug(f"Encoded legacy configuration for '{metadata.title}'")
        return markdown
