"""
Pytest configuration and fixtures for the weblog metadata add-in.
"""

import pytest
from hypothesis import settings, Verbosity

from weblog_addin.config.addin_configuration import MetadataContext
from weblog_addin.processors.metadata_processor import MetadataProcessor

# Configure Hypothesis for property-based testing
settings.register_profile("default", max_examples=100, verbosity=Verbosity.normal)
settings.load_profile("default")


@pytest.fixture
def metadata_context():
    """Configuration snapshot with a last accessed weblog."""
    return MetadataContext(last_weblog_accessed="West Wind Weblog")


@pytest.fixture
def processor(metadata_context):
    """Processor using the sample configuration snapshot."""
    return MetadataProcessor(metadata_context)


@pytest.fixture
def sample_front_matter_document():
    """Document carrying YAML front matter."""
    return """---
title: Async Waits in Tests
abstract: How to wait for async work without sleeping
categories: Testing,Python
keywords: async,pytest
weblogName: Rick's Blog
postId: '1234'
isDraft: true
inferFeaturedImage: false
featuredImageUrl: https://example.com/cover.png
customFields:
  mt_githuburl:
    key: mt_githuburl
    value: https://github.com/example/repo
    id: '42'
---

# Async Waits in Tests

Some content here.
"""


@pytest.fixture
def sample_legacy_document():
    """Document carrying the legacy configuration block."""
    return """# Legacy Post

This is a post written before front matter was supported.

<!-- Post Configuration -->
<!--
```xml
<blogpost>
<title>Legacy Post From Config</title>
<abstract>
An older post
</abstract>
<categories>
Legacy,Archive
</categories>
<keywords>
old,xml
</keywords>
<isDraft>True</isDraft>
<weblogs>
<postid>77</postid>
<weblog>
Archive Blog
</weblog>
</weblogs>
<inferFeaturedImage>False</inferFeaturedImage>
<featuredImage>https://example.com/old.png</featuredImage>
<featuredImageId>9</featuredImageId>
<customFields>
	<customField>
		<key>mt_source</key>
		<value>imported</value>
		<id>5</id>
	</customField>
</customFields>
</blogpost>
```
-->
<!-- End Post Configuration -->
"""
