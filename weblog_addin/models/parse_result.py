"""
Result types describing which metadata encoding a decode call took.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from .post_metadata import PostMetadata


class ParseOutcome(Enum):
    FRONT_MATTER = "front_matter"
    LEGACY = "legacy"
    HEADING = "heading"
    ABSENT = "absent"
    MALFORMED = "malformed"


@dataclass
class ParseResult:
    """
    Data model representing the outcome of decoding a document.
    """

    metadata: PostMetadata
    outcome: ParseOutcome = ParseOutcome.ABSENT
    errors: List[str] = field(default_factory=list)

    @property
    def found(self) -> bool:
        """True if metadata came from a block or a heading."""
        return self.outcome not in (ParseOutcome.ABSENT, ParseOutcome.MALFORMED)

    @property
    def is_partial(self) -> bool:
        """True if metadata was found but part of it could not be decoded."""
        return self.found and bool(self.errors)
