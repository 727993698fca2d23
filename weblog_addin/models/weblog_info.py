"""
Weblog destination model.
"""

from dataclasses import dataclass
from enum import Enum


class WeblogType(Enum):
    """Publishing API flavor of a weblog."""

    METAWEBLOG_API = "MetaWeblogApi"
    WORDPRESS = "Wordpress"
    MEDIUM = "Medium"
    UNKNOWN = "Unknown"

    @classmethod
    def from_name(cls, name: str) -> "WeblogType":
        for member in cls:
            if member.value.lower() == (name or "").strip().lower():
                return member
        return cls.UNKNOWN


@dataclass
class WeblogInfo:
    """
    A configured publishing destination.
    """

    name: str
    type: WeblogType = WeblogType.METAWEBLOG_API
    api_url: str = ""
    blog_id: str = ""

    @property
    def keeps_heading_in_body(self) -> bool:
        # Medium renders the leading heading itself
        return self.type == WeblogType.MEDIUM
