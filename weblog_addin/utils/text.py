"""
Delimiter based string extraction shared by the metadata codecs.
"""

from typing import List


def extract_string(
    source: str,
    begin: str,
    end: str,
    case_sensitive: bool = True,
    allow_missing_end: bool = False,
    return_delimiters: bool = False,
) -> str:
    """
    Extract the text between two delimiters.

    Args:
        source: The text to search
        begin: The opening delimiter
        end: The closing delimiter, searched for after the opening one
        case_sensitive: Whether delimiters must match case exactly
        allow_missing_end: Return everything up to the end of the source
            when the closing delimiter is missing
        return_delimiters: Include the delimiters in the returned text

    Returns:
        The extracted text, or an empty string if nothing matched
    """
    if not source or not begin or not end:
        return ""

    haystack = source if case_sensitive else source.lower()
    begin_key = begin if case_sensitive else begin.lower()
    end_key = end if case_sensitive else end.lower()

    start = haystack.find(begin_key)
    if start < 0:
        return ""

    content_start = start + len(begin)
    stop = haystack.find(end_key, content_start)

    if stop < 0:
        if not allow_missing_end:
            return ""
        if return_delimiters:
            return source[start:]
        return source[content_start:]

    if return_delimiters:
        return source[start : stop + len(end)]
    return source[content_start:stop]


def split_comma_list(value: str) -> List[str]:
    """Split a comma-joined string into trimmed, non-empty entries."""
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]
