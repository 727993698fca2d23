"""
Migration operation result model.
"""

from typing import Optional


class MigrationResult:
    """Result of migrating one document's metadata to front matter."""

    def __init__(
        self,
        source: str,
        action: str,
        title: str = "",
        error_message: Optional[str] = None,
    ):
        """
        Initialize migration result.

        Args:
            source: Path or name of the migrated document
            action: 'migrated', 'skipped' or 'failed'
            title: Post title, if one was decoded
            error_message: Reason for a failure
        """
        self.source = source
        self.action = action
        self.title = title
        self.error_message = error_message

    @property
    def success(self) -> bool:
        return self.action != "failed"

    def __bool__(self):
        """Skipped documents count as successful."""
        return self.success

    def __repr__(self):
        if self.action == "failed":
            return f"MigrationResult(source={self.source!r}, failed={self.error_message!r})"
        return f"MigrationResult(source={self.source!r}, action={self.action!r})"
