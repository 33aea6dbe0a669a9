"""Query parameter builder for Subsonic operations."""

from typing import Any, Dict


class Query:
    """Ordered query parameters with optional arguments left out.

    Example:
        >>> Query.with_("id", 1).arg("count", None).arg("includeNotPresent", True).build()
        {'id': '1', 'includeNotPresent': 'true'}
    """

    def __init__(self):
        self._args: Dict[str, str] = {}

    @classmethod
    def with_(cls, key: str, value: Any) -> "Query":
        return cls().arg(key, value)

    def arg(self, key: str, value: Any) -> "Query":
        """Add an argument. ``None`` means the argument is omitted."""
        if value is None:
            return self
        if isinstance(value, bool):
            value = "true" if value else "false"
        self._args[key] = str(value)
        return self

    def build(self) -> Dict[str, str]:
        return dict(self._args)

    def __repr__(self) -> str:
        return f"Query({self._args!r})"
