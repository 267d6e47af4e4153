from __future__ import annotations


class FindReplaceError(ValueError):
    """Raised when find_replace_all is called with arguments it cannot honour."""
