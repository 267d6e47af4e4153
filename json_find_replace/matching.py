from __future__ import annotations

from dataclasses import dataclass
from typing import Any

INSERT_TEMPLATE = "<strong style='color: green;'>{}</strong>"
DELETE_TEMPLATE = "<del><em style='color: red;'>{}</em></del>"


@dataclass(frozen=True)
class MatchResult:
    count: int
    replaced_value: Any
    diff_fragment: Any

    @property
    def changed(self) -> bool:
        return self.count > 0


def render_change(original: str, replacement: str) -> str:
    """Markup for one occurrence: the replacement first, then the struck-through original."""
    return INSERT_TEMPLATE.format(replacement) + DELETE_TEMPLATE.format(original)


def match_replace(value: Any, search: str, replacement: str, match_whole: bool = False) -> MatchResult:
    """Replace literal occurrences of `search` in a single value.

    Non-string values and an empty `search` never match; the value itself is
    then returned as both the replaced value and the (unmarked) diff.
    """
    if not isinstance(value, str) or not search:
        return MatchResult(0, value, value)

    if match_whole:
        if value != search:
            return MatchResult(0, value, value)
        return MatchResult(1, replacement, render_change(value, replacement))

    # split() scans left to right for non-overlapping occurrences
    parts = value.split(search)
    count = len(parts) - 1
    if count == 0:
        return MatchResult(0, value, value)
    return MatchResult(count, replacement.join(parts), render_change(search, replacement).join(parts))
