from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Tuple

from .errors import FindReplaceError
from .matching import match_replace
from .paths import join_path
from .policy import is_processable

logger = logging.getLogger(__name__)

OBJECT = 'object'
ARRAY = 'array'


@dataclass(frozen=True)
class Change:
    """One string leaf that had at least one occurrence replaced."""

    path: str
    before: str
    after: str
    diff_html: str
    count: int


@dataclass
class FindReplaceResult:
    replaced: Any
    diff_html: Any
    changes: List[Change] = field(default_factory=list)

    @property
    def count(self) -> int:
        return sum(change.count for change in self.changes)

    @property
    def changed(self) -> bool:
        return bool(self.changes)


@dataclass(frozen=True)
class _Terms:
    search: str
    replacement: str
    match_whole: bool


def _is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _schema_type(schema_node: Any) -> Optional[str]:
    if isinstance(schema_node, Mapping):
        return schema_node.get('type')
    return None


def _walk(value: Any, schema_node: Any, terms: _Terms, path: str, changes: List[Change]) -> Tuple[Any, Any]:
    """Return `(replaced, diff)`; a `None` diff means the value has no diff entry."""
    kind = _schema_type(schema_node)
    if kind == OBJECT:
        if isinstance(value, Mapping):
            return _walk_object(value, schema_node, terms, path, changes)
        return value, None
    if kind == ARRAY:
        if _is_array(value):
            return _walk_array(value, schema_node, terms, path, changes)
        return value, None
    if kind is None:
        # No usable schema at this node.
        return value, None
    return _walk_leaf(value, terms, path, changes)


def _walk_object(value: Mapping, schema_node: Mapping, terms: _Terms, path: str, changes: List[Change]):
    properties = schema_node.get('properties')
    if not isinstance(properties, Mapping):
        properties = {}

    start = len(changes)
    replaced = {}
    diff = {}
    for key, child_value in value.items():
        child_schema = properties.get(key)
        if child_schema is None:
            replaced[key] = child_value
            continue
        if not is_processable(child_schema, key):
            logger.debug("Skipping %s", join_path(path, key))
            replaced[key] = child_value
            continue
        replaced[key], child_diff = _walk(child_value, child_schema, terms, join_path(path, key), changes)
        if child_diff is not None:
            diff[key] = child_diff

    if len(changes) == start:
        return value, diff
    return replaced, diff


def _walk_array(value, schema_node: Mapping, terms: _Terms, path: str, changes: List[Change]):
    items_schema = schema_node.get('items')
    if items_schema is None or not is_processable(items_schema):
        return value, None

    start = len(changes)
    replaced = []
    # None keeps the index of elements without a diff entry.
    diff = []
    for index, element in enumerate(value):
        new_element, element_diff = _walk(element, items_schema, terms, join_path(path, index), changes)
        replaced.append(new_element)
        diff.append(element_diff)

    if len(changes) == start:
        return value, diff
    if isinstance(value, tuple):
        return tuple(replaced), diff
    return replaced, diff


def _walk_leaf(value: Any, terms: _Terms, path: str, changes: List[Change]):
    if not isinstance(value, str):
        return value, None
    result = match_replace(value, terms.search, terms.replacement, terms.match_whole)
    if not result.changed:
        return value, value
    changes.append(Change(path, value, result.replaced_value, result.diff_fragment, result.count))
    return result.replaced_value, result.diff_fragment


def traverse(
    value: Any,
    schema_node: Any,
    search: str,
    replacement: str,
    match_whole: bool = False,
    key: Optional[str] = None,
) -> Tuple[Any, Any]:
    """Walk `value` together with the schema node that governs it.

    Returns `(replaced, diff)`. A `None` diff means the value has no diff
    entry, which is the case for non-string scalars, values without a usable
    schema, and skipped values. When `key` names the property the value sits
    under and that property is not editable (`$ref`, disabled, hidden), the
    value comes back unchanged with a `None` diff.
    """
    if key is not None and not is_processable(schema_node, key):
        return value, None
    terms = _Terms(search, replacement, bool(match_whole))
    return _walk(value, schema_node, terms, '' if key is None else join_path('', key), [])


def _check_arguments(document: Any, schema: Any, search: Any, replacement: Any) -> None:
    if not isinstance(search, str):
        raise FindReplaceError(f"search must be a string, got {type(search).__name__}")
    if not isinstance(replacement, str):
        raise FindReplaceError(f"replacement must be a string, got {type(replacement).__name__}")
    if not isinstance(schema, Mapping):
        raise FindReplaceError(f"schema must be a mapping, got {type(schema).__name__}")

    kind = schema.get('type')
    if kind == OBJECT and not isinstance(document, Mapping):
        raise FindReplaceError(f"schema root is an object but the document is {type(document).__name__}")
    if kind == ARRAY and not _is_array(document):
        raise FindReplaceError(f"schema root is an array but the document is {type(document).__name__}")
    if kind is not None and kind not in (OBJECT, ARRAY) and (isinstance(document, Mapping) or _is_array(document)):
        raise FindReplaceError(f"schema root is a {kind} leaf but the document is {type(document).__name__}")


def find_replace_all(
    document: Any,
    schema: Mapping,
    search: str,
    replacement: str,
    match_whole: bool = False,
) -> FindReplaceResult:
    """Replace `search` with `replacement` in every editable string of `document`.

    The schema is only used to navigate the document and to find fields
    that must stay untouched; it does not validate anything. The document
    is never modified: unchanged subtrees are shared with the result and
    every container on the way to a change is rebuilt.
    """
    _check_arguments(document, schema, search, replacement)

    changes: List[Change] = []
    terms = _Terms(search, replacement, bool(match_whole))
    replaced, diff = _walk(document, schema, terms, '', changes)

    result = FindReplaceResult(replaced, diff, changes)
    logger.debug(
        "Replaced %d occurrence(s) of %r in %d field(s) (match_whole=%s)",
        result.count,
        search,
        len(changes),
        terms.match_whole,
    )
    return result
