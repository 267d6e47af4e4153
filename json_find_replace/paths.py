from __future__ import annotations

from typing import List, Union

Segment = Union[str, int]


def escape_path_segment(segment: Segment) -> str:
    """Escape one key so it survives inside a dot path.

    - Backslashes become '\\\\' and dots become '\\.', so a key such as
      'v1.2' stays a single segment.
    - List indices are written as plain decimal segments.
    """
    text = segment if isinstance(segment, str) else str(segment)
    return text.replace('\\', '\\\\').replace('.', '\\.')


def unescape_path_segment(segment: str) -> str:
    if not segment:
        return ''
    out: List[str] = []
    chars = iter(segment)
    for ch in chars:
        if ch == '\\':
            # A trailing lone backslash is kept literally.
            out.append(next(chars, '\\'))
        else:
            out.append(ch)
    return ''.join(out)


def join_path(parent: str, segment: Segment) -> str:
    escaped = escape_path_segment(segment)
    return f"{parent}.{escaped}" if parent else escaped


def split_path(path: str) -> List[str]:
    """Split a dot path on unescaped dots, unescaping each segment."""
    if not path:
        return []

    parts: List[str] = []
    current: List[str] = []
    chars = iter(str(path))
    for ch in chars:
        if ch == '\\':
            current.append(next(chars, '\\'))
        elif ch == '.':
            parts.append(''.join(current))
            current = []
        else:
            current.append(ch)
    parts.append(''.join(current))
    return [p for p in parts if p != '']
