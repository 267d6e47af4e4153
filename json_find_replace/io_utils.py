from __future__ import annotations

import json
from typing import Any


def read_json_content(file_obj) -> Any:
    """Read JSON from an uploaded file, a file-like object or a path."""
    if file_obj is None:
        raise ValueError("No file uploaded.")

    if hasattr(file_obj, 'read'):
        if hasattr(file_obj, 'seek'):
            file_obj.seek(0)
        content = file_obj.read()
        if isinstance(content, bytes):
            content = content.decode('utf-8')
        return json.loads(content)

    path = getattr(file_obj, 'name', file_obj)
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


def parse_json_text(text: str, label: str = 'JSON') -> Any:
    """Parse JSON typed into a textbox; blank input means "not provided"."""
    if text is None or not str(text).strip():
        return None
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"{label} is not valid JSON: {exc.msg} (line {exc.lineno}, column {exc.colno})") from exc
