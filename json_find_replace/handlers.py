from __future__ import annotations

import html
import json
import logging
import os
import tempfile
from typing import Any, List, Optional
from uuid import uuid4

import gradio as gr

from .io_utils import parse_json_text, read_json_content
from .schema_utils import disable_schema_paths, extract_schema_paths, infer_schema
from .traversal import FindReplaceResult, find_replace_all

logger = logging.getLogger(__name__)


def resolve_schema(document: Any, schema: Any, disabled_paths: Optional[List[str]] = None):
    """Use the uploaded schema, or infer one from the document when there is none."""
    if document is None:
        raise ValueError("No document loaded.")
    effective = schema if schema is not None else infer_schema(document)
    if disabled_paths:
        effective = disable_schema_paths(effective, disabled_paths)
    return effective


def update_disabled_dropdown(document, schema, current_selection=None):
    if document is None and schema is None:
        return gr.update(choices=[], value=[], interactive=False)
    paths = extract_schema_paths(schema if schema is not None else infer_schema(document))
    if isinstance(current_selection, str):
        current_selection = [current_selection]
    retained = [p for p in (current_selection or []) if p in paths]
    return gr.update(choices=paths, value=retained, interactive=bool(paths))


def dump_document(document: Any) -> str:
    if document is None:
        return ""
    return json.dumps(document, indent=2, ensure_ascii=False)


def load_document_handler(file_obj, schema, current_selection):
    if file_obj is None:
        return None, "", update_disabled_dropdown(None, schema, current_selection), "No file uploaded."

    try:
        document = read_json_content(file_obj)
    except ValueError as exc:
        logger.warning("Could not parse document: %s", exc)
        return None, "", update_disabled_dropdown(None, schema, current_selection), f"Error parsing JSON: {exc}"

    status = "Document loaded."
    if schema is None:
        status += " No schema loaded; one will be inferred from the document."
    return document, dump_document(document), update_disabled_dropdown(document, schema, current_selection), status


def load_schema_handler(file_obj, document, current_selection):
    if file_obj is None:
        return None, update_disabled_dropdown(document, None, current_selection), "Schema cleared; it will be inferred."

    try:
        schema = read_json_content(file_obj)
    except ValueError as exc:
        logger.warning("Could not parse schema: %s", exc)
        return None, update_disabled_dropdown(document, None, current_selection), f"Error parsing schema: {exc}"

    if not isinstance(schema, dict):
        return None, update_disabled_dropdown(document, None, current_selection), "Schema must be a JSON object."

    paths = extract_schema_paths(schema)
    return schema, update_disabled_dropdown(document, schema, current_selection), f"Schema loaded. Found {len(paths)} fields."


def load_document_text_handler(text, schema, current_selection):
    """Re-read the document after it was edited in the code box."""
    try:
        document = parse_json_text(text, 'Document')
    except ValueError as exc:
        return None, update_disabled_dropdown(None, schema, current_selection), str(exc)
    if document is None:
        return None, update_disabled_dropdown(None, schema, current_selection), "Document is empty."
    return document, update_disabled_dropdown(document, schema, current_selection), "Document updated."


def render_diff_html(result: FindReplaceResult) -> str:
    """Render the changed fields as an HTML table.

    Diff fragments are inserted verbatim since they already carry markup;
    only the paths are escaped.
    """
    if not result.changes:
        return "<p>No matches.</p>"

    rows = "".join(
        f"<tr><td><code>{html.escape(change.path or '(root)')}</code></td>"
        f"<td>{change.count}</td><td>{change.diff_html}</td></tr>"
        for change in result.changes
    )
    return (
        "<table><thead><tr><th>Field</th><th>Matches</th><th>Change</th></tr></thead>"
        f"<tbody>{rows}</tbody></table>"
    )


def summarize_result(result: FindReplaceResult) -> str:
    return f"Replaced {result.count} occurrence(s) in {len(result.changes)} field(s)."


def run_find_replace(document, schema, disabled_paths, search, replacement, match_whole) -> FindReplaceResult:
    effective = resolve_schema(document, schema, disabled_paths)
    return find_replace_all(document, effective, search or '', replacement or '', bool(match_whole))


def preview_handler(document, schema, disabled_paths, search, replacement, match_whole):
    if not search:
        return "", None, "Enter a search term."
    try:
        result = run_find_replace(document, schema, disabled_paths, search, replacement, match_whole)
    except ValueError as exc:
        logger.warning("Preview failed: %s", exc)
        return "", None, str(exc)
    return render_diff_html(result), result.diff_html, summarize_result(result)


def apply_handler(document, schema, disabled_paths, search, replacement, match_whole):
    """Replace in the loaded document and make the result the new document."""
    if not search:
        return document, dump_document(document), "", "Enter a search term."
    try:
        result = run_find_replace(document, schema, disabled_paths, search, replacement, match_whole)
    except ValueError as exc:
        logger.warning("Replace failed: %s", exc)
        return document, dump_document(document), "", str(exc)
    return result.replaced, dump_document(result.replaced), render_diff_html(result), summarize_result(result)


def export_handler(document, file_name):
    if document is None:
        return None, "No document loaded."

    if not file_name or not file_name.strip():
        file_name = f"replaced_{uuid4().hex}"
    output_name = file_name.strip()
    if not output_name.lower().endswith('.json'):
        output_name += '.json'

    path = os.path.join(tempfile.gettempdir(), output_name)
    try:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(document, f, indent=2, ensure_ascii=False)
    except OSError as exc:
        logger.warning("Export to %s failed: %s", path, exc)
        return None, f"Error writing file: {exc}"

    return path, f"Export successful! Saved to {path}"
