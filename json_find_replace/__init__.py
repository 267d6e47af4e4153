"""Core logic for schema-guided find & replace over JSON documents.

The Gradio UI lives in `app.py`. This package contains pure functions that:
- decide per field whether it may be edited (`policy`)
- replace literal text in a single string and render the HTML diff (`matching`)
- walk a document together with its schema (`traversal`)
- infer and adjust navigation schemas (`schema_utils`)
"""

from .errors import FindReplaceError
from .matching import MatchResult, match_replace
from .policy import Policy, resolve_policy
from .traversal import Change, FindReplaceResult, find_replace_all, traverse

__all__ = [
    'Change',
    'FindReplaceError',
    'FindReplaceResult',
    'MatchResult',
    'Policy',
    'find_replace_all',
    'match_replace',
    'resolve_policy',
    'traverse',
]
