from __future__ import annotations

from enum import Enum
from typing import Any, Mapping, Optional

REF_KEY = '$ref'
DISABLED_FLAG = 'x_editor_disabled'
HIDDEN_FLAG = 'x_editor_hidden'


class Policy(Enum):
    PROCESS = 'process'
    SKIP_UNCHANGED = 'skip_unchanged'


def resolve_policy(schema_node: Any, key: Optional[str] = None) -> Policy:
    """Decide whether the value governed by `schema_node` at `key` may be edited.

    Reference pointers (`$ref` keys) are never touched, then disabled and
    hidden fields are skipped. Anything that is not a mapping carries no
    flags.
    """
    if key == REF_KEY:
        return Policy.SKIP_UNCHANGED
    if isinstance(schema_node, Mapping):
        if schema_node.get(DISABLED_FLAG):
            return Policy.SKIP_UNCHANGED
        if schema_node.get(HIDDEN_FLAG):
            return Policy.SKIP_UNCHANGED
    return Policy.PROCESS


def is_processable(schema_node: Any, key: Optional[str] = None) -> bool:
    return resolve_policy(schema_node, key) is Policy.PROCESS
