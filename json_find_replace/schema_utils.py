from __future__ import annotations

from copy import deepcopy
from typing import Any, Dict, Iterable, List, Mapping, Optional

from .paths import join_path, split_path
from .policy import DISABLED_FLAG


def _json_type(value: Any) -> str:
    if isinstance(value, bool):
        return 'boolean'
    if isinstance(value, int):
        return 'integer'
    if isinstance(value, float):
        return 'number'
    if value is None:
        return 'null'
    return 'string'


def _merge_schemas(left: Optional[Dict[str, Any]], right: Dict[str, Any]) -> Dict[str, Any]:
    if left is None:
        return right
    if left.get('type') != right.get('type'):
        # Mixed element kinds: prefer the container so nested strings stay reachable.
        return left if left.get('type') in ('object', 'array') else right
    if left['type'] == 'object':
        properties = dict(left['properties'])
        for key, child in right['properties'].items():
            properties[key] = _merge_schemas(properties.get(key), child)
        return {'type': 'object', 'properties': properties}
    if left['type'] == 'array':
        if 'items' not in left:
            return right
        if 'items' not in right:
            return left
        return {'type': 'array', 'items': _merge_schemas(left['items'], right['items'])}
    return left


def infer_schema(data: Any) -> Dict[str, Any]:
    """Build a navigation schema from a sample document.

    Array items are described by merging the schemas of every element, so
    keys that only appear in some records are still covered.

    An array mixing containers and scalars is described by the container
    schema only, so its scalar elements (strings included) are never
    replaced. Supply an explicit schema for such documents.
    """
    if isinstance(data, dict):
        return {'type': 'object', 'properties': {k: infer_schema(v) for k, v in data.items()}}
    if isinstance(data, (list, tuple)):
        items = None
        for element in data:
            items = _merge_schemas(items, infer_schema(element))
        schema: Dict[str, Any] = {'type': 'array'}
        if items is not None:
            schema['items'] = items
        return schema
    return {'type': _json_type(data)}


def _object_node(schema: Any) -> Optional[Mapping]:
    # Arrays are transparent in dot paths: step through `items`.
    while isinstance(schema, Mapping) and schema.get('type') == 'array':
        schema = schema.get('items')
    if isinstance(schema, Mapping) and isinstance(schema.get('properties'), Mapping):
        return schema
    return None


def extract_schema_paths(schema: Any, parent_key: str = '') -> List[str]:
    """List the dot path of every property reachable from `schema`."""
    paths: List[str] = []
    node = _object_node(schema)
    if node is None:
        return paths
    for key, child in node['properties'].items():
        current_key = join_path(parent_key, key)
        paths.append(current_key)
        paths.extend(extract_schema_paths(child, current_key))
    return sorted(paths)


def get_schema_node(schema: Any, path: str) -> Optional[Mapping]:
    node = schema
    for part in split_path(path):
        parent = _object_node(node)
        if parent is None or part not in parent['properties']:
            return None
        node = parent['properties'][part]
    return node if isinstance(node, Mapping) else None


def disable_schema_paths(schema: Mapping, paths: Iterable[str], flag: str = DISABLED_FLAG) -> Dict[str, Any]:
    """Return a copy of `schema` with `flag` set on every node named in `paths`.

    Paths that do not resolve to a schema node are ignored.
    """
    updated = deepcopy(dict(schema))
    for path in paths or []:
        node = get_schema_node(updated, path)
        if node is not None:
            node[flag] = True
    return updated
