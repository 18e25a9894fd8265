"""
Hierarchical formatter: renders a value graph as a JSON document.

Every node carries its type name; containers also carry their item count. Leaves reuse the
regular formatters, so numbers follow the float/int modes of the config. The tree tracks
circular references on its own and cuts off nodes deeper than TREE_MAX_DEPTH.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import json
from typing import TYPE_CHECKING, Any

# Third-party ----------------------------------------------------------------------------------------------------------
import numpy as np

# Local ----------------------------------------------------------------------------------------------------------------
from .classify import (
    has_custom_repr,
    is_array_type,
    is_atomic_value,
    is_callable_type,
    is_dict_like,
    is_enum_type,
    is_enumerable,
    is_jagged,
    is_nullable,
    is_record_like,
    is_set_like,
    is_tuple_like,
    type_display_name,
)
from .config import FormattingMode, ReprConfig, TypeMode
from .formatters import GETTER_ERROR_TEXT, GETTER_FAILED, function_signature, public_attributes, record_fields
from .utils import class_name, safe_repr

if TYPE_CHECKING:
    from .engine import ReprContext

TREE_MAX_DEPTH = 5
TRUNCATED = "Truncated for brevity."


# Methods --------------------------------------------------------------------------------------------------------------

def fmt_tree(obj: Any, ctx: "ReprContext") -> str:
    """
    Render obj as a JSON document.

    Examples:
        >>> represent([1], ReprConfig(formatting_mode="hierarchical"))
        '{"type": "list", "count": 1, "value": [{"type": "int", "value": "1"}]}'
    """
    return json.dumps(build_tree(obj, ctx), ensure_ascii=False)


def build_tree(obj: Any, ctx: "ReprContext") -> Any:
    """
    Build the JSON-compatible tree of obj: dicts, lists, strings, numbers, booleans and None.
    """
    return _TreeBuilder(ctx).node(obj, ctx.config, depth=0)


# Classes --------------------------------------------------------------------------------------------------------------

class _TreeBuilder:
    """Walks one value graph; holds the in-progress identities of that walk."""

    def __init__(self, ctx: "ReprContext"):
        self.ctx = ctx
        self.visited: set[int] = set()

    def node(self, value: Any, config: ReprConfig, depth: int) -> Any:
        if value is None:
            return None
        if depth > TREE_MAX_DEPTH:
            return TRUNCATED

        if is_nullable(value):
            return {
                "type": f"{class_name(value.underlying)}?",
                "hasValue": value.has_value,
                "value": self.node(value.value, config, depth + 1) if value.has_value else None,
            }
        if isinstance(value, str):
            return {"type": class_name(value), "value": str(value)}
        if is_atomic_value(value) or self.ctx.registry.find_exact(type(value)) is not None:
            return {"type": class_name(value), "value": self.leaf(value, config)}

        identity = id(value)
        if identity in self.visited:
            return {
                "type": "CircularReference",
                "target": {"type": type_display_name(value), "id": f"0x{identity:X}"},
            }
        self.visited.add(identity)
        try:
            return self.composite(value, config.container_config(), depth)
        finally:
            self.visited.discard(identity)

    def leaf(self, value: Any, config: ReprConfig) -> str:
        leaf_config = config.merge(type_mode=TypeMode.ALWAYS_HIDE, formatting_mode=FormattingMode.SMART)
        return self.ctx.format(value, leaf_config)

    def composite(self, value: Any, config: ReprConfig, depth: int) -> dict:
        tp = type(value)
        name = type_display_name(value)
        child = depth + 1

        if is_enum_type(tp):
            return {"type": name, "name": value.name, "value": self.node(value.value, config, child)}
        if is_record_like(tp):
            return {"type": name, "value": {k: self.node(v, config, child) for k, v in record_fields(value)}}
        if is_dict_like(tp):
            entries = [
                {"key": self.node(k, config, child), "value": self.node(v, config, child)}
                for k, v in value.items()
            ]
            return {"type": name, "count": len(entries), "value": entries}
        if is_tuple_like(tp):
            return self.items(name, value, config, child)
        if is_array_type(tp):
            return self.array(name, value, config, child)
        if is_set_like(tp):
            nodes = [self.node(item, config, child) for item in value]
            nodes.sort(key=lambda n: json.dumps(n, sort_keys=True))
            return {"type": name, "count": len(nodes), "value": nodes}
        if is_callable_type(tp):
            fn_name, signature = function_signature(value)
            return {"type": "function", "name": fn_name, "signature": signature}
        if is_enumerable(tp):
            return self.items(name, value, config, child)
        if has_custom_repr(tp):
            return {"type": name, "value": safe_repr(value)}
        return {"type": name, "value": {k: self.attribute(v, config, child) for k, v in public_attributes(value)}}

    def attribute(self, value: Any, config: ReprConfig, depth: int) -> Any:
        if value is GETTER_FAILED:
            return GETTER_ERROR_TEXT
        return self.node(value, config, depth)

    def items(self, name: str, value: Any, config: ReprConfig, depth: int) -> dict:
        nodes = [self.node(item, config, depth) for item in value]
        return {"type": name, "count": len(nodes), "value": nodes}

    def array(self, name: str, value: Any, config: ReprConfig, depth: int) -> dict:
        if not isinstance(value, np.ndarray):
            nodes = [self.node(item, config, depth) for item in value]
            return {
                "type": name,
                "elementType": value.typecode,
                "shape": [len(nodes)],
                "count": len(nodes),
                "value": nodes,
            }
        if is_jagged(value) or value.ndim <= 1:
            nodes = [self.node(item, config, depth) for item in value.reshape(-1)]
        else:
            nodes = [self.node(sub, config, depth) for sub in value]
        return {
            "type": name,
            "elementType": str(value.dtype),
            "shape": list(value.shape),
            "count": len(nodes),
            "value": nodes,
        }
