"""
Representation engine: the public entry point of reprkit.

represent() turns any value into a deterministic debug string. It handles nullable wrappers
and None itself, protects against circular references, resolves a formatter through the
registry and finally decides about the TypeName(...) prefix.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import logging
from dataclasses import dataclass, field
from typing import Any

# Local ----------------------------------------------------------------------------------------------------------------
from .classify import is_atomic_value, is_nullable, needs_type_prefix, type_display_name
from .config import FormattingMode, ReprConfig, TypeMode
from .registry import FormatterEntry, FormatterKind, FormatterRegistry, default_registry
from .utils import class_name, fmt_type, fmt_value, safe_repr

logger = logging.getLogger(__name__)


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass
class ReprContext:
    """
    State handed to a formatter for one value.

    The visited set is shared by every context of one top-level represent() call and is
    never shared across calls.

    Attributes:
        config: Config the current value is rendered with.
        registry: Registry used for formatter resolution.
        visited: Identities of values currently being rendered on this path.
        depth: Nesting depth of the current value, 0 for the top-level value.
    """
    config: ReprConfig
    registry: FormatterRegistry
    visited: set[int] = field(default_factory=set)
    depth: int = 0

    def format(self, value: Any, config: ReprConfig | None = None) -> str:
        """Render a nested value with config (the current config by default)."""
        return _represent(value, config or self.config, self.registry, self.visited, self.depth + 1)

    def format_nested(self, value: Any) -> str:
        """Render an element, key or field with the container config of the current config."""
        return self.format(value, self.config.container_config())


# Methods --------------------------------------------------------------------------------------------------------------

def represent(value: Any, config: ReprConfig | None = None, *, registry: FormatterRegistry | None = None) -> str:
    """
    Convert any value into a deterministic debug string.

    Args:
        value: The value to represent.
        config: Formatting options, ReprConfig.global_defaults() when None.
        registry: Formatter registry, the process-wide default registry when None.

    Returns:
        The repr string.

    Raises:
        TypeError: If config or registry have the wrong type.
        Exception: Failures raised by formatters propagate unchanged.

    Examples:
        >>> represent(42)
        'int(42)'
        >>> represent([1, 2, 3])
        '[int(1), int(2), int(3)]'
        >>> represent(None)
        'null'
        >>> represent(Nullable(int, 42))
        'int?(42)'
    """
    if config is None:
        config = ReprConfig.global_defaults()
    if not isinstance(config, ReprConfig):
        raise TypeError(f"config must be ReprConfig, but got {fmt_type(config)}")
    if registry is None:
        registry = default_registry()
    if not isinstance(registry, FormatterRegistry):
        raise TypeError(f"registry must be FormatterRegistry, but got {fmt_type(registry)}")

    return _represent(value, config, registry, set(), 0)


# Private Methods ------------------------------------------------------------------------------------------------------

def _represent(value: Any, config: ReprConfig, registry: FormatterRegistry, visited: set[int], depth: int) -> str:
    if is_nullable(value) and config.formatting_mode is not FormattingMode.HIERARCHICAL:
        name = class_name(value.underlying)
        if not value.has_value:
            return f"{name}?(null)"
        inner_config = config.merge(type_mode=TypeMode.ALWAYS_HIDE)
        return f"{name}?({_represent(value.value, inner_config, registry, visited, depth + 1)})"

    if value is None:
        return "null"

    # The tree tracks its own cycles and renders leaves through format() with this value
    tracked = not is_atomic_value(value) and config.formatting_mode is not FormattingMode.HIERARCHICAL
    identity = id(value)
    if tracked:
        if identity in visited:
            logger.debug("circular reference to %s at depth %d", class_name(value), depth)
            return f"<circular @0x{identity:X}>"
        visited.add(identity)

    try:
        entry = registry.get_formatter(type(value), config)
        if entry is None:
            return safe_repr(value)
        ctx = ReprContext(config=config, registry=registry, visited=visited, depth=depth)
        body = entry.format(value, ctx)
    finally:
        if tracked:
            visited.discard(identity)

    # The tree formatter renders a complete document
    if entry.kind is FormatterKind.TREE:
        return body
    return _with_prefix(value, body, entry, config)


def _with_prefix(value: Any, body: str, entry: FormatterEntry, config: ReprConfig) -> str:
    mode = config.type_mode
    if mode is TypeMode.ALWAYS_HIDE:
        return body
    if mode is TypeMode.ALWAYS_SHOW:
        return f"{type_display_name(value)}({body})"
    if mode is TypeMode.HIDE_OBVIOUS:
        if needs_type_prefix(type(value), entry.needs_prefix):
            return f"{type_display_name(value)}({body})"
        return body
    raise ValueError(f"unsupported type mode {fmt_value(mode)}")
