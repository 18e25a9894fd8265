"""
Formatter registry: maps a runtime type to the formatter responsible for it.

Resolution is a strict priority chain. The two global formatting-mode overrides come first,
then exact type matches from an explicit registration table, then structural rules from
specific contracts (mapping, tuple, set) to generic ones (iterable), then the value's own
repr override and finally attribute reflection.

A registry is immutable once built. The process-wide instance is built on first use;
register_formatter() replaces it with a new frozen registry that contains the extension.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import collections.abc as abc
import logging
import uuid
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from enum import StrEnum, unique
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Callable, Iterable, Mapping

# Third-party ----------------------------------------------------------------------------------------------------------
import numpy as np

# Local ----------------------------------------------------------------------------------------------------------------
from . import formatters as f
from .classify import (
    has_custom_repr,
    is_array_type,
    is_callable_type,
    is_dict_like,
    is_enum_type,
    is_enumerable,
    is_record_like,
    is_set_like,
    is_tuple_like,
)
from .config import FormattingMode, ReprConfig
from .tree import fmt_tree
from .utils import fmt_type, fmt_value

if TYPE_CHECKING:
    from .engine import ReprContext

logger = logging.getLogger(__name__)

Formatter = Callable[[Any, "ReprContext"], str]


# Classes --------------------------------------------------------------------------------------------------------------

@unique
class FormatterKind(StrEnum):
    """Closed set of formatter categories, one tag per formatter."""
    TREE = "tree"
    OBJECT = "object"
    INTEGER = "integer"
    FLOAT = "float"
    DECIMAL = "decimal"
    TEXT = "text"
    BOOL = "bool"
    BYTES = "bytes"
    TIME = "time"
    UUID = "uuid"
    CUSTOM = "custom"
    ENUM = "enum"
    RECORD = "record"
    MAPPING = "mapping"
    TUPLE = "tuple"
    ARRAY = "array"
    SET = "set"
    FUNCTION = "function"
    SEQUENCE = "sequence"
    PASS_THROUGH = "pass_through"


@dataclass(frozen=True)
class FormatterEntry:
    """
    A formatter together with its category and declared type-prefix preference.

    Attributes:
        kind: Formatter category.
        format: Callable (value, ctx) -> body string.
        needs_prefix: Declared prefix preference, None to leave the decision to the
            structural default (see classify.needs_type_prefix).
    """
    kind: FormatterKind
    format: Formatter
    needs_prefix: bool | None = None


TREE_ENTRY = FormatterEntry(FormatterKind.TREE, fmt_tree, needs_prefix=False)
OBJECT_ENTRY = FormatterEntry(FormatterKind.OBJECT, f.fmt_object, needs_prefix=True)
ENUM_ENTRY = FormatterEntry(FormatterKind.ENUM, f.fmt_enum, needs_prefix=False)
RECORD_ENTRY = FormatterEntry(FormatterKind.RECORD, f.fmt_record, needs_prefix=True)
MAPPING_ENTRY = FormatterEntry(FormatterKind.MAPPING, f.fmt_mapping, needs_prefix=True)
TUPLE_ENTRY = FormatterEntry(FormatterKind.TUPLE, f.fmt_tuple, needs_prefix=False)
ARRAY_ENTRY = FormatterEntry(FormatterKind.ARRAY, f.fmt_array, needs_prefix=True)
SET_ENTRY = FormatterEntry(FormatterKind.SET, f.fmt_set, needs_prefix=True)
FUNCTION_ENTRY = FormatterEntry(FormatterKind.FUNCTION, f.fmt_function, needs_prefix=False)
SEQUENCE_ENTRY = FormatterEntry(FormatterKind.SEQUENCE, f.fmt_sequence, needs_prefix=True)
PASS_THROUGH_ENTRY = FormatterEntry(FormatterKind.PASS_THROUGH, f.fmt_passthrough, needs_prefix=False)


class FormatterRegistry:
    """
    Immutable mapping from runtime types to formatter entries.

    Args:
        exact: Exact-type registration table. Copied and frozen.

    Raises:
        TypeError: If a key is not a type or a value is not a FormatterEntry.
    """

    def __init__(self, exact: Mapping[type, FormatterEntry] | None = None):
        table = dict(exact or {})
        for tp, entry in table.items():
            if not isinstance(tp, type):
                raise TypeError(f"registry keys must be types, but got {fmt_value(tp)}")
            if not isinstance(entry, FormatterEntry):
                raise TypeError(f"registry values must be FormatterEntry, but got {fmt_type(entry)}")
        self._exact = MappingProxyType(table)

    def __repr__(self) -> str:
        return f"FormatterRegistry(exact={len(self._exact)} types)"

    # Methods ------------------------------------------------------------------

    @property
    def exact(self) -> Mapping[type, FormatterEntry]:
        """Read-only view of the exact-type registration table."""
        return self._exact

    def find_exact(self, tp: type) -> FormatterEntry | None:
        return self._exact.get(tp)

    def get_formatter(self, tp: type, config: ReprConfig) -> FormatterEntry:
        """
        Resolve the formatter entry for values of type tp.

        Args:
            tp: Runtime type of the value.
            config: Active configuration, only formatting_mode is consulted.

        Returns:
            The first matching FormatterEntry of the priority chain.

        Raises:
            TypeError: If tp is not a type or config is not a ReprConfig.
        """
        if not isinstance(tp, type):
            raise TypeError(f"tp must be a type, but got {fmt_type(tp)}")
        if not isinstance(config, ReprConfig):
            raise TypeError(f"config must be ReprConfig, but got {fmt_type(config)}")

        # Priority 1-2: global overrides
        if config.formatting_mode is FormattingMode.HIERARCHICAL:
            return TREE_ENTRY
        if config.formatting_mode is FormattingMode.REFLECTION:
            return OBJECT_ENTRY

        # Priority 3: explicit registrations
        entry = self._exact.get(tp)
        if entry is not None:
            return entry

        # Priority 4-11: structural contracts, specific before generic
        if is_enum_type(tp):
            return ENUM_ENTRY
        if is_record_like(tp):
            return RECORD_ENTRY
        if is_dict_like(tp):
            return MAPPING_ENTRY
        if is_tuple_like(tp):
            return TUPLE_ENTRY
        if is_array_type(tp):
            return ARRAY_ENTRY
        if is_set_like(tp):
            return SET_ENTRY
        if is_callable_type(tp):
            return FUNCTION_ENTRY
        if is_enumerable(tp):
            return SEQUENCE_ENTRY

        # Priority 12-13: own repr, then reflection
        if has_custom_repr(tp):
            return PASS_THROUGH_ENTRY
        return OBJECT_ENTRY

    def with_formatter(
            self,
            types: type | Iterable[type],
            formatter: Formatter,
            *,
            needs_prefix: bool | None = None,
            kind: FormatterKind = FormatterKind.CUSTOM,
    ) -> "FormatterRegistry":
        """
        Return a new registry with formatter registered for the exact types given.

        Entries for the same types are replaced; the receiver is left unchanged.

        Args:
            types: A type or an iterable of types.
            formatter: Callable (value, ctx) -> body string.
            needs_prefix: Declared prefix preference, None for the structural default.
            kind: Formatter category tag.

        Returns:
            New FormatterRegistry.

        Raises:
            TypeError: If types, formatter or needs_prefix have the wrong type.
            ValueError: If types is empty.
        """
        types = _as_types(types)
        if not callable(formatter):
            raise TypeError(f"formatter must be callable, but got {fmt_type(formatter)}")
        if not isinstance(needs_prefix, (bool, type(None))):
            raise TypeError(f"needs_prefix must be bool | None, but got {fmt_type(needs_prefix)}")

        entry = FormatterEntry(FormatterKind(kind), formatter, needs_prefix)
        table = dict(self._exact)
        table.update((tp, entry) for tp in types)
        return FormatterRegistry(table)


# Module state ---------------------------------------------------------------------------------------------------------

_default_registry: FormatterRegistry | None = None


# Methods --------------------------------------------------------------------------------------------------------------

def build_registry() -> FormatterRegistry:
    """
    Build a fresh registry holding the standard exact-type registrations.

    Registered: Python and numpy integers of every width, binary floats (float, float16,
    float32, float64), Decimal, text, booleans, bytes, date/time types and UUID.
    """
    int_types = {int} | {np.dtype(code).type for code in "bBhHiIlLqQ"}
    float_types = (float, np.float16, np.float32, np.float64)

    table: dict[type, FormatterEntry] = {}
    table.update((tp, FormatterEntry(FormatterKind.INTEGER, f.fmt_int, True)) for tp in int_types)
    table.update((tp, FormatterEntry(FormatterKind.FLOAT, f.fmt_float, True)) for tp in float_types)
    table[Decimal] = FormatterEntry(FormatterKind.DECIMAL, f.fmt_decimal, True)
    table[str] = FormatterEntry(FormatterKind.TEXT, f.fmt_str, False)
    table[np.str_] = FormatterEntry(FormatterKind.TEXT, f.fmt_str, False)
    table[bool] = FormatterEntry(FormatterKind.BOOL, f.fmt_bool, False)
    table[np.bool_] = FormatterEntry(FormatterKind.BOOL, f.fmt_bool, False)
    table[bytes] = FormatterEntry(FormatterKind.BYTES, f.fmt_bytes, False)
    table[np.bytes_] = FormatterEntry(FormatterKind.BYTES, f.fmt_bytes, False)
    table[bytearray] = FormatterEntry(FormatterKind.BYTES, f.fmt_bytes, True)
    table[datetime] = FormatterEntry(FormatterKind.TIME, f.fmt_datetime, True)
    table[date] = FormatterEntry(FormatterKind.TIME, f.fmt_date, True)
    table[time] = FormatterEntry(FormatterKind.TIME, f.fmt_time, True)
    table[timedelta] = FormatterEntry(FormatterKind.TIME, f.fmt_timedelta, True)
    table[uuid.UUID] = FormatterEntry(FormatterKind.UUID, f.fmt_uuid, True)
    return FormatterRegistry(table)


def default_registry() -> FormatterRegistry:
    """Process-wide registry, built on first use."""
    global _default_registry
    if _default_registry is None:
        _default_registry = build_registry()
        logger.debug("built default formatter registry with %d exact types", len(_default_registry.exact))
    return _default_registry


def register_formatter(
        types: type | Iterable[type],
        formatter: Formatter,
        *,
        needs_prefix: bool | None = None,
) -> None:
    """
    Register formatter for the exact types given in the process-wide registry.

    Registered formatters take precedence over every structural rule. The current registry
    is not modified; a new frozen registry containing the extension replaces it.

    Args:
        types: A type or an iterable of types.
        formatter: Callable (value, ctx) -> body string. Nested values should be rendered
            with ctx.format_nested(value).
        needs_prefix: Whether the output is wrapped as TypeName(...) under HIDE_OBVIOUS,
            None for the structural default.

    Raises:
        TypeError: If types, formatter or needs_prefix have the wrong type.
        ValueError: If types is empty.

    Examples:
        >>> class Money:
        ...     def __init__(self, cents): self.cents = cents
        >>> register_formatter(Money, lambda m, ctx: f"${m.cents / 100:.2f}", needs_prefix=False)
        >>> represent(Money(1250))
        '$12.50'
    """
    global _default_registry
    types = _as_types(types)
    _default_registry = default_registry().with_formatter(types, formatter, needs_prefix=needs_prefix)
    logger.debug("registered formatter %r for %s", formatter, ", ".join(t.__name__ for t in types))


# Private Methods ------------------------------------------------------------------------------------------------------

def _as_types(types: Any) -> tuple[type, ...]:
    if isinstance(types, type):
        return (types,)
    if not isinstance(types, abc.Iterable) or isinstance(types, (str, bytes)):
        raise TypeError(f"types must be a type or an iterable of types, but got {fmt_type(types)}")
    types = tuple(types)
    if not types:
        raise ValueError("types must not be empty")
    for tp in types:
        if not isinstance(tp, type):
            raise TypeError(f"types must contain only types, but got {fmt_value(tp)}")
    return types
