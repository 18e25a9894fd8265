"""
Formatters for standard, structural and fallback value categories.

Every formatter has the signature fmt_xxx(obj, ctx) -> str and returns the repr body of obj
without the outer TypeName(...) prefix; the engine decides about the prefix. Nested values
are rendered through ctx.format_nested(), which applies the container config and shares the
circular-reference tracking of the current call.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import dataclasses
import functools
import inspect
from datetime import date, datetime, time, timedelta
from typing import TYPE_CHECKING, Any, Iterable

# Third-party ----------------------------------------------------------------------------------------------------------
import numpy as np

# Local ----------------------------------------------------------------------------------------------------------------
from .classify import is_jagged, is_namedtuple
from .config import TypeMode
from .numeric import format_decimal, format_float, format_int
from .utils import class_name, safe_repr

if TYPE_CHECKING:
    from .engine import ReprContext

# Value of a property whose getter raised, rendered as GETTER_ERROR_TEXT
GETTER_FAILED = object()
GETTER_ERROR_TEXT = "<error>"


# Numeric --------------------------------------------------------------------------------------------------------------

def fmt_int(obj: Any, ctx: "ReprContext") -> str:
    return format_int(obj, ctx.config)


def fmt_float(obj: Any, ctx: "ReprContext") -> str:
    return format_float(obj, ctx.config)


def fmt_decimal(obj: Any, ctx: "ReprContext") -> str:
    return format_decimal(obj, ctx.config)


# Standard types -------------------------------------------------------------------------------------------------------

def fmt_str(obj: str, ctx: "ReprContext") -> str:
    # str() first so numpy.str_ prints like a plain str
    return repr(str(obj))


def fmt_bool(obj: Any, ctx: "ReprContext") -> str:
    return "True" if obj else "False"


def fmt_bytes(obj: bytes | bytearray, ctx: "ReprContext") -> str:
    return repr(bytes(obj))


def fmt_datetime(obj: datetime, ctx: "ReprContext") -> str:
    """
    Render as 'YYYY-MM-DD HH:MM:SS' with a 'Z' suffix for UTC or '+HH:MM' for other aware values.
    """
    text = f"{obj.date().isoformat()} {fmt_time(obj.time(), ctx)}"
    offset = obj.utcoffset()
    if offset is None:
        return text
    if offset == timedelta(0):
        return text + "Z"
    minutes = int(offset.total_seconds()) // 60
    sign = "+" if minutes >= 0 else "-"
    hours, minutes = divmod(abs(minutes), 60)
    return f"{text}{sign}{hours:02d}:{minutes:02d}"


def fmt_date(obj: date, ctx: "ReprContext") -> str:
    return obj.isoformat()


def fmt_time(obj: time, ctx: "ReprContext") -> str:
    return f"{obj.hour:02d}:{obj.minute:02d}:{obj.second:02d}"


def fmt_timedelta(obj: timedelta, ctx: "ReprContext") -> str:
    return f"{obj.total_seconds():.3f}s"


def fmt_uuid(obj: Any, ctx: "ReprContext") -> str:
    return str(obj)


# Structural -----------------------------------------------------------------------------------------------------------

def fmt_enum(obj: Any, ctx: "ReprContext") -> str:
    """
    Render an enum member with its value, e.g. 'Color.GREEN (int(1))'.
    """
    name = obj.name if obj.name is not None else str(obj.value)
    return f"{class_name(obj)}.{name} ({ctx.format_nested(obj.value)})"


def fmt_record(obj: Any, ctx: "ReprContext") -> str:
    """
    Render dataclass fields (those with repr=True) or namedtuple fields as '{ name: value, ... }'.
    """
    parts = [f"{name}: {ctx.format_nested(value)}" for name, value in record_fields(obj)]
    if not parts:
        return "{}"
    return "{ " + ", ".join(parts) + " }"


def fmt_mapping(obj: Any, ctx: "ReprContext") -> str:
    parts = [f"{ctx.format_nested(k)}: {ctx.format_nested(v)}" for k, v in obj.items()]
    return "{" + ", ".join(parts) + "}"


def fmt_tuple(obj: tuple, ctx: "ReprContext") -> str:
    parts = [ctx.format_nested(item) for item in obj]
    if len(parts) == 1:
        return f"({parts[0]},)"
    return "(" + ", ".join(parts) + ")"


def fmt_array(obj: Any, ctx: "ReprContext") -> str:
    """
    Render numpy arrays and array.array as nested lists, one level per axis.

    Inner arrays of a jagged array are rendered without a type prefix.
    """
    if isinstance(obj, np.ndarray):
        if is_jagged(obj):
            hidden = ctx.config.container_config().merge(type_mode=TypeMode.ALWAYS_HIDE)
            return _fmt_items((ctx.format(item, hidden) for item in obj), "[", "]")
        if obj.ndim == 0:
            return ctx.format_nested(obj[()])
        return _fmt_axis(obj, ctx)
    return _fmt_items((ctx.format_nested(item) for item in obj), "[", "]")


def fmt_set(obj: Any, ctx: "ReprContext") -> str:
    """
    Render set items sorted by their rendered text so output does not depend on hash order.
    """
    return _fmt_items(sorted(ctx.format_nested(item) for item in obj), "{", "}")


def fmt_sequence(obj: Any, ctx: "ReprContext") -> str:
    return _fmt_items((ctx.format_nested(item) for item in obj), "[", "]")


def fmt_function(obj: Any, ctx: "ReprContext") -> str:
    """
    Render a callable as its qualified name and signature, e.g. 'add(a: int, b: int) -> int'.

    Coroutine functions get an 'async ' prefix and partials are shown as 'partial(name)'.
    """
    name, signature = function_signature(obj)
    target = obj.func if isinstance(obj, functools.partial) else obj
    prefix = "async " if inspect.iscoroutinefunction(target) else ""
    return f"{prefix}{name}{signature}"


# Fallback -------------------------------------------------------------------------------------------------------------

def fmt_passthrough(obj: Any, ctx: "ReprContext") -> str:
    """
    Use the type's own __repr__, or __str__ when only that one is overridden.
    """
    if type(obj).__repr__ is not object.__repr__:
        return safe_repr(obj)
    try:
        return str(obj)
    except Exception:
        return safe_repr(obj)


def fmt_object(obj: Any, ctx: "ReprContext") -> str:
    """
    Render public instance attributes as 'name: value' pairs joined by ', '.

    Attributes come from __slots__, __dict__ and properties; names starting with an underscore
    are skipped. A property whose getter raises renders as "name: <error>".
    """
    parts = [
        f"{name}: {GETTER_ERROR_TEXT if value is GETTER_FAILED else ctx.format_nested(value)}"
        for name, value in public_attributes(obj)
    ]
    return ", ".join(parts)


# Methods --------------------------------------------------------------------------------------------------------------

def record_fields(obj: Any) -> list[tuple[str, Any]]:
    """(name, value) pairs of a namedtuple or of the repr-enabled fields of a dataclass instance."""
    if is_namedtuple(type(obj)):
        return list(zip(obj._fields, obj))
    return [(f.name, getattr(obj, f.name)) for f in dataclasses.fields(obj) if f.repr]


def public_attributes(obj: Any) -> list[tuple[str, Any]]:
    """
    (name, value) pairs of public slot attributes, instance attributes and properties.

    Slots and instance attributes come first in definition order, then properties from the
    base class down. A property whose getter raises yields GETTER_FAILED as its value.
    """
    mro = list(reversed(type(obj).__mro__))
    names = []
    for klass in mro:
        slots = vars(klass).get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        names.extend(slots)
    names.extend(getattr(obj, "__dict__", {}))

    attrs = []
    seen = set()
    for name in names:
        if name.startswith("_") or name in seen or not hasattr(obj, name):
            continue
        seen.add(name)
        attrs.append((name, getattr(obj, name)))

    for klass in mro:
        for name, attr in vars(klass).items():
            if name.startswith("_") or name in seen or not isinstance(attr, property) or attr.fget is None:
                continue
            seen.add(name)
            try:
                value = getattr(obj, name)
            except Exception:
                value = GETTER_FAILED
            attrs.append((name, value))
    return attrs


def function_signature(obj: Any) -> tuple[str, str]:
    """
    Display name and signature text of a callable.

    Returns '(...)' as the signature when it cannot be introspected (some builtins).
    """
    target = obj.func if isinstance(obj, functools.partial) else obj
    name = getattr(target, "__qualname__", None) or getattr(target, "__name__", None) or class_name(target)
    if isinstance(obj, functools.partial):
        name = f"partial({name})"
    try:
        signature = str(inspect.signature(obj))
    except (TypeError, ValueError):
        signature = "(...)"
    return name, signature


# Private Methods ------------------------------------------------------------------------------------------------------

def _fmt_axis(arr: np.ndarray, ctx: "ReprContext") -> str:
    if arr.ndim == 1:
        return _fmt_items((ctx.format_nested(item) for item in arr), "[", "]")
    return _fmt_items((_fmt_axis(sub, ctx) for sub in arr), "[", "]")


def _fmt_items(items: Iterable[str], start: str, end: str) -> str:
    return start + ", ".join(items) + end
