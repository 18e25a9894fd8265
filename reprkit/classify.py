"""
Structural questions about types, used for formatter dispatch and type-prefix decisions.

All predicates are pure and take a type (not an instance) unless stated otherwise.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import array
import collections.abc as abc
import dataclasses
import functools
from decimal import Decimal
from enum import Enum
from types import BuiltinFunctionType, BuiltinMethodType, FunctionType, MethodType
from typing import Any

# Third-party ----------------------------------------------------------------------------------------------------------
import numpy as np

# Local ----------------------------------------------------------------------------------------------------------------
from .nullable import Nullable
from .utils import class_name

ATOMIC_TYPES = (
    type(None),
    bool,
    int,
    float,
    complex,
    str,
    bytes,
    bytearray,
    Decimal,
    np.generic,  # numpy scalars
    type(Ellipsis),
    type(NotImplemented),
)

ARRAY_TYPES = (np.ndarray, array.array)

CALLABLE_TYPES = (
    FunctionType,  # includes lambdas
    MethodType,
    BuiltinFunctionType,
    BuiltinMethodType,
    functools.partial,
)

# Rendered without a type prefix under TypeMode.HIDE_OBVIOUS
OBVIOUS_CONTAINERS = (list, dict, set)


# Methods --------------------------------------------------------------------------------------------------------------

def is_signed_int_type(tp: type) -> bool:
    """Python int (arbitrary precision) or a numpy signed integer; bool is excluded."""
    return issubclass(tp, (int, np.signedinteger)) and not issubclass(tp, bool)


def is_unsigned_int_type(tp: type) -> bool:
    return issubclass(tp, np.unsignedinteger)


def is_int_type(tp: type) -> bool:
    return is_signed_int_type(tp) or is_unsigned_int_type(tp)


def int_bit_width(tp: type) -> int | None:
    """
    Bit width of a fixed-width integer type, None for arbitrary precision Python int.

    Examples:
        >>> int_bit_width(np.uint16)
        16
        >>> int_bit_width(int) is None
        True
    """
    if issubclass(tp, np.integer):
        return np.dtype(tp).itemsize * 8
    return None


def is_float_type(tp: type) -> bool:
    return issubclass(tp, (float, np.floating))


def is_decimal_type(tp: type) -> bool:
    return issubclass(tp, Decimal)


def is_numeric_type(tp: type) -> bool:
    return is_int_type(tp) or is_float_type(tp) or is_decimal_type(tp)


def is_dict_like(tp: type) -> bool:
    return issubclass(tp, abc.Mapping)


def is_set_like(tp: type) -> bool:
    return issubclass(tp, abc.Set)


def is_namedtuple(tp: type) -> bool:
    return issubclass(tp, tuple) and hasattr(tp, "_fields") and hasattr(tp, "_make")


def is_tuple_like(tp: type) -> bool:
    """Positional tuples of any arity; namedtuples are records, not tuples."""
    return issubclass(tp, tuple) and not is_namedtuple(tp)


def is_record_like(tp: type) -> bool:
    """
    Types with generated structural equality: dataclasses with eq=True and namedtuples.
    """
    if is_namedtuple(tp):
        return True
    if isinstance(tp, type) and dataclasses.is_dataclass(tp):
        return bool(tp.__dataclass_params__.eq)
    return False


def is_array_type(tp: type) -> bool:
    return issubclass(tp, ARRAY_TYPES)


def is_enum_type(tp: type) -> bool:
    return issubclass(tp, Enum)


def is_callable_type(tp: type) -> bool:
    """
    Function-like objects: functions, lambdas, bound methods, builtins and partials.

    Classes and instances with __call__ are not considered callables here.
    """
    return issubclass(tp, CALLABLE_TYPES)


def is_enumerable(tp: type) -> bool:
    """Re-iterable containers; iterators and generators are excluded so they are never consumed."""
    return issubclass(tp, abc.Iterable) and not issubclass(tp, abc.Iterator)


def is_nullable(value: Any) -> bool:
    return isinstance(value, Nullable)


def is_atomic_value(value: Any) -> bool:
    """Values that cannot contain other values and so cannot take part in a reference cycle."""
    return isinstance(value, ATOMIC_TYPES)


def has_custom_repr(tp: type) -> bool:
    """
    True if tp declares __repr__ or __str__ anywhere in its MRO other than object.

    Reprs generated for records (dataclass and namedtuple machinery, and the builtin tuple
    base of namedtuples) are not counted as custom.
    """
    record = is_record_like(tp)
    for klass in tp.__mro__:
        if klass is object:
            break
        if record and klass.__module__ == "builtins":
            continue
        own = vars(klass)
        if "__str__" in own:
            return True
        if "__repr__" in own and not (record and _generated_repr(klass)):
            return True
    return False


def array_kind(value: Any) -> str:
    """
    Classify an array by rank and element shape.

    Returns:
        "1DArray" for rank-1 arrays, "JaggedArray" for rank-1 object arrays whose elements
        are all arrays, "<rank>DArray" otherwise (e.g. "2DArray").

    Examples:
        >>> array_kind(np.zeros((2, 3)))
        '2DArray'
        >>> array_kind(array.array("i", [1, 2]))
        '1DArray'
    """
    if isinstance(value, np.ndarray):
        if value.ndim == 1 and is_jagged(value):
            return "JaggedArray"
        return f"{value.ndim}DArray"
    return "1DArray"


def is_jagged(value: Any) -> bool:
    return (
            isinstance(value, np.ndarray)
            and value.ndim == 1
            and value.dtype == object
            and value.size > 0
            and all(isinstance(item, ARRAY_TYPES) for item in value)
    )


def type_display_name(value: Any) -> str:
    """Name used in the TypeName(...) prefix: the array kind for arrays, the class name otherwise."""
    if isinstance(value, ARRAY_TYPES):
        return array_kind(value)
    return class_name(value)


def needs_type_prefix(tp: type, needs_prefix: bool | None = None) -> bool:
    """
    Decide whether values of tp get a TypeName(...) prefix under TypeMode.HIDE_OBVIOUS.

    The rule is checked in order:
        1. Never for nullable wrappers, callables, obvious containers (list, dict, set),
           tuples and enums.
        2. The formatter's declared preference (needs_prefix), when it has one.
        3. Otherwise only for record-like types without their own repr.

    Args:
        tp: The runtime type of the value.
        needs_prefix: Preference declared by the resolved formatter, None if it has none.

    Examples:
        >>> needs_type_prefix(list, needs_prefix=True)
        False
        >>> needs_type_prefix(int, needs_prefix=True)
        True
    """
    if (
            issubclass(tp, Nullable)
            or is_callable_type(tp)
            or tp in OBVIOUS_CONTAINERS
            or is_tuple_like(tp)
            or is_enum_type(tp)
    ):
        return False
    if needs_prefix is not None:
        return needs_prefix
    return is_record_like(tp) and not has_custom_repr(tp)


# Private Methods ------------------------------------------------------------------------------------------------------

def _generated_repr(klass: type) -> bool:
    if is_namedtuple(klass) and "_fields" in vars(klass):
        return True
    params = vars(klass).get("__dataclass_params__")
    if params is None or not params.repr:
        return False
    # dataclass keeps a hand-written __repr__ as is and wraps the one it generates
    return hasattr(vars(klass).get("__repr__"), "__wrapped__")
