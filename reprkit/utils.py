"""
reprkit utilities shared across the package.

Contains type naming and error-message helpers used by multiple modules to avoid circular imports.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any

# Constants ------------------------------------------------------------------------------------------------------------

MAX_REPR = 120


# Methods --------------------------------------------------------------------------------------------------------------

def class_name(obj: Any) -> str:
    """
    Get the class name of an object or a class.

    Returns class name whether given an instance or the class itself.
    For example, both `class_name(10)` and `class_name(int)` return 'int'.

    Parameters:
        obj (Any): An object or a class.

    Returns:
        str: The unqualified class name.
    """
    cls = obj if isinstance(obj, type) else type(obj)
    return cls.__name__


def fmt_type(obj: Any) -> str:
    """
    Format type information for exception messages.

    Examples:
        >>> fmt_type(42)
        '<int>'
        >>> fmt_type(int)
        '<int>'
    """
    return f"<{class_name(obj)}>"


def fmt_value(obj: Any, *, max_repr: int = MAX_REPR) -> str:
    """
    Format a single value as a type-value pair for exception messages.

    Long reprs are truncated to max_repr characters followed by an ellipsis.

    Examples:
        >>> fmt_value(42)
        '<int: 42>'
        >>> fmt_value("abc")
        "<str: 'abc'>"
    """
    repr_ = safe_repr(obj)
    if len(repr_) > max_repr:
        repr_ = repr_[:max(1, max_repr)] + "..."
    return f"<{class_name(obj)}: {repr_}>"


def safe_repr(obj: Any) -> str:
    """
    repr() that never raises: a broken __repr__ yields a placeholder naming the exception.
    """
    try:
        return repr(obj)
    except Exception as e:
        # Fallback for broken __repr__: show type and exception info
        return f"<{type(obj).__name__} object (repr failed: {type(e).__name__})>"
