"""
Best-effort caller identification for diagnostic messages.

Lookups never raise: when the stack cannot be inspected the functions return a bracketed
placeholder such as "[unknown method]" instead.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import logging
from inspect import stack
from types import FrameType

# Local ----------------------------------------------------------------------------------------------------------------
from .utils import fmt_type, fmt_value

logger = logging.getLogger(__name__)

UNKNOWN_METHOD = "[unknown method]"
UNKNOWN_CLASS = "[unknown class]"


# Methods --------------------------------------------------------------------------------------------------------------

def get_caller_name(depth: int = 1) -> str:
    """
    Gets the qualified name of a function from the call stack.

    Methods are reported as "Class.method", module-level functions as "module.function"
    and nested functions by their qualified name, e.g. "outer.<locals>.inner".

    Args:
        depth (int): The desired depth in the call stack. `1` refers to the
            immediate caller, `2` to the caller's caller, and so on.

    Returns:
        str: The qualified function name, or a bracketed placeholder if it cannot be determined:
            "[unknown method]" if there is no frame at depth, "[unknown class].name" if the
            owner cannot be determined, "[error getting caller: <message>]" on any other failure.

    Warning:
        This function depends on `inspect.stack()`, which can be
        computationally expensive. Avoid it in tight loops.

    Examples:
        class Service:
            def run(self):
                return get_caller_name()

        Service().run()  # "Service.run"
    """
    try:
        frame = _frame_at(depth)
        if frame is None:
            return UNKNOWN_METHOD
        return _qualified_name(frame)
    except Exception as e:
        logger.debug("caller lookup at depth %r failed", depth, exc_info=True)
        return f"[error getting caller: {e}]"


def get_caller_info(depth: int = 1) -> str:
    """
    Like get_caller_name() but with source location: "Class.method @ path/to/file.py:42".

    Never raises; see get_caller_name() for the placeholders returned on failure.
    """
    try:
        frame = _frame_at(depth)
        if frame is None:
            return UNKNOWN_METHOD
        return f"{_qualified_name(frame)} @ {frame.f_code.co_filename}:{frame.f_lineno}"
    except Exception as e:
        logger.debug("caller lookup at depth %r failed", depth, exc_info=True)
        return f"[error getting caller: {e}]"


# Private Methods ------------------------------------------------------------------------------------------------------

def _frame_at(depth: int) -> FrameType | None:
    if isinstance(depth, bool) or not isinstance(depth, int):
        raise TypeError(f"stack depth must be an integer, but got {fmt_type(depth)}")
    if depth < 1:
        raise ValueError(f"stack depth must be 1 or greater, but got {fmt_value(depth)}")

    # stack()[0] is _frame_at, [1] the public get_caller_* function, [2] its caller (depth=1)
    frames = stack(context=0)
    try:
        index = depth + 1
        if index >= len(frames):
            logger.debug("call stack is not deep enough for depth %d", depth)
            return None
        return frames[index].frame
    finally:
        del frames


def _qualified_name(frame: FrameType) -> str:
    code = frame.f_code
    name = code.co_name
    if not name:
        return UNKNOWN_METHOD

    qualname = getattr(code, "co_qualname", name)
    if "." in qualname:
        return qualname

    module = frame.f_globals.get("__name__")
    if not module:
        return f"{UNKNOWN_CLASS}.{name}"
    return f"{module}.{qualname}"
