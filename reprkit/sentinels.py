"""
Sentinel for distinguishing an omitted argument from an explicit None.

reprkit configuration objects use copy-with-override methods where None is a meaningful
value (for example, "no custom container config"). UNSET marks arguments the caller did
not provide, so they are inherited from the receiver instead.

Example:
    >>> def merge(self, float_format: str | None | UnsetType = UNSET):
    ...     float_format = ifunset(float_format, default=self.float_format)
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any, Final

__all__ = ["UNSET", "UnsetType", "ifunset"]


# Classes --------------------------------------------------------------------------------------------------------------

class UnsetType:
    """
    Singleton type of the UNSET sentinel.

    Compares by identity, is falsy, and survives pickling as the same instance.
    """
    __slots__ = ()
    _instance: "UnsetType | None" = None

    def __new__(cls) -> "UnsetType":
        """Ensures singleton behavior."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "<UNSET>"

    def __eq__(self, other: Any) -> bool:
        return self is other

    def __hash__(self) -> int:
        return id(self)

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> tuple:
        """Ensure pickling returns the singleton instance."""
        return (self.__class__, ())


# Sentinel Objects -----------------------------------------------------------------------------------------------------

UNSET: Final[UnsetType] = UnsetType()
"""
Sentinel representing an argument that was not provided.

Distinguishes "not provided" from "explicitly set to None".
"""


# Methods --------------------------------------------------------------------------------------------------------------

def ifunset(value: Any, *, default: Any = None) -> Any:
    """
    Return value if it's not UNSET, otherwise return default.

    Args:
        value: The value to check.
        default: The fallback value when value is UNSET.

    Returns:
        The value itself if not UNSET, otherwise the default.

    Example:
        >>> ifunset(UNSET, default=30)
        30
        >>> ifunset(None, default=30) is None
        True
    """
    return default if value is UNSET else value
