"""
Nullable wrapper value.

Python has no nullable value types, so an optional value whose underlying type must stay
visible in the output (int?(null) rather than null) is wrapped explicitly.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

# Local ----------------------------------------------------------------------------------------------------------------
from .utils import fmt_type

T = TypeVar("T")


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class Nullable(Generic[T]):
    """
    An optional value of a known underlying type.

    Attributes:
        underlying: The type of the wrapped value.
        value: The wrapped value, None when absent.

    Examples:
        >>> Nullable(int).has_value
        False
        >>> Nullable(int, 42).value
        42
    """

    underlying: type
    value: Any = None

    def __post_init__(self):
        if not isinstance(self.underlying, type):
            raise TypeError(f"underlying must be a type, but got {fmt_type(self.underlying)}")
        if self.value is not None and not isinstance(self.value, self.underlying):
            raise TypeError(f"value must be {self.underlying.__name__} or None, but got {fmt_type(self.value)}")

    @property
    def has_value(self) -> bool:
        return self.value is not None
