"""
IEEE-754 bit layout model and float decomposition.

FloatSpec describes one binary float width, FloatInfo is the decomposition of a single value
against its layout. Classification uses only the layout masks, never math.isnan() or numpy helpers,
so the three widths behave identically, including the NaN convention: a NaN is quiet when the
top mantissa bit is set and signaling when it is clear.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from dataclasses import dataclass
from typing import Any, Self

# Third-party ----------------------------------------------------------------------------------------------------------
import numpy as np

# Local ----------------------------------------------------------------------------------------------------------------
from .utils import fmt_type, fmt_value


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class FloatSpec:
    """
    Static bit-layout constants for one binary floating-point width.

    Attributes:
        name: Width name, one of "half", "single" or "double".
        exp_bits: Exponent field width in bits.
        mantissa_bits: Mantissa (fraction) field width in bits.
        total_bits: Total width including the sign bit.
        mantissa_mask: Mask of the mantissa field.
        mantissa_msb_mask: Mask of the top mantissa bit (quiet NaN bit).
        exp_mask: Mask of the exponent field after shifting by mantissa_bits.
        exp_offset: Exponent bias.
    """

    name: str
    exp_bits: int
    mantissa_bits: int
    total_bits: int
    mantissa_mask: int
    mantissa_msb_mask: int
    exp_mask: int
    exp_offset: int

    @property
    def sign_shift(self) -> int:
        return self.total_bits - 1

    @property
    def hex_digits(self) -> int:
        """Hex digits needed for the whole bit pattern."""
        return (self.total_bits + 3) // 4

    @property
    def payload_digits(self) -> int:
        """Hex digits needed for a NaN payload (the mantissa field)."""
        return (self.mantissa_bits + 3) // 4


HALF = FloatSpec(
    name="half",
    exp_bits=5,
    mantissa_bits=10,
    total_bits=16,
    mantissa_mask=0x3FF,
    mantissa_msb_mask=0x200,
    exp_mask=0x1F,
    exp_offset=15,
)

SINGLE = FloatSpec(
    name="single",
    exp_bits=8,
    mantissa_bits=23,
    total_bits=32,
    mantissa_mask=0x7FFFFF,
    mantissa_msb_mask=0x400000,
    exp_mask=0xFF,
    exp_offset=127,
)

DOUBLE = FloatSpec(
    name="double",
    exp_bits=11,
    mantissa_bits=52,
    total_bits=64,
    mantissa_mask=0xFFFFFFFFFFFFF,
    mantissa_msb_mask=0x8000000000000,
    exp_mask=0x7FF,
    exp_offset=1023,
)

# float type -> (spec, same-width unsigned integer dtype)
_LAYOUTS = {
    np.float16: (HALF, np.uint16),
    np.float32: (SINGLE, np.uint32),
    np.float64: (DOUBLE, np.uint64),
    float: (DOUBLE, np.uint64),
}

_FLOAT_DTYPES = {HALF: np.float16, SINGLE: np.float32, DOUBLE: np.float64}
_UINT_DTYPES = {HALF: np.uint16, SINGLE: np.uint32, DOUBLE: np.uint64}


@dataclass(frozen=True)
class FloatInfo:
    """
    Decomposition of one float value against its FloatSpec.

    Produced fresh per formatting call by analyze_float() or FloatInfo.from_bits().

    Attributes:
        spec: Bit layout the value was decomposed with.
        bits: Raw bit pattern as a non-negative int.
        is_negative: Sign bit is set (also for -0.0 and negative NaNs).
        is_positive_infinity: Value is +inf.
        is_negative_infinity: Value is -inf.
        is_quiet_nan: NaN with the top mantissa bit set.
        is_signaling_nan: NaN with the top mantissa bit clear.
        raw_exponent: Biased exponent field.
        real_exponent: Unbiased exponent, 1 - bias for zero and subnormals.
        mantissa: Raw mantissa field, the NaN payload for NaNs.
        significand: Mantissa with the implicit leading bit for normal values.
        exp_hex: Exponent field as zero-padded uppercase hex.
        mantissa_hex: Mantissa field as zero-padded uppercase hex.
        exp_bit_string: Exponent field as zero-padded binary.
        mantissa_bit_string: Mantissa field as zero-padded binary.
    """

    spec: FloatSpec
    bits: int
    is_negative: bool
    is_positive_infinity: bool
    is_negative_infinity: bool
    is_quiet_nan: bool
    is_signaling_nan: bool
    raw_exponent: int
    real_exponent: int
    mantissa: int
    significand: int
    exp_hex: str
    mantissa_hex: str
    exp_bit_string: str
    mantissa_bit_string: str

    @classmethod
    def from_bits(cls, bits: int, spec: FloatSpec) -> Self:
        """
        Decompose a raw bit pattern using the masks of spec.

        Args:
            bits: Bit pattern, must fit into spec.total_bits.
            spec: Bit layout to decompose with.

        Returns:
            FloatInfo of the pattern.

        Raises:
            TypeError: If bits is not an int or spec is not a FloatSpec.
            ValueError: If bits is negative or wider than spec.total_bits.

        Examples:
            >>> info = FloatInfo.from_bits(0x3FC00000, SINGLE)
            >>> info.real_exponent, info.mantissa_hex
            (0, '400000')
        """
        if isinstance(bits, bool) or not isinstance(bits, int):
            raise TypeError(f"bits must be int, but got {fmt_type(bits)}")
        if not isinstance(spec, FloatSpec):
            raise TypeError(f"spec must be FloatSpec, but got {fmt_type(spec)}")
        if bits < 0 or bits >> spec.total_bits:
            raise ValueError(f"bits must fit into {spec.total_bits} unsigned bits, but got {fmt_value(bits)}")

        is_negative = bool((bits >> spec.sign_shift) & 1)
        raw_exponent = (bits >> spec.mantissa_bits) & spec.exp_mask
        mantissa = bits & spec.mantissa_mask

        all_ones = raw_exponent == spec.exp_mask
        is_infinity = all_ones and mantissa == 0
        is_nan = all_ones and mantissa != 0
        is_quiet = is_nan and bool(mantissa & spec.mantissa_msb_mask)

        if raw_exponent == 0:
            real_exponent = 1 - spec.exp_offset
            significand = mantissa
        else:
            real_exponent = raw_exponent - spec.exp_offset
            significand = mantissa | (1 << spec.mantissa_bits)

        return cls(
            spec=spec,
            bits=bits,
            is_negative=is_negative,
            is_positive_infinity=is_infinity and not is_negative,
            is_negative_infinity=is_infinity and is_negative,
            is_quiet_nan=is_quiet,
            is_signaling_nan=is_nan and not is_quiet,
            raw_exponent=raw_exponent,
            real_exponent=real_exponent,
            mantissa=mantissa,
            significand=significand,
            exp_hex=f"{raw_exponent:0{(spec.exp_bits + 3) // 4}X}",
            mantissa_hex=f"{mantissa:0{spec.payload_digits}X}",
            exp_bit_string=f"{raw_exponent:0{spec.exp_bits}b}",
            mantissa_bit_string=f"{mantissa:0{spec.mantissa_bits}b}",
        )

    @property
    def is_nan(self) -> bool:
        return self.is_quiet_nan or self.is_signaling_nan

    @property
    def is_infinity(self) -> bool:
        return self.is_positive_infinity or self.is_negative_infinity

    @property
    def is_finite(self) -> bool:
        return self.raw_exponent != self.spec.exp_mask

    @property
    def is_zero(self) -> bool:
        return self.raw_exponent == 0 and self.mantissa == 0

    @property
    def is_subnormal(self) -> bool:
        return self.raw_exponent == 0 and self.mantissa != 0


# Methods --------------------------------------------------------------------------------------------------------------

def analyze_float(value: Any) -> FloatInfo:
    """
    Decompose a binary float into its IEEE-754 fields.

    Supported widths are numpy.float16 (half), numpy.float32 (single), and Python float
    or numpy.float64 (double).

    Args:
        value: The float to analyze.

    Returns:
        FloatInfo of the value.

    Raises:
        TypeError: If value is not a supported binary float.

    Examples:
        >>> analyze_float(1.5).mantissa_hex
        '8000000000000'
        >>> analyze_float(np.float32(-0.0)).is_negative
        True
    """
    layout = _LAYOUTS.get(type(value))
    if layout is None:
        raise TypeError(f"value must be float, float16, float32 or float64, but got {fmt_type(value)}")
    spec, uint_dtype = layout
    bits = np.array(value, dtype=_FLOAT_DTYPES[spec]).view(uint_dtype).item()
    return FloatInfo.from_bits(int(bits), spec)


def float_from_bits(bits: int, spec: FloatSpec = DOUBLE) -> np.floating:
    """
    Build a float of the layout width from a raw bit pattern.

    Useful for values without a literal form, such as NaNs with a specific payload.

    Args:
        bits: Bit pattern, must fit into spec.total_bits.
        spec: Target layout, DOUBLE by default.

    Returns:
        numpy.float16, numpy.float32 or numpy.float64 scalar carrying exactly these bits.

    Examples:
        >>> float_from_bits(0x3FC00000, SINGLE)
        np.float32(1.5)
    """
    FloatInfo.from_bits(bits, spec)
    return np.array(bits, dtype=_UINT_DTYPES[spec]).view(_FLOAT_DTYPES[spec])[()]
