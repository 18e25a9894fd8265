"""
Integer, binary float and decimal formatters.

Pure functions from (value, config) to the repr body of a number. Binary floats go through
their IEEE-754 decomposition (see reprkit.floats), decimals never do.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from decimal import Decimal
from typing import Any

# Third-party ----------------------------------------------------------------------------------------------------------
import numpy as np

# Local ----------------------------------------------------------------------------------------------------------------
from .classify import int_bit_width
from .config import FloatMode, IntMode, ReprConfig
from .floats import FloatInfo, analyze_float
from .utils import fmt_type, fmt_value

# Custom format tokens -------------------------------------------------------------------------------------------------

HEX_BYTES_TOKEN = "HB"
BIT_FIELD_TOKEN = "BF"
HEX_POWER_TOKEN = "HP"
EXACT_TOKEN = "EX"

MAX_PRECISION = 100


# Methods --------------------------------------------------------------------------------------------------------------

def format_int(value: Any, config: ReprConfig) -> str:
    """
    Format an integer per config.int_mode or config.int_format.

    Fixed-width numpy integers render HEX_BYTES as their two's-complement pattern with
    exactly width / 4 hex digits. Python int has no fixed width and uses the shortest
    signed big-endian byte string that holds the value.

    Args:
        value: Python int or numpy integer (bool is rejected).
        config: Active configuration.

    Returns:
        Integer body without type prefix.

    Raises:
        TypeError: If value is not an integer.
        ValueError: If config.int_mode is not a known IntMode.

    Examples:
        >>> format_int(42, ReprConfig(int_mode=IntMode.HEX))
        '0x2A'
        >>> format_int(np.int32(-42), ReprConfig(int_mode=IntMode.HEX_BYTES))
        '0xFFFFFFD6'
        >>> format_int(-42, ReprConfig(int_mode=IntMode.BINARY))
        '-0b101010'
    """
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, (int, np.integer)):
        raise TypeError(f"value must be int or numpy integer, but got {fmt_type(value)}")

    n = int(value)
    width = int_bit_width(type(value))

    if config.int_format is not None:
        if config.int_format == HEX_BYTES_TOKEN:
            return _int_hex_bytes(n, width)
        return format(n, config.int_format)

    mode = config.int_mode
    if mode is IntMode.DECIMAL:
        return str(n)
    if mode is IntMode.HEX:
        return f"{'-' if n < 0 else ''}0x{abs(n):X}"
    if mode is IntMode.BINARY:
        return f"{'-' if n < 0 else ''}0b{abs(n):b}"
    if mode is IntMode.HEX_BYTES:
        return _int_hex_bytes(n, width)
    raise ValueError(f"unsupported int mode {fmt_value(mode)}")


def format_float(value: Any, config: ReprConfig) -> str:
    """
    Format a binary float (half, single or double) per config.

    Precedence:
        1. Bit-exact output (HEX_BYTES, BIT_FIELD or the "HB"/"BF" tokens) short-circuits everything.
        2. Infinities and NaNs render as fixed literals.
        3. A custom float_format, when set.
        4. float_mode: ROUND, SCIENTIFIC, GENERAL, EXACT or HEX_POWER.

    ROUND and SCIENTIFIC fall back to EXACT when float_precision is outside 0..100.

    Args:
        value: Python float or numpy float16/float32/float64.
        config: Active configuration.

    Returns:
        Float body without type prefix.

    Raises:
        TypeError: If value is not a supported binary float.
        ValueError: If config.float_mode is not a known FloatMode.

    Examples:
        >>> format_float(np.float32(1.5), ReprConfig(float_mode=FloatMode.BIT_FIELD))
        '0|01111111|10000000000000000000000'
        >>> format_float(0.1 + 0.2, ReprConfig(float_mode=FloatMode.GENERAL))
        '0.30000000000000004'
        >>> format_float(float("inf"), ReprConfig())
        'Infinity'
    """
    info = analyze_float(value)
    mode = config.float_mode
    custom = config.float_format

    if custom == HEX_BYTES_TOKEN or (custom is None and mode is FloatMode.HEX_BYTES):
        return f"0x{info.bits:0{info.spec.hex_digits}X}"
    if custom == BIT_FIELD_TOKEN or (custom is None and mode is FloatMode.BIT_FIELD):
        return f"{int(info.is_negative)}|{info.exp_bit_string}|{info.mantissa_bit_string}"

    special = _special_literal(info)
    if special is not None:
        return special

    if custom is not None:
        if custom == HEX_POWER_TOKEN:
            return _float_hex_power(info)
        if custom == EXACT_TOKEN:
            return _float_exact(info)
        return format(float(value), custom)

    if mode is FloatMode.ROUND:
        precision = config.float_precision
        if precision < 0 or precision > MAX_PRECISION:
            return _float_exact(info)
        return f"{float(value):.{precision}f}"
    if mode is FloatMode.SCIENTIFIC:
        precision = config.float_precision
        if precision < 0 or precision > MAX_PRECISION:
            return _float_exact(info)
        return f"{float(value):.{precision}E}"
    if mode is FloatMode.GENERAL:
        # numpy scalars print the shortest repr of their own width
        return str(value)
    if mode is FloatMode.EXACT:
        return _float_exact(info)
    if mode is FloatMode.HEX_POWER:
        return _float_hex_power(info)
    raise ValueError(f"unsupported float mode {fmt_value(mode)}")


def format_decimal(value: Decimal, config: ReprConfig) -> str:
    """
    Format a decimal.Decimal per config.

    Decimals have no IEEE-754 layout. EXACT renders the coefficient digits in scientific
    form, the bit-oriented modes (HEX_POWER, HEX_BYTES, BIT_FIELD and the "HB", "BF", "HP"
    tokens) render the hex power form 0x<coefficient>p10<exponent>, and the remaining
    modes use native Decimal formatting.

    Args:
        value: The decimal to format.
        config: Active configuration.

    Returns:
        Decimal body without type prefix.

    Raises:
        TypeError: If value is not a Decimal.
        ValueError: If config.float_mode is not a known FloatMode.

    Examples:
        >>> format_decimal(Decimal("1.0"), ReprConfig())
        '1.0E0'
        >>> format_decimal(Decimal("3.14"), ReprConfig(float_mode=FloatMode.HEX_POWER))
        '0x13Ap10-002'
    """
    if not isinstance(value, Decimal):
        raise TypeError(f"value must be Decimal, but got {fmt_type(value)}")

    if value.is_infinite():
        return "-Infinity" if value.is_signed() else "Infinity"
    if value.is_qnan():
        return "Quiet NaN"
    if value.is_snan():
        payload = int("".join(map(str, value.as_tuple().digits)) or "0")
        return f"Signaling NaN, Payload: 0x{payload:X}"

    custom = config.float_format
    if custom is not None:
        if custom in (HEX_BYTES_TOKEN, BIT_FIELD_TOKEN, HEX_POWER_TOKEN):
            return _decimal_hex_power(value)
        if custom == EXACT_TOKEN:
            return _decimal_exact(value)
        return format(value, custom)

    mode = config.float_mode
    if mode in (FloatMode.HEX_POWER, FloatMode.HEX_BYTES, FloatMode.BIT_FIELD):
        return _decimal_hex_power(value)
    if mode is FloatMode.EXACT:
        return _decimal_exact(value)
    if mode is FloatMode.ROUND:
        precision = config.float_precision
        if precision < 0 or precision > MAX_PRECISION:
            return _decimal_exact(value)
        return f"{value:.{precision}f}"
    if mode is FloatMode.SCIENTIFIC:
        precision = config.float_precision
        if precision < 0 or precision > MAX_PRECISION:
            return _decimal_exact(value)
        return f"{value:.{precision}E}"
    if mode is FloatMode.GENERAL:
        return str(value)
    raise ValueError(f"unsupported float mode {fmt_value(mode)}")


# Private Methods ------------------------------------------------------------------------------------------------------

def _int_hex_bytes(n: int, width: int | None) -> str:
    if width is not None:
        return f"0x{n & ((1 << width) - 1):0{width // 4}X}"
    n_bytes = (n + (n < 0)).bit_length() // 8 + 1
    return "0x" + n.to_bytes(n_bytes, "big", signed=True).hex().upper()


def _special_literal(info: FloatInfo) -> str | None:
    if info.is_positive_infinity:
        return "Infinity"
    if info.is_negative_infinity:
        return "-Infinity"
    if info.is_quiet_nan:
        return "Quiet NaN"
    if info.is_signaling_nan:
        return f"Signaling NaN, Payload: 0x{info.mantissa_hex}"
    return None


def _float_exact(info: FloatInfo) -> str:
    """Lossless decimal expansion of significand * 2**(real_exponent - mantissa_bits)."""
    sign = "-" if info.is_negative else ""
    if info.significand == 0:
        return f"{sign}0.0E0"

    exp2 = info.real_exponent - info.spec.mantissa_bits
    if exp2 >= 0:
        numerator = info.significand << exp2
        scale = 0
    else:
        # m / 2**k == m * 5**k / 10**k
        numerator = info.significand * 5 ** -exp2
        scale = -exp2

    digits = str(numerator)
    return _scientific(sign, digits, len(digits) - scale - 1)


def _float_hex_power(info: FloatInfo) -> str:
    mbits = info.spec.mantissa_bits
    shift = -mbits % 4
    sign = "-" if info.is_negative else ""
    lead = "0" if info.raw_exponent == 0 else "1"
    fraction = f"{info.mantissa << shift:0{(mbits + shift) // 4}X}"
    return f"{sign}0x{lead}.{fraction}p{info.real_exponent:+04d}"


def _decimal_exact(value: Decimal) -> str:
    sign_bit, digit_tuple, exponent = value.as_tuple()
    sign = "-" if sign_bit else ""
    digits = "".join(map(str, digit_tuple)).lstrip("0")
    if not digits:
        return f"{sign}0.0E0"
    return _scientific(sign, digits, len(digits) - 1 + exponent)


def _decimal_hex_power(value: Decimal) -> str:
    sign_bit, digit_tuple, exponent = value.as_tuple()
    coefficient = int("".join(map(str, digit_tuple)) or "0")
    return f"{'-' if sign_bit else ''}0x{coefficient:X}p10{exponent:+04d}"


def _scientific(sign: str, digits: str, pow10: int) -> str:
    return f"{sign}{digits[0]}.{digits[1:].rstrip('0') or '0'}E{pow10}"
