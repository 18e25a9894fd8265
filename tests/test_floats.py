#
# reprkit - Float Layout Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
from decimal import Decimal

# Third-party ----------------------------------------------------------------------------------------------------------
import numpy as np
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from reprkit.floats import DOUBLE, HALF, SINGLE, FloatInfo, analyze_float, float_from_bits


# Tests ----------------------------------------------------------------------------------------------------------------

class TestFloatSpec:
    @pytest.mark.parametrize(
        "spec, total, hex_digits, payload_digits",
        [
            pytest.param(HALF, 16, 4, 3, id="half"),
            pytest.param(SINGLE, 32, 8, 6, id="single"),
            pytest.param(DOUBLE, 64, 16, 13, id="double"),
        ],
    )
    def test_widths(self, spec, total, hex_digits, payload_digits):
        """Layout widths add up and digit counts follow from them."""
        assert 1 + spec.exp_bits + spec.mantissa_bits == total
        assert spec.total_bits == total
        assert spec.hex_digits == hex_digits
        assert spec.payload_digits == payload_digits
        assert spec.sign_shift == total - 1

    @pytest.mark.parametrize("spec", [HALF, SINGLE, DOUBLE], ids=["half", "single", "double"])
    def test_masks(self, spec):
        """Masks match the field widths."""
        assert spec.mantissa_mask == (1 << spec.mantissa_bits) - 1
        assert spec.mantissa_msb_mask == 1 << (spec.mantissa_bits - 1)
        assert spec.exp_mask == (1 << spec.exp_bits) - 1
        assert spec.exp_offset == (1 << (spec.exp_bits - 1)) - 1


class TestFloatInfoFromBits:
    def test_single_one_and_a_half(self):
        """Decompose 1.5 in single precision."""
        info = FloatInfo.from_bits(0x3FC00000, SINGLE)
        assert not info.is_negative
        assert info.raw_exponent == 127
        assert info.real_exponent == 0
        assert info.mantissa == 0x400000
        assert info.significand == 0xC00000
        assert info.exp_hex == "7F"
        assert info.mantissa_hex == "400000"
        assert info.exp_bit_string == "01111111"
        assert info.mantissa_bit_string == "10000000000000000000000"
        assert info.is_finite and not info.is_zero and not info.is_subnormal

    def test_negative_zero(self):
        """-0.0 keeps the sign and is zero."""
        info = FloatInfo.from_bits(0x8000000000000000, DOUBLE)
        assert info.is_negative
        assert info.is_zero
        assert info.significand == 0

    def test_subnormal(self):
        """The smallest subnormal has no implicit bit and the minimum exponent."""
        info = FloatInfo.from_bits(1, DOUBLE)
        assert info.is_subnormal
        assert info.real_exponent == -1022
        assert info.significand == 1

    @pytest.mark.parametrize(
        "bits, spec, positive",
        [
            pytest.param(0x7C00, HALF, True, id="half-pos"),
            pytest.param(0xFF800000, SINGLE, False, id="single-neg"),
            pytest.param(0x7FF0000000000000, DOUBLE, True, id="double-pos"),
        ],
    )
    def test_infinity(self, bits, spec, positive):
        """All-ones exponent with zero mantissa is an infinity."""
        info = FloatInfo.from_bits(bits, spec)
        assert info.is_infinity
        assert info.is_positive_infinity is positive
        assert info.is_negative_infinity is not positive
        assert not info.is_nan
        assert not info.is_finite

    @pytest.mark.parametrize(
        "bits, spec, quiet",
        [
            pytest.param(0x7E00, HALF, True, id="half-quiet"),
            pytest.param(0x7C01, HALF, False, id="half-signaling"),
            pytest.param(0x7FC00000, SINGLE, True, id="single-quiet"),
            pytest.param(0x7F800001, SINGLE, False, id="single-signaling"),
            pytest.param(0x7FF8000000000000, DOUBLE, True, id="double-quiet"),
            pytest.param(0x7FF0000000000001, DOUBLE, False, id="double-signaling"),
        ],
    )
    def test_nan_convention(self, bits, spec, quiet):
        """A NaN is quiet when the top mantissa bit is set, signaling otherwise."""
        info = FloatInfo.from_bits(bits, spec)
        assert info.is_nan
        assert info.is_quiet_nan is quiet
        assert info.is_signaling_nan is not quiet
        assert not info.is_infinity

    def test_payload_hex_is_padded(self):
        """The mantissa hex covers the whole mantissa field."""
        info = FloatInfo.from_bits(0x7FF0000000000001, DOUBLE)
        assert info.mantissa_hex == "0000000000001"

    @pytest.mark.parametrize(
        "bits, spec, exc",
        [
            pytest.param(1.0, DOUBLE, TypeError, id="float-bits"),
            pytest.param(True, DOUBLE, TypeError, id="bool-bits"),
            pytest.param(1, "double", TypeError, id="spec-str"),
            pytest.param(-1, DOUBLE, ValueError, id="negative"),
            pytest.param(1 << 16, HALF, ValueError, id="too-wide"),
        ],
    )
    def test_invalid(self, bits, spec, exc):
        """Reject malformed bit patterns and layouts."""
        with pytest.raises(exc):
            FloatInfo.from_bits(bits, spec)


class TestAnalyzeFloat:
    @pytest.mark.parametrize(
        "value, spec, bits",
        [
            pytest.param(1.5, DOUBLE, 0x3FF8000000000000, id="float"),
            pytest.param(np.float64(1.5), DOUBLE, 0x3FF8000000000000, id="float64"),
            pytest.param(np.float32(1.5), SINGLE, 0x3FC00000, id="float32"),
            pytest.param(np.float16(1.0), HALF, 0x3C00, id="float16"),
            pytest.param(-2.0, DOUBLE, 0xC000000000000000, id="negative"),
        ],
    )
    def test_bits(self, value, spec, bits):
        """Pick the layout from the value type and read its bits."""
        info = analyze_float(value)
        assert info.spec == spec
        assert info.bits == bits

    def test_negative_zero(self):
        """Sign of -0.0 is preserved."""
        assert analyze_float(np.float32(-0.0)).is_negative

    def test_quiet_nan(self):
        """Default NaN is quiet."""
        assert analyze_float(float("nan")).is_quiet_nan

    @pytest.mark.parametrize(
        "value",
        [
            pytest.param(1, id="int"),
            pytest.param(Decimal("1.5"), id="decimal"),
            pytest.param("1.5", id="str"),
            pytest.param(True, id="bool"),
        ],
    )
    def test_unsupported(self, value):
        """Raise TypeError for values that are not binary floats."""
        with pytest.raises(TypeError, match=r"value must be float"):
            analyze_float(value)


class TestFloatFromBits:
    def test_single(self):
        """Build a float32 from its bits."""
        value = float_from_bits(0x3FC00000, SINGLE)
        assert isinstance(value, np.float32)
        assert value == np.float32(1.5)

    def test_signaling_nan_round_trip(self):
        """Payload bits survive the trip through a numpy scalar."""
        value = float_from_bits(0x7FF0000000000001)
        info = analyze_float(value)
        assert info.is_signaling_nan
        assert info.mantissa == 1

    def test_invalid_bits(self):
        """Bits wider than the layout are rejected."""
        with pytest.raises(ValueError):
            float_from_bits(1 << 32, SINGLE)
