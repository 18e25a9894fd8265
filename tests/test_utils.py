#
# reprkit - Utils Tests
#

# Third party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from reprkit.utils import class_name, fmt_type, fmt_value, safe_repr


# Local Classes --------------------------------------------------------------------------------------------------------

class BrokenRepr:
    def __repr__(self):
        raise RuntimeError("boom")


# Tests ----------------------------------------------------------------------------------------------------------------

class TestClassName:
    @pytest.mark.parametrize(
        "obj, expected",
        [
            pytest.param(int, "int", id="builtin-class"),
            pytest.param(10, "int", id="builtin-instance"),
            pytest.param(None, "NoneType", id="none"),
            pytest.param(BrokenRepr, "BrokenRepr", id="user-class"),
            pytest.param(BrokenRepr(), "BrokenRepr", id="user-instance"),
        ],
    )
    def test_names(self, obj, expected):
        """Return the unqualified class name for classes and instances."""
        assert class_name(obj) == expected

    def test_nested_class_is_unqualified(self):
        """Nested classes are named without their enclosing scope."""

        class Custom:
            pass

        assert class_name(Custom()) == "Custom"


class TestFmtHelpers:
    @pytest.mark.parametrize(
        "obj, expected",
        [
            pytest.param(42, "<int>", id="instance"),
            pytest.param(int, "<int>", id="class"),
            pytest.param(BrokenRepr(), "<BrokenRepr>", id="user"),
        ],
    )
    def test_fmt_type(self, obj, expected):
        """Format the type name in angle brackets."""
        assert fmt_type(obj) == expected

    @pytest.mark.parametrize(
        "obj, expected",
        [
            pytest.param(42, "<int: 42>", id="int"),
            pytest.param("abc", "<str: 'abc'>", id="str"),
            pytest.param([1, 2], "<list: [1, 2]>", id="list"),
        ],
    )
    def test_fmt_value(self, obj, expected):
        """Format a type-value pair."""
        assert fmt_value(obj) == expected

    def test_fmt_value_truncates(self):
        """Truncate long reprs and append an ellipsis."""
        out = fmt_value("x" * 500, max_repr=10)
        assert out == "<str: 'xxxxxxxxx...>"

    def test_safe_repr_broken(self):
        """Fall back to a descriptive marker when __repr__ raises."""
        assert safe_repr(BrokenRepr()) == "<BrokenRepr object (repr failed: RuntimeError)>"
