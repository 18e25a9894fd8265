#
# reprkit - Formatters Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
import array
import functools
import uuid
from collections import OrderedDict, deque, namedtuple
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal
from enum import Enum, IntEnum

# Third-party ----------------------------------------------------------------------------------------------------------
import numpy as np
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from reprkit.engine import represent
from reprkit.formatters import function_signature, public_attributes, record_fields


# Helper classes and functions -----------------------------------------------------------------------------------------

class Colors(Enum):
    RED = 0
    GREEN = 1


class Level(IntEnum):
    LOW = 1


class Shape(Enum):
    SQUARE = "sq"


@dataclass
class Settings:
    a: int
    b: str
    secret: str = field(default="x", repr=False)


@dataclass
class Empty:
    pass


Pair = namedtuple("Pair", "x y")


class Point:
    def __init__(self, x, y):
        self.X = x
        self.Y = y
        self._cache = None


class Slotted:
    __slots__ = ("a", "_b")

    def __init__(self):
        self.a = 1
        self._b = 2


class Bare:
    pass


class Thermometer:
    def __init__(self):
        self.label = "lab"
        self._celsius = 20

    @property
    def celsius(self):
        return self._celsius

    @property
    def kelvin(self):
        raise RuntimeError("sensor offline")

    @property
    def _private(self):
        return 1


class Outdoor(Thermometer):
    @property
    def celsius(self):
        return -5


class WithRepr:
    def __repr__(self):
        return "WithRepr!"


class WithStr:
    def __str__(self):
        return "with-str"


class Broken:
    def __repr__(self):
        raise RuntimeError("boom")


def add(a: int, b: int) -> int:
    return a + b


async def fetch(url):
    return url


square = lambda x: x * x  # noqa: E731


def make_jagged():
    jagged = np.empty(2, dtype=object)
    jagged[0] = np.array([1, 2], dtype=np.int64)
    jagged[1] = np.array([3], dtype=np.int64)
    return jagged


# Tests ----------------------------------------------------------------------------------------------------------------

class TestScalars:
    @pytest.mark.parametrize(
        "value, expected",
        [
            pytest.param(42, "int(42)", id="int"),
            pytest.param(np.uint8(7), "uint8(7)", id="uint8"),
            pytest.param(200.0, "float(2.0E2)", id="float"),
            pytest.param(np.float32(3.14), "float32(3.1400001049041748046875E0)", id="float32"),
            pytest.param(Decimal("1.0"), "Decimal(1.0E0)", id="decimal"),
            pytest.param("hello", "'hello'", id="str"),
            pytest.param(np.str_("hi"), "'hi'", id="numpy-str"),
            pytest.param(True, "True", id="bool"),
            pytest.param(np.bool_(False), "False", id="numpy-bool"),
            pytest.param(b"ab", "b'ab'", id="bytes"),
            pytest.param(bytearray(b"ab"), "bytearray(b'ab')", id="bytearray"),
            pytest.param(None, "null", id="none"),
        ],
    )
    def test_values(self, value, expected):
        """Render scalar values with their default formatters."""
        assert represent(value) == expected


class TestTimeAndIds:
    @pytest.mark.parametrize(
        "value, expected",
        [
            pytest.param(datetime(2024, 1, 2, 3, 4, 5), "datetime(2024-01-02 03:04:05)", id="naive"),
            pytest.param(datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc), "datetime(2024-01-02 03:04:05Z)",
                         id="utc"),
            pytest.param(datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone(timedelta(hours=5, minutes=30))),
                         "datetime(2024-01-02 03:04:05+05:30)", id="positive-offset"),
            pytest.param(datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone(timedelta(hours=-3))),
                         "datetime(2024-01-02 03:04:05-03:00)", id="negative-offset"),
            pytest.param(date(2024, 1, 2), "date(2024-01-02)", id="date"),
            pytest.param(time(3, 4, 5, 999), "time(03:04:05)", id="time"),
            pytest.param(timedelta(seconds=1.5), "timedelta(1.500s)", id="timedelta"),
            pytest.param(uuid.UUID("12345678-1234-5678-1234-567812345678"),
                         "UUID(12345678-1234-5678-1234-567812345678)", id="uuid"),
        ],
    )
    def test_values(self, value, expected):
        assert represent(value) == expected


class TestEnums:
    @pytest.mark.parametrize(
        "value, expected",
        [
            pytest.param(Colors.GREEN, "Colors.GREEN (int(1))", id="int-value"),
            pytest.param(Level.LOW, "Level.LOW (int(1))", id="int-enum"),
            pytest.param(Shape.SQUARE, "Shape.SQUARE ('sq')", id="str-value"),
        ],
    )
    def test_member_with_value(self, value, expected):
        """Enums render as Class.NAME followed by the value."""
        assert represent(value) == expected


class TestRecords:
    def test_dataclass(self):
        """Fields with repr=False are omitted."""
        assert represent(Settings(1, "x")) == "Settings({ a: int(1), b: 'x' })"

    def test_empty_dataclass(self):
        assert represent(Empty()) == "Empty({})"

    def test_namedtuple(self):
        assert represent(Pair(1, 2.0)) == "Pair({ x: int(1), y: float(2.0E0) })"

    def test_record_fields(self):
        assert record_fields(Pair(1, 2)) == [("x", 1), ("y", 2)]
        assert record_fields(Settings(1, "x")) == [("a", 1), ("b", "x")]


class TestCollections:
    @pytest.mark.parametrize(
        "value, expected",
        [
            pytest.param([1, 2, 3], "[int(1), int(2), int(3)]", id="list"),
            pytest.param([], "[]", id="empty-list"),
            pytest.param(deque([1]), "deque([int(1)])", id="deque"),
            pytest.param(range(2), "range([int(0), int(1)])", id="range"),
            pytest.param({"x": 1}, "{'x': int(1)}", id="dict"),
            pytest.param({}, "{}", id="empty-dict"),
            pytest.param(OrderedDict(x=1), "OrderedDict({'x': int(1)})", id="ordered-dict"),
            pytest.param((1, "hello"), "(int(1), 'hello')", id="tuple"),
            pytest.param((1,), "(int(1),)", id="single-tuple"),
            pytest.param((), "()", id="empty-tuple"),
            pytest.param({3, 1, 2}, "{int(1), int(2), int(3)}", id="set"),
            pytest.param(frozenset({"b", "a"}), "frozenset({'a', 'b'})", id="frozenset"),
            pytest.param([[1], {"k": (2,)}], "[[int(1)], {'k': (int(2),)}]", id="nested"),
            pytest.param([200.0], "[float(2.0E2)]", id="nested-float"),
        ],
    )
    def test_values(self, value, expected):
        assert represent(value) == expected

    def test_generator_not_consumed(self):
        """Iterators are rendered by their own repr and left intact."""
        gen = (x for x in range(3))
        result = represent(gen)
        assert result.startswith("<generator object")
        assert list(gen) == [0, 1, 2]


class TestArrays:
    @pytest.mark.parametrize(
        "value, expected",
        [
            pytest.param(array.array("i", [1, 2]), "1DArray([int(1), int(2)])", id="stdlib-array"),
            pytest.param(np.array([1, 2], dtype=np.int64), "1DArray([int64(1), int64(2)])", id="1d"),
            pytest.param(np.array([[1, 2], [3, 4]], dtype=np.int64),
                         "2DArray([[int64(1), int64(2)], [int64(3), int64(4)]])", id="2d"),
            pytest.param(np.zeros((1, 1, 1), dtype=np.uint8), "3DArray([[[uint8(0)]]])", id="3d"),
            pytest.param(np.array([1.5], dtype=np.float32), "1DArray([float32(1.5E0)])", id="float32"),
            pytest.param(np.array([], dtype=np.int64), "1DArray([])", id="empty"),
            pytest.param(np.array(5, dtype=np.int64), "0DArray(int64(5))", id="0d"),
        ],
    )
    def test_values(self, value, expected):
        assert represent(value) == expected

    def test_jagged(self):
        """Inner arrays of a jagged array have no prefix."""
        assert represent(make_jagged()) == "JaggedArray([[int64(1), int64(2)], [int64(3)]])"


class TestFunctions:
    @pytest.mark.parametrize(
        "value, expected",
        [
            pytest.param(add, "add(a: int, b: int) -> int", id="function"),
            pytest.param(fetch, "async fetch(url)", id="coroutine"),
            pytest.param(square, "<lambda>(x)", id="lambda"),
            pytest.param(functools.partial(add, 1), "partial(add)(b: int) -> int", id="partial"),
            pytest.param(len, "len(obj, /)", id="builtin"),
        ],
    )
    def test_values(self, value, expected):
        assert represent(value) == expected

    def test_bound_method(self):
        """Bound methods use the qualified name and drop self."""
        assert represent(WithRepr().__repr__) == "WithRepr.__repr__()"

    def test_partial_of_builtin(self):
        """Partials are named after the wrapped callable."""
        name, signature = function_signature(functools.partial(dict.fromkeys))
        assert name == "partial(dict.fromkeys)"
        assert signature.startswith("(")


class TestFallbacks:
    def test_own_repr(self):
        assert represent(WithRepr()) == "WithRepr!"

    def test_own_str(self):
        assert represent(WithStr()) == "with-str"

    def test_broken_repr(self):
        """A failing __repr__ yields a placeholder instead of raising."""
        assert represent(Broken()) == "<Broken object (repr failed: RuntimeError)>"

    def test_object_reflection(self):
        """Public attributes render as name: value pairs."""
        assert represent(Point(10, 20)) == "Point(X: int(10), Y: int(20))"

    def test_object_slots(self):
        assert represent(Slotted()) == "Slotted(a: int(1))"

    def test_object_without_attributes(self):
        assert represent(Bare()) == "Bare()"

    def test_public_attributes(self):
        """Private names are skipped."""
        assert public_attributes(Point(1, 2)) == [("X", 1), ("Y", 2)]

    def test_object_properties(self):
        """Public properties follow the instance attributes; a failing getter renders as <error>."""
        assert represent(Thermometer()) == "Thermometer(label: 'lab', celsius: int(20), kelvin: <error>)"

    def test_overridden_property_listed_once(self):
        assert public_attributes(Outdoor())[:2] == [("label", "lab"), ("celsius", -5)]
        assert [name for name, _ in public_attributes(Outdoor())] == ["label", "celsius", "kelvin"]
