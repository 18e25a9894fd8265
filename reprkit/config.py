"""
Configuration for the representation engine.

ReprConfig is an immutable value threaded through every recursive formatting call.
Derived configurations are produced with merge(), never by mutation.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from dataclasses import dataclass
from enum import StrEnum, unique
from typing import Any, Self

# Local ----------------------------------------------------------------------------------------------------------------
from .sentinels import UNSET, UnsetType, ifunset
from .utils import fmt_type, fmt_value


# Classes --------------------------------------------------------------------------------------------------------------

@unique
class FloatMode(StrEnum):
    """How binary floats and decimals are rendered."""
    EXACT = "exact"
    SCIENTIFIC = "scientific"
    ROUND = "round"
    GENERAL = "general"
    HEX_BYTES = "hex_bytes"
    BIT_FIELD = "bit_field"
    HEX_POWER = "hex_power"


@unique
class IntMode(StrEnum):
    """How integers are rendered."""
    HEX = "hex"
    BINARY = "binary"
    DECIMAL = "decimal"
    HEX_BYTES = "hex_bytes"


@unique
class ContainerMode(StrEnum):
    """
    Which config applies to elements, keys and fields of containers and objects.

    USE_DEFAULT switches to ReprConfig.global_defaults(), USE_PARENT keeps the current config,
    USE_SIMPLE switches to ReprConfig.container_defaults() and USE_CUSTOM switches to
    custom_container_config.
    """
    USE_DEFAULT = "use_default"
    USE_PARENT = "use_parent"
    USE_SIMPLE = "use_simple"
    USE_CUSTOM = "use_custom"


@unique
class TypeMode(StrEnum):
    """When the TypeName(...) prefix is shown."""
    ALWAYS_SHOW = "always_show"
    HIDE_OBVIOUS = "hide_obvious"
    ALWAYS_HIDE = "always_hide"


@unique
class FormattingMode(StrEnum):
    """
    Global formatter selection override.

    SMART uses the regular priority chain, REFLECTION always enumerates attributes and
    HIERARCHICAL renders a JSON tree.
    """
    SMART = "smart"
    REFLECTION = "reflection"
    HIERARCHICAL = "hierarchical"


@dataclass(frozen=True)
class ReprConfig:
    """
    Immutable options controlling how values are represented.

    The field defaults equal the global_defaults() preset, so ReprConfig() is the config
    used when represent() is called without one.

    Attributes:
        float_mode: Rendering of binary floats and decimals.
        float_precision: Decimal places for ROUND and SCIENTIFIC, -1 means unspecified.
        float_format: Raw format string applied to floats instead of float_mode. The tokens
            "HB", "BF", "HP" and "EX" select hex bytes, bit field, hex power and exact output,
            anything else is used as a Python format spec.
        int_mode: Rendering of integers.
        int_format: Raw format string applied to integers instead of int_mode. The token
            "HB" selects hex bytes, anything else is used as a Python format spec.
        container_mode: Which config nested elements are rendered with.
        type_mode: When the TypeName(...) prefix is shown.
        formatting_mode: Global formatter selection override.
        custom_container_config: Config for nested elements when container_mode is USE_CUSTOM.

    Examples:
        >>> ReprConfig(float_mode="bit_field").float_mode
        <FloatMode.BIT_FIELD: 'bit_field'>
        >>> ReprConfig().merge(int_mode=IntMode.HEX).int_mode
        <IntMode.HEX: 'hex'>
    """

    float_mode: FloatMode = FloatMode.EXACT
    float_precision: int = -1
    float_format: str | None = None
    int_mode: IntMode = IntMode.DECIMAL
    int_format: str | None = None
    container_mode: ContainerMode = ContainerMode.USE_DEFAULT
    type_mode: TypeMode = TypeMode.HIDE_OBVIOUS
    formatting_mode: FormattingMode = FormattingMode.SMART
    custom_container_config: "ReprConfig | None" = None

    def __post_init__(self):
        """Validate and coerce fields"""
        object.__setattr__(self, "float_mode", _coerce_enum(FloatMode, self.float_mode, "float_mode"))
        object.__setattr__(self, "int_mode", _coerce_enum(IntMode, self.int_mode, "int_mode"))
        object.__setattr__(self, "container_mode",
                           _coerce_enum(ContainerMode, self.container_mode, "container_mode"))
        object.__setattr__(self, "type_mode", _coerce_enum(TypeMode, self.type_mode, "type_mode"))
        object.__setattr__(self, "formatting_mode",
                           _coerce_enum(FormattingMode, self.formatting_mode, "formatting_mode"))

        if isinstance(self.float_precision, bool) or not isinstance(self.float_precision, int):
            raise TypeError(f"float_precision must be int, but got {fmt_type(self.float_precision)}")
        if not isinstance(self.float_format, (str, type(None))):
            raise TypeError(f"float_format must be str | None, but got {fmt_type(self.float_format)}")
        if not isinstance(self.int_format, (str, type(None))):
            raise TypeError(f"int_format must be str | None, but got {fmt_type(self.int_format)}")
        if not isinstance(self.custom_container_config, (ReprConfig, type(None))):
            raise TypeError(f"custom_container_config must be ReprConfig | None, "
                            f"but got {fmt_type(self.custom_container_config)}")

    @classmethod
    def global_defaults(cls) -> Self:
        """
        Config used for top-level values when none is given.

        Floats are rendered exactly, integers in decimal, and nested elements switch back to
        these defaults.
        """
        return cls(
            float_mode=FloatMode.EXACT,
            float_precision=-1,
            int_mode=IntMode.DECIMAL,
            container_mode=ContainerMode.USE_DEFAULT,
            type_mode=TypeMode.HIDE_OBVIOUS,
            formatting_mode=FormattingMode.SMART,
        )

    @classmethod
    def container_defaults(cls) -> Self:
        """Simple formats for nested elements: general floats with precision 2, decimal integers."""
        return cls(
            float_mode=FloatMode.GENERAL,
            float_precision=2,
            int_mode=IntMode.DECIMAL,
            container_mode=ContainerMode.USE_SIMPLE,
            type_mode=TypeMode.HIDE_OBVIOUS,
        )

    def container_config(self) -> "ReprConfig":
        """
        Config for elements, keys and fields nested inside the value being rendered.

        Returns:
            ReprConfig selected by container_mode.

        Raises:
            ValueError: If container_mode is not a known ContainerMode.
        """
        if self.container_mode is ContainerMode.USE_PARENT:
            return self
        if self.container_mode is ContainerMode.USE_SIMPLE:
            return ReprConfig.container_defaults()
        if self.container_mode is ContainerMode.USE_CUSTOM:
            return self.custom_container_config or ReprConfig.container_defaults()
        if self.container_mode is ContainerMode.USE_DEFAULT:
            return ReprConfig.global_defaults()
        raise ValueError(f"unsupported container mode {fmt_value(self.container_mode)}")

    def merge(self,
              float_mode: FloatMode | str | UnsetType = UNSET,
              float_precision: int | UnsetType = UNSET,
              float_format: str | None | UnsetType = UNSET,
              int_mode: IntMode | str | UnsetType = UNSET,
              int_format: str | None | UnsetType = UNSET,
              container_mode: ContainerMode | str | UnsetType = UNSET,
              type_mode: TypeMode | str | UnsetType = UNSET,
              formatting_mode: FormattingMode | str | UnsetType = UNSET,
              custom_container_config: "ReprConfig | None | UnsetType" = UNSET,
              ) -> "ReprConfig":
        """
        Create a new ReprConfig instance with merged configuration options.

        Parameters not provided (UNSET) are inherited from the current instance.

        Returns:
            New ReprConfig instance with merged configuration.

        Raises:
            TypeError, ValueError: If an override fails validation.
        """
        return ReprConfig(
            float_mode=ifunset(float_mode, default=self.float_mode),
            float_precision=ifunset(float_precision, default=self.float_precision),
            float_format=ifunset(float_format, default=self.float_format),
            int_mode=ifunset(int_mode, default=self.int_mode),
            int_format=ifunset(int_format, default=self.int_format),
            container_mode=ifunset(container_mode, default=self.container_mode),
            type_mode=ifunset(type_mode, default=self.type_mode),
            formatting_mode=ifunset(formatting_mode, default=self.formatting_mode),
            custom_container_config=ifunset(custom_container_config, default=self.custom_container_config),
        )


# Private Methods ------------------------------------------------------------------------------------------------------

def _coerce_enum(enum_cls: type, value: Any, name: str):
    if isinstance(value, enum_cls):
        return value
    if not isinstance(value, str):
        raise TypeError(f"{name} must be {enum_cls.__name__} or str, but got {fmt_type(value)}")
    try:
        return enum_cls(value)
    except ValueError as e:
        allowed = ", ".join(repr(m.value) for m in enum_cls)
        raise ValueError(f"{name} expected one of {allowed} but found {fmt_value(value)}") from e
