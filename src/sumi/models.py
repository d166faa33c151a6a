"""Canonical Pydantic models shared across all sumi modules.

This is the single source of truth for data shapes in the project. The
models fall into three groups:

**ABI type models** -- the closed, recursive :data:`ParamType` union produced
by :func:`~sumi.parser.types.parse_type`:
    :class:`BoolType`, :class:`AddressType`, :class:`BytesType`,
    :class:`FixedBytesType`, :class:`StringType`, :class:`IntType`,
    :class:`UintType`, :class:`ArrayType`, :class:`FixedArrayType`, and
    :class:`TupleType`.

**Generator models** -- produced by :func:`~sumi.generator.build_module` and
consumed by the template renderer:
    :class:`Input`, :class:`Function`, and :class:`Module`.

**Configuration models** -- serialised as JSON in the user's config
directory: :class:`GeneratorConfig`, :class:`OutputConfig`, and
:class:`GlobalConfig`.

ABI type and generator models are frozen: they are built once in a single
pass and never mutated afterwards.
"""

from __future__ import annotations

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


# --- ABI types ---


class _AbiType(BaseModel):
    """Common base for the :data:`ParamType` variants."""

    model_config = ConfigDict(frozen=True)


class BoolType(_AbiType):
    """``bool``."""

    kind: Literal["bool"] = "bool"


class AddressType(_AbiType):
    """``address`` -- a 20-byte account address."""

    kind: Literal["address"] = "address"


class BytesType(_AbiType):
    """``bytes`` -- a dynamic byte sequence."""

    kind: Literal["bytes"] = "bytes"


class FixedBytesType(_AbiType):
    """``bytesN`` with ``1 <= N <= 32``."""

    kind: Literal["fixed_bytes"] = "fixed_bytes"
    size: int = Field(ge=1, le=32)


class StringType(_AbiType):
    """``string`` -- UTF-8 text."""

    kind: Literal["string"] = "string"


class IntType(_AbiType):
    """``intN`` -- a signed integer of ``bits`` width."""

    kind: Literal["int"] = "int"
    bits: int = Field(default=256, ge=8, le=256, multiple_of=8)


class UintType(_AbiType):
    """``uintN`` -- an unsigned integer of ``bits`` width."""

    kind: Literal["uint"] = "uint"
    bits: int = Field(default=256, ge=8, le=256, multiple_of=8)


class ArrayType(_AbiType):
    """``T[]`` -- a dynamic-length array of ``item``."""

    kind: Literal["array"] = "array"
    item: ParamType


class FixedArrayType(_AbiType):
    """``T[N]`` -- an array of exactly ``length`` elements."""

    kind: Literal["fixed_array"] = "fixed_array"
    item: ParamType
    length: int = Field(ge=1)


class TupleType(_AbiType):
    """``(T1,...,Tn)`` -- an ordered product of ``elements``."""

    kind: Literal["tuple"] = "tuple"
    elements: tuple[ParamType, ...] = Field(min_length=1)


ParamType = Annotated[
    Union[
        BoolType,
        AddressType,
        BytesType,
        FixedBytesType,
        StringType,
        IntType,
        UintType,
        ArrayType,
        FixedArrayType,
        TupleType,
    ],
    Field(discriminator="kind"),
]
"""One ABI value type. A closed union discriminated on ``kind``."""

ArrayType.model_rebuild()
FixedArrayType.model_rebuild()
TupleType.model_rebuild()


# --- Generator model ---


class Input(BaseModel):
    """A single function parameter.

    ``mapped_type`` is always derived from ``evm_type`` by
    :func:`~sumi.generator.type_mapper.map_type`; the builder is the only
    place that constructs inputs, so the two cannot diverge.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    evm_type: str = Field(description="Raw ABI type, exactly as in the interface")
    mapped_type: str = Field(description="Equivalent type in the generated ink! code")


class Function(BaseModel):
    """A wrapped, state-mutating, boolean-returning contract function."""

    model_config = ConfigDict(frozen=True)

    name: str
    inputs: tuple[Input, ...] = ()
    output: str = "bool"
    selector: str = Field(description="Canonical signature, e.g. transfer(address,uint256)")
    selector_hash: str = Field(description="First 4 bytes of keccak256(selector), lowercase hex")


class Module(BaseModel):
    """Root value consumed by the template renderer."""

    model_config = ConfigDict(frozen=True)

    name: str
    evm_identifier: str
    functions: tuple[Function, ...] = ()


# --- Configuration ---


class GeneratorConfig(BaseModel):
    """Defaults for ``sumi generate``.

    Both fields may be overridden by environment variables, the project-local
    ``sumi.json`` file, and CLI flags. See
    :func:`~sumi.config.resolve_generator_config`.
    """

    module_name: Optional[str] = Field(
        default=None, description="ink! module name to generate"
    )
    evm_id: str = Field(
        default="0x0F", description="EVM id of the runtime's XVM extension"
    )

    @field_validator("module_name")
    @classmethod
    def _check_module_name(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.isidentifier():
            raise ValueError(f"module name must be a valid identifier, got {value!r}")
        return value

    @field_validator("evm_id")
    @classmethod
    def _check_evm_id(cls, value: str) -> str:
        try:
            parsed = int(value, 0)
        except ValueError:
            raise ValueError(
                f"EVM id must be an integer literal such as 0x0F, got {value!r}"
            ) from None
        if not 0 <= parsed <= 255:
            raise ValueError(f"EVM id must fit in a u8, got {value!r}")
        return value


class OutputConfig(BaseModel):
    """Output formatting preferences."""

    format: Literal["auto", "json", "plain", "rich"] = Field(
        default="auto", description="Output format: auto, json, plain, rich"
    )


class GlobalConfig(BaseModel):
    """Top-level user configuration.

    Persisted as ``config.json`` in the config directory by
    :func:`~sumi.config.save_global_config`. Every field has a default, so
    an empty or missing file yields a valid configuration.
    """

    generator: GeneratorConfig = Field(default_factory=GeneratorConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
