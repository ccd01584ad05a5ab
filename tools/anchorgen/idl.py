"""
IDL model: structural parser for Anchor IDL JSON documents.

Decodes the JSON document into ``Idl`` dataclasses, validating only what
the generator needs (names, type expressions, definition bodies and the
program address in ``metadata``).
"""

import json
from dataclasses import dataclass, field
from typing import List, Optional, Union

from .naming import IDENT_RE


class ValidationError(Exception):
    """Raised when an IDL document is structurally invalid."""
    pass


# IDL primitive type names as they appear in the JSON document.
PRIMITIVES = (
    "bool",
    "u8", "i8", "u16", "i16", "u32", "i32", "u64", "i64", "u128", "i128",
    "f32", "f64",
    "bytes", "string", "publicKey",
)

# Deepest option/vec/array nesting accepted in one type expression.
MAX_TYPE_DEPTH = 64


# ── Type expressions ─────────────────────────────────────────────────

@dataclass(frozen=True)
class Primitive:
    kind: str


@dataclass(frozen=True)
class OptionType:
    inner: 'IdlType'


@dataclass(frozen=True)
class VecType:
    inner: 'IdlType'


@dataclass(frozen=True)
class ArrayType:
    inner: 'IdlType'
    length: int


@dataclass(frozen=True)
class DefinedType:
    name: str


IdlType = Union[Primitive, OptionType, VecType, ArrayType, DefinedType]


# ── Definitions ──────────────────────────────────────────────────────

@dataclass
class Field:
    name: str
    type: IdlType


@dataclass
class EnumVariant:
    name: str
    # None for unit variants, List[Field] for named payloads,
    # List[IdlType] for tuple payloads.
    fields: Optional[list] = None

    @property
    def is_unit(self) -> bool:
        return not self.fields

    @property
    def is_tuple(self) -> bool:
        return bool(self.fields) and not isinstance(self.fields[0], Field)


@dataclass
class TypeDef:
    name: str
    kind: str   # "struct" or "enum"
    fields: List[Field] = field(default_factory=list)
    variants: List[EnumVariant] = field(default_factory=list)


@dataclass
class Instruction:
    name: str
    args: List[Field] = field(default_factory=list)


@dataclass
class Idl:
    address: str
    name: str = ""
    version: str = ""
    instructions: List[Instruction] = field(default_factory=list)
    accounts: List[TypeDef] = field(default_factory=list)
    types: List[TypeDef] = field(default_factory=list)


# ── Parsing ──────────────────────────────────────────────────────────

def _require(data: dict, key: str, context: str) -> object:
    """Require a key in a dict, raising ValidationError if missing."""
    if not isinstance(data, dict):
        raise ValidationError(f"{context} must be an object")
    if key not in data or data[key] is None:
        raise ValidationError(f"Missing required field '{key}' in {context}")
    return data[key]


def _require_list(data: dict, key: str, context: str, default=None) -> list:
    value = data.get(key)
    if value is None:
        if default is None:
            raise ValidationError(f"Missing required field '{key}' in {context}")
        return default
    if not isinstance(value, list):
        raise ValidationError(f"'{key}' in {context} must be a list")
    return value


def _name(data: dict, context: str) -> str:
    name = _require(data, "name", context)
    if not isinstance(name, str) or not name:
        raise ValidationError(f"'name' in {context} must be a non-empty string")
    if not IDENT_RE.match(name):
        raise ValidationError(
            f"'name' in {context} must be an ASCII identifier, got {name!r}")
    return name


def parse_type(raw, context: str = "type", depth: int = 0) -> IdlType:
    """Parse one IDL type expression.

    Accepts a primitive name (``"u64"``) or a single-key object:
    ``{"option": T}``, ``{"vec": T}``, ``{"array": [T, n]}`` or
    ``{"defined": "Name"}``.
    """
    if depth > MAX_TYPE_DEPTH:
        raise ValidationError(
            f"Type expression in {context} nested deeper than {MAX_TYPE_DEPTH}")

    if isinstance(raw, str):
        if raw not in PRIMITIVES:
            raise ValidationError(f"Unknown primitive type {raw!r} in {context}")
        return Primitive(raw)

    if not isinstance(raw, dict) or len(raw) != 1:
        raise ValidationError(f"Malformed type expression {raw!r} in {context}")

    (key, value), = raw.items()
    if key == "option":
        return OptionType(parse_type(value, context, depth + 1))
    if key == "vec":
        return VecType(parse_type(value, context, depth + 1))
    if key == "array":
        if not isinstance(value, list) or len(value) != 2:
            raise ValidationError(
                f"'array' in {context} must be [type, length], got {value!r}")
        length = value[1]
        if isinstance(length, bool) or not isinstance(length, int) or length < 0:
            raise ValidationError(
                f"Array length in {context} must be a non-negative integer, "
                f"got {length!r}")
        return ArrayType(parse_type(value[0], context, depth + 1), length)
    if key == "defined":
        if not isinstance(value, str) or not IDENT_RE.match(value):
            raise ValidationError(
                f"'defined' in {context} must name a type, got {value!r}")
        return DefinedType(value)

    raise ValidationError(f"Unknown type kind {key!r} in {context}")


def _parse_field(raw: dict, context: str) -> Field:
    name = _name(raw, context)
    ctx = f"{context} field '{name}'"
    return Field(name=name, type=parse_type(_require(raw, "type", ctx), ctx))


def _parse_variant(raw: dict, context: str) -> EnumVariant:
    name = _name(raw, context)
    ctx = f"{context} variant '{name}'"
    raw_fields = raw.get("fields")
    if not raw_fields:
        return EnumVariant(name=name)
    if not isinstance(raw_fields, list):
        raise ValidationError(f"'fields' in {ctx} must be a list")

    # Named payloads are objects with a "name"; everything else is a tuple
    # of bare type expressions.
    if all(isinstance(f, dict) and "name" in f for f in raw_fields):
        return EnumVariant(name=name,
                           fields=[_parse_field(f, ctx) for f in raw_fields])
    return EnumVariant(name=name,
                       fields=[parse_type(t, ctx) for t in raw_fields])


def _parse_typedef(raw: dict, section: str) -> TypeDef:
    name = _name(raw, section)
    ctx = f"{section} '{name}'"
    body = _require(raw, "type", ctx)
    kind = _require(body, "kind", ctx)

    if kind == "struct":
        fields = _require_list(body, "fields", ctx, default=[])
        return TypeDef(name=name, kind="struct",
                       fields=[_parse_field(f, ctx) for f in fields])
    if kind == "enum":
        variants = _require_list(body, "variants", ctx, default=[])
        return TypeDef(name=name, kind="enum",
                       variants=[_parse_variant(v, ctx) for v in variants])

    raise ValidationError(
        f"{ctx} has unsupported kind {kind!r} (expected 'struct' or 'enum')")


def _parse_instruction(raw: dict) -> Instruction:
    name = _name(raw, "instructions")
    ctx = f"instruction '{name}'"
    args = _require_list(raw, "args", ctx, default=[])
    return Instruction(name=name, args=[_parse_field(a, ctx) for a in args])


def parse_idl(json_str: str) -> Idl:
    """Parse an IDL JSON string into an Idl.

    Raises:
        ValidationError: If the document is not valid JSON, lacks
            ``metadata.address``, or has malformed instructions/types.
    """
    if not json_str or not json_str.strip():
        raise ValidationError("Empty IDL input")

    try:
        return _parse_document(json_str)
    except RecursionError:
        raise ValidationError("IDL nesting too deep")


def _parse_document(json_str: str) -> Idl:
    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON: {e}")

    if not isinstance(data, dict):
        raise ValidationError("IDL root must be an object")

    metadata = data.get("metadata")
    if metadata is None:
        raise ValidationError("metadata cannot be None!")
    if not isinstance(metadata, dict) or "address" not in metadata:
        raise ValidationError("metadata should contain 'address'")
    address = metadata["address"]
    if not isinstance(address, str):
        raise ValidationError("address in metadata should be string format")

    instructions = _require_list(data, "instructions", "IDL")
    accounts = _require_list(data, "accounts", "IDL", default=[])
    types = _require_list(data, "types", "IDL", default=[])

    return Idl(
        address=address,
        name=str(data.get("name", "")),
        version=str(data.get("version", "")),
        instructions=[_parse_instruction(ix) for ix in instructions],
        accounts=[_parse_typedef(t, "accounts") for t in accounts],
        types=[_parse_typedef(t, "types") for t in types],
    )


def load_idl(path: str) -> Idl:
    """Read and parse an IDL JSON file."""
    with open(path, encoding="utf-8") as f:
        try:
            text = f.read()
        except UnicodeDecodeError as e:
            raise ValidationError(f"IDL is not valid UTF-8: {e}")
    return parse_idl(text)
