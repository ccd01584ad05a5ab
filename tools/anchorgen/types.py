"""
Type system: IDL-to-Rust type mapping and sha256 sighash for instruction
discriminators.
"""

import hashlib
from typing import Dict

from .idl import ArrayType, DefinedType, IdlType, OptionType, Primitive, VecType
from .naming import to_snake_case

# IDL primitive name → Rust type name.
TYPE_MAP = {
    "bool":      "bool",
    "u8":        "u8",
    "i8":        "i8",
    "u16":       "u16",
    "i16":       "i16",
    "u32":       "u32",
    "i32":       "i32",
    "u64":       "u64",
    "i64":       "i64",
    "u128":      "u128",
    "i128":      "i128",
    "f32":       "f32",
    "f64":       "f64",
    "bytes":     "Vec<u8>",
    "string":    "String",
    "publicKey": "Pubkey",
}

DISCRIMINATOR_SIZE = 8


def rust_type(ty: IdlType, unresolved: Dict[str, str], referrer: str = "") -> str:
    """Map an IDL type expression to its Rust equivalent.

    A ``defined`` reference maps to the type name as-is and is recorded in
    ``unresolved`` (name -> first referrer) until the resolver emits it.
    """
    if isinstance(ty, Primitive):
        return TYPE_MAP[ty.kind]
    if isinstance(ty, OptionType):
        return f"Option<{rust_type(ty.inner, unresolved, referrer)}>"
    if isinstance(ty, VecType):
        return f"Vec<{rust_type(ty.inner, unresolved, referrer)}>"
    if isinstance(ty, ArrayType):
        return f"[{rust_type(ty.inner, unresolved, referrer)}; {ty.length}]"
    if isinstance(ty, DefinedType):
        unresolved.setdefault(ty.name, referrer)
        return ty.name
    raise TypeError(f"not an IDL type expression: {ty!r}")


def sighash(name: str, namespace: str = "global") -> bytes:
    """First 8 bytes of sha256("<namespace>:<snake_case name>").

    Used as the instruction discriminator in the generated table.
    """
    preimage = f"{namespace}:{to_snake_case(name)}"
    return hashlib.sha256(preimage.encode("utf-8")).digest()[:DISCRIMINATOR_SIZE]


def format_discriminator(disc: bytes) -> str:
    """Render discriminator bytes as a Rust ``[u8; 8]`` literal."""
    return "[" + ", ".join(str(b) for b in disc) + "]"
