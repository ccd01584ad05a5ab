"""
Rust emitter: renders the program id, discriminator table and
struct/enum declarations.

Every function returns a list of source lines; the resolver joins them.
Field types go through ``rust_type`` so any ``defined`` reference lands
in the caller's unresolved mapping.
"""

import logging
from typing import Dict, List

from .idl import EnumVariant, Field, Instruction, TypeDef
from .naming import rust_ident, to_snake_case
from .types import format_discriminator, rust_type, sighash

logger = logging.getLogger(__name__)


def _rust_str(s: str) -> str:
    """Quote ``s`` as a Rust string literal."""
    return '"' + s.replace("\\", "\\\\").replace('"', '\\"') + '"'


def _derive(derives: List[str]) -> str:
    return f"#[derive({', '.join(derives)})]"


# ── Header ───────────────────────────────────────────────────────────

def emit_header(address: str, imports: List[str],
                program_id_name: str = "ID") -> List[str]:
    """``use`` declarations followed by the program id constant."""
    lines = [f"use {imp};" for imp in imports]
    lines.append("")
    lines.append(f"static {program_id_name}: &str = {_rust_str(address)};")
    lines.append("")
    return lines


def emit_discriminator_table(instructions: List[Instruction],
                             namespace: str = "global") -> List[str]:
    """``Discriminator`` newtype plus a constructor with one entry per instruction."""
    lines = [
        "pub struct Discriminator(pub HashMap<[u8; 8], String>);",
        "",
        "impl Discriminator {",
        "    pub fn new() -> Self {",
        "        let mut h = HashMap::new();",
    ]
    for ix in instructions:
        key = format_discriminator(sighash(ix.name, namespace))
        value = _rust_str(to_snake_case(ix.name))
        lines.append(f"        h.insert({key}, {value}.to_string());")
    lines.extend([
        "        Self(h)",
        "    }",
        "}",
        "",
    ])
    return lines


# ── Declarations ─────────────────────────────────────────────────────

def _field_names(fields: List[Field], owner: str) -> List[str]:
    """Snake-cased Rust field names, suffixed with _2, _3, ... on collision."""
    names: List[str] = []
    for f in fields:
        base = to_snake_case(f.name)
        name, n = base, 1
        while name in names:
            n += 1
            name = f"{base}_{n}"
        if name != base:
            logger.warning("field %r in %s collides with %r, renamed to %s",
                           f.name, owner, base, name)
        names.append(name)
    return [rust_ident(name) for name in names]


def _field_lines(fields: List[Field], unresolved: Dict[str, str],
                 owner: str) -> List[str]:
    return [f"{name}: {rust_type(f.type, unresolved, owner)}"
            for name, f in zip(_field_names(fields, owner), fields)]


def emit_struct(name: str, fields: List[Field], unresolved: Dict[str, str],
                derives: List[str]) -> List[str]:
    lines = [_derive(derives), f"pub struct {name} {{"]
    for line in _field_lines(fields, unresolved, name):
        lines.append(f"    pub {line},")
    lines.append("}")
    lines.append("")
    return lines


def _variant_line(v: EnumVariant, unresolved: Dict[str, str], owner: str) -> str:
    name = rust_ident(v.name)
    if v.is_unit:
        return f"    {name},"
    if v.is_tuple:
        types = ", ".join(rust_type(t, unresolved, owner) for t in v.fields)
        return f"    {name}({types}),"
    body = ", ".join(_field_lines(v.fields, unresolved, owner))
    return f"    {name} {{ {body} }},"


def emit_enum(name: str, variants: List[EnumVariant], unresolved: Dict[str, str],
              derives: List[str]) -> List[str]:
    """Enum declaration; payload variants render as Rust tuple/struct variants."""
    lines = [_derive(derives), f"pub enum {name} {{"]
    for v in variants:
        lines.append(_variant_line(v, unresolved, name))
    lines.append("}")
    lines.append("")
    return lines


def emit_typedef(typedef: TypeDef, unresolved: Dict[str, str],
                 derives: List[str]) -> List[str]:
    if typedef.kind == "enum":
        return emit_enum(typedef.name, typedef.variants, unresolved, derives)
    return emit_struct(typedef.name, typedef.fields, unresolved, derives)
