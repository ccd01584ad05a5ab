"""
Identifier case conversion and Rust identifier sanitizing.
"""

import re
from typing import List

# Acronym run before a capitalized word, capitalized/lower word, upper run,
# digit-led word. Digits continue the current word.
_WORD_RE = re.compile(
    r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z][a-z0-9]*|[A-Z]+[0-9]*|[0-9][a-z0-9]*")

# ASCII identifiers with at least one letter; anything else cannot be
# case-converted into a Rust name.
IDENT_RE = re.compile(r"^_*[A-Za-z][A-Za-z0-9_]*$")

RUST_KEYWORDS = {
    "as", "break", "const", "continue", "else", "enum", "extern", "false",
    "fn", "for", "if", "impl", "in", "let", "loop", "match", "mod", "move",
    "mut", "pub", "ref", "return", "static", "struct", "trait", "true",
    "type", "unsafe", "use", "where", "while", "async", "await", "dyn",
    "abstract", "become", "box", "do", "final", "macro", "override", "priv",
    "typeof", "unsized", "virtual", "yield", "try",
}

# Keywords that cannot be written as raw identifiers.
NON_RAW_KEYWORDS = {"self", "Self", "super", "crate"}


def split_words(name: str) -> List[str]:
    """Split an identifier into its words, e.g. 'initPoolV2' -> ['init', 'Pool', 'V2']."""
    return _WORD_RE.findall(name)


def to_snake_case(name: str) -> str:
    return "_".join(w.lower() for w in split_words(name))


def to_upper_camel_case(name: str) -> str:
    return "".join(w[0].upper() + w[1:].lower() for w in split_words(name))


def rust_ident(name: str) -> str:
    """Make ``name`` usable as a Rust field/variant identifier."""
    if name in NON_RAW_KEYWORDS:
        return name + "_"
    if name in RUST_KEYWORDS:
        return "r#" + name
    return name
