"""
anchorgen: Anchor IDL to Rust type-declaration generator.

Reads an IDL JSON document (instructions, accounts, custom types) and
emits borsh-serializable Rust structs/enums for the reachable types plus
a discriminator table mapping 8-byte instruction sighashes to names.
"""
