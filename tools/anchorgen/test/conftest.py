"""Shared fixtures for anchorgen tests."""

import copy
import json

import pytest
import sys
import os

# Add the project root to sys.path so 'tools.anchorgen' is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "..", ".."))

from tools.anchorgen.idl import parse_idl


POOL_ADDRESS = "PooL1111111111111111111111111111111111111111"


POOL_IDL = {
    "version": "0.1.0",
    "name": "pool",
    "instructions": [
        {
            "name": "initializePool",
            "accounts": [{"name": "pool", "isMut": True, "isSigner": False}],
            "args": [{"name": "authority", "type": "publicKey"}],
        },
        {
            "name": "deposit",
            "accounts": [],
            "args": [
                {"name": "amount", "type": "u64"},
                {"name": "params", "type": {"defined": "DepositParams"}},
            ],
        },
        {
            "name": "closePool",
            "accounts": [],
            "args": [],
        },
    ],
    "accounts": [
        {
            "name": "DepositParams",
            "type": {
                "kind": "struct",
                "fields": [
                    {"name": "minOut", "type": "u64"},
                    {"name": "memo", "type": {"option": "string"}},
                ],
            },
        },
        {
            "name": "Unused",
            "type": {"kind": "struct", "fields": [{"name": "x", "type": "u8"}]},
        },
    ],
    "types": [],
    "metadata": {"address": POOL_ADDRESS},
}


# Auxiliary types reference each other in both directions: Outer → Later is
# found by the single pass, Outer → Earlier is not.
CHAIN_IDL = {
    "version": "0.1.0",
    "name": "chain",
    "instructions": [
        {
            "name": "configure",
            "accounts": [],
            "args": [{"name": "cfg", "type": {"defined": "Outer"}}],
        },
    ],
    "accounts": [],
    "types": [
        {
            "name": "Earlier",
            "type": {"kind": "struct", "fields": [{"name": "v", "type": "u8"}]},
        },
        {
            "name": "Outer",
            "type": {
                "kind": "struct",
                "fields": [
                    {"name": "earlier", "type": {"defined": "Earlier"}},
                    {"name": "later", "type": {"vec": {"defined": "Later"}}},
                ],
            },
        },
        {
            "name": "Later",
            "type": {
                "kind": "enum",
                "variants": [{"name": "On"}, {"name": "Off"}],
            },
        },
    ],
    "metadata": {"address": "Chain111111111111111111111111111111111111111"},
}


@pytest.fixture
def pool_json():
    """Pool IDL as a JSON string."""
    return json.dumps(POOL_IDL)


@pytest.fixture
def pool_idl():
    """Parsed pool IDL."""
    return parse_idl(json.dumps(POOL_IDL))


@pytest.fixture
def chain_idl():
    """Parsed IDL whose auxiliary types reference earlier and later types."""
    return parse_idl(json.dumps(CHAIN_IDL))


@pytest.fixture
def make_idl():
    """Build a parsed IDL from a partial document (address filled in)."""
    def _make(**sections):
        doc = {"instructions": [], "metadata": {"address": POOL_ADDRESS}}
        doc.update(sections)
        return parse_idl(json.dumps(doc))
    return _make


@pytest.fixture
def pool_doc():
    """Pool IDL as a fresh dict."""
    return copy.deepcopy(POOL_IDL)


@pytest.fixture
def chain_doc():
    """Chain IDL as a fresh dict."""
    return copy.deepcopy(CHAIN_IDL)
