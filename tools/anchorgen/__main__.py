"""
CLI entry point for anchorgen.

Usage:
    python3 -m tools.anchorgen                          # every *.json in . → src/
    python3 -m tools.anchorgen idl/pool.json --outdir gen/
    python3 -m tools.anchorgen idl/ --config anchorgen.yaml -v

Finding no IDL files is not an error. A malformed IDL or config aborts the
run with exit status 1.
"""

import argparse
import logging
import os
import sys
from typing import List

from .config import ConfigError, GeneratorConfig, load_config
from .idl import ValidationError, load_idl
from .resolver import generate


def find_idl_json(root: str) -> List[str]:
    """Return the ``*.json`` files directly inside ``root``, sorted."""
    paths = []
    for entry in sorted(os.listdir(root)):
        path = os.path.join(root, entry)
        if os.path.isfile(path) and entry.endswith(".json"):
            paths.append(path)
    return paths


def collect_inputs(inputs: List[str]) -> List[str]:
    paths = []
    for item in inputs:
        if os.path.isdir(item):
            paths.extend(find_idl_json(item))
        else:
            paths.append(item)
    return paths


def run(paths: List[str], config: GeneratorConfig) -> int:
    """Generate one .rs file per IDL path. Returns the number of unresolved names."""
    os.makedirs(config.outdir, exist_ok=True)
    total_unresolved = 0

    for idl_path in paths:
        # Parse and render fully before touching the output file.
        try:
            idl = load_idl(idl_path)
        except ValidationError as e:
            raise ValidationError(f"{idl_path}: {e}") from e
        result = generate(idl, config)

        stem = os.path.splitext(os.path.basename(idl_path))[0]
        path = os.path.join(config.outdir, f"{stem}.rs")
        with open(path, "w") as f:
            f.write(result.code)
        print(f"  wrote {path}")
        total_unresolved += len(result.unresolved)

    return total_unresolved


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Anchor IDL to Rust type-declaration generator")
    parser.add_argument("inputs", nargs="*", default=["."],
                        help="IDL .json files or directories (default: .)")
    parser.add_argument("--outdir", help="Output directory (default: src)")
    parser.add_argument("--config", help="YAML generator config")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log resolution details")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    try:
        config = load_config(args.config) if args.config else GeneratorConfig()
        if args.outdir:
            config.outdir = args.outdir

        paths = collect_inputs(args.inputs)
        if not paths:
            print("No IDL files found, nothing to do")
            return 0

        unresolved = run(paths, config)
    except (ValidationError, ConfigError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"\nGenerated {len(paths)} file(s) in '{config.outdir}'"
          + (f" ({unresolved} unresolved type(s))" if unresolved else ""))
    return 0


if __name__ == "__main__":
    sys.exit(main())
