#!/usr/bin/env python3
"""
Mesh DOT export CLI

Usage modes:
- Default: compile a YAML scene and write its static structure as mesh.dot
- Cycles: write one cycle_NNN.dot snapshot per activation cycle in the scene
- Styling: merge YAML style overrides onto the default exporter config
- Utility: print to stdout instead of files, show version
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List

from mesh_core.compiler import compile_from_file

from .config import default_config, load_config
from .exporter import DotExporter


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Render a dataflow mesh scene as Graphviz DOT",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    # Utilities / meta
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument("-v", "--verbose", action="count", default=0, help="Increase verbosity (-v, -vv)")

    # Primary input
    p.add_argument("yaml", nargs="?", help="Path to YAML mesh scene")

    # Output
    p.add_argument("--out-dir", type=str, default=".", help="Directory for generated .dot files")
    p.add_argument("--stdout", action="store_true", help="Print DOT to stdout instead of writing files")
    p.add_argument("--cycles", action="store_true", help="Export one snapshot per activation cycle")
    p.add_argument("--config", type=str, default="", help="Optional YAML file with style overrides")

    return p.parse_args(argv)


def setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def main(argv: List[str] | None = None) -> int:
    from mesh_core import __version__

    args = parse_args(argv)
    setup_logging(args.verbose)

    if args.version:
        print(__version__)
        return 0

    if not args.yaml:
        print("error: missing YAML scene path", file=sys.stderr)
        return 2

    cfg = load_config(args.config) if args.config else default_config()
    exporter = DotExporter(cfg)

    logging.info("Compiling mesh from %s", args.yaml)
    mesh, cycles = compile_from_file(args.yaml)

    if args.cycles:
        documents = exporter.export_with_cycles(mesh, cycles)
        names = [f"cycle_{i:03d}.dot" for i in range(1, len(documents or []) + 1)]
    else:
        document = exporter.export(mesh)
        documents = [document] if document is not None else None
        names = ["mesh.dot"]

    if not documents:
        print("error: nothing to export (no components or no cycles)", file=sys.stderr)
        return 1

    if args.stdout:
        for doc in documents:
            sys.stdout.write(doc.decode("utf-8"))
        return 0

    out_dir = Path(args.out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    for name, doc in zip(names, documents):
        out_path = out_dir / name
        logging.info("Writing %s", out_path)
        out_path.write_bytes(doc)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
