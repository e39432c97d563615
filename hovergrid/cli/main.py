"""hovergrid: run the pointer-reactive grid in the terminal.

Usage: hovergrid [--config PATH] [--cell-size N] [--no-highlights] [--log-level LEVEL]
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from pydantic import ValidationError

from hovergrid.config.loader import load_hovergrid_config
from hovergrid.config.schema import HovergridConfig
from hovergrid.core.geometry import static_cell_size_source
from hovergrid.logging_config import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="hovergrid", description="Pointer-reactive background grid.")
    parser.add_argument("--config", type=Path, help="Path to hovergrid.yml (default: $HOVERGRID_CONFIG_PATH)")
    parser.add_argument(
        "--cell-size",
        help="Cell edge in terminal columns, e.g. 8 or 8px (takes precedence over $HOVERGRID_CELL_SIZE)",
    )
    parser.add_argument("--no-highlights", action="store_true", help="Start with random highlights off")
    parser.add_argument("--log-level", help="Override HOVERGRID_LOG_LEVEL")
    return parser


def resolve_config(args: argparse.Namespace) -> HovergridConfig:
    """Load the config file and apply command line overrides."""
    loaded = load_hovergrid_config(args.config)
    overrides: dict[str, dict[str, object]] = {}
    if args.cell_size is not None:
        overrides["grid"] = {"cell_size": args.cell_size}
    if args.no_highlights:
        overrides["highlights"] = {"enabled": False}
    if not overrides:
        return loaded

    merged = loaded.model_dump()
    for section, values in overrides.items():
        merged[section].update(values)
    return HovergridConfig.model_validate(merged)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        grid_config = resolve_config(args)
    except ValidationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    # Imported late so --help stays fast
    from hovergrid.cli.tui.app import GridApp

    logger.info("Starting hovergrid (cell size %s)", grid_config.grid.cell_size)
    # An explicit flag wins over HOVERGRID_CELL_SIZE
    cell_size_source = static_cell_size_source(grid_config.grid.cell_size) if args.cell_size is not None else None
    GridApp(grid_config, cell_size_source=cell_size_source).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
