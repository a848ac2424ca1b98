# src/tetris_well/cli/simulate.py
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Iterable, Optional, Sequence, TextIO

import yaml
from omegaconf.errors import OmegaConfBaseException

from tetris_well.config.io import load_run_config
from tetris_well.config.run import RunConfig
from tetris_well.game.core.errors import WellError
from tetris_well.game.core.pieceset import ShapeCatalog, default_catalog
from tetris_well.game.simulate import simulate
from tetris_well.io.parsing import parse_line
from tetris_well.utils.logging import setup_logger


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(
        description=(
            "Drop tetromino sequences into a 10-wide well and print the final stack height.\n\n"
            "Each input line is one independent sequence of tokens like 'Q0,I2,T5':\n"
            "  shape letter in {Q,Z,S,T,I,L,J} followed by the column of its bottom-left cell.\n"
            "One height is printed per input line, in input order.\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    ap.add_argument("input", nargs="?", default="-", help="input file (default: stdin)")
    ap.add_argument("--config", "-c", type=str, default=None, help="run config YAML")
    ap.add_argument("--delimiter", type=str, default=None, help="token separator (default ',')")
    ap.add_argument("--show-grid", action="store_true", default=None, help="log the bottom of each final well")
    ap.add_argument("--log-level", type=str, default=None, help="debug|info|warning|error")
    ap.add_argument("--no-rich", action="store_true", help="disable Rich logging")
    return ap.parse_args(argv)


def resolve_config(args: argparse.Namespace) -> RunConfig:
    """Config file (if any) first, explicit CLI flags on top."""
    base = load_run_config(Path(args.config)) if args.config else RunConfig()

    overrides: dict[str, Any] = {}
    if args.delimiter is not None:
        overrides["delimiter"] = args.delimiter
    if args.show_grid is not None:
        overrides["show_grid"] = bool(args.show_grid)
    if args.log_level is not None:
        overrides["log_level"] = args.log_level
    if bool(args.no_rich):
        overrides["use_rich"] = False

    if not overrides:
        return base
    return RunConfig.model_validate({**base.model_dump(), **overrides})


def load_catalog(cfg: RunConfig) -> ShapeCatalog:
    if cfg.pieces is None:
        return default_catalog()
    return ShapeCatalog.from_yaml(Path(cfg.pieces))


def run_lines(
        lines: Iterable[str],
        *,
        cfg: RunConfig,
        catalog: ShapeCatalog,
        logger: logging.Logger,
        out: TextIO,
) -> int:
    """
    Simulate every line and write one height per line to `out`.

    Stops at the first failing line: the error is logged and 2 is returned.
    """
    n = 0
    for lineno, raw in enumerate(lines, start=1):
        line = raw.rstrip("\r\n")
        try:
            placements = parse_line(line, delimiter=cfg.delimiter)
            result = simulate(placements, catalog=catalog)
        except WellError as e:
            logger.error("line %d: %s (input=%r)", lineno, e, line)
            return 2

        print(result.height, file=out)
        n += 1

        logger.debug(
            "line %d: pieces=%d height=%d lines_cleared=%d",
            lineno,
            result.pieces,
            result.height,
            result.lines_cleared,
        )
        if cfg.show_grid:
            logger.info("line %d:\n%s", lineno, result.well.render())

    logger.debug("processed %d line(s)", n)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    # flags only; replaced once the config file is known
    logger = setup_logger(name="tetris_well", use_rich=(not bool(args.no_rich)), level=str(args.log_level or "info"))

    try:
        cfg = resolve_config(args)
    except (OSError, ValueError, TypeError, yaml.YAMLError, OmegaConfBaseException) as e:
        logger.error("invalid config %s: %s", args.config, e)
        return 2
    logger = setup_logger(name="tetris_well", use_rich=cfg.use_rich, level=cfg.log_level)

    try:
        catalog = load_catalog(cfg)
    except (OSError, ValueError, TypeError, yaml.YAMLError, WellError) as e:
        logger.error("invalid piece set %s: %s", cfg.pieces, e)
        return 2

    if args.input == "-":
        return run_lines(sys.stdin, cfg=cfg, catalog=catalog, logger=logger, out=sys.stdout)

    path = Path(args.input)
    if not path.is_file():
        logger.error("input file not found: %s", path)
        return 2
    with path.open("r", encoding="utf-8") as f:
        return run_lines(f, cfg=cfg, catalog=catalog, logger=logger, out=sys.stdout)


if __name__ == "__main__":
    raise SystemExit(main())
