#!/usr/bin/env python
"""
GeoViz - VLF and resistivity survey plotting data.

Main entry point for the command line driver. Reads survey text from a
file, stdin or the built-in sample generator, runs one plot cycle and
prints the resulting series and stats.

Usage
-----
    uv run python main.py data.txt --mode resistivity --array-type wenner

or:
    python main.py --sample --mode vlf --export-csv out.csv
"""

import argparse
import sys
from dataclasses import replace
from pathlib import Path


def configure_logging(level: str = "INFO") -> None:
    """Route loguru output to stderr with the application format."""
    from loguru import logger

    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | "
               "<level>{level: <8}</level> | "
               "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
               "<level>{message}</level>",
        level=level.upper(),
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="GeoViz survey data transform")
    parser.add_argument(
        "input", nargs="?", default=None,
        help="Delimited survey file, '-' for stdin",
    )
    parser.add_argument("--sample", action="store_true", help="Use generated sample data")
    parser.add_argument("--seed", type=int, default=None, help="Sample generator seed")
    parser.add_argument("--config", type=Path, default=None, help="JSON config file")
    parser.add_argument("--save-config", type=Path, default=None, help="Write effective config")
    parser.add_argument("--mode", choices=["vlf", "resistivity"], default=None)
    parser.add_argument("--array-type", choices=["wenner", "other"], default=None)
    parser.add_argument("--theme", type=int, default=None, help="Theme index")
    parser.add_argument("--title", default=None, help="Custom chart title")
    parser.add_argument("--dark", action="store_true", default=None, help="Dark mode colours")
    parser.add_argument(
        "--no-kh", dest="show_kh", action="store_false", default=None,
        help="Disable the KH filter series",
    )
    parser.add_argument(
        "--no-annotation", action="store_true",
        help="Renderer has no secondary axis support",
    )
    parser.add_argument("--export-csv", type=Path, default=None, help="Write series as CSV")
    parser.add_argument("--log-level", default="INFO", help="Log level")
    return parser


def _effective_config(args: argparse.Namespace):
    from geoviz.config import PlotConfig, load_config

    config = load_config(args.config) if args.config else PlotConfig()
    overrides = {
        "mode": args.mode,
        "array_type": args.array_type,
        "theme_index": args.theme,
        "custom_title": args.title,
        "dark_mode": args.dark,
        "show_derivative_filter": args.show_kh,
    }
    overrides = {key: value for key, value in overrides.items() if value is not None}
    return replace(config, **overrides) if overrides else config


def _read_input(args: argparse.Namespace, mode) -> str:
    from geoviz.utils import generate_sample, read_survey_file

    if args.sample:
        return generate_sample(mode, seed=args.seed)
    if args.input is None:
        raise ValueError("no input given, pass a file path, '-' or --sample")
    if args.input == "-":
        return sys.stdin.read()
    return read_survey_file(args.input)


def print_request(request) -> None:
    """Print a plain text summary of one render request."""
    print(request.title)
    print(f"  x: {request.x_axis.label} [{request.x_axis.scale}]")
    print(f"  y: {request.y_axis.label} [{request.y_axis.scale}]")
    for item in request.series:
        print(f"  {item.label}: {len(item)} point(s), color {item.style_hint.get('color')}")
    for name, value in request.stats.items():
        print(f"  {name}: {value}")
    for message in request.warnings:
        print(f"  warning: {message}")


def main(argv=None) -> int:
    """
    Main entry point for the GeoViz command line driver.

    Returns
    -------
    int
        Exit code (0 for success, non-zero for error).
    """
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    from loguru import logger
    from geoviz.config import save_config
    from geoviz.core.errors import GeoVizError
    from geoviz.core.session import PlotSession
    from geoviz.utils import export_render_request_csv

    try:
        config = _effective_config(args)
        text = _read_input(args, config.mode)
        session = PlotSession(config, annotation_available=not args.no_annotation)
        request = session.plot(text)
    except (GeoVizError, ValueError, OSError) as e:
        logger.error(str(e))
        return 1

    if request is None:
        logger.error("Input is empty")
        return 1

    print_request(request)
    if args.export_csv:
        export_render_request_csv(request, args.export_csv)
    if args.save_config:
        save_config(session.config, args.save_config)
    return 0


if __name__ == "__main__":
    sys.exit(main())
