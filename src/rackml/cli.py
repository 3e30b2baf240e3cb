"""Render a RackML file to an SVG or PNG rack diagram."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, Optional

from .config import (
    DEFAULT_MARGIN,
    DEFAULT_RACK_HEIGHT_UNITS,
    DEFAULT_RACK_SPACING,
    DEFAULT_RACK_WIDTH,
    DEFAULT_UNIT_HEIGHT,
)
from .export import PNG_FILENAME, SVG_FILENAME
from .generator import RackDiagramGenerator
from .parser import MarkupError

EXIT_OK = 0
EXIT_INPUT_ERROR = 1
EXIT_MARKUP_ERROR = 2
EXIT_WRITE_ERROR = 3


def parse_args(argv: Optional[Iterable[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="rackml", description=__doc__)
    parser.add_argument("input", help="Path to a RackML file (use '-' for STDIN).")
    parser.add_argument(
        "--output",
        "-o",
        help=(
            f"Output path (use '-' for SVG on stdout; default: {SVG_FILENAME} "
            f"or {PNG_FILENAME})."
        ),
    )
    parser.add_argument(
        "--format",
        "-f",
        choices=["svg", "png"],
        help="Output format (default: from the output suffix, else svg).",
    )
    parser.add_argument(
        "--scale", type=int, default=1, help="PNG resolution multiplier."
    )
    parser.add_argument("--unit-height", type=float, default=DEFAULT_UNIT_HEIGHT)
    parser.add_argument("--rack-width", type=float, default=DEFAULT_RACK_WIDTH)
    parser.add_argument("--rack-spacing", type=float, default=DEFAULT_RACK_SPACING)
    parser.add_argument("--margin", type=float, default=DEFAULT_MARGIN)
    parser.add_argument(
        "--default-rack-height",
        type=int,
        default=DEFAULT_RACK_HEIGHT_UNITS,
        help="Units used for racks without a usable height attribute.",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging."
    )
    return parser.parse_args(argv)


def _read_input(path: str) -> bytes:
    # Raw bytes, so the XML declaration decides the encoding
    if path == "-":
        return sys.stdin.buffer.read()
    return Path(path).read_bytes()


def _output_format(args: argparse.Namespace) -> str:
    if args.format:
        return args.format
    if args.output and args.output != "-" and Path(args.output).suffix.lower() == ".png":
        return "png"
    return "svg"


def main(argv: Optional[Iterable[str]] = None) -> int:
    args = parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    try:
        source = _read_input(args.input)
    except OSError as exc:
        sys.stderr.write(f"Failed to read input file: {exc}\n")
        return EXIT_INPUT_ERROR

    try:
        generator = RackDiagramGenerator(
            unit_height=args.unit_height,
            rack_width=args.rack_width,
            rack_spacing=args.rack_spacing,
            margin=args.margin,
            default_rack_height=args.default_rack_height,
        )
    except ValueError as exc:
        sys.stderr.write(f"Invalid layout settings: {exc}\n")
        return EXIT_INPUT_ERROR

    if args.scale < 1:
        sys.stderr.write("Invalid layout settings: scale must be at least 1\n")
        return EXIT_INPUT_ERROR

    output_format = _output_format(args)
    if output_format == "png" and args.output == "-":
        sys.stderr.write("PNG output cannot be written to stdout\n")
        return EXIT_INPUT_ERROR

    try:
        if output_format == "svg" and args.output == "-":
            sys.stdout.write(generator.to_svg(source) + "\n")
            return EXIT_OK
        if output_format == "png":
            destination = generator.save_png(
                source, args.output or PNG_FILENAME, scale=args.scale
            )
        else:
            destination = generator.save_svg(source, args.output or SVG_FILENAME)
    except MarkupError as exc:
        sys.stderr.write(f"{exc}\n")
        return EXIT_MARKUP_ERROR
    except OSError as exc:
        sys.stderr.write(f"Failed to write output: {exc}\n")
        return EXIT_WRITE_ERROR

    sys.stderr.write(f"{output_format.upper()} -> {destination.resolve()}\n")
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
