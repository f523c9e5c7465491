"""CLI entrypoint for batch icon generation."""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from roundicon.config import ALLOWED_SIZES, DEFAULT_BORDER_WIDTH, DEFAULT_SIZE, IconOptions
from roundicon.errors import IconError
from roundicon.logging import configure_logging
from roundicon.services.color_service import split_color_argument
from roundicon.services.icon_service import IconService


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="roundicon",
        description="Create a circular icon with optional concentric colored rings.",
    )
    parser.add_argument(
        "-i",
        "--input",
        dest="input_path",
        default=None,
        help="Source image (JPEG, PNG, GIF, BMP, TIFF or ICO). Omit for a solid circle.",
    )
    parser.add_argument(
        "-c",
        "--colors",
        action="append",
        default=[],
        metavar="#RRGGBB",
        help="Ring colors from innermost outwards; repeat or separate with commas.",
    )
    parser.add_argument(
        "-b",
        "--border-width",
        type=int,
        default=DEFAULT_BORDER_WIDTH,
        help="Width of each ring in pixels (1-10, default %(default)s).",
    )
    parser.add_argument(
        "-s",
        "--size",
        type=int,
        choices=ALLOWED_SIZES,
        default=DEFAULT_SIZE,
        help="Canvas size in pixels (default %(default)s).",
    )
    parser.add_argument(
        "-o",
        "--output",
        dest="output_path",
        default=None,
        help="Output file or directory (defaults to the downloads folder).",
    )
    parser.add_argument(
        "--base64",
        dest="encode",
        action="store_true",
        help="Print a data:image/png;base64 string instead of only writing a file.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress everything except errors.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Increase log verbosity for troubleshooting.",
    )
    return parser


def _options_from_args(args: argparse.Namespace) -> IconOptions:
    colors: List[str] = []
    for chunk in args.colors:
        colors.extend(split_color_argument(chunk))
    return IconOptions(
        input_path=args.input_path,
        colors=tuple(colors),
        border_width=args.border_width,
        size=args.size,
        output_path=args.output_path,
        encode=args.encode,
        quiet=args.quiet,
    )


def main(argv: Optional[List[str]] = None, service: Optional[IconService] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logger = configure_logging(verbose=args.verbose, quiet=args.quiet)

    service = service or IconService()
    try:
        result = service.generate(_options_from_args(args))
    except IconError as exc:
        logger.error("%s", exc)
        return 1

    if result.data_uri is not None:
        print(result.data_uri)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
