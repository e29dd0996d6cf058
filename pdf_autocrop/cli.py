"""Command-line interfaces for PDF auto-cropping."""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

CROP_PREFIX = "pdf-crop"
CROPPER_PREFIX = "pdf-cropper"
TIMESTAMP_FORMAT = "%Y-%m-%d-%H-%M-%S"


def default_output_path(input_path: str, prefix: str, now: datetime | None = None) -> Path:
    """Timestamped output file next to the input, e.g. pdf-crop-2024-01-31-12-00-00.pdf."""
    now = now or datetime.now()
    return Path(input_path).with_name(f"{prefix}-{now.strftime(TIMESTAMP_FORMAT)}.pdf")


def parse_crop_config(config_arg: str | None):
    """Parse crop config from CLI argument.

    Args:
        config_arg: Either inline JSON string or path to .json file

    Returns:
        CropConfig object (defaults if not provided)
    """
    from .models import CropConfig

    if not config_arg:
        return CropConfig()

    # Check if it looks like a file path
    config_path = Path(config_arg)
    if config_path.exists() and config_path.suffix == ".json":
        return CropConfig.from_file(config_path)

    # Try parsing as inline JSON
    try:
        return CropConfig.from_json(config_arg)
    except ValueError as e:
        raise ValueError(f"Invalid --config: {e}") from e


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.WARNING if quiet else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def add_common_arguments(parser: argparse.ArgumentParser) -> None:
    """Add options shared by both command surfaces."""
    parser.add_argument("-o", "--output", help="Output PDF file")
    parser.add_argument(
        "--config",
        help="JSON crop configuration (inline JSON string or path to .json file). "
        "Margin options override the margins it contains.",
    )
    parser.add_argument(
        "--debug-dir",
        help="Directory to save debug images of the detected content boxes",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Log every page")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only log warnings and errors")


def run_crop(input_path: str, output_path: str | Path, config, debug_dir: str | None = None) -> int:
    """Crop a file and return the process exit status."""
    from .cropping import crop_file
    from .exceptions import AutoCropError

    visualizer = None
    if debug_dir:
        from .visualizer import DebugVisualizer

        visualizer = DebugVisualizer(debug_dir)

    try:
        crop_file(input_path, output_path, config, visualizer=visualizer)
    except AutoCropError as e:
        logging.getLogger(__name__).debug("Crop failed: %s", e)
        sys.exit(e.user_message)
    return 0


def build_crop_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pdf-crop",
        description="Crop the blank margins of every page of a PDF",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  pdf-crop paper.pdf                      Crop to pdf-crop-<timestamp>.pdf
  pdf-crop paper.pdf -o out.pdf -t 10 -b 10   Keep 10 units above and below
  pdf-crop paper.pdf --in-place           Overwrite paper.pdf
""",
    )
    parser.add_argument("file", nargs="?", help="Input PDF file")
    parser.add_argument("-t", "--top-margin", type=int, help="Top margin")
    parser.add_argument("-l", "--left-margin", type=int, help="Left margin")
    parser.add_argument("-b", "--bottom-margin", type=int, help="Bottom margin")
    parser.add_argument("-r", "--right-margin", type=int, help="Right margin")
    parser.add_argument(
        "-i", "--in-place", action="store_true", help="Save the cropped file in place"
    )
    add_common_arguments(parser)
    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point for ``pdf-crop``."""
    from .models import Margins

    parser = build_crop_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose, args.quiet)

    if not args.file:
        parser.error("Please input a PDF file.")

    try:
        config = parse_crop_config(args.config)
        base = config.margins
        margins = Margins(
            top=base.top if args.top_margin is None else args.top_margin,
            left=base.left if args.left_margin is None else args.left_margin,
            bottom=base.bottom if args.bottom_margin is None else args.bottom_margin,
            right=base.right if args.right_margin is None else args.right_margin,
        )
    except ValueError as e:
        parser.error(str(e))
    config = config.with_margins(margins)

    if args.output:
        output_path = args.output
    elif args.in_place:
        output_path = args.file
    else:
        output_path = default_output_path(args.file, CROP_PREFIX)

    return run_crop(args.file, output_path, config, args.debug_dir)


def build_cropper_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pdf-cropper",
        description="Crop the blank margins of every page of a PDF",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  pdf-cropper -i paper.pdf                Crop to pdf-cropper-<timestamp>.pdf
  pdf-cropper -i paper.pdf -m 10 5        Top margin 10, left margin 5
""",
    )
    parser.add_argument("-i", "--input", help="Input PDF file")
    parser.add_argument(
        "-m",
        "--margins",
        type=int,
        nargs="*",
        metavar="N",
        help="Crop margins (top, left, bottom, right); missing values are 0",
    )
    add_common_arguments(parser)
    return parser


def main_cropper(argv: list[str] | None = None) -> int:
    """Entry point for ``pdf-cropper``."""
    from .models import Margins

    parser = build_cropper_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose, args.quiet)

    if not args.input:
        parser.error("Please input a PDF file.")

    try:
        config = parse_crop_config(args.config)
        if args.margins:
            config = config.with_margins(Margins.from_sequence(args.margins))
    except ValueError as e:
        parser.error(str(e))

    output_path = args.output or default_output_path(args.input, CROPPER_PREFIX)
    return run_crop(args.input, output_path, config, args.debug_dir)


if __name__ == "__main__":
    sys.exit(main())
