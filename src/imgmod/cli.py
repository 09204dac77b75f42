"""Command-line entry point for imgmod.

Loads an image, resizes it, applies brightness, contrast and saturation,
and writes a JPEG at the requested quality.

Usage example:
    imgmod -i photo.png -o out.jpg --brightness 120 --contrast 110 --width 800
    imgmod -i photo.png -o exports/ --preset vivid --quality 75
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional

from imgmod.codec import load_bitmap, save_bitmap
from imgmod.config.presets import (
    PRESETS,
    VALUE_FIELDS,
    get_preset,
    read_values_dict,
    values_from_dict,
)
from imgmod.config.values import AdjustmentValues, TargetSize
from imgmod.constants import DEFAULT_EXPORT_NAME, DEFAULT_RESAMPLE_POLICY, RESAMPLE_POLICIES
from imgmod.pipeline import adjust_image

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Parameters
    ----------
    argv : list[str] | None
        Optional list of arguments for testing. If None, uses sys.argv.

    Returns
    -------
    argparse.Namespace
        Parsed arguments.
    """
    parser = argparse.ArgumentParser(
        prog="imgmod",
        description=(
            "Resize an image and adjust brightness, contrast and saturation, "
            "then export it as JPEG."
        ),
    )

    parser.add_argument("-i", "--input", required=True, help="Path to input image file")
    parser.add_argument(
        "-o",
        "--output",
        required=True,
        help=f"Output file, or an existing directory to write {DEFAULT_EXPORT_NAME} into",
    )

    g_adj = parser.add_argument_group("Adjustments (percent, 100 = unchanged)")
    g_adj.add_argument("--brightness", type=float, default=None, help="0..200")
    g_adj.add_argument("--contrast", type=float, default=None, help="0..200")
    g_adj.add_argument("--saturation", type=float, default=None, help="0..200 (0 = grayscale)")
    g_adj.add_argument("--quality", type=int, default=None, help="JPEG quality 1..100 (default 90)")
    g_adj.add_argument(
        "--preset",
        type=str,
        default=None,
        choices=sorted(PRESETS),
        help="Start from a named preset; explicit flags override it",
    )
    g_adj.add_argument(
        "--config",
        type=str,
        default=None,
        help="JSON file with brightness/contrast/saturation/quality (and optional preset)",
    )

    g_size = parser.add_argument_group("Resize")
    g_size.add_argument(
        "--width", type=int, default=None, help="Output width; alone it keeps aspect ratio"
    )
    g_size.add_argument(
        "--height", type=int, default=None, help="Output height; alone it keeps aspect ratio"
    )
    g_size.add_argument(
        "--policy",
        type=str,
        default=DEFAULT_RESAMPLE_POLICY,
        choices=list(RESAMPLE_POLICIES),
        help="Resample interpolation policy",
    )

    parser.add_argument("-v", "--verbose", action="count", default=0, help="-v info, -vv debug")

    return parser.parse_args(argv)


def build_values(ns: argparse.Namespace) -> AdjustmentValues:
    """Combine config file, preset and explicit flags (later wins)."""
    d = read_values_dict(ns.config) if ns.config else {}
    if ns.preset:
        d["preset"] = ns.preset
    d.update(
        {
            name: getattr(ns, name)
            for name in VALUE_FIELDS
            if getattr(ns, name) is not None
        }
    )
    return values_from_dict(d).clamp()


def validate_args(ns: argparse.Namespace) -> None:
    """Validate argument values and raise ValueError for invalid inputs.

    Parameters
    ----------
    ns : argparse.Namespace
        Parsed CLI arguments.
    """
    if not Path(ns.input).exists():
        raise ValueError(f"Input file not found: {ns.input}")
    if ns.width is not None and ns.width <= 0:
        raise ValueError("--width must be a positive integer")
    if ns.height is not None and ns.height <= 0:
        raise ValueError("--height must be a positive integer")
    if ns.preset is not None:
        get_preset(ns.preset)


def resolve_output(output: str | Path) -> Path:
    """Map a directory output to the default export name inside it."""
    p = Path(output)
    if p.is_dir():
        return p / DEFAULT_EXPORT_NAME
    return p


def configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s: %(name)s: %(message)s")


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry function for the CLI.

    Parameters
    ----------
    argv : list[str] | None
        Optional list of arguments for testing.

    Returns
    -------
    int
        Exit status code (0 success, 1 image read/write failure, 2 bad arguments).
    """
    args = parse_args(argv)
    configure_logging(args.verbose)

    try:
        validate_args(args)
        values = build_values(args)
    except (ValueError, KeyError, OSError) as e:
        print(f"Argument error: {e}")
        return 2

    try:
        source = load_bitmap(args.input)
    except (ValueError, OSError) as e:
        print(f"Read error: {e}")
        return 1

    size = TargetSize.resolve(TargetSize.of(source), args.width, args.height)
    result = adjust_image(source, size, values, policy=args.policy)

    output = resolve_output(args.output)
    try:
        save_bitmap(result, output, values.quality)
    except OSError as e:
        print(f"Write error: {e}")
        return 1

    logger.info("Wrote %s (%dx%d, quality=%d)", output, result.width, result.height, values.quality)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
