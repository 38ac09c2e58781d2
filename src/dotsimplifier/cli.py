"""Command line entry point: dotsimplifier drawing.svg -o drawing.txt"""

import argparse
import logging
import sys
from pathlib import Path

from .config import settings
from .converter import document_to_dxf
from .errors import SimplifierError
from .models import SimplifyOptions
from .pipeline import process_svg_bytes


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dotsimplifier",
        description="Convert SVG shapes into simplified connect-the-dots coordinates.",
    )
    parser.add_argument("input", type=Path, help="SVG file to convert")
    parser.add_argument("-o", "--output", type=Path, help="Write coordinates here instead of stdout")
    parser.add_argument("--epsilon", type=float, default=settings.default_epsilon,
                        help="Simplification tolerance (default: %(default)s)")
    parser.add_argument("--min-distance", type=float, default=settings.default_min_distance,
                        help="Minimum spacing between points, 0 disables (default: %(default)s)")
    parser.add_argument("--no-resize", action="store_true",
                        help="Keep source coordinates instead of fitting a 720x1080 canvas")
    parser.add_argument("--dxf", type=Path, help="Also write the shapes as a DXF file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )

    try:
        options = SimplifyOptions(
            epsilon=args.epsilon,
            min_distance=args.min_distance,
            should_resize=not args.no_resize,
        )
        input_bytes = args.input.read_bytes()
        document, text, stats = process_svg_bytes(input_bytes, options)
    except FileNotFoundError:
        print(f"Error: Cannot find file '{args.input}'", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: Cannot read file '{args.input}': {e}", file=sys.stderr)
        return 1
    except (SimplifierError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not args.output:
        print(text)

    try:
        if args.output:
            args.output.write_text(text + "\n", encoding="utf-8")
        if args.dxf:
            args.dxf.write_bytes(document_to_dxf(document))
    except OSError as e:
        print(f"Error: Cannot write file: {e}", file=sys.stderr)
        return 1

    print(f"Elements:   {stats['element_count']}", file=sys.stderr)
    print(f"Shapes:     {stats['shape_count']}", file=sys.stderr)
    print(f"Points:     {stats['input_points']} -> {stats['output_points']}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
