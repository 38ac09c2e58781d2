"""
SVG Dot Simplifier - Converts SVG shapes into connect-the-dots coordinates.

This module reads an SVG document, turns every supported shape into point
subpaths, optionally fits them into the target canvas, thins them out with
Ramer-Douglas-Peucker and writes the result as coordinate text.
"""

import asyncio
import logging
import math
from typing import List, Optional, Tuple

from .config import settings
from .coordinates import serialize_document
from .errors import DegenerateGeometryError, MalformedInputError, NoEligibleShapesError
from .extractor import extract_shapes, parse_svg_root
from .geometry import Document, Shape
from .models import SimplifyOptions
from .path_parser import interpret_path
from .simplify import filter_close_points, is_closed, ramer_douglas_peucker
from .transform import build_transform

logger = logging.getLogger(__name__)


def run_pipeline(svg_text: str, options: Optional[SimplifyOptions] = None) -> Tuple[Document, dict]:
    """
    Extract and simplify every shape of an SVG document.

    Args:
        svg_text: SVG document text
        options: Simplification options (configured defaults when omitted)

    Returns:
        Tuple of (document, statistics dict)

    Raises:
        MalformedInputError: if the SVG cannot be parsed or a coordinate
            does not fit in a float
        NoEligibleShapesError: if it holds no supported shapes
        DegenerateGeometryError: if no subpath keeps at least two points
    """
    options = options or SimplifyOptions()

    root = parse_svg_root(svg_text)
    extraction = extract_shapes(root)
    if not extraction.shapes:
        raise NoEligibleShapesError("No valid shapes found in the SVG.")

    transform = build_transform(
        extraction.canvas,
        options.should_resize,
        settings.target_width,
        settings.target_height,
    )

    shapes: List[Shape] = []
    subpath_count = 0
    input_points = 0

    for extracted in extraction.shapes:
        for subpath in interpret_path(extracted.d):
            subpath_count += 1
            points = subpath.points
            input_points += len(points)
            if len(points) < 2:
                logger.debug("Dropping %s subpath with %d point(s)", extracted.kind.value, len(points))
                continue

            if transform is not None:
                points = transform.apply_all(points)

            if not all(math.isfinite(c) for point in points for c in point):
                raise MalformedInputError("Shape coordinates are out of range.")

            simplified = ramer_douglas_peucker(points, options.epsilon)
            if len(simplified) < 2:
                continue

            final_points = filter_close_points(simplified, options.min_distance)
            if len(final_points) < 2:
                logger.debug("Dropping %s subpath collapsed by spacing filter", extracted.kind.value)
                continue

            # Closure is judged on the simplified endpoints, before filtering
            closed = is_closed(simplified, extracted.closed)
            shapes.append(Shape(tuple(final_points), closed))

    if not shapes:
        raise DegenerateGeometryError(
            "Could not extract any processable coordinates from the SVG's shapes."
        )

    document = Document(tuple(shapes))
    output_points = document.point_count
    stats = {
        "element_count": len(extraction.shapes),
        "skipped_background": extraction.skipped_background,
        "subpath_count": subpath_count,
        "shape_count": len(shapes),
        "input_points": input_points,
        "output_points": output_points,
        "closed_shapes": sum(1 for s in shapes if s.closed),
        "reduction_ratio": input_points / output_points if output_points else 0,
    }
    logger.info(
        "Simplified %d elements into %d shapes (%d -> %d points)",
        stats["element_count"], stats["shape_count"], input_points, output_points,
    )
    return document, stats


def process_svg(svg_text: str, options: Optional[SimplifyOptions] = None) -> Tuple[str, dict]:
    """
    Run the pipeline and serialize the result.

    Returns:
        Tuple of (coordinate text, statistics dict)
    """
    document, stats = run_pipeline(svg_text, options)
    return serialize_document(document), stats


async def process_svg_async(svg_text: str, options: Optional[SimplifyOptions] = None) -> Tuple[str, dict]:
    """Same as process_svg, run in a worker thread to keep the event loop free."""
    return await asyncio.to_thread(process_svg, svg_text, options)


def process_svg_bytes(svg_bytes: bytes, options: Optional[SimplifyOptions] = None) -> Tuple[Document, str, dict]:
    """
    Process an SVG file held in memory.

    Args:
        svg_bytes: SVG file content as bytes

    Returns:
        Tuple of (document, coordinate text, statistics dict)
    """
    svg_text = svg_bytes.decode('utf-8', errors='ignore')
    document, stats = run_pipeline(svg_text, options)
    return document, serialize_document(document), stats


def simplify_svg(input_file: str, output_file: str, options: Optional[SimplifyOptions] = None) -> dict:
    """
    Convert an SVG file on disk into a coordinate text file.

    Args:
        input_file: Path to input SVG file
        output_file: Path to output text file

    Returns:
        Statistics dictionary
    """
    with open(input_file, 'rb') as f:
        input_bytes = f.read()

    _, text, stats = process_svg_bytes(input_bytes, options)

    with open(output_file, 'w', encoding='utf-8') as f:
        f.write(text)
        f.write('\n')

    return stats
