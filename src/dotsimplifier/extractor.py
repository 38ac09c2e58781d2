"""
Shape extraction from SVG documents.

Every supported element is rewritten as path data so the rest of the
pipeline only has to understand one representation.
"""

import logging
import math
import re
import xml.etree.ElementTree as ET
from enum import Enum
from typing import Callable, Dict, List, NamedTuple, Optional, Tuple

from .errors import MalformedInputError
from .path_parser import contains_close_path, parse_finite
from .transform import Canvas

logger = logging.getLogger(__name__)

NUMBER_PATTERN = re.compile(r'[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?', re.ASCII)
LEADING_NUMBER_PATTERN = re.compile(r'\s*(' + NUMBER_PATTERN.pattern + r')', re.ASCII)

# Rectangles within this distance of the canvas on every edge are frames
BACKGROUND_TOLERANCE = 1.0


class ElementKind(Enum):
    PATH = "path"
    RECT = "rect"
    CIRCLE = "circle"
    ELLIPSE = "ellipse"
    LINE = "line"
    POLYLINE = "polyline"
    POLYGON = "polygon"


class ExtractedShape(NamedTuple):
    kind: ElementKind
    d: str
    closed: bool


class Extraction(NamedTuple):
    canvas: Canvas
    shapes: List[ExtractedShape]
    skipped_background: int


def local_name(tag: str) -> str:
    """Strip the XML namespace from a tag."""
    return tag.split('}')[-1] if '}' in tag else tag


def parse_number(value: Optional[str], default: float = 0.0) -> float:
    """
    Read the leading number of an attribute value.

    Trailing units ("px", "%", "mm") are ignored; anything without a leading
    number falls back to the default.
    """
    if value is None:
        return default
    match = LEADING_NUMBER_PATTERN.match(value)
    if not match:
        return default
    return parse_finite(match.group(1))


def parse_point_list(points_str: Optional[str]) -> List[Tuple[float, float]]:
    """Parse a polyline/polygon 'points' attribute into (x, y) pairs."""
    numbers = NUMBER_PATTERN.findall(points_str or "")
    points = []
    for i in range(0, len(numbers) - 1, 2):
        points.append((parse_finite(numbers[i]), parse_finite(numbers[i + 1])))
    return points


def parse_svg_root(svg_text: str) -> ET.Element:
    """
    Parse SVG text into an element tree root.

    Raises:
        MalformedInputError: if the text is not XML or the root is not <svg>
    """
    if not svg_text or not svg_text.strip():
        raise MalformedInputError("Failed to parse SVG file: input is empty.")
    try:
        root = ET.fromstring(svg_text)
    except ET.ParseError as e:
        raise MalformedInputError(f"Failed to parse SVG file: {e}") from e

    if local_name(root.tag) != "svg":
        raise MalformedInputError("Invalid SVG file: missing root <svg> element.")
    return root


def resolve_canvas(root: ET.Element) -> Canvas:
    """
    Work out the document's coordinate space.

    The viewBox wins; width/height attributes are used when it is missing or
    has a zero extent. The viewBox origin is kept in either case.
    """
    origin_x = origin_y = width = height = 0.0

    view_box = root.get('viewBox')
    if view_box:
        parts = [p for p in re.split(r'[\s,]+', view_box.strip()) if p]
        if len(parts) == 4:
            origin_x, origin_y, width, height = (parse_number(p) for p in parts)

    if width == 0 or height == 0:
        width = parse_number(root.get('width'))
        height = parse_number(root.get('height'))

    return Canvas(origin_x, origin_y, width, height)


def is_background_rect(elem: ET.Element, canvas: Canvas) -> bool:
    """True for rectangles that only frame the whole canvas."""
    w_attr = elem.get('width')
    h_attr = elem.get('height')

    if w_attr is not None and h_attr is not None:
        if w_attr.strip() == '100%' and h_attr.strip() == '100%':
            return True

    if not canvas.has_size:
        return False

    x = parse_number(elem.get('x'))
    y = parse_number(elem.get('y'))
    w = parse_number(w_attr)
    h = parse_number(h_attr)
    return (
        abs(x - canvas.origin_x) <= BACKGROUND_TOLERANCE
        and abs(y - canvas.origin_y) <= BACKGROUND_TOLERANCE
        and abs(w - canvas.width) <= BACKGROUND_TOLERANCE
        and abs(h - canvas.height) <= BACKGROUND_TOLERANCE
    )


def _num(value: float) -> str:
    value = float(value)
    if not math.isfinite(value):
        raise MalformedInputError("Shape coordinates are out of range.")
    return repr(value)


def _attrs(elem: ET.Element, *names: str) -> Tuple[float, ...]:
    return tuple(parse_number(elem.get(name)) for name in names)


def _path_to_path(elem: ET.Element) -> ExtractedShape:
    d = elem.get('d', '')
    return ExtractedShape(ElementKind.PATH, d, contains_close_path(d))


def _rect_to_path(elem: ET.Element) -> ExtractedShape:
    x, y, w, h = _attrs(elem, 'x', 'y', 'width', 'height')
    d = f"M {_num(x)} {_num(y)} H {_num(x + w)} V {_num(y + h)} H {_num(x)} Z"
    return ExtractedShape(ElementKind.RECT, d, True)


def _ellipse_path(cx: float, cy: float, rx: float, ry: float) -> str:
    arc = f"A {_num(rx)} {_num(ry)} 0 1 0"
    return (
        f"M {_num(cx - rx)} {_num(cy)} "
        f"{arc} {_num(cx + rx)} {_num(cy)} "
        f"{arc} {_num(cx - rx)} {_num(cy)} Z"
    )


def _circle_to_path(elem: ET.Element) -> ExtractedShape:
    cx, cy, r = _attrs(elem, 'cx', 'cy', 'r')
    return ExtractedShape(ElementKind.CIRCLE, _ellipse_path(cx, cy, r, r), True)


def _ellipse_to_path(elem: ET.Element) -> ExtractedShape:
    cx, cy, rx, ry = _attrs(elem, 'cx', 'cy', 'rx', 'ry')
    return ExtractedShape(ElementKind.ELLIPSE, _ellipse_path(cx, cy, rx, ry), True)


def _line_to_path(elem: ET.Element) -> ExtractedShape:
    x1, y1, x2, y2 = _attrs(elem, 'x1', 'y1', 'x2', 'y2')
    d = f"M {_num(x1)} {_num(y1)} L {_num(x2)} {_num(y2)}"
    return ExtractedShape(ElementKind.LINE, d, False)


def _points_path(elem: ET.Element) -> str:
    points = parse_point_list(elem.get('points'))
    if not points:
        return ""
    parts = [f"M {_num(points[0][0])} {_num(points[0][1])}"]
    for x, y in points[1:]:
        parts.append(f"L {_num(x)} {_num(y)}")
    return " ".join(parts)


def _polyline_to_path(elem: ET.Element) -> ExtractedShape:
    return ExtractedShape(ElementKind.POLYLINE, _points_path(elem), False)


def _polygon_to_path(elem: ET.Element) -> ExtractedShape:
    d = _points_path(elem)
    return ExtractedShape(ElementKind.POLYGON, f"{d} Z" if d else d, True)


CONVERTERS: Dict[ElementKind, Callable[[ET.Element], ExtractedShape]] = {
    ElementKind.PATH: _path_to_path,
    ElementKind.RECT: _rect_to_path,
    ElementKind.CIRCLE: _circle_to_path,
    ElementKind.ELLIPSE: _ellipse_to_path,
    ElementKind.LINE: _line_to_path,
    ElementKind.POLYLINE: _polyline_to_path,
    ElementKind.POLYGON: _polygon_to_path,
}

_KINDS_BY_TAG = {kind.value: kind for kind in ElementKind}


def element_kind(elem: ET.Element) -> Optional[ElementKind]:
    tag = elem.tag
    if not isinstance(tag, str):
        # Comments and processing instructions
        return None
    return _KINDS_BY_TAG.get(local_name(tag))


def extract_shapes(root: ET.Element) -> Extraction:
    """
    Extract every supported shape from an SVG tree, in document order.

    Args:
        root: The <svg> root element

    Returns:
        Extraction with the resolved canvas, the shapes as path data and
        the number of background rectangles that were skipped
    """
    canvas = resolve_canvas(root)
    shapes: List[ExtractedShape] = []
    skipped = 0

    for elem in root.iter():
        kind = element_kind(elem)
        if kind is None:
            continue

        if kind is ElementKind.RECT and is_background_rect(elem, canvas):
            logger.debug("Skipping background rect %s", dict(elem.attrib))
            skipped += 1
            continue

        shapes.append(CONVERTERS[kind](elem))

    return Extraction(canvas, shapes, skipped)
