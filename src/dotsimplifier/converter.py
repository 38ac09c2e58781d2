"""
Export of coordinate documents to DXF and SVG.

Both exports carry the closure flag over: closed shapes become closed
LWPOLYLINE entities in DXF and paths ending in Z in SVG.
"""

import xml.etree.ElementTree as ET
from io import StringIO

import ezdxf

from .coordinates import format_number
from .geometry import Document, Shape

# SVG namespace
SVG_NS = "http://www.w3.org/2000/svg"


def document_to_dxf(document: Document) -> bytes:
    """
    Convert a document to DXF format.

    SVG's Y axis points down while DXF's points up, so Y is negated.

    Args:
        document: Document to export

    Returns:
        DXF file content as bytes
    """
    doc = ezdxf.new(dxfversion='R2000')
    msp = doc.modelspace()

    for shape in document.shapes:
        if len(shape) < 2:
            continue
        points = [(x, -y) for x, y in shape.points]
        msp.add_lwpolyline(points, close=shape.closed)

    # ezdxf writes strings, so we use StringIO and encode
    output_stream = StringIO()
    doc.write(output_stream)
    return output_stream.getvalue().encode('utf-8')


def shape_to_path_d(shape: Shape) -> str:
    """Convert a shape to an SVG path 'd' attribute."""
    x, y = shape.points[0]
    parts = [f"M {format_number(x)},{format_number(y)}"]
    for x, y in shape.points[1:]:
        parts.append(f"L {format_number(x)},{format_number(y)}")
    if shape.closed:
        parts.append("Z")
    return " ".join(parts)


def document_to_svg(document: Document, width: float = None, height: float = None) -> bytes:
    """
    Convert a document to SVG format.

    Args:
        document: Document to export
        width: Optional SVG width (defaults to the document's extent)
        height: Optional SVG height (defaults to the document's extent)

    Returns:
        SVG file content as bytes
    """
    bounds = document.bounds()
    if bounds is None:
        min_x, min_y, max_x, max_y = 0, 0, 100, 100
    else:
        min_x, min_y, max_x, max_y = bounds

    # A single point or a straight line still needs a visible box
    span_x = (max_x - min_x) or 1
    span_y = (max_y - min_y) or 1

    ET.register_namespace('', SVG_NS)

    root = ET.Element(f'{{{SVG_NS}}}svg')
    root.set('width', format_number(width or span_x))
    root.set('height', format_number(height or span_y))
    root.set(
        'viewBox',
        f"{format_number(min_x)} {format_number(min_y)} {format_number(span_x)} {format_number(span_y)}",
    )

    for shape in document.shapes:
        path_elem = ET.SubElement(root, f'{{{SVG_NS}}}path')
        path_elem.set('d', shape_to_path_d(shape))
        path_elem.set('stroke', 'black')
        path_elem.set('fill', 'none')
        path_elem.set('stroke-width', '0.5')

    output = '<?xml version="1.0" encoding="UTF-8"?>\n'
    output += ET.tostring(root, encoding='unicode')
    return output.encode('utf-8')
