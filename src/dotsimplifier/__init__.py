"""
Dot Simplifier - Turn SVG shapes into connect-the-dots coordinates.

This package extracts the shapes of an SVG document, simplifies them with
Ramer-Douglas-Peucker and writes them in a forgiving coordinate text format
that can be edited by hand and read back.
"""

from .coordinates import parse_document, serialize_document
from .errors import (
    DegenerateGeometryError,
    MalformedInputError,
    NoEligibleShapesError,
    SimplifierError,
)
from .geometry import Document, Shape
from .models import SimplifyOptions
from .pipeline import process_svg, process_svg_async, run_pipeline, simplify_svg
from .converter import document_to_dxf, document_to_svg

__version__ = "0.1.0"
__all__ = [
    "Document",
    "Shape",
    "SimplifyOptions",
    "process_svg",
    "process_svg_async",
    "run_pipeline",
    "simplify_svg",
    "parse_document",
    "serialize_document",
    "document_to_dxf",
    "document_to_svg",
    "SimplifierError",
    "MalformedInputError",
    "NoEligibleShapesError",
    "DegenerateGeometryError",
]
