"""
Errors raised by the simplification pipeline.

All of them derive from ValueError, so callers that already treat bad input
as a ValueError (the web app maps it to HTTP 400) keep working.
"""


class SimplifierError(ValueError):
    """Base class for pipeline failures. No partial output is produced."""


class MalformedInputError(SimplifierError):
    """The SVG text is not well-formed XML or has no <svg> root element."""


class NoEligibleShapesError(SimplifierError):
    """No path, rect, circle, ellipse, line, polyline or polygon to process."""


class DegenerateGeometryError(SimplifierError):
    """Every subpath ended up with fewer than two points."""
