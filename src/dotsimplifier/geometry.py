"""
Geometry primitives shared by the pipeline and the coordinate editor.

Documents are immutable values: every edit returns a new Document so that
concurrent edit handlers never see each other's partial changes.
"""

import math
from dataclasses import dataclass, field, replace
from typing import Iterable, Iterator, Optional, Sequence, Tuple

# Type aliases
Point = Tuple[float, float]
Bounds = Tuple[float, float, float, float]


def distance(a: Point, b: Point) -> float:
    """Euclidean distance between two points."""
    return math.hypot(a[0] - b[0], a[1] - b[1])


def squared_distance(a: Point, b: Point) -> float:
    dx = a[0] - b[0]
    dy = a[1] - b[1]
    return dx * dx + dy * dy


@dataclass(frozen=True)
class Shape:
    """An ordered run of points plus its closure flag."""

    points: Tuple[Point, ...]
    closed: bool = False

    def __post_init__(self):
        if not self.points:
            raise ValueError("A shape needs at least one point")
        object.__setattr__(self, "points", tuple((float(x), float(y)) for x, y in self.points))

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self.points)

    @property
    def first(self) -> Point:
        return self.points[0]

    @property
    def last(self) -> Point:
        return self.points[-1]


@dataclass(frozen=True)
class Document:
    """Ordered collection of shapes, in source or text order."""

    shapes: Tuple[Shape, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "shapes", tuple(self.shapes))

    @classmethod
    def from_points(cls, shapes: Iterable[Tuple[Sequence[Point], bool]]) -> "Document":
        """Build a document from (points, closed) pairs, dropping empty runs."""
        return cls(tuple(Shape(tuple(points), closed) for points, closed in shapes if points))

    def __len__(self) -> int:
        return len(self.shapes)

    def __iter__(self) -> Iterator[Shape]:
        return iter(self.shapes)

    def __getitem__(self, index: int) -> Shape:
        return self.shapes[index]

    @property
    def point_count(self) -> int:
        return sum(len(shape) for shape in self.shapes)

    def bounds(self) -> Optional[Bounds]:
        """
        Bounding box of every point in the document.

        Returns:
            (min_x, min_y, max_x, max_y), or None when the document is empty
        """
        all_points = [p for shape in self.shapes for p in shape.points]
        if not all_points:
            return None
        xs = [p[0] for p in all_points]
        ys = [p[1] for p in all_points]
        return (min(xs), min(ys), max(xs), max(ys))

    def add_point(self, point: Point) -> "Document":
        """
        Append a point the way a freehand editor does.

        The point extends the last shape while that shape is still open;
        after a closed shape (or on an empty document) it starts a new one.
        """
        point = (float(point[0]), float(point[1]))
        if not self.shapes or self.shapes[-1].closed:
            return Document(self.shapes + (Shape((point,)),))

        last = self.shapes[-1]
        extended = replace(last, points=last.points + (point,))
        return Document(self.shapes[:-1] + (extended,))

    def move_point(self, shape_index: int, point_index: int, point: Point) -> "Document":
        """Return a document with one point replaced."""
        shape = self._shape_at(shape_index)
        points = list(shape.points)
        _check_index(point_index, len(points), "point")
        points[point_index] = (float(point[0]), float(point[1]))
        return self._with_shape(shape_index, replace(shape, points=tuple(points)))

    def delete_point(self, shape_index: int, point_index: int) -> "Document":
        """Return a document without one point; emptied shapes disappear."""
        shape = self._shape_at(shape_index)
        points = list(shape.points)
        _check_index(point_index, len(points), "point")
        del points[point_index]

        shapes = list(self.shapes)
        if points:
            shapes[shape_index] = replace(shape, points=tuple(points))
        else:
            del shapes[shape_index]
        return Document(tuple(shapes))

    def _shape_at(self, shape_index: int) -> Shape:
        _check_index(shape_index, len(self.shapes), "shape")
        return self.shapes[shape_index]

    def _with_shape(self, shape_index: int, shape: Shape) -> "Document":
        shapes = list(self.shapes)
        shapes[shape_index] = shape
        return Document(tuple(shapes))


def _check_index(index: int, size: int, what: str) -> None:
    # Negative indices are rejected; editors address points by position.
    if not 0 <= index < size:
        raise IndexError(f"{what} index {index} out of range (0..{size - 1})")
