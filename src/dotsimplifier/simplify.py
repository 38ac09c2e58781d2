"""
Point reduction for extracted subpaths.

Three steps run in order on every subpath: Ramer-Douglas-Peucker
simplification, minimum-spacing filtering and closure detection.
"""

import math
from typing import List, Sequence

from .geometry import Point, squared_distance

# Endpoints closer than this on both axes make an open path closed
CLOSURE_TOLERANCE = 0.1


def perpendicular_distance(point: Point, line_start: Point, line_end: Point) -> float:
    """
    Distance from a point to the segment between line_start and line_end.

    The projection is clamped to the segment, so points beyond either end
    measure to the nearest endpoint. A zero-length segment measures to its
    start.
    """
    dx = line_end[0] - line_start[0]
    dy = line_end[1] - line_start[1]

    if dx == 0 and dy == 0:
        return math.hypot(point[0] - line_start[0], point[1] - line_start[1])

    t = ((point[0] - line_start[0]) * dx + (point[1] - line_start[1]) * dy) / (dx * dx + dy * dy)
    if t < 0:
        nearest = line_start
    elif t > 1:
        nearest = line_end
    else:
        nearest = (line_start[0] + t * dx, line_start[1] + t * dy)

    return math.hypot(point[0] - nearest[0], point[1] - nearest[1])


def ramer_douglas_peucker(points: Sequence[Point], epsilon: float) -> List[Point]:
    """
    Simplify a polyline with the Ramer-Douglas-Peucker algorithm.

    Uses an explicit stack of (start, end) index ranges, so long or
    adversarial inputs cannot exhaust the interpreter's recursion limit.

    Args:
        points: Ordered points of one subpath
        epsilon: Distance tolerance; larger values keep fewer points

    Returns:
        A subsequence of the input that keeps the first and last points
    """
    if epsilon <= 0:
        raise ValueError(f"epsilon must be positive, got {epsilon}")

    points = list(points)
    if len(points) < 3:
        return points

    keep = [False] * len(points)
    keep[0] = keep[-1] = True
    stack = [(0, len(points) - 1)]

    while stack:
        start, end = stack.pop()
        if end - start < 2:
            continue

        dmax = 0.0
        index = start
        for i in range(start + 1, end):
            d = perpendicular_distance(points[i], points[start], points[end])
            if d > dmax:
                index = i
                dmax = d

        if dmax > epsilon:
            keep[index] = True
            stack.append((index, end))
            stack.append((start, index))

    return [p for p, kept in zip(points, keep) if kept]


def filter_close_points(points: Sequence[Point], min_distance: float) -> List[Point]:
    """
    Drop points that sit within min_distance of the last kept point.

    The first point is always kept. A min_distance of 0 disables filtering.
    """
    if min_distance < 0:
        raise ValueError(f"min_distance must be >= 0, got {min_distance}")

    points = list(points)
    if min_distance == 0 or not points:
        return points

    min_distance_sq = min_distance * min_distance
    filtered = [points[0]]
    for point in points[1:]:
        if squared_distance(point, filtered[-1]) > min_distance_sq:
            filtered.append(point)
    return filtered


def is_closed(simplified: Sequence[Point], declared_closed: bool) -> bool:
    """
    Decide the closure flag of a simplified subpath.

    Args:
        simplified: Points after simplification, before spacing filtering
        declared_closed: Whether the source path already signaled closure

    Returns:
        True when declared closed, or when the endpoints nearly coincide
    """
    if declared_closed:
        return True
    if not simplified:
        return False

    first = simplified[0]
    last = simplified[-1]
    return abs(first[0] - last[0]) < CLOSURE_TOLERANCE and abs(first[1] - last[1]) < CLOSURE_TOLERANCE
