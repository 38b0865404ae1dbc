"""
Edge and handle geometry for the flow canvas.

All functions work in virtual canvas coordinates.
"""

import math
from typing import List, Tuple

from botdesk.flow.constants import (
    NODE_WIDTH,
    NODE_HEIGHT,
    HANDLE_OFFSET_Y,
    MIN_CONTROL_OFFSET,
)

Point = Tuple[float, float]


def output_handle(position: Point) -> Point:
    """Right-edge connector of a node at the given top-left position."""
    return (position[0] + NODE_WIDTH, position[1] + HANDLE_OFFSET_Y)


def input_handle(position: Point) -> Point:
    """Left-edge connector of a node at the given top-left position."""
    return (position[0], position[1] + HANDLE_OFFSET_Y)


def point_in_node(point: Point, position: Point) -> bool:
    return (position[0] <= point[0] <= position[0] + NODE_WIDTH
            and position[1] <= point[1] <= position[1] + NODE_HEIGHT)


def distance(a: Point, b: Point) -> float:
    return math.sqrt((a[0] - b[0])**2 + (a[1] - b[1])**2)


def control_offset(start: Point, end: Point) -> float:
    return max(abs(end[0] - start[0]) * 0.5, MIN_CONTROL_OFFSET)


def control_points(start: Point, end: Point) -> Tuple[Point, Point]:
    offset = control_offset(start, end)
    return (start[0] + offset, start[1]), (end[0] - offset, end[1])


def edge_path(start: Point, end: Point) -> str:
    """SVG path data for the cubic curve between two handles."""
    c1, c2 = control_points(start, end)
    return (f'M {start[0]:.2f} {start[1]:.2f} '
            f'C {c1[0]:.2f} {c1[1]:.2f}, {c2[0]:.2f} {c2[1]:.2f}, {end[0]:.2f} {end[1]:.2f}')


def edge_midpoint(start: Point, end: Point) -> Point:
    """
    Midpoint used for the trigger label and delete badge.

    The control points are symmetric about the endpoints' center, so this
    coincides with the curve's point at t = 0.5.
    """
    return ((start[0] + end[0]) / 2, (start[1] + end[1]) / 2)


def bezier_point(start: Point, end: Point, t: float) -> Point:
    c1, c2 = control_points(start, end)
    u = 1 - t
    a, b, c, d = u**3, 3 * u * u * t, 3 * u * t * t, t**3
    return (a * start[0] + b * c1[0] + c * c2[0] + d * end[0],
            a * start[1] + b * c1[1] + c * c2[1] + d * end[1])


def sample_edge(start: Point, end: Point, segments: int = 24) -> List[Point]:
    return [bezier_point(start, end, i / segments) for i in range(segments + 1)]


def point_to_segment_distance(point: Point, seg_start: Point, seg_end: Point) -> Tuple[float, float]:
    """Distance from point to a line segment, and the clamped projection parameter t."""
    px, py = point
    x1, y1 = seg_start
    x2, y2 = seg_end
    dx, dy = x2 - x1, y2 - y1

    if dx == 0 and dy == 0:
        return math.sqrt((px - x1)**2 + (py - y1)**2), 0.0

    t = max(0.0, min(1.0, ((px - x1) * dx + (py - y1) * dy) / (dx * dx + dy * dy)))
    closest_x, closest_y = x1 + t * dx, y1 + t * dy
    return math.sqrt((px - closest_x)**2 + (py - closest_y)**2), t


def distance_to_edge(point: Point, start: Point, end: Point, segments: int = 24) -> float:
    """Approximate distance from a point to the edge curve via a sampled polyline."""
    samples = sample_edge(start, end, segments)
    return min(
        point_to_segment_distance(point, samples[i], samples[i + 1])[0]
        for i in range(len(samples) - 1)
    )


def trigger_badge_width(trigger: str) -> float:
    return len(trigger) * 8 + 16
