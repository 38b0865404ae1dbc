"""
Viewport transform for the flow canvas.

Maps screen pixels (relative to the canvas element) to the virtual, infinite
canvas coordinate space and back:

    virtual = (screen - translate) / scale
    screen  = virtual * scale + translate

Zoom is anchored at the transform origin, not under the cursor.
"""

from dataclasses import dataclass
from typing import Tuple

from botdesk.flow.constants import (
    MIN_SCALE,
    MAX_SCALE,
    WHEEL_ZOOM_SENSITIVITY,
    ZOOM_STEP,
)

Point = Tuple[float, float]


def clamp_scale(scale: float) -> float:
    return min(max(MIN_SCALE, scale), MAX_SCALE)


@dataclass
class ViewportTransform:
    translate_x: float = 0.0
    translate_y: float = 0.0
    scale: float = 1.0

    def screen_to_virtual(self, point: Point) -> Point:
        return ((point[0] - self.translate_x) / self.scale,
                (point[1] - self.translate_y) / self.scale)

    def virtual_to_screen(self, point: Point) -> Point:
        return (point[0] * self.scale + self.translate_x,
                point[1] * self.scale + self.translate_y)

    def screen_delta_to_virtual(self, delta: Point) -> Point:
        """Convert a pointer movement to a virtual-space movement."""
        return (delta[0] / self.scale, delta[1] / self.scale)

    def apply_pan(self, delta: Point) -> None:
        """Pan by a screen-space delta; not divided by scale so panning tracks the cursor 1:1."""
        self.translate_x += delta[0]
        self.translate_y += delta[1]

    def apply_zoom(self, wheel_delta: float, sensitivity: float = WHEEL_ZOOM_SENSITIVITY) -> None:
        """Zoom from a wheel event; positive deltas (scrolling down) zoom out."""
        self.scale = clamp_scale(self.scale - wheel_delta * sensitivity)

    def zoom_in(self) -> None:
        self.scale = clamp_scale(self.scale + ZOOM_STEP)

    def zoom_out(self) -> None:
        self.scale = clamp_scale(self.scale - ZOOM_STEP)

    def reset(self) -> None:
        self.translate_x = 0.0
        self.translate_y = 0.0
        self.scale = 1.0

    def view_center(self, width: float, height: float) -> Point:
        """Virtual coordinates of the center of a canvas of the given screen size."""
        return self.screen_to_virtual((width / 2, height / 2))

    def svg_transform(self) -> str:
        return f'translate({self.translate_x:.2f} {self.translate_y:.2f}) scale({self.scale:.4f})'
