"""
Shared constants for the flow editor.

Distances and sizes are in virtual canvas units unless noted otherwise.
"""

# Node box
NODE_WIDTH = 208
NODE_HEIGHT = 84

# Connector handles sit on the left/right edges at this vertical offset
HANDLE_OFFSET_Y = 42
HANDLE_RADIUS = 12

# Distance to an edge curve that counts as hovering it
EDGE_HOVER_TOLERANCE = 10

# Radius of the delete badge drawn at a hovered edge's midpoint
EDGE_DELETE_RADIUS = 10

# Floor for the horizontal control-point offset of edge curves
MIN_CONTROL_OFFSET = 50

# Viewport limits
MIN_SCALE = 0.1
MAX_SCALE = 3.0
WHEEL_ZOOM_SENSITIVITY = 0.001
ZOOM_STEP = 0.2

# Canvas size in screen pixels
CANVAS_WIDTH = 1100
CANVAS_HEIGHT = 640

# Background dot grid spacing
GRID_SPACING = 40

DEFAULT_LABELS = {
    'message': 'Message',
    'input': 'User Input',
    'menu': 'Menu Options',
}
