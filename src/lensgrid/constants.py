GRID_ROWS = 4
GRID_COLS = 4
LENS_SIZE = 128
GRID_SPACING = 0

WINDOW_WIDTH = 1024
WINDOW_HEIGHT = 768
WINDOW_TITLE = "Lensgrid"

# Animation durations in seconds.
TRANSFORM_DURATION = 0.3
SNAP_DURATION = 0.2
CURSOR_DURATION = 0.3

# Accumulated pointer travel (px) before a press turns into a row/column drag.
DRAG_DEADZONE = 5.0

# Shuffle move counts (inclusive ranges).
SHUFFLE_SLIDES = (8, 12)
SHUFFLE_SLIDE_REPEAT = (1, 3)
SHUFFLE_ROTATIONS = (12, 16)
SHUFFLE_FLIPS = (12, 16)

# Keep the crosshair still while a row/column is being dragged.
FEATURE_FREEZE_CURSOR_DURING_DRAG = False

# Crosshair geometry
CURSOR_ARM = 15
CURSOR_DOT_RADIUS = 3

SRC_BORDER_WIDTH = 2
DST_BORDER_WIDTH = 3
GRID_BORDER_WIDTH = 4

# arcade / pyglet input codes
MOUSE_BUTTON_LEFT = 1
MOUSE_BUTTON_RIGHT = 4
KEY_ESCAPE = 65307
KEY_NEW_GAME = 110  # "n"
