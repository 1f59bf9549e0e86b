# constants.py
"""
Application-level constants.

These values are static and do not change between simulation runs.
They cover the default tunables of the engine (used whenever the config
file leaves a parameter out) and the framework settings of the host
window, such as frame cadence, colors and mouse handling.
"""
import math

# --- Engine Defaults ---
# Shape formation (double-left-click = circle, double-right-click = square)
DEFAULT_SHAPE_RADIUS = 300.0
DEFAULT_SHAPE_ANGLE = 0.0
DEFAULT_SHAPE_FORCE = 1.2
# Fraction of the velocity correction applied per frame (0..1).
DEFAULT_SHAPE_ELASTICITY = 0.03
# Controls how distance affects the shape force.
DEFAULT_SHAPE_EXPONENT = 0.2

# Magnet (active while a mouse button is held)
DEFAULT_MAGNET_RADIUS = 100.0
DEFAULT_MAGNET_FORCE = 0.3

# Particles
DEFAULT_PARTICLE_COUNT = 500
DEFAULT_PARTICLE_SIZE = 1.0
# 1 = fully elastic collisions and wall bounces.
DEFAULT_PARTICLE_ELASTICITY = 0.999
DEFAULT_STARTING_VELOCITY = 1.0
DEFAULT_COLLISIONS_ENABLED = True

# The pointer starts "nowhere" so the magnet reaches no particle until the
# pointer has actually moved over the canvas.
POINTER_UNSET = (math.inf, math.inf)

# Visualization settings
DEFAULT_WINDOW_WIDTH = 800
DEFAULT_WINDOW_HEIGHT = 800
# 10 ms per frame.
FPS = 100
BACKGROUND_COLOR = (0, 0, 0)
# Opacity (0..1) of the background drawn over the previous frame.
# Lower leaves longer trails; 1 clears the frame completely.
DEFAULT_FRAME_OPACITY = 0.5
# Change per press of the [ and ] keys.
FRAME_OPACITY_STEP = 0.1

# --- Mouse Handling ---
# Two clicks closer together than this (in ms) count as a multi-click.
DOUBLE_CLICK_MS = 400
# Maximum pointer travel (in px) between clicks of one multi-click.
DOUBLE_CLICK_SLOP = 4
