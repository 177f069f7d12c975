"""
Shared constants for state machine diagram layout.

All distances are in canvas pixels. These values are the defaults used by
DiagramGenerator and can be overridden through its keyword arguments.
"""

import math

# =============================================================================
# CANVAS CONFIGURATION
# =============================================================================

# Size of the drawing surface
CANVAS_WIDTH = 800
CANVAS_HEIGHT = 600

# Diameter of a state circle
STATE_SIZE = 50

# =============================================================================
# NUMERICAL TOLERANCES
# =============================================================================

# Vectors shorter than this are treated as zero-length
MIN_THR = 1e-9

# Points closer than this to a line are considered to lie on it
MIN_DISTANCE = 1e-6

# =============================================================================
# CANDIDATE SAMPLING AND SCORING
# =============================================================================

# Number of concentric rings sampled around each placed state
ORBIT = 4

# Number of evenly spaced samples per ring
PERIOD = 8

# Scores are floored to this bucket size before comparison
SCORE_ACCURACY = 1e-5

# Score given to a candidate that would produce a degenerate drawing
REJECTED_SCORE = math.inf

# Default alphabet of the machines built by the demo and parser
DEFAULT_ALPHABET = ("0", "1")
