# src/tetris_ai/game/core/constants.py
from __future__ import annotations

# Board geometry (fixed)
BOARD_H: int = 20
BOARD_W: int = 10

# Board / cell encoding
EMPTY_CELL: int = 0

# Classic tetromino set
NUM_PIECES: int = 7
NUM_ROTATIONS: int = 4

# Spawn pose of a new active piece (mask top-left)
SPAWN_X: int = 3
SPAWN_Y: int = 0

# Placement enumeration window
SPAWN_MARGIN: int = 2
DROP_START_Y: int = -4
