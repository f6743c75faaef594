"""Engine-wide constants shared by the world, chunk and rendering code."""

TILE_SIZE = 32
TICK_RATE = 20
CHUNK_HEIGHT = 64
CHUNK_WIDTH = 64
PLACEHOLDER_RED = 245
PLACEHOLDER_GREEN = 66
PLACEHOLDER_BLUE = 242