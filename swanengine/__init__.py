"""Simulation building blocks for a 2D tile-based sandbox game: vectors, chunk
coordinates, chunks, lighting, water automata, physics, inventories and image assets."""

__version__ = "0.1.0"

__all__ = [
    "arrayvector",
    "assets",
    "automata",
    "cache",
    "chunk",
    "constants",
    "coords",
    "drawutil",
    "inventory",
    "lighting",
    "matrix",
    "physics",
    "timing",
    "vector",
]