"""Voxel world simulation: terrain, meshing, player physics, input and camera math."""

__version__ = "0.1.0"
__all__ = [
    "atlas",
    "block",
    "vertex",
    "instance",
    "camera",
    "generation",
    "mesher",
    "world",
    "player",
    "controller",
]