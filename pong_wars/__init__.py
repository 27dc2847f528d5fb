"""Two-ball territory bouncing simulation for pixel displays."""

__version__ = "0.1.0"
