"""padboard - a grid of pads that play short audio clips."""

__version__ = "0.1.0"
