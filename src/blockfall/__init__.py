"""Blockfall: a real-time falling-block puzzle engine with pygame and gymnasium front-ends."""

__version__ = "0.1.0"
