"""Chess rules engine and turn controller for a two-player console game."""

__version__ = "0.1.0"
