"""A tile-based puzzle game: map checking, XPM sprite loading and a pygame window."""

__version__ = "0.1.0"