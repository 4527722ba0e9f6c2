"""Circuit workout generator and interval timer."""

__version__ = "0.1.0"
