"""Draw history storage for the drawlots desktop app."""

__version__ = "0.1.0"
