"""Die-With-Zero projection backend."""

__version__ = "0.1.0"
