"""vectorgate: embedding gateway and vector memory service."""

__version__ = "0.1.0"
