"""Project detection and Makefile generation."""

__version__ = "1.0.0"
