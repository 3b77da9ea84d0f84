"""Target composition engine: ``BuildConfig`` in, Makefile text out."""

from .builder import CompositionError, MakefileBuilder, render
from .constants import COMMANDS, FRAMEWORK_RUN_COMMANDS

__all__ = [
    "COMMANDS",
    "CompositionError",
    "FRAMEWORK_RUN_COMMANDS",
    "MakefileBuilder",
    "render",
]
