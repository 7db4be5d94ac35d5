"""
Models package for tagtint

Contains data structures and type definitions for the tag parser and
the render pipeline.
"""

from .state import ProgramState, pipeline
from .tags import Token, ResolvedTag, CapabilityKey

__all__ = [
    "ProgramState",
    "pipeline",
    "Token",
    "ResolvedTag",
    "CapabilityKey",
]
