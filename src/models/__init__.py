"""
Models package for codeimport

Contains data structures and type definitions for the import pipeline.
"""

from .state import ProgramState, pipeline
from .directive import (
    Directive,
    ImportMode,
    TextElement,
    GroupElement,
    Element,
    MarkerIndex,
    MarkerCursor,
    Extraction,
)
from .document import CodeBlock, ImportJob, ImportResult

__all__ = [
    "ProgramState",
    "pipeline",
    "Directive",
    "ImportMode",
    "TextElement",
    "GroupElement",
    "Element",
    "MarkerIndex",
    "MarkerCursor",
    "Extraction",
    "CodeBlock",
    "ImportJob",
    "ImportResult",
]
