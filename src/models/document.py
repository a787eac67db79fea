"""
Document-level data models

Placeholder code blocks located in a Markdown document and the results of
an import pass over that document.
"""

from pathlib import Path
from dataclasses import dataclass, field
from typing import List, Optional

from .directive import Directive


@dataclass
class CodeBlock:
    """
    A fenced code block found in a Markdown document

    Attributes:
        lang: First word of the fence info string (None if the info is empty)
        meta: Remainder of the info string after the language (None if absent)
        value: Block body without the trailing newline
        start_line: 0-based index of the opening fence line
        end_line: 0-based index one past the last line of the block
        prefix: Container prefix of the opening fence line (list item
                indentation, "> " of block quotes) reused for body lines
        closed: Whether the block has a closing fence line
        markup: Opening fence characters ("```", "~~~~", ...)

    Example:
        For the document

            ```python file=./a.py#L1-L2
            ```

        CodeBlock(lang="python", meta="file=./a.py#L1-L2", value="",
                  start_line=0, end_line=2, prefix="", closed=True)
    """
    lang: Optional[str]
    meta: Optional[str]
    value: str
    start_line: int
    end_line: int
    prefix: str = ""
    closed: bool = True
    markup: str = "```"


@dataclass
class ImportJob:
    """
    A code block whose directive has been parsed and whose path is resolved

    Attributes:
        block: The placeholder block
        directive: Its parsed directive
        path: Absolute path of the file to import
    """
    block: CodeBlock
    directive: Directive
    path: Path


@dataclass
class ImportResult:
    """
    Outcome of one import pass over a document

    Attributes:
        text: The document with every placeholder body replaced
        imported: Number of code blocks whose body was replaced
        diagnostics: Non-fatal messages (missing marker pairs)
    """
    text: str
    imported: int = 0
    diagnostics: List[str] = field(default_factory=list)
