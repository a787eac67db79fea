"""
codeimport - Embed source files into Markdown code blocks

Resolves file= directives on fenced code blocks and replaces the block
bodies with the referenced lines or marker groups.
"""

__version__ = "1.0.0"

from .directive import directive_parse
from .importer import CodeImporter, file_read
from .options import OptionsFile
from .errors import (
    CodeImportError,
    ConfigurationError,
    DirectiveSyntaxError,
    SandboxViolationError,
    FileReadError,
)
from .log import LOG, WARN, state_connectToLogger

__all__ = [
    "directive_parse",
    "CodeImporter",
    "file_read",
    "OptionsFile",
    "CodeImportError",
    "ConfigurationError",
    "DirectiveSyntaxError",
    "SandboxViolationError",
    "FileReadError",
    "LOG",
    "WARN",
    "state_connectToLogger",
    "__version__",
]
