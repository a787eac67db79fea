"""
codeimport - Embed source files into Markdown code blocks

Placeholder fences such as

    ```python file=./src/app.py#L10-L24
    ```

are filled with the referenced file content at build time.
"""

__version__ = "1.0.0"

from .lib import (
    CodeImporter,
    OptionsFile,
    CodeImportError,
    ConfigurationError,
    DirectiveSyntaxError,
    SandboxViolationError,
    FileReadError,
    LOG,
    state_connectToLogger,
)

__all__ = [
    "CodeImporter",
    "OptionsFile",
    "CodeImportError",
    "ConfigurationError",
    "DirectiveSyntaxError",
    "SandboxViolationError",
    "FileReadError",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
