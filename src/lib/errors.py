"""
Exception hierarchy for codeimport

Every fatal condition of an import pass derives from CodeImportError so
callers can discard the whole transform with a single except clause.
Missing marker pairs are not errors; they are reported as diagnostics.
"""


class CodeImportError(Exception):
    """Base class for all fatal codeimport errors"""
    pass


class ConfigurationError(CodeImportError):
    """Raised at setup when options are invalid (e.g. a relative rootDir)"""
    pass


class DirectiveSyntaxError(CodeImportError, SyntaxError):
    """
    Raised when a file= directive cannot be parsed

    Attributes:
        token: The raw metadata token that failed to parse
        column: Zero-based offset into the token where parsing stopped
    """

    def __init__(self, message: str, token: str, column: int) -> None:
        self.token = token
        self.column = column
        super().__init__(
            f"Unable to parse file path {token}: {message}\n"
            f"  {token}\n"
            f"  {' ' * column}^"
        )


class SandboxViolationError(CodeImportError):
    """Raised when a resolved import path lies outside the sandbox root"""

    def __init__(self, path: str, root: str) -> None:
        self.path = path
        self.root = root
        super().__init__(
            f'Attempted to import code from "{path}", which is outside from the rootDir "{root}"'
        )


class FileReadError(CodeImportError):
    """Raised when an imported file cannot be read"""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        super().__init__(f'Unable to read "{path}": {reason}')
