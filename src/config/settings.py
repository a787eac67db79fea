"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use CODEIMPORT_ prefix (e.g., CODEIMPORT_ASYNC_MODE=true).

Settings can also be loaded from a .env file in the project root, or from a
YAML options file (see lib/options.py).
"""

import os
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use CODEIMPORT_ prefix.

    Examples:
        CODEIMPORT_ROOT_DIR=/home/me/project
        CODEIMPORT_ASYNC_MODE=true
        CODEIMPORT_REMOVE_REDUNDANT_INDENTATIONS=true
    """

    model_config = SettingsConfigDict(
        env_prefix="CODEIMPORT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Import behaviour
    async_mode: bool = Field(
        default=False,
        description="Issue all file reads of a document concurrently and await them as a batch",
    )

    preserve_trailing_newline: bool = Field(
        default=False,
        description="Keep the empty last line produced by a trailing newline in open-ended ranges",
    )

    remove_redundant_indentations: bool = Field(
        default=False,
        description="Strip the common leading indentation from imported code",
    )

    root_dir: Optional[str] = Field(
        default=None,
        description="Sandbox root for imports (absolute path; defaults to the current directory)",
    )

    allow_importing_from_outside: bool = Field(
        default=False,
        description="Disable the sandbox check and allow imports from outside root_dir",
    )

    # Directive grammar
    file_key: str = Field(
        default="file=",
        description="Prefix of the metadata token that names the imported file",
    )

    inline_flag: str = Field(
        default="inline",
        description="Metadata token that selects group (inline) extraction",
    )

    root_token: str = Field(
        default="<rootDir>",
        description="Path prefix replaced with root_dir before resolution",
    )

    marker_token: str = Field(
        default="group",
        description="Token that introduces a named marker in source files and templates",
    )

    # Document discovery
    document_glob: str = Field(
        default="**/*.md",
        description="Glob used by the CLI to find Markdown documents in the input directory",
    )

    def rootDir_get(self) -> str:
        """
        Return the sandbox root, falling back to the current directory.

        Example:
            >>> AppSettings(root_dir="/srv/docs").rootDir_get()
            '/srv/docs'
        """
        return self.root_dir or os.getcwd()

    def rootDir_check(self) -> str:
        """
        Validate the sandbox root and return it.

        Raises:
            ConfigurationError: If the root is not an absolute path
        """
        from ..lib.errors import ConfigurationError

        root = self.rootDir_get()
        if not Path(root).is_absolute():
            raise ConfigurationError(f'"rootDir" has to be an absolute path, got "{root}"')
        return root


# Singleton instance - import this in your code
appsettings = AppSettings()
