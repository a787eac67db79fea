"""
Import path resolution and sandboxing

Resolves the path of a directive against the directory of the document it
appears in and keeps imports inside the configured root directory.
"""

import os
from pathlib import Path
from typing import Union

from .errors import SandboxViolationError
from .log import LOG


def spaces_unescape(path: str) -> str:
    r"""Turn backslash-escaped spaces ("\ ") into plain spaces"""
    return path.replace('\\ ', ' ')


def path_normalize(path: str, root_dir: str, root_token: str = "<rootDir>") -> str:
    """
    Substitute a leading root token and unescape spaces

    Example:
        >>> path_normalize("<rootDir>/src/a.py", "/srv/project")
        '/srv/project/src/a.py'
    """
    if path.startswith(root_token):
        path = root_dir + path[len(root_token):]
    return spaces_unescape(path)


def sandbox_contains(path: str, root_dir: str) -> bool:
    """
    Check whether an absolute path lies inside root_dir

    The check is lexical: the path is expressed relative to the root and
    rejected if that starts with a parent directory segment or cannot be
    expressed relatively at all (another drive).
    """
    try:
        relative = os.path.relpath(path, root_dir)
    except ValueError:
        return False
    if relative == os.pardir or relative.startswith(os.pardir + os.sep):
        return False
    return not os.path.isabs(relative)


def path_resolve(
    path: str,
    base_dir: Union[str, Path],
    root_dir: str,
    allow_outside: bool = False,
    root_token: str = "<rootDir>",
) -> Path:
    """
    Resolve a directive path to an absolute file path

    Steps:
        1. Replace a leading root token with root_dir
        2. Unescape backslash-escaped spaces
        3. Resolve relative to base_dir (the document's directory)

    Symlinks are not followed; ".." segments are collapsed lexically.

    Args:
        path: Path as written in the directive
        base_dir: Directory of the document containing the directive
        root_dir: Absolute sandbox root
        allow_outside: Skip the sandbox check entirely
        root_token: Token substituted with root_dir

    Returns:
        Absolute path of the file to import

    Raises:
        SandboxViolationError: If the path escapes root_dir and
                               allow_outside is False
    """
    normalized = path_normalize(path, root_dir, root_token)
    resolved = os.path.normpath(os.path.join(os.path.abspath(base_dir), normalized))

    if not allow_outside and not sandbox_contains(resolved, root_dir):
        raise SandboxViolationError(resolved, root_dir)

    LOG(f"Resolved {path!r} to {resolved}", level=3)
    return Path(resolved)
