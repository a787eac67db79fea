"""
Parser for file= directives

Turns the metadata of a fenced code block into a Directive.

Grammar of the directive token:

    file=<path>[#[L<from>][-][L<to>]]

The metadata is a space separated token list; spaces inside a path are
escaped with a backslash and stay escaped in Directive.path, they are
unescaped when the path is resolved. A separate "inline" token selects
group mode.

The range suffix is read by a small hand-written scanner. A suffix that
is not a complete range is part of the path, so a file may be called
"notes#Lab.txt".

Example:
    >>> directive = directive_parse("title=demo file=./src/a.py#L3-L9")
    >>> directive.path, directive.from_line, directive.to_line
    ('./src/a.py', 3, 9)
"""

from typing import List, Optional, Tuple

from ..config import appsettings, AppSettings
from ..models.directive import Directive, ImportMode
from .errors import DirectiveSyntaxError
from .log import LOG


def metaTokens_split(meta: str) -> List[str]:
    r"""
    Split code block metadata on spaces that are not backslash-escaped

    Args:
        meta: Metadata string of a fence (info string minus language)

    Returns:
        Token list; escaped spaces stay inside their token

    Example:
        >>> metaTokens_split(r"file=./my\ file.py inline")
        ['file=./my\\ file.py', 'inline']
    """
    tokens: List[str] = []
    current: List[str] = []
    for pos, char in enumerate(meta):
        if char == ' ' and not (pos > 0 and meta[pos - 1] == '\\'):
            tokens.append(''.join(current))
            current = []
        else:
            current.append(char)
    tokens.append(''.join(current))
    return tokens


class RangeScanner:
    """
    Scanner for the "L<from>-L<to>" suffix after the last '#' of a path

    Attributes:
        text: The suffix after '#'
        pos: Current scan position inside text
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def char_accept(self, char: str) -> bool:
        """Consume char if it is next in the input"""
        if self.pos < len(self.text) and self.text[self.pos] == char:
            self.pos += 1
            return True
        return False

    def lineNumber_read(self) -> Optional[int]:
        """Read the digits following an 'L', None if there are none"""
        start = self.pos
        while self.pos < len(self.text) and self.text[self.pos].isdigit():
            self.pos += 1
        if start == self.pos:
            return None
        return int(self.text[start:self.pos])

    def scan(self) -> Optional[Tuple[Optional[int], bool, Optional[int]]]:
        """
        Scan the whole suffix

        Returns:
            (from_line, dash, to_line) as written, or None if the suffix
            is not a line range
        """
        from_line: Optional[int] = None
        to_line: Optional[int] = None

        if self.char_accept('L'):
            from_line = self.lineNumber_read()
            if from_line is None:
                return None
        dash = self.char_accept('-')
        if self.char_accept('L'):
            to_line = self.lineNumber_read()
            if to_line is None:
                return None

        if self.pos != len(self.text):
            return None
        return from_line, dash, to_line


def fileToken_parse(token: str, key: str) -> Tuple[str, Optional[int], bool, Optional[int]]:
    """
    Parse the body of a file= token into path and range

    A '#' only starts a range when everything after it is a line range;
    otherwise it belongs to the path ("./notes#Lab.txt" is a file name).
    The path is returned as written, escaped spaces included.

    Returns:
        (path, from_line, has_dash, to_line)

    Raises:
        DirectiveSyntaxError: If the path is empty
    """
    body = token[len(key):]
    path = body
    from_line: Optional[int] = None
    to_line: Optional[int] = None
    dash = False

    hash_pos = body.rfind('#')
    if hash_pos != -1:
        scanned = RangeScanner(body[hash_pos + 1:]).scan()
        if scanned is not None:
            path = body[:hash_pos]
            from_line, dash, to_line = scanned

    if not path:
        raise DirectiveSyntaxError("expected a file path", token, len(key))

    # A missing start means the whole file: the range stays open.
    has_dash = dash or from_line is None
    return path, from_line, has_dash, to_line


def directive_parse(meta: Optional[str], settings: Optional[AppSettings] = None) -> Optional[Directive]:
    """
    Parse code block metadata into a Directive

    Args:
        meta: Metadata string of the code block (may be None)
        settings: Grammar tokens; defaults to the global appsettings

    Returns:
        Directive, or None when no token starts with the file key

    Raises:
        DirectiveSyntaxError: If the file token is malformed

    Example:
        >>> directive_parse("file=./a.py#L5")
        Directive(path='./a.py', from_line=5, to_line=None, has_dash=False, ...)
        >>> directive_parse("title=plain") is None
        True
    """
    settings = settings or appsettings
    tokens = metaTokens_split(meta or '')

    token = next((t for t in tokens if t.startswith(settings.file_key)), None)
    if token is None:
        return None

    path, from_line, has_dash, to_line = fileToken_parse(token, settings.file_key)
    mode = ImportMode.GROUP if settings.inline_flag in tokens else ImportMode.CLASSIC

    LOG(f"Directive {token!r}: path={path!r} from={from_line} to={to_line} mode={mode.value}", level=3)

    return Directive(
        path=path,
        from_line=from_line,
        to_line=to_line,
        has_dash=has_dash,
        mode=mode,
        raw=token,
    )
