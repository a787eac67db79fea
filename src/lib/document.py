"""
Markdown document access

Locates fenced code blocks with markdown-it-py and rewrites their bodies in
the original source text, leaving every other byte of the document as is.

The info string of a fence is split the way mdast does it: the first word
is the language and the rest is the metadata, so

    ```python file=./a.py#L1-L4

has lang "python" and meta "file=./a.py#L1-L4".
"""

from typing import List, Optional, Sequence, Tuple

from markdown_it import MarkdownIt

from ..models.document import CodeBlock
from .extract import lines_split

_markdown = MarkdownIt("commonmark")


def info_split(info: str) -> Tuple[Optional[str], Optional[str]]:
    """
    Split a fence info string into language and metadata

    Example:
        >>> info_split("js file=./a.js  inline")
        ('js', 'file=./a.js  inline')
        >>> info_split("")
        (None, None)
    """
    parts = info.strip().split(None, 1)
    lang = parts[0] if parts else None
    meta = parts[1].strip() if len(parts) > 1 else None
    return lang, meta


def prefix_continue(opening: str) -> str:
    """
    Derive the prefix for body lines from the text before the opening fence

    Block quote markers are kept, list markers become spaces:
    "> " stays "> ", "- " becomes "  ", "1. " becomes "   ".
    """
    return ''.join(char if char in ' \t>' else ' ' for char in opening)


def fence_closes(line: str, markup: str) -> bool:
    """Check whether line is a closing fence for the given opening markup"""
    candidate = line.lstrip(' \t>').rstrip()
    return candidate.startswith(markup) and candidate == markup[0] * len(candidate)


def fence_fit(markup: str, value: str) -> str:
    r"""
    Return a fence the body cannot close

    If value holds a run of the fence character at least as long as
    markup, the fence grows to one character more than the longest run.

    Example:
        >>> fence_fit("```", "a\n```\nb")
        '````'
    """
    char = markup[0]
    longest = run = 0
    for c in value:
        run = run + 1 if c == char else 0
        longest = max(longest, run)
    if longest < len(markup):
        return markup
    return char * (longest + 1)


def codeBlocks_find(text: str) -> List[CodeBlock]:
    """
    Find all fenced code blocks of a Markdown document

    Indented code blocks are ignored: they carry no info string and so can
    never hold a directive.

    Args:
        text: Markdown source

    Returns:
        CodeBlock list in document order
    """
    lines = lines_split(text)
    blocks: List[CodeBlock] = []

    for token in _markdown.parse(text.replace('\r\n', '\n')):
        if token.type != 'fence' or token.map is None:
            continue

        start, end = token.map
        opening = lines[start]
        lang, meta = info_split(token.info)
        value = token.content[:-1] if token.content.endswith('\n') else token.content
        closed = end - start >= 2 and fence_closes(lines[end - 1], token.markup)

        blocks.append(CodeBlock(
            lang=lang,
            meta=meta,
            value=value,
            start_line=start,
            end_line=end,
            prefix=prefix_continue(opening[:opening.find(token.markup)]),
            closed=closed,
            markup=token.markup,
        ))

    return blocks


def codeBlocks_replace(text: str, replacements: Sequence[Tuple[CodeBlock, str]]) -> str:
    """
    Replace the bodies of code blocks in the document source

    Blocks are rewritten from the bottom up so earlier line positions stay
    valid. Fence lines are kept, and lengthened when the new body holds a
    run of fence characters that would close them early. An unclosed fence
    stays unclosed.

    Args:
        text: Markdown source the blocks were found in
        replacements: (block, new body) pairs

    Returns:
        The rewritten document, with "\\n" line endings
    """
    lines = lines_split(text)

    for block, value in sorted(replacements, key=lambda item: item[0].start_line, reverse=True):
        fence = fence_fit(block.markup, value)
        if fence != block.markup:
            opening = lines[block.start_line]
            at = opening.find(block.markup)
            lines[block.start_line] = opening[:at] + fence + opening[at + len(block.markup):]
            if block.closed:
                closing = lines[block.end_line - 1]
                lines[block.end_line - 1] = closing[:closing.find(block.markup[0])] + fence

        body_end = block.end_line - 1 if block.closed else block.end_line
        body: List[str] = []
        if value:
            body = [block.prefix + line if line else block.prefix.rstrip() for line in value.split('\n')]
        lines[block.start_line + 1:body_end] = body

    return '\n'.join(lines)
