"""
Content extraction for imported files

Two ways of cutting the text of an imported file:

1. Classic mode: a numeric line range (lines_extract)
2. Group mode: the placeholder's own body is a template; each template line
   naming a group is replaced by the next section of the file delimited by
   a pair of markers of that group

Group mode example:

    template (placeholder body)     imported file
    ---------------------------     --------------------
    import os                       # group setup
    # group setup                   x = 1
    print(x)                        # group setup
                                    # group teardown

    result:
        import os
        x = 1
        print(x)

Marker positions are collected into an immutable MarkerIndex and consumed
through a MarkerCursor, so a group name may delimit several sections which
successive references take in file order.
"""

from typing import List, Optional

from ..models.directive import (
    Directive,
    Element,
    Extraction,
    GroupElement,
    ImportMode,
    MarkerCursor,
    MarkerIndex,
    TextElement,
)
from .log import LOG, WARN


def lines_split(content: str) -> List[str]:
    """Split text into lines on "\\r\\n" or "\\n", keeping a trailing empty line"""
    return content.replace('\r\n', '\n').split('\n')


def lines_extract(
    content: str,
    from_line: Optional[int],
    has_dash: bool,
    to_line: Optional[int],
    preserve_trailing_newline: bool = False,
) -> str:
    """
    Extract a 1-based line range from content (classic mode)

    End of range:
        - no dash: only from_line
        - dash and to_line: to_line (inclusive)
        - dash, no to_line, content ends with a newline and
          preserve_trailing_newline is False: last non-synthetic line
        - otherwise: last line

    Out-of-range requests are not errors: they yield a partial or empty
    result, as slicing does. A from_line or to_line of 0 counts as absent.

    Returns:
        The selected lines joined with "\\n"

    Example:
        >>> lines_extract("a\\nb\\nc\\n", 2, True, None)
        'b\\nc'
    """
    lines = lines_split(content)
    start = from_line or 1

    if not has_dash:
        end = start
    elif to_line:
        end = to_line
    elif lines[-1] == '' and not preserve_trailing_newline:
        end = len(lines) - 1
    else:
        end = len(lines)

    return '\n'.join(lines[start - 1:end])


def group_find(line: str, token: str = "group") -> Optional[str]:
    """
    Find the group name carried by a marker line

    A marker is the token followed by at least one whitespace character and
    a name made of word characters and '-'. Every occurrence of the token in
    the line is tried in turn.

    Returns:
        The group name, or None if the line carries no usable marker

    Example:
        >>> group_find("<!-- group setup -->")
        'setup'
        >>> group_find("# grouping") is None
        True
    """
    start = line.find(token)
    while start != -1:
        pos = start + len(token)
        space_start = pos
        while pos < len(line) and line[pos].isspace():
            pos += 1
        name_start = pos
        while pos < len(line) and (line[pos].isalnum() or line[pos] in '_-'):
            pos += 1
        if name_start > space_start and pos > name_start:
            return line[name_start:pos]
        start = line.find(token, start + 1)
    return None


def markers_index(lines: List[str], token: str = "group") -> MarkerIndex:
    """
    Collect the 0-based positions of every marker line, per group

    Lines without a marker are ignored; only positions are recorded.
    """
    positions: dict = {}
    for index, line in enumerate(lines):
        if token not in line:
            continue
        group = group_find(line, token)
        if group is not None:
            positions.setdefault(group, []).append(index)
    return MarkerIndex(positions={name: tuple(found) for name, found in positions.items()})


def elements_extract(template: str, token: str = "group") -> List[Element]:
    """
    Classify each template line as a group reference or literal text

    Lines that contain the token without a usable name stay text.
    """
    elements: List[Element] = []
    for line in lines_split(template):
        group = group_find(line, token) if token in line else None
        if group is None:
            elements.append(TextElement(text=line))
        else:
            elements.append(GroupElement(group=group))
    return elements


def groups_replay(lines: List[str], elements: List[Element], token: str = "group") -> Extraction:
    """
    Assemble output by walking the template against the file's markers

    TextElement lines are copied. Each GroupElement takes the next pair of
    its group's markers and contributes the file lines strictly between
    them. A reference left without a pair contributes nothing and is
    reported in Extraction.missing.

    Args:
        lines: Lines of the imported file
        elements: Template elements from elements_extract()
        token: Marker token

    Returns:
        Extraction with the assembled text and the missing group names
    """
    cursor = MarkerCursor(index=markers_index(lines, token))
    output: List[str] = []
    missing: List[str] = []

    for element in elements:
        if isinstance(element, TextElement):
            output.append(element.text)
            continue

        pair, cursor = cursor.pair_take(element.group)
        if pair is None:
            WARN(f"Group {element.group} not found in document")
            missing.append(element.group)
            continue

        start, end = pair
        LOG(f"Group {element.group}: lines {start + 1}-{end + 1}", level=3)
        output.extend(lines[start + 1:end])

    return Extraction(text='\n'.join(output), missing=missing)


def content_extract(
    directive: Directive,
    content: str,
    template: str,
    preserve_trailing_newline: bool = False,
    token: str = "group",
) -> Extraction:
    """
    Extract the part of content that a directive asks for

    Args:
        directive: Parsed directive of the placeholder
        content: Full text of the imported file
        template: Current body of the placeholder (used in group mode)
        preserve_trailing_newline: See lines_extract()
        token: Marker token for group mode

    Returns:
        Extraction (missing is always empty in classic mode)
    """
    if directive.mode is ImportMode.GROUP:
        return groups_replay(lines_split(content), elements_extract(template, token), token)

    return Extraction(
        text=lines_extract(
            content,
            directive.from_line,
            directive.has_dash,
            directive.to_line,
            preserve_trailing_newline,
        )
    )
