"""
Directive and extraction data models

Structures produced by the directive parser and consumed by the extractors:
the parsed directive itself, the template elements of a group-mode block,
and the marker bookkeeping used while replaying a template.
"""

from enum import Enum
from dataclasses import dataclass, field, replace
from typing import Dict, List, Mapping, Optional, Tuple, Union


class ImportMode(Enum):
    """
    How a directive selects content from the imported file
    """
    CLASSIC = "classic"    # file=a.py#L3-L9
    GROUP = "group"        # file=a.py inline


@dataclass(frozen=True)
class Directive:
    """
    Parsed file= directive of one placeholder code block

    Attributes:
        path: Path as written, backslash-escaped spaces included
        from_line: First line (1-based), None when not given
        to_line: Last line (1-based, inclusive), None when not given
        has_dash: Range is open towards to_line / end of file. Also True
                  when no from_line is given, so the whole file is imported.
        mode: Classic line range or group (inline) extraction
        raw: The metadata token the directive was parsed from

    Example:
        "file=./a.py#L3-L9" →
        Directive(path="./a.py", from_line=3, to_line=9, has_dash=True,
                  mode=ImportMode.CLASSIC, raw="file=./a.py#L3-L9")
    """
    path: str
    from_line: Optional[int] = None
    to_line: Optional[int] = None
    has_dash: bool = True
    mode: ImportMode = ImportMode.CLASSIC
    raw: str = ""


@dataclass(frozen=True)
class TextElement:
    """Template line copied verbatim into the output"""
    text: str


@dataclass(frozen=True)
class GroupElement:
    """Template line that stands for the next section of a named group"""
    group: str


Element = Union[TextElement, GroupElement]


@dataclass(frozen=True)
class MarkerIndex:
    """
    Line positions of named markers in one source file

    Attributes:
        positions: Group name → ascending 0-based line indexes of the
                   lines carrying that group's marker
    """
    positions: Mapping[str, Tuple[int, ...]] = field(default_factory=dict)

    def positions_get(self, group: str) -> Tuple[int, ...]:
        """All marker positions of a group (empty tuple if unknown)"""
        return self.positions.get(group, ())


@dataclass(frozen=True)
class MarkerCursor:
    """
    Consumption state of a MarkerIndex

    Instead of popping positions off the index, the cursor records how many
    positions of each group have been used. pair_take() never mutates; it
    returns the pair together with the advanced cursor.

    Attributes:
        index: The marker index being consumed
        consumed: Group name → number of positions already taken
    """
    index: MarkerIndex
    consumed: Mapping[str, int] = field(default_factory=dict)

    def pair_take(self, group: str) -> Tuple[Optional[Tuple[int, int]], "MarkerCursor"]:
        """
        Take the next unconsumed pair of marker positions for a group

        Returns:
            ((start, end), advanced cursor), or (None, self) when fewer than
            two positions remain
        """
        positions = self.index.positions_get(group)
        offset = self.consumed.get(group, 0)
        if len(positions) - offset < 2:
            return None, self

        consumed: Dict[str, int] = dict(self.consumed)
        consumed[group] = offset + 2
        pair = (positions[offset], positions[offset + 1])
        return pair, replace(self, consumed=consumed)


@dataclass
class Extraction:
    """
    Text extracted for one placeholder

    Attributes:
        text: Assembled output, lines joined with "\\n"
        missing: Group names referenced without a remaining marker pair,
                 in template order (one entry per failed reference)
    """
    text: str
    missing: List[str] = field(default_factory=list)
