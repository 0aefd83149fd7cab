"""
In-Memory Editor Model
======================
The host-side abstractions the add-on works against: a text document with a
language tag, the editor's selections (one per cursor), and an atomic
batched edit.

Positions are zero-based (line, character) pairs. A Selection has an anchor
and an active end; the active end is where the caret sits. A caret with no
selected text is an empty Selection.

Edits are collected through an EditBuilder and applied all at once. If any
insertion is invalid, or the document is read-only, or the document changed
while the edit was being built, nothing is applied.
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

_LINE_BREAK = re.compile(r'\r\n|\r|\n')

logger = logging.getLogger('editor')


@dataclass(frozen=True, order=True)
class Position:
    line: int
    character: int


@dataclass(frozen=True)
class Selection:
    """
    A selected range, or a bare caret when anchor == active.

    Attributes:
        anchor: Position where the selection started
        active: Position of the caret
    """
    anchor: Position
    active: Position

    @classmethod
    def caret(cls, line: int, character: int = 0) -> 'Selection':
        position = Position(line, character)
        return cls(position, position)

    @property
    def start(self) -> Position:
        return min(self.anchor, self.active)

    @property
    def end(self) -> Position:
        return max(self.anchor, self.active)

    @property
    def is_empty(self) -> bool:
        return self.anchor == self.active


class TextDocument:
    """
    A text buffer split into lines.

    Line breaks (\\n, \\r\\n or \\r) are kept as they are in the text; line
    text returned by line_at never includes them. An empty document has a
    single empty line.
    """

    def __init__(self, text: str = "", language_id: str = 'plaintext',
                 uri: Optional[str] = None, read_only: bool = False):
        """
        Initialize a document.

        Args:
            text: Initial document content
            language_id: Language tag of the document
            uri: Optional identifier, usually the file path
            read_only: If True every edit is rejected
        """
        self.language_id = language_id
        self.uri = uri
        self.read_only = read_only
        self.version = 0
        self._set_text(text)

    def _set_text(self, text: str) -> None:
        self._text = text
        self._line_starts = [0]
        self._line_ends = []
        for match in _LINE_BREAK.finditer(text):
            self._line_ends.append(match.start())
            self._line_starts.append(match.end())
        self._line_ends.append(len(text))

    @property
    def text(self) -> str:
        return self._text

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    def line_at(self, line: int) -> str:
        """
        Return the text of a line without its line break.

        Raises:
            IndexError: If the line does not exist
        """
        if not 0 <= line < self.line_count:
            raise IndexError(f"Line {line} out of range (document has {self.line_count} lines)")
        return self._text[self._line_starts[line]:self._line_ends[line]]

    def is_valid_position(self, position: Position) -> bool:
        if not 0 <= position.line < self.line_count:
            return False
        line_length = self._line_ends[position.line] - self._line_starts[position.line]
        return 0 <= position.character <= line_length

    def offset_at(self, position: Position) -> int:
        if not self.is_valid_position(position):
            raise IndexError(f"Position {position} is outside the document")
        return self._line_starts[position.line] + position.character

    def get_text(self, start: Position, end: Position) -> str:
        """Return the text between two positions."""
        return self._text[self.offset_at(start):self.offset_at(end)]

    def apply_insertions(self, insertions: Sequence[Tuple[Position, str]]) -> None:
        """
        Apply several insertions against the current text as one change.

        Insertions at the same position keep their relative order.
        """
        ordered = sorted(
            ((self.offset_at(position), index, text)
             for index, (position, text) in enumerate(insertions)),
            reverse=True
        )

        text = self._text
        for offset, _, inserted in ordered:
            text = text[:offset] + inserted + text[offset:]

        self._set_text(text)
        self.version += 1


class EditBuilder:
    """Collects insertions for one batched edit."""

    def __init__(self):
        self.insertions: List[Tuple[Position, str]] = []

    def insert(self, position: Position, text: str) -> None:
        self.insertions.append((position, text))


class TextEditor:
    """
    An open document together with its active selections.

    Attributes:
        document: The document shown in this editor
        selections: Active selections; there is always at least one
    """

    def __init__(self, document: TextDocument, selections: Optional[Sequence[Selection]] = None):
        self.document = document
        self.selections: List[Selection] = list(selections) if selections else [Selection.caret(0, 0)]

    @property
    def selection(self) -> Selection:
        """The primary selection."""
        return self.selections[0]

    def edit(self, callback: Callable[[EditBuilder], None]) -> bool:
        """
        Build and apply one atomic edit.

        Args:
            callback: Function receiving an EditBuilder to record insertions

        Returns:
            True if the edit was applied, False if it was rejected (in which
            case the document is unchanged)
        """
        version = self.document.version
        builder = EditBuilder()
        callback(builder)

        if self.document.read_only:
            logger.warning(f"Edit rejected: document is read-only ({self.document.uri})")
            return False

        if self.document.version != version:
            logger.warning("Edit rejected: document changed while the edit was built")
            return False

        for position, _ in builder.insertions:
            if not self.document.is_valid_position(position):
                logger.warning(f"Edit rejected: invalid position {position}")
                return False

        if builder.insertions:
            self.document.apply_insertions(builder.insertions)
        return True
