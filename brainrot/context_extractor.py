"""
Context Extraction
==================
Builds the snippet of code the generation service comments on.

Priority order:
1. Text of the non-empty selections, separated by a blank line
2. Otherwise the stripped line under each caret
3. Otherwise a small window of raw lines around the first caret
4. Otherwise the placeholder 'code'

Every append is checked against the character cap first; content that would
not fit is skipped whole, never cut.
"""

from typing import List, Sequence

from .editor import Selection, TextDocument

MAX_CONTEXT_CHARS = 2000
WINDOW_LINES = 2
PLACEHOLDER = "code"

SELECTION_SEPARATOR = "\n\n"
LINE_SEPARATOR = "\n"


class _BoundedText:
    """Accumulates pieces of text while the joined result stays under a cap."""

    def __init__(self, max_chars: int, separator: str):
        self.max_chars = max_chars
        self.separator = separator
        self.parts: List[str] = []
        self.length = 0

    def append(self, text: str) -> bool:
        extra = len(text) + (len(self.separator) if self.parts else 0)
        if self.length + extra > self.max_chars:
            return False
        self.parts.append(text)
        self.length += extra
        return True

    def __str__(self) -> str:
        return self.separator.join(self.parts)


def extract_context(selections: Sequence[Selection], document: TextDocument,
                    max_chars: int = MAX_CONTEXT_CHARS,
                    window_lines: int = WINDOW_LINES) -> str:
    """
    Extract a bounded snippet of code around the selections.

    Args:
        selections: Active selections/carets of the editor
        document: Document the selections belong to
        max_chars: Maximum snippet length in characters
        window_lines: Lines taken above and below the first caret in the
            fallback window

    Returns:
        Snippet of at most max_chars characters, or 'code' if nothing usable
        was found
    """
    selected = _BoundedText(max_chars, SELECTION_SEPARATOR)
    for selection in selections:
        if selection.is_empty:
            continue
        text = document.get_text(selection.start, selection.end)
        if text:
            selected.append(text)

    snippet = str(selected)
    if snippet:
        return snippet

    current_lines = _BoundedText(max_chars, LINE_SEPARATOR)
    for selection in selections:
        if not selection.is_empty:
            continue
        line = document.line_at(selection.active.line).strip()
        if line:
            current_lines.append(line)

    snippet = str(current_lines)
    if snippet:
        return snippet

    if selections:
        snippet = _surrounding_lines(document, selections[0].active.line, max_chars, window_lines)
        if snippet.strip():
            return snippet

    return PLACEHOLDER


def _surrounding_lines(document: TextDocument, line: int, max_chars: int, window_lines: int) -> str:
    first = max(0, line - window_lines)
    last = min(document.line_count - 1, line + window_lines)

    window = _BoundedText(max_chars, LINE_SEPARATOR)
    for number in range(first, last + 1):
        if not window.append(document.line_at(number)):
            break
    return str(window)
