"""
Comment Insertion
=================
Writes the assembled comment at the start of each cursor's line, right after
its indentation. The rest of the line is left byte-for-byte as it was and
follows the inserted text directly.
"""

import logging
import re

from .comment_syntax import CommentDelimiter, format_comment
from .editor import EditBuilder, Position, TextEditor

_INDENTATION = re.compile(r'^\s*')

logger = logging.getLogger('insertion_engine')


def indentation_width(line_text: str) -> int:
    """Return the length of the leading whitespace run of a line."""
    return _INDENTATION.match(line_text).end()


def insert_comment(editor: TextEditor, delimiter: CommentDelimiter, phrase: str) -> bool:
    """
    Insert a comment at every cursor as one atomic edit.

    Each insertion point is computed from its own cursor's line, so cursors
    on lines with different indentation each get their own column.

    Args:
        editor: Editor whose selections mark the target lines
        delimiter: Comment delimiters for the document's language
        phrase: Comment text

    Returns:
        True if the edit was applied, False if the document rejected it
    """
    comment = format_comment(delimiter, phrase)
    document = editor.document

    def build(builder: EditBuilder) -> None:
        for selection in editor.selections:
            line = selection.active.line
            column = indentation_width(document.line_at(line))
            builder.insert(Position(line, column), comment)

    applied = editor.edit(build)
    if applied:
        logger.info(f"Inserted comment at {len(editor.selections)} cursor(s)")
    return applied
