"""
Comment Syntax Table
====================
Static mapping from a language tag (the editor's file-type identifier, e.g.
'python' or 'css') to the delimiters that open and, for bracketed comment
forms, close a comment in that language.

Unknown tags fall back to the '//' line comment.

Usage:
    from brainrot.comment_syntax import delimiter_for, format_comment

    delimiter = delimiter_for('css')
    format_comment(delimiter, 'no cap')  # '/* no cap */'
"""

import os
from dataclasses import dataclass
from types import MappingProxyType
from typing import List, Mapping, Optional


@dataclass(frozen=True)
class CommentDelimiter:
    """
    Comment delimiters for one language.

    Attributes:
        prefix: Characters that open the comment (e.g. '#', '<!--')
        suffix: Characters that close it, including their leading space
            (e.g. ' -->'), or '' for line comments
    """
    prefix: str
    suffix: str = ""

    @property
    def is_block(self) -> bool:
        return bool(self.suffix)


SLASH = CommentDelimiter("//")
HASH = CommentDelimiter("#")
DASH = CommentDelimiter("--")
MARKUP = CommentDelimiter("<!--", " -->")
C_BLOCK = CommentDelimiter("/*", " */")

DEFAULT_DELIMITER = SLASH


def _build_table() -> Mapping[str, CommentDelimiter]:
    table = {}

    for tag in ('javascript', 'typescript', 'javascriptreact', 'typescriptreact',
                'c', 'cpp', 'csharp', 'java', 'go', 'rust', 'swift', 'kotlin',
                'dart', 'scala', 'php'):
        table[tag] = SLASH

    for tag in ('python', 'shellscript', 'bash', 'ruby', 'perl', 'yaml', 'yml',
                'dockerfile', 'r', 'toml', 'powershell', 'makefile'):
        table[tag] = HASH

    for tag in ('lua', 'sql', 'haskell'):
        table[tag] = DASH

    for tag in ('html', 'xml', 'markdown'):
        table[tag] = MARKUP

    table['css'] = C_BLOCK

    # Preprocessors accept // line comments even though plain CSS does not
    for tag in ('scss', 'sass', 'less'):
        table[tag] = SLASH

    return MappingProxyType(table)


COMMENT_DELIMITERS: Mapping[str, CommentDelimiter] = _build_table()


_EXTENSION_LANGUAGES: Mapping[str, str] = MappingProxyType({
    '.js': 'javascript',
    '.mjs': 'javascript',
    '.cjs': 'javascript',
    '.jsx': 'javascriptreact',
    '.ts': 'typescript',
    '.tsx': 'typescriptreact',
    '.c': 'c',
    '.h': 'c',
    '.cpp': 'cpp',
    '.cc': 'cpp',
    '.cxx': 'cpp',
    '.hpp': 'cpp',
    '.cs': 'csharp',
    '.java': 'java',
    '.go': 'go',
    '.rs': 'rust',
    '.swift': 'swift',
    '.kt': 'kotlin',
    '.kts': 'kotlin',
    '.dart': 'dart',
    '.scala': 'scala',
    '.php': 'php',
    '.py': 'python',
    '.pyi': 'python',
    '.sh': 'shellscript',
    '.bash': 'shellscript',
    '.zsh': 'shellscript',
    '.rb': 'ruby',
    '.pl': 'perl',
    '.pm': 'perl',
    '.yaml': 'yaml',
    '.yml': 'yaml',
    '.r': 'r',
    '.toml': 'toml',
    '.ps1': 'powershell',
    '.lua': 'lua',
    '.sql': 'sql',
    '.hs': 'haskell',
    '.html': 'html',
    '.htm': 'html',
    '.xml': 'xml',
    '.md': 'markdown',
    '.css': 'css',
    '.scss': 'scss',
    '.sass': 'sass',
    '.less': 'less',
})

_FILENAME_LANGUAGES: Mapping[str, str] = MappingProxyType({
    'dockerfile': 'dockerfile',
    'makefile': 'makefile',
    'gnumakefile': 'makefile',
})

PLAINTEXT = 'plaintext'


def delimiter_for(tag: Optional[str]) -> CommentDelimiter:
    """
    Return the comment delimiters for a language tag.

    Args:
        tag: Language tag; matching is case-insensitive

    Returns:
        CommentDelimiter for the tag, or DEFAULT_DELIMITER if the tag is unknown
    """
    if not tag:
        return DEFAULT_DELIMITER
    return COMMENT_DELIMITERS.get(tag.lower(), DEFAULT_DELIMITER)


def format_comment(delimiter: CommentDelimiter, phrase: str) -> str:
    """Assemble the full comment text: prefix, one space, phrase, suffix."""
    return f"{delimiter.prefix} {phrase}{delimiter.suffix}"


def language_for_path(path: str) -> str:
    """
    Guess the language tag of a file from its name.

    Args:
        path: File path or bare file name

    Returns:
        Language tag, or 'plaintext' when the file type is not recognized
    """
    name = os.path.basename(path).lower()
    if name in _FILENAME_LANGUAGES:
        return _FILENAME_LANGUAGES[name]

    extension = os.path.splitext(name)[1]
    return _EXTENSION_LANGUAGES.get(extension, PLAINTEXT)


def known_languages() -> List[str]:
    """Return all language tags with a dedicated entry, sorted."""
    return sorted(COMMENT_DELIMITERS)
