"""
Brainrot Comments package.

Inserts a short, AI-generated, slang-heavy comment at the cursor line of a
source file, using the comment syntax of the file's language.

Modules:
- comment_syntax: language tag -> comment delimiters
- context_extractor: bounded code snippet around the cursors
- phrase_generator: OpenAI request for the comment phrase
- insertion_engine: atomic insertion at every cursor
- commands: the add-comment and set-key actions

Usage:
    import asyncio
    from brainrot import (ConfigManager, CredentialStore, PhraseGenerator,
                          TextDocument, TextEditor, Notifier, add_brainrot_comment)

    config = ConfigManager()
    store = CredentialStore(config.get('credentials.secrets_file'))
    editor = TextEditor(TextDocument("x = 1\\n", "python"))
    asyncio.run(add_brainrot_comment(editor, PhraseGenerator(config, store), Notifier()))
"""

__version__ = "1.0.0"

from .comment_syntax import CommentDelimiter, delimiter_for, format_comment, language_for_path
from .commands import add_brainrot_comment, clear_api_key, set_api_key
from .config import ConfigManager
from .context_extractor import extract_context
from .credential_store import CredentialStore
from .editor import Position, Selection, TextDocument, TextEditor
from .errors import (
    BrainrotError,
    CredentialMissing,
    EditRejected,
    GenerationError,
    NoActiveEditor,
    RateLimited,
    ServiceError,
    Unauthorized,
)
from .insertion_engine import insert_comment
from .notifications import Notifier
from .phrase_generator import PhraseGenerator

__all__ = [
    'BrainrotError',
    'CommentDelimiter',
    'ConfigManager',
    'CredentialMissing',
    'CredentialStore',
    'EditRejected',
    'GenerationError',
    'NoActiveEditor',
    'Notifier',
    'PhraseGenerator',
    'Position',
    'RateLimited',
    'Selection',
    'ServiceError',
    'TextDocument',
    'TextEditor',
    'Unauthorized',
    'add_brainrot_comment',
    'clear_api_key',
    'delimiter_for',
    'extract_context',
    'format_comment',
    'insert_comment',
    'language_for_path',
    'set_api_key',
]
