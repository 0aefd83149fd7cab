"""
User Actions
============
The actions a host binds to keys or menu entries:

- add_brainrot_comment: generate a phrase for the code under the cursors and
  insert it as a comment on every cursor's line
- set_api_key: prompt for, validate and store the OpenAI API key
- clear_api_key: forget the stored key

add_brainrot_comment always finishes the edit when there is an editor:
generation failures are reported and the fallback phrase is inserted in
place of the generated one. Overlapping invocations are independent; nothing
serializes them.
"""

import logging
from typing import Callable, Optional

from .comment_syntax import delimiter_for
from .context_extractor import MAX_CONTEXT_CHARS, WINDOW_LINES, extract_context
from .credential_store import (
    DEFAULT_KEY_PREFIX,
    CredentialStore,
    mask_secret,
    validate_api_key,
)
from .editor import TextEditor
from .errors import BrainrotError, EditRejected, InvalidCredential, NoActiveEditor
from .insertion_engine import insert_comment
from .models import FALLBACK_PHRASE
from .notifications import Notifier
from .phrase_generator import PhraseGenerator

logger = logging.getLogger('commands')

KeyPrompt = Callable[[], Optional[str]]


async def add_brainrot_comment(editor: Optional[TextEditor], generator: PhraseGenerator,
                               notifier: Notifier,
                               fallback_phrase: str = FALLBACK_PHRASE,
                               max_chars: int = MAX_CONTEXT_CHARS,
                               window_lines: int = WINDOW_LINES) -> bool:
    """
    Insert a generated brainrot comment at every cursor of the editor.

    Args:
        editor: Active editor, or None if no document is open
        generator: Phrase generator used for the comment text
        notifier: Where progress and errors are reported
        fallback_phrase: Text inserted when generation fails
        max_chars: Cap on the context snippet sent for generation
        window_lines: Lines around the caret used when nothing else is found

    Returns:
        True if the comment was inserted, False if there was no editor or the
        edit was rejected
    """
    if editor is None:
        error = NoActiveEditor()
        logger.warning(error.message)
        notifier.show_warning(error.message)
        return False

    document = editor.document
    language = document.language_id
    delimiter = delimiter_for(language)

    logger.debug("State: ExtractingContext")
    snippet = extract_context(editor.selections, document, max_chars, window_lines)

    logger.debug("State: AwaitingGeneration")
    with notifier.progress("Generating brainrot comment..."):
        result = await generator.try_generate(snippet, language)

    if result.ok:
        logger.debug("State: Inserting")
    else:
        logger.warning(f"Generation failed, using fallback phrase: {result.error.message}")
        logger.debug("State: Inserting (fallback)")
        notifier.show_error(result.error.message)

    phrase = result.phrase_or(fallback_phrase or FALLBACK_PHRASE)
    applied = insert_comment(editor, delimiter, phrase)

    logger.debug("State: Idle")
    if not applied:
        notifier.show_error(EditRejected().message)
        return False
    return True


def set_api_key(store: CredentialStore, prompt: KeyPrompt, notifier: Notifier,
                key_prefix: str = DEFAULT_KEY_PREFIX) -> bool:
    """
    Prompt for an API key and store it.

    Args:
        store: Credential store to write to
        prompt: Callable asking the user for the key; returns None if cancelled
        notifier: Where the outcome is reported
        key_prefix: Prefix every valid key starts with

    Returns:
        True if a key was stored
    """
    value = prompt()
    if value is None:
        logger.info("API key entry cancelled")
        return False

    try:
        api_key = validate_api_key(value, key_prefix)
    except InvalidCredential as e:
        notifier.show_error(e.message)
        return False

    try:
        store.store(api_key)
    except BrainrotError as e:
        notifier.show_error(e.message)
        return False

    logger.info(f"API key set: {mask_secret(api_key)}")
    notifier.show_info("OpenAI API key saved successfully!")
    return True


def clear_api_key(store: CredentialStore, notifier: Notifier) -> bool:
    """Remove the stored API key. Returns True if there was one."""
    try:
        removed = store.delete()
    except BrainrotError as e:
        notifier.show_error(e.message)
        return False

    if removed:
        notifier.show_info("OpenAI API key removed")
        return True
    notifier.show_warning("No OpenAI API key is stored")
    return False
