"""
Command-Line Host for Brainrot Comments
=======================================
Plays the part of the editor: loads a file into a document, places cursors
and selections from the command line, runs the add-comment action and writes
the result back (or prints it with --stdout).

Lines and columns on the command line are 1-based.

Examples:
    brainrot set-key
    brainrot add-comment app.py --cursor 12:1
    brainrot add-comment style.css --select 3:1-5:2 --stdout
"""

import asyncio
import logging
import re
import sys
from pathlib import Path
from typing import List, Optional

import click

from . import __version__
from .commands import add_brainrot_comment, clear_api_key, set_api_key
from .comment_syntax import delimiter_for, format_comment, known_languages, language_for_path
from .config import ConfigManager
from .credential_store import CredentialStore, mask_secret
from .editor import Position, Selection, TextDocument, TextEditor
from .errors import BrainrotError
from .file_io import read_source_file, safe_file_write
from .notifications import ClickNotifier
from .phrase_generator import PhraseGenerator

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

_POSITION = re.compile(r'^(\d+)(?::(\d+))?$')


def setup_logging(log_level: str = "WARNING", log_file: Optional[str] = None) -> None:
    """
    Setup logging for the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional log file path
    """
    numeric_level = getattr(logging, log_level.upper(), logging.WARNING)
    formatter = logging.Formatter(LOG_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    # stderr keeps --stdout output clean
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
        except OSError as e:
            click.echo(f"Warning: Could not setup file logging: {e}", err=True)


def parse_position(value: str) -> Position:
    """Parse a 1-based 'LINE[:COL]' string into a 0-based Position."""
    match = _POSITION.match(value.strip())
    if not match:
        raise click.BadParameter(f"expected LINE or LINE:COL, got '{value}'")

    line = int(match.group(1))
    column = int(match.group(2) or 1)
    if line < 1 or column < 1:
        raise click.BadParameter(f"lines and columns start at 1, got '{value}'")
    return Position(line - 1, column - 1)


def parse_selection(value: str) -> Selection:
    """Parse a 1-based 'LINE:COL-LINE:COL' range into a Selection."""
    start, sep, end = value.partition('-')
    if not sep:
        raise click.BadParameter(f"expected LINE:COL-LINE:COL, got '{value}'")
    return Selection(parse_position(start), parse_position(end))


def build_selections(document: TextDocument, cursors: List[str], selects: List[str]) -> List[Selection]:
    selections = [parse_selection(value) for value in selects]
    selections += [Selection(p, p) for p in (parse_position(value) for value in cursors)]
    if not selections:
        selections = [Selection.caret(0, 0)]

    for selection in selections:
        for position in (selection.anchor, selection.active):
            if not document.is_valid_position(position):
                raise click.BadParameter(
                    f"position {position.line + 1}:{position.character + 1} is outside the document"
                )
    return selections


def _load_config(ctx: click.Context) -> ConfigManager:
    return ctx.obj['config']


def _credential_store(config_manager: ConfigManager) -> CredentialStore:
    return CredentialStore(
        config_manager.get('credentials.secrets_file'),
        config_manager.get('credentials.key_name')
    )


@click.group(invoke_without_command=True)
@click.option('--version', is_flag=True, help='Show version information')
@click.option('--config', '-c', 'config_file', type=click.Path(dir_okay=False, path_type=Path),
              help='Configuration file path (default: brainrot_config.json)')
@click.option('--log-level', type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR']),
              help='Logging level (overrides the config file)')
@click.pass_context
def cli(ctx, version, config_file, log_level):
    """
    Brainrot Comments

    Inserts an AI-generated brainrot comment at the cursor line of a source
    file, using the right comment syntax for the file's language.
    """
    if version:
        click.echo(f"Brainrot Comments v{__version__}")
        return

    config_manager = ConfigManager(str(config_file) if config_file else None)
    setup_logging(
        log_level or config_manager.get('logging.log_level', 'WARNING'),
        config_manager.get('logging.log_file')
    )
    ctx.obj = {'config': config_manager}

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command('add-comment')
@click.argument('file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--cursor', '-p', 'cursors', multiple=True, metavar='LINE[:COL]',
              help='Caret position (repeatable for multiple cursors)')
@click.option('--select', '-s', 'selects', multiple=True, metavar='LINE:COL-LINE:COL',
              help='Selected range (repeatable)')
@click.option('--language', '-l', help='Language tag (default: guessed from the file name)')
@click.option('--stdout', 'to_stdout', is_flag=True, help='Print the result instead of writing the file')
@click.pass_context
def add_comment(ctx, file, cursors, selects, language, to_stdout):
    """
    Add a brainrot comment at each cursor of FILE.

    Without --cursor or --select the comment goes on the first line.
    """
    config_manager = _load_config(ctx)
    notifier = ClickNotifier()
    logger = logging.getLogger('cli')

    try:
        content, encoding = read_source_file(str(file))
        document = TextDocument(content, language or language_for_path(str(file)), uri=str(file))
        editor = TextEditor(document, build_selections(document, list(cursors), list(selects)))

        logger.info(f"Adding comment to {file} ({document.language_id}, {len(editor.selections)} cursor(s))")

        generator = PhraseGenerator(config_manager, _credential_store(config_manager))
        inserted = asyncio.run(add_brainrot_comment(
            editor,
            generator,
            notifier,
            fallback_phrase=config_manager.get('comments.fallback_phrase'),
            max_chars=config_manager.get('context.max_chars'),
            window_lines=config_manager.get('context.window_lines')
        ))

        if not inserted:
            sys.exit(1)

        if to_stdout:
            click.echo(document.text, nl=False)
        else:
            safe_file_write(str(file), document.text, encoding)
            notifier.show_info(f"Brainrot comment added to {file}")

    except BrainrotError as e:
        notifier.show_error(e.message)
        sys.exit(1)


@cli.command('set-key')
@click.pass_context
def set_key(ctx):
    """Prompt for the OpenAI API key and store it."""
    config_manager = _load_config(ctx)

    def prompt() -> Optional[str]:
        try:
            return click.prompt('Enter your OpenAI API key', hide_input=True,
                                default='', show_default=False)
        except click.Abort:
            return None

    stored = set_api_key(
        _credential_store(config_manager),
        prompt,
        ClickNotifier(),
        config_manager.get('credentials.key_prefix')
    )
    if not stored:
        sys.exit(1)


@cli.command('clear-key')
@click.pass_context
def clear_key(ctx):
    """Remove the stored OpenAI API key."""
    clear_api_key(_credential_store(_load_config(ctx)), ClickNotifier())


@cli.command()
def languages():
    """List the language tags with dedicated comment syntax."""
    for tag in known_languages():
        click.echo(f"{tag:<18} {format_comment(delimiter_for(tag), '...')}")
    click.echo(f"{'(other)':<18} {format_comment(delimiter_for(None), '...')}")


@cli.command('show-config')
@click.pass_context
def show_config(ctx):
    """Show current configuration settings."""
    config_manager = _load_config(ctx)
    api_key = _credential_store(config_manager).get()
    config_manager.print_config_summary(key_status=mask_secret(api_key))


@cli.command('init-config')
@click.pass_context
def init_config(ctx):
    """Write the current configuration to the config file."""
    config_manager = _load_config(ctx)
    if not config_manager.save():
        click.echo(f"❌ Failed to write {config_manager.config_file}", err=True)
        sys.exit(1)
    click.echo(f"Configuration written to {config_manager.config_file}")
