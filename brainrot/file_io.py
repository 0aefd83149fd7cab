"""
File Reading and Writing
========================
Loads source files for the CLI host and writes edited content back
atomically (temp file, then rename).

Content is read and written with newline translation disabled so that line
endings survive the round trip unchanged.
"""

import logging
import os
from pathlib import Path
from typing import Tuple

from .errors import BrainrotError

ENCODINGS = ('utf-8', 'cp1252', 'latin-1')

logger = logging.getLogger('file_io')


def read_source_file(file_path: str) -> Tuple[str, str]:
    """
    Read a source file, trying several encodings.

    Args:
        file_path: Path of the file to read

    Returns:
        Tuple of (content, encoding used)

    Raises:
        BrainrotError: If the file cannot be read
    """
    path = Path(file_path)
    if not path.is_file():
        raise BrainrotError(f"Not a file: {file_path}")

    for encoding in ENCODINGS:
        try:
            with open(path, 'r', encoding=encoding, newline='') as f:
                content = f.read()
        except UnicodeDecodeError:
            continue
        except OSError as e:
            raise BrainrotError(f"Could not read {file_path}: {e}") from e

        logger.info(f"Read {file_path} with {encoding} encoding ({len(content)} characters)")
        return content, encoding

    raise BrainrotError(f"Could not decode {file_path} with any supported encoding")


def safe_file_write(file_path: str, content: str, encoding: str = 'utf-8') -> str:
    """
    Write content to a file atomically.

    Content the requested encoding cannot represent (an emoji in a cp1252
    file, say) is written as utf-8 instead.

    Args:
        file_path: Destination path
        content: Content to write
        encoding: Preferred text encoding, usually the one the file was read with

    Returns:
        The encoding actually used

    Raises:
        BrainrotError: If the file cannot be written
    """
    path = Path(file_path)
    temp_path = path.with_suffix(path.suffix + '.tmp')

    try:
        content.encode(encoding)
    except UnicodeEncodeError:
        logger.warning(f"Content of {file_path} cannot be encoded as {encoding}, writing utf-8")
        encoding = 'utf-8'

    try:
        with open(temp_path, 'w', encoding=encoding, newline='') as f:
            f.write(content)
        os.replace(temp_path, path)
    except (OSError, UnicodeError) as e:
        raise BrainrotError(f"Failed to write {file_path}: {e}") from e
    finally:
        if temp_path.exists():
            temp_path.unlink()

    logger.info(f"Successfully wrote file: {file_path} ({encoding})")
    return encoding
