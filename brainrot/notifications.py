"""
User Notifications
==================
How actions talk back to the user: transient info, warning and error
messages plus a progress indicator around slow steps.

ClickNotifier writes them to stderr so that --stdout output stays clean.
"""

import logging
from contextlib import contextmanager
from typing import Iterator

import click


class Notifier:
    """Notification sink that only logs. Hosts subclass it to show messages."""

    def __init__(self):
        self.logger = logging.getLogger('notifications')

    def show_info(self, message: str) -> None:
        self.logger.info(message)

    def show_warning(self, message: str) -> None:
        self.logger.warning(message)

    def show_error(self, message: str) -> None:
        self.logger.error(message)

    @contextmanager
    def progress(self, title: str) -> Iterator[None]:
        self.logger.debug(f"Started: {title}")
        try:
            yield
        finally:
            self.logger.debug(f"Finished: {title}")


class ClickNotifier(Notifier):
    """Prints notifications to the terminal with click."""

    def show_info(self, message: str) -> None:
        self.logger.debug(message)
        click.secho(f"✅ {message}", fg='green', err=True)

    def show_warning(self, message: str) -> None:
        self.logger.debug(message)
        click.secho(f"⚠️  {message}", fg='yellow', err=True)

    def show_error(self, message: str) -> None:
        self.logger.debug(message)
        click.secho(f"❌ {message}", fg='red', err=True)

    @contextmanager
    def progress(self, title: str) -> Iterator[None]:
        click.echo(f"🤖 {title}", err=True)
        with super().progress(title):
            yield
