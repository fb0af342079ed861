"""User-facing notices for split outcomes."""

import logging
from abc import ABC, abstractmethod

import typer

logger = logging.getLogger(__name__)


# Notice texts
NO_ACTIVE_NOTE = "Please open a markdown note."
NOT_EDITING = "Please switch to editing mode to split this note."
NO_FILE = "No file found for this note."
NO_DELIMITER = "No delimiter set. Please set a delimiter in the settings."
NO_CONTENT = "No content to split."
SINGLE_SECTION = "Only one section of content found. Nothing to split."


def split_summary(notes_created: int) -> str:
    """Final notice after a split, e.g. "Split into 3 notes."."""
    return f"Split into {notes_created} note{'' if notes_created == 1 else 's'}."


def create_error(reason: str) -> str:
    return f"Error creating file: {reason}"


def delete_error(reason: str) -> str:
    return f"Error deleting original note: {reason}"


class Notifier(ABC):
    """One-way sink for human-readable notices."""

    @abstractmethod
    def notify(self, message: str) -> None:
        pass


class ConsoleNotifier(Notifier):
    """Prints notices to the terminal."""

    def notify(self, message: str) -> None:
        logger.debug(f"Notice: {message}")
        typer.echo(message)


class CollectingNotifier(Notifier):
    """Keeps notices in memory, e.g. to return them from an HTTP request."""

    def __init__(self):
        self.messages: list[str] = []

    def notify(self, message: str) -> None:
        logger.info(f"Notice: {message}")
        self.messages.append(message)
