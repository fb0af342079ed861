"""Exception hierarchy for note-splitter."""


class NoteSplitterError(Exception):
    """Base class for all note-splitter errors."""


class SettingsError(NoteSplitterError):
    """Persisted settings could not be read, parsed or written."""


class StorageError(NoteSplitterError):
    """A storage backend rejected an operation."""


class ItemNotFoundError(StorageError):
    """The requested vault item does not exist."""

    def __init__(self, path: str):
        super().__init__(f"{path} does not exist")
        self.path = path


class DestinationError(NoteSplitterError):
    """The destination folder could not be prepared for writing."""

    def __init__(self, folder: str, reason: str):
        super().__init__(f"Could not create folder {folder or '/'}: {reason}")
        self.folder = folder
        self.reason = reason
