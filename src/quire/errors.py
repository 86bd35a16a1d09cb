# ABOUTME: Exception hierarchy for EPUB loading and saving.
# ABOUTME: Callers catch EpubError; low-level causes stay chained via __cause__.


class EpubError(Exception):
    """Base class for every error raised by quire."""


class EpubNotFoundError(EpubError, FileNotFoundError):
    """Raised when the EPUB file to load does not exist."""


class InvalidEpubError(EpubError):
    """Raised when an archive lacks the structure an EPUB must have."""


class EpubValidationError(EpubError):
    """Raised when a book fails validation before it is saved."""


class EpubOperationError(EpubError):
    """Raised when an unexpected failure interrupts a load or save."""


class EpubLoadError(EpubOperationError):
    """Raised when an EPUB cannot be loaded for a reason other than its structure."""


class EpubSaveError(EpubOperationError):
    """Raised when writing an EPUB archive fails."""
