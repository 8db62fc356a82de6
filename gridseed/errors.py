# Copyright (c) 2026 Signer — MIT License

"""Exceptions raised by gridseed.

Every error derives from GridSeedError and carries the offending field
name and value so callers can point at the bad input. Most also derive
from ValueError, so code written against plain ValueError keeps working.
"""


class GridSeedError(Exception):
    """Base class for all gridseed errors."""

    def __init__(self, message, field=None, value=None):
        super().__init__(message)
        self.message = message
        self.field = field
        self.value = value

    def __str__(self):
        if self.field is None:
            return self.message
        return f"{self.message} (field={self.field})"


class ValidationError(GridSeedError, ValueError):
    """Malformed input: bad diagram, position, language, charset or index."""


class EncodingError(GridSeedError, ValueError):
    """A value cannot be represented, or bytes do not decode."""


class SerializationError(GridSeedError, ValueError):
    """A serialized key string is corrupt or has the wrong layout."""


class DecryptionError(GridSeedError, ValueError):
    """A passphrase-protected payload failed its integrity check."""
