"""Exception types for the Decryption game."""


class DecryptionError(ValueError):
    """Base class for Decryption errors."""


class EmptyCorpusError(DecryptionError):
    """Raised when no usable words are found across all word lengths."""
