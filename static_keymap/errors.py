# ==================================================
# static_keymap/errors.py
# ==================================================
"""
Exception hierarchy for the keymap decoder. Each error also derives from the
builtin the original extension raised, so ``except ValueError`` /
``except KeyError`` callers keep working.
"""


class KeyMapError(Exception):
    """Base class for all keymap errors."""
    pass


class BufferTooShort(KeyMapError, ValueError):
    """Raised when the buffer cannot hold the prefix or the declared region."""

    def __init__(self, msg, expected=None):
        super().__init__(msg)
        self.expected = expected


class InvalidKeyType(KeyMapError, ValueError):
    """Raised when a key is not an unsigned 32-bit integer."""
    pass


class KeyNotFound(KeyMapError, KeyError):
    """Raised by strict lookups when the key is absent."""

    def __init__(self, key):
        super().__init__(key)
        self.key = key

    def __str__(self):
        return "%d" % self.key


class InvalidIterationMode(KeyMapError, ValueError):
    """Raised for an unknown iterator projection."""
    pass


class AlreadyInitialized(KeyMapError, RuntimeError):
    """Raised when initialize() is called on a table twice."""
    pass


class UnsortedKeys(KeyMapError, ValueError):
    """Raised by validating initialization when keys are out of order."""

    def __init__(self, msg, position=None):
        super().__init__(msg)
        self.position = position
