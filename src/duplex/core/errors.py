"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/errors.py
Exception hierarchy shared by the scanner, hasher, rules and deletion service.
"""


class DuplexError(Exception):
    """Base class for all errors raised by duplex."""


class ScanError(DuplexError):
    """A search root is missing or is not a directory."""


class ManifestError(DuplexError):
    """A digest manifest file could not be opened."""


class HashError(DuplexError):
    """A file could not be read while computing its digest."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"{reason}: {path}")
        self.path = path
        self.reason = reason


class FileVanishedError(HashError):
    """The file disappeared between scanning and hashing."""

    def __init__(self, path: str):
        super().__init__(path, "File vanished")


class FileAccessError(HashError):
    """The file exists but cannot be opened or read."""


class RuleError(DuplexError):
    """Invalid rule command: empty argument, duplicate, bad pattern or index."""


class DeletionError(DuplexError):
    """The filesystem refused to remove a file."""
