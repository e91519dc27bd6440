"""
Custom exception hierarchy for imagecat.

Everything raised from here is fatal for a catalog run: per-file problems such
as a missing capture date are logged and skipped, never raised.
"""


class ImageCatError(Exception):
    """Base exception for all imagecat errors."""
    pass


class SourceDirectoryError(ImageCatError):
    """Raised when the source root cannot be listed."""
    pass


class FileOperationError(ImageCatError):
    """Raised when file copy/move/delete operations fail."""
    pass


class DirectoryCreationError(FileOperationError):
    """Raised when a catalog directory cannot be created."""
    pass


class FileHashError(ImageCatError):
    """Raised when file hashing fails."""
    pass


class CollisionLimitError(ImageCatError):
    """Raised when no free or matching name is found below the counter ceiling."""
    pass
