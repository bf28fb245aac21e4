"""
Storage-specific exceptions
"""


class StorageError(Exception):
    """Base exception for storage-related errors"""
    pass


class MediaTooLarge(StorageError):
    """Raised when a file exceeds the maximum allowed media size"""
    pass


class MediaNotFound(StorageError):
    """Raised when a media file cannot be found"""
    pass


class MediaWriteError(StorageError):
    """Raised when a media file cannot be written to storage"""
    pass
