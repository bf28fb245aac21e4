"""
Media Storage Service

Provides local filesystem storage for media records owned by users and
grouped in virtual directories.
"""

from .service import MediaStorageService
from .errors import (
    StorageError,
    MediaTooLarge,
    MediaNotFound,
    MediaWriteError,
)

__all__ = [
    'MediaStorageService',
    'StorageError',
    'MediaTooLarge',
    'MediaNotFound',
    'MediaWriteError',
]
