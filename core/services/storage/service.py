"""
Media Storage Service

Provides local filesystem storage for media files.
"""

import hashlib
import logging
import mimetypes
import os
from pathlib import Path
from typing import Optional, Union, BinaryIO
from django.conf import settings
from django.contrib.auth.models import AbstractBaseUser
from django.core.files.uploadedfile import UploadedFile
from django.db import transaction

from core.models import Media
from .errors import MediaTooLarge, MediaNotFound, MediaWriteError
from .paths import build_media_path, get_absolute_path, sanitize_filename


logger = logging.getLogger(__name__)

# Size in bytes for reading/writing file chunks
FILE_CHUNK_SIZE = 8192


class MediaStorageService:
    """
    Service for managing media storage and virtual directories.
    """

    def __init__(self, data_dir: Optional[Union[str, Path]] = None, max_size_mb: Optional[int] = None):
        """
        Initialize the storage service.

        Args:
            data_dir: Base directory for media storage (defaults to MEDIA_DATA_DIR setting)
            max_size_mb: Maximum file size in MB (defaults to MEDIA_MAX_FILE_SIZE_MB setting)
        """
        self.data_dir = Path(data_dir or getattr(settings, 'MEDIA_DATA_DIR', settings.BASE_DIR / 'data'))
        self.max_size_bytes = (max_size_mb or getattr(settings, 'MEDIA_MAX_FILE_SIZE_MB', 25)) * 1024 * 1024

        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _compute_hash(self, file_obj: BinaryIO) -> str:
        file_obj.seek(0)
        file_hash = hashlib.sha256()

        while chunk := file_obj.read(FILE_CHUNK_SIZE):
            file_hash.update(chunk)

        file_obj.seek(0)
        return file_hash.hexdigest()

    def _get_file_size(self, file_obj: BinaryIO) -> int:
        file_obj.seek(0, os.SEEK_END)
        size = file_obj.tell()
        file_obj.seek(0)
        return size

    def _check_directory(self, directory: Optional[Media]) -> None:
        if directory is not None and not directory.is_directory:
            raise ValueError(f"Media {directory.id} is not a directory")

    def create_directory(
        self,
        name: str,
        owner: Optional[AbstractBaseUser] = None,
        parent: Optional[Media] = None
    ) -> Media:
        """
        Create a virtual directory.

        Args:
            name: Directory name
            owner: User owning the directory
            parent: Directory to nest the new directory in

        Returns:
            Created Media instance with is_directory set
        """
        self._check_directory(parent)
        return Media.objects.create(
            name=name,
            owner=owner,
            directory=parent,
            is_directory=True,
        )

    @transaction.atomic
    def store_media(
        self,
        file: Union[UploadedFile, BinaryIO],
        name: Optional[str] = None,
        owner: Optional[AbstractBaseUser] = None,
        directory: Optional[Media] = None,
        content_type: Optional[str] = None,
        compute_hash: bool = True
    ) -> Media:
        """
        Store a file and create its media record.

        Args:
            file: File to store (UploadedFile or file-like object)
            name: Filename (extracted from file if not provided)
            owner: User owning the media
            directory: Virtual directory containing the media
            content_type: MIME type (guessed from the name if not provided)
            compute_hash: Whether to compute SHA256 hash

        Returns:
            Created Media instance

        Raises:
            MediaTooLarge: If file exceeds size limit
            MediaWriteError: If file cannot be written
            ValueError: If directory is not a directory record
        """
        self._check_directory(directory)

        if hasattr(file, 'name') and not name:
            name = os.path.basename(file.name)
        name = name or 'unnamed_file'

        if hasattr(file, 'content_type') and not content_type:
            content_type = file.content_type
        content_type = content_type or mimetypes.guess_type(name)[0] or ''

        size_bytes = self._get_file_size(file)
        if size_bytes > self.max_size_bytes:
            max_size_mb = self.max_size_bytes / (1024 * 1024)
            actual_size_mb = size_bytes / (1024 * 1024)
            raise MediaTooLarge(
                f"File size ({actual_size_mb:.2f}MB) exceeds maximum allowed size ({max_size_mb:.2f}MB)"
            )

        sha256 = ''
        if compute_hash:
            sha256 = self._compute_hash(file)

        # Create the record first to get an ID for the storage path
        media = Media.objects.create(
            owner=owner,
            directory=directory,
            name=sanitize_filename(name),
            content_type=content_type,
            size_bytes=size_bytes,
            sha256=sha256,
            storage_path='',
        )

        relative_path = build_media_path(owner.pk if owner else None, media.id, name)
        absolute_path = get_absolute_path(self.data_dir, relative_path)

        try:
            absolute_path.parent.mkdir(parents=True, exist_ok=True)
            with open(absolute_path, 'wb') as dest:
                file.seek(0)
                while chunk := file.read(FILE_CHUNK_SIZE):
                    dest.write(chunk)
        except OSError as e:
            media.delete()
            raise MediaWriteError(f"Failed to write media: {str(e)}") from e

        media.storage_path = relative_path
        media.save(update_fields=['storage_path'])

        logger.info(f"Stored media {media.id} ({media.name}, {size_bytes} bytes)")
        return media

    def persist_temp_file(
        self,
        filename: str,
        temp_path: Union[str, Path],
        owner: Optional[AbstractBaseUser] = None,
        directory: Optional[Media] = None
    ) -> Media:
        """
        Move a temporary file into managed storage as a new media record.

        The temporary file is removed once the media has been stored.

        Args:
            filename: Name of the media file
            temp_path: Path of the temporary file
            owner: User owning the media
            directory: Virtual directory containing the media

        Returns:
            Created Media instance

        Raises:
            MediaNotFound: If the temporary file does not exist
        """
        temp_path = Path(temp_path)

        try:
            with open(temp_path, 'rb') as source:
                media = self.store_media(source, name=filename, owner=owner, directory=directory)
        except FileNotFoundError as e:
            raise MediaNotFound(f"Temporary file not found: {temp_path}") from e

        try:
            temp_path.unlink()
        except OSError as e:
            logger.warning(f"Could not remove temporary file {temp_path}: {e}")

        return media

    def get_file_path(self, media: Media) -> Path:
        """
        Get the absolute filesystem path for a media file.

        Raises:
            MediaNotFound: If the media has no file or the file doesn't exist
        """
        if media.is_directory or not media.storage_path:
            raise MediaNotFound(f"Media {media.id} has no storage path")

        absolute_path = get_absolute_path(self.data_dir, media.storage_path)

        if not absolute_path.exists():
            raise MediaNotFound(f"Media file not found: {absolute_path}")

        return absolute_path

    def read_media(self, media: Media) -> bytes:
        """
        Read the content of a media file.

        Raises:
            MediaNotFound: If file doesn't exist or cannot be read
        """
        file_path = self.get_file_path(media)

        try:
            with open(file_path, 'rb') as f:
                return f.read()
        except OSError as e:
            raise MediaNotFound(f"Cannot read media file: {str(e)}") from e

    def delete_media(self, media: Media, hard: bool = False):
        """
        Delete a media record (soft or hard delete).

        Args:
            media: Media to delete
            hard: If True, delete file and DB record; if False, just mark as deleted
        """
        if hard:
            # Directory rows cascade, their files have to go first
            for child in media.children.all():
                self.delete_media(child, hard=True)

            try:
                self.get_file_path(media).unlink()
            except MediaNotFound:
                pass  # File already gone

            media.delete()
        else:
            media.is_deleted = True
            media.save(update_fields=['is_deleted'])
