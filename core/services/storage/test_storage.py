"""
Tests for Media Storage Service
"""

import os
import shutil
import tempfile
from pathlib import Path
from unittest.mock import patch
from django.test import TestCase
from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile

from core.models import Media
from core.services.storage import (
    MediaStorageService,
    StorageError,
    MediaTooLarge,
    MediaNotFound,
    MediaWriteError,
)
from core.services.storage.paths import sanitize_filename, build_media_path, get_absolute_path

User = get_user_model()


class SanitizeFilenameTestCase(TestCase):
    """Test filename sanitization."""

    def test_basic_sanitization(self):
        self.assertEqual(sanitize_filename('test.pdf'), 'test.pdf')
        self.assertEqual(sanitize_filename('Monthly Invoice.pdf'), 'Monthly_Invoice.pdf')
        self.assertEqual(sanitize_filename('invoice@#$%.pdf'), 'invoice.pdf')

    def test_directory_traversal_prevention(self):
        self.assertEqual(sanitize_filename('../../../etc/passwd'), 'passwd')
        self.assertEqual(sanitize_filename('../../report.pdf'), 'report.pdf')

    def test_empty_name(self):
        self.assertEqual(sanitize_filename(''), 'file')

    def test_long_filename(self):
        long_name = 'a' * 200 + '.pdf'
        result = sanitize_filename(long_name)
        self.assertLessEqual(len(result), 104)
        self.assertTrue(result.endswith('.pdf'))


class BuildMediaPathTestCase(TestCase):
    """Test media path building."""

    def test_owned_media_path(self):
        path = build_media_path(7, 123, 'invoice.pdf')
        self.assertEqual(path, os.path.join('media', '7', '123__invoice.pdf'))

    def test_shared_media_path(self):
        path = build_media_path(None, 5, 'report final.pdf')
        self.assertEqual(path, os.path.join('media', 'shared', '5__report_final.pdf'))

    def test_absolute_path_rejects_traversal(self):
        with tempfile.TemporaryDirectory() as data_dir:
            with self.assertRaises(ValueError):
                get_absolute_path(data_dir, '../outside.pdf')


class MediaStorageServiceTestCase(TestCase):
    """Test MediaStorageService."""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.service = MediaStorageService(data_dir=self.temp_dir, max_size_mb=1)

        self.user = User.objects.create_user(
            username='testuser',
            email='test@example.com',
            password='testpass123',
        )

    def tearDown(self):
        if os.path.exists(self.temp_dir):
            shutil.rmtree(self.temp_dir)

    def test_store_media_for_user(self):
        file_content = b'%PDF-1.4 test'
        file = SimpleUploadedFile('invoice.pdf', file_content, content_type='application/pdf')

        media = self.service.store_media(file, owner=self.user)

        self.assertEqual(media.name, 'invoice.pdf')
        self.assertEqual(media.content_type, 'application/pdf')
        self.assertEqual(media.size_bytes, len(file_content))
        self.assertEqual(media.owner, self.user)
        self.assertIsNone(media.directory)
        self.assertFalse(media.is_directory)
        self.assertFalse(media.is_deleted)
        self.assertTrue(media.sha256)
        self.assertIn(os.path.join('media', str(self.user.pk)), media.storage_path)

        self.assertEqual(self.service.read_media(media), file_content)

    def test_content_type_guessed_from_name(self):
        media = self.service.store_media(SimpleUploadedFile('notes.pdf', b'data', content_type=''))

        self.assertEqual(media.content_type, 'application/pdf')
        self.assertIn(os.path.join('media', 'shared'), media.storage_path)

    def test_store_media_in_directory(self):
        directory = self.service.create_directory('Invoices', owner=self.user)

        media = self.service.store_media(
            SimpleUploadedFile('march.pdf', b'march'),
            owner=self.user,
            directory=directory,
        )

        self.assertTrue(directory.is_directory)
        self.assertEqual(media.directory, directory)
        self.assertEqual(list(directory.children.all()), [media])

    def test_store_media_rejects_file_as_directory(self):
        not_a_directory = self.service.store_media(SimpleUploadedFile('a.pdf', b'a'))

        with self.assertRaises(ValueError):
            self.service.store_media(SimpleUploadedFile('b.pdf', b'b'), directory=not_a_directory)

        with self.assertRaises(ValueError):
            self.service.create_directory('nested', parent=not_a_directory)

    def test_media_too_large(self):
        large_content = b'x' * (2 * 1024 * 1024)

        with self.assertRaises(MediaTooLarge):
            self.service.store_media(SimpleUploadedFile('large.pdf', large_content))

        self.assertEqual(Media.objects.count(), 0)

    def test_write_failure_removes_record(self):
        with patch('core.services.storage.service.open', create=True, side_effect=PermissionError('read-only')):
            with self.assertRaises(MediaWriteError) as ctx:
                self.service.store_media(SimpleUploadedFile('x.pdf', b'x'))

        self.assertIsInstance(ctx.exception, StorageError)
        self.assertIsInstance(ctx.exception.__cause__, PermissionError)
        self.assertEqual(Media.objects.count(), 0)

    def test_compute_hash_optional(self):
        media = self.service.store_media(SimpleUploadedFile('nohash.pdf', b'No hash'), compute_hash=False)

        self.assertEqual(media.sha256, '')

    def test_persist_temp_file_moves_file(self):
        temp_path = Path(self.temp_dir) / 'generated.pdf'
        temp_path.write_bytes(b'%PDF-1.4 generated')
        directory = self.service.create_directory('Reports', owner=self.user)

        media = self.service.persist_temp_file('report.pdf', temp_path, owner=self.user, directory=directory)

        self.assertEqual(media.name, 'report.pdf')
        self.assertEqual(media.owner, self.user)
        self.assertEqual(media.directory, directory)
        self.assertEqual(self.service.read_media(media), b'%PDF-1.4 generated')
        self.assertFalse(temp_path.exists())

    def test_persist_missing_temp_file(self):
        with self.assertRaises(MediaNotFound):
            self.service.persist_temp_file('missing.pdf', Path(self.temp_dir) / 'missing.pdf')

        self.assertEqual(Media.objects.count(), 0)

    def test_get_file_path(self):
        media = self.service.store_media(SimpleUploadedFile('pathtest.pdf', b'Path test'))

        path = self.service.get_file_path(media)
        self.assertIsInstance(path, Path)
        self.assertTrue(path.is_absolute())
        self.assertTrue(path.exists())
        self.assertTrue(str(path).startswith(str(Path(self.temp_dir).resolve())))

    def test_get_file_path_not_found(self):
        media = self.service.store_media(SimpleUploadedFile('delete.pdf', b'Delete me'))
        self.service.get_file_path(media).unlink()

        with self.assertRaises(MediaNotFound):
            self.service.get_file_path(media)

    def test_directory_has_no_file(self):
        directory = self.service.create_directory('Empty')

        with self.assertRaises(MediaNotFound):
            self.service.get_file_path(directory)

    def test_soft_delete(self):
        media = self.service.store_media(SimpleUploadedFile('soft.pdf', b'Soft delete'))
        file_path = self.service.get_file_path(media)

        self.service.delete_media(media, hard=False)

        media.refresh_from_db()
        self.assertTrue(media.is_deleted)
        self.assertTrue(file_path.exists())
        self.assertFalse(Media.objects.active().exists())

    def test_hard_delete_directory_removes_children_files(self):
        directory = self.service.create_directory('Archive', owner=self.user)
        media = self.service.store_media(SimpleUploadedFile('old.pdf', b'old'), directory=directory)
        file_path = self.service.get_file_path(media)

        self.service.delete_media(directory, hard=True)

        self.assertEqual(Media.objects.count(), 0)
        self.assertFalse(file_path.exists())
