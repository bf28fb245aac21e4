from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.utils.translation import gettext_lazy as _


class MediaQuerySet(models.QuerySet):
    def active(self):
        return self.filter(is_deleted=False)

    def files(self):
        return self.filter(is_directory=False)

    def directories(self):
        return self.filter(is_directory=True)


class Media(models.Model):
    """
    A file managed by the storage service.

    A media record with ``is_directory`` set is a virtual directory: it groups
    other media records and has no file on disk.
    """

    created_at = models.DateTimeField(auto_now_add=True)
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='media',
    )
    directory = models.ForeignKey(
        'self',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='children',
        limit_choices_to={'is_directory': True},
    )
    is_directory = models.BooleanField(default=False)
    name = models.CharField(max_length=500)
    content_type = models.CharField(max_length=255, blank=True)
    size_bytes = models.BigIntegerField(default=0)
    sha256 = models.CharField(max_length=64, blank=True, db_index=True)
    storage_path = models.CharField(max_length=1000, blank=True)
    is_deleted = models.BooleanField(default=False)

    objects = MediaQuerySet.as_manager()

    class Meta:
        ordering = ['-created_at']
        verbose_name_plural = 'Media'
        indexes = [
            models.Index(fields=['created_at'], name='core_media_created_idx'),
            models.Index(fields=['sha256'], name='core_media_sha256_idx'),
        ]

    def __str__(self):
        return f"{self.name} (ID: {self.id})"

    def clean(self):
        if self.directory_id and not self.directory.is_directory:
            raise ValidationError({'directory': _('Media can only be placed inside a directory.')})
        if self.directory_id and self.directory_id == self.id:
            raise ValidationError({'directory': _('A directory cannot contain itself.')})
