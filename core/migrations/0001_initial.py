import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Media',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('is_directory', models.BooleanField(default=False)),
                ('name', models.CharField(max_length=500)),
                ('content_type', models.CharField(blank=True, max_length=255)),
                ('size_bytes', models.BigIntegerField(default=0)),
                ('sha256', models.CharField(blank=True, db_index=True, max_length=64)),
                ('storage_path', models.CharField(blank=True, max_length=1000)),
                ('is_deleted', models.BooleanField(default=False)),
                ('directory', models.ForeignKey(blank=True, limit_choices_to={'is_directory': True}, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='children', to='core.media')),
                ('owner', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='media', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name_plural': 'Media',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['created_at'], name='core_media_created_idx'), models.Index(fields=['sha256'], name='core_media_sha256_idx')],
            },
        ),
    ]
