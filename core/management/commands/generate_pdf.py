"""
Management command to render a template to PDF, optionally storing it as Media.
"""

import json

from asgiref.sync import async_to_sync
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError

from core.models import Media
from core.printing import PdfGenerationService, get_renderer


class Command(BaseCommand):
    help = 'Render a template to a PDF file, or to a Media record with --user/--directory'

    def add_arguments(self, parser):
        parser.add_argument('template', help='Template name, e.g. printing/invoice')
        parser.add_argument(
            '--context',
            default='{}',
            help='Template context as a JSON object',
        )
        parser.add_argument('--format', help='Page format, defaults to A4')
        parser.add_argument('--landscape', action='store_true', help='Landscape orientation')
        parser.add_argument('--renderer', help='Renderer to use instead of PDF_RENDERER')
        parser.add_argument('--output-folder', help='Folder for the generated PDF')
        parser.add_argument('--user', help='Username of the media owner')
        parser.add_argument('--directory', type=int, help='ID of the virtual directory for the media')
        parser.add_argument('--name', help='Media filename')

    def handle(self, *args, **options):
        try:
            context = json.loads(options['context'])
        except json.JSONDecodeError as e:
            raise CommandError(f'Invalid --context JSON: {e}')
        if not isinstance(context, dict):
            raise CommandError('--context must be a JSON object')

        pdf_options = {}
        if options['format']:
            pdf_options['format'] = options['format']
        if options['landscape']:
            pdf_options['landscape'] = True

        service = PdfGenerationService(renderer=get_renderer(options['renderer']))
        if options['output_folder']:
            service.set_output_folder(options['output_folder'])

        user = self._get_user(options['user'])
        directory = self._get_directory(options['directory'])

        if user is None and directory is None:
            pdf_path = async_to_sync(service.generate_from_template)(
                options['template'], context, pdf_options
            )
            self.stdout.write(self.style.SUCCESS(f'Generated {pdf_path}'))
            return

        media = async_to_sync(service.generate_media_from_template)(
            options['template'],
            context,
            pdf_options,
            user=user,
            directory=directory,
            filename=options['name'],
        )
        self.stdout.write(self.style.SUCCESS(f'Stored media {media.id} ({media.name})'))

    def _get_user(self, username):
        if not username:
            return None
        User = get_user_model()
        try:
            return User.objects.get(**{User.USERNAME_FIELD: username})
        except User.DoesNotExist:
            raise CommandError(f'User "{username}" does not exist')

    def _get_directory(self, directory_id):
        if directory_id is None:
            return None
        try:
            return Media.objects.directories().get(pk=directory_id)
        except Media.DoesNotExist:
            raise CommandError(f'Directory {directory_id} does not exist')
