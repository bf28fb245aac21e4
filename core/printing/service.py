"""
Core PDF Generation Service

Central service for turning templates into PDF files and media records.
"""

import asyncio
import logging
from pathlib import Path
from typing import Any, Optional, Union

from asgiref.sync import sync_to_async
from django.conf import settings
from django.contrib.auth.models import AbstractBaseUser
from django.core.exceptions import ImproperlyConfigured

from core.models import Media
from core.services.storage import MediaStorageService
from .files import create_file, delete_file, safe_make_dir, to_file_url, unique_path
from .interfaces import IPdfRenderer, build_pdf_options
from .templates import compile_template, normalize_template_name


logger = logging.getLogger(__name__)

RENDERER_CHOICES = ('playwright', 'weasyprint')


def get_renderer(name: Optional[str] = None) -> IPdfRenderer:
    """
    Get a PDF renderer by name.

    Args:
        name: 'playwright' or 'weasyprint'. Defaults to the PDF_RENDERER setting.

    Returns:
        IPdfRenderer implementation

    Raises:
        ImproperlyConfigured: If the name is unknown
    """
    name = name or getattr(settings, 'PDF_RENDERER', 'playwright')

    if name == 'playwright':
        from .playwright_renderer import PlaywrightRenderer
        return PlaywrightRenderer()
    if name == 'weasyprint':
        from .weasyprint_renderer import WeasyPrintRenderer
        return WeasyPrintRenderer()

    raise ImproperlyConfigured(
        f"Unknown PDF_RENDERER '{name}', expected one of: {', '.join(RENDERER_CHOICES)}"
    )


class PdfGenerationService:
    """
    Core service for the template to PDF pipeline.

    Responsibilities:
    1. Render Django templates to HTML
    2. Write the HTML to a temporary file and convert it with an IPdfRenderer
    3. Optionally register the PDF as a Media record

    Usage:
        service = PdfGenerationService()
        pdf_path = await service.generate_from_template('printing/invoice', {'amount': 10})
        media = await service.generate_media_from_template(
            'printing/invoice', {'amount': 10}, user=request.user
        )

    The generated PDF of generate_from_template belongs to the caller, who is
    responsible for moving or removing it.
    """

    def __init__(
        self,
        renderer: Optional[IPdfRenderer] = None,
        output_folder: Optional[Union[str, Path]] = None,
        tmp_folder: Optional[Union[str, Path]] = None,
        storage: Optional[MediaStorageService] = None
    ):
        """
        Initialize the service.

        Args:
            renderer: PDF renderer. If None, uses the one named by PDF_RENDERER.
            output_folder: Folder for generated PDFs (defaults to PDF_OUTPUT_FOLDER)
            tmp_folder: Folder for intermediate HTML (defaults to PDF_TMP_FOLDER)
            storage: Media storage used by generate_media_from_template
        """
        self.renderer = renderer or get_renderer()
        self.output_folder = Path(output_folder or getattr(settings, 'PDF_OUTPUT_FOLDER', settings.BASE_DIR / 'data' / 'pdf'))
        self.tmp_folder = Path(tmp_folder or getattr(settings, 'PDF_TMP_FOLDER', settings.BASE_DIR / 'data' / 'tmp'))
        self._storage = storage

    @property
    def storage(self) -> MediaStorageService:
        if self._storage is None:
            self._storage = MediaStorageService()
        return self._storage

    def set_output_folder(self, path: Union[str, Path]) -> None:
        """Use path for PDFs generated by calls started after this one."""
        self.output_folder = Path(path)

    def set_tmp_folder(self, path: Union[str, Path]) -> None:
        """Use path for intermediate HTML of calls started after this one."""
        self.tmp_folder = Path(path)

    async def generate(
        self,
        source: Union[str, Path],
        destination: Union[str, Path],
        options: Optional[dict[str, Any]] = None
    ) -> Path:
        """
        Low level conversion of a document into a PDF.

        Most callers want generate_from_template. If not specified in the
        options, the output is an A4 sheet written to destination.

        Args:
            source: URL or filesystem path of the document
            destination: Path of the PDF to write
            options: Renderer options

        Returns:
            Path of the written PDF
        """
        target = Path(build_pdf_options(destination, options)["path"])
        await safe_make_dir(target.parent)
        return await self.renderer.render(to_file_url(source), destination, options)

    async def generate_from_template(
        self,
        template: str,
        context: Optional[dict[str, Any]] = None,
        options: Optional[dict[str, Any]] = None
    ) -> Path:
        """
        Generate a PDF file from a Django template and a context.

        Args:
            template: Template name, '.html' is appended when missing
            context: Template context
            options: Renderer options

        Returns:
            Path of the generated PDF

        Raises:
            Exception: Template, filesystem and rendering errors propagate unmodified
        """
        # Folders are captured so set_output_folder does not affect this call
        output_folder = self.output_folder
        tmp_folder = self.tmp_folder

        await asyncio.gather(safe_make_dir(tmp_folder), safe_make_dir(output_folder))

        template_name = normalize_template_name(template)
        html = await compile_template(template_name, context)

        generated_html = unique_path(tmp_folder, '.html')
        generated_pdf = unique_path(output_folder, '.pdf')
        # options may send the PDF somewhere else
        target_pdf = Path(build_pdf_options(generated_pdf, options)["path"])

        try:
            await create_file(generated_html, html)
            logger.debug(f"Converting {generated_html} to {target_pdf}")
            pdf_path = await self.generate(generated_html, generated_pdf, options)
        except Exception:
            logger.error(f"Failed to generate PDF for template {template_name}", exc_info=True)
            await self._discard(target_pdf, missing_ok=True)
            raise
        finally:
            await self._discard(generated_html, missing_ok=True)

        logger.info(f"Generated PDF {pdf_path} from template {template_name}")
        return pdf_path

    async def generate_media_from_template(
        self,
        template: str,
        context: Optional[dict[str, Any]] = None,
        options: Optional[dict[str, Any]] = None,
        user: Optional[AbstractBaseUser] = None,
        directory: Optional[Media] = None,
        filename: Optional[str] = None
    ) -> Media:
        """
        Generate a PDF from a template and store it as a Media record.

        Args:
            template: Template name, '.html' is appended when missing
            context: Template context
            options: Renderer options
            user: Owner of the media
            directory: Virtual directory the media is placed in
            filename: Media name (defaults to the template name with .pdf)

        Returns:
            Created Media instance
        """
        pdf_path = await self.generate_from_template(template, context, options)
        filename = filename or f"{Path(normalize_template_name(template)).stem}.pdf"

        try:
            media = await sync_to_async(self._persist)(filename, pdf_path, user, directory)
        except Exception:
            await self._discard(pdf_path, missing_ok=True)
            raise

        logger.info(f"Stored generated PDF as media {media.id}")
        return media

    def _persist(self, filename, pdf_path, user, directory) -> Media:
        # Runs in the sync thread, building the storage service touches the disk
        return self.storage.persist_temp_file(filename, pdf_path, owner=user, directory=directory)

    async def _discard(self, path: Path, missing_ok: bool = False) -> None:
        """Remove a pipeline file; failures are logged and never raised."""
        try:
            await delete_file(path)
        except FileNotFoundError:
            if not missing_ok:
                logger.warning(f"Could not remove {path}: file is missing")
        except OSError as e:
            logger.warning(f"Could not remove {path}: {e}")
