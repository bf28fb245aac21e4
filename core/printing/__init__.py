"""
Core Printing Framework

Renders Django templates to HTML, converts the HTML to PDF with a headless
browser (or WeasyPrint) and optionally stores the result as Media.
"""

from .service import PdfGenerationService, get_renderer
from .interfaces import IPdfRenderer, build_pdf_options
from .templates import compile_template, normalize_template_name

__all__ = [
    'PdfGenerationService',
    'get_renderer',
    'IPdfRenderer',
    'build_pdf_options',
    'compile_template',
    'normalize_template_name',
]
