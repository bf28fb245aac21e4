"""
Template compilation for the PDF pipeline.
"""

import logging
from typing import Optional

from asgiref.sync import sync_to_async
from django.template.loader import render_to_string


logger = logging.getLogger(__name__)

TEMPLATE_EXTENSION = '.html'


def normalize_template_name(name: str) -> str:
    """Append TEMPLATE_EXTENSION unless the name already ends with it."""
    if not name:
        raise ValueError("Template name must not be empty")
    if not name.endswith(TEMPLATE_EXTENSION):
        name += TEMPLATE_EXTENSION
    return name


async def compile_template(name: str, context: Optional[dict] = None) -> str:
    """
    Render a Django template to markup.
    
    TemplateDoesNotExist and TemplateSyntaxError propagate unmodified.
    Rendering runs in the sync thread so lazy querysets in the context work.
    """
    logger.debug(f"Rendering template: {name}")
    return await sync_to_async(render_to_string)(name, context or {})
