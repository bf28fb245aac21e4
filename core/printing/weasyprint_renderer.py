"""
WeasyPrint Renderer Implementation

Adapter for rendering documents to PDF using the WeasyPrint engine.
"""

import asyncio
from pathlib import Path
from typing import Any, Optional, Union
import logging

from weasyprint import HTML, CSS

from .interfaces import IPdfRenderer, build_pdf_options
from .paper import css_page_size


logger = logging.getLogger(__name__)


class WeasyPrintRenderer(IPdfRenderer):
    """
    PDF renderer using WeasyPrint engine.
    
    Needs no browser. Page format, explicit width and height, and orientation
    are applied through an ``@page`` rule; options WeasyPrint has no
    equivalent for are ignored. Unknown formats raise ValueError.
    """
    
    def __init__(self, stylesheets: Optional[list] = None):
        """
        Initialize the renderer.
        
        Args:
            stylesheets: Optional list of CSS file paths to include
        """
        self.stylesheets = stylesheets or []
    
    def _page_css(self, pdf_options: dict) -> CSS:
        return CSS(string=f"@page {{ size: {css_page_size(pdf_options)}; }}")
    
    def _write_pdf(self, source_url: str, pdf_options: dict) -> None:
        css_list = [CSS(filename=css) for css in self.stylesheets]
        css_list.append(self._page_css(pdf_options))
        HTML(url=source_url).write_pdf(target=pdf_options["path"], stylesheets=css_list)
    
    async def render(
        self,
        source_url: str,
        destination: Union[str, Path],
        options: Optional[dict[str, Any]] = None
    ) -> Path:
        pdf_options = build_pdf_options(destination, options)
        
        try:
            await asyncio.to_thread(self._write_pdf, source_url, pdf_options)
        except Exception as e:
            logger.error(f"Failed to render PDF from {source_url}: {e}", exc_info=True)
            raise
        
        logger.info(f"Rendered {source_url} to {pdf_options['path']} ({pdf_options['format']})")
        return Path(pdf_options["path"])
