"""
Playwright Renderer Implementation

Adapter for rendering documents to PDF with headless Chromium.

Setup (one-time):
    python -m playwright install chromium
"""

from pathlib import Path
from typing import Any, Optional, Union
import logging

from playwright.async_api import async_playwright

from .interfaces import IPdfRenderer, build_pdf_options


logger = logging.getLogger(__name__)


class PlaywrightRenderer(IPdfRenderer):
    """
    PDF renderer driving a headless Chromium browser.
    
    Every call launches its own browser process and closes it on every exit
    path. Options are passed to ``page.pdf`` as keyword arguments, so any
    Playwright PDF option (margin, landscape, print_background, ...) works.
    """
    
    def __init__(self, wait_until: str = "load", launch_options: Optional[dict] = None):
        """
        Initialize the renderer.
        
        Args:
            wait_until: Navigation event to wait for before printing
            launch_options: Extra keyword arguments for chromium.launch
        """
        self.wait_until = wait_until
        self.launch_options = {"headless": True, **(launch_options or {})}
    
    async def render(
        self,
        source_url: str,
        destination: Union[str, Path],
        options: Optional[dict[str, Any]] = None
    ) -> Path:
        pdf_options = build_pdf_options(destination, options)
        
        async with async_playwright() as p:
            browser = await p.chromium.launch(**self.launch_options)
            
            try:
                page = await browser.new_page()
                await page.goto(source_url, wait_until=self.wait_until)
                await page.pdf(**pdf_options)
            finally:
                await browser.close()
        
        logger.info(f"Rendered {source_url} to {pdf_options['path']} ({pdf_options['format']})")
        return Path(pdf_options["path"])
