"""
Interfaces for the Printing Framework

Defines the contract that document rendering engines implement.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional, Union


DEFAULT_PAGE_FORMAT = "A4"


def build_pdf_options(destination: Union[str, Path], options: Optional[dict] = None) -> dict:
    """
    Merge caller options with the renderer defaults.
    
    The caller's dictionary is copied, never mutated. ``path`` defaults to the
    destination and ``format`` to A4; values supplied by the caller are kept
    as they are.
    
    Args:
        destination: Path the PDF is written to
        options: Renderer options supplied by the caller
        
    Returns:
        New options dictionary
    """
    pdf_options = dict(options or {})
    if not pdf_options.get("path"):
        pdf_options["path"] = str(destination)
    if not pdf_options.get("format"):
        pdf_options["format"] = DEFAULT_PAGE_FORMAT
    return pdf_options


class IPdfRenderer(ABC):
    """
    Interface for PDF rendering engines.
    
    Implementations load a document by URL and write it as a PDF file.
    """
    
    @abstractmethod
    async def render(
        self,
        source_url: str,
        destination: Union[str, Path],
        options: Optional[dict[str, Any]] = None
    ) -> Path:
        """
        Render the document at source_url into a PDF.
        
        Args:
            source_url: URL of the document to render (usually file://)
            destination: Path the PDF is written to unless options override it
            options: Engine specific options merged with build_pdf_options
            
        Returns:
            Path of the written PDF
            
        Raises:
            Exception: Engine errors propagate unmodified
        """
        pass
