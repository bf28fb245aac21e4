"""
Temporary file helpers for the PDF pipeline.

Blocking filesystem calls run in a worker thread so the event loop stays free.
"""

import asyncio
import uuid
from pathlib import Path
from typing import Union
from urllib.parse import urlparse


async def create_file(path: Union[str, Path], text: str) -> None:
    """Write text to path. OSError propagates."""
    await asyncio.to_thread(Path(path).write_text, text, encoding='utf-8')


async def delete_file(path: Union[str, Path]) -> None:
    """Remove path. FileNotFoundError and other OSErrors propagate."""
    await asyncio.to_thread(Path(path).unlink)


async def safe_make_dir(path: Union[str, Path]) -> None:
    """Create path and its parents; an existing directory is not an error."""
    await asyncio.to_thread(Path(path).mkdir, parents=True, exist_ok=True)


def unique_path(folder: Union[str, Path], extension: str) -> Path:
    """
    Build a collision resistant file path inside folder.
    
    Args:
        folder: Directory of the file
        extension: File extension, with or without the leading dot
        
    Returns:
        Path named after a random uuid4, e.g. ``<folder>/3f2a....pdf``
    """
    extension = extension if extension.startswith('.') else f'.{extension}'
    return Path(folder) / f"{uuid.uuid4().hex}{extension}"


def to_file_url(source: Union[str, Path]) -> str:
    """Return source unchanged if it is a URL, otherwise its file:// URL."""
    source_str = str(source)
    # Single letter schemes are Windows drive letters
    if len(urlparse(source_str).scheme) > 1:
        return source_str
    return Path(source_str).resolve().as_uri()
