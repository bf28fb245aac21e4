"""
Path generation and sanitization for media storage
"""

import os
import re
from pathlib import Path
from typing import Union

# Maximum length for sanitized filename (excluding extension)
MAX_FILENAME_LENGTH = 100

SHARED_OWNER_SEGMENT = 'shared'


def sanitize_filename(filename: str) -> str:
    """
    Sanitize filename to prevent directory traversal and ensure filesystem compatibility.
    
    Args:
        filename: Original filename
        
    Returns:
        Sanitized filename safe for filesystem storage
    """
    filename = os.path.basename(filename)
    
    name_parts = filename.rsplit('.', 1)
    name = name_parts[0]
    ext = f".{name_parts[1]}" if len(name_parts) > 1 else ""
    
    # Keep alphanumeric, dash, underscore, and spaces
    name = re.sub(r'[^a-zA-Z0-9\-_ ]', '_', name)
    name = re.sub(r'[_\s]+', '_', name)
    name = name.strip('_')
    
    if not name:
        name = "file"
    
    if len(name) > MAX_FILENAME_LENGTH:
        name = name[:MAX_FILENAME_LENGTH]
    
    return f"{name}{ext}"


def build_media_path(owner_id, media_id: int, original_name: str) -> str:
    """
    Build a stable, unique storage path for a media file.
    
    Path structure:
    - media/{owner_id}/{media_id}__{safe_filename}
    - media/shared/{media_id}__{safe_filename} when the media has no owner
    
    Virtual directories are a database concept only and do not appear in
    the path, so moving media between directories never touches the disk.
    
    Args:
        owner_id: Primary key of the owning user, or None
        media_id: Unique media ID
        original_name: Original filename
        
    Returns:
        Relative path from MEDIA_DATA_DIR
    """
    safe_filename = sanitize_filename(original_name)
    owner_segment = str(owner_id) if owner_id is not None else SHARED_OWNER_SEGMENT
    return os.path.join('media', owner_segment, f"{media_id}__{safe_filename}")


def get_absolute_path(data_dir: Union[str, Path], relative_path: str) -> Path:
    """
    Convert a relative storage path to an absolute filesystem path.
    
    Args:
        data_dir: Base data directory (MEDIA_DATA_DIR)
        relative_path: Relative path from build_media_path
        
    Returns:
        Absolute Path object
    """
    data_dir = Path(data_dir)
    abs_path = (data_dir / relative_path).resolve()
    
    # Resolved path must stay within data_dir
    try:
        abs_path.relative_to(data_dir.resolve())
    except ValueError:
        raise ValueError(f"Path traversal detected: {relative_path}")
    
    return abs_path
