"""
Path resolution and access checks for document descriptors.
"""

import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional
from fileparser.core.config import settings
from fileparser.core.errors import FileAccessError
from .models import FileStats


def _sanitize_path(target_path: str) -> str:
    return target_path.replace("\\", "/")


def resolve_workspace_path(
    file_path: str,
    workspace_root: Optional[str] = None,
    cwd: Optional[str] = None
) -> str:
    """
    Resolve a descriptor path to an absolute path.
    
    Relative paths are resolved against, in order: the explicit workspace
    root, the WORKSPACE_PATH setting, then the current working directory.
    
    Args:
        file_path: Path as supplied by the caller
        workspace_root: Optional explicit root for relative paths
        cwd: Working directory override
    
    Returns:
        str: Absolute path with forward slashes
    
    Raises:
        ValueError: If file_path is not a non-empty string
    """
    if not file_path or not isinstance(file_path, str) or not file_path.strip():
        raise ValueError("Expected file path to be a non-empty string.")
    
    trimmed = _sanitize_path(file_path.strip())
    
    if os.path.isabs(trimmed):
        return trimmed
    
    base_root = None
    for candidate in (workspace_root, settings.WORKSPACE_PATH):
        if candidate and str(candidate).strip():
            base_root = str(candidate).strip()
            break
    if base_root is None:
        base_root = cwd or os.getcwd()
    
    resolved = os.path.abspath(os.path.join(_sanitize_path(base_root), trimmed))
    return _sanitize_path(resolved)


def assert_file_readable(file_path: str) -> None:
    """
    Verify that a path is an existing, readable regular file.
    
    Args:
        file_path: Absolute path to check
    
    Raises:
        FileAccessError: If the file is missing, not a file or unreadable
    """
    path = Path(file_path)
    
    if not path.exists():
        raise FileAccessError(
            f"Cannot read file '{file_path}': file not found",
            details={"file_path": file_path}
        )
    
    if not path.is_file():
        raise FileAccessError(
            f"Cannot read file '{file_path}': not a regular file",
            details={"file_path": file_path}
        )
    
    if not os.access(path, os.R_OK):
        raise FileAccessError(
            f"Cannot read file '{file_path}': permission denied",
            details={"file_path": file_path}
        )


def _isoformat(timestamp: float) -> str:
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).isoformat()


def read_file_stats(file_path: str) -> FileStats:
    """
    Collect size and timestamps for a file.
    
    Raises:
        FileAccessError: If the file cannot be stat'ed
    """
    try:
        stat = Path(file_path).stat()
    except OSError as e:
        raise FileAccessError(
            f"Cannot access file '{file_path}': {e}",
            details={"file_path": file_path, "error": str(e)}
        ) from e
    
    return FileStats(
        size=stat.st_size,
        modified=_isoformat(stat.st_mtime),
        created=_isoformat(stat.st_ctime)
    )
