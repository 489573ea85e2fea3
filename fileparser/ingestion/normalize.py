"""
Text normalization and summary utilities.
Produces the per-document summary and the normalized line view used by
the request table reconstructor.
"""

import re
from typing import List, Sequence
from fileparser.core.config import settings
from .models import DocumentSummary, Table

TRUNCATION_MARKER = "…"

_WHITESPACE_RUN = re.compile(r"\s+")


def normalize_whitespace(line: str) -> str:
    """
    Collapse internal whitespace runs to a single space and trim.
    
    Args:
        line: Input line
        
    Returns:
        Normalized line
    """
    return _WHITESPACE_RUN.sub(" ", line).strip()


def normalize_lines(text: str) -> List[str]:
    """
    Split text into normalized, non-empty lines.
    
    Args:
        text: Extracted document text
        
    Returns:
        Ordered list of non-empty lines with whitespace collapsed
    """
    if not text:
        return []
    
    lines = (normalize_whitespace(line) for line in text.splitlines())
    return [line for line in lines if line]


def count_words(text: str) -> int:
    """Count whitespace-delimited tokens."""
    return len(text.split()) if text else 0


def truncate_preview(text: str, limit: int = settings.PREVIEW_LIMIT) -> str:
    """
    Truncate text to a fixed number of characters.
    
    A single truncation marker is appended only when characters were
    dropped, so the preview is at most ``limit + 1`` characters long.
    
    Args:
        text: Input text
        limit: Maximum number of characters kept
        
    Returns:
        Preview text
    """
    if not text:
        return ""
    
    if len(text) <= limit:
        return text
    
    return text[:limit] + TRUNCATION_MARKER


def summarize_text(
    text: str,
    tables: Sequence[Table] = (),
    preview_limit: int = settings.PREVIEW_LIMIT
) -> DocumentSummary:
    """
    Build the summary block attached to every document.
    
    Args:
        text: Extracted document text
        tables: Tables attached to the document
        preview_limit: Maximum preview length
        
    Returns:
        DocumentSummary with counts and preview
    """
    text = text or ""
    return DocumentSummary(
        char_count=len(text),
        word_count=count_words(text),
        table_count=len(tables),
        preview=truncate_preview(text, preview_limit)
    )
