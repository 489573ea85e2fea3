"""
Multi-format document ingestion.
Supports: plain text, PDF, DOCX, DOC, XLSX/XLS
"""

from .dispatcher import dispatch_file, resolve_type, PARSERS, SUPPORTED_TYPES
from .loader import load_documents, resolve_load_options
from .models import (
    Document,
    DocumentSummary,
    FileStats,
    IngestionResult,
    IngestionWarning,
    ParsedDocument,
    Table,
)
from .request_tables import extract_request_tables, RequestLayout, DEFAULT_LAYOUT

__all__ = [
    "dispatch_file",
    "resolve_type",
    "PARSERS",
    "SUPPORTED_TYPES",
    "load_documents",
    "resolve_load_options",
    "Document",
    "DocumentSummary",
    "FileStats",
    "IngestionResult",
    "IngestionWarning",
    "ParsedDocument",
    "Table",
    "extract_request_tables",
    "RequestLayout",
    "DEFAULT_LAYOUT",
]
