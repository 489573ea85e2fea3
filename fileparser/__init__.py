"""Document loading and request form table reconstruction."""

from fileparser.ingestion import load_documents, extract_request_tables

__version__ = "0.1.0"

__all__ = ["load_documents", "extract_request_tables"]
