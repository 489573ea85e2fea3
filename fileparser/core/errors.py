"""
Exception types for document ingestion.
Each error carries a machine-readable type plus diagnostic details.
"""

from typing import Dict, Any, Optional


class FileParserError(Exception):
    """Structured ingestion error with details."""
    
    error_type = "FILE_PARSER_ERROR"
    
    def __init__(self, message: str, details: Optional[Dict] = None, error_type: Optional[str] = None):
        self.message = message
        self.details = details or {}
        if error_type:
            self.error_type = error_type
        super().__init__(message)
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "error_type": self.error_type,
            "message": self.message,
            "details": self.details
        }


class DocumentInputError(FileParserError):
    """The document list itself is empty or not a list."""
    
    error_type = "INVALID_INPUT"


class NoReadableDocumentsError(FileParserError):
    """Every descriptor in a batch was skipped."""
    
    error_type = "NO_READABLE_DOCUMENTS"


class FileAccessError(FileParserError):
    """A resolved path cannot be read."""
    
    error_type = "FILE_ACCESS_ERROR"


class DocumentParseError(FileParserError):
    """A format parser failed to extract content."""
    
    error_type = "PARSE_ERROR"
