"""
Plain text parser - reads TXT, LOG and MD files as-is.
"""

from pathlib import Path
from typing import Optional
from fileparser.core.logging import setup_logger
from fileparser.core.errors import DocumentParseError
from .models import ParsedDocument

logger = setup_logger()


def parse_txt(file_path: str, source: Optional[str] = None, **options) -> ParsedDocument:
    """
    Parse plain text file.
    
    Empty files are valid and produce empty text.
    
    Args:
        file_path: Path to text file
        source: Optional source identifier
        
    Returns:
        ParsedDocument with text content
        
    Raises:
        DocumentParseError: If file reading fails
    """
    try:
        logger.info(f"Parsing TXT: {Path(file_path).name}")
        
        path = Path(file_path)
        
        # Read file with UTF-8 encoding (fallback to latin-1 if needed)
        try:
            text = path.read_text(encoding='utf-8')
        except UnicodeDecodeError:
            logger.warning(f"UTF-8 decode failed, trying latin-1 for {path.name}")
            text = path.read_text(encoding='latin-1')
        
        metadata = {
            "source": source or path.name,
            "file_name": path.name,
            "line_count": len(text.splitlines())
        }
        
        logger.info(f"TXT parsed successfully - {len(text)} chars, {metadata['line_count']} lines")
        
        return ParsedDocument(
            text=text,
            format="text",
            metadata=metadata
        )
        
    except Exception as e:
        logger.error(f"TXT parsing failed for {file_path}: {str(e)}")
        raise DocumentParseError(f"Failed to parse TXT: {str(e)}") from e
