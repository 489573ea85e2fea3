"""
PDF parser - extracts page text with pdfplumber.
"""

from pathlib import Path
from typing import Optional
import pdfplumber
from fileparser.core.logging import setup_logger
from fileparser.core.errors import DocumentParseError
from .models import ParsedDocument

logger = setup_logger()


def parse_pdf(file_path: str, source: Optional[str] = None, **options) -> ParsedDocument:
    """
    Parse PDF file page by page.
    
    Args:
        file_path: Path to PDF file
        source: Optional source identifier
        
    Returns:
        ParsedDocument with extracted text and page count
        
    Raises:
        DocumentParseError: If PDF processing fails
    """
    try:
        path = Path(file_path)
        logger.info(f"Parsing PDF: {path.name}")
        
        page_texts = []
        with pdfplumber.open(path) as pdf:
            page_count = len(pdf.pages)
            
            for page_num, page in enumerate(pdf.pages, start=1):
                text = page.extract_text()
                
                if text and text.strip():
                    page_texts.append(text.strip())
                else:
                    logger.warning(f"No text found on page {page_num}")
            
            info = pdf.metadata or {}
        
        full_text = "\n\n".join(page_texts).strip()
        
        metadata = {
            "source": source or path.name,
            "file_name": path.name,
            "page_count": page_count
        }
        for key in ("Title", "Author", "Producer"):
            if info.get(key):
                metadata[key.lower()] = str(info[key])
        
        logger.info(f"PDF parsed successfully - {page_count} pages, {len(full_text)} chars")
        
        return ParsedDocument(
            text=full_text,
            format="pdf",
            page_count=page_count,
            metadata=metadata
        )
        
    except Exception as e:
        logger.error(f"PDF parsing failed for {file_path}: {str(e)}")
        raise DocumentParseError(f"Failed to parse PDF: {str(e)}") from e
