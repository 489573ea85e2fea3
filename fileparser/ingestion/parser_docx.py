"""
DOCX parser - extracts paragraph and table cell text from Word documents.
Requires: python-docx
"""

from pathlib import Path
from typing import Any, Dict, Iterator, Optional
from fileparser.core.logging import setup_logger
from fileparser.core.errors import DocumentParseError
from .models import ParsedDocument

logger = setup_logger()


def load_docx(file_path: str):
    # Import python-docx lazily so the error message names the package
    try:
        from docx import Document
    except ImportError as e:
        raise ImportError(
            "python-docx is not installed. Install with: pip install python-docx"
        ) from e
    return Document(file_path)


def _iter_block_lines(container) -> Iterator[str]:
    """
    Yield one line per paragraph, walking tables cell by cell.
    
    Form layouts keep most of their labels inside tables, so cells are
    visited in reading order. Merged cells are reported once.
    """
    from docx.table import Table as DocxTable
    
    for block in container.iter_inner_content():
        if isinstance(block, DocxTable):
            # Merged cells repeat across the grid
            seen = []
            for row in block.rows:
                for cell in row.cells:
                    if any(cell._tc is tc for tc in seen):
                        continue
                    seen.append(cell._tc)
                    yield from _iter_block_lines(cell)
        else:
            text = block.text.strip()
            if text:
                yield text


def extract_docx_text(document) -> str:
    """
    Extract the text of a loaded python-docx document, one line per block.
    
    Args:
        document: python-docx Document
        
    Returns:
        Newline-joined text
    """
    return "\n".join(_iter_block_lines(document))


def docx_properties(document) -> Dict[str, Any]:
    """Collect the core properties that are set on a document."""
    metadata = {}
    props = document.core_properties
    if props.author:
        metadata["author"] = props.author
    if props.title:
        metadata["title"] = props.title
    if props.created:
        metadata["created"] = props.created.isoformat()
    if props.modified:
        metadata["modified"] = props.modified.isoformat()
    return metadata


def parse_docx(file_path: str, source: Optional[str] = None, **options) -> ParsedDocument:
    """
    Parse DOCX file using python-docx library.
    
    Args:
        file_path: Path to DOCX file
        source: Optional source identifier
        
    Returns:
        ParsedDocument with extracted text
        
    Raises:
        DocumentParseError: If DOCX parsing fails
        ImportError: If python-docx is not installed
    """
    try:
        path = Path(file_path)
        logger.info(f"Parsing DOCX: {path.name}")
        
        doc = load_docx(file_path)
        text = extract_docx_text(doc)
        
        metadata = {
            "source": source or path.name,
            "file_name": path.name,
            "paragraph_count": len(doc.paragraphs),
            "table_count": len(doc.tables)
        }
        metadata.update(docx_properties(doc))
        
        logger.info(
            f"DOCX parsed successfully - {len(text)} chars, "
            f"{len(doc.paragraphs)} paragraphs, {len(doc.tables)} tables"
        )
        
        return ParsedDocument(
            text=text,
            format="docx",
            metadata=metadata
        )
        
    except ImportError:
        raise
    except Exception as e:
        logger.error(f"DOCX parsing failed for {file_path}: {str(e)}")
        raise DocumentParseError(f"Failed to parse DOCX: {str(e)}") from e
