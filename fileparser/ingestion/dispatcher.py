"""
Ingestion dispatcher - resolves document types and routes files to the
matching format parser.
"""

from pathlib import Path
from types import MappingProxyType
from typing import Callable, Mapping, Optional
from fileparser.core.logging import setup_logger
from fileparser.core.errors import DocumentParseError
from .models import ParsedDocument
from .parser_txt import parse_txt
from .parser_pdf import parse_pdf
from .parser_docx import parse_docx
from .parser_doc import parse_doc
from .parser_spreadsheet import parse_spreadsheet

logger = setup_logger()

Parser = Callable[..., ParsedDocument]

SUPPORTED_TYPES = ("text", "pdf", "docx", "doc", "spreadsheet")

# File extension to type tag mapping
EXTENSION_MAP = MappingProxyType({
    '.txt': 'text',
    '.text': 'text',
    '.log': 'text',
    '.md': 'text',
    '.pdf': 'pdf',
    '.docx': 'docx',
    '.doc': 'doc',
    '.xlsx': 'spreadsheet',
    '.xls': 'spreadsheet',
})

# Common spellings accepted as explicit type hints
TYPE_ALIASES = MappingProxyType({
    'txt': 'text',
    'xlsx': 'spreadsheet',
    'xls': 'spreadsheet',
})

# Type tag to parser mapping
PARSERS: Mapping[str, Parser] = MappingProxyType({
    'text': parse_txt,
    'pdf': parse_pdf,
    'docx': parse_docx,
    'doc': parse_doc,
    'spreadsheet': parse_spreadsheet,
})


def resolve_type(type_hint: Optional[str], file_path: str) -> Optional[str]:
    """
    Resolve the type tag for a document.
    
    An explicit hint wins when it names a supported tag (case-insensitive);
    otherwise the file extension decides.
    
    Args:
        type_hint: Optional caller-supplied type
        file_path: Path to the file
        
    Returns:
        Type tag, or None when the type is unsupported
    """
    if type_hint and isinstance(type_hint, str):
        lowered = type_hint.strip().lower()
        lowered = TYPE_ALIASES.get(lowered, lowered)
        if lowered in SUPPORTED_TYPES:
            return lowered
    
    extension = Path(file_path).suffix.lower()
    return EXTENSION_MAP.get(extension)


def dispatch_file(
    file_path: str,
    file_type: str,
    source: Optional[str] = None,
    parsers: Optional[Mapping[str, Parser]] = None,
    **options
) -> ParsedDocument:
    """
    Dispatch file to the parser registered for its type tag.
    
    Args:
        file_path: Path to the file to parse
        file_type: Resolved type tag
        source: Optional source identifier
        parsers: Optional registry overriding the default parsers
        **options: Parser options (e.g. table_sample_rows)
        
    Returns:
        ParsedDocument: Unified parsed document structure
        
    Raises:
        DocumentParseError: If no parser is registered or parsing fails
    """
    registry = PARSERS if parsers is None else parsers
    parser = registry.get(file_type)
    
    if parser is None:
        raise DocumentParseError(
            f"No parser available for type: {file_type}",
            details={"file_path": file_path, "file_type": file_type}
        )
    
    logger.info(f"Dispatching file to {file_type.upper()} parser: {Path(file_path).name}")
    
    result = parser(file_path, source, **options)
    
    logger.info(
        f"Parsing complete - Format: {result.format}, "
        f"Tables: {len(result.tables)}, "
        f"Content Length: {len(result.text)} chars"
    )
    
    return result
