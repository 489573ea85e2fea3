"""
Legacy Word (.doc) parser.

Files saved as Office Open XML under a .doc name are read with python-docx.
Binary Word 97-2003 files are converted with the ``antiword`` tool.
"""

import shutil
import subprocess
from pathlib import Path
from typing import Optional
from fileparser.core.logging import setup_logger
from fileparser.core.errors import DocumentParseError
from .models import ParsedDocument
from .parser_docx import load_docx, extract_docx_text, docx_properties

logger = setup_logger()

OLE_SIGNATURE = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"
ZIP_SIGNATURE = b"PK\x03\x04"


def _read_signature(path: Path) -> bytes:
    with open(path, "rb") as f:
        return f.read(8)


def _run_antiword(path: Path) -> str:
    executable = shutil.which("antiword")
    if executable is None:
        raise DocumentParseError(
            "antiword is required to read Word 97-2003 documents",
            details={"file_path": str(path)}
        )
    
    result = subprocess.run(
        [executable, "-w", "0", str(path)],
        capture_output=True,
        check=False
    )
    if result.returncode != 0:
        stderr = result.stderr.decode("utf-8", errors="replace").strip()
        raise DocumentParseError(
            f"antiword exited with status {result.returncode}: {stderr}",
            details={"file_path": str(path), "returncode": result.returncode}
        )
    
    return result.stdout.decode("utf-8", errors="replace")


def parse_doc(file_path: str, source: Optional[str] = None, **options) -> ParsedDocument:
    """
    Parse a .doc file.
    
    Args:
        file_path: Path to DOC file
        source: Optional source identifier
        
    Returns:
        ParsedDocument with extracted text
        
    Raises:
        DocumentParseError: If the file is not a Word document or conversion fails
    """
    try:
        path = Path(file_path)
        logger.info(f"Parsing DOC: {path.name}")
        
        signature = _read_signature(path)
        metadata = {
            "source": source or path.name,
            "file_name": path.name
        }
        
        if signature.startswith(ZIP_SIGNATURE):
            doc = load_docx(file_path)
            text = extract_docx_text(doc)
            metadata["container"] = "ooxml"
            metadata.update(docx_properties(doc))
        elif signature == OLE_SIGNATURE:
            text = _run_antiword(path)
            metadata["container"] = "ole"
        else:
            raise ValueError("File is not a Word document")
        
        logger.info(f"DOC parsed successfully - {len(text)} chars ({metadata['container']})")
        
        return ParsedDocument(
            text=text,
            format="doc",
            metadata=metadata
        )
        
    except ImportError:
        raise
    except Exception as e:
        logger.error(f"DOC parsing failed for {file_path}: {str(e)}")
        raise DocumentParseError(f"Failed to parse DOC: {str(e)}") from e
