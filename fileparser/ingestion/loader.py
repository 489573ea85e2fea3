"""
Batch document loader.

Turns a list of document descriptors into parsed documents. Problems with a
single entry become warnings; the call only fails when nothing could be read.
"""

import math
import os
from collections.abc import Mapping as MappingABC
from typing import Any, Dict, Mapping, Optional, Sequence
from fileparser.core.config import settings
from fileparser.core.logging import setup_logger
from fileparser.core.errors import DocumentInputError, FileAccessError, NoReadableDocumentsError
from .checksum import compute_file_checksum, compute_text_checksum
from .dispatcher import Parser, dispatch_file, resolve_type
from .models import Document, IngestionResult, IngestionWarning
from .normalize import summarize_text
from .paths import assert_file_readable, read_file_stats, resolve_workspace_path
from .request_tables import extract_request_tables

logger = setup_logger()

# Types whose text goes through the request table reconstructor
RECONSTRUCTED_TYPES = frozenset({"docx", "doc"})

MIN_PREVIEW_CHARS = 500


def _normalize_descriptor(entry: Any) -> Optional[Dict[str, Any]]:
    if isinstance(entry, str):
        return {"path": entry}
    if isinstance(entry, os.PathLike):
        return {"path": os.fspath(entry)}
    if isinstance(entry, MappingABC):
        return dict(entry)
    return None


def resolve_load_options(options: Any) -> Dict[str, Any]:
    """
    Normalize caller options into keyword arguments for load_documents.

    Accepts camelCase or snake_case keys. maxPreviewChars is raised to at
    least 500 and tableSampleRows to at least 1.

    Args:
        options: Raw option mapping

    Returns:
        Dictionary with preview_limit and/or table_sample_rows
    """
    if not isinstance(options, MappingABC):
        return {}

    resolved = {}

    preview = options.get("maxPreviewChars", options.get("max_preview_chars"))
    if isinstance(preview, (int, float)) and not isinstance(preview, bool) and math.isfinite(preview):
        resolved["preview_limit"] = max(MIN_PREVIEW_CHARS, int(preview))

    sample_rows = options.get("tableSampleRows", options.get("table_sample_rows"))
    if isinstance(sample_rows, (int, float)) and not isinstance(sample_rows, bool) and math.isfinite(sample_rows):
        resolved["table_sample_rows"] = max(1, math.floor(sample_rows))

    return resolved


def load_documents(
    entries: Sequence[Any],
    workspace_root: Optional[str] = None,
    table_sample_rows: Optional[int] = None,
    preview_limit: Optional[int] = None,
    parsers: Optional[Mapping[str, Parser]] = None
) -> IngestionResult:
    """
    Load and parse a batch of documents, one at a time and in order.

    Args:
        entries: Path strings or mappings with path, label and type keys
        workspace_root: Root for relative paths (defaults to WORKSPACE_PATH, then CWD)
        table_sample_rows: Rows sampled per spreadsheet sheet (minimum 1)
        preview_limit: Maximum preview length in characters
        parsers: Optional parser registry overriding the defaults

    Returns:
        IngestionResult with documents and warnings

    Raises:
        DocumentInputError: If entries is not a non-empty list
        NoReadableDocumentsError: If no entry could be loaded
    """
    if not isinstance(entries, (list, tuple)) or not entries:
        raise DocumentInputError(
            "Input must include at least one document.",
            details={"received": type(entries).__name__}
        )

    if table_sample_rows is None:
        table_sample_rows = settings.TABLE_SAMPLE_ROWS
    sample_rows = max(1, int(table_sample_rows))
    limit = settings.PREVIEW_LIMIT if preview_limit is None else preview_limit

    result = IngestionResult()

    def warn(message: str, detail: Any) -> None:
        logger.warning(f"{message}: {detail}")
        result.warnings.append(IngestionWarning(message=message, detail=detail))

    logger.info(f"Loading {len(entries)} document(s)")

    for entry in entries:
        descriptor = _normalize_descriptor(entry)
        if descriptor is None:
            warn("Skipping invalid document descriptor", repr(entry))
            continue

        raw_path = descriptor.get("path")
        if not isinstance(raw_path, str) or not raw_path.strip():
            warn("Skipping document with missing path", descriptor)
            continue

        label = descriptor.get("label")
        resolved_path = resolve_workspace_path(raw_path, workspace_root=workspace_root)

        try:
            assert_file_readable(resolved_path)
            stats = read_file_stats(resolved_path)
        except (FileAccessError, OSError, ValueError) as e:
            warn(f"Unable to access {resolved_path}", str(e))
            continue

        file_type = resolve_type(descriptor.get("type"), resolved_path)
        if file_type is None:
            warn("Unsupported file type", resolved_path)
            continue

        try:
            parsed = dispatch_file(
                resolved_path,
                file_type,
                source=label,
                parsers=parsers,
                table_sample_rows=sample_rows
            )
        except Exception as e:
            warn(f"Failed to parse {resolved_path}", str(e))
            continue

        text = parsed.text or ""
        tables = list(parsed.tables)
        if file_type in RECONSTRUCTED_TYPES:
            tables.extend(extract_request_tables(text))

        try:
            if file_type == "text":
                checksum = compute_text_checksum(text)
            else:
                checksum = compute_file_checksum(resolved_path)
        except OSError as e:
            warn(f"Unable to access {resolved_path}", str(e))
            continue

        metadata = dict(parsed.metadata)
        if parsed.page_count is not None:
            metadata["page_count"] = parsed.page_count

        document = Document(
            path=resolved_path,
            label=label,
            type=file_type,
            text=text,
            tables=tuple(tables),
            checksum=checksum,
            stats=stats,
            summary=summarize_text(text, tables, limit),
            metadata=metadata
        )
        result.documents.append(document)

        logger.info(
            f"Loaded {file_type} document {resolved_path} - "
            f"{document.summary.char_count} chars, {document.summary.table_count} tables"
        )

    if not result.documents:
        raise NoReadableDocumentsError(
            "No readable documents were provided.",
            details={"warnings": [warning.to_dict() for warning in result.warnings]}
        )

    return result
