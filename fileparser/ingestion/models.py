"""
Data models shared by the parsers, the table reconstructor and the loader.
"""

from dataclasses import dataclass, field, asdict
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union


@dataclass(frozen=True)
class Table:
    """A named table: total row count plus a bounded sample of rows."""

    name: str
    total_rows: int
    sample_rows: Sequence[Mapping[str, Any]] = ()

    def __post_init__(self):
        # Rows are read-only views over private copies
        rows = tuple(MappingProxyType(dict(row)) for row in self.sample_rows)
        object.__setattr__(self, "sample_rows", rows)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "total_rows": self.total_rows,
            "sample_rows": [dict(row) for row in self.sample_rows],
        }


@dataclass
class ParsedDocument:
    """
    Unified parser output.
    All format parsers must return this structure.
    """
    text: str  # Extracted plain text
    format: str = "unknown"  # text, pdf, docx, doc, spreadsheet
    tables: List[Table] = field(default_factory=list)
    page_count: Optional[int] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "text": self.text,
            "format": self.format,
            "tables": [table.to_dict() for table in self.tables],
            "page_count": self.page_count,
            "metadata": dict(self.metadata),
        }


@dataclass(frozen=True)
class FileStats:
    size: int
    modified: str
    created: str


@dataclass(frozen=True)
class DocumentSummary:
    char_count: int
    word_count: int
    table_count: int
    preview: str


@dataclass(frozen=True)
class Document:
    """A successfully ingested document. Never mutated after creation."""

    path: str
    type: str
    text: str
    checksum: str
    stats: FileStats
    summary: DocumentSummary
    label: Optional[str] = None
    tables: Tuple[Table, ...] = ()
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "tables", tuple(self.tables))
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def to_dict(self, include_text: bool = True) -> dict:
        """
        Convert to dictionary for downstream consumers.

        Args:
            include_text: Include the full extracted text
        """
        data = {
            "path": self.path,
            "label": self.label,
            "type": self.type,
            "checksum": self.checksum,
            "stats": asdict(self.stats),
            "summary": asdict(self.summary),
            "tables": [table.to_dict() for table in self.tables],
            "metadata": dict(self.metadata),
        }
        if include_text:
            data["text"] = self.text
        return data


@dataclass(frozen=True)
class IngestionWarning:
    """A skipped descriptor: short message plus diagnostic detail."""

    message: str
    detail: Union[str, Dict[str, Any]]

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class IngestionResult:
    documents: List[Document] = field(default_factory=list)
    warnings: List[IngestionWarning] = field(default_factory=list)

    def to_dict(self, include_text: bool = True) -> dict:
        return {
            "documents": [doc.to_dict(include_text=include_text) for doc in self.documents],
            "warnings": [warning.to_dict() for warning in self.warnings],
        }
