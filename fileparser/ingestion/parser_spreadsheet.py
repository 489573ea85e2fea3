"""
Spreadsheet parser - one table per sheet plus a JSON text projection.
Requires: pandas, openpyxl (xlsx), xlrd (xls)
"""

import json
import math
from datetime import date, datetime, time
from pathlib import Path
from typing import Any, Dict, List, Optional
import pandas as pd
from fileparser.core.config import settings
from fileparser.core.logging import setup_logger
from fileparser.core.errors import DocumentParseError
from .models import ParsedDocument, Table

logger = setup_logger()


def _cell_value(value: Any) -> Any:
    """Convert a pandas/numpy cell into a plain JSON-friendly scalar."""
    if value is None:
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    if value is pd.NaT:
        return None
    if isinstance(value, (pd.Timestamp, datetime, date, time)):
        return value.isoformat()
    if hasattr(value, "item"):
        # numpy scalar
        return value.item()
    return value


def sheet_rows(frame: pd.DataFrame) -> List[Dict[str, Any]]:
    """
    Convert a sheet DataFrame into row mappings keyed by column header.
    
    Args:
        frame: DataFrame read with the first row as header
        
    Returns:
        List of row dictionaries with None for empty cells
    """
    columns = [str(column) for column in frame.columns]
    return [
        {column: _cell_value(value) for column, value in zip(columns, row)}
        for row in frame.itertuples(index=False, name=None)
    ]


def create_sheet_projection(tables: List[Table]) -> str:
    """
    Render sheets as text: a heading per sheet followed by its sampled rows.
    
    Args:
        tables: Sheet tables
        
    Returns:
        Text projection of the workbook
    """
    blocks = []
    for table in tables:
        sample = (
            json.dumps([dict(row) for row in table.sample_rows], indent=2, ensure_ascii=False, default=str)
            if table.sample_rows
            else "(empty sheet)"
        )
        blocks.append(f"Sheet: {table.name} (rows: {table.total_rows})\n{sample}")
    return "\n\n".join(blocks)


def parse_spreadsheet(
    file_path: str,
    source: Optional[str] = None,
    table_sample_rows: int = settings.TABLE_SAMPLE_ROWS,
    **options
) -> ParsedDocument:
    """
    Parse XLSX/XLS workbook.
    
    Args:
        file_path: Path to workbook
        source: Optional source identifier
        table_sample_rows: Rows kept per sheet in the sample (minimum 1)
        
    Returns:
        ParsedDocument with one table per sheet
        
    Raises:
        DocumentParseError: If the workbook cannot be read
    """
    try:
        path = Path(file_path)
        logger.info(f"Parsing spreadsheet: {path.name}")
        
        sample_size = max(1, int(table_sample_rows))
        
        # dtype=object keeps cell values as read (ints stay ints)
        sheets = pd.read_excel(path, sheet_name=None, dtype=object)
        
        tables = []
        for name, frame in sheets.items():
            rows = sheet_rows(frame)
            tables.append(Table(
                name=str(name),
                total_rows=len(rows),
                sample_rows=rows[:sample_size]
            ))
        
        text = create_sheet_projection(tables)
        
        metadata = {
            "source": source or path.name,
            "file_name": path.name,
            "sheet_count": len(tables),
            "sheet_names": [table.name for table in tables]
        }
        
        logger.info(
            f"Spreadsheet parsed successfully - {len(tables)} sheets, "
            f"{sum(table.total_rows for table in tables)} rows"
        )
        
        return ParsedDocument(
            text=text,
            format="spreadsheet",
            tables=tables,
            metadata=metadata
        )
        
    except Exception as e:
        logger.error(f"Spreadsheet parsing failed for {file_path}: {str(e)}")
        raise DocumentParseError(f"Failed to parse spreadsheet: {str(e)}") from e
