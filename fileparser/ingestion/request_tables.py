"""
Request form table reconstructor.

Recovers the tables of a stores request / order form from the flat text a
Word document extracts to: a single-row "Request Header" table (order
number, requester, project, site, dates) and a "Request Items" table
(row number, material description, quantity).

This is a best-effort heuristic for one layout family. It never raises;
text it cannot make sense of yields an empty list.
"""

import re
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, FrozenSet, List, Optional, Sequence, Tuple
from fileparser.core.logging import setup_logger
from .models import Table
from .normalize import normalize_lines

logger = setup_logger()

HEADER_TABLE_NAME = "Request Header"
ITEMS_TABLE_NAME = "Request Items"

ROW_NUMBER_COLUMN = "No."
DESCRIPTION_COLUMN = "Material/Plant Description"
QUANTITY_COLUMN = "Quantity Required"

_ROW_NUMBER = re.compile(r"^\d+$")
_NUMERIC_LINE = re.compile(r"^[+-]?\d+(?:[.,]\d+)?$")
_NUMERIC_TOKEN = re.compile(r"[+-]?\d+(?:[.,]\d+)?")
_SEPARATOR_LINE = re.compile(r"^[\W_]+$")
_NON_ALNUM = re.compile(r"[^a-z0-9]")


def label_key(value: str) -> str:
    """Case-folded, alphanumeric-only form used to compare labels."""
    return _NON_ALNUM.sub("", value.casefold())


@dataclass(frozen=True)
class HeaderField:
    """A canonical header field and the labels it may appear under."""

    name: str
    aliases: Tuple[str, ...]

    @property
    def alias_keys(self) -> Tuple[str, ...]:
        return tuple(label_key(alias) for alias in self.aliases)


@dataclass(frozen=True)
class RequestLayout:
    """
    Vocabulary describing one request form layout.

    All matching is done on normalized, lower-cased lines. Swap in a
    different instance to read a related layout.
    """

    header_fields: Tuple[HeaderField, ...]
    noise_lines: FrozenSet[str]
    noise_prefixes: Tuple[str, ...]
    start_marker: str = "stores use only"
    column_heading: str = "quantity required"
    end_markers: Tuple[str, ...] = ()
    max_row_number: int = 500
    max_rows: int = 500

    def is_noise(self, line: str) -> bool:
        lowered = line.lower()
        return (
            lowered in self.noise_lines
            or bool(_SEPARATOR_LINE.match(line))
            or lowered.startswith(self.noise_prefixes)
        )

    def is_end_marker(self, line: str) -> bool:
        return line.lower().startswith(self.end_markers)

    def row_number(self, line: str) -> Optional[int]:
        if not _ROW_NUMBER.match(line):
            return None
        number = int(line)
        if 1 <= number <= self.max_row_number:
            return number
        return None


DEFAULT_LAYOUT = RequestLayout(
    header_fields=(
        HeaderField("Order Number", ("order number", "order no")),
        HeaderField("Order Requested by", ("order requested by", "requested by")),
        HeaderField("Project", ("project", "project name")),
        HeaderField("Site", ("site", "site name", "site location")),
        HeaderField("Date Ordered", ("date ordered", "order date")),
        HeaderField("Date Required", ("date required", "required date", "required by")),
    ),
    noise_lines=frozenset({
        "no", "no.", "no:", "item", "item no", "item no.",
        "material/plant description", "material / plant description",
        "material description", "plant description", "description",
        "quantity", "quantity required", "qty", "qty required",
        "unit", "units", "uom", "remarks", "comments",
        "stores use only", "for stores use only", "office use only",
    }),
    noise_prefixes=("quantity ", "order "),
    end_markers=("signed by", "issued by", "received by", "returned by", "storeman"),
)


# -- header -----------------------------------------------------------------

def _is_label_line(line: str, layout: RequestLayout) -> bool:
    """True when a line is a bare label, or a label followed by a colon."""
    label = line.split(":", 1)[0]
    key = label_key(label)
    if not key:
        return False
    return any(key in header_field.alias_keys for header_field in layout.header_fields)


def _header_value(
    lines: Sequence[str],
    index: int,
    header_field: HeaderField,
    layout: RequestLayout
) -> Optional[str]:
    line = lines[index]

    if ":" in line:
        value = line.split(":", 1)[1].strip()
        if value:
            return value

    # Label alone on its line: the value is the next line, unless that
    # line is itself a label.
    if label_key(line) in header_field.alias_keys and index + 1 < len(lines):
        candidate = lines[index + 1]
        if not _is_label_line(candidate, layout):
            return candidate

    return None


def extract_header_fields(
    lines: Sequence[str],
    layout: RequestLayout = DEFAULT_LAYOUT
) -> Dict[str, Optional[str]]:
    """
    Find a value for every header field of the layout.

    Args:
        lines: Normalized document lines
        layout: Layout vocabulary

    Returns:
        Mapping of every canonical field name to its value, or None
    """
    values: Dict[str, Optional[str]] = {}

    for header_field in layout.header_fields:
        values[header_field.name] = None
        alias_keys = header_field.alias_keys
        for index, line in enumerate(lines):
            if not label_key(line).startswith(alias_keys):
                continue
            values[header_field.name] = _header_value(lines, index, header_field, layout) or None
            break

    return values


# -- items ------------------------------------------------------------------

def find_item_window(lines: Sequence[str], layout: RequestLayout = DEFAULT_LAYOUT) -> Tuple[int, int]:
    """
    Locate the line range holding the item rows.

    Returns:
        (start, end) indices, end exclusive
    """
    start = 0
    for index, line in enumerate(lines):
        if layout.start_marker in line.lower():
            start = index + 1
            break
    else:
        for index, line in enumerate(lines):
            if line.lower() == layout.column_heading:
                start = index + 1
                break

    end = len(lines)
    for index in range(start, len(lines)):
        if layout.is_end_marker(lines[index]):
            end = index
            break

    return start, end


class ScanPhase(Enum):
    SEEK_ROW_NUMBER = "seek_row_number"
    SEEK_DESCRIPTION = "seek_description"
    SEEK_QUANTITY = "seek_quantity"
    DONE = "done"


# SEEK_DESCRIPTION -> SEEK_ROW_NUMBER rejects a row number candidate.
# SEEK_QUANTITY -> SEEK_ROW_NUMBER either emits a row or rewinds the cursor
# to just past the description.
TRANSITIONS = MappingProxyType({
    ScanPhase.SEEK_ROW_NUMBER: frozenset({
        ScanPhase.SEEK_ROW_NUMBER, ScanPhase.SEEK_DESCRIPTION, ScanPhase.DONE,
    }),
    ScanPhase.SEEK_DESCRIPTION: frozenset({
        ScanPhase.SEEK_ROW_NUMBER, ScanPhase.SEEK_QUANTITY,
    }),
    ScanPhase.SEEK_QUANTITY: frozenset({
        ScanPhase.SEEK_ROW_NUMBER, ScanPhase.DONE,
    }),
    ScanPhase.DONE: frozenset(),
})


class ItemRowScanner:
    """
    State machine collecting item rows from a window of lines.

    Each handler consumes lines from ``cursor`` and returns the next phase.
    """

    def __init__(self, lines: Sequence[str], start: int, end: int, layout: RequestLayout = DEFAULT_LAYOUT):
        self.lines = lines
        self.end = end
        self.layout = layout
        self.cursor = start
        self.phase = ScanPhase.SEEK_ROW_NUMBER
        self.rows: List[dict] = []
        self.backtracks = 0

        self._row_number: Optional[int] = None
        self._row_index = start
        self._description: Optional[str] = None
        self._description_index = start

        self._handlers = {
            ScanPhase.SEEK_ROW_NUMBER: self._seek_row_number,
            ScanPhase.SEEK_DESCRIPTION: self._seek_description,
            ScanPhase.SEEK_QUANTITY: self._seek_quantity,
        }

    def run(self) -> List[dict]:
        while self.phase is not ScanPhase.DONE:
            next_phase = self._handlers[self.phase]()
            if next_phase not in TRANSITIONS[self.phase]:
                raise RuntimeError(f"Illegal scan transition: {self.phase.name} -> {next_phase.name}")
            self.phase = next_phase
        return self.rows

    def _skip_noise(self, index: int) -> int:
        while index < self.end and self.layout.is_noise(self.lines[index]):
            index += 1
        return index

    def _seek_row_number(self) -> ScanPhase:
        if self.cursor >= self.end or len(self.rows) >= self.layout.max_rows:
            return ScanPhase.DONE

        number = self.layout.row_number(self.lines[self.cursor])
        if number is None:
            self.cursor += 1
            return ScanPhase.SEEK_ROW_NUMBER

        self._row_number = number
        self._row_index = self.cursor
        return ScanPhase.SEEK_DESCRIPTION

    def _seek_description(self) -> ScanPhase:
        index = self._skip_noise(self._row_index + 1)

        if index >= self.end:
            self.cursor = self._row_index + 1
            return ScanPhase.SEEK_ROW_NUMBER

        line = self.lines[index]
        if _NUMERIC_LINE.match(line) or self.layout.is_noise(line):
            self.cursor = self._row_index + 1
            return ScanPhase.SEEK_ROW_NUMBER

        self._description = line
        self._description_index = index
        return ScanPhase.SEEK_QUANTITY

    def _seek_quantity(self) -> ScanPhase:
        index = self._description_index + 1

        while index < self.end:
            line = self.lines[index]
            if not self.layout.is_noise(line):
                match = _NUMERIC_TOKEN.search(line)
                if match:
                    self.rows.append({
                        ROW_NUMBER_COLUMN: self._row_number,
                        DESCRIPTION_COLUMN: self._description,
                        QUANTITY_COLUMN: match.group(0),
                    })
                    self.cursor = index + 1
                    if len(self.rows) >= self.layout.max_rows:
                        return ScanPhase.DONE
                    return ScanPhase.SEEK_ROW_NUMBER
            index += 1

        # False positive row number: resume just past the description.
        self.backtracks += 1
        self.cursor = self._description_index + 1
        return ScanPhase.SEEK_ROW_NUMBER


def extract_item_rows(lines: Sequence[str], layout: RequestLayout = DEFAULT_LAYOUT) -> List[dict]:
    """
    Collect numbered item rows from the item window.

    Args:
        lines: Normalized document lines
        layout: Layout vocabulary

    Returns:
        Rows keyed by "No.", "Material/Plant Description", "Quantity Required"
    """
    start, end = find_item_window(lines, layout)
    scanner = ItemRowScanner(lines, start, end, layout)
    rows = scanner.run()
    if scanner.backtracks:
        logger.debug(f"Item scan rewound {scanner.backtracks} time(s)")
    return rows


def extract_request_tables(text: str, layout: RequestLayout = DEFAULT_LAYOUT) -> List[Table]:
    """
    Reconstruct request header and item tables from extracted text.

    Args:
        text: Text extracted from a Word document
        layout: Layout vocabulary

    Returns:
        Up to two tables: "Request Header" then "Request Items"
    """
    lines = normalize_lines(text)
    if not lines:
        return []

    tables = []

    header = extract_header_fields(lines, layout)
    if any(header.values()):
        tables.append(Table(name=HEADER_TABLE_NAME, total_rows=1, sample_rows=[header]))

    rows = extract_item_rows(lines, layout)
    if rows:
        tables.append(Table(name=ITEMS_TABLE_NAME, total_rows=len(rows), sample_rows=rows))

    logger.info(f"Request tables reconstructed - header: {any(header.values())}, items: {len(rows)}")

    return tables
