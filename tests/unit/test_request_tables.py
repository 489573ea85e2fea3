"""
Tests for the request form table reconstructor.
"""

import pytest
from dataclasses import replace
from fileparser.ingestion.request_tables import (
    DEFAULT_LAYOUT,
    ItemRowScanner,
    ScanPhase,
    TRANSITIONS,
    extract_header_fields,
    extract_item_rows,
    extract_request_tables,
    find_item_window,
    label_key,
)

REQUEST_FORM_LINES = [
    'Order Number',
    '001-1699',
    'Order Requested by',
    'Ahmed Shaik',
    'Project',
    'PA install',
    'Date Required',
    '16/04/25',
    'Site',
    'Angel',
    'Stores use Only',
    'No.',
    'Material/Plant Description',
    'Quantity Required',
    '1',
    '25mm conduits',
    '8',
    '2',
    '25mm conduit besa boxes and fixings',
    '5',
    '3',
    '25mm couplers and nipples',
    '10',
    'Signed by',
    'Storeman',
]


def _tables_by_name(tables):
    return {table.name: table for table in tables}


class TestRequestFormFixture:
    """Tests against a typical stores request form."""

    def test_returns_header_and_items(self):
        """Test that both tables are reconstructed."""
        tables = extract_request_tables("\n".join(REQUEST_FORM_LINES))

        assert [table.name for table in tables] == ["Request Header", "Request Items"]

    def test_header_values(self):
        """Test header fields resolved from label-only lines."""
        tables = _tables_by_name(extract_request_tables("\n".join(REQUEST_FORM_LINES)))
        header = tables["Request Header"]

        assert header.total_rows == 1
        row = header.sample_rows[0]
        assert row["Order Number"] == "001-1699"
        assert row["Order Requested by"] == "Ahmed Shaik"
        assert row["Project"] == "PA install"
        assert row["Site"] == "Angel"
        assert row["Date Required"] == "16/04/25"
        assert row["Date Ordered"] is None

    def test_header_row_has_all_fields(self):
        """Test that unresolved fields are still present as columns."""
        tables = _tables_by_name(extract_request_tables("\n".join(REQUEST_FORM_LINES)))
        row = tables["Request Header"].sample_rows[0]

        assert list(row) == [
            "Order Number",
            "Order Requested by",
            "Project",
            "Site",
            "Date Ordered",
            "Date Required",
        ]

    def test_item_rows(self):
        """Test item rows keep the raw quantity text."""
        tables = _tables_by_name(extract_request_tables("\n".join(REQUEST_FORM_LINES)))
        items = tables["Request Items"]

        assert items.total_rows == 3
        assert len(items.sample_rows) == 3
        assert items.sample_rows[0] == {
            "No.": 1,
            "Material/Plant Description": "25mm conduits",
            "Quantity Required": "8",
        }
        assert items.sample_rows[1]["Material/Plant Description"] == "25mm conduit besa boxes and fixings"
        assert items.sample_rows[2] == {
            "No.": 3,
            "Material/Plant Description": "25mm couplers and nipples",
            "Quantity Required": "10",
        }

    def test_whitespace_is_normalized(self):
        """Test that messy spacing and blank lines do not matter."""
        messy = "\n\n".join(f"   {line.replace(' ', '   ')}\t" for line in REQUEST_FORM_LINES)
        tables = _tables_by_name(extract_request_tables(messy))

        assert tables["Request Header"].sample_rows[0]["Order Requested by"] == "Ahmed Shaik"
        assert tables["Request Items"].sample_rows[2]["Material/Plant Description"] == "25mm couplers and nipples"


class TestNoStructure:
    """Tests for text without a request form."""

    def test_unrelated_text(self):
        """Test that unrelated text yields no tables."""
        assert extract_request_tables("Random note\nNo structured request here.") == []

    def test_empty_text(self):
        """Test empty and blank input."""
        assert extract_request_tables("") == []
        assert extract_request_tables("  \n\t\n") == []


class TestHeaderExtraction:
    """Tests for header field value modes."""

    def test_colon_values(self):
        """Test values on the same line after a colon."""
        values = extract_header_fields([
            "Order Number: 42-7",
            "Project: Substation upgrade",
            "Site : North yard",
        ])

        assert values["Order Number"] == "42-7"
        assert values["Project"] == "Substation upgrade"
        assert values["Site"] == "North yard"

    def test_value_keeps_later_colons(self):
        """Test that only the first colon splits label and value."""
        values = extract_header_fields(["Date Ordered: 10:30 16/04/25"])

        assert values["Date Ordered"] == "10:30 16/04/25"

    def test_empty_colon_value_uses_next_line(self):
        """Test a label with a trailing colon and the value below."""
        values = extract_header_fields(["Project:", "PA install"])

        assert values["Project"] == "PA install"

    def test_label_followed_by_label_is_not_a_value(self):
        """Test that a label-only line is not read as the previous field's value."""
        values = extract_header_fields(["Project", "Site", "Angel"])

        assert values["Project"] is None
        assert values["Site"] == "Angel"

    def test_only_first_matching_label_is_read(self):
        """Test a later line sharing the label prefix does not supply the value."""
        values = extract_header_fields(["Project", "Site", "Angel", "Project manager: Bob"])

        assert values["Project"] is None
        assert values["Site"] == "Angel"

    def test_aliases(self):
        """Test alternate label spellings."""
        values = extract_header_fields([
            "Requested by: J. Smith",
            "Order Date: 01/02/25",
            "Required by: 05/02/25",
        ])

        assert values["Order Requested by"] == "J. Smith"
        assert values["Date Ordered"] == "01/02/25"
        assert values["Date Required"] == "05/02/25"

    def test_header_only_document(self):
        """Test that header fields alone produce a single table."""
        tables = extract_request_tables("Order Number: 77\nSome other text")

        assert len(tables) == 1
        assert tables[0].name == "Request Header"
        assert tables[0].sample_rows[0]["Order Number"] == "77"


class TestItemWindow:
    """Tests for locating the item section."""

    def test_window_after_stores_use_only(self):
        """Test window bounds with start and end markers."""
        lines = ["Project", "X", "For Stores Use Only", "1", "Cable", "4", "Issued by", "Bob"]

        assert find_item_window(lines) == (3, 6)

    def test_window_after_quantity_heading(self):
        """Test fallback to the quantity column heading."""
        lines = ["Intro", "No.", "Quantity Required", "1", "Cable", "4"]

        assert find_item_window(lines) == (3, 6)

    def test_window_defaults_to_whole_text(self):
        """Test a document with neither marker."""
        lines = ["1", "Cable", "4", "Received by"]

        assert find_item_window(lines) == (0, 3)

    def test_rows_after_end_marker_are_ignored(self):
        """Test that numbered lines after the end marker are not items."""
        lines = ["Stores use only", "1", "Cable", "4", "Returned by", "2", "Ladder", "1"]

        rows = extract_item_rows(lines)

        assert [row["No."] for row in rows] == [1]


class TestItemRows:
    """Tests for the item row scan."""

    def test_quantity_with_units(self):
        """Test that the numeric token is taken from a quantity line."""
        rows = extract_item_rows(["1", "Copper cable", "2.5 rolls"])

        assert rows == [{
            "No.": 1,
            "Material/Plant Description": "Copper cable",
            "Quantity Required": "2.5",
        }]

    def test_noise_between_fields_is_skipped(self):
        """Test noise lines between row number, description and quantity."""
        rows = extract_item_rows(["1", "Description", "Cable ties", "---", "Qty", "100"])

        assert rows[0]["Material/Plant Description"] == "Cable ties"
        assert rows[0]["Quantity Required"] == "100"

    def test_numeric_description_rejects_candidate(self):
        """Test that a number followed by a number is not a row."""
        rows = extract_item_rows(["7", "12", "Drill bits", "3"])

        assert rows == [{
            "No.": 12,
            "Material/Plant Description": "Drill bits",
            "Quantity Required": "3",
        }]

    def test_out_of_range_row_numbers(self):
        """Test that 0 and numbers above 500 are not row numbers."""
        assert extract_item_rows(["0", "Cable", "4"]) == []
        assert extract_item_rows(["501", "Cable", "4"]) == []

    def test_quantity_search_skips_text_lines(self):
        """Test that lines without a number are passed over for the quantity."""
        lines = ["1", "Cable", "Notes follow", "2"]
        scanner = ItemRowScanner(lines, 0, len(lines))

        rows = scanner.run()

        # "Notes follow" carries no number and "2" is consumed as quantity
        assert rows == [{
            "No.": 1,
            "Material/Plant Description": "Cable",
            "Quantity Required": "2",
        }]
        assert scanner.backtracks == 0

    def test_backtrack_when_window_has_no_quantity(self):
        """Test the rewind to just past the description."""
        lines = ["1", "Cable", "3", "Ladder"]
        scanner = ItemRowScanner(lines, 0, len(lines))

        rows = scanner.run()

        assert rows == [{
            "No.": 1,
            "Material/Plant Description": "Cable",
            "Quantity Required": "3",
        }]

        lines = ["Stores use only", "4", "Cable", "Signed by"]
        start, end = find_item_window(lines)
        scanner = ItemRowScanner(lines, start, end)

        assert scanner.run() == []
        assert scanner.backtracks == 1
        assert scanner.cursor == 3

    def test_row_limit(self):
        """Test that collection stops at the layout row limit."""
        layout = replace(DEFAULT_LAYOUT, max_rows=2)
        lines = []
        for number in range(1, 6):
            lines.extend([str(number), f"Item {number}", "1"])

        rows = extract_item_rows(lines, layout)

        assert [row["No."] for row in rows] == [1, 2]

    def test_scanner_ends_done(self):
        """Test the scanner finishes in the DONE phase."""
        scanner = ItemRowScanner(["1", "Cable", "2"], 0, 3)
        scanner.run()

        assert scanner.phase is ScanPhase.DONE

    def test_illegal_transition_raises(self):
        """Test a handler returning a phase outside the transition table."""
        scanner = ItemRowScanner(["1", "Cable", "2"], 0, 3)
        scanner._handlers[ScanPhase.SEEK_ROW_NUMBER] = lambda: ScanPhase.SEEK_QUANTITY

        with pytest.raises(RuntimeError, match="SEEK_ROW_NUMBER -> SEEK_QUANTITY"):
            scanner.run()


class TestLayout:
    """Tests for the layout vocabulary."""

    def test_label_key(self):
        """Test label comparison form."""
        assert label_key("Order Requested  by:") == "orderrequestedby"
        assert label_key("No.") == "no"

    @pytest.mark.parametrize("line", [
        "No.",
        "Material/Plant Description",
        "QUANTITY REQUIRED",
        "-----",
        "quantity on hand",
        "Order form",
    ])
    def test_noise_lines(self, line):
        """Test noise vocabulary, separators and prefixes."""
        assert DEFAULT_LAYOUT.is_noise(line)

    def test_content_is_not_noise(self):
        """Test ordinary descriptions are not noise."""
        assert not DEFAULT_LAYOUT.is_noise("25mm conduits")

    def test_layout_is_immutable(self):
        """Test that the layout cannot be changed in place."""
        with pytest.raises(Exception):
            DEFAULT_LAYOUT.max_rows = 10
        assert isinstance(DEFAULT_LAYOUT.noise_lines, frozenset)

    def test_custom_layout(self):
        """Test reading an alternate layout with a different vocabulary."""
        layout = replace(
            DEFAULT_LAYOUT,
            noise_lines=DEFAULT_LAYOUT.noise_lines | {"part description"},
            end_markers=("approved by",),
        )
        lines = ["1", "Part Description", "Fuse 10A", "6", "Approved by", "2", "Relay", "1"]

        rows = extract_item_rows(lines, layout)

        assert rows == [{
            "No.": 1,
            "Material/Plant Description": "Fuse 10A",
            "Quantity Required": "6",
        }]

    def test_transition_table(self):
        """Test that DONE is terminal and quantity may rewind."""
        assert TRANSITIONS[ScanPhase.DONE] == frozenset()
        assert ScanPhase.SEEK_ROW_NUMBER in TRANSITIONS[ScanPhase.SEEK_QUANTITY]
