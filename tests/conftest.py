"""
Shared fixtures: document files generated on the fly.
"""

import pytest
from fileparser.core.config import settings

REQUEST_FORM_LINES = [
    "Order Number",
    "001-1699",
    "Order Requested by",
    "Ahmed Shaik",
    "Project",
    "PA install",
    "Date Required",
    "16/04/25",
    "Site",
    "Angel",
    "Stores use Only",
    "No.",
    "Material/Plant Description",
    "Quantity Required",
    "1",
    "25mm conduits",
    "8",
    "2",
    "25mm conduit besa boxes and fixings",
    "5",
    "3",
    "25mm couplers and nipples",
    "10",
    "Signed by",
    "Storeman",
]

EMPLOYEES = [
    ("Name", "Age", "City"),
    ("John Doe", 30, "New York"),
    ("Jane Smith", 25, "San Francisco"),
    ("Bob Johnson", 35, "Chicago"),
    ("Alice Brown", 28, "Boston"),
    ("Carol White", 41, "Denver"),
]

INVENTORY = [
    ("Product", "Price", "Quantity"),
    ("Widget", 10.5, 100),
    ("Gadget", 25.99, 50),
    ("Tool", 15.0, 75),
]


def build_minimal_pdf(text: str) -> bytes:
    """Build a one-page PDF showing a single line of Helvetica text."""
    stream = f"BT /F1 24 Tf 72 720 Td ({text}) Tj ET".encode("latin-1")
    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
        b"/Contents 4 0 R /Resources << /Font << /F1 5 0 R >> >> >>",
        b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]

    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % number + body + b"\nendobj\n"

    xref_offset = len(out)
    out += b"xref\n0 %d\n" % (len(objects) + 1)
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\n" % (len(objects) + 1)
    out += b"startxref\n%d\n%%%%EOF\n" % xref_offset
    return bytes(out)


@pytest.fixture(autouse=True)
def no_workspace_default(monkeypatch):
    """Keep a WORKSPACE_PATH from the environment out of the tests."""
    monkeypatch.setattr(settings, "WORKSPACE_PATH", None)


@pytest.fixture
def sample_txt(tmp_path):
    path = tmp_path / "sample.txt"
    path.write_text(
        "This is a sample text document.\nIt has a few lines of content.\n",
        encoding="utf-8"
    )
    return path


@pytest.fixture
def sample_md(tmp_path):
    path = tmp_path / "sample.md"
    path.write_text("# Sample Markdown File\n\nSome *emphasis* here.\n", encoding="utf-8")
    return path


@pytest.fixture
def request_form_docx(tmp_path):
    from docx import Document

    document = Document()
    for line in REQUEST_FORM_LINES:
        document.add_paragraph(line)
    path = tmp_path / "request.docx"
    document.save(str(path))
    return path


@pytest.fixture
def table_form_docx(tmp_path):
    """A request form laid out as a Word table, as forms usually are."""
    from docx import Document

    document = Document()
    document.add_paragraph("Stores Request")
    header = document.add_table(rows=3, cols=2)
    for row, (label, value) in zip(header.rows, [
        ("Order Number", "001-1700"),
        ("Project", "Lighting retrofit"),
        ("Site", "Angel"),
    ]):
        row.cells[0].text = label
        row.cells[1].text = value

    document.add_paragraph("Stores use Only")
    items = document.add_table(rows=3, cols=3)
    for row, values in zip(items.rows, [
        ("No.", "Material/Plant Description", "Quantity Required"),
        ("1", "LED panel 600x600", "12"),
        ("2", "Emergency driver", "4"),
    ]):
        for cell, value in zip(row.cells, values):
            cell.text = value

    document.add_paragraph("Signed by")
    path = tmp_path / "table-form.docx"
    document.save(str(path))
    return path


@pytest.fixture
def sample_xlsx(tmp_path):
    from openpyxl import Workbook

    workbook = Workbook()
    employees = workbook.active
    employees.title = "Employees"
    for row in EMPLOYEES:
        employees.append(row)

    inventory = workbook.create_sheet("Inventory")
    for row in INVENTORY:
        inventory.append(row)

    workbook.create_sheet("EmptySheet")

    path = tmp_path / "sample.xlsx"
    workbook.save(str(path))
    return path


@pytest.fixture
def sample_pdf(tmp_path):
    path = tmp_path / "sample.pdf"
    path.write_bytes(build_minimal_pdf("Hello PDF"))
    return path
