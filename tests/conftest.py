import pytest

from models.resume_models import ParsedDocument

SCENARIO_TEXT = (
    "John Doe\n"
    "john@x.com\n"
    "555-123-4567\n"
    "Experience\n"
    "Software Engineer at Acme\n"
    "2020-2022\n"
    "Built scalable APIs\n"
    "Education\n"
    "Bachelor of Science\n"
    "State University\n"
    "2016\n"
    "Skills\n"
    "Python, Go, SQL"
)


class FakeExtractor:
    """Returns canned text instead of decoding a PDF."""

    def __init__(self, text, page_count=1, document_info=None):
        self.text = text
        self.page_count = page_count
        self.document_info = document_info or {}
        self.calls = 0

    def extract_text(self, data: bytes) -> ParsedDocument:
        self.calls += 1
        return ParsedDocument(
            text=self.text,
            page_count=self.page_count,
            document_info=self.document_info,
        )


def _pdf_string(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")
    return f"({escaped})"


def build_pdf(lines, title=None, author=None) -> bytes:
    """Write a one-page PDF with each line drawn in Helvetica."""
    content = ["BT", "/F1 12 Tf", "14 TL", "72 720 Td"]
    for index, line in enumerate(lines):
        if index:
            content.append("T*")
        content.append(f"{_pdf_string(line)} Tj")
    content.append("ET")
    stream = "\n".join(content).encode("latin-1")

    info_entries = []
    if title:
        info_entries.append(f"/Title {_pdf_string(title)}")
    if author:
        info_entries.append(f"/Author {_pdf_string(author)}")

    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
        b"/Contents 4 0 R /Resources << /Font << /F1 5 0 R >> >> >>",
        b"<< /Length " + str(len(stream)).encode() + b" >>\nstream\n" + stream + b"\nendstream",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
        ("<< " + " ".join(info_entries) + " >>").encode("latin-1"),
    ]

    output = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(output))
        output += f"{number} 0 obj\n".encode() + body + b"\nendobj\n"

    xref_offset = len(output)
    output += f"xref\n0 {len(objects) + 1}\n".encode()
    output += b"0000000000 65535 f \n"
    for offset in offsets:
        output += f"{offset:010d} 00000 n \n".encode()
    output += (
        f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R /Info 6 0 R >>\n"
        f"startxref\n{xref_offset}\n%%EOF\n"
    ).encode()
    return bytes(output)


@pytest.fixture
def scenario_text():
    return SCENARIO_TEXT


@pytest.fixture
def fake_extractor():
    return FakeExtractor(SCENARIO_TEXT)


@pytest.fixture
def resume_pdf():
    return build_pdf(
        [
            "Jane Doe",
            "jane.doe@example.com",
            "Experience",
            "Data Engineer at Initech",
            "Skills",
            "Python, Spark, Airflow",
        ],
        title="Jane Doe Resume",
        author="Jane Doe",
    )


@pytest.fixture
def extractor_factory():
    return FakeExtractor
