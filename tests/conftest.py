import io

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

PAGE_WORDS = ["one", "two", "three", "four", "five"]


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Hello PDF World")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Page one content")
    c.showPage()
    c.drawString(72, 720, "Page two content")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def five_page_pdf_bytes() -> bytes:
    """Generate a five-page PDF whose pages say 'Page <number-word> content'."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    for word in PAGE_WORDS:
        c.drawString(72, 720, f"Page {word} content")
        c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def article_pdf_bytes() -> bytes:
    """Generate a single-page PDF with a few sentences of body text."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    lines = [
        "Transformers changed natural language processing.",
        "They rely on attention instead of recurrence.",
        "This paper studies how attention scales with context length.",
    ]
    for offset, line in enumerate(lines):
        c.drawString(72, 720 - offset * 20, line)
    c.save()
    return buf.getvalue()


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.showPage()
    c.save()
    return buf.getvalue()
