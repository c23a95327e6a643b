"""Pytest configuration and fixtures for CogniAssist tests."""

import base64
import io
import os
import struct
import sys

# Set required env vars BEFORE any imports that might trigger Settings
os.environ.setdefault("ANTHROPIC_API_KEY", "test-anthropic-key")

from unittest.mock import AsyncMock

import pytest

# Add backend to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from flows import AnswerResult, AssistantService  # noqa: E402
from llm import BaseLLMService  # noqa: E402
from services import MockKnowledgeSource  # noqa: E402

# 1x1 transparent PNG
PNG_B64 = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA"
    "60e6kgAAAABJRU5ErkJggg=="
)


def b64(raw: bytes) -> str:
    return base64.b64encode(raw).decode("ascii")


@pytest.fixture
def mock_llm():
    """Mock LLM service."""
    return AsyncMock(spec=BaseLLMService)


@pytest.fixture
def knowledge():
    """Canned documentation source."""
    return MockKnowledgeSource()


@pytest.fixture
def mock_assistant():
    """Mock assistant service answering every call successfully."""
    assistant = AsyncMock(spec=AssistantService)
    assistant.ask.return_value = AnswerResult(
        answer="Mappings move data between sources and targets.",
        mode="standard",
    )
    assistant.analyze_attachment.return_value = AnswerResult(
        answer="The diagram shows a Secure Agent.",
        mode="attachment-analysis",
    )
    return assistant


@pytest.fixture
def png_payload():
    """PNG image as a data URI."""
    return f"data:image/png;base64,{PNG_B64}"


@pytest.fixture
def docx_bytes():
    """Word document with two paragraphs and a table."""
    from docx import Document

    doc = Document()
    doc.add_paragraph("Secure Agent Setup")
    doc.add_paragraph("Install the agent on a Linux host.")
    table = doc.add_table(rows=2, cols=2)
    table.cell(0, 0).text = "Service"
    table.cell(0, 1).text = "Status"
    table.cell(1, 0).text = "Data Integration"
    table.cell(1, 1).text = "Running"

    buf = io.BytesIO()
    doc.save(buf)
    return buf.getvalue()


@pytest.fixture
def xlsx_bytes():
    """Workbook with two sheets, no header rows."""
    import pandas as pd

    buf = io.BytesIO()
    with pd.ExcelWriter(buf, engine="openpyxl") as writer:
        pd.DataFrame([["job", "status"], ["load_orders", "ok"]]).to_excel(
            writer, sheet_name="Jobs", index=False, header=False
        )
        pd.DataFrame([["code"], ["E100"]]).to_excel(
            writer, sheet_name="Errors", index=False, header=False
        )
    return buf.getvalue()


def biff_record(opcode: int, data: bytes = b"") -> bytes:
    return struct.pack("<HH", opcode, len(data)) + data


def biff_bof(stream_type: int) -> bytes:
    # BIFF8, build 3515, year 1996
    return biff_record(
        0x0809, struct.pack("<HHHHII", 0x0600, stream_type, 0x0DBB, 0x07CC, 0, 6)
    )


def biff_label(row: int, col: int, text: str) -> bytes:
    raw = text.encode("latin-1")
    return biff_record(0x0204, struct.pack("<HHHHB", row, col, 0, len(raw), 0) + raw)


def biff_boundsheet(offset: int, name: str) -> bytes:
    raw = name.encode("latin-1")
    return biff_record(0x0085, struct.pack("<IBBBB", offset, 0, 0, len(raw), 0) + raw)


def build_xls(sheets: dict[str, list[list[str]]]) -> bytes:
    """Build a minimal BIFF8 workbook stream (text cells only).

    xlrd reads a bare workbook stream without the OLE2 container.
    """
    eof = biff_record(0x000A)
    streams = [
        biff_bof(0x0010)
        + b"".join(
            biff_label(r, c, value)
            for r, row in enumerate(rows)
            for c, value in enumerate(row)
        )
        + eof
        for rows in sheets.values()
    ]

    offset = len(biff_bof(0x0005)) + len(eof)
    offset += sum(len(biff_boundsheet(0, name)) for name in sheets)
    boundsheets = b""
    for name, stream in zip(sheets, streams):
        boundsheets += biff_boundsheet(offset, name)
        offset += len(stream)

    return biff_bof(0x0005) + boundsheets + eof + b"".join(streams)


@pytest.fixture
def xls_bytes():
    """Legacy Excel workbook with two sheets."""
    return build_xls(
        {
            "Jobs": [["job", "status"], ["load_orders", "ok"]],
            "Errors": [["code"], ["E100"]],
        }
    )
