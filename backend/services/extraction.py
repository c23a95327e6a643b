"""Attachment format extraction.

Handles:
- Payload decoding (data URI or bare base64)
- Pass-through of images and PDFs, which the model reads natively
- Text extraction from DOCX (python-docx), spreadsheets (pandas) and plain text
- In-band notices for legacy .doc files and unreadable payloads

Extraction never raises: problems degrade to a notice placed in the prompt.
Blocking parsers are wrapped with asyncio.to_thread for proper async handling.
"""

import asyncio
import base64
import binascii
import csv
import io
import logging
import mimetypes
import re
from collections.abc import Callable
from pathlib import PurePath

import pandas as pd
from docx import Document as DocxDocument

from llm.base import MediaPart
from services.types import AttachmentContent

logger = logging.getLogger(__name__)

PDF_MIME = "application/pdf"
DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
LEGACY_DOC_MIME = "application/msword"
XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
XLS_MIME = "application/vnd.ms-excel"
CSV_MIME = "text/csv"
TEXT_MIME = "text/plain"

EXTENSION_MIME_TYPES: dict[str, str] = {
    ".pdf": PDF_MIME,
    ".docx": DOCX_MIME,
    ".doc": LEGACY_DOC_MIME,
    ".xlsx": XLSX_MIME,
    ".xls": XLS_MIME,
    ".csv": CSV_MIME,
    ".txt": TEXT_MIME,
}

EMPTY_DOCUMENT_NOTICE = "[The Word document appears to be empty.]"
LEGACY_DOC_NOTICE = (
    "[Legacy Word (.doc) files cannot be read directly. "
    "Please convert the file to .docx or PDF and upload it again.]"
)
EXTRACTION_FAILED_NOTICE = "[Error: the attachment could not be read ({reason}).]"

SHEET_HEADER = "--- Sheet: {name} ---"


class ExtractionError(Exception):
    """Raised when an attachment payload cannot be decoded."""


def split_payload(payload: str) -> tuple[str | None, str]:
    """Split a payload into (declared MIME type, base64 data).

    ``data:<mime>;base64,<data>`` URIs carry their own MIME type; any other
    string is taken as bare base64 data.
    """
    payload = payload.strip()
    if not payload.startswith("data:"):
        return None, payload

    header, sep, data = payload.partition(",")
    if not sep:
        raise ExtractionError("data URI has no data segment")
    params = header[len("data:") :].split(";")
    if "base64" not in params[1:]:
        raise ExtractionError("data URI is not base64 encoded")
    return params[0].strip().lower() or None, data.strip()


def decode_base64(data: str) -> bytes:
    """Strictly decode base64 data, ignoring embedded whitespace.

    An empty string is a valid encoding of an empty file.
    """
    try:
        return base64.b64decode("".join(data.split()), validate=True)
    except (binascii.Error, ValueError) as e:
        raise ExtractionError("invalid base64 data") from e


def estimate_decoded_size(payload: str) -> int:
    """Approximate the decoded byte size of a payload without decoding it."""
    try:
        _, data = split_payload(payload)
    except ExtractionError:
        return 0
    return len(data) * 3 // 4


def sanitize_filename(filename: str | None) -> str:
    """Sanitize a display name so it is safe to echo back and log."""
    filename = PurePath(filename or "").name
    filename = re.sub(r'[<>:"/\\|?*\x00-\x1f]', "_", filename)

    max_length = 255
    if len(filename) > max_length:
        name, ext = PurePath(filename).stem, PurePath(filename).suffix
        filename = name[: max_length - len(ext)] + ext

    if not filename or filename.startswith("."):
        filename = "attachment" + PurePath(filename).suffix

    return filename


def resolve_mime_type(
    mime_type: str | None,
    declared_mime: str | None = None,
    filename: str | None = None,
) -> str:
    """Pick the MIME type to dispatch on.

    The caller's type wins, then the data URI's, then the file extension.
    Browsers label .csv uploads as ``application/vnd.ms-excel`` on some
    platforms, so a .csv filename overrides that label.
    """
    mime = (mime_type or declared_mime or "").split(";")[0].strip().lower()
    ext = PurePath(filename).suffix.lower() if filename else ""

    if mime == XLS_MIME and ext == ".csv":
        return CSV_MIME
    if not mime and ext:
        mime = EXTENSION_MIME_TYPES.get(ext) or mimetypes.guess_type(filename)[0] or ""
    return mime


class FormatExtractor:
    """Service for turning attachments into prompt content.

    Each call computes content afresh; nothing is cached between requests.
    """

    def __init__(self) -> None:
        """Initialize extractor and its MIME type dispatch table."""
        self._parsers: dict[str, Callable[[bytes, str | None], str]] = {
            DOCX_MIME: self._parse_docx_sync,
            XLSX_MIME: self._parse_excel_sync,
            XLS_MIME: self._parse_legacy_excel_sync,
            CSV_MIME: self._parse_csv_sync,
            TEXT_MIME: self._parse_text_sync,
        }

    @staticmethod
    def is_native(mime_type: str) -> bool:
        """Whether the model ingests this type directly."""
        return mime_type.startswith("image/") or mime_type == PDF_MIME

    async def extract(
        self,
        payload: str,
        mime_type: str | None = None,
        filename: str | None = None,
    ) -> AttachmentContent:
        """Extract prompt content from an attachment payload.

        Args:
            payload: Base64 data, optionally as a data URI.
            mime_type: Declared MIME type; falls back to the data URI's.
            filename: Display name, used for CSV sheet naming and type hints.

        Returns:
            Media for native types, text (or a notice) for office and text
            types, and nothing for unrecognized types.
        """
        try:
            declared_mime, data = split_payload(payload)
            raw = decode_base64(data)
        except ExtractionError as e:
            logger.warning("Attachment payload rejected: %s", e)
            return AttachmentContent.text_only(
                EXTRACTION_FAILED_NOTICE.format(reason=e)
            )

        mime = resolve_mime_type(mime_type, declared_mime, filename)

        if self.is_native(mime):
            if not raw:
                logger.warning("Empty %s attachment", mime)
                return AttachmentContent.text_only(
                    EXTRACTION_FAILED_NOTICE.format(reason="the file is empty")
                )
            return AttachmentContent.media_only(MediaPart(mime_type=mime, data=data))

        if mime == LEGACY_DOC_MIME:
            logger.info("Legacy .doc attachment, skipping extraction")
            return AttachmentContent.text_only(LEGACY_DOC_NOTICE)

        parser = self._parsers.get(mime)
        if parser is None:
            logger.info("No extractor for MIME type '%s'", mime or "unknown")
            return AttachmentContent.neither()

        try:
            text = await asyncio.to_thread(parser, raw, filename)
        except Exception as e:
            logger.warning("Failed to extract %s attachment: %s", mime, e)
            return AttachmentContent.text_only(
                EXTRACTION_FAILED_NOTICE.format(reason="the file appears to be corrupt")
            )

        logger.info("Extracted %d chars from %s attachment", len(text), mime)
        return AttachmentContent.text_only(text)

    def _parse_docx_sync(self, raw: bytes, filename: str | None) -> str:
        """Extract paragraphs, then table rows, from a Word document."""
        doc = DocxDocument(io.BytesIO(raw))
        text_parts = [p.text for p in doc.paragraphs if p.text.strip()]

        for table in doc.tables:
            for row in table.rows:
                row_text = " | ".join(cell.text.strip() for cell in row.cells)
                if row_text.strip(" |"):
                    text_parts.append(row_text)

        if not text_parts:
            return EMPTY_DOCUMENT_NOTICE
        return "\n\n".join(text_parts)

    def _parse_excel_sync(self, raw: bytes, filename: str | None) -> str:
        sheets = pd.read_excel(
            io.BytesIO(raw), sheet_name=None, header=None, dtype=str, engine="openpyxl"
        )
        return self._render_sheets(sheets)

    def _parse_legacy_excel_sync(self, raw: bytes, filename: str | None) -> str:
        sheets = pd.read_excel(
            io.BytesIO(raw), sheet_name=None, header=None, dtype=str, engine="xlrd"
        )
        return self._render_sheets(sheets)

    def _parse_csv_sync(self, raw: bytes, filename: str | None) -> str:
        """Read CSV rows as-is; rows may differ in length."""
        text = self._decode_text(raw, "utf-8-sig")
        rows = [row for row in csv.reader(io.StringIO(text)) if row]
        # Short rows are padded out to the widest row.
        df = pd.DataFrame(rows, dtype=object)
        sheet_name = PurePath(filename).stem if filename else "Sheet1"
        return self._render_sheets({sheet_name or "Sheet1": df})

    def _render_sheets(self, sheets: dict[str, pd.DataFrame]) -> str:
        """Render sheets in workbook order as a header line plus CSV rows."""
        parts = []
        for name, df in sheets.items():
            parts.append(SHEET_HEADER.format(name=name))
            if df.empty:
                continue
            rows = df.fillna("").to_csv(index=False, header=False, lineterminator="\n")
            if rows.strip():
                parts.append(rows.rstrip("\n"))
        return "\n".join(parts)

    def _parse_text_sync(self, raw: bytes, filename: str | None) -> str:
        return self._decode_text(raw)

    def _decode_text(self, raw: bytes, encoding: str = "utf-8") -> str:
        try:
            return raw.decode(encoding)
        except UnicodeDecodeError:
            logger.warning("Attachment is not valid UTF-8, decoding as latin-1")
            return raw.decode("latin-1")
