# docuvoice/services/extraction.py
import io
import time
from typing import Optional

import pdfplumber
from docx import Document as DocxDocument

from ..errors import ExtractionError
from ..schemas.extraction import ExtractedText
from ..utils.logging import service_logger

PASTE_TEXT_ADVICE = (
    "Our document reader could not read this file. Please copy the text from your "
    "document and paste it directly into the text area."
)


def extract_pdf_text(data: bytes, file_name: Optional[str] = None) -> ExtractedText:
    start_time = time.perf_counter()
    service_logger.info("Starting PDF text extraction", extra={
        "file_name": file_name,
        "file_size": len(data)
    })

    try:
        with pdfplumber.open(io.BytesIO(data)) as pdf:
            page_count = len(pdf.pages)
            page_texts = [page.extract_text() or "" for page in pdf.pages]
    except Exception as e:
        service_logger.error("PDF parsing failed", extra={
            "file_name": file_name,
            "error": str(e)
        })
        raise ExtractionError("PDF processing temporarily unavailable", details=PASTE_TEXT_ADVICE,
                              technical=str(e))

    text = "\n".join(t for t in page_texts if t).strip()
    if not text:
        raise ExtractionError("No text found", details="The PDF does not contain any selectable text. "
                                                       "Scanned pages must be converted with image OCR.")

    service_logger.info("PDF parsed successfully", extra={
        "pages": page_count,
        "characters": len(text),
        "processing_time_ms": round((time.perf_counter() - start_time) * 1000, 2)
    })
    return ExtractedText(
        text=text,
        characters=len(text),
        pages=page_count,
        method="pdfplumber",
        file_name=file_name,
        file_size=len(data),
        file_type="application/pdf",
    )


def extract_docx_text(data: bytes, file_name: Optional[str] = None) -> ExtractedText:
    try:
        document = DocxDocument(io.BytesIO(data))
    except Exception as e:
        service_logger.error("DOCX parsing failed", extra={
            "file_name": file_name,
            "error": str(e)
        })
        raise ExtractionError("Failed to process DOC/DOCX file", details=PASTE_TEXT_ADVICE, technical=str(e))

    text = "\n".join(paragraph.text for paragraph in document.paragraphs).strip()
    if not text:
        raise ExtractionError("No text found", details="The document does not contain any text.")

    service_logger.info("DOCX parsed successfully", extra={
        "file_name": file_name,
        "paragraphs": len(document.paragraphs),
        "characters": len(text)
    })
    return ExtractedText(
        text=text,
        characters=len(text),
        method="python-docx",
        file_name=file_name,
        file_size=len(data),
        file_type="application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    )


def clean_ocr_text(text: Optional[str], file_name: Optional[str] = None,
                   file_size: Optional[int] = None, file_type: Optional[str] = None) -> ExtractedText:
    """Validate text recognised from an image by the browser's OCR engine."""
    extracted = (text or "").strip()
    if not extracted:
        raise ExtractionError(
            "No text found",
            details="No readable text was detected in this image. "
                    "Please ensure the image contains clear, readable text."
        )

    service_logger.info("OCR text accepted", extra={
        "file_name": file_name,
        "file_type": file_type,
        "characters": len(extracted)
    })
    return ExtractedText(
        text=extracted,
        characters=len(extracted),
        method="client-side-ocr",
        file_name=file_name,
        file_size=file_size,
        file_type=file_type,
    )
