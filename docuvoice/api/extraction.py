# docuvoice/api/extraction.py
from typing import Optional

from fastapi import APIRouter, File, UploadFile

from ..schemas.extraction import ExtractedText, ImageTextRequest
from ..services import extraction as extraction_service
from ..utils.files import read_upload_file
from ..utils.logging import api_logger

router = APIRouter(prefix="/api/extract", tags=["extraction"])


@router.post("/pdf", response_model=ExtractedText)
async def extract_pdf(file: Optional[UploadFile] = File(None)):
    data = await read_upload_file(file, allowed_extensions=[".pdf"])

    api_logger.info("Processing PDF upload", extra={
        "file_name": file.filename,
        "file_size": len(data)
    })
    return extraction_service.extract_pdf_text(data, file.filename)


@router.post("/doc", response_model=ExtractedText)
async def extract_doc(file: Optional[UploadFile] = File(None)):
    data = await read_upload_file(file, allowed_extensions=[".docx"])

    api_logger.info("Processing DOCX upload", extra={
        "file_name": file.filename,
        "file_size": len(data)
    })
    return extraction_service.extract_docx_text(data, file.filename)


@router.post("/image", response_model=ExtractedText)
async def extract_image(payload: ImageTextRequest):
    """Accept text recognised from an image in the browser"""
    api_logger.info("Processing OCR result", extra={
        "file_name": payload.file_name,
        "file_size": payload.file_size,
        "file_type": payload.file_type
    })
    return extraction_service.clean_ocr_text(
        payload.text, payload.file_name, payload.file_size, payload.file_type
    )
