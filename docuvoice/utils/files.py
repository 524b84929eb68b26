# docuvoice/utils/files.py
from pathlib import Path
from typing import Iterable, Optional

from fastapi import UploadFile

from ..config import settings
from ..errors import ValidationError

CHUNK_SIZE = 1024 * 1024


def file_extension(filename: Optional[str]) -> str:
    """Lower-cased extension of a filename, including the dot"""
    return Path(filename or "").suffix.lower()


def ensure_extension(filename: Optional[str], allowed: Iterable[str]) -> str:
    allowed = tuple(allowed)
    extension = file_extension(filename)
    if extension not in allowed:
        raise ValidationError(
            "Unsupported file type",
            details=f"Expected one of {', '.join(allowed)}, got '{extension or filename}'"
        )
    return extension


async def read_upload_file(upload_file: Optional[UploadFile], max_bytes: Optional[int] = None,
                           allowed_extensions: Optional[Iterable[str]] = None) -> bytes:
    """Read an uploaded file into memory, refusing empty or oversized uploads.

    The extension is checked before any byte is read.
    """
    if upload_file is None:
        raise ValidationError("No file provided")
    if allowed_extensions is not None:
        ensure_extension(upload_file.filename, allowed_extensions)

    limit = max_bytes if max_bytes is not None else settings.MAX_UPLOAD_BYTES
    buffer = bytearray()
    while True:
        chunk = await upload_file.read(CHUNK_SIZE)
        if not chunk:
            break
        buffer.extend(chunk)
        if len(buffer) > limit:
            raise ValidationError("File is too large", details=f"Maximum upload size is {limit} bytes")

    if not buffer:
        raise ValidationError("Uploaded file is empty")
    return bytes(buffer)
