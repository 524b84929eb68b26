# docuvoice/schemas/extraction.py
from typing import Optional

from pydantic import BaseModel


class ImageTextRequest(BaseModel):
    text: Optional[str] = None
    file_name: Optional[str] = None
    file_size: Optional[int] = None
    file_type: Optional[str] = None


class ExtractedText(BaseModel):
    text: str
    characters: int
    pages: Optional[int] = None
    method: str
    file_name: Optional[str] = None
    file_size: Optional[int] = None
    file_type: Optional[str] = None
    success: bool = True
