# docuvoice/schemas/speech.py
from typing import Optional

from pydantic import BaseModel


class SpeechRequest(BaseModel):
    text: Optional[str] = None
    voice: Optional[str] = None
    speed: Optional[float] = None
    language: Optional[str] = None


class SpeechMetadata(BaseModel):
    text: str
    voice: str
    speed: float
    language: str
    duration: Optional[int] = None
    fallback: bool = True


class SpeechPlan(BaseModel):
    success: bool = True
    job_id: str
    metadata: SpeechMetadata
