# docuvoice/services/speech.py
import math
import secrets
import time
from typing import Optional

from ..config import settings
from ..errors import ValidationError
from ..schemas.speech import SpeechMetadata, SpeechPlan

VOICES = ("alloy", "echo", "fable", "onyx", "nova", "shimmer")
DEFAULT_VOICE = "alloy"
DEFAULT_LANGUAGE = "en-US"
MIN_SPEED = 0.25
MAX_SPEED = 4.0
WORDS_PER_MINUTE = 150


def estimate_duration(text: str, speed: float = 1.0) -> int:
    """Spoken length in seconds at 150 words per minute"""
    word_count = len(text.split(" "))
    return math.ceil((word_count / WORDS_PER_MINUTE) * 60 / speed)


def new_job_id() -> str:
    return f"tts_{int(time.time() * 1000)}_{secrets.token_hex(5)[:9]}"


def build_speech_plan(text: Optional[str], voice: Optional[str] = None,
                      speed: Optional[float] = None, language: Optional[str] = None) -> SpeechPlan:
    """Validate a speech request and describe how the browser should speak it.

    Audio is synthesised client-side, so the plan only carries the settled
    parameters and an estimated duration.
    """
    if not text or not isinstance(text, str):
        raise ValidationError("Text is required and must be a string")
    if len(text) > settings.MAX_SPEECH_CHARS:
        raise ValidationError(f"Text is too long. Maximum {settings.MAX_SPEECH_CHARS} characters allowed.")
    if speed is not None and not (MIN_SPEED <= speed <= MAX_SPEED):
        raise ValidationError(f"Speed must be between {MIN_SPEED} and {MAX_SPEED}")
    if voice is not None and voice not in VOICES:
        raise ValidationError("Unknown voice", details=f"Choose one of {', '.join(VOICES)}")

    speed = speed or 1.0
    return SpeechPlan(
        job_id=new_job_id(),
        metadata=SpeechMetadata(
            text=text,
            voice=voice or DEFAULT_VOICE,
            speed=speed,
            language=language or DEFAULT_LANGUAGE,
            duration=estimate_duration(text, speed),
            fallback=True,
        ),
    )
