# docuvoice/api/speech.py
from fastapi import APIRouter

from ..schemas.speech import SpeechPlan, SpeechRequest
from ..services.speech import build_speech_plan
from ..utils.logging import api_logger

router = APIRouter(prefix="/api/text-to-speech", tags=["speech"])


@router.post("", response_model=SpeechPlan)
async def plan_speech(payload: SpeechRequest):
    plan = build_speech_plan(payload.text, payload.voice, payload.speed, payload.language)
    api_logger.info("Prepared speech plan", extra={
        "job_id": plan.job_id,
        "text_length": len(plan.metadata.text),
        "estimated_duration": plan.metadata.duration
    })
    return plan


@router.get("")
async def describe_speech():
    return {
        "message": "Text-to-Speech API",
        "endpoints": {
            "POST": "/api/text-to-speech - Prepare browser speech synthesis for text"
        }
    }
