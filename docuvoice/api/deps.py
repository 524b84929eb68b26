# docuvoice/api/deps.py
"""
FastAPI dependencies: caller identity and the AI service.
"""
from typing import Optional

from fastapi import Cookie, Header

from ..auth import SESSION_COOKIE, clerk_authenticator, extract_token
from ..config import settings
from ..errors import UnauthorizedError
from ..services.ai import AIService, GeminiClient

_ai_client: Optional[GeminiClient] = None


async def get_optional_user_id(
        authorization: Optional[str] = Header(None),
        session_cookie: Optional[str] = Cookie(None, alias=SESSION_COOKIE),
) -> Optional[str]:
    """Resolve the signed-in user, or None when the request carries no session token"""
    token = extract_token(authorization, session_cookie)
    if not token:
        return None
    claims = clerk_authenticator.verify(token)
    return claims["sub"]


async def get_current_user_id(
        authorization: Optional[str] = Header(None),
        session_cookie: Optional[str] = Cookie(None, alias=SESSION_COOKIE),
) -> str:
    user_id = await get_optional_user_id(authorization, session_cookie)
    if not user_id:
        raise UnauthorizedError()
    return user_id


def get_ai_client() -> GeminiClient:
    global _ai_client
    if _ai_client is None:
        _ai_client = GeminiClient(
            api_key=settings.GOOGLE_AI_API_KEY,
            base_url=settings.GEMINI_API_BASE,
            timeout=settings.AI_TIMEOUT_SECONDS,
        )
    return _ai_client


async def close_ai_client() -> None:
    global _ai_client
    if _ai_client is not None:
        await _ai_client.aclose()
        _ai_client = None


def get_ai_service() -> AIService:
    return AIService(
        client=get_ai_client(),
        chat_model=settings.GEMINI_CHAT_MODEL,
        questions_model=settings.GEMINI_QUESTIONS_MODEL,
    )
