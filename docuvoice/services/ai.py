# docuvoice/services/ai.py
import json
import re
import time
from typing import List, Optional

import httpx

from ..errors import (
    AIKeyMissingError,
    AIPermissionDeniedError,
    AIProviderError,
    AIQuotaExceededError,
    DocuVoiceError,
    ParseError,
    ValidationError,
)
from ..utils.logging import ai_logger

MIN_CONTEXT_CHARS = 20
MIN_SUMMARY_CHARS = 50
MIN_QUESTION_SOURCE_CHARS = 100

NOT_FOUND_ANSWER = "I cannot find this information in the provided document"


class GeminiAPIError(RuntimeError):
    pass


class GeminiClient:
    """Thin async client for the Generative Language ``generateContent`` endpoint."""

    def __init__(self, api_key: Optional[str], base_url: str, timeout: float = 60.0,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def generate(self, prompt: str, model: str) -> str:
        if not self.api_key:
            raise GeminiAPIError("GOOGLE_AI_API_KEY is not set in environment variables")

        url = f"{self.base_url}/models/{model}:generateContent"
        payload = {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}
        try:
            response = await self._client.post(url, params={"key": self.api_key}, json=payload)
        except httpx.HTTPError as e:
            raise GeminiAPIError(f"Request to Google AI failed: {e}") from e

        if response.status_code >= 400:
            raise GeminiAPIError(self._describe_error(response))

        data = response.json()
        candidates = data.get("candidates") or []
        if not candidates:
            return ""
        parts = (candidates[0].get("content") or {}).get("parts") or []
        return "".join(part.get("text", "") for part in parts)

    @staticmethod
    def _describe_error(response: httpx.Response) -> str:
        try:
            error = response.json().get("error") or {}
        except ValueError:
            error = {}
        label = " ".join(part for part in (str(response.status_code), error.get("status")) if part)
        message = error.get("message") or response.text
        return f"[{label}] {message}"

    async def aclose(self) -> None:
        await self._client.aclose()


def classify_ai_error(error: Exception) -> AIProviderError:
    """Map a provider failure onto the user-facing error for it by message content."""
    message = str(error)
    if "API_KEY" in message or "API key" in message:
        return AIKeyMissingError(details=message)
    if "PERMISSION_DENIED" in message or "403" in message:
        return AIPermissionDeniedError(details=message)
    if "QUOTA_EXCEEDED" in message or "RESOURCE_EXHAUSTED" in message or "429" in message:
        return AIQuotaExceededError(details=message)
    return AIProviderError(details=message)


def question_count_for(length: int) -> int:
    if length > 10000:
        return 12
    if length > 5000:
        return 10
    if length > 3000:
        return 7
    if length > 1000:
        return 5
    return 3


def build_answer_prompt(question: str, context: str) -> str:
    return f"""You are a helpful assistant that answers questions based on a specific document or text. Please answer the user's question using ONLY the information provided in the document context below. If the answer cannot be found in the document, clearly state that the information is not available in the provided text.

Document Context:
{context}

User Question: {question}

Instructions:
1. Base your answer ONLY on the provided document context
2. If the information is not in the document, say "{NOT_FOUND_ANSWER}"
3. Keep your answer concise and relevant
4. Quote specific parts of the document when applicable
5. Make your response suitable for text-to-speech (clear and well-structured)

Answer:"""


def build_summary_prompt(text: str) -> str:
    return (
        "Please provide a concise and clear summary of the following text. "
        "Focus on the main points and key information. Keep the summary between 2-4 sentences "
        "and make it suitable for text-to-speech conversion:\n\n"
        f"{text}"
    )


def build_questions_prompt(text: str, count: int) -> str:
    return f"""Based on the following document, generate {count} thoughtful and relevant questions that someone might ask to better understand the content. The questions should:

1. Cover different aspects of the document (main topics, details, implications, etc.)
2. Be clear and specific
3. Help readers understand key information
4. Range from general overview questions to more specific detail questions
5. Be suitable for someone who wants to learn about the document content

Document Content:
{text}

Please provide exactly {count} questions in the following JSON format:
{{
  "questions": [
    "Question 1 here?",
    "Question 2 here?",
    "Question 3 here?"
  ]
}}

Make sure each question:
- Ends with a question mark
- Is clear and well-formed
- Can be answered using the document content
- Covers different aspects of the document"""


_CODE_FENCE = re.compile(r"```(?:json)?\n?")
_QUOTED_QUESTION = re.compile(r'"([^"]*\?[^"]*)"')


def parse_questions(raw: str) -> List[str]:
    """Read the question list from a model reply.

    Expects ``{"questions": [...]}``; when the reply is not valid JSON, falls back
    to collecting every double-quoted string that contains a question mark.
    """
    cleaned = _CODE_FENCE.sub("", raw.strip()).strip()
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError:
        ai_logger.info("JSON parse failed, extracting questions manually")
        matches = _QUOTED_QUESTION.findall(cleaned)
        if not matches:
            raise ParseError(details="Failed to parse questions from AI response")
        data = {"questions": matches}

    questions = data.get("questions") if isinstance(data, dict) else None
    if not isinstance(questions, list):
        raise ParseError("Invalid questions format received from AI")

    questions = [str(q).strip() for q in questions if str(q).strip()]
    if not questions:
        raise ParseError("No questions were generated")
    return questions


def _require_text(value: Optional[str], message: str) -> str:
    if not value or not isinstance(value, str) or not value.strip():
        raise ValidationError(message)
    return value


class AIService:
    """Q&A, summarisation and question generation on top of one model call each."""

    def __init__(self, client: GeminiClient, chat_model: str, questions_model: str):
        self.client = client
        self.chat_model = chat_model
        self.questions_model = questions_model

    async def _generate(self, operation: str, prompt: str, model: str) -> str:
        start_time = time.time()
        ai_logger.info("Calling generative model", extra={
            "operation": operation,
            "model": model,
            "prompt_length": len(prompt)
        })
        try:
            text = await self.client.generate(prompt, model)
        except DocuVoiceError:
            raise
        except Exception as e:
            ai_logger.error("Generative model call failed", extra={
                "operation": operation,
                "model": model,
                "error": str(e)
            })
            raise classify_ai_error(e) from e

        ai_logger.info("Generative model call completed", extra={
            "operation": operation,
            "response_length": len(text or ""),
            "execution_time_ms": round((time.time() - start_time) * 1000, 2)
        })
        return (text or "").strip()

    async def answer_question(self, question: Optional[str], context: Optional[str]) -> str:
        question = _require_text(question, "Question is required and must be a string")
        context = _require_text(context, "Document context is required to answer questions")
        if len(context) < MIN_CONTEXT_CHARS:
            raise ValidationError("Document context is too short to answer questions meaningfully")

        answer = await self._generate("answer_question", build_answer_prompt(question, context), self.chat_model)
        if not answer:
            raise AIProviderError("Failed to generate answer")
        return answer

    async def summarize(self, text: Optional[str]) -> str:
        text = _require_text(text, "Text is required and must be a string")
        if len(text) < MIN_SUMMARY_CHARS:
            raise ValidationError(f"Text must be at least {MIN_SUMMARY_CHARS} characters long to summarize")

        summary = await self._generate("summarize", build_summary_prompt(text), self.chat_model)
        if not summary:
            raise AIProviderError("Failed to generate summary")
        return summary

    async def generate_questions(self, text: Optional[str]) -> List[str]:
        text = _require_text(text, "Text is required and must be a string")
        if len(text) < MIN_QUESTION_SOURCE_CHARS:
            raise ValidationError(
                f"Text must be at least {MIN_QUESTION_SOURCE_CHARS} characters long to generate meaningful questions"
            )

        count = question_count_for(len(text))
        raw = await self._generate("generate_questions", build_questions_prompt(text, count), self.questions_model)
        if not raw:
            raise AIProviderError("Failed to generate questions. Please try again.")
        return parse_questions(raw)
