"""
AI assistant and speech-to-text.

POST /api/ai-assistant: roofing Q&A. Requires login; free accounts get
FREE_AI_REQUESTS answers, 'active' / 'pro' subscribers are unlimited.
POST /api/speech-to-text: base64 audio from the dictation button.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from .. import models
from ..auth import get_optional_user
from ..config import settings
from ..database import get_db
from ..integrations import IntegrationError
from ..integrations import openai_client
from ..schemas import AssistantRequest, SpeechRequest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["assistant"])

SUBSCRIBED_STATUSES = ("active", "pro")


def has_subscription(user: models.User) -> bool:
    return user.subscription_status in SUBSCRIBED_STATUSES


@router.post("/ai-assistant")
def ai_assistant(
    request: AssistantRequest,
    current_user: Optional[models.User] = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    if not request.message or not request.message.strip():
        raise HTTPException(status_code=400, detail="Message is required")

    if not settings.OPENAI_API_KEY:
        return JSONResponse(
            status_code=503,
            content={"error": "AI assistant is not configured", "configured": False},
        )

    if current_user is None:
        return JSONResponse(
            status_code=401,
            content={"error": "Login required to use AI assistant", "requiresAuth": True},
        )

    used = current_user.ai_requests_used or 0
    subscribed = has_subscription(current_user)
    limit = settings.FREE_AI_REQUESTS

    if not subscribed and used >= limit:
        return JSONResponse(
            status_code=403,
            content={
                "error": "Free AI request used. Subscribe for unlimited access.",
                "requiresSubscription": True,
                "freeRequestsUsed": used,
                "freeRequestsLimit": limit,
            },
        )

    messages = openai_client.build_messages(
        request.message,
        history=request.conversation_history,
        context=request.context,
        company=settings.COMPANY_NAME,
    )
    try:
        reply = openai_client.chat_completion(messages, settings.OPENAI_API_KEY, settings.OPENAI_MODEL)
    except IntegrationError as e:
        logger.warning("Assistant request failed for user %s: %s", current_user.id, e)
        raise HTTPException(status_code=502, detail="Failed to get AI response")

    if not subscribed:
        current_user.ai_requests_used = used + 1
        db.commit()

    return {
        "success": True,
        "response": reply,
        "configured": True,
        "freeRequestsRemaining": None if subscribed else max(0, limit - used - 1),
    }


@router.post("/speech-to-text")
def speech_to_text(request: SpeechRequest):
    if not settings.OPENAI_API_KEY:
        return JSONResponse(
            status_code=500,
            content={"error": "OpenAI API key not configured", "configured": False},
        )

    if not request.audio:
        raise HTTPException(status_code=400, detail="Audio data is required")

    try:
        audio = openai_client.decode_audio(request.audio)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        text = openai_client.transcribe(audio, settings.OPENAI_API_KEY, settings.OPENAI_TRANSCRIBE_MODEL)
    except IntegrationError as e:
        logger.warning("Transcription failed: %s", e)
        raise HTTPException(status_code=502, detail="Failed to transcribe audio")

    return {"success": True, "text": text, "configured": True}
