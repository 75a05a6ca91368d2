"""
OpenAI REST calls: the roofing chat assistant and Whisper transcription.

Plain urllib against the public endpoints, same as the other integrations.
"""

import base64
import binascii
import logging
import uuid
from typing import Optional

from .http import IntegrationError, request_json

logger = logging.getLogger(__name__)

CHAT_URL = "https://api.openai.com/v1/chat/completions"
TRANSCRIBE_URL = "https://api.openai.com/v1/audio/transcriptions"
HISTORY_LIMIT = 10
TRANSCRIBE_TIMEOUT = 90

FALLBACK_REPLY = "I couldn't generate a response. Please try again."

SYSTEM_PROMPT = """You are {company}'s AI assistant, an expert in roofing estimation and construction. You help roofing professionals with:
- Address lookups and property information
- Roof measurement guidance and takeoffs
- Material recommendations (shingles, underlayment, flashing, etc.)
- Cost estimation tips
- Permit requirements
- Best practices for roofing projects

Keep responses concise and practical. If the user provides an address, help format it properly for the system. When discussing measurements, use industry-standard terms like "roofing squares" (100 sq ft = 1 square)."""


def build_messages(message: str, history=None, context: Optional[str] = None,
                   company: str = "RoofMaster 360") -> list:
    """System prompt, then the last few turns of history, then the new message."""
    system = SYSTEM_PROMPT.format(company=company)
    if context:
        system += f"\n\nCurrent context: {context}"

    messages = [{"role": "system", "content": system}]
    for turn in list(history or [])[-HISTORY_LIMIT:]:
        role = turn.get("role") if isinstance(turn, dict) else getattr(turn, "role", None)
        content = turn.get("content") if isinstance(turn, dict) else getattr(turn, "content", None)
        if role in ("user", "assistant") and content:
            messages.append({"role": role, "content": content})
    messages.append({"role": "user", "content": message})
    return messages


def chat_completion(messages: list, api_key: str, model: str) -> str:
    result = request_json(
        "openai-chat",
        CHAT_URL,
        payload={
            "model": model,
            "messages": messages,
            "max_tokens": 500,
            "temperature": 0.7,
        },
        headers={"Authorization": f"Bearer {api_key}"},
    )
    try:
        content = result["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        logger.warning("OpenAI chat response had no content: %s", str(result)[:200])
        return FALLBACK_REPLY
    return content or FALLBACK_REPLY


def decode_audio(audio_b64: str) -> bytes:
    """Base64 audio from the app; a data: URI prefix is tolerated."""
    if audio_b64.startswith("data:") and "," in audio_b64:
        audio_b64 = audio_b64.split(",", 1)[1]
    try:
        return base64.b64decode(audio_b64, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"audio is not valid base64: {e}")


def _multipart(fields: dict, file_field: str, filename: str, content: bytes,
               content_type: str) -> tuple:
    boundary = uuid.uuid4().hex
    parts = []
    for name, value in fields.items():
        parts.append(
            f"--{boundary}\r\n"
            f'Content-Disposition: form-data; name="{name}"\r\n\r\n'
            f"{value}\r\n".encode("utf-8")
        )
    parts.append(
        f"--{boundary}\r\n"
        f'Content-Disposition: form-data; name="{file_field}"; filename="{filename}"\r\n'
        f"Content-Type: {content_type}\r\n\r\n".encode("utf-8")
    )
    parts.append(content)
    parts.append(f"\r\n--{boundary}--\r\n".encode("utf-8"))
    return b"".join(parts), f"multipart/form-data; boundary={boundary}"


def transcribe(audio: bytes, api_key: str, model: str = "whisper-1", language: str = "en") -> str:
    body, content_type = _multipart(
        {"model": model, "language": language},
        "file", "audio.wav", audio, "audio/wav",
    )
    result = request_json(
        "openai-whisper",
        TRANSCRIBE_URL,
        data=body,
        headers={"Authorization": f"Bearer {api_key}", "Content-Type": content_type},
        timeout=TRANSCRIBE_TIMEOUT,
    )
    if "text" not in result:
        raise IntegrationError("openai-whisper", "response had no transcript")
    return result["text"]
