"""Thin wrapper around the Gemini chat API shared by the tutor and the agents."""
from __future__ import annotations

import base64
import binascii
import re
from typing import Iterable, List, Optional, Tuple

from google import genai
from google.genai import types

from onbuch.core.config import settings

OVERLOADED_MESSAGE = "Le service est actuellement surchargé. Veuillez patienter un moment et réessayer."

_MIME_RE = re.compile(r":(.*?);")

# All four harm categories unblocked; moderation happens on the platform side.
SAFETY_SETTINGS = [
    types.SafetySetting(category=category, threshold=types.HarmBlockThreshold.BLOCK_NONE)
    for category in (
        types.HarmCategory.HARM_CATEGORY_HARASSMENT,
        types.HarmCategory.HARM_CATEGORY_HATE_SPEECH,
        types.HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT,
        types.HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT,
    )
]


class TutorError(Exception):
    """User-facing AI failure; ``str(e)`` is the French message to show."""

class TutorConfigurationError(TutorError):
    pass

class TutorUnavailableError(TutorError):
    pass


def parse_data_uri(uri: str) -> Tuple[str, bytes]:
    """``data:image/png;base64,....`` -> ("image/png", raw bytes)."""
    header, sep, data = (uri or "").partition(",")
    mime_match = _MIME_RE.search(header)
    if not sep or not mime_match:
        raise ValueError("Invalid data URI format")
    try:
        return mime_match.group(1), base64.b64decode(data)
    except (binascii.Error, ValueError):
        raise ValueError("Invalid data URI format")


def image_part(uri: str) -> types.Part:
    mime_type, data = parse_data_uri(uri)
    return types.Part.from_bytes(data=data, mime_type=mime_type)


def to_contents(history: Iterable) -> List[types.Content]:
    """Chat turns ({role, content} dicts or ChatTurn models) -> Gemini history."""
    contents = []
    for turn in history or []:
        item = turn.model_dump() if hasattr(turn, "model_dump") else dict(turn)
        contents.append(types.Content(role=item["role"], parts=[types.Part(text=item.get("content") or "")]))
    return contents


def translate_error(error: Exception, config_message: str) -> Optional[TutorError]:
    """Map an SDK error onto a user-facing one; None means "re-raise as is"."""
    text = str(error).lower()
    # SDK format: "403 PERMISSION_DENIED. {... 'Permission denied on resource ...'}"
    if "api key" in text or "permission" in text:
        return TutorConfigurationError(config_message)
    if "503" in text or "overloaded" in text:
        return TutorUnavailableError(OVERLOADED_MESSAGE)
    return None


class GeminiChatClient:
    def __init__(self, api_key: str, model: Optional[str] = None):
        self.client = genai.Client(api_key=api_key)
        self.model = model or settings.GEMINI_MODEL

    def send(self, system_instruction: str, history: Iterable, parts: list) -> str:
        chat = self.client.chats.create(
            model=self.model,
            config=types.GenerateContentConfig(
                system_instruction=system_instruction,
                safety_settings=SAFETY_SETTINGS,
            ),
            history=to_contents(history),
        )
        response = chat.send_message(parts)
        return response.text or ""
