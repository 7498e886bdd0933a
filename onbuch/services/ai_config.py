"""Where the AI flows get their Gemini key and system instruction.

Lookup order, evaluated on every call (nothing is cached):

1. the remote configuration store (Firestore ``settings/apiKeys`` and
   ``settings/aiTutor``),
2. the environment (``GEMINI_API_KEY``), for the API key only,
3. the hardcoded French default, for the system instruction only.
"""
from __future__ import annotations

import logging
import random
from typing import List, Optional

from onbuch.core.config import settings
from onbuch.repositories import settings_repo

logger = logging.getLogger("onbuch.ai_config")

DEFAULT_TUTOR_INSTRUCTION = (
    "Vous êtes un Professeur Virtuel IA amical et serviable dans l'application OnBuch. "
    "Votre objectif est d'aider les étudiants camerounais à apprendre et à réussir. "
    "Si l'utilisateur vous demande de tracer ou de dessiner un graphique d'une fonction, "
    "informez-le que vous pouvez le faire et demandez-lui la fonction à tracer. "
    "Répondez toujours en français."
)


class MissingApiKeyError(RuntimeError):
    pass


class ConfigProvider:
    """Source of AI settings. Subclasses read a store; they never fall back themselves."""

    def get_api_keys(self) -> List[str]:
        raise NotImplementedError

    def get_system_instruction(self) -> Optional[str]:
        raise NotImplementedError


class FirestoreConfigProvider(ConfigProvider):
    def get_api_keys(self) -> List[str]:
        return split_keys(settings_repo.get_gemini_keys())

    def get_system_instruction(self) -> Optional[str]:
        return settings_repo.get_tutor_prompt()


class StaticConfigProvider(ConfigProvider):
    def __init__(self, api_keys: Optional[List[str]] = None, system_instruction: Optional[str] = None):
        self.api_keys = list(api_keys or [])
        self.system_instruction = system_instruction

    def get_api_keys(self) -> List[str]:
        return list(self.api_keys)

    def get_system_instruction(self) -> Optional[str]:
        return self.system_instruction


def split_keys(raw: Optional[str]) -> List[str]:
    """Keys are stored one per line; blank lines are ignored."""
    if not raw:
        return []
    return [k.strip() for k in raw.split("\n") if k.strip()]


def resolve_api_key(provider: ConfigProvider, env_key: Optional[str] = None) -> str:
    keys = provider.get_api_keys()
    if keys:
        return random.choice(keys)
    fallback = env_key if env_key is not None else settings.GEMINI_API_KEY
    if fallback:
        logger.info("No Gemini key in settings store; using environment key")
        return fallback
    raise MissingApiKeyError("Clé API Gemini non configurée dans l'administration.")


def resolve_system_instruction(provider: ConfigProvider) -> str:
    return provider.get_system_instruction() or DEFAULT_TUTOR_INSTRUCTION
