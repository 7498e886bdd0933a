import logging
from typing import Callable, Iterable, Optional

from onbuch.repositories import agents_repo
from onbuch.services.ai_config import ConfigProvider, MissingApiKeyError, resolve_api_key
from onbuch.services.gemini import GeminiChatClient, TutorConfigurationError, image_part, translate_error

logger = logging.getLogger("onbuch.agents")

AGENT_CONFIG_MESSAGE = "La configuration de l'agent IA est invalide. Veuillez contacter le support de la plateforme."


class AgentNotFoundError(LookupError):
    pass


class AgentService:
    def __init__(
        self,
        config: ConfigProvider,
        client_factory: Optional[Callable[[str], GeminiChatClient]] = None,
        get_agent: Callable[[str], Optional[dict]] = agents_repo.get_agent,
    ):
        self.config = config
        self.client_factory = client_factory or GeminiChatClient
        self.get_agent = get_agent

    def chat(self, agent_id: str, prompt: str, image: Optional[str] = None, history: Iterable = ()) -> dict:
        agent = self.get_agent(agent_id)
        if not agent:
            raise AgentNotFoundError(f'Agent with ID "{agent_id}" not found.')

        try:
            client = self.client_factory(resolve_api_key(self.config))
            parts = [prompt]
            if image:
                parts.append(image_part(image))
            text = client.send(agent.get("systemPrompt") or "", history, parts)
        except MissingApiKeyError as e:
            logger.error("Agent %s has no API key: %s", agent_id, e)
            raise TutorConfigurationError(AGENT_CONFIG_MESSAGE) from e
        except Exception as e:
            logger.exception("Error in AI agent flow (%s): %s", agent_id, e)
            translated = translate_error(e, AGENT_CONFIG_MESSAGE)
            if translated is not None:
                raise translated from e
            raise
        return {"response": text}
