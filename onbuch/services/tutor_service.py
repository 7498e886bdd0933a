from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional

from onbuch.services.ai_config import (
    ConfigProvider,
    MissingApiKeyError,
    resolve_api_key,
    resolve_system_instruction,
)
from onbuch.services.gemini import (
    GeminiChatClient,
    TutorConfigurationError,
    image_part,
    translate_error,
)
from onbuch.services.plotting import PlotIntentDetector, RegexPlotIntentDetector, sample_function

logger = logging.getLogger("onbuch.tutor")

TUTOR_CONFIG_MESSAGE = "La configuration du Tuteur IA est invalide. Veuillez contacter le support de la plateforme."
PLOT_SUCCESS_MESSAGE = "Voici le graphique de la fonction que vous avez demandée."
PLOT_FAILURE_MESSAGE = "Désolé, je n'ai pas pu tracer la fonction \"{expression}\". Assurez-vous qu'elle est mathématiquement correcte."


class TutorService:
    """Answers one AI tutor message: a local plot when asked for one, Gemini otherwise.

    Nothing is kept between calls; the caller passes the whole history each time.
    """

    def __init__(
        self,
        config: ConfigProvider,
        detector: Optional[PlotIntentDetector] = None,
        client_factory: Optional[Callable[[str], GeminiChatClient]] = None,
    ):
        self.config = config
        self.detector = detector or RegexPlotIntentDetector()
        self.client_factory = client_factory or GeminiChatClient

    def respond(self, message: str, image: Optional[str] = None, history: Iterable = ()) -> dict:
        # Plotting only works for text-only requests
        if not image:
            expression = self.detector.detect(message)
            if expression:
                return self._plot(expression)
        return {"response": self._ask_model(message, image, history)}

    def _plot(self, expression: str) -> dict:
        plot_data = sample_function(expression)
        if plot_data:
            logger.info("Plotted %s (%d points)", plot_data["function"], len(plot_data["points"]))
            return {"response": PLOT_SUCCESS_MESSAGE, "plotData": plot_data}
        logger.info("Could not plot %r", expression)
        return {"response": PLOT_FAILURE_MESSAGE.format(expression=expression)}

    def _ask_model(self, message: str, image: Optional[str], history: Iterable) -> str:
        try:
            api_key = resolve_api_key(self.config)
            system_instruction = resolve_system_instruction(self.config)
            client = self.client_factory(api_key)

            parts = [message]
            if image:
                # Image first, then the question
                parts.insert(0, image_part(image))

            return client.send(system_instruction, history, parts)
        except MissingApiKeyError as e:
            logger.error("AI tutor has no API key: %s", e)
            raise TutorConfigurationError(TUTOR_CONFIG_MESSAGE) from e
        except Exception as e:
            logger.exception("Error in AI tutor flow: %s", e)
            translated = translate_error(e, TUTOR_CONFIG_MESSAGE)
            if translated is not None:
                raise translated from e
            raise
