import logging
from fastapi import APIRouter, Depends, HTTPException
from onbuch.models.schemas import CurrentUser, TutorRequest, TutorResponse
from onbuch.routers.users import get_current_user
from onbuch.services.ai_config import FirestoreConfigProvider
from onbuch.services.gemini import TutorError, TutorUnavailableError
from onbuch.services.tutor_service import TutorService

logger = logging.getLogger("onbuch.tutor")

router = APIRouter(prefix="/api/ai-tutor", tags=["AI Tutor"])


def get_tutor_service() -> TutorService:
    return TutorService(FirestoreConfigProvider())


def tutor_error_to_http(e: Exception) -> HTTPException:
    if isinstance(e, TutorUnavailableError):
        return HTTPException(status_code=503, detail=str(e))
    if isinstance(e, TutorError):
        return HTTPException(status_code=500, detail=str(e))
    return HTTPException(status_code=400, detail=str(e))


@router.post("/chat", response_model=TutorResponse, response_model_exclude_none=True)
def chat(
    payload: TutorRequest,
    current_user: CurrentUser = Depends(get_current_user),
    service: TutorService = Depends(get_tutor_service),
):
    logger.info("Tutor message from %s: %d chars, image=%s, history_turns=%d",
                current_user.uid, len(payload.message), bool(payload.image), len(payload.history))
    try:
        return service.respond(payload.message, image=payload.image, history=payload.history)
    except (TutorError, ValueError) as e:
        raise tutor_error_to_http(e)
