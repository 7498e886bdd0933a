from fastapi import APIRouter, Depends
from onbuch.models.schemas import AiSettingsOut, ApiKeysIn, CurrentUser, ExclusionIn, TutorSettingsIn
from onbuch.repositories import leaderboard_repo, settings_repo
from onbuch.routers.users import require_admin

router = APIRouter(prefix="/api/admin", tags=["Admin"])


@router.get("/settings/ai", response_model=AiSettingsOut)
def get_ai_settings(_: CurrentUser = Depends(require_admin)):
    return AiSettingsOut(
        gemini=settings_repo.get_gemini_keys() or "",
        systemPrompt=settings_repo.get_tutor_prompt() or "",
    )

@router.put("/settings/api-keys")
def save_api_keys(payload: ApiKeysIn, _: CurrentUser = Depends(require_admin)):
    settings_repo.set_gemini_keys(payload.gemini)
    return {"message": "Clés API enregistrées"}

@router.put("/settings/ai-tutor")
def save_tutor_prompt(payload: TutorSettingsIn, _: CurrentUser = Depends(require_admin)):
    settings_repo.set_tutor_prompt(payload.systemPrompt)
    return {"message": "Instruction du tuteur enregistrée"}

@router.put("/leaderboard/exclusions/{uid}")
def set_leaderboard_exclusion(uid: str, payload: ExclusionIn, _: CurrentUser = Depends(require_admin)):
    leaderboard_repo.toggle_exclusion(uid, payload.exclude)
    return {"uid": uid, "excluded": payload.exclude}
