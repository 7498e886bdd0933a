from fastapi import APIRouter

router = APIRouter(tags=["Misc"])

@router.get("/health")
def health():
    return {"status": "ok"}
