from fastapi import APIRouter
from onbuch.models.schemas import SessionIn, Token
from onbuch.services.auth_service import verify_firebase_token, session_from_claims

router = APIRouter(prefix="/api/auth", tags=["Auth"])

@router.post("/session", response_model=Token)
def create_session(payload: SessionIn):
    """Exchange a Firebase ID token (client SDK login) for an API token."""
    claims = verify_firebase_token(payload.token)
    access = session_from_claims(claims)
    return {"access_token": access, "token_type": "bearer"}
