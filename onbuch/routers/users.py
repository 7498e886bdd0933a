# onbuch/routers/users.py
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from onbuch.core.security import decode_token, is_admin_email
from onbuch.repositories.users_repo import get_user, update_user
from onbuch.models.schemas import CurrentUser, UserProfile, UserProfileUpdate

router = APIRouter(prefix="/api/users", tags=["Users"])

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/session")

def get_current_user(token: str = Depends(oauth2_scheme)) -> CurrentUser:
    try:
        payload = decode_token(token)  # {"sub": uid, "email": ..., "exp": ...}
        uid = payload.get("sub")
        if not uid:
            raise ValueError("No subject in token")
        email = payload.get("email")
        return CurrentUser(uid=uid, email=email, is_admin=is_admin_email(email))
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

def require_admin(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    if not current_user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Accès réservé aux administrateurs")
    return current_user

@router.get("/me", response_model=UserProfile)
def read_me(current_user: CurrentUser = Depends(get_current_user)):
    data = get_user(current_user.uid)
    if not data:
        raise HTTPException(status_code=404, detail="Profil introuvable")
    return UserProfile(**data)

@router.put("/me", response_model=UserProfile)
def update_me(payload: UserProfileUpdate, current_user: CurrentUser = Depends(get_current_user)):
    if not get_user(current_user.uid):
        raise HTTPException(status_code=404, detail="Profil introuvable")
    update_user(current_user.uid, payload.model_dump())
    return UserProfile(**get_user(current_user.uid))
