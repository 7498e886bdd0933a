from datetime import datetime, timedelta, timezone
from jose import jwt
from onbuch.core.config import settings

def create_access_token(sub: str, email: str | None = None, expires_minutes: int | None = None) -> str:
    exp = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes or settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    payload = {"sub": sub, "exp": exp}
    if email:
        payload["email"] = email
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

def decode_token(token: str) -> dict:
    return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])

def is_admin_email(email: str | None) -> bool:
    if not email:
        return False
    return email.lower() in {e.lower() for e in settings.ADMIN_EMAILS}
