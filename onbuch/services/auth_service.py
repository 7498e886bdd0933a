from fastapi import HTTPException
from firebase_admin import auth as firebase_auth
from onbuch.core.security import create_access_token
from onbuch.db.firestore import init_firebase
from onbuch.repositories.users_repo import get_user, create_user, update_last_login


def verify_firebase_token(token: str) -> dict:
    init_firebase()
    try:
        return firebase_auth.verify_id_token(token)
    except Exception:
        raise HTTPException(status_code=400, detail="Invalid token")

def session_from_claims(claims: dict) -> str:
    uid = claims.get("uid") or claims.get("sub")
    if not uid:
        raise HTTPException(status_code=400, detail="Invalid token (no uid)")
    email = claims.get("email")
    if not get_user(uid):
        create_user(uid, {
            "email": email,
            "displayName": claims.get("name") or (email.split("@")[0] if email else ""),
            "school": "",
            "whatsapp": "",
            "gender": "",
            "schoolClass": "",
            "series": "",
        })
    else:
        update_last_login(uid)
    return create_access_token(sub=uid, email=email)
