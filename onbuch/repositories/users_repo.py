from google.cloud import firestore
from onbuch.db.firestore import get_db

USERS_COLL = "users"

def get_user(uid: str) -> dict | None:
    doc = get_db().collection(USERS_COLL).document(uid).get()
    return {"uid": uid, **doc.to_dict()} if doc.exists else None

def create_user(uid: str, data: dict) -> None:
    get_db().collection(USERS_COLL).document(uid).set({
        **data,
        "points": 0,
        "savedCourses": [],
        "savedResources": [],
        "createdAt": firestore.SERVER_TIMESTAMP,
    })

def update_user(uid: str, data: dict) -> None:
    get_db().collection(USERS_COLL).document(uid).update({**data, "updatedAt": firestore.SERVER_TIMESTAMP})

def update_last_login(uid: str) -> None:
    get_db().collection(USERS_COLL).document(uid).update({"lastLogin": firestore.SERVER_TIMESTAMP})

def list_users() -> list[dict]:
    return [{"uid": d.id, **(d.to_dict() or {})} for d in get_db().collection(USERS_COLL).stream()]

def add_points(uid: str, points: int) -> None:
    get_db().collection(USERS_COLL).document(uid).update({"points": firestore.Increment(points)})
