from google.cloud import firestore
from onbuch.db.firestore import get_db
from onbuch.repositories.users_repo import add_points

DECKS_COLL = "flashcardDecks"
PROGRESS_COLL = "userFlashcardProgress"

ACTIVITY_POINTS = {
    "flashcard_review": 1,
    "chapter_review": 5,
}


def _to_deck(doc) -> dict:
    return {"id": doc.id, **(doc.to_dict() or {})}

def list_all_decks() -> list[dict]:
    q = get_db().collection(DECKS_COLL).order_by("createdAt", direction=firestore.Query.DESCENDING)
    return [_to_deck(d) for d in q.stream()]

def list_decks_for_user(uid: str, school_class: str, series: str) -> list[dict]:
    q = get_db().collection(DECKS_COLL).where("classes", "array_contains", school_class)
    decks = [_to_deck(d) for d in q.stream()]
    return [d for d in decks if can_view_deck(d, uid, school_class, series)]

def can_view_deck(deck: dict, uid: str, school_class: str | None, series: str | None) -> bool:
    """Owners always see their deck; others only public decks for their class and series."""
    if deck.get("createdBy") == uid:
        return True
    return bool(
        deck.get("isPublic")
        and school_class in (deck.get("classes") or [])
        and series in (deck.get("series") or [])
    )

def get_deck(deck_id: str) -> dict | None:
    doc = get_db().collection(DECKS_COLL).document(deck_id).get()
    return _to_deck(doc) if doc.exists else None

def create_deck(data: dict, uid: str | None = None) -> str:
    _, ref = get_db().collection(DECKS_COLL).add({
        **data,
        "createdBy": uid or "admin",
        "createdAt": firestore.SERVER_TIMESTAMP,
        "updatedAt": firestore.SERVER_TIMESTAMP,
    })
    return ref.id

def update_deck(deck_id: str, data: dict) -> None:
    get_db().collection(DECKS_COLL).document(deck_id).update({**data, "updatedAt": firestore.SERVER_TIMESTAMP})

def delete_deck(deck_id: str) -> None:
    """Delete the deck and every user's progress on it in one batch."""
    db = get_db()
    batch = db.batch()
    for d in db.collection(PROGRESS_COLL).where("deckId", "==", deck_id).stream():
        batch.delete(d.reference)
    batch.delete(db.collection(DECKS_COLL).document(deck_id))
    batch.commit()

def get_progress(uid: str, deck_id: str) -> dict:
    doc = get_db().collection(PROGRESS_COLL).document(f"{uid}_{deck_id}").get()
    if doc.exists:
        return (doc.to_dict() or {}).get("progress", {})
    return {}

def update_progress(uid: str, deck_id: str, card_id: str, status: str) -> None:
    get_db().collection(PROGRESS_COLL).document(f"{uid}_{deck_id}").set(
        {"userId": uid, "deckId": deck_id, "progress": {card_id: status}},
        merge=True,
    )

def add_points_for_activity(uid: str, activity: str) -> int:
    points = ACTIVITY_POINTS.get(activity, 0)
    if points > 0:
        add_points(uid, points)
    return points
