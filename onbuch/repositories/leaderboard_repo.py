import logging
from google.cloud import firestore
from google.api_core.exceptions import NotFound
from onbuch.db.firestore import get_db

logger = logging.getLogger("onbuch.leaderboard")


def _exclusions_ref():
    return get_db().collection("settings").document("leaderboardExclusions")

def get_exclusions() -> list[str]:
    """User ids hidden from the public leaderboard."""
    try:
        doc = _exclusions_ref().get()
        if doc.exists:
            return (doc.to_dict() or {}).get("excludedIds", [])
        return []
    except Exception as e:
        logger.warning("Error fetching leaderboard exclusions: %s", e)
        return []

def toggle_exclusion(uid: str, exclude: bool) -> None:
    ref = _exclusions_ref()
    try:
        if exclude:
            ref.update({"excludedIds": firestore.ArrayUnion([uid])})
        else:
            ref.update({"excludedIds": firestore.ArrayRemove([uid])})
    except NotFound:
        # First toggle ever: the document doesn't exist yet
        ref.set({"excludedIds": [uid] if exclude else []})

def rank_users(users: list[dict], excluded: list[str], limit: int | None = None) -> list[dict]:
    eligible = [
        u for u in users
        if u.get("uid") not in excluded and (u.get("points") or 0) > 0
    ]
    eligible.sort(key=lambda u: u.get("points") or 0, reverse=True)
    return eligible[:limit] if limit else eligible
