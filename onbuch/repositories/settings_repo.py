from onbuch.db.firestore import get_db

SETTINGS_COLL = "settings"


def _settings_doc(name: str) -> dict | None:
    doc = get_db().collection(SETTINGS_COLL).document(name).get()
    return doc.to_dict() if doc.exists else None

def get_gemini_keys() -> str | None:
    data = _settings_doc("apiKeys") or {}
    return data.get("gemini")

def get_tutor_prompt() -> str | None:
    data = _settings_doc("aiTutor") or {}
    return data.get("systemPrompt")

def set_gemini_keys(raw: str) -> None:
    get_db().collection(SETTINGS_COLL).document("apiKeys").set({"gemini": raw}, merge=True)

def set_tutor_prompt(prompt: str) -> None:
    get_db().collection(SETTINGS_COLL).document("aiTutor").set({"systemPrompt": prompt}, merge=True)
