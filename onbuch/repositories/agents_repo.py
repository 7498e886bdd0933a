import logging
from google.cloud import firestore
from onbuch.db.firestore import get_db

logger = logging.getLogger("onbuch.agents")

AGENTS_COLL = "aiAgents"


def _to_agent(doc) -> dict:
    return {"id": doc.id, **(doc.to_dict() or {})}

def list_agents() -> list[dict]:
    try:
        query = get_db().collection(AGENTS_COLL).order_by("createdAt", direction=firestore.Query.ASCENDING)
        return [_to_agent(d) for d in query.stream()]
    except Exception as e:
        logger.warning("Could not list AI agents: %s", e)
        return []

def get_agent(agent_id: str) -> dict | None:
    doc = get_db().collection(AGENTS_COLL).document(agent_id).get()
    return _to_agent(doc) if doc.exists else None

def create_agent(data: dict) -> str:
    _, ref = get_db().collection(AGENTS_COLL).add({**data, "createdAt": firestore.SERVER_TIMESTAMP})
    return ref.id

def update_agent(agent_id: str, data: dict) -> None:
    get_db().collection(AGENTS_COLL).document(agent_id).update({**data, "updatedAt": firestore.SERVER_TIMESTAMP})

def delete_agent(agent_id: str) -> None:
    get_db().collection(AGENTS_COLL).document(agent_id).delete()
