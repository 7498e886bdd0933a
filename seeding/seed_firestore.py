from google.cloud import firestore

from onbuch.db.firestore import get_db
from onbuch.services.ai_config import DEFAULT_TUTOR_INSTRUCTION

db = get_db()

def seed_settings():
    # Keys are added from the admin screen; only the prompt gets a default.
    db.collection("settings").document("aiTutor").set({"systemPrompt": DEFAULT_TUTOR_INSTRUCTION}, merge=True)
    db.collection("settings").document("leaderboardExclusions").set({"excludedIds": []}, merge=True)

def seed_agents():
    seed_data = {
        "aiAgents/redaction": {
            "name": "Coach Rédaction",
            "description": "Aide à structurer dissertations et commentaires de texte.",
            "systemPrompt": (
                "Vous êtes un coach de rédaction pour les élèves camerounais. "
                "Aidez-les à construire un plan, à argumenter et à corriger leur style. "
                "Répondez toujours en français."
            ),
            "icon": "PenTool",
            "color": "#8b5cf6",
            "createdAt": firestore.SERVER_TIMESTAMP,
        },
    }

    for path, data in seed_data.items():
        collection, doc_id = path.split('/')
        db.collection(collection).document(doc_id).set(data)

    print("Seed data uploaded successfully!")

if __name__ == "__main__":
    seed_settings()
    seed_agents()
