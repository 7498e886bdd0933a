import os, json, base64, pathlib
from functools import lru_cache

from google.cloud import firestore
from google.oauth2 import service_account

import firebase_admin
from firebase_admin import initialize_app
from onbuch.core.config import settings


def init_firebase():
    """firebase_admin is only needed to verify client ID tokens."""
    if not firebase_admin._apps:
        initialize_app()


def _service_account():
    key_b64 = os.getenv("FIREBASE_KEY_B64")
    if key_b64:
        return service_account.Credentials.from_service_account_info(json.loads(base64.b64decode(key_b64)))
    path = os.getenv("GOOGLE_APPLICATION_CREDENTIALS") or settings.GOOGLE_APPLICATION_CREDENTIALS
    if path and pathlib.Path(path).exists():
        return service_account.Credentials.from_service_account_file(path)
    return None


@lru_cache(maxsize=1)
def get_db() -> firestore.Client:
    """Shared Firestore client: FIREBASE_KEY_B64, then a key file, then ADC."""
    creds = _service_account()
    if creds is None:
        return firestore.Client()
    project = os.getenv("GOOGLE_CLOUD_PROJECT") or creds.project_id
    return firestore.Client(project=project, credentials=creds)
