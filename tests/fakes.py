"""In-memory stand-ins for Firestore and the Gemini chat client."""

import copy
import itertools
from datetime import datetime, timezone

from google.api_core.exceptions import NotFound
from google.cloud.firestore_v1 import transforms


def _apply(current, value):
    if value is transforms.SERVER_TIMESTAMP:
        return datetime.now(timezone.utc)
    if isinstance(value, transforms.Increment):
        return (current or 0) + value.value
    if isinstance(value, transforms.ArrayUnion):
        out = list(current or [])
        out += [v for v in value.values if v not in out]
        return out
    if isinstance(value, transforms.ArrayRemove):
        return [v for v in (current or []) if v not in value.values]
    return copy.deepcopy(value)


def _merge(target: dict, data: dict) -> dict:
    for key, value in data.items():
        if isinstance(value, dict) and isinstance(target.get(key), dict):
            _merge(target[key], value)
        else:
            target[key] = _apply(target.get(key), value)
    return target


class FakeSnapshot:
    def __init__(self, ref, data):
        self.reference = ref
        self.id = ref.id
        self._data = data

    @property
    def exists(self):
        return self._data is not None

    def to_dict(self):
        return copy.deepcopy(self._data) if self._data is not None else None


class FakeDocument:
    def __init__(self, store, collection, doc_id):
        self._store = store
        self._collection = collection
        self.id = doc_id

    @property
    def _docs(self):
        return self._store.setdefault(self._collection, {})

    def get(self):
        return FakeSnapshot(self, self._docs.get(self.id))

    def set(self, data, merge=False):
        base = self._docs.get(self.id) if merge else None
        self._docs[self.id] = _merge(base or {}, data)

    def update(self, data):
        if self.id not in self._docs:
            raise NotFound(f"No document to update: {self._collection}/{self.id}")
        _merge(self._docs[self.id], data)

    def delete(self):
        self._docs.pop(self.id, None)


class FakeQuery:
    def __init__(self, collection, filters=(), order=None, limit=None):
        self._collection = collection
        self._filters = list(filters)
        self._order = order
        self._limit = limit

    def where(self, field, op, value):
        return FakeQuery(self._collection, self._filters + [(field, op, value)], self._order, self._limit)

    def order_by(self, field, direction="ASCENDING"):
        return FakeQuery(self._collection, self._filters, (field, direction), self._limit)

    def limit(self, n):
        return FakeQuery(self._collection, self._filters, self._order, n)

    def _matches(self, data):
        for field, op, value in self._filters:
            if op == "==" and data.get(field) != value:
                return False
            if op == "array_contains" and value not in (data.get(field) or []):
                return False
        return True

    def stream(self):
        col = self._collection
        snaps = [
            FakeSnapshot(col.document(doc_id), data)
            for doc_id, data in list(col._docs.items())
            if self._matches(data)
        ]
        if self._order:
            field, direction = self._order
            snaps.sort(key=lambda s: s._data.get(field), reverse=direction == "DESCENDING")
        return iter(snaps[: self._limit] if self._limit else snaps)


class FakeCollection(FakeQuery):
    _ids = itertools.count(1)

    def __init__(self, store, name):
        self._store = store
        self.name = name
        super().__init__(self)

    @property
    def _docs(self):
        return self._store.setdefault(self.name, {})

    def document(self, doc_id=None):
        return FakeDocument(self._store, self.name, doc_id or f"auto{next(self._ids)}")

    def add(self, data):
        ref = self.document()
        ref.set(data)
        return datetime.now(timezone.utc), ref


class FakeBatch:
    def __init__(self):
        self._ops = []

    def delete(self, ref):
        self._ops.append(ref.delete)

    def commit(self):
        for op in self._ops:
            op()


class FakeFirestore:
    def __init__(self):
        self.store = {}

    def collection(self, name):
        return FakeCollection(self.store, name)

    def batch(self):
        return FakeBatch()


class FakeChatClient:
    """Records what would have been sent to Gemini."""

    def __init__(self, api_key, reply="Bonjour !", error=None):
        self.api_key = api_key
        self.reply = reply
        self.error = error
        self.calls = []

    def send(self, system_instruction, history, parts):
        self.calls.append({"system_instruction": system_instruction, "history": list(history), "parts": parts})
        if self.error:
            raise self.error
        return self.reply


class FakeClientFactory:
    def __init__(self, reply="Bonjour !", error=None):
        self.reply = reply
        self.error = error
        self.clients = []

    def __call__(self, api_key):
        client = FakeChatClient(api_key, self.reply, self.error)
        self.clients.append(client)
        return client

    @property
    def last(self):
        return self.clients[-1] if self.clients else None
