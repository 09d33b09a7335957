"""
Key-Value Module - Integer-keyed JSON record storage
One collection per REST resource, backed by the database or by process memory
"""

import copy
import threading
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from extensions import db
from models import KeyValueRecord

# Largest value an INTEGER primary key holds on SQLite and PostgreSQL BIGINT
MAX_RECORD_ID = 2 ** 63 - 1


class MemoryKeyValueStore:
    """In-process store; add() is serialized by a lock"""

    def __init__(self, collection):
        self.collection = collection
        self._records = {}
        self._lock = threading.Lock()

    def get(self, record_id):
        record = self._records.get(record_id)
        return copy.deepcopy(record) if record is not None else None

    def set(self, record_id, record):
        with self._lock:
            self._records[record_id] = copy.deepcopy(record)

    def has(self, record_id):
        return record_id in self._records

    def delete(self, record_id):
        with self._lock:
            self._records.pop(record_id, None)

    def get_all(self):
        return {record_id: copy.deepcopy(record) for record_id, record in self._records.items()}

    def add(self, record):
        """Assign the next id (max + 1, or 1) and persist the record"""
        with self._lock:
            next_id = max(self._records) + 1 if self._records else 1
            record = dict(record, id=next_id)
            self._records[next_id] = copy.deepcopy(record)
        return record


class DatabaseKeyValueStore:
    """
    Store backed by the key_value table.

    add() computes max(id) + 1 and inserts it; the (collection, id) primary key
    rejects a concurrent writer that picked the same id, in which case the
    transaction is rolled back and the id recomputed.
    """

    def __init__(self, collection, max_retries=5):
        self.collection = collection
        self.max_retries = max_retries

    def _row(self, record_id):
        # Ids the column cannot hold are never stored
        if not 0 <= record_id <= MAX_RECORD_ID:
            return None
        return db.session.get(KeyValueRecord, (self.collection, record_id))

    def get(self, record_id):
        row = self._row(record_id)
        return copy.deepcopy(row.value) if row else None

    def set(self, record_id, record):
        row = self._row(record_id)
        if row:
            row.value = copy.deepcopy(record)
        else:
            db.session.add(KeyValueRecord(
                collection=self.collection,
                id=record_id,
                value=copy.deepcopy(record)))
        db.session.commit()

    def has(self, record_id):
        return self._row(record_id) is not None

    def delete(self, record_id):
        if not 0 <= record_id <= MAX_RECORD_ID:
            return
        KeyValueRecord.query.filter_by(collection=self.collection, id=record_id).delete()
        db.session.commit()

    def get_all(self):
        rows = KeyValueRecord.query.filter_by(collection=self.collection).order_by(KeyValueRecord.id).all()
        return {row.id: copy.deepcopy(row.value) for row in rows}

    def next_id(self):
        current_max = db.session.query(func.max(KeyValueRecord.id)).filter(
            KeyValueRecord.collection == self.collection).scalar()
        return (current_max or 0) + 1

    def add(self, record):
        """Assign the next id (max + 1, or 1) and persist the record"""
        for _ in range(self.max_retries):
            next_id = self.next_id()
            value = dict(record, id=next_id)
            db.session.add(KeyValueRecord(collection=self.collection, id=next_id, value=value))
            try:
                db.session.commit()
                return copy.deepcopy(value)
            except IntegrityError:
                db.session.rollback()
        raise RuntimeError(
            f"Could not assign an id in collection {self.collection} after {self.max_retries} attempts")


def create_store(collection, backend='database', max_retries=5):
    """Build a key-value store for a collection"""
    if backend == 'memory':
        return MemoryKeyValueStore(collection)
    if backend == 'database':
        return DatabaseKeyValueStore(collection, max_retries=max_retries)
    raise ValueError(f"Unknown key-value backend: {backend}")


__all__ = ['MemoryKeyValueStore', 'DatabaseKeyValueStore', 'create_store', 'MAX_RECORD_ID']
