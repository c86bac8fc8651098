import json
import logging
from models import db
from models.storage import StoredValue

logger = logging.getLogger(__name__)


class LocalStore:
    """Per-shopper key-value store with whole-value reads and writes.

    Values are JSON text. Nothing is merged or versioned: a write
    replaces the previous value for the key. Does NOT commit.
    """

    def __init__(self, user_phone: str):
        self.user_phone = user_phone

    def _row(self, key):
        return StoredValue.query.filter_by(user_phone=self.user_phone, key=key).first()

    def get_raw(self, key: str):
        row = self._row(key)
        return row.value if row else None

    def set_raw(self, key: str, value: str) -> None:
        row = self._row(key)
        if not row:
            row = StoredValue(user_phone=self.user_phone, key=key)
            db.session.add(row)
        row.value = value

    def get_json(self, key: str, default=None):
        raw = self.get_raw(key)
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except (TypeError, ValueError):
            logger.warning("Discarding malformed stored value for key %s", key)
            return default

    def set_json(self, key: str, value) -> None:
        self.set_raw(key, json.dumps(value))
