from models import db
from datetime import datetime


class StoredValue(db.Model):
    """Opaque JSON text per shopper and key, read and written wholesale."""

    __tablename__ = "stored_value"
    __table_args__ = (
        db.UniqueConstraint("user_phone", "key", name="uq_stored_value_user_key"),
    )

    id = db.Column(db.Integer, primary_key=True)
    user_phone = db.Column(db.String(15), db.ForeignKey("user_profile.phone"), nullable=False)
    key = db.Column(db.String(80), nullable=False)
    value = db.Column(db.Text, nullable=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
