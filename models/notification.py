from models import db, BIGINT
from datetime import datetime


class Notification(db.Model):
    __tablename__ = "notification"
    __table_args__ = (
        db.Index("ix_notification_user_key", "user_phone", "key"),
    )

    id = db.Column(BIGINT, primary_key=True)
    user_phone = db.Column(db.String(15), db.ForeignKey("user_profile.phone"), nullable=False)
    key = db.Column(db.String(80), nullable=True)          # dedupe key, e.g. expiry-p12
    title = db.Column(db.String(120), nullable=False)
    message = db.Column(db.Text, nullable=False)
    type = db.Column(db.String(20), nullable=False)        # welcome, offer, order, cart, expiry
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
