# --- models/user.py ---
from models import db
from datetime import datetime

# --- OTP Model ---
class OTP(db.Model):
    __tablename__ = "otp"

    id = db.Column(db.Integer, primary_key=True)
    phone = db.Column(db.String(15), nullable=False)
    otp = db.Column(db.String(6), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    is_used = db.Column(db.Boolean, default=False)

    def __repr__(self):
        return f"<OTP phone={self.phone} otp={self.otp}>"

# --- Shopper Profile Model ---

class UserProfile(db.Model):
    __tablename__ = "user_profile"

    phone = db.Column(db.String(15), primary_key=True)
    name = db.Column(db.String(100), nullable=True)
    preferred_language = db.Column(db.String(5), nullable=False, default="en")
    translation_enabled = db.Column(db.Boolean, default=True)
    outstanding_amount = db.Column(db.Numeric(12, 2), default=0)
    device_info = db.Column(db.String(300), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    last_login_at = db.Column(db.DateTime, nullable=True)

    def __repr__(self):
        return f"<User phone={self.phone} lang={self.preferred_language}>"
