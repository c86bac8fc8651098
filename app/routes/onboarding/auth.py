from flask import Blueprint, request, jsonify, current_app
from app.version import API_PREFIX
from flask_limiter.util import get_remote_address
from extensions import limiter
from models.user import OTP, UserProfile
from models import db
import random
from datetime import datetime, timedelta
import logging
from app.utils import internal_error_response
from app.utils import error, transactional, bearer_token, normalize_phone
from app.utils.validation import validate_schema
from app.tasks.notifications import deliver_otp_task
from app.schemas.auth import SendOTPRequest, VerifyOTPRequest
from app.services import notifications
from app.utils import (
    create_access_token,
    create_refresh_token,
    decode_token,
    TokenError,
)


auth_bp = Blueprint("auth", __name__, url_prefix=API_PREFIX)

# --- Logout handler ---
@auth_bp.route("/logout", methods=["POST"])
def logout_handler():
    token = bearer_token()
    if not token:
        return error("Token missing", status=401)
    try:
        decode_token(token)
    except TokenError as e:
        return error(str(e), status=401)
    return jsonify({"status": "success", "message": "Logged out"}), 200


@auth_bp.route("/auth/refresh", methods=["POST"])
def refresh_tokens():
    j = request.get_json(silent=True) or {}
    token = j.get("refresh_token", "")
    try:
        payload = decode_token(token, expected_type="refresh")
    except TokenError as e:
        return error(str(e), status=401)

    phone = payload.get("sub")
    if not db.session.get(UserProfile, phone):
        return error("Shopper not found", status=401)
    return jsonify({
        "access_token": create_access_token(phone),
        "refresh_token": create_refresh_token(phone),
        "expires_in": current_app.config["ACCESS_TOKEN_LIFETIME_MIN"] * 60,
    }), 200


# --- OTP Utility ---

def generate_otp():
    return str(random.randint(100000, 999999))


# --- Send OTP ---

@auth_bp.route("/send-otp", methods=["POST"])
@limiter.limit(
    lambda: current_app.config["OTP_SEND_LIMIT_PER_IP"],
    key_func=get_remote_address,
    error_message="Too many OTP requests from this IP",
)
@limiter.limit(
    lambda: current_app.config["OTP_SEND_LIMIT_PER_PHONE"],
    key_func=lambda: (request.get_json(silent=True) or {}).get("phone", ""),
    error_message="Too many OTP requests for this phone number",
)
@validate_schema(SendOTPRequest)
def send_otp_handler():
    data: SendOTPRequest = request.validated_data
    phone = normalize_phone(data.phone)

    otp_code = generate_otp()
    new_otp = OTP(
        phone=phone,
        otp=otp_code,
        is_used=False,
        created_at=datetime.utcnow()
    )

    try:
        with transactional("Failed to create OTP"):
            db.session.add(new_otp)
    except Exception:
        return internal_error_response()

    body = f"Your OTP is {otp_code}"
    if current_app.config.get("TESTING"):
        deliver_otp_task(phone, body)
    else:
        deliver_otp_task.delay(phone, body)

    payload = {"status": "success", "message": "OTP sent"}
    if current_app.config.get("OTP_ECHO_IN_RESPONSE"):
        # Demo sign-in: the code is shown to the same client that enters it.
        payload["otp"] = otp_code
    return jsonify(payload), 200

# --- Verify OTP ---

@auth_bp.route("/verify-otp", methods=["POST"])
@limiter.limit(
    lambda: current_app.config["LOGIN_LIMIT_PER_IP"],
    key_func=get_remote_address,
    error_message="Too many logins from this IP",
)
@validate_schema(VerifyOTPRequest)
def verify_otp_handler():
    data: VerifyOTPRequest = request.validated_data
    phone = normalize_phone(data.phone)
    otp = data.otp

    otp_record = (
        OTP.query.filter_by(phone=phone, is_used=False)
        .order_by(OTP.created_at.desc(), OTP.id.desc())
        .first()
    )
    # Only the most recently issued code counts; older ones are superseded.
    if not otp_record or otp_record.otp != otp:
        logging.warning("OTP mismatch or no pending OTP for %s", phone)
        return error("Invalid or expired OTP", status=401)

    expiry = timedelta(minutes=current_app.config["OTP_EXPIRY_MINUTES"])
    now = datetime.utcnow()
    if now - otp_record.created_at > expiry:
        return error("OTP expired", status=401)

    otp_record.is_used = True

    user = db.session.get(UserProfile, phone)
    first_login = user is None
    if first_login:
        user = UserProfile(phone=phone, preferred_language="en")
        db.session.add(user)
    if data.name:
        user.name = data.name
    user.device_info = request.headers.get("User-Agent", "")[:200]
    user.last_login_at = now

    try:
        with transactional("Failed to verify OTP"):
            db.session.flush()
            if first_login:
                notifications.seed_welcome_notifications(phone, now)
            notifications.check_expiring_items(
                phone, window_days=current_app.config["EXPIRY_ALERT_DAYS"]
            )
    except Exception:
        return internal_error_response()

    logging.info("OTP verified. Tokens issued for %s", phone)

    return jsonify({
        "status": "success",
        "access_token": create_access_token(phone),
        "refresh_token": create_refresh_token(phone),
        "expires_in": current_app.config["ACCESS_TOKEN_LIFETIME_MIN"] * 60,
        "first_login": first_login,
        "name": user.name,
    }), 200
