from datetime import datetime, timedelta
from flask import Blueprint, request
from app.utils.responses import ok, error
import logging
from app.utils import create_access_token, create_refresh_token
from models import db
from models.user import UserProfile
from models.order import Order
from app.services.errors import NotFoundError, ValidationError


test_support_bp = Blueprint("test_support_bp", __name__)


@test_support_bp.route("/__ok", methods=["GET"])
def __ok():
    return ok({"ping": "pong"})


@test_support_bp.route("/__boom", methods=["GET"])
def __boom():
    raise RuntimeError("boom")


@test_support_bp.route("/__missing", methods=["GET"])
def __missing():
    raise NotFoundError("Order not found")


@test_support_bp.route("/__invalid", methods=["GET"])
def __invalid():
    raise ValidationError("")


@test_support_bp.route("/__log", methods=["GET"])
def __log():
    logging.getLogger(__name__).info("test log line")
    return ok({"logged": True})


@test_support_bp.route("/__auth/login_stub", methods=["POST"])
def __login_stub():
    """Create the shopper if needed and hand back tokens, skipping OTP."""
    j = request.get_json(silent=True) or {}
    phone = j.get("phone", "+919000000001")
    if not db.session.get(UserProfile, phone):
        db.session.add(UserProfile(
            phone=phone,
            name=j.get("name"),
            preferred_language=j.get("language", "en"),
        ))
        db.session.commit()
    return ok({
        "access": create_access_token(phone),
        "refresh": create_refresh_token(phone),
    })


@test_support_bp.route("/__orders/<int:order_id>/age", methods=["POST"])
def __age_order(order_id):
    """Move an order's placement time into the past by `seconds`."""
    j = request.get_json(silent=True) or {}
    order = db.session.get(Order, order_id)
    if not order:
        return error("not found", 404)
    order.created_at = order.created_at - timedelta(seconds=float(j.get("seconds", 0)))
    order.updated_at = datetime.utcnow()
    db.session.commit()
    return ok({"created_at": order.created_at.isoformat()})
