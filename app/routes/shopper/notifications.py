from datetime import datetime
from flask import request, jsonify, current_app
from app.utils import transactional, internal_error_response
from app.services import notifications
from . import shopper_bp


@shopper_bp.route("/notifications", methods=["GET"])
def list_notifications():
    now = datetime.utcnow()
    items = [notifications.to_dict(n, now) for n in notifications.list_notifications(request.phone)]
    return jsonify({"status": "success", "count": len(items), "data": items}), 200


@shopper_bp.route("/notifications/clear", methods=["POST"])
def clear_notifications():
    try:
        with transactional("Failed to clear notifications"):
            removed = notifications.clear_notifications(request.phone)
    except Exception:
        return internal_error_response()
    return jsonify({"status": "success", "message": "Notifications cleared", "removed": removed}), 200


@shopper_bp.route("/notifications/check-expiring", methods=["POST"])
def check_expiring():
    try:
        with transactional("Expiry check failed"):
            added = notifications.check_expiring_items(
                request.phone, window_days=current_app.config["EXPIRY_ALERT_DAYS"]
            )
            now = datetime.utcnow()
            data = [notifications.to_dict(n, now) for n in added]
    except Exception:
        return internal_error_response()
    return jsonify({"status": "success", "added": len(data), "data": data}), 200
