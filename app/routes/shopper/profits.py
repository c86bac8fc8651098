from flask import request, jsonify, current_app
from app.services import profits, notifications
from . import shopper_bp


@shopper_bp.route("/profits", methods=["GET"])
def profit_dashboard():
    summary = profits.profit_summary(request.phone)
    summary["expiring_items"] = notifications.expiring_products(
        window_days=current_app.config["EXPIRY_ALERT_DAYS"]
    )
    return jsonify({"status": "success", "data": summary}), 200


@shopper_bp.route("/profits/records", methods=["GET"])
def profit_records():
    return jsonify({"status": "success", "data": profits.load_records(request.phone)}), 200
