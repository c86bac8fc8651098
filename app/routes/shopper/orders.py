from datetime import datetime
from flask import request, jsonify, current_app
from flask_limiter.util import get_remote_address
from extensions import limiter
from app.metrics import ORDERS_PLACED
from app.utils import transactional, error, internal_error_response
from app.utils.validation import validate_schema
from app.schemas.shopper import CheckoutRequest
from app.services import checkout, delivery
from app.services.orders import list_orders, get_order_for_user
from app.services.errors import ValidationError, NotFoundError
from app.services.i18n import t
from . import shopper_bp


@shopper_bp.route("/checkout/quote", methods=["GET"])
def checkout_quote():
    return jsonify({"status": "success", "data": checkout.checkout_quote(request.phone)}), 200


@shopper_bp.route("/checkout", methods=["POST"])
@limiter.limit(
    lambda: current_app.config["ORDER_LIMIT_PER_IP"],
    key_func=get_remote_address,
    error_message="Too many orders from this IP",
)
@validate_schema(CheckoutRequest)
def place_order():
    user = request.user
    data: CheckoutRequest = request.validated_data
    try:
        with transactional("Order placement failed"):
            order = checkout.place_order(
                user,
                address=data.address,
                phone=data.phone,
                payment_mode=data.payment_mode,
                upi_id=data.upi_id,
            )
    except ValidationError as e:
        return error(str(e), status=400)
    except Exception:
        return internal_error_response()

    ORDERS_PLACED.labels(order.payment_mode).inc()
    return jsonify({
        "status": "success",
        "message": t("orderPlaced", user.preferred_language),
        "order_id": order.id,
        "payment_label": order.payment_label,
        "estimated_delivery": checkout.format_delivery_time(order.estimated_delivery_at),
        "total": float(order.total_amount),
        "profit": float(order.profit_amount),
        "emi_amount": float(order.emi_amount or 0),
    }), 200


@shopper_bp.route("/orders", methods=["GET"])
def order_history():
    orders = list_orders(request.phone)
    return jsonify({"status": "success", "data": [o.to_dict() for o in orders]}), 200


@shopper_bp.route("/orders/<int:order_id>", methods=["GET"])
def order_detail(order_id):
    try:
        order = get_order_for_user(request.phone, order_id)
    except NotFoundError as e:
        return error(str(e), status=404)
    return jsonify({"status": "success", "data": order.to_dict()}), 200


@shopper_bp.route("/orders/<int:order_id>/tracking", methods=["GET"])
def order_tracking(order_id):
    cfg = current_app.config
    try:
        with transactional("Failed to update delivery status"):
            order = get_order_for_user(request.phone, order_id)
            state = delivery.track_order(
                order, cfg["DELIVERY_TICK_SECONDS"], cfg["DELIVERY_WINDOW_HOURS"]
            )
    except NotFoundError as e:
        return error(str(e), status=404)
    except Exception:
        return internal_error_response()
    return jsonify({"status": "success", "data": state}), 200


@shopper_bp.route("/orders/<int:order_id>/complete", methods=["POST"])
def complete_order(order_id):
    try:
        with transactional("Failed to complete order"):
            order = get_order_for_user(request.phone, order_id)
            delivery.mark_delivered(order, request.phone, datetime.utcnow())
    except NotFoundError as e:
        return error(str(e), status=404)
    except Exception:
        return internal_error_response()
    return jsonify({"status": "success", "message": "Order delivered", "data": order.to_dict()}), 200
