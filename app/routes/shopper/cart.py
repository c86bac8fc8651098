from flask import request, jsonify, current_app
from app.utils import transactional, error, internal_error_response
from app.utils.validation import validate_schema
from app.schemas.shopper import AddToCartRequest, UpdateCartRequest, RemoveFromCartRequest
from app.services import cart as cart_service
from app.services.errors import ValidationError, NotFoundError
from app.services.i18n import t
from . import shopper_bp


def _toast(key):
    return t(key, request.user.preferred_language)


@shopper_bp.route("/cart", methods=["GET"])
def view_cart():
    return jsonify({"status": "success", "data": cart_service.cart_summary(request.phone)}), 200


@shopper_bp.route("/cart/add", methods=["POST"])
@validate_schema(AddToCartRequest)
def add_to_cart():
    data: AddToCartRequest = request.validated_data
    try:
        with transactional("Failed to add to cart"):
            cart_service.add_to_cart(
                request.phone,
                data.product_id,
                data.quantity,
                max_quantity=current_app.config["CART_MAX_QUANTITY_PER_ITEM"],
            )
    except NotFoundError as e:
        return error(str(e), status=404)
    except ValidationError as e:
        return error(str(e), status=400)
    except Exception:
        return internal_error_response()
    return jsonify({
        "status": "success",
        "message": _toast("itemAddedToCart"),
        "data": cart_service.cart_summary(request.phone),
    }), 200


@shopper_bp.route("/cart/update", methods=["POST"])
@validate_schema(UpdateCartRequest)
def update_cart_quantity():
    data: UpdateCartRequest = request.validated_data
    try:
        with transactional("Failed to update cart quantity"):
            kept = cart_service.update_quantity(
                request.phone,
                data.product_id,
                data.quantity,
                max_quantity=current_app.config["CART_MAX_QUANTITY_PER_ITEM"],
            )
    except NotFoundError as e:
        return error(str(e), status=404)
    except ValidationError as e:
        return error(str(e), status=400)
    except Exception:
        return internal_error_response()
    return jsonify({
        "status": "success",
        "message": _toast("quantityUpdated" if kept else "itemRemovedFromCart"),
        "data": cart_service.cart_summary(request.phone),
    }), 200


@shopper_bp.route("/cart/remove", methods=["POST"])
@validate_schema(RemoveFromCartRequest)
def remove_from_cart():
    data: RemoveFromCartRequest = request.validated_data
    try:
        with transactional("Failed to remove item from cart"):
            cart_service.remove_from_cart(request.phone, data.product_id)
    except NotFoundError as e:
        return error(str(e), status=404)
    except Exception:
        return internal_error_response()
    return jsonify({
        "status": "success",
        "message": _toast("itemRemovedFromCart"),
        "data": cart_service.cart_summary(request.phone),
    }), 200


@shopper_bp.route("/cart/clear", methods=["POST"])
def clear_cart():
    try:
        with transactional("Failed to clear cart"):
            cart_service.clear_cart(request.phone)
    except Exception:
        return internal_error_response()
    return jsonify({"status": "success", "message": _toast("cartCleared")}), 200
