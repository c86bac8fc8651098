from datetime import datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP
from flask import current_app
from models import db
from models.order import Order, OrderItem, OrderStatusLog
from app.services import cart as cart_service, notifications, profits
from app.services.errors import ValidationError
from app.utils.phone import normalize_phone

PAYMENT_MODES = ("cod", "emi")
TWOPLACES = Decimal("0.01")


def _to_money(value) -> Decimal:
    return Decimal(str(value)).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def emi_amount(total, installments: int = 12) -> int:
    """Monthly installment: total / installments, half rounded up to whole rupees."""
    share = Decimal(str(total)) / Decimal(installments)
    return int(share.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def emi_available(total, min_total) -> bool:
    return total > min_total


def format_delivery_time(value: datetime) -> str:
    return value.strftime("%I:%M %p").lstrip("0")


def checkout_quote(user_phone: str) -> dict:
    cfg = current_app.config
    totals = cart_service.cart_totals(cart_service.get_lines(user_phone))
    available = emi_available(totals["total"], cfg["EMI_MIN_ORDER_TOTAL"])
    totals.update({
        "emi_available": available,
        "emi_amount": emi_amount(totals["total"], cfg["EMI_INSTALLMENTS"]) if available else 0,
        "installments": cfg["EMI_INSTALLMENTS"],
        "payment_modes": list(PAYMENT_MODES) if available else ["cod"],
    })
    return totals


def place_order(user, address: str, phone: str, payment_mode: str = "cod",
                upi_id: str = None, now: datetime = None) -> Order:
    """Turn the shopper's cart into an order.

    Clears the cart, appends exactly one profit record and leaves the
    order in transit. Does NOT commit; caller is responsible for
    commit/rollback.
    """
    cfg = current_app.config
    now = now or datetime.utcnow()
    lines = cart_service.get_lines(user.phone)
    if not lines:
        raise ValidationError("Cart is empty")
    if not (address or "").strip():
        raise ValidationError("Delivery address is required")
    if not (phone or "").strip():
        raise ValidationError("Phone number is required")
    try:
        contact_phone = normalize_phone(phone)
    except ValueError:
        raise ValidationError("Phone number must be 10 digits")
    payment_mode = (payment_mode or "cod").lower()
    if payment_mode not in PAYMENT_MODES:
        raise ValidationError("Unsupported payment mode")

    totals = cart_service.cart_totals(lines)
    emi = 0
    if payment_mode == "emi":
        if not emi_available(totals["total"], cfg["EMI_MIN_ORDER_TOTAL"]):
            raise ValidationError(
                f"EMI is available only on orders above ₹{cfg['EMI_MIN_ORDER_TOTAL']:g}"
            )
        if not (upi_id or "").strip():
            raise ValidationError("UPI ID is required for EMI payment")
        emi = emi_amount(totals["total"], cfg["EMI_INSTALLMENTS"])

    order = Order(
        user_phone=user.phone,
        status="in_transit",
        payment_mode=payment_mode,
        upi_id=upi_id.strip() if payment_mode == "emi" else None,
        delivery_address=address.strip(),
        contact_phone=contact_phone,
        total_amount=totals["total"],
        profit_amount=totals["profit"],
        emi_amount=emi,
        estimated_delivery_at=now + timedelta(hours=cfg["DELIVERY_WINDOW_HOURS"]),
        created_at=now,
    )
    db.session.add(order)
    db.session.flush()

    for ci in lines:
        product = ci.product
        order.items.append(
            OrderItem(
                product_id=product.id,
                name=product.name,
                unit_price=_to_money(product.price),
                mrp=_to_money(product.mrp),
                quantity=ci.quantity,
                subtotal=_to_money(product.price) * ci.quantity,
            )
        )

    if payment_mode == "emi":
        user.outstanding_amount = _to_money(user.outstanding_amount or 0) + _to_money(totals["total"])

    cart_service.clear_cart(user.phone)
    profits.append_record(user.phone, totals["profit"], emi, when=now)

    db.session.add(OrderStatusLog(order_id=order.id, status="in_transit", updated_by=user.phone, timestamp=now))
    notifications.add_notification(
        user.phone,
        "Order Placed",
        f"Order #{order.id} placed. Payment method: {order.payment_label}. "
        f"Estimated delivery: {format_delivery_time(order.estimated_delivery_at)}",
        "order",
        now=now,
    )
    return order
