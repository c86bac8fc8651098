"""Simulated delivery tracking.

Progress is purely time-driven: one percentage point per tick since the
order was placed, capped at 100. Nothing here talks to a courier.
"""
import math
from datetime import datetime
from models import db
from models.order import Order, OrderStatusLog

STATUS_STEPS = (
    (20, "Order Confirmed"),
    (40, "Preparing Your Order"),
    (60, "Out for Delivery"),
    (80, "On the Way"),
    (100, "Almost There"),
)


def delivery_progress(placed_at: datetime, now: datetime, tick_seconds: float) -> int:
    elapsed = (now - placed_at).total_seconds()
    if elapsed <= 0:
        return 0
    return min(100, int(math.floor(elapsed / tick_seconds)))


def delivery_status(progress: int) -> str:
    for threshold, label in STATUS_STEPS:
        if progress < threshold:
            return label
    return "Delivered"


def remaining_minutes(progress: int, window_minutes: int) -> int:
    return int(math.floor((100 - progress) / 100 * window_minutes))


def remaining_label(progress: int, window_minutes: int) -> str:
    minutes_left = remaining_minutes(progress, window_minutes)
    hours, minutes = divmod(minutes_left, 60)
    if hours > 0:
        return f"{hours}h {minutes}m remaining"
    return f"{minutes}m remaining"


def mark_delivered(order: Order, actor: str, now: datetime = None) -> bool:
    """Flip an order to delivered once. Returns False if it already was."""
    if order.status == "delivered":
        return False
    now = now or datetime.utcnow()
    order.status = "delivered"
    order.delivered_at = now
    db.session.add(OrderStatusLog(order_id=order.id, status="delivered", updated_by=actor, timestamp=now))
    return True


def track_order(order: Order, tick_seconds: float, window_hours: int, now: datetime = None) -> dict:
    now = now or datetime.utcnow()
    if order.status == "delivered":
        progress = 100
    else:
        progress = delivery_progress(order.created_at, now, tick_seconds)
        if progress >= 100:
            mark_delivered(order, "system", now)
    return {
        "order_id": order.id,
        "progress": progress,
        "status": delivery_status(progress),
        "remaining": remaining_label(progress, window_hours * 60),
        "order_status": order.status,
        "payment_label": order.payment_label,
        "delivery_address": order.delivery_address,
        "contact_phone": order.contact_phone,
        "estimated_delivery_at": order.estimated_delivery_at.isoformat(),
    }
