from models import db
from models.order import Order
from app.services.errors import NotFoundError


def list_orders(user_phone: str):
    return (
        Order.query.filter_by(user_phone=user_phone)
        .order_by(Order.created_at.desc(), Order.id.desc())
        .all()
    )


def get_order_for_user(user_phone: str, order_id: int) -> Order:
    order = db.session.get(Order, order_id)
    if not order or order.user_phone != user_phone:
        raise NotFoundError("Order not found")
    return order
