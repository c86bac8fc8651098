from sqlalchemy.exc import IntegrityError
from models import db
from models.cart import CartItem
from app.services import catalog, notifications
from app.services.errors import ValidationError, NotFoundError


def get_lines(user_phone: str):
    return (
        CartItem.query.filter_by(user_phone=user_phone)
        .order_by(CartItem.added_at.asc(), CartItem.id.asc())
        .all()
    )


def _line(user_phone, product_id):
    return CartItem.query.filter_by(user_phone=user_phone, product_id=str(product_id)).first()


def add_to_cart(user_phone: str, product_id, quantity: int = 1, max_quantity: int = 100) -> CartItem:
    product = catalog.get_product(product_id)
    if not product.in_stock:
        raise ValidationError("Product is out of stock")
    if quantity < 1:
        raise ValidationError("Quantity must be at least 1")
    cart_item = _line(user_phone, product.id)
    if cart_item:
        _increment(cart_item, quantity, max_quantity)
    else:
        if quantity > max_quantity:
            raise ValidationError(f"Cannot add more than {max_quantity} units per item")
        cart_item = CartItem(user_phone=user_phone, product_id=product.id, quantity=quantity)
        db.session.add(cart_item)
        try:
            db.session.flush()
        except IntegrityError:
            # A parallel request created the line first; nothing else is pending yet.
            db.session.rollback()
            cart_item = _line(user_phone, product.id)
            if cart_item is None:
                raise
            _increment(cart_item, quantity, max_quantity)
    notifications.add_notification(
        user_phone,
        "Item Added to Cart",
        f"{product.name} has been added to your cart.",
        "cart",
    )
    return cart_item


def _increment(cart_item: CartItem, quantity: int, max_quantity: int) -> None:
    new_quantity = cart_item.quantity + quantity
    if new_quantity > max_quantity:
        raise ValidationError(f"Cannot add more than {max_quantity} units per item")
    cart_item.quantity = new_quantity


def update_quantity(user_phone: str, product_id, quantity: int, max_quantity: int = 100) -> bool:
    """Set a line's quantity. Returns False when the line was removed instead."""
    cart_item = _line(user_phone, product_id)
    if not cart_item:
        raise NotFoundError("Item not found in cart")
    if quantity <= 0:
        db.session.delete(cart_item)
        return False
    if quantity > max_quantity:
        raise ValidationError(f"Quantity must be at most {max_quantity}")
    cart_item.quantity = quantity
    return True


def remove_from_cart(user_phone: str, product_id) -> None:
    cart_item = _line(user_phone, product_id)
    if not cart_item:
        raise NotFoundError("Item not found in cart")
    db.session.delete(cart_item)


def clear_cart(user_phone: str) -> int:
    return CartItem.query.filter_by(user_phone=user_phone).delete()


def cart_totals(lines) -> dict:
    total = sum(ci.product.price * ci.quantity for ci in lines)
    profit = sum((ci.product.mrp - ci.product.price) * ci.quantity for ci in lines)
    return {
        "total": round(total, 2),
        "item_count": sum(ci.quantity for ci in lines),
        "profit": round(profit, 2),
    }


def cart_summary(user_phone: str) -> dict:
    lines = get_lines(user_phone)
    items = []
    for ci in lines:
        product = ci.product
        items.append({
            "product_id": product.id,
            "name": product.name,
            "image": product.image,
            "price": product.price,
            "mrp": product.mrp,
            "quantity": ci.quantity,
            "subtotal": round(product.price * ci.quantity, 2),
            "margin": round((product.mrp - product.price) * ci.quantity, 2),
            "in_stock": bool(product.in_stock),
        })
    summary = {"items": items}
    summary.update(cart_totals(lines))
    return summary
