import logging
from datetime import datetime, date, timedelta
from models import db
from models.notification import Notification
from app.services import catalog, freshness

logger = logging.getLogger(__name__)

WELCOME_NOTIFICATIONS = [
    {
        "title": "Welcome to Walmart Viraddhi!",
        "message": "Start exploring our wholesale products and exclusive business benefits.",
        "type": "welcome",
        "age": timedelta(hours=2),
    },
    {
        "title": "New Bulk Discounts Available",
        "message": "Check out our latest bulk buy offers with up to 20% discount on wholesale orders.",
        "type": "offer",
        "age": timedelta(days=1),
    },
    {
        "title": "Order Status Update",
        "message": "Your recent order #12345 has been successfully delivered.",
        "type": "order",
        "age": timedelta(days=2),
    },
]


def relative_time(created_at: datetime, now: datetime = None) -> str:
    now = now or datetime.utcnow()
    seconds = max(0, int((now - created_at).total_seconds()))
    if seconds < 60:
        return "Just now"
    minutes = seconds // 60
    if minutes < 60:
        return f"{minutes} minute{'s' if minutes != 1 else ''} ago"
    hours = minutes // 60
    if hours < 24:
        return f"{hours} hour{'s' if hours != 1 else ''} ago"
    days = hours // 24
    return f"{days} day{'s' if days != 1 else ''} ago"


def to_dict(notification: Notification, now: datetime = None) -> dict:
    return {
        "id": notification.id,
        "title": notification.title,
        "message": notification.message,
        "time": relative_time(notification.created_at, now),
        "type": notification.type,
    }


def add_notification(user_phone, title, message, type, key=None, now=None) -> Notification:
    notification = Notification(
        user_phone=user_phone,
        key=key,
        title=title,
        message=message,
        type=type,
        created_at=now or datetime.utcnow(),
    )
    db.session.add(notification)
    return notification


def seed_welcome_notifications(user_phone: str, now: datetime = None) -> None:
    now = now or datetime.utcnow()
    # Oldest first so insertion order matches display order.
    for entry in sorted(WELCOME_NOTIFICATIONS, key=lambda e: e["age"], reverse=True):
        add_notification(
            user_phone,
            entry["title"],
            entry["message"],
            entry["type"],
            now=now - entry["age"],
        )


def list_notifications(user_phone: str):
    return (
        Notification.query.filter_by(user_phone=user_phone)
        .order_by(Notification.created_at.asc(), Notification.id.asc())
        .all()
    )


def clear_notifications(user_phone: str) -> int:
    return Notification.query.filter_by(user_phone=user_phone).delete()


def check_expiring_items(user_phone: str, today: date = None, window_days: int = 15):
    """Add one "Item Expiring Soon" notice per product expiring within the window.

    A product that already has a notice for this shopper is skipped.
    Returns the newly added notifications. Does NOT commit.
    """
    today = today or date.today()
    existing = {
        key for (key,) in db.session.query(Notification.key)
        .filter(Notification.user_phone == user_phone, Notification.key.isnot(None))
    }
    added = []
    for product in catalog.all_products():
        key = f"expiry-{product.id}"
        if key in existing:
            continue
        expiry = freshness.estimate_expiry_date(product, today)
        remaining = freshness.days_until(expiry, today)
        if 0 < remaining <= window_days:
            added.append(
                add_notification(
                    user_phone,
                    "Item Expiring Soon",
                    f"{product.name} will expire on {freshness.format_expiry(expiry)}. "
                    "Consider promoting this item!",
                    "expiry",
                    key=key,
                )
            )
    if added:
        logger.info("Added %s expiry notifications", len(added))
    return added


def expiring_products(today: date = None, window_days: int = 15):
    today = today or date.today()
    result = []
    for product in catalog.all_products():
        expiry = freshness.estimate_expiry_date(product, today)
        if 0 < freshness.days_until(expiry, today) <= window_days:
            result.append({
                "id": product.id,
                "name": product.name,
                "expiry_date": freshness.format_expiry(expiry),
            })
    return result
