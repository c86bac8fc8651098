import logging
from contextlib import nullcontext
from datetime import date
from celery import shared_task
from flask import has_app_context

logger = logging.getLogger(__name__)


@shared_task(bind=True, max_retries=3, default_retry_delay=60)
def deliver_otp_task(self, to: str, body: str) -> None:
    """Log the OTP message; there is no SMS gateway behind this."""
    logger.info("[OTP delivery disabled] message to %s: %s", to, body)


@shared_task(bind=True, max_retries=3, default_retry_delay=300)
def sweep_expiring_items_task(self, window_days: int = 15) -> int:
    """Add expiring-stock notices for every shopper. Returns notices added."""
    from models import db
    from models.user import UserProfile
    from app.services.notifications import check_expiring_items
    from app.utils import transactional

    if has_app_context():
        ctx = nullcontext()
    else:
        from app import create_app
        ctx = create_app().app_context()

    added = 0
    today = date.today()
    with ctx:
        phones = [phone for (phone,) in db.session.query(UserProfile.phone)]
        with transactional("Expiry sweep failed"):
            for phone in phones:
                added += len(check_expiring_items(phone, today=today, window_days=window_days))
    logger.info("Expiry sweep added %s notifications", added)
    return added
