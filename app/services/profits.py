"""Seller profit history.

Each completed order appends a ``{profit, emi, date}`` record to a
per-shopper array kept under the ``profitData`` key of the shopper's
key-value store. The array is read and written as a whole.
"""
import logging
from datetime import datetime
from app.services import catalog
from app.services.storage import LocalStore

logger = logging.getLogger(__name__)

PROFIT_KEY = "profitData"
SAMPLE_SERIES = [0, 100, 200, 150, 300, 400]


def _num(value) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _parse_date(value):
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None


def load_records(user_phone: str) -> list:
    records = LocalStore(user_phone).get_json(PROFIT_KEY, [])
    if not isinstance(records, list):
        logger.warning("Stored profit history is not a list, ignoring it")
        return []
    return records


def append_record(user_phone: str, profit, emi, when: datetime = None) -> dict:
    """Append one record and write the whole array back. Does NOT commit."""
    when = when or datetime.utcnow()
    record = {"profit": profit, "emi": emi, "date": when.isoformat() + "Z"}
    records = load_records(user_phone)
    records.append(record)
    LocalStore(user_phone).set_json(PROFIT_KEY, records)
    return record


def total_profit(records) -> float:
    return round(sum(_num(r.get("profit")) for r in records if isinstance(r, dict)), 2)


def emi_this_month(records, now: datetime = None) -> float:
    now = now or datetime.utcnow()
    total = 0.0
    for r in records:
        if not isinstance(r, dict) or _num(r.get("emi")) <= 0:
            continue
        when = _parse_date(r.get("date"))
        if when and when.year == now.year and when.month == now.month:
            total += _num(r.get("emi"))
    return round(total, 2)


def top_margin_items(limit: int = 10):
    products = catalog.top_margin_products(limit)
    best = (products[0].mrp - products[0].price) if products else 0
    items = []
    for p in products:
        margin = round(p.mrp - p.price, 2)
        items.append({
            "id": p.id,
            "name": p.name,
            "margin": margin,
            "bar_percent": min(100.0, round(margin / (best or 1) * 100, 1)),
        })
    return items


def profit_summary(user_phone: str, now: datetime = None) -> dict:
    records = load_records(user_phone)
    series = [_num(r.get("profit")) for r in records if isinstance(r, dict)]
    return {
        "total_profit": total_profit(records),
        "emi_this_month": emi_this_month(records, now),
        "order_count": len(records),
        "profit_series": series or list(SAMPLE_SERIES),
        "sample": not series,
        "top_margin_items": top_margin_items(),
    }
