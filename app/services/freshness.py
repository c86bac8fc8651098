"""Shelf-life estimates for catalog products.

There is no real batch/expiry data in the catalog, so an expiry date is
estimated from keywords in the product name and category. The random
draw is seeded per product and day, which keeps a product's estimate
stable for the whole day instead of changing on every request.
"""
import random
import re
from datetime import date, timedelta

FRESH_RE = re.compile(r"fresh|milk|dairy|vegetable|fruit|egg|meat|fish|bread|yogurt|curd|paneer", re.I)
BEVERAGE_RE = re.compile(r"juice|milk|drink|beverage", re.I)
PACKAGED_RE = re.compile(r"biscuit|snack|chips|noodle|pasta|cereal|oil|ghee|masala|spice|dal|rice|atta", re.I)
NON_VEG_RE = re.compile(r"chicken|meat|fish|egg|mutton|beef|pork", re.I)

DEFAULT_SHELF_DAYS = 30
DATE_FORMAT = "%d %b %Y"


def shelf_life_class(name: str, category: str) -> str:
    text = f"{name}{category}"
    if FRESH_RE.search(text):
        return "fresh"
    if BEVERAGE_RE.search(text):
        return "beverage"
    if PACKAGED_RE.search(text):
        return "packaged"
    return "other"


def _shelf_days(kind: str, rng: random.Random) -> int:
    if kind == "fresh":
        return rng.randint(2, 6)
    if kind == "beverage":
        return rng.randint(15, 44)
    if kind == "packaged":
        return rng.randint(180, 544)
    return DEFAULT_SHELF_DAYS


def estimate_expiry_date(product, today: date = None) -> date:
    today = today or date.today()
    rng = random.Random(f"{product.id}:{today.isoformat()}")
    kind = shelf_life_class(product.name, product.category_id)
    return today + timedelta(days=_shelf_days(kind, rng))


def format_expiry(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def days_until(value: date, today: date = None) -> int:
    today = today or date.today()
    return (value - today).days


def is_expiring_soon(product, today: date = None, window_days: int = 15) -> bool:
    today = today or date.today()
    remaining = days_until(estimate_expiry_date(product, today), today)
    return 0 < remaining <= window_days


def veg_status(name: str) -> str:
    return "Non-Vegetarian" if NON_VEG_RE.search(name or "") else "Vegetarian"
