import time
from app.data import load_json


def current_index(count: int, interval_seconds: float, now: float = None) -> int:
    """Slot showing at `now` for a carousel advancing every `interval_seconds`."""
    if count <= 0 or interval_seconds <= 0:
        return 0
    now = time.time() if now is None else now
    return int(now // interval_seconds) % count


def banner_state(promo_interval: float, ad_interval: float, now: float = None) -> dict:
    data = load_json("banners.json")
    promo = data.get("promotional", [])
    ads = data.get("advertisement", [])
    return {
        "promotional": {
            "items": promo,
            "interval_seconds": promo_interval,
            "current_index": current_index(len(promo), promo_interval, now),
        },
        "advertisement": {
            "items": ads,
            "interval_seconds": ad_interval,
            "current_index": current_index(len(ads), ad_interval, now),
        },
    }
