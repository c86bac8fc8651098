from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import BigInteger, Integer

# Use BigInteger in production but fall back to Integer for SQLite
BIGINT = BigInteger().with_variant(Integer, "sqlite")

db = SQLAlchemy()

# Re-export common models for convenience
from .user import OTP, UserProfile  # noqa: F401,E402
from .product import Category, Product  # noqa: F401,E402
from .cart import CartItem  # noqa: F401,E402
from .order import Order, OrderItem, OrderStatusLog  # noqa: F401,E402
from .notification import Notification  # noqa: F401,E402
from .storage import StoredValue  # noqa: F401,E402
