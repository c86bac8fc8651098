from sqlalchemy import Column, String, Float, Text, DateTime, ForeignKey
from sqlalchemy.sql import func
from models import db, BIGINT


class Order(db.Model):
    __tablename__ = "order"
    __table_args__ = (
        db.Index("ix_order_user_created", "user_phone", "created_at"),
    )
    id = Column(BIGINT, primary_key=True)
    user_phone = Column(String(15), ForeignKey("user_profile.phone"), nullable=False)
    status = Column(String(20), default="in_transit")  # in_transit, delivered
    payment_mode = Column(String(10), nullable=False)  # cod or emi
    upi_id = Column(String(100), nullable=True)
    delivery_address = Column(Text, nullable=False)
    contact_phone = Column(String(15), nullable=False)
    total_amount = Column(Float, nullable=False)
    profit_amount = Column(Float, nullable=False, default=0)
    emi_amount = Column(Float, nullable=False, default=0)
    estimated_delivery_at = Column(DateTime, nullable=False)
    delivered_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    items = db.relationship("OrderItem", backref="order", cascade="all, delete-orphan", lazy=True)

    @property
    def payment_label(self) -> str:
        return "EMI" if self.payment_mode == "emi" else "Cash on Delivery"

    def to_dict(self):
        return {
            "order_id": self.id,
            "status": self.status,
            "payment_mode": self.payment_mode,
            "payment_label": self.payment_label,
            "delivery_address": self.delivery_address,
            "contact_phone": self.contact_phone,
            "total_amount": self.total_amount,
            "profit_amount": self.profit_amount,
            "emi_amount": self.emi_amount,
            "estimated_delivery_at": self.estimated_delivery_at.isoformat() if self.estimated_delivery_at else None,
            "delivered_at": self.delivered_at.isoformat() if self.delivered_at else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "items": [oi.to_dict() for oi in self.items],
        }


class OrderItem(db.Model):
    __tablename__ = "order_item"
    id = db.Column(BIGINT, primary_key=True)
    order_id = db.Column(BIGINT, db.ForeignKey("order.id"), nullable=False)
    product_id = db.Column(db.String(50), nullable=False)

    # Snapshot at checkout time
    name = db.Column(db.String(150))
    unit_price = db.Column(db.Numeric(10, 2))
    mrp = db.Column(db.Numeric(10, 2))
    quantity = db.Column(db.Integer)
    subtotal = db.Column(db.Numeric(12, 2))

    def to_dict(self):
        return {
            "product_id": self.product_id,
            "name": self.name,
            "unit_price": float(self.unit_price),
            "mrp": float(self.mrp),
            "quantity": self.quantity,
            "subtotal": float(self.subtotal)
        }


class OrderStatusLog(db.Model):
    __tablename__ = "order_status_log"
    id = Column(BIGINT, primary_key=True)
    order_id = Column(BIGINT, ForeignKey("order.id"), nullable=False)
    status = Column(String(30), nullable=False)
    updated_by = Column(String(15), nullable=False)
    timestamp = Column(DateTime, default=func.now())

    def to_dict(self):
        return {
            "order_id": self.order_id,
            "status": self.status,
            "updated_by": self.updated_by,
            "timestamp": self.timestamp
        }
