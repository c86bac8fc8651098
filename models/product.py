# --- models/product.py ---
from models import db
from datetime import datetime


class Category(db.Model):
    __tablename__ = "category"

    id = db.Column(db.String(50), primary_key=True)               # slug, e.g. packagedfoods
    name = db.Column(db.String(100), nullable=False)
    image = db.Column(db.String(255), nullable=True)
    subcategories = db.Column(db.JSON, nullable=True)             # ["Biscuits", "Snacks"]
    position = db.Column(db.Integer, default=0)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "image": self.image,
            "subcategories": list(self.subcategories or []),
        }


class Product(db.Model):
    __tablename__ = "product"

    id = db.Column(db.String(50), primary_key=True)
    category_id = db.Column(db.String(50), db.ForeignKey("category.id"), nullable=False)

    # Core details
    name = db.Column(db.String(150), nullable=False)
    brand = db.Column(db.String(80), nullable=True)
    description = db.Column(db.Text, nullable=True)

    # Pricing
    price = db.Column(db.Float, nullable=False)                   # Selling (wholesale) price
    mrp = db.Column(db.Float, nullable=False)                     # Printed ceiling price
    discount = db.Column(db.Float, nullable=True)                 # Optional %
    margin = db.Column(db.Float, nullable=True)

    # Availability & variants
    in_stock = db.Column(db.Boolean, default=True)
    weight = db.Column(db.String(50), nullable=True)
    flavor = db.Column(db.String(50), nullable=True)
    pack_type = db.Column(db.String(50), nullable=True)

    # Media / promo
    image = db.Column(db.String(255), nullable=True)
    offers = db.Column(db.JSON, nullable=True)
    position = db.Column(db.Integer, default=0)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    category = db.relationship("Category", backref="products")

    @property
    def unit_margin(self) -> float:
        return round(self.mrp - self.price, 2)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "price": self.price,
            "mrp": self.mrp,
            "discount": self.discount,
            "image": self.image,
            "category": self.category_id,
            "description": self.description,
            "brand": self.brand,
            "offers": list(self.offers or []),
            "margin": self.margin if self.margin is not None else self.unit_margin,
            "inStock": bool(self.in_stock),
            "weight": self.weight,
            "flavor": self.flavor,
            "packType": self.pack_type,
        }
