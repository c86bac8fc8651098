import logging
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from sqlalchemy import or_
from models import db
from models.product import Category, Product
from app.data import load_json
from app.services.errors import NotFoundError
from app.services import freshness

logger = logging.getLogger(__name__)

CATALOG_FILE = "catalog.json"


def seed_catalog(force: bool = False) -> int:
    """Load the bundled catalog into the database.

    Skips when products already exist unless `force` is set, in which
    case existing rows are overwritten in place. Does NOT commit.
    """
    if not force and db.session.query(Product.id).first() is not None:
        return 0
    data = load_json(CATALOG_FILE)
    for pos, raw in enumerate(data["categories"]):
        category = db.session.get(Category, raw["id"]) or Category(id=raw["id"])
        category.name = raw["name"]
        category.image = raw.get("image")
        category.subcategories = raw.get("subcategories", [])
        category.position = pos
        db.session.add(category)
    db.session.flush()

    count = 0
    for pos, raw in enumerate(data["products"]):
        product = db.session.get(Product, raw["id"]) or Product(id=raw["id"])
        product.category_id = raw["category"]
        product.name = raw["name"]
        product.brand = raw.get("brand")
        product.description = raw.get("description")
        product.price = float(raw["price"])
        product.mrp = float(raw["mrp"])
        product.discount = raw.get("discount")
        product.margin = raw.get("margin", product.mrp - product.price)
        product.in_stock = raw.get("inStock", True)
        product.weight = raw.get("weight")
        product.flavor = raw.get("flavor")
        product.pack_type = raw.get("packType")
        product.image = raw.get("image")
        product.offers = raw.get("offers", [])
        product.position = pos
        db.session.add(product)
        count += 1
    logger.info("Catalog seeded with %s products", count)
    return count


def list_categories():
    return Category.query.order_by(Category.position).all()


def get_category(category_id: str) -> Category:
    category = (
        Category.query.filter(db.func.lower(Category.id) == (category_id or "").lower()).first()
    )
    if not category:
        raise NotFoundError("Category not found")
    return category


def get_product(product_id: str) -> Product:
    product = db.session.get(Product, str(product_id))
    if not product:
        raise NotFoundError("Product not found")
    return product


def all_products():
    return Product.query.order_by(Product.position).all()


def products_in_category(category_id: str, subfilter: str = None):
    category = get_category(category_id)
    products = (
        Product.query.filter(Product.category_id == category.id)
        .order_by(Product.position)
        .all()
    )
    if not subfilter or subfilter.lower() == "all":
        return category, products
    needle = subfilter.lower()
    return category, [
        p for p in products
        if needle in f"{p.name} {p.description or ''}".lower()
    ]


def search_products(category: str = None, q: str = None):
    query = Product.query
    if category:
        query = query.filter(db.func.lower(Product.category_id) == category.lower())
    if q:
        term = q.strip().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        like = f"%{term}%"
        query = query.filter(
            or_(
                Product.name.ilike(like, escape="\\"),
                Product.brand.ilike(like, escape="\\"),
                Product.description.ilike(like, escape="\\"),
            )
        )
    return query.order_by(Product.position).all()


def top_margin_products(limit: int = 10):
    products = sorted(all_products(), key=lambda p: p.mrp - p.price, reverse=True)
    return products[:limit]


def discount_percent(product: Product) -> int:
    if not product.mrp:
        return 0
    mrp = Decimal(str(product.mrp))
    share = (mrp - Decimal(str(product.price))) / mrp * 100
    return int(share.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def product_specifications(product: Product, today: date = None):
    expiry = freshness.estimate_expiry_date(product, today)
    return [
        {"label": "Brand", "value": product.brand},
        {"label": "Veg/Non-Veg", "value": freshness.veg_status(product.name)},
        {"label": "Country of origin/manufacturer/assembly", "value": "INDIA"},
        {"label": "Flavor", "value": product.flavor or "Original"},
        {"label": "Segment", "value": "All"},
        {"label": "Pack Type", "value": product.pack_type or "Packet"},
        {"label": "Dietary Need", "value": "Regular"},
        {"label": "Pack Preference", "value": "Each"},
        {"label": "Weight", "value": product.weight or product.description},
        {"label": "Expiry Date", "value": freshness.format_expiry(expiry)},
    ]


def product_detail(product: Product, today: date = None) -> dict:
    expiry = freshness.estimate_expiry_date(product, today)
    data = product.to_dict()
    data.update({
        "discount_percent": discount_percent(product),
        "unit_margin": product.unit_margin,
        "veg_status": freshness.veg_status(product.name),
        "expiry_date": freshness.format_expiry(expiry),
        "expiring_soon": freshness.is_expiring_soon(product, today),
        "specifications": product_specifications(product, today),
    })
    return data
