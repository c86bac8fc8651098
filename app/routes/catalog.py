from flask import Blueprint, request, jsonify, current_app
from app.version import API_PREFIX
from app.utils import error
from app.utils.validation import validate_schema
from app.schemas.shopper import TranslateRequest
from app.services import banners, catalog, i18n
from app.services.errors import NotFoundError

catalog_bp = Blueprint("catalog", __name__, url_prefix=API_PREFIX)


@catalog_bp.route("/languages", methods=["GET"])
def list_languages():
    return jsonify({
        "status": "success",
        "default": i18n.DEFAULT_LANGUAGE,
        "data": i18n.LANGUAGES,
    }), 200


@catalog_bp.route("/strings", methods=["GET"])
def ui_strings():
    lang = (request.args.get("lang") or i18n.DEFAULT_LANGUAGE).lower()
    if not i18n.is_supported(lang):
        return error("Unsupported language", status=400)
    return jsonify({"status": "success", "language": lang, "data": i18n.strings_for(lang)}), 200


@catalog_bp.route("/categories", methods=["GET"])
def list_categories():
    data = [c.to_dict() for c in catalog.list_categories()]
    return jsonify({"status": "success", "data": data}), 200


@catalog_bp.route("/categories/<category_id>/products", methods=["GET"])
def category_products(category_id):
    subfilter = request.args.get("filter", "all")
    try:
        category, products = catalog.products_in_category(category_id, subfilter)
    except NotFoundError as e:
        return error(str(e), status=404)
    return jsonify({
        "status": "success",
        "category": category.to_dict(),
        "filter": subfilter,
        "data": [p.to_dict() for p in products],
    }), 200


@catalog_bp.route("/products", methods=["GET"])
def list_products():
    products = catalog.search_products(
        category=request.args.get("category"),
        q=request.args.get("q"),
    )
    return jsonify({"status": "success", "data": [p.to_dict() for p in products]}), 200


@catalog_bp.route("/products/top-margin", methods=["GET"])
def top_margin():
    limit = request.args.get("limit", 10, type=int)
    if limit < 1:
        return error("limit must be positive", status=400)
    products = catalog.top_margin_products(limit)
    data = []
    for p in products:
        item = p.to_dict()
        item["unit_margin"] = p.unit_margin
        data.append(item)
    return jsonify({"status": "success", "data": data}), 200


@catalog_bp.route("/products/<product_id>", methods=["GET"])
def product_detail(product_id):
    try:
        product = catalog.get_product(product_id)
    except NotFoundError as e:
        return error(str(e), status=404)
    return jsonify({"status": "success", "data": catalog.product_detail(product)}), 200


@catalog_bp.route("/banners", methods=["GET"])
def banner_rotation():
    cfg = current_app.config
    state = banners.banner_state(cfg["BANNER_ROTATE_SECONDS"], cfg["AD_BANNER_ROTATE_SECONDS"])
    return jsonify({"status": "success", "data": state}), 200


@catalog_bp.route("/translate", methods=["POST"])
@validate_schema(TranslateRequest)
def translate():
    data: TranslateRequest = request.validated_data
    target = (data.target or "").lower()
    if not i18n.is_supported(target):
        return error("Unsupported target language", status=400)
    service = current_app.translation_service
    results = service.translate_many(data.all_texts(), target, data.source)
    return jsonify({
        "status": "success",
        "target": target,
        "data": [r.to_dict() for r in results],
    }), 200
