from flask import Blueprint, request, jsonify

from models.storage import get_storage
from schemas import ContactRequestCreate, parse_body
from utils.audit import log_event
from utils.http import no_cache

catalog_bp = Blueprint("catalog", __name__, url_prefix="/api")


def _category_ref(storage, category_id):
    if not category_id:
        return None
    category = storage.get_category(category_id)
    return category.to_ref() if category else None


@catalog_bp.get("/categories")
def list_categories():
    return jsonify([c.to_dict() for c in get_storage().get_categories()]), 200


@catalog_bp.get("/categories/<int:category_id>")
def get_category(category_id: int):
    category = get_storage().get_category(category_id)
    if not category:
        return jsonify(message="Category not found"), 404
    return jsonify(category.to_dict()), 200


@catalog_bp.get("/products")
@no_cache
def list_products():
    storage = get_storage()
    category_id = request.args.get("categoryId", type=int)

    if category_id:
        products = storage.get_products_by_category(category_id)
    else:
        products = storage.get_products()

    result = []
    for p in products:
        main = storage.get_main_image(p.id)
        result.append({
            **p.to_dict(),
            "category": _category_ref(storage, p.category_id),
            "mainImage": main.image_url if main else None,
        })
    return jsonify(result), 200


@catalog_bp.get("/products/<int:product_id>")
def get_product(product_id: int):
    storage = get_storage()
    product = storage.get_product(product_id)
    if not product:
        return jsonify(message="Product not found"), 404

    return jsonify({
        **product.to_dict(),
        "category": _category_ref(storage, product.category_id),
        "images": [i.to_dict() for i in storage.get_product_images(product.id)],
    }), 200


@catalog_bp.get("/hero-images")
@no_cache
def list_hero_images():
    heroes = get_storage().get_hero_images()
    return jsonify([h.to_dict() for h in heroes]), 200


@catalog_bp.post("/contact")
def create_contact_request():
    data = parse_body(ContactRequestCreate, request.get_json(silent=True))
    row = get_storage().create_contact_request(data.model_dump())

    log_event("CONTACT_REQUEST_CREATE", entity="contact_request", entity_id=row.id)
    return jsonify(row.to_dict()), 201


@catalog_bp.get("/settings")
@no_cache
def public_settings():
    settings = get_storage().get_all_settings()
    return jsonify({s.key: s.value for s in settings if s.key and s.value is not None}), 200
