from flask import Blueprint, jsonify, g, request
from pydantic import ValidationError

from models.contact_request import CONTACT_STATUSES
from models.storage import get_storage
from schemas import (
    CategoryCreate,
    CategoryUpdate,
    ProductCreate,
    ProductUpdate,
    ProductImageCreate,
    ProductImageUpdate,
    HeroImageCreate,
    HeroImageUpdate,
    SettingUpsert,
    parse_body,
)
from utils.audit import log_event
from utils.auth_context import login_required
from utils.http import no_cache, request_data
from utils.uploads import discard_upload, save_upload

admin_bp = Blueprint("admin", __name__, url_prefix="/api/admin")


def _check_category(storage, category_id):
    if category_id is not None and storage.get_category(category_id) is None:
        return jsonify(message="Category not found"), 400
    return None


def _parse_with_upload(schema, data, upload_url):
    try:
        return parse_body(schema, data)
    except ValidationError:
        discard_upload(upload_url)
        raise


# -------- categories --------

@admin_bp.post("/categories")
@login_required
def create_category():
    data = request_data(request)
    image_url = save_upload(request.files.get("image"), "image")
    if image_url:
        data["image"] = image_url

    fields = _parse_with_upload(CategoryCreate, data, image_url).model_dump()
    category = get_storage().create_category(fields)

    log_event("CATEGORY_CREATE", user_id=g.user.id, entity="category", entity_id=category.id)
    return jsonify(category.to_dict()), 201


@admin_bp.put("/categories/<int:category_id>")
@login_required
def update_category(category_id: int):
    data = request_data(request)
    image_url = save_upload(request.files.get("image"), "image")
    if image_url:
        data["image"] = image_url

    fields = _parse_with_upload(CategoryUpdate, data, image_url).model_dump(exclude_unset=True)
    category = get_storage().update_category(category_id, fields)
    if not category:
        discard_upload(image_url)
        return jsonify(message="Category not found"), 404

    log_event("CATEGORY_UPDATE", user_id=g.user.id, entity="category", entity_id=category_id)
    return jsonify(category.to_dict()), 200


@admin_bp.delete("/categories/<int:category_id>")
@login_required
def delete_category(category_id: int):
    if not get_storage().delete_category(category_id):
        return jsonify(message="Category not found"), 404

    log_event("CATEGORY_DELETE", user_id=g.user.id, entity="category", entity_id=category_id)
    return jsonify(message="Category deleted successfully"), 200


# -------- products --------

@admin_bp.post("/products")
@login_required
def create_product():
    storage = get_storage()
    fields = parse_body(ProductCreate, request_data(request)).model_dump()

    failure = _check_category(storage, fields.get("category_id"))
    if failure:
        return failure

    product = storage.create_product(fields)
    log_event("PRODUCT_CREATE", user_id=g.user.id, entity="product", entity_id=product.id)
    return jsonify(product.to_dict()), 201


@admin_bp.put("/products/<int:product_id>")
@login_required
def update_product(product_id: int):
    storage = get_storage()
    fields = parse_body(ProductUpdate, request_data(request)).model_dump(exclude_unset=True)

    failure = _check_category(storage, fields.get("category_id"))
    if failure:
        return failure

    product = storage.update_product(product_id, fields)
    if not product:
        return jsonify(message="Product not found"), 404

    log_event("PRODUCT_UPDATE", user_id=g.user.id, entity="product", entity_id=product_id)
    return jsonify(product.to_dict()), 200


@admin_bp.delete("/products/<int:product_id>")
@login_required
def delete_product(product_id: int):
    if not get_storage().delete_product(product_id):
        return jsonify(message="Product not found"), 404

    log_event("PRODUCT_DELETE", user_id=g.user.id, entity="product", entity_id=product_id)
    return jsonify(message="Product deleted successfully"), 200


# -------- product images --------

@admin_bp.get("/products/<int:product_id>/images")
@login_required
def list_product_images(product_id: int):
    storage = get_storage()
    if not storage.get_product(product_id):
        return jsonify(message="Product not found"), 404
    return jsonify([i.to_dict() for i in storage.get_product_images(product_id)]), 200


@admin_bp.post("/product-images")
@login_required
def create_product_image():
    upload = request.files.get("image")
    if upload is None or not upload.filename:
        return jsonify(message="Image file is required"), 400

    storage = get_storage()
    data = request_data(request)
    data["imageUrl"] = save_upload(upload, "image")
    fields = _parse_with_upload(ProductImageCreate, data, data["imageUrl"]).model_dump()
    if not storage.get_product(fields["product_id"]):
        discard_upload(data["imageUrl"])
        return jsonify(message="Product not found"), 404

    image = storage.create_product_image(fields)

    log_event(
        "PRODUCT_IMAGE_CREATE",
        user_id=g.user.id,
        entity="product_image",
        entity_id=image.id,
        metadata={"product_id": image.product_id, "is_main": image.is_main},
    )
    return jsonify(image.to_dict()), 201


@admin_bp.put("/product-images/<int:image_id>")
@login_required
def update_product_image(image_id: int):
    fields = parse_body(ProductImageUpdate, request_data(request)).model_dump(exclude_unset=True)
    image = get_storage().update_product_image(image_id, fields)
    if not image:
        return jsonify(message="Image not found"), 404

    log_event("PRODUCT_IMAGE_UPDATE", user_id=g.user.id, entity="product_image", entity_id=image_id)
    return jsonify(image.to_dict()), 200


@admin_bp.delete("/product-images/<int:image_id>")
@login_required
def delete_product_image(image_id: int):
    if not get_storage().delete_product_image(image_id):
        return jsonify(message="Image not found"), 404

    log_event("PRODUCT_IMAGE_DELETE", user_id=g.user.id, entity="product_image", entity_id=image_id)
    return jsonify(message="Product image deleted successfully"), 200


# -------- hero images --------

@admin_bp.get("/hero-images")
@login_required
def list_hero_images():
    heroes = get_storage().get_all_hero_images()
    return jsonify([h.to_dict() for h in heroes]), 200


@admin_bp.post("/hero-images")
@login_required
def create_hero_image():
    upload = request.files.get("image")
    if upload is None or not upload.filename:
        return jsonify(message="Image file is required"), 400

    data = request_data(request)
    data["imageUrl"] = save_upload(upload, "image")
    fields = _parse_with_upload(HeroImageCreate, data, data["imageUrl"]).model_dump()

    hero = get_storage().create_hero_image(fields)
    log_event("HERO_IMAGE_CREATE", user_id=g.user.id, entity="hero_image", entity_id=hero.id)
    return jsonify(hero.to_dict()), 201


@admin_bp.put("/hero-images/<int:hero_id>")
@login_required
def update_hero_image(hero_id: int):
    data = request_data(request)
    image_url = save_upload(request.files.get("image"), "image")
    if image_url:
        data["imageUrl"] = image_url

    fields = _parse_with_upload(HeroImageUpdate, data, image_url).model_dump(exclude_unset=True)
    hero = get_storage().update_hero_image(hero_id, fields)
    if not hero:
        discard_upload(image_url)
        return jsonify(message="Hero image not found"), 404

    log_event("HERO_IMAGE_UPDATE", user_id=g.user.id, entity="hero_image", entity_id=hero_id)
    return jsonify(hero.to_dict()), 200


@admin_bp.delete("/hero-images/<int:hero_id>")
@login_required
def delete_hero_image(hero_id: int):
    if not get_storage().delete_hero_image(hero_id):
        return jsonify(message="Hero image not found"), 404

    log_event("HERO_IMAGE_DELETE", user_id=g.user.id, entity="hero_image", entity_id=hero_id)
    return jsonify(message="Hero image deleted successfully"), 200


# -------- contact requests --------

@admin_bp.get("/contact-requests")
@login_required
def list_contact_requests():
    rows = get_storage().get_contact_requests()
    return jsonify([r.to_dict() for r in rows]), 200


@admin_bp.put("/contact-requests/<int:request_id>/status")
@login_required
def update_contact_request_status(request_id: int):
    status = request_data(request).get("status")
    if status not in CONTACT_STATUSES:
        return jsonify(message="Invalid status value"), 400

    row = get_storage().update_contact_request_status(request_id, status)
    if not row:
        return jsonify(message="Contact request not found"), 404

    log_event(
        "CONTACT_REQUEST_STATUS",
        user_id=g.user.id,
        entity="contact_request",
        entity_id=request_id,
        metadata={"status": status},
    )
    return jsonify(row.to_dict()), 200


@admin_bp.delete("/contact-requests/<int:request_id>")
@login_required
def delete_contact_request(request_id: int):
    if not get_storage().delete_contact_request(request_id):
        return jsonify(message="Contact request not found"), 404

    log_event("CONTACT_REQUEST_DELETE", user_id=g.user.id, entity="contact_request", entity_id=request_id)
    return jsonify(message="Contact request deleted successfully"), 200


# -------- settings --------

@admin_bp.get("/settings")
@login_required
def list_settings():
    return jsonify([s.to_dict() for s in get_storage().get_all_settings()]), 200


@admin_bp.post("/settings")
@login_required
def upsert_setting():
    data = parse_body(SettingUpsert, request_data(request))
    setting = get_storage().upsert_setting(data.key, data.value)

    log_event("SETTING_UPSERT", user_id=g.user.id, entity="setting", entity_id=setting.key)
    return jsonify(setting.to_dict()), 201


@admin_bp.post("/settings/logo")
@login_required
@no_cache
def upload_logo():
    upload = request.files.get("logo")
    if upload is None or not upload.filename:
        return jsonify(message="Logo file is required"), 400

    logo_url = save_upload(upload, "logo")
    setting = get_storage().upsert_setting("company_logo", logo_url)

    log_event("SETTING_LOGO_UPLOAD", user_id=g.user.id, entity="setting", entity_id="company_logo")
    return jsonify(
        message="Logo uploaded successfully",
        logoUrl=logo_url,
        setting=setting.to_dict(),
    ), 201
