from __future__ import annotations

import io
import os


def _png(name: str = "photo.png"):
    return (io.BytesIO(b"\x89PNG\r\n\x1a\nfake"), name)


def test_health(client) -> None:
    resp = client.get("/api/health")
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["status"] == "ok"
    assert "timestamp" in body
    assert resp.headers["X-Content-Type-Options"] == "nosniff"


def test_category_crud(admin_client, client) -> None:
    created = admin_client.post(
        "/api/admin/categories", json={"name": "Pumps", "description": "Water pumps"}
    )
    assert created.status_code == 201
    category = created.get_json()
    assert category["name"] == "Pumps"

    assert client.get(f"/api/categories/{category['id']}").get_json()["description"] == "Water pumps"
    assert [c["name"] for c in client.get("/api/categories").get_json()] == ["Pumps"]

    updated = admin_client.put(f"/api/admin/categories/{category['id']}", json={"name": "Motors"})
    assert updated.status_code == 200
    assert updated.get_json()["name"] == "Motors"
    assert updated.get_json()["description"] == "Water pumps"

    deleted = admin_client.delete(f"/api/admin/categories/{category['id']}")
    assert deleted.get_json() == {"message": "Category deleted successfully"}
    assert client.get(f"/api/categories/{category['id']}").status_code == 404


def test_category_validation_and_missing(admin_client) -> None:
    resp = admin_client.post("/api/admin/categories", json={"description": "no name"})
    assert resp.status_code == 400
    assert resp.get_json()["message"].startswith("Validation error:")

    blank = admin_client.put("/api/admin/categories/1", json={"name": ""})
    assert blank.status_code == 400

    assert admin_client.put("/api/admin/categories/999", json={"name": "x"}).status_code == 404
    missing = admin_client.delete("/api/admin/categories/999")
    assert missing.status_code == 404
    assert missing.get_json() == {"message": "Category not found"}


def test_category_with_uploaded_image(app, admin_client, client) -> None:
    resp = admin_client.post(
        "/api/admin/categories",
        data={"name": "Valves", "image": _png()},
        content_type="multipart/form-data",
    )
    assert resp.status_code == 201
    image_url = resp.get_json()["image"]
    assert image_url.startswith("/uploads/image-") and image_url.endswith(".png")

    filename = image_url.rsplit("/", 1)[1]
    assert os.path.exists(os.path.join(app.config["UPLOAD_FOLDER"], filename))

    served = client.get(image_url)
    assert served.status_code == 200
    assert served.data.startswith(b"\x89PNG")


def test_upload_rejects_unknown_extension(admin_client) -> None:
    resp = admin_client.post(
        "/api/admin/categories",
        data={"name": "Valves", "image": (io.BytesIO(b"#!/bin/sh"), "run.sh")},
        content_type="multipart/form-data",
    )
    assert resp.status_code == 400
    assert resp.get_json() == {"message": "Unsupported file type"}


def test_products_with_category_and_images(admin_client, client) -> None:
    cat = admin_client.post("/api/admin/categories", json={"name": "Pumps"}).get_json()

    # form values arrive as strings
    created = admin_client.post(
        "/api/admin/products",
        data={"name": "P-100", "categoryId": str(cat["id"]), "featured": "true", "price": ""},
    )
    assert created.status_code == 201
    product = created.get_json()
    assert product["categoryId"] == cat["id"]
    assert product["featured"] is True
    assert product["price"] is None

    other = admin_client.post("/api/admin/products", json={"name": "Loose"}).get_json()

    first = admin_client.post(
        "/api/admin/product-images",
        data={"productId": str(product["id"]), "isMain": "true", "image": _png()},
        content_type="multipart/form-data",
    ).get_json()
    second = admin_client.post(
        "/api/admin/product-images",
        data={"productId": str(product["id"]), "isMain": "true", "order": "1", "image": _png()},
        content_type="multipart/form-data",
    ).get_json()

    images = admin_client.get(f"/api/admin/products/{product['id']}/images").get_json()
    mains = {i["id"]: i["isMain"] for i in images}
    assert mains == {first["id"]: False, second["id"]: True}

    listing = client.get("/api/products").get_json()
    by_id = {p["id"]: p for p in listing}
    assert by_id[product["id"]]["category"] == {"id": cat["id"], "name": "Pumps"}
    assert by_id[product["id"]]["mainImage"] == second["imageUrl"]
    assert by_id[other["id"]]["category"] is None
    assert by_id[other["id"]]["mainImage"] is None

    filtered = client.get(f"/api/products?categoryId={cat['id']}").get_json()
    assert [p["id"] for p in filtered] == [product["id"]]

    detail = client.get(f"/api/products/{product['id']}").get_json()
    assert [i["id"] for i in detail["images"]] == [first["id"], second["id"]]

    promoted = admin_client.put(f"/api/admin/product-images/{first['id']}", json={"isMain": True})
    assert promoted.status_code == 200
    assert client.get("/api/products").get_json()[0]["mainImage"] == first["imageUrl"]


def test_product_rejects_unknown_category(admin_client) -> None:
    resp = admin_client.post("/api/admin/products", json={"name": "P", "categoryId": 42})
    assert resp.status_code == 400
    assert resp.get_json() == {"message": "Category not found"}


def test_product_rejects_non_numeric_category(admin_client) -> None:
    resp = admin_client.post("/api/admin/products", data={"name": "P", "categoryId": "abc"})
    assert resp.status_code == 400
    assert '"categoryId"' in resp.get_json()["message"]


def test_deleting_category_detaches_products(admin_client, client) -> None:
    cat = admin_client.post("/api/admin/categories", json={"name": "Pumps"}).get_json()
    product = admin_client.post(
        "/api/admin/products", json={"name": "P", "categoryId": cat["id"]}
    ).get_json()

    admin_client.delete(f"/api/admin/categories/{cat['id']}")
    assert client.get(f"/api/products/{product['id']}").get_json()["category"] is None


def test_product_update_delete_and_missing(admin_client, client) -> None:
    product = admin_client.post("/api/admin/products", json={"name": "P"}).get_json()

    resp = admin_client.put(f"/api/admin/products/{product['id']}", json={"description": "Sturdy"})
    assert resp.get_json()["description"] == "Sturdy"
    assert resp.get_json()["name"] == "P"

    assert admin_client.put("/api/admin/products/999", json={"name": "x"}).status_code == 404
    assert admin_client.delete(f"/api/admin/products/{product['id']}").status_code == 200
    assert client.get(f"/api/products/{product['id']}").status_code == 404
    assert admin_client.delete(f"/api/admin/products/{product['id']}").status_code == 404


def test_product_image_requires_file_and_product(admin_client) -> None:
    resp = admin_client.post("/api/admin/product-images", data={"productId": "1"})
    assert resp.status_code == 400
    assert resp.get_json() == {"message": "Image file is required"}

    resp = admin_client.post(
        "/api/admin/product-images",
        data={"productId": "999", "image": _png()},
        content_type="multipart/form-data",
    )
    assert resp.status_code == 404

    missing = admin_client.delete("/api/admin/product-images/999")
    assert missing.get_json() == {"message": "Image not found"}


def _stored_files(app) -> list:
    folder = app.config["UPLOAD_FOLDER"]
    return os.listdir(folder) if os.path.isdir(folder) else []


def test_blank_multipart_fields_use_defaults(admin_client) -> None:
    product = admin_client.post("/api/admin/products", json={"name": "P-200"}).get_json()

    resp = admin_client.post(
        "/api/admin/product-images",
        data={"productId": str(product["id"]), "order": "", "isMain": "", "image": _png()},
        content_type="multipart/form-data",
    )
    assert resp.status_code == 201
    body = resp.get_json()
    assert body["order"] == 0
    assert body["isMain"] is False

    hero = admin_client.post(
        "/api/admin/hero-images",
        data={"title": "Blank", "order": "", "isActive": "", "image": _png()},
        content_type="multipart/form-data",
    )
    assert hero.status_code == 201
    assert hero.get_json()["isActive"] is False


def test_rejected_uploads_leave_no_files(app, admin_client) -> None:
    missing_product = admin_client.post(
        "/api/admin/product-images",
        data={"productId": "999", "image": _png()},
        content_type="multipart/form-data",
    )
    assert missing_product.status_code == 404

    invalid_hero = admin_client.post(
        "/api/admin/hero-images",
        data={"order": "first", "image": _png()},
        content_type="multipart/form-data",
    )
    assert invalid_hero.status_code == 400

    missing_category = admin_client.put(
        "/api/admin/categories/999",
        data={"name": "Ghost", "image": _png()},
        content_type="multipart/form-data",
    )
    assert missing_category.status_code == 404

    assert _stored_files(app) == []


def test_deleting_product_detaches_contact_requests(admin_client, client) -> None:
    product = admin_client.post("/api/admin/products", json={"name": "P-300"}).get_json()
    client.post(
        "/api/contact",
        json={"name": "Ravi", "email": "ravi@example.com", "message": "Quote", "productId": product["id"]},
    )

    assert admin_client.delete(f"/api/admin/products/{product['id']}").status_code == 200
    listed = admin_client.get("/api/admin/contact-requests").get_json()
    assert [r["productId"] for r in listed] == [None]


def test_hero_images(admin_client, client) -> None:
    assert admin_client.post("/api/admin/hero-images", data={"title": "x"}).status_code == 400

    hidden = admin_client.post(
        "/api/admin/hero-images",
        data={"title": "Draft", "order": "0", "image": _png()},
        content_type="multipart/form-data",
    ).get_json()
    shown = admin_client.post(
        "/api/admin/hero-images",
        data={"title": "Live", "order": "2", "isActive": "true", "image": _png()},
        content_type="multipart/form-data",
    ).get_json()
    assert hidden["isActive"] is False

    public = client.get("/api/hero-images")
    assert public.headers["Pragma"] == "no-cache"
    assert [h["id"] for h in public.get_json()] == [shown["id"]]

    everything = admin_client.get("/api/admin/hero-images").get_json()
    assert [h["id"] for h in everything] == [hidden["id"], shown["id"]]

    updated = admin_client.put(
        f"/api/admin/hero-images/{hidden['id']}", data={"isActive": "true", "order": "5"}
    )
    assert updated.status_code == 200
    assert [h["id"] for h in client.get("/api/hero-images").get_json()] == [shown["id"], hidden["id"]]

    assert admin_client.delete(f"/api/admin/hero-images/{shown['id']}").status_code == 200
    assert admin_client.delete(f"/api/admin/hero-images/{shown['id']}").status_code == 404
    assert admin_client.put("/api/admin/hero-images/999", json={"title": "x"}).status_code == 404


def test_contact_request_flow(admin_client, client) -> None:
    resp = client.post(
        "/api/contact",
        json={"name": "Ravi", "email": "ravi@example.com", "message": "Need a quote"},
    )
    assert resp.status_code == 201
    row = resp.get_json()
    assert row["status"] == "new"

    bad = client.post("/api/contact", json={"name": "Ravi", "email": "nope", "message": "x"})
    assert bad.status_code == 400
    assert '"email"' in bad.get_json()["message"]

    listed = admin_client.get("/api/admin/contact-requests").get_json()
    assert [r["id"] for r in listed] == [row["id"]]

    invalid = admin_client.put(f"/api/admin/contact-requests/{row['id']}/status", json={"status": "done"})
    assert invalid.status_code == 400
    assert invalid.get_json() == {"message": "Invalid status value"}

    ok = admin_client.put(f"/api/admin/contact-requests/{row['id']}/status", json={"status": "processing"})
    assert ok.get_json()["status"] == "processing"

    assert admin_client.put("/api/admin/contact-requests/999/status", json={"status": "new"}).status_code == 404
    assert admin_client.delete(f"/api/admin/contact-requests/{row['id']}").status_code == 200
    assert admin_client.delete(f"/api/admin/contact-requests/{row['id']}").status_code == 404


def test_settings(admin_client, client) -> None:
    assert admin_client.post("/api/admin/settings", json={"key": "company_name", "value": "Acme"}).status_code == 201
    admin_client.post("/api/admin/settings", json={"key": "company_name", "value": "Acme Ltd"})
    admin_client.post("/api/admin/settings", json={"key": "social_facebook"})

    rows = admin_client.get("/api/admin/settings").get_json()
    assert {r["key"]: r["value"] for r in rows} == {"company_name": "Acme Ltd", "social_facebook": None}

    public = client.get("/api/settings")
    assert public.get_json() == {"company_name": "Acme Ltd"}
    assert public.headers["Cache-Control"] == "no-cache, no-store, must-revalidate"

    assert admin_client.post("/api/admin/settings", json={"value": "x"}).status_code == 400


def test_logo_upload(admin_client, client) -> None:
    missing = admin_client.post("/api/admin/settings/logo", data={})
    assert missing.status_code == 400
    assert missing.get_json() == {"message": "Logo file is required"}

    resp = admin_client.post(
        "/api/admin/settings/logo",
        data={"logo": _png("logo.png")},
        content_type="multipart/form-data",
    )
    assert resp.status_code == 201
    body = resp.get_json()
    assert body["message"] == "Logo uploaded successfully"
    assert body["logoUrl"].startswith("/uploads/logo-")
    assert body["setting"]["key"] == "company_logo"
    assert client.get("/api/settings").get_json()["company_logo"] == body["logoUrl"]


def test_unknown_route_is_json_404(client) -> None:
    resp = client.get("/api/nothing-here")
    assert resp.status_code == 404
    assert "message" in resp.get_json()
