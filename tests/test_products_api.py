"""
Tests for the product catalog endpoints
"""
from pathlib import Path

import pytest
from app.config import settings
from tests.conftest import auth_headers, make_category, make_product

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


@pytest.fixture
def jewelry(db):
    return make_category(db, "Jewelry")


def test_admin_creates_product(client, admin, jewelry):
    response = client.post(
        "/api/v1/products",
        json={"name": "Titanium barbell", "price": "19.99", "category_id": jewelry.id},
        headers=auth_headers(admin)
    )

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["category"]["name"] == "Jewelry"
    assert data["colors"] == []


def test_create_product_with_legacy_fields(client, admin, jewelry):
    response = client.post(
        "/api/v1/products",
        json={"nombre": "Septum ring", "precio": "29.99", "categoria": jewelry.id, "carpetaimg": "rings"},
        headers=auth_headers(admin)
    )

    assert response.status_code == 201
    assert response.json()["data"]["image_folder"] == "rings"


def test_create_product_in_missing_category(client, admin):
    response = client.post(
        "/api/v1/products",
        json={"name": "Titanium barbell", "price": "19.99", "category_id": 999},
        headers=auth_headers(admin)
    )

    assert response.status_code == 404


def test_create_product_requires_admin(client, user, jewelry):
    response = client.post(
        "/api/v1/products",
        json={"name": "Titanium barbell", "price": "19.99", "category_id": jewelry.id},
        headers=auth_headers(user)
    )

    assert response.status_code == 403


def test_list_and_get_products(client, db, jewelry):
    barbell = make_product(db, jewelry, name="Titanium barbell")
    make_product(db, jewelry, name="Septum ring")

    listing = client.get("/api/v1/products").json()["data"]
    assert [p["name"] for p in listing] == ["Septum ring", "Titanium barbell"]

    detail = client.get(f"/api/v1/products/{barbell.id}")
    assert detail.status_code == 200
    assert detail.json()["data"]["name"] == "Titanium barbell"


def test_products_by_category(client, db, jewelry):
    aftercare = make_category(db, "Aftercare")
    make_product(db, jewelry, name="Titanium barbell")
    make_product(db, aftercare, name="Saline spray", price="7.50")

    response = client.get(f"/api/v1/products/category/{aftercare.id}")

    assert response.status_code == 200
    assert [p["name"] for p in response.json()["data"]] == ["Saline spray"]


def test_search_products(client, db, jewelry):
    make_product(db, jewelry, name="Titanium barbell", description="Implant grade")
    make_product(db, jewelry, name="Septum ring", description="Surgical steel")

    by_name = client.get("/api/v1/products/search", params={"q": "BARBELL"}).json()["data"]
    by_description = client.get("/api/v1/products/search", params={"q": "steel"}).json()["data"]

    assert [p["name"] for p in by_name] == ["Titanium barbell"]
    assert [p["name"] for p in by_description] == ["Septum ring"]


def test_search_requires_term(client):
    response = client.get("/api/v1/products/search", params={"q": "   "})

    assert response.status_code == 400


def test_update_product(client, db, admin, jewelry):
    barbell = make_product(db, jewelry)

    response = client.put(
        f"/api/v1/products/{barbell.id}",
        json={"name": "Gold barbell", "price": "49.00", "category_id": jewelry.id},
        headers=auth_headers(admin)
    )

    assert response.status_code == 200
    assert response.json()["data"]["name"] == "Gold barbell"


def test_delete_product(client, db, admin, jewelry):
    barbell = make_product(db, jewelry)

    response = client.delete(f"/api/v1/products/{barbell.id}", headers=auth_headers(admin))

    assert response.status_code == 200
    assert client.get(f"/api/v1/products/{barbell.id}").status_code == 404


def test_delete_ordered_product_conflicts(client, db, admin, user, jewelry):
    barbell = make_product(db, jewelry)
    client.post(
        "/api/v1/orders",
        json={
            "user_id": user.id,
            "total": "19.99",
            "lines": [{"product_id": barbell.id, "color": "Silver", "quantity": 1}],
        },
        headers=auth_headers(user)
    )

    response = client.delete(f"/api/v1/products/{barbell.id}", headers=auth_headers(admin))

    assert response.status_code == 409


def test_add_colors(client, db, admin, jewelry):
    barbell = make_product(db, jewelry)
    headers = auth_headers(admin)

    first = client.post(
        f"/api/v1/products/{barbell.id}/colors",
        json={"color": "Black", "image": "barbell-black.jpg"},
        headers=headers
    )
    duplicate = client.post(
        f"/api/v1/products/{barbell.id}/colors",
        json={"color": "black", "imagen": "barbell-black-2.jpg"},
        headers=headers
    )

    assert first.status_code == 201
    assert duplicate.status_code == 409

    colors = client.get(f"/api/v1/products/{barbell.id}/colors").json()["data"]
    assert [c["color"] for c in colors] == ["Black"]


def test_upload_images(client, db, admin, jewelry, tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(tmp_path))
    barbell = make_product(db, jewelry, image_folder="barbells")

    response = client.post(
        f"/api/v1/products/{barbell.id}/images",
        files=[
            ("images", ("front.png", PNG_BYTES, "image/png")),
            ("images", ("side.png", PNG_BYTES, "image/png")),
        ],
        headers=auth_headers(admin)
    )

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["count"] == 2
    assert all(url.startswith("/uploads/products/barbells/") for url in data["urls"])
    assert len(list(Path(tmp_path, "products", "barbells").iterdir())) == 2

    detail = client.get(f"/api/v1/products/{barbell.id}").json()["data"]
    assert detail["image"] == data["urls"][0].rsplit("/", 1)[-1]


def test_upload_rejects_non_images(client, db, admin, jewelry, tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(tmp_path))
    barbell = make_product(db, jewelry)

    response = client.post(
        f"/api/v1/products/{barbell.id}/images",
        files=[("images", ("notes.txt", b"hello", "text/plain"))],
        headers=auth_headers(admin)
    )

    assert response.status_code == 400
    assert not any(tmp_path.iterdir())


def test_oversized_file_leaves_nothing_on_disk(client, db, admin, jewelry, tmp_path, monkeypatch):
    """A batch with one file over the size limit stores none of its files"""
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(tmp_path))
    monkeypatch.setattr(settings, "MAX_UPLOAD_SIZE", len(PNG_BYTES))
    barbell = make_product(db, jewelry)

    response = client.post(
        f"/api/v1/products/{barbell.id}/images",
        files=[
            ("images", ("front.png", PNG_BYTES, "image/png")),
            ("images", ("huge.png", PNG_BYTES + b"\x00" * 10, "image/png")),
        ],
        headers=auth_headers(admin)
    )

    assert response.status_code == 400
    assert list(tmp_path.rglob("*.png")) == []

    detail = client.get(f"/api/v1/products/{barbell.id}").json()["data"]
    assert detail["image"] is None


def test_uploaded_image_is_served(client, db, admin, jewelry, tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(tmp_path))
    barbell = make_product(db, jewelry)

    upload = client.post(
        f"/api/v1/products/{barbell.id}/images",
        files=[("images", ("front.png", PNG_BYTES, "image/png"))],
        headers=auth_headers(admin)
    )
    url = upload.json()["data"]["urls"][0]

    response = client.get(url)

    assert response.status_code == 200
    assert response.content == PNG_BYTES


def test_missing_upload_is_not_found(client, tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(tmp_path))

    response = client.get("/uploads/products/default/missing.png")

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"
