import uuid
from unittest.mock import AsyncMock

import pytest

from storefront.errors import ErrorType
from storefront.exceptions import AppException

PRODUCT = {
    "name": "Product 1",
    "description": "Product 1 Description",
    "price": 10.5,
    "stock": 10,
    "category": "Category 1",
}


@pytest.fixture
async def product(client, admin_headers):
    response = await client.post("/products", json=PRODUCT, headers=admin_headers)
    assert response.status_code == 201
    return response.json()


class TestReadProducts:
    """Tests for the public read endpoints."""

    @pytest.mark.asyncio
    async def test_list_is_public(self, client, product):
        response = await client.get("/products")

        assert response.status_code == 200
        assert [p["id"] for p in response.json()] == [product["id"]]

    @pytest.mark.asyncio
    async def test_list_pagination(self, client, admin_headers):
        for i in range(5):
            await client.post("/products", json={**PRODUCT, "name": f"P{i}"}, headers=admin_headers)

        first = await client.get("/products", params={"limit": 2, "offset": 0})
        past_end = await client.get("/products", params={"limit": 10, "offset": 10})

        assert [p["name"] for p in first.json()] == ["P0", "P1"]
        assert past_end.json() == []

    @pytest.mark.asyncio
    async def test_list_category(self, client, admin_headers):
        await client.post("/products", json={**PRODUCT, "category": "X"}, headers=admin_headers)
        await client.post("/products", json={**PRODUCT, "category": "Y"}, headers=admin_headers)

        response = await client.get("/products", params={"category": "X"})

        assert [p["category"] for p in response.json()] == ["X"]

    @pytest.mark.asyncio
    async def test_list_negative_limit(self, client):
        response = await client.get("/products", params={"limit": -1})
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_get_product(self, client, product):
        response = await client.get(f"/products/{product['id']}")

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == PRODUCT["name"]
        assert data["price"] == "10.50"
        assert data["images"] == []

    @pytest.mark.asyncio
    async def test_get_missing(self, client):
        missing = uuid.uuid4()

        response = await client.get(f"/products/{missing}")

        assert response.status_code == 404
        assert response.json()["detail"] == f"Product with id {missing} not found"

    @pytest.mark.asyncio
    async def test_get_invalid_id(self, client):
        response = await client.get("/products/not-a-uuid")
        assert response.status_code == 422


class TestCreateProduct:
    """Tests for POST /products."""

    @pytest.mark.asyncio
    async def test_requires_token(self, client):
        response = await client.post("/products", json=PRODUCT)
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_requires_admin(self, client, user_headers):
        response = await client.post("/products", json=PRODUCT, headers=user_headers)
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_create(self, client, admin_headers):
        response = await client.post(
            "/products",
            json={**PRODUCT, "image": "http://example.com/cover.png"},
            headers=admin_headers
        )

        assert response.status_code == 201
        data = response.json()
        assert data["image"] == "http://example.com/cover.png"
        assert data["stock"] == PRODUCT["stock"]

    @pytest.mark.asyncio
    async def test_price_keeps_exact_cents(self, client, admin_headers):
        created = await client.post(
            "/products", json={**PRODUCT, "price": "19.99"}, headers=admin_headers
        )
        fetched = await client.get(f"/products/{created.json()['id']}")
        updated = await client.patch(
            f"/products/{created.json()['id']}", json={"price": "0.1"}, headers=admin_headers
        )

        assert created.json()["price"] == "19.99"
        assert fetched.json()["price"] == "19.99"
        assert updated.json()["price"] == "0.10"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field,value", [
        ("price", 0),
        ("price", -5),
        ("stock", 0),
        ("name", ""),
        ("image", "not a url"),
    ])
    async def test_invalid_payload(self, client, admin_headers, field, value):
        response = await client.post(
            "/products", json={**PRODUCT, field: value}, headers=admin_headers
        )
        assert response.status_code == 422


class TestUpdateProduct:
    """Tests for PATCH /products/{id}."""

    @pytest.mark.asyncio
    async def test_partial_update(self, client, admin_headers, product):
        response = await client.patch(
            f"/products/{product['id']}", json={"stock": 99}, headers=admin_headers
        )

        assert response.status_code == 200
        data = response.json()
        assert data["stock"] == 99
        assert data["name"] == PRODUCT["name"]

    @pytest.mark.asyncio
    async def test_update_missing(self, client, admin_headers):
        response = await client.patch(
            f"/products/{uuid.uuid4()}", json={"stock": 1}, headers=admin_headers
        )
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_update_requires_admin(self, client, user_headers, product):
        response = await client.patch(
            f"/products/{product['id']}", json={"stock": 1}, headers=user_headers
        )
        assert response.status_code == 403


class TestDeleteProduct:
    """Tests for DELETE /products/{id}."""

    @pytest.mark.asyncio
    async def test_delete(self, client, admin_headers, product):
        response = await client.delete(f"/products/{product['id']}", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"message": "Product deleted successfully"}
        assert (await client.get(f"/products/{product['id']}")).status_code == 404

    @pytest.mark.asyncio
    async def test_delete_missing(self, client, admin_headers):
        response = await client.delete(f"/products/{uuid.uuid4()}", headers=admin_headers)
        assert response.status_code == 404


class TestUploadImage:
    """Tests for POST /products/{id}/img."""

    @pytest.mark.asyncio
    async def test_upload(self, client, admin_headers, product, mock_image_host):
        response = await client.post(
            f"/products/{product['id']}/img",
            files={"image": ("cover.png", b"png-bytes", "image/png")},
            headers=admin_headers
        )

        assert response.status_code == 201
        data = response.json()
        assert data["url"] == mock_image_host.upload.return_value
        assert data["product_id"] == product["id"]

        refreshed = await client.get(f"/products/{product['id']}")
        assert [img["url"] for img in refreshed.json()["images"]] == [data["url"]]

    @pytest.mark.asyncio
    async def test_upload_missing_file(self, client, admin_headers, product):
        response = await client.post(f"/products/{product['id']}/img", headers=admin_headers)
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_upload_empty_file(self, client, admin_headers, product):
        response = await client.post(
            f"/products/{product['id']}/img",
            files={"image": ("empty.png", b"", "image/png")},
            headers=admin_headers
        )
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_upload_host_failure(self, client, admin_headers, product, mock_image_host):
        mock_image_host.upload = AsyncMock(
            side_effect=AppException(ErrorType.UPLOAD_FAILED, "Failed to upload image to Cloudinary")
        )

        response = await client.post(
            f"/products/{product['id']}/img",
            files={"image": ("cover.png", b"png-bytes", "image/png")},
            headers=admin_headers
        )

        assert response.status_code == 502
        refreshed = await client.get(f"/products/{product['id']}")
        assert refreshed.json()["images"] == []

    @pytest.mark.asyncio
    async def test_upload_missing_product(self, client, admin_headers):
        response = await client.post(
            f"/products/{uuid.uuid4()}/img",
            files={"image": ("cover.png", b"png-bytes", "image/png")},
            headers=admin_headers
        )
        assert response.status_code == 404


class TestLikeProduct:
    """Tests for likes."""

    @pytest.mark.asyncio
    async def test_like_requires_token(self, client, product):
        response = await client.post(f"/products/{product['id']}/like")
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_like_twice(self, client, user_headers, product):
        first = await client.post(f"/products/{product['id']}/like", headers=user_headers)
        second = await client.post(f"/products/{product['id']}/like", headers=user_headers)
        likes = await client.get(f"/products/{product['id']}/likes")

        assert first.status_code == 200
        assert second.status_code == 200
        assert likes.json() == {"product_id": product["id"], "likes": 1}

    @pytest.mark.asyncio
    async def test_like_missing_product(self, client, user_headers):
        response = await client.post(f"/products/{uuid.uuid4()}/like", headers=user_headers)
        assert response.status_code == 404


class TestUnexpectedErrors:
    """Unhandled service errors surface as 500 with their message."""

    @pytest.mark.asyncio
    async def test_generic_error(self, client, product, monkeypatch):
        from storefront.services.products_service import ProductsService

        async def broken_list(self, **kwargs):
            raise RuntimeError("database connection lost")

        monkeypatch.setattr(ProductsService, "list", broken_list)

        response = await client.get("/products")

        assert response.status_code == 500
        assert response.json()["detail"] == "database connection lost"
