"""API tests for brand pages and page-scoped taxonomy."""

import pytest


async def _page(client, name: str = "Hikvision") -> dict:
    response = await client.post("/api/v1/brand-pages", json={"name": name})
    assert response.status_code == 201
    return response.json()


@pytest.mark.asyncio
async def test_brand_page_create_list_delete(client):
    page = await _page(client, "Dahua Saudi")
    assert page["slug"] == "dahua-saudi"
    assert (await client.post("/api/v1/brand-pages", json={"name": "Dahua Saudi"})).status_code == 400

    listed = (await client.get("/api/v1/brand-pages")).json()
    assert [p["id"] for p in listed] == [page["id"]]

    assert (await client.delete(f"/api/v1/brand-pages/{page['id']}")).status_code == 200
    assert (await client.delete(f"/api/v1/brand-pages/{page['id']}")).status_code == 404


@pytest.mark.asyncio
async def test_page_category_delete_cascades_to_subcategories(client):
    page = await _page(client)
    base = f"/api/v1/pages/{page['id']}"

    category = (await client.post(f"{base}/categories", json={"name": "Cameras"})).json()
    sub = await client.post(
        f"{base}/subcategories", json={"name": "Dome", "parent_category_id": category["id"]}
    )
    assert sub.status_code == 201

    assert (await client.delete(f"{base}/categories/{category['id']}")).status_code == 200
    assert (await client.get(f"{base}/subcategories")).json() == []
    assert (await client.get(f"{base}/categories/{category['id']}")).status_code == 404


@pytest.mark.asyncio
async def test_subcategory_requires_parent(client):
    page = await _page(client)
    response = await client.post(f"/api/v1/pages/{page['id']}/subcategories", json={"name": "Dome"})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_assign_products_to_category_and_page(client, product_payload):
    page = await _page(client)
    base = f"/api/v1/pages/{page['id']}"
    first = (await client.post("/api/v1/products", json={**product_payload, "name": "A"})).json()
    second = (await client.post("/api/v1/products", json={**product_payload, "name": "B"})).json()

    category = (await client.post(f"{base}/categories", json={"name": "Cameras"})).json()
    assigned = await client.post(
        f"{base}/categories/{category['id']}/products", json={"products": [second["id"]]}
    )
    assert assigned.json()["product_ids"] == [second["id"]]

    assert (await client.get(f"{base}/products")).json() == []

    saved = await client.post(f"{base}/products", json={"products": [second["id"], first["id"]]})
    assert saved.json() == {"page_id": page["id"], "product_ids": [second["id"], first["id"]]}

    products = (await client.get(f"{base}/products")).json()
    assert [p["name"] for p in products] == ["B", "A"]
