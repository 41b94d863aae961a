import pytest


@pytest.mark.asyncio
async def test_product_lifecycle(client):
    resp = await client.post("/product", json={"name": "Gas 13kg"})
    assert resp.status_code == 201
    product_id = resp.json()["id"]

    resp = await client.patch(f"/product/{product_id}", json={"name": "Gas 45kg"})
    assert resp.status_code == 200
    assert resp.json()["name"] == "Gas 45kg"

    resp = await client.get("/product")
    assert [p["name"] for p in resp.json()] == ["Gas 45kg"]

    resp = await client.delete(f"/product/{product_id}")
    assert resp.status_code == 204

    resp = await client.get("/product")
    assert resp.json() == []


@pytest.mark.asyncio
async def test_create_product_requires_name(client):
    resp = await client.post("/product", json={})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_put_product(client, product):
    resp = await client.put(f"/product/{product.id}", json={"name": "Water 10L"})
    assert resp.status_code == 200
    assert resp.json() == {
        "id": product.id,
        "name": "Water 10L",
        "createdAt": resp.json()["createdAt"],
    }


@pytest.mark.asyncio
async def test_put_missing_product_is_404(client):
    resp = await client.put("/product/123", json={"name": "Ghost"})
    assert resp.status_code == 404
    assert resp.json()["error"] == "not_found"
