import json

import pytest

ORDER_BODY = {
    "date": "2024-05-01T08:00:00",
    "maxTimeDelivery": "18:00",
    "minTimeDelivery": "09:30",
    "orderStatus": "PENDING",
}


def _data(frame):
    event_line, data_line = frame.rstrip("\n").split("\n")
    return event_line, json.loads(data_line[len("data: "):])


@pytest.mark.asyncio
async def test_list_orders_includes_customer_and_items(client, order, order_product):
    resp = await client.get("/order")
    assert resp.status_code == 200
    [row] = resp.json()

    assert row["id"] == order.id
    assert row["orderStatus"] == "PENDING"
    assert row["customer"]["name"] == "Ana Souza"
    [item] = row["orderProduct"]
    assert item["quantity"] == 3
    assert item["product"]["name"] == "Water 20L"


@pytest.mark.asyncio
async def test_create_order_publishes_new_order(client, broker, make_connection, customer, user):
    a, b = make_connection(), make_connection()
    broker.register(a)
    broker.register(b)

    resp = await client.post(
        "/order", json={**ORDER_BODY, "customerId": customer.id, "userId": user.id}
    )

    assert resp.status_code == 201
    body = resp.json()
    assert body["maxTimeDelivery"].startswith("1970-01-01T18:00")
    assert body["minTimeDelivery"].startswith("1970-01-01T09:30")

    assert a.frames == b.frames
    [frame] = a.frames
    event, payload = _data(frame)
    assert event == "event: new_order"
    assert payload == body


@pytest.mark.asyncio
async def test_create_order_survives_broken_subscriber(
    client, broker, make_connection, customer, user
):
    good = make_connection()
    broker.register(good)
    broken = broker.register(make_connection(fail=True))

    resp = await client.post(
        "/order", json={**ORDER_BODY, "customerId": customer.id, "userId": user.id}
    )

    assert resp.status_code == 201
    assert len(good.frames) == 1
    assert broken not in broker


@pytest.mark.asyncio
async def test_create_order_rejects_bad_time(client, broker, make_connection, customer, user):
    conn = make_connection()
    broker.register(conn)

    resp = await client.post(
        "/order",
        json={**ORDER_BODY, "maxTimeDelivery": "25:00", "customerId": customer.id, "userId": user.id},
    )

    assert resp.status_code == 422
    assert "Invalid time format" in resp.text
    assert conn.frames == []


@pytest.mark.asyncio
async def test_patch_order_status(client, broker, make_connection, order):
    conn = make_connection()
    broker.register(conn)

    resp = await client.patch(f"/order/{order.id}", json={"orderStatus": "DELIVERED"})

    assert resp.status_code == 200
    assert resp.json()["orderStatus"] == "DELIVERED"
    assert resp.json()["maxTimeDelivery"].startswith("1970-01-01T12:30")
    assert conn.frames == []


@pytest.mark.asyncio
async def test_put_order(client, order, customer, user):
    resp = await client.put(
        f"/order/{order.id}",
        json={**ORDER_BODY, "orderStatus": "CANCELED", "customerId": customer.id, "userId": user.id},
    )
    assert resp.status_code == 200
    assert resp.json()["orderStatus"] == "CANCELED"


@pytest.mark.asyncio
async def test_delete_order(client, order):
    resp = await client.delete(f"/order/{order.id}")
    assert resp.status_code == 204

    resp = await client.get("/order")
    assert resp.json() == []


@pytest.mark.asyncio
async def test_delete_missing_order_is_404(client):
    resp = await client.delete("/order/42")
    assert resp.status_code == 404
    assert resp.json() == {"error": "not_found", "message": "Order 42 not found"}
