"""HTTP tests for /api/orders."""

from datetime import datetime, timedelta

from httpx import AsyncClient

ORDER = {
    "customerName": "John Doe",
    "customerPhone": "+11234567890",
    "deliveryAddress": "123 Main St, Brooklyn, NY 11201",
}


async def create_order(client: AsyncClient, **fields) -> dict:
    response = await client.post("/api/orders", json={**ORDER, **fields})
    assert response.status_code == 201
    return response.json()


async def create_driver(client: AsyncClient, name: str = "Mike Chen", available: bool = True) -> dict:
    response = await client.post("/api/drivers", json={"name": name, "isAvailable": available})
    assert response.status_code == 201
    return response.json()


async def test_create_order(client: AsyncClient) -> None:
    response = await client.post("/api/orders", json=ORDER)

    assert response.status_code == 201
    body = response.json()
    assert body["id"]
    assert body["customerName"] == "John Doe"
    assert body["status"] == "PENDING"
    assert body["orderDetails"] is None
    assert body["latitude"] is not None
    assert body["longitude"] is not None
    assert body["driver"] is None
    assert body["createdAt"]
    assert body["assignedAt"] is None
    assert body["inTransitAt"] is None
    assert body["deliveredAt"] is None


async def test_create_order_ignores_client_status(client: AsyncClient) -> None:
    body = await create_order(client, status="DELIVERED")

    assert body["status"] == "PENDING"
    assert body["deliveredAt"] is None


async def test_create_order_validation(client: AsyncClient) -> None:
    response = await client.post("/api/orders", json={"customerName": "Test User"})

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Validation failed"
    fields = {tuple(error["loc"])[-1] for error in body["details"]}
    assert {"customerPhone", "deliveryAddress"} <= fields

    response = await client.post("/api/orders", json={**ORDER, "customerName": ""})
    assert response.status_code == 400


async def test_list_orders(client: AsyncClient) -> None:
    assert (await client.get("/api/orders")).json() == []

    first = await create_order(client, customerName="First")
    second = await create_order(client, customerName="Second")
    await client.patch(f"/api/orders/{first['id']}", json={"status": "DELIVERED"})

    response = await client.get("/api/orders")
    assert response.status_code == 200
    assert {o["id"] for o in response.json()} == {first["id"], second["id"]}

    delivered = (await client.get("/api/orders", params={"status": "DELIVERED"})).json()
    assert [o["id"] for o in delivered] == [first["id"]]

    page = (await client.get("/api/orders", params={"limit": 1})).json()
    assert len(page) == 1


async def test_list_orders_bad_query(client: AsyncClient) -> None:
    assert (await client.get("/api/orders", params={"status": "LOST"})).status_code == 400
    assert (await client.get("/api/orders", params={"limit": "abc"})).status_code == 400
    assert (await client.get("/api/orders", params={"offset": -1})).status_code == 400


async def test_get_order(client: AsyncClient) -> None:
    order = await create_order(client)

    response = await client.get(f"/api/orders/{order['id']}")
    assert response.status_code == 200
    assert response.json()["id"] == order["id"]

    missing = await client.get("/api/orders/nope")
    assert missing.status_code == 404
    assert missing.json()["error"] == "Order not found"


async def test_update_order_status_stamps_timestamp(client: AsyncClient) -> None:
    order = await create_order(client)

    response = await client.patch(f"/api/orders/{order['id']}", json={"status": "IN_TRANSIT"})

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "IN_TRANSIT"
    assert body["inTransitAt"] is not None
    assert body["assignedAt"] is None


async def test_update_order_fields(client: AsyncClient) -> None:
    order = await create_order(client, orderDetails="Pad Thai")

    response = await client.patch(
        f"/api/orders/{order['id']}", json={"customerPhone": "+15550001111", "orderDetails": None}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["customerPhone"] == "+15550001111"
    assert body["orderDetails"] is None
    assert body["customerName"] == "John Doe"


async def test_update_order_errors(client: AsyncClient) -> None:
    order = await create_order(client)

    assert (await client.patch(f"/api/orders/{order['id']}", json={"status": "LOST"})).status_code == 400
    assert (await client.patch(f"/api/orders/{order['id']}", json={"customerName": ""})).status_code == 400
    assert (await client.patch(f"/api/orders/{order['id']}", json={"customerName": None})).status_code == 400
    assert (await client.patch("/api/orders/nope", json={"status": "ASSIGNED"})).status_code == 404


async def test_delete_order(client: AsyncClient) -> None:
    order = await create_order(client)

    response = await client.delete(f"/api/orders/{order['id']}")
    assert response.status_code == 204
    assert (await client.get(f"/api/orders/{order['id']}")).status_code == 404
    assert (await client.delete(f"/api/orders/{order['id']}")).status_code == 404


async def test_order_stats(client: AsyncClient) -> None:
    await create_order(client)
    order = await create_order(client)
    await client.patch(f"/api/orders/{order['id']}", json={"status": "ASSIGNED"})

    response = await client.get("/api/orders/stats")

    assert response.status_code == 200
    assert response.json() == {"PENDING": 1, "ASSIGNED": 1, "IN_TRANSIT": 0, "DELIVERED": 0}


async def test_assign_and_reassign(client: AsyncClient) -> None:
    order = await create_order(client)
    first = await create_driver(client, "Mike Chen")
    second = await create_driver(client, "Sarah Johnson")

    response = await client.patch(f"/api/orders/{order['id']}/assign", json={"driverId": first["id"]})
    assert response.status_code == 200
    assigned = response.json()
    assert assigned["status"] == "ASSIGNED"
    assert assigned["assignedAt"] is not None
    assert assigned["driver"]["id"] == first["id"]
    assert assigned["driver"]["name"] == "Mike Chen"
    assert assigned["driver"]["isAvailable"] is True

    response = await client.patch(f"/api/orders/{order['id']}/assign", json={"driverId": second["id"]})
    assert response.status_code == 200
    reassigned = response.json()
    assert reassigned["status"] == "ASSIGNED"
    assert reassigned["assignedAt"] == assigned["assignedAt"]
    assert reassigned["driverId"] == second["id"]
    assert reassigned["driver"]["name"] == "Sarah Johnson"


async def test_assign_missing_driver(client: AsyncClient) -> None:
    order = await create_order(client)

    response = await client.patch(f"/api/orders/{order['id']}/assign", json={"driverId": "nope"})

    assert response.status_code == 404
    assert response.json()["error"] == "Driver not found"
    unchanged = (await client.get(f"/api/orders/{order['id']}")).json()
    assert unchanged["status"] == "PENDING"
    assert unchanged["driver"] is None


async def test_assign_missing_order(client: AsyncClient) -> None:
    driver = await create_driver(client)

    response = await client.patch("/api/orders/nope/assign", json={"driverId": driver["id"]})

    assert response.status_code == 404
    assert response.json()["error"] == "Order not found"


async def test_assign_unavailable_driver(client: AsyncClient) -> None:
    order = await create_order(client)
    driver = await create_driver(client, available=False)

    response = await client.patch(f"/api/orders/{order['id']}/assign", json={"driverId": driver["id"]})

    assert response.status_code == 400
    assert response.json()["error"] == "Driver is not available for assignment"


async def test_assign_delivered_order(client: AsyncClient) -> None:
    order = await create_order(client)
    driver = await create_driver(client)
    await client.patch(f"/api/orders/{order['id']}", json={"status": "DELIVERED"})

    response = await client.patch(f"/api/orders/{order['id']}/assign", json={"driverId": driver["id"]})

    assert response.status_code == 400
    assert response.json()["error"] == "Cannot reassign a delivered order"


async def test_assign_requires_driver_id(client: AsyncClient) -> None:
    order = await create_order(client)

    assert (await client.patch(f"/api/orders/{order['id']}/assign", json={})).status_code == 400
    assert (await client.patch(f"/api/orders/{order['id']}/assign", json={"driverId": 42})).status_code == 400


async def test_timestamps_carry_utc_offset(client: AsyncClient) -> None:
    order = await create_order(client)
    driver = await create_driver(client)
    assigned = (
        await client.patch(f"/api/orders/{order['id']}/assign", json={"driverId": driver["id"]})
    ).json()

    for value in (assigned["createdAt"], assigned["assignedAt"], assigned["driver"]["createdAt"]):
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        assert parsed.utcoffset() == timedelta(0)
