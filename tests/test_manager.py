from app.version import API_PREFIX
from conftest import TUESDAY_NOON, auth_header, obtain_token


def manager_token(client, truck, email="m1@example.com"):
    return obtain_token(client, email, role="MANAGER", food_truck_id=truck.id)


def test_schedule_save_overwrite_and_close(client, make_truck):
    truck, _ = make_truck(schedule=[])
    token = manager_token(client, truck)

    resp = client.put(f"{API_PREFIX}/manager/schedule", json={"schedule": [
        {"day": 1, "start_time": "10:00", "end_time": "17:00"},
        {"day": 2, "start_time": "11:00", "end_time": "15:00"},
    ]}, headers=auth_header(token))
    assert resp.status_code == 200
    assert resp.get_json()["data"] == [
        {"day": 1, "start_time": "10:00", "end_time": "17:00"},
        {"day": 2, "start_time": "11:00", "end_time": "15:00"},
    ]

    resp = client.put(f"{API_PREFIX}/manager/schedule", json={"schedule": [
        {"day": 1, "start_time": "09:00", "end_time": "12:00"},
        {"day": 2, "closed": True},
    ]}, headers=auth_header(token))
    assert resp.get_json()["data"] == [{"day": 1, "start_time": "09:00", "end_time": "12:00"}]

    resp = client.get(f"{API_PREFIX}/manager/schedule", headers=auth_header(token))
    assert len(resp.get_json()["data"]) == 1


def test_schedule_rejects_inverted_times(client, make_truck):
    truck, _ = make_truck(schedule=[])
    token = manager_token(client, truck)
    resp = client.put(f"{API_PREFIX}/manager/schedule", json={"schedule": [
        {"day": 1, "start_time": "18:00", "end_time": "09:00"},
    ]}, headers=auth_header(token))
    assert resp.status_code == 400
    resp = client.put(f"{API_PREFIX}/manager/schedule", json={"schedule": [
        {"day": 8, "start_time": "09:00", "end_time": "18:00"},
    ]}, headers=auth_header(token))
    assert resp.status_code == 422


def test_item_create_and_update(client, make_truck):
    truck, _ = make_truck(items=())
    token = manager_token(client, truck)
    resp = client.post(f"{API_PREFIX}/manager/items", json={"name": "Burrito", "price": "8.25"}, headers=auth_header(token))
    assert resp.status_code == 200
    item = resp.get_json()["data"]
    assert item["price"] == 8.25
    assert item["slug"].startswith("burrito-")

    resp = client.post(f"{API_PREFIX}/manager/items", json={"item_id": item["id"], "name": "Big Burrito", "price": "9.00"},
                       headers=auth_header(token))
    assert resp.get_json()["data"]["name"] == "Big Burrito"

    items = client.get(f"{API_PREFIX}/manager/items", headers=auth_header(token)).get_json()["data"]
    assert [(i["id"], i["price"]) for i in items] == [(item["id"], 9.0)]


def test_item_of_other_truck_cannot_be_edited(client, make_truck):
    truck, _ = make_truck(name="Taco Wheels")
    _, (pizza, _) = make_truck(name="Pizza Van", items=(("Pizza", "9.00"), ("Calzone", "8.00")))
    token = manager_token(client, truck)
    resp = client.post(f"{API_PREFIX}/manager/items", json={"item_id": pizza.id, "name": "Mine", "price": "1.00"},
                       headers=auth_header(token))
    assert resp.status_code == 404


def test_employees(client, make_truck):
    truck, _ = make_truck()
    token = manager_token(client, truck)
    resp = client.post(f"{API_PREFIX}/manager/employees", json={
        "email": "sam@example.com", "password": "password123", "first_name": "Sam", "last_name": "Staff",
    }, headers=auth_header(token))
    assert resp.status_code == 201
    assert resp.get_json()["data"]["role"] == "STAFF"
    assert resp.get_json()["data"]["food_truck_id"] == truck.id

    resp = client.post(f"{API_PREFIX}/manager/employees", json={
        "email": "SAM@example.com", "password": "password123", "first_name": "Sam", "last_name": "Again",
    }, headers=auth_header(token))
    assert resp.status_code == 409

    staff = client.get(f"{API_PREFIX}/manager/employees", headers=auth_header(token)).get_json()["data"]
    assert [s["email"] for s in staff] == ["sam@example.com"]


def test_order_approval_and_progress(client, make_truck):
    truck, (taco, _) = make_truck()
    customer = obtain_token(client, "c1@example.com")
    order = client.post(f"{API_PREFIX}/customer/orders", json={
        "payment_method": "CASH", "pickup_datetime": TUESDAY_NOON, "items": [{"item_id": taco.id, "quantity": 1}],
    }, headers=auth_header(customer)).get_json()["data"]
    token = manager_token(client, truck)

    orders = client.get(f"{API_PREFIX}/manager/orders", headers=auth_header(token)).get_json()["data"]
    assert orders[0]["allowed_statuses"] == ["PREPARING", "READY_FOR_PICKUP", "COMPLETED"]

    resp = client.post(f"{API_PREFIX}/manager/orders/{order['id']}/status", json={"status": "PREPARING"},
                       headers=auth_header(token))
    assert resp.status_code == 409

    resp = client.post(f"{API_PREFIX}/manager/orders/{order['id']}/approve", headers=auth_header(token))
    assert resp.get_json()["data"]["status"] == "PREPARING"
    resp = client.post(f"{API_PREFIX}/manager/orders/{order['id']}/status", json={"status": "READY_FOR_PICKUP"},
                       headers=auth_header(token))
    assert resp.get_json()["data"]["status"] == "READY_FOR_PICKUP"
    resp = client.post(f"{API_PREFIX}/manager/orders/{order['id']}/status", json={"status": "BOGUS"},
                       headers=auth_header(token))
    assert resp.status_code == 422


def test_reject_and_foreign_orders(client, make_truck):
    truck, (taco, _) = make_truck(name="Taco Wheels")
    other, _ = make_truck(name="Pizza Van", items=(("Pizza", "9.00"), ("Calzone", "8.00")))
    customer = obtain_token(client, "c1@example.com")
    order = client.post(f"{API_PREFIX}/customer/orders", json={
        "payment_method": "CASH", "order_type": "DELIVERY", "items": [{"item_id": taco.id, "quantity": 1}],
    }, headers=auth_header(customer)).get_json()["data"]

    outsider = manager_token(client, other, email="m2@example.com")
    resp = client.post(f"{API_PREFIX}/manager/orders/{order['id']}/approve", headers=auth_header(outsider))
    assert resp.status_code == 403
    assert client.get(f"{API_PREFIX}/manager/orders", headers=auth_header(outsider)).get_json()["data"] == []

    token = manager_token(client, truck)
    resp = client.post(f"{API_PREFIX}/manager/orders/{order['id']}/reject", headers=auth_header(token))
    assert resp.get_json()["data"]["order"]["status"] == "REJECTED"
    resp = client.post(f"{API_PREFIX}/manager/orders/9999/approve", headers=auth_header(token))
    assert resp.status_code == 404


def test_manager_routes_require_manager(client):
    token = obtain_token(client, "c1@example.com")
    assert client.get(f"{API_PREFIX}/manager/orders", headers=auth_header(token)).status_code == 403
    assert client.get(f"{API_PREFIX}/manager/orders").status_code == 401
