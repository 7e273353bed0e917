from models.order import Order
from app.version import API_PREFIX
from conftest import TUESDAY_NOON, auth_header, obtain_token, user_by_email


def staff_token(client, truck, email="s1@example.com"):
    return obtain_token(client, email, role="STAFF", food_truck_id=truck.id)


def test_customer_lookup(client, make_truck, make_customer):
    truck, _ = make_truck()
    make_customer(email="casey@example.com")
    make_customer(email="robin@example.com")
    token = staff_token(client, truck)

    resp = client.get(f"{API_PREFIX}/staff/customers", headers=auth_header(token))
    assert len(resp.get_json()["data"]) == 2
    resp = client.get(f"{API_PREFIX}/staff/customers?q=robin", headers=auth_header(token))
    assert [c["email"] for c in resp.get_json()["data"]] == ["robin@example.com"]

    customer_id = resp.get_json()["data"][0]["id"]
    resp = client.get(f"{API_PREFIX}/staff/customers/{customer_id}", headers=auth_header(token))
    assert resp.get_json()["data"]["orders"] == []
    assert client.get(f"{API_PREFIX}/staff/customers/9999", headers=auth_header(token)).status_code == 404


def test_staff_places_order_from_staff_cart(client, make_truck, make_customer):
    truck, (taco, _) = make_truck()
    customer = make_customer()
    customer_id = customer.id
    token = staff_token(client, truck)

    resp = client.post(f"{API_PREFIX}/staff/cart/add", json={"item_id": taco.id, "quantity": 2}, headers=auth_header(token))
    assert resp.status_code == 200

    resp = client.post(f"{API_PREFIX}/staff/customers/{customer_id}/orders", json={
        "payment_method": "CASH", "pickup_datetime": TUESDAY_NOON,
    }, headers=auth_header(token))
    assert resp.status_code == 201
    order = resp.get_json()["data"]
    assert order["user_id"] == customer_id
    assert order["placed_by_id"] == user_by_email("s1@example.com").id

    cart = client.get(f"{API_PREFIX}/staff/cart", headers=auth_header(token)).get_json()["data"]
    assert cart["lines"] == []
    orders = client.get(f"{API_PREFIX}/staff/orders", headers=auth_header(token)).get_json()["data"]
    assert [o["id"] for o in orders] == [order["id"]]
    assert Order.query.count() == 1


def test_staff_and_customer_carts_are_separate(client, make_truck):
    truck, (taco, _) = make_truck()
    customer = obtain_token(client, "c1@example.com")
    staff = staff_token(client, truck)
    client.post(f"{API_PREFIX}/customer/cart/add", json={"item_id": taco.id}, headers=auth_header(customer))
    cart = client.get(f"{API_PREFIX}/staff/cart", headers=auth_header(staff)).get_json()["data"]
    assert cart["lines"] == []


def test_staff_order_for_unknown_customer(client, make_truck):
    truck, (taco, _) = make_truck()
    token = staff_token(client, truck)
    resp = client.post(f"{API_PREFIX}/staff/customers/9999/orders", json={
        "payment_method": "CASH", "order_type": "DELIVERY", "items": [{"item_id": taco.id, "quantity": 1}],
    }, headers=auth_header(token))
    assert resp.status_code == 404


def test_staff_routes_reject_customers(client):
    token = obtain_token(client, "c1@example.com")
    assert client.get(f"{API_PREFIX}/staff/customers", headers=auth_header(token)).status_code == 403
