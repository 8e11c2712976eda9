"""
Order history tests for signed-in customers.
"""
from datetime import datetime, timedelta, timezone

import pytest

from app.models.order import Order
from app.models.product import Product


class TestListOrders:

    def test_requires_authentication(self, client):
        response = client.get("/orders")

        assert response.status_code == 401
        assert response.json()["success"] is False

    def test_lists_only_own_orders_newest_first(self, client, make_order, products, customer, other_customer, customer_headers):
        older = make_order(customer.id, created_at=datetime.now(timezone.utc) - timedelta(days=1))
        newer = make_order(customer.id, product_id=2, price="4.99")
        make_order(other_customer.id)
        make_order(None)

        response = client.get("/orders", headers=customer_headers)

        assert response.status_code == 200
        assert [o["id"] for o in response.json()["orders"]] == [newer.id, older.id]

    def test_admin_sees_every_order(self, client, make_order, products, customer, admin_headers):
        make_order(customer.id)
        make_order(None)

        response = client.get("/orders", headers=admin_headers)

        assert len(response.json()["orders"]) == 2

    def test_serializes_items_with_product_names(self, client, make_order, products, customer, customer_headers):
        make_order(customer.id, quantity=3)

        order = client.get("/orders", headers=customer_headers).json()["orders"][0]

        assert order["status"] == "pending"
        assert order["payment_status"] == "pending"
        assert order["total_amount"] == "17.97"
        item = order["items"][0]
        assert item["name"] == "Laravel Sticker"
        assert item["price"] == "5.99"
        assert item["total"] == "17.97"


class TestShowOrder:

    @pytest.fixture
    def order(self, make_order, products, customer):
        return make_order(customer.id)

    def test_owner_can_view_order(self, client, order, customer_headers):
        response = client.get(f"/orders/{order.id}", headers=customer_headers)

        assert response.status_code == 200
        assert response.json()["order"]["id"] == order.id
        assert response.json()["order"]["shipping_address"]["city"] == "Testville"

    def test_other_customer_is_forbidden(self, client, order, other_headers):
        response = client.get(f"/orders/{order.id}", headers=other_headers)

        assert response.status_code == 403

    def test_admin_can_view_any_order(self, client, order, admin_headers):
        response = client.get(f"/orders/{order.id}", headers=admin_headers)

        assert response.status_code == 200

    def test_missing_order_is_not_found(self, client, customer_headers):
        response = client.get("/orders/999", headers=customer_headers)

        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Order not found"}

    def test_deleted_product_shows_placeholder(self, client, session, order, customer_headers):
        session.delete(session.get(Product, 1))
        session.commit()

        item = client.get(f"/orders/{order.id}", headers=customer_headers).json()["order"]["items"][0]

        assert item["name"] == "Unknown Product"
        assert item["image_url"] is None

    def test_created_at_round_trips(self, client, session, make_order, products, customer, customer_headers):
        placed = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)
        order = make_order(customer.id, created_at=placed)
        session.expire_all()

        stored = session.get(Order, order.id).created_at
        body = client.get(f"/orders/{order.id}", headers=customer_headers).json()["order"]

        assert stored.replace(tzinfo=None) == placed.replace(tzinfo=None)
        assert datetime.fromisoformat(body["created_at"]).replace(tzinfo=None) == placed.replace(tzinfo=None)
