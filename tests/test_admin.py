"""
Admin tests: product CRUD and order status management.
"""
from decimal import Decimal

import pytest

from app.models.order import Order, OrderStatus
from app.models.product import Product


NEW_PRODUCT = {
    "name": "Python Sticker",
    "description": "Snake sticker",
    "price": "3.50",
    "stock_quantity": 25,
    "category": "Language",
    "image_url": "https://example.com/python.png",
}


class TestAdminAccess:

    def test_requires_authentication(self, client):
        assert client.get("/admin/products").status_code == 401

    def test_customers_are_forbidden(self, client, customer_headers):
        response = client.get("/admin/orders", headers=customer_headers)

        assert response.status_code == 403
        assert response.json() == {"success": False, "error": "Admin access required"}


class TestAdminProducts:

    def test_lists_all_products(self, client, products, inactive_product, admin_headers):
        body = client.get("/admin/products", headers=admin_headers).json()

        assert body["total"] == 3
        assert [p["id"] for p in body["products"]] == [1, 2, 3]

    @pytest.mark.parametrize("is_active,expected", [("true", [1, 2]), ("false", [3])])
    def test_filters_by_active_flag(self, client, products, inactive_product, admin_headers, is_active, expected):
        body = client.get(f"/admin/products?is_active={is_active}", headers=admin_headers).json()

        assert [p["id"] for p in body["products"]] == expected

    def test_creates_product(self, client, session, admin_headers):
        response = client.post("/admin/products", json=NEW_PRODUCT, headers=admin_headers)

        assert response.status_code == 201
        body = response.json()
        assert body["name"] == "Python Sticker"
        assert body["is_active"] is True
        product = session.get(Product, body["id"])
        assert product.price == Decimal("3.50")
        assert product.image_url == "https://example.com/python.png"

    @pytest.mark.parametrize("field,value", [
        ("price", "-1.00"),
        ("price", "1.999"),
        ("stock_quantity", -5),
        ("name", ""),
        ("image_url", "not a url"),
    ])
    def test_rejects_invalid_product(self, client, admin_headers, field, value):
        response = client.post("/admin/products", json={**NEW_PRODUCT, field: value}, headers=admin_headers)

        assert response.status_code == 400
        assert field in response.json()["errors"]

    def test_partially_updates_product(self, client, session, products, admin_headers):
        response = client.patch("/admin/products/1", json={"price": "6.49"}, headers=admin_headers)

        assert response.status_code == 200
        product = session.get(Product, 1)
        session.refresh(product)
        assert product.price == Decimal("6.49")
        assert product.name == "Laravel Sticker"
        assert product.stock_quantity == 100

    def test_category_can_be_cleared(self, client, session, products, admin_headers):
        response = client.patch("/admin/products/1", json={"category": None}, headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["category"] is None

    def test_null_name_is_rejected(self, client, products, admin_headers):
        response = client.patch("/admin/products/1", json={"name": None}, headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["errors"] == {"name": "This field cannot be null"}

    def test_updating_missing_product_is_not_found(self, client, admin_headers):
        response = client.patch("/admin/products/99", json={"price": "1.00"}, headers=admin_headers)

        assert response.status_code == 404

    def test_deletes_product(self, client, products, admin_headers):
        response = client.delete("/admin/products/2", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"success": "Product deleted successfully."}
        assert client.get("/products/2").status_code == 404

    def test_deleting_ordered_product_keeps_order_items(self, client, session, make_order, products, customer, admin_headers):
        order = make_order(customer.id, product_id=1, quantity=2)

        response = client.delete("/admin/products/1", headers=admin_headers)

        assert response.status_code == 200
        session.expire_all()
        item = session.get(Order, order.id).items[0]
        assert item.product_id is None
        assert item.price == Decimal("5.99")

        listed = client.get("/admin/orders", headers=admin_headers).json()["orders"][0]["items"][0]
        assert listed["name"] == "Unknown Product"
        assert listed["total"] == "11.98"

    def test_image_url_is_stored_normalized(self, client, admin_headers):
        response = client.post("/admin/products", json={**NEW_PRODUCT, "image_url": "https://example.com"}, headers=admin_headers)

        assert response.json()["image_url"] == "https://example.com/"


class TestAdminOrders:

    @pytest.fixture
    def orders(self, session, make_order, products, customer):
        shipped = make_order(customer.id)
        shipped.status = OrderStatus.SHIPPED
        session.add(shipped)
        session.commit()
        pending = make_order(None, product_id=2, price="4.99")
        return shipped, pending

    def test_lists_every_order(self, client, orders, admin_headers):
        body = client.get("/admin/orders", headers=admin_headers).json()

        assert len(body["orders"]) == 2

    def test_filters_by_status(self, client, orders, admin_headers):
        shipped, _ = orders

        body = client.get("/admin/orders?status=shipped", headers=admin_headers).json()

        assert [o["id"] for o in body["orders"]] == [shipped.id]

    def test_invalid_status_filter(self, client, orders, admin_headers):
        response = client.get("/admin/orders?status=lost", headers=admin_headers)

        assert response.status_code == 400
        assert "status" in response.json()["errors"]

    def test_updates_status(self, client, session, orders, admin_headers):
        _, pending = orders

        response = client.patch(f"/admin/orders/{pending.id}/status", json={"status": "processing"}, headers=admin_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] == "Order status updated successfully."
        assert body["order"]["status"] == "processing"
        order = session.get(Order, pending.id)
        session.refresh(order)
        assert order.status == OrderStatus.PROCESSING

    def test_any_status_may_follow_any_other(self, client, session, orders, admin_headers):
        _, pending = orders
        for status in ("delivered", "pending", "cancelled", "shipped"):
            response = client.patch(f"/admin/orders/{pending.id}/status", json={"status": status}, headers=admin_headers)
            assert response.status_code == 200
            assert response.json()["order"]["status"] == status

    def test_rejects_unknown_status(self, client, orders, admin_headers):
        _, pending = orders

        response = client.patch(f"/admin/orders/{pending.id}/status", json={"status": "lost"}, headers=admin_headers)

        assert response.status_code == 400
        assert "status" in response.json()["errors"]

    def test_missing_order_is_not_found(self, client, admin_headers):
        response = client.patch("/admin/orders/999/status", json={"status": "shipped"}, headers=admin_headers)

        assert response.status_code == 404
