"""
==============================================================================
API Integration Tests
==============================================================================

Tests for REST API endpoints.

==============================================================================
"""

from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from app.core.security import SecurityManager, get_security_manager
from app.db.models import Cart, Member, Order


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    def test_health_check(self, client: TestClient):
        """Test health check returns status."""
        response = client.get("/api/v1/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] in ["healthy", "degraded"]

    def test_readiness_probe(self, client: TestClient):
        """Test readiness probe."""
        response = client.get("/api/v1/health/ready")
        assert response.status_code == 200
        assert response.json()["ready"] is True

    def test_liveness_probe(self, client: TestClient):
        """Test liveness probe."""
        response = client.get("/api/v1/health/live")
        assert response.status_code == 200
        assert response.json()["alive"] is True


class TestAuthEndpoints:
    """Tests for authentication endpoints."""

    def test_login_success(self, client: TestClient, member: Member):
        """Test successful login."""
        response = client.post(
            "/api/v1/auth/login",
            json={"email": "KIM@shop.kr", "password": "password123"}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["token_type"] == "bearer"
        assert data["member"]["email"] == member.email
        assert get_security_manager().validate_access_token(data["access_token"])

    def test_login_invalid_password(self, client: TestClient, member: Member):
        """Test login with invalid password."""
        response = client.post(
            "/api/v1/auth/login",
            json={"email": member.email, "password": "wrongpassword"}
        )
        assert response.status_code == 401
        assert response.json()["error"]["code"] == "INVALID_CREDENTIALS"

    @pytest.mark.parametrize("email", ["Park@Shop.kr", "park@shop.kr"])
    def test_login_mixed_case_stored_email(self, client: TestClient, mixed_case_member: Member, email):
        """Test login matches a stored email with capitals, whatever case is typed."""
        response = client.post(
            "/api/v1/auth/login",
            json={"email": email, "password": "password789"}
        )
        assert response.status_code == 200
        assert response.json()["member"]["id"] == mixed_case_member.id

    def test_get_current_member(self, client: TestClient, member: Member, member_headers):
        """Test getting current member info."""
        response = client.get("/api/v1/auth/me", headers=member_headers)
        assert response.status_code == 200
        assert response.json()["member"]["id"] == member.id

    def test_unauthorized_access(self, client: TestClient):
        """Test accessing protected endpoint without token."""
        response = client.get("/api/v1/auth/me")
        assert response.status_code == 401


class TestTokenEndpoints:
    """Tests for token validation and refresh endpoints."""

    def test_validate_good_token(self, client: TestClient, member_headers):
        for _ in range(2):
            response = client.get("/api/v1/tokens/validate", headers=member_headers)
            assert response.status_code == 200
            assert response.json() == {"valid": True}

    def test_validate_garbled_token(self, client: TestClient):
        response = client.get(
            "/api/v1/tokens/validate",
            headers={"Authorization": "Bearer garbage"}
        )
        assert response.status_code == 200
        assert response.json() == {"valid": False}

    def test_validate_requires_header(self, client: TestClient):
        response = client.get("/api/v1/tokens/validate")
        assert response.status_code == 422

    def test_refresh_success(self, client: TestClient, member: Member, refresh_token: str):
        """Test a valid refresh token yields a new bearer refresh token."""
        response = client.post(
            "/api/v1/tokens/refresh",
            headers={"Authorization": f"Bearer {refresh_token}"}
        )
        assert response.status_code == 200

        token = response.json()["token"]
        assert token.startswith("Bearer ")

        payload = get_security_manager().verify_token(
            token[len("Bearer "):], SecurityManager.TOKEN_TYPE_REFRESH
        )
        assert payload["sub"] == member.email

    def test_refresh_with_expired_token(self, client: TestClient, member: Member):
        """Test an expired refresh token is a 400 carrying the failure message."""
        expired = get_security_manager().create_refresh_token(
            {"sub": member.email},
            expires_delta=timedelta(seconds=-5)
        )

        response = client.post(
            "/api/v1/tokens/refresh",
            headers={"Authorization": f"Bearer {expired}"}
        )
        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "INVALID_ARGUMENT"
        assert error["message"] == "Invalid or expired refresh token"

    def test_refresh_mixed_case_stored_email(self, client: TestClient, mixed_case_member: Member):
        """Test a member stored as Park@Shop.kr can refresh their own token."""
        refresh_token = get_security_manager().create_refresh_token({
            "sub": mixed_case_member.email,
            "member_id": mixed_case_member.id,
        })

        response = client.post(
            "/api/v1/tokens/refresh",
            headers={"Authorization": f"Bearer {refresh_token}"}
        )
        assert response.status_code == 200
        assert response.json()["token"].startswith("Bearer ")

    def test_refresh_for_deleted_member(self, client: TestClient, db, member: Member, refresh_token: str):
        db.delete(member)
        db.commit()

        response = client.post(
            "/api/v1/tokens/refresh",
            headers={"Authorization": f"Bearer {refresh_token}"}
        )
        assert response.status_code == 400
        assert "kim@shop.kr" in response.json()["error"]["message"]


class TestOrderEndpoints:
    """Tests for order placement and history endpoints."""

    def test_order_from_cart(self, client: TestClient, db, member, items, fill_cart, member_headers):
        """Test placing a cart order removes the ordered items from the cart."""
        fill_cart(member, [items["A"], items["B"]])

        response = client.post(
            "/api/v1/orders/cart",
            json={"order_items": [{"item_id": items["A"].id, "count": 2}]},
            headers=member_headers
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["order_id"] > 0

        remaining = db.query(Cart).filter(Cart.member_id == member.id).all()
        assert [cart.item_id for cart in remaining] == [items["B"].id]

    def test_order_from_cart_item_not_in_cart(self, client: TestClient, db, member, items, member_headers):
        response = client.post(
            "/api/v1/orders/cart",
            json={"order_items": [{"item_id": items["A"].id, "count": 1}]},
            headers=member_headers
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "ITEM_NOT_IN_CART"
        assert db.query(Order).count() == 0

    def test_order_now_insufficient_stock(self, client: TestClient, items, member_headers):
        """Test an order above stock is a conflict citing the stock."""
        response = client.post(
            "/api/v1/orders",
            json={"order_items": [{"item_id": items["C"].id, "count": 4}]},
            headers=member_headers
        )

        assert response.status_code == 409
        error = response.json()["error"]
        assert error["code"] == "INSUFFICIENT_STOCK"
        assert error["details"]["stock_quantity"] == 3

    def test_order_now_large_count(self, client: TestClient, make_item, member_headers):
        """Test a count above four digits is accepted when stock covers it."""
        rice = make_item("Bulk Rice", 100, 20000)

        response = client.post(
            "/api/v1/orders",
            json={"order_items": [{"item_id": rice.id, "count": 10000}]},
            headers=member_headers
        )

        assert response.status_code == 200
        assert response.json()["order_id"] > 0

    def test_order_now_unknown_item(self, client: TestClient, items, member_headers):
        response = client.post(
            "/api/v1/orders",
            json={"order_items": [{"item_id": 424242, "count": 1}]},
            headers=member_headers
        )

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "ITEM_NOT_FOUND"

    @pytest.mark.parametrize("body", [
        {"order_items": []},
        {"order_items": [{"item_id": 1, "count": 0}]},
        {},
    ])
    def test_order_now_rejects_malformed_body(self, client: TestClient, member_headers, body):
        response = client.post("/api/v1/orders", json=body, headers=member_headers)
        assert response.status_code == 422

    def test_order_requires_authentication(self, client: TestClient, items):
        response = client.post(
            "/api/v1/orders",
            json={"order_items": [{"item_id": items["A"].id, "count": 1}]}
        )
        assert response.status_code == 401

    def test_list_orders(self, client: TestClient, items, member_headers):
        """Test paged and unpaged listings report the same grand total."""
        for count in (1, 2, 3):
            client.post(
                "/api/v1/orders",
                json={"order_items": [{"item_id": items["B"].id, "count": count}]},
                headers=member_headers
            )

        unpaged = client.get("/api/v1/orders/all", headers=member_headers).json()
        paged = client.get("/api/v1/orders?page=1&size=2", headers=member_headers).json()

        assert unpaged["total_elements"] == 3
        assert unpaged["total_pages"] == 1
        assert unpaged["total_order_price"] == 9000

        assert paged["total_order_price"] == 9000
        assert paged["number"] == 1
        assert paged["number_of_elements"] == 1
        assert paged["total_pages"] == 2
        assert paged["last"] is True
        assert paged["pageable"] == {"page_number": 1, "page_size": 2, "offset": 2}

        line = paged["content"][0]["order_items"][0]
        assert line["item_name"] == "Protein Bar"
        assert line["item_price"] == 1500

    def test_list_orders_default_page(self, client: TestClient, member_headers):
        response = client.get("/api/v1/orders", headers=member_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["size"] == 10
        assert data["empty"] is True

    @pytest.mark.parametrize("query", ["page=-1", "size=0", "size=1000"])
    def test_list_orders_rejects_bad_paging(self, client: TestClient, member_headers, query):
        response = client.get(f"/api/v1/orders?{query}", headers=member_headers)
        assert response.status_code == 422
