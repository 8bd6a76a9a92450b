import pytest
from datetime import date, timedelta

from app.core.enums import UserRole


def _order_payload(**overrides):
    payload = {
        "originAddress": "100 Dock St",
        "originCity": "Chicago",
        "originState": "IL",
        "originZipCode": "60601",
        "destinationAddress": "200 Warehouse Rd",
        "destinationCity": "Atlanta",
        "destinationState": "GA",
        "destinationZipCode": "30301",
        "pickupDate": date.today().isoformat(),
        "equipmentType": "Dry Van",
        "customerRate": 1200.00,
    }
    payload.update(overrides)
    return payload


CUSTOMER = {
    "companyName": "Acme",
    "contactPerson": "Jane Smith",
    "email": "jane@acme.test",
    "phone": "555-0100",
    "paymentTerms": "Net 30",
    "isActive": True,
}

LEAD = {
    "companyName": "Prospect Foods",
    "contactPerson": "Sam Buyer",
    "email": "sam@prospect.test",
    "phone": "555-0300",
}


@pytest.mark.auth
class TestAuthentication:

    @pytest.mark.asyncio
    async def test_health_endpoint(self, test_client):
        response = await test_client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["dependencies"]["database"] == "connected"

    @pytest.mark.asyncio
    async def test_readiness_endpoint(self, test_client):
        response = await test_client.get("/readiness")
        assert response.status_code == 200
        assert response.json()["ready"] is True

    @pytest.mark.asyncio
    async def test_metrics_endpoint(self, test_client):
        await test_client.get("/health")
        response = await test_client.get("/metrics")
        assert response.status_code == 200
        assert "http_requests_total" in response.text

    @pytest.mark.asyncio
    async def test_missing_token_denied(self, test_client):
        response = await test_client.get("/api/leads")
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_invalid_token_denied(self, test_client):
        response = await test_client.get("/api/leads", headers={"Authorization": "Bearer invalid_token"})
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_expired_token_denied(self, test_client, expired_token):
        response = await test_client.get("/api/leads", headers={"Authorization": f"Bearer {expired_token}"})
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_register_login_and_profile(self, test_client, database):
        response = await test_client.post("/api/register", json={
            "username": "newbroker",
            "password": "s3cret-pass",
            "email": "new@everflown.test",
            "firstName": "New",
        })
        assert response.status_code == 201
        body = response.json()
        assert body["tokenType"] == "bearer"
        assert body["user"]["role"] == UserRole.USER.value
        assert body["user"]["id"].startswith("user-")
        assert "passwordHash" not in body["user"]

        login = await test_client.post("/api/login", json={"username": "newbroker", "password": "s3cret-pass"})
        assert login.status_code == 200
        token = login.json()["accessToken"]

        profile = await test_client.get("/api/user", headers={"Authorization": f"Bearer {token}"})
        assert profile.status_code == 200
        assert profile.json()["firstName"] == "New"

    @pytest.mark.asyncio
    async def test_register_duplicate_username(self, test_client, seed_users):
        response = await test_client.post("/api/register", json={
            "username": "admin",
            "password": "another-pass",
            "email": "fresh@everflown.test",
        })
        assert response.status_code == 409
        assert response.json()["error"] == "duplicate_key"

    @pytest.mark.asyncio
    async def test_register_duplicate_email(self, test_client, database):
        first = await test_client.post("/api/register", json={
            "username": "dispatcher1",
            "password": "password123",
            "email": "dispatch@everflown.test",
        })
        assert first.status_code == 201

        second = await test_client.post("/api/register", json={
            "username": "dispatcher2",
            "password": "password123",
            "email": "dispatch@everflown.test",
        })
        assert second.status_code == 409
        assert second.json()["error"] == "duplicate_key"
        assert second.json()["field"] == "email"

    @pytest.mark.asyncio
    async def test_self_registration_cannot_claim_admin(self, test_client, database):
        response = await test_client.post("/api/register", json={
            "username": "sneaky",
            "password": "password123",
            "email": "sneaky@everflown.test",
            "role": "admin",
        })
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_admin_can_register_broker(self, test_client, admin_headers):
        response = await test_client.post("/api/register", headers=admin_headers, json={
            "username": "broker2",
            "password": "password123",
            "email": "broker2@everflown.test",
            "role": "broker",
        })
        assert response.status_code == 201
        assert response.json()["user"]["role"] == "broker"

    @pytest.mark.asyncio
    async def test_bad_password_rejected(self, test_client, seed_users):
        response = await test_client.post("/api/login", json={"username": "admin", "password": "wrong"})
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_logout_revokes_token(self, test_client, admin_headers, fake_redis):
        response = await test_client.post("/api/logout", headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["revoked"] is True

        response = await test_client.get("/api/user", headers=admin_headers)
        assert response.status_code == 401


@pytest.mark.auth
class TestRolePermissions:

    @pytest.mark.asyncio
    async def test_user_role_is_read_only(self, test_client, user_headers):
        assert (await test_client.get("/api/leads", headers=user_headers)).status_code == 200
        response = await test_client.post("/api/leads", json=LEAD, headers=user_headers)
        assert response.status_code == 403
        assert response.json()["error"] == "forbidden"

    @pytest.mark.asyncio
    async def test_broker_can_write(self, test_client, broker_headers):
        response = await test_client.post("/api/leads", json=LEAD, headers=broker_headers)
        assert response.status_code == 201

    @pytest.mark.asyncio
    async def test_only_admin_lists_users(self, test_client, admin_headers, broker_headers):
        response = await test_client.get("/api/users", headers=admin_headers)
        assert response.status_code == 200
        assert {u["username"] for u in response.json()} == {"admin", "broker", "viewer"}
        assert (await test_client.get("/api/users", headers=broker_headers)).status_code == 403

    @pytest.mark.asyncio
    async def test_user_updates_own_profile(self, test_client, user_headers, seed_users):
        user_id = seed_users["user"].id
        response = await test_client.put(f"/api/users/{user_id}", json={"lastName": "Viewer"}, headers=user_headers)
        assert response.status_code == 200
        assert response.json()["lastName"] == "Viewer"

        other = seed_users["broker"].id
        response = await test_client.put(f"/api/users/{other}", json={"lastName": "X"}, headers=user_headers)
        assert response.status_code == 403

        response = await test_client.put(f"/api/users/{user_id}", json={"role": "admin"}, headers=user_headers)
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_admin_deletes_user(self, test_client, admin_headers, seed_users):
        broker_id = seed_users["broker"].id
        response = await test_client.delete(f"/api/users/{broker_id}", headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["deleted"] is True

        response = await test_client.delete(f"/api/users/{broker_id}", headers=admin_headers)
        assert response.status_code == 404


@pytest.mark.crud
class TestCRUDOperations:

    @pytest.mark.asyncio
    async def test_create_and_get_lead(self, test_client, broker_headers):
        response = await test_client.post("/api/leads", json=LEAD, headers=broker_headers)
        assert response.status_code == 201
        data = response.json()
        assert data["companyName"] == "Prospect Foods"
        assert data["status"] == "new"
        assert "createdAt" in data

        response = await test_client.get(f"/api/leads/{data['id']}", headers=broker_headers)
        assert response.status_code == 200
        assert response.json()["email"] == "sam@prospect.test"

    @pytest.mark.asyncio
    async def test_snake_case_input_accepted(self, test_client, broker_headers):
        response = await test_client.post("/api/leads", headers=broker_headers, json={
            "company_name": "Snake Co",
            "contact_person": "Kaa",
            "email": "kaa@snake.test",
            "phone": "555-0400",
        })
        assert response.status_code == 201
        assert response.json()["companyName"] == "Snake Co"

    @pytest.mark.asyncio
    async def test_partial_update_lead(self, test_client, broker_headers):
        lead = (await test_client.post("/api/leads", json=LEAD, headers=broker_headers)).json()

        response = await test_client.put(f"/api/leads/{lead['id']}", json={"status": "contacted"}, headers=broker_headers)
        assert response.status_code == 200
        updated = response.json()
        assert updated["status"] == "contacted"
        assert updated["companyName"] == LEAD["companyName"]
        assert updated["email"] == LEAD["email"]

    @pytest.mark.asyncio
    async def test_delete_lead_then_not_found(self, test_client, broker_headers):
        lead = (await test_client.post("/api/leads", json=LEAD, headers=broker_headers)).json()

        response = await test_client.delete(f"/api/leads/{lead['id']}", headers=broker_headers)
        assert response.status_code == 200
        assert response.json()["deleted"] is True

        response = await test_client.get(f"/api/leads/{lead['id']}", headers=broker_headers)
        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    @pytest.mark.asyncio
    async def test_update_missing_is_not_found(self, test_client, broker_headers):
        response = await test_client.put("/api/leads/999999", json={"status": "lost"}, headers=broker_headers)
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_missing_required_field(self, test_client, broker_headers):
        response = await test_client.post("/api/leads", json={"companyName": "Half"}, headers=broker_headers)
        assert response.status_code == 400
        assert response.json()["error"] == "invalid_input"

    @pytest.mark.asyncio
    async def test_invalid_status_rejected(self, test_client, broker_headers):
        response = await test_client.post("/api/leads", json={**LEAD, "status": "maybe"}, headers=broker_headers)
        assert response.status_code == 400
        assert response.json()["error"] == "invalid_status"

    @pytest.mark.asyncio
    async def test_list_filters(self, test_client, broker_headers):
        customer = (await test_client.post("/api/customers", json=CUSTOMER, headers=broker_headers)).json()
        await test_client.post("/api/orders", json=_order_payload(customerId=customer["id"]), headers=broker_headers)
        await test_client.post("/api/orders", json=_order_payload(status="delivered"), headers=broker_headers)

        response = await test_client.get(f"/api/orders?customerId={customer['id']}", headers=broker_headers)
        assert [o["customerId"] for o in response.json()] == [customer["id"]]

        response = await test_client.get("/api/orders?status=delivered", headers=broker_headers)
        assert len(response.json()) == 1

        response = await test_client.get("/api/orders?limit=1&offset=1", headers=broker_headers)
        assert len(response.json()) == 1

        response = await test_client.get("/api/orders?customerId=abc", headers=broker_headers)
        assert response.status_code == 400


@pytest.mark.integrity
class TestIntegrityOverHTTP:

    @pytest.mark.asyncio
    async def test_order_with_missing_customer(self, test_client, broker_headers):
        response = await test_client.post("/api/orders", json=_order_payload(customerId=4242), headers=broker_headers)
        assert response.status_code == 400
        assert response.json()["error"] == "dangling_reference"

    @pytest.mark.asyncio
    async def test_customer_delete_blocked_by_orders(self, test_client, broker_headers):
        customer = (await test_client.post("/api/customers", json=CUSTOMER, headers=broker_headers)).json()
        await test_client.post("/api/orders", json=_order_payload(customerId=customer["id"]), headers=broker_headers)

        response = await test_client.delete(f"/api/customers/{customer['id']}", headers=broker_headers)
        assert response.status_code == 409
        body = response.json()
        assert body["error"] == "referenced_by_dependents"
        assert body["dependent"] == "Order"

    @pytest.mark.asyncio
    async def test_duplicate_order_number(self, test_client, broker_headers):
        payload = _order_payload(orderNumber="ORD-DUP-1")
        assert (await test_client.post("/api/orders", json=payload, headers=broker_headers)).status_code == 201
        response = await test_client.post("/api/orders", json=payload, headers=broker_headers)
        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_terminal_order_locked(self, test_client, broker_headers):
        order = (await test_client.post("/api/orders", json=_order_payload(status="cancelled"), headers=broker_headers)).json()
        response = await test_client.put(f"/api/orders/{order['id']}", json={"status": "needs_truck"}, headers=broker_headers)
        assert response.status_code == 400
        assert response.json()["error"] == "invalid_transition"


@pytest.mark.dashboard
class TestDashboardAndFollowUps:

    @pytest.mark.asyncio
    async def test_dashboard_scenario(self, test_client, broker_headers):
        customer = (await test_client.post("/api/customers", json=CUSTOMER, headers=broker_headers)).json()
        await test_client.post(
            "/api/orders",
            json=_order_payload(customerId=customer["id"], status="in_transit"),
            headers=broker_headers,
        )
        due = (date.today() + timedelta(days=30)).isoformat()
        for status, amount in (("paid", "500.00"), ("draft", "300.00")):
            response = await test_client.post("/api/invoices", headers=broker_headers, json={
                "type": "customer", "status": status, "amount": amount, "dueDate": due,
            })
            assert response.status_code == 201

        response = await test_client.get("/api/dashboard/stats", headers=broker_headers)
        assert response.status_code == 200
        stats = response.json()
        assert stats["activeOrders"] == 1
        assert stats["inTransit"] == 1
        assert stats["totalRevenue"] == 500.00
        assert stats["avgDeliveryTime"] is None

    @pytest.mark.asyncio
    async def test_invoice_amount_is_decimal_text(self, test_client, broker_headers):
        response = await test_client.post("/api/invoices", headers=broker_headers, json={
            "type": "customer", "amount": "99.90", "dueDate": date.today().isoformat(),
        })
        assert response.json()["amount"] == "99.90"
        assert response.json()["invoiceNumber"].startswith("INV-")

    @pytest.mark.asyncio
    async def test_urgent_followups(self, test_client, broker_headers):
        due = (date.today() + timedelta(days=1)).isoformat() + "T09:00:00Z"
        followup = (await test_client.post("/api/followups", headers=broker_headers, json={
            "title": "Chase signed rate con", "type": "call", "dueDate": due, "priority": "high",
        })).json()

        response = await test_client.get("/api/followups/urgent", headers=broker_headers)
        assert [f["id"] for f in response.json()] == [followup["id"]]

        response = await test_client.put(f"/api/followups/{followup['id']}", json={"completed": True}, headers=broker_headers)
        assert response.json()["completedAt"] is not None

        response = await test_client.get("/api/followups/urgent", headers=broker_headers)
        assert response.json() == []

        response = await test_client.get("/api/followups?completed=true", headers=broker_headers)
        assert len(response.json()) == 1


@pytest.mark.documents
class TestDocumentsOverHTTP:

    @pytest.mark.asyncio
    async def test_invoice_pdf(self, test_client, broker_headers, user_headers):
        customer = (await test_client.post("/api/customers", json=CUSTOMER, headers=broker_headers)).json()
        order = (await test_client.post("/api/orders", json=_order_payload(customerId=customer["id"]), headers=broker_headers)).json()
        invoice = (await test_client.post("/api/invoices", headers=broker_headers, json={
            "type": "customer", "amount": "1200.00", "dueDate": date.today().isoformat(), "orderId": order["id"],
        })).json()

        response = await test_client.get(f"/api/invoices/{invoice['id']}/pdf", headers=user_headers)
        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert response.content.startswith(b"%PDF")

    @pytest.mark.asyncio
    async def test_quote_pdf_without_party(self, test_client, broker_headers):
        quote = (await test_client.post("/api/quotes", headers=broker_headers, json={
            "originCity": "Chicago", "originState": "IL",
            "destinationCity": "Atlanta", "destinationState": "GA",
            "equipmentType": "Reefer", "quotedRate": 3100.0,
            "validUntil": (date.today() + timedelta(days=7)).isoformat(),
        })).json()

        response = await test_client.get(f"/api/quotes/{quote['id']}/pdf", headers=broker_headers)
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_rate_confirmation_pdf(self, test_client, broker_headers):
        order = (await test_client.post("/api/orders", json=_order_payload(), headers=broker_headers)).json()
        carrier = (await test_client.post("/api/carriers", headers=broker_headers, json={
            "companyName": "Roadrunner Freight", "contactPerson": "Bob",
            "email": "bob@roadrunner.test", "phone": "555-0200",
        })).json()
        dispatch = (await test_client.post("/api/dispatches", headers=broker_headers, json={
            "orderId": order["id"], "carrierId": carrier["id"], "carrierRate": 900.0,
        })).json()

        response = await test_client.get(f"/api/dispatches/{dispatch['id']}/rate-confirmation", headers=broker_headers)
        assert response.status_code == 200
        assert response.content.startswith(b"%PDF")
