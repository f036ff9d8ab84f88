"""Resource routes: guard behaviour and handler happy paths over HTTP."""

import pytest
from fastapi.testclient import TestClient

from autoshop.app import PUBLIC_PATHS
from autoshop.config import get_database
from autoshop.rbac import Role

pytestmark = pytest.mark.api

FAKE_ID = "65f000000000000000000000"

PRODUCT = {
    "name": "Brake Pads",
    "sku": "BP-100",
    "barcode": "8901234567890",
    "category": "Brakes",
    "cost_price": 400,
    "selling_price": 650,
    "stock_qty": 10,
    "min_stock_level": 3,
}


def _guarded_routes(app):
    for path, operations in app.openapi()["paths"].items():
        if path in PUBLIC_PATHS:
            continue
        for method in operations:
            yield method.upper(), path.replace("{", "").replace("}", "")


@pytest.fixture
def anonymous(app):
    calls = []

    async def _no_db():
        calls.append(1)
        raise AssertionError("database reached without a session")

    app.dependency_overrides[get_database] = _no_db
    yield TestClient(app)
    assert calls == []


def test_every_guarded_route_rejects_anonymous_callers(app, anonymous):
    routes = list(_guarded_routes(app))
    assert len(routes) > 40
    for method, path in routes:
        resp = anonymous.request(method, path)
        assert resp.status_code == 401, f"{method} {path} -> {resp.status_code}"
        assert resp.json() == {"error": "Authentication required"}


def test_malformed_body_from_anonymous_caller_is_401(app, anonymous):
    headers = {"Content-Type": "application/json"}
    for method, path in _guarded_routes(app):
        resp = anonymous.request(method, path, content="{not json", headers=headers)
        assert resp.status_code == 401, f"{method} {path} -> {resp.status_code}"
        assert resp.json() == {"error": "Authentication required"}


def test_malformed_login_body_is_still_400(anonymous):
    resp = anonymous.post(
        "/api/auth/login", content="{not json", headers={"Content-Type": "application/json"}
    )
    assert resp.status_code == 400
    assert resp.json()["error"] == "Invalid request"


def test_inventory_manager_cannot_delete_customers(login_as):
    inv = login_as(Role.INVENTORY_MANAGER)
    resp = inv.delete(f"/api/customers/{FAKE_ID}")
    assert resp.status_code == 403
    assert resp.json() == {"error": "Insufficient permissions for this action"}


def test_sales_executive_reads_orders_but_not_employees(login_as):
    sales = login_as(Role.SALES_EXECUTIVE)
    assert sales.get("/api/orders").status_code == 200
    assert sales.get("/api/employees").status_code == 403


def test_service_staff_updates_but_cannot_create_visits(login_as, db):
    admin = login_as(Role.ADMIN)
    staff = login_as(Role.SERVICE_STAFF)
    customer = admin.post("/api/customers", json={"name": "Ravi", "phone": "9876543210"}).json()
    visit = {"customer_id": customer["_id"], "vehicle_reg": "MH12AB1234"}

    assert staff.post("/api/service-visits", json=visit).status_code == 403
    created = admin.post("/api/service-visits", json=visit).json()

    resp = staff.patch(f"/api/service-visits/{created['_id']}", json={"status": "working"})
    assert resp.status_code == 200
    assert resp.json()["status"] == "working"
    assert staff.delete(f"/api/service-visits/{created['_id']}").status_code == 403


def test_product_crud_and_lookup(login_as):
    inv = login_as(Role.INVENTORY_MANAGER)

    created = inv.post("/api/products", json=PRODUCT)
    assert created.status_code == 201
    product_id = created.json()["_id"]

    assert inv.get(f"/api/products/barcode/{PRODUCT['barcode']}").json()["_id"] == product_id
    assert inv.get("/api/products", params={"search": "brake"}).json()[0]["_id"] == product_id

    patched = inv.patch(f"/api/products/{product_id}", json={"selling_price": 700})
    assert patched.json()["selling_price"] == 700
    assert patched.json()["name"] == "Brake Pads"

    assert inv.delete(f"/api/products/{product_id}").json() == {"success": True}
    missing = inv.get(f"/api/products/{product_id}")
    assert missing.status_code == 404
    assert missing.json() == {"error": "Product not found"}


def test_malformed_id_is_404(login_as):
    inv = login_as(Role.INVENTORY_MANAGER)
    assert inv.get("/api/products/not-an-id").status_code == 404


def test_inventory_transaction_updates_stock(login_as):
    inv = login_as(Role.INVENTORY_MANAGER)
    product = inv.post("/api/products", json=PRODUCT).json()

    resp = inv.post(
        "/api/inventory-transactions",
        json={"product_id": product["_id"], "type": "OUT", "quantity": 8, "reason": "Workshop"},
    )

    assert resp.status_code == 201
    assert (resp.json()["previous_stock"], resp.json()["new_stock"]) == (10, 2)
    assert inv.get(f"/api/products/{product['_id']}").json()["stock_qty"] == 2

    history = inv.get("/api/inventory-transactions", params={"product_id": product["_id"]}).json()
    assert len(history) == 1


def test_order_flow_reduces_stock(login_as):
    admin = login_as(Role.ADMIN)
    product = admin.post("/api/products", json=PRODUCT).json()

    order = admin.post(
        "/api/orders",
        json={
            "customer_name": "Walk-in",
            "items": [{"product_id": product["_id"], "quantity": 2, "price": 650}],
            "total": 1300,
        },
    )

    assert order.status_code == 201
    assert order.json()["invoice_number"].startswith("ORD-")
    assert order.json()["payment_status"] == "due"
    assert admin.get(f"/api/products/{product['_id']}").json()["stock_qty"] == 8

    notes = admin.get("/api/notifications").json()
    assert any(n["type"] == "new_order" for n in notes)


def test_duplicate_customer_phone_is_400(login_as):
    sales = login_as(Role.SALES_EXECUTIVE)
    body = {"name": "Ravi", "phone": "9876543210"}
    assert sales.post("/api/customers", json=body).status_code == 201
    dup = sales.post("/api/customers", json={**body, "name": "Other"})
    assert dup.status_code == 400
    assert "already exists" in dup.json()["error"]


def test_new_customer_starts_at_bronze(login_as):
    sales = login_as(Role.SALES_EXECUTIVE)
    customer = sales.post("/api/customers", json={"name": "Ravi", "phone": "9876543210"}).json()
    assert customer["loyalty_tier"] == "Bronze"
    assert customer["visit_count"] == 0


def test_service_handlers_needs_only_a_session(login_as, client):
    hr = login_as(Role.HR_MANAGER)
    hr.post("/api/employees", json={"name": "Arjun", "role": "Service Staff", "contact": "9000000001"})
    hr.post("/api/employees", json={"name": "Meera", "role": "Sales Executive", "contact": "9000000002"})

    staff = login_as(Role.SERVICE_STAFF)
    handlers = staff.get("/api/service-handlers")

    assert handlers.status_code == 200
    assert [h["name"] for h in handlers.json()] == ["Arjun"]
    assert client.get("/api/service-handlers").status_code == 401


def test_leave_approval_is_logged_as_approve(login_as, stored):
    admin = login_as(Role.ADMIN)
    leave = admin.post(
        "/api/leaves",
        json={"employee_id": "e1", "leave_type": "sick", "start_date": "2026-03-02", "end_date": "2026-03-03"},
    ).json()

    resp = admin.patch(f"/api/leaves/{leave['_id']}", json={"status": "approved"})

    assert resp.status_code == 200
    assert resp.json()["approved_by"] == admin.account.id
    actions = [e["action"] for e in stored("activity_logs", {"resource": "leave"})]
    assert actions == ["create", "approve"]


def test_feedback_and_communication_writes_are_logged(login_as, stored):
    admin = login_as(Role.ADMIN)
    feedback = admin.post(
        "/api/feedbacks", json={"customer_id": "c1", "type": "complaint", "message": "Late delivery"}
    ).json()
    admin.patch(f"/api/feedbacks/{feedback['_id']}", json={"status": "resolved"})
    admin.post("/api/communication-logs", json={"customer_id": "c1", "channel": "call", "message": "Called back"})

    logged = [(e["resource"], e["action"]) for e in stored("activity_logs")]
    assert ("feedback", "create") in logged
    assert ("feedback", "update") in logged
    assert ("communication", "create") in logged


def test_hr_manager_limited_to_own_department(login_as):
    hr = login_as(Role.HR_MANAGER)
    assert hr.get("/api/attendance").status_code == 200
    assert hr.get("/api/leaves").status_code == 403
    assert hr.get("/api/reports/sales").status_code == 403


def test_notifications_mark_read(login_as, db):
    admin = login_as(Role.ADMIN)
    admin.post("/api/products", json={**PRODUCT, "stock_qty": 1})

    notes = admin.get("/api/notifications").json()
    assert len(notes) == 1 and notes[0]["read"] is False

    one = admin.patch(f"/api/notifications/{notes[0]['_id']}/read")
    assert one.json()["read"] is True
    assert admin.patch("/api/notifications/mark-all-read").json() == {"success": True, "updated": 0}


def test_validation_errors_use_error_body(login_as):
    inv = login_as(Role.INVENTORY_MANAGER)
    resp = inv.post("/api/products", json={"name": "No price"})
    assert resp.status_code == 400
    assert resp.json()["error"] == "Invalid request"


def test_health(client):
    body = client.get("/health").json()
    assert body["status"] == "healthy"
    assert body["app"] == "AutoShop Management"
