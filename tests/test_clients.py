from __future__ import annotations

import asyncio
import json
from datetime import date

import pytest

from conftest import user_payload
from pos_client_sdk.clients import (
    AuthClient,
    CustomersClient,
    DashboardClient,
    FilesClient,
    HealthClient,
    NotificationsClient,
    PurchasesClient,
    ReportsClient,
    SalesClient,
    SparePartsClient,
    UsersClient,
    VehiclesClient,
    WorkOrdersClient,
)
from pos_client_sdk.exceptions import ApiError, ForbiddenError
from pos_client_sdk.models import Role
from pos_client_sdk.models_showroom import Customer, ManagedUser, VehicleStatus


def _page(rows: list[dict], page: int = 1, limit: int = 20, total: int | None = None) -> dict:
    total = len(rows) if total is None else total
    return {"data": {"data": rows, "pagination": {"page": page, "limit": limit, "total": total}}}


def test_customers_paginated_list(backend, make_http) -> None:
    rows = [{"id": n, "name": f"Customer {n}"} for n in range(11, 21)]
    backend.on(
        "GET",
        "/customers",
        json={"data": {"data": rows, "pagination": {"page": 2, "limit": 10, "total": 45, "totalPages": 5}}},
    )
    client = CustomersClient(http=make_http(token="t"))

    page = asyncio.run(client.list(page=2, limit=10))

    assert len(page.data) == 10
    assert all(isinstance(row, Customer) for row in page.data)
    assert page.total_pages == 5
    params = backend.last().url.params
    assert (params["page"], params["limit"]) == ("2", "10")
    assert "search" not in params


def test_customers_go_backend_flat_page(backend, make_http) -> None:
    backend.on(
        "GET",
        "/customers",
        json={
            "message": "Customers retrieved successfully",
            "data": [{"id": 1, "name": "Budi", "customer_code": "CUST-001", "ktp_number": "3201"}],
            "pagination": {"page": 1, "limit": 20, "total": 1, "total_pages": 1, "has_next": False, "has_prev": False},
        },
    )
    client = CustomersClient(http=make_http(token="t"))

    page = asyncio.run(client.list(search="budi"))

    assert page.data[0].customer_code == "CUST-001"
    assert page.data[0].model_extra["ktp_number"] == "3201"
    assert page.pagination.has_next is False
    assert backend.last().url.params["search"] == "budi"


def test_customers_crud(backend, make_http) -> None:
    backend.on("GET", "/customers/5", json={"data": {"id": 5, "name": "Sari"}})
    backend.on("PUT", "/customers/5", json={"data": {"id": 5, "name": "Sari W"}})
    backend.on("DELETE", "/customers/5", json={"message": "Customer deleted successfully"})
    client = CustomersClient(http=make_http(token="t"))

    async def scenario():
        found = await client.get(5)
        updated = await client.update(5, {"name": "Sari W"})
        deleted = await client.delete(5)
        return found, updated, deleted

    found, updated, deleted = asyncio.run(scenario())

    assert found.name == "Sari"
    assert updated.name == "Sari W"
    assert deleted is None
    assert backend.paths() == ["GET /api/v1/customers/5", "PUT /api/v1/customers/5", "DELETE /api/v1/customers/5"]


@pytest.mark.parametrize(("page", "limit"), [(0, 10), (1, 0), (-1, 20)])
def test_list_rejects_bad_paging(make_http, page: int, limit: int) -> None:
    client = CustomersClient(http=make_http())
    with pytest.raises(ValueError):
        asyncio.run(client.list(page=page, limit=limit))


def test_vehicles_filter_and_status_update(backend, make_http) -> None:
    backend.on("GET", "/vehicles", json=_page([{"id": 1, "brand": "Toyota", "model": "Avanza", "status": "available"}]))
    backend.on("PUT", "/vehicles/1/status", json={"message": "Vehicle status updated successfully"})
    client = VehiclesClient(http=make_http(token="t"))

    async def scenario():
        listing = await client.list(status="available")
        await client.update_status(1, VehicleStatus.IN_WORKSHOP)
        return listing

    listing = asyncio.run(scenario())

    assert listing.data[0].brand == "Toyota"
    assert backend.requests[0].url.params["status"] == "available"
    assert json.loads(backend.last().content) == {"status": "in_workshop"}


def test_vehicle_status_is_validated(make_http) -> None:
    client = VehiclesClient(http=make_http())
    with pytest.raises(ValueError):
        asyncio.run(client.update_status(1, "scrapped"))


def test_sales_and_purchases(backend, make_http) -> None:
    backend.on("POST", "/sales", status=201, json={"data": {"id": 9, "invoice_number": "INV-009", "final_price": 150e6}})
    backend.on("GET", "/purchases", json=_page([{"id": 2, "invoice_number": "PUR-002"}]))
    http = make_http(token="t")

    async def scenario():
        sale = await SalesClient(http=http).create({"customer_id": 1, "vehicle_id": 1, "payment_method": "cash"})
        purchases = await PurchasesClient(http=http).list()
        return sale, purchases

    sale, purchases = asyncio.run(scenario())

    assert sale.invoice_number == "INV-009"
    assert purchases.data[0].invoice_number == "PUR-002"


def test_forbidden_is_typed(backend, make_http) -> None:
    backend.on("GET", "/sales", status=403, json={"error": "Insufficient permissions"})
    http = make_http(token="t")

    with pytest.raises(ForbiddenError) as excinfo:
        asyncio.run(SalesClient(http=http).list())

    assert excinfo.value.message == "Insufficient permissions"
    assert http.token == "t"


def test_work_order_commands(backend, make_http) -> None:
    backend.on("GET", "/work-orders/my", json=_page([{"id": 3, "wo_number": "WO-003", "status": "pending"}]))
    backend.on("PUT", "/work-orders/3/start", json={"message": "Work order started"})
    backend.on("PUT", "/work-orders/3/complete", json={"message": "Work order completed"})
    backend.on("PUT", "/work-orders/3/assign", json={"message": "Mechanic assigned"})
    client = WorkOrdersClient(http=make_http(token="t"))

    async def scenario():
        mine = await client.my()
        await client.assign(3, mechanic_id=12)
        await client.start(3)
        await client.complete(3)
        return mine

    mine = asyncio.run(scenario())

    assert mine.data[0].wo_number == "WO-003"
    assign_request = backend.requests[1]
    assert json.loads(assign_request.content) == {"mechanic_id": 12}
    assert backend.paths()[-2:] == ["PUT /api/v1/work-orders/3/start", "PUT /api/v1/work-orders/3/complete"]


def test_spare_parts_low_stock(backend, make_http) -> None:
    backend.on(
        "GET",
        "/spare-parts/low-stock",
        json={"data": [{"id": 1, "name": "Oil filter", "stock_quantity": 2, "min_stock_level": 5}]},
    )
    client = SparePartsClient(http=make_http(token="t"))

    parts = asyncio.run(client.low_stock())

    assert [part.name for part in parts] == ["Oil filter"]
    assert parts[0].is_low_stock is True


def test_spare_parts_low_stock_empty(backend, make_http) -> None:
    backend.on("GET", "/spare-parts/low-stock", json={"message": "No low stock items", "data": None})
    client = SparePartsClient(http=make_http(token="t"))

    assert asyncio.run(client.low_stock()) == []


def test_admin_users(backend, make_http) -> None:
    backend.on("GET", "/admin/users", json=_page([dict(user_payload(role="mekanik", user_id=7, username="joko"), phone="0812")]))
    backend.on("PUT", "/admin/users/7/activate", json={"message": "User status updated"})
    client = UsersClient(http=make_http(token="t"))

    async def scenario():
        users = await client.list(role="MEKANIK")
        await client.activate(7, is_active=False)
        return users

    users = asyncio.run(scenario())

    user = users.data[0]
    assert isinstance(user, ManagedUser)
    assert user.role is Role.MEKANIK
    assert user.phone == "0812"
    assert backend.requests[0].url.params["role"] == "mekanik"
    assert json.loads(backend.last().content) == {"is_active": False}


@pytest.mark.parametrize(
    ("role", "path"),
    [(Role.ADMIN, "/api/v1/admin/dashboard"), ("kasir", "/api/v1/kasir/dashboard"), (Role.MEKANIK, "/api/v1/mechanic/dashboard")],
)
def test_dashboard_path_follows_role(backend, make_http, role, path: str) -> None:
    segment = path.split("/")[3]
    backend.on("GET", f"/{segment}/dashboard", json={"data": {"today_sales": 3, "pending_work_orders": 1}})
    client = DashboardClient(http=make_http(token="t"))

    stats = asyncio.run(client.stats(role))

    assert backend.last().url.path == path
    assert stats["today_sales"] == 3


def test_upload_vehicle_photo_is_multipart(backend, make_http) -> None:
    backend.on(
        "POST",
        "/files/vehicles/4/photo",
        json={
            "message": "Photo uploaded successfully",
            "data": {"file_path": "uploads/vehicles/4/a.jpg", "file_url": "/uploads/vehicles/4/a.jpg"},
        },
    )
    client = FilesClient(http=make_http(token="t"))

    url = asyncio.run(client.upload_vehicle_photo(4, b"\xff\xd8jpeg", "/home/kasir/Pictures/a.jpg"))

    request = backend.last()
    assert url == "/uploads/vehicles/4/a.jpg"
    assert request.headers["Content-Type"].startswith("multipart/form-data")
    assert b'name="photo"' in request.content
    assert b'filename="a.jpg"' in request.content
    assert request.headers["Authorization"] == "Bearer t"


def test_upload_transfer_proof_field_name(backend, make_http) -> None:
    backend.on(
        "POST",
        "/files/sales/9/transfer-proof",
        json={"data": {"file_url": "/uploads/transfer/9.png"}},
    )
    client = FilesClient(http=make_http(token="t"))

    url = asyncio.run(client.upload_transfer_proof(9, b"png", "proof.png", content_type="image/png"))

    assert url == "/uploads/transfer/9.png"
    assert b'name="transfer_proof"' in backend.last().content


def test_upload_without_url_is_malformed(backend, make_http) -> None:
    backend.on("POST", "/files/vehicles/4/photo", json={"data": {"file_path": "uploads/a.jpg"}})
    client = FilesClient(http=make_http(token="t"))

    with pytest.raises(ApiError) as excinfo:
        asyncio.run(client.upload_vehicle_photo(4, b"x", "a.jpg"))

    assert excinfo.value.code == "MALFORMED_RESPONSE"


def test_notifications_list_and_mark_read(backend, make_http) -> None:
    backend.on(
        "GET",
        "/notifications",
        json={
            "data": {
                "notifications": [{"id": 1, "title": "Low stock", "is_read": False}],
                "pagination": {"page": 1, "limit": 20, "total": 1},
            }
        },
    )
    backend.on("PUT", "/notifications/1/read", json={"message": "Notification marked as read"})
    client = NotificationsClient(http=make_http(token="t"))

    async def scenario():
        listing = await client.list()
        await client.mark_read(1)
        return listing

    listing = asyncio.run(scenario())

    assert listing.data[0].title == "Low stock"
    assert listing.total_pages == 1
    assert backend.last().method == "PUT"


def test_health_client(backend, make_http) -> None:
    backend.on("GET", "/health", status=503, json={"status": "down"})
    assert asyncio.run(HealthClient(http=make_http()).check()) is False


def test_work_order_progress_and_parts(backend, make_http) -> None:
    backend.on("PUT", "/work-orders/3/progress", json={"message": "Work order progress updated successfully"})
    backend.on("POST", "/work-orders/3/parts", json={"message": "Part used successfully"})
    client = WorkOrdersClient(http=make_http(token="t"))

    async def scenario():
        await client.update_progress(3, 60)
        await client.use_part(3, spare_part_id=8, quantity=2)

    asyncio.run(scenario())

    progress_request, part_request = backend.requests
    assert json.loads(progress_request.content) == {"progress": 60}
    assert json.loads(part_request.content) == {"spare_part_id": 8, "quantity": 2}


@pytest.mark.parametrize(
    "call",
    [
        lambda client: client.update_progress(3, 101),
        lambda client: client.update_progress(3, -1),
        lambda client: client.use_part(3, spare_part_id=8, quantity=0),
    ],
    ids=["progress-over", "progress-under", "zero-quantity"],
)
def test_work_order_values_checked_before_request(backend, make_http, call) -> None:
    client = WorkOrdersClient(http=make_http(token="t"))

    with pytest.raises(ValueError):
        asyncio.run(call(client))

    assert backend.requests == []


def test_upload_purchase_transfer_proof(backend, make_http) -> None:
    backend.on(
        "POST",
        "/files/purchases/2/transfer-proof",
        status=201,
        json={
            "message": "Transfer proof uploaded successfully",
            "data": {"file_path": "uploads/transfer_proofs/purchases/2.pdf", "file_url": "/uploads/transfer_proofs/purchases/2.pdf"},
            "note": "Transfer proof uploaded. Please update the purchase invoice manually.",
        },
    )
    client = FilesClient(http=make_http(token="t"))

    url = asyncio.run(client.upload_purchase_transfer_proof(2, b"%PDF", "bukti.pdf"))

    assert url == "/uploads/transfer_proofs/purchases/2.pdf"
    assert b'name="transfer_proof"' in backend.last().content
    assert b"application/pdf" in backend.last().content


def test_refresh_token(backend, make_http) -> None:
    backend.on("POST", "/auth/refresh", json={"message": "Token refreshed successfully", "data": {"token": "fresh"}})
    client = AuthClient(http=make_http(token="old"))

    token = asyncio.run(client.refresh_token())

    assert token == "fresh"
    assert backend.last().headers["Authorization"] == "Bearer old"


def test_ranged_reports_send_iso_dates(backend, make_http) -> None:
    backend.on("GET", "/reports/sales", json={"data": {"total_sales": 4, "total_revenue": 6.2e8}})
    backend.on("GET", "/reports/profit-loss", json={"data": {"profit": {"profit_margin": 12.5}}})
    client = ReportsClient(http=make_http(token="t"))

    async def scenario():
        sales = await client.sales(date(2024, 1, 1), "2024-01-31")
        profit = await client.profit_loss("2024-01-01", "2024-01-31")
        return sales, profit

    sales, profit = asyncio.run(scenario())

    assert sales["total_sales"] == 4
    assert profit["profit"]["profit_margin"] == 12.5
    params = backend.requests[0].url.params
    assert (params["start_date"], params["end_date"]) == ("2024-01-01", "2024-01-31")
    assert backend.paths()[1] == "GET /api/v1/reports/profit-loss"


def test_snapshot_reports_and_overview(backend, make_http) -> None:
    backend.on("GET", "/reports/inventory", json={"data": {"total_parts": 40}})
    backend.on("GET", "/reports/vehicles", json={"data": {"available": 7}})
    backend.on("GET", "/reports/daily", json={"data": {"sales_count": 2}})
    backend.on("GET", "/reports/overview", json={"data": {"period": {"type": "quarter"}}})
    client = ReportsClient(http=make_http(token="t"))

    async def scenario():
        return (
            await client.inventory(),
            await client.vehicles(),
            await client.daily("2024-03-05"),
            await client.overview("quarter"),
        )

    inventory, vehicles, daily, overview = asyncio.run(scenario())

    assert inventory == {"total_parts": 40}
    assert vehicles == {"available": 7}
    assert daily == {"sales_count": 2}
    assert overview["period"]["type"] == "quarter"
    assert backend.requests[2].url.params["date"] == "2024-03-05"
    assert backend.requests[3].url.params["period"] == "quarter"


@pytest.mark.parametrize(
    "call",
    [
        lambda client: client.sales("2024-02-01", "2024-01-01"),
        lambda client: client.work_orders("01/02/2024", "2024-02-28"),
        lambda client: client.daily("yesterday"),
        lambda client: client.overview("decade"),
    ],
    ids=["reversed-range", "bad-format", "bad-day", "bad-period"],
)
def test_report_arguments_checked_before_request(backend, make_http, call) -> None:
    client = ReportsClient(http=make_http(token="t"))

    with pytest.raises(ValueError):
        asyncio.run(call(client))

    assert backend.requests == []
