import psycopg
import pytest

from conftest import JANE, FakeOrderRepository


URL = "/api/orders/search-by-email"


def test_get_by_query_param(client_for, jane_repo):
    r = client_for(jane_repo).get(URL, params={"email": "Jane@Example.com"})
    assert r.status_code == 200
    data = r.json()
    assert data["success"] is True
    assert data["customer"] == {
        "id": "C1",
        "name": "Jane Doe",
        "email": "jane@example.com",
        "phone": "+441234567890",
        "created_at": "2022-11-02T09:30:00+00:00",
    }
    assert [o["id"] for o in data["orders"]] == ["o2", "o3", "o1"]
    assert data["summary"]["total_orders"] == 3
    assert data["summary"]["total_spent"] == 60
    assert data["summary"]["opt_in_rate"] == pytest.approx(33.3333, rel=1e-4)
    assert "message" not in data
    assert r.headers["access-control-allow-origin"] == "*"


def test_post_by_body(client_for, jane_repo):
    r = client_for(jane_repo).post(URL, json={"email": "jane@example.com"})
    assert r.status_code == 200
    data = r.json()
    assert data["customer"]["id"] == "C1"
    assert data["orders"][0]["store_name"] == "Store 999"
    assert data["orders"][1]["store_name"] == "N/A"
    assert data["orders"][2]["store_name"] == "TOAST"


def test_not_found_is_200(client_for):
    r = client_for(FakeOrderRepository(customers=[JANE])).post(URL, json={"email": "ghost@example.com"})
    assert r.status_code == 200
    assert r.json() == {
        "success": True,
        "customer": None,
        "orders": [],
        "summary": None,
        "message": "No customer found with this email",
    }


def test_missing_email_get(client_for, jane_repo):
    r = client_for(jane_repo).get(URL)
    assert r.status_code == 400
    assert r.json() == {"success": False, "error": "Email is required"}
    assert r.headers["access-control-allow-origin"] == "*"


@pytest.mark.parametrize("body", [{}, {"email": ""}, {"email": 123}, {"email": None}, ["jane@example.com"]])
def test_invalid_email_post(client_for, jane_repo, body):
    r = client_for(jane_repo).post(URL, json=body)
    assert r.status_code == 400
    assert r.json()["success"] is False


def test_malformed_json_body(client_for, jane_repo):
    r = client_for(jane_repo).post(URL, content=b"{not json", headers={"content-type": "application/json"})
    assert r.status_code == 400
    assert r.json()["success"] is False


def test_order_fetch_failure_is_500(client_for):
    repo = FakeOrderRepository(customers=[JANE], orders_error=psycopg.OperationalError("server closed the connection"))
    r = client_for(repo).get(URL, params={"email": "jane@example.com"})
    assert r.status_code == 500
    assert r.json() == {"success": False, "error": "server closed the connection"}


def test_unexpected_error_without_message_is_500(client_for):
    class Broken(FakeOrderRepository):
        def orders_for_customer(self, customer_id):
            raise RuntimeError()

    r = client_for(Broken(customers=[JANE])).get(URL, params={"email": "jane@example.com"})
    assert r.status_code == 500
    assert r.json() == {"success": False, "error": "Internal server error"}


def test_preflight(client_for, jane_repo):
    r = client_for(jane_repo).options(URL)
    assert r.status_code == 200
    assert r.content == b""
    assert r.headers["access-control-allow-origin"] == "*"
    assert r.headers["access-control-allow-headers"] == "authorization, x-client-info, apikey, content-type"


def test_browser_preflight(client_for, jane_repo):
    r = client_for(jane_repo).options(
        URL,
        headers={
            "Origin": "https://dashboard.example.com",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "apikey, content-type",
        },
    )
    assert r.status_code == 200
    assert r.headers["access-control-allow-origin"] == "*"


def test_request_id_header(client_for, jane_repo):
    r = client_for(jane_repo).get(URL, params={"email": "jane@example.com"}, headers={"X-Request-ID": "abc123"})
    assert r.headers["x-request-id"] == "abc123"


def test_stores_sorted_by_order_count(client_for, jane_repo):
    jane_repo.orders.append(dict(jane_repo.orders[1], id="o4"))
    r = client_for(jane_repo).get("/api/stores")
    assert r.status_code == 200
    assert r.json()["total_stores"] == 2
    stores = r.json()["stores"]
    assert [s["id"] for s in stores] == ["999", "12"]
    assert stores[0] == {
        "id": "999",
        "name": "Store 999",
        "domain": "unknown-999",
        "currency": "GBP",
        "order_count": 2,
    }
    assert stores[1]["name"] == "TOAST"


def test_order_kpis_for_explicit_range(client_for, jane_repo):
    r = client_for(jane_repo).get("/api/kpis/orders", params={"date_from": "2023-03-01", "date_to": "2023-06-30"})
    assert r.status_code == 200
    data = r.json()
    assert data["current"] == {"date_from": "2023-03-01", "date_to": "2023-06-30"}
    assert data["previous"] == {"date_from": "2022-10-30", "date_to": "2023-02-28"}
    cards = {m["title"]: m for m in data["metrics"]}
    assert cards["Total Orders"]["value"] == 2
    assert cards["Total Orders"]["previous_value"] == 1
    assert cards["Total Orders"]["change"] == 100
    assert cards["Total Orders"]["is_positive"] is True
    assert cards["Total Revenue"]["value"] == 50
    assert cards["Opt-in Rate"]["value"] == 0
    assert cards["Opt-in Rate"]["change"] == -100
    assert cards["Opt-in Rate"]["is_positive"] is False


def test_order_kpis_rejects_bad_ranges(client_for, jane_repo):
    client = client_for(jane_repo)
    assert client.get("/api/kpis/orders").status_code == 400
    assert client.get("/api/kpis/orders", params={"date_from": "2023-03-01"}).status_code == 400
    assert client.get("/api/kpis/orders", params={"date_from": "2023-03-02", "date_to": "2023-03-01"}).status_code == 400
    assert client.get("/api/kpis/orders", params={"preset": "fortnight"}).status_code == 400


def test_order_kpis_preset(client_for, jane_repo):
    r = client_for(jane_repo).get("/api/kpis/orders", params={"preset": "last_7_days", "store_id": 12})
    assert r.status_code == 200
    data = r.json()
    assert data["store_id"] == "12"
    assert len(data["metrics"]) == 4
