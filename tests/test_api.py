"""API-level tests for the bookkeeping endpoints."""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from core.database import SessionLocal, get_db
from main import app
from modules.business_settings.models import Setting
from modules.business_settings.service import seed_default_settings

client = TestClient(app)


@pytest.fixture(autouse=True)
def clean_db():
    """Reset database before each test by re-initializing."""
    from core.database import Base, engine
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


def create_filament(color_name="Galaxy Black", price_per_kg=25.0, **extra):
    resp = client.post("/api/filaments", json={"color_name": color_name, "price_per_kg": price_per_kg, **extra})
    assert resp.status_code == 201, resp.text
    return resp.json()


def create_item(**payload):
    body = {"name": "Dragon"}
    body.update(payload)
    resp = client.post("/api/items", json=body)
    assert resp.status_code == 201, resp.text
    return resp.json()


def create_order(item_id, quantity=1, sale_price=10.0, sale_date="2024-06-01", **extra):
    resp = client.post(
        "/api/orders",
        json={"item_id": item_id, "quantity": quantity, "sale_price": sale_price, "sale_date": sale_date, **extra},
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


def test_health():
    assert client.get("/health").json() == {"status": "ok"}


def test_settings_default_and_upsert():
    resp = client.get("/api/settings")
    assert resp.status_code == 200
    assert resp.json() == {
        "default_hourly_rate": 1.0,
        "electricity_cost_per_kwh": 0.25,
        "average_printer_power_w": 250.0,
        "default_profit_margin": 50.0,
        "currency": "EUR",
    }

    resp = client.put("/api/settings", json={"default_hourly_rate": 2.0, "currency": "USD"})
    assert resp.status_code == 200, resp.text
    resp = client.put("/api/settings", json={"default_hourly_rate": 3.0})
    assert resp.status_code == 200

    data = client.get("/api/settings").json()
    assert data["default_hourly_rate"] == 3.0
    assert data["currency"] == "USD"
    assert data["default_profit_margin"] == 50.0


def test_settings_reject_unknown_keys():
    resp = client.put("/api/settings", json={"hourly_rat": 2.0})
    assert resp.status_code == 400
    assert resp.json()["code"] == "validation_error"


def test_filament_cost_per_gram_derived_and_listed_by_color():
    create_filament("Zinc Grey", 30.0)
    jade = create_filament("Jade White", 25.0)
    assert jade["cost_per_gram"] == pytest.approx(0.025)
    assert jade["brand"] == "Bambu Lab"
    assert jade["material"] == "PLA"
    assert jade["diameter_mm"] == 1.75

    names = [f["color_name"] for f in client.get("/api/filaments").json()]
    assert names == ["Jade White", "Zinc Grey"]


def test_filament_requires_color_and_price():
    resp = client.post("/api/filaments", json={"color_name": "Red"})
    assert resp.status_code == 400
    resp = client.post("/api/filaments", json={"price_per_kg": 20})
    assert resp.status_code == 400


def test_filament_update():
    filament = create_filament("Red", 20.0)

    resp = client.put(f"/api/filaments/{filament['id']}", json={"price_per_kg": 40.0, "notes": "restocked"})
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["cost_per_gram"] == pytest.approx(0.04)
    assert data["notes"] == "restocked"

    assert client.put("/api/filaments/9999", json={"brand": "X"}).status_code == 404


def test_filament_notes_can_be_cleared():
    filament = create_filament("Red", 20.0, notes="old")

    resp = client.put(f"/api/filaments/{filament['id']}", json={"notes": None})
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["notes"] is None
    assert data["color_name"] == "Red"
    assert data["price_per_kg"] == 20.0

    resp = client.put(f"/api/filaments/{filament['id']}", json={"color_name": "Deep Red"})
    assert resp.json()["notes"] is None


def test_filament_update_rejects_blank_color():
    filament = create_filament("Red", 20.0)

    resp = client.put(f"/api/filaments/{filament['id']}", json={"color_name": "   "})
    assert resp.status_code == 400
    assert resp.json()["code"] == "validation_error"

    resp = client.put(f"/api/filaments/{filament['id']}", json={"color_name": "  Blue  "})
    assert resp.json()["color_name"] == "Blue"


def test_item_creation_runs_pricing_pipeline():
    filament = create_filament("Jade White", 25.0)

    item = create_item(
        filament_id=filament["id"],
        grams_used=100,
        print_time_hours=2,
        hourly_rate=1.0,
        electricity_kw=0.1,
        profit_margin=50,
    )

    assert item["material_cost"] == pytest.approx(2.5)
    assert item["labor_cost"] == pytest.approx(2.0)
    assert item["electricity_cost"] == pytest.approx(0.025)
    assert item["build_price"] == pytest.approx(4.525)
    assert item["total_cost_no_profit"] == pytest.approx(4.525)
    assert item["final_price"] == pytest.approx(6.7875)
    assert item["filament_color"] == "Jade White"


def test_item_uses_stored_setting_defaults():
    client.put("/api/settings", json={"default_hourly_rate": 4.0, "default_profit_margin": 100})

    item = create_item(print_time_hours=1.5)

    assert item["hourly_rate"] == 4.0
    assert item["labor_cost"] == pytest.approx(6.0)
    assert item["profit_margin"] == 100
    assert item["final_price"] == pytest.approx(12.0)


def test_item_without_inputs_is_free():
    item = create_item()

    assert item["build_price"] == 0
    assert item["final_price"] == 0
    assert item["filament_id"] is None


def test_item_requires_name():
    resp = client.post("/api/items", json={"grams_used": 10})
    assert resp.status_code == 400
    resp = client.post("/api/items", json={"name": "   "})
    assert resp.status_code == 400


def test_item_with_unknown_filament_is_rejected():
    resp = client.post("/api/items", json={"name": "Ghost", "filament_id": 4242, "grams_used": 10})
    assert resp.status_code == 404

def test_item_rejects_infinite_input():
    filament = create_filament("Jade White", 25.0)

    resp = client.post(
        "/api/items",
        content=f'{{"name": "X", "filament_id": {filament["id"]}, "grams_used": Infinity}}',
        headers={"Content-Type": "application/json"},
    )
    assert resp.status_code == 400
    assert resp.json()["code"] == "validation_error"
    assert client.get("/api/items").json() == []


def test_item_rejects_overflowing_price():
    resp = client.post("/api/items", json={"name": "X", "print_time_hours": 1e308, "hourly_rate": 10})
    assert resp.status_code == 400
    assert "labor_cost" in resp.json()["error"]
    assert client.get("/api/items").json() == []
    assert client.get("/api/summary").json()["total_orders"] == 0


def test_settings_reject_infinite_values():
    resp = client.put(
        "/api/settings",
        content='{"default_profit_margin": Infinity}',
        headers={"Content-Type": "application/json"},
    )
    assert resp.status_code == 400
    assert client.get("/api/settings").json()["default_profit_margin"] == 50.0



def test_item_costs_are_frozen_after_filament_price_change():
    filament = create_filament("Jade White", 25.0)
    item = create_item(filament_id=filament["id"], grams_used=200)

    client.put(f"/api/filaments/{filament['id']}", json={"price_per_kg": 50.0})

    stored = client.get(f"/api/items/{item['id']}").json()
    assert stored["material_cost"] == pytest.approx(5.0)
    assert stored["filament_cost_per_gram"] == pytest.approx(0.05)


def test_deleting_referenced_filament_fails_and_keeps_item():
    filament = create_filament("Jade White", 25.0)
    item = create_item(filament_id=filament["id"], grams_used=50)

    resp = client.delete(f"/api/filaments/{filament['id']}")
    assert resp.status_code == 409
    assert "in use" in resp.json()["error"]

    stored = client.get(f"/api/items/{item['id']}")
    assert stored.status_code == 200
    assert stored.json()["filament_id"] == filament["id"]
    assert stored.json()["material_cost"] == pytest.approx(1.25)


def test_deleting_unreferenced_filament():
    filament = create_filament("Spare", 25.0)
    assert client.delete(f"/api/filaments/{filament['id']}").status_code == 200
    assert client.get("/api/filaments").json() == []


def test_deleting_item_cascades_orders():
    item = create_item(print_time_hours=1)
    create_order(item["id"], quantity=2)
    create_order(item["id"], quantity=1)

    resp = client.delete(f"/api/items/{item['id']}")
    assert resp.status_code == 200
    assert client.get("/api/orders").json() == []
    assert client.get(f"/api/items/{item['id']}").status_code == 404


def test_order_requires_fields():
    item = create_item()
    base = {"item_id": item["id"], "quantity": 1, "sale_price": 5.0, "sale_date": "2024-06-01"}
    for missing in base:
        payload = {k: v for k, v in base.items() if k != missing}
        resp = client.post("/api/orders", json=payload)
        assert resp.status_code == 400, missing
        assert missing in resp.json()["error"]


def test_order_for_unknown_item():
    resp = client.post(
        "/api/orders", json={"item_id": 999, "quantity": 1, "sale_price": 5.0, "sale_date": "2024-06-01"}
    )
    assert resp.status_code == 404


def test_order_listing_includes_profit_fields():
    filament = create_filament("Jade White", 25.0)
    item = create_item(filament_id=filament["id"], grams_used=100, print_time_hours=2, electricity_kw=0.1)

    create_order(item["id"], quantity=3, sale_price=10.0, sale_date="2024-06-01", paid=True)
    create_order(item["id"], quantity=1, sale_price=8.0, sale_date="2024-07-01")

    orders = client.get("/api/orders").json()
    assert [o["sale_date"] for o in orders] == ["2024-07-01", "2024-06-01"]

    latest, earlier = orders
    assert latest["paid"] is False
    assert earlier["paid"] is True
    assert earlier["item_name"] == "Dragon"
    assert earlier["total_paid"] == pytest.approx(30.0)
    assert earlier["profit_with_labor"] == pytest.approx((10.0 - 4.525) * 3)
    assert earlier["profit_without_labor"] == pytest.approx((10.0 - 2.525) * 3)


def test_order_update_and_delete():
    item = create_item()
    order = create_order(item["id"], quantity=1, sale_price=5.0)

    resp = client.put(
        f"/api/orders/{order['id']}",
        json={
            "item_id": item["id"],
            "quantity": 4,
            "sale_price": 6.0,
            "sale_date": "2024-08-15",
            "delivered": True,
        },
    )
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["quantity"] == 4
    assert data["delivered"] is True
    assert data["total_paid"] == pytest.approx(24.0)

    resp = client.put(f"/api/orders/{order['id']}", json={"item_id": item["id"], "quantity": 4})
    assert resp.status_code == 400

    assert client.delete(f"/api/orders/{order['id']}").status_code == 200
    assert client.get(f"/api/orders/{order['id']}").status_code == 404


def test_summary_empty_is_zero():
    resp = client.get("/api/summary")
    assert resp.status_code == 200
    data = resp.json()
    assert data["total_orders"] == 0
    assert data["total_items_sold"] == 0
    assert data["total_revenue"] == 0
    assert data["profit_including_labor"] == 0
    assert data["profit_excluding_labor"] == 0


def test_summary_aggregates_orders():
    cheap = create_item(name="Keychain", print_time_hours=4)
    dear = create_item(name="Lamp", print_time_hours=6)
    assert cheap["build_price"] == pytest.approx(4.0)
    assert dear["build_price"] == pytest.approx(6.0)

    create_order(cheap["id"], quantity=2, sale_price=10.0)
    create_order(dear["id"], quantity=3, sale_price=20.0)

    data = client.get("/api/summary").json()
    assert data["total_revenue"] == pytest.approx(80.0)
    assert data["total_items_sold"] == 5
    assert data["total_orders"] == 2
    assert data["total_labor_cost"] == pytest.approx(26.0)
    assert data["total_labor_hours"] == pytest.approx(26.0)
    assert data["profit_including_labor"] == pytest.approx(54.0)
    assert data["profit_excluding_labor"] == pytest.approx(80.0)


def test_summary_excel_download():
    item = create_item(print_time_hours=1)
    create_order(item["id"], quantity=2, sale_price=9.5)

    resp = client.get("/api/summary/excel")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith(
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )
    assert resp.content[:2] == b"PK"


def test_quote_previews_without_saving():
    client.put("/api/settings", json={"average_printer_power_w": 200})
    filament = create_filament("Jade White", 25.0)

    resp = client.post(
        "/api/pricing/quote",
        json={"filament_id": filament["id"], "grams_used": 100, "print_time_hours": 2},
    )
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["material_cost"] == pytest.approx(2.5)
    assert data["electricity_cost"] == 0
    assert data["suggested_electricity_kw"] == pytest.approx(0.4)
    assert data["final_price"] == pytest.approx(4.5 * 1.5)
    assert data["currency"] == "EUR"
    assert client.get("/api/items").json() == []


def test_notes_crud():
    resp = client.post("/api/notes", json={"title": "Restock", "content": "Order more PETG"})
    assert resp.status_code == 201
    note_id = resp.json()["id"]

    resp = client.put(f"/api/notes/{note_id}", json={"title": "Restock soon", "content": ""})
    assert resp.status_code == 200
    assert resp.json()["title"] == "Restock soon"

    assert [n["id"] for n in client.get("/api/notes").json()] == [note_id]
    assert client.post("/api/notes", json={"content": "untitled"}).status_code == 400

    assert client.delete(f"/api/notes/{note_id}").status_code == 200
    assert client.get(f"/api/notes/{note_id}").status_code == 404


def test_database_failure_returns_persistence_error():
    def broken_db():
        db = MagicMock()
        db.query.side_effect = OperationalError("SELECT", {}, Exception("connection refused"))
        yield db

    app.dependency_overrides[get_db] = broken_db
    try:
        resp = client.get("/api/filaments")
    finally:
        app.dependency_overrides.clear()

    assert resp.status_code == 500
    assert resp.json() == {"error": "Database operation failed", "code": "persistence_error"}


def test_seeding_default_settings_is_idempotent():
    db = SessionLocal()
    try:
        db.add(Setting(key="currency", value="USD"))
        db.commit()

        seed_default_settings(db)
        seed_default_settings(db)

        rows = {row.key: row.value for row in db.query(Setting).all()}
    finally:
        db.close()

    assert len(rows) == 5
    assert rows["currency"] == "USD"
    assert float(rows["default_profit_margin"]) == 50.0


def test_startup_initialises_and_seeds_database():
    with TestClient(app) as started:
        assert started.get("/api/settings").json()["currency"] == "EUR"

    db = SessionLocal()
    try:
        assert db.query(Setting).count() == 5
    finally:
        db.close()
