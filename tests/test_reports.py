"""Report pipelines, run through mongomock's aggregation engine."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from autoshop.reports import ReportsService

pytestmark = [pytest.mark.unit, pytest.mark.asyncio]


async def _product(db, name, stock, minimum, price) -> str:
    result = await db["products"].insert_one(
        {"name": name, "stock_qty": stock, "min_stock_level": minimum, "selling_price": price}
    )
    return str(result.inserted_id)


async def test_inventory_report_splits_low_and_out_of_stock(db):
    await _product(db, "Brake Pads", stock=2, minimum=5, price=100)
    await _product(db, "Engine Oil", stock=0, minimum=3, price=50)
    await _product(db, "Air Filter", stock=20, minimum=5, price=10)

    report = await ReportsService(db).inventory()

    assert [p["name"] for p in report["low_stock_products"]] == ["Engine Oil", "Brake Pads"]
    assert [p["name"] for p in report["out_of_stock_products"]] == ["Engine Oil"]
    assert report["total_inventory_value"] == {"total_value": 400, "total_items": 22}


async def test_inventory_report_on_empty_catalogue(db):
    report = await ReportsService(db).inventory()

    assert report["low_stock_products"] == []
    assert report["out_of_stock_products"] == []
    assert report["total_inventory_value"] == {"total_value": 0, "total_items": 0}


async def test_top_products_ranks_by_revenue_and_attaches_product(db):
    pads = await _product(db, "Brake Pads", stock=10, minimum=2, price=100)
    oil = await _product(db, "Engine Oil", stock=40, minimum=5, price=50)
    await db["orders"].insert_one({
        "items": [
            {"product_id": pads, "quantity": 2, "price": 100},
            {"product_id": oil, "quantity": 1, "price": 50},
        ],
        "total": 250,
    })
    await db["orders"].insert_one({
        "items": [{"product_id": oil, "quantity": 10, "price": 50}],
        "total": 500,
    })

    rows = await ReportsService(db).top_products(limit=10)

    assert [r["product_id"] for r in rows] == [oil, pads]
    assert rows[0]["total_revenue"] == 550
    assert rows[0]["total_quantity"] == 11
    assert rows[0]["order_count"] == 2
    assert rows[0]["product"]["name"] == "Engine Oil"
    assert rows[1]["total_revenue"] == 200


async def test_top_products_honours_limit(db):
    pads = await _product(db, "Brake Pads", stock=10, minimum=2, price=100)
    oil = await _product(db, "Engine Oil", stock=40, minimum=5, price=50)
    await db["orders"].insert_one({
        "items": [
            {"product_id": pads, "quantity": 1, "price": 100},
            {"product_id": oil, "quantity": 1, "price": 50},
        ],
        "total": 150,
    })

    rows = await ReportsService(db).top_products(limit=1)

    assert [r["product_id"] for r in rows] == [pads]


async def test_employee_performance_groups_by_salesperson(db):
    meera = str((await db["employees"].insert_one({"name": "Meera"})).inserted_id)
    arjun = str((await db["employees"].insert_one({"name": "Arjun"})).inserted_id)
    for salesperson, total in [(meera, 300), (meera, 600), (arjun, 100), ("", 999), (None, 999)]:
        await db["orders"].insert_one({"salesperson_id": salesperson, "total": total})
    await db["orders"].insert_one({"total": 999})

    rows = await ReportsService(db).employee_performance()

    assert [r["employee_id"] for r in rows] == [meera, arjun]
    assert rows[0]["total_sales"] == 900
    assert rows[0]["order_count"] == 2
    assert rows[0]["avg_order_value"] == 450
    assert rows[0]["employee"]["name"] == "Meera"
    assert rows[1]["employee"]["name"] == "Arjun"


async def test_sales_report_groups_by_month():
    cursor = MagicMock()
    cursor.to_list = AsyncMock(
        return_value=[{"_id": "2026-03", "total_sales": 5000, "total_orders": 4, "avg_order_value": 1250}]
    )
    orders = MagicMock()
    orders.aggregate = MagicMock(return_value=cursor)
    db = MagicMock()
    db.__getitem__.side_effect = {"orders": orders, "products": MagicMock()}.__getitem__

    rows = await ReportsService(db).sales(period="monthly")

    assert rows == [{"period": "2026-03", "total_sales": 5000, "total_orders": 4, "avg_order_value": 1250}]
    pipeline = orders.aggregate.call_args.args[0]
    assert pipeline[1]["$group"]["_id"]["$dateToString"]["format"] == "%Y-%m"
