"""Profit figures for orders, computed at query time from frozen item costs.

Two profit metrics are reported side by side: ``profit_including_labor``
subtracts the item's build price (material, electricity and labor), while
``profit_excluding_labor`` subtracts material and electricity only.
"""

from typing import Any, Dict, Iterable, List, Tuple

from sqlalchemy.orm import Session

from modules.items.models import Item
from modules.orders.models import Order
from modules.summary.schemas import SummaryTotals


def _num(value) -> float:
    return value if value is not None else 0.0


def _unit_cost_with_labor(item: Item) -> float:
    if item.build_price is not None:
        return item.build_price
    return _num(item.material_cost) + _num(item.labor_cost) + _num(item.electricity_cost)


def _unit_cost_no_labor(item: Item) -> float:
    return _num(item.material_cost) + _num(item.electricity_cost)


def compute_order_financials(order: Order, item: Item) -> Dict[str, float]:
    quantity = order.quantity or 0
    revenue = order.sale_price * quantity
    return {
        "total_paid": revenue,
        "profit_with_labor": (order.sale_price - _unit_cost_with_labor(item)) * quantity,
        "profit_without_labor": (order.sale_price - _unit_cost_no_labor(item)) * quantity,
    }


def summarize(rows: Iterable[Tuple[Order, Item]]) -> SummaryTotals:
    totals = SummaryTotals()
    for order, item in rows:
        quantity = order.quantity or 0
        revenue = order.sale_price * quantity
        cost_no_labor = _unit_cost_no_labor(item) * quantity
        cost_with_labor = _unit_cost_with_labor(item) * quantity

        totals.total_revenue += revenue
        totals.total_cost += cost_with_labor
        totals.total_cost_no_labor += cost_no_labor
        totals.total_material_cost += _num(item.material_cost) * quantity
        totals.total_labor_cost += _num(item.labor_cost) * quantity
        totals.total_electricity_cost += _num(item.electricity_cost) * quantity
        totals.total_labor_hours += _num(item.print_time_hours) * quantity
        totals.profit_including_labor += revenue - cost_with_labor
        totals.profit_excluding_labor += revenue - cost_no_labor
        totals.total_orders += 1
        totals.total_items_sold += quantity
    return totals


def load_order_rows(db: Session) -> List[Tuple[Order, Item]]:
    return (
        db.query(Order, Item)
        .join(Item, Order.item_id == Item.id)
        .order_by(Order.sale_date.desc(), Order.created_at.desc(), Order.id.desc())
        .all()
    )


def get_summary(db: Session) -> SummaryTotals:
    return summarize(load_order_rows(db))


def build_report_data(db: Session) -> Dict[str, Any]:
    rows = load_order_rows(db)
    lines = []
    for order, item in rows:
        lines.append(
            {
                "order_id": order.id,
                "sale_date": order.sale_date,
                "item_name": item.name,
                "quantity": order.quantity,
                "sale_price": order.sale_price,
                "paid": order.paid,
                "delivered": order.delivered,
                **compute_order_financials(order, item),
            }
        )
    return {"summary": summarize(rows).model_dump(), "orders": lines}
