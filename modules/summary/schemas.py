from pydantic import BaseModel


class SummaryTotals(BaseModel):
    total_revenue: float = 0.0
    total_cost: float = 0.0
    total_cost_no_labor: float = 0.0
    total_material_cost: float = 0.0
    total_labor_cost: float = 0.0
    total_electricity_cost: float = 0.0
    total_labor_hours: float = 0.0
    profit_including_labor: float = 0.0
    profit_excluding_labor: float = 0.0
    total_orders: int = 0
    total_items_sold: int = 0
