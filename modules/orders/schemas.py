from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class OrderBase(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    item_id: int
    quantity: int = Field(..., gt=0, description="Units sold")
    sale_price: float = Field(..., ge=0, description="Price per unit")
    sale_date: date
    notes: Optional[str] = None
    paid: bool = False
    delivered: bool = False


class OrderCreate(OrderBase):
    pass


class OrderUpdate(OrderBase):
    pass


class OrderRead(OrderBase):
    id: int
    item_name: str
    color: Optional[str] = None
    material_cost: float
    labor_cost: float
    electricity_cost: float
    build_price: float
    final_price: float
    total_paid: float
    profit_with_labor: float
    profit_without_labor: float
    created_at: Optional[datetime] = None
