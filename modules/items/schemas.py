from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from modules.pricing.schemas import CostInputs


class ItemCreate(CostInputs):
    name: str = Field(..., min_length=1, description="Item name")
    color: Optional[str] = None
    filament_id: Optional[int] = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Item name is required")
        return v


class ItemRead(BaseModel):
    id: int
    name: str
    color: Optional[str] = None
    filament_id: Optional[int] = None
    filament_color: Optional[str] = None
    filament_brand: Optional[str] = None
    filament_cost_per_gram: Optional[float] = None
    grams_used: Optional[float] = None
    print_time_hours: float
    hourly_rate: float
    labor_cost: float
    electricity_kw: float
    electricity_cost: float
    material_cost: float
    total_cost_no_labor: float
    build_price: float
    total_cost_no_profit: float
    profit_margin: float
    final_price: float
    created_at: Optional[datetime] = None
