from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CostInputs(BaseModel):
    """Raw, user-entered pricing inputs for one item. Absent values degrade to defaults or 0."""

    model_config = ConfigDict(allow_inf_nan=False)

    grams_used: Optional[float] = Field(None, ge=0, description="Filament used (g)")
    print_time_hours: Optional[float] = Field(None, ge=0, description="Print duration (h)")
    hourly_rate: Optional[float] = Field(None, ge=0, description="Overrides default_hourly_rate")
    electricity_kw: Optional[float] = Field(None, ge=0, description="Energy drawn for the print (kWh)")
    profit_margin: Optional[float] = Field(None, description="Overrides default_profit_margin (%)")


class CostBreakdown(BaseModel):
    model_config = ConfigDict(frozen=True)

    material_cost: float
    hourly_rate: float
    print_time_hours: float
    labor_cost: float
    electricity_kw: float
    electricity_cost: float
    total_cost_no_labor: float
    build_price: float


class PricingSnapshot(CostBreakdown):
    """Costs and price frozen onto an item at creation time."""

    profit_margin: float
    final_price: float


class QuoteRequest(CostInputs):
    filament_id: Optional[int] = None


class QuoteRead(PricingSnapshot):
    filament_id: Optional[int] = None
    cost_per_gram: Optional[float] = None
    total_cost_no_profit: float
    suggested_electricity_kw: Optional[float] = None
    currency: str
