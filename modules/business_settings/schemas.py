from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_HOURLY_RATE = 1.0
DEFAULT_ELECTRICITY_COST_PER_KWH = 0.25
DEFAULT_PRINTER_POWER_W = 250.0
DEFAULT_PROFIT_MARGIN = 50.0
DEFAULT_CURRENCY = "EUR"


class BusinessSettings(BaseModel):
    """Fully resolved business parameters; every field is always populated."""

    model_config = ConfigDict(frozen=True)

    default_hourly_rate: float = DEFAULT_HOURLY_RATE
    electricity_cost_per_kwh: float = DEFAULT_ELECTRICITY_COST_PER_KWH
    average_printer_power_w: float = DEFAULT_PRINTER_POWER_W
    default_profit_margin: float = DEFAULT_PROFIT_MARGIN
    currency: str = DEFAULT_CURRENCY


class BusinessSettingsUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    default_hourly_rate: Optional[float] = Field(None, ge=0, description="Labor rate per print hour")
    electricity_cost_per_kwh: Optional[float] = Field(None, ge=0, description="Electricity tariff")
    average_printer_power_w: Optional[float] = Field(None, ge=0, description="Average printer draw (W)")
    default_profit_margin: Optional[float] = Field(None, description="Markup percentage")
    currency: Optional[str] = Field(None, min_length=1, max_length=8, description="Display label only")


NUMERIC_KEYS = {
    "default_hourly_rate",
    "electricity_cost_per_kwh",
    "average_printer_power_w",
    "default_profit_margin",
}
