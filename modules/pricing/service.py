"""Cost composition and price derivation for printed items.

All arithmetic is plain float math with no intermediate rounding; callers
format for display. Nothing here touches the database, so the same inputs
always yield the same snapshot.
"""

import math
from typing import Optional, Tuple

from core.errors import ValidationAppException
from core.settings import w_to_kw
from modules.business_settings.schemas import BusinessSettings
from modules.pricing.schemas import CostBreakdown, CostInputs, PricingSnapshot


class PricingService:
    def __init__(self, settings: BusinessSettings):
        self.settings = settings

    def compose_costs(self, inputs: CostInputs, cost_per_gram: Optional[float] = None) -> CostBreakdown:
        if cost_per_gram is not None and inputs.grams_used is not None:
            material_cost = cost_per_gram * inputs.grams_used
        else:
            material_cost = 0.0

        hourly_rate = inputs.hourly_rate if inputs.hourly_rate is not None else self.settings.default_hourly_rate
        print_time_hours = inputs.print_time_hours if inputs.print_time_hours is not None else 0.0
        labor_cost = hourly_rate * print_time_hours

        electricity_kw = inputs.electricity_kw if inputs.electricity_kw is not None else 0.0
        electricity_cost = electricity_kw * self.settings.electricity_cost_per_kwh

        total_cost_no_labor = material_cost + electricity_cost
        build_price = total_cost_no_labor + labor_cost

        return CostBreakdown(
            material_cost=material_cost,
            hourly_rate=hourly_rate,
            print_time_hours=print_time_hours,
            labor_cost=labor_cost,
            electricity_kw=electricity_kw,
            electricity_cost=electricity_cost,
            total_cost_no_labor=total_cost_no_labor,
            build_price=build_price,
        )

    def derive_price(self, build_price: float, profit_margin: Optional[float] = None) -> Tuple[float, float]:
        """Return ``(effective_margin, final_price)`` for a build price."""
        margin = profit_margin if profit_margin is not None else self.settings.default_profit_margin
        return margin, build_price * (1 + margin / 100)

    def price_item(self, inputs: CostInputs, cost_per_gram: Optional[float] = None) -> PricingSnapshot:
        costs = self.compose_costs(inputs, cost_per_gram)
        margin, final_price = self.derive_price(costs.build_price, inputs.profit_margin)
        values = dict(costs.model_dump(), profit_margin=margin, final_price=final_price)
        overflowed = sorted(key for key, value in values.items() if not math.isfinite(value))
        if overflowed:
            raise ValidationAppException("Pricing inputs are too large: " + ", ".join(overflowed))
        return PricingSnapshot(**values)

    def suggest_electricity_kw(self, print_time_hours: Optional[float]) -> Optional[float]:
        # Form default only; an entered electricity_kw always wins
        if print_time_hours is None:
            return None
        return w_to_kw(self.settings.average_printer_power_w) * print_time_hours
