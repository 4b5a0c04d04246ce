import pytest
from pydantic import ValidationError

from core.errors import ValidationAppException
from modules.business_settings.schemas import BusinessSettings
from modules.pricing.schemas import CostInputs
from modules.pricing.service import PricingService


def build_service(**overrides):
    return PricingService(settings=BusinessSettings(**overrides))


def test_reference_scenario():
    service = build_service()
    inputs = CostInputs(grams_used=100, print_time_hours=2, hourly_rate=1.0, electricity_kw=0.1, profit_margin=50)

    snapshot = service.price_item(inputs, cost_per_gram=0.025)

    assert snapshot.material_cost == pytest.approx(2.50)
    assert snapshot.labor_cost == pytest.approx(2.00)
    assert snapshot.electricity_cost == pytest.approx(0.025)
    assert snapshot.total_cost_no_labor == pytest.approx(2.525)
    assert snapshot.build_price == pytest.approx(4.525)
    assert snapshot.final_price == pytest.approx(6.7875)


@pytest.mark.parametrize("margin", [None, 0, 50, 200])
def test_empty_inputs_price_to_zero(margin):
    snapshot = build_service().price_item(CostInputs(print_time_hours=0, profit_margin=margin))

    assert snapshot.material_cost == 0
    assert snapshot.labor_cost == 0
    assert snapshot.electricity_cost == 0
    assert snapshot.build_price == 0
    assert snapshot.final_price == 0


def test_material_cost_needs_filament_and_grams():
    service = build_service()

    assert service.compose_costs(CostInputs(grams_used=120), cost_per_gram=None).material_cost == 0
    assert service.compose_costs(CostInputs(), cost_per_gram=0.03).material_cost == 0
    assert service.compose_costs(CostInputs(grams_used=120), cost_per_gram=0.03).material_cost == 0.03 * 120


def test_defaults_come_from_settings():
    service = build_service(default_hourly_rate=3.5, electricity_cost_per_kwh=0.4, default_profit_margin=20)
    inputs = CostInputs(print_time_hours=4, electricity_kw=1.5)

    snapshot = service.price_item(inputs)

    assert snapshot.hourly_rate == 3.5
    assert snapshot.labor_cost == 3.5 * 4
    assert snapshot.electricity_cost == 1.5 * 0.4
    assert snapshot.profit_margin == 20
    assert snapshot.final_price == pytest.approx(snapshot.build_price * 1.2)


def test_explicit_zero_overrides_are_honoured():
    service = build_service(default_hourly_rate=5.0, default_profit_margin=80)
    inputs = CostInputs(grams_used=10, print_time_hours=3, hourly_rate=0, profit_margin=0)

    snapshot = service.price_item(inputs, cost_per_gram=0.02)

    assert snapshot.hourly_rate == 0
    assert snapshot.labor_cost == 0
    assert snapshot.profit_margin == 0
    assert snapshot.final_price == snapshot.build_price


def test_build_price_is_exact_sum_of_components():
    service = build_service(electricity_cost_per_kwh=0.31)
    costs = service.compose_costs(
        CostInputs(grams_used=37.3, print_time_hours=1.7, hourly_rate=2.2, electricity_kw=0.43),
        cost_per_gram=0.0219,
    )

    assert costs.build_price == costs.material_cost + costs.electricity_cost + costs.labor_cost
    assert costs.total_cost_no_labor == costs.material_cost + costs.electricity_cost


def test_negative_margin_scales_price_down():
    margin, final_price = build_service().derive_price(10.0, profit_margin=-25)

    assert margin == -25
    assert final_price == pytest.approx(7.5)


def test_pricing_is_idempotent():
    service = build_service()
    inputs = CostInputs(grams_used=55, print_time_hours=1.25, electricity_kw=0.3)

    first = service.price_item(inputs, cost_per_gram=0.024)
    second = service.price_item(inputs, cost_per_gram=0.024)

    assert first == second


def test_snapshot_is_frozen():
    snapshot = build_service().price_item(CostInputs(print_time_hours=1))

    with pytest.raises(ValidationError):
        snapshot.final_price = 99


def test_electricity_suggestion_uses_printer_power():
    service = build_service(average_printer_power_w=300)

    assert service.suggest_electricity_kw(2) == pytest.approx(0.6)
    assert service.suggest_electricity_kw(None) is None


def test_non_finite_inputs_are_rejected():
    with pytest.raises(ValidationError):
        CostInputs(grams_used=float("inf"))
    with pytest.raises(ValidationError):
        CostInputs(print_time_hours=float("nan"))


def test_overflowing_snapshot_is_rejected():
    inputs = CostInputs(print_time_hours=1e308, hourly_rate=10)

    with pytest.raises(ValidationAppException) as exc_info:
        build_service().price_item(inputs)

    assert "labor_cost" in exc_info.value.message
    assert exc_info.value.status_code == 400
