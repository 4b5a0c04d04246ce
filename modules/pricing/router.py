from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.database import get_db
from modules.business_settings.service import resolve_settings
from modules.filaments import service as filament_service
from modules.pricing.schemas import QuoteRead, QuoteRequest
from modules.pricing.service import PricingService

router = APIRouter(prefix="/api/pricing", tags=["pricing"])


@router.post("/quote", response_model=QuoteRead)
def quote_endpoint(quote_in: QuoteRequest, db: Session = Depends(get_db)):
    """Preview an item's costs and price without saving anything."""
    settings = resolve_settings(db)
    cost_per_gram = None
    if quote_in.filament_id is not None:
        cost_per_gram = filament_service.get_filament(db, quote_in.filament_id).cost_per_gram

    pricing_service = PricingService(settings=settings)
    snapshot = pricing_service.price_item(quote_in, cost_per_gram)
    suggested = None
    if quote_in.electricity_kw is None:
        suggested = pricing_service.suggest_electricity_kw(quote_in.print_time_hours)

    return QuoteRead(
        **snapshot.model_dump(),
        filament_id=quote_in.filament_id,
        cost_per_gram=cost_per_gram,
        total_cost_no_profit=snapshot.build_price,
        suggested_electricity_kw=suggested,
        currency=settings.currency,
    )
