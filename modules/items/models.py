from sqlalchemy import Column, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from core.models import Base, TimestampMixin


class Item(Base, TimestampMixin):
    __tablename__ = "items"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    color = Column(String(255), nullable=True)
    filament_id = Column(Integer, ForeignKey("filaments.id", ondelete="RESTRICT"), nullable=True)
    grams_used = Column(Float, nullable=True)
    print_time_hours = Column(Float, nullable=False, default=0.0)

    # Pricing snapshot, computed once on creation and never recomputed
    hourly_rate = Column(Float, nullable=False)
    labor_cost = Column(Float, nullable=False, default=0.0)
    electricity_kw = Column(Float, nullable=False, default=0.0)
    electricity_cost = Column(Float, nullable=False, default=0.0)
    material_cost = Column(Float, nullable=False, default=0.0)
    total_cost_no_labor = Column(Float, nullable=False, default=0.0)
    build_price = Column(Float, nullable=False, default=0.0)
    profit_margin = Column(Float, nullable=False)
    final_price = Column(Float, nullable=False, default=0.0)

    filament = relationship("Filament")
    orders = relationship("Order", back_populates="item", cascade="all, delete-orphan", passive_deletes=True)
