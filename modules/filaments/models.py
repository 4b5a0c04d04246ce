from sqlalchemy import Column, Float, Integer, String, Text

from core.models import Base, TimestampMixin


class Filament(Base, TimestampMixin):
    __tablename__ = "filaments"

    id = Column(Integer, primary_key=True, index=True)
    color_name = Column(String(255), nullable=False, index=True)
    brand = Column(String(255), nullable=False, default="Bambu Lab")
    material = Column(String(64), nullable=False, default="PLA")
    diameter_mm = Column(Float, nullable=False, default=1.75)
    price_per_kg = Column(Float, nullable=False)
    # Fixed when the filament is entered; items keep their own material_cost snapshot
    cost_per_gram = Column(Float, nullable=False)
    notes = Column(Text, nullable=True)
