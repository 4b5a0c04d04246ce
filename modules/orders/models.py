from sqlalchemy import Boolean, Column, Date, Float, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship

from core.models import Base, TimestampMixin


class Order(Base, TimestampMixin):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    item_id = Column(Integer, ForeignKey("items.id", ondelete="CASCADE"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False)
    sale_price = Column(Float, nullable=False)
    sale_date = Column(Date, nullable=False)
    notes = Column(Text, nullable=True)
    paid = Column(Boolean, nullable=False, default=False)
    delivered = Column(Boolean, nullable=False, default=False)

    item = relationship("Item", back_populates="orders")
